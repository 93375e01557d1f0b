"""
Circuit Proving Demo

This script walks through a proving session end to end: field arithmetic,
circuit compilation, proof generation, verification in a fresh session,
tampering, and Merkle inclusion paths.

Run with:
    python -m zkcircuit.builder.demo
"""

from pathlib import Path
import tempfile

from zkcircuit.builder.circuit import CircuitBuilder, Gate
from zkcircuit.commitment.merkle import MerkleCommitment, verify_path
from zkcircuit.common.field import PrimeField
from zkcircuit.common.polynomial import Polynomial
from zkcircuit.config import create_default_config, create_small_field_config
from zkcircuit.errors import CircuitError, NonInvertibleElement
from zkcircuit.proof.core import Proof, verify_proof
from zkcircuit.r1cs.system import ConstraintSystem


def demo_field_arithmetic():
    """Field operations in a small prime field."""
    print("\n" + "=" * 70)
    print("DEMO 1: FIELD ARITHMETIC")
    print("=" * 70)

    config = create_small_field_config()
    field = config.field
    a, b = field.element(45), field.element(67)

    print(f"\nField: Z_{field.prime}")
    print(f"  a + b  = {(a + b).value}   (45 + 67 = 112 → 112 mod 97)")
    print(f"  a - b  = {(a - b).value}   (45 - 67 = -22 → -22 + 97)")
    print(f"  a * b  = {(a * b).value}    (3015 mod 97)")
    print(f"  -a     = {(-a).value}")
    print(f"  a^-1   = {a.inv().value}   (a * a^-1 = {(a * a.inv()).value})")

    try:
        field.zero().inv()
    except NonInvertibleElement as e:
        print(f"  0^-1   → {e}")

    composite = PrimeField(15)
    try:
        composite.element(6).inv()
    except NonInvertibleElement as e:
        print(f"  6^-1 mod 15 → {e}")


def demo_interpolation():
    """Lagrange interpolation through three points."""
    print("\n" + "=" * 70)
    print("DEMO 2: LAGRANGE INTERPOLATION")
    print("=" * 70)

    field = PrimeField(PrimeField.SMALL_TEST_PRIME)
    points = [(field.element(x), field.element(x * x + 1)) for x in (1, 2, 3)]
    poly = Polynomial.interpolate(points, field)

    print(f"\nPoints: {[(x.value, y.value) for x, y in points]}")
    print(f"Coefficients by degree: {[(d, c.value) for d, c in poly]}")
    for x, y in points:
        print(f"  P({x.value}) = {poly.evaluate_at(x).value}  (expected {y.value})")


def demo_prove_and_verify(workdir: Path):
    """Prove x * y = z and verify it from the artifacts alone."""
    print("\n" + "=" * 70)
    print("DEMO 3: PROVE AND VERIFY")
    print("=" * 70)

    config = create_default_config()
    print(f"\n{config.summary()}")

    builder = CircuitBuilder(config)
    x = builder.add_input(3)
    y = builder.add_input(4)
    builder.add_gate(Gate.mul(x, y, 2))
    builder.add_gate(Gate.add(2, x, 3))
    builder.set_output(15)

    print(f"\nCircuit: {builder}")
    for gate in builder.gates:
        print(f"  {gate!r}")

    proof_path = workdir / "proof.bin"
    cs_path = workdir / "constraint_system.bin"
    proof = builder.generate_proof(proof_path, cs_path)

    print(f"\nWitness:    {proof.witness}")
    print(f"Commitment: {proof.commitment}")
    print(f"Artifacts:  {proof_path.stat().st_size} + {cs_path.stat().st_size} bytes")

    # A brand-new builder shares nothing with the prover but the files
    print(f"\nVerified in fresh session: {CircuitBuilder(config).verify_proof(proof_path, cs_path)}")

    cs = ConstraintSystem.load(cs_path)
    print(f"QAP evaluation L·R - O:    {cs.evaluate_qap()}")


def demo_tampering(workdir: Path):
    """Show what verification catches, and what it does not."""
    print("\n" + "=" * 70)
    print("DEMO 4: TAMPERING")
    print("=" * 70)

    cs = ConstraintSystem.load(workdir / "constraint_system.bin")
    proof = Proof.load(workdir / "proof.bin")

    forged = Proof(witness=list(proof.witness), commitment=proof.commitment)
    forged.witness[2] = 13
    print(f"\nWitness value 2 changed to 13: verified = {verify_proof(forged, cs)}")

    # Same sum, different witness: the additive commitment cannot tell
    swapped = Proof(witness=[4, 3] + proof.witness[2:], commitment=proof.commitment)
    print(f"Inputs swapped (same sum):    verified = {verify_proof(swapped, cs)}")
    print("  → the commitment binds only the witness sum")


def demo_merkle():
    """Inclusion paths over the additive combiner."""
    print("\n" + "=" * 70)
    print("DEMO 5: MERKLE COMMITMENT")
    print("=" * 70)

    leaves = [3, 4, 12, 15, 7]
    tree = MerkleCommitment(leaves)
    print(f"\nLeaves: {leaves}")
    print(f"Root:   {tree.root}")

    for index, leaf in enumerate(leaves):
        path = tree.merkle_path(index)
        print(f"  leaf {index} ({leaf:>2}): path={path}  valid={verify_path(leaf, path, tree.root)}")


def main(interactive: bool = True):
    """Run all demos."""
    print("╔" + "═" * 68 + "╗")
    print("║" + " " * 19 + "CIRCUIT PROVING DEMONSTRATION" + " " * 20 + "║")
    print("╚" + "═" * 68 + "╝")

    with tempfile.TemporaryDirectory() as tmp:
        workdir = Path(tmp)
        demos = [
            ("Field Arithmetic", demo_field_arithmetic),
            ("Lagrange Interpolation", demo_interpolation),
            ("Prove and Verify", lambda: demo_prove_and_verify(workdir)),
            ("Tampering", lambda: demo_tampering(workdir)),
            ("Merkle Commitment", demo_merkle),
        ]

        for name, demo_func in demos:
            try:
                demo_func()
            except CircuitError as e:
                print(f"\nError in {name}: {e}")

            print("\n" + "─" * 70)
            if interactive:
                input("Press Enter to continue to next demo...")

    print("\n" + "═" * 70)
    print("DEMOS COMPLETE")
    print("═" * 70)


if __name__ == "__main__":
    main()
