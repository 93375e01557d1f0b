"""
Proof Generation and Verification.

A proof is the full witness plus a commitment to it:

    commitment = combine(Σ witness, 0) = (Σ witness) mod P

Verification recomputes the commitment from the proof's witness and then
re-checks every stored constraint of the persisted constraint system:

    - ADD:  left + right == output
    - MUL:  left * right == output
    - HASH: unsupported, raises UnsupportedOperation

Constraint sides are evaluated from the Variable snapshots stored inside
each constraint (not by re-indexing into the proof's witness). Each term
product is reduced in the field, but the side sums and the ADD / MUL
check run over plain integers, so a sum or product that wraps the modulus
does not verify.

Known properties (kept on purpose, this is a didactic scheme):
    - Not hiding: the witness is stored in the clear
    - Not binding beyond the sum: two witnesses with equal sums mod P
      produce the same commitment

Artifact layout (see common/codec.py):
    header      "ZKPF" + version
    witness     seq of int
    commitment  int
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Union, TYPE_CHECKING
import logging

from ..commitment.combiner import combine
from ..common.codec import BinaryReader, BinaryWriter, read_artifact, write_artifact
from ..common.field import FieldElement
from ..config import COMMITMENT_PRIME
from ..errors import ConstraintUnsatisfied, UnsupportedOperation
from ..r1cs.constraint import Operation, Term

if TYPE_CHECKING:
    from ..r1cs.system import ConstraintSystem

logger = logging.getLogger(__name__)

MAGIC = b"ZKPF"


@dataclass
class Proof:
    """
    A proof artifact.

    Attributes:
        witness: Raw witness values at proving time, in index order
        commitment: combine(sum(witness), 0)
    """
    witness: List[int] = field(default_factory=list)
    commitment: int = 0

    def to_bytes(self) -> bytes:
        writer = BinaryWriter()
        writer.write_header(MAGIC)
        writer.write_sequence(self.witness, writer.write_int)
        writer.write_int(self.commitment)
        return writer.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> 'Proof':
        """
        Raises:
            DeserializationFailure: On malformed or truncated data
        """
        reader = BinaryReader(data)
        reader.read_header(MAGIC)
        witness = reader.read_sequence(reader.read_int)
        commitment = reader.read_int()
        reader.expect_end()
        return cls(witness, commitment)

    def save(self, path: Union[str, Path]) -> None:
        """Write the proof artifact."""
        write_artifact(path, self.to_bytes())
        logger.info("saved proof (%d witness values) to %s", len(self.witness), path)

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'Proof':
        """Read a proof artifact."""
        return cls.from_bytes(read_artifact(path))


def commit(witness: Sequence[int], prime: int = COMMITMENT_PRIME) -> int:
    """Commitment over raw witness values: the unreduced sum, combined with 0."""
    return combine(sum(witness), 0, prime)


def generate_proof(cs: 'ConstraintSystem',
                   witness: Sequence[Union[FieldElement, int]],
                   prime: int = COMMITMENT_PRIME) -> Proof:
    """
    Build a proof from a witness.

    The constraint system is accepted for symmetry with verify_proof; the
    commitment depends on the witness alone.
    """
    values = [int(w) for w in witness]
    proof = Proof(witness=values, commitment=commit(values, prime))
    logger.debug("generated proof over %d values for %r", len(values), cs)
    return proof


def _side_value(side: Sequence[Term]) -> int:
    """Unreduced sum of the reduced term products."""
    return sum((term.variable.value * term.coefficient).value for term in side)


def find_failing_constraint(proof: Proof, cs: 'ConstraintSystem',
                            prime: int = COMMITMENT_PRIME) -> Optional[ConstraintUnsatisfied]:
    """
    Return None when the proof verifies, otherwise a ConstraintUnsatisfied
    describing the first failure (constraint_index None for a commitment
    mismatch).

    Raises:
        UnsupportedOperation: If a HASH constraint is reached
    """
    expected = commit(proof.witness, prime)
    if proof.commitment != expected:
        return ConstraintUnsatisfied(
            f"Commitment mismatch: stored {proof.commitment}, recomputed {expected}"
        )

    for position, constraint in enumerate(cs.constraints):
        left_eval, right_eval, output_eval = (
            _side_value(side) for side in constraint.sides
        )

        if constraint.operation is Operation.ADD:
            holds = left_eval + right_eval == output_eval
        elif constraint.operation is Operation.MUL:
            holds = left_eval * right_eval == output_eval
        else:
            raise UnsupportedOperation(
                f"Constraint {position}: {constraint.operation.name} is not supported"
            )

        if not holds:
            return ConstraintUnsatisfied(
                f"Constraint {position} is not satisfied: {constraint!r}",
                constraint_index=position,
            )

    return None


def verify_proof(proof: Proof, cs: 'ConstraintSystem',
                 prime: int = COMMITMENT_PRIME) -> bool:
    """True when the commitment and every constraint check out."""
    failure = find_failing_constraint(proof, cs, prime)
    if failure is not None:
        logger.info("proof rejected: %s", failure)
        return False
    logger.info("proof verified against %d constraints", cs.num_constraints)
    return True


def check_proof(proof: Proof, cs: 'ConstraintSystem',
                prime: int = COMMITMENT_PRIME) -> None:
    """
    Like verify_proof, but raise on failure.

    Raises:
        ConstraintUnsatisfied: On commitment mismatch or a failing constraint
    """
    failure = find_failing_constraint(proof, cs, prime)
    if failure is not None:
        raise failure
