"""
zkcircuit - Main Entry Point

This script provides a small interactive menu over the toolkit:
    1. Prove - compile a circuit and write its proof artifacts
    2. Verify - re-check artifacts written by an earlier run
    3. Merkle paths - build a tree and verify inclusion paths
    4. Walkthrough - run every demo in sequence

Run with:
    python -m zkcircuit.main
"""

from pathlib import Path
import logging

from zkcircuit.builder.circuit import CircuitBuilder, Gate
from zkcircuit.config import create_default_config
from zkcircuit.errors import CircuitError

PROOF_FILE = "proof.bin"
CONSTRAINT_SYSTEM_FILE = "constraint_system.bin"


def print_banner():
    """Print the toolkit banner."""
    print()
    print("╔" + "═" * 68 + "╗")
    print("║" + " " * 68 + "║")
    print("║" + " " * 25 + "ZKCIRCUIT TOOLKIT" + " " * 26 + "║")
    print("║" + " " * 68 + "║")
    print("║" + " " * 12 + "Circuits → R1CS → QAP → Proof → Verification" + " " * 12 + "║")
    print("║" + " " * 68 + "║")
    print("╚" + "═" * 68 + "╝")
    print()


def print_menu():
    """Print the main menu."""
    print("  [1] Prove")
    print("      Compile out = x * y + x and write proof + constraint system")
    print()
    print("  [2] Verify")
    print("      Re-check artifacts from a previous prove run")
    print()
    print("  [3] Merkle paths")
    print("      Build a Merkle commitment and verify every leaf")
    print()
    print("  [4] Walkthrough")
    print("      Run every demo in sequence")
    print()
    print("  [q] Quit")
    print()


def ask_directory() -> Path:
    answer = input(f"Artifact directory [{Path.cwd()}]: ").strip()
    return Path(answer) if answer else Path.cwd()


def run_prove():
    """Prove a small fixed-shape circuit over user-supplied inputs."""
    x_value = int(input("x = ").strip())
    y_value = int(input("y = ").strip())
    workdir = ask_directory()

    builder = CircuitBuilder(create_default_config())
    x = builder.add_input(x_value)
    y = builder.add_input(y_value)
    builder.add_gate(Gate.mul(x, y, 2))
    builder.add_gate(Gate.add(2, x, 3))

    proof = builder.generate_proof(workdir / PROOF_FILE, workdir / CONSTRAINT_SYSTEM_FILE)

    print(f"\n✓ Proof written to {workdir / PROOF_FILE}")
    print(f"  Output:     {builder.value(3).value}")
    print(f"  Commitment: {proof.commitment}")


def run_verify():
    """Verify artifacts from disk."""
    workdir = ask_directory()
    builder = CircuitBuilder(create_default_config())
    is_valid = builder.verify_proof(workdir / PROOF_FILE, workdir / CONSTRAINT_SYSTEM_FILE)
    print(f"\n{'✓' if is_valid else '✗'} Proof verification result: {is_valid}")


def run_merkle():
    from zkcircuit.builder.demo import demo_merkle
    demo_merkle()


def run_walkthrough():
    from zkcircuit.builder.demo import main as demo_main
    demo_main(interactive=False)


def main():
    """Main entry point."""
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    print_banner()

    actions = {
        '1': run_prove,
        '2': run_verify,
        '3': run_merkle,
        '4': run_walkthrough,
    }

    while True:
        print_menu()

        choice = input("Enter your choice: ").strip().lower()

        if choice == 'q':
            print("\nGoodbye!")
            break

        action = actions.get(choice)
        if action is None:
            print("\nInvalid choice. Please try again.")
            continue

        try:
            action()
        except CircuitError as e:
            print(f"\n✗ {type(e).__name__}: {e}")
        except ValueError as e:
            print(f"\n✗ Invalid input: {e}")

        print()
        input("Press Enter to continue...")
        print("\n" * 2)


if __name__ == "__main__":
    main()
