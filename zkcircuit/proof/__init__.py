"""
Proof Generation and Verification

Key Components:
    - Proof: witness snapshot + commitment, with its binary artifact
    - generate_proof / verify_proof: the proving session entry points
    - check_proof: raising variant reporting the failing constraint

Usage:
    >>> from zkcircuit.proof import generate_proof, verify_proof
    >>> proof = generate_proof(cs, cs.generate_witness())
    >>> proof.save("proof.bin")
    >>> verify_proof(Proof.load("proof.bin"), ConstraintSystem.load("cs.bin"))
    True
"""

from .core import (
    Proof,
    commit,
    generate_proof,
    verify_proof,
    check_proof,
    find_failing_constraint,
)

__all__ = [
    "Proof",
    "commit",
    "generate_proof",
    "verify_proof",
    "check_proof",
    "find_failing_constraint",
]
