"""
Additive Placeholder Combiner.

Both the proof commitment and the Merkle tree combine values with

    combine(a, b) = (a + b) mod P

This is NOT a hash. It is neither hiding nor collision resistant: any two
inputs with the same sum collide, and the inputs are trivially recoverable
from context. It is kept exactly as is because the artifact format depends
on it; swapping in a real hash would change every stored commitment.
"""

from __future__ import annotations

from ..common.field import FieldElement
from ..config import COMMITMENT_PRIME
from ..errors import ModulusMismatch


def combine(left: int, right: int, prime: int = COMMITMENT_PRIME) -> int:
    """Combine two integers: (left + right) mod prime."""
    return (left + right) % prime


def apply_hash(a: FieldElement, b: FieldElement) -> FieldElement:
    """
    The same combiner over two field elements.

    Raises:
        ModulusMismatch: If a and b come from different fields
    """
    if a.modulus != b.modulus:
        raise ModulusMismatch(a.modulus, b.modulus)
    return FieldElement(a.value + b.value, a.field)
