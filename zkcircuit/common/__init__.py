"""
Common building blocks for the circuit toolkit.

This module provides:
    - Finite field arithmetic (PrimeField, FieldElement)
    - QAP polynomials (Polynomial, QAP)
    - Binary artifact encoding (BinaryWriter, BinaryReader)
"""

from .field import PrimeField, FieldElement, extended_gcd
from .polynomial import Polynomial, QAP, LinearCombination
from .codec import BinaryWriter, BinaryReader, read_artifact, write_artifact

__all__ = [
    "PrimeField",
    "FieldElement",
    "extended_gcd",
    "Polynomial",
    "QAP",
    "LinearCombination",
    "BinaryWriter",
    "BinaryReader",
    "read_artifact",
    "write_artifact",
]
