"""
Rank-1 Constraint System

This module turns registered variables and linear-combination constraints
into the two parallel forms the prover needs: an explicit constraint list
and an accumulated QAP.

Key Components:
    - Variable, Term, Constraint, Operation: constraint records
    - ConstraintSystem: bookkeeping, witness generation and checking
    - encode/decode_constraint_system: the persisted artifact

Usage:
    >>> from zkcircuit.common import PrimeField
    >>> from zkcircuit.r1cs import ConstraintSystem, Operation
    >>>
    >>> cs = ConstraintSystem(PrimeField(1_000_000_007))
    >>> x, y, z = cs.add_variable(3), cs.add_variable(4), cs.add_variable(12)
    >>> cs.add_constraint([(x, 1)], [(y, 1)], [(z, 1)], Operation.MUL)
    0
    >>> cs.evaluate_qap()
    0
"""

from .constraint import Constraint, Operation, Term, Variable
from .system import ConstraintSystem
from .serialization import encode_constraint_system, decode_constraint_system

__all__ = [
    "Constraint",
    "Operation",
    "Term",
    "Variable",
    "ConstraintSystem",
    "encode_constraint_system",
    "decode_constraint_system",
]
