"""
Constraint Records for the Rank-1 Constraint System.

A constraint relates three linear combinations over the witness:

    left · w   ?   right · w   ?   output · w

where "?" depends on the operation tag:
    - ADD:  left + right = output
    - MUL:  left · right = output
    - HASH: reserved, no evaluation rule (always rejected)

Each stored term keeps a snapshot of the Variable it references, taken when
the constraint was added. Witness checks address the witness by the
snapshot's index; proof checks read the snapshot's value.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple, TYPE_CHECKING
from enum import Enum

if TYPE_CHECKING:
    from ..common.field import FieldElement


class Operation(Enum):
    """Operation tag recorded with each constraint."""
    ADD = "add"     # a + b = c
    MUL = "mul"     # a * b = c
    HASH = "hash"   # reserved


@dataclass(frozen=True)
class Variable:
    """
    A registered circuit variable.

    Attributes:
        index: Position in the witness vector, assigned at registration
        value: Current field value
    """
    index: int
    value: 'FieldElement'


@dataclass(frozen=True)
class Term:
    """One (variable, coefficient) entry of a constraint side."""
    variable: Variable
    coefficient: 'FieldElement'

    @property
    def index(self) -> int:
        return self.variable.index


@dataclass(frozen=True)
class Constraint:
    """
    A single constraint of the system.

    Attributes:
        left: Terms of the left linear combination
        right: Terms of the right linear combination
        output: Terms of the output linear combination
        operation: How the three sides relate
    """
    left: Tuple[Term, ...]
    right: Tuple[Term, ...]
    output: Tuple[Term, ...]
    operation: Operation = Operation.MUL

    @property
    def sides(self) -> Tuple[Tuple[Term, ...], Tuple[Term, ...], Tuple[Term, ...]]:
        return self.left, self.right, self.output

    @property
    def indices(self) -> Tuple[int, ...]:
        """Every variable index referenced, in side order."""
        return tuple(term.index for side in self.sides for term in side)

    def __repr__(self) -> str:
        def fmt(side):
            return " + ".join(f"{t.coefficient.value}·w{t.index}" for t in side) or "0"

        symbol = {Operation.ADD: "+", Operation.MUL: "*"}.get(self.operation, "#")
        return f"({fmt(self.left)}) {symbol} ({fmt(self.right)}) = {fmt(self.output)}"
