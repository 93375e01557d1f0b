"""
Rank-1 Constraint System (R1CS) Bookkeeping.

The constraint system keeps two parallel representations of the circuit:

    1. An explicit list of Constraint records (read by witness checks
       and by proof verification)
    2. A QAP whose three polynomials accumulate every constraint's
       coefficients (read by evaluate_qap)

add_constraint() always updates both. Updating only the QAP would leave
the constraint list empty and make every witness check pass vacuously.

Lifecycle:
    - Built incrementally (add_variable / add_constraint)
    - Persisted with save() / to_bytes()
    - Reloaded read-only with load() / from_bytes() for verification

Example:
    >>> cs = ConstraintSystem(PrimeField(97))
    >>> a = cs.add_variable(5)
    >>> b = cs.add_variable(5)
    >>> cs.add_constraint([(a, 1)], [(b, 1)], [(a, 1)])
    0
    >>> cs.verify_witness(cs.generate_witness())
    True
"""

from __future__ import annotations
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union, TYPE_CHECKING
import logging

from ..common.codec import read_artifact, write_artifact
from ..common.field import PrimeField, FieldElement
from ..common.polynomial import QAP, LinearCombination
from ..errors import (
    ConstraintUnsatisfied,
    ModulusMismatch,
    UnknownVariable,
    UnsupportedOperation,
)
from .constraint import Constraint, Operation, Term, Variable

if TYPE_CHECKING:
    from ..proof.core import Proof

logger = logging.getLogger(__name__)

Witness = Sequence[Union[FieldElement, int]]


class ConstraintSystem:
    """
    Variable table, constraint list and QAP, kept in lock-step.

    Attributes:
        field: The field every value and coefficient belongs to
        variables: Registered variables, position == index
        constraints: Constraints in insertion order
        qap: Accumulated polynomial form of all constraints
    """

    def __init__(self, field: PrimeField):
        self.field = field
        self.variables: List[Variable] = []
        self.constraints: List[Constraint] = []
        self.qap = QAP.empty(field)

    @property
    def modulus(self) -> int:
        return self.field.prime

    @property
    def num_variables(self) -> int:
        return len(self.variables)

    @property
    def num_constraints(self) -> int:
        return len(self.constraints)

    def __repr__(self) -> str:
        return (f"ConstraintSystem(variables={self.num_variables}, "
                f"constraints={self.num_constraints}, mod {self.modulus})")

    # --- Construction ---

    def add_variable(self, value: Union[FieldElement, int]) -> int:
        """
        Register a variable and return its index.

        Indices are sequential and never reused.
        """
        index = len(self.variables)
        self.variables.append(Variable(index, self.field.element(value)))
        return index

    def assign(self, index: int, value: Union[FieldElement, int]) -> None:
        """
        Replace the value of an existing variable.

        Constraints already added keep the snapshot they were built with;
        only the variable table (and so generate_witness) sees the change.
        """
        self._check_index(index)
        self.variables[index] = Variable(index, self.field.element(value))

    def add_constraint(self, left: LinearCombination, right: LinearCombination,
                       output: LinearCombination,
                       operation: Optional[Operation] = None,
                       modulus: Optional[int] = None) -> int:
        """
        Add a constraint and fold it into the QAP.

        Args:
            left: (index, coefficient) pairs of the left side
            right: (index, coefficient) pairs of the right side
            output: (index, coefficient) pairs of the output side
            operation: Relation between the sides; defaults to MUL
            modulus: If given, must equal the system's modulus

        Raises:
            UnknownVariable: If any index is not registered
            ModulusMismatch: If modulus or a coefficient's field differs

        Returns:
            Position of the new constraint
        """
        if modulus is not None and modulus != self.modulus:
            raise ModulusMismatch(self.modulus, modulus)

        sides = [self._normalize(combination) for combination in (left, right, output)]

        constraint = Constraint(
            left=tuple(Term(self.variables[i], c) for i, c in sides[0]),
            right=tuple(Term(self.variables[i], c) for i, c in sides[1]),
            output=tuple(Term(self.variables[i], c) for i, c in sides[2]),
            operation=operation or Operation.MUL,
        )
        self.constraints.append(constraint)
        self.qap.add_constraint(*sides)

        logger.debug("constraint %d: %r", len(self.constraints) - 1, constraint)
        return len(self.constraints) - 1

    def _normalize(self, combination: LinearCombination) -> List[Tuple[int, FieldElement]]:
        normalized = []
        for index, coefficient in combination:
            self._check_index(index)
            normalized.append((index, self.field.element(coefficient)))
        return normalized

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.variables):
            raise UnknownVariable(index, len(self.variables))

    # --- Witness ---

    def generate_witness(self) -> List[FieldElement]:
        """Snapshot of every variable's value, in index order."""
        return [variable.value for variable in self.variables]

    def _evaluate_side(self, side: Sequence[Term], witness: Witness) -> FieldElement:
        result = self.field.zero()
        for term in side:
            if term.index >= len(witness):
                raise UnknownVariable(term.index, len(witness))
            result = result + term.coefficient * self.field.element(witness[term.index])
        return result

    def find_unsatisfied(self, witness: Witness) -> Optional[int]:
        """
        Position of the first constraint the witness fails, or None.

        A constraint holds when its three sides evaluate to the same field
        value: left · w == right · w == output · w.

        Raises:
            UnsupportedOperation: If a HASH constraint is reached
            UnknownVariable: If the witness is too short
        """
        for position, constraint in enumerate(self.constraints):
            if constraint.operation is Operation.HASH:
                raise UnsupportedOperation(
                    f"Constraint {position}: HASH constraints cannot be evaluated"
                )
            left_eval, right_eval, output_eval = (
                self._evaluate_side(side, witness) for side in constraint.sides
            )
            if left_eval != right_eval or right_eval != output_eval:
                return position
        return None

    def verify_witness(self, witness: Witness) -> bool:
        """True when the witness satisfies every constraint."""
        return self.find_unsatisfied(witness) is None

    def check_witness(self, witness: Witness) -> None:
        """
        Like verify_witness, but raise on failure.

        Raises:
            ConstraintUnsatisfied: Naming the first failing constraint
        """
        position = self.find_unsatisfied(witness)
        if position is not None:
            raise ConstraintUnsatisfied(
                f"Constraint {position} is not satisfied: {self.constraints[position]!r}",
                constraint_index=position,
            )

    def evaluate_qap(self, witness: Optional[Witness] = None) -> int:
        """
        Evaluate L(w) · R(w) - O(w) on the QAP.

        Uses the current variable values when no witness is given.
        """
        if witness is None:
            witness = self.generate_witness()
        return self.qap.evaluate(witness).value

    def generate_proof(self, witness: Optional[Witness] = None, **kwargs) -> 'Proof':
        """Generate a proof over the given (or current) witness."""
        from ..proof.core import generate_proof

        if witness is None:
            witness = self.generate_witness()
        return generate_proof(self, witness, **kwargs)

    # --- Persistence ---

    def to_bytes(self) -> bytes:
        from .serialization import encode_constraint_system
        return encode_constraint_system(self)

    @classmethod
    def from_bytes(cls, data: bytes) -> 'ConstraintSystem':
        from .serialization import decode_constraint_system
        return decode_constraint_system(data)

    def save(self, path: Union[str, Path]) -> None:
        """Write the constraint-system artifact."""
        write_artifact(path, self.to_bytes())
        logger.info("saved constraint system (%d variables, %d constraints) to %s",
                    self.num_variables, self.num_constraints, path)

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'ConstraintSystem':
        """Read a constraint-system artifact."""
        return cls.from_bytes(read_artifact(path))
