"""
Polynomial Representations for the QAP Encoding.

This module provides the sparse polynomial used to encode a constraint
system, and the QAP that groups three of them.

Key Concepts:
    - Polynomial: a map from variable index to field coefficient
    - Evaluation: a dot product against a witness vector, i.e.
          P(w) = Σ coefficient[i] · w[i]
      The "polynomial" is a linear functional over the witness, not a
      univariate polynomial evaluated at a challenge point.
    - QAP: three polynomials (left, right, output); a satisfying
      assignment drives L(w) · R(w) - O(w) to zero.

Example:
    For the single constraint x0 · x1 = x2 with unit coefficients:
        L = {0: 1}, R = {1: 1}, O = {2: 1}
        w = [3, 4, 12]  →  L(w) · R(w) - O(w) = 3 · 4 - 12 = 0

Lagrange interpolation is also provided. Its result keys coefficients by
degree (0 = constant term), and evaluate_at() reads them that way.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Sequence, Tuple, Union, TYPE_CHECKING

from ..errors import UnknownVariable

if TYPE_CHECKING:
    from .field import PrimeField, FieldElement

# A linear combination: (variable index, coefficient) pairs.
# Duplicate indices add up rather than overwrite.
LinearCombination = Sequence[Tuple[int, Union['FieldElement', int]]]


@dataclass
class Polynomial:
    """
    A sparse polynomial keyed by variable index.

    Attributes:
        field: The prime field coefficients live in
        coefficients: Map from variable index to coefficient (keys unique)

    Example:
        >>> field = PrimeField(97)
        >>> p = Polynomial(field)
        >>> p.accumulate(0, field.element(2))
        >>> p.accumulate(0, field.element(3))
        >>> p.coefficient(0).value
        5
    """
    field: 'PrimeField'
    coefficients: Dict[int, 'FieldElement'] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.coefficients)

    def __contains__(self, index: int) -> bool:
        return index in self.coefficients

    def __iter__(self) -> Iterator[Tuple[int, 'FieldElement']]:
        """Iterate (index, coefficient) pairs in index order."""
        return iter(sorted(self.coefficients.items()))

    def coefficient(self, index: int) -> 'FieldElement':
        """Coefficient at index, zero when absent."""
        return self.coefficients.get(index, self.field.zero())

    def add_term(self, index: int, coefficient: Union['FieldElement', int]) -> None:
        """Set the coefficient at index, replacing any previous value."""
        self.coefficients[index] = self.field.element(coefficient)

    def accumulate(self, index: int, coefficient: Union['FieldElement', int]) -> None:
        """Add to the coefficient at index."""
        self.coefficients[index] = self.coefficient(index) + self.field.element(coefficient)

    def evaluate(self, assignment: Sequence['FieldElement']) -> 'FieldElement':
        """
        Evaluate against a witness vector: Σ coefficient[i] · assignment[i].

        Raises:
            UnknownVariable: If a coefficient key is past the end of assignment
        """
        result = self.field.zero()
        for index, coefficient in self.coefficients.items():
            if index >= len(assignment):
                raise UnknownVariable(index, len(assignment))
            result = result + coefficient * self.field.element(assignment[index])
        return result

    def evaluate_at(self, x: Union['FieldElement', int]) -> 'FieldElement':
        """
        Evaluate as a univariate polynomial, reading keys as degrees.

        Uses Horner's rule over the dense coefficient list.
        """
        x = self.field.element(x)
        if not self.coefficients:
            return self.field.zero()

        result = self.field.zero()
        for degree in range(max(self.coefficients), -1, -1):
            result = result * x + self.coefficient(degree)
        return result

    @staticmethod
    def interpolate(points: Sequence[Tuple['FieldElement', 'FieldElement']],
                    field: 'PrimeField') -> 'Polynomial':
        """
        Lagrange interpolation through the given (x, y) points.

        For each point i:
            L_i(x) = y_i · Π_{j≠i} (x - x_j) / (x_i - x_j)
        and the result is Σ L_i, stored by degree.

        Args:
            points: (x, y) pairs; every x must be distinct
            field: The field to interpolate over

        Raises:
            NonInvertibleElement: If two points share an x coordinate,
                since (x_i - x_j) is then zero

        Returns:
            Polynomial with coefficients keyed by degree
        """
        result = Polynomial(field)

        for i, (x_i, y_i) in enumerate(points):
            x_i, y_i = field.element(x_i), field.element(y_i)

            # basis[k] is the coefficient of x^k, starting from the constant y_i
            basis: List['FieldElement'] = [y_i]

            for j, (x_j, _) in enumerate(points):
                if i == j:
                    continue
                x_j = field.element(x_j)
                scale = (x_i - x_j).inv()

                # Multiply basis by (x - x_j) / (x_i - x_j)
                shifted = [field.zero()] + basis
                for k, c in enumerate(basis):
                    shifted[k] = shifted[k] - c * x_j
                basis = [c * scale for c in shifted]

            for degree, c in enumerate(basis):
                result.accumulate(degree, c)

        return result

    def __repr__(self) -> str:
        terms = " + ".join(f"{c.value}·w{i}" for i, c in self) or "0"
        return f"Polynomial({terms}, mod {self.field.prime})"


@dataclass
class QAP:
    """
    Quadratic Arithmetic Program: the polynomial form of a constraint system.

    Each constraint folds its three linear combinations into the matching
    polynomial, so contributions from every constraint accumulate.

    Attributes:
        left: Accumulated left-hand coefficients
        right: Accumulated right-hand coefficients
        output: Accumulated output coefficients
    """
    left: Polynomial
    right: Polynomial
    output: Polynomial

    @classmethod
    def empty(cls, field: 'PrimeField') -> 'QAP':
        """A QAP with no constraints folded in."""
        return cls(Polynomial(field), Polynomial(field), Polynomial(field))

    @property
    def field(self) -> 'PrimeField':
        return self.left.field

    def add_constraint(self, left: LinearCombination, right: LinearCombination,
                       output: LinearCombination) -> None:
        """Fold one constraint's coefficients into the three polynomials."""
        for polynomial, combination in ((self.left, left),
                                        (self.right, right),
                                        (self.output, output)):
            for index, coefficient in combination:
                polynomial.accumulate(index, coefficient)

    def evaluate(self, assignment: Sequence['FieldElement']) -> 'FieldElement':
        """Return L(w) · R(w) - O(w)."""
        left_eval = self.left.evaluate(assignment)
        right_eval = self.right.evaluate(assignment)
        output_eval = self.output.evaluate(assignment)
        return left_eval * right_eval - output_eval
