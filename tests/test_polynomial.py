"""Unit tests for QAP polynomials and Lagrange interpolation."""

import pytest

from zkcircuit.common.field import PrimeField
from zkcircuit.common.polynomial import Polynomial, QAP
from zkcircuit.errors import NonInvertibleElement, UnknownVariable


class TestPolynomial:
    """Sparse coefficient map and vector-indexed evaluation."""

    def test_add_term_overwrites(self, small_field) -> None:
        """add_term replaces the previous coefficient."""
        p = Polynomial(small_field)
        p.add_term(0, 5)
        p.add_term(0, 7)
        assert p.coefficient(0).value == 7

    def test_accumulate_adds(self, small_field) -> None:
        """accumulate sums coefficients at the same key."""
        p = Polynomial(small_field)
        p.accumulate(0, 5)
        p.accumulate(0, 7)
        assert p.coefficient(0).value == 12
        assert len(p) == 1

    def test_missing_coefficient_is_zero(self, small_field) -> None:
        """Absent keys read as zero."""
        assert Polynomial(small_field).coefficient(3).is_zero()

    def test_evaluate_is_dot_product(self, small_field) -> None:
        """evaluate(w) = Σ c_i · w_i over present keys only."""
        p = Polynomial(small_field)
        p.add_term(0, 2)
        p.add_term(2, 3)
        w = [small_field.element(v) for v in (10, 99, 20)]
        assert p.evaluate(w).value == (2 * 10 + 3 * 20) % 97

    def test_evaluate_accepts_ints(self, small_field) -> None:
        """Assignments may be plain integers."""
        p = Polynomial(small_field)
        p.add_term(1, 4)
        assert p.evaluate([0, 5]).value == 20

    def test_empty_evaluates_to_zero(self, small_field) -> None:
        """The empty polynomial is the zero functional."""
        assert Polynomial(small_field).evaluate([1, 2, 3]).is_zero()

    def test_evaluate_short_assignment(self, small_field) -> None:
        """A key past the end of the assignment is an error."""
        p = Polynomial(small_field)
        p.add_term(5, 1)
        with pytest.raises(UnknownVariable):
            p.evaluate([1, 2])

    def test_iteration_sorted(self, small_field) -> None:
        """Iteration yields (index, coefficient) in index order."""
        p = Polynomial(small_field)
        for index in (4, 1, 3):
            p.add_term(index, index)
        assert [i for i, _ in p] == [1, 3, 4]

    def test_evaluate_at(self, small_field) -> None:
        """Degree-keyed evaluation: 1 + 2x + 3x² at x = 2 is 17."""
        p = Polynomial(small_field)
        p.add_term(0, 1)
        p.add_term(1, 2)
        p.add_term(2, 3)
        assert p.evaluate_at(2).value == 17


class TestInterpolation:
    """Lagrange interpolation."""

    def test_passes_through_points(self, field) -> None:
        """The interpolant reproduces every y_i at x_i."""
        points = [(field.element(x), field.element(y))
                  for x, y in [(1, 5), (2, 11), (4, 3), (7, 100)]]
        p = Polynomial.interpolate(points, field)
        for x, y in points:
            assert p.evaluate_at(x) == y

    def test_recovers_quadratic(self, small_field) -> None:
        """Three points of x² + 1 give coefficients [1, 0, 1]."""
        points = [(small_field.element(x), small_field.element(x * x + 1)) for x in (1, 2, 3)]
        p = Polynomial.interpolate(points, small_field)
        assert [p.coefficient(d).value for d in range(3)] == [1, 0, 1]

    def test_single_point_is_constant(self, small_field) -> None:
        """One point interpolates to a constant."""
        p = Polynomial.interpolate([(small_field.element(3), small_field.element(42))], small_field)
        assert p.coefficient(0).value == 42
        assert p.evaluate_at(50).value == 42

    def test_no_points(self, small_field) -> None:
        """No points give the zero polynomial."""
        assert len(Polynomial.interpolate([], small_field)) == 0

    def test_repeated_x_fails(self, small_field) -> None:
        """A repeated x-coordinate makes a zero denominator."""
        points = [(small_field.element(2), small_field.element(1)),
                  (small_field.element(2), small_field.element(5))]
        with pytest.raises(NonInvertibleElement):
            Polynomial.interpolate(points, small_field)


class TestQAP:
    """Accumulation across constraints and evaluation."""

    def test_evaluate(self, field) -> None:
        """L(w) · R(w) - O(w) for x0 · x1 = x2."""
        qap = QAP.empty(field)
        qap.add_constraint([(0, 1)], [(1, 1)], [(2, 1)])
        assert qap.evaluate([3, 4, 12]).is_zero()
        assert qap.evaluate([3, 4, 13]) == field.element(-1)

    def test_disjoint_keys_accumulate(self, field) -> None:
        """Constraints on disjoint keys leave both contributions present."""
        qap = QAP.empty(field)
        qap.add_constraint([(0, 2)], [(1, 3)], [(2, 4)])
        qap.add_constraint([(3, 5)], [(4, 6)], [(5, 7)])
        assert {i: c.value for i, c in qap.left} == {0: 2, 3: 5}
        assert {i: c.value for i, c in qap.right} == {1: 3, 4: 6}
        assert {i: c.value for i, c in qap.output} == {2: 4, 5: 7}

    def test_shared_keys_add(self, field) -> None:
        """A key used by two constraints holds the sum of coefficients."""
        qap = QAP.empty(field)
        qap.add_constraint([(0, 2)], [(1, 1)], [(2, 1)])
        qap.add_constraint([(0, 5)], [(1, 1)], [(2, 1)])
        assert qap.left.coefficient(0).value == 7
        assert qap.right.coefficient(1).value == 2

    def test_field_property(self) -> None:
        """The QAP reports the field of its polynomials."""
        assert QAP.empty(PrimeField(97)).field == PrimeField(97)
