"""Unit tests for finite field arithmetic."""

import math

import pytest

from zkcircuit.common.field import FieldElement, PrimeField, extended_gcd
from zkcircuit.errors import ModulusMismatch, NonInvertibleElement


class TestConstruction:
    """Normalization on construction."""

    def test_value_reduced(self, small_field) -> None:
        """Values are reduced into [0, p)."""
        assert small_field.element(100).value == 3
        assert small_field.element(97).value == 0

    def test_negative_value_reduced(self, small_field) -> None:
        """Negative integers wrap to the positive representative."""
        assert small_field.element(-1).value == 96

    def test_modulus_property(self, small_field) -> None:
        """Elements expose their field's modulus."""
        assert small_field.element(5).modulus == 97

    def test_immutable(self, small_field) -> None:
        """Field elements cannot be mutated in place."""
        a = small_field.element(5)
        with pytest.raises(AttributeError):
            a.value = 6

    def test_invalid_prime(self) -> None:
        """A modulus below 2 is rejected."""
        with pytest.raises(ValueError):
            PrimeField(1)

    def test_element_passthrough(self, small_field) -> None:
        """An element of the same field passes through element() unchanged."""
        a = small_field.element(5)
        assert small_field.element(a) is a

    def test_element_from_other_field(self, small_field) -> None:
        """element() rejects elements of another field."""
        with pytest.raises(ModulusMismatch):
            small_field.element(PrimeField(101).element(5))

    def test_construct_from_other_field(self) -> None:
        """Wrapping an element of another field is not a silent re-reduction."""
        with pytest.raises(ModulusMismatch):
            FieldElement(PrimeField(97).element(50), PrimeField(101))

    def test_construct_from_same_field(self, small_field) -> None:
        """Wrapping an element of the same field keeps its value."""
        assert FieldElement(small_field.element(50), small_field).value == 50


class TestArithmetic:
    """Named operations and operators."""

    def test_add(self, small_field) -> None:
        """(45 + 67) mod 97 = 15."""
        assert small_field.element(45).add(small_field.element(67)).value == 15

    def test_sub(self, small_field) -> None:
        """(45 - 67) mod 97 = 75."""
        assert small_field.element(45).sub(small_field.element(67)).value == 75

    def test_mul(self, small_field) -> None:
        """(45 * 67) mod 97 = 3015 mod 97 = 8."""
        assert small_field.element(45).mul(small_field.element(67)).value == 8

    def test_operators_match_named_methods(self, small_field) -> None:
        """Operators delegate to the named operations."""
        a, b = small_field.element(45), small_field.element(67)
        assert a + b == a.add(b)
        assert a - b == a.sub(b)
        assert a * b == a.mul(b)
        assert -a == a.negate()

    def test_int_operands(self, small_field) -> None:
        """Plain ints are reduced into the field."""
        a = small_field.element(10)
        assert (a + 90).value == 3
        assert (2 * a).value == 20
        assert (5 - a).value == 92

    def test_negate_zero(self, small_field) -> None:
        """negate(0) == 0."""
        assert small_field.zero().negate().value == 0

    def test_division(self, small_field) -> None:
        """a / b == a * b^-1."""
        a, b = small_field.element(45), small_field.element(67)
        assert (a / b) * b == a

    def test_pow(self, small_field) -> None:
        """Square-and-multiply matches Python's pow."""
        a = small_field.element(5)
        assert (a ** 13).value == pow(5, 13, 97)
        assert (a ** 0).is_one()

    def test_negative_pow(self, small_field) -> None:
        """a^-2 == (a^-1)^2."""
        a = small_field.element(5)
        assert a ** -2 == a.inv() * a.inv()


class TestInverse:
    """Multiplicative inverse and its failure modes."""

    def test_inverse(self, small_field) -> None:
        """a * a^-1 == 1."""
        a = small_field.element(45)
        assert (a * a.inv()).is_one()

    def test_inverse_of_zero(self, small_field) -> None:
        """Zero has no inverse."""
        with pytest.raises(NonInvertibleElement) as excinfo:
            small_field.zero().inv()
        assert excinfo.value.gcd == 97

    def test_shared_factor_with_composite_modulus(self) -> None:
        """6 shares the factor 3 with 15."""
        with pytest.raises(NonInvertibleElement) as excinfo:
            PrimeField(15).element(6).inv()
        assert excinfo.value.gcd == 3

    def test_unit_in_composite_modulus(self) -> None:
        """Elements coprime to a composite modulus are still invertible."""
        a = PrimeField(15).element(7)
        assert (a * a.inv()).is_one()

    def test_large_modulus(self) -> None:
        """Inversion works for a 255-bit modulus."""
        p = 2**255 - 19
        a = PrimeField(p).element(2**200 + 12345)
        assert (a * a.inv()).is_one()


class TestExtendedGcd:
    """Iterative extended Euclid."""

    @pytest.mark.parametrize("a, b", [(240, 46), (17, 5), (0, 7), (7, 0), (97, 97)])
    def test_bezout_identity(self, a, b) -> None:
        """a*x + b*y == gcd(a, b)."""
        g, x, y = extended_gcd(a, b)
        assert a * x + b * y == g
        assert g == math.gcd(a, b)

    def test_consecutive_fibonacci(self) -> None:
        """Worst-case input for Euclid runs without deep recursion."""
        a, b = 0, 1
        for _ in range(5000):
            a, b = b, a + b
        g, x, y = extended_gcd(b, a)
        assert g == 1
        assert b * x + a * y == 1


class TestModulusMismatch:
    """Mixing fields is a contract violation."""

    @pytest.mark.parametrize("op", ["add", "sub", "mul"])
    def test_named_operations(self, op) -> None:
        """Named operations reject elements of another field."""
        a = PrimeField(97).element(3)
        b = PrimeField(101).element(3)
        with pytest.raises(ModulusMismatch):
            getattr(a, op)(b)

    def test_equality(self) -> None:
        """Comparing across fields raises instead of returning False."""
        with pytest.raises(ModulusMismatch):
            _ = PrimeField(97).element(3) == PrimeField(101).element(3)

    def test_structural_equality(self) -> None:
        """Equal value and modulus compare equal across field instances."""
        assert PrimeField(97).element(3) == PrimeField(97).element(3)
        assert FieldElement(3, PrimeField(97)) != FieldElement(4, PrimeField(97))


class TestProperties:
    """Algebraic laws over random samples."""

    def test_additive_inverse(self, field, rng) -> None:
        """a + (-a) == 0."""
        for _ in range(200):
            a = field.random(rng=rng)
            assert a.add(a.negate()).is_zero()

    def test_multiplicative_inverse(self, field, rng) -> None:
        """a * a^-1 == 1 for nonzero a."""
        for _ in range(200):
            a = field.random(exclude_zero=True, rng=rng)
            assert a.mul(a.inv()).is_one()

    def test_commutativity(self, field, rng) -> None:
        """a + b == b + a and a * b == b * a."""
        for _ in range(200):
            a, b = field.random(rng=rng), field.random(rng=rng)
            assert a + b == b + a
            assert a * b == b * a

    def test_associativity(self, field, rng) -> None:
        """(a + b) + c == a + (b + c) and likewise for *."""
        for _ in range(200):
            a, b, c = (field.random(rng=rng) for _ in range(3))
            assert (a + b) + c == a + (b + c)
            assert (a * b) * c == a * (b * c)

    def test_results_in_range(self, field, rng) -> None:
        """Every result stays in [0, p)."""
        for _ in range(200):
            a, b = field.random(rng=rng), field.random(rng=rng)
            for result in (a + b, a - b, a * b, -a):
                assert 0 <= result.value < field.prime
