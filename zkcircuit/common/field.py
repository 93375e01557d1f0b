"""
Finite Field Arithmetic for Circuit Proving.

Modular arithmetic over Z_p. Everything above this layer is built on it:
constraint coefficients, witness values and QAP polynomials are all field
elements.

Key Concepts:
    - All arithmetic is done modulo p
    - Addition: (a + b) mod p
    - Multiplication: (a * b) mod p
    - Subtraction: (a - b) mod p (Python's % keeps the result positive)
    - Negation: (p - a) mod p, so -0 == 0
    - Inversion: Find b such that a * b = 1 mod p (Extended Euclid)

The field is an explicit value (PrimeField) rather than a global constant,
so two proving sessions can run over different primes side by side.

Example:
    >>> z97 = PrimeField(97)
    >>> a, b = z97.element(45), z97.element(67)
    >>> (a + b).value   # 112 wraps to 15
    15
    >>> (a * a.inv()).is_one()
    True
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple, Union
import random

from ..errors import ModulusMismatch, NonInvertibleElement


def extended_gcd(a: int, b: int) -> Tuple[int, int, int]:
    """
    Extended Euclidean Algorithm.

    Returns (g, x, y) with a*x + b*y == g == gcd(a, b).
    Iterative, so stack depth does not grow with the size of the modulus.
    """
    old_r, r = a, b
    old_x, x = 1, 0
    old_y, y = 0, 1

    while r != 0:
        quotient = old_r // r
        old_r, r = r, old_r - quotient * r
        old_x, x = x, old_x - quotient * x
        old_y, y = y, old_y - quotient * y

    return old_r, old_x, old_y


@dataclass(frozen=True, eq=False)
class FieldElement:
    """
    An element of the field Z_p.

    Field elements are immutable values: every operation returns a new
    element, already reduced into [0, p).

    Attributes:
        value: Canonical representative in [0, p)
        field: The PrimeField this element belongs to

    Example:
        >>> z97 = PrimeField(97)
        >>> FieldElement(-1, z97).value
        96
    """
    value: int
    field: 'PrimeField'

    def __post_init__(self):
        """Reduce into [0, p)."""
        if isinstance(self.value, FieldElement) and self.value.field.prime != self.field.prime:
            raise ModulusMismatch(self.field.prime, self.value.field.prime)
        object.__setattr__(self, "value", int(self.value) % self.field.prime)

    @property
    def modulus(self) -> int:
        return self.field.prime

    def __repr__(self) -> str:
        return f"FieldElement({self.value}, mod {self.field.prime})"

    def __str__(self) -> str:
        return str(self.value)

    def __int__(self) -> int:
        return self.value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldElement):
            self._check_same_field(other)
            return self.value == other.value
        if isinstance(other, int):
            return self.value == (other % self.field.prime)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.value, self.field.prime))

    def _check_same_field(self, other: FieldElement) -> None:
        if self.field.prime != other.field.prime:
            raise ModulusMismatch(self.field.prime, other.field.prime)

    def _coerce(self, other: Union[FieldElement, int]) -> int:
        if isinstance(other, FieldElement):
            self._check_same_field(other)
            return other.value
        return other

    # Named operations

    def add(self, other: Union[FieldElement, int]) -> FieldElement:
        """(a + b) mod p"""
        return FieldElement(self.value + self._coerce(other), self.field)

    def sub(self, other: Union[FieldElement, int]) -> FieldElement:
        """(a - b) mod p"""
        return FieldElement(self.value - self._coerce(other), self.field)

    def mul(self, other: Union[FieldElement, int]) -> FieldElement:
        """(a * b) mod p"""
        return FieldElement(self.value * self._coerce(other), self.field)

    def negate(self) -> FieldElement:
        """(p - a) mod p, so zero negates to zero."""
        return FieldElement(self.field.prime - self.value, self.field)

    def inv(self) -> FieldElement:
        """
        Multiplicative inverse via extended_gcd.

        Finds b such that a * b ≡ 1 (mod p), i.e. x in a*x + p*y = 1.

        Raises:
            NonInvertibleElement: If gcd(value, p) != 1. This covers zero
                and, for a composite modulus, any value sharing a factor
                with it.

        Returns:
            The element b with self * b == 1
        """
        gcd, x, _ = extended_gcd(self.value, self.field.prime)
        if gcd != 1:
            raise NonInvertibleElement(self.value, self.field.prime, gcd)
        return FieldElement(x % self.field.prime, self.field)

    # Operators

    def __add__(self, other: Union[FieldElement, int]) -> FieldElement:
        return self.add(other)

    def __radd__(self, other: int) -> FieldElement:
        return self.add(other)

    def __sub__(self, other: Union[FieldElement, int]) -> FieldElement:
        return self.sub(other)

    def __rsub__(self, other: int) -> FieldElement:
        return FieldElement(other - self.value, self.field)

    def __mul__(self, other: Union[FieldElement, int]) -> FieldElement:
        return self.mul(other)

    def __rmul__(self, other: int) -> FieldElement:
        return self.mul(other)

    def __truediv__(self, other: Union[FieldElement, int]) -> FieldElement:
        """a * b^-1"""
        if isinstance(other, FieldElement):
            return self * other.inv()
        return self * self.field.element(other).inv()

    def __neg__(self) -> FieldElement:
        return self.negate()

    def __pow__(self, exp: int) -> FieldElement:
        """
        Square-and-multiply exponentiation.

        Negative exponents go through the inverse: a^(-n) = (a^(-1))^n
        """
        if exp < 0:
            return self.inv() ** (-exp)

        result = self.field.one()
        base = self

        while exp > 0:
            if exp & 1:
                result = result * base
            base = base * base
            exp >>= 1

        return result

    def is_zero(self) -> bool:
        """True for the additive identity."""
        return self.value == 0

    def is_one(self) -> bool:
        """True for the multiplicative identity."""
        return self.value == 1


class PrimeField:
    """
    The field context Z_p.

    Every constraint system and circuit builder is constructed against one
    PrimeField; elements created from different fields never mix.

    Attributes:
        prime: The modulus p

    Common moduli:
        - 97: Good for testing (small, easy to verify by hand)
        - 1_000_000_007: Default proving modulus

    Example:
        >>> field = PrimeField(1_000_000_007)
        >>> a = field.element(3)
        >>> (a * field.element(4)).value
        12
    """

    SMALL_TEST_PRIME = 97
    DEFAULT_PRIME = 1_000_000_007

    def __init__(self, prime: int):
        """
        Initialize a field.

        Args:
            prime: The modulus. Should be prime for every nonzero element
                   to be invertible. (Primality is not verified; a composite
                   modulus is accepted and simply has more non-units.)
        """
        if prime < 2:
            raise ValueError(f"Field modulus must be at least 2, got {prime}")
        self.prime = prime

    def __repr__(self) -> str:
        return f"PrimeField({self.prime})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PrimeField):
            return self.prime == other.prime
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.prime)

    def element(self, value: Union[FieldElement, int]) -> FieldElement:
        """
        Create a field element from an integer.

        A FieldElement is passed through unchanged when it already belongs
        to this field.
        """
        if isinstance(value, FieldElement):
            if value.field.prime != self.prime:
                raise ModulusMismatch(self.prime, value.field.prime)
            return value
        return FieldElement(value, self)

    def zero(self) -> FieldElement:
        """0 in this field."""
        return FieldElement(0, self)

    def one(self) -> FieldElement:
        """1 in this field."""
        return FieldElement(1, self)

    def random(self, exclude_zero: bool = False,
               rng: Optional[random.Random] = None) -> FieldElement:
        """
        Uniformly sample an element.

        Args:
            exclude_zero: Sample from [1, p) instead of [0, p)
            rng: Optional seeded generator for reproducible sampling
        """
        rng = rng or random
        low = 1 if exclude_zero else 0
        return FieldElement(rng.randint(low, self.prime - 1), self)
