"""
Error Taxonomy for Circuit Proving.

Every failure in the toolkit is raised as a subclass of CircuitError.
Each class also derives from the closest builtin exception, so code that
already catches ValueError / OSError / IndexError keeps working.

Conditions:
    - EmptyCircuit: proof requested before any input was registered
    - NonInvertibleElement: inverse of an element with gcd(value, p) != 1
    - ModulusMismatch: arithmetic across two different fields
    - UnsupportedOperation: a HASH constraint reached evaluation
    - UnknownVariable: an index with no registered variable / witness entry
    - IoFailure: artifact file could not be created or read
    - DeserializationFailure: malformed or truncated artifact
    - ConstraintUnsatisfied: a constraint or commitment did not check out

ConstraintUnsatisfied is the only "expected" outcome; verify_* functions
report it as False and only check_* functions raise it.
"""

from __future__ import annotations
from typing import Optional


class CircuitError(Exception):
    """Base class for all toolkit errors."""


class EmptyCircuit(CircuitError, ValueError):
    """No inputs were registered before proof generation."""


class NonInvertibleElement(CircuitError, ValueError):
    """The element has no multiplicative inverse modulo p."""

    def __init__(self, value: int, modulus: int, gcd: int):
        self.value = value
        self.modulus = modulus
        self.gcd = gcd
        super().__init__(
            f"{value} has no inverse modulo {modulus} (gcd = {gcd})"
        )


class ModulusMismatch(CircuitError, ValueError):
    """Two field elements from different fields were combined."""

    def __init__(self, left: int, right: int):
        self.left = left
        self.right = right
        super().__init__(f"Moduli must match: {left} != {right}")


class UnsupportedOperation(CircuitError, NotImplementedError):
    """A constraint operation that has no evaluation rule."""


class UnknownVariable(CircuitError, IndexError):
    """A variable index that was never registered."""

    def __init__(self, index: int, available: int):
        self.index = index
        self.available = available
        super().__init__(
            f"Variable {index} does not exist ({available} registered)"
        )


class IoFailure(CircuitError, OSError):
    """An artifact file could not be written or read."""

    def __init__(self, path, reason: str):
        self.path = str(path)
        super().__init__(f"{self.path}: {reason}")


class DeserializationFailure(CircuitError, ValueError):
    """An artifact is malformed, truncated, or of an unknown format."""


class ConstraintUnsatisfied(CircuitError):
    """A witness or proof failed verification."""

    def __init__(self, message: str, constraint_index: Optional[int] = None):
        self.constraint_index = constraint_index
        super().__init__(message)
