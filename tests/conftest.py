"""Pytest configuration and shared fixtures."""

import random
import sys
from pathlib import Path

import pytest

# Make the package importable without installing it
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from zkcircuit.common.field import PrimeField  # noqa: E402
from zkcircuit.r1cs.constraint import Operation  # noqa: E402
from zkcircuit.r1cs.system import ConstraintSystem  # noqa: E402

DEFAULT_PRIME = 1_000_000_007


@pytest.fixture
def field() -> PrimeField:
    """The default proving field."""
    return PrimeField(DEFAULT_PRIME)


@pytest.fixture
def small_field() -> PrimeField:
    """A small prime field for hand-checkable values."""
    return PrimeField(97)


@pytest.fixture
def rng() -> random.Random:
    """Seeded generator for reproducible property checks."""
    return random.Random(1234)


@pytest.fixture
def mul_system(field) -> ConstraintSystem:
    """x0 * x1 = x2 with x0 = 3, x1 = 4, x2 = 12."""
    cs = ConstraintSystem(field)
    a, b, c = cs.add_variable(3), cs.add_variable(4), cs.add_variable(12)
    cs.add_constraint([(a, 1)], [(b, 1)], [(c, 1)], Operation.MUL)
    return cs


@pytest.fixture
def equality_system(field) -> ConstraintSystem:
    """
    Two constraints whose three sides agree on the current values.

        2·x0 == x1 + x2 == x3        (10 == 4 + 6 == 10)
        x3   == x3      == 2·x0
    """
    cs = ConstraintSystem(field)
    x0, x1, x2, x3 = (cs.add_variable(v) for v in (5, 4, 6, 10))
    cs.add_constraint([(x0, 2)], [(x1, 1), (x2, 1)], [(x3, 1)])
    cs.add_constraint([(x3, 1)], [(x3, 1)], [(x0, 2)])
    return cs
