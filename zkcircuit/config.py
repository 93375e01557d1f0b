"""
Prover Configuration.

This module defines the field context a proving session runs in. The
modulus is a configuration value rather than a compiled-in constant, so
separate sessions can prove over different primes.

Key Parameters:
    - modulus: Prime for all field arithmetic (constraints, witness, QAP)
    - commitment_prime: Prime for the additive commitment combiner

Both default to 1,000,000,007. The commitment prime must match between the
proving and verifying runs, since the proof artifact does not record it.
"""

from __future__ import annotations
from dataclasses import dataclass

from .common.field import PrimeField

DEFAULT_MODULUS = 1_000_000_007
COMMITMENT_PRIME = 1_000_000_007


@dataclass
class ProverConfig:
    """
    Field context for a proving session.

    Attributes:
        name: Configuration name for identification
        modulus: Field modulus for all circuit arithmetic
        commitment_prime: Modulus for the commitment combiner

    Example:
        >>> config = ProverConfig(name="small", modulus=97)
        >>> config.field
        PrimeField(97)
    """

    name: str = "default"
    modulus: int = DEFAULT_MODULUS
    commitment_prime: int = COMMITMENT_PRIME

    def __post_init__(self):
        """Validate configuration."""
        if self.modulus < 2:
            raise ValueError("modulus must be at least 2")
        if self.commitment_prime < 2:
            raise ValueError("commitment_prime must be at least 2")

    @property
    def field(self) -> PrimeField:
        """The field all circuit values live in."""
        return PrimeField(self.modulus)

    def summary(self) -> str:
        """Return configuration summary string."""
        return (
            f"ProverConfig '{self.name}':\n"
            f"  Field modulus: {self.modulus:,}\n"
            f"  Commitment prime: {self.commitment_prime:,}"
        )


def create_default_config() -> ProverConfig:
    """Configuration matching the default proving modulus."""
    return ProverConfig(name="default")


def create_small_field_config(prime: int = PrimeField.SMALL_TEST_PRIME) -> ProverConfig:
    """
    Small-prime configuration for hand-checkable walkthroughs.

    The commitment prime stays at its default so proofs remain comparable.
    """
    return ProverConfig(name=f"small-{prime}", modulus=prime)
