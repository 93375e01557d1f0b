"""Tests for prover configuration."""

import pytest

from zkcircuit.common.field import PrimeField
from zkcircuit.config import (
    COMMITMENT_PRIME,
    DEFAULT_MODULUS,
    ProverConfig,
    create_default_config,
    create_small_field_config,
)


class TestProverConfig:
    """Validation and factories."""

    def test_defaults(self) -> None:
        """Both moduli default to 1,000,000,007."""
        config = create_default_config()
        assert config.modulus == DEFAULT_MODULUS == 1_000_000_007
        assert config.commitment_prime == COMMITMENT_PRIME
        assert config.field == PrimeField(DEFAULT_MODULUS)

    def test_small_field(self) -> None:
        """The small config only changes the circuit modulus."""
        config = create_small_field_config()
        assert config.modulus == 97
        assert config.commitment_prime == COMMITMENT_PRIME
        assert config.name == "small-97"

    @pytest.mark.parametrize("kwargs", [{"modulus": 1}, {"commitment_prime": 0}])
    def test_invalid(self, kwargs) -> None:
        """Moduli below 2 are rejected."""
        with pytest.raises(ValueError):
            ProverConfig(**kwargs)

    def test_summary(self) -> None:
        """The summary names the config and both moduli."""
        summary = ProverConfig(name="test", modulus=97).summary()
        assert "'test'" in summary
        assert "97" in summary
        assert "1,000,000,007" in summary
