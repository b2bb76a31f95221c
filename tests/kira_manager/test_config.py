"""Tests for manager configuration."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from kira_manager.config import (
    BLOCK_GRACE_PERIOD,
    BLOCK_POLL_INTERVAL,
    TIME_BETWEEN_BLOCKS,
    KiraConfig,
)


class TestDefaults:
    """Tests for default configuration values."""

    def test_timing_defaults(self) -> None:
        """Block timing defaults to a 10 s interval with 5 s grace and 1 s polling."""
        config = KiraConfig()

        assert config.time_between_blocks == TIME_BETWEEN_BLOCKS == 10.0
        assert config.block_grace_period == BLOCK_GRACE_PERIOD == 5.0
        assert config.block_poll_interval == BLOCK_POLL_INTERVAL == 1.0

    def test_deployment_defaults(self) -> None:
        """Container and home defaults match a standard deployment."""
        config = KiraConfig()

        assert config.sekaid_container_name == "sekaid"
        assert config.sekaid_home == "/data/.sekai"
        assert config.keyring_backend == "test"
        assert config.validator_account == "validator"
        assert config.fees == "100ukex"
        assert config.activation_fees == "1000ukex"


class TestValidation:
    """Tests for configuration validation."""

    def test_rejects_unknown_keys(self) -> None:
        """Typos in configuration keys are errors, not silently ignored."""
        with pytest.raises(ValidationError):
            KiraConfig.model_validate({"network_nmae": "x"})

    def test_rejects_non_positive_block_interval(self) -> None:
        """A zero block interval would make every wait time out instantly."""
        with pytest.raises(ValidationError):
            KiraConfig(time_between_blocks=0.0)

    def test_rejects_out_of_range_port(self) -> None:
        """Ports must fit in 16 bits."""
        with pytest.raises(ValidationError):
            KiraConfig(rpc_port=70000)

    def test_is_immutable(self) -> None:
        """Configuration cannot be mutated after construction."""
        config = KiraConfig()

        with pytest.raises(ValidationError):
            config.network_name = "other"  # type: ignore[misc]

    def test_copy_applies_overrides(self) -> None:
        """copy() derives a validated configuration with overrides."""
        config = KiraConfig(network_name="localnet-1")
        derived = config.copy(block_grace_period=8.0)

        assert derived.network_name == "localnet-1"
        assert derived.block_grace_period == 8.0
        assert config.block_grace_period == 5.0


class TestYamlLoading:
    """Tests for loading configuration from YAML."""

    def test_from_yaml_overrides_defaults(self) -> None:
        """Keys present in YAML override defaults; others are kept."""
        config = KiraConfig.from_yaml(
            "network_name: localnet-1\ntime_between_blocks: 6.5\nrpc_port: 36657\n"
        )

        assert config.network_name == "localnet-1"
        assert config.time_between_blocks == 6.5
        assert config.rpc_port == 36657
        assert config.p2p_port == 26656

    def test_empty_yaml_gives_defaults(self) -> None:
        """An empty document yields the default configuration."""
        assert KiraConfig.from_yaml("") == KiraConfig()

    def test_from_yaml_file(self, tmp_path: Path) -> None:
        """Configuration loads from a file path."""
        path = tmp_path / "kira.yaml"
        path.write_text("moniker: NODE-1\n", encoding="utf-8")

        assert KiraConfig.from_yaml_file(path).moniker == "NODE-1"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """A missing file is reported, not replaced by defaults."""
        with pytest.raises(FileNotFoundError):
            KiraConfig.from_yaml_file(tmp_path / "missing.yaml")
