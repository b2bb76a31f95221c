"""
Manager configuration.

Holds the parameters of the node being managed: network name, daemon homes,
container names, ports, fee settings and the timing of block confirmation.

Defaults match a standard single-host deployment. Operators override them
with a YAML file whose keys are the snake_case field names::

    network_name: testnet-1
    time_between_blocks: 10.0
    block_grace_period: 5.0
"""

from __future__ import annotations

from pathlib import Path
from typing import Final

import yaml
from pydantic import Field

from kira_manager.types import StrictBaseModel

# --- Timing ---

TIME_BETWEEN_BLOCKS: Final[float] = 10.0
"""Expected interval between blocks in seconds."""

BLOCK_GRACE_PERIOD: Final[float] = 5.0
"""Extra seconds added to the block interval before giving up on a new block."""

BLOCK_POLL_INTERVAL: Final[float] = 1.0
"""Seconds between two block height reads while awaiting a block."""

HTTP_TIMEOUT: Final[float] = 3.0
"""Timeout in seconds for a single HTTP query against a seed node."""

COMMAND_TIMEOUT: Final[float] = 60.0
"""Timeout in seconds for a single command run inside a container."""

# --- Accounts ---

VALIDATOR_ACCOUNT_NAME: Final = "validator"
"""Keyring name of the validator account."""


class KiraConfig(StrictBaseModel):
    """
    Configuration of a managed node.

    Immutable. Use `copy()` to derive a modified configuration.
    """

    network_name: str = "testnet-1"
    """Chain id passed to every transaction."""

    sekaid_home: str = "/data/.sekai"
    """Home directory of the consensus daemon inside its container."""

    interx_home: str = "/data/.interx"
    """Home directory of the relay daemon inside its container."""

    keyring_backend: str = "test"
    """Keyring backend used to sign transactions."""

    sekaid_container_name: str = "sekaid"
    """Container running the consensus daemon."""

    interx_container_name: str = "interx"
    """Container running the relay daemon."""

    rpc_port: int = Field(default=26657, gt=0, lt=65536)
    """Consensus daemon RPC port."""

    p2p_port: int = Field(default=26656, gt=0, lt=65536)
    """Consensus daemon P2P port."""

    grpc_port: int = Field(default=9090, gt=0, lt=65536)
    """Consensus daemon gRPC port."""

    interx_port: int = Field(default=11000, gt=0, lt=65536)
    """Relay daemon HTTP port."""

    moniker: str = "VALIDATOR"
    """Human-readable node name."""

    validator_account: str = VALIDATOR_ACCOUNT_NAME
    """Keyring name of the account that owns the validator."""

    fees: str = "100ukex"
    """Fee attached to pause and unpause transactions."""

    activation_fees: str = "1000ukex"
    """Fee attached to the activation transaction."""

    gas: int = Field(default=1_000_000, gt=0)
    """Gas limit for lifecycle transactions."""

    time_between_blocks: float = Field(default=TIME_BETWEEN_BLOCKS, gt=0)
    """Expected block interval in seconds."""

    block_grace_period: float = Field(default=BLOCK_GRACE_PERIOD, ge=0)
    """Seconds added to the block interval when awaiting a new block."""

    block_poll_interval: float = Field(default=BLOCK_POLL_INTERVAL, gt=0)
    """Seconds between block height reads."""

    http_timeout: float = Field(default=HTTP_TIMEOUT, gt=0)
    """Timeout for HTTP queries against seed nodes."""

    command_timeout: float = Field(default=COMMAND_TIMEOUT, gt=0)
    """Timeout for commands run inside containers."""

    @classmethod
    def from_yaml_file(cls, path: Path | str) -> KiraConfig:
        """
        Load configuration from a YAML file.

        Missing keys keep their defaults.

        Raises:
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the file is not valid YAML.
            pydantic.ValidationError: If the data fails validation.
        """
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data or {})

    @classmethod
    def from_yaml(cls, content: str) -> KiraConfig:
        """Load configuration from a YAML string."""
        data = yaml.safe_load(content)
        return cls.model_validate(data or {})
