"""
Command line templates for the consensus daemon.

Every value interpolated into a command is shell-quoted: commands are run
through `bash -c` inside the container.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from typing import Final

from kira_manager.config import KiraConfig

SEKAID: Final = "sekaid"
"""Name of the consensus daemon binary inside its container."""

STATUS_COMMAND: Final = f"{SEKAID} status"
"""Prints node status, including the latest block height, as JSON."""


@dataclass(frozen=True, slots=True)
class TxOptions:
    """Signing and broadcast parameters shared by every transaction."""

    chain_id: str
    """Network the transaction is valid on."""

    keyring_backend: str
    """Keyring backend holding the signing key."""

    home: str
    """Daemon home directory."""

    fees: str
    """Fee amount with denomination, e.g. 100ukex."""

    gas: int | None = None
    """Gas limit. The daemon default applies when None."""

    @classmethod
    def from_config(cls, config: KiraConfig, *, fees: str | None = None) -> TxOptions:
        """Build options from the manager configuration."""
        return cls(
            chain_id=config.network_name,
            keyring_backend=config.keyring_backend,
            home=config.sekaid_home,
            fees=fees if fees is not None else config.fees,
            gas=config.gas,
        )


def render_tx(subcommand: list[str], sender: str, options: TxOptions) -> str:
    """
    Render an async-broadcast transaction command.

    Args:
        subcommand: Module and message tokens, e.g. ["customslashing", "pause"].
        sender: Keyring name or address signing the transaction.
        options: Signing and broadcast parameters.

    Returns:
        A quoted command line printing the broadcast result as JSON.
    """
    tokens = [SEKAID, "tx", *subcommand]
    tokens += [
        f"--from={sender}",
        f"--chain-id={options.chain_id}",
        f"--keyring-backend={options.keyring_backend}",
        f"--home={options.home}",
        f"--fees={options.fees}",
    ]
    if options.gas is not None:
        tokens.append(f"--gas={options.gas}")
    tokens += ["--broadcast-mode=async", "--yes", "--output=json", "--log_format=json"]
    return shlex.join(tokens)


def render_query_tx(tx_hash: str) -> str:
    """Render a transaction lookup by hash."""
    return shlex.join([SEKAID, "query", "tx", tx_hash, "--output=json"])


def render_keys_show(name: str, keyring_backend: str, home: str) -> str:
    """Render a keyring lookup printing the key record as YAML."""
    return shlex.join(
        [
            SEKAID,
            "keys",
            "show",
            name,
            f"--keyring-backend={keyring_backend}",
            f"--home={home}",
        ]
    )


def render_query_validator(address: str) -> str:
    """Render a validator lookup by ledger address."""
    return shlex.join(
        [SEKAID, "query", "customstaking", "validator", f"--addr={address}", "--output=json"]
    )


def render_query_permissions(address: str) -> str:
    """Render a governance permission lookup for an address."""
    return shlex.join([SEKAID, "query", "customgov", "permissions", address, "--output=json"])
