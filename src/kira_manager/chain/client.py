"""
Client for the consensus daemon CLI.

Wraps the daemon's command line tool as run inside its container. Every
method runs exactly one command and decodes its output into a typed model.
Malformed output is never defaulted: it raises DecodeError with the raw
payload attached, because the tool is known to print human-readable text
instead of JSON on some failures.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, TypeVar

import yaml
from pydantic import ValidationError

from kira_manager import metrics
from kira_manager.config import KiraConfig
from kira_manager.executor import CommandExecutor, shell
from kira_manager.types import DecodeError, WireModel

from .commands import (
    STATUS_COMMAND,
    render_keys_show,
    render_query_permissions,
    render_query_tx,
)
from .models import (
    AddressPermissions,
    KeyRecord,
    NodeStatus,
    TransactionReceipt,
    TransactionResult,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=WireModel)


@dataclass(slots=True)
class SekaidClient:
    """Runs daemon commands in the consensus container and decodes the results."""

    executor: CommandExecutor
    """Runs commands inside containers."""

    config: KiraConfig
    """Node configuration: container name, home and keyring backend."""

    log: logging.Logger = field(default=logger, repr=False)
    """Logger for command tracing."""

    async def run(self, command: str) -> bytes:
        """Run a rendered command line in the consensus container."""
        self.log.debug("Running command: %s", command)
        return await self.executor.execute(self.config.sekaid_container_name, shell(command))

    async def query(self, command: str, model: type[M]) -> M:
        """Run a command and decode its JSON output into the given model."""
        out = await self.run(command)
        return model.decode(out, command)

    async def submit(self, command: str) -> TransactionReceipt:
        """
        Broadcast a rendered transaction command.

        Args:
            command: A full transaction command rendered with async broadcast
                and JSON output.

        Returns:
            The broadcast receipt. Its code is not authoritative.
        """
        receipt = await self.query(command, TransactionReceipt)
        metrics.transactions_submitted.inc()
        self.log.debug("Broadcast transaction %s (admission code %d)", receipt.txhash, receipt.code)
        return receipt

    async def query_transaction(self, tx_hash: str) -> TransactionResult:
        """Look a transaction up on chain by hash."""
        result = await self.query(render_query_tx(tx_hash), TransactionResult)
        self.log.debug(
            "Transaction %s status: code=%d height=%d", result.txhash, result.code, result.height
        )
        return result

    async def block_height(self) -> int:
        """Read the latest block height known to the node."""
        status = await self.query(STATUS_COMMAND, NodeStatus)
        return status.sync_info.latest_block_height

    async def address_by_name(self, name: str) -> str:
        """
        Resolve a keyring name to its ledger address.

        Chain queries are keyed by address, never by keyring name.

        Raises:
            DecodeError: If the keyring output is not a key record.
        """
        command = render_keys_show(name, self.config.keyring_backend, self.config.sekaid_home)
        out = await self.run(command)

        try:
            data: Any = yaml.safe_load(out)
        except yaml.YAMLError as exc:
            raise DecodeError(command, f"invalid YAML: {exc}", out) from exc

        # Older releases print a list of records, newer ones a single mapping.
        if isinstance(data, list):
            if not data:
                raise DecodeError(command, f"no key named {name!r}", out)
            data = data[0]

        try:
            record = KeyRecord.model_validate(data)
        except ValidationError as exc:
            raise DecodeError(command, f"invalid key record: {exc}", out) from exc

        self.log.debug("Key %r resolves to address %s", name, record.address)
        return record.address

    async def permissions(self, address: str) -> AddressPermissions:
        """Read the governance permissions of an address."""
        return await self.query(render_query_permissions(address), AddressPermissions)
