"""Wire models for JSON printed by the consensus daemon CLI."""

from __future__ import annotations

from pydantic import Field

from kira_manager.types import WireModel


class TransactionReceipt(WireModel):
    """
    Result of broadcasting a transaction in async mode.

    The code is only the mempool admission result. It is usually zero even
    when the transaction later fails, so it is never used to judge success.
    """

    txhash: str = Field(min_length=1)
    """Hash used to look the transaction up once a block has passed."""

    code: int
    """Admission code. Not authoritative."""


class TransactionResult(WireModel):
    """
    A transaction as recorded on chain, fetched by hash.

    A zero code is the only authoritative success signal.
    """

    txhash: str
    """Transaction hash."""

    code: int
    """Execution code. Nonzero means the chain rejected the transaction."""

    height: int
    """Block height the transaction was included in."""

    raw_log: str = ""
    """Execution log. Carries the rejection reason when code is nonzero."""

    gas_wanted: int | None = None
    """Gas limit requested by the transaction."""

    gas_used: int | None = None
    """Gas actually consumed."""

    timestamp: str | None = None
    """Block time of inclusion."""

    @property
    def succeeded(self) -> bool:
        """Whether the chain executed the transaction successfully."""
        return self.code == 0


class SyncInfo(WireModel):
    """Synchronization section of `sekaid status`."""

    latest_block_height: int
    """Height of the latest block known to the node."""

    catching_up: bool | None = None
    """Whether the node is still syncing."""


class NodeStatus(WireModel):
    """Partial output of `sekaid status`."""

    sync_info: SyncInfo = Field(alias="SyncInfo")
    """Synchronization information."""


class KeyRecord(WireModel):
    """One entry of `sekaid keys show` output."""

    name: str | None = None
    """Keyring name of the key."""

    address: str = Field(min_length=1)
    """Ledger address the key controls."""


class AddressPermissions(WireModel):
    """Output of `sekaid query customgov permissions <address>`."""

    whitelist: list[int] = Field(default_factory=list)
    """Permissions granted to the address."""

    blacklist: list[int] = Field(default_factory=list)
    """Permissions explicitly denied to the address."""
