"""
Consensus daemon access and transaction confirmation.

This module provides:

- A client that runs daemon commands and decodes their JSON output
- A watcher that waits for the next block with a bounded budget
- A pipeline composing both into submit-confirm-classify calls
"""

from .client import SekaidClient
from .commands import TxOptions, render_tx
from .models import (
    AddressPermissions,
    KeyRecord,
    NodeStatus,
    TransactionReceipt,
    TransactionResult,
)
from .pipeline import TransactionPipeline
from .watcher import BlockWatcher

__all__ = [
    "AddressPermissions",
    "BlockWatcher",
    "KeyRecord",
    "NodeStatus",
    "SekaidClient",
    "TransactionPipeline",
    "TransactionReceipt",
    "TransactionResult",
    "TxOptions",
    "render_tx",
]
