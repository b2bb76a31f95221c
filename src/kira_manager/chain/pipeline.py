"""
Command Pipeline
================

Turns a fire-and-forget async broadcast into a synchronous-looking call.

Every state-changing operation runs through the same four steps:

1. Submit the rendered transaction and read its hash from the receipt
2. Await the next block, bounded by the network's block interval
3. Query the transaction by hash
4. Classify: a nonzero code raises TransactionError, zero is success

Steps run strictly in order. Nothing is retried: resubmitting a transaction
that may already have executed could duplicate its side effects. The caller
decides whether a failed call is worth repeating.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from kira_manager import metrics
from kira_manager.config import KiraConfig
from kira_manager.executor import CommandExecutor
from kira_manager.types import TransactionError

from .client import SekaidClient
from .models import TransactionResult
from .watcher import BlockWatcher

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TransactionPipeline:
    """Submits transactions and confirms their on-chain outcome."""

    client: SekaidClient
    """Client for the consensus daemon."""

    watcher: BlockWatcher
    """Waits for the block that may include the transaction."""

    block_interval: float
    """Nominal seconds between blocks."""

    log: logging.Logger = field(default=logger, repr=False)
    """Logger for transaction outcomes."""

    @classmethod
    def create(
        cls,
        executor: CommandExecutor,
        config: KiraConfig,
        log: logging.Logger | None = None,
    ) -> TransactionPipeline:
        """Wire a pipeline from an executor and the node configuration."""
        log = log or logger
        client = SekaidClient(executor=executor, config=config, log=log)
        watcher = BlockWatcher(
            height_source=client.block_height,
            grace_period=config.block_grace_period,
            poll_interval=config.block_poll_interval,
            log=log,
        )
        return cls(
            client=client,
            watcher=watcher,
            block_interval=config.time_between_blocks,
            log=log,
        )

    async def execute(self, command: str) -> TransactionResult:
        """
        Submit a transaction and wait for its confirmed result.

        Args:
            command: Rendered transaction command with async broadcast and
                JSON output.

        Returns:
            The on-chain transaction, guaranteed to have code zero.

        Raises:
            TransactionError: If the chain executed the transaction with a
                nonzero code.
            BlockTimeoutError: If no new block appeared within the budget.
            DecodeError: If any daemon output was malformed.
        """
        receipt = await self.client.submit(command)
        await self.watcher.await_next_block(self.block_interval)
        result = await self.client.query_transaction(receipt.txhash)

        if not result.succeeded:
            metrics.transactions_failed.inc()
            self.log.error(
                "Transaction %s failed with code %d: %s",
                receipt.txhash,
                result.code,
                result.raw_log,
            )
            raise TransactionError(receipt.txhash, result.code, result.raw_log)

        self.log.info("Transaction %s confirmed at height %d", result.txhash, result.height)
        return result
