"""
Block Confirmation Watcher
==========================

Waits for the chain to produce a new block after a submission.

Transactions are broadcast asynchronously: the daemon returns as soon as the
transaction enters the local mempool. Whether it executed is only known once
a block has been produced. The daemon offers no subscription, so the watcher
polls the block height on a fixed tick until it changes or a budget expires.

The budget is the nominal block interval plus a grace period. Block
production usually lands slightly after the nominal interval, and giving up
exactly on time would report a healthy network as stalled.

Cancellation by the caller (task cancellation, or an enclosing
`asyncio.timeout()`) interrupts the wait at the next suspension point and
propagates as-is, so it is never confused with BlockTimeoutError.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from kira_manager import metrics
from kira_manager.config import BLOCK_GRACE_PERIOD, BLOCK_POLL_INTERVAL
from kira_manager.types import BlockTimeoutError

logger = logging.getLogger(__name__)

HeightSource = Callable[[], Awaitable[int]]
"""Coroutine function returning the latest block height."""

Sleeper = Callable[[float], Awaitable[None]]
"""Coroutine function suspending for a number of seconds."""


@dataclass(slots=True)
class BlockWatcher:
    """Polls the block height until it advances or the budget is spent."""

    height_source: HeightSource
    """Reads the current block height."""

    grace_period: float = BLOCK_GRACE_PERIOD
    """Seconds added to the nominal block interval to form the budget."""

    poll_interval: float = BLOCK_POLL_INTERVAL
    """Seconds between two height reads."""

    time_fn: Callable[[], float] = field(default=time.monotonic)
    """Monotonic time source (injectable for testing)."""

    sleep_fn: Sleeper = field(default=asyncio.sleep)
    """Tick implementation (injectable for testing)."""

    log: logging.Logger = field(default=logger, repr=False)
    """Logger for progress reporting."""

    def timeout_for(self, block_interval: float) -> float:
        """Total budget in seconds for a nominal block interval."""
        return block_interval + self.grace_period

    async def await_next_block(self, block_interval: float) -> int:
        """
        Wait until the chain height differs from its value at call time.

        Args:
            block_interval: Nominal seconds between blocks.

        Returns:
            The newly observed block height.

        Raises:
            BlockTimeoutError: If the height did not change within
                block_interval + grace_period seconds.
        """
        timeout = self.timeout_for(block_interval)

        self.log.info("Checking current block height")
        start_height = await self.height_source()
        self.log.info("Current block height: %d", start_height)

        start = self.time_fn()
        while True:
            await self.sleep_fn(self.poll_interval)

            elapsed = self.time_fn() - start
            if elapsed > timeout:
                self.log.error("Awaiting next block reached timeout: %.0f seconds", timeout)
                metrics.block_wait_timeouts.inc()
                raise BlockTimeoutError(timeout)

            height = await self.height_source()
            if height == start_height:
                self.log.warning(
                    "Block is not propagated yet: elapsed %.0f / %.0f seconds", elapsed, timeout
                )
                continue

            self.log.info("Next block %d reached", height)
            metrics.block_wait_time.observe(elapsed)
            return height
