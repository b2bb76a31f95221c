"""Test helpers for kira_manager unit tests."""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import TypeVar

from .builders import (
    advancing_status,
    genesis_chunks,
    keys_output,
    permissions_output,
    receipt_output,
    status_output,
    tx_result_output,
    validator_output,
)
from .mocks import FakeClock, MockExecutor

_T = TypeVar("_T")


def run_async(coro: Coroutine[object, object, _T]) -> _T:
    """Run an async coroutine synchronously."""
    return asyncio.run(coro)


__all__ = [
    # Builders
    "advancing_status",
    "genesis_chunks",
    "keys_output",
    "permissions_output",
    "receipt_output",
    "status_output",
    "tx_result_output",
    "validator_output",
    # Mocks
    "FakeClock",
    "MockExecutor",
    # Async utilities
    "run_async",
]
