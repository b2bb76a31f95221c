"""
Shared pytest fixtures for all kira_manager tests.

Provides core fixtures used across multiple test modules.
"""

from __future__ import annotations

import pytest

from kira_manager.chain import BlockWatcher, SekaidClient, TransactionPipeline
from kira_manager.config import KiraConfig
from tests.kira_manager.helpers import FakeClock, MockExecutor


@pytest.fixture
def config() -> KiraConfig:
    """Default node configuration."""
    return KiraConfig()


@pytest.fixture
def executor() -> MockExecutor:
    """Executor with no scripted outputs."""
    return MockExecutor()


@pytest.fixture
def clock() -> FakeClock:
    """Manually advanced clock starting at zero."""
    return FakeClock()


@pytest.fixture
def client(executor: MockExecutor, config: KiraConfig) -> SekaidClient:
    """Daemon client backed by the mock executor."""
    return SekaidClient(executor=executor, config=config)


@pytest.fixture
def pipeline(client: SekaidClient, clock: FakeClock, config: KiraConfig) -> TransactionPipeline:
    """Transaction pipeline on the mock executor with an instant clock."""
    watcher = BlockWatcher(
        height_source=client.block_height,
        grace_period=config.block_grace_period,
        poll_interval=config.block_poll_interval,
        time_fn=clock.time,
        sleep_fn=clock.sleep,
    )
    return TransactionPipeline(
        client=client,
        watcher=watcher,
        block_interval=config.time_between_blocks,
    )
