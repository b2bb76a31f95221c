"""
Metrics module for observability.

Provides counters and histograms for tracking transactions, block
confirmation and genesis verification. Exposes metrics in Prometheus text
format.
"""

from .registry import (
    REGISTRY,
    block_wait_time,
    block_wait_timeouts,
    generate_metrics,
    genesis_verifications,
    transactions_failed,
    transactions_submitted,
    validator_transitions,
)

__all__ = [
    "REGISTRY",
    "block_wait_time",
    "block_wait_timeouts",
    "generate_metrics",
    "genesis_verifications",
    "transactions_failed",
    "transactions_submitted",
    "validator_transitions",
]
