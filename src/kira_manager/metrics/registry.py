"""
Metric registry using prometheus_client.

Provides pre-defined metrics for the node manager.
Exposes metrics in Prometheus text format via the /metrics endpoint.
"""

from __future__ import annotations

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

# Create a dedicated registry for manager metrics.
#
# Using a dedicated registry avoids pollution from default Python process metrics.
REGISTRY = CollectorRegistry()

# -----------------------------------------------------------------------------
# Transactions
# -----------------------------------------------------------------------------

transactions_submitted = Counter(
    "kira_transactions_submitted_total",
    "Transactions broadcast to the consensus daemon",
    registry=REGISTRY,
)

transactions_failed = Counter(
    "kira_transactions_failed_total",
    "Transactions executed on chain with a nonzero code",
    registry=REGISTRY,
)

block_wait_time = Histogram(
    "kira_block_wait_seconds",
    "Time spent awaiting the next block after a submission",
    buckets=(1.0, 2.5, 5.0, 10.0, 15.0, 20.0, 30.0, 60.0),
    registry=REGISTRY,
)

block_wait_timeouts = Counter(
    "kira_block_wait_timeouts_total",
    "Block confirmations that exceeded their budget",
    registry=REGISTRY,
)

# -----------------------------------------------------------------------------
# Genesis
# -----------------------------------------------------------------------------

genesis_verifications = Counter(
    "kira_genesis_verifications_total",
    "Genesis acquisition attempts by outcome",
    ["outcome"],
    registry=REGISTRY,
)

# -----------------------------------------------------------------------------
# Validator Lifecycle
# -----------------------------------------------------------------------------

validator_transitions = Counter(
    "kira_validator_transitions_total",
    "Validator lifecycle transitions by name and outcome",
    ["transition", "outcome"],
    registry=REGISTRY,
)


def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics output.

    Returns:
        Prometheus text format output as bytes.
    """
    return generate_latest(REGISTRY)
