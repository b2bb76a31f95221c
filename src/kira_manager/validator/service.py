"""
Validator Lifecycle State Machine
=================================

Drives the validator through pause, unpause and activation.

Every transition follows the same algorithm:

1. Resolve the validator's ledger address from its keyring name
2. Read its current state from the chain
3. Refuse to submit anything unless the precondition state holds
4. Submit the transaction through the command pipeline
5. Re-read the state and compare it with the postcondition, if any

Why Check Before Submitting
---------------------------
A transition from the wrong state would be rejected on chain anyway, but
only after fees were spent and with an execution log as the only clue.
Checking first turns that into a MismatchStatusError naming both states.

A transaction can also succeed without its effect being visible yet. That
case is reported as MismatchStatusError too, separate from TransactionError,
since the chain did accept the transaction.

Serialization
-------------
Transitions against the same validator must not overlap. The service holds
a lock for the duration of each transition so concurrent callers queue up.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from kira_manager import metrics
from kira_manager.chain import SekaidClient, TransactionPipeline, TxOptions, render_tx
from kira_manager.chain.commands import render_query_validator
from kira_manager.config import KiraConfig
from kira_manager.executor import CommandExecutor
from kira_manager.types import KiraError, MismatchStatusError

from .states import ACTIVATE, PAUSE, UNPAUSE, StateTransition, ValidatorStatus

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ValidatorLifecycle:
    """Reads the validator's state and submits state-changing transactions."""

    pipeline: TransactionPipeline
    """Submits and confirms transactions."""

    config: KiraConfig
    """Node configuration: account name, chain id, fees."""

    log: logging.Logger = field(default=logger, repr=False)
    """Logger for transition progress."""

    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)
    """Serializes transitions against this validator."""

    @classmethod
    def create(
        cls,
        executor: CommandExecutor,
        config: KiraConfig,
        log: logging.Logger | None = None,
    ) -> ValidatorLifecycle:
        """Wire a lifecycle service from an executor and the node configuration."""
        log = log or logger
        pipeline = TransactionPipeline.create(executor, config, log)
        return cls(pipeline=pipeline, config=config, log=log)

    @property
    def client(self) -> SekaidClient:
        """Client for the consensus daemon."""
        return self.pipeline.client

    async def get_status(self) -> ValidatorStatus:
        """
        Read the validator's current status from the chain.

        Read-only. Two calls with no transaction in between return the same
        state.

        Raises:
            DecodeError: If the keyring or validator query output is malformed
                or names an unknown state.
        """
        address = await self.client.address_by_name(self.config.validator_account)
        status = await self.client.query(render_query_validator(address), ValidatorStatus)
        self.log.debug("Validator %s status: %s", address, status.status)
        return status

    async def pause(self) -> None:
        """
        Pause an active validator.

        Raises:
            MismatchStatusError: If the validator is not active, or is not
                paused once the transaction is confirmed.
            TransactionError: If the chain rejected the transaction.
            BlockTimeoutError: If no block was produced within the budget.
        """
        await self._transition(PAUSE, self.config.fees)

    async def unpause(self) -> None:
        """
        Unpause a paused validator.

        The state is re-read afterwards but not enforced: a validator may
        take several blocks to rejoin the active set.

        Raises:
            MismatchStatusError: If the validator is not paused.
            TransactionError: If the chain rejected the transaction.
            BlockTimeoutError: If no block was produced within the budget.
        """
        await self._transition(UNPAUSE, self.config.fees)

    async def activate(self) -> None:
        """
        Activate an inactive validator.

        Success is judged by the transaction code alone.

        Raises:
            MismatchStatusError: If the validator is not inactive.
            TransactionError: If the chain rejected the transaction.
            BlockTimeoutError: If no block was produced within the budget.
        """
        await self._transition(ACTIVATE, self.config.activation_fees)

    async def _transition(self, transition: StateTransition, fees: str) -> None:
        async with self._lock:
            try:
                await self._run(transition, fees)
            except MismatchStatusError:
                metrics.validator_transitions.labels(
                    transition=transition.name, outcome="mismatch"
                ).inc()
                raise
            except KiraError:
                metrics.validator_transitions.labels(
                    transition=transition.name, outcome="error"
                ).inc()
                raise

            metrics.validator_transitions.labels(
                transition=transition.name, outcome="success"
            ).inc()

    async def _run(self, transition: StateTransition, fees: str) -> None:
        current = (await self.get_status()).status
        if current is not transition.precondition:
            self.log.error(
                "Cannot %s validator: status is %s, expected %s",
                transition.name,
                current,
                transition.precondition,
            )
            raise MismatchStatusError(str(transition.precondition), str(current))

        command = render_tx(
            transition.subcommand,
            self.config.validator_account,
            TxOptions.from_config(self.config, fees=fees),
        )
        await self.pipeline.execute(command)

        if transition.postcondition is None:
            self.log.info("Validator %s transaction confirmed", transition.name)
            return

        after = (await self.get_status()).status
        if after is transition.postcondition:
            self.log.info("Validator is now %s", after)
            return

        if transition.strict:
            self.log.error(
                "Validator %s confirmed but status is %s, expected %s",
                transition.name,
                after,
                transition.postcondition,
            )
            raise MismatchStatusError(str(transition.postcondition), str(after))

        self.log.warning(
            "Validator %s confirmed but status is still %s, expected %s",
            transition.name,
            after,
            transition.postcondition,
        )
