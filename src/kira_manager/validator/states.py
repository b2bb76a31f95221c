"""
Validator states and the transitions between them.

The chain tracks each validator in one of five states. Only three
operator-driven transitions are supported here:

    Active   --pause-->    Paused
    Paused   --unpause-->  Active
    Inactive --activate--> Active

Waiting and Jailed are observed but never left through this manager.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from pydantic import Field, field_validator

from kira_manager.types import WireModel


class ValidatorState(StrEnum):
    """Validator state as reported by the chain, normalized to lowercase."""

    ACTIVE = "active"
    PAUSED = "paused"
    INACTIVE = "inactive"
    WAITING = "waiting"
    JAILED = "jailed"


class ValidatorStatus(WireModel):
    """Output of `sekaid query customstaking validator`."""

    address: str = Field(min_length=1)
    """Ledger address of the validator account."""

    valkey: str = Field(min_length=1)
    """Validator operator key."""

    status: ValidatorState
    """Current state."""

    rank: int
    """Position in the validator ranking."""

    streak: int
    """Consecutive blocks produced without a miss."""

    mischance: int
    """Consecutive blocks missed."""

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


@dataclass(frozen=True, slots=True)
class StateTransition:
    """An operator-driven change of validator state."""

    name: str
    """Transition name, also the slashing module message submitted."""

    precondition: ValidatorState
    """State the validator must be in before submission."""

    postcondition: ValidatorState | None
    """State expected after confirmation, or None if not checked."""

    strict: bool
    """Whether a missing postcondition fails the transition or only warns."""

    @property
    def subcommand(self) -> list[str]:
        """Transaction tokens following `sekaid tx`."""
        return ["customslashing", self.name]


PAUSE: Final = StateTransition(
    name="pause",
    precondition=ValidatorState.ACTIVE,
    postcondition=ValidatorState.PAUSED,
    strict=True,
)
"""Takes an active validator out of block production."""

UNPAUSE: Final = StateTransition(
    name="unpause",
    precondition=ValidatorState.PAUSED,
    postcondition=ValidatorState.ACTIVE,
    strict=False,
)
"""Returns a paused validator to block production."""

ACTIVATE: Final = StateTransition(
    name="activate",
    precondition=ValidatorState.INACTIVE,
    postcondition=None,
    strict=False,
)
"""Reactivates a validator the chain marked inactive."""
