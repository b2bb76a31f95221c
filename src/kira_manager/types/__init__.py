"""Reusable type definitions shared across the manager."""

from .base import StrictBaseModel, WireModel
from .exceptions import (
    BlockTimeoutError,
    ChecksumMismatchError,
    CommandError,
    DecodeError,
    GenesisMismatchError,
    KiraError,
    MismatchStatusError,
    SeedQueryError,
    TransactionError,
    VerificationError,
)

__all__ = [
    # Models
    "StrictBaseModel",
    "WireModel",
    # Exceptions
    "KiraError",
    "VerificationError",
    "GenesisMismatchError",
    "ChecksumMismatchError",
    "BlockTimeoutError",
    "TransactionError",
    "MismatchStatusError",
    "DecodeError",
    "CommandError",
    "SeedQueryError",
]
