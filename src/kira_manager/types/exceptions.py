"""Exception hierarchy for genesis acquisition and validator operations."""

from __future__ import annotations

_RAW_PREVIEW_LIMIT = 200
"""Maximum number of characters of a raw payload echoed in an error message."""


def _preview(raw: bytes | str) -> str:
    """Render a raw payload for an error message, truncating long bodies."""
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    if len(text) > _RAW_PREVIEW_LIMIT:
        return text[: _RAW_PREVIEW_LIMIT - 3] + "..."
    return text


class KiraError(Exception):
    """
    Base exception for all manager errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class VerificationError(KiraError):
    """
    Base class for genesis verification failures.

    Fatal to the join attempt. Never retried internally.
    """


class GenesisMismatchError(VerificationError):
    """
    Raised when the consensus RPC and the relay serve different genesis bytes.

    Attributes:
        rpc_size: Length of the document assembled from the chunked endpoint.
        relay_size: Length of the document served by the relay.
    """

    def __init__(self, *, rpc_size: int, relay_size: int) -> None:
        self.rpc_size = rpc_size
        self.relay_size = relay_size

        super().__init__(
            "Genesis files are not identical "
            f"(rpc: {rpc_size} bytes, relay: {relay_size} bytes)"
        )


class ChecksumMismatchError(VerificationError):
    """
    Raised when the genesis hash differs from the published checksum.

    Attributes:
        expected: Checksum published by the relay, without the 0x prefix.
        actual: SHA-256 hex digest of the fetched document.
    """

    def __init__(self, *, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual

        super().__init__(f"SHA-256 checksum mismatch: expected {expected}, got {actual}")


class BlockTimeoutError(KiraError):
    """
    Raised when no new block is observed within the confirmation budget.

    Distinct from caller cancellation: the network may be alive but slow.

    Attributes:
        timeout_seconds: The full budget, nominal block time plus grace.
    """

    def __init__(self, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds

        super().__init__(f"Failed to await next block within {timeout_seconds:.2f}s limit")


class TransactionError(KiraError):
    """
    Raised when the chain executed a transaction with a nonzero code.

    Not retried: resubmitting could duplicate side effects.

    Attributes:
        tx_hash: Hash of the rejected transaction.
        code: Execution code reported by the chain.
        raw_log: Execution log, kept for diagnostics.
    """

    def __init__(self, tx_hash: str, code: int, raw_log: str = "") -> None:
        self.tx_hash = tx_hash
        self.code = code
        self.raw_log = raw_log

        super().__init__(f"Transaction {tx_hash!r} failed with code {code}")


class MismatchStatusError(KiraError):
    """
    Raised when the validator is not in the state an operation requires.

    Covers both a failed precondition (nothing was submitted) and a missing
    postcondition (the transaction landed but the effect was not observed).

    Attributes:
        expected: The required validator state.
        current: The observed validator state.
    """

    def __init__(self, expected: str, current: str) -> None:
        self.expected = expected
        self.current = current

        super().__init__(f"Node status is not {expected!r}, current status is {current!r}")


class DecodeError(KiraError):
    """
    Raised when output from an endpoint or command cannot be decoded.

    Attributes:
        source: The endpoint URL or command that produced the payload.
        detail: Description of what went wrong.
        raw: The undecodable payload, kept verbatim.
    """

    def __init__(self, source: str, detail: str, raw: bytes | str = b"") -> None:
        self.source = source
        self.detail = detail
        self.raw = raw

        msg = f"Failed to decode output of {source}: {detail}"
        if raw:
            msg = f"{msg}; raw output: {_preview(raw)!r}"

        super().__init__(msg)


class CommandError(KiraError):
    """
    Raised when a command inside a container cannot be run or exits nonzero.

    Attributes:
        command: The command that was executed.
        exit_code: Process exit code, or None if the process never finished.
        output: Captured output of the process.
    """

    def __init__(self, command: str, exit_code: int | None, output: bytes = b"") -> None:
        self.command = command
        self.exit_code = exit_code
        self.output = output

        if exit_code is None:
            msg = f"Command {command!r} did not complete"
        else:
            msg = f"Command {command!r} exited with code {exit_code}"
        if output:
            msg = f"{msg}: {_preview(output)}"

        super().__init__(msg)


class SeedQueryError(KiraError):
    """
    Raised when an HTTP query against the seed node fails.

    Attributes:
        url: The requested URL.
        detail: Transport or status error description.
    """

    def __init__(self, url: str, detail: str) -> None:
        self.url = url
        self.detail = detail

        super().__init__(f"Query to {url} failed: {detail}")
