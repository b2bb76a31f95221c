"""Interface for running commands inside a node container."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol


class CommandExecutor(Protocol):
    """
    Protocol for running a command inside a named container.

    This abstraction keeps the manager independent of how containers are
    reached. The default implementation shells out to the docker CLI; tests
    substitute scripted fakes.

    Implementers should:
    - Return the combined stdout and stderr of the process
    - Raise CommandError when the process cannot run or exits nonzero
    - Let asyncio.CancelledError propagate
    """

    async def execute(self, container: str, command: Sequence[str]) -> bytes:
        """
        Run a command and capture its output.

        Args:
            container: Name or id of the container to run in.
            command: Command tokens, executed without a shell.

        Returns:
            Raw combined output of the process.
        """
        ...


def shell(command: str) -> list[str]:
    """Wrap a rendered command line so it is interpreted by bash in the container."""
    return ["bash", "-c", command]
