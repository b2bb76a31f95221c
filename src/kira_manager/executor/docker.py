"""Command executor backed by the docker CLI."""

from __future__ import annotations

import asyncio
import logging
import shlex
from collections.abc import Sequence
from dataclasses import dataclass, field

from kira_manager.config import COMMAND_TIMEOUT
from kira_manager.types import CommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DockerExecutor:
    """
    Runs commands in running containers through `docker exec`.

    The container itself is created and started elsewhere. Only the waiting
    caller is released on timeout or cancellation; the process is killed on a
    best-effort basis.
    """

    docker_binary: str = "docker"
    """Path or name of the docker CLI."""

    timeout: float = COMMAND_TIMEOUT
    """Seconds to wait for a single command."""

    log: logging.Logger = field(default=logger, repr=False)
    """Logger for command tracing."""

    async def execute(self, container: str, command: Sequence[str]) -> bytes:
        """Run a command in the container and return its combined output."""
        argv = [self.docker_binary, "exec", container, *command]
        printable = shlex.join(argv)
        self.log.debug("Running command: %s", printable)

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as exc:
            raise CommandError(printable, None, str(exc).encode()) from exc

        try:
            output, _ = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except TimeoutError as exc:
            _kill(process)
            raise CommandError(printable, None, b"timed out") from exc
        except asyncio.CancelledError:
            _kill(process)
            raise

        if process.returncode != 0:
            self.log.error("Command %s exited with code %s", printable, process.returncode)
            raise CommandError(printable, process.returncode, output)

        return output


def _kill(process: asyncio.subprocess.Process) -> None:
    """Kill a process that may already have exited."""
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            pass
