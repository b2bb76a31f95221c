"""
Command execution inside node containers.

Every interaction with the consensus daemon goes through a CommandExecutor:
transaction submission, status reads, transaction queries and keyring lookups.
"""

from .base import CommandExecutor, shell
from .docker import DockerExecutor

__all__ = [
    "CommandExecutor",
    "DockerExecutor",
    "shell",
]
