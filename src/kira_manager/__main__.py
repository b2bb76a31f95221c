"""
Validator node manager CLI entry point.

Joins an existing network and drives the local validator through its
lifecycle.

Usage::

    python -m kira_manager genesis --host 10.0.0.1 --output genesis.json
    python -m kira_manager discover --host 10.0.0.1
    python -m kira_manager status
    python -m kira_manager pause
    python -m kira_manager unpause
    python -m kira_manager activate
    python -m kira_manager permissions --key-name validator
    python -m kira_manager identity --key-name validator --key website --value https://kira.network
    python -m kira_manager serve --port 8790

Options:
    --config      Path to a YAML configuration file
    -v/--verbose  Enable debug logging
    --no-color    Disable colored logging output
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

import yaml
from pydantic import ValidationError

from kira_manager.api import ApiServer, ApiServerConfig
from kira_manager.config import KiraConfig
from kira_manager.executor import CommandExecutor, DockerExecutor
from kira_manager.genesis import GenesisFetcher
from kira_manager.join import NetworkDiscovery
from kira_manager.seed import SeedClient, create_http_client
from kira_manager.types import KiraError
from kira_manager.validator import GovernanceService, ValidatorLifecycle

logger = logging.getLogger(__name__)


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    # ANSI color codes
    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    BOLD_RED = "\x1b[38;5;196;1m"
    CYAN = "\x1b[38;5;51m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)

        timestamp = self.formatTime(record, self.datefmt)
        colored_time = f"{self.CYAN}{timestamp}{self.RESET}"
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"

        return f"{colored_time} {levelname} {name}: {record.getMessage()}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Configure logging for the manager with optional colors."""
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler()
    handler.setLevel(level)

    if no_color:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="kira_manager",
        description="Validator node manager",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a YAML configuration file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    # Seed node commands take the seed address and its ports.
    seed_parent = argparse.ArgumentParser(add_help=False)
    seed_parent.add_argument("--host", required=True, help="Address of the seed node")
    seed_parent.add_argument("--rpc-port", type=int, default=None, help="Seed consensus RPC port")
    seed_parent.add_argument("--relay-port", type=int, default=None, help="Seed relay port")

    genesis = commands.add_parser(
        "genesis", parents=[seed_parent], help="Fetch and verify the genesis document"
    )
    genesis.add_argument(
        "--output", type=Path, default=None, help="Write the verified genesis to this file"
    )

    discover = commands.add_parser(
        "discover", parents=[seed_parent], help="Print the configuration for joining a network"
    )
    discover.add_argument("--p2p-port", type=int, default=None, help="Seed P2P port")

    commands.add_parser("status", help="Print the validator status")
    commands.add_parser("pause", help="Pause an active validator")
    commands.add_parser("unpause", help="Unpause a paused validator")
    commands.add_parser("activate", help="Activate an inactive validator")

    permissions = commands.add_parser(
        "permissions", help="Grant the post-genesis governance permissions"
    )
    permissions.add_argument("--key-name", default=None, help="Keyring name of the account")

    identity = commands.add_parser("identity", help="Register or delete an identity record")
    identity.add_argument("--key-name", default=None, help="Keyring name of the account")
    identity.add_argument("--key", required=True, help="Identity record key")
    identity.add_argument("--value", default="", help="Record value; empty deletes the record")

    serve = commands.add_parser("serve", help="Run the operator API server")
    serve.add_argument("--listen-host", default="0.0.0.0", help="Address to bind to")
    serve.add_argument("--port", type=int, default=8790, help="Port to listen on")

    return parser


def load_config(path: Path | None) -> KiraConfig:
    """Load configuration from a file, or use the defaults."""
    if path is None:
        return KiraConfig()
    return KiraConfig.from_yaml_file(path)


async def run_seed_command(args: argparse.Namespace, config: KiraConfig) -> int:
    """Run a command that queries a seed node."""
    rpc_port = args.rpc_port or config.rpc_port
    relay_port = args.relay_port or config.interx_port

    async with create_http_client(config.http_timeout) as http:
        seed = SeedClient(http)

        if args.command == "genesis":
            fetcher = GenesisFetcher(seed)
            document = await fetcher.acquire_and_verify(args.host, relay_port, rpc_port)
            if args.output is not None:
                path = document.write_to(args.output)
                logger.info("Genesis written to %s", path)
            else:
                sys.stdout.buffer.write(document.content)
            return 0

        discovery = NetworkDiscovery(
            seed=seed,
            host=args.host,
            rpc_port=rpc_port,
            relay_port=relay_port,
            p2p_port=args.p2p_port or config.p2p_port,
        )
        plan = await discovery.build_join_plan()
        for value in plan.config_values():
            print(f"[{value.tag}] {value.name} = {value.value}")
        return 0


async def run_node_command(
    args: argparse.Namespace,
    config: KiraConfig,
    executor: CommandExecutor,
) -> int:
    """Run a command against the local node."""
    lifecycle = ValidatorLifecycle.create(executor, config)

    match args.command:
        case "status":
            status = await lifecycle.get_status()
            print(status.model_dump_json(indent=2))
        case "pause":
            await lifecycle.pause()
        case "unpause":
            await lifecycle.unpause()
        case "activate":
            await lifecycle.activate()
        case "permissions":
            governance = GovernanceService.create(executor, config)
            await governance.post_genesis_permissions(args.key_name or config.validator_account)
        case "identity":
            governance = GovernanceService.create(executor, config)
            await governance.upsert_identity_record(
                args.key_name or config.validator_account, args.key, args.value
            )
        case "serve":
            server = ApiServer(
                config=ApiServerConfig(host=args.listen_host, port=args.port),
                status_source=lifecycle.get_status,
            )
            await server.run()
        case _:
            raise ValueError(f"Unknown command: {args.command}")

    return 0


async def run(
    args: argparse.Namespace,
    config: KiraConfig,
    executor: CommandExecutor | None = None,
) -> int:
    """
    Dispatch a parsed command.

    Returns:
        Process exit code: 0 on success, 1 on a manager error.
    """
    try:
        if args.command in ("genesis", "discover"):
            return await run_seed_command(args, config)

        if executor is None:
            executor = DockerExecutor(timeout=config.command_timeout)
        return await run_node_command(args, config, executor)

    except KiraError as e:
        logger.error("%s failed: %s", args.command, e)
        return 1


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose, args.no_color)

    try:
        config = load_config(args.config)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        logger.error("Failed to load configuration from %s: %s", args.config, e)
        return 1

    try:
        return asyncio.run(run(args, config))
    except KeyboardInterrupt:
        logger.info("Shutting down...")
        return 130


if __name__ == "__main__":
    sys.exit(main())
