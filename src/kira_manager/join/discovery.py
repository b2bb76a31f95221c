"""
Network Discovery
=================

Derives the parameters a joining node needs from a trusted seed node.

A node joining an existing network must know:

- The chain id and the seed's identity (from the consensus RPC status)
- Peers to dial on startup (from the relay's public peer list)
- Optionally, a trusted block to state-sync from

State Sync
----------
State sync lets a node skip replaying history by downloading a snapshot
anchored at a trusted block. Trusting a single RPC server for that block
would reintroduce the single point of failure the genesis check avoids, so
at least two servers must report the same hash at the same height. With
fewer, the plan carries no state sync and the node replays from genesis.

Unreachable or disagreeing servers are skipped, never fatal: they only
reduce the set of servers state sync can use.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Final

from pydantic import Field

from kira_manager.seed import SeedClient
from kira_manager.types import DecodeError, KiraError, WireModel

logger = logging.getLogger(__name__)

STATUS_ENDPOINT: Final = "status"
"""Consensus RPC endpoint reporting node identity and sync progress."""

PUB_P2P_LIST_ENDPOINT: Final = "api/pub_p2p_list"
"""Relay endpoint listing public peers, one per line."""

BLOCK_ENDPOINT: Final = "block"
"""Consensus RPC endpoint returning a block by height."""

MIN_STATE_SYNC_SERVERS: Final = 2
"""Number of agreeing RPC servers required before state sync is trusted."""

TRUST_PERIOD: Final = "168h0m0s"
"""How long a trusted block stays valid for state sync."""

STATE_SYNC_TEMP_DIR: Final = "/tmp"
"""Scratch directory for state sync snapshots."""


# --- Wire models ---


class NodeInfo(WireModel):
    id: str
    network: str


class StatusSyncInfo(WireModel):
    latest_block_height: int


class StatusResult(WireModel):
    node_info: NodeInfo
    sync_info: StatusSyncInfo


class StatusResponse(WireModel):
    """Response of the consensus RPC `status` endpoint."""

    result: StatusResult


class BlockHeader(WireModel):
    height: int


class Block(WireModel):
    header: BlockHeader


class BlockId(WireModel):
    hash: str = Field(min_length=1)


class BlockResult(WireModel):
    block_id: BlockId
    block: Block


class BlockResponse(WireModel):
    """Response of the consensus RPC `block` endpoint."""

    result: BlockResult


# --- Join plan ---


@dataclass(frozen=True, slots=True)
class ConfigValue:
    """A single setting of the consensus daemon's TOML configuration."""

    tag: str
    """Section name, e.g. p2p."""

    name: str
    """Key within the section."""

    value: str
    """Value rendered as the daemon expects it."""


@dataclass(frozen=True, slots=True)
class NetworkInfo:
    """Identity and peers of the network being joined."""

    network_name: str
    """Chain id."""

    node_id: str
    """Identity of the seed node."""

    block_height: int
    """Latest height reported by the seed."""

    seeds: tuple[str, ...]
    """Peer addresses in tcp://<node_id>@<ip>:<port> form."""


@dataclass(frozen=True, slots=True)
class StateSyncInfo:
    """A block trusted by several RPC servers, usable as a state sync anchor."""

    rpc_servers: tuple[str, ...]
    """Servers that reported the trusted block, as ip:port."""

    trust_height: int
    """Height of the trusted block."""

    trust_hash: str
    """Hash of the trusted block."""


@dataclass(frozen=True, slots=True)
class JoinPlan:
    """Everything discovered about the network, ready to configure a node."""

    network_info: NetworkInfo
    """Identity and peers."""

    state_sync: StateSyncInfo | None
    """State sync anchor, or None if too few servers agreed."""

    def config_values(self) -> list[ConfigValue]:
        """Render the plan as daemon configuration settings."""
        values = [ConfigValue("p2p", "seeds", ",".join(self.network_info.seeds))]

        sync = self.state_sync
        if sync is not None:
            values += [
                ConfigValue("statesync", "trust_hash", sync.trust_hash),
                ConfigValue("statesync", "trust_height", str(sync.trust_height)),
                ConfigValue("statesync", "rpc_servers", ",".join(sync.rpc_servers)),
                ConfigValue("statesync", "trust_period", TRUST_PERIOD),
                ConfigValue("statesync", "enable", "true"),
                ConfigValue("statesync", "temp_dir", STATE_SYNC_TEMP_DIR),
            ]

        return values


# --- Parsing ---


def parse_seeds(body: bytes) -> list[str]:
    """
    Parse a public peer list into dialable seed addresses.

    Each non-blank line is a <node_id>@<ip>:<port> peer and is prefixed with
    the tcp:// scheme.
    """
    lines = body.decode("utf-8", errors="replace").splitlines()
    return [f"tcp://{line.strip()}" for line in lines if line.strip()]


def rpc_servers_from_seeds(seeds: list[str] | tuple[str, ...], rpc_port: int) -> list[str]:
    """
    Derive RPC server addresses from seed addresses.

    A seed tcp://<id>@<ip>:<p2p_port> maps to <ip>:<rpc_port>, assuming every
    peer serves RPC on the same port as the seed node.

    Raises:
        DecodeError: If a seed is not of the form <id>@<ip>:<port>.
    """
    servers = []
    for seed in seeds:
        parts = seed.split("@")
        if len(parts) != 2:
            raise DecodeError("seed list", f"invalid seed format: {seed!r}")

        ip_and_port = parts[1].split(":")
        if len(ip_and_port) != 2:
            raise DecodeError("seed list", f"invalid IP and port format in seed: {seed!r}")

        servers.append(f"{ip_and_port[0]}:{rpc_port}")

    return servers


# --- Discovery ---


@dataclass(slots=True)
class NetworkDiscovery:
    """Queries a seed node for the information needed to join its network."""

    seed: SeedClient
    """HTTP access to the seed node."""

    host: str
    """Address of the seed node."""

    rpc_port: int
    """Consensus RPC port of the seed and its peers."""

    relay_port: int
    """Relay port of the seed."""

    p2p_port: int
    """P2P port of the seed, used for the fallback seed address."""

    log: logging.Logger = field(default=logger, repr=False)
    """Logger for discovery progress."""

    async def network_info(self) -> NetworkInfo:
        """
        Read the seed's identity and its public peers.

        An empty peer list falls back to the seed node itself.
        """
        status_url = f"http://{self.host}:{self.rpc_port}/{STATUS_ENDPOINT}"
        status = await self.seed.get_json(status_url, StatusResponse)
        node_info = status.result.node_info

        peers_url = f"http://{self.host}:{self.relay_port}/{PUB_P2P_LIST_ENDPOINT}"
        body = await self.seed.get_bytes(peers_url, {"peers_only": "true"})

        seeds = parse_seeds(body)
        for seed in seeds:
            self.log.debug("Got seed: %s", seed)

        if not seeds:
            self.log.warning("List of seeds is empty, the trusted seed will be used")
            seeds = [f"tcp://{node_info.id}@{self.host}:{self.p2p_port}"]

        return NetworkInfo(
            network_name=node_info.network,
            node_id=node_info.id,
            block_height=status.result.sync_info.latest_block_height,
            seeds=tuple(seeds),
        )

    async def state_sync_info(self, rpc_servers: list[str], height: int) -> StateSyncInfo | None:
        """
        Find RPC servers agreeing on the block at a given height.

        The first server reporting the height sets the trusted hash. Later
        servers are accepted only if they report the same hash.

        Returns:
            The agreed block and its servers, or None if fewer than two agree.
        """
        accepted: list[str] = []
        trust_hash: str | None = None

        for server in rpc_servers:
            url = f"http://{server}/{BLOCK_ENDPOINT}"
            try:
                response = await self.seed.get_json(url, BlockResponse, {"height": height})
            except KiraError as exc:
                self.log.info("Can't get block information from RPC %s: %s", server, exc)
                continue

            block_height = response.result.block.header.height
            if block_height != height:
                self.log.info("RPC %s height is %d, but expected %d", server, block_height, height)
                continue

            block_hash = response.result.block_id.hash
            if trust_hash is not None and block_hash != trust_hash:
                self.log.info("RPC %s hash is %s, but expected %s", server, block_hash, trust_hash)
                continue

            trust_hash = block_hash
            self.log.info("Adding RPC %s to RPC connection list", server)
            accepted.append(server)

        if trust_hash is None or len(accepted) < MIN_STATE_SYNC_SERVERS:
            self.log.info("State sync is not possible (not enough RPC servers)")
            return None

        return StateSyncInfo(
            rpc_servers=tuple(accepted), trust_height=height, trust_hash=trust_hash
        )

    async def build_join_plan(self) -> JoinPlan:
        """
        Discover the network and assemble a join plan.

        Raises:
            SeedQueryError: If the seed's status or peer list is unreachable.
            DecodeError: If the seed's responses or seed addresses are malformed.
        """
        info = await self.network_info()
        self.log.info(
            "Joining network %s at height %d with %d seed(s)",
            info.network_name,
            info.block_height,
            len(info.seeds),
        )

        servers = rpc_servers_from_seeds(info.seeds, self.rpc_port)
        sync = await self.state_sync_info(servers, info.block_height)
        return JoinPlan(network_info=info, state_sync=sync)
