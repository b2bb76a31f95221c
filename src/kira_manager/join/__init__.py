"""Discovery of an existing network through a trusted seed node."""

from .discovery import (
    ConfigValue,
    JoinPlan,
    NetworkDiscovery,
    NetworkInfo,
    StateSyncInfo,
    parse_seeds,
    rpc_servers_from_seeds,
)

__all__ = [
    "ConfigValue",
    "JoinPlan",
    "NetworkDiscovery",
    "NetworkInfo",
    "StateSyncInfo",
    "parse_seeds",
    "rpc_servers_from_seeds",
]
