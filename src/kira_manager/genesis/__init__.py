"""
Genesis acquisition for nodes joining an existing network.

The genesis document is fetched twice from independent services of a seed
node, compared byte for byte, and checked against a published checksum
before it is handed to node initialization.
"""

from .document import GenesisDocument
from .fetcher import GenesisFetcher, strip_checksum_prefix

__all__ = [
    "GenesisDocument",
    "GenesisFetcher",
    "strip_checksum_prefix",
]
