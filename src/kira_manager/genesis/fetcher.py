"""
Genesis Acquisition Protocol
============================

Fetches and cross-verifies the genesis document of the network being joined.

Trust Model
-----------
A joining node has no prior knowledge of the network. A malicious or stale
seed could hand it a tampered or truncated genesis, and the node would then
follow a different chain than everyone else.

The protocol demands three-way agreement instead of trusting one answer:

1. The consensus RPC serves the document in base64 chunks
2. The relay serves the same document in one response
3. The relay publishes a SHA-256 checksum of the document

The two services are implemented independently. A seed that corrupts one of
them is caught by the byte comparison; a seed serving a partial document is
caught by the checksum.

Failure Semantics
-----------------
Any transport error, decode error, byte mismatch or checksum mismatch aborts
the whole acquisition. Nothing is retried here; the caller decides whether to
run the protocol again.
"""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass, field
from typing import Final

from kira_manager import metrics
from kira_manager.seed import SeedClient
from kira_manager.types import (
    ChecksumMismatchError,
    DecodeError,
    GenesisMismatchError,
    KiraError,
)

from .document import ChecksumResponse, ChunkedGenesisResponse, GenesisDocument

logger = logging.getLogger(__name__)

CHUNKED_GENESIS_ENDPOINT: Final = "genesis_chunked"
"""Consensus RPC endpoint serving the genesis in base64 chunks."""

RELAY_GENESIS_ENDPOINT: Final = "api/genesis"
"""Relay endpoint serving the whole genesis in one response."""

RELAY_CHECKSUM_ENDPOINT: Final = "api/gensum"
"""Relay endpoint publishing the genesis checksum."""

CHECKSUM_PREFIX: Final = "0x"
"""Mandatory prefix of the published checksum."""


def strip_checksum_prefix(checksum: str, source: str) -> str:
    """
    Remove the mandatory 0x prefix from a published checksum.

    Raises:
        DecodeError: If the prefix is absent. A bare digest is rejected
            rather than tolerated.
    """
    if not checksum.startswith(CHECKSUM_PREFIX):
        raise DecodeError(source, f"checksum does not have prefix {CHECKSUM_PREFIX!r}", checksum)
    return checksum[len(CHECKSUM_PREFIX) :]


@dataclass(slots=True)
class GenesisFetcher:
    """Acquires a verified genesis document from a seed node."""

    seed: SeedClient
    """HTTP access to the seed node."""

    log: logging.Logger = field(default=logger, repr=False)
    """Logger for protocol progress."""

    async def acquire_and_verify(
        self,
        host: str,
        relay_port: int,
        rpc_port: int,
    ) -> GenesisDocument:
        """
        Run the full acquisition protocol against a seed node.

        Args:
            host: Address of the seed node.
            relay_port: Port of the seed's relay service.
            rpc_port: Port of the seed's consensus RPC.

        Returns:
            The genesis document, verified against both endpoints and the
            published checksum.

        Raises:
            GenesisMismatchError: If the two endpoints serve different bytes.
            ChecksumMismatchError: If the document does not match the checksum.
            SeedQueryError: If any request fails.
            DecodeError: If any response is malformed.
        """
        try:
            document = await self._acquire(host, relay_port, rpc_port)
        except GenesisMismatchError:
            metrics.genesis_verifications.labels(outcome="mismatch").inc()
            raise
        except ChecksumMismatchError:
            metrics.genesis_verifications.labels(outcome="checksum_mismatch").inc()
            raise
        except KiraError:
            metrics.genesis_verifications.labels(outcome="error").inc()
            raise

        metrics.genesis_verifications.labels(outcome="verified").inc()
        self.log.info("Genesis file is valid (%d bytes)", len(document))
        return document

    async def _acquire(self, host: str, relay_port: int, rpc_port: int) -> GenesisDocument:
        rpc_genesis = await self.fetch_chunked(host, rpc_port)
        relay_genesis = await self.fetch_relay(host, relay_port)

        # Both services must serve the same bytes.
        #
        # A disagreement means at least one of them is compromised or stale.
        if rpc_genesis.content != relay_genesis.content:
            self.log.error("Genesis from consensus RPC and relay are not identical")
            raise GenesisMismatchError(rpc_size=len(rpc_genesis), relay_size=len(relay_genesis))

        expected = await self.fetch_checksum(host, relay_port)
        actual = rpc_genesis.sha256_hex()
        if actual != expected:
            self.log.error(
                "SHA-256 checksum is not the same: expected %s, got %s", expected, actual
            )
            raise ChecksumMismatchError(expected=expected, actual=actual)

        return rpc_genesis

    async def fetch_chunked(self, host: str, rpc_port: int) -> GenesisDocument:
        """
        Assemble the genesis from the consensus RPC chunked endpoint.

        Chunks are requested in strictly increasing order starting at zero.
        The chunk count announced by the first response bounds the loop.

        Raises:
            DecodeError: If a response is not JSON, announces a non-integer
                total, carries invalid base64, or is out of order.
        """
        url = f"http://{host}:{rpc_port}/{CHUNKED_GENESIS_ENDPOINT}"

        parts: list[bytes] = []
        total: int | None = None
        index = 0
        while True:
            response = await self.seed.get_json(url, ChunkedGenesisResponse, {"chunk": index})
            chunk = response.result

            if chunk.chunk != index:
                raise DecodeError(url, f"expected chunk {index}, received chunk {chunk.chunk}")
            if total is None:
                total = chunk.total
                self.log.info("Genesis is served in %d chunk(s)", total)
            elif chunk.total != total:
                raise DecodeError(url, f"chunk total changed from {total} to {chunk.total}")

            try:
                parts.append(base64.b64decode(chunk.data, validate=True))
            except binascii.Error as exc:
                raise DecodeError(url, f"invalid base64 in chunk {index}: {exc}") from exc

            index += 1
            if index >= total:
                break

        return GenesisDocument(b"".join(parts))

    async def fetch_relay(self, host: str, relay_port: int) -> GenesisDocument:
        """Fetch the genesis from the relay in a single response."""
        url = f"http://{host}:{relay_port}/{RELAY_GENESIS_ENDPOINT}"
        return GenesisDocument(await self.seed.get_bytes(url))

    async def fetch_checksum(self, host: str, relay_port: int) -> str:
        """
        Fetch the published genesis checksum.

        Returns:
            The hex digest with its 0x prefix removed.
        """
        url = f"http://{host}:{relay_port}/{RELAY_CHECKSUM_ENDPOINT}"
        response = await self.seed.get_json(url, ChecksumResponse)
        return strip_checksum_prefix(response.checksum, url)
