"""Genesis document and the wire models it is assembled from."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path

from pydantic import Field

from kira_manager.types import WireModel


class GenesisChunk(WireModel):
    """One chunk of the genesis document served by `genesis_chunked`."""

    chunk: int = Field(ge=0)
    """Zero-based index of this chunk. Sent as a decimal string."""

    total: int = Field(ge=1)
    """Total number of chunks. Sent as a decimal string."""

    data: str
    """Base64-encoded chunk content."""


class ChunkedGenesisResponse(WireModel):
    """Envelope of a `genesis_chunked` response."""

    result: GenesisChunk


class ChecksumResponse(WireModel):
    """Response of the relay's `api/gensum` endpoint."""

    checksum: str
    """SHA-256 of the genesis document, hex-encoded with a 0x prefix."""


@dataclass(frozen=True, slots=True)
class GenesisDocument:
    """
    The network's initial ledger state, as raw bytes.

    Every node of a network must start from byte-identical genesis content.
    Instances returned by the acquisition protocol have been cross-checked
    against two endpoints and a published checksum.
    """

    content: bytes
    """Document bytes, exactly as served."""

    def __len__(self) -> int:
        return len(self.content)

    def sha256_hex(self) -> str:
        """Lowercase hex SHA-256 digest of the content."""
        return hashlib.sha256(self.content).hexdigest()

    def write_to(self, path: Path | str) -> Path:
        """Write the document to a file and return its path."""
        path = Path(path)
        path.write_bytes(self.content)
        return path
