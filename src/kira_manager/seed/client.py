"""
HTTP client for querying a seed node.

A joining node trusts nothing it has not cross-checked, but it still needs
somewhere to start. The seed node exposes two independent HTTP services:

- The consensus daemon RPC (genesis chunks, status, blocks)
- The relay (single-shot genesis, genesis checksum, public peer list)

This client performs single GET requests against either. It never retries:
a failed query aborts whatever protocol step issued it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TypeVar

import httpx

from kira_manager.config import HTTP_TIMEOUT
from kira_manager.types import SeedQueryError, WireModel

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=WireModel)


def create_http_client(timeout: float = HTTP_TIMEOUT) -> httpx.AsyncClient:
    """Create the HTTP client used for seed queries."""
    return httpx.AsyncClient(timeout=timeout)


@dataclass(slots=True)
class SeedClient:
    """GET queries against a seed node with uniform error reporting."""

    http: httpx.AsyncClient
    """Underlying HTTP client. Owned by the caller."""

    log: logging.Logger = field(default=logger, repr=False)
    """Logger for request tracing."""

    async def get_bytes(self, url: str, params: Mapping[str, str | int] | None = None) -> bytes:
        """
        Fetch a URL and return the raw response body.

        Raises:
            SeedQueryError: On transport errors, timeouts or non-2xx statuses.
        """
        self.log.info("Querying %s", url)
        try:
            response = await self.http.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise SeedQueryError(
                str(exc.request.url),
                f"HTTP error {exc.response.status_code}: {exc.response.text[:200]}",
            ) from exc
        except httpx.RequestError as exc:
            raise SeedQueryError(str(exc.request.url), f"network error: {exc}") from exc

        body = response.content
        self.log.debug("Received %d bytes from %s", len(body), response.url)
        return body

    async def get_json(
        self,
        url: str,
        model: type[M],
        params: Mapping[str, str | int] | None = None,
    ) -> M:
        """
        Fetch a URL and decode its JSON body into a model.

        Raises:
            SeedQueryError: If the request fails.
            DecodeError: If the body does not match the model.
        """
        body = await self.get_bytes(url, params)
        return model.decode(body, url)
