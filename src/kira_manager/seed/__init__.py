"""HTTP access to the seed node a new node joins through."""

from .client import SeedClient, create_http_client

__all__ = [
    "SeedClient",
    "create_http_client",
]
