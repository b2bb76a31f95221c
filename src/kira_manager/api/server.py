"""
Operator API server for health checks, validator status and metrics.

Provides HTTP endpoints for:
- /kira/v0/health - Health check endpoint
- /kira/v0/validator/status - Current validator status from the chain
- /metrics - Prometheus metrics endpoint
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from aiohttp import web

from kira_manager.metrics import generate_metrics
from kira_manager.types import KiraError
from kira_manager.validator import ValidatorStatus

logger = logging.getLogger(__name__)

SERVICE_NAME = "kira-manager"
"""Fixed service identifier returned by the health endpoint."""

StatusSource = Callable[[], Awaitable[ValidatorStatus]]
"""Coroutine function reading the validator status."""


async def _handle_health(_request: web.Request) -> web.Response:
    """Handle health check endpoint."""
    return web.json_response({"status": "healthy", "service": SERVICE_NAME})


async def _handle_metrics(_request: web.Request) -> web.Response:
    """Handle Prometheus metrics endpoint."""
    return web.Response(
        body=generate_metrics(),
        content_type="text/plain; version=0.0.4",
        charset="utf-8",
    )


@dataclass(frozen=True, slots=True)
class ApiServerConfig:
    """Configuration for the API server."""

    host: str = "0.0.0.0"
    """Host address to bind to."""

    port: int = 8790
    """Port to listen on."""

    enabled: bool = True
    """Whether the API server is enabled."""


@dataclass(slots=True)
class ApiServer:
    """
    HTTP API server exposing the manager to monitoring.

    Uses aiohttp to handle HTTP protocol details.
    """

    config: ApiServerConfig
    """Server configuration."""

    status_source: StatusSource | None = None
    """Reads the validator status. The status endpoint is unavailable when unset."""

    _runner: web.AppRunner | None = field(default=None, init=False)
    """The aiohttp application runner."""

    _site: web.TCPSite | None = field(default=None, init=False)
    """The TCP site for the server."""

    _stop_task: asyncio.Task[None] | None = field(default=None, init=False, repr=False)
    """Pending shutdown, held until it completes."""

    async def start(self) -> None:
        """Start the API server in the background."""
        if not self.config.enabled:
            logger.info("API server is disabled")
            return

        app = web.Application()
        app.add_routes(
            [
                web.get("/kira/v0/health", _handle_health),
                web.get("/kira/v0/validator/status", self._handle_validator_status),
                web.get("/metrics", _handle_metrics),
            ]
        )

        self._runner = web.AppRunner(app)
        await self._runner.setup()

        self._site = web.TCPSite(self._runner, self.config.host, self.config.port)
        await self._site.start()

        logger.info("API server listening on %s:%d", self.config.host, self.config.port)

    async def run(self) -> None:
        """
        Run the API server until shutdown.

        This method blocks until stop() is called.
        """
        await self.start()

        while self._runner is not None:
            await asyncio.sleep(1)

    def stop(self) -> asyncio.Task[None] | None:
        """
        Request graceful shutdown.

        Returns:
            The shutdown task, or None if the server is not running. Repeated
            calls before shutdown completes return the same task.
        """
        if self._runner is not None and self._stop_task is None:
            self._stop_task = asyncio.create_task(self._async_stop())
        return self._stop_task

    async def _async_stop(self) -> None:
        """Gracefully stop the server."""
        if self._runner:
            await self._runner.cleanup()
            self._runner = None
            self._site = None
            logger.info("API server stopped")
        self._stop_task = None

    async def _handle_validator_status(self, _request: web.Request) -> web.Response:
        """
        Handle validator status endpoint.

        Response format:
        {
            "status": "<active|paused|inactive|waiting|jailed>",
            "rank": <rank>,
            "streak": <streak>,
            ...
        }
        """
        if self.status_source is None:
            raise web.HTTPServiceUnavailable(reason="Validator status not configured")

        try:
            status = await self.status_source()
        except KiraError as e:
            logger.error("Failed to read validator status: %s", e)
            raise web.HTTPBadGateway(reason="Validator status unavailable") from e

        return web.json_response(status.model_dump(mode="json"))
