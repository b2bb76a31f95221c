"""Tests for the operator API server."""

from __future__ import annotations

import asyncio

import httpx

from kira_manager.api import ApiServer, ApiServerConfig
from kira_manager.types import CommandError
from kira_manager.validator import ValidatorState, ValidatorStatus


class TestApiServerConfiguration:
    """Tests for API server configuration behavior."""

    def test_default_config_uses_standard_port(self) -> None:
        """Default configuration uses port 8790 and binds to all interfaces."""
        config = ApiServerConfig()

        assert config.host == "0.0.0.0"
        assert config.port == 8790
        assert config.enabled is True

    def test_server_created_without_status_source(self) -> None:
        """Server can be created before the node is reachable."""
        server = ApiServer(config=ApiServerConfig())

        assert server.status_source is None

    def test_disabled_server_does_not_listen(self) -> None:
        """A disabled server starts without binding a socket."""

        async def run_test() -> None:
            server = ApiServer(config=ApiServerConfig(port=15789, enabled=False))
            await server.start()

            async with httpx.AsyncClient() as client:
                try:
                    await client.get("http://127.0.0.1:15789/kira/v0/health")
                except httpx.ConnectError:
                    return
            raise AssertionError("disabled server accepted a connection")

        asyncio.run(run_test())


class TestHealthEndpoint:
    """Tests for the /kira/v0/health endpoint behavior."""

    def test_returns_healthy_status_json(self) -> None:
        """Health endpoint returns JSON with healthy status."""

        async def run_test() -> None:
            server = ApiServer(config=ApiServerConfig(port=15790))
            await server.start()

            try:
                async with httpx.AsyncClient() as client:
                    response = await client.get("http://127.0.0.1:15790/kira/v0/health")

                    assert response.status_code == 200
                    assert response.json() == {"status": "healthy", "service": "kira-manager"}

            finally:
                server.stop()
                await asyncio.sleep(0.1)

        asyncio.run(run_test())


class TestValidatorStatusEndpoint:
    """Tests for the /kira/v0/validator/status endpoint behavior."""

    def test_returns_503_without_status_source(self) -> None:
        """Endpoint returns 503 Service Unavailable when no source is set."""

        async def run_test() -> None:
            server = ApiServer(config=ApiServerConfig(port=15791))
            await server.start()

            try:
                async with httpx.AsyncClient() as client:
                    response = await client.get("http://127.0.0.1:15791/kira/v0/validator/status")

                    assert response.status_code == 503

            finally:
                server.stop()
                await asyncio.sleep(0.1)

        asyncio.run(run_test())

    def test_returns_status_json(self) -> None:
        """Endpoint serializes the status read from the chain."""

        async def read_status() -> ValidatorStatus:
            return ValidatorStatus(
                address="kira1validator",
                valkey="kiravaloper1validator",
                status=ValidatorState.PAUSED,
                rank=7,
                streak=0,
                mischance=2,
            )

        async def run_test() -> None:
            server = ApiServer(config=ApiServerConfig(port=15792), status_source=read_status)
            await server.start()

            try:
                async with httpx.AsyncClient() as client:
                    response = await client.get("http://127.0.0.1:15792/kira/v0/validator/status")

                    assert response.status_code == 200
                    data = response.json()
                    assert data["status"] == "paused"
                    assert data["address"] == "kira1validator"
                    assert data["rank"] == 7

            finally:
                server.stop()
                await asyncio.sleep(0.1)

        asyncio.run(run_test())

    def test_returns_502_when_node_fails(self) -> None:
        """A manager error while reading the status maps to 502 Bad Gateway."""

        async def read_status() -> ValidatorStatus:
            raise CommandError("sekaid query customstaking validator", 1, b"connection refused")

        async def run_test() -> None:
            server = ApiServer(config=ApiServerConfig(port=15793), status_source=read_status)
            await server.start()

            try:
                async with httpx.AsyncClient() as client:
                    response = await client.get("http://127.0.0.1:15793/kira/v0/validator/status")

                    assert response.status_code == 502

            finally:
                server.stop()
                await asyncio.sleep(0.1)

        asyncio.run(run_test())


class TestMetricsEndpoint:
    """Tests for the /metrics endpoint behavior."""

    def test_serves_prometheus_text(self) -> None:
        """Metrics are served in the Prometheus text exposition format."""

        async def run_test() -> None:
            server = ApiServer(config=ApiServerConfig(port=15794))
            await server.start()

            try:
                async with httpx.AsyncClient() as client:
                    response = await client.get("http://127.0.0.1:15794/metrics")

                    assert response.status_code == 200
                    assert response.headers["content-type"].startswith("text/plain")
                    assert "kira_validator_transitions" in response.text

            finally:
                server.stop()
                await asyncio.sleep(0.1)

        asyncio.run(run_test())


class TestShutdown:
    """Tests for stopping the API server."""

    def test_stop_returns_awaitable_shutdown(self) -> None:
        """The shutdown task is held and can be awaited until the port is released."""

        async def run_test() -> None:
            server = ApiServer(config=ApiServerConfig(port=15795))
            await server.start()

            task = server.stop()
            assert task is not None
            assert server.stop() is task

            await task

            assert task.exception() is None
            assert server.stop() is None
            async with httpx.AsyncClient() as client:
                try:
                    await client.get("http://127.0.0.1:15795/kira/v0/health")
                except httpx.ConnectError:
                    return
            raise AssertionError("stopped server accepted a connection")

        asyncio.run(run_test())

    def test_stop_before_start_is_a_no_op(self) -> None:
        """Stopping a server that never started schedules nothing."""

        async def run_test() -> None:
            server = ApiServer(config=ApiServerConfig(port=15796))

            assert server.stop() is None

        asyncio.run(run_test())

    def test_run_returns_after_stop(self) -> None:
        """The blocking run loop exits once shutdown completes."""

        async def run_test() -> None:
            server = ApiServer(config=ApiServerConfig(port=15797))
            running = asyncio.create_task(server.run())
            await asyncio.sleep(0.1)

            task = server.stop()
            assert task is not None
            await task

            async with asyncio.timeout(2):
                await running

        asyncio.run(run_test())
