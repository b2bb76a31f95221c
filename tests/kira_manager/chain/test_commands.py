"""Tests for daemon command rendering."""

from __future__ import annotations

import shlex

from kira_manager.chain.commands import (
    TxOptions,
    render_keys_show,
    render_query_permissions,
    render_query_tx,
    render_query_validator,
    render_tx,
)
from kira_manager.config import KiraConfig


class TestRenderTx:
    """Tests for transaction command rendering."""

    def test_renders_async_broadcast_with_json_output(self) -> None:
        """Every transaction is broadcast async and prints JSON."""
        options = TxOptions(
            chain_id="testnet-1",
            keyring_backend="test",
            home="/data/.sekai",
            fees="100ukex",
            gas=1_000_000,
        )

        command = render_tx(["customslashing", "pause"], "validator", options)

        assert command == (
            "sekaid tx customslashing pause --from=validator --chain-id=testnet-1 "
            "--keyring-backend=test --home=/data/.sekai --fees=100ukex --gas=1000000 "
            "--broadcast-mode=async --yes --output=json --log_format=json"
        )

    def test_omits_gas_when_unset(self) -> None:
        """The daemon's default gas applies when no limit is given."""
        options = TxOptions(chain_id="c", keyring_backend="test", home="/h", fees="1ukex")

        assert "--gas" not in render_tx(["customgov", "x"], "validator", options)

    def test_quotes_interpolated_values(self) -> None:
        """Values with shell metacharacters survive `bash -c` intact."""
        options = TxOptions(
            chain_id="net; rm -rf /",
            keyring_backend="test",
            home="/data/my home",
            fees="100ukex",
        )

        command = render_tx(["customslashing", "pause"], "validator", options)
        tokens = shlex.split(command)

        assert "--chain-id=net; rm -rf /" in tokens
        assert "--home=/data/my home" in tokens

    def test_options_from_config(self) -> None:
        """Options are derived from the configuration with a fee override."""
        config = KiraConfig(network_name="localnet-1")

        options = TxOptions.from_config(config, fees="1000ukex")

        assert options.chain_id == "localnet-1"
        assert options.keyring_backend == "test"
        assert options.home == "/data/.sekai"
        assert options.fees == "1000ukex"
        assert options.gas == config.gas
        assert TxOptions.from_config(config).fees == "100ukex"


class TestRenderQueries:
    """Tests for query command rendering."""

    def test_query_tx(self) -> None:
        """Transactions are looked up by hash with JSON output."""
        assert render_query_tx("ABC") == "sekaid query tx ABC --output=json"

    def test_keys_show(self) -> None:
        """Keyring lookups pass backend and home."""
        assert render_keys_show("validator", "test", "/data/.sekai") == (
            "sekaid keys show validator --keyring-backend=test --home=/data/.sekai"
        )

    def test_query_validator(self) -> None:
        """Validators are looked up by address, not by keyring name."""
        assert render_query_validator("kira1abc") == (
            "sekaid query customstaking validator --addr=kira1abc --output=json"
        )

    def test_query_permissions(self) -> None:
        """Permissions are looked up by address."""
        assert render_query_permissions("kira1abc") == (
            "sekaid query customgov permissions kira1abc --output=json"
        )
