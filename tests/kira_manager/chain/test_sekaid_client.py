"""Tests for the consensus daemon client."""

from __future__ import annotations

import pytest

from kira_manager.chain import SekaidClient
from kira_manager.chain.models import TransactionReceipt
from kira_manager.metrics import transactions_submitted
from kira_manager.types import CommandError, DecodeError
from tests.kira_manager.helpers import (
    MockExecutor,
    keys_output,
    permissions_output,
    receipt_output,
    run_async,
    status_output,
    tx_result_output,
)


class TestRun:
    """Tests for raw command execution."""

    def test_runs_through_bash_in_sekaid_container(
        self, client: SekaidClient, executor: MockExecutor
    ) -> None:
        """Commands run as `bash -c` in the configured container."""
        executor.respond("sekaid status", status_output(7))

        run_async(client.run("sekaid status"))

        assert executor.calls == [("sekaid", ["bash", "-c", "sekaid status"])]

    def test_command_errors_propagate(self, client: SekaidClient, executor: MockExecutor) -> None:
        """Executor failures reach the caller unchanged."""
        executor.respond("sekaid status", CommandError("sekaid status", 1, b"boom"))

        with pytest.raises(CommandError):
            run_async(client.block_height())


class TestSubmit:
    """Tests for transaction submission."""

    def test_decodes_receipt(self, client: SekaidClient, executor: MockExecutor) -> None:
        """The receipt carries the transaction hash."""
        executor.respond("sekaid tx", receipt_output("HASH1"))

        receipt = run_async(client.submit("sekaid tx customslashing pause"))

        assert receipt == TransactionReceipt(txhash="HASH1", code=0)

    def test_counts_submissions(self, client: SekaidClient, executor: MockExecutor) -> None:
        """Each successful broadcast increments the submission counter."""
        executor.respond("sekaid tx", receipt_output())
        initial = transactions_submitted._value.get()

        run_async(client.submit("sekaid tx customslashing pause"))

        assert transactions_submitted._value.get() == initial + 1.0

    def test_non_json_output_is_decode_error_with_raw(
        self, client: SekaidClient, executor: MockExecutor
    ) -> None:
        """Human-readable failures are reported with the raw output attached."""
        raw = b"Error: key not found: validator"
        executor.respond("sekaid tx", raw)

        with pytest.raises(DecodeError) as exc_info:
            run_async(client.submit("sekaid tx customslashing pause"))

        assert exc_info.value.raw == raw
        assert exc_info.value.source == "sekaid tx customslashing pause"

    def test_missing_hash_is_decode_error(
        self, client: SekaidClient, executor: MockExecutor
    ) -> None:
        """A receipt without a hash is never defaulted to an empty hash."""
        executor.respond("sekaid tx", b'{"code": 0}')

        with pytest.raises(DecodeError):
            run_async(client.submit("sekaid tx customslashing pause"))


class TestQueries:
    """Tests for daemon queries."""

    def test_query_transaction(self, client: SekaidClient, executor: MockExecutor) -> None:
        """A transaction is decoded with its authoritative code and log."""
        executor.respond("sekaid query tx", tx_result_output("H", code=5, raw_log="out of gas"))

        result = run_async(client.query_transaction("H"))

        assert result.txhash == "H"
        assert result.code == 5
        assert result.raw_log == "out of gas"
        assert result.height == 11
        assert result.gas_used == 52000
        assert not result.succeeded
        assert executor.commands == ["sekaid query tx H --output=json"]

    def test_block_height_from_string_encoded_int(
        self, client: SekaidClient, executor: MockExecutor
    ) -> None:
        """The status output encodes the height as a string."""
        executor.respond("sekaid status", b'{"SyncInfo": {"latest_block_height": "1234"}}')

        assert run_async(client.block_height()) == 1234

    def test_block_height_missing_is_decode_error(
        self, client: SekaidClient, executor: MockExecutor
    ) -> None:
        """A status without sync info is rejected rather than read as height zero."""
        executor.respond("sekaid status", b'{"NodeInfo": {}}')

        with pytest.raises(DecodeError):
            run_async(client.block_height())

    def test_permissions(self, client: SekaidClient, executor: MockExecutor) -> None:
        """Whitelisted and blacklisted permissions are decoded."""
        executor.respond("customgov permissions", permissions_output([1, 4], [7]))

        permissions = run_async(client.permissions("kira1abc"))

        assert permissions.whitelist == [1, 4]
        assert permissions.blacklist == [7]


class TestAddressByName:
    """Tests for keyring name resolution."""

    def test_resolves_list_output(self, client: SekaidClient, executor: MockExecutor) -> None:
        """The first record of a YAML list is used."""
        executor.respond("sekaid keys show", keys_output("kira1xyz"))

        assert run_async(client.address_by_name("validator")) == "kira1xyz"
        assert executor.commands == [
            "sekaid keys show validator --keyring-backend=test --home=/data/.sekai"
        ]

    def test_resolves_mapping_output(self, client: SekaidClient, executor: MockExecutor) -> None:
        """A single YAML mapping is accepted as well."""
        executor.respond("sekaid keys show", b"name: validator\naddress: kira1map\n")

        assert run_async(client.address_by_name("validator")) == "kira1map"

    @pytest.mark.parametrize(
        "output",
        [
            b"[]\n",
            b"Error: validator is not a valid name or address\n",
            b"- name: validator\n",
            b"key: [unclosed\n",
        ],
    )
    def test_bad_output_is_decode_error(
        self, client: SekaidClient, executor: MockExecutor, output: bytes
    ) -> None:
        """Empty, textual, incomplete or invalid YAML output is a decode failure."""
        executor.respond("sekaid keys show", output)

        with pytest.raises(DecodeError):
            run_async(client.address_by_name("validator"))
