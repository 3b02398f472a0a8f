"""Unit tests for ledger_gateway/cli/wallet.py - wallet management CLI."""

from unittest.mock import patch

import httpx
import pytest
from click.testing import CliRunner

from ledger_gateway.cli.wallet import _mask, wallet_group
from ledger_gateway.credentials import ObjectStorageWallet
from ledger_gateway.exceptions import ConfigurationError
from tests.conftest import InMemoryObjectStore


@pytest.fixture
def cli_runner():
    """Create CLI runner for testing Click commands."""
    return CliRunner()


@pytest.fixture
def store():
    """Object store shared by every wallet the CLI builds."""
    return InMemoryObjectStore(objects={"https://store/wallet1/alice": "alice-certificate"})


@pytest.fixture(autouse=True)
def patched_wallet(store):
    """Build wallets on top of the in-memory store."""
    with patch(
        "ledger_gateway.cli.wallet.ObjectStorageWallet",
        side_effect=lambda container: ObjectStorageWallet(container, store=store),
    ) as wallet_class:
        yield wallet_class


class TestMask:
    """Tests for _mask helper."""

    def test_short_value_fully_masked(self):
        assert _mask("secret") == "******"

    def test_long_value_keeps_ends(self):
        assert _mask("abcdefghijkl") == "abcd...ijkl"


class TestListCommand:
    def test_lists_names(self, cli_runner, patched_wallet):
        result = cli_runner.invoke(wallet_group, ["list", "--container", "wallet1"])

        assert result.exit_code == 0
        assert result.output.strip() == "alice"
        patched_wallet.assert_called_once_with("wallet1")

    def test_container_from_environment(self, cli_runner, patched_wallet):
        result = cli_runner.invoke(wallet_group, ["list"], env={"OBJECT_STORAGE_CONTAINER": "wallet9"})

        assert result.exit_code == 0
        patched_wallet.assert_called_once_with("wallet9")

    def test_empty_wallet(self, cli_runner, store):
        store.objects.clear()

        result = cli_runner.invoke(wallet_group, ["list", "--container", "wallet1"])

        assert result.exit_code == 0
        assert "Wallet is empty" in result.output

    def test_missing_container(self, cli_runner):
        result = cli_runner.invoke(wallet_group, ["list"], env={"OBJECT_STORAGE_CONTAINER": None})

        assert result.exit_code != 0
        assert "container" in result.output.lower()


class TestGetCommand:
    def test_masked_by_default(self, cli_runner):
        result = cli_runner.invoke(wallet_group, ["get", "alice", "--container", "wallet1"])

        assert result.exit_code == 0
        assert "alice-certificate" not in result.output
        assert "alic...cate" in result.output

    def test_show_value(self, cli_runner):
        result = cli_runner.invoke(wallet_group, ["get", "alice", "--container", "wallet1", "--show-value"])

        assert result.exit_code == 0
        assert result.output.strip() == "alice-certificate"

    def test_unknown_name(self, cli_runner):
        result = cli_runner.invoke(wallet_group, ["get", "bob", "--container", "wallet1"])

        assert result.exit_code == 1
        assert "file bob does not exist" in result.output


class TestAddCommand:
    def test_add_with_value(self, cli_runner, store):
        result = cli_runner.invoke(wallet_group, ["add", "bob", "--container", "wallet1", "--value", "bob-cert"])

        assert result.exit_code == 0
        assert "Added bob" in result.output
        assert store.objects["https://store/wallet1/bob"] == "bob-cert"

    def test_add_prompts_for_value(self, cli_runner, store):
        result = cli_runner.invoke(wallet_group, ["add", "bob", "--container", "wallet1"], input="bob-cert\n")

        assert result.exit_code == 0
        assert store.objects["https://store/wallet1/bob"] == "bob-cert"

    def test_add_existing(self, cli_runner, store):
        result = cli_runner.invoke(wallet_group, ["add", "alice", "--container", "wallet1", "--value", "x"])

        assert result.exit_code == 1
        assert "file alice already exists" in result.output
        assert store.objects["https://store/wallet1/alice"] == "alice-certificate"


class TestUpdateCommand:
    def test_update(self, cli_runner, store):
        result = cli_runner.invoke(wallet_group, ["update", "alice", "--container", "wallet1", "--value", "new"])

        assert result.exit_code == 0
        assert store.objects["https://store/wallet1/alice"] == "new"

    def test_update_unknown(self, cli_runner):
        result = cli_runner.invoke(wallet_group, ["update", "bob", "--container", "wallet1", "--value", "new"])

        assert result.exit_code == 1
        assert "does not exist" in result.output


class TestRemoveCommand:
    def test_remove_confirmed(self, cli_runner, store):
        result = cli_runner.invoke(wallet_group, ["remove", "alice", "--container", "wallet1", "--yes"])

        assert result.exit_code == 0
        assert store.objects == {}

    def test_remove_aborted(self, cli_runner, store):
        result = cli_runner.invoke(wallet_group, ["remove", "alice", "--container", "wallet1"], input="n\n")

        assert result.exit_code == 1
        assert "https://store/wallet1/alice" in store.objects


class TestErrors:
    def test_configuration_error(self, cli_runner, patched_wallet):
        patched_wallet.side_effect = ConfigurationError("could not find credentials for Object Storage service")

        result = cli_runner.invoke(wallet_group, ["list", "--container", "wallet1"])

        assert result.exit_code == 1
        assert "could not find credentials" in result.output

    def test_transport_error(self, cli_runner, store):
        with patch.object(store, "list_objects", side_effect=httpx.ConnectError("refused")):
            result = cli_runner.invoke(wallet_group, ["list", "--container", "wallet1"])

        assert result.exit_code == 1
        assert "Object Storage request failed" in result.output
