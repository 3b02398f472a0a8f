"""CLI commands for the Object Storage wallet.

This module provides the ``ledger-gateway wallet`` command group for
inspecting and editing the identities the gateway stores in its Object
Storage container. Object Storage credentials are taken from the
``VCAP_SERVICES`` service binding, exactly as the server does.

Commands:
    - list: Show the names of all entries
    - get: Show one entry (masked by default)
    - add: Store a new entry
    - update: Replace an existing entry
    - remove: Delete an entry

Example::

    $ export OBJECT_STORAGE_CONTAINER=wallet1
    $ ledger-gateway wallet list
    $ ledger-gateway wallet add admin
    $ ledger-gateway wallet get admin --show-value
"""

import asyncio
import sys
from collections.abc import Awaitable, Callable
from typing import TypeVar

import click
import httpx

from ledger_gateway.credentials import CredentialError, ObjectStorageWallet
from ledger_gateway.exceptions import LedgerGatewayError
from ledger_gateway.utils.connection_pool import close_all_pools

T = TypeVar("T")

container_option = click.option(
    "--container",
    envvar="OBJECT_STORAGE_CONTAINER",
    required=True,
    help="Object Storage container (defaults to $OBJECT_STORAGE_CONTAINER)",
)


def _run(container: str, action: Callable[[ObjectStorageWallet], Awaitable[T]]) -> T:
    """Run ``action`` against the wallet, exiting with status 1 on wallet errors."""

    async def runner() -> T:
        try:
            wallet = ObjectStorageWallet(container)
            return await action(wallet)
        finally:
            await close_all_pools()

    try:
        return asyncio.run(runner())
    except CredentialError as e:
        click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
        if e.suggestion:
            click.echo(click.style(f"Suggestion: {e.suggestion}", fg="yellow"), err=True)
        sys.exit(1)
    except LedgerGatewayError as e:
        click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
        sys.exit(1)
    except httpx.HTTPError as e:
        click.echo(click.style(f"Error: Object Storage request failed: {e}", fg="red"), err=True)
        sys.exit(1)


def _mask(value: str) -> str:
    if len(value) <= 8:
        return "*" * len(value)
    return f"{value[:4]}...{value[-4:]}"


@click.group(name="wallet")
def wallet_group():
    """Manage identities stored in the Object Storage wallet."""
    pass


@wallet_group.command(name="list")
@container_option
def list_entries(container: str):
    """List wallet entry names."""
    names = _run(container, lambda wallet: wallet.list())
    if not names:
        click.echo("Wallet is empty")
        return
    for name in names:
        click.echo(name)


@wallet_group.command(name="get")
@click.argument("name")
@container_option
@click.option("--show-value", is_flag=True, help="Show full value (default: masked)")
def get_entry(name: str, container: str, show_value: bool):
    """Show a wallet entry."""
    value = _run(container, lambda wallet: wallet.get(name))
    click.echo(value if show_value else _mask(value))


@wallet_group.command(name="add")
@click.argument("name")
@container_option
@click.option("--value", prompt=True, hide_input=True, help="Entry value (will prompt if not provided)")
def add_entry(name: str, container: str, value: str):
    """Add a new wallet entry."""
    _run(container, lambda wallet: wallet.add(name, value))
    click.echo(click.style(f"Added {name}", fg="green"))


@wallet_group.command(name="update")
@click.argument("name")
@container_option
@click.option("--value", prompt=True, hide_input=True, help="Entry value (will prompt if not provided)")
def update_entry(name: str, container: str, value: str):
    """Replace an existing wallet entry."""
    _run(container, lambda wallet: wallet.update(name, value))
    click.echo(click.style(f"Updated {name}", fg="green"))


@wallet_group.command(name="remove")
@click.argument("name")
@container_option
@click.confirmation_option(prompt="Are you sure you want to remove this entry?")
def remove_entry(name: str, container: str):
    """Remove a wallet entry."""
    _run(container, lambda wallet: wallet.remove(name))
    click.echo(click.style(f"Removed {name}", fg="green"))
