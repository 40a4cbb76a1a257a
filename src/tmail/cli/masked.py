"""CLI: tmail masked list|create|delete|destroy"""

import json
import sys
from typing import Optional

import click
from rich.console import Console

console = Console()
err_console = Console(stderr=True)


def _get_client():
    from tmail.cli.main import _get_client
    return _get_client()


def _run(coro):
    from tmail.cli.main import _run
    return _run(coro)


async def _account_id(client, saved: Optional[str]) -> str:
    return saved or await client.get_account_id()


def _is_interactive() -> bool:
    return sys.stdin.isatty()


@click.group()
def masked():
    """Manage masked emails."""


@masked.command("list")
@click.option("-a", "--all", "show_all", is_flag=True, help="Show all emails including disabled/deleted")
@click.option("--json-output", "--json", is_flag=True)
def masked_list(show_all: bool, json_output: bool):
    """List masked emails (enabled only unless --all)."""

    client, saved = _get_client()

    async def _list():
        async with client:
            account_id = await _account_id(client, saved)
            if show_all:
                return await client.masked_emails.list(account_id)
            return await client.masked_emails.list_active(account_id)

    emails = _run(_list())
    if json_output:
        click.echo(json.dumps([m.to_wire() for m in emails], indent=2))
        return
    if not emails:
        click.echo("No masked emails found.")
        return
    for m in emails:
        columns = [m.email, m.created_date]
        if show_all:
            columns.append(m.state or "unknown")
        columns += [m.for_domain or "", m.description or ""]
        click.echo("\t".join(columns))


@masked.command("create")
@click.option("-d", "--description", default=None, help="Description for the masked email")
@click.option("-w", "--website", default=None, help="Website/domain this email is for")
def masked_create(description: Optional[str], website: Optional[str]):
    """Create a new masked email and print its address."""
    if description is None and _is_interactive():
        description = click.prompt("Description (what is this masked email for?)",
                                   default="", show_default=False) or None
        website = click.prompt("Website (optional, e.g. example.com)",
                               default="", show_default=False) or None

    client, saved = _get_client()

    async def _create():
        async with client:
            account_id = await _account_id(client, saved)
            return await client.create_masked_email(account_id, description, website)

    created = _run(_create())
    click.echo(created.email)


@masked.command("delete")
@click.argument("email", required=False)
def masked_delete(email: Optional[str]):
    """Delete (archive) a masked email."""
    if not email:
        err_console.print(
            "Error: No email address specified.\n\n"
            "Usage: tmail masked delete <EMAIL>\n\n"
            "To see your masked emails, run:\n  tmail masked list\n\n"
            "To include disabled/deleted emails:\n  tmail masked list --all",
            highlight=False,
        )
        raise SystemExit(1)

    client, saved = _get_client()

    async def _archive():
        async with client:
            account_id = await _account_id(client, saved)
            return await client.masked_emails.archive_address(account_id, email)

    _run(_archive())
    click.echo(f"Archived: {email}")


@masked.command("destroy")
@click.argument("email")
@click.option("-y", "--yes", is_flag=True, help="Do not ask for confirmation")
def masked_destroy(email: str, yes: bool):
    """Permanently delete a masked email. This cannot be undone."""
    if not yes:
        click.confirm(f"Permanently delete {email}?", abort=True)

    client, saved = _get_client()

    async def _destroy():
        async with client:
            account_id = await _account_id(client, saved)
            return await client.masked_emails.destroy_address(account_id, email)

    _run(_destroy())
    click.echo(f"Deleted: {email}")
