"""CLI: tmail login|logout|status"""

import click
from rich.console import Console

from tmail.client import AsyncTmail

console = Console()


def _load_config() -> dict:
    from tmail.cli.main import _load_config
    return _load_config()


def _save_config(cfg: dict) -> None:
    from tmail.cli.main import _save_config
    _save_config(cfg)


def _config_file():
    from tmail.cli.main import _config_file
    return _config_file()


def _run(coro):
    from tmail.cli.main import _run
    return _run(coro)


def _new_client(token: str) -> AsyncTmail:
    from tmail.cli.main import _new_client
    return _new_client(token)


@click.command("login")
def login():
    """Authenticate with a Fastmail API token."""
    console.print("Get your API token from: Fastmail → Settings → Privacy & Security → API tokens")
    console.print("Create a new token with 'Masked Email' scope.\n")

    token = click.prompt("Enter API token", hide_input=True, default="", show_default=False).strip()
    if not token:
        raise click.ClickException("Token cannot be empty")

    async def _login():
        async with _new_client(token) as client:
            with console.status("Checking token..."):
                return await client.get_account_id()

    account_id = _run(_login())
    _save_config({"api_token": token, "account_id": account_id})
    console.print(f"[green]Logged in successfully.[/green] Config saved to {_config_file()}")


@click.command("logout")
def logout():
    """Clear saved credentials."""
    _save_config({})
    console.print("[green]Logged out.[/green]")


@click.command("status")
def status():
    """Show current auth status."""
    cfg = _load_config()
    if cfg.get("api_token"):
        console.print(f"[green]Logged in[/green] (account: {cfg.get('account_id', 'unknown')})")
    else:
        console.print("[yellow]Not logged in. Run `tmail login`.[/yellow]")
