"""
tmail CLI — `tmail` command.

Commands:
  tmail login                   Save an API token
  tmail logout                  Forget the saved token
  tmail status                  Show whether a token is saved
  tmail masked list [--all]     List masked emails
  tmail masked create           Create a masked email
  tmail masked delete <email>   Archive (disable) a masked email
  tmail masked destroy <email>  Permanently delete a masked email
"""

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

try:
    import click
    from rich.console import Console
    from rich.markup import escape
    from rich.logging import RichHandler
except ImportError:
    raise SystemExit("CLI requires extras: pip install tmail[cli]")

from tmail.client import AsyncTmail
from tmail.errors import (
    AuthenticationError,
    CapabilityMissingError,
    NotFoundError,
    TmailError,
    TransportError,
)

console = Console()
err_console = Console(stderr=True)
DEFAULT_CONFIG_FILE = Path.home() / ".config" / "tmail" / "config.json"


def _config_file() -> Path:
    override = os.environ.get("TMAIL_CONFIG")
    return Path(override) if override else DEFAULT_CONFIG_FILE


def _load_config() -> dict:
    try:
        return json.loads(_config_file().read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    path = _config_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(cfg, indent=2))


def _new_client(token: str) -> AsyncTmail:
    return AsyncTmail(token)


def _get_client() -> tuple[AsyncTmail, Optional[str]]:
    """Client for the saved (or TMAIL_TOKEN) credentials plus the saved account ID, if any."""
    cfg = _load_config()
    env_token = os.environ.get("TMAIL_TOKEN")
    token = env_token or cfg.get("api_token")
    if not token:
        err_console.print("[red]Not logged in. Run `tmail login` first.[/red]")
        raise SystemExit(1)
    account_id = None if env_token else cfg.get("account_id")
    return _new_client(token), account_id


def _describe(e: TmailError) -> str:
    if isinstance(e, AuthenticationError):
        return f"Not authenticated: the API token was rejected ({e.status_code}). Run `tmail login`."
    if isinstance(e, CapabilityMissingError):
        return "The API token lacks the 'Masked Email' scope. Create a new token with that scope."
    if isinstance(e, TransportError):
        return f"Network unreachable: {e.detail}"
    if isinstance(e, NotFoundError):
        return (f"Masked email '{e.identifier}' not found.\n\n"
                "To see your masked emails, run:\n  tmail masked list --all")
    return str(e)


def _run(coro: Any) -> Any:
    try:
        return asyncio.run(coro)
    except TmailError as e:
        err_console.print(f"[red]Error:[/red] {escape(_describe(e))}", highlight=False)
        raise SystemExit(1)


@click.group()
@click.version_option("0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Log HTTP exchanges to stderr")
def main(verbose: bool):
    """tmail — manage Fastmail masked emails."""
    if verbose:
        logger = logging.getLogger("tmail")
        logger.setLevel(logging.DEBUG)
        if not any(isinstance(h, RichHandler) for h in logger.handlers):
            logger.addHandler(RichHandler(console=err_console, show_path=False))


# Register subcommands from separate modules
from tmail.cli.auth import login, logout, status
from tmail.cli.masked import masked

main.add_command(login)
main.add_command(logout)
main.add_command(status)
main.add_command(masked)


if __name__ == "__main__":
    main()
