"""
Configuration commands (`spotify-oauth config`).

Settings come from `settings.toml` / `.secrets.toml`, a `.env` file or
`SPOTIFY_*` environment variables; this group only shows what was resolved.
"""

import json

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from ..core.config import USER_SECRETS_FILE, USER_SETTINGS_FILE, get_settings

console = Console()
app = typer.Typer(
    no_args_is_help=True,
    help="Show the resolved client configuration.",
)


@app.command("show")
def show(
    as_json: bool = typer.Option(False, "--json", help="Output settings as JSON."),
):
    """Print the effective settings. The client secret is masked."""
    try:
        settings = get_settings()
    except ValidationError:
        console.print(
            "[yellow]Set SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET, or add them to "
            f"{USER_SECRETS_FILE}.[/yellow]"
        )
        raise typer.Exit(code=1)

    data = settings.masked()
    if as_json:
        typer.echo(json.dumps(data, indent=2))
        return

    table = Table(title="Spotify OAuth settings")
    table.add_column("Key")
    table.add_column("Value")
    for key, value in data.items():
        table.add_row(key, str(value))
    console.print(table)
    console.print(f"[dim]User settings file: {USER_SETTINGS_FILE}[/dim]")
