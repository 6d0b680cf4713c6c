"""Scope listing (`spotify-oauth scopes`)."""

import typer
from rich.console import Console
from rich.table import Table

from ..core.scope import Scope

console = Console()
app = typer.Typer(no_args_is_help=True, help="Inspect Spotify authorization scopes.")


@app.command("list")
def list_scopes(
    plain: bool = typer.Option(False, "--plain", help="One identifier per line, no table."),
):
    """Print every scope identifier the client knows about."""
    if plain:
        for scope in Scope:
            typer.echo(scope.to_wire_string())
        return
    table = Table(title="Spotify scopes")
    table.add_column("Identifier")
    table.add_column("Name", style="dim")
    for scope in Scope:
        table.add_row(scope.to_wire_string(), scope.name)
    console.print(table)
