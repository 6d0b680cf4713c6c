"""
spotify-oauth CLI - Main entry point using Typer.

This module configures the main Typer application, registers all command groups,
and defines global options like --version and --verbose.
"""

import typer
from rich.console import Console
from rich.traceback import install

from .commands import auth, config, scopes
from .core.logging_util import setup_logging

# Install a rich traceback handler for readable exceptions
install(show_locals=False)

console = Console()

app = typer.Typer(
    name="spotify-oauth",
    help="Spotify Authorization Code flow: authorize URL, callback parsing, token exchange.",
    epilog="Use `spotify-oauth [COMMAND] --help` for more info on a specific command.",
    no_args_is_help=True,
    pretty_exceptions_enable=False,  # Rich's handler is installed above
)

app.add_typer(
    auth.app, name="auth", help="🔑 Build the authorize URL, parse callbacks, get tokens."
)
app.add_typer(config.app, name="config", help="🔐 Show the resolved client settings.")
app.add_typer(scopes.app, name="scopes", help="📜 List Spotify authorization scopes.")


def _version_callback(value: bool) -> None:
    # Eager, so it runs before Click insists on a subcommand
    if value:
        from . import __version__

        console.print(f"spotify-oauth v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show the application version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(None, "--verbose", help="Enable DEBUG-level logging."),
    quiet: bool = typer.Option(
        None, "--quiet", help="Reduce logging to warnings and errors."
    ),
    json_logs: bool = typer.Option(
        False, "--json-logs", help="Emit logs as JSON lines."
    ),
):
    """
    spotify-oauth - authorize against the Spotify Accounts service.
    """
    # Configure logging once, early
    setup_logging(json_logs=json_logs, verbose=bool(verbose), quiet=bool(quiet))
    if verbose:
        console.print("[yellow]Verbose logging enabled.[/yellow]")


if __name__ == "__main__":
    app()
