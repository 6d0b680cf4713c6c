"""
Authorization commands (`spotify-oauth auth`).

- `url`: print the authorize URL for the configured client
- `callback`: parse a callback URL Spotify redirected to
- `login`: the whole flow; open the browser, paste the callback, get a token
"""

import json
import webbrowser
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from ..core.auth import AuthRequest
from ..core.callback import CallbackResult, Denied, Granted
from ..core.config import get_settings
from ..core.errors import SpotifyOAuthError
from ..core.exchange import exchange
from ..core.scope import Scope
from ..core.token import Token

console = Console()
app = typer.Typer(
    no_args_is_help=True,
    help="Run the Spotify Authorization Code flow.",
)

SCOPE_OPTION = typer.Option(
    [], "--scope", "-s", help="Scope to request (repeatable), e.g. -s streaming."
)
SHOW_DIALOG_OPTION = typer.Option(
    False, "--show-dialog", help="Force Spotify to show the consent dialog again."
)
CLIENT_ID_OPTION = typer.Option(None, "--client-id", help="Override SPOTIFY_CLIENT_ID.")
REDIRECT_URI_OPTION = typer.Option(
    None, "--redirect-uri", help="Override SPOTIFY_REDIRECT_URI."
)


def _fail(e: SpotifyOAuthError) -> None:
    console.print(f"[red]Error:[/red] {escape(str(e))}")
    raise typer.Exit(code=1)


def _parse_scopes(values: List[str]) -> List[Scope]:
    scopes: List[Scope] = []
    for value in values:
        # Allow both `-s a -s b` and `-s "a b"`
        try:
            scopes.extend(Scope.split(value))
        except SpotifyOAuthError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            console.print("[dim]Run `spotify-oauth scopes list` for valid identifiers.[/dim]")
            raise typer.Exit(code=2)
    return scopes


def _build_request(
    scope: List[str],
    show_dialog: bool,
    client_id: Optional[str],
    redirect_uri: Optional[str],
) -> AuthRequest:
    scopes = _parse_scopes(scope)
    try:
        settings = get_settings(client_id=client_id, redirect_uri=redirect_uri)
    except ValidationError:
        raise typer.Exit(code=1)
    try:
        return AuthRequest.from_settings(settings, scopes, show_dialog)
    except SpotifyOAuthError as e:
        _fail(e)


def _print_token(token: Token, as_json: bool) -> None:
    if as_json:
        typer.echo(token.model_dump_json(indent=2))
        return
    table = Table(title="Spotify token")
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("access_token", token.access_token)
    table.add_row("token_type", token.token_type)
    table.add_row("scope", token.scope_string)
    table.add_row("expires_in", str(token.expires_in))
    table.add_row("expires_at", str(token.expires_at))
    table.add_row("refresh_token", token.refresh_token)
    console.print(table)


@app.command("url")
def url(
    scope: List[str] = SCOPE_OPTION,
    show_dialog: bool = SHOW_DIALOG_OPTION,
    client_id: Optional[str] = CLIENT_ID_OPTION,
    redirect_uri: Optional[str] = REDIRECT_URI_OPTION,
):
    """Print the authorize URL and the state it carries."""
    auth = _build_request(scope, show_dialog, client_id, redirect_uri)
    try:
        typer.echo(auth.authorize_url())
    except SpotifyOAuthError as e:
        _fail(e)
    console.print(f"[dim]state: {auth.state}[/dim]")


@app.command("callback")
def callback(
    raw_url: str = typer.Argument(..., help="The full URL Spotify redirected to."),
    as_json: bool = typer.Option(False, "--json", help="Output the result as JSON."),
):
    """Parse a callback URL into a granted code or a denial."""
    try:
        result = CallbackResult.parse(raw_url.strip())
    except SpotifyOAuthError as e:
        _fail(e)

    if isinstance(result, Granted):
        data = {"result": "granted", "code": result.code, "state": result.state}
    else:
        data = {"result": "denied", "error": result.error, "state": result.state}

    if as_json:
        typer.echo(json.dumps(data))
    elif isinstance(result, Granted):
        console.print(f"[green]Granted[/green] code={escape(result.code)} state={escape(result.state)}")
    else:
        console.print(f"[yellow]Denied[/yellow] error={escape(result.error)} state={escape(result.state)}")


@app.command("login")
def login(
    scope: List[str] = SCOPE_OPTION,
    show_dialog: bool = SHOW_DIALOG_OPTION,
    client_id: Optional[str] = CLIENT_ID_OPTION,
    redirect_uri: Optional[str] = REDIRECT_URI_OPTION,
    no_browser: bool = typer.Option(
        False, "--no-browser", help="Only print the URL; do not open a browser."
    ),
    timeout: float = typer.Option(
        30.0, "--timeout", help="Seconds to wait for the token endpoint."
    ),
    as_json: bool = typer.Option(False, "--json", help="Output the token as JSON."),
):
    """Authorize in the browser, paste the callback URL, receive a token."""
    auth = _build_request(scope, show_dialog, client_id, redirect_uri)
    try:
        auth_url = auth.authorize_url()
    except SpotifyOAuthError as e:
        _fail(e)

    console.print("Open this URL to authorize the application:")
    console.print(auth_url, soft_wrap=True)
    if not no_browser:
        try:
            webbrowser.open(auth_url, new=2, autoraise=True)
        except webbrowser.Error:
            console.print("[yellow]Could not open a browser; open the URL manually.[/yellow]")

    raw = Prompt.ask("Input callback URL").strip()
    try:
        result = CallbackResult.parse(raw)
        auth.verify_state(result)
    except SpotifyOAuthError as e:
        _fail(e)

    if isinstance(result, Denied):
        console.print(f"[red]Authorization denied:[/red] {escape(result.error)}")
        raise typer.Exit(code=1)

    try:
        token = exchange(result, *auth.take_credentials(), timeout=timeout)
    except SpotifyOAuthError as e:
        _fail(e)

    _print_token(token, as_json)
