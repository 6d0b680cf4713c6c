"""
Authorization request for the Spotify Authorization Code flow.

An `AuthRequest` bundles the application credentials, the redirect target,
the requested scopes and a random anti-CSRF `state`. It renders the URL the
user opens in a browser, checks the `state` echoed back in the callback and
finally hands its credentials over to the token exchange.

Configuration is passed in explicitly (see `AuthRequest.from_settings`); this
module never reads the environment.
"""

from __future__ import annotations

import secrets
import string
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple
from urllib.parse import urlencode

from .callback import CallbackResult
from .errors import ErrorKind, SpotifyOAuthError
from .scope import Scope
from .urls import AUTHORIZE_URL, parse_url

if TYPE_CHECKING:
    from .config import SpotifyOAuthSettings

STATE_LENGTH = 20
_ALPHANUMERIC = string.ascii_letters + string.digits


def generate_random_string(length: int) -> str:
    """Return `length` characters sampled uniformly from [A-Za-z0-9]."""
    return "".join(secrets.choice(_ALPHANUMERIC) for _ in range(length))


@dataclass
class AuthRequest:
    client_id: str
    client_secret: Optional[str] = field(repr=False)
    response_type: str
    redirect_uri: str
    scopes: List[Scope] = field(default_factory=list)
    show_dialog: bool = False
    # Never passed in; every request draws its own
    state: str = field(init=False, default_factory=lambda: generate_random_string(STATE_LENGTH))

    def __post_init__(self) -> None:
        # Fail at construction, never later when the URL is rendered
        self.redirect_uri = str(
            parse_url(
                self.redirect_uri,
                "Spotify client redirect URI failed to parse into a URL.",
            )
        )
        self.scopes = list(self.scopes)

    @classmethod
    def new(
        cls,
        client_id: str,
        client_secret: str,
        response_type: str,
        redirect_uri: str,
        scopes: Iterable[Scope] = (),
        show_dialog: bool = False,
    ) -> "AuthRequest":
        """Create a request with a freshly generated `state`.

        Two calls with identical arguments yield different states.

        Raises:
            SpotifyOAuthError: PARSING_FAILED if `redirect_uri` is not an
                absolute URL.
        """
        return cls(
            client_id=client_id,
            client_secret=client_secret,
            response_type=response_type,
            redirect_uri=redirect_uri,
            scopes=list(scopes),
            show_dialog=show_dialog,
        )

    @classmethod
    def from_settings(
        cls,
        settings: "SpotifyOAuthSettings",
        scopes: Iterable[Scope] = (),
        show_dialog: bool = False,
    ) -> "AuthRequest":
        """Create a request from a validated settings object."""
        return cls.new(
            settings.client_id,
            settings.client_secret,
            settings.response_type,
            settings.redirect_uri,
            scopes,
            show_dialog,
        )

    def scope_string(self) -> str:
        return Scope.join(self.scopes)

    def authorize_url(self) -> str:
        """Render the authorize endpoint URL.

        Query parameters are always emitted in the same order: client_id,
        response_type, redirect_uri, state, scope, show_dialog.
        """
        base = parse_url(AUTHORIZE_URL, "Spotify auth URL failed to parse.")
        params = [
            ("client_id", self.client_id),
            ("response_type", self.response_type),
            ("redirect_uri", self.redirect_uri),
            ("state", self.state),
            ("scope", self.scope_string()),
            ("show_dialog", "true" if self.show_dialog else "false"),
        ]
        return f"{base}?{urlencode(params)}"

    def verify_state(self, callback: CallbackResult) -> None:
        """Reject a callback whose `state` is not the one we sent."""
        if not secrets.compare_digest(callback.state.encode(), self.state.encode()):
            raise SpotifyOAuthError(
                ErrorKind.INVALID_CALLBACK_URL,
                "state parameter does not match the authorization request",
            )

    def take_credentials(self) -> Tuple[str, str, str]:
        """Hand (client_id, client_secret, redirect_uri) to the token exchange.

        The secret is cleared from this request; it can only be taken once.
        """
        if self.client_secret is None:
            raise SpotifyOAuthError(
                ErrorKind.PARSING_FAILED, "client secret was already consumed"
            )
        secret, self.client_secret = self.client_secret, None
        return self.client_id, secret, self.redirect_uri
