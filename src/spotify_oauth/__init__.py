"""spotify-oauth - the Spotify Authorization Code flow.

Typical use::

    settings = get_settings()
    auth = AuthRequest.from_settings(settings, [Scope.STREAMING])
    webbrowser.open(auth.authorize_url())
    callback = CallbackResult.parse(pasted_url)
    auth.verify_state(callback)
    token = exchange(callback, *auth.take_credentials())
"""

from .core.auth import AuthRequest, generate_random_string
from .core.callback import CallbackResult, Denied, Granted
from .core.config import SpotifyOAuthSettings, get_settings, reset_settings
from .core.errors import ErrorKind, SpotifyOAuthError
from .core.exchange import exchange, exchange_async
from .core.scope import Scope
from .core.token import Token, datetime_to_timestamp

__version__ = "0.3.0"

__all__ = [
    "AuthRequest",
    "CallbackResult",
    "Denied",
    "ErrorKind",
    "Granted",
    "Scope",
    "SpotifyOAuthError",
    "SpotifyOAuthSettings",
    "Token",
    "datetime_to_timestamp",
    "exchange",
    "exchange_async",
    "generate_random_string",
    "get_settings",
    "reset_settings",
]
