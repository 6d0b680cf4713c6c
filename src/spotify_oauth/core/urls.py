# src/spotify_oauth/core/urls.py

from pydantic import AnyUrl, TypeAdapter, ValidationError

from .errors import ErrorKind, SpotifyOAuthError

# Spotify Accounts service endpoints
ACCOUNTS_BASE = "https://accounts.spotify.com"
AUTHORIZE_URL = f"{ACCOUNTS_BASE}/authorize"
TOKEN_URL = f"{ACCOUNTS_BASE}/api/token"

DEFAULT_REDIRECT_URI = "http://localhost:8000/callback"

_url_adapter = TypeAdapter(AnyUrl)


def parse_url(raw: str, context: str) -> AnyUrl:
    """Validate `raw` as an absolute URL.

    Raises:
        SpotifyOAuthError: PARSING_FAILED with the validation error chained.
    """
    try:
        return _url_adapter.validate_python(raw)
    except ValidationError as e:
        raise SpotifyOAuthError(ErrorKind.PARSING_FAILED, context, e) from e
