"""
Parsing of the redirect Spotify sends the user back to after consent.

The callback URL carries either ``code`` (access granted) or ``error``
(access denied), always together with the ``state`` we generated:

    <redirect_uri>?code=<code>&state=<state>
    <redirect_uri>?error=<reason>&state=<state>

When a key appears more than once, the first occurrence in the query string
wins. Later duplicates are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict
from urllib.parse import parse_qsl

from .errors import ErrorKind, SpotifyOAuthError
from .urls import parse_url


def _first_values(query: str) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for key, value in parse_qsl(query, keep_blank_values=True):
        values.setdefault(key, value)
    return values


class CallbackResult:
    """Outcome of the authorization step: `Granted` or `Denied`."""

    state: str

    @property
    def is_granted(self) -> bool:
        return isinstance(self, Granted)

    @classmethod
    def parse(cls, raw_url: str) -> "CallbackResult":
        """Turn a raw callback URL into `Granted` or `Denied`.

        Raises:
            SpotifyOAuthError: PARSING_FAILED for a malformed URL,
                INVALID_CALLBACK_URL when ``state`` or the response parameter
                (``code``/``error``) is missing.
        """
        url = parse_url(raw_url, "Spotify callback URL failed to parse.")
        params = _first_values(url.query or "")

        has_state = "state" in params
        has_response = "code" in params or "error" in params

        if not has_state and not has_response:
            raise SpotifyOAuthError(
                ErrorKind.INVALID_CALLBACK_URL,
                "Does not contain any state or response type query parameters.",
            )
        if not has_state:
            raise SpotifyOAuthError(
                ErrorKind.INVALID_CALLBACK_URL,
                "Does not contain any state type query parameters.",
            )
        if not has_response:
            raise SpotifyOAuthError(
                ErrorKind.INVALID_CALLBACK_URL,
                "Does not contain any response type query parameters.",
            )

        if "code" in params:
            return Granted(code=params["code"], state=params["state"])
        return Denied(error=params["error"], state=params["state"])


@dataclass(frozen=True)
class Granted(CallbackResult):
    """The user approved; `code` can be exchanged for a token."""

    code: str
    state: str


@dataclass(frozen=True)
class Denied(CallbackResult):
    """The user (or Spotify) refused; `error` is the reason, e.g. access_denied."""

    error: str
    state: str
