# src/spotify_oauth/core/errors.py

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """What went wrong, independent of the message shown to the user."""

    PARSING_FAILED = "parsing_failed"
    REQUEST_FAILED = "request_failed"
    INVALID_CALLBACK_URL = "invalid_callback_url"


class SpotifyOAuthError(Exception):
    """The single error type raised by spotify-oauth.

    Carries a `kind`, an optional human-readable `context` and the optional
    underlying `cause`. Raise it with ``raise SpotifyOAuthError(...) from exc``
    so the cause is chained rather than discarded. The CLI catches it and
    prints the message nicely.
    """

    def __init__(
        self,
        kind: ErrorKind,
        context: Optional[str] = None,
        cause: Optional[BaseException] = None,
        *,
        status: Optional[int] = None,
    ) -> None:
        self.kind = kind
        self.context = context
        self.cause = cause
        # HTTP status of a failed token exchange, when there was a response
        self.status = status
        super().__init__(str(self))

    def __str__(self) -> str:
        msg = self.kind.value.replace("_", " ")
        if self.context:
            msg = f"{msg}: {self.context}"
        if self.cause is not None:
            msg = f"{msg} ({self.cause})"
        return msg

    def __repr__(self) -> str:
        return f"SpotifyOAuthError(kind={self.kind.name}, context={self.context!r})"
