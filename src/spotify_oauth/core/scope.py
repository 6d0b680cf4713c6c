"""
Spotify Web API authorization scopes.

The full list lives at
https://developer.spotify.com/documentation/web-api/concepts/scopes
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List

from .errors import ErrorKind, SpotifyOAuthError


class Scope(str, Enum):
    """A permission requested from the user. The value is the wire string."""

    USER_READ_RECENTLY_PLAYED = "user-read-recently-played"
    USER_TOP_READ = "user-top-read"

    USER_LIBRARY_MODIFY = "user-library-modify"
    USER_LIBRARY_READ = "user-library-read"

    PLAYLIST_READ_PRIVATE = "playlist-read-private"
    PLAYLIST_MODIFY_PUBLIC = "playlist-modify-public"
    PLAYLIST_MODIFY_PRIVATE = "playlist-modify-private"
    PLAYLIST_READ_COLLABORATIVE = "playlist-read-collaborative"

    USER_READ_EMAIL = "user-read-email"
    USER_READ_BIRTHDATE = "user-read-birthdate"
    USER_READ_PRIVATE = "user-read-private"

    USER_READ_PLAYBACK_STATE = "user-read-playback-state"
    USER_MODIFY_PLAYBACK_STATE = "user-modify-playback-state"
    USER_READ_CURRENTLY_PLAYING = "user-read-currently-playing"

    APP_REMOTE_CONTROL = "app-remote-control"
    STREAMING = "streaming"

    USER_FOLLOW_READ = "user-follow-read"
    USER_FOLLOW_MODIFY = "user-follow-modify"

    def __str__(self) -> str:
        return self.value

    def to_wire_string(self) -> str:
        return self.value

    @classmethod
    def parse(cls, s: str) -> "Scope":
        """Return the scope whose wire string is exactly `s`.

        Raises:
            SpotifyOAuthError: PARSING_FAILED for unknown identifiers.
        """
        try:
            return cls(s)
        except ValueError as e:
            raise SpotifyOAuthError(
                ErrorKind.PARSING_FAILED, f"unknown scope {s!r}", e
            ) from e

    @classmethod
    def split(cls, s: str) -> List["Scope"]:
        """Parse a whitespace-separated scope string, keeping its order."""
        return [cls.parse(part) for part in s.split()]

    @staticmethod
    def join(scopes: Iterable["Scope"]) -> str:
        return " ".join(scope.to_wire_string() for scope in scopes)
