"""
The credential payload returned by the Spotify token endpoint.

Validation is done by Pydantic. The wire field ``scope`` is a space-separated
string and is exposed as `Token.scopes`, a list of `Scope`. An absent or
non-string ``scope`` yields an empty list; an unknown scope identifier in the
string fails the whole token, the same way `Scope.parse` does.

``expires_at`` is never sent by Spotify. It is stamped locally as
now + ``expires_in`` right after a successful parse.
"""

from __future__ import annotations

import time
from typing import Any, List, Optional

from pydantic import BaseModel, Field, ValidationError, model_validator

from .errors import ErrorKind, SpotifyOAuthError
from .scope import Scope


def datetime_to_timestamp(elapsed: int) -> int:
    """Return the unix timestamp `elapsed` seconds from now."""
    return int(time.time()) + int(elapsed)


class Token(BaseModel):
    access_token: str
    token_type: str
    scopes: List[Scope] = Field(default_factory=list)
    # Whole seconds only; true or "3600" on the wire are rejected
    expires_in: int = Field(ge=0, strict=True)
    expires_at: Optional[int] = None
    refresh_token: str

    @model_validator(mode="before")
    @classmethod
    def _split_wire_scope(cls, data: Any) -> Any:
        """Map the wire field ``scope`` onto `scopes`.

        ``scopes`` itself (by name, or from `model_dump_json`) is a list of
        identifiers validated as `Scope` members, so unknown ones still fail.
        """
        if not isinstance(data, dict) or "scope" not in data:
            return data
        data = dict(data)
        raw = data.pop("scope")
        if "scopes" in data:
            return data
        if isinstance(raw, str):
            try:
                data["scopes"] = Scope.split(raw)
            except SpotifyOAuthError as e:
                # ValueError so Pydantic reports it as a ValidationError
                raise ValueError(e.context) from e
        else:
            data["scopes"] = []
        return data

    @classmethod
    def from_json(cls, body: str | bytes) -> "Token":
        """Deserialize a token response and stamp `expires_at`.

        Raises:
            SpotifyOAuthError: PARSING_FAILED when the body is not valid JSON
                or does not have the expected shape.
        """
        try:
            token = cls.model_validate_json(body)
        except ValidationError as e:
            raise SpotifyOAuthError(
                ErrorKind.PARSING_FAILED,
                "Spotify auth JSON response failed to be parsed.",
                e,
            ) from e
        token.stamp_expiry()
        return token

    def stamp_expiry(self) -> None:
        self.expires_at = datetime_to_timestamp(self.expires_in)

    @property
    def scope_string(self) -> str:
        return Scope.join(self.scopes)
