"""
Configuration management using Dynaconf and Pydantic.

Dynaconf gathers the application credentials from settings files
(`settings.toml`, `.secrets.toml`), a local `.env` file and `SPOTIFY_`-prefixed
environment variables. Pydantic then validates them into a typed
`SpotifyOAuthSettings` object.

Only the CLI calls `get_settings`; the core takes the resulting object as an
explicit argument (see `AuthRequest.from_settings`).
"""

from pathlib import Path
from typing import Any, Dict, Optional

from dynaconf import Dynaconf
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from rich.console import Console
from rich.markup import escape

from .urls import DEFAULT_REDIRECT_URI

console = Console()

# Determine a user-scoped config directory (XDG-style)
USER_CONFIG_DIR = Path.home() / ".config" / "spotify-oauth"
USER_SETTINGS_FILE = USER_CONFIG_DIR / "settings.toml"
USER_SECRETS_FILE = USER_CONFIG_DIR / ".secrets.toml"

ENVVAR_PREFIX = "SPOTIFY"


class SpotifyOAuthSettings(BaseModel):
    """Validated application credentials and redirect target."""

    client_id: str = Field(min_length=1)
    client_secret: str = Field(min_length=1, repr=False)
    redirect_uri: str = DEFAULT_REDIRECT_URI
    response_type: str = "code"

    # Dynaconf parses env values as TOML, so an all-digit id arrives as int
    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    def masked(self) -> Dict[str, Any]:
        """Settings as a dict, safe to print."""
        data = self.model_dump()
        data["client_secret"] = "********"
        return data


def _build_loader() -> Dynaconf:
    # Later files override earlier ones; environment variables override all.
    return Dynaconf(
        envvar_prefix=ENVVAR_PREFIX,
        settings_files=[
            str(USER_SETTINGS_FILE),
            str(USER_SECRETS_FILE),
            "settings.toml",
            ".secrets.toml",
        ],
        load_dotenv=True,
    )


_settings_instance: Optional[SpotifyOAuthSettings] = None


def get_settings(**overrides: Any) -> SpotifyOAuthSettings:
    """Get the application settings as a singleton Pydantic model.

    Keyword overrides (e.g. from CLI options) take precedence over every other
    layer; passing any rebuilds the singleton. Values that are None are
    ignored.

    Raises:
        ValidationError: a required value (client id or secret) is missing.
    """
    global _settings_instance
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if _settings_instance is None or overrides:
        config_dict: Dict[str, Any] = {}
        for key, value in (_build_loader().as_dict() or {}).items():
            config_dict[key.lower()] = value

        config_dict.update(overrides)
        try:
            _settings_instance = SpotifyOAuthSettings(**config_dict)
        except ValidationError as e:
            console.print(f"[red]Configuration error:[/red]\n{escape(str(e))}")
            raise
    return _settings_instance


def reset_settings() -> None:
    """Reset in-memory settings (do not touch on-disk settings)."""
    global _settings_instance
    _settings_instance = None
