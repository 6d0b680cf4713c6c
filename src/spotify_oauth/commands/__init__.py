"""Command groups for the spotify-oauth CLI.

This package provides sub-apps that are mounted by spotify_oauth.cli.
"""

from . import auth as auth  # noqa: F401
from . import config as config  # noqa: F401
from . import scopes as scopes  # noqa: F401

__all__ = [
    "auth",
    "config",
    "scopes",
]
