"""Spotify Web API provider: OAuth authorization and REST client."""

from .api import SpotifyClient
from .auth import get_valid_token
from .exceptions import SpotifyApiError, SpotifyAuthError

__all__ = [
    "SpotifyClient",
    "SpotifyApiError",
    "SpotifyAuthError",
    "get_valid_token",
]
