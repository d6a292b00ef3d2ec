"""Errors raised by the Spotify Web API layer."""

from typing import Optional


class SpotifyApiError(Exception):
    """A Spotify Web API call failed (HTTP error or transport failure)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SpotifyAuthError(SpotifyApiError):
    """Authorization failed or no valid token could be obtained."""
