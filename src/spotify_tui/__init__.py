"""Terminal client for Spotify."""

__version__ = "0.1.0"
