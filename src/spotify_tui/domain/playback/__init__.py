"""Playback domain - Spotify Connect snapshot polling and progress interpolation."""

from .ticker import DEFAULT_POLL_INTERVAL_MS, PlaybackSnapshot, PlaybackTicker

__all__ = ["DEFAULT_POLL_INTERVAL_MS", "PlaybackSnapshot", "PlaybackTicker"]
