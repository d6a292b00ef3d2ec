"""
Playback snapshot and progress ticker.

Spotify playback state is polled every few seconds to respect API rate
limits. Between polls the progress bar is animated locally by adding the
time elapsed since the last poll to the last known position.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from loguru import logger

from ..models import RepeatState

DEFAULT_POLL_INTERVAL_MS = 5000


@dataclass
class PlaybackSnapshot:
    """Authoritative playback state as of the last poll.

    Attributes:
        is_playing: Whether audio is currently playing
        device: Device payload (id, name, volume_percent, ...)
        item: Currently playing track or episode payload
        progress_ms: Position within the item at poll time
        shuffle_state: Shuffle flag
        repeat_state: Repeat mode
        context: Playing context payload (album, playlist, artist, show)
        polled_at: Monotonic time in seconds the snapshot was taken
    """

    is_playing: bool = False
    device: dict[str, Any] = field(default_factory=dict)
    item: Optional[dict[str, Any]] = None
    progress_ms: Optional[int] = None
    shuffle_state: bool = False
    repeat_state: RepeatState = RepeatState.OFF
    context: Optional[dict[str, Any]] = None
    polled_at: float = 0.0

    @classmethod
    def from_api(cls, payload: dict[str, Any], polled_at: float) -> "PlaybackSnapshot":
        """Build a snapshot from a ``GET /me/player`` response."""
        try:
            repeat_state = RepeatState(payload.get("repeat_state") or "off")
        except ValueError:
            logger.warning(f"Unknown repeat state: {payload.get('repeat_state')}")
            repeat_state = RepeatState.OFF

        return cls(
            is_playing=bool(payload.get("is_playing")),
            device=payload.get("device") or {},
            item=payload.get("item"),
            progress_ms=payload.get("progress_ms"),
            shuffle_state=bool(payload.get("shuffle_state")),
            repeat_state=repeat_state,
            context=payload.get("context"),
            polled_at=polled_at,
        )

    @property
    def duration_ms(self) -> Optional[int]:
        if not self.item:
            return None
        return self.item.get("duration_ms")

    @property
    def volume_percent(self) -> Optional[int]:
        return self.device.get("volume_percent")


class PlaybackTicker:
    """Decides when to poll and interpolates progress between polls.

    The clock is injectable so progress math can be tested without
    sleeping; it must return seconds from a monotonic source.
    """

    def __init__(
        self,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.poll_interval_ms = poll_interval_ms
        self.clock = clock
        # None forces a poll on the next tick
        self.last_poll_at: Optional[float] = None

    def elapsed_ms(self, since: Optional[float] = None) -> int:
        """Milliseconds since ``since`` (default: the last poll)."""
        start = self.last_poll_at if since is None else since
        if start is None:
            return 0
        return max(0, int((self.clock() - start) * 1000))

    def due(self) -> bool:
        """True once the poll interval has passed since the last poll."""
        if self.last_poll_at is None:
            return True
        return self.elapsed_ms() >= self.poll_interval_ms

    def mark_polled(self, at: Optional[float] = None) -> float:
        """Record a poll and return the time it was recorded at."""
        self.last_poll_at = self.clock() if at is None else at
        return self.last_poll_at

    def request_poll(self) -> None:
        """Make the next tick poll regardless of the interval."""
        self.last_poll_at = None

    def interpolate(self, snapshot: Optional[PlaybackSnapshot]) -> Optional[int]:
        """Estimate the current position of the playing item.

        Adds the time elapsed since the snapshot was taken while playing,
        never exceeding the item's duration.

        Args:
            snapshot: Last polled playback state

        Returns:
            Position in milliseconds, or None if nothing is loaded
        """
        if snapshot is None or snapshot.progress_ms is None:
            return None

        progress = snapshot.progress_ms
        if snapshot.is_playing:
            progress += self.elapsed_ms(since=snapshot.polled_at)

        duration = snapshot.duration_ms
        if duration is not None:
            progress = min(progress, duration)
        return progress
