"""Shared fixtures for spotify-tui tests."""

import queue
from unittest.mock import MagicMock

import pytest

from spotify_tui.context import AppContext
from spotify_tui.core.config import Config
from spotify_tui.domain.playback import PlaybackTicker
from spotify_tui.ui.blessed.events.keys import key_event
from spotify_tui.ui.blessed.state import ApplicationState


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def app(clock: FakeClock) -> ApplicationState:
    """Fresh application state with a hand-driven clock."""
    return ApplicationState(user_config=Config(), ticker=PlaybackTicker(clock=clock))


@pytest.fixture
def ctx(app: ApplicationState) -> AppContext:
    return AppContext(config=app.user_config, state=app)


@pytest.fixture
def client() -> MagicMock:
    """Stand-in for SpotifyClient."""
    return MagicMock()


def drain(app: ApplicationState) -> list:
    """Return and remove every intent queued so far."""
    intents = []
    while True:
        try:
            intents.append(app.io_tx.get_nowait())
        except queue.Empty:
            return intents


def press(binding: str) -> dict:
    return key_event(binding)


def track(track_id: str, name: str = "", duration_ms: int = 200_000) -> dict:
    return {
        "id": track_id,
        "name": name or f"Track {track_id}",
        "uri": f"spotify:track:{track_id}",
        "type": "track",
        "duration_ms": duration_ms,
        "artists": [{"id": f"artist-{track_id}", "name": f"Artist {track_id}"}],
        "album": {"id": f"album-{track_id}", "name": f"Album {track_id}", "uri": f"spotify:album:album-{track_id}"},
    }
