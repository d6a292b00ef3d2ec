"""Tests for ApplicationState commands."""

from conftest import drain, track

from spotify_tui.domain.models import ActiveBlock, RepeatState, RouteId
from spotify_tui.domain.playback import PlaybackSnapshot


def playing(app, clock, progress_ms=10_000, duration_ms=200_000, volume=50, is_playing=True):
    app.current_playback = PlaybackSnapshot(
        is_playing=is_playing,
        device={"id": "d1", "volume_percent": volume},
        item=track("t1", duration_ms=duration_ms),
        progress_ms=progress_ms,
        polled_at=clock(),
    )
    app.song_progress_ms = progress_ms


class TestDispatch:
    """Tests for dispatch and error routing."""

    def test_dispatch_queues_intent(self, app):
        """dispatch puts an Intent on the queue and marks loading."""
        app.dispatch("get_playlists")
        intents = drain(app)
        assert [i.action for i in intents] == ["get_playlists"]
        assert app.is_loading is True

    def test_handle_error_pushes_error_route(self, app):
        """Errors push the Error route with the message."""
        app.handle_error("Device not found")
        assert app.get_current_route().id == RouteId.ERROR
        assert app.get_current_route().active_block == ActiveBlock.ERROR
        assert app.api_error == "Device not found"

    def test_second_error_replaces_message(self, app):
        """A second error overwrites the message without stacking routes."""
        app.handle_error("first")
        app.handle_error("second")
        assert len(app.navigation) == 2
        assert app.api_error == "second"


class TestMovementCount:
    """Tests for numeric prefixes."""

    def test_accumulates_digits(self, app):
        """Digits concatenate into one count."""
        app.push_movement_digit("1")
        app.push_movement_digit("2")
        assert app.take_movement_count() == 12
        assert app.take_movement_count() is None

    def test_leading_zero_ignored(self, app):
        """A leading zero does not start a count."""
        app.push_movement_digit("0")
        assert app.take_movement_count() is None


class TestPlaybackCommands:
    """Tests for playback helpers on the state."""

    def test_toggle_pauses_when_playing(self, app, clock):
        """Toggle while playing pauses."""
        playing(app, clock)
        app.toggle_playback()
        assert drain(app)[0].action == "pause_playback"

    def test_toggle_resumes_when_paused(self, app, clock):
        """Toggle while paused resumes without a context."""
        playing(app, clock, is_playing=False)
        app.toggle_playback()
        intent = drain(app)[0]
        assert intent.action == "start_playback"
        assert intent.data == {"context_uri": None, "uris": None, "offset": None}

    def test_previous_restarts_after_three_seconds(self, app, clock):
        """Going back more than 3 s into a track restarts it."""
        playing(app, clock, progress_ms=4000)
        app.previous_track()
        intent = drain(app)[0]
        assert intent.action == "seek"
        assert intent.data == {"position_ms": 0}

    def test_previous_skips_near_start(self, app, clock):
        """Going back near the start skips to the previous track."""
        playing(app, clock, progress_ms=1000)
        app.previous_track()
        assert drain(app)[0].action == "previous_track"

    def test_seek_is_debounced(self, app, clock):
        """Seek keys accumulate until apply_seek sends one request."""
        playing(app, clock, progress_ms=10_000)
        app.seek_forwards()
        app.seek_forwards()
        assert app.seek_ms == 20_000
        assert drain(app) == []

        app.apply_seek()
        intents = drain(app)
        assert [(i.action, i.data) for i in intents] == [("seek", {"position_ms": 20_000})]
        assert app.seek_ms is None
        assert app.song_progress_ms == 20_000

    def test_seek_clamped(self, app, clock):
        """Seeks stay within the track."""
        playing(app, clock, progress_ms=198_000, duration_ms=200_000)
        app.seek_forwards()
        assert app.seek_ms == 200_000
        app.seek_ms = None
        app.song_progress_ms = 2000
        app.seek_backwards()
        assert app.seek_ms == 0

    def test_volume_clamped(self, app, clock):
        """Volume never leaves 0..100 and unchanged volume sends nothing."""
        playing(app, clock, volume=95)
        app.increase_volume()
        assert drain(app)[0].data == {"volume_percent": 100}

        playing(app, clock, volume=100)
        app.increase_volume()
        assert drain(app) == []

    def test_repeat_cycles(self, app, clock):
        """Repeat asks for the next mode in the cycle."""
        playing(app, clock)
        app.repeat()
        assert drain(app)[0].data == {"state": RepeatState.CONTEXT}

    def test_shuffle_flips(self, app, clock):
        """Shuffle asks for the opposite of the current flag."""
        playing(app, clock)
        app.shuffle()
        assert drain(app)[0].data == {"state": True}


class TestTick:
    """Tests for update_on_tick."""

    def test_polls_once_when_due(self, app):
        """A due tick queues one playback fetch and no more until it returns."""
        app.update_on_tick()
        app.update_on_tick()
        intents = drain(app)
        assert [i.action for i in intents] == ["get_current_playback"]
        assert app.is_fetching_current_playback is True

    def test_interpolates_progress(self, app, clock):
        """Between polls the progress follows the clock."""
        app.ticker.mark_polled()
        playing(app, clock, progress_ms=1000)
        clock.advance(2)
        app.update_on_tick()
        assert app.song_progress_ms == 3000

    def test_pending_seek_freezes_progress(self, app, clock):
        """A pending seek is not overwritten by interpolation."""
        app.ticker.mark_polled()
        playing(app, clock, progress_ms=1000)
        app.seek_ms = 50_000
        clock.advance(2)
        app.update_on_tick()
        assert app.song_progress_ms == 1000
