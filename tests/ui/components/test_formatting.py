"""Tests for display formatting helpers."""

from conftest import track

from spotify_tui.ui.blessed.styles.formatting import (
    artist_names,
    format_time,
    item_subtitle,
    liked_marker,
)


class TestFormatTime:
    """Tests for format_time."""

    def test_minutes(self):
        """Short durations show M:SS."""
        assert format_time(0) == "0:00"
        assert format_time(61_000) == "1:01"
        assert format_time(599_999) == "9:59"

    def test_hours(self):
        """Long episodes show H:MM:SS."""
        assert format_time(3_723_000) == "1:02:03"

    def test_missing(self):
        """None and negative values show zero."""
        assert format_time(None) == "0:00"
        assert format_time(-5000) == "0:00"


class TestItemText:
    """Tests for artist and subtitle text."""

    def test_artist_names(self):
        """Artists are joined with commas."""
        item = {"artists": [{"name": "A"}, {"name": "B"}]}
        assert artist_names(item) == "A, B"
        assert artist_names(None) == ""

    def test_episode_subtitle(self):
        """Episodes show their show's name."""
        episode = {"type": "episode", "show": {"name": "The Show"}}
        assert item_subtitle(episode) == "The Show"
        assert item_subtitle(track("t1")) == "Artist t1"

    def test_liked_marker(self):
        """Liked ids get a heart, everything else blank padding."""
        assert liked_marker("a", {"a"}) == "♥ "
        assert liked_marker("b", {"a"}) == "  "
        assert liked_marker(None, {"a"}) == "  "
