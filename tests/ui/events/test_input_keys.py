"""Tests for the search input line."""

from conftest import drain, press

from spotify_tui.domain.models import ActiveBlock, RouteId
from spotify_tui.ui.blessed.events.keys import handle_input_key


def type_text(app, text):
    for ch in text:
        handle_input_key(press("space" if ch == " " else ch), app)


class TestEditing:
    """Tests for cursor movement and editing."""

    def test_insert_and_backspace(self, app):
        """Characters insert at the cursor and backspace removes one."""
        type_text(app, "abc")
        handle_input_key(press("backspace"), app)
        assert app.input == ["a", "b"]
        assert app.input_idx == 2
        assert app.input_cursor_position == 2

    def test_insert_mid_line(self, app):
        """Moving left then typing inserts before the cursor."""
        type_text(app, "ac")
        handle_input_key(press("left"), app)
        type_text(app, "b")
        assert "".join(app.input) == "abc"
        assert app.input_idx == 2

    def test_wide_characters(self, app):
        """Wide characters advance the cursor by two columns."""
        type_text(app, "日本")
        assert app.input_idx == 2
        assert app.input_cursor_position == 4
        handle_input_key(press("left"), app)
        assert app.input_idx == 1
        assert app.input_cursor_position == 2

    def test_line_editing_chords(self, app):
        """ctrl-a/e move to the ends and ctrl-k/u cut around the cursor."""
        type_text(app, "hello world")
        handle_input_key(press("ctrl-a"), app)
        assert app.input_cursor_position == 0
        handle_input_key(press("ctrl-e"), app)
        assert app.input_idx == 11

        for _ in range(5):
            handle_input_key(press("left"), app)
        handle_input_key(press("ctrl-k"), app)
        assert "".join(app.input) == "hello "

        handle_input_key(press("ctrl-u"), app)
        assert app.input == []
        assert app.input_cursor_position == 0

    def test_delete_word(self, app):
        """ctrl-w removes the word before the cursor and trailing spaces."""
        type_text(app, "daft punk ")
        handle_input_key(press("ctrl-w"), app)
        assert "".join(app.input) == "daft "
        assert app.input_cursor_position == 5

    def test_escape_leaves_input(self, app):
        """Esc hands focus back to the library."""
        app.set_current_route_state(active=ActiveBlock.INPUT)
        handle_input_key(press("esc"), app)
        route = app.get_current_route()
        assert route.active_block == ActiveBlock.EMPTY
        assert route.hovered_block == ActiveBlock.LIBRARY


class TestSubmit:
    """Tests for Enter on the input line."""

    def test_blank_query_ignored(self, app):
        """Whitespace-only input does not search."""
        type_text(app, "  ")
        handle_input_key(press("enter"), app)
        assert drain(app) == []

    def test_album_url(self, app):
        """A pasted album link opens the album."""
        app.input = list("https://open.spotify.com/album/abc123?si=xyz")
        handle_input_key(press("enter"), app)
        intent = drain(app)[0]
        assert intent.action == "get_album"
        assert intent.data == {"album_id": "abc123"}

    def test_artist_url(self, app):
        """A pasted artist link opens the artist view."""
        app.input = list("https://open.spotify.com/artist/xyz789")
        handle_input_key(press("enter"), app)
        intent = drain(app)[0]
        assert intent.action == "get_artist"
        assert intent.data["artist_id"] == "xyz789"
        assert app.get_current_route().id == RouteId.ARTIST

    def test_search_uses_market(self, app):
        """Search passes the configured market."""
        app.user_config.spotify.market = "SE"
        type_text(app, "abba")
        handle_input_key(press("enter"), app)
        intent = drain(app)[0]
        assert intent.data == {"query": "abba", "country": "SE"}
