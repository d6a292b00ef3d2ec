"""Tests for the search results grid."""

from conftest import drain, press, track

from spotify_tui.domain.models import (
    ActiveBlock,
    DialogContext,
    RouteId,
    SearchResultBlock,
    TrackTableContext,
)
from spotify_tui.domain.paging import Page
from spotify_tui.ui.blessed.events.keys import handle_search_results_key


def fill_results(app):
    search = app.search_results
    search.tracks = Page(items=[track("a"), track("b")], total=2)
    search.artists = Page(items=[{"id": "ar1", "name": "Artist"}], total=1)
    search.albums = Page(items=[{"id": "al1", "name": "Album", "uri": "spotify:album:al1"}], total=1)
    search.playlists = Page(items=[{"id": "pl1", "name": "List", "uri": "spotify:playlist:pl1"}], total=1)
    search.shows = Page(items=[{"id": "sh1", "name": "Show", "uri": "spotify:show:sh1"}], total=1)
    app.push_navigation_stack(RouteId.SEARCH, ActiveBlock.SEARCH_RESULT_BLOCK)


def select(app, block):
    app.search_results.hovered_block = block
    handle_search_results_key(press("enter"), app)


class TestHover:
    """Tests for moving between panels."""

    def test_grid_moves(self, app):
        """Directional keys walk the panel grid."""
        fill_results(app)
        search = app.search_results
        handle_search_results_key(press("down"), app)
        assert search.hovered_block == SearchResultBlock.ALBUM_SEARCH
        handle_search_results_key(press("right"), app)
        assert search.hovered_block == SearchResultBlock.PLAYLIST_SEARCH
        handle_search_results_key(press("down"), app)
        assert search.hovered_block == SearchResultBlock.SHOW_SEARCH
        handle_search_results_key(press("left"), app)
        assert search.hovered_block == SearchResultBlock.ALBUM_SEARCH

    def test_left_from_songs_leaves_grid(self, app):
        """Left from the left column returns to the sidebar."""
        fill_results(app)
        handle_search_results_key(press("left"), app)
        assert app.get_current_route().active_block == ActiveBlock.EMPTY

    def test_enter_selects_and_sets_cursor(self, app):
        """Enter on a hovered panel selects it with the cursor on row 0."""
        fill_results(app)
        select(app, SearchResultBlock.SONG_SEARCH)
        assert app.search_results.selected_block == SearchResultBlock.SONG_SEARCH
        assert app.search_results.selected_tracks_index == 0

    def test_movement_inside_selected_panel(self, app):
        """Once selected, movement keys move the rows."""
        fill_results(app)
        select(app, SearchResultBlock.SONG_SEARCH)
        handle_search_results_key(press("down"), app)
        assert app.search_results.selected_tracks_index == 1
        assert app.search_results.hovered_block == SearchResultBlock.SONG_SEARCH


class TestActions:
    """Tests for acting on the selected row."""

    def test_play_song(self, app):
        """Enter on a song plays all song results from that row."""
        fill_results(app)
        select(app, SearchResultBlock.SONG_SEARCH)
        handle_search_results_key(press("enter"), app)
        assert drain(app)[0].data == {
            "context_uri": None,
            "uris": ["spotify:track:a", "spotify:track:b"],
            "offset": 0,
        }

    def test_open_album(self, app):
        """Enter on an album fetches its tracks."""
        fill_results(app)
        select(app, SearchResultBlock.ALBUM_SEARCH)
        handle_search_results_key(press("enter"), app)
        intent = drain(app)[0]
        assert intent.action == "get_album_tracks"
        assert app.track_table.context == TrackTableContext.ALBUM_SEARCH

    def test_open_playlist(self, app):
        """Enter on a playlist opens it in the track table."""
        fill_results(app)
        select(app, SearchResultBlock.PLAYLIST_SEARCH)
        handle_search_results_key(press("enter"), app)
        assert drain(app)[0].data == {"playlist_id": "pl1", "offset": 0}
        assert app.track_table.context == TrackTableContext.PLAYLIST_SEARCH

    def test_save_and_delete(self, app):
        """w saves and D removes the selected album."""
        fill_results(app)
        select(app, SearchResultBlock.ALBUM_SEARCH)
        handle_search_results_key(press("w"), app)
        handle_search_results_key(press("D"), app)
        assert [i.action for i in drain(app)] == [
            "current_user_saved_album_add",
            "current_user_saved_album_delete",
        ]

    def test_unfollow_playlist_asks_first(self, app):
        """D on a playlist opens the confirmation dialog."""
        fill_results(app)
        select(app, SearchResultBlock.PLAYLIST_SEARCH)
        handle_search_results_key(press("D"), app)
        route = app.get_current_route()
        assert route.id == RouteId.DIALOG
        assert route.context == DialogContext.PLAYLIST_SEARCH
        assert app.dialog == "List"
        assert drain(app) == []

    def test_radio_from_artist(self, app):
        """r on an artist seeds recommendations with the artist."""
        fill_results(app)
        select(app, SearchResultBlock.ARTIST_SEARCH)
        handle_search_results_key(press("r"), app)
        assert drain(app)[0].data["seed_artists"] == ["ar1"]
