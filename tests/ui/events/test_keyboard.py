"""Tests for the top-level key dispatcher."""

from conftest import drain, press, track

from spotify_tui.domain.models import (
    ActiveBlock,
    RouteId,
    SearchResultBlock,
    TrackTableContext,
)
from spotify_tui.domain.paging import Page
from spotify_tui.domain.playback import PlaybackSnapshot
from spotify_tui.ui.blessed.events.keyboard import handle_event


def send(app, *bindings):
    result = True
    for binding in bindings:
        result = handle_event(press(binding), app)
    return result


class TestBackKey:
    """Tests for the back key and the Home floor."""

    def test_back_at_home_quits(self, app):
        """Back with only Home on the stack asks to quit."""
        assert send(app, "q") is False
        assert app.get_current_route().id == RouteId.HOME

    def test_back_pops_route(self, app):
        """Back pops one route and keeps running."""
        app.push_navigation_stack(RouteId.SEARCH, ActiveBlock.SEARCH_RESULT_BLOCK)
        assert send(app, "q") is True
        assert app.get_current_route().id == RouteId.HOME

    def test_back_is_text_while_typing(self, app):
        """The back key is inserted while the input is focused."""
        app.set_current_route_state(active=ActiveBlock.INPUT)
        assert send(app, "q") is True
        assert app.input == ["q"]

    def test_back_closes_dialog_without_choice(self, app):
        """Leaving the unfollow dialog with back forgets the name and choice."""
        app.dialog = "Mix"
        app.confirm = True
        app.push_navigation_stack(RouteId.DIALOG, ActiveBlock.DIALOG)
        send(app, "q")
        assert app.get_current_route().id == RouteId.HOME
        assert app.dialog is None
        assert app.confirm is False
        assert drain(app) == []


class TestErrorRoute:
    """Tests for dismissing errors."""

    def test_escape_dismisses_error(self, app):
        """Esc on the error screen returns to the previous route."""
        app.handle_error("boom")
        send(app, "esc")
        assert app.get_current_route().id == RouteId.HOME

    def test_enter_dismisses_error(self, app):
        """Enter on the error screen returns to the previous route."""
        app.push_navigation_stack(RouteId.SEARCH, ActiveBlock.SEARCH_RESULT_BLOCK)
        app.handle_error("boom")
        send(app, "enter")
        assert app.get_current_route().id == RouteId.SEARCH

    def test_rebound_submit_dismisses_error(self, app):
        """A rebound submit key replaces enter on the error screen."""
        app.user_config.keys.submit = "ctrl-o"
        app.handle_error("boom")
        send(app, "enter")
        assert app.get_current_route().id == RouteId.ERROR
        send(app, "ctrl-o")
        assert app.get_current_route().id == RouteId.HOME


class TestPanelFocus:
    """Tests for hover and focus movement."""

    def test_enter_activates_hovered(self, app):
        """Enter on Home activates the hovered Library block."""
        send(app, "enter")
        assert app.get_current_route().active_block == ActiveBlock.LIBRARY

    def test_down_moves_hover(self, app):
        """Down from Library hovers My Playlists, then the playbar."""
        send(app, "down")
        assert app.get_current_route().hovered_block == ActiveBlock.MY_PLAYLISTS
        send(app, "j")
        assert app.get_current_route().hovered_block == ActiveBlock.PLAY_BAR

    def test_escape_clears_active(self, app):
        """Esc leaves an active sidebar block."""
        send(app, "enter", "esc")
        assert app.get_current_route().active_block == ActiveBlock.EMPTY

    def test_empty_playlists_keep_unset_index(self, app):
        """Moving in an empty playlist list leaves the cursor unset."""
        app.set_current_route_state(active=ActiveBlock.MY_PLAYLISTS)
        send(app, "down")
        assert app.selected_playlist_index is None

    def test_help_changes_focus_only(self, app):
        """The help key focuses the help menu without pushing a route."""
        send(app, "?")
        assert len(app.navigation) == 1
        assert app.get_current_route().active_block == ActiveBlock.HELP_MENU

    def test_search_key_focuses_input(self, app):
        """The search key focuses the input line."""
        send(app, "/")
        assert app.get_current_route().active_block == ActiveBlock.INPUT


class TestMovementCounts:
    """Tests for numeric prefixes on list movement."""

    def test_count_moves_several_rows(self, app):
        """A typed count moves that many rows and is consumed."""
        app.track_table.tracks = [track(str(i)) for i in range(20)]
        app.track_table.context = TrackTableContext.SAVED_TRACKS
        app.push_navigation_stack(RouteId.TRACK_TABLE, ActiveBlock.TRACK_TABLE)
        send(app, "1", "2", "j")
        assert app.track_table.selected_index == 12
        assert app.movement_count == ""
        send(app, "j")
        assert app.track_table.selected_index == 13

    def test_count_clamps_at_end(self, app):
        """Counts past the end stop on the last row."""
        app.track_table.tracks = [track(str(i)) for i in range(5)]
        app.push_navigation_stack(RouteId.TRACK_TABLE, ActiveBlock.TRACK_TABLE)
        send(app, "9", "j")
        assert app.track_table.selected_index == 4

    def test_hover_move_discards_count(self, app):
        """A count typed before a hover move does not carry over."""
        send(app, "3", "j")
        assert app.get_current_route().hovered_block == ActiveBlock.MY_PLAYLISTS
        assert app.movement_count == ""

    def test_other_keys_discard_count(self, app):
        """Only the key right after a count uses it."""
        app.track_table.tracks = [track(str(i)) for i in range(20)]
        app.track_table.selected_index = 0
        app.push_navigation_stack(RouteId.TRACK_TABLE, ActiveBlock.TRACK_TABLE)
        send(app, "5", "?")
        assert app.movement_count == ""
        app.set_current_route_state(active=ActiveBlock.TRACK_TABLE)
        send(app, "j")
        assert app.track_table.selected_index == 1


class TestSearchFlow:
    """Tests for search from the input to opening a result."""

    def test_submit_pushes_search(self, app):
        """Typing a query and Enter searches and shows the results."""
        send(app, "/", "a", "b", "enter")
        intents = drain(app)
        assert intents[0].action == "get_search_results"
        assert intents[0].data["query"] == "ab"
        assert app.get_current_route().id == RouteId.SEARCH
        assert app.get_current_route().active_block == ActiveBlock.SEARCH_RESULT_BLOCK

    def test_enter_on_artist_opens_artist(self, app):
        """Enter on an artist result fetches the artist and shows its route."""
        app.search_results.artists = Page(items=[{"id": "a1", "name": "Artist"}], total=1)
        app.push_navigation_stack(RouteId.SEARCH, ActiveBlock.SEARCH_RESULT_BLOCK)
        send(app, "l", "enter", "enter")

        intents = drain(app)
        assert [i.action for i in intents] == ["get_artist"]
        assert intents[0].data["artist_id"] == "a1"
        assert intents[0].data["artist_name"] == "Artist"
        assert app.get_current_route().id == RouteId.ARTIST
        assert app.search_results.selected_block == SearchResultBlock.ARTIST_SEARCH


class TestGlobalPlaybackKeys:
    """Tests for playback keys that work from any block."""

    def test_keys_queue_intents(self, app, clock):
        """Playback keys queue the matching intents."""
        app.current_playback = PlaybackSnapshot(
            is_playing=True,
            device={"id": "d1", "volume_percent": 40},
            item=track("t1"),
            progress_ms=1000,
            polled_at=clock(),
        )
        app.song_progress_ms = 1000
        send(app, "n", "p", "+", "-", "space")
        actions = [(i.action, i.data) for i in drain(app)]
        assert actions == [
            ("next_track", {}),
            ("previous_track", {}),
            ("change_volume", {"volume_percent": 50}),
            ("change_volume", {"volume_percent": 30}),
            ("pause_playback", {}),
        ]

    def test_seek_waits_for_apply(self, app, clock):
        """Seek keys only move the pending position."""
        app.current_playback = PlaybackSnapshot(
            is_playing=True, item=track("t1"), progress_ms=0, polled_at=clock()
        )
        send(app, ">", ">")
        assert app.seek_ms == 10_000
        assert drain(app) == []

    def test_devices_key(self, app):
        """The devices key fetches the device list."""
        send(app, "d")
        assert drain(app)[0].action == "get_devices"

    def test_basic_view(self, app):
        """The basic view key pushes the minimal view."""
        send(app, "B")
        assert app.get_current_route().id == RouteId.BASIC_VIEW

    def test_jump_to_album(self, app, clock):
        """The album key opens the album of the playing track."""
        app.current_playback = PlaybackSnapshot(item=track("t1"), polled_at=clock())
        send(app, "a")
        intent = drain(app)[0]
        assert intent.action == "get_album_tracks"
        assert intent.data["album"]["id"] == "album-t1"

    def test_jump_to_playlist_context(self, app, clock):
        """The context key opens the playlist that is playing."""
        app.current_playback = PlaybackSnapshot(
            item=track("t1"),
            context={"type": "playlist", "uri": "spotify:playlist:p1"},
            polled_at=clock(),
        )
        send(app, "o")
        intent = drain(app)[0]
        assert intent.action == "get_playlist_tracks"
        assert intent.data == {"playlist_id": "p1", "offset": 0}
