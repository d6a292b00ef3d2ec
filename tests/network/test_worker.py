"""Tests for the network worker."""

import queue
from unittest.mock import patch

import pytest
from conftest import drain, track

from spotify_tui.domain.models import (
    ActiveBlock,
    RouteId,
    SearchResultBlock,
    TrackTableContext,
)
from spotify_tui.domain.paging import Page
from spotify_tui.network import Intent
from spotify_tui.network.worker import Network
from spotify_tui.providers.spotify import SpotifyApiError


@pytest.fixture
def network(client, ctx):
    client.contains.side_effect = lambda kind, ids: [False] * len(ids)
    return Network(client, ctx)


def saved_tracks_page(offset, ids, total=100, next_url="https://next"):
    return Page(
        items=[{"track": track(i)} for i in ids],
        offset=offset,
        limit=50,
        total=total,
        next=next_url,
    )


class TestQueue:
    """Tests for queue processing and error routing."""

    def test_failure_shows_error_route(self, network, client, app):
        """A failed command ends on the Error route with the message."""
        client.control_playback.side_effect = SpotifyApiError("No active device found", 404)
        network.process(Intent("next_track"))
        assert app.get_current_route().id == RouteId.ERROR
        assert app.api_error == "No active device found"

    def test_unexpected_error_is_reported(self, network, client, app):
        """Bugs in a handler are reported instead of killing the worker."""
        client.devices.side_effect = KeyError("id")
        network.process(Intent("get_devices"))
        assert app.get_current_route().id == RouteId.ERROR

    def test_failed_page_clears_guard(self, network, client, app):
        """A failed page fetch lets the next request through."""
        app.library.saved_tracks.fetching = True
        client.fetch_page.side_effect = SpotifyApiError("Server error", 500)
        network.process(Intent("get_current_saved_tracks", {"offset": 50}))
        assert app.library.saved_tracks.fetching is False

    def test_failed_poll_clears_flag(self, network, client, app):
        """A failed playback poll allows the next poll."""
        app.is_fetching_current_playback = True
        client.current_playback.side_effect = SpotifyApiError("Bad gateway", 502)
        network.process(Intent("get_current_playback"))
        assert app.is_fetching_current_playback is False

    def test_run_stops_on_sentinel(self, network, client, app):
        """run processes intents in order and stops at None."""
        intents = queue.Queue()
        intents.put(Intent("pause_playback"))
        intents.put(Intent("next_track"))
        intents.put(None)
        network.run(intents)
        actions = [c.args[0] for c in client.control_playback.call_args_list]
        assert actions == ["pause", "next"]


class TestPlayback:
    """Tests for playback intents."""

    def test_snapshot_and_liked_flag(self, network, client, app):
        """Polling stores the snapshot and checks the new track's liked flag."""
        client.current_playback.return_value = {
            "is_playing": True,
            "progress_ms": 42_000,
            "repeat_state": "track",
            "shuffle_state": True,
            "device": {"id": "d1", "volume_percent": 70},
            "item": track("t1"),
        }
        client.contains.side_effect = lambda kind, ids: [True] * len(ids)
        app.is_fetching_current_playback = True

        network.process(Intent("get_current_playback"))

        playback = app.current_playback
        assert playback.is_playing is True
        assert playback.volume_percent == 70
        assert playback.repeat_state.value == "track"
        assert app.song_progress_ms == 42_000
        assert app.is_fetching_current_playback is False
        assert "t1" in app.liked_song_ids
        client.contains.assert_called_once_with("tracks", ["t1"])

    def test_same_track_not_rechecked(self, network, client, app):
        """The liked flag is not re-checked while the track stays the same."""
        client.current_playback.return_value = {"is_playing": True, "item": track("t1")}
        network.process(Intent("get_current_playback"))
        network.process(Intent("get_current_playback"))
        assert client.contains.call_count == 1

    def test_nothing_playing(self, network, client, app):
        """An empty response clears the snapshot."""
        client.current_playback.return_value = None
        network.process(Intent("get_current_playback"))
        assert app.current_playback is None

    def test_commands_request_poll(self, network, client, app):
        """A playback command makes the next tick poll."""
        app.ticker.mark_polled()
        app.device_id = "d1"
        network.process(Intent("seek", {"position_ms": 1000}))
        client.control_playback.assert_called_once_with("seek", "d1", position_ms=1000)
        assert app.ticker.due() is True

    def test_devices_route(self, network, client, app):
        """Devices are listed with the current device preselected."""
        app.device_id = "d2"
        client.devices.return_value = [{"id": "d1"}, {"id": "d2"}]
        network.process(Intent("get_devices"))
        assert app.selected_device_index == 1
        assert app.get_current_route().active_block == ActiveBlock.SELECT_DEVICE

    def test_transfer_saves_device(self, network, client, app):
        """Transferring playback remembers the device."""
        with patch("spotify_tui.network.worker.save_device_id") as save:
            network.process(Intent("transfer_playback_to_device", {"device_id": "d9"}))
        client.transfer_playback.assert_called_once_with("d9")
        save.assert_called_once_with("d9")
        assert app.device_id == "d9"


class TestLibraryPages:
    """Tests for paged library fetches."""

    def test_saved_tracks_initial_fetch(self, network, client, app):
        """The first fetch replaces the cache and fills the table."""
        app.library.saved_tracks.add_page(saved_tracks_page(0, ["old"]))
        app.track_table.context = TrackTableContext.SAVED_TRACKS
        client.fetch_page.return_value = saved_tracks_page(0, ["a", "b"])

        network.process(Intent("get_current_saved_tracks", {"offset": None}))

        cache = app.library.saved_tracks
        assert len(cache.pages) == 1
        assert [t["id"] for t in app.track_table.tracks] == ["a", "b"]
        assert {"a", "b"} <= app.liked_song_ids

    def test_saved_tracks_next_page(self, network, client, app):
        """A later page is appended and selected."""
        cache = app.library.saved_tracks
        cache.add_page(saved_tracks_page(0, ["a"]))
        cache.fetching = True
        client.fetch_page.return_value = saved_tracks_page(50, ["c"])

        network.process(Intent("get_current_saved_tracks", {"offset": 50}))

        assert len(cache.pages) == 2
        assert cache.index == 1
        assert cache.fetching is False

    def test_playlist_tracks_push_table(self, network, client, app):
        """Playlist tracks open the track table at the page offset."""
        client.fetch_page.return_value = Page(
            items=[{"track": track("a")}, {"track": None}], offset=100, total=150
        )
        network.process(Intent("get_playlist_tracks", {"playlist_id": "p1", "offset": 100}))
        assert app.playlist_offset == 100
        assert [t["id"] for t in app.track_table.tracks] == ["a"]
        assert app.get_current_route().id == RouteId.TRACK_TABLE

    def test_made_for_you_filters_owner(self, network, client, app):
        """Only Spotify-owned playlists are kept."""
        client.search.return_value = Page(
            items=[
                {"id": "1", "owner": {"id": "spotify"}},
                {"id": "2", "owner": {"id": "someone"}},
            ],
            total=2,
        )
        network.process(Intent("get_made_for_you"))
        assert [p["id"] for p in app.library.made_for_you_playlists.current_items()] == ["1"]

    def test_show_episodes(self, network, client, app):
        """Opening a show resets the sort and shows the episode table."""
        client.fetch_page.return_value = Page(items=[{"id": "e1"}], limit=50, total=1)
        show = {"id": "s1", "name": "Show"}
        network.process(Intent("get_show_episodes", {"show": show, "offset": None}))
        assert app.episode_table.show == show
        assert app.get_current_route().id == RouteId.PODCAST_EPISODES


class TestLookups:
    """Tests for search, artist and radio lookups."""

    def test_search_results(self, network, client, app):
        """All five categories are published together."""
        client.search.side_effect = lambda query, category, limit, market: Page(
            items=[{"id": f"{category}-1", "name": category}], total=1
        )
        app.search_results.hovered_block = SearchResultBlock.ARTIST_SEARCH
        network.process(Intent("get_search_results", {"query": "x", "country": None}))

        results = app.search_results
        assert results.tracks.items[0]["id"] == "track-1"
        assert results.shows.items[0]["id"] == "show-1"
        assert results.hovered_block == SearchResultBlock.ARTIST_SEARCH
        limits = {c.args[1]: c.args[2] for c in client.search.call_args_list}
        assert limits["track"] == 50
        assert limits["album"] == 4

    def test_artist_without_related(self, network, client, app):
        """Artists still open when related artists are unavailable."""
        client.fetch_page.return_value = Page(items=[], total=0)
        client.artist_top_tracks.return_value = [track("t1")]
        client.artist_related_artists.side_effect = SpotifyApiError("Forbidden", 403)
        client.artist.return_value = {"id": "ar1", "name": "Looked Up"}

        network.process(Intent("get_artist", {"artist_id": "ar1", "artist_name": ""}))

        assert app.artist.artist_name == "Looked Up"
        assert app.artist.related_artists == []
        assert app.get_current_route().id == RouteId.HOME

    def test_recommendations_play_seed_first(self, network, client, app):
        """Song radio plays the seed first without duplicating it."""
        seed = track("seed")
        client.get_recommendations.return_value = [track("a"), track("seed"), track("b")]
        network.process(
            Intent(
                "get_recommendations_for_seed",
                {"seed_tracks": ["seed"], "seed_artists": None, "first_track": seed},
            )
        )
        assert [t["id"] for t in app.recommended_tracks] == ["seed", "a", "b"]
        assert app.get_current_route().id == RouteId.RECOMMENDATIONS
        client.control_playback.assert_called_once_with(
            "play",
            None,
            uris=["spotify:track:seed", "spotify:track:a", "spotify:track:b"],
            offset=0,
        )


class TestMutations:
    """Tests for library mutations."""

    def test_toggle_save_track(self, network, client, app):
        """Toggling saves an unliked track and removes a liked one."""
        network.process(Intent("toggle_save_track", {"track_id": "t1"}))
        client.mutate_library.assert_called_with("save_tracks", ["t1"])
        assert "t1" in app.liked_song_ids

        network.process(Intent("toggle_save_track", {"track_id": "t1"}))
        client.mutate_library.assert_called_with("remove_tracks", ["t1"])
        assert "t1" not in app.liked_song_ids

    def test_failed_toggle_keeps_flag(self, network, client, app):
        """A failed save leaves the liked set alone."""
        client.mutate_library.side_effect = SpotifyApiError("Server error", 500)
        network.process(Intent("toggle_save_track", {"track_id": "t1"}))
        assert "t1" not in app.liked_song_ids

    def test_save_album_refreshes_list(self, network, client, app):
        """Saving an album marks it and refetches saved albums."""
        network.process(Intent("current_user_saved_album_add", {"album_id": "al1"}))
        assert "al1" in app.saved_album_ids
        intents = drain(app)
        assert (intents[0].action, intents[0].data) == (
            "get_current_user_saved_albums",
            {"offset": None},
        )

    def test_add_track_to_playlist(self, network, client, app):
        """Tracks are added by URI."""
        network.process(
            Intent("add_track_to_playlist", {"playlist_id": "p1", "track_id": "t1"})
        )
        client.add_tracks_to_playlist.assert_called_once_with("p1", ["spotify:track:t1"])
