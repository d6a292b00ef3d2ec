"""Tests for the Spotify Web API client."""

from datetime import datetime, timedelta
from unittest.mock import MagicMock, patch

import pytest
import requests

from spotify_tui.core.config import SpotifyConfig
from spotify_tui.domain.models import RepeatState
from spotify_tui.providers.spotify import SpotifyApiError, SpotifyAuthError, SpotifyClient

REQUEST = "spotify_tui.providers.spotify.api.requests.request"
REFRESH = "spotify_tui.providers.spotify.api.auth.refresh_token"


def fresh_token(access_token="token-1"):
    return {
        "access_token": access_token,
        "refresh_token": "refresh",
        "expires_at": (datetime.now() + timedelta(hours=1)).isoformat(),
    }


def response(status=200, payload=None, text=""):
    resp = MagicMock()
    resp.status_code = status
    if payload is None:
        resp.content = text.encode()
        resp.text = text
        resp.json.side_effect = ValueError("no json")
    else:
        resp.content = b"{...}"
        resp.text = ""
        resp.json.return_value = payload
    return resp


@pytest.fixture
def client():
    return SpotifyClient(SpotifyConfig(client_id="id", client_secret="secret"), fresh_token())


class TestRequest:
    """Tests for the request transport."""

    def test_bearer_header_and_params(self, client):
        """Requests carry the token and drop None parameters."""
        with patch(REQUEST, return_value=response(payload={"id": "me"})) as request:
            assert client.current_user() == {"id": "me"}
        _, kwargs = request.call_args
        assert kwargs["headers"]["Authorization"] == "Bearer token-1"
        assert kwargs["params"] == {}

    def test_http_error_message(self, client):
        """Error statuses raise SpotifyApiError with Spotify's message."""
        error = response(404, {"error": {"status": 404, "message": "Player command failed: No active device found"}})
        with patch(REQUEST, return_value=error):
            with pytest.raises(SpotifyApiError) as excinfo:
                client.control_playback("pause")
        assert excinfo.value.status_code == 404
        assert excinfo.value.message == "Player command failed: No active device found"

    def test_transport_error(self, client):
        """Connection failures become SpotifyApiError."""
        with patch(REQUEST, side_effect=requests.ConnectionError("offline")):
            with pytest.raises(SpotifyApiError, match="Network error"):
                client.devices()

    def test_401_refreshes_and_retries(self, client):
        """A 401 refreshes the token once and repeats the request."""
        responses = [response(401, {"error": {"message": "expired"}}), response(payload={"devices": []})]
        with patch(REQUEST, side_effect=responses) as request, patch(
            REFRESH, return_value=fresh_token("token-2")
        ):
            assert client.devices() == []
        assert request.call_count == 2
        assert request.call_args.kwargs["headers"]["Authorization"] == "Bearer token-2"

    def test_failed_refresh(self, client):
        """A 401 with no usable refresh token raises an auth error."""
        with patch(REQUEST, return_value=response(401, {"error": {"message": "expired"}})), patch(
            REFRESH, return_value=None
        ):
            with pytest.raises(SpotifyAuthError):
                client.devices()

    def test_empty_body(self, client):
        """204 responses decode to None."""
        with patch(REQUEST, return_value=response(204)):
            assert client.current_playback() is None


class TestEndpoints:
    """Tests for endpoint wrappers."""

    def test_followed_artists_cursor(self, client):
        """Followed artists page by cursor and unwrap the artists object."""
        payload = {
            "artists": {
                "items": [{"id": "a1"}],
                "limit": 50,
                "total": 80,
                "next": "https://api.spotify.com/v1/me/following?after=a1",
                "cursors": {"after": "a1"},
            }
        }
        with patch(REQUEST, return_value=response(payload=payload)) as request:
            page = client.fetch_page("followed_artists", cursor="a0")
        assert page.cursor == "a1"
        assert page.items == [{"id": "a1"}]
        params = request.call_args.kwargs["params"]
        assert params == {"limit": 50, "type": "artist", "after": "a0"}

    def test_playlist_tracks_offset(self, client):
        """Offset-paged resources send the offset and path id."""
        payload = {"items": [], "offset": 100, "limit": 50, "total": 150}
        with patch(REQUEST, return_value=response(payload=payload)) as request:
            page = client.fetch_page("playlist_tracks", offset=100, playlist_id="p1")
        assert page.offset == 100
        assert request.call_args.args[1].endswith("/playlists/p1/tracks")
        assert request.call_args.kwargs["params"]["offset"] == 100

    def test_play_with_offset(self, client):
        """Play sends context and offset position in the body."""
        with patch(REQUEST, return_value=response(204)) as request:
            client.control_playback("play", "d1", context_uri="spotify:album:x", offset=3)
        kwargs = request.call_args.kwargs
        assert kwargs["json"] == {"context_uri": "spotify:album:x", "offset": {"position": 3}}
        assert kwargs["params"] == {"device_id": "d1"}

    def test_resume_has_no_body(self, client):
        """Play without a context resumes playback."""
        with patch(REQUEST, return_value=response(204)) as request:
            client.control_playback("play", None)
        assert request.call_args.kwargs["json"] is None

    def test_repeat_value(self, client):
        """Repeat sends the mode's string value."""
        with patch(REQUEST, return_value=response(204)) as request:
            client.control_playback("repeat", None, state=RepeatState.CONTEXT)
        assert request.call_args.kwargs["params"] == {"state": "context"}

    def test_search_drops_nulls(self, client):
        """Null padding in search results is removed."""
        payload = {"playlists": {"items": [None, {"id": "p1"}], "total": 2}}
        with patch(REQUEST, return_value=response(payload=payload)):
            page = client.search("mix", "playlist", 4)
        assert page.items == [{"id": "p1"}]

    def test_contains_chunks_ids(self, client):
        """Contains checks are split into groups of fifty ids."""
        ids = [f"t{i}" for i in range(60)]
        with patch(
            REQUEST,
            side_effect=[response(payload=[True] * 50), response(payload=[False] * 10)],
        ) as request:
            flags = client.contains("tracks", ids)
        assert len(flags) == 60
        assert request.call_count == 2

    def test_unfollow_playlist(self, client):
        """Playlist follow changes use the followers endpoint."""
        with patch(REQUEST, return_value=response(204)) as request:
            client.mutate_library("unfollow_playlist", ["p1"])
        assert request.call_args.args[0] == "DELETE"
        assert request.call_args.args[1].endswith("/playlists/p1/followers")

    def test_lookups(self, client):
        """Single-object lookups hit their resource paths."""
        with patch(REQUEST, return_value=response(payload={"id": "x"})) as request:
            assert client.track("t1") == {"id": "x"}
            client.audio_analysis("t1")
        urls = [c.args[1] for c in request.call_args_list]
        assert urls[0].endswith("/tracks/t1")
        assert urls[1].endswith("/audio-analysis/t1")
