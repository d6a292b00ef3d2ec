"""
Spotify Web API client.

Thin requests-based wrapper exposing the capabilities the network worker
needs: paged fetches, playback control, search, library mutations and
recommendations, plus single-object lookups. Every failure is raised as
SpotifyApiError; payloads are returned as plain dicts.
"""

from typing import Any, Dict, Iterable, List, Optional

import requests
from loguru import logger

from spotify_tui.core.config import SpotifyConfig
from spotify_tui.domain.paging import Page

from . import auth
from .exceptions import SpotifyApiError, SpotifyAuthError

API_BASE = "https://api.spotify.com/v1"

DEFAULT_LIMIT = 50

# The /contains and mutation endpoints accept at most this many ids
MAX_IDS_PER_REQUEST = 50

# resource name -> path template for fetch_page()
PAGED_RESOURCES = {
    "playlists": "/me/playlists",
    "playlist_tracks": "/playlists/{playlist_id}/tracks",
    "saved_tracks": "/me/tracks",
    "saved_albums": "/me/albums",
    "saved_shows": "/me/shows",
    "followed_artists": "/me/following",
    "recently_played": "/me/player/recently-played",
    "album_tracks": "/albums/{album_id}/tracks",
    "artist_albums": "/artists/{artist_id}/albums",
    "show_episodes": "/shows/{show_id}/episodes",
}

# action -> (HTTP method, path, fixed query params) for mutate_library()
LIBRARY_ACTIONS = {
    "save_tracks": ("PUT", "/me/tracks", {}),
    "remove_tracks": ("DELETE", "/me/tracks", {}),
    "save_albums": ("PUT", "/me/albums", {}),
    "remove_albums": ("DELETE", "/me/albums", {}),
    "save_shows": ("PUT", "/me/shows", {}),
    "remove_shows": ("DELETE", "/me/shows", {}),
    "follow_artists": ("PUT", "/me/following", {"type": "artist"}),
    "unfollow_artists": ("DELETE", "/me/following", {"type": "artist"}),
    "follow_playlist": ("PUT", "/playlists/{id}/followers", {}),
    "unfollow_playlist": ("DELETE", "/playlists/{id}/followers", {}),
}

CONTAINS_PATHS = {
    "tracks": ("/me/tracks/contains", {}),
    "albums": ("/me/albums/contains", {}),
    "shows": ("/me/shows/contains", {}),
    "artists": ("/me/following/contains", {"type": "artist"}),
}

SEARCH_CATEGORIES = ("track", "artist", "album", "playlist", "show")


def _chunks(ids: List[str], size: int = MAX_IDS_PER_REQUEST) -> Iterable[List[str]]:
    for start in range(0, len(ids), size):
        yield ids[start : start + size]


def _error_message(response: requests.Response) -> str:
    """Best-effort human message from a Spotify error payload."""
    try:
        payload = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict):
        return error.get("message") or f"HTTP {response.status_code}"
    if isinstance(error, str):
        return payload.get("error_description") or error
    return f"HTTP {response.status_code}"


class SpotifyClient:
    """Authorized Spotify Web API client.

    The access token is refreshed transparently when it is about to expire
    or when a request comes back 401.
    """

    def __init__(self, config: SpotifyConfig, token_data: Dict[str, Any]):
        self.config = config
        self.token_data = token_data

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _refresh(self) -> None:
        new_token_data = auth.refresh_token(self.config, self.token_data)
        if not new_token_data:
            raise SpotifyAuthError("Spotify session expired, restart to authorize again", 401)
        self.token_data = new_token_data

    def _access_token(self) -> str:
        if auth.is_token_expired(self.token_data):
            logger.info("Spotify token expired, refreshing")
            self._refresh()
        return self.token_data["access_token"]

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None,
        _retried: bool = False,
    ) -> Optional[Dict[str, Any]]:
        """
        Perform one API request.

        Args:
            method: HTTP method
            path: Path below the API base, or a full URL
            params: Query parameters (None values are dropped)
            body: JSON body

        Returns:
            Decoded JSON payload, or None for empty responses

        Raises:
            SpotifyApiError: Transport failure or HTTP error status
        """
        url = path if path.startswith("http") else f"{API_BASE}{path}"
        query = {k: v for k, v in (params or {}).items() if v is not None}
        headers = {"Authorization": f"Bearer {self._access_token()}"}

        try:
            response = requests.request(
                method, url, params=query, json=body, headers=headers, timeout=30
            )
        except requests.RequestException as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise SpotifyApiError(f"Network error: {e}") from e

        if response.status_code == 401 and not _retried:
            logger.info("Spotify returned 401, refreshing token and retrying")
            self._refresh()
            return self.request(method, path, params, body, _retried=True)

        if response.status_code >= 400:
            message = _error_message(response)
            logger.warning(f"{method} {url} -> {response.status_code}: {message}")
            raise SpotifyApiError(message, response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            # Some player endpoints answer 200 with a non-JSON body
            return None

    # ------------------------------------------------------------------
    # Paged resources
    # ------------------------------------------------------------------

    def fetch_page(
        self,
        resource: str,
        offset: Optional[int] = None,
        cursor: Optional[str] = None,
        limit: int = DEFAULT_LIMIT,
        market: Optional[str] = None,
        **ids: str,
    ) -> Page:
        """
        Fetch one page of a paged resource.

        Args:
            resource: Key of PAGED_RESOURCES
            offset: Offset of the first row (offset-paged resources)
            cursor: ``after`` cursor (followed artists)
            limit: Page size
            market: Market for track relinking
            **ids: Path parameters (playlist_id, album_id, artist_id, show_id)

        Returns:
            The fetched Page

        Examples:
            >>> client.fetch_page("playlist_tracks", offset=100, playlist_id="37i9")
        """
        if resource not in PAGED_RESOURCES:
            raise ValueError(f"Unknown paged resource: {resource}")
        path = PAGED_RESOURCES[resource].format(**ids)
        params: Dict[str, Any] = {"limit": limit, "market": market}

        if resource == "followed_artists":
            params.update({"type": "artist", "after": cursor})
        elif resource != "recently_played":
            params["offset"] = offset or 0

        payload = self.request("GET", path, params) or {}
        if resource == "followed_artists":
            payload = payload.get("artists") or {}
        return Page.from_api(payload)

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------

    def control_playback(
        self, action: str, device_id: Optional[str] = None, **params: Any
    ) -> None:
        """
        Send a playback command to the active (or given) device.

        Actions: play, pause, next, previous, seek, shuffle, repeat,
        volume, queue, transfer.
        """
        device = {"device_id": device_id}
        match action:
            case "play":
                body: Dict[str, Any] = {}
                if params.get("context_uri"):
                    body["context_uri"] = params["context_uri"]
                if params.get("uris"):
                    body["uris"] = params["uris"]
                if params.get("offset") is not None and body:
                    body["offset"] = {"position": params["offset"]}
                self.request("PUT", "/me/player/play", device, body or None)
            case "pause":
                self.request("PUT", "/me/player/pause", device)
            case "next":
                self.request("POST", "/me/player/next", device)
            case "previous":
                self.request("POST", "/me/player/previous", device)
            case "seek":
                self.request(
                    "PUT", "/me/player/seek", {**device, "position_ms": params["position_ms"]}
                )
            case "shuffle":
                state = "true" if params["state"] else "false"
                self.request("PUT", "/me/player/shuffle", {**device, "state": state})
            case "repeat":
                state = getattr(params["state"], "value", params["state"])
                self.request("PUT", "/me/player/repeat", {**device, "state": state})
            case "volume":
                self.request(
                    "PUT",
                    "/me/player/volume",
                    {**device, "volume_percent": params["volume_percent"]},
                )
            case "queue":
                self.request("POST", "/me/player/queue", {**device, "uri": params["uri"]})
            case "transfer":
                self.request(
                    "PUT",
                    "/me/player",
                    body={"device_ids": [device_id], "play": params.get("play", True)},
                )
            case _:
                raise ValueError(f"Unknown playback action: {action}")
        logger.debug(f"Playback {action} {params if params else ''}")

    def current_playback(self, market: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """Playback state, or None when nothing is playing anywhere."""
        return self.request(
            "GET", "/me/player", {"market": market, "additional_types": "episode"}
        )

    def devices(self) -> List[Dict[str, Any]]:
        payload = self.request("GET", "/me/player/devices") or {}
        return payload.get("devices", [])

    def add_to_queue(self, uri: str, device_id: Optional[str] = None) -> None:
        self.control_playback("queue", device_id, uri=uri)

    def transfer_playback(self, device_id: str) -> None:
        self.control_playback("transfer", device_id)

    # ------------------------------------------------------------------
    # Search & recommendations
    # ------------------------------------------------------------------

    def search(
        self, query: str, category: str, limit: int, market: Optional[str] = None
    ) -> Page:
        """Search one category (track, artist, album, playlist, show)."""
        if category not in SEARCH_CATEGORIES:
            raise ValueError(f"Unknown search category: {category}")
        payload = self.request(
            "GET", "/search", {"q": query, "type": category, "limit": limit, "market": market}
        ) or {}
        page = Page.from_api(payload.get(f"{category}s") or {})
        # Spotify pads playlist/show results with nulls
        page.items = [item for item in page.items if item]
        return page

    def get_recommendations(
        self,
        seed_tracks: Optional[List[str]] = None,
        seed_artists: Optional[List[str]] = None,
        limit: int = 100,
        market: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        params = {
            "seed_tracks": ",".join(seed_tracks) if seed_tracks else None,
            "seed_artists": ",".join(seed_artists) if seed_artists else None,
            "limit": limit,
            "market": market,
        }
        payload = self.request("GET", "/recommendations", params) or {}
        return payload.get("tracks", [])

    # ------------------------------------------------------------------
    # Library
    # ------------------------------------------------------------------

    def mutate_library(self, action: str, ids: List[str]) -> None:
        """Save/remove or follow/unfollow items of the user's library."""
        if action not in LIBRARY_ACTIONS:
            raise ValueError(f"Unknown library action: {action}")
        method, path, fixed = LIBRARY_ACTIONS[action]
        if "{id}" in path:
            for item_id in ids:
                self.request(method, path.format(id=item_id))
        else:
            for chunk in _chunks(ids):
                self.request(method, path, {**fixed, "ids": ",".join(chunk)})
        logger.info(f"Library {action}: {', '.join(ids)}")

    def contains(self, kind: str, ids: List[str]) -> List[bool]:
        """Whether each id is saved/followed, in the order given."""
        path, fixed = CONTAINS_PATHS[kind]
        flags: List[bool] = []
        for chunk in _chunks(ids):
            flags.extend(self.request("GET", path, {**fixed, "ids": ",".join(chunk)}) or [])
        return flags

    def add_tracks_to_playlist(self, playlist_id: str, uris: List[str]) -> None:
        self.request("POST", f"/playlists/{playlist_id}/tracks", body={"uris": uris})

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def current_user(self) -> Dict[str, Any]:
        return self.request("GET", "/me") or {}

    def artist(self, artist_id: str) -> Dict[str, Any]:
        return self.request("GET", f"/artists/{artist_id}") or {}

    def artist_top_tracks(self, artist_id: str, market: Optional[str]) -> List[Dict[str, Any]]:
        payload = self.request(
            "GET", f"/artists/{artist_id}/top-tracks", {"market": market or "from_token"}
        ) or {}
        return payload.get("tracks", [])

    def artist_related_artists(self, artist_id: str) -> List[Dict[str, Any]]:
        payload = self.request("GET", f"/artists/{artist_id}/related-artists") or {}
        return payload.get("artists", [])

    def album(self, album_id: str, market: Optional[str] = None) -> Dict[str, Any]:
        return self.request("GET", f"/albums/{album_id}", {"market": market}) or {}

    def track(self, track_id: str) -> Dict[str, Any]:
        return self.request("GET", f"/tracks/{track_id}") or {}

    def audio_analysis(self, track_id: str) -> Dict[str, Any]:
        return self.request("GET", f"/audio-analysis/{track_id}") or {}
