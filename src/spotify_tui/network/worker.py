"""
Network worker: the single consumer of the intent queue.

Intents are processed one at a time in submission order. Remote calls run
with the state lock released; their results are written back under a fresh
``ctx.locked()`` acquisition, so the UI never waits on the network.
"""

import queue
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional

import requests
from loguru import logger

from spotify_tui.context import AppContext
from spotify_tui.core.config import save_device_id
from spotify_tui.domain.models import (
    ActiveBlock,
    AlbumTableContext,
    EpisodeTableSort,
    RouteId,
    TrackTableContext,
)
from spotify_tui.domain.paging import Page, PaginatedCache
from spotify_tui.domain.playback import PlaybackSnapshot
from spotify_tui.providers.spotify import SpotifyApiError, SpotifyClient
from spotify_tui.ui.blessed.state import (
    ApplicationState,
    ArtistView,
    SearchResults,
    SelectedAlbum,
)

from .intents import Intent

# Number of recommendations fetched for song and artist radio
RECOMMENDATIONS_LIMIT = 100

MADE_FOR_YOU_QUERY = "Made For You"


def _ids(items: list[dict[str, Any]]) -> list[str]:
    return [item["id"] for item in items if item and item.get("id")]


def _update_id_set(target: set[str], ids: list[str], flags: list[bool]) -> None:
    """Mark each id saved/unsaved according to the matching flag."""
    for item_id, flag in zip(ids, flags):
        if flag:
            target.add(item_id)
        else:
            target.discard(item_id)


class Network:
    """
    Executes intents against the Spotify client.

    Attributes:
        client: Authorized Spotify API client
        ctx: Shared application context
    """

    def __init__(self, client: SpotifyClient, ctx: AppContext):
        self.client = client
        self.ctx = ctx

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def large_limit(self) -> int:
        return self.ctx.config.behavior.large_search_limit

    @property
    def small_limit(self) -> int:
        return self.ctx.config.behavior.small_search_limit

    def _device_id(self) -> Optional[str]:
        with self.ctx.locked() as app:
            return app.device_id

    def _market(self) -> Optional[str]:
        with self.ctx.locked() as app:
            return app.country()

    def _refresh_playback(self) -> None:
        """Poll playback on the next tick after a successful command."""
        with self.ctx.locked() as app:
            app.ticker.request_poll()

    def _check_saved(self, kind: str, ids: list[str], attr: str) -> None:
        """Refresh one of the saved/followed id sets for the given ids."""
        if not ids:
            return
        flags = self.client.contains(kind, ids)
        with self.ctx.locked() as app:
            _update_id_set(getattr(app, attr), ids, flags)

    def _show_track_table(
        self, app: ApplicationState, tracks: list[dict[str, Any]], route_id: RouteId
    ) -> None:
        app.set_tracks_to_table(tracks)
        app.track_table.selected_index = 0
        if app.get_current_route().id != route_id:
            app.push_navigation_stack(route_id, ActiveBlock.TRACK_TABLE)

    # ------------------------------------------------------------------
    # Queue processing
    # ------------------------------------------------------------------

    def process(self, intent: Intent) -> None:
        """Run one intent, routing any failure to the Error route."""
        try:
            self.handle_intent(intent)
        except (SpotifyApiError, requests.RequestException) as e:
            message = getattr(e, "message", str(e))
            logger.warning(f"{intent.action} failed: {message}")
            self._fail(intent, message)
        except Exception as e:
            logger.exception(f"Unexpected error handling {intent.action}")
            self._fail(intent, str(e))

    def _fail(self, intent: Intent, message: str) -> None:
        with self.ctx.locked() as app:
            if intent.action == "get_current_playback":
                app.is_fetching_current_playback = False
            cache = self._cache_for(app, intent.action)
            if cache is not None:
                cache.fail_fetch()
            app.handle_error(message)

    @staticmethod
    def _cache_for(app: ApplicationState, action: str) -> Optional[PaginatedCache]:
        return {
            "get_current_saved_tracks": app.library.saved_tracks,
            "get_current_user_saved_albums": app.library.saved_albums,
            "get_followed_artists": app.library.saved_artists,
            "get_current_user_saved_shows": app.library.saved_shows,
            "get_show_episodes": app.library.show_episodes,
        }.get(action)

    def run(self, intents: "queue.Queue[Optional[Intent]]") -> None:
        """Consume intents until the None sentinel arrives."""
        logger.info("Network worker started")
        while True:
            intent = intents.get()
            if intent is None:
                break
            self.process(intent)
            with self.ctx.locked() as app:
                app.is_loading = not intents.empty()
        logger.info("Network worker stopped")

    def handle_intent(self, intent: Intent) -> None:
        """Execute a single intent.

        Raises:
            SpotifyApiError: When the remote call fails
        """
        data = intent.data
        logger.debug(f"Handling {intent.action}")

        match intent.action:
            # Playback
            case "get_current_playback":
                self.get_current_playback()
            case "start_playback":
                self.client.control_playback(
                    "play",
                    self._device_id(),
                    context_uri=data.get("context_uri"),
                    uris=data.get("uris"),
                    offset=data.get("offset"),
                )
                self._refresh_playback()
            case "pause_playback":
                self.client.control_playback("pause", self._device_id())
                self._refresh_playback()
            case "next_track":
                self.client.control_playback("next", self._device_id())
                self._refresh_playback()
            case "previous_track":
                self.client.control_playback("previous", self._device_id())
                self._refresh_playback()
            case "seek":
                self.client.control_playback(
                    "seek", self._device_id(), position_ms=data["position_ms"]
                )
                self._refresh_playback()
            case "shuffle":
                self.client.control_playback("shuffle", self._device_id(), state=data["state"])
                with self.ctx.locked() as app:
                    if app.current_playback is not None:
                        app.current_playback.shuffle_state = data["state"]
                self._refresh_playback()
            case "repeat":
                self.client.control_playback("repeat", self._device_id(), state=data["state"])
                with self.ctx.locked() as app:
                    if app.current_playback is not None:
                        app.current_playback.repeat_state = data["state"]
                self._refresh_playback()
            case "change_volume":
                self.client.control_playback(
                    "volume", self._device_id(), volume_percent=data["volume_percent"]
                )
                with self.ctx.locked() as app:
                    if app.current_playback is not None:
                        app.current_playback.device["volume_percent"] = data["volume_percent"]
                self._refresh_playback()
            case "add_item_to_queue":
                self.client.add_to_queue(data["uri"], self._device_id())
            case "get_devices":
                self.get_devices()
            case "transfer_playback_to_device":
                self.transfer_playback_to_device(data["device_id"])

            # Library pages
            case "get_user":
                user = self.client.current_user()
                with self.ctx.locked() as app:
                    app.user = user
            case "get_playlists":
                self.get_playlists()
            case "get_playlist_tracks":
                self.get_playlist_tracks(data["playlist_id"], data.get("offset") or 0)
            case "get_made_for_you_playlist_tracks":
                self.get_made_for_you_playlist_tracks(
                    data["playlist_id"], data.get("offset") or 0
                )
            case "get_current_saved_tracks":
                self.get_current_saved_tracks(data.get("offset"))
            case "get_current_user_saved_albums":
                self.get_current_user_saved_albums(data.get("offset"))
            case "get_followed_artists":
                self.get_followed_artists(data.get("after"))
            case "get_current_user_saved_shows":
                self.get_current_user_saved_shows(data.get("offset"))
            case "get_recently_played":
                self.get_recently_played()
            case "get_made_for_you":
                self.get_made_for_you()
            case "get_show_episodes":
                self.get_show_episodes(data["show"], data.get("offset"))

            # Lookups
            case "get_search_results":
                self.get_search_results(data["query"], data.get("country"))
            case "get_album":
                album = self.client.album(data["album_id"], self._market())
                self._open_album(album, Page.from_api(album.get("tracks") or {}))
            case "get_album_tracks":
                album = data["album"]
                tracks = self.client.fetch_page(
                    "album_tracks", offset=0, limit=self.large_limit, album_id=album["id"]
                )
                self._open_album(album, tracks)
            case "get_artist":
                self.get_artist(data["artist_id"], data.get("artist_name", ""), data.get("country"))
            case "get_recommendations_for_seed":
                self.get_recommendations_for_seed(
                    data.get("seed_artists"),
                    data.get("seed_tracks"),
                    data.get("first_track"),
                    data.get("country"),
                )
            case "get_audio_analysis":
                analysis = self.client.audio_analysis(data["track_id"])
                with self.ctx.locked() as app:
                    app.audio_analysis = analysis

            # Library mutations
            case "toggle_save_track":
                self.toggle_save_track(data["track_id"])
            case "current_user_saved_album_add":
                self.client.mutate_library("save_albums", [data["album_id"]])
                with self.ctx.locked() as app:
                    app.saved_album_ids.add(data["album_id"])
                    app.dispatch("get_current_user_saved_albums", offset=None)
            case "current_user_saved_album_delete":
                self.client.mutate_library("remove_albums", [data["album_id"]])
                with self.ctx.locked() as app:
                    app.saved_album_ids.discard(data["album_id"])
                    app.dispatch("get_current_user_saved_albums", offset=None)
            case "user_follow_artists":
                self.client.mutate_library("follow_artists", data["artist_ids"])
                with self.ctx.locked() as app:
                    app.followed_artist_ids.update(data["artist_ids"])
                    app.dispatch("get_followed_artists", after=None)
            case "user_unfollow_artists":
                self.client.mutate_library("unfollow_artists", data["artist_ids"])
                with self.ctx.locked() as app:
                    app.followed_artist_ids.difference_update(data["artist_ids"])
                    app.dispatch("get_followed_artists", after=None)
            case "user_follow_playlist":
                self.client.mutate_library("follow_playlist", [data["playlist_id"]])
                with self.ctx.locked() as app:
                    app.dispatch("get_playlists")
            case "user_unfollow_playlist":
                self.client.mutate_library("unfollow_playlist", [data["playlist_id"]])
                with self.ctx.locked() as app:
                    app.dispatch("get_playlists")
            case "user_follow_show":
                self.client.mutate_library("save_shows", [data["show_id"]])
                with self.ctx.locked() as app:
                    app.saved_show_ids.add(data["show_id"])
                    app.dispatch("get_current_user_saved_shows", offset=None)
            case "user_unfollow_show":
                self.client.mutate_library("remove_shows", [data["show_id"]])
                with self.ctx.locked() as app:
                    app.saved_show_ids.discard(data["show_id"])
                    app.dispatch("get_current_user_saved_shows", offset=None)
            case "add_track_to_playlist":
                self.client.add_tracks_to_playlist(
                    data["playlist_id"], [f"spotify:track:{data['track_id']}"]
                )
            case other:
                logger.warning(f"No handler for intent {other}")

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------

    def get_current_playback(self) -> None:
        payload = self.client.current_playback(self._market())
        with self.ctx.locked() as app:
            previous = app.playing_item()
            previous_id = previous.get("id") if previous else None
            app.current_playback = (
                PlaybackSnapshot.from_api(payload, app.ticker.clock()) if payload else None
            )
            app.is_fetching_current_playback = False
            if app.current_playback is not None and app.seek_ms is None:
                app.song_progress_ms = app.current_playback.progress_ms or 0
            item = app.playing_item()

        # Only ask about the liked flag when the track changes
        if item and item.get("type", "track") == "track" and item.get("id") != previous_id:
            self._check_saved("tracks", [item["id"]], "liked_song_ids")

    def get_devices(self) -> None:
        devices = self.client.devices()
        with self.ctx.locked() as app:
            app.devices = devices
            current = next(
                (i for i, d in enumerate(devices) if d.get("id") == app.device_id), None
            )
            app.selected_device_index = current if current is not None else (0 if devices else None)
            app.push_navigation_stack(RouteId.SELECTED_DEVICE, ActiveBlock.SELECT_DEVICE)

    def transfer_playback_to_device(self, device_id: str) -> None:
        self.client.transfer_playback(device_id)
        save_device_id(device_id)
        with self.ctx.locked() as app:
            app.device_id = device_id
            app.ticker.request_poll()

    # ------------------------------------------------------------------
    # Library pages
    # ------------------------------------------------------------------

    def get_playlists(self) -> None:
        page = self.client.fetch_page("playlists", offset=0, limit=self.large_limit)
        with self.ctx.locked() as app:
            app.playlists = page
            if not page.items:
                app.selected_playlist_index = None
            elif app.selected_playlist_index is None or app.selected_playlist_index >= len(page.items):
                app.selected_playlist_index = 0

    def get_playlist_tracks(self, playlist_id: str, offset: int) -> None:
        page = self.client.fetch_page(
            "playlist_tracks",
            offset=offset,
            limit=self.large_limit,
            market=self._market(),
            playlist_id=playlist_id,
        )
        tracks = [row["track"] for row in page.items if row and row.get("track")]
        with self.ctx.locked() as app:
            app.playlist_tracks = page
            app.playlist_offset = page.offset
            self._show_track_table(app, tracks, RouteId.TRACK_TABLE)
        self._check_saved("tracks", _ids(tracks), "liked_song_ids")

    def get_made_for_you_playlist_tracks(self, playlist_id: str, offset: int) -> None:
        page = self.client.fetch_page(
            "playlist_tracks",
            offset=offset,
            limit=self.large_limit,
            market=self._market(),
            playlist_id=playlist_id,
        )
        tracks = [row["track"] for row in page.items if row and row.get("track")]
        with self.ctx.locked() as app:
            app.made_for_you_tracks = page
            app.made_for_you_offset = page.offset
            self._show_track_table(app, tracks, RouteId.TRACK_TABLE)
        self._check_saved("tracks", _ids(tracks), "liked_song_ids")

    def get_current_saved_tracks(self, offset: Optional[int]) -> None:
        """Fetch a page of liked songs; offset None starts the cache over."""
        page = self.client.fetch_page(
            "saved_tracks", offset=offset, limit=self.large_limit, market=self._market()
        )
        tracks = [row["track"] for row in page.items if row and row.get("track")]
        with self.ctx.locked() as app:
            cache = app.library.saved_tracks
            if offset is None:
                cache.clear()
            cache.complete_fetch(page)
            # Every row of the saved tracks endpoint is liked by definition
            app.liked_song_ids.update(_ids(tracks))
            if app.track_table.context == TrackTableContext.SAVED_TRACKS:
                app.set_saved_tracks_to_table()
                app.track_table.selected_index = 0

    def get_current_user_saved_albums(self, offset: Optional[int]) -> None:
        page = self.client.fetch_page(
            "saved_albums", offset=offset, limit=self.large_limit, market=self._market()
        )
        with self.ctx.locked() as app:
            cache = app.library.saved_albums
            if offset is None:
                cache.clear()
                app.album_list_index = 0
            cache.complete_fetch(page)
            app.saved_album_ids.update(
                row["album"]["id"] for row in page.items if row and row.get("album")
            )

    def get_followed_artists(self, after: Optional[str]) -> None:
        page = self.client.fetch_page("followed_artists", cursor=after, limit=self.large_limit)
        with self.ctx.locked() as app:
            cache = app.library.saved_artists
            if after is None:
                cache.clear()
                app.artists_list_index = 0
            cache.complete_fetch(page)
            app.followed_artist_ids.update(_ids(page.items))

    def get_current_user_saved_shows(self, offset: Optional[int]) -> None:
        page = self.client.fetch_page("saved_shows", offset=offset, limit=self.large_limit)
        with self.ctx.locked() as app:
            cache = app.library.saved_shows
            if offset is None:
                cache.clear()
                app.shows_list_index = 0
            cache.complete_fetch(page)
            app.saved_show_ids.update(
                row["show"]["id"] for row in page.items if row and row.get("show")
            )

    def get_recently_played(self) -> None:
        page = self.client.fetch_page("recently_played", limit=self.large_limit)
        tracks = [row["track"] for row in page.items if row and row.get("track")]
        with self.ctx.locked() as app:
            app.recently_played = page
            app.recently_played_index = 0
        self._check_saved("tracks", _ids(tracks), "liked_song_ids")

    def get_made_for_you(self) -> None:
        """Collect Spotify-owned "Made For You" playlists via search."""
        page = self.client.search(
            MADE_FOR_YOU_QUERY, "playlist", self.large_limit, self._market()
        )
        page.items = [
            playlist
            for playlist in page.items
            if (playlist.get("owner") or {}).get("id") == "spotify"
        ]
        with self.ctx.locked() as app:
            cache = app.library.made_for_you_playlists
            cache.clear()
            cache.complete_fetch(page)
            app.made_for_you_index = 0

    def get_show_episodes(self, show: dict[str, Any], offset: Optional[int]) -> None:
        page = self.client.fetch_page(
            "show_episodes",
            offset=offset,
            limit=self.large_limit,
            market=self._market(),
            show_id=show["id"],
        )
        with self.ctx.locked() as app:
            cache = app.library.show_episodes
            table = app.episode_table
            if offset is None:
                cache.clear()
                table.show = show
                table.sort = EpisodeTableSort.NEWEST_FIRST
                table.selected_index = 0
            elif table.sort == EpisodeTableSort.OLDEST_FIRST:
                page.items.reverse()
            cache.complete_fetch(page)
            if app.get_current_route().id != RouteId.PODCAST_EPISODES:
                app.push_navigation_stack(RouteId.PODCAST_EPISODES, ActiveBlock.EPISODE_TABLE)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_search_results(self, query: str, country: Optional[str]) -> None:
        """Run the five category searches in parallel and publish them together."""
        limits = {
            "track": self.large_limit,
            "artist": self.small_limit,
            "album": self.small_limit,
            "playlist": self.small_limit,
            "show": self.small_limit,
        }
        with ThreadPoolExecutor(max_workers=len(limits), thread_name_prefix="search") as pool:
            futures = {
                category: pool.submit(self.client.search, query, category, limit, country)
                for category, limit in limits.items()
            }
            pages = {category: future.result() for category, future in futures.items()}

        with self.ctx.locked() as app:
            previous = app.search_results
            app.search_results = SearchResults(
                tracks=pages["track"],
                artists=pages["artist"],
                albums=pages["album"],
                playlists=pages["playlist"],
                shows=pages["show"],
                hovered_block=previous.hovered_block,
            )

        self._check_saved("tracks", _ids(pages["track"].items), "liked_song_ids")
        self._check_saved("artists", _ids(pages["artist"].items), "followed_artist_ids")
        self._check_saved("albums", _ids(pages["album"].items), "saved_album_ids")
        self._check_saved("shows", _ids(pages["show"].items), "saved_show_ids")

    def _open_album(self, album: dict[str, Any], tracks: Page) -> None:
        with self.ctx.locked() as app:
            app.selected_album = SelectedAlbum(album=album, tracks=tracks)
            app.album_table_context = AlbumTableContext.SIMPLIFIED
            app.push_navigation_stack(RouteId.ALBUM_TRACKS, ActiveBlock.ALBUM_TRACKS)
        self._check_saved("tracks", _ids(tracks.items), "liked_song_ids")

    def get_artist(self, artist_id: str, artist_name: str, country: Optional[str]) -> None:
        albums = self.client.fetch_page(
            "artist_albums", offset=0, limit=self.large_limit, market=country, artist_id=artist_id
        )
        top_tracks = self.client.artist_top_tracks(artist_id, country)
        try:
            related = self.client.artist_related_artists(artist_id)
        except SpotifyApiError as e:
            # Not available to every app; the rest of the view still works
            logger.warning(f"Related artists unavailable for {artist_id}: {e.message}")
            related = []
        if not artist_name:
            artist_name = self.client.artist(artist_id).get("name", "")

        with self.ctx.locked() as app:
            app.artist = ArtistView(
                artist_id=artist_id,
                artist_name=artist_name,
                top_tracks=top_tracks,
                albums=albums,
                related_artists=related,
            )
        self._check_saved("tracks", _ids(top_tracks), "liked_song_ids")
        self._check_saved("artists", [artist_id] + _ids(related), "followed_artist_ids")

    def get_recommendations_for_seed(
        self,
        seed_artists: Optional[list[str]],
        seed_tracks: Optional[list[str]],
        first_track: Optional[dict[str, Any]],
        country: Optional[str],
    ) -> None:
        """Build a radio queue and start playing it from the top."""
        tracks = self.client.get_recommendations(
            seed_tracks=seed_tracks,
            seed_artists=seed_artists,
            limit=RECOMMENDATIONS_LIMIT,
            market=country,
        )
        if first_track is not None:
            tracks = [first_track] + [t for t in tracks if t.get("id") != first_track.get("id")]

        with self.ctx.locked() as app:
            app.recommended_tracks = tracks
            app.track_table.context = TrackTableContext.RECOMMENDED_TRACKS
            self._show_track_table(app, tracks, RouteId.RECOMMENDATIONS)
            device_id = app.device_id

        self._check_saved("tracks", _ids(tracks), "liked_song_ids")
        uris = [t["uri"] for t in tracks if t.get("uri")]
        if uris:
            self.client.control_playback("play", device_id, uris=uris, offset=0)
            self._refresh_playback()

    # ------------------------------------------------------------------
    # Library mutations
    # ------------------------------------------------------------------

    def toggle_save_track(self, track_id: str) -> None:
        """Save or unsave a track depending on its current liked flag."""
        with self.ctx.locked() as app:
            liked = track_id in app.liked_song_ids

        if liked:
            self.client.mutate_library("remove_tracks", [track_id])
        else:
            self.client.mutate_library("save_tracks", [track_id])

        with self.ctx.locked() as app:
            if liked:
                app.liked_song_ids.discard(track_id)
            else:
                app.liked_song_ids.add(track_id)


def start_network_thread(
    network: Network, intents: "queue.Queue[Optional[Intent]]"
) -> threading.Thread:
    """Start the daemon thread that drains the intent queue."""
    thread = threading.Thread(
        target=network.run, args=(intents,), daemon=True, name="network-worker"
    )
    thread.start()
    return thread
