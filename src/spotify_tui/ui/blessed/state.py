"""Application state shared by the key handlers and the network worker.

ApplicationState is mutated in place and only while AppContext.lock is held.
Key handlers change it synchronously and queue Intents through dispatch();
the network worker writes API results back under a fresh lock acquisition.
"""

import queue
from dataclasses import dataclass, field
from typing import Any, Optional

from loguru import logger

from spotify_tui.core.config import Config
from spotify_tui.domain.models import (
    ActiveBlock,
    AlbumTableContext,
    ArtistBlock,
    EpisodeTableSort,
    RecommendationsContext,
    RouteId,
    SearchResultBlock,
    TrackTableContext,
)
from spotify_tui.domain.navigation import NavigationStack, Route
from spotify_tui.domain.paging import Page, PaginatedCache
from spotify_tui.domain.playback import PlaybackSnapshot, PlaybackTicker
from spotify_tui.network.intents import Intent
from spotify_tui.ui.blessed.helpers.scrolling import ViewportWindow, clamp_selection

# Going back within this many ms of a track start skips to the previous track
PREVIOUS_TRACK_RESTART_MS = 3000


@dataclass
class TrackTable:
    """Rows of the shared track table and where they came from."""

    tracks: list[dict[str, Any]] = field(default_factory=list)
    selected_index: int = 0
    context: Optional[TrackTableContext] = None


@dataclass
class SearchResults:
    """Search results grid.

    ``selected_block`` other than EMPTY implies the matching index is set.
    """

    tracks: Optional[Page] = None
    artists: Optional[Page] = None
    albums: Optional[Page] = None
    playlists: Optional[Page] = None
    shows: Optional[Page] = None
    selected_tracks_index: Optional[int] = None
    selected_artists_index: Optional[int] = None
    selected_album_index: Optional[int] = None
    selected_playlists_index: Optional[int] = None
    selected_shows_index: Optional[int] = None
    hovered_block: SearchResultBlock = SearchResultBlock.SONG_SEARCH
    selected_block: SearchResultBlock = SearchResultBlock.EMPTY

    _FIELDS = {
        SearchResultBlock.SONG_SEARCH: ("tracks", "selected_tracks_index"),
        SearchResultBlock.ARTIST_SEARCH: ("artists", "selected_artists_index"),
        SearchResultBlock.ALBUM_SEARCH: ("albums", "selected_album_index"),
        SearchResultBlock.PLAYLIST_SEARCH: ("playlists", "selected_playlists_index"),
        SearchResultBlock.SHOW_SEARCH: ("shows", "selected_shows_index"),
    }

    def items(self, block: SearchResultBlock) -> list[dict[str, Any]]:
        if block not in self._FIELDS:
            return []
        page = getattr(self, self._FIELDS[block][0])
        return page.items if page else []

    def index(self, block: SearchResultBlock) -> Optional[int]:
        if block not in self._FIELDS:
            return None
        return getattr(self, self._FIELDS[block][1])

    def set_index(self, block: SearchResultBlock, value: Optional[int]) -> None:
        if block in self._FIELDS:
            setattr(self, self._FIELDS[block][1], value)

    def selected_item(self) -> Optional[dict[str, Any]]:
        """Row under the cursor of the selected panel, if any."""
        index = self.index(self.selected_block)
        items = self.items(self.selected_block)
        if index is None or not 0 <= index < len(items):
            return None
        return items[index]


@dataclass
class SelectedAlbum:
    """Album opened from search results or the artist view."""

    album: dict[str, Any]
    tracks: Page
    selected_index: int = 0


@dataclass
class SelectedFullAlbum:
    """Saved album opened from the library; tracks are embedded."""

    album: dict[str, Any]
    selected_index: int = 0

    @property
    def tracks(self) -> list[dict[str, Any]]:
        return (self.album.get("tracks") or {}).get("items") or []


@dataclass
class ArtistView:
    """Artist page: top tracks, albums and related artists."""

    artist_id: str
    artist_name: str
    top_tracks: list[dict[str, Any]] = field(default_factory=list)
    albums: Optional[Page] = None
    related_artists: list[dict[str, Any]] = field(default_factory=list)
    selected_top_track_index: int = 0
    selected_album_index: int = 0
    selected_related_artist_index: int = 0
    artist_hovered_block: ArtistBlock = ArtistBlock.TOP_TRACKS
    artist_selected_block: ArtistBlock = ArtistBlock.EMPTY


@dataclass
class EpisodeTable:
    """Episodes of the show opened from the podcasts list."""

    show: Optional[dict[str, Any]] = None
    selected_index: int = 0
    sort: EpisodeTableSort = EpisodeTableSort.NEWEST_FIRST


@dataclass
class Library:
    """Paged collections reachable from the Library menu."""

    selected_index: int = 0
    saved_tracks: PaginatedCache = field(default_factory=PaginatedCache)
    saved_albums: PaginatedCache = field(default_factory=PaginatedCache)
    saved_artists: PaginatedCache = field(default_factory=PaginatedCache)
    saved_shows: PaginatedCache = field(default_factory=PaginatedCache)
    made_for_you_playlists: PaginatedCache = field(default_factory=PaginatedCache)
    show_episodes: PaginatedCache = field(default_factory=PaginatedCache)


@dataclass
class ApplicationState:
    """The single mutable aggregate behind AppContext.lock."""

    user_config: Config = field(default_factory=Config)
    io_tx: "queue.Queue[Optional[Intent]]" = field(default_factory=queue.Queue)

    # ============================================================================
    # NAVIGATION & ERRORS
    # ============================================================================
    navigation: NavigationStack = field(default_factory=NavigationStack)
    api_error: str = ""
    is_loading: bool = False
    viewport: ViewportWindow = field(default_factory=ViewportWindow)
    help_menu_page: int = 0
    help_menu_max_lines: int = 0
    home_scroll: int = 0

    # ============================================================================
    # PLAYBACK
    # ============================================================================
    current_playback: Optional[PlaybackSnapshot] = None
    ticker: PlaybackTicker = field(default_factory=PlaybackTicker)
    song_progress_ms: int = 0
    is_fetching_current_playback: bool = False
    seek_ms: Optional[int] = None  # Pending seek, applied when keys go quiet
    audio_analysis: Optional[dict[str, Any]] = None
    devices: list[dict[str, Any]] = field(default_factory=list)
    selected_device_index: Optional[int] = None
    device_id: Optional[str] = None
    user: Optional[dict[str, Any]] = None

    # ============================================================================
    # PLAYLISTS & TRACK TABLES
    # ============================================================================
    playlists: Optional[Page] = None
    selected_playlist_index: Optional[int] = None
    playlist_offset: int = 0
    playlist_tracks: Optional[Page] = None
    made_for_you_index: int = 0
    made_for_you_offset: int = 0
    made_for_you_tracks: Optional[Page] = None
    track_table: TrackTable = field(default_factory=TrackTable)
    recommended_tracks: list[dict[str, Any]] = field(default_factory=list)
    recommendations_seed: str = ""
    recommendations_context: Optional[RecommendationsContext] = None

    # ============================================================================
    # LIBRARY, ALBUMS, ARTISTS, SHOWS
    # ============================================================================
    library: Library = field(default_factory=Library)
    album_list_index: int = 0
    artists_list_index: int = 0
    shows_list_index: int = 0
    recently_played: Optional[Page] = None
    recently_played_index: int = 0
    selected_album: Optional[SelectedAlbum] = None
    selected_album_full: Optional[SelectedFullAlbum] = None
    album_table_context: AlbumTableContext = AlbumTableContext.FULL
    artist: Optional[ArtistView] = None
    episode_table: EpisodeTable = field(default_factory=EpisodeTable)
    search_results: SearchResults = field(default_factory=SearchResults)

    # ============================================================================
    # SAVED / FOLLOWED ID SETS
    # ============================================================================
    liked_song_ids: set[str] = field(default_factory=set)
    followed_artist_ids: set[str] = field(default_factory=set)
    saved_album_ids: set[str] = field(default_factory=set)
    saved_show_ids: set[str] = field(default_factory=set)

    # ============================================================================
    # INPUT, MOVEMENT COUNT, DIALOG
    # ============================================================================
    input: list[str] = field(default_factory=list)
    input_idx: int = 0
    input_cursor_position: int = 0
    movement_count: str = ""
    dialog: Optional[str] = None
    confirm: bool = False
    add_to_playlist_index: int = 0

    # ------------------------------------------------------------------
    # Intents & errors
    # ------------------------------------------------------------------

    def dispatch(self, action: str, **data: Any) -> Intent:
        """Queue an intent for the network worker."""
        intent = Intent(action, data)
        self.is_loading = True
        self.io_tx.put(intent)
        logger.debug(f"Dispatched {action} {data if data else ''}")
        return intent

    def handle_error(self, message: str) -> None:
        """Show an API failure on the Error route.

        A newer error replaces the message of an Error route already on top.
        """
        self.api_error = message
        if self.get_current_route().id != RouteId.ERROR:
            self.push_navigation_stack(RouteId.ERROR, ActiveBlock.ERROR)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def get_current_route(self) -> Route:
        return self.navigation.current()

    def push_navigation_stack(
        self, route_id: RouteId, active_block: ActiveBlock, context: Any = None
    ) -> Route:
        return self.navigation.push(route_id, active_block, context)

    def pop_navigation_stack(self) -> Optional[Route]:
        """Pop the current route; leaving a dialog discards its pending choice."""
        route = self.navigation.pop()
        if route is not None and route.id == RouteId.DIALOG:
            self.dialog = None
            self.confirm = False
        return route

    def set_current_route_state(
        self,
        active: Optional[ActiveBlock] = None,
        hovered: Optional[ActiveBlock] = None,
    ) -> None:
        self.navigation.set_current_state(active, hovered)

    def set_viewport(self, start: int, height: int) -> None:
        """Called by the renderer with the visible rows of the focused list."""
        self.viewport = ViewportWindow(start=max(start, 0), height=max(height, 0))

    # ------------------------------------------------------------------
    # Movement count
    # ------------------------------------------------------------------

    def push_movement_digit(self, digit: str) -> None:
        """Accumulate a numeric prefix; a leading zero is ignored."""
        if digit == "0" and not self.movement_count:
            return
        self.movement_count += digit

    def take_movement_count(self) -> Optional[int]:
        """Consume the numeric prefix. None when nothing was typed."""
        if not self.movement_count:
            return None
        count = int(self.movement_count)
        self.movement_count = ""
        return count

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def country(self) -> Optional[str]:
        """Market used for search and artist lookups."""
        if self.user_config.spotify.market:
            return self.user_config.spotify.market
        if self.user:
            return self.user.get("country")
        return None

    def playing_item(self) -> Optional[dict[str, Any]]:
        if self.current_playback is None:
            return None
        return self.current_playback.item

    def page_size(self) -> int:
        return self.user_config.behavior.large_search_limit

    def selected_playlist(self) -> Optional[dict[str, Any]]:
        if self.playlists is None or self.selected_playlist_index is None:
            return None
        items = self.playlists.items
        if 0 <= self.selected_playlist_index < len(items):
            return items[self.selected_playlist_index]
        return None

    def set_tracks_to_table(self, tracks: list[dict[str, Any]]) -> None:
        """Replace the track table rows, keeping the cursor in range."""
        self.track_table.tracks = tracks
        self.track_table.selected_index = clamp_selection(
            self.track_table.selected_index, len(tracks)
        )

    def set_saved_tracks_to_table(self) -> None:
        page = self.library.saved_tracks.get_current()
        if page is None:
            return
        self.set_tracks_to_table([row["track"] for row in page.items if row.get("track")])

    # ------------------------------------------------------------------
    # Playback commands
    # ------------------------------------------------------------------

    def toggle_playback(self) -> None:
        if self.current_playback is not None and self.current_playback.is_playing:
            self.dispatch("pause_playback")
        else:
            self.dispatch("start_playback", context_uri=None, uris=None, offset=None)

    def previous_track(self) -> None:
        if self.song_progress_ms >= PREVIOUS_TRACK_RESTART_MS:
            self.dispatch("seek", position_ms=0)
        else:
            self.dispatch("previous_track")

    def seek_forwards(self) -> None:
        item = self.playing_item()
        if not item:
            return
        duration_ms = item.get("duration_ms") or 0
        old_progress = self.seek_ms if self.seek_ms is not None else self.song_progress_ms
        self.seek_ms = min(
            old_progress + self.user_config.behavior.seek_milliseconds, duration_ms
        )

    def seek_backwards(self) -> None:
        if not self.playing_item():
            return
        old_progress = self.seek_ms if self.seek_ms is not None else self.song_progress_ms
        self.seek_ms = max(old_progress - self.user_config.behavior.seek_milliseconds, 0)

    def apply_seek(self) -> None:
        """Send the pending seek once the user stops pressing seek keys."""
        if self.seek_ms is None:
            return
        position_ms = self.seek_ms
        self.seek_ms = None
        self.song_progress_ms = position_ms
        if self.current_playback is not None:
            self.current_playback.progress_ms = position_ms
            self.current_playback.polled_at = self.ticker.clock()
        self.dispatch("seek", position_ms=position_ms)

    def _change_volume(self, delta: int) -> None:
        if self.current_playback is None:
            return
        current = self.current_playback.volume_percent or 0
        volume = max(0, min(current + delta, 100))
        if volume != current:
            self.dispatch("change_volume", volume_percent=volume)

    def increase_volume(self) -> None:
        self._change_volume(self.user_config.behavior.volume_increment)

    def decrease_volume(self) -> None:
        self._change_volume(-self.user_config.behavior.volume_increment)

    def shuffle(self) -> None:
        if self.current_playback is not None:
            self.dispatch("shuffle", state=not self.current_playback.shuffle_state)

    def repeat(self) -> None:
        if self.current_playback is not None:
            self.dispatch("repeat", state=self.current_playback.repeat_state.next())

    def update_on_tick(self) -> None:
        """Poll playback when due and advance the interpolated progress."""
        if self.ticker.due() and not self.is_fetching_current_playback:
            self.is_fetching_current_playback = True
            self.ticker.mark_polled()
            self.dispatch("get_current_playback")

        progress = self.ticker.interpolate(self.current_playback)
        if progress is not None and self.seek_ms is None:
            self.song_progress_ms = progress

    # ------------------------------------------------------------------
    # Compound actions shared by several blocks
    # ------------------------------------------------------------------

    def get_playlist_tracks(
        self, playlist_id: str, context: TrackTableContext = TrackTableContext.MY_PLAYLISTS
    ) -> None:
        """Open a playlist in the track table from its first page."""
        self.track_table.context = context
        self.playlist_offset = 0
        self.dispatch("get_playlist_tracks", playlist_id=playlist_id, offset=0)

    def get_devices(self) -> None:
        self.dispatch("get_devices")

    def get_artist(self, artist_id: str, artist_name: str) -> None:
        """Open the artist view; the worker fills it in."""
        self.artist = None
        self.dispatch(
            "get_artist",
            artist_id=artist_id,
            artist_name=artist_name,
            country=self.country(),
        )
        self.push_navigation_stack(RouteId.ARTIST, ActiveBlock.ARTIST_BLOCK)

    def get_recommendations_for_track(self, track: dict[str, Any]) -> None:
        """Start radio seeded from a track; the seed plays first."""
        if not track.get("id"):
            return
        self.recommendations_seed = track.get("name", "")
        self.recommendations_context = RecommendationsContext.SONG
        self.dispatch(
            "get_recommendations_for_seed",
            seed_artists=None,
            seed_tracks=[track["id"]],
            first_track=track,
            country=self.country(),
        )

    def get_recommendations_for_artist(self, artist: dict[str, Any]) -> None:
        if not artist.get("id"):
            return
        self.recommendations_seed = artist.get("name", "")
        self.recommendations_context = RecommendationsContext.ARTIST
        self.dispatch(
            "get_recommendations_for_seed",
            seed_artists=[artist["id"]],
            seed_tracks=None,
            first_track=None,
            country=self.country(),
        )

    def toggle_save_track(self, track_id: Optional[str]) -> None:
        if track_id:
            self.dispatch("toggle_save_track", track_id=track_id)

    def add_item_to_queue(self, item: Optional[dict[str, Any]]) -> None:
        if item and item.get("uri"):
            self.dispatch("add_item_to_queue", uri=item["uri"])

    def get_audio_analysis(self) -> None:
        item = self.playing_item()
        if not item or item.get("type", "track") != "track" or not item.get("id"):
            return
        self.dispatch("get_audio_analysis", track_id=item["id"])
        self.push_navigation_stack(RouteId.ANALYSIS, ActiveBlock.ANALYSIS)
