"""
Closed tag sets for routes, focus blocks and view contexts.

Remote payloads (tracks, albums, artists, playlists, shows, episodes,
devices) stay as the plain dicts the Spotify Web API returns; only the
state machine vocabulary is modelled here.
"""

from enum import Enum


class RouteId(str, Enum):
    """Identity of a view in the navigation history."""

    HOME = "home"
    SEARCH = "search"
    TRACK_TABLE = "track_table"
    ALBUM_TRACKS = "album_tracks"
    ALBUM_LIST = "album_list"
    ARTIST = "artist"
    ARTISTS = "artists"
    RECENTLY_PLAYED = "recently_played"
    MADE_FOR_YOU = "made_for_you"
    PODCASTS = "podcasts"
    PODCAST_EPISODES = "podcast_episodes"
    RECOMMENDATIONS = "recommendations"
    SELECTED_DEVICE = "selected_device"
    ERROR = "error"
    ANALYSIS = "analysis"
    BASIC_VIEW = "basic_view"
    DIALOG = "dialog"
    ADD_TO_PLAYLIST = "add_to_playlist"


class ActiveBlock(str, Enum):
    """On-screen panel that can be hovered or active."""

    ANALYSIS = "analysis"
    PLAY_BAR = "play_bar"
    ALBUM_TRACKS = "album_tracks"
    ALBUM_LIST = "album_list"
    ARTIST_BLOCK = "artist_block"
    EMPTY = "empty"
    ERROR = "error"
    HELP_MENU = "help_menu"
    HOME = "home"
    INPUT = "input"
    LIBRARY = "library"
    MY_PLAYLISTS = "my_playlists"
    PODCASTS = "podcasts"
    EPISODE_TABLE = "episode_table"
    RECENTLY_PLAYED = "recently_played"
    SEARCH_RESULT_BLOCK = "search_result_block"
    SELECT_DEVICE = "select_device"
    TRACK_TABLE = "track_table"
    MADE_FOR_YOU = "made_for_you"
    ARTISTS = "artists"
    BASIC_VIEW = "basic_view"
    DIALOG = "dialog"
    ADD_TO_PLAYLIST = "add_to_playlist"


class SearchResultBlock(str, Enum):
    """Panels of the search results grid."""

    EMPTY = "empty"
    SONG_SEARCH = "song_search"
    ALBUM_SEARCH = "album_search"
    ARTIST_SEARCH = "artist_search"
    PLAYLIST_SEARCH = "playlist_search"
    SHOW_SEARCH = "show_search"


class ArtistBlock(str, Enum):
    """Panels of the artist view."""

    EMPTY = "empty"
    TOP_TRACKS = "top_tracks"
    ALBUMS = "albums"
    RELATED_ARTISTS = "related_artists"


class TrackTableContext(str, Enum):
    """Where the rows of the shared track table came from."""

    MY_PLAYLISTS = "my_playlists"
    SAVED_TRACKS = "saved_tracks"
    ALBUM_SEARCH = "album_search"
    PLAYLIST_SEARCH = "playlist_search"
    RECOMMENDED_TRACKS = "recommended_tracks"
    MADE_FOR_YOU = "made_for_you"


class AlbumTableContext(str, Enum):
    """Simplified albums come from search, full albums from the library."""

    SIMPLIFIED = "simplified"
    FULL = "full"


class RecommendationsContext(str, Enum):
    """Kind of seed a recommendation list was built from."""

    SONG = "song"
    ARTIST = "artist"


class DialogContext(str, Enum):
    """What a confirmation dialog is asking about."""

    PLAYLIST_WINDOW = "playlist_window"
    PLAYLIST_SEARCH = "playlist_search"


class EpisodeTableSort(str, Enum):
    """Display order of a show's episodes."""

    NEWEST_FIRST = "newest_first"
    OLDEST_FIRST = "oldest_first"


class RepeatState(str, Enum):
    """Repeat mode, cycled Off -> Context -> Track -> Off."""

    OFF = "off"
    CONTEXT = "context"
    TRACK = "track"

    def next(self) -> "RepeatState":
        order = [RepeatState.OFF, RepeatState.CONTEXT, RepeatState.TRACK]
        return order[(order.index(self) + 1) % len(order)]


LIBRARY_OPTIONS = [
    "Made For You",
    "Recently Played",
    "Liked Songs",
    "Albums",
    "Artists",
    "Podcasts",
]
