"""Keyboard event handlers organized by block."""

from .utils import parse_key, key_event
from .empty import handle_empty_key
from .library import handle_library_key
from .playlist import handle_playlist_key
from .track_table import handle_track_table_key
from .search_results import handle_search_results_key
from .album_tracks import handle_album_tracks_key
from .album_list import handle_album_list_key
from .artist import handle_artist_key
from .artists import handle_artists_key
from .recently_played import handle_recently_played_key
from .made_for_you import handle_made_for_you_key
from .podcasts import handle_podcasts_key
from .episode_table import handle_episode_table_key
from .select_device import handle_select_device_key
from .input import handle_input_key
from .playbar import handle_playbar_key
from .help_menu import handle_help_menu_key
from .error_screen import handle_error_screen_key
from .dialog import handle_dialog_key
from .home import handle_home_key
from .basic_view import handle_basic_view_key
from .add_to_playlist import handle_add_to_playlist_key
from .analysis import handle_analysis_key

__all__ = [
    "parse_key",
    "key_event",
    "handle_empty_key",
    "handle_library_key",
    "handle_playlist_key",
    "handle_track_table_key",
    "handle_search_results_key",
    "handle_album_tracks_key",
    "handle_album_list_key",
    "handle_artist_key",
    "handle_artists_key",
    "handle_recently_played_key",
    "handle_made_for_you_key",
    "handle_podcasts_key",
    "handle_episode_table_key",
    "handle_select_device_key",
    "handle_input_key",
    "handle_playbar_key",
    "handle_help_menu_key",
    "handle_error_screen_key",
    "handle_dialog_key",
    "handle_home_key",
    "handle_basic_view_key",
    "handle_add_to_playlist_key",
    "handle_analysis_key",
]
