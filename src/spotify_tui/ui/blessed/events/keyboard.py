"""Keyboard event dispatcher.

Every key press goes through handle_event() with the state lock held:

1. The search input swallows every key while it is focused.
2. The back key pops the navigation stack (quitting at the Home floor).
3. Escape, digit counts and the global playback/navigation keys.
4. Everything else goes to the handler of the route's active block.

Key Functions:
    - handle_key: Parse a blessed Keystroke and dispatch it
    - handle_event: Dispatch an already parsed event
"""

from blessed.keyboard import Keystroke
from loguru import logger

from spotify_tui.domain.models import (
    ActiveBlock,
    AlbumTableContext,
    ArtistBlock,
    RouteId,
    SearchResultBlock,
    TrackTableContext,
)
from spotify_tui.ui.blessed.state import ApplicationState

from .keys import (
    handle_add_to_playlist_key,
    handle_album_list_key,
    handle_album_tracks_key,
    handle_analysis_key,
    handle_artist_key,
    handle_artists_key,
    handle_basic_view_key,
    handle_dialog_key,
    handle_empty_key,
    handle_episode_table_key,
    handle_error_screen_key,
    handle_help_menu_key,
    handle_home_key,
    handle_input_key,
    handle_library_key,
    handle_made_for_you_key,
    handle_playbar_key,
    handle_playlist_key,
    handle_podcasts_key,
    handle_recently_played_key,
    handle_search_results_key,
    handle_select_device_key,
    handle_track_table_key,
    parse_key,
)
from .keys.common import is_key


def handle_escape(app: ApplicationState) -> None:
    """Step focus back one level for the active block."""
    match app.get_current_route().active_block:
        case ActiveBlock.SEARCH_RESULT_BLOCK:
            app.search_results.selected_block = SearchResultBlock.EMPTY
        case ActiveBlock.ARTIST_BLOCK:
            if app.artist is not None:
                app.artist.artist_selected_block = ArtistBlock.EMPTY
        case ActiveBlock.ERROR | ActiveBlock.DIALOG:
            app.pop_navigation_stack()
        case ActiveBlock.SELECT_DEVICE | ActiveBlock.ANALYSIS:
            pass
        case _:
            app.set_current_route_state(active=ActiveBlock.EMPTY)


# ============================================================================
# JUMPS FROM THE PLAYING ITEM
# ============================================================================


def handle_jump_to_album(app: ApplicationState) -> None:
    item = app.playing_item()
    if not item or item.get("type", "track") != "track" or not item.get("album"):
        return
    app.album_table_context = AlbumTableContext.SIMPLIFIED
    app.track_table.context = TrackTableContext.ALBUM_SEARCH
    app.dispatch("get_album_tracks", album=item["album"])


def handle_jump_to_artist_album(app: ApplicationState) -> None:
    item = app.playing_item()
    if not item or item.get("type", "track") != "track":
        return
    artists = item.get("artists") or []
    if artists and artists[0].get("id"):
        app.get_artist(artists[0]["id"], artists[0].get("name", ""))


def handle_jump_to_context(app: ApplicationState) -> None:
    """Open whatever the current playback was started from."""
    playback = app.current_playback
    if playback is None or not playback.context:
        return
    context = playback.context
    uri = context.get("uri") or ""
    context_id = uri.rsplit(":", 1)[-1]
    if not context_id:
        return

    match context.get("type"):
        case "playlist":
            app.get_playlist_tracks(context_id, TrackTableContext.MY_PLAYLISTS)
        case "album":
            app.dispatch("get_album", album_id=context_id)
        case "artist":
            app.get_artist(context_id, "")
        case "show":
            app.dispatch("get_show_episodes", show={"id": context_id, "uri": uri}, offset=None)
        case other:
            logger.debug(f"No view for playback context type {other}")


# ============================================================================
# DISPATCH
# ============================================================================


def handle_global_key(event: dict, app: ApplicationState) -> bool:
    """
    Handle keys that work regardless of the active block.

    Returns:
        True if the key was consumed
    """
    keys = app.user_config.keys
    binding = event["binding"]

    if binding == "esc":
        handle_escape(app)
    elif len(binding) == 1 and binding.isdigit():
        app.push_movement_digit(binding)
    elif is_key(event, keys.jump_to_album):
        handle_jump_to_album(app)
    elif is_key(event, keys.jump_to_artist_album):
        handle_jump_to_artist_album(app)
    elif is_key(event, keys.jump_to_context):
        handle_jump_to_context(app)
    elif is_key(event, keys.manage_devices):
        app.get_devices()
    elif is_key(event, keys.decrease_volume):
        app.decrease_volume()
    elif is_key(event, keys.increase_volume):
        app.increase_volume()
    elif is_key(event, keys.toggle_playback):
        app.toggle_playback()
    elif is_key(event, keys.seek_backwards):
        app.seek_backwards()
    elif is_key(event, keys.seek_forwards):
        app.seek_forwards()
    elif is_key(event, keys.next_track):
        app.dispatch("next_track")
    elif is_key(event, keys.previous_track):
        app.previous_track()
    elif is_key(event, keys.help):
        app.set_current_route_state(active=ActiveBlock.HELP_MENU)
    elif is_key(event, keys.shuffle):
        app.shuffle()
    elif is_key(event, keys.repeat):
        app.repeat()
    elif is_key(event, keys.search):
        app.set_current_route_state(active=ActiveBlock.INPUT, hovered=ActiveBlock.INPUT)
    elif is_key(event, keys.audio_analysis):
        app.get_audio_analysis()
    elif is_key(event, keys.basic_view):
        app.push_navigation_stack(RouteId.BASIC_VIEW, ActiveBlock.BASIC_VIEW)
    else:
        return False
    return True


def handle_block_event(event: dict, app: ApplicationState) -> None:
    """Route a key to the handler of the active block."""
    match app.get_current_route().active_block:
        case ActiveBlock.ANALYSIS:
            handle_analysis_key(event, app)
        case ActiveBlock.PLAY_BAR:
            handle_playbar_key(event, app)
        case ActiveBlock.ALBUM_TRACKS:
            handle_album_tracks_key(event, app)
        case ActiveBlock.ALBUM_LIST:
            handle_album_list_key(event, app)
        case ActiveBlock.ARTIST_BLOCK:
            handle_artist_key(event, app)
        case ActiveBlock.EMPTY:
            handle_empty_key(event, app)
        case ActiveBlock.ERROR:
            handle_error_screen_key(event, app)
        case ActiveBlock.HELP_MENU:
            handle_help_menu_key(event, app)
        case ActiveBlock.HOME:
            handle_home_key(event, app)
        case ActiveBlock.INPUT:
            handle_input_key(event, app)
        case ActiveBlock.LIBRARY:
            handle_library_key(event, app)
        case ActiveBlock.MY_PLAYLISTS:
            handle_playlist_key(event, app)
        case ActiveBlock.PODCASTS:
            handle_podcasts_key(event, app)
        case ActiveBlock.EPISODE_TABLE:
            handle_episode_table_key(event, app)
        case ActiveBlock.RECENTLY_PLAYED:
            handle_recently_played_key(event, app)
        case ActiveBlock.SEARCH_RESULT_BLOCK:
            handle_search_results_key(event, app)
        case ActiveBlock.SELECT_DEVICE:
            handle_select_device_key(event, app)
        case ActiveBlock.TRACK_TABLE:
            handle_track_table_key(event, app)
        case ActiveBlock.MADE_FOR_YOU:
            handle_made_for_you_key(event, app)
        case ActiveBlock.ARTISTS:
            handle_artists_key(event, app)
        case ActiveBlock.BASIC_VIEW:
            handle_basic_view_key(event, app)
        case ActiveBlock.DIALOG:
            handle_dialog_key(event, app)
        case ActiveBlock.ADD_TO_PLAYLIST:
            handle_add_to_playlist_key(event, app)


def handle_event(event: dict, app: ApplicationState) -> bool:
    """
    Apply one parsed key event to the application state.

    Args:
        event: Parsed key event from parse_key()
        app: Application state (lock held)

    Returns:
        False when the user asked to quit, True otherwise
    """
    if app.get_current_route().active_block == ActiveBlock.INPUT:
        handle_input_key(event, app)
        return True

    if is_key(event, app.user_config.keys.back):
        app.take_movement_count()
        if app.pop_navigation_stack() is None:
            return False
        return True

    is_digit = len(event["binding"]) == 1 and event["binding"].isdigit()
    if not handle_global_key(event, app):
        handle_block_event(event, app)
    if not is_digit:
        # A count applies to the key right after it and nothing later
        app.take_movement_count()
    return True


def handle_key(app: ApplicationState, key: Keystroke) -> bool:
    """Parse a blessed Keystroke and dispatch it."""
    return handle_event(parse_key(key), app)
