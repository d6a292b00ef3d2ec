"""Track table keyboard handler.

The track table is shared by playlists, liked songs, search playlists,
Made For You playlists and recommendations; ``track_table.context`` says
which one is showing. Liked songs page through the in-memory cache, the
playlist tables page by re-fetching at a new offset.
"""

from typing import Optional

from spotify_tui.domain.models import ActiveBlock, RouteId, TrackTableContext
from spotify_tui.domain.paging import last_page_offset
from spotify_tui.ui.blessed.state import ApplicationState

from .common import (
    handle_left_event,
    is_key,
    is_movement,
    item_at,
    left_event,
    navigate_list,
    next_cached_page,
    submit_event,
    uris_of,
)

_PLAYLIST_CONTEXTS = (TrackTableContext.MY_PLAYLISTS, TrackTableContext.PLAYLIST_SEARCH)


def _playlist_context_uri(app: ApplicationState) -> Optional[str]:
    """URI of the playlist whose tracks are in the table."""
    match app.track_table.context:
        case TrackTableContext.MY_PLAYLISTS:
            playlist = app.selected_playlist()
        case TrackTableContext.PLAYLIST_SEARCH:
            search = app.search_results
            playlist = item_at(
                search.items(search.selected_block), search.index(search.selected_block)
            )
        case TrackTableContext.MADE_FOR_YOU:
            playlist = item_at(
                app.library.made_for_you_playlists.current_items(), app.made_for_you_index
            )
        case _:
            playlist = None
    return playlist.get("uri") if playlist else None


def _current_playlist_id(app: ApplicationState) -> Optional[str]:
    uri = _playlist_context_uri(app)
    if not uri:
        return None
    return uri.rsplit(":", 1)[-1]


# ----------------------------------------------------------------------------
# Direct-offset paging (playlists and Made For You)
# ----------------------------------------------------------------------------


def _fetch_playlist_offset(app: ApplicationState, offset: int) -> None:
    playlist_id = _current_playlist_id(app)
    if playlist_id is None:
        return
    if app.track_table.context == TrackTableContext.MADE_FOR_YOU:
        if offset == app.made_for_you_offset:
            return
        app.made_for_you_offset = offset
        app.dispatch("get_made_for_you_playlist_tracks", playlist_id=playlist_id, offset=offset)
    else:
        if offset == app.playlist_offset:
            return
        app.playlist_offset = offset
        app.dispatch("get_playlist_tracks", playlist_id=playlist_id, offset=offset)


def _direct_offset_state(app: ApplicationState) -> tuple[int, int]:
    """(offset, total) of the playlist table on screen."""
    if app.track_table.context == TrackTableContext.MADE_FOR_YOU:
        page = app.made_for_you_tracks
        offset = app.made_for_you_offset
    else:
        page = app.playlist_tracks
        offset = app.playlist_offset
    return offset, page.total if page else 0


def _direct_next_page(app: ApplicationState) -> None:
    offset, total = _direct_offset_state(app)
    if offset + app.page_size() < total:
        _fetch_playlist_offset(app, offset + app.page_size())


def _direct_previous_page(app: ApplicationState) -> None:
    offset, _ = _direct_offset_state(app)
    if offset >= app.page_size():
        _fetch_playlist_offset(app, offset - app.page_size())


def _direct_jump_to_end(app: ApplicationState) -> None:
    _, total = _direct_offset_state(app)
    if total:
        _fetch_playlist_offset(app, last_page_offset(total, app.page_size()))


# ----------------------------------------------------------------------------
# Cached paging (liked songs)
# ----------------------------------------------------------------------------


def saved_tracks_next_page(app: ApplicationState) -> None:
    """Show the next page of liked songs, fetching it when not cached."""
    if next_cached_page(app, app.library.saved_tracks, "get_current_saved_tracks"):
        app.set_saved_tracks_to_table()
        app.track_table.selected_index = 0


def saved_tracks_previous_page(app: ApplicationState) -> None:
    if app.library.saved_tracks.retreat():
        app.set_saved_tracks_to_table()
        app.track_table.selected_index = 0


def _saved_tracks_jump_to_end(app: ApplicationState) -> None:
    cache = app.library.saved_tracks
    page = cache.get_current()
    if page is None or not page.total or cache.fetching:
        return
    offset = last_page_offset(page.total, app.page_size())
    if offset != page.offset:
        cache.fetching = True
        app.dispatch("get_current_saved_tracks", offset=offset)


def _saved_tracks_jump_to_start(app: ApplicationState) -> None:
    cache = app.library.saved_tracks
    if cache.pages and cache.index != 0:
        cache.index = 0
        app.set_saved_tracks_to_table()
        app.track_table.selected_index = 0


# ----------------------------------------------------------------------------
# Actions on the selected row
# ----------------------------------------------------------------------------


def _play_selected(app: ApplicationState) -> None:
    table = app.track_table
    if item_at(table.tracks, table.selected_index) is None:
        return

    match table.context:
        case TrackTableContext.MY_PLAYLISTS | TrackTableContext.PLAYLIST_SEARCH:
            context_uri = _playlist_context_uri(app)
            if context_uri:
                app.dispatch(
                    "start_playback",
                    context_uri=context_uri,
                    uris=None,
                    offset=table.selected_index + app.playlist_offset,
                )
        case TrackTableContext.MADE_FOR_YOU:
            context_uri = _playlist_context_uri(app)
            if context_uri:
                app.dispatch(
                    "start_playback",
                    context_uri=context_uri,
                    uris=None,
                    offset=table.selected_index + app.made_for_you_offset,
                )
        case TrackTableContext.SAVED_TRACKS | TrackTableContext.RECOMMENDED_TRACKS:
            app.dispatch(
                "start_playback",
                context_uri=None,
                uris=uris_of(table.tracks),
                offset=table.selected_index,
            )
        case _:
            pass


def _add_to_playlist(app: ApplicationState, track: dict) -> None:
    if track.get("id"):
        app.add_to_playlist_index = 0
        app.push_navigation_stack(
            RouteId.ADD_TO_PLAYLIST, ActiveBlock.ADD_TO_PLAYLIST, context=track["id"]
        )


def handle_track_table_key(event: dict, app: ApplicationState) -> None:
    """
    Handle keys for the track table.

    Supports:
    - Left: back to the sidebar
    - Movement keys: move through the rows on screen
    - Enter: play from the selected row
    - next_page / previous_page: page through the table
    - jump_to_start / jump_to_end: first page / last full page
    - s: toggle liked, r: radio from track, w: add to playlist, queue key

    Args:
        event: Parsed key event
        app: Application state (lock held)
    """
    keys = app.user_config.keys
    table = app.track_table
    track = item_at(table.tracks, table.selected_index)
    saved = table.context == TrackTableContext.SAVED_TRACKS
    direct = table.context in _PLAYLIST_CONTEXTS or table.context == TrackTableContext.MADE_FOR_YOU

    if left_event(event):
        handle_left_event(app)
    elif is_movement(event):
        table.selected_index = navigate_list(event, app, table.tracks, table.selected_index)
    elif submit_event(event, app):
        _play_selected(app)
    elif is_key(event, keys.next_page):
        if saved:
            saved_tracks_next_page(app)
        elif direct:
            _direct_next_page(app)
    elif is_key(event, keys.previous_page):
        if saved:
            saved_tracks_previous_page(app)
        elif direct:
            _direct_previous_page(app)
    elif is_key(event, keys.jump_to_start):
        if saved:
            _saved_tracks_jump_to_start(app)
        elif direct:
            _fetch_playlist_offset(app, 0)
    elif is_key(event, keys.jump_to_end):
        if saved:
            _saved_tracks_jump_to_end(app)
        elif direct:
            _direct_jump_to_end(app)
    elif track is None:
        return
    elif event["binding"] == "s":
        app.toggle_save_track(track.get("id"))
    elif event["binding"] == "r":
        app.get_recommendations_for_track(track)
    elif event["binding"] == "w":
        _add_to_playlist(app, track)
    elif is_key(event, keys.add_item_to_queue):
        app.add_item_to_queue(track)
