"""Saved albums list keyboard handler."""

from spotify_tui.domain.models import ActiveBlock, AlbumTableContext, RouteId
from spotify_tui.ui.blessed.state import ApplicationState, SelectedFullAlbum

from .common import (
    handle_left_event,
    is_key,
    is_movement,
    item_at,
    left_event,
    navigate_list,
    next_cached_page,
    submit_event,
)


def handle_album_list_key(event: dict, app: ApplicationState) -> None:
    """
    Handle keys for the saved albums list.

    Supports:
    - Movement keys: move through the current page of albums
    - Enter: open the album's tracks
    - next_page / previous_page: page through saved albums
    - D: remove the album from the library
    """
    keys = app.user_config.keys
    cache = app.library.saved_albums
    rows = cache.current_items()
    row = item_at(rows, app.album_list_index)

    if left_event(event):
        handle_left_event(app)
    elif is_movement(event):
        app.album_list_index = navigate_list(event, app, rows, app.album_list_index)
    elif submit_event(event, app):
        if row is not None:
            app.selected_album_full = SelectedFullAlbum(album=row["album"])
            app.album_table_context = AlbumTableContext.FULL
            app.push_navigation_stack(RouteId.ALBUM_TRACKS, ActiveBlock.ALBUM_TRACKS)
    elif is_key(event, keys.next_page):
        if next_cached_page(app, cache, "get_current_user_saved_albums"):
            app.album_list_index = 0
    elif is_key(event, keys.previous_page):
        if cache.retreat():
            app.album_list_index = 0
    elif event["binding"] == "D":
        if row is not None:
            app.dispatch("current_user_saved_album_delete", album_id=row["album"]["id"])
