"""Album tracks keyboard handler.

Two album sources share this block: a saved album opened from the library
(FULL, tracks embedded in the album) and an album opened from search or the
artist view (SIMPLIFIED, tracks fetched separately).
"""

from typing import Any, Optional

from spotify_tui.domain.models import AlbumTableContext
from spotify_tui.ui.blessed.state import ApplicationState

from .common import (
    handle_left_event,
    is_key,
    is_movement,
    item_at,
    left_event,
    navigate_list,
    submit_event,
)


def _current_album(app: ApplicationState) -> tuple[Optional[Any], list[dict[str, Any]]]:
    """The album holder shown in the table and its track rows."""
    if app.album_table_context == AlbumTableContext.FULL:
        holder = app.selected_album_full
        return holder, holder.tracks if holder else []
    holder = app.selected_album
    return holder, holder.tracks.items if holder else []


def handle_album_tracks_key(event: dict, app: ApplicationState) -> None:
    holder, tracks = _current_album(app)
    if holder is None:
        if left_event(event):
            handle_left_event(app)
        return

    track = item_at(tracks, holder.selected_index)

    if left_event(event):
        handle_left_event(app)
    elif is_movement(event):
        holder.selected_index = navigate_list(event, app, tracks, holder.selected_index)
    elif submit_event(event, app):
        if track is not None:
            app.dispatch(
                "start_playback",
                context_uri=holder.album.get("uri"),
                uris=None,
                offset=holder.selected_index,
            )
    elif track is None:
        return
    elif event["binding"] == "s":
        app.toggle_save_track(track.get("id"))
    elif event["binding"] == "r":
        app.get_recommendations_for_track(track)
    elif is_key(event, app.user_config.keys.add_item_to_queue):
        app.add_item_to_queue(track)
