"""Made For You playlists keyboard handler."""

from spotify_tui.domain.models import TrackTableContext
from spotify_tui.ui.blessed.state import ApplicationState

from .common import handle_left_event, is_movement, item_at, left_event, navigate_list, submit_event


def handle_made_for_you_key(event: dict, app: ApplicationState) -> None:
    playlists = app.library.made_for_you_playlists.current_items()

    if left_event(event):
        handle_left_event(app)
    elif is_movement(event):
        app.made_for_you_index = navigate_list(event, app, playlists, app.made_for_you_index)
    elif submit_event(event, app):
        playlist = item_at(playlists, app.made_for_you_index)
        if playlist is None:
            return
        app.track_table.context = TrackTableContext.MADE_FOR_YOU
        app.made_for_you_offset = 0
        app.dispatch("get_made_for_you_playlist_tracks", playlist_id=playlist["id"], offset=0)
