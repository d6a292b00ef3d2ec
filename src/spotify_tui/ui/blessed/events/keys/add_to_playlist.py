"""Playlist picker for adding a track to one of the user's playlists."""

from spotify_tui.ui.blessed.state import ApplicationState

from .common import is_movement, item_at, navigate_list, submit_event


def handle_add_to_playlist_key(event: dict, app: ApplicationState) -> None:
    playlists = app.playlists.items if app.playlists else []

    if is_movement(event):
        app.add_to_playlist_index = navigate_list(
            event, app, playlists, app.add_to_playlist_index
        )
    elif submit_event(event, app):
        playlist = item_at(playlists, app.add_to_playlist_index)
        track_id = app.get_current_route().context
        if playlist is None or not track_id:
            return
        app.dispatch("add_track_to_playlist", playlist_id=playlist["id"], track_id=track_id)
        app.pop_navigation_stack()
