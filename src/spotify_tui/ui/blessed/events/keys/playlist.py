"""My Playlists sidebar keyboard handler."""

from spotify_tui.domain.models import ActiveBlock, DialogContext, RouteId, TrackTableContext
from spotify_tui.ui.blessed.state import ApplicationState

from .common import handle_right_event, is_movement, navigate_list, right_event, submit_event


def open_unfollow_dialog(app: ApplicationState, playlist: dict, context: DialogContext) -> None:
    """Ask for confirmation before unfollowing a playlist."""
    app.dialog = playlist.get("name", "")
    app.confirm = False
    app.push_navigation_stack(RouteId.DIALOG, ActiveBlock.DIALOG, context=context)


def handle_playlist_key(event: dict, app: ApplicationState) -> None:
    """
    Handle keys for the My Playlists block.

    Supports:
    - Movement keys: move through the user's playlists
    - Right: jump to the main view of the current route
    - Enter: open the playlist in the track table
    - D: unfollow the playlist (after confirmation)
    """
    items = app.playlists.items if app.playlists else []

    if right_event(event):
        handle_right_event(app)
    elif is_movement(event):
        app.selected_playlist_index = navigate_list(
            event, app, items, app.selected_playlist_index
        )
    elif submit_event(event, app):
        playlist = app.selected_playlist()
        if playlist:
            app.get_playlist_tracks(playlist["id"], TrackTableContext.MY_PLAYLISTS)
    elif event["binding"] == "D":
        playlist = app.selected_playlist()
        if playlist:
            open_unfollow_dialog(app, playlist, DialogContext.PLAYLIST_WINDOW)
