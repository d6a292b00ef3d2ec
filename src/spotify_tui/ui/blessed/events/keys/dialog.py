"""Confirmation dialog keyboard handler."""

from spotify_tui.domain.models import DialogContext
from spotify_tui.ui.blessed.state import ApplicationState

from .common import submit_event


def _confirmed_playlist_id(app: ApplicationState, context: DialogContext):
    if context == DialogContext.PLAYLIST_WINDOW:
        playlist = app.selected_playlist()
    else:
        search = app.search_results
        playlist = search.selected_item()
    return playlist.get("id") if playlist else None


def handle_dialog_key(event: dict, app: ApplicationState) -> None:
    """
    Handle keys for the unfollow-playlist dialog.

    Supports:
    - Left / Right arrows: toggle between Cancel and Delete
    - Submit (enter): apply the choice and close

    The back key closes the dialog without doing anything.
    """
    binding = event["binding"]

    if binding in ("left", "right"):
        app.confirm = not app.confirm
    elif submit_event(event, app):
        confirmed = app.confirm
        route = app.pop_navigation_stack()
        if confirmed and route is not None and route.context is not None:
            playlist_id = _confirmed_playlist_id(app, route.context)
            if playlist_id:
                app.dispatch("user_unfollow_playlist", playlist_id=playlist_id)
