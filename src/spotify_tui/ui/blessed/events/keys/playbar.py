"""Playbar keyboard handler."""

from spotify_tui.domain.models import ActiveBlock
from spotify_tui.ui.blessed.state import ApplicationState

from .common import up_event


def handle_playbar_key(event: dict, app: ApplicationState) -> None:
    if up_event(event):
        app.set_current_route_state(active=ActiveBlock.EMPTY, hovered=ActiveBlock.MY_PLAYLISTS)
    elif event["binding"] == "s":
        item = app.playing_item()
        if item and item.get("type", "track") == "track":
            app.toggle_save_track(item.get("id"))
