"""Basic (now playing only) view keyboard handler."""

from spotify_tui.ui.blessed.state import ApplicationState


def handle_basic_view_key(event: dict, app: ApplicationState) -> None:
    if event["binding"] == "s":
        item = app.playing_item()
        if item and item.get("type", "track") == "track":
            app.toggle_save_track(item.get("id"))
