"""Home (welcome / changelog) view keyboard handler."""

from spotify_tui.ui.blessed.state import ApplicationState

from .common import down_event, handle_left_event, is_key, left_event, up_event

SMALL_SCROLL = 1
LARGE_SCROLL = 10


def handle_home_key(event: dict, app: ApplicationState) -> None:
    keys = app.user_config.keys

    if left_event(event):
        handle_left_event(app)
    elif down_event(event):
        app.home_scroll += SMALL_SCROLL
    elif up_event(event):
        app.home_scroll = max(app.home_scroll - SMALL_SCROLL, 0)
    elif is_key(event, keys.next_page) or event["binding"] == "pagedown":
        app.home_scroll += LARGE_SCROLL
    elif is_key(event, keys.previous_page) or event["binding"] == "pageup":
        app.home_scroll = max(app.home_scroll - LARGE_SCROLL, 0)
