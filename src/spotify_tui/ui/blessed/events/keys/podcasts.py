"""Saved podcasts (shows) keyboard handler."""

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
)


def handle_podcasts_key(event: dict, app: ApplicationState) -> None:
    keys = app.user_config.keys
    cache = app.library.saved_shows
    rows = cache.current_items()
    row = item_at(rows, app.shows_list_index)

    if left_event(event):
        handle_left_event(app)
    elif is_movement(event):
        app.shows_list_index = navigate_list(event, app, rows, app.shows_list_index)
    elif is_key(event, keys.next_page):
        if next_cached_page(app, cache, "get_current_user_saved_shows"):
            app.shows_list_index = 0
    elif is_key(event, keys.previous_page):
        if cache.retreat():
            app.shows_list_index = 0
    elif row is None:
        return
    elif submit_event(event, app):
        app.dispatch("get_show_episodes", show=row["show"], offset=None)
    elif event["binding"] == "D":
        app.dispatch("user_unfollow_show", show_id=row["show"]["id"])
