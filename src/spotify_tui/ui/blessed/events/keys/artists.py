"""Followed artists list keyboard handler."""

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


def handle_artists_key(event: dict, app: ApplicationState) -> None:
    keys = app.user_config.keys
    cache = app.library.saved_artists
    artists = cache.current_items()
    artist = item_at(artists, app.artists_list_index)

    if left_event(event):
        handle_left_event(app)
    elif is_movement(event):
        app.artists_list_index = navigate_list(event, app, artists, app.artists_list_index)
    elif is_key(event, keys.next_page):
        if next_cached_page(app, cache, "get_followed_artists"):
            app.artists_list_index = 0
    elif is_key(event, keys.previous_page):
        if cache.retreat():
            app.artists_list_index = 0
    elif artist is None:
        return
    elif submit_event(event, app):
        app.get_artist(artist["id"], artist.get("name", ""))
    elif event["binding"] == "D":
        app.dispatch("user_unfollow_artists", artist_ids=[artist["id"]])
    elif event["binding"] == "r":
        app.get_recommendations_for_artist(artist)
