"""Recently played tracks keyboard handler."""

from spotify_tui.ui.blessed.state import ApplicationState

from .common import (
    handle_left_event,
    is_key,
    is_movement,
    item_at,
    left_event,
    navigate_list,
    submit_event,
    uris_of,
)


def handle_recently_played_key(event: dict, app: ApplicationState) -> None:
    rows = app.recently_played.items if app.recently_played else []
    tracks = [row["track"] for row in rows if row.get("track")]
    track = item_at(tracks, app.recently_played_index)

    if left_event(event):
        handle_left_event(app)
    elif is_movement(event):
        app.recently_played_index = navigate_list(event, app, tracks, app.recently_played_index)
    elif track is None:
        return
    elif submit_event(event, app):
        app.dispatch(
            "start_playback",
            context_uri=None,
            uris=uris_of(tracks),
            offset=app.recently_played_index,
        )
    elif event["binding"] == "s":
        app.toggle_save_track(track.get("id"))
    elif event["binding"] == "r":
        app.get_recommendations_for_track(track)
    elif is_key(event, app.user_config.keys.add_item_to_queue):
        app.add_item_to_queue(track)
