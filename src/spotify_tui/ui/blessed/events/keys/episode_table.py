"""Podcast episode table keyboard handler."""

from spotify_tui.domain.models import EpisodeTableSort
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


def _reverse_episodes(app: ApplicationState) -> None:
    """Flip the sort order, keeping the cursor on the same episode."""
    table = app.episode_table
    page = app.library.show_episodes.get_current()
    if page is None or not page.items:
        return

    selected = item_at(page.items, table.selected_index)
    page.items.reverse()
    table.sort = (
        EpisodeTableSort.OLDEST_FIRST
        if table.sort == EpisodeTableSort.NEWEST_FIRST
        else EpisodeTableSort.NEWEST_FIRST
    )
    if selected is not None:
        table.selected_index = page.items.index(selected)


def handle_episode_table_key(event: dict, app: ApplicationState) -> None:
    """
    Handle keys for a show's episode list.

    Supports:
    - Movement keys, plus jump_to_start / jump_to_end within the page
    - Enter: play from the selected episode
    - next_page / previous_page: page through episodes
    - S: reverse the sort order
    - s / D: follow / unfollow the show
    """
    keys = app.user_config.keys
    table = app.episode_table
    cache = app.library.show_episodes
    episodes = cache.current_items()

    if left_event(event):
        handle_left_event(app)
    elif is_movement(event):
        table.selected_index = navigate_list(event, app, episodes, table.selected_index)
    elif is_key(event, keys.jump_to_start):
        table.selected_index = 0
    elif is_key(event, keys.jump_to_end):
        table.selected_index = max(len(episodes) - 1, 0)
    elif submit_event(event, app):
        if item_at(episodes, table.selected_index) is not None:
            app.dispatch(
                "start_playback",
                context_uri=None,
                uris=uris_of(episodes),
                offset=table.selected_index,
            )
    elif is_key(event, keys.next_page):
        before = cache.index
        request = cache.advance()
        if request is not None and table.show:
            app.dispatch("get_show_episodes", show=table.show, offset=request.offset)
        elif request is not None:
            cache.fail_fetch()
        if request is not None or cache.index != before:
            table.selected_index = 0
    elif is_key(event, keys.previous_page):
        if cache.retreat():
            table.selected_index = 0
    elif event["binding"] == "S":
        _reverse_episodes(app)
    elif table.show is None:
        return
    elif event["binding"] == "s":
        app.dispatch("user_follow_show", show_id=table.show["id"])
    elif event["binding"] == "D":
        app.dispatch("user_unfollow_show", show_id=table.show["id"])
