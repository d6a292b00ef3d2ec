"""Key predicates and list movement shared by every block handler."""

from typing import Any, Optional, Sequence

from spotify_tui.domain.models import ActiveBlock, RouteId
from spotify_tui.domain.paging import PaginatedCache
from spotify_tui.ui.blessed.helpers.scrolling import (
    jump_bottom,
    jump_middle,
    jump_top,
    move_down,
    move_up,
    page_backward,
    page_forward,
)
from spotify_tui.ui.blessed.state import ApplicationState

DOWN_KEYS = ("down", "j", "ctrl-n")
UP_KEYS = ("up", "k", "ctrl-p")
LEFT_KEYS = ("left", "h", "ctrl-b")
RIGHT_KEYS = ("right", "l", "ctrl-f")


def down_event(event: dict) -> bool:
    return event["binding"] in DOWN_KEYS


def up_event(event: dict) -> bool:
    return event["binding"] in UP_KEYS


def left_event(event: dict) -> bool:
    return event["binding"] in LEFT_KEYS


def right_event(event: dict) -> bool:
    return event["binding"] in RIGHT_KEYS


def high_event(event: dict) -> bool:
    return event["binding"] == "H"


def middle_event(event: dict) -> bool:
    return event["binding"] == "M"


def low_event(event: dict) -> bool:
    return event["binding"] == "L"


def is_key(event: dict, binding: str) -> bool:
    """Check an event against a configured binding."""
    return event["binding"] == binding


def submit_event(event: dict, app: ApplicationState) -> bool:
    return is_key(event, app.user_config.keys.submit)


def is_movement(event: dict) -> bool:
    """True for keys that move a list cursor."""
    return (
        down_event(event)
        or up_event(event)
        or high_event(event)
        or middle_event(event)
        or low_event(event)
        or event["binding"] in ("pageup", "pagedown")
    )


def navigate_list(
    event: dict,
    app: ApplicationState,
    items: Sequence[Any],
    index: Optional[int],
) -> Optional[int]:
    """
    Apply a movement key to a list and return the new cursor.

    Consumes the pending movement count. An empty list leaves the index
    untouched, so an unset selection stays unset.

    Args:
        event: Parsed key event (must satisfy is_movement)
        app: Application state
        items: Rows of the list
        index: Current cursor

    Returns:
        New cursor position
    """
    count = app.take_movement_count()
    n = len(items)
    if n == 0:
        return index

    if down_event(event):
        return move_down(n, index, count)
    if up_event(event):
        return move_up(n, index, count)
    if high_event(event):
        return jump_top(n)
    if middle_event(event):
        return jump_middle(n)
    if low_event(event):
        return jump_bottom(n)
    if event["binding"] == "pagedown":
        return page_forward(n, index, app.viewport)
    if event["binding"] == "pageup":
        return page_backward(n, index, app.viewport)
    return index


def handle_right_event(app: ApplicationState) -> None:
    """Move hover from the sidebar to the main block of the current route."""
    route_id = app.get_current_route().id
    match route_id:
        case RouteId.ALBUM_TRACKS:
            block = ActiveBlock.ALBUM_TRACKS
        case RouteId.TRACK_TABLE | RouteId.RECOMMENDATIONS:
            block = ActiveBlock.TRACK_TABLE
        case RouteId.PODCASTS:
            block = ActiveBlock.PODCASTS
        case RouteId.PODCAST_EPISODES:
            block = ActiveBlock.EPISODE_TABLE
        case RouteId.ALBUM_LIST:
            block = ActiveBlock.ALBUM_LIST
        case RouteId.MADE_FOR_YOU:
            block = ActiveBlock.MADE_FOR_YOU
        case RouteId.ARTISTS:
            block = ActiveBlock.ARTISTS
        case RouteId.RECENTLY_PLAYED:
            block = ActiveBlock.RECENTLY_PLAYED
        case RouteId.SEARCH:
            block = ActiveBlock.SEARCH_RESULT_BLOCK
        case RouteId.ARTIST:
            block = ActiveBlock.ARTIST_BLOCK
        case _:
            block = ActiveBlock.HOME
    app.set_current_route_state(active=block, hovered=block)


def handle_left_event(app: ApplicationState) -> None:
    app.set_current_route_state(active=ActiveBlock.EMPTY, hovered=ActiveBlock.LIBRARY)


def uris_of(items: Sequence[dict]) -> list[str]:
    return [item["uri"] for item in items if item and item.get("uri")]


def item_at(items: Sequence[Any], index: Optional[int]) -> Any:
    """Row at index, or None when the index is unset or stale."""
    if index is None or not 0 <= index < len(items):
        return None
    return items[index]


def next_cached_page(app: ApplicationState, cache: PaginatedCache, action: str) -> bool:
    """
    Show the next page of a paginated cache, fetching it when not cached.

    Cursor-paged resources (followed artists) are fetched with ``after``,
    everything else with ``offset``.

    Returns:
        True when the visible page changed or a fetch was queued
    """
    before = cache.index
    request = cache.advance()
    if request is None:
        return cache.index != before
    if request.cursor is not None:
        app.dispatch(action, after=request.cursor)
    else:
        app.dispatch(action, offset=request.offset)
    return True
