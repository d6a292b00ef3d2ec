"""Search input line keyboard handler.

The input is kept as a list of characters. ``input_idx`` indexes that list,
``input_cursor_position`` is the cursor in terminal columns, so the two
diverge for wide (CJK, emoji) characters.
"""

import unicodedata
from functools import lru_cache

from spotify_tui.domain.models import ActiveBlock, RouteId
from spotify_tui.ui.blessed.state import ApplicationState

ALBUM_URL_PREFIX = "https://open.spotify.com/album/"
ARTIST_URL_PREFIX = "https://open.spotify.com/artist/"


@lru_cache(maxsize=4096)
def char_width(ch: str) -> int:
    """Display width of one character: 0 for combining marks, 2 for wide."""
    if unicodedata.category(ch) in ("Mn", "Me", "Cf", "Cc"):
        return 0
    if unicodedata.east_asian_width(ch) in ("F", "W"):
        return 2
    return 1


def text_width(chars: list[str]) -> int:
    return sum(char_width(ch) for ch in chars)


def _spotify_id_from_url(url: str, prefix: str) -> str:
    """Strip the URL prefix and any query string (``?si=...``)."""
    return url[len(prefix):].split("?", 1)[0].strip("/")


def _submit(app: ApplicationState) -> None:
    query = "".join(app.input).strip()
    if not query:
        return

    if query.startswith(ALBUM_URL_PREFIX):
        album_id = _spotify_id_from_url(query, ALBUM_URL_PREFIX)
        if album_id:
            app.dispatch("get_album", album_id=album_id)
    elif query.startswith(ARTIST_URL_PREFIX):
        artist_id = _spotify_id_from_url(query, ARTIST_URL_PREFIX)
        if artist_id:
            app.get_artist(artist_id, "")
    else:
        app.dispatch("get_search_results", query=query, country=app.country())
        # Reset so the next Enter on the playlists panel starts at the top
        app.selected_playlist_index = 0
        app.push_navigation_stack(RouteId.SEARCH, ActiveBlock.SEARCH_RESULT_BLOCK)


def _delete_word_before_cursor(app: ApplicationState) -> None:
    if app.input_cursor_position == 0:
        return
    before = app.input[: app.input_idx]
    end = len(before)
    # Skip trailing spaces, then the word itself
    while end > 0 and before[end - 1] == " ":
        end -= 1
    while end > 0 and before[end - 1] != " ":
        end -= 1
    removed = app.input[end : app.input_idx]
    del app.input[end : app.input_idx]
    app.input_idx = end
    app.input_cursor_position -= text_width(removed)


def handle_input_key(event: dict, app: ApplicationState) -> None:
    """
    Handle keys while the search input is focused.

    Supports:
    - Printable characters: insert at the cursor
    - Backspace / ctrl-h, Delete / ctrl-d: delete before / at the cursor
    - Left / ctrl-b, Right / ctrl-f: move the cursor
    - ctrl-a / ctrl-e: start / end of line
    - ctrl-k / ctrl-u: delete to end / start of line
    - ctrl-w: delete the word before the cursor, ctrl-l: clear
    - Enter: open a pasted album/artist link, otherwise search
    - Esc: leave the input

    Args:
        event: Parsed key event
        app: Application state (lock held)
    """
    binding = event["binding"]

    match binding:
        case "ctrl-k":
            del app.input[app.input_idx :]
        case "ctrl-u":
            del app.input[: app.input_idx]
            app.input_idx = 0
            app.input_cursor_position = 0
        case "ctrl-l":
            app.input = []
            app.input_idx = 0
            app.input_cursor_position = 0
        case "ctrl-w":
            _delete_word_before_cursor(app)
        case "ctrl-e":
            app.input_idx = len(app.input)
            app.input_cursor_position = text_width(app.input)
        case "ctrl-a":
            app.input_idx = 0
            app.input_cursor_position = 0
        case "left" | "ctrl-b":
            if app.input and app.input_idx > 0:
                app.input_idx -= 1
                app.input_cursor_position -= char_width(app.input[app.input_idx])
        case "right" | "ctrl-f":
            if app.input_idx < len(app.input):
                app.input_cursor_position += char_width(app.input[app.input_idx])
                app.input_idx += 1
        case "esc":
            app.set_current_route_state(active=ActiveBlock.EMPTY, hovered=ActiveBlock.LIBRARY)
        case "enter":
            _submit(app)
        case "backspace" | "ctrl-h":
            if app.input and app.input_idx > 0:
                removed = app.input.pop(app.input_idx - 1)
                app.input_idx -= 1
                app.input_cursor_position -= char_width(removed)
        case "del" | "ctrl-d":
            if app.input_idx < len(app.input):
                app.input.pop(app.input_idx)
        case _:
            ch = event["char"]
            if ch is not None and len(ch) == 1 and ch.isprintable():
                app.input.insert(app.input_idx, ch)
                app.input_idx += 1
                app.input_cursor_position += char_width(ch)
