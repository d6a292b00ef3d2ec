"""Search input line rendering functions."""

import sys

from spotify_tui.domain.models import ActiveBlock

from ..helpers.terminal import draw_box, write_at
from ..styles.palette import border_style
from .layout import Region
from .lists import Frame


def render_input(frame: Frame, region: Region) -> None:
    """
    Render the search input with its cursor.

    The cursor column is ``input_cursor_position``, measured in display
    columns. Long input scrolls horizontally to keep the cursor visible.
    """
    term = frame.term
    app = frame.app
    active = frame.is_active(ActiveBlock.INPUT)
    hovered = frame.is_hovered(ActiveBlock.INPUT)

    title = "Search"
    if app.is_loading and app.user_config.behavior.show_loading_indicator:
        title = "Search (loading...)"
    draw_box(term, region.x, region.y, region.width, region.height, title, border_style(term, active, hovered))

    inner = region.inner()
    text = "".join(app.input)
    shift = max(app.input_cursor_position - inner.width + 1, 0)
    visible = text
    while shift > 0 and visible:
        shift -= term.length(visible[0])
        visible = visible[1:]
    write_at(term, inner.x, inner.y, term.white(visible), inner.width)

    if active:
        cursor_x = inner.x + min(app.input_cursor_position, inner.width - 1)
        under = app.input[app.input_idx] if app.input_idx < len(app.input) else " "
        sys.stdout.write(term.move_xy(cursor_x, inner.y) + term.reverse(under) + term.normal)
