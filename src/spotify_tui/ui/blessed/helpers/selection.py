"""Shared selection list rendering helpers."""

from typing import Optional

from blessed import Terminal

from ..styles.palette import row_style
from .scrolling import calculate_scroll_offset
from .terminal import write_at


def render_selection_list(
    term: Terminal,
    rows: list[str],
    selected_idx: Optional[int],
    x: int,
    y: int,
    width: int,
    height: int,
    focused: bool,
    scroll: int = 0,
) -> int:
    """
    Render a list of rows with the selected one highlighted.

    The window scrolls just enough to keep the selection visible.

    Args:
        term: blessed Terminal instance
        rows: Plain-text rows (already formatted)
        selected_idx: Index of the selected row, None for no highlight
        x: Left column
        y: Top row
        width: Columns available
        height: Rows available
        focused: Whether the owning block is active
        scroll: First visible row of the previous frame

    Returns:
        First visible row, to be passed back as ``scroll`` next frame
    """
    if height <= 0:
        return 0

    start = calculate_scroll_offset(selected_idx or 0, scroll, height, len(rows))
    for line in range(height):
        row_idx = start + line
        if row_idx >= len(rows):
            write_at(term, x, y + line, "", width)
            continue
        selected = row_idx == selected_idx
        style = row_style(term, selected, focused)
        write_at(term, x, y + line, style(term.ljust(rows[row_idx], width)), width)
    return start
