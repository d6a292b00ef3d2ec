"""Bordered, scrollable list blocks shared by every view."""

from typing import Optional

from blessed import Terminal

from spotify_tui.domain.models import ActiveBlock

from ..helpers.selection import render_selection_list
from ..helpers.terminal import draw_box, write_at
from ..state import ApplicationState
from ..styles.palette import border_style
from .layout import Region


class Frame:
    """Per-frame render context.

    ``scrolls`` survives between frames so each list keeps its window.
    """

    def __init__(self, term: Terminal, app: ApplicationState, scrolls: dict[str, int]):
        self.term = term
        self.app = app
        self.scrolls = scrolls
        route = app.get_current_route()
        self.active = route.active_block
        self.hovered = route.hovered_block

    def is_active(self, block: ActiveBlock) -> bool:
        return self.active == block

    def is_hovered(self, block: ActiveBlock) -> bool:
        return self.hovered == block


def render_block(
    frame: Frame,
    name: str,
    title: str,
    rows: list[str],
    selected: Optional[int],
    region: Region,
    active: bool,
    hovered: bool,
    header: str = "",
) -> None:
    """
    Draw a titled list block.

    When the block is active its visible window is reported to the state so
    page-up/page-down move one screen.

    Args:
        frame: Render context
        name: Key for the remembered scroll offset
        title: Block title shown in the border
        rows: Formatted rows
        selected: Highlighted row
        region: Outer region including the border
        active: Block receives commands
        hovered: Block is hovered
        header: Optional column header drawn above the rows
    """
    term = frame.term
    draw_box(term, region.x, region.y, region.width, region.height, title, border_style(term, active, hovered))
    inner = region.inner()
    if inner.height <= 0:
        return

    if header:
        write_at(term, inner.x, inner.y, term.bold(header), inner.width)
        inner = Region(inner.x, inner.y + 1, inner.width, inner.height - 1)

    start = render_selection_list(
        term,
        rows,
        selected,
        inner.x,
        inner.y,
        inner.width,
        inner.height,
        focused=active,
        scroll=frame.scrolls.get(name, 0),
    )
    frame.scrolls[name] = start
    if active:
        frame.app.set_viewport(start, inner.height)


def render_message(frame: Frame, title: str, lines: list[str], region: Region, style=None) -> None:
    """Draw a bordered block of static text."""
    term = frame.term
    draw_box(term, region.x, region.y, region.width, region.height, title, style or term.white)
    inner = region.inner()
    for line in range(inner.height):
        text = lines[line] if line < len(lines) else ""
        write_at(term, inner.x, inner.y + line, text, inner.width)


def columns(term: Terminal, values: list[str], widths: list[int]) -> str:
    """Lay out cells in fixed-width columns; the last takes what is left."""
    cells = []
    for value, width in zip(values[:-1], widths):
        cells.append(term.ljust(term.truncate(value, max(width - 1, 0)), width))
    cells.append(values[-1])
    return "".join(cells)
