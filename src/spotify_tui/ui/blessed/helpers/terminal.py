"""Terminal output utilities that prevent rendering artifacts."""

import sys

from blessed import Terminal


def write_at(term: Terminal, x: int, y: int, content: str, width: int) -> None:
    """Write content at a position, fitted to exactly ``width`` columns.

    Panels sit side by side, so a row is never cleared to the end of the
    line. Longer content is truncated and shorter content is padded, which
    overwrites whatever the previous frame left in the region.

    Args:
        term: Blessed terminal instance
        x: Column position (0-indexed)
        y: Row position (0-indexed)
        content: Text to write (can include terminal formatting)
        width: Columns owned by the caller starting at ``x``
    """
    if width <= 0 or y < 0 or y >= term.height:
        return
    fitted = term.ljust(term.truncate(content, width), width)
    sys.stdout.write(term.move_xy(x, y) + fitted + term.normal)


def draw_box(term: Terminal, x: int, y: int, width: int, height: int, title: str, style) -> None:
    """Draw a titled border; the inside is left for the caller."""
    if width < 2 or height < 2:
        return
    label = f" {title} " if title else ""
    label = term.truncate(label, max(width - 4, 0))
    top = "┌─" + label + "─" * max(width - 3 - term.length(label), 0) + "┐"
    write_at(term, x, y, style(top), width)
    for row in range(1, height - 1):
        write_at(term, x, y + row, style("│"), 1)
        write_at(term, x + width - 1, y + row, style("│"), 1)
    write_at(term, x, y + height - 1, style("└" + "─" * (width - 2) + "┘"), width)
