"""Layout calculation functions."""

from typing import NamedTuple

from blessed import Terminal

INPUT_HEIGHT = 3
PLAYBAR_HEIGHT = 6
LIBRARY_HEIGHT = 8  # Six options plus borders
MIN_SIDEBAR_WIDTH = 20


class Region(NamedTuple):
    """Rectangle of the terminal owned by one block."""

    x: int
    y: int
    width: int
    height: int

    def inner(self) -> "Region":
        """The region inside a one-cell border."""
        return Region(
            self.x + 1, self.y + 1, max(self.width - 2, 0), max(self.height - 2, 0)
        )

    def split_columns(self, count: int) -> list["Region"]:
        """Split into ``count`` side-by-side regions, the last taking any remainder."""
        column = self.width // count
        regions = [Region(self.x + i * column, self.y, column, self.height) for i in range(count)]
        last = regions[-1]
        regions[-1] = Region(last.x, last.y, self.x + self.width - last.x, last.height)
        return regions

    def split_rows(self, count: int) -> list["Region"]:
        row = self.height // count
        regions = [Region(self.x, self.y + i * row, self.width, row) for i in range(count)]
        last = regions[-1]
        regions[-1] = Region(last.x, last.y, last.width, self.y + self.height - last.y)
        return regions


def calculate_layout(term: Terminal, basic_view: bool = False) -> dict[str, Region]:
    """
    Pure function: calculate the regions of every top-level block.

    Args:
        term: blessed Terminal instance
        basic_view: Only the playbar is shown

    Returns:
        Dictionary of region name to Region
    """
    width, height = term.width, term.height

    if basic_view:
        return {"playbar": Region(0, max(height // 2 - PLAYBAR_HEIGHT // 2, 0), width, PLAYBAR_HEIGHT)}

    sidebar_width = max(width // 5, MIN_SIDEBAR_WIDTH)
    body_y = INPUT_HEIGHT
    body_height = max(height - INPUT_HEIGHT - PLAYBAR_HEIGHT, 0)

    return {
        "input": Region(0, 0, width, INPUT_HEIGHT),
        "library": Region(0, body_y, sidebar_width, min(LIBRARY_HEIGHT, body_height)),
        "playlists": Region(
            0,
            body_y + LIBRARY_HEIGHT,
            sidebar_width,
            max(body_height - LIBRARY_HEIGHT, 0),
        ),
        "main": Region(sidebar_width, body_y, max(width - sidebar_width, 0), body_height),
        "playbar": Region(0, height - PLAYBAR_HEIGHT, width, PLAYBAR_HEIGHT),
    }
