"""Pure helper functions for cursor movement and scrolling in list-based blocks.

Every list-like block (playlists, track tables, search results, artists,
devices, ...) moves its selection through these functions. They take the
collection length, the current index (None when nothing is selected yet)
and an optional repeat count typed as a numeric prefix.
"""

from typing import NamedTuple, Optional


class ViewportWindow(NamedTuple):
    """Rows of a list currently visible on screen.

    Reported by the renderer every frame so page jumps move one screen.
    """

    start: int = 0
    height: int = 0

    @property
    def end(self) -> int:
        return self.start + self.height


def move_down(n: int, index: Optional[int], count: Optional[int] = None) -> int:
    """Move the selection down by ``count`` rows.

    Wraps from the last row to the first only when the count resolves to 1;
    larger counts clamp at the last row.

    Args:
        n: Number of rows in the list
        index: Current selection (None selects the first row)
        count: Pending repeat count (None means 1)

    Returns:
        New selection index

    Examples:
        >>> move_down(10, 9)
        0  # Wraps from last to first
        >>> move_down(10, 7, count=5)
        9  # Clamped, never wraps
        >>> move_down(0, None)
        0
    """
    if n == 0:
        return 0
    if index is None:
        return 0
    current = index
    step = 1 if count is None else count
    if step == 1 and current >= n - 1:
        return 0
    return min(current + step, n - 1)


def move_up(n: int, index: Optional[int], count: Optional[int] = None) -> int:
    """Move the selection up by ``count`` rows.

    Mirror image of move_down: wraps from the first row to the last only
    when the count resolves to 1.

    Examples:
        >>> move_up(10, 0)
        9  # Wraps from first to last
        >>> move_up(10, 3, count=5)
        0  # Clamped at the top
    """
    if n == 0:
        return 0
    if index is None:
        return 0
    current = index
    step = 1 if count is None else count
    if step == 1 and current == 0:
        return n - 1
    return max(current - step, 0)


def jump_top(n: int) -> int:
    return 0


def jump_middle(n: int) -> int:
    """Middle row, favouring the lower of the two middles of an even list.

    Examples:
        >>> jump_middle(5)
        2
        >>> jump_middle(4)
        1
    """
    if n == 0:
        return 0
    if n % 2 == 0:
        return n // 2 - 1
    return n // 2


def jump_bottom(n: int) -> int:
    return max(n - 1, 0)


def page_forward(n: int, index: Optional[int], window: ViewportWindow) -> int:
    """Move the selection one visible screen down, clamped to the last row.

    Examples:
        >>> page_forward(100, 3, ViewportWindow(start=0, height=20))
        23
        >>> page_forward(30, 25, ViewportWindow(start=10, height=20))
        29
    """
    if n == 0:
        return 0
    height = max(window.height, 1)
    current = max(index or 0, window.start)
    return clamp_selection(current + height, n)


def page_backward(n: int, index: Optional[int], window: ViewportWindow) -> int:
    """Move the selection one visible screen up, clamped to the first row.

    Examples:
        >>> page_backward(100, 43, ViewportWindow(start=30, height=20))
        23
    """
    if n == 0:
        return 0
    height = max(window.height, 1)
    current = index or 0
    if window.height:
        current = min(current, window.end - 1)
    return clamp_selection(current - height, n)


def calculate_scroll_offset(
    selected: int,
    current_scroll: int,
    visible_items: int,
    total_items: int,
) -> int:
    """Calculate scroll offset to keep selected item visible in viewport.

    Args:
        selected: Index of the currently selected item (0-based)
        current_scroll: Current scroll offset (0-based)
        visible_items: Number of items visible in the viewport
        total_items: Total number of items in the list

    Returns:
        New scroll offset to keep selected item visible

    Examples:
        >>> calculate_scroll_offset(
        ...     selected=15, current_scroll=0, visible_items=10, total_items=20
        ... )
        6  # Shows items 6-15, selection at bottom of viewport
        >>> calculate_scroll_offset(
        ...     selected=2, current_scroll=10, visible_items=10, total_items=20
        ... )
        2  # Shows items 2-11, selection at top of viewport
    """
    if visible_items <= 0 or total_items <= visible_items:
        return 0

    if selected >= current_scroll + visible_items:
        offset = selected - visible_items + 1
    elif selected < current_scroll:
        offset = selected
    else:
        offset = current_scroll

    return max(0, min(offset, total_items - visible_items))


def clamp_selection(selection: int, total_items: int) -> int:
    """Clamp selection to valid range [0, total_items - 1].

    Useful after a refetch shrinks the backing list.

    Examples:
        >>> clamp_selection(selection=15, total_items=10)
        9
        >>> clamp_selection(selection=5, total_items=0)
        0
    """
    if total_items == 0:
        return 0
    return max(0, min(selection, total_items - 1))
