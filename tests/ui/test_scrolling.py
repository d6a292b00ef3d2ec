"""Tests for list cursor movement helpers."""

from spotify_tui.ui.blessed.helpers.scrolling import (
    ViewportWindow,
    calculate_scroll_offset,
    clamp_selection,
    jump_bottom,
    jump_middle,
    jump_top,
    move_down,
    move_up,
    page_backward,
    page_forward,
)


class TestMoveDown:
    """Tests for move_down."""

    def test_single_step(self):
        """One step moves to the next row."""
        assert move_down(10, 3) == 4

    def test_wraps_from_last_row(self):
        """A single step from the last row wraps to the first."""
        assert move_down(10, 9) == 0

    def test_count_clamps_instead_of_wrapping(self):
        """A count larger than one stops at the last row."""
        assert move_down(10, 7, count=5) == 9

    def test_count_of_one_still_wraps(self):
        """An explicit count of 1 behaves like a single step."""
        assert move_down(3, 2, count=1) == 0

    def test_unset_index_selects_first_row(self):
        """Moving with nothing selected lands on row 0."""
        assert move_down(5, None) == 0

    def test_empty_list(self):
        """Empty lists always return 0."""
        assert move_down(0, None) == 0
        assert move_down(0, 4, count=3) == 0


class TestMoveUp:
    """Tests for move_up."""

    def test_single_step(self):
        """One step moves to the previous row."""
        assert move_up(10, 3) == 2

    def test_wraps_from_first_row(self):
        """A single step from row 0 wraps to the last row."""
        assert move_up(10, 0) == 9

    def test_count_clamps_at_top(self):
        """A count larger than the index stops at row 0."""
        assert move_up(10, 3, count=5) == 0

    def test_count_from_top_does_not_wrap(self):
        """Counts other than one never wrap."""
        assert move_up(10, 0, count=3) == 0


class TestJumps:
    """Tests for H/M/L jumps."""

    def test_top_and_bottom(self):
        """Top is row 0 and bottom is the last row."""
        assert jump_top(8) == 0
        assert jump_bottom(8) == 7
        assert jump_bottom(0) == 0

    def test_middle_odd(self):
        """Odd lengths select the exact middle."""
        assert jump_middle(5) == 2

    def test_middle_even(self):
        """Even lengths select the lower of the two middles."""
        assert jump_middle(4) == 1
        assert jump_middle(10) == 4

    def test_middle_small(self):
        """Degenerate lengths stay in range."""
        assert jump_middle(0) == 0
        assert jump_middle(1) == 0
        assert jump_middle(2) == 0


class TestPaging:
    """Tests for one-screen page moves."""

    def test_page_forward(self):
        """Moves one window height down."""
        assert page_forward(100, 3, ViewportWindow(start=0, height=20)) == 23

    def test_page_forward_clamps(self):
        """Never moves past the last row."""
        assert page_forward(30, 25, ViewportWindow(start=10, height=20)) == 29

    def test_page_backward(self):
        """Moves one window height up."""
        assert page_backward(100, 43, ViewportWindow(start=30, height=20)) == 23

    def test_page_backward_clamps(self):
        """Never moves above row 0."""
        assert page_backward(100, 5, ViewportWindow(start=0, height=20)) == 0


class TestScrollOffset:
    """Tests for calculate_scroll_offset and clamp_selection."""

    def test_keeps_selection_visible_below(self):
        """Selection below the window scrolls it down."""
        assert calculate_scroll_offset(15, 0, 10, 20) == 6

    def test_keeps_selection_visible_above(self):
        """Selection above the window scrolls it up."""
        assert calculate_scroll_offset(2, 10, 10, 20) == 2

    def test_no_scroll_when_everything_fits(self):
        """Short lists never scroll."""
        assert calculate_scroll_offset(4, 3, 10, 5) == 0

    def test_clamp_selection(self):
        """Out of range selections are pulled back in."""
        assert clamp_selection(15, 10) == 9
        assert clamp_selection(-2, 10) == 0
        assert clamp_selection(5, 0) == 0
