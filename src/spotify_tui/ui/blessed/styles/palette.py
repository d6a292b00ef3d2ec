"""Color choices for focused, hovered and idle blocks."""

from blessed import Terminal


def border_style(term: Terminal, active: bool, hovered: bool):
    """Formatter for a block title and border."""
    if active:
        return term.bold_cyan
    if hovered:
        return term.magenta
    return term.white


def row_style(term: Terminal, selected: bool, focused: bool):
    """Formatter for one list row."""
    if selected and focused:
        return term.black_on_cyan
    if selected:
        return term.bold_cyan
    return term.white


def playing_style(term: Terminal):
    return term.bold_green


def error_style(term: Terminal):
    return term.bold_red
