"""Blessed UI helper functions."""

from .terminal import write_at
from .selection import render_selection_list

__all__ = ["write_at", "render_selection_list"]
