"""Rendering functions for blessed UI."""

from .help import help_rows, render_help
from .layout import Region, calculate_layout
from .screen import render_screen

__all__ = [
    "help_rows",
    "render_help",
    "Region",
    "calculate_layout",
    "render_screen",
]
