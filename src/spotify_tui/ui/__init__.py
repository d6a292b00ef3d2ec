"""UI layer for spotify-tui.

Contains:
- blessed: Terminal UI (state, key handling, rendering, main loop)
"""

__all__ = []
