"""Intent queue between the key handlers and the network worker.

The worker lives in ``spotify_tui.network.worker``; it is not imported here
because it depends on the application state, which itself depends on Intent.
"""

from .intents import ACTIONS, Intent

__all__ = ["ACTIONS", "Intent"]
