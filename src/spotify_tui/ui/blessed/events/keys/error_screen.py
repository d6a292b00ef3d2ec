"""Error screen keyboard handler."""

from spotify_tui.ui.blessed.state import ApplicationState

from .common import submit_event


def handle_error_screen_key(event: dict, app: ApplicationState) -> None:
    """Submit dismisses the error and returns to the previous route."""
    if submit_event(event, app):
        app.pop_navigation_stack()
