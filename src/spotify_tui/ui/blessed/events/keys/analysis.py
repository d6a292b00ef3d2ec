"""Audio analysis view keyboard handler."""

from spotify_tui.ui.blessed.state import ApplicationState


def handle_analysis_key(event: dict, app: ApplicationState) -> None:
    # Read-only view; the back key pops it
    return None
