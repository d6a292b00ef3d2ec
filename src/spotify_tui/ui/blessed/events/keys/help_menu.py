"""Help menu keyboard handler."""

from spotify_tui.ui.blessed.components.help import help_rows
from spotify_tui.ui.blessed.state import ApplicationState

from .common import is_key


def handle_help_menu_key(event: dict, app: ApplicationState) -> None:
    """Page through the help table with the page keys."""
    keys = app.user_config.keys

    if is_key(event, keys.next_page):
        per_page = max(app.help_menu_max_lines, 1)
        if (app.help_menu_page + 1) * per_page < len(help_rows(keys)):
            app.help_menu_page += 1
    elif is_key(event, keys.previous_page):
        if app.help_menu_page > 0:
            app.help_menu_page -= 1
