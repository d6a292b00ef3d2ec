"""Library menu keyboard handler."""

from spotify_tui.domain.models import LIBRARY_OPTIONS, ActiveBlock, RouteId, TrackTableContext
from spotify_tui.ui.blessed.state import ApplicationState

from .common import handle_right_event, is_movement, navigate_list, right_event, submit_event


def open_library_option(app: ApplicationState, index: int) -> None:
    """Open the view behind a library menu entry.

    Each entry fetches its first page and pushes the route that shows it.
    """
    match LIBRARY_OPTIONS[index]:
        case "Made For You":
            app.dispatch("get_made_for_you")
            app.push_navigation_stack(RouteId.MADE_FOR_YOU, ActiveBlock.MADE_FOR_YOU)
        case "Recently Played":
            app.dispatch("get_recently_played")
            app.push_navigation_stack(RouteId.RECENTLY_PLAYED, ActiveBlock.RECENTLY_PLAYED)
        case "Liked Songs":
            app.track_table.context = TrackTableContext.SAVED_TRACKS
            app.dispatch("get_current_saved_tracks", offset=None)
            app.push_navigation_stack(RouteId.TRACK_TABLE, ActiveBlock.TRACK_TABLE)
        case "Albums":
            app.dispatch("get_current_user_saved_albums", offset=None)
            app.push_navigation_stack(RouteId.ALBUM_LIST, ActiveBlock.ALBUM_LIST)
        case "Artists":
            app.dispatch("get_followed_artists", after=None)
            app.push_navigation_stack(RouteId.ARTISTS, ActiveBlock.ARTISTS)
        case "Podcasts":
            app.dispatch("get_current_user_saved_shows", offset=None)
            app.push_navigation_stack(RouteId.PODCASTS, ActiveBlock.PODCASTS)


def handle_library_key(event: dict, app: ApplicationState) -> None:
    if right_event(event):
        handle_right_event(app)
    elif is_movement(event):
        app.library.selected_index = navigate_list(
            event, app, LIBRARY_OPTIONS, app.library.selected_index
        )
    elif submit_event(event, app):
        open_library_option(app, app.library.selected_index)
