"""Whole-screen rendering: picks the main view from the current route."""

import sys

from blessed import Terminal

from spotify_tui.domain.models import ActiveBlock, RouteId

from ..state import ApplicationState
from .artist import render_artist
from .help import render_help
from .home import render_home
from .input import render_input
from .layout import Region, calculate_layout
from .lists import Frame
from .overlays import render_analysis, render_dialog, render_error
from .playbar import render_playbar
from .search import render_search_results
from .sidebar import render_sidebar
from .tables import (
    render_add_to_playlist,
    render_album_list,
    render_album_tracks,
    render_artists,
    render_devices,
    render_episode_table,
    render_made_for_you,
    render_podcasts,
    render_recently_played,
    render_track_table,
)

_MAIN_VIEWS = {
    RouteId.HOME: render_home,
    RouteId.SEARCH: render_search_results,
    RouteId.TRACK_TABLE: render_track_table,
    RouteId.RECOMMENDATIONS: render_track_table,
    RouteId.ALBUM_TRACKS: render_album_tracks,
    RouteId.ALBUM_LIST: render_album_list,
    RouteId.ARTIST: render_artist,
    RouteId.ARTISTS: render_artists,
    RouteId.RECENTLY_PLAYED: render_recently_played,
    RouteId.MADE_FOR_YOU: render_made_for_you,
    RouteId.PODCASTS: render_podcasts,
    RouteId.PODCAST_EPISODES: render_episode_table,
    RouteId.ERROR: render_error,
    RouteId.ANALYSIS: render_analysis,
    RouteId.ADD_TO_PLAYLIST: render_add_to_playlist,
}


def _previous_view(app: ApplicationState) -> RouteId:
    """Route drawn underneath a dialog."""
    routes = app.navigation.routes
    return routes[-2].id if len(routes) > 1 else RouteId.HOME


def render_screen(term: Terminal, app: ApplicationState, scrolls: dict[str, int]) -> None:
    """
    Draw one frame. Call with the state lock held.

    Args:
        term: blessed Terminal instance
        app: Application state
        scrolls: Scroll offsets remembered between frames
    """
    frame = Frame(term, app, scrolls)
    route = app.get_current_route()

    if route.id == RouteId.BASIC_VIEW:
        sys.stdout.write(term.home + term.clear)
        render_playbar(frame, calculate_layout(term, basic_view=True)["playbar"])
        sys.stdout.flush()
        return

    if route.id == RouteId.SELECTED_DEVICE:
        render_devices(frame, Region(0, 0, term.width, term.height))
        sys.stdout.flush()
        return

    layout = calculate_layout(term)
    render_input(frame, layout["input"])
    render_sidebar(frame, layout["library"], layout["playlists"])

    main = layout["main"]
    if route.active_block == ActiveBlock.HELP_MENU:
        render_help(term, app, main.x, main.y, main.width, main.height)
    elif route.id == RouteId.DIALOG:
        _MAIN_VIEWS.get(_previous_view(app), render_home)(frame, main)
        render_dialog(frame, main)
    else:
        _MAIN_VIEWS.get(route.id, render_home)(frame, main)

    render_playbar(frame, layout["playbar"])
    sys.stdout.flush()
