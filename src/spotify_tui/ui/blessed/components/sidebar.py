"""Sidebar: library menu and the user's playlists."""

from spotify_tui.domain.models import LIBRARY_OPTIONS, ActiveBlock

from .layout import Region
from .lists import Frame, render_block


def render_sidebar(frame: Frame, library: Region, playlists: Region) -> None:
    app = frame.app
    render_block(
        frame,
        "library",
        "Library",
        list(LIBRARY_OPTIONS),
        app.library.selected_index,
        library,
        active=frame.is_active(ActiveBlock.LIBRARY),
        hovered=frame.is_hovered(ActiveBlock.LIBRARY),
    )

    names = [p.get("name", "") for p in (app.playlists.items if app.playlists else [])]
    render_block(
        frame,
        "playlists",
        "Playlists",
        names,
        app.selected_playlist_index,
        playlists,
        active=frame.is_active(ActiveBlock.MY_PLAYLISTS),
        hovered=frame.is_hovered(ActiveBlock.MY_PLAYLISTS),
    )
