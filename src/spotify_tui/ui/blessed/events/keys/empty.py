"""Keys while no block is active: move the hover between panels."""

from spotify_tui.domain.models import ActiveBlock
from spotify_tui.ui.blessed.state import ApplicationState

from .common import down_event, handle_right_event, left_event, right_event, submit_event, up_event

# Main-view blocks; moving down from any of them hovers the playbar
_MAIN_BLOCKS = (
    ActiveBlock.ARTIST_BLOCK,
    ActiveBlock.ALBUM_LIST,
    ActiveBlock.ALBUM_TRACKS,
    ActiveBlock.ARTISTS,
    ActiveBlock.PODCASTS,
    ActiveBlock.EPISODE_TABLE,
    ActiveBlock.HOME,
    ActiveBlock.MADE_FOR_YOU,
    ActiveBlock.RECENTLY_PLAYED,
    ActiveBlock.SEARCH_RESULT_BLOCK,
    ActiveBlock.TRACK_TABLE,
)


def handle_empty_key(event: dict, app: ApplicationState) -> None:
    hovered = app.get_current_route().hovered_block

    if submit_event(event, app):
        app.set_current_route_state(active=hovered)
    elif down_event(event):
        if hovered == ActiveBlock.LIBRARY:
            app.set_current_route_state(hovered=ActiveBlock.MY_PLAYLISTS)
        elif hovered == ActiveBlock.MY_PLAYLISTS or hovered in _MAIN_BLOCKS:
            app.set_current_route_state(hovered=ActiveBlock.PLAY_BAR)
    elif up_event(event):
        if hovered == ActiveBlock.MY_PLAYLISTS:
            app.set_current_route_state(hovered=ActiveBlock.LIBRARY)
        elif hovered == ActiveBlock.PLAY_BAR:
            app.set_current_route_state(hovered=ActiveBlock.MY_PLAYLISTS)
    elif left_event(event):
        if hovered in _MAIN_BLOCKS:
            app.set_current_route_state(hovered=ActiveBlock.LIBRARY)
    elif right_event(event):
        handle_right_event(app)
