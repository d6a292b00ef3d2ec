"""Search results grid keyboard handler.

The grid has five panels laid out as::

    Songs     | Artists
    Albums    | Playlists
              | Shows

Directional keys on a hovered panel move between panels; once a panel is
selected (Enter) they move its row cursor instead.
"""

from spotify_tui.domain.models import DialogContext, SearchResultBlock, TrackTableContext
from spotify_tui.ui.blessed.state import ApplicationState, SearchResults

from .common import (
    down_event,
    handle_left_event,
    is_key,
    is_movement,
    left_event,
    navigate_list,
    right_event,
    submit_event,
    up_event,
    uris_of,
)
from .playlist import open_unfollow_dialog

_DOWN = {
    SearchResultBlock.SONG_SEARCH: SearchResultBlock.ALBUM_SEARCH,
    SearchResultBlock.ALBUM_SEARCH: SearchResultBlock.SONG_SEARCH,
    SearchResultBlock.ARTIST_SEARCH: SearchResultBlock.PLAYLIST_SEARCH,
    SearchResultBlock.PLAYLIST_SEARCH: SearchResultBlock.SHOW_SEARCH,
    SearchResultBlock.SHOW_SEARCH: SearchResultBlock.ARTIST_SEARCH,
}
_UP = {
    SearchResultBlock.SONG_SEARCH: SearchResultBlock.ALBUM_SEARCH,
    SearchResultBlock.ALBUM_SEARCH: SearchResultBlock.SONG_SEARCH,
    SearchResultBlock.ARTIST_SEARCH: SearchResultBlock.SHOW_SEARCH,
    SearchResultBlock.PLAYLIST_SEARCH: SearchResultBlock.ARTIST_SEARCH,
    SearchResultBlock.SHOW_SEARCH: SearchResultBlock.PLAYLIST_SEARCH,
}
# None means "leave the grid for the sidebar"
_LEFT = {
    SearchResultBlock.SONG_SEARCH: None,
    SearchResultBlock.ALBUM_SEARCH: None,
    SearchResultBlock.ARTIST_SEARCH: SearchResultBlock.SONG_SEARCH,
    SearchResultBlock.PLAYLIST_SEARCH: SearchResultBlock.ALBUM_SEARCH,
    SearchResultBlock.SHOW_SEARCH: SearchResultBlock.ALBUM_SEARCH,
}
_RIGHT = {
    SearchResultBlock.SONG_SEARCH: SearchResultBlock.ARTIST_SEARCH,
    SearchResultBlock.ALBUM_SEARCH: SearchResultBlock.PLAYLIST_SEARCH,
    SearchResultBlock.ARTIST_SEARCH: SearchResultBlock.SONG_SEARCH,
    SearchResultBlock.PLAYLIST_SEARCH: SearchResultBlock.ALBUM_SEARCH,
    SearchResultBlock.SHOW_SEARCH: SearchResultBlock.ALBUM_SEARCH,
}


def _move_hover(search: SearchResults, moves: dict) -> None:
    if search.hovered_block in moves:
        search.hovered_block = moves[search.hovered_block]


def _enter_selected(app: ApplicationState) -> None:
    search = app.search_results
    item = search.selected_item()
    if item is None:
        return

    match search.selected_block:
        case SearchResultBlock.ALBUM_SEARCH:
            app.track_table.context = TrackTableContext.ALBUM_SEARCH
            app.dispatch("get_album_tracks", album=item)
        case SearchResultBlock.SONG_SEARCH:
            app.dispatch(
                "start_playback",
                context_uri=None,
                uris=uris_of(search.items(SearchResultBlock.SONG_SEARCH)),
                offset=search.selected_tracks_index,
            )
        case SearchResultBlock.ARTIST_SEARCH:
            app.get_artist(item["id"], item.get("name", ""))
        case SearchResultBlock.PLAYLIST_SEARCH:
            app.get_playlist_tracks(item["id"], TrackTableContext.PLAYLIST_SEARCH)
        case SearchResultBlock.SHOW_SEARCH:
            app.dispatch("get_show_episodes", show=item, offset=None)


def _save_selected(app: ApplicationState) -> None:
    search = app.search_results
    item = search.selected_item()
    if item is None:
        return

    match search.selected_block:
        case SearchResultBlock.SONG_SEARCH:
            app.toggle_save_track(item.get("id"))
        case SearchResultBlock.ALBUM_SEARCH:
            app.dispatch("current_user_saved_album_add", album_id=item["id"])
        case SearchResultBlock.ARTIST_SEARCH:
            app.dispatch("user_follow_artists", artist_ids=[item["id"]])
        case SearchResultBlock.PLAYLIST_SEARCH:
            app.dispatch("user_follow_playlist", playlist_id=item["id"])
        case SearchResultBlock.SHOW_SEARCH:
            app.dispatch("user_follow_show", show_id=item["id"])


def _delete_selected(app: ApplicationState) -> None:
    search = app.search_results
    item = search.selected_item()
    if item is None:
        return

    match search.selected_block:
        case SearchResultBlock.ALBUM_SEARCH:
            app.dispatch("current_user_saved_album_delete", album_id=item["id"])
        case SearchResultBlock.ARTIST_SEARCH:
            app.dispatch("user_unfollow_artists", artist_ids=[item["id"]])
        case SearchResultBlock.PLAYLIST_SEARCH:
            open_unfollow_dialog(app, item, DialogContext.PLAYLIST_SEARCH)
        case SearchResultBlock.SHOW_SEARCH:
            app.dispatch("user_unfollow_show", show_id=item["id"])


def handle_search_results_key(event: dict, app: ApplicationState) -> None:
    """
    Handle keys for the search results grid.

    Supports:
    - Directional keys: move between panels, or rows once a panel is selected
    - Enter: select the hovered panel, or act on the selected row
    - w / D: save or follow / delete or unfollow the selected row
    - s: toggle liked on a song, r: radio from a song or artist, queue key
    """
    search = app.search_results
    selected = search.selected_block

    if selected != SearchResultBlock.EMPTY and is_movement(event):
        search.set_index(
            selected,
            navigate_list(event, app, search.items(selected), search.index(selected)),
        )
    elif down_event(event):
        _move_hover(search, _DOWN)
    elif up_event(event):
        _move_hover(search, _UP)
    elif left_event(event):
        search.selected_block = SearchResultBlock.EMPTY
        target = _LEFT.get(search.hovered_block)
        if target is None:
            handle_left_event(app)
        else:
            search.hovered_block = target
    elif right_event(event):
        search.selected_block = SearchResultBlock.EMPTY
        _move_hover(search, _RIGHT)
    elif submit_event(event, app):
        if selected == SearchResultBlock.EMPTY:
            hovered = search.hovered_block
            search.selected_block = hovered
            if search.index(hovered) is None:
                search.set_index(hovered, 0)
        else:
            _enter_selected(app)
    elif selected != SearchResultBlock.EMPTY:
        _handle_row_key(event, app)


def _handle_row_key(event: dict, app: ApplicationState) -> None:
    search = app.search_results
    selected = search.selected_block
    item = search.selected_item()
    if item is None:
        return

    if event["binding"] == "w":
        _save_selected(app)
    elif event["binding"] == "D":
        _delete_selected(app)
    elif event["binding"] == "s" and selected == SearchResultBlock.SONG_SEARCH:
        app.toggle_save_track(item.get("id"))
    elif event["binding"] == "r":
        if selected == SearchResultBlock.SONG_SEARCH:
            app.get_recommendations_for_track(item)
        elif selected == SearchResultBlock.ARTIST_SEARCH:
            app.get_recommendations_for_artist(item)
    elif is_key(event, app.user_config.keys.add_item_to_queue):
        if selected == SearchResultBlock.SONG_SEARCH:
            app.add_item_to_queue(item)
