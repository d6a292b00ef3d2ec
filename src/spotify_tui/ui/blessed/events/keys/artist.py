"""Artist view keyboard handler: top tracks, albums and related artists."""

from typing import Any, Optional

from spotify_tui.domain.models import ArtistBlock, TrackTableContext
from spotify_tui.ui.blessed.state import ApplicationState, ArtistView

from .common import (
    down_event,
    handle_left_event,
    is_key,
    is_movement,
    item_at,
    left_event,
    navigate_list,
    right_event,
    submit_event,
    up_event,
    uris_of,
)

_NEXT_BLOCK = {
    ArtistBlock.TOP_TRACKS: ArtistBlock.ALBUMS,
    ArtistBlock.ALBUMS: ArtistBlock.RELATED_ARTISTS,
    ArtistBlock.RELATED_ARTISTS: ArtistBlock.TOP_TRACKS,
}
_PREVIOUS_BLOCK = {v: k for k, v in _NEXT_BLOCK.items()}

_INDEX_FIELDS = {
    ArtistBlock.TOP_TRACKS: "selected_top_track_index",
    ArtistBlock.ALBUMS: "selected_album_index",
    ArtistBlock.RELATED_ARTISTS: "selected_related_artist_index",
}


def _rows(artist: ArtistView, block: ArtistBlock) -> list[dict[str, Any]]:
    match block:
        case ArtistBlock.TOP_TRACKS:
            return artist.top_tracks
        case ArtistBlock.ALBUMS:
            return artist.albums.items if artist.albums else []
        case ArtistBlock.RELATED_ARTISTS:
            return artist.related_artists
        case _:
            return []


def _selected_row(artist: ArtistView) -> Optional[dict[str, Any]]:
    block = artist.artist_selected_block
    if block not in _INDEX_FIELDS:
        return None
    return item_at(_rows(artist, block), getattr(artist, _INDEX_FIELDS[block]))


def _enter(app: ApplicationState, artist: ArtistView) -> None:
    block = artist.artist_selected_block
    if block == ArtistBlock.EMPTY:
        artist.artist_selected_block = artist.artist_hovered_block
        return

    row = _selected_row(artist)
    if row is None:
        return
    match block:
        case ArtistBlock.TOP_TRACKS:
            app.dispatch(
                "start_playback",
                context_uri=None,
                uris=uris_of(artist.top_tracks),
                offset=artist.selected_top_track_index,
            )
        case ArtistBlock.ALBUMS:
            app.track_table.context = TrackTableContext.ALBUM_SEARCH
            app.dispatch("get_album_tracks", album=row)
        case ArtistBlock.RELATED_ARTISTS:
            app.get_artist(row["id"], row.get("name", ""))


def handle_artist_key(event: dict, app: ApplicationState) -> None:
    """
    Handle keys for the artist view.

    The view has three panels. Up/down on a hovered panel cycle the hover;
    Enter selects it, after which movement keys move its rows.

    Supports:
    - Left / right: move the hover between panels (left of top tracks
      leaves for the sidebar)
    - Enter: play a top track, open an album, or open a related artist
    - r: radio from a top track or related artist
    - w / D: save or delete an album, follow or unfollow a related artist
    - Queue key on a top track
    """
    artist = app.artist
    if artist is None:
        return

    selected = artist.artist_selected_block

    if selected != ArtistBlock.EMPTY and is_movement(event):
        field_name = _INDEX_FIELDS[selected]
        setattr(
            artist,
            field_name,
            navigate_list(event, app, _rows(artist, selected), getattr(artist, field_name)),
        )
    elif down_event(event):
        artist.artist_hovered_block = _NEXT_BLOCK[artist.artist_hovered_block]
    elif up_event(event):
        artist.artist_hovered_block = _PREVIOUS_BLOCK[artist.artist_hovered_block]
    elif left_event(event):
        artist.artist_selected_block = ArtistBlock.EMPTY
        if artist.artist_hovered_block == ArtistBlock.TOP_TRACKS:
            handle_left_event(app)
        else:
            artist.artist_hovered_block = _PREVIOUS_BLOCK[artist.artist_hovered_block]
    elif right_event(event):
        artist.artist_selected_block = ArtistBlock.EMPTY
        artist.artist_hovered_block = _NEXT_BLOCK[artist.artist_hovered_block]
    elif submit_event(event, app):
        _enter(app, artist)
    elif selected != ArtistBlock.EMPTY:
        _handle_row_key(event, app, artist)


def _handle_row_key(event: dict, app: ApplicationState, artist: ArtistView) -> None:
    row = _selected_row(artist)
    if row is None:
        return
    block = artist.artist_selected_block

    match event["binding"], block:
        case "r", ArtistBlock.TOP_TRACKS:
            app.get_recommendations_for_track(row)
        case "r", ArtistBlock.RELATED_ARTISTS:
            app.get_recommendations_for_artist(row)
        case "s", ArtistBlock.TOP_TRACKS:
            app.toggle_save_track(row.get("id"))
        case "w", ArtistBlock.ALBUMS:
            app.dispatch("current_user_saved_album_add", album_id=row["id"])
        case "w", ArtistBlock.RELATED_ARTISTS:
            app.dispatch("user_follow_artists", artist_ids=[row["id"]])
        case "D", ArtistBlock.ALBUMS:
            app.dispatch("current_user_saved_album_delete", album_id=row["id"])
        case "D", ArtistBlock.RELATED_ARTISTS:
            app.dispatch("user_unfollow_artists", artist_ids=[row["id"]])
        case _:
            if block == ArtistBlock.TOP_TRACKS and is_key(
                event, app.user_config.keys.add_item_to_queue
            ):
                app.add_item_to_queue(row)
