"""Artist view: top tracks, albums and related artists side by side."""

from spotify_tui.domain.models import ActiveBlock, ArtistBlock

from ..styles.formatting import format_time, liked_marker
from .layout import Region
from .lists import Frame, render_block, render_message


def render_artist(frame: Frame, region: Region) -> None:
    app = frame.app
    artist = app.artist
    if artist is None:
        render_message(frame, "Artist", [frame.term.dim("Loading artist...")], region)
        return

    in_view = frame.is_active(ActiveBlock.ARTIST_BLOCK) or frame.is_hovered(ActiveBlock.ARTIST_BLOCK)
    top, albums, related = region.split_columns(3)

    panels = [
        (
            ArtistBlock.TOP_TRACKS,
            f"{artist.artist_name} - Top Tracks",
            [
                f"{liked_marker(t.get('id'), app.liked_song_ids)}{t.get('name', '')} ({format_time(t.get('duration_ms'))})"
                for t in artist.top_tracks
            ],
            artist.selected_top_track_index,
            top,
        ),
        (
            ArtistBlock.ALBUMS,
            "Albums",
            [
                f"{(a.get('release_date') or '')[:4]} {a.get('name', '')}"
                for a in (artist.albums.items if artist.albums else [])
            ],
            artist.selected_album_index,
            albums,
        ),
        (
            ArtistBlock.RELATED_ARTISTS,
            "Related artists",
            [
                f"{liked_marker(a.get('id'), app.followed_artist_ids)}{a.get('name', '')}"
                for a in artist.related_artists
            ],
            artist.selected_related_artist_index,
            related,
        ),
    ]
    for block, title, rows, selected, panel in panels:
        render_block(
            frame,
            f"artist_{block.value}",
            title,
            rows,
            selected,
            panel,
            active=in_view and artist.artist_selected_block == block,
            hovered=in_view and artist.artist_hovered_block == block,
        )
