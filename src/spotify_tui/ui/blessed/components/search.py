"""Search results grid.

Songs and albums fill the left column; artists, playlists and shows the
right one, matching the directional moves of the key handler.
"""

from spotify_tui.domain.models import ActiveBlock, SearchResultBlock

from ..styles.formatting import artist_names, liked_marker
from .layout import Region
from .lists import Frame, render_block


def _rows(frame: Frame, block: SearchResultBlock) -> list[str]:
    app = frame.app
    items = app.search_results.items(block)
    match block:
        case SearchResultBlock.SONG_SEARCH:
            return [
                f"{liked_marker(t.get('id'), app.liked_song_ids)}{t.get('name', '')} - {artist_names(t)}"
                for t in items
            ]
        case SearchResultBlock.ALBUM_SEARCH:
            return [
                f"{liked_marker(a.get('id'), app.saved_album_ids)}{a.get('name', '')} - {artist_names(a)}"
                for a in items
            ]
        case SearchResultBlock.ARTIST_SEARCH:
            return [
                f"{liked_marker(a.get('id'), app.followed_artist_ids)}{a.get('name', '')}"
                for a in items
            ]
        case SearchResultBlock.SHOW_SEARCH:
            return [
                f"{liked_marker(s.get('id'), app.saved_show_ids)}{s.get('name', '')}"
                for s in items
            ]
        case _:
            return [p.get("name", "") for p in items]


def render_search_results(frame: Frame, region: Region) -> None:
    search = frame.app.search_results
    in_grid = frame.is_active(ActiveBlock.SEARCH_RESULT_BLOCK) or frame.is_hovered(
        ActiveBlock.SEARCH_RESULT_BLOCK
    )

    left, right = region.split_columns(2)
    songs, albums = left.split_rows(2)
    artists, playlists, shows = right.split_rows(3)
    panels = [
        (SearchResultBlock.SONG_SEARCH, "Songs", songs),
        (SearchResultBlock.ALBUM_SEARCH, "Albums", albums),
        (SearchResultBlock.ARTIST_SEARCH, "Artists", artists),
        (SearchResultBlock.PLAYLIST_SEARCH, "Playlists", playlists),
        (SearchResultBlock.SHOW_SEARCH, "Podcasts", shows),
    ]
    for block, title, panel in panels:
        render_block(
            frame,
            f"search_{block.value}",
            title,
            _rows(frame, block),
            search.index(block),
            panel,
            active=in_grid and search.selected_block == block,
            hovered=in_grid and search.hovered_block == block,
        )
