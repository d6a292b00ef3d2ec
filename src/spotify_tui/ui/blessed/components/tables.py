"""Main-area tables: tracks, albums, artists, shows, episodes, devices."""

from typing import Any

from spotify_tui.domain.models import (
    ActiveBlock,
    AlbumTableContext,
    EpisodeTableSort,
    TrackTableContext,
)

from ..styles.formatting import artist_names, format_time, liked_marker
from .layout import Region
from .lists import Frame, columns, render_block, render_message

_TRACK_TABLE_TITLES = {
    TrackTableContext.MY_PLAYLISTS: "Playlist",
    TrackTableContext.PLAYLIST_SEARCH: "Playlist",
    TrackTableContext.SAVED_TRACKS: "Liked Songs",
    TrackTableContext.ALBUM_SEARCH: "Album",
    TrackTableContext.RECOMMENDED_TRACKS: "Recommendations",
    TrackTableContext.MADE_FOR_YOU: "Made For You",
}


def _track_columns(width: int) -> list[int]:
    # liked marker + title, artist, album, length
    return [max(width * 2 // 5, 10), max(width // 4, 8), max(width // 4, 8)]


def _track_rows(frame: Frame, tracks: list[dict[str, Any]], width: int) -> list[str]:
    term = frame.term
    liked = frame.app.liked_song_ids
    widths = _track_columns(width)
    return [
        columns(
            term,
            [
                liked_marker(t.get("id"), liked) + t.get("name", ""),
                artist_names(t),
                (t.get("album") or {}).get("name", ""),
                format_time(t.get("duration_ms")),
            ],
            widths,
        )
        for t in tracks
    ]


def _track_header(frame: Frame, width: int) -> str:
    return columns(frame.term, ["  Title", "Artist", "Album", "Length"], _track_columns(width))


def render_track_table(frame: Frame, region: Region) -> None:
    app = frame.app
    table = app.track_table
    title = _TRACK_TABLE_TITLES.get(table.context, "Songs")

    if table.context == TrackTableContext.SAVED_TRACKS:
        page = app.library.saved_tracks.get_current()
        if page is not None and page.total:
            title = f"{title} ({page.offset + 1}-{page.offset + len(page.items)} of {page.total})"
    elif table.context == TrackTableContext.RECOMMENDED_TRACKS and app.recommendations_seed:
        title = f"Recommendations based on {app.recommendations_seed}"
    else:
        page = app.made_for_you_tracks if table.context == TrackTableContext.MADE_FOR_YOU else app.playlist_tracks
        if page is not None and page.total:
            title = f"{title} ({page.offset + 1}-{page.offset + len(page.items)} of {page.total})"

    width = region.inner().width
    render_block(
        frame,
        "track_table",
        title,
        _track_rows(frame, table.tracks, width),
        table.selected_index,
        region,
        active=frame.is_active(ActiveBlock.TRACK_TABLE),
        hovered=frame.is_hovered(ActiveBlock.TRACK_TABLE),
        header=_track_header(frame, width),
    )


def render_album_tracks(frame: Frame, region: Region) -> None:
    app = frame.app
    term = frame.term
    if app.album_table_context == AlbumTableContext.FULL and app.selected_album_full:
        holder = app.selected_album_full
        tracks = holder.tracks
    elif app.selected_album:
        holder = app.selected_album
        tracks = holder.tracks.items
    else:
        render_message(frame, "Album", [term.dim("Loading album...")], region)
        return

    album = holder.album
    title = f"{album.get('name', '')} by {artist_names(album)}"
    widths = [5, max(region.inner().width - 14, 10)]
    rows = [
        columns(
            term,
            [
                str(t.get("track_number", i + 1)),
                liked_marker(t.get("id"), app.liked_song_ids) + t.get("name", ""),
                format_time(t.get("duration_ms")),
            ],
            widths,
        )
        for i, t in enumerate(tracks)
    ]
    render_block(
        frame,
        "album_tracks",
        title,
        rows,
        holder.selected_index,
        region,
        active=frame.is_active(ActiveBlock.ALBUM_TRACKS),
        hovered=frame.is_hovered(ActiveBlock.ALBUM_TRACKS),
        header=columns(term, ["#", "  Title", "Length"], widths),
    )


def render_album_list(frame: Frame, region: Region) -> None:
    app = frame.app
    term = frame.term
    widths = [max(region.inner().width // 2, 10), max(region.inner().width // 3, 8)]
    rows = []
    for row in app.library.saved_albums.current_items():
        album = row.get("album") or {}
        rows.append(
            columns(
                term,
                [album.get("name", ""), artist_names(album), (album.get("release_date") or "")[:4]],
                widths,
            )
        )
    render_block(
        frame,
        "album_list",
        "Saved Albums",
        rows,
        app.album_list_index,
        region,
        active=frame.is_active(ActiveBlock.ALBUM_LIST),
        hovered=frame.is_hovered(ActiveBlock.ALBUM_LIST),
        header=columns(term, ["Name", "Artists", "Year"], widths),
    )


def render_artists(frame: Frame, region: Region) -> None:
    app = frame.app
    rows = [a.get("name", "") for a in app.library.saved_artists.current_items()]
    render_block(
        frame,
        "artists",
        "Artists",
        rows,
        app.artists_list_index,
        region,
        active=frame.is_active(ActiveBlock.ARTISTS),
        hovered=frame.is_hovered(ActiveBlock.ARTISTS),
    )


def render_podcasts(frame: Frame, region: Region) -> None:
    app = frame.app
    term = frame.term
    widths = [max(region.inner().width // 2, 10)]
    rows = []
    for row in app.library.saved_shows.current_items():
        show = row.get("show") or {}
        rows.append(columns(term, [show.get("name", ""), show.get("publisher", "")], widths))
    render_block(
        frame,
        "podcasts",
        "Podcasts",
        rows,
        app.shows_list_index,
        region,
        active=frame.is_active(ActiveBlock.PODCASTS),
        hovered=frame.is_hovered(ActiveBlock.PODCASTS),
        header=columns(term, ["Name", "Publisher"], widths),
    )


def render_episode_table(frame: Frame, region: Region) -> None:
    app = frame.app
    term = frame.term
    table = app.episode_table
    show = table.show or {}
    order = "newest first" if table.sort == EpisodeTableSort.NEWEST_FIRST else "oldest first"
    widths = [12, max(region.inner().width - 24, 10)]
    rows = [
        columns(
            term,
            [e.get("release_date", ""), e.get("name", ""), format_time(e.get("duration_ms"))],
            widths,
        )
        for e in app.library.show_episodes.current_items()
        if e
    ]
    render_block(
        frame,
        "episodes",
        f"{show.get('name', 'Episodes')} ({order})",
        rows,
        table.selected_index,
        region,
        active=frame.is_active(ActiveBlock.EPISODE_TABLE),
        hovered=frame.is_hovered(ActiveBlock.EPISODE_TABLE),
        header=columns(term, ["Date", "Name", "Length"], widths),
    )


def render_recently_played(frame: Frame, region: Region) -> None:
    app = frame.app
    tracks = [row["track"] for row in (app.recently_played.items if app.recently_played else []) if row.get("track")]
    width = region.inner().width
    render_block(
        frame,
        "recently_played",
        "Recently Played Tracks",
        _track_rows(frame, tracks, width),
        app.recently_played_index,
        region,
        active=frame.is_active(ActiveBlock.RECENTLY_PLAYED),
        hovered=frame.is_hovered(ActiveBlock.RECENTLY_PLAYED),
        header=_track_header(frame, width),
    )


def render_made_for_you(frame: Frame, region: Region) -> None:
    app = frame.app
    rows = [p.get("name", "") for p in app.library.made_for_you_playlists.current_items()]
    render_block(
        frame,
        "made_for_you",
        "Made For You",
        rows,
        app.made_for_you_index,
        region,
        active=frame.is_active(ActiveBlock.MADE_FOR_YOU),
        hovered=frame.is_hovered(ActiveBlock.MADE_FOR_YOU),
    )


def render_add_to_playlist(frame: Frame, region: Region) -> None:
    app = frame.app
    rows = [p.get("name", "") for p in (app.playlists.items if app.playlists else [])]
    render_block(
        frame,
        "add_to_playlist",
        "Add track to playlist",
        rows,
        app.add_to_playlist_index,
        region,
        active=True,
        hovered=True,
    )


def render_devices(frame: Frame, region: Region) -> None:
    app = frame.app
    rows = []
    for device in app.devices:
        marker = "* " if device.get("id") and device.get("id") == app.device_id else "  "
        rows.append(f"{marker}{device.get('name', '')} ({device.get('type', '')})")
    if not rows:
        rows = ["No devices found: open Spotify on a device and try again"]
    render_block(
        frame,
        "devices",
        "Select a device",
        rows,
        app.selected_device_index if app.devices else None,
        region,
        active=True,
        hovered=True,
    )
