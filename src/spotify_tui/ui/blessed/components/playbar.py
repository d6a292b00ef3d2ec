"""Playbar: what is playing, on which device, and how far along."""

from spotify_tui.domain.models import ActiveBlock, RepeatState

from ..helpers.terminal import draw_box, write_at
from ..styles.formatting import format_time, item_subtitle, liked_marker
from ..styles.palette import border_style, playing_style
from .layout import Region
from .lists import Frame

_REPEAT_LABELS = {
    RepeatState.OFF: "Off",
    RepeatState.CONTEXT: "All",
    RepeatState.TRACK: "Track",
}


def create_progress_bar(term, position_ms: int, duration_ms: int, width: int) -> str:
    """Create a progress bar with the elapsed and total time on the right."""
    times = f" {format_time(position_ms)}/{format_time(duration_ms)}"
    bar_width = max(width - len(times), 0)
    if duration_ms <= 0 or bar_width == 0:
        return term.white("─" * bar_width) + times

    filled = int(bar_width * min(position_ms / duration_ms, 1.0))
    return term.green("█" * filled) + term.white("░" * (bar_width - filled)) + term.white(times)


def render_playbar(frame: Frame, region: Region) -> None:
    term = frame.term
    app = frame.app
    style = border_style(
        term, frame.is_active(ActiveBlock.PLAY_BAR), frame.is_hovered(ActiveBlock.PLAY_BAR)
    )
    playback = app.current_playback

    if playback is None:
        draw_box(term, region.x, region.y, region.width, region.height, "No playback", style)
        inner = region.inner()
        write_at(
            term,
            inner.x,
            inner.y,
            term.dim(f"Start Spotify on a device, or press {app.user_config.keys.manage_devices} to pick one"),
            inner.width,
        )
        return

    state = "Playing" if playback.is_playing else "Paused"
    device = playback.device.get("name", "")
    title = (
        f"{state} ({device} | Shuffle: {'On' if playback.shuffle_state else 'Off'} | "
        f"Repeat: {_REPEAT_LABELS[playback.repeat_state]} | "
        f"Volume: {playback.volume_percent if playback.volume_percent is not None else '-'}%)"
    )
    draw_box(term, region.x, region.y, region.width, region.height, title, style)

    inner = region.inner()
    item = playback.item
    item_id = item.get("id") if item else None
    write_at(
        term,
        inner.x,
        inner.y,
        playing_style(term)(liked_marker(item_id, app.liked_song_ids) + (item.get("name", "") if item else "")),
        inner.width,
    )
    write_at(term, inner.x, inner.y + 1, term.white(item_subtitle(item)), inner.width)

    position = app.seek_ms if app.seek_ms is not None else app.song_progress_ms
    bar = create_progress_bar(term, position, playback.duration_ms or 0, inner.width)
    write_at(term, inner.x, inner.y + inner.height - 1, bar, inner.width)
