"""Error, dialog and audio analysis screens."""

from blessed import Terminal

from ..helpers.terminal import draw_box, write_at
from ..styles.formatting import format_time
from ..styles.palette import error_style
from .layout import Region
from .lists import Frame, render_message


def render_error(frame: Frame, region: Region) -> None:
    term = frame.term
    app = frame.app
    lines = term.wrap(app.api_error or "Unknown error", width=max(region.width - 2, 10))
    lines += ["", "Press <Esc> or <Enter> to go back"]
    render_message(frame, "Error", lines, region, error_style(term))


def _dialog_region(region: Region) -> Region:
    width = min(max(region.width // 2, 30), region.width)
    height = min(7, region.height)
    return Region(
        region.x + (region.width - width) // 2,
        region.y + (region.height - height) // 2,
        width,
        height,
    )


def render_dialog(frame: Frame, region: Region) -> None:
    """Confirm box for unfollowing a playlist."""
    term = frame.term
    app = frame.app
    box = _dialog_region(region)
    draw_box(term, box.x, box.y, box.width, box.height, "Confirm", term.bold_yellow)
    inner = box.inner()
    write_at(term, inner.x, inner.y + 1, term.center(f"Unfollow playlist \"{app.dialog or ''}\"?", inner.width), inner.width)

    delete = " Delete "
    cancel = " Cancel "
    buttons = (
        (term.black_on_red(delete) if app.confirm else term.red(delete))
        + "    "
        + (term.white(cancel) if app.confirm else term.black_on_white(cancel))
    )
    write_at(term, inner.x, inner.y + 3, term.center(buttons, inner.width), inner.width)


def analysis_lines(term: Terminal, analysis: dict, progress_ms: int, width: int) -> list[str]:
    """
    Summarise an audio analysis around the current position.

    Shows the track-level tempo/key and the loudness of the segment being
    played as a bar.
    """
    track = analysis.get("track") or {}
    lines = [
        f"Tempo: {track.get('tempo') or 0:.1f} BPM   Key: {track.get('key', '-')}   "
        f"Mode: {'major' if track.get('mode') == 1 else 'minor'}   "
        f"Time signature: {track.get('time_signature', '-')}",
        f"Position: {format_time(progress_ms)}",
        "",
    ]
    position = progress_ms / 1000
    segment = next(
        (
            s
            for s in analysis.get("segments") or []
            if s.get("start", 0) <= position < s.get("start", 0) + s.get("duration", 0)
        ),
        None,
    )
    if segment is None:
        return lines

    # Loudness is in dB, roughly -60..0
    loudness = segment.get("loudness_max", -60)
    filled = int(max(min((loudness + 60) / 60, 1), 0) * max(width - 12, 0))
    lines.append("Loudness  " + term.green("█" * filled))
    lines.append("")
    for name, value in zip(
        ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"],
        segment.get("pitches") or [],
    ):
        lines.append(f"{name:<3} " + term.cyan("█" * int(value * max(width - 6, 0))))
    return lines


def render_analysis(frame: Frame, region: Region) -> None:
    term = frame.term
    app = frame.app
    if app.audio_analysis is None:
        render_message(frame, "Analysis", [term.dim("Loading audio analysis...")], region)
        return
    lines = analysis_lines(term, app.audio_analysis, app.song_progress_ms, region.width - 2)
    render_message(frame, "Analysis", lines, region, term.bold_cyan)
