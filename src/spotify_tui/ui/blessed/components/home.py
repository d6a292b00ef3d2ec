"""Home view: welcome text and a short key reference."""

from spotify_tui.domain.models import ActiveBlock

from ..helpers.terminal import draw_box, write_at
from ..styles.palette import border_style
from .layout import Region
from .lists import Frame

WELCOME = """\
Welcome to spotify-tui!

Browse your library on the left, search with {search}, and press {help}
for the full list of key bindings.

Getting around:
  h j k l / arrows   move between blocks and rows
  enter              open the hovered block or the selected row
  esc                go back to hover mode
  {back}                  go back a screen (quits from here)

Playback:
  {toggle_playback}              play / pause
  {next_track} / {previous_track}              next / previous track
  {seek_backwards} / {seek_forwards}              seek
  {decrease_volume} / {increase_volume}              volume
  {manage_devices}                  pick a device

Playback is controlled remotely: start Spotify on a phone, desktop or
speaker first, then pick it here.
"""


def welcome_lines(keys) -> list[str]:
    return WELCOME.format(**vars(keys)).splitlines()


def render_home(frame: Frame, region: Region) -> None:
    term = frame.term
    app = frame.app
    style = border_style(term, frame.is_active(ActiveBlock.HOME), frame.is_hovered(ActiveBlock.HOME))
    draw_box(term, region.x, region.y, region.width, region.height, "Welcome!", style)

    lines = welcome_lines(app.user_config.keys)
    inner = region.inner()
    app.home_scroll = min(app.home_scroll, max(len(lines) - inner.height, 0))
    for line in range(inner.height):
        idx = app.home_scroll + line
        write_at(term, inner.x, inner.y + line, term.white(lines[idx]) if idx < len(lines) else "", inner.width)
