"""Help menu: key binding reference table."""

from blessed import Terminal

from spotify_tui.core.config import KeyBindingsConfig

from ..helpers.terminal import write_at


def help_rows(keys: KeyBindingsConfig) -> list[tuple[str, str, str]]:
    """
    Rows of the help table as (description, key, context).

    Configurable bindings show their current value.
    """
    return [
        ("Scroll down to next result page", keys.next_page, "Pagination"),
        ("Scroll up to previous result page", keys.previous_page, "Pagination"),
        ("Jump to start of playlist", keys.jump_to_start, "Pagination"),
        ("Jump to end of playlist", keys.jump_to_end, "Pagination"),
        ("Jump to currently playing album", keys.jump_to_album, "Hovered"),
        ("Jump to currently playing artist's album list", keys.jump_to_artist_album, "Hovered"),
        ("Jump to current play context", keys.jump_to_context, "Hovered"),
        ("Increase volume", keys.increase_volume, "General"),
        ("Decrease volume", keys.decrease_volume, "General"),
        ("Skip to next track", keys.next_track, "General"),
        ("Skip to previous track", keys.previous_track, "General"),
        ("Seek backwards", keys.seek_backwards, "General"),
        ("Seek forwards", keys.seek_forwards, "General"),
        ("Toggle shuffle", keys.shuffle, "General"),
        ("Cycle repeat mode", keys.repeat, "General"),
        ("Move selection left", "h | left | ctrl-b", "General"),
        ("Move selection down", "j | down | ctrl-n", "General"),
        ("Move selection up", "k | up | ctrl-p", "General"),
        ("Move selection right", "l | right | ctrl-f", "General"),
        ("Move selection to top of list", "H", "General"),
        ("Move selection to middle of list", "M", "General"),
        ("Move selection to bottom of list", "L", "General"),
        ("Repeat a movement N times", "<digits> then a movement key", "General"),
        ("Enter input for search", keys.search, "General"),
        ("Pause/Resume playback", keys.toggle_playback, "General"),
        ("Enter active mode", "enter", "General"),
        ("Go to audio analysis screen", keys.audio_analysis, "General"),
        ("Go to playbar only screen (basic view)", keys.basic_view, "General"),
        ("Go back or exit when nowhere left to back to", keys.back, "General"),
        ("Select device to play music on", keys.manage_devices, "General"),
        ("Enter hover mode", "esc", "Selected block"),
        ("Save track in list or table", "s", "Selected block"),
        ("Start playback or enter album/artist/playlist", keys.submit, "Selected block"),
        ("Play recommendations for song/artist", "r", "Selected block"),
        ("Add track to playlist", "w", "Selected block"),
        ("Add item to queue", keys.add_item_to_queue, "Selected block"),
        ("Unfollow playlist / remove album or show", "D", "Selected block"),
        ("Reverse episode order", "S", "Episode table"),
        ("Search with input text", "enter", "Search input"),
        ("Delete entire input", "ctrl-l", "Search input"),
        ("Delete text from cursor to start of input", "ctrl-u", "Search input"),
        ("Delete text from cursor to end of input", "ctrl-k", "Search input"),
        ("Delete previous word", "ctrl-w", "Search input"),
        ("Jump to start of input", "ctrl-a", "Search input"),
        ("Jump to end of input", "ctrl-e", "Search input"),
        ("Escape from the input back to hovered block", "esc", "Search input"),
    ]


def render_help(term: Terminal, app, x: int, y: int, width: int, height: int) -> None:
    """Render one page of the help table and record the page size."""
    rows = help_rows(app.user_config.keys)
    # Header and footer take two lines
    per_page = max(height - 2, 1)
    app.help_menu_max_lines = per_page
    last_page = max((len(rows) - 1) // per_page, 0)
    app.help_menu_page = min(app.help_menu_page, last_page)

    desc_width = max(width // 2, 10)
    key_width = max(width // 4, 6)
    header = term.bold(
        term.ljust("Description", desc_width) + term.ljust("Key", key_width) + "Context"
    )
    write_at(term, x, y, header, width)

    start = app.help_menu_page * per_page
    for line in range(per_page):
        row_idx = start + line
        if row_idx >= len(rows):
            write_at(term, x, y + 1 + line, "", width)
            continue
        description, key, context = rows[row_idx]
        text = (
            term.ljust(term.truncate(description, desc_width - 1), desc_width)
            + term.ljust(key, key_width)
            + context
        )
        write_at(term, x, y + 1 + line, term.white(text), width)

    footer = (
        f"Page {app.help_menu_page + 1}/{last_page + 1}  "
        f"{app.user_config.keys.next_page}/{app.user_config.keys.previous_page} to page, "
        f"{app.user_config.keys.back} to close"
    )
    write_at(term, x, y + height - 1, term.dim(footer), width)
