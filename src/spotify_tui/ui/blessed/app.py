"""Main event loop and entry point for blessed UI."""

from blessed import Terminal
from loguru import logger

from spotify_tui.context import AppContext

from .components import render_screen
from .events.keyboard import handle_key


def run_interactive_ui(ctx: AppContext) -> None:
    """
    Run the interactive UI until the user quits.

    Args:
        ctx: Application context shared with the network worker
    """
    term = Terminal()

    with term.fullscreen(), term.cbreak(), term.hidden_cursor():
        try:
            main_loop(term, ctx)
        except KeyboardInterrupt:
            logger.info("Ctrl+C detected, leaving the UI")


def main_loop(term: Terminal, ctx: AppContext) -> None:
    """
    Tick, read one key, apply it, redraw.

    Each iteration waits at most one tick for a key. The state lock is held
    while the key is applied and while the frame is drawn, never while
    waiting for input.

    Args:
        term: blessed Terminal instance
        ctx: Application context
    """
    timeout = ctx.config.behavior.tick_rate_milliseconds / 1000
    scrolls: dict[str, int] = {}
    last_size = (term.width, term.height)

    print(term.home + term.clear, end="")
    while True:
        size = (term.width, term.height)
        with ctx.locked() as app:
            if size != last_size:
                print(term.home + term.clear, end="")
                last_size = size
            app.update_on_tick()
            render_screen(term, app, scrolls)

        key = term.inkey(timeout=timeout)

        with ctx.locked() as app:
            if not key:
                # No key within a tick: the user stopped seeking
                app.apply_seek()
                continue
            if not handle_key(app, key):
                logger.info("Quit requested")
                return
