"""
spotify-tui - startup and shutdown around the interactive UI
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from spotify_tui.context import AppContext
from spotify_tui.core import config
from spotify_tui.core.output import log, setup_logging
from spotify_tui.network.worker import Network, start_network_thread
from spotify_tui.providers.spotify import SpotifyAuthError, SpotifyClient, get_valid_token

# Requests queued before the first frame
STARTUP_INTENTS = ("get_user", "get_playlists", "get_current_playback")


def run(
    config_path: Optional[Path] = None,
    debug: bool = False,
    tick_rate: Optional[int] = None,
) -> int:
    """
    Authorize, start the network worker and run the UI.

    Args:
        config_path: Explicit config file (default: XDG location)
        debug: Log at DEBUG level
        tick_rate: Override of behavior.tick_rate_milliseconds

    Returns:
        Process exit code
    """
    try:
        cfg = config.load_config(config_path)
        if tick_rate is not None:
            cfg.behavior.tick_rate_milliseconds = tick_rate
            cfg.behavior.validate()
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    config.ensure_directories()
    log_file = setup_logging(cfg.logging, debug=debug)

    try:
        token_data = get_valid_token(cfg.spotify)
    except SpotifyAuthError as e:
        log(f"Spotify authorization failed: {e.message}", level="error")
        return 1

    ctx = AppContext.create(cfg)
    client = SpotifyClient(cfg.spotify, token_data)
    network = Network(client, ctx)

    with ctx.locked() as app:
        intents = app.io_tx
        for action in STARTUP_INTENTS:
            if action == "get_current_playback":
                app.is_fetching_current_playback = True
                app.ticker.mark_polled()
            app.dispatch(action)

    worker = start_network_thread(network, intents)

    # Imported late so blessed only loads for the interactive UI
    from spotify_tui.ui.blessed.app import run_interactive_ui

    try:
        run_interactive_ui(ctx)
    finally:
        intents.put(None)
        worker.join(timeout=2.0)
        logger.info(f"spotify-tui exited (log: {log_file})")
    return 0
