"""
Command-line interface for spotify-tui.
"""

import argparse
import sys
from pathlib import Path

from spotify_tui import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spotify-tui",
        description="Terminal client for Spotify",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config.toml (default: ~/.config/spotify-tui/config.toml)",
    )
    parser.add_argument(
        "-t",
        "--tick-rate",
        type=int,
        help="Milliseconds between UI ticks (overrides the config file)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Write DEBUG level logs",
    )
    return parser


def main() -> None:
    """Main entry point for the spotify-tui command."""
    args = build_parser().parse_args()

    from spotify_tui.main import run

    sys.exit(run(config_path=args.config, debug=args.debug, tick_rate=args.tick_rate))


if __name__ == "__main__":
    main()
