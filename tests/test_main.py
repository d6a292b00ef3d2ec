"""Tests for startup and the command line."""

from pathlib import Path
from unittest.mock import patch

import pytest

from spotify_tui.cli import build_parser
from spotify_tui.core.config import Config
from spotify_tui.main import run
from spotify_tui.providers.spotify import SpotifyAuthError


class TestParser:
    """Tests for command line parsing."""

    def test_options(self):
        """Config path, tick rate and debug are parsed."""
        args = build_parser().parse_args(["-c", "my.toml", "-t", "100", "--debug"])
        assert args.config == Path("my.toml")
        assert args.tick_rate == 100
        assert args.debug is True

    def test_defaults(self):
        """Nothing is overridden by default."""
        args = build_parser().parse_args([])
        assert args.config is None
        assert args.tick_rate is None


class TestRun:
    """Tests for run()."""

    def test_invalid_config(self):
        """A config error exits with status 1."""
        with patch("spotify_tui.main.config.load_config", side_effect=ValueError("bad key")):
            assert run() == 1

    def test_invalid_tick_rate(self):
        """An out of range tick rate override exits with status 1."""
        with patch("spotify_tui.main.config.load_config", return_value=Config()):
            assert run(tick_rate=5000) == 1

    def test_auth_failure(self, tmp_path):
        """Failed authorization exits with status 1 before the UI starts."""
        with patch("spotify_tui.main.config.load_config", return_value=Config()), patch(
            "spotify_tui.main.config.ensure_directories"
        ), patch("spotify_tui.main.setup_logging", return_value=tmp_path / "log"), patch(
            "spotify_tui.main.get_valid_token", side_effect=SpotifyAuthError("denied")
        ), patch(
            "spotify_tui.main.start_network_thread"
        ) as start:
            assert run() == 1
        start.assert_not_called()
