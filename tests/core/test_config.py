"""Tests for configuration loading and validation."""

import pytest

from spotify_tui.core.config import (
    BehaviorConfig,
    Config,
    KeyBindingsConfig,
    load_config,
    load_device_id,
    normalize_binding,
    save_device_id,
)


@pytest.fixture
def xdg_dirs(tmp_path, monkeypatch):
    """Point config and data directories at a temp dir."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("SPOTIFY_CLIENT_ID", raising=False)
    monkeypatch.delenv("SPOTIFY_CLIENT_SECRET", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestNormalizeBinding:
    """Tests for key binding parsing."""

    def test_single_character(self):
        """Printable characters are kept as is."""
        assert normalize_binding("q") == "q"
        assert normalize_binding("?") == "?"

    def test_named_and_ctrl(self):
        """Named keys and ctrl chords are lower-cased."""
        assert normalize_binding("Space") == "space"
        assert normalize_binding(" ") == "space"
        assert normalize_binding("Ctrl-D") == "ctrl-d"

    def test_invalid(self):
        """Unparseable bindings raise ValueError."""
        with pytest.raises(ValueError):
            normalize_binding("ctrl-alt-x")


class TestValidation:
    """Tests for section validation."""

    def test_default_keys_are_valid(self):
        """The shipped defaults pass validation."""
        KeyBindingsConfig().validate()

    def test_reserved_key_rejected(self):
        """Binding a navigation key raises ValueError."""
        with pytest.raises(ValueError, match="reserved"):
            KeyBindingsConfig(back="j").validate()

    def test_behavior_ranges(self):
        """Out of range behavior values raise ValueError."""
        with pytest.raises(ValueError):
            BehaviorConfig(volume_increment=0).validate()
        with pytest.raises(ValueError):
            BehaviorConfig(tick_rate_milliseconds=1000).validate()
        with pytest.raises(ValueError):
            BehaviorConfig(large_search_limit=51).validate()


class TestLoadConfig:
    """Tests for load_config."""

    def test_creates_default_file(self, xdg_dirs):
        """A missing config file is created with defaults."""
        path = xdg_dirs / "config" / "spotify-tui" / "config.toml"
        config = load_config(path)
        assert path.exists()
        assert isinstance(config, Config)
        assert config.behavior.seek_milliseconds == 5000
        assert config.keys.toggle_playback == "space"

    def test_reads_sections(self, xdg_dirs):
        """Values from the TOML file override defaults."""
        path = xdg_dirs / "config.toml"
        path.write_text(
            '[spotify]\nclient_id = "abc"\n'
            '[keys]\nback = "Q"\n'
            "[behavior]\nvolume_increment = 5\n"
        )
        config = load_config(path)
        assert config.spotify.client_id == "abc"
        assert config.keys.back == "Q"
        assert config.behavior.volume_increment == 5
        assert config.behavior.seek_milliseconds == 5000

    def test_env_overrides_credentials(self, xdg_dirs, monkeypatch):
        """SPOTIFY_CLIENT_ID/SECRET win over the file."""
        path = xdg_dirs / "config.toml"
        path.write_text('[spotify]\nclient_id = "from-file"\n')
        monkeypatch.setenv("SPOTIFY_CLIENT_ID", "from-env")
        monkeypatch.setenv("SPOTIFY_CLIENT_SECRET", "secret")
        config = load_config(path)
        assert config.spotify.client_id == "from-env"
        assert config.spotify.client_secret == "secret"

    def test_invalid_binding_raises(self, xdg_dirs):
        """Invalid bindings surface as ValueError."""
        path = xdg_dirs / "config.toml"
        path.write_text('[keys]\nsearch = "k"\n')
        with pytest.raises(ValueError):
            load_config(path)

    def test_broken_toml_uses_defaults(self, xdg_dirs):
        """A malformed file falls back to the defaults."""
        path = xdg_dirs / "config.toml"
        path.write_text("[spotify\nclient_id = ")
        config = load_config(path)
        assert config.spotify.client_id == ""


class TestDeviceId:
    """Tests for device id persistence."""

    def test_round_trip(self, xdg_dirs):
        """A saved device id is loaded back."""
        assert load_device_id() is None
        save_device_id("device-1")
        assert load_device_id() == "device-1"
