"""
Configuration management for spotify-tui
"""

import os
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

from loguru import logger

# Keys the list handlers hard-code; binding them would shadow navigation
RESERVED_KEYS = {
    "h", "j", "k", "l", "H", "M", "L",
    "up", "down", "left", "right", "backspace", "enter",
    "0", "1", "2", "3", "4", "5", "6", "7", "8", "9",
}

NAMED_KEYS = {
    "space", "esc", "tab", "del", "backspace", "enter",
    "pageup", "pagedown", "home", "end", "up", "down", "left", "right",
}


def normalize_binding(value: str) -> str:
    """Normalize a key binding string from the config file.

    Accepts a single printable character, ``ctrl-<letter>`` or one of the
    named keys (``space``, ``esc``, ``pageup``, ...).

    Raises:
        ValueError: If the binding cannot be parsed
    """
    if value == " ":
        return "space"
    if len(value) == 1 and value.isprintable():
        return value

    lowered = value.strip().lower()
    if lowered in NAMED_KEYS:
        return lowered
    if lowered.startswith("ctrl-") and len(lowered) == 6 and lowered[5].isalpha():
        return lowered
    raise ValueError(f"Unsupported key binding: {value!r}")


@dataclass
class SpotifyConfig:
    """Configuration for the Spotify Web API client."""

    client_id: str = ""
    client_secret: str = ""
    redirect_uri: str = "http://127.0.0.1:8888/callback"
    market: str = ""  # Empty uses the account's country


@dataclass
class KeyBindingsConfig:
    """Rebindable keys. Values use the normalize_binding() format."""

    back: str = "q"
    next_page: str = "ctrl-d"
    previous_page: str = "ctrl-u"
    jump_to_start: str = "ctrl-a"
    jump_to_end: str = "ctrl-e"
    jump_to_album: str = "a"
    jump_to_artist_album: str = "A"
    jump_to_context: str = "o"
    manage_devices: str = "d"
    decrease_volume: str = "-"
    increase_volume: str = "+"
    toggle_playback: str = "space"
    seek_backwards: str = "<"
    seek_forwards: str = ">"
    next_track: str = "n"
    previous_track: str = "p"
    help: str = "?"
    shuffle: str = "ctrl-s"
    repeat: str = "ctrl-r"
    search: str = "/"
    submit: str = "enter"
    audio_analysis: str = "v"
    basic_view: str = "B"
    add_item_to_queue: str = "z"

    def validate(self) -> None:
        """Validate key bindings.

        Raises:
            ValueError: If a binding is malformed or uses a reserved key
        """
        for f in fields(self):
            value = getattr(self, f.name)
            binding = normalize_binding(value)
            # submit defaults to enter, which is otherwise reserved
            if binding in RESERVED_KEYS and f.name != "submit":
                raise ValueError(
                    f"Key binding {f.name} = {value!r} uses a reserved key. "
                    f"Reserved keys are: {sorted(RESERVED_KEYS)}"
                )
            setattr(self, f.name, binding)


@dataclass
class BehaviorConfig:
    """Configuration for playback and UI behavior."""

    seek_milliseconds: int = 5000
    volume_increment: int = 10
    tick_rate_milliseconds: int = 250
    poll_interval_milliseconds: int = 5000
    large_search_limit: int = 50
    small_search_limit: int = 4
    show_loading_indicator: bool = True

    def validate(self) -> None:
        """Validate behavior values.

        Raises:
            ValueError: If a value is out of range
        """
        if not 0 < self.volume_increment <= 100:
            raise ValueError("volume_increment must be between 1 and 100")
        if not 0 < self.tick_rate_milliseconds < 1000:
            raise ValueError("tick_rate_milliseconds must be between 1 and 999")
        if not 0 < self.large_search_limit <= 50:
            raise ValueError("large_search_limit must be between 1 and 50")
        if not 0 < self.small_search_limit <= 50:
            raise ValueError("small_search_limit must be between 1 and 50")


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/spotify-tui/spotify-tui.log)
    )


@dataclass
class Config:
    """Main configuration object."""

    spotify: SpotifyConfig = field(default_factory=SpotifyConfig)
    keys: KeyBindingsConfig = field(default_factory=KeyBindingsConfig)
    behavior: BehaviorConfig = field(default_factory=BehaviorConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "spotify-tui"
    return Path.home() / ".config" / "spotify-tui"


def get_config_path() -> Path:
    """Get the main configuration file path.

    A config.toml in the current directory wins over the XDG location.
    """
    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config
    return get_config_dir() / "config.toml"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "spotify-tui"
    return Path.home() / ".local" / "share" / "spotify-tui"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# spotify-tui configuration

[spotify]
# Create an app at https://developer.spotify.com/dashboard and add
# the redirect URI below. SPOTIFY_CLIENT_ID / SPOTIFY_CLIENT_SECRET
# environment variables (or a .env file next to this one) override these.
client_id = ""
client_secret = ""
redirect_uri = "http://127.0.0.1:8888/callback"

[keys]
# Single characters, "ctrl-<letter>" or named keys (space, esc, pageup, ...)
back = "q"
next_page = "ctrl-d"
previous_page = "ctrl-u"
toggle_playback = "space"
search = "/"
help = "?"

[behavior]
seek_milliseconds = 5000
volume_increment = 10
tick_rate_milliseconds = 250

[logging]
level = "INFO"
""".strip()


def _load_section(section_cls, data: dict, default):
    """Build a dataclass section, keeping defaults for missing keys."""
    known = {f.name for f in fields(section_cls)}
    unknown = set(data) - known
    if unknown:
        logger.warning(f"Ignoring unknown {section_cls.__name__} keys: {sorted(unknown)}")
    values = {name: data.get(name, getattr(default, name)) for name in known}
    return section_cls(**values)


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file or create default.

    Environment variables override TOML values:
    - SPOTIFY_CLIENT_ID
    - SPOTIFY_CLIENT_SECRET

    Raises:
        ValueError: If key bindings or behavior values are invalid
    """
    # Load .env file from config directory if it exists
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config_path = config_path or get_config_path()
    config = Config()

    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(create_default_config())
        print(f"Created default configuration at: {config_path}")
    else:
        try:
            with open(config_path, "rb") as f:
                toml_data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            print(f"Error loading configuration from {config_path}: {e}")
            print("Using default configuration.")
            toml_data = {}

        if "spotify" in toml_data:
            config.spotify = _load_section(
                SpotifyConfig, toml_data["spotify"], config.spotify
            )
        if "keys" in toml_data:
            config.keys = _load_section(KeyBindingsConfig, toml_data["keys"], config.keys)
        if "behavior" in toml_data:
            config.behavior = _load_section(
                BehaviorConfig, toml_data["behavior"], config.behavior
            )
        if "logging" in toml_data:
            config.logging = _load_section(
                LoggingConfig, toml_data["logging"], config.logging
            )

    # Override Spotify credentials with environment variables if present
    spotify_client_id = os.environ.get("SPOTIFY_CLIENT_ID")
    spotify_client_secret = os.environ.get("SPOTIFY_CLIENT_SECRET")

    if spotify_client_id:
        config.spotify.client_id = spotify_client_id
    if spotify_client_secret:
        config.spotify.client_secret = spotify_client_secret

    config.keys.validate()
    config.behavior.validate()
    return config


def load_device_id() -> Optional[str]:
    """Return the device id chosen in a previous session, if any."""
    device_file = get_data_dir() / "device_id"
    if not device_file.exists():
        return None
    device_id = device_file.read_text(encoding="utf-8").strip()
    return device_id or None


def save_device_id(device_id: str) -> None:
    """Persist the selected playback device for the next session."""
    ensure_directories()
    (get_data_dir() / "device_id").write_text(device_id, encoding="utf-8")
    logger.debug(f"Saved device id {device_id}")


def ensure_directories() -> None:
    """Ensure all necessary directories exist."""
    get_config_dir().mkdir(parents=True, exist_ok=True)
    get_data_dir().mkdir(parents=True, exist_ok=True)
