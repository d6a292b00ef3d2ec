"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML + .env)
- Logging setup (Loguru)
"""

from .config import (
    Config,
    BehaviorConfig,
    KeyBindingsConfig,
    LoggingConfig,
    SpotifyConfig,
    load_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    create_default_config,
    ensure_directories,
    load_device_id,
    save_device_id,
)
from .output import log, setup_loguru, setup_logging

__all__ = [
    "Config",
    "BehaviorConfig",
    "KeyBindingsConfig",
    "LoggingConfig",
    "SpotifyConfig",
    "load_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "create_default_config",
    "ensure_directories",
    "load_device_id",
    "save_device_id",
    "log",
    "setup_loguru",
    "setup_logging",
]
