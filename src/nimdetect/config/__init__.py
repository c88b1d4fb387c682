"""Configuration module."""

from nimdetect.config.loader import get_default_config, load_config
from nimdetect.config.models import (
    ConfigError,
    LoggingConfig,
    NimDetectConfig,
    NvidiaNimConfig,
    validate_nim_config,
)
from nimdetect.config.paths import (
    get_asset_root,
    get_config_path,
    get_logs_path,
    get_nimdetect_home,
)

__all__ = [
    "ConfigError",
    "LoggingConfig",
    "NimDetectConfig",
    "NvidiaNimConfig",
    "get_asset_root",
    "get_config_path",
    "get_default_config",
    "get_logs_path",
    "get_nimdetect_home",
    "load_config",
    "validate_nim_config",
]
