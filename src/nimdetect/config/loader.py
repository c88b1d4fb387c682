"""Configuration loading from TOML files and environment variables."""

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import SecretStr

from nimdetect.config.models import NimDetectConfig
from nimdetect.config.paths import ASSET_ROOT_ENV_VAR, get_config_path

_TRUTHY = {"1", "true", "yes", "on"}


def _get_default_config_paths() -> list[Path]:
    """Get ordered list of default config file locations."""
    return [
        Path("config.toml"),  # Current directory
        get_config_path(),  # ~/.nimdetect/config.toml (or NIMDETECT_HOME)
        Path("/etc/nimdetect/config.toml"),  # System-wide
    ]


def _set_from_env(section: dict[str, Any], key: str, env_var: str) -> None:
    """Set a value from environment if not already set."""
    if section.get(key) is None:
        value = os.environ.get(env_var)
        if value:
            section[key] = value


def _resolve_env(config: dict[str, Any]) -> dict[str, Any]:
    """Fill NVIDIA settings from environment variables where not set in config."""
    nvidia = config.setdefault("nvidia", {})
    if nvidia is None:
        nvidia = config["nvidia"] = {}

    if nvidia.get("api_key") is None:
        api_key = os.environ.get("NVIDIA_NIM_API_KEY")
        if api_key:
            nvidia["api_key"] = SecretStr(api_key)

    _set_from_env(nvidia, "env", "NVIDIA_NIM_ENV")
    _set_from_env(nvidia, "asset_root", ASSET_ROOT_ENV_VAR)

    if nvidia.get("granular_log") is None:
        flag = os.environ.get("NVIDIA_GRANULAR_LOG")
        if flag is not None:
            nvidia["granular_log"] = flag.strip().lower() in _TRUTHY

    return config


def load_config(path: Path | None = None) -> NimDetectConfig:
    """Load configuration from TOML file.

    When no file is found, defaults plus environment variables are used.

    Args:
        path: Explicit path to config file. If None, searches default locations.

    Returns:
        Validated NimDetectConfig instance.

    Raises:
        FileNotFoundError: If an explicit path is given and does not exist.
        ValueError: If config file is invalid.
    """
    config_path: Path | None = None

    if path is not None:
        config_path = Path(path).expanduser()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        for default_path in _get_default_config_paths():
            expanded = default_path.expanduser()
            if expanded.exists():
                config_path = expanded
                break

    raw_config: dict[str, Any] = {}
    if config_path is not None:
        with config_path.open("rb") as f:
            raw_config = tomllib.load(f)

    raw_config = _resolve_env(raw_config)

    return NimDetectConfig.model_validate(raw_config)


def get_default_config() -> NimDetectConfig:
    """Get a default configuration for development/testing."""
    return NimDetectConfig()
