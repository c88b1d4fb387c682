"""Centralized path management for nimdetect.

All state (config, logs, image assets) is stored under a single base
directory. The base directory can be overridden with the NIMDETECT_HOME
environment variable.

Default locations:
- Linux/macOS: ~/.nimdetect
- Windows: %USERPROFILE%\\.nimdetect
"""

import os
from functools import lru_cache
from pathlib import Path

ENV_VAR = "NIMDETECT_HOME"
ASSET_ROOT_ENV_VAR = "NIMDETECT_ASSET_ROOT"


@lru_cache(maxsize=1)
def get_nimdetect_home() -> Path:
    """Get the base directory for all nimdetect data.

    Resolution order:
    1. NIMDETECT_HOME environment variable (if set)
    2. ~/.nimdetect
    """
    if env_home := os.environ.get(ENV_VAR):
        return Path(env_home).expanduser().resolve()
    return Path.home() / ".nimdetect"


def get_config_path() -> Path:
    return get_nimdetect_home() / "config.toml"


def get_logs_path() -> Path:
    return get_nimdetect_home() / "logs"


def get_asset_root() -> Path:
    """Directory that filename references in chat messages resolve under.

    NIMDETECT_ASSET_ROOT wins over the home-relative default.
    """
    if env_root := os.environ.get(ASSET_ROOT_ENV_VAR):
        return Path(env_root).expanduser()
    return get_nimdetect_home() / "assets" / "aiimage"
