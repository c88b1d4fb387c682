"""Configuration models using Pydantic."""

import logging
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, SecretStr, field_validator

from nimdetect.config.paths import get_asset_root

logger = logging.getLogger(__name__)

DETECTION_URL = "https://ai.api.nvidia.com/v1/cv/hive/ai-generated-image-detection"
ASSET_URL = "https://api.nvcf.nvidia.com/v2/nvcf/assets"

# Base64 payloads at or above this length go through the asset upload path
INLINE_MAX_CHARS = 180_000


class NvidiaNimConfig(BaseModel):
    """Configuration for the NVIDIA NIM detection API.

    request_timeout of None disables the local timeout so the remote
    service's own limits apply.
    """

    api_key: SecretStr | None = None
    env: Literal["production", "staging"] = "production"
    detection_url: str = DETECTION_URL
    asset_url: str = ASSET_URL
    inline_max_chars: int = Field(default=INLINE_MAX_CHARS, gt=0)
    asset_root: Path = Field(default_factory=get_asset_root)
    request_timeout: float | None = None
    granular_log: bool = False

    @field_validator("asset_root")
    @classmethod
    def _expand_asset_root(cls, value: Path) -> Path:
        return value.expanduser()

    @property
    def temp_dir(self) -> Path:
        """Staging directory for inline and large-upload images."""
        return self.asset_root / "temp"


class LoggingConfig(BaseModel):
    """Configuration for log output."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None
    log_to_file: bool = False
    use_rich: bool = False
    redact_secrets: bool = True


class ConfigError(Exception):
    """Configuration error."""

    pass


class NimDetectConfig(BaseModel):
    """Root configuration model."""

    nvidia: NvidiaNimConfig = Field(default_factory=NvidiaNimConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def resolve_api_key(self) -> str:
        """Return the NVIDIA API key as plain text.

        Raises:
            ConfigError: If no API key is configured.
        """
        if self.nvidia.api_key is None:
            raise ConfigError(
                "NVIDIA NIM API key is not configured. "
                "Set [nvidia].api_key or NVIDIA_NIM_API_KEY"
            )
        value = self.nvidia.api_key.get_secret_value().strip()
        if not value:
            raise ConfigError("NVIDIA NIM API key is empty")
        return value


def validate_nim_config(config: NimDetectConfig) -> NimDetectConfig:
    """Check the configuration is usable for a detection call.

    Raises:
        ConfigError: If the API key is missing or empty.
    """
    config.resolve_api_key()
    if config.nvidia.env != "production":
        logger.warning("nim_env_non_production", extra={"nim.env": config.nvidia.env})
    return config
