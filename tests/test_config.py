"""Tests for configuration loading and models."""

from pathlib import Path

import pytest
from pydantic import SecretStr, ValidationError

from nimdetect.config import (
    ConfigError,
    NimDetectConfig,
    NvidiaNimConfig,
    get_default_config,
    load_config,
    validate_nim_config,
)
from nimdetect.config.loader import _resolve_env
from nimdetect.config.models import DETECTION_URL, INLINE_MAX_CHARS


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path: Path):
    for var in (
        "NVIDIA_NIM_API_KEY",
        "NVIDIA_NIM_ENV",
        "NVIDIA_GRANULAR_LOG",
        "NIMDETECT_ASSET_ROOT",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


class TestNvidiaNimConfig:
    def test_defaults(self):
        config = NvidiaNimConfig(asset_root=Path("/srv/assets"))
        assert config.api_key is None
        assert config.env == "production"
        assert config.detection_url == DETECTION_URL
        assert config.inline_max_chars == INLINE_MAX_CHARS == 180_000
        assert config.request_timeout is None
        assert config.granular_log is False
        assert config.temp_dir == Path("/srv/assets/temp")

    def test_rejects_bad_env(self):
        with pytest.raises(ValidationError):
            NvidiaNimConfig(env="dev")

    def test_rejects_zero_threshold(self):
        with pytest.raises(ValidationError):
            NvidiaNimConfig(inline_max_chars=0)


class TestResolveApiKey:
    def test_missing(self):
        with pytest.raises(ConfigError):
            NimDetectConfig().resolve_api_key()

    def test_blank(self):
        config = NimDetectConfig(nvidia=NvidiaNimConfig(api_key=SecretStr("  ")))
        with pytest.raises(ConfigError):
            validate_nim_config(config)

    def test_present(self):
        config = NimDetectConfig(nvidia=NvidiaNimConfig(api_key=SecretStr("nvapi-x")))
        assert validate_nim_config(config) is config
        assert config.resolve_api_key() == "nvapi-x"


class TestResolveEnv:
    def test_fills_from_environment(self, monkeypatch):
        monkeypatch.setenv("NVIDIA_NIM_API_KEY", "nvapi-env")
        monkeypatch.setenv("NVIDIA_NIM_ENV", "staging")
        monkeypatch.setenv("NVIDIA_GRANULAR_LOG", "true")
        monkeypatch.setenv("NIMDETECT_ASSET_ROOT", "/data/images")

        raw = _resolve_env({})

        assert raw["nvidia"]["api_key"].get_secret_value() == "nvapi-env"
        assert raw["nvidia"]["env"] == "staging"
        assert raw["nvidia"]["granular_log"] is True
        assert raw["nvidia"]["asset_root"] == "/data/images"

    def test_file_values_win(self, monkeypatch):
        monkeypatch.setenv("NVIDIA_NIM_API_KEY", "nvapi-env")
        raw = _resolve_env({"nvidia": {"api_key": "nvapi-file"}})
        assert raw["nvidia"]["api_key"] == "nvapi-file"

    def test_granular_log_false(self, monkeypatch):
        monkeypatch.setenv("NVIDIA_GRANULAR_LOG", "0")
        assert _resolve_env({})["nvidia"]["granular_log"] is False


class TestLoadConfig:
    def test_explicit_file(self, tmp_path: Path):
        path = tmp_path / "custom.toml"
        path.write_text(
            """
[nvidia]
api_key = "nvapi-from-file"
asset_root = "/srv/aiimage"
inline_max_chars = 1000
request_timeout = 30.0

[logging]
level = "DEBUG"
log_to_file = true
"""
        )

        config = load_config(path)

        assert config.resolve_api_key() == "nvapi-from-file"
        assert config.nvidia.asset_root == Path("/srv/aiimage")
        assert config.nvidia.inline_max_chars == 1000
        assert config.nvidia.request_timeout == 30.0
        assert config.logging.level == "DEBUG"
        assert config.logging.log_to_file is True

    def test_missing_explicit_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")

    def test_current_directory_file(self, tmp_path: Path):
        (tmp_path / "config.toml").write_text('[nvidia]\nenv = "staging"\n')
        assert load_config().nvidia.env == "staging"

    def test_environment_only(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("NIMDETECT_HOME", str(tmp_path / "home"))
        monkeypatch.setenv("NVIDIA_NIM_API_KEY", "nvapi-env")
        from nimdetect.config.paths import get_nimdetect_home

        get_nimdetect_home.cache_clear()
        try:
            config = load_config()
        finally:
            get_nimdetect_home.cache_clear()

        assert config.resolve_api_key() == "nvapi-env"

    def test_default_config(self):
        config = get_default_config()
        assert config.logging.redact_secrets is True
        assert config.nvidia.api_key is None
