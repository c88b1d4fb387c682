"""Centralized logging configuration for nimdetect.

This module provides a single point of truth for logging setup.
The host should call configure_logging() once at startup.

Logging Levels:
- DEBUG: Payload sizes, parsed references, granular request details
- INFO: Action checkpoints (request received, image resolved, API call)
- WARNING: Validation failures, callback failures, cleanup failures
- ERROR: Remote call failures

Checkpoint events are logged with a short snake_case message and
structured fields in ``extra``.
"""

import json
import logging
import os
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any, TextIO

# Default retention period for log files
DEFAULT_LOG_RETENTION_DAYS = 7

# Default patterns for secret detection and redaction
DEFAULT_REDACT_PATTERNS: list[str] = [
    # NVIDIA API keys
    r"\b(nvapi-[A-Za-z0-9_-]{20,})\b",
    # Other common API key prefixes
    r"\b(sk-[A-Za-z0-9_-]{20,})\b",
    r"\b(ghp_[A-Za-z0-9]{20,})\b",
    # ENV-style assignments: API_KEY=secret or API_KEY: secret
    r"\b[A-Z0-9_]+(?:KEY|TOKEN|SECRET|PASSWORD|PASSWD)\s*[=:]\s*([^\s\"']{8,})",
    # Bearer tokens in headers
    r"\bBearer\s+([A-Za-z0-9._\-+=]{20,})\b",
    # Pre-signed upload URLs carry credentials in the query string
    r"\b(X-Amz-Signature=[A-Za-z0-9%]{16,})",
]

# Fields on LogRecord that are not user-supplied extras
_RESERVED_RECORD_ATTRS = set(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime", "component"}


@dataclass
class SecretRedactor:
    """Redacts sensitive information from log messages.

    Patterns match common secret formats (API keys, tokens, signatures)
    and replace them with partially masked versions for debuggability.
    """

    patterns: list[re.Pattern[str]] = field(default_factory=list)
    enabled: bool = True

    def __post_init__(self) -> None:
        if not self.patterns:
            self.patterns = [
                re.compile(p, re.IGNORECASE) for p in DEFAULT_REDACT_PATTERNS
            ]

    def redact(self, text: str) -> str:
        """Redact secrets from text, preserving partial info for debugging."""
        if not self.enabled or not text:
            return text
        result = text
        for pattern in self.patterns:
            result = pattern.sub(self._mask_match, result)
        return result

    def _mask_match(self, match: re.Match[str]) -> str:
        """Mask a matched secret, preserving start/end for identification."""
        full = match.group(0)
        token = match.group(1) if match.lastindex else full

        # Skip if already redacted
        if "..." in token:
            return full

        if len(token) < 12:
            return full.replace(token, "***") if token != full else "***"

        masked = f"{token[:4]}...{token[-4:]}"
        return full.replace(token, masked) if token != full else masked


# Module-level redactor instance
_redactor = SecretRedactor()


def configure_redaction(
    enabled: bool = True, extra_patterns: list[str] | None = None
) -> None:
    """Configure secret redaction for log messages.

    Args:
        enabled: Whether to enable redaction.
        extra_patterns: Additional regex patterns to match secrets.
    """
    global _redactor
    patterns = [re.compile(p, re.IGNORECASE) for p in DEFAULT_REDACT_PATTERNS]
    if extra_patterns:
        patterns.extend(re.compile(p, re.IGNORECASE) for p in extra_patterns)
    _redactor = SecretRedactor(patterns=patterns, enabled=enabled)


def get_redactor() -> SecretRedactor:
    return _redactor


def prune_old_logs(
    logs_dir: Path,
    retention_days: int = DEFAULT_LOG_RETENTION_DAYS,
    suffix: str = ".jsonl",
) -> int:
    """Delete log files older than retention period.

    Returns:
        Number of files deleted.
    """
    if not logs_dir.exists():
        return 0

    cutoff = datetime.now(UTC) - timedelta(days=retention_days)
    deleted = 0

    for entry in logs_dir.iterdir():
        if not entry.is_file() or not entry.name.endswith(suffix):
            continue
        try:
            mtime = datetime.fromtimestamp(entry.stat().st_mtime, UTC)
            if mtime < cutoff:
                entry.unlink()
                deleted += 1
        except OSError:
            pass  # Ignore errors on individual files

    return deleted


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    """Collect the structured fields passed through ``extra=``."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RESERVED_RECORD_ATTRS and not key.startswith("_")
    }


def _component(record: logging.LogRecord) -> str:
    parts = record.name.split(".")
    if len(parts) >= 2 and parts[0] == "nimdetect":
        return parts[1]
    return parts[0]


class JSONLHandler(logging.Handler):
    """Handler that writes structured log entries to a JSONL file.

    Logs are written to ~/.nimdetect/logs/YYYY-MM-DD.jsonl with one JSON
    object per line.

    Features:
    - Daily log rotation
    - Secret redaction (API keys, bearer tokens, signed URLs)
    - Auto-pruning of old logs (default: 7 days retention)
    """

    def __init__(
        self,
        logs_dir: Path,
        retention_days: int = DEFAULT_LOG_RETENTION_DAYS,
    ):
        super().__init__()
        self._logs_dir = logs_dir
        self._logs_dir.mkdir(parents=True, exist_ok=True)
        self._retention_days = retention_days
        self._current_date: str | None = None
        self._file: TextIO | None = None

    def _get_log_file(self) -> TextIO:
        """Get the current log file, rotating daily."""
        today = datetime.now(UTC).strftime("%Y-%m-%d")
        if self._current_date != today or self._file is None:
            if self._file:
                self._file.close()
            self._current_date = today
            log_path = self._logs_dir / f"{today}.jsonl"
            self._file = log_path.open("a", encoding="utf-8")

            prune_old_logs(self._logs_dir, self._retention_days)

        return self._file

    def emit(self, record: logging.LogRecord) -> None:
        """Write a log record as JSON with secret redaction."""
        try:
            entry: dict[str, Any] = {
                "ts": datetime.now(UTC).isoformat(),
                "level": record.levelname,
                "component": _component(record),
                "logger": record.name,
                "message": _redactor.redact(record.getMessage()),
            }

            if record.exc_info:
                formatter = self.formatter or logging.Formatter()
                exception_text = formatter.formatException(record.exc_info)
                entry["exception"] = _redactor.redact(exception_text)

            extras = record_extras(record)
            if extras:
                extra_str = json.dumps(extras, default=str)
                redacted_str = _redactor.redact(extra_str)
                try:
                    entry["extra"] = json.loads(redacted_str)
                except json.JSONDecodeError:
                    entry["extra"] = {"_redacted_raw": redacted_str}

            log_file = self._get_log_file()
            log_file.write(json.dumps(entry) + "\n")
            log_file.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None
        super().close()


class ComponentFormatter(logging.Formatter):
    """Formatter that shortens logger names and appends structured extras.

    - nimdetect.images.client -> images
    - nimdetect.tools.builtin.ai_image -> tools
    """

    def format(self, record: logging.LogRecord) -> str:
        record.component = _component(record)
        text = super().format(record)
        extras = record_extras(record)
        if extras:
            fields = " ".join(f"{key}={value}" for key, value in extras.items())
            text = f"{text} {fields}"
        return _redactor.redact(text)


# Third-party loggers that are too noisy at INFO level
NOISY_LOGGERS = [
    "httpx",
    "httpcore",
]


def configure_logging(
    level: str | None = None,
    use_rich: bool = False,
    log_to_file: bool = False,
    logs_dir: Path | None = None,
) -> None:
    """Configure logging for nimdetect.

    Call this once at host startup.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
            If None, uses NIMDETECT_LOG_LEVEL env var or INFO.
        use_rich: Use Rich handler for colorful console output.
        log_to_file: Also write logs to JSONL files.
        logs_dir: Directory for JSONL files (defaults to ~/.nimdetect/logs).
    """
    from nimdetect.config.paths import get_logs_path

    if level is None:
        level = os.environ.get("NIMDETECT_LOG_LEVEL", "INFO").upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            level = "INFO"

    log_level = getattr(logging, level)

    handlers: list[logging.Handler] = []

    if use_rich:
        from rich.logging import RichHandler

        console_handler: logging.Handler = RichHandler(
            rich_tracebacks=False,
            show_path=False,
            show_time=True,
            markup=False,
        )
        console_handler.setFormatter(ComponentFormatter("%(component)s | %(message)s"))
    else:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            ComponentFormatter(
                "%(asctime)s | %(levelname)-8s | %(component)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )
    handlers.append(console_handler)

    if log_to_file:
        file_handler = JSONLHandler(logs_dir or get_logs_path())
        file_handler.setLevel(log_level)
        handlers.append(file_handler)

    logging.basicConfig(
        level=log_level,
        handlers=handlers,
        force=True,
    )

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def configure_from_config(config: Any) -> None:
    """Apply a LoggingConfig (or a root config carrying one)."""
    logging_config = getattr(config, "logging", config)
    configure_redaction(enabled=logging_config.redact_secrets)
    configure_logging(
        level=logging_config.level,
        use_rich=logging_config.use_rich,
        log_to_file=logging_config.log_to_file,
    )
