"""Error types raised by the AI image detection action."""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class NimErrorCode(StrEnum):
    """Stable error codes surfaced to callers."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    API_ERROR = "API_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    CONFIG_ERROR = "CONFIG_ERROR"


class ErrorSeverity(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class NimError(Exception):
    """Base error with a stable code and severity.

    The underlying exception, when there is one, is attached with
    ``raise ... from`` and exposed as ``original_error``.
    """

    code: NimErrorCode = NimErrorCode.API_ERROR

    def __init__(
        self,
        message: str,
        *,
        code: NimErrorCode | None = None,
        severity: ErrorSeverity = ErrorSeverity.HIGH,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.severity = severity
        self.details = details or {}

    @property
    def original_error(self) -> BaseException | None:
        return self.__cause__

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "code": self.code.value,
            "message": self.message,
            "severity": self.severity.value,
        }
        if self.details:
            data["details"] = self.details
        if self.original_error is not None:
            data["original_error"] = str(self.original_error)
        return data


class ValidationFailedError(NimError):
    """Request is missing required content or has an unusable image reference."""

    code = NimErrorCode.VALIDATION_FAILED


class MediaFileNotFoundError(NimError):
    """Referenced image does not exist under the asset root."""

    code = NimErrorCode.FILE_NOT_FOUND


class ApiError(NimError):
    """Remote detection or asset call failed."""

    code = NimErrorCode.API_ERROR


class NetworkError(NimError):
    """Unexpected failure caught at the action boundary."""

    code = NimErrorCode.NETWORK_ERROR
