"""Types for AI-generated image detection."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any


class ImageOrigin(StrEnum):
    """Where the image bytes came from."""

    INLINE = "inline"
    FILE = "file"


@dataclass(slots=True)
class Attachment:
    """Media attached to a chat message."""

    url: str
    content_type: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Attachment:
        return cls(
            url=str(data.get("url") or ""),
            content_type=data.get("contentType") or data.get("content_type"),
        )


@dataclass(slots=True)
class AnalysisRequest:
    """Inbound request: message text plus optional attachments."""

    text: str | None
    attachments: list[Attachment] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AnalysisRequest:
        raw_attachments = data.get("attachments") or []
        return cls(
            text=data.get("text"),
            attachments=[
                item if isinstance(item, Attachment) else Attachment.from_dict(item)
                for item in raw_attachments
            ],
        )


@dataclass(slots=True)
class ParsedImageReference:
    """Image reference pulled out of a request.

    media_file is either a full data URI (is_base64) or a filename
    relative to the asset root.
    """

    media_file: str
    is_base64: bool


@dataclass(slots=True)
class ResolvedImage:
    """Image bytes ready for submission."""

    data: bytes
    origin: ImageOrigin
    path: Path | None = None
    is_temporary: bool = False

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(slots=True)
class ClassificationResult:
    """One entry of the detection response's ``data`` list."""

    is_ai_generated: float
    possible_sources: dict[str, float] = field(default_factory=dict)
    status: str = "unknown"
    index: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ClassificationResult:
        """Build from a response entry.

        Raises:
            ValueError: If required fields are missing or not numeric.
        """
        if not isinstance(data, dict):
            raise ValueError("classification entry is not an object")
        if "is_ai_generated" not in data:
            raise ValueError("classification entry missing is_ai_generated")
        try:
            probability = float(data["is_ai_generated"])
        except (TypeError, ValueError) as e:
            raise ValueError("is_ai_generated is not numeric") from e

        raw_sources = data.get("possible_sources") or {}
        if not isinstance(raw_sources, dict):
            raise ValueError("possible_sources is not an object")
        try:
            sources = {str(name): float(score) for name, score in raw_sources.items()}
        except (TypeError, ValueError) as e:
            raise ValueError("possible_sources contains a non-numeric score") from e

        index = data.get("index")
        return cls(
            is_ai_generated=probability,
            possible_sources=sources,
            status=str(data.get("status", "unknown")),
            index=int(index) if isinstance(index, int) else None,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "is_ai_generated": self.is_ai_generated,
            "possible_sources": dict(self.possible_sources),
            "status": self.status,
        }
        if self.index is not None:
            data["index"] = self.index
        return data


@dataclass(slots=True)
class UploadedAsset:
    """Asset registered with the NVCF asset service."""

    asset_id: str
    description: str


@dataclass(slots=True)
class AnalysisResponse:
    """Result handed to the caller's callback and returned from the action."""

    text: str
    success: bool
    media_path: str = ""
    result: ClassificationResult | None = None
    error: str | None = None

    def to_content(self) -> dict[str, Any]:
        """Serialize to the host's message content shape."""
        if self.success and self.result is not None:
            data: dict[str, Any] = {
                "response": "Analyzed image for AI generation",
                "analysis": [self.result.to_dict()],
            }
        else:
            data = {"error": self.error or ""}
        return {
            "text": self.text,
            "success": self.success,
            "mediaPath": self.media_path,
            "data": data,
        }
