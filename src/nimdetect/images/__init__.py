"""AI-generated image detection subsystem."""

from nimdetect.images.analyzer import ImageOriginAnalyzer, ResultCallback
from nimdetect.images.assets import AssetUploader
from nimdetect.images.client import DetectionClient
from nimdetect.images.summary import summarize
from nimdetect.images.types import (
    AnalysisRequest,
    AnalysisResponse,
    Attachment,
    ClassificationResult,
    ImageOrigin,
    ResolvedImage,
    UploadedAsset,
)

__all__ = [
    "AnalysisRequest",
    "AnalysisResponse",
    "AssetUploader",
    "Attachment",
    "ClassificationResult",
    "DetectionClient",
    "ImageOrigin",
    "ImageOriginAnalyzer",
    "ResolvedImage",
    "ResultCallback",
    "UploadedAsset",
    "summarize",
]
