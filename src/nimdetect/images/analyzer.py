"""AI-generated image analysis orchestration."""

from __future__ import annotations

import inspect
import logging
import time
from collections.abc import Awaitable, Callable

import httpx

from nimdetect.config import NimDetectConfig
from nimdetect.errors import NimError
from nimdetect.images.client import DetectionClient
from nimdetect.images.resolver import ImageResolver, remove_temp_file
from nimdetect.images.summary import summarize
from nimdetect.images.types import (
    AnalysisRequest,
    AnalysisResponse,
    ClassificationResult,
    ResolvedImage,
)

logger = logging.getLogger(__name__)

ResultCallback = Callable[[AnalysisResponse], Awaitable[None] | None]


async def notify(callback: ResultCallback | None, response: AnalysisResponse) -> None:
    """Deliver a response to the caller; callback failures are logged only."""
    if callback is None:
        return
    try:
        outcome = callback(response)
        if inspect.isawaitable(outcome):
            await outcome
    except Exception:
        logger.warning("result_callback_failed", exc_info=True)


class ImageOriginAnalyzer:
    """Validates a request, resolves its image and asks the remote classifier.

    One instance can serve many invocations; nothing is carried between
    them except the injected configuration.
    """

    def __init__(
        self,
        *,
        config: NimDetectConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._http_client = http_client
        self._resolver = ImageResolver(config.nvidia.asset_root)

    @property
    def resolver(self) -> ImageResolver:
        return self._resolver

    def validate(self, request: AnalysisRequest) -> bool:
        if not request.text:
            logger.warning(
                "validation_failed",
                extra={"error.message": "text content is required"},
            )
            return False
        return True

    async def resolve(self, request: AnalysisRequest) -> ResolvedImage:
        return await self._resolver.resolve(request)

    def _detection_client(self, http_client: httpx.AsyncClient) -> DetectionClient:
        nvidia = self._config.nvidia
        return DetectionClient(
            self._config.resolve_api_key(),
            client=http_client,
            detection_url=nvidia.detection_url,
            asset_url=nvidia.asset_url,
            temp_dir=nvidia.temp_dir,
            inline_max_chars=nvidia.inline_max_chars,
            granular_log=nvidia.granular_log,
        )

    async def classify(self, image: ResolvedImage) -> ClassificationResult:
        if self._http_client is not None:
            return await self._detection_client(self._http_client).classify(image)

        # No body size limit is imposed on the client side
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self._config.nvidia.request_timeout)
        ) as client:
            return await self._detection_client(client).classify(image)

    def summarize(self, result: ClassificationResult) -> str:
        return summarize(result)

    async def analyze(
        self,
        request: AnalysisRequest,
        callback: ResultCallback | None = None,
    ) -> AnalysisResponse:
        """Run one request end to end.

        On any failure after the request is received the callback gets a
        failure response and the error is re-raised.

        Raises:
            MediaFileNotFoundError: If the referenced image does not exist.
            ApiError: If the remote call fails.
        """
        started = time.monotonic()
        logger.info(
            "analysis_request_received",
            extra={
                "request.text_length": len(request.text or ""),
                "request.attachment_count": len(request.attachments),
            },
        )

        image: ResolvedImage | None = None
        try:
            image = await self.resolve(request)
            logger.info(
                "image_resolved",
                extra={"image.origin": image.origin.value, "image.size": image.size},
            )
            result = await self.classify(image)
        except Exception as e:
            message = e.message if isinstance(e, NimError) else str(e)
            media_path = ""
            if isinstance(e, NimError):
                media_path = str(e.details.get("media_path", ""))
            if not media_path and image is not None and image.path is not None:
                media_path = str(image.path)
            await notify(
                callback,
                AnalysisResponse(
                    text=f"Error analyzing image: {message}",
                    success=False,
                    media_path=media_path,
                    error=message,
                ),
            )
            raise
        finally:
            if image is not None and image.is_temporary:
                await remove_temp_file(image.path)

        response = AnalysisResponse(
            text=self.summarize(result),
            success=True,
            media_path=str(image.path) if image.path else "",
            result=result,
        )
        logger.info(
            "analysis_completed",
            extra={
                "result.is_ai_generated": result.is_ai_generated,
                "duration_ms": int((time.monotonic() - started) * 1000),
            },
        )
        await notify(callback, response)
        return response
