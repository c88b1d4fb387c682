"""GET_AI_IMAGE action: detect whether an image was AI generated."""

import logging
from typing import Any

import httpx

from nimdetect.config import NimDetectConfig, validate_nim_config
from nimdetect.errors import NetworkError, NimError, ValidationFailedError
from nimdetect.images import (
    AnalysisRequest,
    AnalysisResponse,
    ImageOriginAnalyzer,
    ResultCallback,
)
from nimdetect.tools.base import Tool, ToolContext, ToolResult

logger = logging.getLogger(__name__)

ACTION_NAME = "GET_AI_IMAGE"

EXAMPLES: list[list[dict[str, Any]]] = [
    [
        {
            "user": "user",
            "content": {
                "text": "Check if this image is AI generated [IMAGE]\ntest_ai.jpg\n[/IMAGE]",
                "mediaPath": "test_ai.jpg",
            },
        },
        {
            "user": "assistant",
            "content": {
                "text": (
                    "AI Image Analysis: Image is 99.94% likely to be AI-generated. "
                    "Most likely source: stablediffusionxl (88.75% confidence)."
                ),
                "success": True,
                "data": {
                    "response": "Analyzed image for AI generation",
                    "analysis": [
                        {
                            "index": 0,
                            "is_ai_generated": 0.9994,
                            "possible_sources": {
                                "stablediffusionxl": 0.8875,
                                "midjourney": 0.0136,
                                "dalle": 0.0518,
                            },
                            "status": "SUCCESS",
                        }
                    ],
                },
            },
        },
    ]
]


class AIImageDetectionTool(Tool):
    """Analyze an image with NVIDIA NIM's Hive AI-generated image detector.

    The image comes from a base64 data URI in the message, an image
    attachment, or a filename under the configured asset root.
    """

    similes = ("CHECK_AI_IMAGE", "ANALYZE_AI_IMAGE", "AI_IMAGE_CONTROL")
    action = ACTION_NAME
    examples = EXAMPLES

    def __init__(
        self,
        config: NimDetectConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._analyzer = ImageOriginAnalyzer(config=config, http_client=http_client)

    @property
    def name(self) -> str:
        return "get_ai_image"

    @property
    def description(self) -> str:
        return (
            "Use the NVIDIA AI image detection model to analyze whether an image "
            "was generated by AI and which generator most likely produced it. "
            "Pass the user's message text; include the image as a base64 data URI, "
            "an [IMAGE]filename[/IMAGE] block, or an attachment."
        )

    @property
    def input_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "text": {
                    "type": "string",
                    "description": "Message text referencing the image",
                },
                "attachments": {
                    "type": "array",
                    "description": "Media attached to the message",
                    "items": {
                        "type": "object",
                        "properties": {
                            "url": {"type": "string"},
                            "contentType": {"type": "string"},
                        },
                        "required": ["url"],
                    },
                },
            },
            "required": ["text"],
        }

    @property
    def analyzer(self) -> ImageOriginAnalyzer:
        return self._analyzer

    def validate(self, request: AnalysisRequest) -> bool:
        return self._analyzer.validate(request)

    async def handle(
        self,
        request: AnalysisRequest,
        callback: ResultCallback | None = None,
    ) -> AnalysisResponse:
        """Run the action.

        A request without text is rejected before any I/O. NimError
        subclasses propagate unchanged; anything else is wrapped in
        NetworkError with the original exception as its cause.
        """
        logger.info("action_started", extra={"action.name": ACTION_NAME})
        try:
            if not self.validate(request):
                raise ValidationFailedError("text content is required")
            validate_nim_config(self._config)
            return await self._analyzer.analyze(request, callback)
        except NimError as e:
            logger.error(
                "action_failed",
                extra={"action.name": ACTION_NAME, "error.code": e.code.value},
            )
            raise
        except Exception as e:
            logger.error(
                "action_failed",
                extra={
                    "action.name": ACTION_NAME,
                    "error.type": type(e).__name__,
                    "error.message": str(e),
                },
            )
            raise NetworkError(f"Failed to execute {ACTION_NAME} action: {e}") from e

    async def execute(
        self,
        input_data: dict[str, Any],
        context: ToolContext,
    ) -> ToolResult:
        attachments = input_data.get("attachments") or []
        if not isinstance(attachments, list):
            return ToolResult.error("attachments must be a list")
        request = AnalysisRequest.from_dict({**input_data, "attachments": attachments})

        if not self.validate(request):
            return ToolResult.error(
                "text content is required", code="VALIDATION_FAILED"
            )

        try:
            response = await self.handle(request)
        except NimError as e:
            return ToolResult.error(
                f"Error analyzing image: {e.message}", code=e.code.value
            )

        content = response.to_content()
        return ToolResult.success(
            response.text,
            media_path=response.media_path,
            data=content["data"],
        )
