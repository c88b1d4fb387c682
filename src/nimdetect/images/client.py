"""Client for the hosted Hive AI-generated image detection model."""

from __future__ import annotations

import base64
import logging
from pathlib import Path
from typing import Any

import httpx

from nimdetect.errors import ApiError
from nimdetect.images.assets import AssetUploader
from nimdetect.images.resolver import remove_temp_file, stage_temp_file
from nimdetect.images.types import ClassificationResult, ImageOrigin, ResolvedImage

logger = logging.getLogger(__name__)

ASSET_REFERENCE_HEADER = "NVCF-INPUT-ASSET-REFERENCES"


def requires_asset_upload(encoded_length: int, inline_max_chars: int) -> bool:
    """Whether a base64 payload of this length must go through asset upload."""
    return encoded_length >= inline_max_chars


def inline_payload(encoded: str) -> dict[str, Any]:
    return {"input": [f"data:image/jpeg;base64,{encoded}"]}


def asset_payload(asset_id: str) -> dict[str, Any]:
    return {"input": [f"data:image/jpeg;asset_id,{asset_id}"]}


def base_headers(api_key: str) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {api_key}",
        "Accept": "application/json",
        "Content-Type": "application/json",
    }


def parse_detection_response(body: Any) -> ClassificationResult:
    """Take the first entry of the response ``data`` list.

    Raises:
        ValueError: If the body does not have the expected shape.
    """
    if not isinstance(body, dict):
        raise ValueError("detection response is not an object")
    entries = body.get("data")
    if not isinstance(entries, list) or not entries:
        raise ValueError("detection response has no data entries")
    return ClassificationResult.from_dict(entries[0])


class DetectionClient:
    """Submits images to the detection endpoint, inline or by asset id."""

    def __init__(
        self,
        api_key: str,
        *,
        client: httpx.AsyncClient,
        detection_url: str,
        asset_url: str,
        temp_dir: Path,
        inline_max_chars: int,
        granular_log: bool = False,
    ) -> None:
        self._api_key = api_key
        self._client = client
        self._detection_url = detection_url
        self._temp_dir = temp_dir
        self._inline_max_chars = inline_max_chars
        self._granular_log = granular_log
        self._uploader = AssetUploader(api_key, asset_url=asset_url, client=client)

    @property
    def uploader(self) -> AssetUploader:
        return self._uploader

    async def _upload(self, image: ResolvedImage) -> str:
        if image.origin == ImageOrigin.FILE and image.path is not None:
            asset = await self._uploader.upload_asset(image.path)
            return asset.asset_id

        staged = await stage_temp_file(self._temp_dir, image.data, suffix="_large")
        try:
            asset = await self._uploader.upload_asset(staged)
        finally:
            await remove_temp_file(staged)
        return asset.asset_id

    async def build_request(
        self, image: ResolvedImage
    ) -> tuple[dict[str, Any], dict[str, str]]:
        """Build the JSON body and headers for one image.

        Uploads the image first when its encoded form is too large to inline.
        """
        encoded = base64.b64encode(image.data).decode("ascii")
        headers = base_headers(self._api_key)

        if not requires_asset_upload(len(encoded), self._inline_max_chars):
            return inline_payload(encoded), headers

        asset_id = await self._upload(image)
        headers[ASSET_REFERENCE_HEADER] = asset_id
        return asset_payload(asset_id), headers

    async def classify(self, image: ResolvedImage) -> ClassificationResult:
        """Classify one image.

        Raises:
            ApiError: On transport failure, non-2xx status or malformed body.
        """
        payload, headers = await self.build_request(image)
        logger.info(
            "detection_request_sent",
            extra={
                "image.size": image.size,
                "image.origin": image.origin.value,
                "request.asset_upload": ASSET_REFERENCE_HEADER in headers,
            },
        )
        if self._granular_log:
            logger.info(
                "detection_request_detail",
                extra={
                    "http.url": self._detection_url,
                    "request.payload_size": len(str(payload)),
                },
            )

        try:
            response = await self._client.post(
                self._detection_url,
                json=payload,
                headers=headers,
            )
            response.raise_for_status()
            body = response.json()
            result = parse_detection_response(body)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(
                "detection_request_failed",
                extra={"error.type": type(e).__name__, "error.message": str(e)},
            )
            raise ApiError(f"Failed to get response from NVIDIA NIM: {e}") from e

        logger.info(
            "detection_response_received",
            extra={"result.status": result.status},
        )
        if self._granular_log:
            logger.info("detection_response_detail", extra={"response.body": body})
        return result
