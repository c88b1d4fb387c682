"""NVCF asset uploads for images too large to inline."""

from __future__ import annotations

import logging
from pathlib import Path

import aiofiles
import httpx

from nimdetect.errors import ApiError
from nimdetect.images.types import UploadedAsset

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "Input image for AI-generated image detection"
CONTENT_TYPE = "image/jpeg"


class AssetUploader:
    """Registers an asset with NVCF and uploads its bytes.

    Step one asks the asset service for a pre-signed upload URL and an
    asset id; step two PUTs the bytes to that URL. The asset id is then
    usable in place of an inline payload.
    """

    def __init__(
        self,
        api_key: str,
        *,
        asset_url: str,
        client: httpx.AsyncClient,
    ) -> None:
        self._api_key = api_key
        self._asset_url = asset_url
        self._client = client

    async def upload_asset(
        self,
        path: Path,
        description: str = DEFAULT_DESCRIPTION,
    ) -> UploadedAsset:
        """Upload the file at path.

        Raises:
            ApiError: If either step fails or the service response is malformed.
        """
        async with aiofiles.open(path, "rb") as f:
            data = await f.read()
        return await self.upload_bytes(data, description=description)

    async def upload_bytes(
        self,
        data: bytes,
        description: str = DEFAULT_DESCRIPTION,
    ) -> UploadedAsset:
        try:
            response = await self._client.post(
                self._asset_url,
                json={"contentType": CONTENT_TYPE, "description": description},
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Accept": "application/json",
                    "Content-Type": "application/json",
                },
            )
            response.raise_for_status()
            payload = response.json()
            upload_url = payload["uploadUrl"]
            asset_id = str(payload["assetId"])

            upload = await self._client.put(
                upload_url,
                content=data,
                headers={
                    "Content-Type": CONTENT_TYPE,
                    "x-amz-meta-nvcf-asset-description": description,
                },
            )
            upload.raise_for_status()
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            logger.error(
                "asset_upload_failed",
                extra={"error.type": type(e).__name__, "error.message": str(e)},
            )
            raise ApiError(f"Failed to upload image asset: {e}") from e

        logger.info(
            "asset_uploaded",
            extra={"asset.id": asset_id, "asset.size": len(data)},
        )
        return UploadedAsset(asset_id=asset_id, description=description)
