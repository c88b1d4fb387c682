"""Resolve an image reference into bytes on hand."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import aiofiles
import aiofiles.os

from nimdetect.errors import MediaFileNotFoundError, ValidationFailedError
from nimdetect.images.prompt import decode_data_uri, parse_image_reference
from nimdetect.images.types import AnalysisRequest, ImageOrigin, ResolvedImage

logger = logging.getLogger(__name__)


def temp_image_path(temp_dir: Path, suffix: str = "") -> Path:
    """Timestamp-named staging path, e.g. ``temp_1718000000000_large.jpg``."""
    return temp_dir / f"temp_{int(time.time() * 1000)}{suffix}.jpg"


async def stage_temp_file(temp_dir: Path, data: bytes, suffix: str = "") -> Path:
    """Write bytes to a new staging file under temp_dir."""
    await aiofiles.os.makedirs(temp_dir, exist_ok=True)
    path = temp_image_path(temp_dir, suffix)
    async with aiofiles.open(path, "wb") as f:
        await f.write(data)
    logger.debug(
        "temp_file_staged",
        extra={"file.path": str(path), "file.size": len(data)},
    )
    return path


async def remove_temp_file(path: Path | None) -> None:
    """Delete a staging file; missing files are ignored."""
    if path is None:
        return
    try:
        await aiofiles.os.remove(path)
    except FileNotFoundError:
        return
    except OSError:
        logger.warning(
            "temp_file_cleanup_failed", extra={"file.path": str(path)}, exc_info=True
        )
        return
    logger.debug("temp_file_removed", extra={"file.path": str(path)})


class ImageResolver:
    """Turns a request into a ResolvedImage.

    Filename references resolve under asset_root; inline data URIs are
    decoded and staged to ``asset_root/temp``.
    """

    def __init__(self, asset_root: Path) -> None:
        self._asset_root = asset_root

    @property
    def asset_root(self) -> Path:
        return self._asset_root

    @property
    def temp_dir(self) -> Path:
        return self._asset_root / "temp"

    async def resolve(self, request: AnalysisRequest) -> ResolvedImage:
        reference = parse_image_reference(request)
        logger.debug(
            "image_reference_parsed",
            extra={
                "image.is_base64": reference.is_base64,
                "image.reference_length": len(reference.media_file),
            },
        )
        if reference.is_base64:
            return await self._resolve_inline(reference.media_file)
        return await self._resolve_file(reference.media_file)

    async def _resolve_inline(self, data_uri: str) -> ResolvedImage:
        data = decode_data_uri(data_uri)
        path = await stage_temp_file(self.temp_dir, data)
        return ResolvedImage(
            data=data,
            origin=ImageOrigin.INLINE,
            path=path,
            is_temporary=True,
        )

    def _media_path(self, media_file: str) -> Path:
        root = self._asset_root.resolve()
        candidate = (root / media_file).resolve()
        if not candidate.is_relative_to(root):
            raise ValidationFailedError(
                f"Image reference escapes asset directory: {media_file}"
            )
        return candidate

    async def _resolve_file(self, media_file: str) -> ResolvedImage:
        await aiofiles.os.makedirs(self._asset_root, exist_ok=True)
        media_path = self._media_path(media_file)

        if not await aiofiles.os.path.isfile(media_path):
            logger.warning(
                "media_file_not_found",
                extra={"file.path": str(media_path)},
            )
            raise MediaFileNotFoundError(
                f"Media file not found: {media_path}",
                details={"media_path": str(media_path)},
            )

        async with aiofiles.open(media_path, "rb") as f:
            data = await f.read()
        return ResolvedImage(data=data, origin=ImageOrigin.FILE, path=media_path)
