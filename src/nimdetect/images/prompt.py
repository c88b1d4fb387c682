"""Extract an image reference from chat message text and attachments."""

from __future__ import annotations

import base64
import binascii
import re
from pathlib import PurePosixPath
from urllib.parse import unquote, urlparse

from nimdetect.errors import ValidationFailedError
from nimdetect.images.types import AnalysisRequest, ParsedImageReference

DATA_URI_RE = re.compile(
    r"data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<payload>[A-Za-z0-9+/]+={0,2})"
)
IMAGE_BLOCK_RE = re.compile(r"\[IMAGE\](?P<name>.*?)\[/IMAGE\]", re.DOTALL)
IMAGE_EXTENSIONS = ("jpg", "jpeg", "png", "gif", "webp", "bmp")
_FILENAME_RE = re.compile(
    r"[^\s\"'<>]+\.(?:" + "|".join(IMAGE_EXTENSIONS) + r")\b", re.IGNORECASE
)


def _attachment_reference(request: AnalysisRequest) -> ParsedImageReference | None:
    for attachment in request.attachments:
        content_type = (attachment.content_type or "").lower()
        if content_type and not content_type.startswith("image/"):
            continue
        url = attachment.url.strip()
        if not url:
            continue
        if url.startswith("data:"):
            if DATA_URI_RE.match(url):
                return ParsedImageReference(media_file=url, is_base64=True)
            continue
        name = PurePosixPath(unquote(urlparse(url).path)).name
        if name:
            return ParsedImageReference(media_file=name, is_base64=False)
    return None


def parse_image_reference(request: AnalysisRequest) -> ParsedImageReference:
    """Find the image a request refers to.

    Checked in order: a data URI embedded in the text, an
    ``[IMAGE]name[/IMAGE]`` block, the first image attachment, then the
    first token in the text that looks like an image filename.

    Raises:
        ValidationFailedError: If the request does not reference an image.
    """
    text = request.text or ""

    if match := DATA_URI_RE.search(text):
        return ParsedImageReference(media_file=match.group(0), is_base64=True)

    if match := IMAGE_BLOCK_RE.search(text):
        name = match.group("name").strip()
        if name:
            return ParsedImageReference(media_file=name, is_base64=False)

    if reference := _attachment_reference(request):
        return reference

    if match := _FILENAME_RE.search(text):
        return ParsedImageReference(media_file=match.group(0), is_base64=False)

    raise ValidationFailedError("No image reference found in message")


def decode_data_uri(uri: str) -> bytes:
    """Decode the base64 payload of a data URI.

    Raises:
        ValidationFailedError: If the URI or payload is malformed.
    """
    _, sep, payload = uri.partition("base64,")
    if not sep:
        raise ValidationFailedError("Image data URI is not base64 encoded")
    payload = re.sub(r"\s+", "", payload)
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationFailedError("Image data URI has invalid base64 payload") from e
