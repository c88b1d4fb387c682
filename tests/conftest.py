"""Shared test fixtures and factories."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest
from pydantic import SecretStr

from nimdetect.config import NimDetectConfig, NvidiaNimConfig
from nimdetect.config.models import ASSET_URL, DETECTION_URL

UPLOAD_URL = "https://nvcf-assets.example.com/upload/asset-123"

DETECTION_BODY: dict[str, Any] = {
    "data": [
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
    ]
}


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def asset_root(tmp_path: Path) -> Path:
    root = tmp_path / "assets" / "aiimage"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def config(asset_root: Path) -> NimDetectConfig:
    """Configuration pointing at a temporary asset root."""
    return NimDetectConfig(
        nvidia=NvidiaNimConfig(
            api_key=SecretStr("nvapi-test-key"),
            asset_root=asset_root,
        )
    )


# =============================================================================
# HTTP Fakes
# =============================================================================


class FakeNim:
    """Records requests and answers like the detection and asset services."""

    def __init__(
        self,
        detection_status: int = 200,
        detection_body: Any = None,
        asset_status: int = 200,
        upload_status: int = 200,
        raise_on_detection: Exception | None = None,
    ) -> None:
        self.requests: list[httpx.Request] = []
        self.detection_status = detection_status
        self.detection_body = DETECTION_BODY if detection_body is None else detection_body
        self.asset_status = asset_status
        self.upload_status = upload_status
        self.raise_on_detection = raise_on_detection

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)
        if url == DETECTION_URL:
            if self.raise_on_detection is not None:
                raise self.raise_on_detection
            if isinstance(self.detection_body, str | bytes):
                return httpx.Response(self.detection_status, content=self.detection_body)
            return httpx.Response(self.detection_status, json=self.detection_body)
        if url == ASSET_URL:
            return httpx.Response(
                self.asset_status,
                json={"uploadUrl": UPLOAD_URL, "assetId": "asset-123"},
            )
        if url == UPLOAD_URL:
            return httpx.Response(self.upload_status)
        return httpx.Response(404)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def requests_to(self, url: str) -> list[httpx.Request]:
        return [r for r in self.requests if str(r.url) == url]

    def detection_payload(self) -> dict[str, Any]:
        (request,) = self.requests_to(DETECTION_URL)
        return json.loads(request.content)


@pytest.fixture
def fake_nim() -> FakeNim:
    return FakeNim()


@pytest.fixture
def fake_nim_factory() -> Callable[..., FakeNim]:
    return FakeNim
