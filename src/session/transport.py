# src/session/transport.py — v1
"""HTTP client side of the analysis endpoint, built on httpx."""

from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import Any
from urllib.parse import urlparse

import httpx

from glucolens.core.models import UploadedImage
from glucolens.extraction.image_codec import resolve_media_type
from glucolens.session.state import EXAMPLE_LOAD_ERROR_MESSAGE

logger = logging.getLogger(__name__)

ANALYZE_PATH = "/api/analyze-glucose"
GENERIC_ANALYSIS_ERROR = "Error analyzing the image"
DEFAULT_BASE_URL = "http://127.0.0.1:8000"


class TransportError(Exception):
    """A request that did not produce a usable result; ``message`` is user-facing."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class AnalysisTransport:
    """Posts images to the analysis endpoint and fetches example assets.

    Uses the transport's default timeouts only; a slow analysis simply keeps
    the caller waiting.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url)

    async def __aenter__(self) -> AnalysisTransport:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def analyze(self, image: UploadedImage) -> str:
        """Submit one image; return the analysis text.

        Raises:
            TransportError: On connection failure, non-2xx status, or a body
                without an ``analysis`` field.
        """
        files = {"image": (image.filename or "image", image.content, image.media_type)}
        try:
            response = await self._client.post(ANALYZE_PATH, files=files)
        except httpx.HTTPError as exc:
            logger.warning("Analysis request failed: %s", exc)
            raise TransportError(GENERIC_ANALYSIS_ERROR) from exc

        data = _json_body(response)
        if not response.is_success:
            raise TransportError(
                data.get("error") or GENERIC_ANALYSIS_ERROR, status_code=response.status_code
            )

        analysis = data.get("analysis")
        if not isinstance(analysis, str):
            raise TransportError(GENERIC_ANALYSIS_ERROR, status_code=response.status_code)
        return analysis

    async def fetch_example(self, url: str) -> UploadedImage:
        """Download an example asset and repackage it as an upload."""
        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Example download failed: url=%s, error=%s", url, exc)
            raise TransportError(EXAMPLE_LOAD_ERROR_MESSAGE) from exc

        filename = PurePosixPath(urlparse(url).path).name or "example"
        return UploadedImage(
            content=response.content,
            media_type=resolve_media_type(response.headers.get("content-type"), filename),
            filename=filename,
        )


def _json_body(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
