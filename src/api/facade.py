# src/api/facade.py — v2
"""Public API facade — one glucose-curve image in, one analysis text out.

Usage:
    from glucolens.api.facade import analyze_image
    text = await analyze_image(uploaded_image, settings)

The pipeline walks Received → Validated → Encoded → Requested and ends in
Succeeded (returns the text) or Failed (raises a GlucolensError). The
credential check runs before the upload is touched, so a misconfigured
deployment fails fast no matter what was sent.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from glucolens.config.settings import Settings
from glucolens.core.errors import BadRequestError, ConfigurationError, MissingInputError
from glucolens.core.models import UploadedImage
from glucolens.extraction import image_codec
from glucolens.llm.analysis_client import AnalysisClient
from glucolens.logging.context import set_stage
from glucolens.prompts.builder import PromptBuilder

if TYPE_CHECKING:
    from glucolens.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)

EMPTY_UPLOAD_MESSAGE = "The uploaded image is empty"
NOT_A_FILE_MESSAGE = "The image field must be a file upload"


@runtime_checkable
class UploadSource(Protocol):
    """What the pipeline needs from an uploaded form field (UploadFile fits)."""

    filename: str | None
    content_type: str | None

    async def read(self) -> bytes: ...


class AnalysisPipeline:
    """Request-scoped orchestration of codec → prompt → model call.

    Holds no per-request state; one instance serves concurrent requests.
    """

    def __init__(self, client: AnalysisClient, builder: PromptBuilder) -> None:
        self._client = client
        self._builder = builder

    @classmethod
    def from_settings(
        cls, settings: Settings, llm: BaseLLMClient | None = None
    ) -> AnalysisPipeline:
        return cls(
            client=AnalysisClient.from_settings(settings, llm=llm),
            builder=PromptBuilder(settings.analysis_language),
        )

    @property
    def is_configured(self) -> bool:
        return self._client.is_configured

    def ensure_configured(self) -> None:
        """Validated, part one: credential present and not a placeholder."""
        set_stage("validated")
        if not self._client.is_configured:
            raise ConfigurationError()

    async def read_upload(self, field: UploadSource | str | None) -> UploadedImage:
        """Validated, part two: the form field exists and is a file."""
        if field is None:
            raise MissingInputError()
        if not isinstance(field, UploadSource):
            raise BadRequestError(NOT_A_FILE_MESSAGE)
        content = await field.read()
        media_type = image_codec.resolve_media_type(field.content_type, field.filename)
        return UploadedImage(content=content, media_type=media_type, filename=field.filename)

    async def run(self, image: UploadedImage | None) -> str:
        """Encoded → Requested → Succeeded; raises on Failed."""
        set_stage("encoded")
        try:
            payload = image_codec.encode(image)
        except MissingInputError as exc:
            if image is None:
                raise
            raise BadRequestError(EMPTY_UPLOAD_MESSAGE) from exc

        set_stage("requested")
        request = self._builder.build(payload)
        logger.info("Requesting analysis: media_type=%s", payload.media_type)
        result = await self._client.analyze(request)

        text = result.raise_for_error()
        set_stage("succeeded")
        return text


async def analyze_image(
    image: UploadedImage | None,
    settings: Settings | None = None,
    llm: BaseLLMClient | None = None,
) -> str:
    """Analyze one image outside of HTTP.

    Raises:
        ConfigurationError: If the API key is missing or a placeholder.
        MissingInputError: If ``image`` is None.
        BadRequestError: If the image is empty.
        ProviderError: If the model call fails.
    """
    pipeline = AnalysisPipeline.from_settings(settings or Settings(), llm=llm)
    pipeline.ensure_configured()
    return await pipeline.run(image)
