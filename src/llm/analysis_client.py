# src/llm/analysis_client.py — v1
"""Outbound analysis call: credential check, one provider call, text extraction.

``analyze`` never raises for expected failures. A missing or placeholder
key, and any provider failure, come back as an error AnalysisResult with a
fixed user-facing message; the underlying cause is only logged.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import anthropic

from glucolens.config.settings import DEFAULT_MAX_TOKENS, DEFAULT_MODEL, is_usable_api_key
from glucolens.core.errors import CONFIGURATION_ERROR_MESSAGE, PROVIDER_ERROR_MESSAGE
from glucolens.core.models import AnalysisRequest, AnalysisResult, ErrorKind
from glucolens.llm.models import ContentBlock, TextBlock

if TYPE_CHECKING:
    from glucolens.config.settings import Settings
    from glucolens.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)

EXTRACTION_FALLBACK_TEXT = "Could not extract the analysis from the model response."


def extract_analysis_text(blocks: list[ContentBlock]) -> str:
    """Text of the first block, or the fallback when it is not textual."""
    match blocks:
        case [TextBlock(text=text), *_]:
            return text
        case []:
            logger.warning("Provider returned no content blocks")
            return EXTRACTION_FALLBACK_TEXT
        case [first, *_]:
            logger.warning("First content block is not text: %s", first.kind)
            return EXTRACTION_FALLBACK_TEXT


class AnalysisClient:
    """Owns the single model call behind one analysis request."""

    def __init__(
        self,
        api_key: str | None,
        llm: BaseLLMClient | None = None,
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> None:
        self._api_key = api_key or ""
        self._llm = llm
        self._model = model
        self._max_tokens = max_tokens

    @classmethod
    def from_settings(
        cls, settings: Settings, llm: BaseLLMClient | None = None
    ) -> AnalysisClient:
        return cls(
            api_key=settings.anthropic_api_key,
            llm=llm,
            model=settings.analysis_model,
            max_tokens=settings.analysis_max_tokens,
        )

    @property
    def is_configured(self) -> bool:
        return is_usable_api_key(self._api_key)

    @property
    def max_tokens(self) -> int:
        return self._max_tokens

    def _get_llm(self) -> BaseLLMClient:
        if self._llm is None:
            from glucolens.llm.adapters.anthropic_adapter import AnthropicAdapter

            self._llm = AnthropicAdapter(api_key=self._api_key, model=self._model)
        return self._llm

    async def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        """Run the analysis; returns a success or a typed failure."""
        if not self.is_configured:
            logger.warning("Analysis refused: Anthropic API key missing or placeholder")
            return AnalysisResult.failure(ErrorKind.CONFIGURATION, CONFIGURATION_ERROR_MESSAGE)

        llm = self._get_llm()
        try:
            response = await llm.complete_multimodal(request, max_tokens=self._max_tokens)
        except anthropic.APIStatusError as exc:
            logger.error(
                "Provider rejected analysis request: status=%s, type=%s",
                exc.status_code, type(exc).__name__,
            )
            return AnalysisResult.failure(ErrorKind.PROVIDER, PROVIDER_ERROR_MESSAGE)
        except Exception:
            logger.exception("Provider call failed")
            return AnalysisResult.failure(ErrorKind.PROVIDER, PROVIDER_ERROR_MESSAGE)

        text = extract_analysis_text(response.blocks)
        logger.info(
            "Analysis complete: model=%s, input_tokens=%d, output_tokens=%d, latency_ms=%d",
            response.model, response.input_tokens, response.output_tokens, response.latency_ms,
        )
        return AnalysisResult.success(text)
