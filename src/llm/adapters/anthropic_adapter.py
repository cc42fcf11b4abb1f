# src/llm/adapters/anthropic_adapter.py — v3
"""Anthropic Claude adapter implementing BaseLLMClient.

Uses the official anthropic SDK. Exceptions from the SDK propagate
unchanged; normalizing them is the analysis client's job.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import anthropic

from glucolens.config.settings import DEFAULT_MODEL
from glucolens.core.models import AnalysisRequest, ImagePart, TextPart
from glucolens.llm.base_client import BaseLLMClient
from glucolens.llm.models import ContentBlock, LLMResponse, OtherBlock, TextBlock

logger = logging.getLogger(__name__)


class AnthropicAdapter(BaseLLMClient):
    """Adapter for Anthropic Claude vision models."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self.__client: anthropic.AsyncAnthropic | None = None

    @property
    def _client(self) -> anthropic.AsyncAnthropic:
        """Lazy-init Anthropic client (only on first API call)."""
        if self.__client is None:
            self.__client = anthropic.AsyncAnthropic(api_key=self._api_key)
        return self.__client

    async def complete_multimodal(
        self,
        request: AnalysisRequest,
        max_tokens: int = 2048,
    ) -> LLMResponse:
        """One Messages API call with a single multimodal user turn."""
        params: dict[str, Any] = {
            "model": self._model,
            "max_tokens": max_tokens,
            "messages": [
                {
                    "role": "user",
                    "content": [self._to_api_block(part) for part in request.parts],
                }
            ],
        }

        start = time.monotonic()
        response = await self._client.messages.create(**params)
        latency_ms = int((time.monotonic() - start) * 1000)

        logger.debug(
            "Anthropic call done: model=%s, latency_ms=%d, stop_reason=%s",
            response.model, latency_ms, response.stop_reason,
        )

        return LLMResponse(
            blocks=[self._from_api_block(block) for block in response.content],
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
            model=response.model,
            provider=self.provider_name,
            latency_ms=latency_ms,
            stop_reason=response.stop_reason,
            raw_response=response,
        )

    @property
    def model(self) -> str:
        return self._model

    @property
    def provider_name(self) -> str:
        return "anthropic"

    # --- Internal helpers ---

    @staticmethod
    def _to_api_block(part: ImagePart | TextPart) -> dict[str, Any]:
        if isinstance(part, ImagePart):
            return {
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": part.media_type,
                    "data": part.data,
                },
            }
        return {"type": "text", "text": part.text}

    @staticmethod
    def _from_api_block(block: Any) -> ContentBlock:
        block_type = getattr(block, "type", None) or "unknown"
        if block_type == "text":
            return TextBlock(text=block.text)
        return OtherBlock(block_type=block_type)
