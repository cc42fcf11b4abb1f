# src/llm/base_client.py — v2
"""Abstract LLM client interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from glucolens.core.models import AnalysisRequest
from glucolens.llm.models import LLMResponse


class BaseLLMClient(ABC):
    """Interface the analysis client talks to; one call per request."""

    @abstractmethod
    async def complete_multimodal(
        self,
        request: AnalysisRequest,
        max_tokens: int = 2048,
    ) -> LLMResponse:
        """Single user turn built from the request's parts, no streaming."""

    @property
    @abstractmethod
    def model(self) -> str:
        """Model identifier sent to the provider."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (anthropic)."""
