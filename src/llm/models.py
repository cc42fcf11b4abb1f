# src/llm/models.py — v2
"""LLM-specific types: response content blocks and LLMResponse.

Provider blocks are normalized into a closed tagged union: ``TextBlock``
for text and ``OtherBlock`` for every other kind (tool use, thinking,
whatever the provider adds later). Callers pattern-match on the union
instead of probing attributes.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field


class TextBlock(BaseModel):
    """Textual content block."""

    kind: Literal["text"] = "text"
    text: str


class OtherBlock(BaseModel):
    """Any non-text content block; ``block_type`` keeps the provider's tag."""

    kind: Literal["other"] = "other"
    block_type: str


ContentBlock = Annotated[Union[TextBlock, OtherBlock], Field(discriminator="kind")]


class LLMResponse(BaseModel):
    """Normalized response from the provider."""

    blocks: list[ContentBlock] = Field(default_factory=list)
    input_tokens: int = 0
    output_tokens: int = 0
    model: str
    provider: str
    latency_ms: int
    stop_reason: str | None = None
    raw_response: Any = Field(default=None, exclude=True)
