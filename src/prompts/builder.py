# src/prompts/builder.py — v1
"""Combine an encoded image with the fixed analysis instructions."""

from __future__ import annotations

from glucolens.core.models import AnalysisRequest, EncodedImagePayload, ImagePart, TextPart
from glucolens.prompts.templates import PROMPTS_BY_LANGUAGE


class PromptBuilder:
    """Builds the two-part multimodal request: image first, instructions second.

    The language is fixed at construction, so every request built by one
    builder carries the same instruction text; only the image part varies.
    """

    def __init__(self, language: str = "en") -> None:
        if language not in PROMPTS_BY_LANGUAGE:
            raise ValueError(
                f"Unsupported analysis language: {language!r}. "
                f"Available: {', '.join(sorted(PROMPTS_BY_LANGUAGE))}"
            )
        self._language = language
        self._instructions = TextPart(text=PROMPTS_BY_LANGUAGE[language])

    @property
    def language(self) -> str:
        return self._language

    @property
    def instructions(self) -> str:
        return self._instructions.text

    def build(self, payload: EncodedImagePayload) -> AnalysisRequest:
        image = ImagePart(media_type=payload.media_type, data=payload.data)
        return AnalysisRequest(parts=(image, self._instructions))


def build(payload: EncodedImagePayload, language: str = "en") -> AnalysisRequest:
    """Module-level shortcut for one-off requests."""
    return PromptBuilder(language).build(payload)
