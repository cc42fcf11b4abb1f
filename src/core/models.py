# src/core/models.py — v1
"""Shared Pydantic domain models used across modules.

No module redefines these types — all imports come from core.models.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, model_validator


class ErrorKind(str, Enum):
    """External error taxonomy of one analysis request."""

    MISSING_INPUT = "missing_input"
    BAD_REQUEST = "bad_request"
    CONFIGURATION = "configuration"
    PROVIDER = "provider"


# === IMAGES ===


class UploadedImage(BaseModel):
    """Raw upload held only for the duration of one analysis attempt."""

    model_config = {"frozen": True}

    content: bytes
    media_type: str
    filename: str | None = None

    @property
    def size(self) -> int:
        return len(self.content)


class EncodedImagePayload(BaseModel):
    """Base64 text of an UploadedImage plus its media subtype."""

    model_config = {"frozen": True}

    data: str
    subtype: str

    @property
    def media_type(self) -> str:
        return f"image/{self.subtype}"


# === REQUEST ===


class ImagePart(BaseModel):
    """Image content part referencing an encoded payload."""

    model_config = {"frozen": True}

    type: Literal["image"] = "image"
    media_type: str
    data: str


class TextPart(BaseModel):
    """Instruction text content part."""

    model_config = {"frozen": True}

    type: Literal["text"] = "text"
    text: str


class AnalysisRequest(BaseModel):
    """Ordered multimodal request: image first, instructions second."""

    model_config = {"frozen": True}

    parts: tuple[ImagePart, TextPart]

    @property
    def image_part(self) -> ImagePart:
        return self.parts[0]

    @property
    def text_part(self) -> TextPart:
        return self.parts[1]


# === RESULT ===


class AnalysisResult(BaseModel):
    """Outcome of one analysis: either the analysis text or a typed error."""

    analysis_text: str | None = None
    error_kind: ErrorKind | None = None
    message: str | None = None

    @model_validator(mode="after")
    def _exactly_one_outcome(self) -> AnalysisResult:
        has_text = self.analysis_text is not None
        has_error = self.error_kind is not None
        if has_text == has_error:
            raise ValueError("AnalysisResult needs either analysis_text or error_kind")
        return self

    @classmethod
    def success(cls, text: str) -> AnalysisResult:
        return cls(analysis_text=text)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> AnalysisResult:
        return cls(error_kind=kind, message=message)

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    def raise_for_error(self) -> str:
        """Return the analysis text, or raise the error this result carries."""
        if self.error_kind is None:
            return self.analysis_text or ""
        from glucolens.core.errors import error_for_kind

        raise error_for_kind(self.error_kind, self.message)
