# src/api/models.py — v2
"""HTTP-level models: the success and error envelopes plus auxiliary payloads."""

from __future__ import annotations

from pydantic import BaseModel


class AnalysisResponse(BaseModel):
    """200 body of POST /api/analyze-glucose."""

    analysis: str


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx answer."""

    error: str


class ExampleAsset(BaseModel):
    """One sample glucose-curve image the client can load without a file picker."""

    name: str
    url: str
    media_type: str


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    configured: bool
