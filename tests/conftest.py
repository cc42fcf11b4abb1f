# tests/conftest.py — v2
"""Shared test fixtures for all unit and integration tests.

Provides settings with and without a usable API key, sample uploads, and a
mock provider client. No external dependencies — the model call is mocked.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from glucolens.config.settings import Settings
from glucolens.core.models import UploadedImage
from glucolens.llm.models import LLMResponse, OtherBlock, TextBlock

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "assets" / "examples"


def make_llm_response(*blocks: TextBlock | OtherBlock) -> LLMResponse:
    """LLMResponse carrying the given content blocks."""
    return LLMResponse(
        blocks=list(blocks),
        input_tokens=1200,
        output_tokens=300,
        model="claude-sonnet-4-5-20250929",
        provider="anthropic",
        latency_ms=850,
        stop_reason="end_turn",
    )


# === FIXTURES: Settings ===


@pytest.fixture
def settings() -> Settings:
    """Settings with a real-looking key; ignores any .env on the machine."""
    return Settings(
        _env_file=None,
        anthropic_api_key="sk-ant-test-key",
        examples_dir=EXAMPLES_DIR,
    )


@pytest.fixture
def unconfigured_settings() -> Settings:
    return Settings(_env_file=None, anthropic_api_key="", examples_dir=EXAMPLES_DIR)


@pytest.fixture
def placeholder_settings() -> Settings:
    return Settings(_env_file=None, anthropic_api_key="tu_api_key_aqui", examples_dir=EXAMPLES_DIR)


# === FIXTURES: Images ===


@pytest.fixture
def fake_jpeg() -> UploadedImage:
    """10-byte stand-in for a JPEG upload."""
    return UploadedImage(
        content=b"\xff\xd8\xff\xe0fakejp",
        media_type="image/jpeg",
        filename="curve.jpg",
    )


@pytest.fixture
def sample_png() -> UploadedImage:
    return UploadedImage(
        content=(EXAMPLES_DIR / "glucose-stable.png").read_bytes(),
        media_type="image/png",
        filename="glucose-stable.png",
    )


# === FIXTURES: Mock LLM ===


@pytest.fixture
def make_response():
    """Factory fixture: build an LLMResponse from content blocks."""
    return make_llm_response


@pytest.fixture
def mock_llm_response() -> LLMResponse:
    return make_llm_response(TextBlock(text="Patient shows stable control"))


@pytest.fixture
def mock_llm_client(mock_llm_response: LLMResponse) -> AsyncMock:
    """Mock BaseLLMClient with default text response."""
    client = AsyncMock()
    client.complete_multimodal = AsyncMock(return_value=mock_llm_response)
    client.model = "claude-sonnet-4-5-20250929"
    client.provider_name = "mock"
    return client
