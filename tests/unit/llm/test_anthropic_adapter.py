# tests/unit/llm/test_anthropic_adapter.py — v1
"""Tests for llm/adapters/anthropic_adapter.py — request shape and block mapping."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from glucolens.core.models import EncodedImagePayload
from glucolens.llm.adapters.anthropic_adapter import AnthropicAdapter
from glucolens.llm.models import OtherBlock, TextBlock
from glucolens.prompts.builder import PromptBuilder


def _api_response(*content):
    return SimpleNamespace(
        content=list(content),
        usage=SimpleNamespace(input_tokens=1500, output_tokens=420),
        model="claude-sonnet-4-5-20250929",
        stop_reason="end_turn",
    )


def _adapter_with(response) -> tuple[AnthropicAdapter, AsyncMock]:
    adapter = AnthropicAdapter(api_key="sk-ant-test")
    create = AsyncMock(return_value=response)
    fake_client = MagicMock()
    fake_client.messages.create = create
    adapter._AnthropicAdapter__client = fake_client
    return adapter, create


@pytest.fixture
def analysis_request():
    return PromptBuilder().build(EncodedImagePayload(data="aGVsbG8=", subtype="png"))


class TestRequestShape:
    @pytest.mark.asyncio
    async def test_single_user_turn_image_then_text(self, analysis_request):
        adapter, create = _adapter_with(_api_response(SimpleNamespace(type="text", text="ok")))
        await adapter.complete_multimodal(analysis_request, max_tokens=2048)

        create.assert_awaited_once()
        kwargs = create.call_args.kwargs
        assert kwargs["model"] == "claude-sonnet-4-5-20250929"
        assert kwargs["max_tokens"] == 2048
        assert "stream" not in kwargs
        messages = kwargs["messages"]
        assert len(messages) == 1
        assert messages[0]["role"] == "user"
        image_block, text_block = messages[0]["content"]
        assert image_block == {
            "type": "image",
            "source": {"type": "base64", "media_type": "image/png", "data": "aGVsbG8="},
        }
        assert text_block["type"] == "text"
        assert text_block["text"] == analysis_request.text_part.text


class TestResponseMapping:
    @pytest.mark.asyncio
    async def test_text_and_other_blocks(self, analysis_request):
        adapter, _ = _adapter_with(
            _api_response(
                SimpleNamespace(type="thinking", thinking="..."),
                SimpleNamespace(type="text", text="Stable overnight"),
            )
        )
        response = await adapter.complete_multimodal(analysis_request)
        assert response.blocks == [
            OtherBlock(block_type="thinking"),
            TextBlock(text="Stable overnight"),
        ]
        assert response.input_tokens == 1500
        assert response.output_tokens == 420
        assert response.provider == "anthropic"
        assert response.stop_reason == "end_turn"
        assert response.latency_ms >= 0


class TestProperties:
    def test_model_and_provider(self):
        adapter = AnthropicAdapter(api_key="k", model="claude-x")
        assert adapter.model == "claude-x"
        assert adapter.provider_name == "anthropic"
