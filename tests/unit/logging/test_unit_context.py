# tests/unit/logging/test_context.py — v2
"""Tests for logging/context.py — contextual logging variables."""

from __future__ import annotations

import asyncio

import pytest

from glucolens.logging.context import (
    clear_context,
    get_context,
    new_request_id,
    set_request_context,
    set_stage,
)


class TestLogContext:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_initial_state(self):
        ctx = get_context()
        assert ctx.request_id is None
        assert ctx.stage is None

    def test_set_request_context_resets_stage(self):
        set_stage("requested")
        set_request_context("req1")
        ctx = get_context()
        assert ctx.request_id == "req1"
        assert ctx.stage is None

    def test_as_dict_filters_none(self):
        set_request_context("req1")
        assert get_context().as_dict() == {"request_id": "req1"}

    def test_clear(self):
        set_request_context("req1")
        set_stage("encoded")
        clear_context()
        assert get_context().as_dict() == {}

    def test_new_request_id(self):
        ids = {new_request_id() for _ in range(20)}
        assert len(ids) == 20
        assert all(len(i) == 12 for i in ids)

    @pytest.mark.asyncio
    async def test_isolated_between_tasks(self):
        async def worker(request_id: str) -> str | None:
            set_request_context(request_id)
            await asyncio.sleep(0)
            return get_context().request_id

        results = await asyncio.gather(worker("a"), worker("b"))
        assert results == ["a", "b"]
