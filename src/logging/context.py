# src/logging/context.py — v2
"""Contextual logging support — attach request_id and pipeline stage to log records.

Context variables are task-local under asyncio, so concurrent requests never
see each other's values.
"""

from __future__ import annotations

import contextvars
import uuid
from dataclasses import dataclass
from typing import Any

_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_stage: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "stage", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    request_id: str | None = None
    stage: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(request_id=_request_id.get(), stage=_stage.get())


def new_request_id() -> str:
    return uuid.uuid4().hex[:12]


def set_request_context(request_id: str) -> None:
    """Set request-level context (called once per HTTP request)."""
    _request_id.set(request_id)
    _stage.set(None)


def set_stage(stage: str) -> None:
    """Record the pipeline stage the current request has reached."""
    _stage.set(stage)


def clear_context() -> None:
    """Reset all context variables."""
    _request_id.set(None)
    _stage.set(None)
