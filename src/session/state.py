# src/session/state.py — v1
"""Client-side state machine of one upload/preview/submit/result cycle.

``transition(state, event)`` is pure: it never performs I/O and always
returns a state (possibly the same object when the event is a no-op), so
the whole lifecycle is testable without a UI or a server.

Phases: IDLE → IMAGE_SELECTED → SUBMITTING → SUCCESS | ERROR. A new
selection is accepted from any phase. ``is_loading`` is owned by the
submit transitions only; selecting an image never touches it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from pydantic import BaseModel

from glucolens.core.models import UploadedImage

NO_IMAGE_MESSAGE = "Please select an image first"
EXAMPLE_LOAD_ERROR_MESSAGE = "Error loading example image"
UNKNOWN_ERROR_MESSAGE = "Unknown error"


class Phase(str, Enum):
    IDLE = "idle"
    IMAGE_SELECTED = "image_selected"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


class UploadSessionState(BaseModel):
    """Snapshot of the session; replaced, never mutated."""

    model_config = {"frozen": True}

    phase: Phase = Phase.IDLE
    selected_image: UploadedImage | None = None
    preview_reference: str | None = None
    analysis_text: str | None = None
    error_message: str | None = None
    is_loading: bool = False
    elapsed_seconds: float | None = None
    # Monotonic clock reading taken when the current attempt started.
    started_at: float | None = None

    @property
    def can_submit(self) -> bool:
        """Whether the submit control is enabled."""
        return self.selected_image is not None and not self.is_loading


# === EVENTS ===


@dataclass(frozen=True)
class FileSelected:
    image: UploadedImage
    preview_reference: str


@dataclass(frozen=True)
class ExampleLoadFailed:
    message: str = EXAMPLE_LOAD_ERROR_MESSAGE


@dataclass(frozen=True)
class SubmitRequested:
    started_at: float


@dataclass(frozen=True)
class SubmitSucceeded:
    analysis_text: str
    finished_at: float


@dataclass(frozen=True)
class SubmitFailed:
    message: str | None = None


SessionEvent = Union[FileSelected, ExampleLoadFailed, SubmitRequested, SubmitSucceeded, SubmitFailed]


def _resting_phase(state: UploadSessionState) -> Phase:
    if state.is_loading:
        return Phase.SUBMITTING
    return Phase.IMAGE_SELECTED if state.selected_image is not None else Phase.IDLE


def transition(state: UploadSessionState, event: SessionEvent) -> UploadSessionState:
    """Apply one event to a state and return the resulting state."""
    match event:
        case FileSelected(image=image, preview_reference=preview):
            return state.model_copy(
                update={
                    "phase": Phase.SUBMITTING if state.is_loading else Phase.IMAGE_SELECTED,
                    "selected_image": image,
                    "preview_reference": preview,
                    "analysis_text": None,
                    "error_message": None,
                    "elapsed_seconds": None,
                }
            )

        case ExampleLoadFailed(message=message):
            # The current selection survives a failed example fetch.
            return state.model_copy(
                update={
                    "phase": _resting_phase(state),
                    "analysis_text": None,
                    "error_message": message,
                    "elapsed_seconds": None,
                }
            )

        case SubmitRequested(started_at=started_at):
            if state.is_loading:
                return state
            if state.selected_image is None:
                return state.model_copy(
                    update={
                        "analysis_text": None,
                        "error_message": NO_IMAGE_MESSAGE,
                        "elapsed_seconds": None,
                    }
                )
            return state.model_copy(
                update={
                    "phase": Phase.SUBMITTING,
                    "analysis_text": None,
                    "error_message": None,
                    "elapsed_seconds": None,
                    "is_loading": True,
                    "started_at": started_at,
                }
            )

        case SubmitSucceeded(analysis_text=text, finished_at=finished_at):
            if not state.is_loading:
                return state
            elapsed = round(finished_at - (state.started_at or finished_at), 2)
            return state.model_copy(
                update={
                    "phase": Phase.SUCCESS,
                    "analysis_text": text,
                    "error_message": None,
                    "elapsed_seconds": max(elapsed, 0.0),
                    "is_loading": False,
                    "started_at": None,
                }
            )

        case SubmitFailed(message=message):
            if not state.is_loading:
                return state
            return state.model_copy(
                update={
                    "phase": Phase.ERROR,
                    "analysis_text": None,
                    "error_message": message or UNKNOWN_ERROR_MESSAGE,
                    "elapsed_seconds": None,
                    "is_loading": False,
                    "started_at": None,
                }
            )

    raise TypeError(f"Unknown session event: {event!r}")
