# src/session/controller.py — v1
"""Drives UploadSessionState through one analysis attempt at a time.

The controller owns the I/O (file reads, HTTP calls, the clock) and feeds
their outcomes into the pure transition function. Listeners are called
after every state change, which is where a UI would re-render.
"""

from __future__ import annotations

import base64
import logging
import time
from pathlib import Path
from typing import Callable

from glucolens.core.models import UploadedImage
from glucolens.extraction.image_codec import load_image
from glucolens.session.state import (
    ExampleLoadFailed,
    FileSelected,
    SessionEvent,
    SubmitFailed,
    SubmitRequested,
    SubmitSucceeded,
    UploadSessionState,
    transition,
)
from glucolens.session.transport import GENERIC_ANALYSIS_ERROR, AnalysisTransport, TransportError

logger = logging.getLogger(__name__)

StateListener = Callable[[UploadSessionState], None]


def preview_reference(image: UploadedImage) -> str:
    """Data URI that displays the selected image without another request."""
    encoded = base64.b64encode(image.content).decode("ascii")
    return f"data:{image.media_type};base64,{encoded}"


class UploadSession:
    """One per browser tab (or CLI invocation)."""

    def __init__(
        self,
        transport: AnalysisTransport,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._transport = transport
        self._clock = clock
        self._state = UploadSessionState()
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> UploadSessionState:
        return self._state

    def subscribe(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def dispatch(self, event: SessionEvent) -> UploadSessionState:
        new_state = transition(self._state, event)
        if new_state is not self._state:
            logger.debug(
                "Session %s -> %s on %s",
                self._state.phase.value, new_state.phase.value, type(event).__name__,
            )
            self._state = new_state
            for listener in self._listeners:
                listener(new_state)
        return self._state

    # --- Selection ---

    def select_image(self, image: UploadedImage) -> UploadSessionState:
        return self.dispatch(FileSelected(image=image, preview_reference=preview_reference(image)))

    def select_file(self, path: str | Path) -> UploadSessionState:
        return self.select_image(load_image(path))

    async def select_example(self, url: str) -> UploadSessionState:
        try:
            image = await self._transport.fetch_example(url)
        except TransportError as exc:
            return self.dispatch(ExampleLoadFailed(message=exc.message))
        return self.select_image(image)

    # --- Submission ---

    async def submit(self) -> UploadSessionState:
        """Run one attempt; a call while another is in flight does nothing."""
        before = self._state
        state = self.dispatch(SubmitRequested(started_at=self._clock()))
        if state is before or not state.is_loading:
            return state

        try:
            text = await self._transport.analyze(state.selected_image)  # type: ignore[arg-type]
        except TransportError as exc:
            logger.info("Analysis attempt failed: %s", exc.message)
            return self.dispatch(SubmitFailed(message=exc.message))
        except BaseException as exc:
            # Cancellation or an unexpected error still ends the attempt.
            logger.warning("Analysis attempt aborted: %s", type(exc).__name__)
            self.dispatch(SubmitFailed(message=GENERIC_ANALYSIS_ERROR))
            raise
        return self.dispatch(SubmitSucceeded(analysis_text=text, finished_at=self._clock()))
