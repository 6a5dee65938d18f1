"""Per-mode analysis state for the presentation layer."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from core.encoder import UploadedImage
from core.errors import AnalysisError
from core.messages import message
from core.models import AnalysisMode

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class AnalysisState:
    result: Any = None
    loading: bool = False
    error: str | None = None
    generation: int = 0

    @property
    def phase(self) -> Phase:
        if self.loading:
            return Phase.LOADING
        if self.error is not None:
            return Phase.FAILED
        if self.result is not None:
            return Phase.SUCCESS
        return Phase.IDLE

    def reset(self) -> None:
        self.result = None
        self.loading = False
        self.error = None
        self.generation += 1


def _initial_states() -> dict[AnalysisMode, AnalysisState]:
    return {mode: AnalysisState() for mode in AnalysisMode}


@dataclass
class AnalysisSession:
    """Shared image plus one state per mode.

    Each request is tagged with the mode's generation at the time it starts.
    Starting another request for the mode or selecting a new image bumps the
    generation, and results carrying an older tag are dropped.
    """

    image: UploadedImage | None = None
    active_mode: AnalysisMode = AnalysisMode.PHYSIOGNOMY
    states: dict[AnalysisMode, AnalysisState] = field(default_factory=_initial_states)
    locale: str | None = None

    @property
    def active_state(self) -> AnalysisState:
        return self.states[self.active_mode]

    def select_image(self, image: UploadedImage | None) -> None:
        """Replace the shared image and return every mode to idle."""
        self.image = image
        for state in self.states.values():
            state.reset()

    def switch_mode(self, mode: AnalysisMode) -> None:
        self.active_mode = AnalysisMode(mode)

    def begin(self, mode: AnalysisMode) -> int | None:
        """Start a request for ``mode``; returns its generation tag.

        Without an image the mode fails immediately and ``None`` is returned.
        """
        state = self.states[mode]
        if self.image is None:
            state.result = None
            state.error = message("upload_first", self.locale)
            return None
        state.reset()
        state.loading = True
        return state.generation

    def _is_current(self, mode: AnalysisMode, generation: int) -> bool:
        if self.states[mode].generation != generation:
            logger.info("Dropping stale %s result (generation %d)", mode.value, generation)
            return False
        return True

    def complete(self, mode: AnalysisMode, generation: int, result: Any) -> bool:
        if not self._is_current(mode, generation):
            return False
        state = self.states[mode]
        state.loading = False
        state.error = None
        state.result = result
        return True

    def fail(self, mode: AnalysisMode, generation: int, error: str) -> bool:
        if not self._is_current(mode, generation):
            return False
        state = self.states[mode]
        state.loading = False
        state.result = None
        state.error = error
        return True

    def run(self, mode: AnalysisMode, analyze: Callable[[UploadedImage, AnalysisMode], Any]) -> AnalysisState:
        """Run one analysis for ``mode`` through ``analyze`` and record the outcome."""
        mode = AnalysisMode(mode)
        generation = self.begin(mode)
        if generation is None:
            return self.states[mode]

        image = self.image
        try:
            result = analyze(image, mode)
        except AnalysisError as e:
            self.fail(mode, generation, str(e))
        except Exception:
            logger.exception("Unexpected error during %s analysis", mode.value)
            self.fail(mode, generation, message("unknown_error", self.locale))
        else:
            self.complete(mode, generation, result)
        return self.states[mode]
