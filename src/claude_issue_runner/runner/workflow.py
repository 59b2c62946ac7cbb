"""Run-once state machine.

A run moves linearly from validation to notification. Any failure before
notification jumps to FAILED, then NOTIFY_FAILURE, then DONE. There is no
transition back: the whole run is never retried.
"""

from __future__ import annotations

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class RunState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    GENERATING = "generating"
    WRITING = "writing"
    PUBLISHING = "publishing"
    NOTIFYING = "notifying"
    DONE = "done"
    FAILED = "failed"
    NOTIFY_FAILURE = "notify_failure"


ALLOWED_TRANSITIONS: dict[RunState, set[RunState]] = {
    RunState.IDLE: {RunState.VALIDATING},
    RunState.VALIDATING: {RunState.GENERATING, RunState.DONE, RunState.FAILED},
    RunState.GENERATING: {RunState.WRITING, RunState.FAILED},
    RunState.WRITING: {RunState.PUBLISHING, RunState.FAILED},
    RunState.PUBLISHING: {RunState.NOTIFYING, RunState.FAILED},
    RunState.NOTIFYING: {RunState.DONE, RunState.FAILED},
    RunState.FAILED: {RunState.NOTIFY_FAILURE},
    RunState.NOTIFY_FAILURE: {RunState.DONE},
    RunState.DONE: set(),
}


class IllegalTransitionError(ValueError):
    pass


class RunTracker:
    """Holds the current state of one run and the states it went through."""

    def __init__(self) -> None:
        self._history: list[RunState] = [RunState.IDLE]

    @property
    def state(self) -> RunState:
        return self._history[-1]

    @property
    def history(self) -> tuple[RunState, ...]:
        return tuple(self._history)

    def advance(self, to: RunState) -> RunState:
        current = self.state
        if to not in ALLOWED_TRANSITIONS.get(current, set()):
            raise IllegalTransitionError(f"Illegal transition: {current.value} -> {to.value}")
        self._history.append(to)
        logger.debug(f"Run state {current.value} -> {to.value}")
        return to
