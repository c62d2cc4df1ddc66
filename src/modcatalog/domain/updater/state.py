"""Run states of the catalog updater."""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class RunState(StrEnum):
    IDLE = "idle"
    INITIALIZED = "initialized"
    COLLECTING = "collecting"
    FINALIZING = "finalizing"
    PERSISTED = "persisted"
    NO_OP = "no_op"
    ABORTED = "aborted"


ALLOWED_TRANSITIONS: Final[dict[RunState, frozenset[RunState]]] = {
    RunState.IDLE: frozenset({RunState.INITIALIZED, RunState.ABORTED}),
    RunState.INITIALIZED: frozenset({RunState.COLLECTING}),
    RunState.COLLECTING: frozenset({RunState.FINALIZING}),
    RunState.FINALIZING: frozenset({RunState.PERSISTED, RunState.NO_OP}),
    RunState.PERSISTED: frozenset({RunState.IDLE}),
    RunState.NO_OP: frozenset({RunState.IDLE}),
    RunState.ABORTED: frozenset(),
}


class InvalidTransitionError(RuntimeError):
    def __init__(self, current: RunState, target: RunState) -> None:
        super().__init__(f"Cannot move the catalog updater from {current} to {target}")
        self.current = current
        self.target = target
