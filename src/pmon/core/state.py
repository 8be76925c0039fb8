"""Refresh loop lifecycle as an explicit finite state machine.

The loop starts in RUNNING and leaves it exactly once, either because the
session window elapsed (FINISHED) or because the user asked to stop
(CANCELLED). Both terminal states have no outgoing transitions.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from transitions import Machine

from pmon.utils.logging import get_logger


class RefreshState(str, Enum):
    """Refresh loop states."""

    RUNNING = "RUNNING"
    FINISHED = "FINISHED"
    CANCELLED = "CANCELLED"


TRANSITIONS: list[dict[str, Any]] = [
    {
        "trigger": "finish",
        "source": RefreshState.RUNNING.value,
        "dest": RefreshState.FINISHED.value,
    },
    {
        "trigger": "cancel",
        "source": RefreshState.RUNNING.value,
        "dest": RefreshState.CANCELLED.value,
    },
]

TERMINAL_STATES = frozenset({RefreshState.FINISHED, RefreshState.CANCELLED})


class RefreshStateMachine:
    """Finite state machine for the refresh loop.

    Triggers that do not apply to the current state are ignored, so a
    second ``cancel()`` after ``finish()`` leaves the machine FINISHED.
    """

    def __init__(self) -> None:
        self.history: list[str] = [RefreshState.RUNNING.value]
        self.logger = get_logger("refresh.state")
        self._machine = Machine(
            model=self,
            states=[state.value for state in RefreshState],
            transitions=TRANSITIONS,
            initial=RefreshState.RUNNING.value,
            auto_transitions=False,
            ignore_invalid_triggers=True,
            after_state_change=self._record_transition,
            send_event=False,
        )

    @property
    def state_enum(self) -> RefreshState:
        return RefreshState(self.state)

    @property
    def is_terminal(self) -> bool:
        return self.state_enum in TERMINAL_STATES

    def _record_transition(self) -> None:
        self.history.append(self.state)
        self.logger.info("refresh.transition", state=self.state)


__all__ = ["RefreshState", "TRANSITIONS", "TERMINAL_STATES", "RefreshStateMachine"]
