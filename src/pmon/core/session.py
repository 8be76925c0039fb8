"""Session window and point-in-time progress snapshots.

Everything here is pure: the current instant is always passed in, so the
same ``(window, now)`` pair yields the same snapshot every time.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from pmon.core.errors import InvalidWindowError


class Phase(str, Enum):
    """Where ``now`` sits relative to the session window."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    FINISHED = "finished"


@dataclass(frozen=True)
class SessionWindow:
    """A validated ``[start, end]`` interval with ``end`` strictly after ``start``."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.end <= self.start:
            raise InvalidWindowError(self.start, self.end)

    @property
    def total(self) -> timedelta:
        return self.end - self.start

    def contains(self, now: datetime) -> bool:
        return self.start <= now < self.end


@dataclass(frozen=True)
class Snapshot:
    """Progress through a window as observed at ``now``."""

    now: datetime
    elapsed: timedelta
    remaining: timedelta
    percent: float
    phase: Phase

    @property
    def is_finished(self) -> bool:
        return self.phase is Phase.FINISHED

    @property
    def display_percent(self) -> int:
        return display_percent(self.percent)


def phase_of(window: SessionWindow, now: datetime) -> Phase:
    """Classify ``now`` against the window bounds."""
    if now < window.start:
        return Phase.NOT_STARTED
    if now >= window.end:
        return Phase.FINISHED
    return Phase.RUNNING


def snapshot(window: SessionWindow, now: datetime) -> Snapshot:
    """Compute elapsed, remaining and percent for ``window`` at ``now``.

    Instants before the start clamp to zero progress and instants at or
    after the end clamp to the full window, so ``percent`` always lies in
    ``[0.0, 100.0]`` and never decreases as ``now`` advances.

    Args:
        window: The session being tracked.
        now: The instant to evaluate, in the same clock as the window.

    Returns:
        A frozen :class:`Snapshot`.

    Example:
        >>> w = SessionWindow(datetime(2025, 8, 10, 9), datetime(2025, 8, 10, 17))
        >>> snapshot(w, datetime(2025, 8, 10, 13)).percent
        50.0
    """
    total = window.total
    elapsed = min(max(now - window.start, timedelta(0)), total)
    remaining = total - elapsed
    percent = 100.0 * (elapsed / total)
    percent = min(max(percent, 0.0), 100.0)
    return Snapshot(
        now=now,
        elapsed=elapsed,
        remaining=remaining,
        percent=percent,
        phase=phase_of(window, now),
    )


def round_half_away(value: float) -> int:
    """Round to the nearest integer with halves away from zero (2.5 -> 3)."""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def display_percent(percent: float) -> int:
    """Integer percentage shown to the user."""
    return round_half_away(percent)


__all__ = [
    "Phase",
    "SessionWindow",
    "Snapshot",
    "phase_of",
    "snapshot",
    "round_half_away",
    "display_percent",
]
