"""Refresh controller: recompute, render and emit a frame every interval.

Each tick reads the injected clock once, takes a snapshot, renders it with
the renderer selected at construction and hands the text to the display
sink. Between ticks the controller waits on the cancel source, which
returns early if the user asks to stop.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from pmon.core.session import SessionWindow, Snapshot, snapshot
from pmon.core.state import RefreshState, RefreshStateMachine
from pmon.render import RenderContext, StyleKind, get_renderer
from pmon.utils.logging import get_logger

DEFAULT_INTERVAL_SECONDS = 5.0

Clock = Callable[[], datetime]


class DisplaySink(Protocol):
    """Receives complete rendered frames."""

    def write(self, frame: str) -> None: ...


class CancelSource(Protocol):
    """Races the refresh interval against a cancellation request."""

    def wait(self, timeout: float) -> bool:
        """Block up to ``timeout`` seconds; True means cancellation was requested."""
        ...


@dataclass(frozen=True)
class RefreshOutcome:
    """How the loop ended."""

    state: RefreshState
    frames: int
    last_snapshot: Snapshot | None


class RefreshController:
    """Drive the RUNNING -> FINISHED | CANCELLED loop for one session window."""

    def __init__(
        self,
        window: SessionWindow,
        *,
        clock: Clock,
        sink: DisplaySink,
        cancel_source: CancelSource,
        style: StyleKind = StyleKind.DEFAULT,
        title: str | None = None,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError(f"Refresh interval must be positive, got {interval_seconds}")
        self.window = window
        self.style = style
        self.title = title
        self.interval_seconds = interval_seconds
        self.renderer = get_renderer(style)
        self.machine = RefreshStateMachine()
        self.frames = 0
        self.last_snapshot: Snapshot | None = None
        self._clock = clock
        self._sink = sink
        self._cancel_source = cancel_source
        self.logger = get_logger("refresh").bind(style=style.value)

    @property
    def state(self) -> RefreshState:
        return self.machine.state_enum

    def tick(self) -> Snapshot:
        """Render and emit one frame for the current instant."""
        snap = snapshot(self.window, self._clock())
        context = RenderContext(
            window=self.window,
            snapshot=snap,
            title=self.title,
            style=self.style,
        )
        frame = self.renderer.render(context)
        try:
            self._sink.write(frame)
        except OSError:
            self.logger.error("refresh.sink_failed", frames=self.frames, exc_info=True)
            raise
        self.frames += 1
        self.last_snapshot = snap
        self.logger.debug("refresh.tick", percent=round(snap.percent, 2), phase=snap.phase.value)
        return snap

    def run(self) -> RefreshOutcome:
        """Loop until the window finishes or the cancel source fires.

        The frame that observes the end of the window is the final render;
        a cancellation exits without rendering again.
        """
        self.logger.info(
            "refresh.started",
            start=self.window.start.isoformat(),
            end=self.window.end.isoformat(),
            interval_seconds=self.interval_seconds,
        )
        while self.machine.state_enum is RefreshState.RUNNING:
            snap = self.tick()
            if snap.is_finished:
                self.machine.finish()
                break
            if self._cancel_source.wait(self.interval_seconds):
                self.machine.cancel()

        outcome = RefreshOutcome(
            state=self.machine.state_enum,
            frames=self.frames,
            last_snapshot=self.last_snapshot,
        )
        self.logger.info("refresh.stopped", state=outcome.state.value, frames=outcome.frames)
        return outcome


__all__ = [
    "DEFAULT_INTERVAL_SECONDS",
    "Clock",
    "DisplaySink",
    "CancelSource",
    "RefreshOutcome",
    "RefreshController",
]
