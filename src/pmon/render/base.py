"""Shared pieces for every visual style: style enum, render context and bar."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from pmon.core.formatting import Labels, build_labels
from pmon.core.session import SessionWindow, Snapshot, display_percent, round_half_away
from pmon.utils.logging import get_logger

logger = get_logger("render")

PROGRESS_FILLED = "█"
PROGRESS_EMPTY = "░"


class StyleKind(str, Enum):
    """Closed set of visual styles."""

    DEFAULT = "default"
    RETRO = "retro"
    SYNTHWAVE = "synthwave"
    HOURGLASS = "hourglass"

    @classmethod
    def from_name(cls, name: str | None) -> StyleKind:
        """Resolve a user-supplied style name, falling back to ``default``."""
        if not name:
            return cls.DEFAULT
        try:
            return cls(name.strip().lower())
        except ValueError:
            logger.warning("style.unknown", requested=name, fallback=cls.DEFAULT.value)
            return cls.DEFAULT


@dataclass(frozen=True)
class RenderContext:
    """Everything a renderer may look at for a single frame."""

    window: SessionWindow
    snapshot: Snapshot
    title: str | None = None
    style: StyleKind = StyleKind.DEFAULT

    @property
    def percent_label(self) -> str:
        return f"{display_percent(self.snapshot.percent)}%"


def filled_cells(percent: float, width: int) -> int:
    """Number of filled cells for ``percent`` on a bar ``width`` cells wide."""
    if width <= 0:
        return 0
    cells = round_half_away(percent / 100.0 * width)
    return max(0, min(width, cells))


def render_bar(
    percent: float,
    width: int,
    *,
    filled: str = PROGRESS_FILLED,
    empty: str = PROGRESS_EMPTY,
) -> str:
    """Render a fixed-width text progress bar.

    Args:
        percent: Progress in ``[0, 100]``; values outside are clamped.
        width: Total number of cells.
        filled: Glyph for completed cells.
        empty: Glyph for pending cells.

    Returns:
        A string of exactly ``width`` glyphs.
    """
    count = filled_cells(percent, width)
    return filled * count + empty * (max(width, 0) - count)


class StyleRenderer(ABC):
    """Turns a :class:`RenderContext` into the text of one frame.

    Renderers are stateless and never consult the clock.
    """

    style: ClassVar[StyleKind]
    coarse_dates: ClassVar[bool] = True

    def labels(self, context: RenderContext) -> Labels:
        return build_labels(context.window, context.snapshot, coarse_dates=self.coarse_dates)

    @abstractmethod
    def render(self, context: RenderContext) -> str:
        """Return the frame as newline-separated text."""


__all__ = [
    "PROGRESS_FILLED",
    "PROGRESS_EMPTY",
    "StyleKind",
    "RenderContext",
    "filled_cells",
    "render_bar",
    "StyleRenderer",
]
