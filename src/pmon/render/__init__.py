"""Visual styles for session progress frames."""

from pmon.render.base import (
    PROGRESS_EMPTY,
    PROGRESS_FILLED,
    RenderContext,
    StyleKind,
    StyleRenderer,
    filled_cells,
    render_bar,
)
from pmon.render.default import DefaultRenderer
from pmon.render.hourglass import HourglassRenderer
from pmon.render.registry import RENDERERS, available_styles, get_renderer
from pmon.render.retro import RetroRenderer
from pmon.render.synthwave import SynthwaveRenderer

__all__ = [
    "PROGRESS_EMPTY",
    "PROGRESS_FILLED",
    "RenderContext",
    "StyleKind",
    "StyleRenderer",
    "filled_cells",
    "render_bar",
    "DefaultRenderer",
    "RetroRenderer",
    "SynthwaveRenderer",
    "HourglassRenderer",
    "RENDERERS",
    "available_styles",
    "get_renderer",
]
