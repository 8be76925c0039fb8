"""Style selection: one renderer per :class:`StyleKind`, chosen once at startup."""

from __future__ import annotations

from pmon.render.base import StyleKind, StyleRenderer
from pmon.render.default import DefaultRenderer
from pmon.render.hourglass import HourglassRenderer
from pmon.render.retro import RetroRenderer
from pmon.render.synthwave import SynthwaveRenderer

RENDERERS: dict[StyleKind, type[StyleRenderer]] = {
    StyleKind.DEFAULT: DefaultRenderer,
    StyleKind.RETRO: RetroRenderer,
    StyleKind.SYNTHWAVE: SynthwaveRenderer,
    StyleKind.HOURGLASS: HourglassRenderer,
}


def get_renderer(style: StyleKind | str) -> StyleRenderer:
    """Instantiate the renderer for ``style`` (names resolve via ``StyleKind.from_name``)."""
    kind = style if isinstance(style, StyleKind) else StyleKind.from_name(style)
    return RENDERERS[kind]()


def available_styles() -> list[str]:
    return [kind.value for kind in RENDERERS]
