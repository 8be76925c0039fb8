"""Neon double-line frame. Colours are applied by the display sink."""

from __future__ import annotations

from pmon.render.base import RenderContext, StyleKind, StyleRenderer, render_bar

WIDTH = 64
MIN_BAR_WIDTH = 10

TAGLINE_RUNNING = "⚡ KEEP THE ENERGY FLOWING ⚡"
TAGLINE_COMPLETE = "✔ COMPLETED ✔"

# Palette as RGB triples; consumed by the terminal sink.
PALETTE: dict[str, tuple[int, int, int]] = {
    "background": (59, 50, 85),
    "text": (48, 192, 183),
    "border": (73, 128, 153),
    "bar": (238, 34, 125),
    "accent": (253, 128, 131),
}


class SynthwaveRenderer(StyleRenderer):
    style = StyleKind.SYNTHWAVE

    def render(self, context: RenderContext) -> str:
        labels = self.labels(context)
        inner = WIDTH - 2
        # "║ " + start + "  " + bar + "  " + end + " ║"
        bar_width = max(MIN_BAR_WIDTH, WIDTH - 8 - len(labels.start) - len(labels.end))
        info = (
            f"{context.percent_label} | {labels.elapsed} elapsed"
            f" | {labels.remaining} remaining"
        )
        tagline = TAGLINE_COMPLETE if context.snapshot.is_finished else TAGLINE_RUNNING

        lines: list[str] = []
        if context.title:
            lines.append(f"═ {context.title.upper()} ═".center(WIDTH))
        lines.append("╔" + "═" * inner + "╗")
        lines.append(
            f"║ {labels.start}  {render_bar(context.snapshot.percent, bar_width)}"
            f"  {labels.end} ║"
        )
        lines.append("║" + info.center(inner) + "║")
        lines.append("╚" + "═" * inner + "╝")
        lines.append(tagline.center(WIDTH))
        return "\n".join(lines)
