"""Plain single-bar layout."""

from __future__ import annotations

from pmon.render.base import RenderContext, StyleKind, StyleRenderer, render_bar

BAR_WIDTH = 60


class DefaultRenderer(StyleRenderer):
    style = StyleKind.DEFAULT

    def __init__(self, bar_width: int = BAR_WIDTH) -> None:
        self.bar_width = bar_width

    def render(self, context: RenderContext) -> str:
        labels = self.labels(context)
        lines: list[str] = []
        if context.title:
            lines.append(context.title)
        lines.append(
            f"{labels.start} → {labels.end}  |  {context.percent_label}"
            f"  |  {labels.elapsed} / {labels.total}"
        )
        lines.append("")
        lines.append(render_bar(context.snapshot.percent, self.bar_width))
        lines.append("")
        lines.append(f"{labels.remaining} remaining")
        return "\n".join(lines)
