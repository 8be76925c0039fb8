"""Boxed ASCII terminal report with a motivational status line."""

from __future__ import annotations

from pmon.render.base import RenderContext, StyleKind, StyleRenderer, render_bar

BOX_WIDTH = 60

# (exclusive upper bound in percent, message)
STATUS_MESSAGES: tuple[tuple[float, str], ...] = (
    (25.0, "MISSION INITIATED. LOCK AND LOAD, SOLDIER!"),
    (50.0, "ENGAGING TARGET. MAINTAIN FOCUS AND DISCIPLINE."),
    (75.0, "BATTLE IN PROGRESS. HOLD YOUR POSITION, WARRIOR!"),
    (90.0, "VICTORY IS WITHIN REACH. PUSH FORWARD!"),
    (100.0, "FINAL ASSAULT! BREAK THROUGH THE ENEMY LINES!"),
)
COMPLETE_MESSAGE = "MISSION ACCOMPLISHED! EXCELLENT WORK, SOLDIER!"

FOOTER = "(Q) QUIT | (ESC) QUIT | (CTRL+C) ABORT"


def status_message(percent: float) -> str:
    for limit, message in STATUS_MESSAGES:
        if percent < limit:
            return message
    return COMPLETE_MESSAGE


class RetroRenderer(StyleRenderer):
    """Fixed-width ``+---+`` box; long windows always keep their time of day."""

    style = StyleKind.RETRO
    coarse_dates = False

    def __init__(self, width: int = BOX_WIDTH) -> None:
        self.width = width

    @property
    def inner_width(self) -> int:
        return self.width - 4

    def _rule(self) -> str:
        return "+" + "-" * (self.width - 2) + "+"

    def _row(self, text: str) -> str:
        return f"| {text[: self.inner_width].ljust(self.inner_width)} |"

    def render(self, context: RenderContext) -> str:
        labels = self.labels(context)
        percent = context.snapshot.percent
        lines: list[str] = []
        if context.title:
            lines.append(f"[{context.title.upper()}] FOCUS SESSION INITIATED")
        lines.append(self._rule())
        lines.append(self._row(f"[START]     {labels.start}"))
        lines.append(self._row(f"[END]       {labels.end}"))
        lines.append(self._row(f"[ELAPSED]   {labels.elapsed}"))
        lines.append(self._row(f"[REMAINING] {labels.remaining}"))
        lines.append(self._row(f"[PROGRESS]  {context.percent_label}"))
        lines.append(self._row("[" + render_bar(percent, self.inner_width - 2) + "]"))
        lines.append(self._rule())
        lines.append(self._row(f"STATUS: > {status_message(percent)}"))
        lines.append(self._rule())
        lines.append(self._row(FOOTER))
        lines.append(self._rule())
        return "\n".join(lines)
