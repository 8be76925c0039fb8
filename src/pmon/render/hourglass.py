"""Sand-timer drawing whose sand moves from the upper to the lower chamber.

Both chambers hold ``CHAMBER_CELLS`` cells. At any percentage the sand in
the two chambers adds up to exactly one chamber's worth.
"""

from __future__ import annotations

from pmon.render.base import RenderContext, StyleKind, StyleRenderer, filled_cells

INNER_WIDTH = 9
TOP_ROWS = 5
BOTTOM_ROWS = 4
TOP_FUNNEL = (7, 5, 3, 1)
BOTTOM_FUNNEL = (3, 5, 7, 9)
NECK_WIDTH = 1

CHAMBER_CELLS = TOP_ROWS * INNER_WIDTH + sum(TOP_FUNNEL)

SAND = "█"
AIR = " "
TRAIL = "┊"

GLASS_WIDTH = INNER_WIDTH + 2
GLASS_CENTER = GLASS_WIDTH // 2


def center_out(width: int) -> list[int]:
    """Column indices of a row ordered from the middle outwards.

    >>> center_out(5)
    [2, 1, 3, 0, 4]
    """
    center = width // 2
    order = [center]
    for offset in range(1, width):
        for col in (center - offset, center + offset):
            if 0 <= col < width:
                order.append(col)
    return order


def sand_levels(percent: float) -> tuple[int, int]:
    """Return ``(upper, lower)`` sand cell counts for ``percent``."""
    lower = filled_cells(percent, CHAMBER_CELLS)
    return CHAMBER_CELLS - lower, lower


def _upper_rows(upper: int) -> list[list[str]]:
    widths = [INNER_WIDTH] * TOP_ROWS + list(TOP_FUNNEL)
    rows = [[SAND] * width for width in widths]
    # Drains from the top row down.
    drained = CHAMBER_CELLS - upper
    for row in rows:
        for col in center_out(len(row)):
            if drained <= 0:
                return rows
            row[col] = AIR
            drained -= 1
    return rows


def _lower_rows(lower: int, flowing: bool) -> list[list[str]]:
    widths = [NECK_WIDTH] + list(BOTTOM_FUNNEL) + [INNER_WIDTH] * BOTTOM_ROWS
    rows = [[AIR] * width for width in widths]
    # Piles up from the bottom row, the neck fills last.
    remaining = lower
    for row in reversed(rows):
        for col in center_out(len(row)):
            if remaining <= 0:
                break
            row[col] = SAND
            remaining -= 1
    if flowing and rows[0][0] == AIR:
        rows[0][0] = TRAIL
    return rows


def _line(cells: list[str], left: str = "┃", right: str = "┃") -> str:
    indent = (INNER_WIDTH - len(cells)) // 2
    return " " * indent + left + "".join(cells) + right


def draw_glass(percent: float, *, flowing: bool = True) -> list[str]:
    """Draw the hourglass top to bottom, one string per line."""
    upper, lower = sand_levels(percent)
    top = _upper_rows(upper)
    bottom = _lower_rows(lower, flowing and 0 < lower < CHAMBER_CELLS)

    lines = ["┏" + "━" * INNER_WIDTH + "┓"]
    lines.extend(_line(row) for row in top[:TOP_ROWS])
    lines.extend(_line(row, "╲", "╱") for row in top[TOP_ROWS:])
    lines.append(_line(bottom[0]))
    lines.extend(_line(row, "╱", "╲") for row in bottom[1 : 1 + len(BOTTOM_FUNNEL)])
    lines.extend(_line(row) for row in bottom[1 + len(BOTTOM_FUNNEL) :])
    lines.append("┗" + "━" * INNER_WIDTH + "┛")
    return lines


class HourglassRenderer(StyleRenderer):
    style = StyleKind.HOURGLASS

    def render(self, context: RenderContext) -> str:
        labels = self.labels(context)
        snap = context.snapshot

        footer_left = f"elapsed: {labels.elapsed}   "
        footer = f"{footer_left}|   remaining: {labels.remaining}"
        pad = " " * max(len(footer_left) - GLASS_CENTER, 0)

        lines: list[str] = []
        if context.title:
            lines.append(context.title)
        lines.append(f"{labels.start} → {labels.end}   |   {context.percent_label}")
        lines.append("")
        lines.extend(pad + line for line in draw_glass(snap.percent, flowing=not snap.is_finished))
        lines.append("")
        lines.append(footer)
        return "\n".join(lines)
