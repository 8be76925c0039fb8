"""Magnitude-aware labels for instants and durations.

Instant labels get coarser as the window grows (a one-hour session does
not need a year in its labels, a three-week one does). Duration labels
use their own four buckets and never show more than two units.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta
from enum import Enum

from pmon.core.session import SessionWindow, Snapshot

HOUR = timedelta(hours=1)
DAY = timedelta(days=1)
WEEK = timedelta(weeks=1)


class DisplayTier(str, Enum):
    """Format bucket for instant labels, chosen from the window length."""

    INTRADAY = "intraday"
    WITHIN_WEEK = "within_week"
    LONG = "long"


class DurationTier(str, Enum):
    """Format bucket for duration labels, chosen from the duration itself."""

    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"


# Largest unit first.
_TIER_UNITS: dict[DurationTier, tuple[tuple[str, int], ...]] = {
    DurationTier.SECONDS: (("h", 3600), ("m", 60), ("s", 1)),
    DurationTier.MINUTES: (("h", 3600), ("m", 60)),
    DurationTier.HOURS: (("d", 86400), ("h", 3600)),
    DurationTier.DAYS: (("w", 604800), ("d", 86400)),
}

MAX_UNITS = 2


@dataclass(frozen=True)
class Labels:
    """Display strings for one frame."""

    start: str
    end: str
    elapsed: str
    remaining: str
    total: str
    tier: DisplayTier


def select_tier(total: timedelta) -> DisplayTier:
    """Pick the instant-label tier; boundaries belong to the lower tier."""
    if total <= DAY:
        return DisplayTier.INTRADAY
    if total <= WEEK:
        return DisplayTier.WITHIN_WEEK
    return DisplayTier.LONG


def format_instant(value: datetime, tier: DisplayTier, *, coarse: bool = False) -> str:
    if tier is DisplayTier.INTRADAY:
        return value.strftime("%H:%M")
    if tier is DisplayTier.WITHIN_WEEK:
        return f"{value.month}/{value.day} {value:%H:%M}"
    if coarse:
        return value.strftime("%Y-%m-%d")
    return value.strftime("%Y-%m-%d %H:%M")


def _at_midnight(value: datetime) -> bool:
    return value.time() == time(0)


def _on_day_boundary(value: datetime) -> bool:
    return _at_midnight(value) or value.time() == time(23, 59, 59)


def format_instants(window: SessionWindow, *, coarse_dates: bool = False) -> tuple[str, str]:
    """Return ``(start_label, end_label)`` for the window's tier.

    ``coarse_dates`` drops the time of day for long windows, but only when
    the start sits on midnight and the end on midnight or on the last
    second of a day (how a date-only end is parsed).
    """
    tier = select_tier(window.total)
    coarse = (
        coarse_dates
        and tier is DisplayTier.LONG
        and _at_midnight(window.start)
        and _on_day_boundary(window.end)
    )
    return (
        format_instant(window.start, tier, coarse=coarse),
        format_instant(window.end, tier, coarse=coarse),
    )


def duration_tier(value: timedelta) -> DurationTier:
    if value <= HOUR:
        return DurationTier.SECONDS
    if value <= DAY:
        return DurationTier.MINUTES
    if value <= WEEK:
        return DurationTier.HOURS
    return DurationTier.DAYS


def format_duration(value: timedelta) -> str:
    """Format a duration compactly, e.g. ``45m30s``, ``7h12m``, ``2d5h``, ``3w1d``.

    Sub-unit remainders are truncated and negative input is treated as zero.

    Example:
        >>> format_duration(timedelta(hours=7, minutes=12))
        '7h12m'
    """
    seconds = max(int(value.total_seconds()), 0)
    units = _TIER_UNITS[duration_tier(timedelta(seconds=seconds))]

    parts: list[str] = []
    remainder = seconds
    for suffix, size in units:
        amount, remainder = divmod(remainder, size)
        if amount:
            parts.append(f"{amount}{suffix}")

    if not parts:
        return f"0{units[-1][0]}"
    return "".join(parts[:MAX_UNITS])


def build_labels(
    window: SessionWindow,
    snap: Snapshot,
    *,
    coarse_dates: bool = False,
) -> Labels:
    """Assemble every label a renderer needs for one frame."""
    start_label, end_label = format_instants(window, coarse_dates=coarse_dates)
    return Labels(
        start=start_label,
        end=end_label,
        elapsed=format_duration(snap.elapsed),
        remaining=format_duration(snap.remaining),
        total=format_duration(window.total),
        tier=select_tier(window.total),
    )


__all__ = [
    "DisplayTier",
    "DurationTier",
    "Labels",
    "select_tier",
    "format_instant",
    "format_instants",
    "duration_tier",
    "format_duration",
    "build_labels",
]
