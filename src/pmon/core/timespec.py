"""Parse start/end/duration strings into a validated :class:`SessionWindow`.

The parser never reads the clock: the current instant is injected as
``now`` so that omitted starts and bare times of day resolve against the
same instant the refresh loop uses for its first tick.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta

from pmon.core.errors import (
    ConflictingOrMissingEndError,
    InvalidDurationError,
    InvalidTimeFormatError,
)
from pmon.core.session import SessionWindow
from pmon.utils.logging import get_logger

logger = get_logger("timespec")

# Tried in order, first match wins: (kind, format, exact length, precision).
# Compact all-digit forms carry their exact length because strptime would
# otherwise split digit runs ambiguously.
INSTANT_FORMATS: tuple[tuple[str, str, int | None, str], ...] = (
    ("date", "%Y-%m-%d", None, "day"),
    ("date", "%Y%m%d", 8, "day"),
    ("datetime", "%Y-%m-%d %H:%M:%S", None, "second"),
    ("datetime", "%Y-%m-%d %H:%M", None, "minute"),
    ("datetime", "%Y%m%d%H%M%S", 14, "second"),
    ("datetime", "%Y%m%d%H%M", 12, "minute"),
    ("iso", "%Y-%m-%dT%H:%M:%S", None, "second"),
    ("iso", "%Y-%m-%dT%H:%M", None, "minute"),
    ("iso", "%Y-%m-%dT%H:%M:%S%z", None, "second"),
    ("iso", "%Y-%m-%d %H:%M:%S%z", None, "second"),
    ("time", "%H:%M:%S", None, "second"),
    ("time", "%H:%M", None, "minute"),
)

# An end instant covers the whole unit it names: a date ends at 23:59:59,
# a minute at :59.
END_PADDING: dict[str, timedelta] = {
    "day": timedelta(hours=23, minutes=59, seconds=59),
    "minute": timedelta(seconds=59),
    "second": timedelta(0),
}

_DURATION_RE = re.compile(r"(\d+)([smhd])")

_UNIT_SECONDS = {
    "s": 1,
    "m": 60,
    "h": 3600,
    "d": 86400,
}


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def parse_instant(text: str, *, now: datetime, argument: str = "start") -> datetime:
    """Parse a single instant string.

    Args:
        text: Raw user input.
        now: Injected current instant; supplies the date for bare times of day.
        argument: Name reported in the error (``start`` or ``end``). An
            ``end`` is moved to the last second of the day or minute it
            names (see ``END_PADDING``).

    Returns:
        A naive local datetime.

    Raises:
        InvalidTimeFormatError: If no accepted format matches, or the
            instant cannot be represented in local time.
    """
    candidate = text.strip()
    for kind, fmt, length, precision in INSTANT_FORMATS:
        if length is not None and (len(candidate) != length or not candidate.isdigit()):
            continue
        try:
            parsed = datetime.strptime(candidate, fmt)
        except ValueError:
            continue
        if kind == "time":
            parsed = datetime.combine(now.date(), parsed.time())
        elif parsed.tzinfo is not None:
            # Offsets are honoured by converting to local wall-clock time.
            try:
                parsed = parsed.astimezone().replace(tzinfo=None)
            except (OverflowError, OSError) as exc:
                raise InvalidTimeFormatError(text, argument=argument) from exc
        if argument == "end":
            parsed += END_PADDING[precision]
        return parsed
    raise InvalidTimeFormatError(text, argument=argument)


def parse_duration(text: str) -> timedelta:
    """Parse ``<integer><unit>`` where unit is one of ``s m h d``.

    Raises:
        InvalidDurationError: For malformed, zero or out-of-range values.

    Example:
        >>> parse_duration("90m")
        datetime.timedelta(seconds=5400)
    """
    match = _DURATION_RE.fullmatch(text.strip())
    if not match:
        raise InvalidDurationError(text)
    amount = int(match.group(1))
    if amount <= 0:
        raise InvalidDurationError(text, reason="must be positive")
    try:
        return timedelta(seconds=amount * _UNIT_SECONDS[match.group(2)])
    except OverflowError as exc:
        raise InvalidDurationError(text, reason="too large") from exc


def parse_window(
    start: str | None,
    end: str | None,
    duration: str | None,
    *,
    now: datetime,
) -> SessionWindow:
    """Build a session window from raw CLI strings.

    Exactly one of ``end`` and ``duration`` must be supplied. An omitted
    ``start`` means ``now`` truncated to whole seconds.

    Raises:
        ConflictingOrMissingEndError: Both or neither of end and duration.
        InvalidTimeFormatError: Unparseable start or end.
        InvalidDurationError: Malformed or non-positive duration.
        InvalidWindowError: End not strictly after start.
    """
    if _blank(end) == _blank(duration):
        raise ConflictingOrMissingEndError(end, duration)

    if _blank(start):
        start_at = now.replace(microsecond=0)
    else:
        start_at = parse_instant(start, now=now, argument="start")

    if not _blank(end):
        end_at = parse_instant(end, now=now, argument="end")
    else:
        length = parse_duration(duration)
        try:
            end_at = start_at + length
        except OverflowError as exc:
            raise InvalidDurationError(duration, reason="ends past the supported calendar") from exc

    window = SessionWindow(start=start_at, end=end_at)
    logger.debug(
        "timespec.parsed",
        start=start_at.isoformat(),
        end=end_at.isoformat(),
        total_seconds=int(window.total.total_seconds()),
    )
    return window


__all__ = [
    "INSTANT_FORMATS",
    "END_PADDING",
    "parse_instant",
    "parse_duration",
    "parse_window",
]
