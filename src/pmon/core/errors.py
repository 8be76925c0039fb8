"""Structured errors raised while turning user input into a session window."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TimeSpecErrorCode(str, Enum):
    """Categorized error codes for time specification problems."""

    INVALID_TIME_FORMAT = "invalid_time_format"
    INVALID_DURATION = "invalid_duration"
    CONFLICTING_OR_MISSING_END = "conflicting_or_missing_end"
    INVALID_WINDOW = "invalid_window"


@dataclass
class TimeSpecError(Exception):
    """Base exception for every start/end/duration input failure.

    Carries the offending input so the CLI can echo it back verbatim.
    """

    code: TimeSpecErrorCode
    message: str
    value: str = ""
    argument: str = ""
    suggestions: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to serializable dictionary."""
        return {
            "code": self.code.value,
            "message": self.message,
            "value": self.value,
            "argument": self.argument,
            "suggestions": self.suggestions,
        }


class InvalidTimeFormatError(TimeSpecError):
    """Raised when a start or end string matches none of the accepted formats."""

    def __init__(self, value: str, argument: str = "start", **kwargs: Any) -> None:
        super().__init__(
            code=TimeSpecErrorCode.INVALID_TIME_FORMAT,
            message=f"Invalid {argument} time '{value}'",
            value=value,
            argument=argument,
            suggestions=[
                "Use YYYY-MM-DD, YYYY-MM-DD HH:MM[:SS], YYYY-MM-DDTHH:MM:SS[+HH:MM] or HH:MM[:SS]",
            ],
            **kwargs,
        )


class InvalidDurationError(TimeSpecError):
    """Raised for malformed, zero or negative durations."""

    def __init__(self, value: str, reason: str = "", **kwargs: Any) -> None:
        detail = f": {reason}" if reason else ""
        super().__init__(
            code=TimeSpecErrorCode.INVALID_DURATION,
            message=f"Invalid duration '{value}'{detail}",
            value=value,
            argument="duration",
            suggestions=["Use a positive integer followed by s, m, h or d (e.g. 90m, 8h, 3d)"],
            **kwargs,
        )


class ConflictingOrMissingEndError(TimeSpecError):
    """Raised when both or neither of end and duration are supplied."""

    def __init__(self, end: str | None, duration: str | None, **kwargs: Any) -> None:
        if end and duration:
            message = f"Specify either an end time or a duration, not both (end='{end}', duration='{duration}')"
            value = f"end={end}, duration={duration}"
        else:
            message = "Either an end time or a duration is required"
            value = ""
        super().__init__(
            code=TimeSpecErrorCode.CONFLICTING_OR_MISSING_END,
            message=message,
            value=value,
            argument="end",
            suggestions=["Pass exactly one of --end or --duration"],
            **kwargs,
        )


class InvalidWindowError(TimeSpecError):
    """Raised when the end instant does not fall strictly after the start."""

    def __init__(self, start: Any, end: Any, **kwargs: Any) -> None:
        value = f"{start} -> {end}"
        super().__init__(
            code=TimeSpecErrorCode.INVALID_WINDOW,
            message=f"End time must be after start time ({value})",
            value=value,
            argument="end",
            **kwargs,
        )


__all__ = [
    "TimeSpecErrorCode",
    "TimeSpecError",
    "InvalidTimeFormatError",
    "InvalidDurationError",
    "ConflictingOrMissingEndError",
    "InvalidWindowError",
]
