"""Session-time engine: parsing, snapshots, labels and the refresh loop."""

from pmon.core.errors import (
    ConflictingOrMissingEndError,
    InvalidDurationError,
    InvalidTimeFormatError,
    InvalidWindowError,
    TimeSpecError,
    TimeSpecErrorCode,
)
from pmon.core.formatting import (
    DisplayTier,
    DurationTier,
    Labels,
    build_labels,
    format_duration,
    format_instant,
    format_instants,
    select_tier,
)
from pmon.core.session import (
    Phase,
    SessionWindow,
    Snapshot,
    display_percent,
    phase_of,
    snapshot,
)
from pmon.core.state import RefreshState, RefreshStateMachine
from pmon.core.timespec import parse_duration, parse_instant, parse_window

__all__ = [
    "ConflictingOrMissingEndError",
    "InvalidDurationError",
    "InvalidTimeFormatError",
    "InvalidWindowError",
    "TimeSpecError",
    "TimeSpecErrorCode",
    "DisplayTier",
    "DurationTier",
    "Labels",
    "build_labels",
    "format_duration",
    "format_instant",
    "format_instants",
    "select_tier",
    "Phase",
    "SessionWindow",
    "Snapshot",
    "display_percent",
    "phase_of",
    "snapshot",
    "RefreshState",
    "RefreshStateMachine",
    "parse_duration",
    "parse_instant",
    "parse_window",
]
