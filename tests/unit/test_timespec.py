"""Tests for parsing start/end/duration strings into session windows."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from pmon.core.errors import (
    ConflictingOrMissingEndError,
    InvalidDurationError,
    InvalidTimeFormatError,
    InvalidWindowError,
    TimeSpecError,
    TimeSpecErrorCode,
)
from pmon.core.timespec import parse_duration, parse_instant, parse_window

NOW = datetime(2025, 8, 16, 5, 51, 0, 123456)


class TestParseInstant:
    """Accepted instant formats."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("2025-08-10", datetime(2025, 8, 10, 0, 0, 0)),
            ("20250810", datetime(2025, 8, 10, 0, 0, 0)),
            ("2025-08-10 09:30:15", datetime(2025, 8, 10, 9, 30, 15)),
            ("2025-08-10 09:30", datetime(2025, 8, 10, 9, 30, 0)),
            ("20250810093015", datetime(2025, 8, 10, 9, 30, 15)),
            ("202508100930", datetime(2025, 8, 10, 9, 30, 0)),
            ("2025-08-10T09:30:15", datetime(2025, 8, 10, 9, 30, 15)),
            ("2025-08-10T09:30", datetime(2025, 8, 10, 9, 30, 0)),
        ],
    )
    def test_calendar_formats(self, text: str, expected: datetime) -> None:
        """Date-only, date-time, compact and ISO forms all parse."""
        assert parse_instant(text, now=NOW) == expected

    def test_time_of_day_uses_injected_date(self) -> None:
        """A bare time of day is combined with the injected current date."""
        assert parse_instant("14:05:30", now=NOW) == datetime(2025, 8, 16, 14, 5, 30)
        assert parse_instant("14:05", now=NOW) == datetime(2025, 8, 16, 14, 5, 0)

    def test_offset_converted_to_local_time(self) -> None:
        """A UTC offset is honoured and the result is naive local time."""
        expected = (
            datetime(2025, 8, 10, 9, 30, 0, tzinfo=timezone(timedelta(hours=9)))
            .astimezone()
            .replace(tzinfo=None)
        )
        assert parse_instant("2025-08-10T09:30:00+09:00", now=NOW) == expected
        assert parse_instant("2025-08-10 09:30:00+0900", now=NOW) == expected

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("2025-08-10", datetime(2025, 8, 10, 23, 59, 59)),
            ("20250810", datetime(2025, 8, 10, 23, 59, 59)),
            ("2025-08-10 09:30", datetime(2025, 8, 10, 9, 30, 59)),
            ("202508100930", datetime(2025, 8, 10, 9, 30, 59)),
            ("2025-08-10T09:30", datetime(2025, 8, 10, 9, 30, 59)),
            ("14:05", datetime(2025, 8, 16, 14, 5, 59)),
            ("2025-08-10 09:30:15", datetime(2025, 8, 10, 9, 30, 15)),
            ("14:05:30", datetime(2025, 8, 16, 14, 5, 30)),
        ],
    )
    def test_end_covers_named_unit(self, text: str, expected: datetime) -> None:
        """An end date runs to 23:59:59 and an end minute to :59; seconds are exact."""
        assert parse_instant(text, now=NOW, argument="end") == expected

    @pytest.mark.parametrize(
        "text", ["0001-01-01T00:00:00+05:00", "9999-12-31T23:59:59-05:00"]
    )
    def test_offset_outside_calendar_rejected(self, text: str) -> None:
        """Converting an offset instant past the calendar edge is a format error."""
        with pytest.raises(InvalidTimeFormatError) as exc_info:
            parse_instant(text, now=NOW, argument="end")
        assert exc_info.value.value == text
        assert exc_info.value.argument == "end"

    def test_surrounding_whitespace_ignored(self) -> None:
        assert parse_instant("  2025-08-10  ", now=NOW) == datetime(2025, 8, 10)

    @pytest.mark.parametrize(
        "text",
        ["tomorrow", "2025-13-01", "2025-08-10 25:00:00", "2025/08/10", "9am", ""],
    )
    def test_rejects_unknown_formats(self, text: str) -> None:
        """Unparseable input raises InvalidTimeFormatError echoing the input."""
        with pytest.raises(InvalidTimeFormatError) as exc_info:
            parse_instant(text, now=NOW, argument="end")
        assert exc_info.value.value == text
        assert exc_info.value.argument == "end"
        assert exc_info.value.code is TimeSpecErrorCode.INVALID_TIME_FORMAT


class TestParseDuration:
    """Duration strings of the form <integer><unit>."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("45s", timedelta(seconds=45)),
            ("90m", timedelta(minutes=90)),
            ("8h", timedelta(hours=8)),
            ("3d", timedelta(days=3)),
        ],
    )
    def test_units(self, text: str, expected: timedelta) -> None:
        assert parse_duration(text) == expected

    @pytest.mark.parametrize("text", ["0m", "0s", "000h"])
    def test_zero_rejected(self, text: str) -> None:
        """Zero durations are not a window."""
        with pytest.raises(InvalidDurationError):
            parse_duration(text)

    @pytest.mark.parametrize("text", ["-5m", "5", "m", "5w", "5M", "1h30m", "1.5h", "five m"])
    def test_malformed_rejected(self, text: str) -> None:
        """Negative, unit-less, unknown-unit and compound forms are rejected."""
        with pytest.raises(InvalidDurationError) as exc_info:
            parse_duration(text)
        assert exc_info.value.value == text

    def test_overflow_reported_as_invalid_duration(self) -> None:
        with pytest.raises(InvalidDurationError):
            parse_duration("99999999999999d")


class TestParseWindow:
    """Combining start, end and duration."""

    def test_start_plus_duration(self) -> None:
        """Start 09:00 plus 8h ends at 17:00."""
        window = parse_window("2025-08-10 09:00:00", None, "8h", now=NOW)
        assert window.start == datetime(2025, 8, 10, 9, 0, 0)
        assert window.end == datetime(2025, 8, 10, 17, 0, 0)

    def test_omitted_start_defaults_to_now(self) -> None:
        """An omitted start is the injected now, truncated to whole seconds."""
        window = parse_window(None, None, "9h", now=NOW)
        assert window.start == datetime(2025, 8, 16, 5, 51, 0)
        assert window.end == datetime(2025, 8, 16, 14, 51, 0)

    def test_blank_start_treated_as_omitted(self) -> None:
        window = parse_window("   ", None, "1h", now=NOW)
        assert window.start == datetime(2025, 8, 16, 5, 51, 0)

    def test_explicit_end(self) -> None:
        window = parse_window("2025-08-01", "2025-09-01", None, now=NOW)
        assert window.start == datetime(2025, 8, 1)
        assert window.end == datetime(2025, 9, 1, 23, 59, 59)

    def test_single_day_window(self) -> None:
        """A date-only end covers the whole day, so start and end may share it."""
        window = parse_window("2025-08-01", "2025-08-01", None, now=NOW)
        assert window.start == datetime(2025, 8, 1)
        assert window.end == datetime(2025, 8, 1, 23, 59, 59)

    def test_minute_end_covers_the_minute(self) -> None:
        window = parse_window("09:00", "17:00", None, now=NOW)
        assert window.start == datetime(2025, 8, 16, 9, 0, 0)
        assert window.end == datetime(2025, 8, 16, 17, 0, 59)

    def test_end_one_second_after_start_accepted(self) -> None:
        window = parse_window("2025-08-10 09:00:00", "2025-08-10 09:00:01", None, now=NOW)
        assert window.total == timedelta(seconds=1)

    def test_end_equal_to_start_rejected(self) -> None:
        with pytest.raises(InvalidWindowError):
            parse_window("2025-08-10 09:00:00", "2025-08-10 09:00:00", None, now=NOW)

    def test_end_before_start_rejected(self) -> None:
        with pytest.raises(InvalidWindowError) as exc_info:
            parse_window("2025-08-10 09:00:00", "2025-08-10 08:00:00", None, now=NOW)
        assert exc_info.value.code is TimeSpecErrorCode.INVALID_WINDOW

    def test_both_end_and_duration_rejected(self) -> None:
        with pytest.raises(ConflictingOrMissingEndError) as exc_info:
            parse_window(None, "17:00", "8h", now=NOW)
        assert "17:00" in exc_info.value.value
        assert "8h" in exc_info.value.value

    def test_neither_end_nor_duration_rejected(self) -> None:
        with pytest.raises(ConflictingOrMissingEndError):
            parse_window("09:00", None, None, now=NOW)

    def test_invalid_end_names_end_argument(self) -> None:
        with pytest.raises(InvalidTimeFormatError) as exc_info:
            parse_window(None, "soon", None, now=NOW)
        assert exc_info.value.argument == "end"

    def test_invalid_duration_surfaces(self) -> None:
        with pytest.raises(InvalidDurationError):
            parse_window(None, None, "0m", now=NOW)

    def test_duration_past_calendar_end(self) -> None:
        with pytest.raises(InvalidDurationError):
            parse_window("9999-12-31", None, "2d", now=NOW)

    def test_parser_does_not_read_clock(self) -> None:
        """Results depend only on the injected now."""
        first = parse_window(None, None, "25m", now=NOW)
        second = parse_window(None, None, "25m", now=NOW)
        assert first == second


class TestTimeSpecErrors:
    """Structured error payloads."""

    def test_str_includes_code(self) -> None:
        err = InvalidDurationError("7x")
        assert str(err) == "[invalid_duration] Invalid duration '7x'"

    def test_to_dict(self) -> None:
        data = InvalidTimeFormatError("nope", argument="start").to_dict()
        assert data["code"] == "invalid_time_format"
        assert data["value"] == "nope"
        assert data["argument"] == "start"
        assert data["suggestions"]

    def test_all_errors_share_base(self) -> None:
        for err in (
            InvalidTimeFormatError("x"),
            InvalidDurationError("x"),
            ConflictingOrMissingEndError(None, None),
            InvalidWindowError(1, 0),
        ):
            assert isinstance(err, TimeSpecError)
            assert isinstance(err, Exception)
