"""Tests for the terminal clock, display sink and cancel source."""

from __future__ import annotations

import io
import os
import signal
import threading
import time
from datetime import datetime

import pytest
from rich.console import Console

from pmon.cli.terminal import KeyboardCancelSource, RichDisplaySink, SeededClock, system_clock
from pmon.render import StyleKind


class TestClocks:
    def test_system_clock_has_whole_seconds(self) -> None:
        assert system_clock().microsecond == 0

    def test_seeded_clock_returns_seed_once(self) -> None:
        seed = datetime(2025, 8, 10, 9, 0)
        later = datetime(2025, 8, 10, 9, 5)
        clock = SeededClock(seed, source=lambda: later)
        assert clock() == seed
        assert clock() == later
        assert clock() == later


class TestRichDisplaySink:
    def _console(self) -> tuple[Console, io.StringIO]:
        buffer = io.StringIO()
        return Console(file=buffer, color_system=None, width=80), buffer

    def test_writes_frame_verbatim(self) -> None:
        console, buffer = self._console()
        sink = RichDisplaySink(console, color=False)
        sink.write("09:00 → 17:00  |  90%\n\n██░░")
        output = buffer.getvalue()
        assert "09:00 → 17:00  |  90%" in output
        assert "██░░" in output

    def test_styled_frame_keeps_text(self) -> None:
        console, buffer = self._console()
        sink = RichDisplaySink(console, style=StyleKind.SYNTHWAVE)
        sink.write("╔══╗\n║ ██░░ ║")
        assert "║ ██░░ ║" in buffer.getvalue()

    def test_no_markup_interpretation(self) -> None:
        """Retro frames contain brackets that must not be parsed as markup."""
        console, buffer = self._console()
        RichDisplaySink(console, style=StyleKind.RETRO).write("[START]     09:00")
        assert "[START]     09:00" in buffer.getvalue()


class TestKeyboardCancelSource:
    def test_wait_times_out_without_input(self) -> None:
        source = KeyboardCancelSource(io.StringIO(), handle_sigint=False)
        started = time.monotonic()
        assert source.wait(0.05) is False
        assert time.monotonic() - started >= 0.04
        assert not source.cancelled

    def test_wait_returns_immediately_once_cancelled(self) -> None:
        source = KeyboardCancelSource(io.StringIO(), handle_sigint=False)
        source.request_cancel()
        started = time.monotonic()
        assert source.wait(30.0) is True
        assert time.monotonic() - started < 1.0

    def test_cancel_from_another_thread_wakes_wait(self) -> None:
        source = KeyboardCancelSource(io.StringIO(), handle_sigint=False)
        timer = threading.Timer(0.05, source.request_cancel)
        timer.start()
        try:
            assert source.wait(10.0) is True
        finally:
            timer.cancel()

    def test_sigint_handler_installed_and_restored(self) -> None:
        before = signal.getsignal(signal.SIGINT)
        with KeyboardCancelSource(io.StringIO()) as source:
            handler = signal.getsignal(signal.SIGINT)
            assert handler != before
            handler(signal.SIGINT, None)
            assert source.cancelled
        assert signal.getsignal(signal.SIGINT) == before

    def test_sigint_left_alone_when_disabled(self) -> None:
        before = signal.getsignal(signal.SIGINT)
        with KeyboardCancelSource(io.StringIO(), handle_sigint=False):
            assert signal.getsignal(signal.SIGINT) == before


@pytest.mark.skipif(os.name == "nt", reason="pseudo-terminals are POSIX only")
class TestKeyboardCancelSourceOnTerminal:
    """Key handling against a real pseudo-terminal in cbreak mode."""

    @pytest.fixture
    def terminal(self):
        pty = pytest.importorskip("pty")
        master, slave = pty.openpty()
        stream = os.fdopen(slave, "rb", buffering=0)
        try:
            yield master, stream
        finally:
            stream.close()
            os.close(master)

    @pytest.mark.parametrize("key", [b"q", b"Q", b"\x1b"])
    def test_quit_keys_cancel(self, terminal, key: bytes) -> None:
        master, stream = terminal
        with KeyboardCancelSource(stream, handle_sigint=False) as source:
            os.write(master, key)
            assert source.wait(1.0) is True

    @pytest.mark.parametrize("sequence", [b"\x1b[A", b"\x1b[B", b"\x1bOP", b"\x1b[15~", b"\x1bx"])
    def test_escape_sequences_do_not_cancel(self, terminal, sequence: bytes) -> None:
        """Arrow, function and Alt-modified keys start with ESC but are not Esc."""
        master, stream = terminal
        with KeyboardCancelSource(stream, handle_sigint=False) as source:
            os.write(master, sequence)
            assert source.wait(0.3) is False
            assert not source.cancelled

    def test_other_keys_ignored(self, terminal) -> None:
        master, stream = terminal
        with KeyboardCancelSource(stream, handle_sigint=False) as source:
            os.write(master, b"x ")
            assert source.wait(0.3) is False
