"""Terminal collaborators for the refresh loop.

- ``system_clock`` / ``SeededClock``: the time source.
- ``RichDisplaySink``: clears the console and prints each frame with rich.
- ``KeyboardCancelSource``: races the refresh interval against quit keys
  on stdin and SIGINT.
"""

from __future__ import annotations

import os
import select
import signal
import sys
import threading
import time
from collections.abc import Callable
from datetime import datetime
from types import FrameType, TracebackType
from typing import IO, Any

from rich.console import Console
from rich.text import Text

from pmon.render import StyleKind
from pmon.render.synthwave import PALETTE
from pmon.utils.logging import get_logger

if os.name == "nt":
    import msvcrt
else:
    import termios
    import tty

logger = get_logger("terminal")

# q, Esc and Ctrl+C (the latter only arrives as a byte when ISIG is off)
ESCAPE = "\x1b"
QUIT_KEYS = frozenset({"q", "Q", ESCAPE, "\x03"})
POLL_SLICE_SECONDS = 0.1
ESCAPE_SEQUENCE_TIMEOUT = 0.03


def system_clock() -> datetime:
    """Current local time truncated to whole seconds."""
    return datetime.now().replace(microsecond=0)


class SeededClock:
    """Clock that returns ``first`` once, then defers to ``source``.

    Lets the first tick reuse the exact instant the window was parsed with.
    """

    def __init__(self, first: datetime, source: Callable[[], datetime] = system_clock) -> None:
        self._first: datetime | None = first
        self._source = source

    def __call__(self) -> datetime:
        if self._first is not None:
            value, self._first = self._first, None
            return value
        return self._source()


def _rgb(triple: tuple[int, int, int]) -> str:
    return "rgb({},{},{})".format(*triple)


STYLE_THEMES: dict[StyleKind, str] = {
    StyleKind.DEFAULT: "",
    StyleKind.RETRO: "bold green",
    StyleKind.SYNTHWAVE: f"{_rgb(PALETTE['text'])} on {_rgb(PALETTE['background'])}",
    StyleKind.HOURGLASS: "yellow",
}

# Extra highlights applied on top of the base theme: (regex, rich style)
STYLE_HIGHLIGHTS: dict[StyleKind, tuple[tuple[str, str], ...]] = {
    StyleKind.SYNTHWAVE: (
        (r"[╔╗╚╝═║]+", _rgb(PALETTE["border"])),
        (r"[█░]+", f"bold {_rgb(PALETTE['bar'])}"),
        (r"[⚡✔].*[⚡✔]", f"bold {_rgb(PALETTE['accent'])}"),
    ),
    StyleKind.HOURGLASS: ((r"█+", "bold yellow"),),
}


class RichDisplaySink:
    """Display sink that redraws the whole frame on a rich console."""

    def __init__(
        self,
        console: Console | None = None,
        *,
        style: StyleKind = StyleKind.DEFAULT,
        color: bool = True,
    ) -> None:
        self.console = console or Console(no_color=not color, highlight=False)
        self.style = style
        self.color = color

    def _styled(self, frame: str) -> Text:
        if not self.color:
            return Text(frame)
        text = Text(frame, style=STYLE_THEMES[self.style])
        for pattern, highlight in STYLE_HIGHLIGHTS.get(self.style, ()):
            text.highlight_regex(pattern, highlight)
        return text

    def write(self, frame: str) -> None:
        self.console.clear()
        self.console.print(self._styled(frame), highlight=False, soft_wrap=True)


class KeyboardCancelSource:
    """Cancel source fed by quit keys and SIGINT.

    Use as a context manager: on entry stdin is switched to cbreak mode
    (when it is a terminal) and a SIGINT handler is installed; both are
    restored on exit.

    Example:
        with KeyboardCancelSource() as cancel:
            if cancel.wait(5.0):
                ...
    """

    def __init__(self, stream: IO[str] | None = None, *, handle_sigint: bool = True) -> None:
        self.stream = stream if stream is not None else sys.stdin
        self.handle_sigint = handle_sigint
        self._event = threading.Event()
        self._saved_termios: list[Any] | None = None
        self._saved_handler: Any = None
        self._sigint_installed = False

    def __enter__(self) -> KeyboardCancelSource:
        if self.handle_sigint and threading.current_thread() is threading.main_thread():
            self._saved_handler = signal.signal(signal.SIGINT, self._on_sigint)
            self._sigint_installed = True
        if self._is_tty() and os.name != "nt":
            fd = self.stream.fileno()
            self._saved_termios = termios.tcgetattr(fd)
            tty.setcbreak(fd)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._saved_termios is not None:
            termios.tcsetattr(self.stream.fileno(), termios.TCSADRAIN, self._saved_termios)
            self._saved_termios = None
        if self._sigint_installed:
            previous = self._saved_handler if self._saved_handler is not None else signal.SIG_DFL
            signal.signal(signal.SIGINT, previous)
            self._sigint_installed = False

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def request_cancel(self) -> None:
        self._event.set()

    def _on_sigint(self, signum: int, frame: FrameType | None) -> None:
        logger.debug("terminal.sigint")
        self._event.set()

    def _is_tty(self) -> bool:
        isatty = getattr(self.stream, "isatty", None)
        return bool(isatty and isatty())

    def _read_quit_key(self, timeout: float) -> bool:
        """Wait up to ``timeout`` for one key; True if it was a quit key."""
        if not self._is_tty():
            self._event.wait(timeout)
            return False
        if os.name == "nt":
            if msvcrt.kbhit():
                return msvcrt.getwch() in QUIT_KEYS
            self._event.wait(timeout)
            return False
        fd = self.stream.fileno()
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return False
        key = os.read(fd, 1).decode("utf-8", errors="ignore")
        if key == ESCAPE and self._drain_sequence(fd):
            return False
        return key in QUIT_KEYS

    def _drain_sequence(self, fd: int) -> bool:
        """Discard the rest of an escape sequence; True if one followed ESC.

        Arrow, function and Alt-modified keys arrive as ESC followed by more
        bytes within a few milliseconds; a bare Esc press has nothing after it.
        """
        drained = False
        while select.select([fd], [], [], ESCAPE_SEQUENCE_TIMEOUT)[0]:
            if not os.read(fd, 64):
                break
            drained = True
        return drained

    def wait(self, timeout: float) -> bool:
        """Block up to ``timeout`` seconds; True as soon as cancellation is requested."""
        deadline = time.monotonic() + timeout
        while not self._event.is_set():
            left = deadline - time.monotonic()
            if left <= 0:
                return False
            if self._read_quit_key(min(left, POLL_SLICE_SECONDS)):
                logger.debug("terminal.quit_key")
                self._event.set()
        return True


__all__ = [
    "QUIT_KEYS",
    "system_clock",
    "SeededClock",
    "STYLE_THEMES",
    "RichDisplaySink",
    "KeyboardCancelSource",
]
