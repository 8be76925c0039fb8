"""Pytest configuration and shared fixtures."""

import sys
from datetime import datetime
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")


# =============================================================================
# COMMON FIXTURES
# =============================================================================


@pytest.fixture
def workday_start() -> datetime:
    """09:00 on a fixed day."""
    return datetime(2025, 8, 10, 9, 0, 0)


@pytest.fixture
def workday(workday_start):
    """An eight-hour window starting at 09:00."""
    from pmon.core.session import SessionWindow

    return SessionWindow(workday_start, datetime(2025, 8, 10, 17, 0, 0))


@pytest.fixture
def make_context():
    """Factory for render contexts at a given instant."""
    from pmon.core.session import snapshot
    from pmon.render import RenderContext, StyleKind

    def _make(window, now, *, title=None, style=StyleKind.DEFAULT):
        return RenderContext(window=window, snapshot=snapshot(window, now), title=title, style=style)

    return _make


class RecordingSink:
    """Display sink that keeps every frame."""

    def __init__(self) -> None:
        self.frames: list[str] = []

    def write(self, frame: str) -> None:
        self.frames.append(frame)


class ScriptedCancelSource:
    """Cancel source that answers from a script and records requested timeouts."""

    def __init__(self, answers=None) -> None:
        self.answers = list(answers or [])
        self.timeouts: list[float] = []

    def wait(self, timeout: float) -> bool:
        self.timeouts.append(timeout)
        return self.answers.pop(0) if self.answers else False


class StepClock:
    """Clock that returns the given instants in order, repeating the last one."""

    def __init__(self, *instants: datetime) -> None:
        self.instants = list(instants)
        self.calls = 0

    def __call__(self) -> datetime:
        index = min(self.calls, len(self.instants) - 1)
        self.calls += 1
        return self.instants[index]


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def cancel_source_factory():
    return ScriptedCancelSource


@pytest.fixture
def step_clock_factory():
    return StepClock


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """ConfigService that ignores the real user/project files and PMON_ env vars."""
    import os

    from pmon.config.settings import ConfigService

    for key in list(os.environ):
        if key.startswith("PMON_"):
            monkeypatch.delenv(key)
    return ConfigService(
        user_config_path=tmp_path / "user" / "config.yaml",
        project_dir=tmp_path / "project",
    )
