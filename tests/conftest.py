"""Shared pytest fixtures and test helpers for logrange tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator, Mapping
from datetime import UTC, datetime
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from logrange.config.settings import LograngeSettings
from logrange.services.telemetry import _current_span, disable_telemetry

# 2015-06-23 12:00:00 UTC, the reference instant used across tests.
REF_NOW = datetime(2015, 6, 23, 12, 0, 0, tzinfo=UTC)


class StubHumanParser:
    """Deterministic stand-in for the dateparser-backed fallback.

    Looks phrases up in a table (case-insensitive) and records every call.
    """

    def __init__(self, table: Mapping[str, datetime] | None = None) -> None:
        self.table = {k.lower(): v for k, v in (table or {}).items()}
        self.calls: list[tuple[str, datetime]] = []

    def __call__(self, text: str, now: datetime) -> datetime | None:
        self.calls.append((text, now))
        return self.table.get(text.lower())


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep user config, env overrides, and CWD config files out of tests."""
    for name in list(os.environ):
        if name.startswith("LOGRANGE_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_process_state() -> Generator[None]:
    """Undo what AppContext does to logging and telemetry during CLI tests."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    disable_telemetry()
    _current_span.set(None)
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def ref_now() -> datetime:
    return REF_NOW


@pytest.fixture
def stub_parser() -> StubHumanParser:
    """Stub knowing a few phrases relative to :data:`REF_NOW`."""
    return StubHumanParser(
        {
            "yesterday": datetime(2015, 6, 22, 0, 0, tzinfo=UTC),
            "last friday at 13:00": datetime(2015, 6, 19, 13, 0, tzinfo=UTC),
            "last friday at 13:30": datetime(2015, 6, 19, 13, 30, tzinfo=UTC),
            "10 minutes ago": datetime(2015, 6, 23, 11, 50, tzinfo=UTC),
        }
    )


@pytest.fixture
def settings(tmp_path: Path) -> LograngeSettings:
    """Settings with code defaults only."""
    return LograngeSettings.from_cli(start_dir=tmp_path)
