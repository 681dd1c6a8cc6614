"""Tests for TimeFilterService."""

from __future__ import annotations

from collections.abc import Generator
from datetime import UTC, datetime
from pathlib import Path

import pytest

from logrange.config.settings import LograngeSettings
from logrange.services.telemetry import _current_span, disable_telemetry, enable_telemetry
from logrange.services.timefilter import TimeFilterService
from tests.conftest import REF_NOW, StubHumanParser


@pytest.fixture
def svc(settings: LograngeSettings, stub_parser: StubHumanParser) -> TimeFilterService:
    return TimeFilterService(settings, human_parser=stub_parser)


def _settings_with(tmp_path: Path, toml: str) -> LograngeSettings:
    (tmp_path / "logrange.toml").write_text(toml)
    return LograngeSettings.from_cli(start_dir=tmp_path)


class TestResolve:
    def test_signed_range(self, svc: TimeFilterService) -> None:
        result = svc.resolve("2015-06-23 17:45/-1M", now=REF_NOW)
        assert result.ok
        assert result.op == "resolve_time"
        data = result.data
        assert data["start"] == "2015-05-23T17:45:00+00:00"
        assert data["end"] == "2015-06-23T17:45:00+00:00"
        assert data["kind"] == "range"
        assert data["left"] == "2015-06-23 17:45"
        assert data["right"] == "-1M"
        assert data["separator"] == "/"
        assert data["open_ended"] is False
        assert data["filter"] == {
            "range": {
                "@timestamp": {
                    "gte": "2015-05-23T17:45:00+00:00",
                    "lte": "2015-06-23T17:45:00+00:00",
                }
            }
        }

    @pytest.mark.parametrize("expression", [None, "", "  "])
    def test_default_window(self, svc: TimeFilterService, expression: str | None) -> None:
        result = svc.resolve(expression, now=REF_NOW)
        assert result.ok
        assert result.data["kind"] == "default"
        assert result.data["start"] == "2015-06-23T11:00:00+00:00"
        assert result.data["end"] is None
        assert result.data["open_ended"] is True

    def test_duration(self, svc: TimeFilterService) -> None:
        result = svc.resolve("90", now=REF_NOW)
        assert result.data["kind"] == "duration"
        assert result.data["start"] == "2015-06-23T10:30:00+00:00"
        assert result.data["right"] is None

    def test_human(self, svc: TimeFilterService, stub_parser: StubHumanParser) -> None:
        result = svc.resolve("yesterday", now=REF_NOW)
        assert result.ok
        assert result.data["kind"] == "human"
        assert result.data["start"] == "2015-06-22T00:00:00+00:00"

    def test_inverted_range_warns(self, svc: TimeFilterService) -> None:
        result = svc.resolve("2015-06-18/2015-06-16", now=REF_NOW)
        assert result.ok
        assert len(result.warnings) == 1
        assert "after range end" in result.warnings[0]

    def test_naive_now_rejected(self, svc: TimeFilterService) -> None:
        with pytest.raises(ValueError):
            svc.resolve("1h", now=datetime(2015, 6, 23, 12))


class TestFailures:
    def test_invalid_datetime(self, svc: TimeFilterService) -> None:
        result = svc.resolve("2015-13-40", now=REF_NOW)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "InvalidDatetime"
        assert "2015-13-40" in result.error.message
        assert result.error.detail["kind"] == "InvalidDatetime"
        assert "expected" in result.error.detail

    def test_invalid_separator_flag(self, svc: TimeFilterService) -> None:
        result = svc.resolve("1h", now=REF_NOW, separator=":")
        assert result.error is not None
        assert result.error.code == "InvalidSeparator"
        assert result.error.detail["token"] == ":"

    def test_empty_separator_flag_is_rejected(self, svc: TimeFilterService) -> None:
        result = svc.resolve("1h", now=REF_NOW, separator="")
        assert result.error is not None
        assert result.error.code == "InvalidSeparator"

    @pytest.mark.parametrize("expression", ["10000y", "99999999999", "2015-06-23/+9000y"])
    def test_duration_out_of_range(self, svc: TimeFilterService, expression: str) -> None:
        result = svc.resolve(expression, now=REF_NOW)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "InvalidDuration"
        assert "out of range" in result.error.message

    def test_unknown_timezone(self, svc: TimeFilterService) -> None:
        result = svc.resolve("1h", now=REF_NOW, timezone="Mars/Olympus_Mons")
        assert result.error is not None
        assert result.error.code == "InvalidTimezone"
        assert result.error.detail["timezone"] == "Mars/Olympus_Mons"


class TestConfiguration:
    def test_effective_separator(self, svc: TimeFilterService) -> None:
        assert svc.effective_separator(None) == "/"
        assert svc.effective_separator(" TO ") == " TO "
        assert svc.effective_separator("") == ""

    def test_configured_separator(self, tmp_path: Path, stub_parser: StubHumanParser) -> None:
        settings = _settings_with(tmp_path, '[search]\nrange_separator = " TO "\n')
        svc = TimeFilterService(settings, human_parser=stub_parser)
        result = svc.resolve("2015-06-16T22:27:41 TO 2015-06-18T22:27:41", now=REF_NOW)
        assert result.ok
        assert result.data["separator"] == " TO "
        assert result.data["end"] == "2015-06-18T22:27:41+00:00"

    def test_flag_overrides_configured_separator(
        self, tmp_path: Path, stub_parser: StubHumanParser
    ) -> None:
        settings = _settings_with(tmp_path, '[search]\nrange_separator = " TO "\n')
        svc = TimeFilterService(settings, human_parser=stub_parser)
        result = svc.resolve("2015-06-16/2015-06-18", now=REF_NOW, separator="/")
        assert result.ok
        assert result.data["kind"] == "range"

    def test_configured_window(self, tmp_path: Path, stub_parser: StubHumanParser) -> None:
        settings = _settings_with(tmp_path, "[search]\ndefault_window_minutes = 15\n")
        result = TimeFilterService(settings, human_parser=stub_parser).resolve(None, now=REF_NOW)
        assert result.data["start"] == "2015-06-23T11:45:00+00:00"

    def test_configured_timestamp_field(
        self, tmp_path: Path, stub_parser: StubHumanParser
    ) -> None:
        settings = _settings_with(tmp_path, '[search]\ntimestamp_field = "ts"\n')
        result = TimeFilterService(settings, human_parser=stub_parser).resolve("1h", now=REF_NOW)
        assert list(result.data["filter"]["range"]) == ["ts"]

    def test_configured_timezone(self, tmp_path: Path, stub_parser: StubHumanParser) -> None:
        settings = _settings_with(tmp_path, '[time]\ntimezone = "Europe/Berlin"\n')
        svc = TimeFilterService(settings, human_parser=stub_parser)
        result = svc.resolve("2015-06-20 20:48", now=REF_NOW)
        assert result.data["start"] == "2015-06-20T20:48:00+02:00"

    def test_timezone_argument_overrides_config(
        self, tmp_path: Path, stub_parser: StubHumanParser
    ) -> None:
        settings = _settings_with(tmp_path, '[time]\ntimezone = "Europe/Berlin"\n')
        svc = TimeFilterService(settings, human_parser=stub_parser)
        result = svc.resolve("2015-06-20 20:48", now=REF_NOW, timezone="UTC")
        assert result.data["start"] == "2015-06-20T20:48:00+00:00"


class TestTelemetry:
    @pytest.fixture(autouse=True)
    def _telemetry(self) -> Generator[None]:
        enable_telemetry()
        yield
        disable_telemetry()
        _current_span.set(None)

    def test_span_tree_in_meta(self, svc: TimeFilterService) -> None:
        result = svc.resolve("2015-06-23 17:45/+15m", now=REF_NOW)
        assert result.meta is not None
        telemetry = result.meta["telemetry"]
        assert telemetry["name"] == "TimeFilterService.resolve"
        names = [c["name"] for c in telemetry["children"]]
        assert names[0] == "timezone"
        assert "state:detected" in names
        assert names[-1] == "state:done"

    def test_failed_resolution_records_error_state(self, svc: TimeFilterService) -> None:
        result = svc.resolve("2015-13-40", now=REF_NOW)
        assert result.meta is not None
        names = [c["name"] for c in result.meta["telemetry"]["children"]]
        assert names[-1] == "state:error"


class TestDaylightSaving:
    def test_configured_zone_window_is_elapsed_time(
        self, tmp_path: Path, stub_parser: StubHumanParser
    ) -> None:
        settings = _settings_with(tmp_path, '[time]\ntimezone = "Europe/Berlin"\n')
        svc = TimeFilterService(settings, human_parser=stub_parser)
        now = datetime(2024, 3, 31, 1, 30, tzinfo=UTC)
        assert svc.resolve(None, now=now).data["start"] == "2024-03-31T01:30:00+01:00"
        assert svc.resolve("1h30m", now=now).data["start"] == "2024-03-31T01:00:00+01:00"
