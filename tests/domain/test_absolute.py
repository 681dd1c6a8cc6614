"""Tests for absolute datetime parsing."""

from datetime import UTC, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from logrange.domain.absolute import parse_absolute
from logrange.domain.errors import ErrorKind, InvalidDatetimeError

PLUS_TWO = timezone(timedelta(hours=2))


class TestParseAbsolute:
    @pytest.mark.parametrize(
        "token,expected",
        [
            ("2015-06-20", datetime(2015, 6, 20)),
            ("20150620", datetime(2015, 6, 20)),
            ("2015-06-20T20:48", datetime(2015, 6, 20, 20, 48)),
            ("2015-06-20 20:28", datetime(2015, 6, 20, 20, 28)),
            ("2015-06-2020:28", datetime(2015, 6, 20, 20, 28)),
            ("20150620T20:28", datetime(2015, 6, 20, 20, 28)),
            ("20150620 20:28", datetime(2015, 6, 20, 20, 28)),
            ("2015062020:28", datetime(2015, 6, 20, 20, 28)),
            ("201506202028", datetime(2015, 6, 20, 20, 28)),
            ("2015-06-16T22:27:41", datetime(2015, 6, 16, 22, 27, 41)),
            ("2015-06-16T22", datetime(2015, 6, 16, 22)),
        ],
    )
    def test_accepted_layouts(self, token: str, expected: datetime) -> None:
        assert parse_absolute(token, PLUS_TWO) == expected.replace(tzinfo=PLUS_TWO)

    def test_utc_marker(self) -> None:
        result = parse_absolute("2015-06-20T20:48Z", PLUS_TWO)
        assert result.tzinfo is UTC
        assert result == datetime(2015, 6, 20, 20, 48, tzinfo=UTC)

    def test_local_interpretation_uses_injected_zone(self) -> None:
        berlin = ZoneInfo("Europe/Berlin")
        result = parse_absolute("2015-06-20 20:48", berlin)
        assert result.utcoffset() == timedelta(hours=2)
        winter = parse_absolute("2015-01-20 20:48", berlin)
        assert winter.utcoffset() == timedelta(hours=1)

    def test_leap_day(self) -> None:
        assert parse_absolute("2016-02-29", UTC) == datetime(2016, 2, 29, tzinfo=UTC)


class TestParseAbsoluteErrors:
    @pytest.mark.parametrize(
        "token,fragment",
        [
            ("2015-13-40", "month 13"),
            ("2015-00-10", "month 00"),
            ("2015-02-29", "day 29 is outside 1-28"),
            ("2015-04-31", "day 31 is outside 1-30"),
            ("2015-06-00", "day 00"),
            ("2015-06-20 24:00", "hour 24"),
            ("2015-06-20 23:60", "minute 60"),
            ("2015-06-20 23:59:60", "second 60"),
            ("0000-01-01", "year 0000"),
            ("2015/06/20", "does not match"),
        ],
    )
    def test_rejected(self, token: str, fragment: str) -> None:
        with pytest.raises(InvalidDatetimeError) as excinfo:
            parse_absolute(token, UTC)
        assert excinfo.value.kind is ErrorKind.INVALID_DATETIME
        assert fragment in excinfo.value.reason
