"""Tests for passkit/formatting.py."""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from passkit.formatting import format_iso_date, parse_iso_date, parse_rgb_color, rgb_string


class TestFormatIsoDate:
    """Tests for format_iso_date function."""

    def test_utc_offset_has_colon(self) -> None:
        """The offset must be +00:00, not +0000."""
        result = format_iso_date(datetime(2025, 1, 3, 19, 0, tzinfo=timezone.utc))
        assert result == "2025-01-03T19:00:00+00:00"

    def test_negative_offset(self) -> None:
        result = format_iso_date(datetime(2018, 11, 25, 14, 25, tzinfo=timezone(timedelta(hours=-8))))
        assert result == "2018-11-25T14:25:00-08:00"

    def test_zoneinfo_offset(self) -> None:
        """Named zones are rendered with their offset at that instant."""
        result = format_iso_date(datetime(2025, 7, 1, 12, 0, tzinfo=ZoneInfo("Europe/Vienna")))
        assert result == "2025-07-01T12:00:00+02:00"

    def test_naive_datetime_is_utc(self) -> None:
        result = format_iso_date(datetime(2025, 1, 3, 19, 0))
        assert result == "2025-01-03T19:00:00+00:00"


class TestParseIsoDate:
    """Tests for parse_iso_date function."""

    def test_minute_precision(self) -> None:
        result = parse_iso_date("2018-11-25T14:25-08:00")
        assert result == datetime(2018, 11, 25, 14, 25, tzinfo=timezone(timedelta(hours=-8)))

    def test_zulu_suffix(self) -> None:
        assert parse_iso_date("2025-01-03T19:00:00Z").utcoffset() == timedelta(0)

    def test_invalid_raises(self) -> None:
        with pytest.raises(ValueError):
            parse_iso_date("25/11/2018")


class TestColours:
    """Tests for rgb() colour helpers."""

    def test_rgb_string(self) -> None:
        assert rgb_string(10, 20, 30) == "rgb(10, 20, 30)"

    def test_rgb_string_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="out of range"):
            rgb_string(0, 256, 0)

    def test_parse_rgb_color(self) -> None:
        assert parse_rgb_color("rgb(10, 20, 30)") == (10, 20, 30)
        assert parse_rgb_color(" rgb(1,2,3) ") == (1, 2, 3)

    @pytest.mark.parametrize("value", ["#ffffff", "rgb(1, 2)", "rgb(300, 0, 0)"])
    def test_parse_rgb_color_rejects(self, value: str) -> None:
        with pytest.raises(ValueError):
            parse_rgb_color(value)
