"""Tests for unit conversion and formatting utilities."""

import pytest

from endurance_analytics.metrics.units import (
    celsius_to_fahrenheit,
    fahrenheit_to_celsius,
    format_hours_minutes,
    format_pace,
    format_time,
    km_to_miles,
    meters_to_yards,
    pace_sec_per_km_to_sec_per_mile,
    pace_to_speed_mps,
    parse_time_string,
    round_pct,
    speed_kph_from_seconds,
    speed_mps_to_pace,
)


class TestConversions:
    """Tests for unit conversions."""

    def test_temperature(self):
        assert celsius_to_fahrenheit(100) == 212
        assert fahrenheit_to_celsius(32) == 0

    def test_distance(self):
        assert abs(km_to_miles(10) - 6.21371) < 1e-6
        assert abs(meters_to_yards(100) - 109.361) < 1e-3

    def test_pace_per_mile_is_slower_number(self):
        """A mile is longer than a km, so the same effort takes more seconds."""
        assert pace_sec_per_km_to_sec_per_mile(300) > 300

    def test_pace_speed_conversion(self):
        assert pace_to_speed_mps(250) == 4.0
        assert speed_mps_to_pace(4.0) == 250

    def test_non_positive_pace_or_speed_returns_none(self):
        assert pace_to_speed_mps(0) is None
        assert speed_mps_to_pace(-1) is None

    def test_speed_kph(self):
        assert speed_kph_from_seconds(40, 3600) == 40
        assert speed_kph_from_seconds(40, 0) is None


class TestFormatting:
    """Tests for display formatting."""

    def test_format_pace(self):
        assert format_pace(245) == "4:05"
        assert format_pace(300) == "5:00"

    def test_format_time_with_hours(self):
        assert format_time(8130) == "2:15:30"

    def test_format_time_under_an_hour(self):
        assert format_time(2710) == "45:10"

    def test_format_hours_minutes(self):
        assert format_hours_minutes(35800) == "9:56"

    def test_round_pct(self):
        assert round_pct(4.26) == 4.3


class TestParseTimeString:
    """Tests for clock-style time parsing."""

    def test_hours_minutes_seconds(self):
        assert parse_time_string("1:45:00") == 6300

    def test_minutes_seconds(self):
        assert parse_time_string("25:00") == 1500

    def test_rejects_out_of_range_minutes(self):
        with pytest.raises(ValueError, match="below 60"):
            parse_time_string("1:75:00")

    def test_rejects_garbage(self):
        with pytest.raises(ValueError, match="Invalid time string"):
            parse_time_string("fast")
