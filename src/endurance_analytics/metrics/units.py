"""Unit conversion and display formatting utilities.

Stored values in the engine are always seconds and meters. These helpers
exist for callers that display imperial units or clock-style times.
"""

from typing import Optional


METERS_TO_YARDS = 1.09361
KM_TO_MILES = 0.621371
METERS_PER_FOOT = 0.3048


def meters_to_yards(meters: float) -> float:
    return meters * METERS_TO_YARDS


def yards_to_meters(yards: float) -> float:
    return yards / METERS_TO_YARDS


def km_to_miles(km: float) -> float:
    return km * KM_TO_MILES


def miles_to_km(miles: float) -> float:
    return miles / KM_TO_MILES


def feet_to_meters(feet: float) -> float:
    return feet * METERS_PER_FOOT


def meters_to_feet(meters: float) -> float:
    return meters / METERS_PER_FOOT


def fahrenheit_to_celsius(temp_f: float) -> float:
    return (temp_f - 32) * 5 / 9


def celsius_to_fahrenheit(temp_c: float) -> float:
    return temp_c * 9 / 5 + 32


def pace_sec_per_km_to_sec_per_mile(pace_sec_per_km: float) -> float:
    """Convert a running pace from sec/km to sec/mile."""
    return pace_sec_per_km / KM_TO_MILES


def pace_to_speed_mps(pace_sec_per_km: float) -> Optional[float]:
    """Convert pace (sec/km) to speed in m/s. None for non-positive pace."""
    if pace_sec_per_km is None or pace_sec_per_km <= 0:
        return None
    return 1000 / pace_sec_per_km


def speed_mps_to_pace(speed_mps: float) -> Optional[float]:
    """Convert speed in m/s to pace (sec/km). None for non-positive speed."""
    if speed_mps is None or speed_mps <= 0:
        return None
    return 1000 / speed_mps


def speed_kph_from_seconds(distance_km: float, seconds: float) -> Optional[float]:
    """Average speed in km/h for a distance covered in the given time."""
    if not seconds or seconds <= 0:
        return None
    return distance_km / (seconds / 3600)


def format_pace(pace_sec: float) -> str:
    """
    Format a pace in seconds to m:ss.

    Args:
        pace_sec: Pace in seconds (per km, per mile or per 100m)

    Returns:
        Formatted string like "4:05"
    """
    total = int(round(pace_sec))
    minutes = total // 60
    seconds = total % 60
    return f"{minutes}:{seconds:02d}"


def format_time(total_seconds: float) -> str:
    """
    Format a duration as h:mm:ss, or m:ss when under an hour.

    Args:
        total_seconds: Duration in seconds

    Returns:
        Formatted string like "2:15:30" or "45:10"
    """
    total = int(round(total_seconds))
    hours = total // 3600
    minutes = (total % 3600) // 60
    seconds = total % 60
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def format_hours_minutes(total_seconds: float) -> str:
    """Format a duration as h:mm (seconds truncated)."""
    total = int(round(total_seconds))
    hours = total // 3600
    minutes = (total % 3600) // 60
    return f"{hours}:{minutes:02d}"


def parse_time_string(value: str) -> int:
    """
    Parse "h:mm:ss" or "mm:ss" into seconds.

    Args:
        value: Clock-style time string

    Returns:
        Total seconds

    Raises:
        ValueError: If the string is not a valid clock time
    """
    parts = value.strip().split(":")
    if len(parts) not in (2, 3) or not all(part.isdigit() for part in parts):
        raise ValueError(f"Invalid time string: {value!r}")

    numbers = [int(part) for part in parts]
    if any(n >= 60 for n in numbers[1:]):
        raise ValueError(f"Minutes and seconds must be below 60: {value!r}")

    if len(numbers) == 3:
        hours, minutes, seconds = numbers
        return hours * 3600 + minutes * 60 + seconds
    minutes, seconds = numbers
    return minutes * 60 + seconds


def round_pct(value: float) -> float:
    """Round a percentage to one decimal place."""
    return round(value, 1)
