"""Shared fixtures for Endurance Analytics tests."""

from datetime import date, timedelta

import pytest

from endurance_analytics.models.records import LogCategory, ManualLog, SessionMetric, Sport, Workout


@pytest.fixture
def make_workout():
    """Factory for workouts with sensible defaults."""
    def _make(sport=Sport.RUN, day=date(2026, 5, 4), **kwargs):
        return Workout(sport=sport, date=day, **kwargs)
    return _make


@pytest.fixture
def make_log():
    """Factory for manual logs."""
    def _make(log_type, value, day=date(2026, 5, 4), category=LogCategory.PHYSIOLOGICAL):
        return ManualLog(date=day, category=category, log_type=log_type, value=value)
    return _make


@pytest.fixture
def make_samples():
    """Factory for one-minute session samples from parallel HR / power lists."""
    def _make(heart_rates, powers):
        return [
            SessionMetric(timestamp_offset_seconds=i * 60, heart_rate=hr, power_watts=pw)
            for i, (hr, pw) in enumerate(zip(heart_rates, powers))
        ]
    return _make


@pytest.fixture
def training_history():
    """
    Twelve weeks of consistent triathlon training starting Monday 2026-03-02.

    Per week: a 45 min swim (2500m, 108 s/100m), a 90 min ride (NP 200-211W),
    and a 50 min threshold run (10 km at 5:00/km, RPE 7).
    """
    start = date(2026, 3, 2)
    workouts = []
    for week in range(12):
        monday = start + timedelta(weeks=week)
        workouts.extend([
            Workout(
                id=f"swim-{week}",
                sport=Sport.SWIM,
                date=monday,
                duration_seconds=2700,
                distance_meters=2500,
                avg_hr=165,
                max_hr=176,
            ),
            Workout(
                id=f"bike-{week}",
                sport=Sport.BIKE,
                date=monday + timedelta(days=1),
                duration_seconds=5400,
                distance_meters=54000,
                avg_power_watts=190,
                normalized_power=200 + week,
                avg_hr=140,
                max_hr=170,
            ),
            Workout(
                id=f"run-{week}",
                sport=Sport.RUN,
                date=monday + timedelta(days=3),
                duration_seconds=3000,
                distance_meters=10000,
                avg_pace_sec_per_km=300,
                avg_hr=158,
                max_hr=182 if week == 5 else 176,
                rpe=7,
            ),
        ])
    return workouts


@pytest.fixture
def athlete_logs():
    """Resting HR, body weight and sweat rate logs for the training history athlete."""
    return [
        ManualLog(date=date(2026, 3, 2), category=LogCategory.PHYSIOLOGICAL, log_type="resting_hr", value=54),
        ManualLog(date=date(2026, 5, 20), category=LogCategory.PHYSIOLOGICAL, log_type="resting_hr", value=50),
        ManualLog(date=date(2026, 5, 20), category=LogCategory.PHYSIOLOGICAL, log_type="body_weight_kg", value=72),
        ManualLog(date=date(2026, 5, 1), category=LogCategory.PHYSIOLOGICAL, log_type="sweat_rate", value=1.2),
    ]
