"""Tests for the Fitness-Fatigue model (CTL / ATL / TSB)."""

import math
from datetime import date, timedelta

from endurance_analytics.metrics.fitness import (
    calculate_ewma,
    calculate_load_series,
    current_load,
    describe_form,
    weekly_volume,
)
from endurance_analytics.models.records import Sport


class TestEWMA:
    """Tests for the exponentially weighted moving average."""

    def test_single_step(self):
        result = calculate_ewma(100, 0, 42)
        expected = 100 * (1 - math.exp(-1 / 42))
        assert abs(result - expected) < 1e-12

    def test_constant_load_is_fixed_point(self):
        assert abs(calculate_ewma(50, 50, 7) - 50) < 1e-12


class TestLoadSeries:
    """Tests for the daily CTL/ATL/TSB series."""

    def test_empty_history(self):
        assert calculate_load_series([]) == []

    def test_every_calendar_day_covered(self, make_workout):
        workouts = [
            make_workout(day=date(2026, 5, 4), tss=60),
            make_workout(day=date(2026, 5, 8), tss=80),
        ]
        series = calculate_load_series(workouts)
        assert [p.date for p in series] == [date(2026, 5, 4) + timedelta(days=i) for i in range(5)]
        assert [p.daily_tss for p in series] == [60, 0, 0, 0, 80]

    def test_first_day_seeds_both_averages(self, make_workout):
        series = calculate_load_series([make_workout(tss=70)])
        assert series[0].ctl == 70
        assert series[0].atl == 70
        assert series[0].tsb == 0

    def test_tsb_is_exactly_ctl_minus_atl(self, training_history):
        for point in calculate_load_series(training_history):
            assert point.tsb == point.ctl - point.atl

    def test_loads_never_negative(self, training_history):
        for point in calculate_load_series(training_history):
            assert point.ctl >= 0
            assert point.atl >= 0

    def test_spike_moves_atl_more_than_ctl(self, make_workout):
        """A single hard day raises fatigue faster than fitness."""
        start = date(2026, 3, 2)
        steady = [make_workout(day=start + timedelta(days=i), tss=50) for i in range(30)]
        spike = make_workout(day=start + timedelta(days=30), tss=200)

        before = calculate_load_series(steady)[-1]
        after = calculate_load_series(steady + [spike])[-1]

        atl_rise = after.atl - before.atl
        ctl_rise = after.ctl - before.ctl
        assert atl_rise > ctl_rise > 0, f"ATL rise {atl_rise} should exceed CTL rise {ctl_rise}"

    def test_rest_days_decay_both_averages(self, make_workout):
        series = calculate_load_series([make_workout(tss=100)], end_date=date(2026, 5, 14))
        assert len(series) == 11
        assert series[-1].ctl < 100
        assert series[-1].atl < series[-1].ctl, "ATL decays faster than CTL"

    def test_end_date_before_history_does_not_truncate(self, make_workout):
        workouts = [make_workout(day=date(2026, 5, 4), tss=50), make_workout(day=date(2026, 5, 6), tss=50)]
        series = calculate_load_series(workouts, end_date=date(2026, 5, 1))
        assert series[-1].date == date(2026, 5, 6)

    def test_shorter_time_constant_reacts_faster(self, make_workout):
        workouts = [make_workout(day=date(2026, 5, 4), tss=0), make_workout(day=date(2026, 5, 5), tss=100)]
        fast = calculate_load_series(workouts, atl_time_constant=3)[-1]
        slow = calculate_load_series(workouts, atl_time_constant=10)[-1]
        assert fast.atl > slow.atl

    def test_current_load(self, make_workout):
        series = calculate_load_series([make_workout(tss=40)])
        assert current_load(series) is series[-1]
        assert current_load([]) is None

    def test_to_dict_rounds(self, make_workout):
        point = calculate_load_series([make_workout(tss=33.333)])[0]
        assert point.to_dict()["ctl"] == 33.3
        assert point.to_dict()["date"] == "2026-05-04"


class TestWeeklyVolume:
    """Tests for weekly training hours."""

    def test_groups_by_monday(self, make_workout):
        workouts = [
            make_workout(Sport.SWIM, day=date(2026, 5, 4), duration_seconds=3600),
            make_workout(Sport.BIKE, day=date(2026, 5, 6), duration_seconds=5400),
            make_workout(Sport.RUN, day=date(2026, 5, 11), duration_seconds=1800),
        ]
        assert weekly_volume(workouts) == [(date(2026, 5, 4), 2.5), (date(2026, 5, 11), 0.5)]


class TestDescribeForm:
    """Tests for TSB descriptions."""

    def test_bands(self):
        assert describe_form(30) == "fresh"
        assert describe_form(5) == "positive"
        assert describe_form(-5) == "neutral"
        assert describe_form(-20) == "fatigued"
        assert describe_form(-40) == "very fatigued"
