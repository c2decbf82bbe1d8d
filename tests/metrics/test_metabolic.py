"""Tests for metabolic floor analysis."""

from datetime import date

from endurance_analytics.metrics.metabolic import analyze_metabolic_floor, metabolic_ceiling
from endurance_analytics.models.records import LogCategory, Sport


def _ride(make_workout, day, avg_power, normalized_power, duration_seconds=7200):
    return make_workout(
        Sport.BIKE,
        day=day,
        duration_seconds=duration_seconds,
        avg_power_watts=avg_power,
        normalized_power=normalized_power,
    )


class TestMetabolicFloor:
    """Tests for the lowest carb rate that holds power steady."""

    def test_floor_is_lowest_stable_rate(self, make_workout, make_log):
        workouts = [
            _ride(make_workout, date(2026, 5, 2), 150, 180),  # 16.7% variability
            _ride(make_workout, date(2026, 5, 9), 180, 190),  # 5.3% variability
            _ride(make_workout, date(2026, 5, 16), 185, 195),
        ]
        logs = [
            make_log("carbs_g_per_hr", 40, day=date(2026, 5, 2), category=LogCategory.METABOLIC),
            make_log("carbs_g_per_hr", 60, day=date(2026, 5, 9), category=LogCategory.METABOLIC),
            make_log("carbs_g_per_hr", 90, day=date(2026, 5, 16), category=LogCategory.METABOLIC),
        ]
        result = analyze_metabolic_floor(workouts, logs)
        assert result.floor_estimate == 60
        assert len(result.data_points) == 3
        assert result.data_points[0].power_variability_pct == 16.7

    def test_short_or_unlogged_sessions_excluded(self, make_workout, make_log):
        workouts = [
            _ride(make_workout, date(2026, 5, 2), 180, 190, duration_seconds=3600),
            _ride(make_workout, date(2026, 5, 9), 180, 190),
        ]
        logs = [make_log("carbs_g_per_hr", 60, day=date(2026, 5, 2), category=LogCategory.METABOLIC)]
        result = analyze_metabolic_floor(workouts, logs)
        assert result.data_points == []
        assert result.floor_estimate is None

    def test_no_stable_session(self, make_workout, make_log):
        workouts = [_ride(make_workout, date(2026, 5, 2), 150, 180)]
        logs = [make_log("carbs_g_per_hr", 40, day=date(2026, 5, 2), category=LogCategory.METABOLIC)]
        assert analyze_metabolic_floor(workouts, logs).floor_estimate is None


class TestMetabolicCeiling:
    """Tests for the highest logged carb rate."""

    def test_ceiling(self, make_log):
        logs = [
            make_log("carbs_g_per_hr", 60, category=LogCategory.METABOLIC),
            make_log("carbs_g_per_hr", 95, category=LogCategory.METABOLIC),
        ]
        assert metabolic_ceiling(logs) == 95
        assert metabolic_ceiling([]) is None
