"""Tests for readiness, CNS fatigue and life stress."""

from datetime import date, timedelta

from endurance_analytics.config import get_settings
from endurance_analytics.metrics.readiness import (
    CNSStatus,
    calculate_readiness,
    detect_cns_fatigue,
    life_stress_average,
    readiness_label,
)
from endurance_analytics.models.records import Sport


AS_OF = date(2026, 6, 10)


class TestCNSFatigue:
    """Tests for RPE-HR dissociation detection."""

    def _dissociated(self, make_workout, days_ago):
        return make_workout(Sport.RUN, day=AS_OF - timedelta(days=days_ago), rpe=8, avg_hr=120)

    def test_optimal_without_flags(self, make_workout):
        workouts = [make_workout(Sport.RUN, day=AS_OF, rpe=8, avg_hr=170)]
        result = detect_cns_fatigue(workouts, AS_OF)
        assert result.status == CNSStatus.OPTIMAL
        assert result.flagged_workouts == []

    def test_warning_with_one_flag(self, make_workout):
        result = detect_cns_fatigue([self._dissociated(make_workout, 2)], AS_OF)
        assert result.status == CNSStatus.WARNING

    def test_fatigued_with_three_flags(self, make_workout):
        workouts = [self._dissociated(make_workout, d) for d in (1, 3, 5)]
        result = detect_cns_fatigue(workouts, AS_OF)
        assert result.status == CNSStatus.FATIGUED
        assert len(result.flagged_workouts) == 3

    def test_old_sessions_ignored(self, make_workout):
        workouts = [self._dissociated(make_workout, d) for d in (9, 12, 20)]
        assert detect_cns_fatigue(workouts, AS_OF).status == CNSStatus.OPTIMAL

    def test_max_hr_changes_ceiling(self, make_workout):
        """120 bpm is low effort for max 185 but not for max 150."""
        workouts = [self._dissociated(make_workout, 1)]
        assert detect_cns_fatigue(workouts, AS_OF, max_hr=150).status == CNSStatus.OPTIMAL


class TestLifeStress:
    """Tests for the 7-day life stress average."""

    def test_average(self, make_log):
        logs = [
            make_log("life_stress", 4, day=AS_OF - timedelta(days=1)),
            make_log("life_stress", 6, day=AS_OF - timedelta(days=3)),
            make_log("life_stress", 10, day=AS_OF - timedelta(days=30)),
        ]
        assert life_stress_average(logs, AS_OF) == 5.0

    def test_no_logs(self):
        assert life_stress_average([], AS_OF) is None


class TestReadinessScore:
    """Tests for the weighted readiness composite."""

    def test_defaults_without_data(self):
        result = calculate_readiness([], [], AS_OF)
        assert result.breakdown == {"tsb": 50, "hrv": 70, "sleep": 70, "stress": 60, "cns": 100}
        assert 65 <= result.score <= 66

    def test_good_sleep_raises_score(self, make_log):
        good = calculate_readiness([], [make_log("sleep_quality", 9, day=AS_OF)], AS_OF)
        poor = calculate_readiness([], [make_log("sleep_quality", 3, day=AS_OF)], AS_OF)
        assert good.score > poor.score
        assert good.breakdown["sleep"] == 90

    def test_high_stress_lowers_score(self, make_log):
        calm = calculate_readiness([], [make_log("life_stress", 2, day=AS_OF)], AS_OF)
        stressed = calculate_readiness([], [make_log("life_stress", 9, day=AS_OF)], AS_OF)
        assert calm.score > stressed.score

    def test_heavy_block_lowers_tsb_component(self, make_workout):
        block = [make_workout(day=AS_OF - timedelta(days=d), tss=40 if d > 5 else 150) for d in range(30)]
        result = calculate_readiness(block, [], AS_OF)
        assert result.breakdown["tsb"] < 50

    def test_configured_time_constants(self, make_workout, monkeypatch):
        """ENDURANCE_* load time constants drive the TSB component."""
        block = [make_workout(day=AS_OF - timedelta(days=d), tss=40 if d > 1 else 150) for d in range(30)]
        default = calculate_readiness(block, [], AS_OF, ctl_time_constant=42, atl_time_constant=7)
        explicit = calculate_readiness(block, [], AS_OF, ctl_time_constant=60, atl_time_constant=14)

        monkeypatch.setenv("ENDURANCE_CTL_TIME_CONSTANT", "60")
        monkeypatch.setenv("ENDURANCE_ATL_TIME_CONSTANT", "14")
        get_settings.cache_clear()
        try:
            configured = calculate_readiness(block, [], AS_OF)
        finally:
            monkeypatch.undo()
            get_settings.cache_clear()

        assert configured.breakdown == explicit.breakdown
        assert configured.breakdown["tsb"] > default.breakdown["tsb"]

    def test_score_in_range(self, training_history, athlete_logs):
        result = calculate_readiness(training_history, athlete_logs, date(2026, 5, 25))
        assert 0 <= result.score <= 100
        assert result.to_dict()["label"] == readiness_label(result.score)


class TestReadinessLabel:
    """Tests for readiness labels."""

    def test_labels(self):
        assert readiness_label(85) == "Ready to perform"
        assert readiness_label(65) == "Moderate, train normally"
        assert readiness_label(45) == "Low, easy day recommended"
        assert readiness_label(20) == "Rest day recommended"
