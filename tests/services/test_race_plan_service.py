"""Tests for the race plan service."""

from datetime import date

import pytest

from endurance_analytics.config import Settings
from endurance_analytics.data.qualification_standards import get_reference_standards
from endurance_analytics.models.race_plan import (
    AthleteClassification,
    GoalType,
    RaceConditions,
    RaceDistance,
)
from endurance_analytics.services.race_plan_service import (
    RacePlanService,
    get_race_plan_service,
)


AS_OF = date(2026, 5, 25)


@pytest.fixture
def service():
    return RacePlanService(settings=Settings())


class TestFitnessSnapshot:
    """Tests for snapshot construction from workouts and logs."""

    def test_estimates(self, service, training_history, athlete_logs):
        snapshot = service.build_fitness_snapshot(training_history, athlete_logs, as_of=AS_OF)
        assert snapshot.estimated_ftp == 200
        assert snapshot.estimated_css == 108
        assert snapshot.estimated_lthr.run == 158
        assert snapshot.estimated_lthr.bike is None
        assert snapshot.max_hr == 182
        assert snapshot.resting_hr == 50
        assert snapshot.weight_kg == 72
        assert snapshot.workout_count == 36

    def test_lactate_thresholds(self, service, training_history, athlete_logs):
        snapshot = service.build_fitness_snapshot(training_history, athlete_logs, as_of=AS_OF)
        assert snapshot.lt1_hr == 142
        assert snapshot.lt2_hr == 162

    def test_weekly_volume(self, service, training_history, athlete_logs):
        snapshot = service.build_fitness_snapshot(training_history, athlete_logs, as_of=AS_OF)
        assert snapshot.weekly_volume_hours == 3.1

    def test_load_values(self, service, training_history, athlete_logs):
        snapshot = service.build_fitness_snapshot(training_history, athlete_logs, as_of=AS_OF)
        assert snapshot.ctl > 0
        assert abs(snapshot.tsb - (snapshot.ctl - snapshot.atl)) <= 0.15, (
            f"TSB {snapshot.tsb} should equal CTL {snapshot.ctl} - ATL {snapshot.atl}"
        )

    def test_recent_paces(self, service, training_history, athlete_logs):
        snapshot = service.build_fitness_snapshot(training_history, athlete_logs, as_of=AS_OF)
        assert snapshot.recent_race_pace.run_sec_per_km == 300
        assert abs(snapshot.recent_race_pace.bike_kph - 36.0) < 0.01

    def test_as_of_ignores_later_records(self, service, training_history, athlete_logs):
        snapshot = service.build_fitness_snapshot(training_history, athlete_logs, as_of=date(2026, 3, 31))
        assert snapshot.workout_count == 14
        assert snapshot.max_hr == 176
        assert snapshot.resting_hr == 54
        assert snapshot.estimated_ftp == 194
        assert snapshot.weight_kg is None

    def test_standard_multiplier(self, service, training_history, athlete_logs):
        standard = get_reference_standards()[0]
        snapshot = service.build_fitness_snapshot(training_history, athlete_logs, standard, AS_OF)
        assert snapshot.age_grading_multiplier == standard.standard_multiplier

    def test_empty_history(self, service):
        snapshot = service.build_fitness_snapshot([], [])
        assert snapshot.workout_count == 0
        assert snapshot.estimated_ftp is None
        assert snapshot.lt1_hr is None
        assert snapshot.data_indicator_count() == 0


class TestFullRacePlan:
    """Tests for complete plan generation."""

    def test_estimates_ordered(self, service, training_history, athlete_logs):
        plan = service.generate_full_race_plan(
            training_history, athlete_logs, RaceDistance.OLYMPIC, GoalType.PR, "City Tri", as_of=AS_OF
        )
        assert plan.estimated_finish_optimistic <= plan.estimated_finish_seconds <= plan.estimated_finish_conservative
        assert plan.estimated_finish_seconds == plan.pacing_plan.total_estimate.realistic_seconds

    def test_nutrition_matches_pacing(self, service, training_history, athlete_logs):
        plan = service.generate_full_race_plan(
            training_history, athlete_logs, RaceDistance.OLYMPIC, GoalType.PR, "City Tri", as_of=AS_OF
        )
        bike_hours = plan.pacing_plan.bike.estimated_split_seconds / 3600
        assert plan.nutrition_plan.summary.bike_carbs_grams == int(round(45 * bike_hours))
        assert plan.nutrition_plan.race_morning.meal_target.startswith("72-144g")
        assert "1.2L/hr" in plan.nutrition_plan.bike.hydration_per_hour

    def test_sweat_rate_respects_as_of(self, service, training_history, athlete_logs):
        plan = service.generate_full_race_plan(
            training_history, athlete_logs, RaceDistance.OLYMPIC, GoalType.PR, "City Tri",
            as_of=date(2026, 4, 15),
        )
        assert "sweat rate" not in plan.nutrition_plan.bike.hydration_per_hour

    def test_deterministic(self, service, training_history, athlete_logs):
        kwargs = dict(
            distance=RaceDistance.HALF_IRONMAN,
            goal_type=GoalType.QUALIFY_IM_703_WORLDS,
            race_name="70.3 Lake",
            conditions=RaceConditions(temp_high_c=29, humidity_pct=75),
            standards=get_reference_standards(),
            gender="male",
            age_group="40-44",
            as_of=AS_OF,
        )
        first = service.generate_full_race_plan(training_history, athlete_logs, **kwargs)
        second = service.generate_full_race_plan(training_history, athlete_logs, **kwargs)
        assert first == second

    def test_non_qualification_goal(self, service, training_history, athlete_logs):
        plan = service.generate_full_race_plan(
            training_history, athlete_logs, RaceDistance.OLYMPIC, GoalType.FINISH, "City Tri",
            standards=get_reference_standards(), gender="male", age_group="40-44", as_of=AS_OF,
        )
        assert plan.qualification_target is None
        assert plan.qualification_readiness is None
        assert plan.estimated_qualification_competitive is None

    def test_pro_tactics(self, service, training_history, athlete_logs):
        plan = service.generate_full_race_plan(
            training_history, athlete_logs, RaceDistance.IRONMAN, GoalType.IM_PRO_SLOT, "IM Lake",
            classification=AthleteClassification.PROFESSIONAL, as_of=AS_OF,
        )
        assert plan.mindset_plan.pro_tactics
        assert plan.athlete_classification == AthleteClassification.PROFESSIONAL

    def test_race_date_dates_timeline(self, service, training_history, athlete_logs):
        plan = service.generate_full_race_plan(
            training_history, athlete_logs, RaceDistance.SPRINT, GoalType.FINISH, "Sprint",
            race_date=date(2026, 6, 14), as_of=AS_OF,
        )
        timeline = plan.equipment_plan.race_week_timeline
        assert timeline[0].date == date(2026, 6, 7)
        assert timeline[-1].date == date(2026, 6, 14)

    def test_empty_history_uses_defaults(self, service):
        plan = service.generate_full_race_plan([], [], RaceDistance.OLYMPIC, GoalType.FINISH, "First Tri")
        assert plan.pacing_plan.swim.data_available is False
        assert plan.pacing_plan.bike.data_available is False
        assert plan.pacing_plan.run.data_available is False
        assert plan.estimated_finish_seconds > 0
        assert plan.fitness_snapshot.workout_count == 0

    def test_string_enums_accepted(self, service):
        plan = service.generate_full_race_plan([], [], "sprint", "pr", "Sprint")
        assert plan.race_distance == RaceDistance.SPRINT
        assert plan.goal_type == GoalType.PR


class TestQualificationPlan:
    """Tests for qualification goals inside a full plan."""

    def _plan(self, service, training_history, athlete_logs, **kwargs):
        params = dict(
            distance=RaceDistance.HALF_IRONMAN,
            goal_type=GoalType.QUALIFY_IM_703_WORLDS,
            race_name="70.3 Lake",
            standards=get_reference_standards(),
            gender="male",
            age_group="40-44",
            as_of=AS_OF,
        )
        params.update(kwargs)
        return service.generate_full_race_plan(training_history, athlete_logs, **params)

    def test_target_and_readiness(self, service, training_history, athlete_logs):
        plan = self._plan(service, training_history, athlete_logs)
        assert plan.qualification_target.championship == "70.3_worlds"
        assert plan.qualification_target.estimated_qualifying_time == 17300
        readiness = plan.qualification_readiness
        assert readiness.gap_seconds == plan.estimated_finish_seconds - 17300
        assert readiness.ready == (readiness.gap_seconds <= 0)

    def test_competitive_flag(self, service, training_history, athlete_logs):
        plan = self._plan(service, training_history, athlete_logs)
        expected = plan.estimated_finish_seconds <= 17300 * 1.02
        assert plan.estimated_qualification_competitive == expected

    def test_age_graded_estimate(self, service, training_history, athlete_logs):
        plan = self._plan(service, training_history, athlete_logs)
        snapshot = plan.fitness_snapshot
        assert snapshot.age_grading_multiplier == 1.035
        assert snapshot.age_graded_estimate == int(round(plan.estimated_finish_seconds * 1.035))

    def test_qualification_pacing_attached(self, service, training_history, athlete_logs):
        plan = self._plan(service, training_history, athlete_logs)
        qualification_pacing = plan.pacing_plan.qualification_pacing
        assert qualification_pacing.target_finish_seconds == 17300

    def test_without_gender_no_standard(self, service, training_history, athlete_logs):
        plan = self._plan(service, training_history, athlete_logs, gender=None, age_group=None)
        assert plan.qualification_target is None
        assert plan.qualification_readiness.gap_seconds is None
        assert plan.qualification_readiness.ready is False
        assert plan.estimated_qualification_competitive is None

    def test_unknown_age_group(self, service, training_history, athlete_logs):
        plan = self._plan(service, training_history, athlete_logs, age_group="95-99")
        assert plan.qualification_target is None
        assert plan.qualification_readiness.gap_seconds is None


class TestRegenerate:
    """Tests for plan regeneration."""

    def test_keeps_identity(self, service, training_history, athlete_logs):
        plan = service.generate_full_race_plan(
            training_history, athlete_logs, RaceDistance.OLYMPIC, GoalType.PR, "City Tri",
            race_date=date(2026, 7, 5), as_of=date(2026, 4, 30), plan_id="plan-42",
        )
        fresh = service.regenerate_race_plan(plan, training_history, athlete_logs, as_of=AS_OF)
        assert fresh.id == "plan-42"
        assert fresh.race_name == plan.race_name
        assert fresh.race_date == plan.race_date
        assert fresh.fitness_snapshot.workout_count > plan.fitness_snapshot.workout_count

    def test_new_conditions(self, service):
        plan = service.generate_full_race_plan([], [], RaceDistance.OLYMPIC, GoalType.PR, "City Tri")
        hot = RaceConditions(temp_high_c=33)
        fresh = service.regenerate_race_plan(plan, [], [], conditions=hot)
        assert fresh.conditions == hot
        assert fresh.pacing_plan.run.heat_adjustment_pct > 0


class TestSingleton:
    """Tests for the shared service."""

    def test_same_instance(self):
        assert get_race_plan_service() is get_race_plan_service()
