"""Tests for qualification assessment."""

import pytest

from endurance_analytics.data.qualification_standards import (
    CHAMPIONSHIP_DISTANCES,
    CHAMPIONSHIP_LABELS,
    QUALIFICATION_STANDARDS,
    get_reference_standards,
)
from endurance_analytics.models.race_plan import (
    Confidence,
    FitnessSnapshot,
    GoalType,
    QualificationTarget,
    RaceDistance,
    STANDARD_DISTANCES,
    SportValues,
)
from endurance_analytics.models.records import QualificationStandard
from endurance_analytics.services.qualification import (
    assess_qualification_readiness,
    build_qualification_target,
    calculate_age_graded_time,
    calculate_pro_card_eligibility,
    find_standard,
    generate_qualification_pacing,
    get_qualification_explainer,
    goal_to_championship,
    is_qualification_competitive,
    is_qualification_goal,
)


def _standard(cutoff=36000, multiplier=1.045, year=2026, championship="kona"):
    return QualificationStandard(
        championship=championship,
        qualifying_year=year,
        gender="male",
        age_group="40-44",
        standard_multiplier=multiplier,
        estimated_cutoff_seconds=cutoff,
    )


FULL_SNAPSHOT = FitnessSnapshot(
    estimated_ftp=250,
    estimated_css=95,
    estimated_lthr=SportValues(run=165),
    weekly_volume_hours=12,
)


class TestGoals:
    """Tests for goal classification and championship mapping."""

    def test_qualification_goals(self):
        assert is_qualification_goal(GoalType.QUALIFY_IM_KONA)
        assert is_qualification_goal(GoalType.PRO_CARD_QUALIFICATION)
        assert not is_qualification_goal(GoalType.PR)

    def test_championship_mapping(self):
        assert goal_to_championship(GoalType.QUALIFY_IM_KONA) == "kona"
        assert goal_to_championship(GoalType.QUALIFY_IM_703_WORLDS) == "70.3_worlds"
        assert goal_to_championship(GoalType.FINISH) is None

    def test_world_triathlon_table_follows_distance(self):
        assert goal_to_championship(GoalType.QUALIFY_WT_AG_WORLDS, RaceDistance.SPRINT) == "wt_ag_sprint"
        assert goal_to_championship(GoalType.QUALIFY_WT_AG_WORLDS, RaceDistance.OLYMPIC) == "wt_ag_standard"

    def test_explainer(self):
        assert "age-graded" in get_qualification_explainer(GoalType.QUALIFY_IM_KONA)
        assert get_qualification_explainer(GoalType.PR) is None


class TestStandards:
    """Tests for reference standards and lookup."""

    def test_reference_table(self):
        kona = find_standard(QUALIFICATION_STANDARDS, "kona", "male", "40-44")
        assert kona.estimated_cutoff_seconds == 35800
        assert kona.standard_multiplier == 1.045
        wt = find_standard(QUALIFICATION_STANDARDS, "wt_ag_standard", "male", "40-44")
        assert wt.estimated_cutoff_seconds == 8160
        assert wt.standard_multiplier is None

    def test_every_championship_has_label_and_distances(self):
        for standard in get_reference_standards():
            assert standard.championship in CHAMPIONSHIP_LABELS
            assert standard.championship in CHAMPIONSHIP_DISTANCES

    def test_reference_copy_is_independent(self):
        standards = get_reference_standards()
        standards.clear()
        assert len(get_reference_standards()) == len(QUALIFICATION_STANDARDS)

    def test_latest_year_wins(self):
        standards = [_standard(cutoff=36500, year=2025), _standard(cutoff=36000, year=2026)]
        assert find_standard(standards, "kona", "male", "40-44").qualifying_year == 2026

    def test_missing_standard(self):
        assert find_standard(QUALIFICATION_STANDARDS, "kona", "male", "90-94") is None

    def test_build_target(self):
        target = build_qualification_target(_standard())
        assert target.estimated_qualifying_time == 36000
        assert target.ag_standard_source_year == 2026
        assert build_qualification_target(None) is None


class TestCompetitiveFlag:
    """Tests for age grading and the competitive flag."""

    def test_age_graded_time(self):
        assert calculate_age_graded_time(36000, 1.045) == 37620

    def test_within_margin(self):
        target = QualificationTarget(championship="kona", estimated_qualifying_time=10000, ag_standard_source_year=2026)
        assert is_qualification_competitive(10000, target, margin_pct=2.0) is True
        assert is_qualification_competitive(10150, target, margin_pct=2.0) is True
        assert is_qualification_competitive(10300, target, margin_pct=2.0) is False

    def test_no_cutoff(self):
        assert is_qualification_competitive(10000, None) is None
        target = QualificationTarget(championship="kona", ag_standard_source_year=2026)
        assert is_qualification_competitive(10000, target) is None


class TestReadiness:
    """Tests for readiness verdicts."""

    def test_short_of_standard(self):
        readiness = assess_qualification_readiness(37800, _standard(cutoff=36000), FULL_SNAPSHOT)
        assert readiness.gap_seconds == 1800
        assert readiness.ready is False
        assert any("30 minutes" in r for r in readiness.recommendations)
        assert "slower" in readiness.explanation

    def test_ahead_of_standard(self):
        readiness = assess_qualification_readiness(35000, _standard(cutoff=36000), FULL_SNAPSHOT)
        assert readiness.gap_seconds == -1000
        assert readiness.ready is True
        assert "faster" in readiness.explanation
        assert len(readiness.recommendations) == 2

    def test_exactly_on_standard_is_ready(self):
        readiness = assess_qualification_readiness(36000, _standard(cutoff=36000), FULL_SNAPSHOT)
        assert readiness.gap_seconds == 0
        assert readiness.ready is True

    def test_fraction_of_a_second_over_is_not_ready(self):
        readiness = assess_qualification_readiness(36000.9, _standard(cutoff=36000), FitnessSnapshot())
        assert readiness.gap_seconds == 1
        assert readiness.ready is False
        assert "slower" in readiness.explanation

    def test_fraction_of_a_second_under_is_ready(self):
        readiness = assess_qualification_readiness(35999.4, _standard(cutoff=36000), FitnessSnapshot())
        assert readiness.gap_seconds == 0
        assert readiness.ready is True

    @pytest.mark.parametrize("estimate", [30000, 35999, 36000, 36001, 42000])
    def test_ready_iff_gap_not_positive(self, estimate):
        readiness = assess_qualification_readiness(estimate, _standard(cutoff=36000), FULL_SNAPSHOT)
        assert readiness.ready == (readiness.gap_seconds <= 0)

    def test_missing_standard(self):
        readiness = assess_qualification_readiness(36000, None, FULL_SNAPSHOT)
        assert readiness.ready is False
        assert readiness.gap_seconds is None
        assert "without standards data" in readiness.explanation

    def test_age_graded_prefers_snapshot_multiplier(self):
        snapshot = FULL_SNAPSHOT.model_copy(update={"age_grading_multiplier": 1.1})
        readiness = assess_qualification_readiness(36000, _standard(), snapshot)
        assert readiness.age_graded_time == 39600
        fallback = assess_qualification_readiness(36000, _standard(), FULL_SNAPSHOT)
        assert fallback.age_graded_time == 37620

    def test_confidence_levels(self):
        assert assess_qualification_readiness(36000, _standard(), FULL_SNAPSHOT).confidence == Confidence.HIGH
        medium = FitnessSnapshot(estimated_ftp=250, estimated_css=95)
        assert assess_qualification_readiness(36000, _standard(), medium).confidence == Confidence.MEDIUM
        assert assess_qualification_readiness(36000, _standard(), FitnessSnapshot()).confidence == Confidence.LOW

    def test_recommendations_without_data(self):
        readiness = assess_qualification_readiness(37800, _standard(), FitnessSnapshot())
        assert any("power meter" in r for r in readiness.recommendations)
        assert any("Volume" in r for r in readiness.recommendations)


class TestQualificationPacing:
    """Tests for splits reverse-engineered from a qualifying time."""

    def test_splits_add_up(self):
        plan = generate_qualification_pacing(36000, STANDARD_DISTANCES[RaceDistance.IRONMAN], 38000)
        total = (
            plan.swim_split_target + plan.bike_split_target + plan.run_split_target
            + plan.t1_target + plan.t2_target
        )
        assert abs(total - 36000) <= 2
        assert plan.t1_target == 180
        assert plan.t2_target == 108
        assert plan.gap_to_current_fitness == 2000
        assert len(plan.recommendations) == 3

    def test_bike_is_longest_leg(self):
        plan = generate_qualification_pacing(36000, STANDARD_DISTANCES[RaceDistance.IRONMAN], 38000)
        assert plan.bike_split_target > plan.run_split_target > plan.swim_split_target

    def test_no_recommendations_when_already_fast_enough(self):
        plan = generate_qualification_pacing(36000, STANDARD_DISTANCES[RaceDistance.IRONMAN], 35000)
        assert plan.gap_to_current_fitness == -1000
        assert plan.recommendations == []


class TestProCard:
    """Tests for pro card eligibility."""

    def test_eligible(self):
        result = calculate_pro_card_eligibility(28000, 25000)
        assert result["eligible"] is True
        assert result["percentage_of_winner"] == 12.0

    def test_not_eligible(self):
        result = calculate_pro_card_eligibility(30000, 25000)
        assert result["eligible"] is False
        assert "10-15%" in result["explanation"]
