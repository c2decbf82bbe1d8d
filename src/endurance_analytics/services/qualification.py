"""Qualification assessment against championship standards.

This module handles:
- Mapping race goals to championships
- Standard lookup and qualification targets
- Age-graded times and the competitive flag
- Readiness verdicts with recommendations
- Reverse-engineered qualification pacing and pro card eligibility
"""

import logging
import math
from typing import Iterable, List, Optional

from ..models.race_plan import (
    Confidence,
    FitnessSnapshot,
    GoalType,
    PacingBucket,
    QualificationPacingPlan,
    QualificationReadiness,
    QualificationTarget,
    RaceDistance,
    RaceDistances,
    is_qualification_goal,
    pacing_bucket,
)
from ..models.records import QualificationStandard
from ..metrics.units import format_hours_minutes, format_pace


logger = logging.getLogger(__name__)

DEFAULT_QUALIFICATION_MARGIN_PCT = 2.0
COMFORTABLE_BUFFER_SECONDS = 600
# Rough conversions of a time gap into training targets
GAP_SECONDS_PER_FTP_WATT = 120
MAX_FTP_GAIN_WATTS = 30
GAP_SECONDS_PER_RUN_PACE_SECOND = 42
TARGET_WEEKLY_VOLUME_HOURS = 10
PRO_CARD_MAX_PCT_BEHIND_WINNER = 15.0

# Relative time cost per km of each leg
SWIM_TIME_WEIGHT = 1.8
BIKE_TIME_WEIGHT = 0.85
RUN_TIME_WEIGHT = 1.2

KONA_QUALIFICATION_EXPLAINER = (
    "IRONMAN uses a performance-based age-graded qualification system. Your finish time "
    "is multiplied by your age group's \"Kona Standard\" multiplier (based on the average "
    "of the top 20% of finishers in your AG over the past 5 years of Kona racing). The "
    "resulting age-graded time is ranked against ALL athletes in the race regardless of "
    "age or gender. Slots go to age group winners first (rolling to 3rd), then remaining "
    "slots fill from the performance pool."
)

IM703_QUALIFICATION_EXPLAINER = (
    "IRONMAN 70.3 uses the same age-graded system as Kona but with \"70.3 Standard\" "
    "benchmarks. 70.3 Worlds qualifies men and women separately (different race days). "
    "Your finish time x your AG multiplier = your age-graded time, ranked against all athletes."
)

WT_AG_QUALIFICATION_EXPLAINER = (
    "Qualification for World Triathlon Age Group Worlds is typically through national "
    "championships (e.g., USA Triathlon AG Nationals). Top 18 per age group at nationals, "
    "rolling to 30th place."
)

QUALIFICATION_EXPLAINERS = {
    GoalType.QUALIFY_IM_KONA: KONA_QUALIFICATION_EXPLAINER,
    GoalType.QUALIFY_IM_703_WORLDS: IM703_QUALIFICATION_EXPLAINER,
    GoalType.QUALIFY_WT_AG_WORLDS: WT_AG_QUALIFICATION_EXPLAINER,
}


def goal_to_championship(
    goal: GoalType,
    distance: Optional[RaceDistance] = None,
) -> Optional[str]:
    """
    Championship key for a qualification goal.

    World Triathlon AG goals resolve to the sprint standard for sprint
    distances and to the standard-distance table otherwise.

    Args:
        goal: Race goal
        distance: Race distance (selects the WT table)

    Returns:
        Championship key, or None for goals without a reference table
    """
    goal = GoalType(goal)
    if goal == GoalType.QUALIFY_IM_KONA:
        return "kona"
    if goal == GoalType.QUALIFY_IM_703_WORLDS:
        return "70.3_worlds"
    if goal == GoalType.QUALIFY_WT_AG_WORLDS:
        if distance is not None and pacing_bucket(distance) == PacingBucket.SPRINT:
            return "wt_ag_sprint"
        return "wt_ag_standard"
    return None


def find_standard(
    standards: Iterable[QualificationStandard],
    championship: str,
    gender: str,
    age_group: str,
) -> Optional[QualificationStandard]:
    """
    Find the standard for a championship, gender and age group.

    Args:
        standards: Reference standards
        championship: Championship key
        gender: Athlete gender
        age_group: Age group label, e.g. "40-44"

    Returns:
        The match with the latest qualifying year, or None
    """
    matches = [
        s for s in standards
        if s.championship == championship
        and s.gender == gender
        and s.age_group == age_group
    ]
    if not matches:
        logger.debug("No %s standard for %s %s", championship, gender, age_group)
        return None
    return max(matches, key=lambda s: s.qualifying_year)


def build_qualification_target(
    standard: Optional[QualificationStandard],
) -> Optional[QualificationTarget]:
    """Qualification target from a standard (None when no standard)."""
    if standard is None:
        return None
    return QualificationTarget(
        championship=standard.championship,
        standard_multiplier=standard.standard_multiplier,
        estimated_qualifying_time=standard.estimated_cutoff_seconds,
        ag_standard_source_year=standard.qualifying_year,
    )


def calculate_age_graded_time(finish_seconds: float, multiplier: float) -> int:
    """
    Age-graded finish time: finish_time x standard multiplier.

    Lower is more competitive.
    """
    return int(round(finish_seconds * multiplier))


def is_qualification_competitive(
    estimated_finish_seconds: int,
    target: Optional[QualificationTarget],
    margin_pct: float = DEFAULT_QUALIFICATION_MARGIN_PCT,
) -> Optional[bool]:
    """
    Whether an estimate is at or inside a margin of the qualifying cutoff.

    Args:
        estimated_finish_seconds: Realistic finish estimate
        target: Qualification target
        margin_pct: Allowed margin above the cutoff

    Returns:
        True/False, or None when there is no cutoff to compare against
    """
    if target is None or not target.estimated_qualifying_time:
        return None
    limit = target.estimated_qualifying_time * (1 + margin_pct / 100)
    return estimated_finish_seconds <= limit


def _confidence(snapshot: FitnessSnapshot) -> Confidence:
    indicators = snapshot.data_indicator_count()
    if indicators >= 3:
        return Confidence.HIGH
    elif indicators >= 2:
        return Confidence.MEDIUM
    return Confidence.LOW


def _gap_recommendations(gap: int, snapshot: FitnessSnapshot) -> List[str]:
    recommendations = []
    gap_min = int(round(gap / 60))
    plural = "" if gap_min == 1 else "s"
    recommendations.append(
        f"You need to improve your estimated finish by approximately {gap_min} minute{plural}."
    )

    if snapshot.estimated_ftp:
        watts = int(round(gap / GAP_SECONDS_PER_FTP_WATT))
        if watts > 0:
            recommendations.append(f"Bike: aim to increase FTP by ~{min(watts, MAX_FTP_GAIN_WATTS)}W.")
    else:
        recommendations.append("Bike: add power meter data to get specific FTP targets.")

    if snapshot.estimated_lthr.run:
        pace_gain = int(round(gap / GAP_SECONDS_PER_RUN_PACE_SECOND))
        if pace_gain > 0:
            recommendations.append(f"Run: improve pace by ~{pace_gain} sec/km.")
    else:
        recommendations.append("Run: add more run workouts with HR data for specific pace targets.")

    if not snapshot.weekly_volume_hours or snapshot.weekly_volume_hours < TARGET_WEEKLY_VOLUME_HOURS:
        recommendations.append("Volume: consider increasing weekly training to 10-14 hours.")
    return recommendations


def assess_qualification_readiness(
    estimated_finish_seconds: int,
    standard: Optional[QualificationStandard],
    snapshot: FitnessSnapshot,
) -> QualificationReadiness:
    """
    Assess readiness for a qualification standard.

    gap_seconds = estimated - target; positive means short of the standard,
    and ready holds exactly when the gap is zero or negative.

    Args:
        estimated_finish_seconds: Realistic finish estimate
        standard: Matching standard (None when no reference row exists)
        snapshot: Fitness snapshot backing the estimate

    Returns:
        QualificationReadiness
    """
    confidence = _confidence(snapshot)

    if standard is None or not standard.estimated_cutoff_seconds:
        return QualificationReadiness(
            ready=False,
            gap_seconds=None,
            confidence=confidence,
            recommendations=["Qualification standards not available for this age group."],
            explanation="Unable to assess qualification readiness without standards data.",
        )

    target_time = standard.estimated_cutoff_seconds
    # Partial seconds over the cutoff still count as short of it
    gap = int(math.ceil(estimated_finish_seconds - target_time))
    ready = gap <= 0

    multiplier = snapshot.age_grading_multiplier or standard.standard_multiplier
    age_graded = calculate_age_graded_time(estimated_finish_seconds, multiplier) if multiplier else None

    if ready:
        recommendations = ["Your current fitness supports this qualification goal!"]
        if gap < -COMFORTABLE_BUFFER_SECONDS:
            recommendations.append(
                "You have a comfortable buffer. Focus on execution and race-specific preparation."
            )
        explanation = (
            f"Your estimated finish of {format_hours_minutes(estimated_finish_seconds)} is "
            f"approximately {int(round(abs(gap) / 60))} minutes faster than the typical "
            f"qualifying cutoff of {format_hours_minutes(target_time)} for your age group. "
            f"Confidence: {confidence.value.upper()}."
        )
    else:
        recommendations = _gap_recommendations(gap, snapshot)
        explanation = (
            f"Your estimated finish of {format_hours_minutes(estimated_finish_seconds)} is "
            f"approximately {int(round(gap / 60))} minutes slower than recent qualifying "
            f"times of {format_hours_minutes(target_time)} for your age group. "
            f"Confidence: {confidence.value.upper()}."
        )

    logger.debug("Qualification gap %ds against %s (ready=%s)", gap, standard.championship, ready)
    return QualificationReadiness(
        ready=ready,
        gap_seconds=gap,
        confidence=confidence,
        age_graded_time=age_graded,
        target_time=target_time,
        recommendations=recommendations,
        explanation=explanation,
    )


def generate_qualification_pacing(
    target_finish_seconds: int,
    distances: RaceDistances,
    current_estimated_finish: int,
) -> QualificationPacingPlan:
    """
    Work backwards from a qualifying time to leg split targets.

    Leg time shares follow leg distance weighted by its relative time cost
    per km; transitions take 0.5% (T1, max 3 min) and 0.3% (T2, max 2 min).

    Args:
        target_finish_seconds: Qualifying time
        distances: Race leg distances
        current_estimated_finish: Realistic estimate from current fitness

    Returns:
        QualificationPacingPlan
    """
    swim_km = distances.swim_m / 1000
    total_km = swim_km + distances.bike_km + distances.run_km
    swim_share = swim_km / total_km * SWIM_TIME_WEIGHT
    bike_share = distances.bike_km / total_km * BIKE_TIME_WEIGHT
    run_share = distances.run_km / total_km * RUN_TIME_WEIGHT
    total_share = swim_share + bike_share + run_share

    t1 = int(round(min(180, target_finish_seconds * 0.005)))
    t2 = int(round(min(120, target_finish_seconds * 0.003)))
    race_time = target_finish_seconds - t1 - t2

    swim_target = int(round(race_time * swim_share / total_share))
    bike_target = int(round(race_time * bike_share / total_share))
    run_target = int(round(race_time * run_share / total_share))

    gap = current_estimated_finish - target_finish_seconds
    recommendations = []
    if gap > 0:
        swim_pace = swim_target / (distances.swim_m / 100)
        bike_kph = distances.bike_km / (bike_target / 3600)
        run_pace = run_target / distances.run_km
        recommendations = [
            f"Swim: target {format_pace(swim_pace)}/100m for a {swim_target // 60}min swim.",
            f"Bike: target {bike_kph:.1f} km/h average for a {format_hours_minutes(bike_target)} bike.",
            f"Run: target {format_pace(run_pace)}/km for a {format_hours_minutes(run_target)} run.",
        ]

    return QualificationPacingPlan(
        target_finish_seconds=target_finish_seconds,
        swim_split_target=swim_target,
        bike_split_target=bike_target,
        run_split_target=run_target,
        t1_target=t1,
        t2_target=t2,
        gap_to_current_fitness=gap,
        recommendations=recommendations,
    )


def calculate_pro_card_eligibility(
    estimated_finish_seconds: float,
    estimated_winner_seconds: float,
) -> dict:
    """
    Pro card eligibility: finishing within 15% of the projected winner.

    Args:
        estimated_finish_seconds: Athlete's estimated finish
        estimated_winner_seconds: Projected winning time

    Returns:
        Dict with eligible, percentage_of_winner and explanation
    """
    pct = (estimated_finish_seconds - estimated_winner_seconds) / estimated_winner_seconds * 100
    eligible = pct <= PRO_CARD_MAX_PCT_BEHIND_WINNER

    if eligible:
        explanation = (
            f"Your estimated finish is within {pct:.1f}% of the projected winner time. "
            "This is competitive for pro card consideration."
        )
    else:
        explanation = (
            f"Your estimated finish is {pct:.1f}% behind the projected winner time. "
            "Pro card typically requires finishing within 10-15% of the winner."
        )

    return {
        "eligible": eligible,
        "percentage_of_winner": round(pct, 1),
        "explanation": explanation,
    }


def get_qualification_explainer(goal: GoalType) -> Optional[str]:
    """How qualification works for a goal, or None for non-qualifying goals."""
    return QUALIFICATION_EXPLAINERS.get(GoalType(goal))


__all__ = [
    "assess_qualification_readiness",
    "build_qualification_target",
    "calculate_age_graded_time",
    "calculate_pro_card_eligibility",
    "find_standard",
    "generate_qualification_pacing",
    "get_qualification_explainer",
    "goal_to_championship",
    "is_qualification_competitive",
    "is_qualification_goal",
]
