"""Race plan service for generating complete race plans.

This service handles:
- Fitness snapshot construction from workouts and manual logs
- Qualification standard lookup and readiness assessment
- Full race plan generation (pacing, nutrition, equipment, mindset)
- Regeneration of an existing plan with fresh data
"""

import logging
from datetime import date
from typing import Iterable, List, Optional

from ..config import Settings, get_settings
from ..metrics.fitness import calculate_load_series, weekly_volume
from ..metrics.load import LoadThresholds
from ..metrics.threshold import (
    derive_max_hr,
    derive_resting_hr,
    estimate_lactate_thresholds,
    validate_hr_inputs,
)
from ..models.race_plan import (
    AthleteClassification,
    CustomDistances,
    FitnessSnapshot,
    GoalType,
    RaceConditions,
    RaceDistance,
    RacePlan,
    RecentRacePace,
    SportValues,
    is_qualification_goal,
)
from ..models.records import (
    ManualLog,
    QualificationStandard,
    Sport,
    Workout,
    latest_log_value,
)
from .equipment import generate_equipment_plan
from .mindset import generate_mindset_plan
from .nutrition import generate_nutrition_plan
from .pacing import (
    estimate_css_from_workouts,
    estimate_ftp_from_workouts,
    estimate_lthr,
    generate_pacing_plan,
    recent_bike_speed,
    recent_run_pace,
    recent_swim_pace,
)
from .qualification import (
    assess_qualification_readiness,
    build_qualification_target,
    calculate_age_graded_time,
    find_standard,
    goal_to_championship,
    is_qualification_competitive,
)


logger = logging.getLogger(__name__)

# Weekly volume is averaged over the most recent weeks of training
VOLUME_WEEKS = 8


class RacePlanService:
    """Service for generating triathlon race plans."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.logger = logging.getLogger(self.__class__.__name__)

    def build_fitness_snapshot(
        self,
        workouts: List[Workout],
        logs: List[ManualLog],
        standard: Optional[QualificationStandard] = None,
        as_of: Optional[date] = None,
    ) -> FitnessSnapshot:
        """
        Build a fitness snapshot from all available data.

        Args:
            workouts: Workout history
            logs: Manual logs (resting_hr, body_weight_kg, ...)
            standard: Matching qualification standard (age-grading multiplier)
            as_of: Ignore records after this date

        Returns:
            Frozen FitnessSnapshot
        """
        if as_of is not None:
            workouts = [w for w in workouts if w.date <= as_of]
            logs = [log for log in logs if log.date <= as_of]

        max_hr = derive_max_hr(workouts)
        resting_hr = derive_resting_hr(logs)

        lt1 = lt2 = None
        if validate_hr_inputs(max_hr, resting_hr) is None:
            estimate = estimate_lactate_thresholds(
                max_hr,
                resting_hr,
                lt1_fraction=self.settings.lt1_hrr_fraction,
                lt2_fraction=self.settings.lt2_hrr_fraction,
                zone1_fraction=self.settings.zone1_ceiling_fraction,
                zone4_fraction=self.settings.zone4_ceiling_fraction,
            )
            lt1, lt2 = estimate.lt1, estimate.lt2

        ftp = estimate_ftp_from_workouts(workouts)
        css = estimate_css_from_workouts(workouts, max_hr)
        lthr = SportValues(
            swim=estimate_lthr(workouts, Sport.SWIM),
            bike=estimate_lthr(workouts, Sport.BIKE),
            run=estimate_lthr(workouts, Sport.RUN),
        )

        volumes = weekly_volume(workouts)[-VOLUME_WEEKS:]
        avg_hours = round(sum(h for _, h in volumes) / len(volumes), 1) if volumes else None

        thresholds = LoadThresholds(
            ftp_watts=ftp or self.settings.reference_ftp_watts,
            run_threshold_pace_sec_per_km=self.settings.reference_run_threshold_pace_sec_per_km,
            css_sec_per_100m=css or self.settings.reference_css_sec_per_100m,
            lthr=lthr.run or lt2,
        )
        series = calculate_load_series(
            workouts,
            thresholds,
            ctl_time_constant=self.settings.ctl_time_constant,
            atl_time_constant=self.settings.atl_time_constant,
            end_date=as_of,
        )
        latest = series[-1] if series else None

        snapshot = FitnessSnapshot(
            estimated_ftp=ftp,
            estimated_css=int(round(css)) if css else None,
            estimated_lthr=lthr,
            max_hr=max_hr,
            resting_hr=resting_hr,
            lt1_hr=lt1,
            lt2_hr=lt2,
            weekly_volume_hours=avg_hours,
            recent_race_pace=RecentRacePace(
                swim_sec_per_100m=recent_swim_pace(workouts),
                bike_kph=recent_bike_speed(workouts),
                run_sec_per_km=recent_run_pace(workouts),
            ),
            weight_kg=latest_log_value(logs, "body_weight_kg"),
            age_grading_multiplier=standard.standard_multiplier if standard else None,
            ctl=round(latest.ctl, 1) if latest else None,
            atl=round(latest.atl, 1) if latest else None,
            tsb=round(latest.tsb, 1) if latest else None,
            workout_count=len(workouts),
        )
        self.logger.debug(
            "Snapshot from %d workouts: FTP=%s CSS=%s LTHR(run)=%s",
            len(workouts), snapshot.estimated_ftp, snapshot.estimated_css, lthr.run,
        )
        return snapshot

    def generate_full_race_plan(
        self,
        workouts: Iterable[Workout],
        logs: Iterable[ManualLog],
        distance: RaceDistance,
        goal_type: GoalType,
        race_name: str,
        conditions: Optional[RaceConditions] = None,
        classification: AthleteClassification = AthleteClassification.AGE_GROUPER,
        standards: Optional[Iterable[QualificationStandard]] = None,
        gender: Optional[str] = None,
        age_group: Optional[str] = None,
        custom_distances: Optional[CustomDistances] = None,
        race_date: Optional[date] = None,
        as_of: Optional[date] = None,
        plan_id: Optional[str] = None,
    ) -> RacePlan:
        """
        Generate a complete race plan.

        Identical inputs always produce an identical plan: nothing here reads
        the clock or draws random numbers.

        Args:
            workouts: Workout history
            logs: Manual logs
            distance: Race distance
            goal_type: Race goal
            race_name: Race name (used in the visualization script)
            conditions: Expected race conditions
            classification: Age grouper or professional
            standards: Qualification standards to search
            gender: Athlete gender (qualification lookup)
            age_group: Athlete age group (qualification lookup)
            custom_distances: Leg distances for custom races
            race_date: Race date (dates the race-week timeline)
            as_of: Ignore records after this date
            plan_id: Identifier carried by the plan

        Returns:
            RacePlan
        """
        distance = RaceDistance(distance)
        goal_type = GoalType(goal_type)
        classification = AthleteClassification(classification)
        workouts = list(workouts)
        logs = list(logs)

        self.logger.info(
            f"Generating {distance.value} race plan for '{race_name}' (goal: {goal_type.value})"
        )

        standard = None
        target = None
        championship = goal_to_championship(goal_type, distance)
        if championship and gender and age_group:
            standard = find_standard(standards or [], championship, gender, age_group)
            target = build_qualification_target(standard)
            if standard is None:
                self.logger.warning(
                    f"No {championship} standard for {gender} {age_group}"
                )

        snapshot = self.build_fitness_snapshot(workouts, logs, standard, as_of)
        pacing = generate_pacing_plan(
            distance,
            conditions,
            snapshot,
            classification,
            qualification_target=target,
            custom_distances=custom_distances,
        )
        realistic = pacing.total_estimate.realistic_seconds

        if standard and standard.standard_multiplier and realistic > 0:
            snapshot = snapshot.model_copy(update={
                "age_graded_estimate": calculate_age_graded_time(realistic, standard.standard_multiplier),
            })

        readiness = None
        competitive = None
        if is_qualification_goal(goal_type) and realistic > 0:
            readiness = assess_qualification_readiness(realistic, standard, snapshot)
            competitive = is_qualification_competitive(
                realistic, target, self.settings.qualification_margin_pct
            )

        if as_of is not None:
            logs = [log for log in logs if log.date <= as_of]
        sweat_rate = latest_log_value(logs, "sweat_rate")

        nutrition = generate_nutrition_plan(
            distance,
            snapshot.weight_kg,
            conditions,
            sweat_rate,
            pacing.bike.estimated_split_seconds,
            pacing.run.estimated_split_seconds,
            classification,
        )
        equipment = generate_equipment_plan(distance, conditions, race_date)
        mindset = generate_mindset_plan(goal_type, distance, race_name, classification)

        return RacePlan(
            id=plan_id,
            race_name=race_name,
            race_date=race_date,
            race_distance=distance,
            goal_type=goal_type,
            athlete_classification=classification,
            gender=gender,
            age_group=age_group,
            custom_distances=custom_distances,
            conditions=conditions,
            pacing_plan=pacing,
            nutrition_plan=nutrition,
            equipment_plan=equipment,
            mindset_plan=mindset,
            fitness_snapshot=snapshot,
            estimated_finish_seconds=realistic,
            estimated_finish_optimistic=pacing.total_estimate.optimistic_seconds,
            estimated_finish_conservative=pacing.total_estimate.conservative_seconds,
            qualification_target=target,
            estimated_qualification_competitive=competitive,
            qualification_readiness=readiness,
        )

    def regenerate_race_plan(
        self,
        plan: RacePlan,
        workouts: Iterable[Workout],
        logs: Iterable[ManualLog],
        standards: Optional[Iterable[QualificationStandard]] = None,
        conditions: Optional[RaceConditions] = None,
        as_of: Optional[date] = None,
    ) -> RacePlan:
        """
        Regenerate a plan with fresh data, keeping its identity and race setup.

        Args:
            plan: Existing plan
            workouts: Current workout history
            logs: Current manual logs
            standards: Qualification standards
            conditions: Updated conditions (plan's conditions if None)
            as_of: Ignore records after this date

        Returns:
            New RacePlan with the same id
        """
        self.logger.info(f"Regenerating race plan {plan.id} ('{plan.race_name}')")
        return self.generate_full_race_plan(
            workouts,
            logs,
            distance=plan.race_distance,
            goal_type=plan.goal_type,
            race_name=plan.race_name,
            conditions=conditions if conditions is not None else plan.conditions,
            classification=plan.athlete_classification,
            standards=standards,
            gender=plan.gender,
            age_group=plan.age_group,
            custom_distances=plan.custom_distances,
            race_date=plan.race_date,
            as_of=as_of,
            plan_id=plan.id,
        )


# Singleton instance
_race_plan_service: Optional[RacePlanService] = None


def get_race_plan_service() -> RacePlanService:
    """Get the race plan service singleton."""
    global _race_plan_service
    if _race_plan_service is None:
        _race_plan_service = RacePlanService()
    return _race_plan_service


def build_fitness_snapshot(
    workouts: List[Workout],
    logs: List[ManualLog],
    standard: Optional[QualificationStandard] = None,
    as_of: Optional[date] = None,
) -> FitnessSnapshot:
    return get_race_plan_service().build_fitness_snapshot(workouts, logs, standard, as_of)


def generate_full_race_plan(*args, **kwargs) -> RacePlan:
    """Generate a race plan with the shared service (see RacePlanService)."""
    return get_race_plan_service().generate_full_race_plan(*args, **kwargs)


def regenerate_race_plan(*args, **kwargs) -> RacePlan:
    """Regenerate a race plan with the shared service (see RacePlanService)."""
    return get_race_plan_service().regenerate_race_plan(*args, **kwargs)
