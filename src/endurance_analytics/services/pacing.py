"""Triathlon race pacing.

This module handles:
- Fitness estimation from workout history (FTP, CSS, LTHR, recent paces)
- Condition adjustments (heat/humidity, altitude, course profile, wetsuit)
- Per-leg pacing (swim, bike, run) and transition targets
- The three-point finish time estimate
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from ..models.race_plan import (
    AthleteClassification,
    BikePacing,
    CourseProfile,
    CustomDistances,
    FitnessSnapshot,
    PacingBucket,
    PacingPlan,
    QualificationTarget,
    RaceConditions,
    RaceDistance,
    RaceDistances,
    RaceEstimate,
    RunPacing,
    SwimPacing,
    TransitionTargets,
    is_draft_legal,
    is_long_course,
    pacing_bucket,
    resolve_distances,
)
from ..models.records import Sport, Workout
from .qualification import generate_qualification_pacing


logger = logging.getLogger(__name__)


# Workouts must be at least this long to count as threshold efforts
MIN_THRESHOLD_EFFORT_SECONDS = 1200
MIN_CSS_SWIM_SECONDS = 600
CSS_MIN_HR_FRACTION = 0.85
FTP_FROM_BEST_EFFORT = 0.95
LTHR_MIN_RPE = 7
RECENT_SESSION_COUNT = 5

# Defaults by classification when training data is missing
DEFAULT_CSS: Dict[AthleteClassification, int] = {
    AthleteClassification.PROFESSIONAL: 75,
    AthleteClassification.AGE_GROUPER: 105,
}
DEFAULT_FTP: Dict[AthleteClassification, int] = {
    AthleteClassification.PROFESSIONAL: 300,
    AthleteClassification.AGE_GROUPER: 180,
}
DEFAULT_RUN_PACE: Dict[AthleteClassification, int] = {
    AthleteClassification.PROFESSIONAL: 255,
    AthleteClassification.AGE_GROUPER: 330,
}

# Heat: +1.4% per degree above 24C, humidity +0.5% per 10% above 60% when hot
HEAT_THRESHOLD_C = 24.0
HEAT_PCT_PER_DEGREE = 1.4
HUMIDITY_THRESHOLD_PCT = 60.0
HUMIDITY_PCT_PER_10 = 0.5
MAX_HEAT_ADJUSTMENT_PCT = 15.0

# Altitude: +6.5% per 1000m above 900m
ALTITUDE_THRESHOLD_M = 900.0
ALTITUDE_PCT_PER_1000M = 6.5
MAX_ALTITUDE_ADJUSTMENT_PCT = 15.0

COURSE_VARIANCE_PCT: Dict[CourseProfile, float] = {
    CourseProfile.FLAT: 5.0,
    CourseProfile.ROLLING: 8.0,
    CourseProfile.HILLY: 12.0,
    CourseProfile.MOUNTAINOUS: 15.0,
}

NON_WETSUIT_SWIM_PCT = 4.0
WETSUIT_CUTOFF_WATER_C = 24.5

SWIM_CSS_OFFSET: Dict[PacingBucket, int] = {
    PacingBucket.SPRINT: -3,
    PacingBucket.OLYMPIC: 0,
    PacingBucket.HALF_IRONMAN: 3,
    PacingBucket.IRONMAN: 7,
}

BIKE_INTENSITY: Dict[PacingBucket, Tuple[float, float]] = {
    PacingBucket.SPRINT: (0.95, 1.05),
    PacingBucket.OLYMPIC: (0.85, 0.95),
    PacingBucket.HALF_IRONMAN: (0.70, 0.80),
    PacingBucket.IRONMAN: (0.65, 0.75),
}

RUN_PACE_MULTIPLIER: Dict[PacingBucket, float] = {
    PacingBucket.SPRINT: 0.95,
    PacingBucket.OLYMPIC: 1.0,
    PacingBucket.HALF_IRONMAN: 1.10,
    PacingBucket.IRONMAN: 1.20,
}

# Race intensity as a fraction of LTHR
HR_ZONE_INTENSITY: Dict[Sport, Dict[PacingBucket, Tuple[float, float]]] = {
    Sport.BIKE: {
        PacingBucket.SPRINT: (0.95, 1.05),
        PacingBucket.OLYMPIC: (0.85, 0.95),
        PacingBucket.HALF_IRONMAN: (0.75, 0.85),
        PacingBucket.IRONMAN: (0.68, 0.78),
    },
    Sport.RUN: {
        PacingBucket.SPRINT: (0.95, 1.0),
        PacingBucket.OLYMPIC: (0.90, 0.95),
        PacingBucket.HALF_IRONMAN: (0.85, 0.90),
        PacingBucket.IRONMAN: (0.78, 0.85),
    },
}

# Speed model: km/h = watts / 3.5 + 15
WATTS_PER_KPH = 3.5
BASE_SPEED_KPH = 15.0
DRAFT_SURGE_FACTOR = 1.2

OPTIMISTIC_FACTOR = 0.95
CONSERVATIVE_FACTOR = 1.07


# ---------------------------------------------------------------------------
# Fitness estimators
# ---------------------------------------------------------------------------

def estimate_ftp_from_workouts(workouts: Iterable[Workout]) -> Optional[int]:
    """
    Estimate FTP from the best normalized power of rides of 20+ minutes.

    Args:
        workouts: Workout history

    Returns:
        FTP in watts (best NP x 0.95), or None without qualifying rides
    """
    efforts = [
        w.normalized_power for w in workouts
        if w.sport == Sport.BIKE
        and w.normalized_power
        and (w.duration_seconds or 0) >= MIN_THRESHOLD_EFFORT_SECONDS
    ]
    if not efforts:
        return None
    return int(round(max(efforts) * FTP_FROM_BEST_EFFORT))


def estimate_css_from_workouts(
    workouts: Iterable[Workout],
    max_hr: Optional[float] = None,
) -> Optional[float]:
    """
    Estimate Critical Swim Speed pace from the fastest qualifying swim.

    With a known max HR, swims that carry heart rate data only qualify when
    they last 10+ minutes at 85%+ of max HR.

    Args:
        workouts: Workout history
        max_hr: Athlete max heart rate, if known

    Returns:
        CSS pace in sec/100m, or None without qualifying swims
    """
    paces = []
    for workout in workouts:
        if workout.sport != Sport.SWIM or workout.swim_pace_per_100m is None:
            continue
        if max_hr and workout.avg_hr:
            if workout.avg_hr < max_hr * CSS_MIN_HR_FRACTION:
                continue
            if (workout.duration_seconds or 0) < MIN_CSS_SWIM_SECONDS:
                continue
        paces.append(workout.swim_pace_per_100m)
    if not paces:
        return None
    return min(paces)


def estimate_lthr(workouts: Iterable[Workout], sport: Sport) -> Optional[float]:
    """Highest average HR of a 20+ minute, RPE 7+ session in the sport."""
    efforts = [
        w.avg_hr for w in workouts
        if w.sport == sport
        and w.avg_hr
        and (w.duration_seconds or 0) >= MIN_THRESHOLD_EFFORT_SECONDS
        and (w.rpe or 0) >= LTHR_MIN_RPE
    ]
    if not efforts:
        return None
    return max(efforts)


def _most_recent(workouts: List[Workout], count: int) -> List[Workout]:
    return sorted(workouts, key=lambda w: w.date, reverse=True)[:count]


def recent_run_pace(
    workouts: Iterable[Workout],
    count: int = RECENT_SESSION_COUNT,
) -> Optional[float]:
    """Mean pace (sec/km) of the most recent runs of 20+ minutes."""
    runs = [
        w for w in workouts
        if w.sport == Sport.RUN
        and w.avg_pace_sec_per_km
        and (w.duration_seconds or 0) >= MIN_THRESHOLD_EFFORT_SECONDS
    ]
    if not runs:
        return None
    paces = [w.avg_pace_sec_per_km for w in _most_recent(runs, count)]
    return sum(paces) / len(paces)


def recent_swim_pace(
    workouts: Iterable[Workout],
    count: int = RECENT_SESSION_COUNT,
) -> Optional[float]:
    """Mean pace (sec/100m) of the most recent swims with distance and duration."""
    swims = [w for w in workouts if w.sport == Sport.SWIM and w.swim_pace_per_100m]
    if not swims:
        return None
    paces = [w.swim_pace_per_100m for w in _most_recent(swims, count)]
    return sum(paces) / len(paces)


def recent_bike_speed(
    workouts: Iterable[Workout],
    count: int = RECENT_SESSION_COUNT,
) -> Optional[float]:
    """Mean speed (km/h) of the most recent rides of 20+ minutes."""
    rides = [
        w for w in workouts
        if w.sport == Sport.BIKE
        and w.distance_meters
        and (w.duration_seconds or 0) >= MIN_THRESHOLD_EFFORT_SECONDS
    ]
    if not rides:
        return None
    speeds = [
        (w.distance_meters / 1000) / (w.duration_seconds / 3600)
        for w in _most_recent(rides, count)
    ]
    return sum(speeds) / len(speeds)


# ---------------------------------------------------------------------------
# Condition adjustments
# ---------------------------------------------------------------------------

def heat_adjustment_pct(conditions: Optional[RaceConditions]) -> float:
    """
    Percent slowdown from heat and humidity.

    Above 24C each degree costs 1.4%; humidity above 60% adds 0.5% per 10%
    only when it is already hot. Capped at 15%.

    Args:
        conditions: Race conditions (None = no adjustment)

    Returns:
        Adjustment percent rounded to 1 decimal
    """
    if conditions is None or conditions.temp_high_c is None:
        return 0.0
    if conditions.temp_high_c <= HEAT_THRESHOLD_C:
        return 0.0

    adjustment = (conditions.temp_high_c - HEAT_THRESHOLD_C) * HEAT_PCT_PER_DEGREE
    humidity = conditions.humidity_pct
    if humidity is not None and humidity > HUMIDITY_THRESHOLD_PCT:
        adjustment += (humidity - HUMIDITY_THRESHOLD_PCT) / 10 * HUMIDITY_PCT_PER_10

    return round(min(adjustment, MAX_HEAT_ADJUSTMENT_PCT), 1)


def altitude_adjustment_pct(conditions: Optional[RaceConditions]) -> float:
    """Percent loss of sustainable output above 900m (6.5% per 1000m, max 15%)."""
    if conditions is None or conditions.altitude_m is None:
        return 0.0
    if conditions.altitude_m <= ALTITUDE_THRESHOLD_M:
        return 0.0
    adjustment = (conditions.altitude_m - ALTITUDE_THRESHOLD_M) / 1000 * ALTITUDE_PCT_PER_1000M
    return round(min(adjustment, MAX_ALTITUDE_ADJUSTMENT_PCT), 1)


def course_variance_pct(conditions: Optional[RaceConditions]) -> float:
    """Power/pace variance allowance for the course profile."""
    profile = conditions.course_profile if conditions else CourseProfile.FLAT
    return COURSE_VARIANCE_PCT[profile]


def is_non_wetsuit_swim(conditions: Optional[RaceConditions]) -> bool:
    """Explicitly wetsuit-illegal, or water too warm when legality is unknown."""
    if conditions is None:
        return False
    if conditions.wetsuit_legal is not None:
        return conditions.wetsuit_legal is False
    return conditions.water_temp_c is not None and conditions.water_temp_c > WETSUIT_CUTOFF_WATER_C


def swim_wetsuit_adjustment_pct(conditions: Optional[RaceConditions]) -> float:
    return NON_WETSUIT_SWIM_PCT if is_non_wetsuit_swim(conditions) else 0.0


def hr_zone_label(distance: RaceDistance, sport: Sport, lthr: float) -> str:
    """Race heart rate band as text, e.g. "142-151 bpm (85-90% LTHR)"."""
    lo, hi = HR_ZONE_INTENSITY[sport][pacing_bucket(distance)]
    return (
        f"{int(round(lthr * lo))}-{int(round(lthr * hi))} bpm "
        f"({int(round(lo * 100))}-{int(round(hi * 100))}% LTHR)"
    )


# ---------------------------------------------------------------------------
# Leg pacing
# ---------------------------------------------------------------------------

def generate_swim_pacing(
    distance: RaceDistance,
    css: Optional[float],
    distances: RaceDistances,
    classification: AthleteClassification = AthleteClassification.AGE_GROUPER,
    conditions: Optional[RaceConditions] = None,
) -> SwimPacing:
    """
    Swim pacing from CSS plus a distance offset.

    Args:
        distance: Race distance
        css: CSS pace in sec/100m (classification default if None)
        distances: Resolved leg distances
        classification: Athlete classification
        conditions: Race conditions (wetsuit / water temperature)

    Returns:
        SwimPacing
    """
    bucket = pacing_bucket(distance)
    if css is None:
        logger.warning("No CSS estimate, using %s default swim pace", classification.value)
    effective_css = css if css is not None else DEFAULT_CSS[classification]

    wetsuit_pct = swim_wetsuit_adjustment_pct(conditions)
    target_pace = (effective_css + SWIM_CSS_OFFSET[bucket]) * (1 + wetsuit_pct / 100)
    split_seconds = int(round(distances.swim_m / 100 * target_pace))

    if bucket in (PacingBucket.HALF_IRONMAN, PacingBucket.IRONMAN):
        strategy = "Even pacing. Start conservatively and save energy for the bike and run."
    elif is_draft_legal(distance):
        strategy = "Position yourself to exit the swim near the front pack. The bike is draft-legal."
    else:
        strategy = "Slight negative split. Settle into rhythm in the first 200m, then build pace."
    if wetsuit_pct:
        strategy += " Non-wetsuit swim: expect a slower pace and focus on body position."

    if bucket == PacingBucket.IRONMAN:
        stroke_rate = "55-60 strokes/min, efficient and sustainable cadence"
    else:
        stroke_rate = "60-66 strokes/min, steady with controlled turnover"

    if distances.swim_m > 1500:
        sighting = "Every 6-8 strokes in open water. Sight early and often at start."
    else:
        sighting = "Every 8-10 strokes. Use buoy lines to navigate."

    return SwimPacing(
        target_pace_per_100m=int(round(target_pace)),
        estimated_split_seconds=split_seconds,
        strategy=strategy,
        stroke_rate_target=stroke_rate,
        sighting_frequency=sighting,
        wetsuit_adjustment_pct=wetsuit_pct,
        data_available=css is not None,
    )


def generate_bike_pacing(
    distance: RaceDistance,
    ftp: Optional[float],
    lthr: Optional[float],
    conditions: Optional[RaceConditions],
    distances: RaceDistances,
    classification: AthleteClassification = AthleteClassification.AGE_GROUPER,
) -> BikePacing:
    """
    Bike pacing from FTP, intensity band and condition adjustments.

    Args:
        distance: Race distance
        ftp: FTP in watts (classification default if None)
        lthr: Bike LTHR for the heart rate band
        conditions: Race conditions
        distances: Resolved leg distances
        classification: Athlete classification

    Returns:
        BikePacing
    """
    heat = heat_adjustment_pct(conditions)
    altitude = altitude_adjustment_pct(conditions)
    variance = course_variance_pct(conditions)
    draft_legal = is_draft_legal(distance)
    bucket = pacing_bucket(distance)

    if ftp is None:
        logger.warning("No FTP estimate, using %s default power", classification.value)
    effective_ftp = ftp if ftp is not None else DEFAULT_FTP[classification]

    lo, hi = BIKE_INTENSITY[bucket]
    adjustment_factor = 1 - (heat + altitude) / 100
    lo_watts = int(round(effective_ftp * lo * adjustment_factor))
    hi_watts = int(round(effective_ftp * hi * adjustment_factor))
    target_watts = int(round((lo_watts + hi_watts) / 2))
    climb_cap = int(round(target_watts * (1 + variance / 100)))

    speed_kph = target_watts / WATTS_PER_KPH + BASE_SPEED_KPH
    split_seconds = int(round(distances.bike_km / speed_kph * 3600))

    profile = conditions.course_profile if conditions else CourseProfile.FLAT
    if draft_legal:
        strategy = (
            "Draft-legal racing: stay in the pack. Power will spike during surges "
            f"(up to {int(round(effective_ftp * DRAFT_SURGE_FACTOR))}W). Conserve between surges. "
            "Positioning is more important than steady-state power."
        )
    elif profile in (CourseProfile.HILLY, CourseProfile.MOUNTAINOUS):
        strategy = (
            f"Steady power on flats ({lo_watts}-{hi_watts}W). Cap power on climbs at "
            f"{climb_cap}W. Recover on descents."
        )
    else:
        strategy = f"Even power throughout: {lo_watts}-{hi_watts}W. Resist surging early."

    if classification == AthleteClassification.PROFESSIONAL:
        strategy += " Pro pacing: focus on positioning in the first 30km, then settle into sustainable power."

    if lthr:
        hr_zone = hr_zone_label(distance, Sport.BIKE, lthr)
    else:
        hr_zone = "Use power as primary metric, ride by feel if no power meter"

    return BikePacing(
        target_power_watts=target_watts,
        target_power_range=(lo_watts, hi_watts),
        climb_power_cap_watts=climb_cap,
        target_hr_zone=hr_zone,
        estimated_split_seconds=split_seconds,
        estimated_speed_kph=round(speed_kph, 1),
        cadence_target="85-95 rpm on flats, 70-80 rpm on climbs",
        strategy=strategy,
        heat_adjustment_pct=heat,
        altitude_adjustment_pct=altitude,
        variability_allowance_pct=variance,
        data_available=ftp is not None,
        is_draft_legal=draft_legal,
    )


def generate_run_pacing(
    distance: RaceDistance,
    lthr: Optional[float],
    conditions: Optional[RaceConditions],
    distances: RaceDistances,
    base_pace: Optional[float],
    classification: AthleteClassification = AthleteClassification.AGE_GROUPER,
) -> RunPacing:
    """
    Run pacing from recent training pace and condition adjustments.

    Args:
        distance: Race distance
        lthr: Run LTHR for the heart rate band
        conditions: Race conditions
        distances: Resolved leg distances
        base_pace: Recent training pace in sec/km (classification default if None)
        classification: Athlete classification

    Returns:
        RunPacing
    """
    heat = heat_adjustment_pct(conditions)
    altitude = altitude_adjustment_pct(conditions)
    variance = course_variance_pct(conditions)
    bucket = pacing_bucket(distance)

    if base_pace is None:
        logger.warning("No recent run pace, using %s default pace", classification.value)
    effective_pace = base_pace if base_pace is not None else DEFAULT_RUN_PACE[classification]

    adjustment_factor = 1 + (heat + altitude) / 100
    target_pace = int(round(effective_pace * RUN_PACE_MULTIPLIER[bucket] * adjustment_factor))
    pace_range = (
        int(round(target_pace * (1 - variance / 200))),
        int(round(target_pace * (1 + variance / 200))),
    )
    split_seconds = int(round(distances.run_km * target_pace))

    if bucket == PacingBucket.IRONMAN:
        walk_break = "Consider 30-60s walk at each aid station to manage fatigue and take nutrition."
        strategy = "Even effort with a controlled first 10K. The marathon starts at mile 18, save yourself."
    elif bucket == PacingBucket.HALF_IRONMAN:
        walk_break = "Walk through aid stations if needed for hydration."
        strategy = "Slight negative split. First 1-2 km conservative off the bike, then settle into target pace."
    else:
        walk_break = None
        strategy = "Slight negative split. First 1-2 km conservative off the bike, then settle into target pace."
    if is_draft_legal(distance):
        strategy = "Off-the-bike run: transition is critical in draft-legal racing. The run decides the race."

    if lthr:
        hr_zone = hr_zone_label(distance, Sport.RUN, lthr)
    else:
        hr_zone = "Run by feel, keep effort conversational early"

    return RunPacing(
        target_pace_sec_per_km=target_pace,
        target_pace_range=pace_range,
        target_hr_zone=hr_zone,
        estimated_split_seconds=split_seconds,
        strategy=strategy,
        walk_break_strategy=walk_break,
        brick_factor_note=(
            "First 1-2 km off the bike will feel 10-20 sec/km slower than standalone pace. "
            "This is normal, don't chase the pace."
        ),
        heat_adjustment_pct=heat,
        altitude_adjustment_pct=altitude,
        variability_allowance_pct=variance,
        data_available=base_pace is not None,
    )


def generate_transitions(distance: RaceDistance) -> TransitionTargets:
    """T1/T2 time targets and checklists; long course allows more time."""
    long_course = is_long_course(distance)
    t1_checklist = [
        "Remove wetsuit (practice beforehand)",
        "Helmet on FIRST (before touching bike)",
        "Sunglasses on",
        "Shoes on (or use elastic laces)",
        "Grab bike and run to mount line",
    ]
    t2_checklist = [
        "Rack bike",
        "Helmet off",
        "Swap to run shoes",
        "Grab race belt with bib",
        "Hat or visor on",
    ]
    if long_course:
        t1_checklist += ["Apply sunscreen if needed", "Check nutrition is staged on bike"]
        t2_checklist.append("Grab any additional nutrition/gels")

    return TransitionTargets(
        t1_seconds=180 if long_course else 120,
        t2_seconds=120 if long_course else 75,
        t1_checklist=t1_checklist,
        t2_checklist=t2_checklist,
    )


def build_race_estimate(realistic_seconds: int) -> RaceEstimate:
    """Three-point estimate around a realistic finish time."""
    return RaceEstimate(
        optimistic_seconds=int(round(realistic_seconds * OPTIMISTIC_FACTOR)),
        realistic_seconds=realistic_seconds,
        conservative_seconds=int(round(realistic_seconds * CONSERVATIVE_FACTOR)),
    )


# ---------------------------------------------------------------------------
# Full pacing plan
# ---------------------------------------------------------------------------

def generate_pacing_plan(
    distance: RaceDistance,
    conditions: Optional[RaceConditions],
    snapshot: FitnessSnapshot,
    classification: AthleteClassification = AthleteClassification.AGE_GROUPER,
    qualification_target: Optional[QualificationTarget] = None,
    custom_distances: Optional[CustomDistances] = None,
) -> PacingPlan:
    """
    Generate the complete pacing plan.

    Heart rate bands use the sport LTHR from the snapshot, falling back to
    the LT2 estimate when no threshold effort is on record.

    Args:
        distance: Race distance
        conditions: Race conditions
        snapshot: Current fitness snapshot
        classification: Athlete classification
        qualification_target: Target for reverse-engineered qualification splits
        custom_distances: Leg distances for custom races

    Returns:
        PacingPlan
    """
    distances = resolve_distances(distance, custom_distances)
    bike_lthr = snapshot.estimated_lthr.bike or snapshot.lt2_hr
    run_lthr = snapshot.estimated_lthr.run or snapshot.lt2_hr

    swim = generate_swim_pacing(distance, snapshot.estimated_css, distances, classification, conditions)
    bike = generate_bike_pacing(distance, snapshot.estimated_ftp, bike_lthr, conditions, distances, classification)
    run = generate_run_pacing(
        distance, run_lthr, conditions, distances,
        snapshot.recent_race_pace.run_sec_per_km, classification,
    )
    transitions = generate_transitions(distance)

    realistic = (
        swim.estimated_split_seconds
        + transitions.t1_seconds
        + bike.estimated_split_seconds
        + transitions.t2_seconds
        + run.estimated_split_seconds
    )
    estimate = build_race_estimate(realistic)

    qualification_pacing = None
    if qualification_target and qualification_target.estimated_qualifying_time and realistic > 0:
        qualification_pacing = generate_qualification_pacing(
            qualification_target.estimated_qualifying_time,
            distances,
            realistic,
        )

    logger.debug(
        "Pacing for %s: swim=%ds bike=%ds run=%ds total=%ds",
        distance.value, swim.estimated_split_seconds, bike.estimated_split_seconds,
        run.estimated_split_seconds, realistic,
    )
    return PacingPlan(
        distances=distances,
        swim=swim,
        bike=bike,
        run=run,
        transitions=transitions,
        total_estimate=estimate,
        qualification_pacing=qualification_pacing,
    )
