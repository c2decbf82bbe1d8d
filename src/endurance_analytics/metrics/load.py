"""Per-workout Training Stress Score (TSS) estimation."""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Tuple

from ..models.records import Sport, Workout


logger = logging.getLogger(__name__)

# Reference thresholds when no athlete-specific value is known
DEFAULT_FTP_WATTS = 200.0
DEFAULT_RUN_THRESHOLD_PACE_SEC_PER_KM = 300.0
DEFAULT_CSS_SEC_PER_100M = 110.0

# RPE proxy: IF = 0.5 + 0.06 * RPE (RPE 10 -> IF 1.1)
RPE_BASE_INTENSITY = 0.5
RPE_INTENSITY_PER_POINT = 0.06
DEFAULT_RPE = 5

MAX_INTENSITY_FACTOR = 1.5


@dataclass
class LoadThresholds:
    """Athlete thresholds used to convert a session into an intensity factor."""

    ftp_watts: float = DEFAULT_FTP_WATTS
    run_threshold_pace_sec_per_km: float = DEFAULT_RUN_THRESHOLD_PACE_SEC_PER_KM
    css_sec_per_100m: float = DEFAULT_CSS_SEC_PER_100M
    lthr: Optional[float] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "ftp_watts": self.ftp_watts,
            "run_threshold_pace_sec_per_km": self.run_threshold_pace_sec_per_km,
            "css_sec_per_100m": self.css_sec_per_100m,
            "lthr": self.lthr,
        }


def _intensity_factor(workout: Workout, thresholds: LoadThresholds) -> float:
    """Pick the best available intensity signal for a workout."""
    if workout.sport == Sport.BIKE:
        power = workout.normalized_power or workout.avg_power_watts
        if power and power > 0 and thresholds.ftp_watts > 0:
            return power / thresholds.ftp_watts

    if workout.sport == Sport.RUN:
        pace = workout.avg_pace_sec_per_km
        if pace and pace > 0 and thresholds.run_threshold_pace_sec_per_km > 0:
            # Faster pace (lower number) = higher intensity
            return thresholds.run_threshold_pace_sec_per_km / pace

    if workout.sport == Sport.SWIM:
        pace = workout.swim_pace_per_100m
        if pace and pace > 0 and thresholds.css_sec_per_100m > 0:
            return thresholds.css_sec_per_100m / pace

    if workout.avg_hr and workout.avg_hr > 0 and thresholds.lthr and thresholds.lthr > 0:
        return workout.avg_hr / thresholds.lthr

    rpe = workout.rpe if workout.rpe is not None else DEFAULT_RPE
    return RPE_BASE_INTENSITY + RPE_INTENSITY_PER_POINT * rpe


def estimate_tss(
    workout: Workout,
    thresholds: Optional[LoadThresholds] = None,
) -> float:
    """
    Estimate the Training Stress Score of one workout.

    Priority of sources:
    1. Explicit recorded TSS
    2. Bike power relative to FTP
    3. Run pace relative to threshold pace
    4. Swim pace relative to CSS
    5. Average heart rate relative to LTHR (when known)
    6. RPE proxy

    Formula: TSS = hours * IF^2 * 100

    Args:
        workout: Completed workout
        thresholds: Athlete thresholds (reference defaults if None)

    Returns:
        TSS (>= 0). Workouts with no duration and no recorded TSS score 0.
    """
    if workout.tss is not None:
        return max(0.0, float(workout.tss))

    if not workout.duration_seconds:
        return 0.0

    thresholds = thresholds or LoadThresholds()
    intensity = _intensity_factor(workout, thresholds)
    intensity = max(0.0, min(intensity, MAX_INTENSITY_FACTOR))

    return workout.duration_hours * (intensity ** 2) * 100


def build_daily_tss(
    workouts: Iterable[Workout],
    thresholds: Optional[LoadThresholds] = None,
) -> List[Tuple[date, float]]:
    """
    Sum TSS per calendar day.

    Args:
        workouts: Workouts in any order
        thresholds: Athlete thresholds for TSS estimation

    Returns:
        List of (date, total TSS) sorted by date, only days with workouts
    """
    totals: defaultdict = defaultdict(float)
    for workout in workouts:
        totals[workout.date] += estimate_tss(workout, thresholds)

    daily = sorted(totals.items(), key=lambda item: item[0])
    logger.debug("Built daily TSS for %d training days", len(daily))
    return daily
