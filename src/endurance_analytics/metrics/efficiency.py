"""Efficiency Factor (EF) calculations and trend analysis.

EF measures aerobic efficiency: output produced per heartbeat. A rising
EF at the same heart rate indicates a growing aerobic engine.
"""

import logging
from datetime import date, timedelta
from typing import Iterable, List, Optional, Tuple

from ..models.records import Sport, Workout


logger = logging.getLogger(__name__)

EF_TREND_WINDOW_DAYS = 30


def calculate_bike_ef(workout: Workout) -> Optional[float]:
    """
    Bike Efficiency Factor.

    Formula: EF = (NP or average power) / Avg HR

    Typical values: 1.0-2.0 for trained cyclists

    Args:
        workout: Bike workout

    Returns:
        EF in watts/bpm, or None when power or heart rate is missing
    """
    power = workout.normalized_power or workout.avg_power_watts
    hr = workout.avg_hr
    if not power or not hr or hr <= 0:
        return None
    return power / hr


def calculate_run_ef(workout: Workout) -> Optional[float]:
    """
    Run Efficiency Factor: speed (m/s) per beat, scaled by 100.

    Args:
        workout: Run workout

    Returns:
        EF, or None when pace or heart rate is missing
    """
    pace = workout.avg_pace_sec_per_km
    hr = workout.avg_hr
    if not pace or pace <= 0 or not hr or hr <= 0:
        return None
    speed_mps = 1000 / pace
    return speed_mps / hr * 100


def calculate_swim_ef(workout: Workout) -> Optional[float]:
    """Swim Efficiency Factor: speed (m/s) per beat, scaled by 100."""
    distance = workout.distance_meters
    duration = workout.duration_seconds
    hr = workout.avg_hr
    if not distance or not duration or not hr or hr <= 0:
        return None
    speed_mps = distance / duration
    return speed_mps / hr * 100


def get_ef(workout: Workout) -> Optional[float]:
    """EF for any workout based on its sport. Bricks have no EF."""
    if workout.sport == Sport.BIKE:
        return calculate_bike_ef(workout)
    if workout.sport == Sport.RUN:
        return calculate_run_ef(workout)
    if workout.sport == Sport.SWIM:
        return calculate_swim_ef(workout)
    return None


def _mean(values: List[float]) -> float:
    return sum(values) / len(values)


def ef_trend(
    workouts: Iterable[Workout],
    as_of: Optional[date] = None,
    window_days: int = EF_TREND_WINDOW_DAYS,
    sport: Optional[Sport] = None,
) -> Optional[float]:
    """
    Percent change of mean EF in the recent window versus the prior window.

    Recent window: [as_of - window, as_of]
    Prior window: [as_of - 2*window, as_of - window)

    Args:
        workouts: Workouts in any order
        as_of: Reference date (defaults to today)
        window_days: Window length in days
        sport: Restrict to one sport (all sports if None)

    Returns:
        Percent change rounded to 1 decimal, or None when either window has
        no EF values or the prior mean is zero
    """
    as_of = as_of or date.today()
    recent_start = as_of - timedelta(days=window_days)
    prior_start = as_of - timedelta(days=2 * window_days)

    recent: List[float] = []
    prior: List[float] = []
    for workout in workouts:
        if sport is not None and workout.sport != sport:
            continue
        ef = get_ef(workout)
        if ef is None:
            continue
        if recent_start <= workout.date <= as_of:
            recent.append(ef)
        elif prior_start <= workout.date < recent_start:
            prior.append(ef)

    if not recent or not prior:
        return None

    prior_avg = _mean(prior)
    if prior_avg == 0:
        return None

    trend = (_mean(recent) - prior_avg) / prior_avg * 100
    logger.debug(
        "EF trend as of %s: %d recent vs %d prior sessions -> %.1f%%",
        as_of, len(recent), len(prior), trend,
    )
    return round(trend, 1)


def ef_series(
    workouts: Iterable[Workout],
    sport: Optional[Sport] = None,
) -> List[Tuple[date, float]]:
    """Chronological (date, EF) points for workouts that have an EF."""
    points = []
    for workout in sorted(workouts, key=lambda w: w.date):
        if sport is not None and workout.sport != sport:
            continue
        ef = get_ef(workout)
        if ef is not None:
            points.append((workout.date, ef))
    return points
