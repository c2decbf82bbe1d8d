"""Fitness-Fatigue model calculations (CTL, ATL, TSB)."""

import logging
import math
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, List, Optional, Tuple

from ..models.records import Workout
from .load import LoadThresholds, build_daily_tss


logger = logging.getLogger(__name__)

CTL_TIME_CONSTANT = 42
ATL_TIME_CONSTANT = 7


@dataclass
class DailyLoadPoint:
    """Daily point of the Fitness-Fatigue model."""

    date: date
    daily_tss: float  # Summed TSS for the day (0 on rest days)
    ctl: float  # Chronic Training Load (fitness) - 42 day EWMA
    atl: float  # Acute Training Load (fatigue) - 7 day EWMA
    tsb: float  # Training Stress Balance (form) = CTL - ATL

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "date": self.date.isoformat(),
            "daily_tss": round(self.daily_tss, 1),
            "ctl": round(self.ctl, 1),
            "atl": round(self.atl, 1),
            "tsb": round(self.tsb, 1),
        }


def calculate_ewma(
    current_value: float,
    previous_ewma: float,
    time_constant: int,
) -> float:
    """
    Exponentially Weighted Moving Average.

    Uses the formula: EWMA_n = EWMA_{n-1} * decay + value * (1 - decay)
    where decay = e^(-1/time_constant)

    Args:
        current_value: Today's training load
        previous_ewma: Yesterday's EWMA value
        time_constant: Time constant in days (42 for CTL, 7 for ATL)

    Returns:
        New EWMA value
    """
    decay = math.exp(-1 / time_constant)
    return previous_ewma * decay + current_value * (1 - decay)


def calculate_load_series(
    workouts: Iterable[Workout],
    thresholds: Optional[LoadThresholds] = None,
    ctl_time_constant: int = CTL_TIME_CONSTANT,
    atl_time_constant: int = ATL_TIME_CONSTANT,
    end_date: Optional[date] = None,
) -> List[DailyLoadPoint]:
    """
    Calculate CTL, ATL and TSB for every calendar day of a training history.

    The series covers each day from the first workout date to the last
    workout date (or end_date, if later). Days without training contribute
    zero load and still decay both averages. The first day seeds
    CTL = ATL = that day's TSS.

    Args:
        workouts: Workouts in any order
        thresholds: Athlete thresholds for TSS estimation
        ctl_time_constant: Days for CTL calculation (default 42)
        atl_time_constant: Days for ATL calculation (default 7)
        end_date: Extend the series through this date

    Returns:
        List of DailyLoadPoint, one per calendar day; empty when no workouts
    """
    daily_loads = build_daily_tss(workouts, thresholds)
    if not daily_loads:
        return []

    loads_by_date = dict(daily_loads)
    first_date = daily_loads[0][0]
    last_date = daily_loads[-1][0]
    if end_date is not None and end_date > last_date:
        last_date = end_date

    results: List[DailyLoadPoint] = []
    ctl = atl = loads_by_date[first_date]
    current = first_date

    while current <= last_date:
        load = loads_by_date.get(current, 0.0)
        if current != first_date:
            ctl = calculate_ewma(load, ctl, ctl_time_constant)
            atl = calculate_ewma(load, atl, atl_time_constant)

        results.append(
            DailyLoadPoint(
                date=current,
                daily_tss=load,
                ctl=ctl,
                atl=atl,
                tsb=ctl - atl,
            )
        )
        current += timedelta(days=1)

    logger.debug(
        "Load series %s..%s: CTL=%.1f ATL=%.1f",
        first_date, last_date, ctl, atl,
    )
    return results


def current_load(series: List[DailyLoadPoint]) -> Optional[DailyLoadPoint]:
    """Most recent point of a load series, or None when empty."""
    return series[-1] if series else None


def weekly_volume(workouts: Iterable[Workout]) -> List[Tuple[date, float]]:
    """
    Training hours per ISO week.

    Args:
        workouts: Workouts in any order

    Returns:
        List of (Monday of week, hours rounded to 1 decimal) sorted by week
    """
    totals: defaultdict = defaultdict(float)
    for workout in workouts:
        week_start = workout.date - timedelta(days=workout.date.weekday())
        totals[week_start] += workout.duration_hours

    return [(week, round(hours, 1)) for week, hours in sorted(totals.items())]


def describe_form(tsb: float) -> str:
    """
    Describe freshness from Training Stress Balance.

    Args:
        tsb: Training Stress Balance (CTL - ATL)

    Returns:
        Form label
    """
    if tsb > 25:
        return "fresh"
    elif tsb > 0:
        return "positive"
    elif tsb > -10:
        return "neutral"
    elif tsb > -25:
        return "fatigued"
    else:
        return "very fatigued"
