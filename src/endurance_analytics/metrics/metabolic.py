"""Metabolic floor analysis.

Correlates logged carbohydrate intake with power variability across long
sessions to find the minimum fueling rate that holds performance.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from ..models.records import ManualLog, Workout


CARB_LOG_TYPE = "carbs_g_per_hr"
MIN_SESSION_SECONDS = 3600
MAX_STABLE_VARIABILITY_PCT = 10.0


@dataclass
class MetabolicPoint:
    date: date
    carbs_g_per_hr: float
    power_variability_pct: float  # (NP - AP) / NP * 100
    duration_hours: float

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "carbs_g_per_hr": self.carbs_g_per_hr,
            "power_variability_pct": self.power_variability_pct,
            "duration_hours": round(self.duration_hours, 2),
        }


@dataclass
class MetabolicFloorResult:
    floor_estimate: Optional[float]  # g/hr
    data_points: List[MetabolicPoint]

    def to_dict(self) -> dict:
        return {
            "floor_estimate": self.floor_estimate,
            "data_points": [p.to_dict() for p in self.data_points],
        }


def analyze_metabolic_floor(
    workouts: Iterable[Workout],
    logs: Iterable[ManualLog],
) -> MetabolicFloorResult:
    """
    Estimate the metabolic floor.

    Only sessions longer than one hour with both average and normalized
    power and a same-day carbs_g_per_hr log are considered. The floor is
    the lowest carb rate whose session kept variability at or below 10%.

    Args:
        workouts: Workout history
        logs: Manual logs

    Returns:
        MetabolicFloorResult (floor None when no session qualifies)
    """
    carbs_by_date = {}
    for log in sorted(logs, key=lambda log: log.date):
        if log.log_type == CARB_LOG_TYPE:
            carbs_by_date[log.date] = log.value

    points = []
    for workout in workouts:
        if (workout.duration_seconds or 0) <= MIN_SESSION_SECONDS:
            continue
        if not workout.avg_power_watts or not workout.normalized_power:
            continue
        if workout.date not in carbs_by_date:
            continue
        np_watts = workout.normalized_power
        variability = (np_watts - workout.avg_power_watts) / np_watts * 100
        points.append(
            MetabolicPoint(
                date=workout.date,
                carbs_g_per_hr=carbs_by_date[workout.date],
                power_variability_pct=round(variability, 1),
                duration_hours=workout.duration_hours,
            )
        )

    floor = None
    for point in sorted(points, key=lambda p: p.carbs_g_per_hr):
        if point.power_variability_pct <= MAX_STABLE_VARIABILITY_PCT:
            floor = point.carbs_g_per_hr
            break

    return MetabolicFloorResult(floor_estimate=floor, data_points=points)


def metabolic_ceiling(logs: Iterable[ManualLog]) -> Optional[float]:
    """Highest logged carb intake rate (g/hr), or None."""
    rates = [log.value for log in logs if log.log_type == CARB_LOG_TYPE]
    if not rates:
        return None
    return max(rates)
