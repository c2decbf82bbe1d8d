"""Daily readiness, CNS fatigue and life-stress analysis.

Readiness is a 0-100 weighted composite:
- TSB (Training Stress Balance): 30%
- HRV: 25%
- Sleep Quality: 20%
- Life Stress: 15%
- CNS Status: 10%
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Dict, Iterable, List, Optional

from ..config import get_settings
from ..models.records import ManualLog, Workout
from .fitness import calculate_load_series
from .load import LoadThresholds


logger = logging.getLogger(__name__)

RECENT_WINDOW_DAYS = 7
DEFAULT_MAX_HR_ESTIMATE = 185
# Zone 1-2 ceiling as a fraction of max HR
CNS_LOW_HR_FRACTION = 0.75
CNS_HIGH_RPE = 7

READINESS_WEIGHTS = {
    "tsb": 0.30,
    "hrv": 0.25,
    "sleep": 0.20,
    "stress": 0.15,
    "cns": 0.10,
}

DEFAULT_HRV_SCORE = 70.0
DEFAULT_SLEEP_SCORE = 70.0
DEFAULT_STRESS_SCORE = 60.0


class CNSStatus(str, Enum):
    OPTIMAL = "optimal"
    WARNING = "warning"
    FATIGUED = "fatigued"


CNS_SCORES = {
    CNSStatus.OPTIMAL: 100.0,
    CNSStatus.WARNING: 50.0,
    CNSStatus.FATIGUED: 20.0,
}


@dataclass
class CNSFatigueResult:
    """RPE-HR dissociation check over the recent window."""

    status: CNSStatus
    label: str
    description: str
    flagged_workouts: List[Workout] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "status": self.status.value,
            "label": self.label,
            "description": self.description,
            "flagged_workout_ids": [w.id for w in self.flagged_workouts],
        }


@dataclass
class ReadinessScore:
    """Composite readiness score with per-component breakdown (0-100 each)."""

    score: int
    breakdown: Dict[str, int]

    @property
    def label(self) -> str:
        return readiness_label(self.score)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "score": self.score,
            "label": self.label,
            "breakdown": dict(self.breakdown),
        }


def _in_recent_window(day: date, as_of: date) -> bool:
    return as_of - timedelta(days=RECENT_WINDOW_DAYS) <= day <= as_of


def detect_cns_fatigue(
    workouts: Iterable[Workout],
    as_of: date,
    max_hr: float = DEFAULT_MAX_HR_ESTIMATE,
) -> CNSFatigueResult:
    """
    Flag central nervous system fatigue.

    A session is flagged when RPE >= 7 but average HR stays below 75% of
    max HR: the athlete perceives high effort while the cardiovascular
    system is not stressed.

    Args:
        workouts: Workouts in any order
        as_of: Reference date; the last 7 days are inspected
        max_hr: Max heart rate (185 when unknown)

    Returns:
        CNSFatigueResult (fatigued with >= 3 flags, warning with >= 1)
    """
    low_hr_ceiling = max_hr * CNS_LOW_HR_FRACTION
    flagged = [
        w for w in workouts
        if _in_recent_window(w.date, as_of)
        and w.rpe and w.avg_hr
        and w.rpe >= CNS_HIGH_RPE
        and w.avg_hr < low_hr_ceiling
    ]

    if len(flagged) >= 3:
        return CNSFatigueResult(
            status=CNSStatus.FATIGUED,
            label="CNS Fatigued",
            description=f"{len(flagged)} sessions with high RPE / low HR in 7 days",
            flagged_workouts=flagged,
        )
    if flagged:
        return CNSFatigueResult(
            status=CNSStatus.WARNING,
            label="Monitor CNS",
            description=f"{len(flagged)} session(s) showing RPE-HR dissociation",
            flagged_workouts=flagged,
        )
    return CNSFatigueResult(
        status=CNSStatus.OPTIMAL,
        label="Optimal",
        description="Recovery on track",
    )


def life_stress_average(logs: Iterable[ManualLog], as_of: date) -> Optional[float]:
    """Mean life_stress log value over the last 7 days (1 decimal), or None."""
    recent = [
        log.value for log in logs
        if log.log_type == "life_stress" and _in_recent_window(log.date, as_of)
    ]
    if not recent:
        return None
    return round(sum(recent) / len(recent), 1)


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def _hrv_score(logs: List[ManualLog]) -> float:
    hrv_logs = sorted(
        (log for log in logs if log.log_type == "morning_hrv"),
        key=lambda log: log.date,
        reverse=True,
    )
    if len(hrv_logs) < 2:
        return DEFAULT_HRV_SCORE
    baseline_logs = hrv_logs[:7]
    baseline = sum(log.value for log in baseline_logs) / len(baseline_logs)
    if baseline <= 0:
        return DEFAULT_HRV_SCORE
    return _clamp(hrv_logs[0].value / baseline * 70)


def _sleep_score(logs: List[ManualLog]) -> float:
    sleep_logs = [log for log in logs if log.log_type == "sleep_quality"]
    if not sleep_logs:
        return DEFAULT_SLEEP_SCORE
    latest = max(sleep_logs, key=lambda log: log.date)
    return _clamp(latest.value * 10)


def calculate_readiness(
    workouts: Iterable[Workout],
    logs: Iterable[ManualLog],
    as_of: date,
    thresholds: Optional[LoadThresholds] = None,
    max_hr: float = DEFAULT_MAX_HR_ESTIMATE,
    ctl_time_constant: Optional[int] = None,
    atl_time_constant: Optional[int] = None,
) -> ReadinessScore:
    """
    Calculate the daily readiness score.

    Args:
        workouts: Workout history
        logs: Manual logs (morning_hrv, sleep_quality, life_stress)
        as_of: Day being scored
        thresholds: Athlete thresholds for TSS estimation
        max_hr: Max heart rate for the CNS check
        ctl_time_constant: CTL days (configured value if None)
        atl_time_constant: ATL days (configured value if None)

    Returns:
        ReadinessScore with a 0-100 score and component breakdown
    """
    workouts = [w for w in workouts if w.date <= as_of]
    logs = [log for log in logs if log.date <= as_of]

    settings = get_settings()
    series = calculate_load_series(
        workouts,
        thresholds,
        ctl_time_constant=ctl_time_constant or settings.ctl_time_constant,
        atl_time_constant=atl_time_constant or settings.atl_time_constant,
        end_date=as_of,
    )
    tsb = series[-1].tsb if series else 0.0
    # Map TSB range [-30, +30] to [0, 100]
    tsb_score = _clamp((tsb + 30) / 60 * 100)

    stress_avg = life_stress_average(logs, as_of)
    stress_score = _clamp(100 - stress_avg * 10) if stress_avg is not None else DEFAULT_STRESS_SCORE

    cns = detect_cns_fatigue(workouts, as_of, max_hr=max_hr)

    components = {
        "tsb": tsb_score,
        "hrv": _hrv_score(logs),
        "sleep": _sleep_score(logs),
        "stress": stress_score,
        "cns": CNS_SCORES[cns.status],
    }
    score = round(sum(components[name] * weight for name, weight in READINESS_WEIGHTS.items()))

    logger.debug("Readiness for %s: %d (%s)", as_of, score, components)
    return ReadinessScore(
        score=int(_clamp(score)),
        breakdown={name: round(value) for name, value in components.items()},
    )


def readiness_label(score: float) -> str:
    if score >= 80:
        return "Ready to perform"
    elif score >= 60:
        return "Moderate, train normally"
    elif score >= 40:
        return "Low, easy day recommended"
    else:
        return "Rest day recommended"
