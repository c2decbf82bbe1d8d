"""Lactate threshold estimation and heart rate zone table.

Uses the Karvonen / Heart Rate Reserve method:
- HRR = max_hr - resting_hr
- LT1 = resting_hr + 0.70 * HRR (aerobic threshold, ~2 mmol/L)
- LT2 = resting_hr + 0.85 * HRR (anaerobic threshold, ~4 mmol/L)
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..exceptions import ConfigurationError, ThresholdValidationError
from ..models.records import ManualLog, Workout, latest_log_value


logger = logging.getLogger(__name__)

LT1_HRR_FRACTION = 0.70
LT2_HRR_FRACTION = 0.85
ZONE1_CEILING_FRACTION = 0.60
ZONE4_CEILING_FRACTION = 0.92

MIN_MAX_HR = 100
MAX_MAX_HR = 230
MIN_RESTING_HR = 25
MAX_RESTING_HR = 120
MIN_HR_RESERVE = 20


@dataclass
class HRZone:
    """One heart rate zone with inclusive integer bounds."""

    zone: int
    name: str
    min_hr: int
    max_hr: int
    color: str
    description: str

    def contains(self, hr: float) -> bool:
        return self.min_hr <= hr <= self.max_hr

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "zone": self.zone,
            "name": self.name,
            "min_hr": self.min_hr,
            "max_hr": self.max_hr,
            "color": self.color,
            "description": self.description,
        }


@dataclass
class LTEstimate:
    """Estimated lactate thresholds with the derived five-zone table."""

    lt1: int
    lt2: int
    max_hr: int
    resting_hr: int
    zones: List[HRZone]

    @property
    def hr_reserve(self) -> int:
        return self.max_hr - self.resting_hr

    def zone_for_hr(self, hr: float) -> Optional[HRZone]:
        """
        Zone containing a heart rate.

        Args:
            hr: Heart rate in bpm

        Returns:
            The matching zone, or None when hr is outside [resting, max]
        """
        if hr < self.resting_hr or hr > self.max_hr:
            return None
        for zone in self.zones:
            if hr <= zone.max_hr:
                return zone
        return self.zones[-1]

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "lt1": self.lt1,
            "lt2": self.lt2,
            "max_hr": self.max_hr,
            "resting_hr": self.resting_hr,
            "zones": [zone.to_dict() for zone in self.zones],
        }


def validate_hr_inputs(
    max_hr: Optional[float],
    resting_hr: Optional[float],
) -> Optional[str]:
    """
    Validate heart rate inputs for threshold estimation.

    Args:
        max_hr: Maximum heart rate
        resting_hr: Resting heart rate

    Returns:
        Error message, or None if the inputs are valid
    """
    if not max_hr or not resting_hr or max_hr <= 0 or resting_hr <= 0:
        return "Both max HR and resting HR are required"
    if max_hr < MIN_MAX_HR or max_hr > MAX_MAX_HR:
        return f"Max HR should be between {MIN_MAX_HR} and {MAX_MAX_HR} bpm"
    if resting_hr < MIN_RESTING_HR or resting_hr > MAX_RESTING_HR:
        return f"Resting HR should be between {MIN_RESTING_HR} and {MAX_RESTING_HR} bpm"
    if resting_hr >= max_hr:
        return "Resting HR must be lower than max HR"
    if max_hr - resting_hr < MIN_HR_RESERVE:
        return "Heart rate reserve too small, check your values"
    return None


def estimate_lactate_thresholds(
    max_hr: float,
    resting_hr: float,
    lt1_fraction: float = LT1_HRR_FRACTION,
    lt2_fraction: float = LT2_HRR_FRACTION,
    zone1_fraction: float = ZONE1_CEILING_FRACTION,
    zone4_fraction: float = ZONE4_CEILING_FRACTION,
) -> LTEstimate:
    """
    Estimate LT1/LT2 and build the five-zone heart rate table.

    Zones are contiguous with inclusive integer bounds:
    - Zone 1 Recovery: resting .. zone1 ceiling
    - Zone 2 Aerobic Base: zone1 ceiling + 1 .. LT1
    - Zone 3 Tempo: LT1 + 1 .. LT2
    - Zone 4 Threshold: LT2 + 1 .. zone4 ceiling
    - Zone 5 VO2max: zone4 ceiling + 1 .. max

    Args:
        max_hr: Maximum heart rate
        resting_hr: Resting heart rate
        lt1_fraction: LT1 as a fraction of HRR
        lt2_fraction: LT2 as a fraction of HRR
        zone1_fraction: Recovery ceiling as a fraction of HRR
        zone4_fraction: Threshold ceiling as a fraction of HRR

    Returns:
        LTEstimate

    Raises:
        ThresholdValidationError: If the heart rate inputs are implausible
        ConfigurationError: If the fractions are not strictly increasing, or
            the rounded anchors collapse on a narrow heart rate reserve
    """
    error = validate_hr_inputs(max_hr, resting_hr)
    if error:
        raise ThresholdValidationError(error, max_hr=max_hr, resting_hr=resting_hr)

    if not (0 < zone1_fraction < lt1_fraction < lt2_fraction < zone4_fraction < 1):
        raise ConfigurationError(
            "Heart rate anchors must satisfy 0 < zone1 < lt1 < lt2 < zone4 < 1",
            parameter="hrr_fractions",
        )

    max_bpm = int(round(max_hr))
    rest_bpm = int(round(resting_hr))
    hr_reserve = max_hr - resting_hr

    def reserve_hr(fraction: float) -> int:
        return int(round(resting_hr + hr_reserve * fraction))

    lt1 = reserve_hr(lt1_fraction)
    lt2 = reserve_hr(lt2_fraction)
    z1_ceiling = reserve_hr(zone1_fraction)
    z4_ceiling = reserve_hr(zone4_fraction)

    # Whole-bpm anchors can collapse on a narrow reserve
    if not (rest_bpm <= z1_ceiling < lt1 < lt2 < z4_ceiling < max_bpm):
        raise ConfigurationError(
            f"Heart rate anchors collapse at whole bpm for max {max_bpm} / rest {rest_bpm}: "
            f"zone1={z1_ceiling} lt1={lt1} lt2={lt2} zone4={z4_ceiling}",
            parameter="hrr_fractions",
        )

    zones = [
        HRZone(1, "Recovery", rest_bpm, z1_ceiling,
               "#22c55e", "Easy effort, active recovery"),
        HRZone(2, "Aerobic Base", z1_ceiling + 1, lt1,
               "#3b82f6", "Endurance building, fat oxidation"),
        HRZone(3, "Tempo", lt1 + 1, lt2,
               "#f59e0b", "Between thresholds, moderate intensity"),
        HRZone(4, "Threshold", lt2 + 1, z4_ceiling,
               "#f97316", "Above LT2, sustained hard effort"),
        HRZone(5, "VO2max", z4_ceiling + 1, max_bpm,
               "#ef4444", "Max effort, short intervals"),
    ]

    logger.debug("LT estimate for %s/%s: LT1=%d LT2=%d", max_hr, resting_hr, lt1, lt2)
    return LTEstimate(lt1=lt1, lt2=lt2, max_hr=max_bpm, resting_hr=rest_bpm, zones=zones)


def derive_max_hr(workouts: Iterable[Workout]) -> Optional[float]:
    """Highest observed max HR across workouts, or None."""
    observed = [w.max_hr for w in workouts if w.max_hr and w.max_hr > 0]
    if not observed:
        return None
    return max(observed)


def derive_resting_hr(logs: Iterable[ManualLog]) -> Optional[float]:
    """Most recent resting_hr log value, or None."""
    return latest_log_value(logs, "resting_hr")


def estimate_max_hr_from_age(age: int) -> int:
    """Estimate max HR by age using the classic 220 - age formula."""
    return 220 - age
