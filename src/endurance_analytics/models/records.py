"""Input records supplied by the persistence collaborator.

These models are read-only snapshots. Coercion of loosely typed rows
(ISO date strings, numeric strings) happens here at the caller boundary,
never inside the metric or plan computations.
"""

import datetime as dt
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import RecordValidationError


class Sport(str, Enum):
    """Workout disciplines."""
    SWIM = "swim"
    BIKE = "bike"
    RUN = "run"
    BRICK = "brick"


class LogCategory(str, Enum):
    """Manual log categories."""
    METABOLIC = "metabolic"
    PHYSIOLOGICAL = "physiological"
    ENVIRONMENTAL = "environmental"


class Workout(BaseModel):
    """One completed training session."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    sport: Sport
    date: dt.date
    title: Optional[str] = None
    duration_seconds: Optional[int] = Field(None, ge=0)
    distance_meters: Optional[float] = Field(None, ge=0)

    # Swim
    pool_length_meters: Optional[float] = None
    stroke_type: Optional[str] = None
    swolf: Optional[float] = None

    # Bike
    avg_power_watts: Optional[float] = None
    normalized_power: Optional[float] = None
    tss: Optional[float] = None
    avg_cadence_rpm: Optional[float] = None
    elevation_gain_meters: Optional[float] = None

    # Run
    avg_pace_sec_per_km: Optional[float] = None
    avg_cadence_spm: Optional[float] = None

    # Universal
    avg_hr: Optional[float] = None
    max_hr: Optional[float] = None
    calories: Optional[float] = None
    rpe: Optional[float] = Field(None, ge=1, le=10)
    notes: Optional[str] = None

    @property
    def duration_hours(self) -> float:
        """Duration in hours (0 when unknown)."""
        return (self.duration_seconds or 0) / 3600

    @property
    def swim_pace_per_100m(self) -> Optional[float]:
        """Average swim pace in sec/100m derived from distance and duration."""
        if not self.distance_meters or not self.duration_seconds:
            return None
        return self.duration_seconds / (self.distance_meters / 100)


class SessionMetric(BaseModel):
    """One timestamped sample within a workout."""

    model_config = ConfigDict(frozen=True)

    workout_id: Optional[str] = None
    timestamp_offset_seconds: float = Field(..., ge=0)
    heart_rate: Optional[float] = None
    power_watts: Optional[float] = None
    pace_sec_per_km: Optional[float] = None
    cadence: Optional[float] = None
    speed_mps: Optional[float] = None


class ManualLog(BaseModel):
    """A dated scalar observation (metabolic, physiological or environmental)."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    workout_id: Optional[str] = None
    date: dt.date
    category: LogCategory
    log_type: str
    value: float
    unit: Optional[str] = None


class QualificationStandard(BaseModel):
    """Reference qualifying standard for a championship / gender / age group."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    championship: str
    qualifying_year: int
    gender: str
    age_group: str
    standard_multiplier: Optional[float] = None
    benchmark_time_seconds: Optional[int] = None
    estimated_cutoff_seconds: Optional[int] = None
    source_note: Optional[str] = None


def latest_log_value(logs: Iterable[ManualLog], log_type: str) -> Optional[float]:
    """Value of the most recent log of the given type, or None."""
    matching = [log for log in logs if log.log_type == log_type]
    if not matching:
        return None
    return max(matching, key=lambda log: log.date).value


ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_records(model: Type[ModelT], rows: Iterable[Dict[str, Any]]) -> List[ModelT]:
    """
    Coerce raw dict rows into validated records.

    Args:
        model: Record model class (Workout, SessionMetric, ...)
        rows: Raw rows as delivered by the persistence layer

    Returns:
        List of validated, frozen records

    Raises:
        RecordValidationError: If a row cannot be coerced
    """
    records = []
    for index, row in enumerate(rows):
        try:
            records.append(model.model_validate(row))
        except PydanticValidationError as exc:
            raise RecordValidationError(
                f"Invalid {model.__name__} at index {index}: {exc.error_count()} error(s)",
                record_type=model.__name__,
                details={"index": index, "errors": exc.errors(include_url=False)},
            ) from exc
    return records
