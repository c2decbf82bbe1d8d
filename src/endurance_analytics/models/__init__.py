"""Data models for input records and generated race plans."""

from .records import (
    LogCategory,
    ManualLog,
    QualificationStandard,
    SessionMetric,
    Sport,
    Workout,
    latest_log_value,
    parse_records,
)
from .race_plan import (
    AthleteClassification,
    ChecklistCategory,
    Confidence,
    CourseProfile,
    CourseType,
    CustomDistances,
    FitnessSnapshot,
    GoalType,
    PacingBucket,
    RaceConditions,
    RaceCourse,
    RaceDistance,
    RaceDistances,
    RacePlan,
    RacePlanChecklist,
    STANDARD_DISTANCES,
    WaterType,
    WindCondition,
    is_draft_legal,
    is_qualification_goal,
    pacing_bucket,
    resolve_distances,
)

__all__ = [
    # Records
    "LogCategory",
    "ManualLog",
    "QualificationStandard",
    "SessionMetric",
    "Sport",
    "Workout",
    "latest_log_value",
    "parse_records",
    # Race plan
    "AthleteClassification",
    "ChecklistCategory",
    "Confidence",
    "CourseProfile",
    "CourseType",
    "CustomDistances",
    "FitnessSnapshot",
    "GoalType",
    "PacingBucket",
    "RaceConditions",
    "RaceCourse",
    "RaceDistance",
    "RaceDistances",
    "RacePlan",
    "RacePlanChecklist",
    "STANDARD_DISTANCES",
    "WaterType",
    "WindCondition",
    "is_draft_legal",
    "is_qualification_goal",
    "pacing_bucket",
    "resolve_distances",
]
