"""Race plan models for the triathlon race plan generator.

This module defines Pydantic models for:
- Race distances, goals and athlete classification
- Race conditions and course reference rows
- Pacing, nutrition, equipment and mindset plans
- Fitness snapshots and qualification targets / readiness
- The complete race plan artifact and its checklist rows
"""

import datetime as dt
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RaceDistance(str, Enum):
    """Supported triathlon race distances."""
    SUPER_SPRINT = "super_sprint"
    SPRINT = "sprint"
    OLYMPIC = "olympic"
    WT_SPRINT = "wt_sprint"
    WT_STANDARD = "wt_standard"
    HALF_IRONMAN = "70.3"
    IRONMAN = "140.6"
    CUSTOM = "custom"


class PacingBucket(str, Enum):
    """Distance families sharing pacing, fueling and logistics rules."""
    SPRINT = "sprint"
    OLYMPIC = "olympic"
    HALF_IRONMAN = "70.3"
    IRONMAN = "140.6"


class AthleteClassification(str, Enum):
    """Athlete category."""
    AGE_GROUPER = "age_grouper"
    PROFESSIONAL = "professional"


class GoalType(str, Enum):
    """Race goals for age groupers and professionals."""
    # Age group goals
    FINISH = "finish"
    PR = "pr"
    AG_PODIUM = "ag_podium"
    AG_WIN = "ag_win"
    QUALIFY_IM_703_WORLDS = "qualify_im_703_worlds"
    QUALIFY_IM_KONA = "qualify_im_kona"
    QUALIFY_WT_AG_WORLDS = "qualify_wt_ag_worlds"
    QUALIFY_USAT_NATIONALS = "qualify_usat_nationals"
    LEGACY_QUALIFICATION = "legacy_qualification"
    # Professional goals
    WIN_PODIUM = "win_podium"
    PRO_CARD_QUALIFICATION = "pro_card_qualification"
    IM_PRO_SLOT = "im_pro_slot"
    PTO_RANKING_POINTS = "pto_ranking_points"
    WT_SERIES_POINTS = "wt_series_points"
    PRIZE_MONEY = "prize_money"
    COURSE_RECORD = "course_record"


QUALIFICATION_GOALS = frozenset({
    GoalType.QUALIFY_IM_703_WORLDS,
    GoalType.QUALIFY_IM_KONA,
    GoalType.QUALIFY_WT_AG_WORLDS,
    GoalType.QUALIFY_USAT_NATIONALS,
    GoalType.PRO_CARD_QUALIFICATION,
    GoalType.IM_PRO_SLOT,
})


class CourseProfile(str, Enum):
    FLAT = "flat"
    ROLLING = "rolling"
    HILLY = "hilly"
    MOUNTAINOUS = "mountainous"


class WaterType(str, Enum):
    POOL = "pool"
    LAKE = "lake"
    OCEAN = "ocean"
    RIVER = "river"


class WindCondition(str, Enum):
    CALM = "calm"
    LIGHT = "light"
    MODERATE = "moderate"
    STRONG = "strong"


class CourseType(str, Enum):
    POINT_TO_POINT = "point_to_point"
    OUT_AND_BACK = "out_and_back"
    LOOP = "loop"
    MULTI_LOOP = "multi_loop"


class ChecklistCategory(str, Enum):
    SWIM = "swim"
    BIKE = "bike"
    RUN = "run"
    TRANSITION = "transition"
    NUTRITION = "nutrition"
    SPECIAL_NEEDS = "special_needs"


class Confidence(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


AGE_GROUPS = (
    "18-24", "25-29", "30-34", "35-39", "40-44", "45-49",
    "50-54", "55-59", "60-64", "65-69", "70-74", "75-79", "80-84", "85-89",
)


# ---------------------------------------------------------------------------
# Distances & conditions
# ---------------------------------------------------------------------------

class RaceDistances(BaseModel):
    """Leg distances in meters."""

    model_config = ConfigDict(frozen=True)

    swim_m: float = Field(..., gt=0)
    bike_m: float = Field(..., gt=0)
    run_m: float = Field(..., gt=0)

    @property
    def bike_km(self) -> float:
        return self.bike_m / 1000

    @property
    def run_km(self) -> float:
        return self.run_m / 1000

    @property
    def total_m(self) -> float:
        return self.swim_m + self.bike_m + self.run_m


class CustomDistances(BaseModel):
    """Caller-supplied leg distances in meters; missing legs use defaults."""

    model_config = ConfigDict(frozen=True)

    swim_m: Optional[float] = Field(None, gt=0)
    bike_m: Optional[float] = Field(None, gt=0)
    run_m: Optional[float] = Field(None, gt=0)


STANDARD_DISTANCES: Dict[RaceDistance, RaceDistances] = {
    RaceDistance.SUPER_SPRINT: RaceDistances(swim_m=400, bike_m=10_000, run_m=2_500),
    RaceDistance.SPRINT: RaceDistances(swim_m=750, bike_m=20_000, run_m=5_000),
    RaceDistance.OLYMPIC: RaceDistances(swim_m=1500, bike_m=40_000, run_m=10_000),
    RaceDistance.WT_SPRINT: RaceDistances(swim_m=750, bike_m=20_000, run_m=5_000),
    RaceDistance.WT_STANDARD: RaceDistances(swim_m=1500, bike_m=40_000, run_m=10_000),
    RaceDistance.HALF_IRONMAN: RaceDistances(swim_m=1900, bike_m=90_000, run_m=21_100),
    RaceDistance.IRONMAN: RaceDistances(swim_m=3800, bike_m=180_000, run_m=42_200),
}

# Leg defaults for custom races with missing legs
DEFAULT_CUSTOM_DISTANCES = RaceDistances(swim_m=750, bike_m=20_000, run_m=5_000)


class RaceConditions(BaseModel):
    """Environmental and course descriptor. Absent fields use defaults."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "temp_low_c": 21,
                "temp_high_c": 31,
                "humidity_pct": 75,
                "altitude_m": 0,
                "water_temp_c": 26,
                "water_type": "ocean",
                "wetsuit_legal": False,
                "wind": "strong",
                "course_profile": "rolling",
                "course_type": "out_and_back",
            }
        },
    )

    temp_low_c: Optional[float] = Field(None, ge=-30, le=55)
    temp_high_c: Optional[float] = Field(None, ge=-30, le=55)
    humidity_pct: Optional[float] = Field(None, ge=0, le=100)
    altitude_m: Optional[float] = Field(None, ge=0, le=5000)
    water_temp_c: Optional[float] = Field(None, ge=0, le=40)
    water_type: WaterType = WaterType.LAKE
    wetsuit_legal: Optional[bool] = None
    wind: WindCondition = WindCondition.CALM
    course_profile: CourseProfile = CourseProfile.FLAT
    course_type: CourseType = CourseType.LOOP


class RaceCourse(BaseModel):
    """Reference course row with typical race-day conditions."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    name: str
    location_city: Optional[str] = None
    location_country: Optional[str] = None
    race_series: Optional[str] = None
    race_distance: RaceDistance
    swim_distance_m: Optional[float] = None
    bike_distance_m: Optional[float] = None
    run_distance_m: Optional[float] = None
    course_profile: CourseProfile = CourseProfile.FLAT
    course_type: CourseType = CourseType.LOOP
    water_type: WaterType = WaterType.LAKE
    typical_water_temp_c: Optional[float] = None
    typical_temp_low_c: Optional[float] = None
    typical_temp_high_c: Optional[float] = None
    typical_humidity_pct: Optional[float] = None
    altitude_m: Optional[float] = None
    typical_wind: WindCondition = WindCondition.CALM
    wetsuit_legal: Optional[bool] = None
    typical_race_month: Optional[int] = Field(None, ge=1, le=12)
    notable_features: Optional[str] = None
    is_kona_qualifier: bool = False
    is_703_worlds_qualifier: bool = False

    def to_conditions(self) -> RaceConditions:
        """Typical conditions for this course as generator input."""
        return RaceConditions(
            temp_low_c=self.typical_temp_low_c,
            temp_high_c=self.typical_temp_high_c,
            humidity_pct=self.typical_humidity_pct,
            altitude_m=self.altitude_m,
            water_temp_c=self.typical_water_temp_c,
            water_type=self.water_type,
            wetsuit_legal=self.wetsuit_legal,
            wind=self.typical_wind,
            course_profile=self.course_profile,
            course_type=self.course_type,
        )

    def custom_distances(self) -> Optional[CustomDistances]:
        """Leg distances when the course is a custom distance, else None."""
        if self.race_distance != RaceDistance.CUSTOM:
            return None
        return CustomDistances(
            swim_m=self.swim_distance_m,
            bike_m=self.bike_distance_m,
            run_m=self.run_distance_m,
        )


# ---------------------------------------------------------------------------
# Qualification
# ---------------------------------------------------------------------------

class QualificationTarget(BaseModel):
    """Qualifying target derived from a reference standard."""
    championship: str
    standard_multiplier: Optional[float] = None
    estimated_qualifying_time: Optional[int] = None
    ag_standard_source_year: int


class QualificationReadiness(BaseModel):
    """Verdict of estimated finish time versus a qualifying standard."""
    ready: bool
    gap_seconds: Optional[int] = Field(None, description="Estimated minus target; positive = short of the standard")
    confidence: Confidence
    age_graded_time: Optional[int] = None
    target_time: Optional[int] = None
    recommendations: List[str] = Field(default_factory=list)
    explanation: str


# ---------------------------------------------------------------------------
# Pacing plan
# ---------------------------------------------------------------------------

class SwimPacing(BaseModel):
    target_pace_per_100m: int
    estimated_split_seconds: int
    strategy: str
    stroke_rate_target: str
    sighting_frequency: str
    wetsuit_adjustment_pct: float = 0.0
    data_available: bool


class BikePacing(BaseModel):
    target_power_watts: int
    target_power_range: Tuple[int, int]
    climb_power_cap_watts: int
    target_hr_zone: str
    estimated_split_seconds: int
    estimated_speed_kph: float
    cadence_target: str
    strategy: str
    heat_adjustment_pct: float
    altitude_adjustment_pct: float
    variability_allowance_pct: float
    data_available: bool
    is_draft_legal: bool


class RunPacing(BaseModel):
    target_pace_sec_per_km: int
    target_pace_range: Tuple[int, int]
    target_hr_zone: str
    estimated_split_seconds: int
    strategy: str
    walk_break_strategy: Optional[str] = None
    brick_factor_note: str
    heat_adjustment_pct: float
    altitude_adjustment_pct: float
    variability_allowance_pct: float
    data_available: bool


class TransitionTargets(BaseModel):
    t1_seconds: int
    t2_seconds: int
    t1_checklist: List[str]
    t2_checklist: List[str]


class RaceEstimate(BaseModel):
    """Three-point finish time estimate in seconds."""
    optimistic_seconds: int
    realistic_seconds: int
    conservative_seconds: int

    @model_validator(mode="after")
    def check_ordering(self) -> "RaceEstimate":
        if not (self.optimistic_seconds <= self.realistic_seconds <= self.conservative_seconds):
            raise ValueError("Estimates must satisfy optimistic <= realistic <= conservative")
        return self


class QualificationPacingPlan(BaseModel):
    """Leg splits reverse-engineered from a qualifying time."""
    target_finish_seconds: int
    swim_split_target: int
    bike_split_target: int
    run_split_target: int
    t1_target: int
    t2_target: int
    gap_to_current_fitness: int
    recommendations: List[str] = Field(default_factory=list)


class PacingPlan(BaseModel):
    distances: RaceDistances
    swim: SwimPacing
    bike: BikePacing
    run: RunPacing
    transitions: TransitionTargets
    total_estimate: RaceEstimate
    qualification_pacing: Optional[QualificationPacingPlan] = None


# ---------------------------------------------------------------------------
# Nutrition plan
# ---------------------------------------------------------------------------

class PreRaceNutrition(BaseModel):
    carb_loading_target: str
    hydration_target: str
    foods_to_avoid: List[str]
    last_big_meal: str


class RaceMorningNutrition(BaseModel):
    meal_target: str
    example_meals: List[str]
    caffeine: str
    hydration: str


class SegmentNutrition(BaseModel):
    carbs_per_hour: str
    carbs_g_per_hour_range: Tuple[int, int]
    hydration_per_hour: str
    fluid_ml_per_hour_range: Tuple[int, int]
    electrolytes_per_hour: str
    sodium_mg_per_hour_range: Tuple[int, int]
    timing: str
    product_suggestions: List[str]
    notes: str


class CalorieSummary(BaseModel):
    total_calories: int
    total_carbs_grams: int
    bike_calories: int
    bike_carbs_grams: int
    run_calories: int
    run_carbs_grams: int
    total_fluid_ml: int
    total_sodium_mg: int


class NutritionPlan(BaseModel):
    pre_race: PreRaceNutrition
    race_morning: RaceMorningNutrition
    swim: str
    bike: SegmentNutrition
    run: SegmentNutrition
    summary: CalorieSummary


# ---------------------------------------------------------------------------
# Equipment plan
# ---------------------------------------------------------------------------

class EquipmentItem(BaseModel):
    name: str
    category: ChecklistCategory


class RaceWeekTimeline(BaseModel):
    days_out: int = Field(..., ge=0)
    label: str
    tasks: List[str]
    date: Optional[dt.date] = None


class EquipmentPlan(BaseModel):
    checklist: List[EquipmentItem]
    race_week_timeline: List[RaceWeekTimeline]


class RacePlanChecklist(BaseModel):
    """Checklist row for the persistence collaborator."""
    id: Optional[str] = None
    race_plan_id: str
    item_name: str
    category: ChecklistCategory
    is_checked: bool = False
    notes: Optional[str] = None


# ---------------------------------------------------------------------------
# Mindset plan
# ---------------------------------------------------------------------------

class MindsetPlan(BaseModel):
    mantras: List[str]
    visualization_script: str
    process_goals: List[str]
    during_race_strategies: List[str]
    race_week_tips: List[str]
    pro_tactics: Optional[List[str]] = None


# ---------------------------------------------------------------------------
# Fitness snapshot
# ---------------------------------------------------------------------------

class SportValues(BaseModel):
    """Optional per-sport scalar (threshold HR, etc.)."""

    model_config = ConfigDict(frozen=True)

    swim: Optional[float] = None
    bike: Optional[float] = None
    run: Optional[float] = None


class RecentRacePace(BaseModel):
    """Recent representative pace per sport."""

    model_config = ConfigDict(frozen=True)

    swim_sec_per_100m: Optional[float] = None
    bike_kph: Optional[float] = None
    run_sec_per_km: Optional[float] = None


class FitnessSnapshot(BaseModel):
    """Current fitness indicators used for one plan generation."""

    model_config = ConfigDict(frozen=True)

    estimated_ftp: Optional[int] = None
    estimated_css: Optional[int] = Field(None, description="Critical swim speed pace, sec/100m")
    estimated_lthr: SportValues = Field(default_factory=SportValues)
    max_hr: Optional[float] = None
    resting_hr: Optional[float] = None
    lt1_hr: Optional[int] = None
    lt2_hr: Optional[int] = None
    weekly_volume_hours: Optional[float] = None
    recent_race_pace: RecentRacePace = Field(default_factory=RecentRacePace)
    weight_kg: Optional[float] = None
    age_grading_multiplier: Optional[float] = None
    age_graded_estimate: Optional[int] = None
    ctl: Optional[float] = None
    atl: Optional[float] = None
    tsb: Optional[float] = None
    workout_count: int = 0

    def data_indicator_count(self) -> int:
        """Number of core fitness indicators backed by workout data."""
        indicators = [
            self.estimated_ftp,
            self.estimated_css,
            self.estimated_lthr.run,
            self.weekly_volume_hours,
        ]
        return sum(1 for value in indicators if value)


# ---------------------------------------------------------------------------
# Race plan
# ---------------------------------------------------------------------------

class RacePlan(BaseModel):
    """Complete generated race plan."""
    id: Optional[str] = None
    race_name: str
    race_date: Optional[dt.date] = None
    race_distance: RaceDistance
    goal_type: GoalType
    athlete_classification: AthleteClassification
    gender: Optional[str] = None
    age_group: Optional[str] = None
    custom_distances: Optional[CustomDistances] = None
    conditions: Optional[RaceConditions] = None

    pacing_plan: PacingPlan
    nutrition_plan: NutritionPlan
    equipment_plan: EquipmentPlan
    mindset_plan: MindsetPlan
    fitness_snapshot: FitnessSnapshot

    estimated_finish_seconds: int
    estimated_finish_optimistic: int
    estimated_finish_conservative: int
    qualification_target: Optional[QualificationTarget] = None
    estimated_qualification_competitive: Optional[bool] = None
    qualification_readiness: Optional[QualificationReadiness] = None


def is_qualification_goal(goal: GoalType) -> bool:
    """Whether the goal is chasing a qualifying slot."""
    return GoalType(goal) in QUALIFICATION_GOALS


def is_draft_legal(distance: RaceDistance) -> bool:
    """Draft-legal (World Triathlon format) distances."""
    return distance in (RaceDistance.WT_SPRINT, RaceDistance.WT_STANDARD)


def pacing_bucket(distance: RaceDistance) -> PacingBucket:
    """Map a race distance onto its pacing family; custom races pace as olympic."""
    if distance in (RaceDistance.SUPER_SPRINT, RaceDistance.SPRINT, RaceDistance.WT_SPRINT):
        return PacingBucket.SPRINT
    if distance == RaceDistance.HALF_IRONMAN:
        return PacingBucket.HALF_IRONMAN
    if distance == RaceDistance.IRONMAN:
        return PacingBucket.IRONMAN
    return PacingBucket.OLYMPIC


def is_long_course(distance: RaceDistance) -> bool:
    return pacing_bucket(distance) in (PacingBucket.HALF_IRONMAN, PacingBucket.IRONMAN)


def resolve_distances(
    distance: RaceDistance,
    custom: Optional[CustomDistances] = None,
) -> RaceDistances:
    """
    Resolve leg distances for a race.

    Args:
        distance: Race distance category
        custom: Caller-supplied legs (used only for custom races)

    Returns:
        RaceDistances in meters
    """
    if distance != RaceDistance.CUSTOM:
        return STANDARD_DISTANCES[distance]
    custom = custom or CustomDistances()
    return RaceDistances(
        swim_m=custom.swim_m or DEFAULT_CUSTOM_DISTANCES.swim_m,
        bike_m=custom.bike_m or DEFAULT_CUSTOM_DISTANCES.bike_m,
        run_m=custom.run_m or DEFAULT_CUSTOM_DISTANCES.run_m,
    )
