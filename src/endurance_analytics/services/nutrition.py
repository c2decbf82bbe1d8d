"""Race nutrition planning.

Per-hour carbohydrate, fluid and sodium targets scale with race distance,
heat stress and classification. Totals are derived from the pacing plan's
bike and run split durations so the summary always matches the pacing.
"""

import logging
from typing import Dict, List, Optional, Tuple

from ..models.race_plan import (
    AthleteClassification,
    CalorieSummary,
    NutritionPlan,
    PacingBucket,
    PreRaceNutrition,
    RaceConditions,
    RaceDistance,
    RaceMorningNutrition,
    SegmentNutrition,
    pacing_bucket,
)


logger = logging.getLogger(__name__)

DEFAULT_WEIGHT_KG = 70.0
KCAL_PER_GRAM_CARB = 4

# Heat stress: hot day, or warm and humid
HOT_TEMP_C = 27.0
WARM_TEMP_C = 24.0
HUMID_PCT = 70.0

BIKE_CARBS_G_PER_HOUR: Dict[PacingBucket, Tuple[int, int]] = {
    PacingBucket.SPRINT: (0, 30),
    PacingBucket.OLYMPIC: (30, 60),
    PacingBucket.HALF_IRONMAN: (60, 90),
    PacingBucket.IRONMAN: (80, 120),
}
RUN_CARBS_G_PER_HOUR: Dict[PacingBucket, Tuple[int, int]] = {
    PacingBucket.SPRINT: (0, 0),
    PacingBucket.OLYMPIC: (20, 40),
    PacingBucket.HALF_IRONMAN: (40, 60),
    PacingBucket.IRONMAN: (60, 90),
}
PRO_BIKE_CARB_FACTOR = 1.15
PRO_RUN_CARB_FACTOR = 1.1

# (normal, hot) per-hour ranges
BIKE_FLUID_ML = ((500, 750), (750, 1000))
BIKE_SODIUM_MG = ((500, 750), (750, 1000))
RUN_FLUID_ML = ((400, 600), (500, 750))
RUN_SODIUM_MG = ((300, 500), (500, 750))

FOODS_TO_AVOID = [
    "High-fiber foods (beans, broccoli, whole grains)",
    "High-fat or greasy foods",
    "Spicy foods",
    "Anything you haven't eaten before",
    "Excessive alcohol or caffeine",
]

RACE_MORNING_MEALS = [
    "Toast with honey and banana",
    "Oatmeal with maple syrup",
    "White rice with honey",
    "Bagel with peanut butter and jam",
]


def is_heat_stress(conditions: Optional[RaceConditions]) -> bool:
    """Hot (>27C) or warm (>24C) with humidity above 70%."""
    if conditions is None or conditions.temp_high_c is None:
        return False
    if conditions.temp_high_c > HOT_TEMP_C:
        return True
    humidity = conditions.humidity_pct or 0
    return conditions.temp_high_c > WARM_TEMP_C and humidity > HUMID_PCT


def _scale(value_range: Tuple[int, int], factor: float) -> Tuple[int, int]:
    return int(round(value_range[0] * factor)), int(round(value_range[1] * factor))


def _midpoint(value_range: Tuple[int, int]) -> float:
    return (value_range[0] + value_range[1]) / 2


def generate_pre_race(bucket: PacingBucket, weight_kg: float) -> PreRaceNutrition:
    if bucket in (PacingBucket.HALF_IRONMAN, PacingBucket.IRONMAN):
        carb_target = (
            f"{int(round(weight_kg * 8))}-{int(round(weight_kg * 12))}g carbs/day "
            "for 24-48 hours before race"
        )
    else:
        carb_target = f"{int(round(weight_kg * 6))}-{int(round(weight_kg * 8))}g carbs/day the day before"

    return PreRaceNutrition(
        carb_loading_target=carb_target,
        hydration_target="Sip water consistently. Target pale yellow urine color.",
        foods_to_avoid=list(FOODS_TO_AVOID),
        last_big_meal="10-12 hours before race start. Keep dinner simple: rice, pasta, chicken, bread.",
    )


def generate_race_morning(weight_kg: float) -> RaceMorningNutrition:
    return RaceMorningNutrition(
        meal_target=f"{int(round(weight_kg))}-{int(round(weight_kg * 2))}g carbs, 2-3 hours before start",
        example_meals=list(RACE_MORNING_MEALS),
        caffeine=f"{int(round(weight_kg * 3))}-{int(round(weight_kg * 6))}mg caffeine, 60-90 min before start",
        hydration="500-750ml water with electrolytes, sipped over 2 hours before start",
    )


def bike_carb_range(bucket: PacingBucket, is_pro: bool) -> Tuple[int, int]:
    carbs = BIKE_CARBS_G_PER_HOUR[bucket]
    return _scale(carbs, PRO_BIKE_CARB_FACTOR) if is_pro else carbs


def run_carb_range(bucket: PacingBucket, is_pro: bool) -> Tuple[int, int]:
    carbs = RUN_CARBS_G_PER_HOUR[bucket]
    if is_pro and bucket != PacingBucket.SPRINT:
        return _scale(carbs, PRO_RUN_CARB_FACTOR)
    return carbs


def generate_bike_nutrition(
    bucket: PacingBucket,
    hot: bool,
    sweat_rate_l_per_hr: Optional[float],
    split_seconds: int,
    is_pro: bool,
) -> SegmentNutrition:
    carbs = bike_carb_range(bucket, is_pro)
    fluid = BIKE_FLUID_ML[hot]
    sodium = BIKE_SODIUM_MG[hot]

    hydration = f"{fluid[0]}-{fluid[1]}ml/hour"
    if sweat_rate_l_per_hr:
        hydration += f" (your sweat rate: {sweat_rate_l_per_hr}L/hr, adjust accordingly)"

    if bucket == PacingBucket.IRONMAN:
        products = [
            "Drink mix in bottles (primary carb source)",
            "Gels every 30-45 min as supplement",
            "Real food first 2 hours (rice cakes, bars) if tolerated",
            "Salt tabs every 45-60 min in heat",
        ]
    elif bucket == PacingBucket.HALF_IRONMAN:
        products = ["Drink mix in bottles", "2-3 gels spaced evenly", "Salt tabs if hot"]
    else:
        products = ["Drink mix or 1-2 gels", "Water at aid stations"]

    if split_seconds / 3600 > 3:
        notes = "For rides over 3 hours, gut training is essential. Practice race nutrition in training."
    else:
        notes = "Keep nutrition simple. Don't overdo it on shorter courses."

    return SegmentNutrition(
        carbs_per_hour=f"{carbs[0]}-{carbs[1]}g/hour" + (" (pro-level intake)" if is_pro else ""),
        carbs_g_per_hour_range=carbs,
        hydration_per_hour=hydration,
        fluid_ml_per_hour_range=fluid,
        electrolytes_per_hour=f"{sodium[0]}-{sodium[1]}mg sodium/hour",
        sodium_mg_per_hour_range=sodium,
        timing="Start fueling within the first 15 minutes on the bike. Take nutrition every 15-20 minutes.",
        product_suggestions=products,
        notes=notes,
    )


def generate_run_nutrition(
    bucket: PacingBucket,
    hot: bool,
    is_pro: bool,
) -> SegmentNutrition:
    carbs = run_carb_range(bucket, is_pro)
    fluid = RUN_FLUID_ML[hot]
    sodium = RUN_SODIUM_MG[hot]

    if bucket == PacingBucket.IRONMAN:
        products = [
            "Gels every 20-30 min",
            "Cola at aid stations in the second half (caffeine + sugar)",
            "Water and electrolyte drink at every aid station",
            "Pretzels or salt if craving solid food",
        ]
    elif bucket == PacingBucket.HALF_IRONMAN:
        products = ["2-3 gels spaced evenly", "Water at every aid station", "Cola in the last 5K if needed"]
    else:
        products = ["Water at aid stations", "A gel at halfway if needed"]

    if bucket == PacingBucket.SPRINT:
        timing = "Grab water at aid stations. No major fueling needed."
    else:
        timing = "Take something at every aid station. Small sips, small bites."

    return SegmentNutrition(
        carbs_per_hour="Minimal, pre-race fueling sufficient" if carbs[1] == 0 else f"{carbs[0]}-{carbs[1]}g/hour",
        carbs_g_per_hour_range=carbs,
        hydration_per_hour=f"{fluid[0]}-{fluid[1]}ml/hour",
        fluid_ml_per_hour_range=fluid,
        electrolytes_per_hour=f"{sodium[0]}-{sodium[1]}mg sodium/hour",
        sodium_mg_per_hour_range=sodium,
        timing=timing,
        product_suggestions=products,
        notes="If you feel GI distress, slow down slightly, switch to water only, and sip cola for easy calories.",
    )


def generate_calorie_summary(
    bike: SegmentNutrition,
    run: SegmentNutrition,
    bike_split_seconds: int,
    run_split_seconds: int,
) -> CalorieSummary:
    """
    Race totals from per-hour midpoints and segment durations.

    Args:
        bike: Bike segment plan
        run: Run segment plan
        bike_split_seconds: Bike split from the pacing plan
        run_split_seconds: Run split from the pacing plan

    Returns:
        CalorieSummary
    """
    bike_hours = bike_split_seconds / 3600
    run_hours = run_split_seconds / 3600

    bike_carbs = int(round(_midpoint(bike.carbs_g_per_hour_range) * bike_hours))
    run_carbs = int(round(_midpoint(run.carbs_g_per_hour_range) * run_hours))
    fluid = (
        _midpoint(bike.fluid_ml_per_hour_range) * bike_hours
        + _midpoint(run.fluid_ml_per_hour_range) * run_hours
    )
    sodium = (
        _midpoint(bike.sodium_mg_per_hour_range) * bike_hours
        + _midpoint(run.sodium_mg_per_hour_range) * run_hours
    )

    return CalorieSummary(
        total_calories=(bike_carbs + run_carbs) * KCAL_PER_GRAM_CARB,
        total_carbs_grams=bike_carbs + run_carbs,
        bike_calories=bike_carbs * KCAL_PER_GRAM_CARB,
        bike_carbs_grams=bike_carbs,
        run_calories=run_carbs * KCAL_PER_GRAM_CARB,
        run_carbs_grams=run_carbs,
        total_fluid_ml=int(round(fluid)),
        total_sodium_mg=int(round(sodium)),
    )


def generate_nutrition_plan(
    distance: RaceDistance,
    weight_kg: Optional[float],
    conditions: Optional[RaceConditions],
    sweat_rate_l_per_hr: Optional[float],
    bike_split_seconds: int,
    run_split_seconds: int,
    classification: AthleteClassification = AthleteClassification.AGE_GROUPER,
) -> NutritionPlan:
    """
    Generate the race nutrition plan.

    Args:
        distance: Race distance
        weight_kg: Body weight (70kg when unknown)
        conditions: Race conditions (heat stress raises fluid and sodium)
        sweat_rate_l_per_hr: Latest logged sweat rate, if any
        bike_split_seconds: Bike split from the pacing plan
        run_split_seconds: Run split from the pacing plan
        classification: Athlete classification

    Returns:
        NutritionPlan
    """
    weight = weight_kg or DEFAULT_WEIGHT_KG
    if not weight_kg:
        logger.warning("No body weight logged, scaling nutrition for %.0fkg", DEFAULT_WEIGHT_KG)
    hot = is_heat_stress(conditions)
    is_pro = classification == AthleteClassification.PROFESSIONAL
    bucket = pacing_bucket(distance)

    bike = generate_bike_nutrition(bucket, hot, sweat_rate_l_per_hr, bike_split_seconds, is_pro)
    run = generate_run_nutrition(bucket, hot, is_pro)

    return NutritionPlan(
        pre_race=generate_pre_race(bucket, weight),
        race_morning=generate_race_morning(weight),
        swim="No nutrition needed during the swim. Pre-race fueling carries you through.",
        bike=bike,
        run=run,
        summary=generate_calorie_summary(bike, run, bike_split_seconds, run_split_seconds),
    )
