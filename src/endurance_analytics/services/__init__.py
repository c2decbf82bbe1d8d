"""Race planning services."""

from .pacing import (
    estimate_css_from_workouts,
    estimate_ftp_from_workouts,
    estimate_lthr,
    generate_pacing_plan,
)
from .nutrition import generate_nutrition_plan
from .equipment import build_checklist_rows, generate_equipment_plan
from .mindset import generate_mindset_plan
from .qualification import (
    assess_qualification_readiness,
    calculate_pro_card_eligibility,
    find_standard,
    generate_qualification_pacing,
    get_qualification_explainer,
    goal_to_championship,
    is_qualification_competitive,
)
from .race_plan_service import (
    RacePlanService,
    build_fitness_snapshot,
    generate_full_race_plan,
    get_race_plan_service,
    regenerate_race_plan,
)

__all__ = [
    # Pacing
    "estimate_css_from_workouts",
    "estimate_ftp_from_workouts",
    "estimate_lthr",
    "generate_pacing_plan",
    # Nutrition, equipment, mindset
    "generate_nutrition_plan",
    "build_checklist_rows",
    "generate_equipment_plan",
    "generate_mindset_plan",
    # Qualification
    "assess_qualification_readiness",
    "calculate_pro_card_eligibility",
    "find_standard",
    "generate_qualification_pacing",
    "get_qualification_explainer",
    "goal_to_championship",
    "is_qualification_competitive",
    # Race plan service
    "RacePlanService",
    "build_fitness_snapshot",
    "generate_full_race_plan",
    "get_race_plan_service",
    "regenerate_race_plan",
]
