"""Training metrics calculations."""

from .load import LoadThresholds, build_daily_tss, estimate_tss
from .fitness import (
    DailyLoadPoint,
    calculate_ewma,
    calculate_load_series,
    current_load,
    describe_form,
    weekly_volume,
)
from .efficiency import (
    calculate_bike_ef,
    calculate_run_ef,
    calculate_swim_ef,
    ef_series,
    ef_trend,
    get_ef,
)
from .decoupling import (
    DecouplingClass,
    calculate_decoupling,
    classify_decoupling,
    decoupling_color,
    decoupling_label,
)
from .threshold import (
    HRZone,
    LTEstimate,
    derive_max_hr,
    derive_resting_hr,
    estimate_lactate_thresholds,
    estimate_max_hr_from_age,
    validate_hr_inputs,
)
from .readiness import (
    CNSStatus,
    ReadinessScore,
    calculate_readiness,
    detect_cns_fatigue,
    life_stress_average,
    readiness_label,
)
from .metabolic import analyze_metabolic_floor, metabolic_ceiling

__all__ = [
    # Training load
    "LoadThresholds",
    "build_daily_tss",
    "estimate_tss",
    # Fitness model
    "DailyLoadPoint",
    "calculate_ewma",
    "calculate_load_series",
    "current_load",
    "describe_form",
    "weekly_volume",
    # Efficiency
    "calculate_bike_ef",
    "calculate_run_ef",
    "calculate_swim_ef",
    "ef_series",
    "ef_trend",
    "get_ef",
    # Decoupling
    "DecouplingClass",
    "calculate_decoupling",
    "classify_decoupling",
    "decoupling_color",
    "decoupling_label",
    # Lactate threshold
    "HRZone",
    "LTEstimate",
    "derive_max_hr",
    "derive_resting_hr",
    "estimate_lactate_thresholds",
    "estimate_max_hr_from_age",
    "validate_hr_inputs",
    # Readiness
    "CNSStatus",
    "ReadinessScore",
    "calculate_readiness",
    "detect_cns_fatigue",
    "life_stress_average",
    "readiness_label",
    # Metabolic
    "analyze_metabolic_floor",
    "metabolic_ceiling",
]
