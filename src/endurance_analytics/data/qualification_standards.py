"""Reference qualification standards.

2026 standards seeded from rolling 5-year averages of age-group cutoffs.
Multipliers are age-grading factors relative to the fastest age group;
World Triathlon standards are published as cutoffs only.
"""

from typing import Dict, List, Tuple

from ..models.records import QualificationStandard


STANDARDS_YEAR = 2026

CHAMPIONSHIP_LABELS: Dict[str, str] = {
    "kona": "IRONMAN World Championship (Kona)",
    "70.3_worlds": "IRONMAN 70.3 World Championship",
    "wt_ag_sprint": "World Triathlon AG Worlds - Sprint",
    "wt_ag_standard": "World Triathlon AG Worlds - Standard",
}

# Leg distances in meters
CHAMPIONSHIP_DISTANCES: Dict[str, Dict[str, float]] = {
    "kona": {"swim_m": 3800, "bike_m": 180_000, "run_m": 42_200},
    "70.3_worlds": {"swim_m": 1900, "bike_m": 90_000, "run_m": 21_100},
    "wt_ag_sprint": {"swim_m": 750, "bike_m": 20_000, "run_m": 5_000},
    "wt_ag_standard": {"swim_m": 1500, "bike_m": 40_000, "run_m": 10_000},
}

# (age_group, multiplier, male cutoff seconds, female cutoff seconds)
_KONA: List[Tuple[str, float, int, int]] = [
    ("18-24", 1.000, 34200, 37800),
    ("25-29", 1.000, 34200, 37800),
    ("30-34", 1.005, 34600, 38200),
    ("35-39", 1.020, 35000, 38700),
    ("40-44", 1.045, 35800, 39600),
    ("45-49", 1.075, 37000, 40800),
    ("50-54", 1.115, 38400, 42300),
    ("55-59", 1.165, 40200, 44400),
    ("60-64", 1.230, 42600, 46800),
    ("65-69", 1.310, 45600, 50400),
    ("70-74", 1.410, 49200, 54600),
    ("75-79", 1.530, 54000, 59400),
]

_WORLDS_703: List[Tuple[str, float, int, int]] = [
    ("18-24", 1.000, 16500, 18300),
    ("25-29", 1.000, 16500, 18300),
    ("30-34", 1.005, 16700, 18500),
    ("35-39", 1.015, 16900, 18700),
    ("40-44", 1.035, 17300, 19100),
    ("45-49", 1.060, 17800, 19600),
    ("50-54", 1.095, 18400, 20400),
    ("55-59", 1.140, 19200, 21300),
    ("60-64", 1.200, 20400, 22500),
    ("65-69", 1.275, 21900, 24300),
    ("70-74", 1.370, 23700, 26100),
    ("75-79", 1.480, 26100, 28500),
]

# (age_group, male cutoff seconds, female cutoff seconds)
_WT_SPRINT: List[Tuple[str, int, int]] = [
    ("18-24", 3780, 4380),
    ("25-29", 3780, 4380),
    ("30-34", 3840, 4440),
    ("35-39", 3900, 4500),
    ("40-44", 4020, 4680),
    ("45-49", 4200, 4920),
    ("50-54", 4440, 5160),
    ("55-59", 4740, 5520),
    ("60-64", 5100, 5940),
]

_WT_STANDARD: List[Tuple[str, int, int]] = [
    ("18-24", 7560, 8760),
    ("25-29", 7560, 8760),
    ("30-34", 7680, 8880),
    ("35-39", 7860, 9060),
    ("40-44", 8160, 9360),
    ("45-49", 8460, 9720),
    ("50-54", 8820, 10200),
    ("55-59", 9360, 10920),
    ("60-64", 10020, 11820),
]


def _build_standards() -> List[QualificationStandard]:
    standards = []
    for championship, rows in (("kona", _KONA), ("70.3_worlds", _WORLDS_703)):
        for age_group, multiplier, male_cutoff, female_cutoff in rows:
            for gender, cutoff in (("male", male_cutoff), ("female", female_cutoff)):
                standards.append(QualificationStandard(
                    championship=championship,
                    qualifying_year=STANDARDS_YEAR,
                    gender=gender,
                    age_group=age_group,
                    standard_multiplier=multiplier,
                    estimated_cutoff_seconds=cutoff,
                ))
    for championship, rows in (("wt_ag_sprint", _WT_SPRINT), ("wt_ag_standard", _WT_STANDARD)):
        for age_group, male_cutoff, female_cutoff in rows:
            for gender, cutoff in (("male", male_cutoff), ("female", female_cutoff)):
                standards.append(QualificationStandard(
                    championship=championship,
                    qualifying_year=STANDARDS_YEAR,
                    gender=gender,
                    age_group=age_group,
                    estimated_cutoff_seconds=cutoff,
                ))
    return standards


QUALIFICATION_STANDARDS: List[QualificationStandard] = _build_standards()


def get_reference_standards() -> List[QualificationStandard]:
    """Reference standards usable without a persistence layer."""
    return list(QUALIFICATION_STANDARDS)
