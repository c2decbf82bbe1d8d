"""Aerobic decoupling (Pa:HR / Pw:HR drift) analysis.

The session is split at its midpoint and the output-to-heart-rate ratio of
the two halves is compared:

    Decoupling = (first_half_ratio - second_half_ratio) / first_half_ratio * 100

- < 5%: well coupled (good aerobic fitness)
- 5-10%: mild decoupling
- > 10%: significant decoupling (aerobic endurance needs work)
"""

import logging
from enum import Enum
from typing import Iterable, List, Optional

from ..models.records import SessionMetric


logger = logging.getLogger(__name__)

MIN_SAMPLES = 10
WELL_COUPLED_THRESHOLD_PCT = 5.0
MILD_DECOUPLING_THRESHOLD_PCT = 10.0


class DecouplingClass(str, Enum):
    WELL_COUPLED = "well_coupled"
    MILD = "mild"
    SIGNIFICANT = "significant"


def _sample_output(sample: SessionMetric) -> Optional[float]:
    """Output of a sample: power, else speed*100, else (1000/pace)*100."""
    if sample.power_watts:
        return sample.power_watts
    if sample.speed_mps:
        return sample.speed_mps * 100
    if sample.pace_sec_per_km and sample.pace_sec_per_km > 0:
        return (1000 / sample.pace_sec_per_km) * 100
    return None


def _output_hr_ratio(segment: List[SessionMetric]) -> Optional[float]:
    outputs = []
    heart_rates = []
    for sample in segment:
        if not sample.heart_rate or sample.heart_rate <= 0:
            continue
        output = _sample_output(sample)
        if output is None:
            continue
        outputs.append(output)
        heart_rates.append(sample.heart_rate)

    if not heart_rates:
        return None

    avg_hr = sum(heart_rates) / len(heart_rates)
    avg_output = sum(outputs) / len(outputs)
    return avg_output / avg_hr


def calculate_decoupling(samples: Iterable[SessionMetric]) -> Optional[float]:
    """
    Calculate aerobic decoupling for one session.

    Args:
        samples: Timestamped session samples in any order

    Returns:
        Decoupling percent rounded to 1 decimal (negative means the second
        half was more efficient), or None when there are fewer than 10
        samples, a half has no usable samples, or the first ratio is zero
    """
    ordered = sorted(samples, key=lambda s: s.timestamp_offset_seconds)
    if len(ordered) < MIN_SAMPLES:
        return None

    midpoint = len(ordered) // 2
    first_ratio = _output_hr_ratio(ordered[:midpoint])
    second_ratio = _output_hr_ratio(ordered[midpoint:])

    if first_ratio is None or second_ratio is None or first_ratio == 0:
        return None

    decoupling = (first_ratio - second_ratio) / first_ratio * 100
    logger.debug(
        "Decoupling over %d samples: %.3f -> %.3f (%.1f%%)",
        len(ordered), first_ratio, second_ratio, decoupling,
    )
    return round(decoupling, 1)


def classify_decoupling(pct: float) -> DecouplingClass:
    """Classify a decoupling percent."""
    if pct < WELL_COUPLED_THRESHOLD_PCT:
        return DecouplingClass.WELL_COUPLED
    elif pct < MILD_DECOUPLING_THRESHOLD_PCT:
        return DecouplingClass.MILD
    else:
        return DecouplingClass.SIGNIFICANT


DECOUPLING_LABELS = {
    DecouplingClass.WELL_COUPLED: "Well coupled",
    DecouplingClass.MILD: "Mild decoupling",
    DecouplingClass.SIGNIFICANT: "Significant decoupling",
}

DECOUPLING_COLORS = {
    DecouplingClass.WELL_COUPLED: "green",
    DecouplingClass.MILD: "yellow",
    DecouplingClass.SIGNIFICANT: "red",
}


def decoupling_label(pct: float) -> str:
    return DECOUPLING_LABELS[classify_decoupling(pct)]


def decoupling_color(pct: float) -> str:
    return DECOUPLING_COLORS[classify_decoupling(pct)]
