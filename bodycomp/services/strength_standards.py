"""
Strength Standards Service
===========================
Bodyweight-ratio strength standards and performance classification.

  threshold[level][lift] = bodyweight × ratio[gender][level][lift]
  threshold[level].total = bodyweight × (bench + squat + deadlift ratios)

The ratios are against TOTAL bodyweight, unlike the lean-mass multipliers the
predictions use. Standards increase strictly from BEGINNER to ELITE, so
classification walks them from the top down and falls back to NOVICE.
"""

import logging

from bodycomp.core.constants import STRENGTH_STANDARD_RATIOS
from bodycomp.core.enums import Gender, Lift, PerformanceLevel, TrainingLevel
from bodycomp.schemas import (
    LiftClassification,
    LiftStandards,
    PowerliftingPredictions,
    StrengthStandards,
)
from bodycomp.services.powerlifting import calculate_relative_strength

logger = logging.getLogger(__name__)

# Highest level first
CLASSIFICATION_ORDER = (
    TrainingLevel.ELITE,
    TrainingLevel.ADVANCED,
    TrainingLevel.INTERMEDIATE,
    TrainingLevel.BEGINNER,
)


def get_strength_standards(bodyweight: float, gender: Gender) -> StrengthStandards:
    standards: StrengthStandards = {}
    for level, ratios in STRENGTH_STANDARD_RATIOS[gender].items():
        bench = ratios[Lift.BENCH]
        squat = ratios[Lift.SQUAT]
        deadlift = ratios[Lift.DEADLIFT]
        standards[level] = LiftStandards(
            bench=bench * bodyweight,
            squat=squat * bodyweight,
            deadlift=deadlift * bodyweight,
            total=(bench + squat + deadlift) * bodyweight,
        )
    return standards


def classify_against(lift: Lift | str, value: float, standards: StrengthStandards) -> PerformanceLevel:
    """Highest level whose threshold `value` reaches; NOVICE below all of them."""
    for level in CLASSIFICATION_ORDER:
        if value >= standards[level].threshold(lift):
            return PerformanceLevel(level.value)
    return PerformanceLevel.NOVICE


def classify_performance(
    lift: Lift | str,
    value: float,
    bodyweight: float,
    gender: Gender,
) -> PerformanceLevel:
    return classify_against(lift, value, get_strength_standards(bodyweight, gender))


def calculate_progress_to_elite(lift: Lift | str, value: float, standards: StrengthStandards) -> float:
    """Fraction (0..1) of the ELITE threshold reached, for progress bars."""
    elite = standards[TrainingLevel.ELITE].threshold(lift)
    return max(0.0, min(1.0, value / elite))


def classify_predictions(
    predictions: PowerliftingPredictions,
    bodyweight: float,
    standards: StrengthStandards,
) -> dict[Lift, LiftClassification]:
    """Classify every predicted lift and the total against `standards`."""
    values = {
        Lift.BENCH: predictions.bench_press_1rm,
        Lift.SQUAT: predictions.squat_1rm,
        Lift.DEADLIFT: predictions.deadlift_1rm,
        Lift.TOTAL: predictions.total,
    }

    classifications = {
        lift: LiftClassification(
            lift=lift,
            value=value,
            level=classify_against(lift, value, standards),
            relative_strength=calculate_relative_strength(value, bodyweight),
            progress_to_elite=calculate_progress_to_elite(lift, value, standards),
        )
        for lift, value in values.items()
    }

    logger.debug(
        "Classifications: "
        + ", ".join(f"{lift.value}={c.level.value}" for lift, c in classifications.items())
    )

    return classifications
