"""
Powerlifting Prediction Service
================================
Projects 1RM predictions from lean body mass and scores them with Wilks.

PREDICTED 1RM:
  lift = Lean Body Mass × multiplier[lift][training level]
  (multipliers in `LEAN_MASS_LIFT_MULTIPLIERS`; these are against LEAN mass and
  are a different table from the bodyweight ratios of the strength standards)

WILKS (2020 coefficients):
  coefficient = 600 / (a + b·x + c·x² + d·x³ + e·x⁴ + f·x⁵)
  x = bodyweight (kg), clamped to male 40–201.9 / female 26.51–154.53
  score       = total × coefficient

1RM FROM A SUBMAXIMAL SET (independent utility, not part of the body test):
  Epley    = w × (1 + reps/30)
  Brzycki  = w × 36 / (37 - reps)
  O'Conner = w × (1 + 0.025 × reps)
  ≤5 reps: 50% Brzycki + 30% Epley + 20% O'Conner
  >5 reps: 40% Epley + 40% Brzycki + 20% O'Conner
  Only 1–15 reps are supported.
"""

import logging

from bodycomp.core.constants import (
    ANNUAL_STRENGTH_GAIN_RATES,
    DAYS_PER_YEAR,
    LEAN_MASS_LIFT_MULTIPLIERS,
    LOW_REP_THRESHOLD,
    MAX_REPS_FOR_1RM,
    ONE_REP_MAX_WEIGHTS_HIGH_REPS,
    ONE_REP_MAX_WEIGHTS_LOW_REPS,
    WILKS_BODYWEIGHT_RANGE,
    WILKS_COEFFICIENTS,
    WILKS_NUMERATOR,
)
from bodycomp.core.enums import Gender, Lift, TrainingLevel
from bodycomp.core.exceptions import RepRangeError
from bodycomp.schemas import PowerliftingPredictions, TrainingVolumeRecommendation

logger = logging.getLogger(__name__)


# ── 1RM formulas ────────────────────────────────────────────────

def epley_formula(weight: float, reps: int) -> float:
    return weight * (1 + reps / 30)


def brzycki_formula(weight: float, reps: int) -> float:
    return weight * (36 / (37 - reps))


def oconner_formula(weight: float, reps: int) -> float:
    return weight * (1 + 0.025 * reps)


def calculate_1rm(weight: float, reps: int) -> float:
    """
    Estimate a one-rep max from a set of `reps` at `weight`.

    Blends three formulas; Brzycki is weighted higher for low reps where it is
    the most accurate.

    Raises:
        RepRangeError: reps outside 1–15.
    """
    if reps < 1 or reps > MAX_REPS_FOR_1RM:
        raise RepRangeError(reps, MAX_REPS_FOR_1RM)
    if reps == 1:
        return weight

    epley = epley_formula(weight, reps)
    brzycki = brzycki_formula(weight, reps)
    oconner = oconner_formula(weight, reps)

    w = ONE_REP_MAX_WEIGHTS_LOW_REPS if reps <= LOW_REP_THRESHOLD else ONE_REP_MAX_WEIGHTS_HIGH_REPS
    return brzycki * w.brzycki + epley * w.epley + oconner * w.oconner


# ── Lean-mass based predictions ─────────────────────────────────

def predict_lift(
    lift: Lift,
    lean_body_mass: float,
    training_level: TrainingLevel = TrainingLevel.INTERMEDIATE,
) -> float:
    return lean_body_mass * LEAN_MASS_LIFT_MULTIPLIERS[lift][training_level]


def predict_bench_press(lean_body_mass: float, training_level: TrainingLevel = TrainingLevel.INTERMEDIATE) -> float:
    return predict_lift(Lift.BENCH, lean_body_mass, training_level)


def predict_squat(lean_body_mass: float, training_level: TrainingLevel = TrainingLevel.INTERMEDIATE) -> float:
    return predict_lift(Lift.SQUAT, lean_body_mass, training_level)


def predict_deadlift(lean_body_mass: float, training_level: TrainingLevel = TrainingLevel.INTERMEDIATE) -> float:
    return predict_lift(Lift.DEADLIFT, lean_body_mass, training_level)


# ── Wilks ───────────────────────────────────────────────────────

def calculate_wilks_coefficient(bodyweight: float, gender: Gender) -> float:
    """Wilks coefficient, with bodyweight clamped to `WILKS_BODYWEIGHT_RANGE`."""
    c = WILKS_COEFFICIENTS[gender]
    bounds = WILKS_BODYWEIGHT_RANGE[gender]
    x = min(max(bodyweight, bounds.min), bounds.max)
    denominator = (
        c.a
        + c.b * x
        + c.c * x ** 2
        + c.d * x ** 3
        + c.e * x ** 4
        + c.f * x ** 5
    )
    return WILKS_NUMERATOR / denominator


def calculate_wilks_score(total: float, bodyweight: float, gender: Gender) -> float:
    return total * calculate_wilks_coefficient(bodyweight, gender)


def calculate_powerlifting_predictions(
    lean_body_mass: float,
    total_bodyweight: float,
    training_level: TrainingLevel,
    gender: Gender,
) -> PowerliftingPredictions:
    """
    Predict bench/squat/deadlift 1RMs from lean body mass and score the total.

    The predictions use lean mass; the Wilks score uses total bodyweight.
    """
    bench = predict_bench_press(lean_body_mass, training_level)
    squat = predict_squat(lean_body_mass, training_level)
    deadlift = predict_deadlift(lean_body_mass, training_level)
    wilks_score = calculate_wilks_score(bench + squat + deadlift, total_bodyweight, gender)

    predictions = PowerliftingPredictions(
        bench_press_1rm=bench,
        squat_1rm=squat,
        deadlift_1rm=deadlift,
        wilks_score=wilks_score,
    )

    logger.debug(
        f"Powerlifting predictions ({training_level.value}): bench={bench:.1f}kg, "
        f"squat={squat:.1f}kg, deadlift={deadlift:.1f}kg, "
        f"total={predictions.total:.1f}kg, wilks={wilks_score:.1f}"
    )

    return predictions


# ── Progression helpers ─────────────────────────────────────────

def calculate_relative_strength(lift_weight: float, bodyweight: float) -> float:
    """Lift-to-bodyweight ratio."""
    return lift_weight / bodyweight


def estimate_strength_gains(
    current_total: float,
    training_level: TrainingLevel,
    timeframe_days: int = DAYS_PER_YEAR,
) -> float:
    """
    Project a total forward using linear annual gain rates
    (beginner 40%, intermediate 15%, advanced 5%, elite 2%).
    """
    daily_rate = ANNUAL_STRENGTH_GAIN_RATES[training_level] / DAYS_PER_YEAR
    return current_total + current_total * (daily_rate * timeframe_days)


TRAINING_VOLUME_RECOMMENDATIONS: dict[TrainingLevel, TrainingVolumeRecommendation] = {
    TrainingLevel.BEGINNER: TrainingVolumeRecommendation(
        frequency="3-4 days/week",
        sets_per_lift="3-4 sets",
        rep_range="5-8 reps",
        intensity="70-85% 1RM",
        focus_areas=["Form", "Consistency", "Progressive Overload"],
    ),
    TrainingLevel.INTERMEDIATE: TrainingVolumeRecommendation(
        frequency="4-5 days/week",
        sets_per_lift="4-6 sets",
        rep_range="3-6 reps",
        intensity="75-90% 1RM",
        focus_areas=["Periodization", "Weak Points", "Technique Refinement"],
    ),
    TrainingLevel.ADVANCED: TrainingVolumeRecommendation(
        frequency="5-6 days/week",
        sets_per_lift="5-8 sets",
        rep_range="1-5 reps",
        intensity="80-95% 1RM",
        focus_areas=["Competition Prep", "Peak Strength", "Advanced Periodization"],
    ),
    TrainingLevel.ELITE: TrainingVolumeRecommendation(
        frequency="6+ days/week",
        sets_per_lift="6-10 sets",
        rep_range="1-4 reps",
        intensity="85-100% 1RM",
        focus_areas=["Competition Strategy", "Peak Performance", "Recovery Optimization"],
    ),
}


def get_training_volume_recommendations(training_level: TrainingLevel) -> TrainingVolumeRecommendation:
    return TRAINING_VOLUME_RECOMMENDATIONS[training_level]
