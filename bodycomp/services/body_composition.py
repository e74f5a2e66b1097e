"""
Body Composition Service
=========================
Derives a full body-composition profile from weight and a body fat percentage.

  Fat Mass         = Weight × BF% / 100
  Lean Body Mass   = Weight - Fat Mass
  Muscle Mass      ≈ LBM × 0.525   (rough empirical ratio, not a measurement)
  Total Body Water ≈ LBM × 0.73    (lean tissue is ~73% water)
  BMR  (Katch-McArdle) = 370 + 21.6 × LBM
  TDEE = BMR × activity multiplier

Katch-McArdle is used because the body fat percentage is already known, which
makes a lean-mass based BMR more accurate. Mifflin-St Jeor and Harris-Benedict
are kept for callers that only have weight/height/age.

This stage assumes validated inputs; it has no failure path of its own.
"""

import logging

from bodycomp.core.constants import (
    ACTIVITY_MULTIPLIERS,
    BODY_FAT_CATEGORIES,
    BODY_WATER_RATIO,
    DEFAULT_ACTIVITY_MULTIPLIER,
    KATCH_MCARDLE_BASE,
    KATCH_MCARDLE_LBM_FACTOR,
    MUSCLE_MASS_RATIO,
    UNKNOWN_BODY_FAT_CATEGORY,
)
from bodycomp.core.enums import ActivityLevel, Gender
from bodycomp.schemas import BodyComposition

logger = logging.getLogger(__name__)


# ── BMR ─────────────────────────────────────────────────────────

def calculate_bmr_mifflin(weight: float, height: float, age: int, gender: Gender) -> float:
    """Mifflin-St Jeor BMR equation (kcal/day)."""
    base = 10 * weight + 6.25 * height - 5 * age
    return base + 5 if gender == Gender.MALE else base - 161


def calculate_bmr_harris(weight: float, height: float, age: int, gender: Gender) -> float:
    """Revised Harris-Benedict BMR equation (kcal/day)."""
    if gender == Gender.MALE:
        return 88.362 + 13.397 * weight + 4.799 * height - 5.677 * age
    return 447.593 + 9.247 * weight + 3.098 * height - 4.330 * age


def calculate_bmr_katch(lean_body_mass: float) -> float:
    """Katch-McArdle BMR equation (kcal/day)."""
    return KATCH_MCARDLE_BASE + KATCH_MCARDLE_LBM_FACTOR * lean_body_mass


def calculate_tdee(bmr: float, activity_level: ActivityLevel | str) -> float:
    """Scale BMR by the activity multiplier; unknown levels use 1.55."""
    multiplier = ACTIVITY_MULTIPLIERS.get(activity_level, DEFAULT_ACTIVITY_MULTIPLIER)
    return bmr * multiplier


# ── Mass breakdown ──────────────────────────────────────────────

def calculate_fat_mass(total_weight: float, body_fat_percentage: float) -> float:
    return total_weight * body_fat_percentage / 100


def calculate_lean_body_mass(total_weight: float, body_fat_percentage: float) -> float:
    return total_weight - calculate_fat_mass(total_weight, body_fat_percentage)


def calculate_muscle_mass(lean_body_mass: float) -> float:
    return lean_body_mass * MUSCLE_MASS_RATIO


def calculate_total_body_water(lean_body_mass: float) -> float:
    return lean_body_mass * BODY_WATER_RATIO


def calculate_body_composition(
    weight: float,
    height: float,
    age: int,
    gender: Gender,
    body_fat_percentage: float,
    activity_level: ActivityLevel | str,
) -> BodyComposition:
    """
    Build the full BodyComposition for one measurement.

    `height`, `age` and `gender` don't enter the Katch-McArdle path; they are
    part of the contract so callers can switch BMR equations without changing
    call sites.
    """
    fat_mass = calculate_fat_mass(weight, body_fat_percentage)
    lean_body_mass = weight - fat_mass
    bmr = calculate_bmr_katch(lean_body_mass)

    composition = BodyComposition(
        body_fat_percentage=body_fat_percentage,
        lean_body_mass=lean_body_mass,
        fat_mass=fat_mass,
        muscle_mass=calculate_muscle_mass(lean_body_mass),
        total_body_water=calculate_total_body_water(lean_body_mass),
        bmr=bmr,
        tdee=calculate_tdee(bmr, activity_level),
    )

    logger.debug(
        f"Body composition: weight={weight}kg, bf={body_fat_percentage:.2f}%, "
        f"lbm={lean_body_mass:.2f}kg, bmr={composition.bmr:.0f}, tdee={composition.tdee:.0f}"
    )

    return composition


def get_body_fat_category(body_fat_percentage: float, gender: Gender) -> str:
    """Label a body fat percentage (Essential Fat, Athletes, Fitness, Average, Obese)."""
    for category in BODY_FAT_CATEGORIES[gender]:
        if category.min <= body_fat_percentage < category.max:
            return category.label
    return UNKNOWN_BODY_FAT_CATEGORY
