"""Shared enums for measurement inputs and derived results."""

from enum import Enum


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"


class MeasurementMethod(str, Enum):
    """How the body-fat percentage is determined."""

    SKINFOLD_3_SITE = "SKINFOLD_3_SITE"
    SKINFOLD_7_SITE = "SKINFOLD_7_SITE"
    SKINFOLD_9_SITE = "SKINFOLD_9_SITE"
    BIA = "BIA"  # Bioelectrical Impedance Analysis
    DEXA = "DEXA"  # Recorded by the data model, no estimator
    MANUAL_INPUT = "MANUAL_INPUT"


class TrainingLevel(str, Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    ELITE = "ELITE"


class ActivityLevel(str, Enum):
    SEDENTARY = "SEDENTARY"
    LIGHTLY_ACTIVE = "LIGHTLY_ACTIVE"
    MODERATELY_ACTIVE = "MODERATELY_ACTIVE"
    VERY_ACTIVE = "VERY_ACTIVE"
    EXTRA_ACTIVE = "EXTRA_ACTIVE"


class Lift(str, Enum):
    """Keys of a strength-standards row."""

    BENCH = "bench"
    SQUAT = "squat"
    DEADLIFT = "deadlift"
    TOTAL = "total"


class PerformanceLevel(str, Enum):
    """Classification of a lift; NOVICE sits below every training-level threshold."""

    NOVICE = "NOVICE"
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    ELITE = "ELITE"


class MeasurementKind(str, Enum):
    """Raw input kinds with a fixed plausibility range."""

    SKINFOLD = "skinfold"
    WEIGHT = "weight"
    HEIGHT = "height"
    AGE = "age"


class NineSiteFormula(str, Enum):
    """Which formula family backs SKINFOLD_9_SITE."""

    DURNIN_WOMERSLEY = "durnin_womersley"
    PARILLO = "parillo"
