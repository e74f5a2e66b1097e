"""
Formula Constants
=================
Every regression coefficient, multiplier and ratio used by the engine lives
here as a named table keyed by the enums in `bodycomp.core.enums`, so tests can
assert against the same values independently of the formula code.
"""

from typing import NamedTuple

from bodycomp.core.enums import (
    ActivityLevel,
    Gender,
    Lift,
    MeasurementKind,
    TrainingLevel,
)


# ── Input plausibility ranges (inclusive) ───────────────────────

class ValueRange(NamedTuple):
    min: float
    max: float


MEASUREMENT_RANGES: dict[MeasurementKind, ValueRange] = {
    MeasurementKind.SKINFOLD: ValueRange(2, 50),    # mm
    MeasurementKind.WEIGHT: ValueRange(30, 300),    # kg
    MeasurementKind.HEIGHT: ValueRange(120, 250),   # cm
    MeasurementKind.AGE: ValueRange(10, 100),       # years
}

# Global bound every computed body-fat percentage must satisfy
BODY_FAT_RANGE = ValueRange(1, 60)


# ── Density → body fat conversions ──────────────────────────────

# Siri (1961): Body Fat % = (495 / Body Density) - 450
SIRI_NUMERATOR = 495.0
SIRI_OFFSET = 450.0

# Brozek (1963): Body Fat % = (457 / Body Density) - 414.2
BROZEK_NUMERATOR = 457.0
BROZEK_OFFSET = 414.2


# ── Skinfold density regressions ────────────────────────────────

class DensityCoefficients(NamedTuple):
    """density = intercept - sum_linear*S + sum_quadratic*S² - age*Age"""

    intercept: float
    sum_linear: float
    sum_quadratic: float
    age: float


# Jackson & Pollock 3-site
THREE_SITE_COEFFICIENTS: dict[Gender, DensityCoefficients] = {
    Gender.MALE: DensityCoefficients(1.10938, 0.0008267, 0.0000016, 0.0002574),
    Gender.FEMALE: DensityCoefficients(1.0994921, 0.0009929, 0.0000023, 0.0001392),
}

# Jackson & Pollock 7-site
SEVEN_SITE_COEFFICIENTS: dict[Gender, DensityCoefficients] = {
    Gender.MALE: DensityCoefficients(1.112, 0.00043499, 0.00000055, 0.00028826),
    Gender.FEMALE: DensityCoefficients(1.097, 0.00046971, 0.00000056, 0.00012828),
}

THREE_SITE_SITES: dict[Gender, tuple[str, ...]] = {
    Gender.MALE: ("chest", "abdomen", "thigh"),
    Gender.FEMALE: ("triceps", "suprailiac", "thigh"),
}

SEVEN_SITE_SITES: tuple[str, ...] = (
    "chest",
    "midaxillary",
    "triceps",
    "subscapular",
    "abdomen",
    "suprailiac",
    "thigh",
)

NINE_SITE_SITES: tuple[str, ...] = SEVEN_SITE_SITES + ("calf", "biceps")


# Durnin & Womersley: density = C - M * log10(S)
class DurninConstants(NamedTuple):
    C: float
    M: float


# Brackets are a step function on age: (exclusive upper age bound, constants).
# The final bracket (50+) uses None as its bound.
DURNIN_WOMERSLEY_BRACKETS: dict[Gender, tuple[tuple[int | None, DurninConstants], ...]] = {
    Gender.MALE: (
        (20, DurninConstants(1.1631, 0.0632)),
        (30, DurninConstants(1.1422, 0.0544)),
        (40, DurninConstants(1.1620, 0.0700)),
        (50, DurninConstants(1.1715, 0.0779)),
        (None, DurninConstants(1.1765, 0.0829)),
    ),
    Gender.FEMALE: (
        (20, DurninConstants(1.1549, 0.0678)),
        (30, DurninConstants(1.1599, 0.0717)),
        (40, DurninConstants(1.1423, 0.0632)),
        (50, DurninConstants(1.1333, 0.0612)),
        (None, DurninConstants(1.1339, 0.0645)),
    ),
}

# Parillo 9-site linear approximation: Body Fat % = S * 0.11 + 27
PARILLO_SUM_FACTOR = 0.11
PARILLO_CONSTANT = 27.0


# ── Bio-impedance ───────────────────────────────────────────────

class BiaCoefficients(NamedTuple):
    """bf = intercept - impedance*II - age*Age + bmi*(weight / height_m²)"""

    intercept: float
    impedance: float
    age: float
    bmi: float


BIA_COEFFICIENTS: dict[Gender, BiaCoefficients] = {
    Gender.MALE: BiaCoefficients(20.94, 0.78, 0.28, 1.33),
    Gender.FEMALE: BiaCoefficients(32.03, 0.69, 0.14, 0.40),
}

BIA_BODY_FAT_RANGE = ValueRange(3, 50)


# ── Body composition ────────────────────────────────────────────

# Empirical approximation (not a measurement): muscle ≈ 50–55% of lean mass
MUSCLE_MASS_RATIO = 0.525
# Lean tissue is ~73% water
BODY_WATER_RATIO = 0.73

# Katch-McArdle: BMR = 370 + 21.6 * LBM
KATCH_MCARDLE_BASE = 370.0
KATCH_MCARDLE_LBM_FACTOR = 21.6

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.EXTRA_ACTIVE: 1.9,
}
DEFAULT_ACTIVITY_MULTIPLIER = 1.55


class BodyFatCategory(NamedTuple):
    min: float
    max: float
    label: str


BODY_FAT_CATEGORIES: dict[Gender, tuple[BodyFatCategory, ...]] = {
    Gender.MALE: (
        BodyFatCategory(0, 6, "Essential Fat"),
        BodyFatCategory(6, 13, "Athletes"),
        BodyFatCategory(13, 17, "Fitness"),
        BodyFatCategory(17, 25, "Average"),
        BodyFatCategory(25, 100, "Obese"),
    ),
    Gender.FEMALE: (
        BodyFatCategory(0, 13, "Essential Fat"),
        BodyFatCategory(13, 20, "Athletes"),
        BodyFatCategory(20, 24, "Fitness"),
        BodyFatCategory(24, 31, "Average"),
        BodyFatCategory(31, 100, "Obese"),
    ),
}
UNKNOWN_BODY_FAT_CATEGORY = "Unknown"


# ── Powerlifting predictions ────────────────────────────────────

# Predicted 1RM = lean body mass * multiplier
LEAN_MASS_LIFT_MULTIPLIERS: dict[Lift, dict[TrainingLevel, float]] = {
    Lift.BENCH: {
        TrainingLevel.BEGINNER: 1.2,
        TrainingLevel.INTERMEDIATE: 1.6,
        TrainingLevel.ADVANCED: 2.0,
        TrainingLevel.ELITE: 2.2,
    },
    Lift.SQUAT: {
        TrainingLevel.BEGINNER: 1.8,
        TrainingLevel.INTERMEDIATE: 2.2,
        TrainingLevel.ADVANCED: 2.8,
        TrainingLevel.ELITE: 3.2,
    },
    Lift.DEADLIFT: {
        TrainingLevel.BEGINNER: 2.0,
        TrainingLevel.INTERMEDIATE: 2.5,
        TrainingLevel.ADVANCED: 3.0,
        TrainingLevel.ELITE: 3.5,
    },
}


class WilksCoefficients(NamedTuple):
    a: float
    b: float
    c: float
    d: float
    e: float
    f: float


WILKS_NUMERATOR = 600.0

# 2020 revision
WILKS_COEFFICIENTS: dict[Gender, WilksCoefficients] = {
    Gender.MALE: WilksCoefficients(
        -216.0475144, 16.2606339, -0.002388645, -0.00113732, 7.01863e-6, -1.291e-8
    ),
    Gender.FEMALE: WilksCoefficients(
        594.31747775582, -27.23842536447, 0.82112226871, -0.00930733913, 4.731582e-5, -9.054e-8
    ),
}

# Bodyweights outside these bounds are evaluated at the nearest bound; the
# polynomial's denominator reaches zero past the heavy end for both genders.
WILKS_BODYWEIGHT_RANGE: dict[Gender, ValueRange] = {
    Gender.MALE: ValueRange(40.0, 201.9),
    Gender.FEMALE: ValueRange(26.51, 154.53),
}


# ── 1RM from a submaximal set ───────────────────────────────────

MAX_REPS_FOR_1RM = 15
LOW_REP_THRESHOLD = 5


class OneRepMaxWeights(NamedTuple):
    brzycki: float
    epley: float
    oconner: float


ONE_REP_MAX_WEIGHTS_LOW_REPS = OneRepMaxWeights(brzycki=0.5, epley=0.3, oconner=0.2)
ONE_REP_MAX_WEIGHTS_HIGH_REPS = OneRepMaxWeights(brzycki=0.4, epley=0.4, oconner=0.2)


# ── Strength standards (ratios against TOTAL bodyweight) ────────

STRENGTH_STANDARD_RATIOS: dict[Gender, dict[TrainingLevel, dict[Lift, float]]] = {
    Gender.MALE: {
        TrainingLevel.BEGINNER: {Lift.BENCH: 1.0, Lift.SQUAT: 1.25, Lift.DEADLIFT: 1.5},
        TrainingLevel.INTERMEDIATE: {Lift.BENCH: 1.25, Lift.SQUAT: 1.75, Lift.DEADLIFT: 2.0},
        TrainingLevel.ADVANCED: {Lift.BENCH: 1.5, Lift.SQUAT: 2.25, Lift.DEADLIFT: 2.5},
        TrainingLevel.ELITE: {Lift.BENCH: 2.0, Lift.SQUAT: 2.75, Lift.DEADLIFT: 3.0},
    },
    Gender.FEMALE: {
        TrainingLevel.BEGINNER: {Lift.BENCH: 0.5, Lift.SQUAT: 1.0, Lift.DEADLIFT: 1.25},
        TrainingLevel.INTERMEDIATE: {Lift.BENCH: 0.75, Lift.SQUAT: 1.25, Lift.DEADLIFT: 1.5},
        TrainingLevel.ADVANCED: {Lift.BENCH: 1.0, Lift.SQUAT: 1.75, Lift.DEADLIFT: 2.0},
        TrainingLevel.ELITE: {Lift.BENCH: 1.25, Lift.SQUAT: 2.25, Lift.DEADLIFT: 2.5},
    },
}


# ── Progression ─────────────────────────────────────────────────

ANNUAL_STRENGTH_GAIN_RATES: dict[TrainingLevel, float] = {
    TrainingLevel.BEGINNER: 0.40,
    TrainingLevel.INTERMEDIATE: 0.15,
    TrainingLevel.ADVANCED: 0.05,
    TrainingLevel.ELITE: 0.02,
}
DAYS_PER_YEAR = 365
