"""
Body Fat Calculation Service
==============================
Estimates body fat percentage from one of several measurement protocols.

Skinfold protocols predict body density first, then convert it to body fat:

  3-SITE (Jackson & Pollock):
    Male   S = chest + abdomen + thigh
           Body Density = 1.10938 - 0.0008267×S + 0.0000016×S² - 0.0002574×Age
    Female S = triceps + suprailiac + thigh
           Body Density = 1.0994921 - 0.0009929×S + 0.0000023×S² - 0.0001392×Age

  7-SITE (Jackson & Pollock, 1978):
    S = chest + midaxillary + triceps + subscapular + abdomen + suprailiac + thigh
    Male   Body Density = 1.112 - 0.00043499×S + 0.00000055×S² - 0.00028826×Age
    Female Body Density = 1.097 - 0.00046971×S + 0.00000056×S² - 0.00012828×Age

  9-SITE (Durnin & Womersley, 1974):
    S = 7-site sum + calf + biceps
    Body Density = C - M×log10(S), with C and M taken from an age bracket
    (<20, 20–29, 30–39, 40–49, 50+) per gender. Brackets are a step function.

SIRI EQUATION (1961):
  Body Fat % = (495 / Body Density) - 450

BROZEK EQUATION (1963), kept as an alternative conversion:
  Body Fat % = (457 / Body Density) - 414.2

Two protocols skip the density step:
  - 9-SITE (Parillo):  Body Fat % = S×0.11 + 27
  - BIA: a linear formula in the impedance index (height²/resistance), age and
    weight/height², clamped to 3–50%.

Manual input passes the caller's percentage straight through.

Every estimator is a small frozen dataclass; `build_estimator` picks exactly
one of them from a MeasurementInput and `calculate_body_fat` runs it and
enforces the global 1–60% bound.
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import ClassVar, Union, assert_never

from bodycomp.core.config import settings
from bodycomp.core.constants import (
    BIA_BODY_FAT_RANGE,
    BIA_COEFFICIENTS,
    BODY_FAT_RANGE,
    BROZEK_NUMERATOR,
    BROZEK_OFFSET,
    DURNIN_WOMERSLEY_BRACKETS,
    NINE_SITE_SITES,
    PARILLO_CONSTANT,
    PARILLO_SUM_FACTOR,
    SEVEN_SITE_COEFFICIENTS,
    SEVEN_SITE_SITES,
    SIRI_NUMERATOR,
    SIRI_OFFSET,
    THREE_SITE_COEFFICIENTS,
    THREE_SITE_SITES,
    DensityCoefficients,
    DurninConstants,
)
from bodycomp.core.enums import Gender, MeasurementMethod, NineSiteFormula
from bodycomp.core.exceptions import (
    MissingMeasurementError,
    OutOfRangeResultError,
    UnsupportedMethodError,
)
from bodycomp.schemas import MeasurementInput, SkinfoldMeasurements

logger = logging.getLogger(__name__)


# ── Density → body fat ──────────────────────────────────────────

def siri_formula(body_density: float) -> float:
    """
    Convert body density to body fat percentage using the Siri equation.

    Formula:
        Body Fat % = (495 / Body Density) - 450

    Reference:
        Siri, W.E. (1961). Body composition from fluid spaces and density:
        Analysis of methods. In J. Brozek & A. Henschel (Eds.), Techniques for
        Measuring Body Composition (pp. 223-224). Washington, DC: National
        Academy of Sciences.
    """
    return SIRI_NUMERATOR / body_density - SIRI_OFFSET


def brozek_formula(body_density: float) -> float:
    """Brozek (1963) alternative: Body Fat % = (457 / Body Density) - 414.2"""
    return BROZEK_NUMERATOR / body_density - BROZEK_OFFSET


def _skinfold_density(
    coefficients: DensityCoefficients,
    sum_of_skinfolds_mm: float,
    age_years: float,
) -> float:
    s = sum_of_skinfolds_mm
    return (
        coefficients.intercept
        - coefficients.sum_linear * s
        + coefficients.sum_quadratic * (s * s)
        - coefficients.age * age_years
    )


# ── 3-site ──────────────────────────────────────────────────────

def calculate_body_density_3_site(
    sum_of_skinfolds_mm: float,
    age_years: int,
    gender: Gender,
) -> float:
    """Jackson & Pollock 3-site body density (g/cm³) for the given gender."""
    return _skinfold_density(THREE_SITE_COEFFICIENTS[gender], sum_of_skinfolds_mm, age_years)


def calculate_3_site_male(chest: float, abdomen: float, thigh: float, age: int) -> float:
    body_density = calculate_body_density_3_site(chest + abdomen + thigh, age, Gender.MALE)
    return siri_formula(body_density)


def calculate_3_site_female(triceps: float, suprailiac: float, thigh: float, age: int) -> float:
    body_density = calculate_body_density_3_site(triceps + suprailiac + thigh, age, Gender.FEMALE)
    return siri_formula(body_density)


# ── 7-site (Jackson-Pollock) ────────────────────────────────────

def calculate_body_density_pollock_7(
    sum_of_skinfolds_mm: float,
    age_years: int = 25,
    gender: Gender = Gender.MALE,
) -> float:
    """
    Calculate body density using the Pollock 7-skinfold formula.

    This is the Jackson & Pollock (1978) generalized equation. It uses the sum
    of 7 skinfold measurements to predict body density.

    Args:
        sum_of_skinfolds_mm: Sum of all 7 skinfold measurements in millimeters
        age_years: Age of the subject in years (default: 25)
        gender: Selects the male or female regression (default: MALE)

    Returns:
        Body density in g/cm³ (typically between 1.0 and 1.1)

    Reference:
        Jackson, A.S. & Pollock, M.L. (1978). Generalized equations for predicting
        body density of men. British Journal of Nutrition, 40, 497-504.
    """
    body_density = _skinfold_density(
        SEVEN_SITE_COEFFICIENTS[gender], sum_of_skinfolds_mm, age_years
    )

    logger.debug(
        f"Pollock 7-fold calculation: "
        f"sum_skinfolds={sum_of_skinfolds_mm}mm, age={age_years}, gender={gender.value}, "
        f"body_density={body_density:.6f} g/cm³"
    )

    return body_density


def calculate_7_site_male(measurements: Sequence[float], age: int) -> float:
    return siri_formula(calculate_body_density_pollock_7(sum(measurements), age, Gender.MALE))


def calculate_7_site_female(measurements: Sequence[float], age: int) -> float:
    return siri_formula(calculate_body_density_pollock_7(sum(measurements), age, Gender.FEMALE))


def calculate_body_fat_from_skinfolds(
    measurements: SkinfoldMeasurements,
    age_years: int,
    gender: Gender,
) -> dict:
    """
    Complete 7-site breakdown, for callers that report the intermediate values.

    Returns:
        dict with keys:
            - sum_of_skinfolds: float (total mm)
            - body_density: float (g/cm³)
            - body_fat_percent: float (%)

    Raises:
        MissingMeasurementError: if any of the 7 sites is absent.
    """
    missing = measurements.missing(SEVEN_SITE_SITES)
    if missing:
        raise MissingMeasurementError(MeasurementMethod.SKINFOLD_7_SITE.value, missing)

    sum_of_skinfolds = sum(getattr(measurements, site) for site in SEVEN_SITE_SITES)
    body_density = calculate_body_density_pollock_7(sum_of_skinfolds, age_years, gender)
    body_fat_percent = siri_formula(body_density)

    logger.debug(
        f"Siri equation: density={body_density:.6f} -> fat={body_fat_percent:.2f}%"
    )

    return {
        "sum_of_skinfolds": sum_of_skinfolds,
        "body_density": body_density,
        "body_fat_percent": body_fat_percent,
    }


# ── 9-site ──────────────────────────────────────────────────────

def get_durnin_constants(age: float, gender: Gender) -> DurninConstants:
    """Return the C/M pair of the age bracket `age` falls in."""
    # The last bracket (50+) is open-ended, so a match always exists.
    return next(
        constants
        for upper_bound, constants in DURNIN_WOMERSLEY_BRACKETS[gender]
        if upper_bound is None or age < upper_bound
    )


def calculate_durnin_9_site(measurements: Sequence[float], age: int, gender: Gender) -> float:
    total = sum(measurements)
    constants = get_durnin_constants(age, gender)
    body_density = constants.C - constants.M * math.log10(total)

    logger.debug(
        f"Durnin-Womersley calculation: sum_skinfolds={total}mm, age={age}, "
        f"C={constants.C}, M={constants.M}, body_density={body_density:.6f} g/cm³"
    )

    return siri_formula(body_density)


def calculate_parillo_9_site(measurements: Sequence[float]) -> float:
    """Parillo linear approximation; no density step."""
    return sum(measurements) * PARILLO_SUM_FACTOR + PARILLO_CONSTANT


# ── Bio-impedance ───────────────────────────────────────────────

def calculate_bia_body_fat(
    resistance: float,
    height_cm: float,
    weight_kg: float,
    age: int,
    gender: Gender,
) -> float:
    """
    Simplified BIA estimate. Device-specific algorithms would need calibration;
    the result is clamped to 3–50%.
    """
    height_squared = (height_cm / 100) ** 2
    impedance_index = height_squared / resistance
    c = BIA_COEFFICIENTS[gender]

    raw = (
        c.intercept
        - c.impedance * impedance_index
        - c.age * age
        + c.bmi * weight_kg / height_squared
    )
    clamped = max(BIA_BODY_FAT_RANGE.min, min(BIA_BODY_FAT_RANGE.max, raw))

    logger.debug(
        f"BIA calculation: impedance_index={impedance_index:.6f}, "
        f"raw={raw:.2f}% -> clamped={clamped:.2f}%"
    )

    return clamped


# ============================================================
# ESTIMATORS: one variant per body-fat path
# ============================================================

@dataclass(frozen=True)
class ThreeSiteSkinfold:
    gender: Gender
    age: int
    skinfolds: tuple[float, float, float]

    method: ClassVar[str] = "3-site skinfold"

    def estimate(self) -> float:
        if self.gender == Gender.MALE:
            return calculate_3_site_male(*self.skinfolds, self.age)
        return calculate_3_site_female(*self.skinfolds, self.age)


@dataclass(frozen=True)
class SevenSiteSkinfold:
    gender: Gender
    age: int
    skinfolds: tuple[float, ...]

    method: ClassVar[str] = "7-site Jackson-Pollock"

    def estimate(self) -> float:
        if self.gender == Gender.MALE:
            return calculate_7_site_male(self.skinfolds, self.age)
        return calculate_7_site_female(self.skinfolds, self.age)


@dataclass(frozen=True)
class DurninWomersleyNineSite:
    gender: Gender
    age: int
    skinfolds: tuple[float, ...]

    method: ClassVar[str] = "9-site Durnin-Womersley"

    def estimate(self) -> float:
        return calculate_durnin_9_site(self.skinfolds, self.age, self.gender)


@dataclass(frozen=True)
class ParilloNineSite:
    skinfolds: tuple[float, ...]

    method: ClassVar[str] = "9-site Parillo"

    def estimate(self) -> float:
        return calculate_parillo_9_site(self.skinfolds)


@dataclass(frozen=True)
class BioImpedance:
    resistance: float
    height: float
    weight: float
    age: int
    gender: Gender

    method: ClassVar[str] = "bio-impedance"

    def estimate(self) -> float:
        return calculate_bia_body_fat(
            self.resistance, self.height, self.weight, self.age, self.gender
        )


@dataclass(frozen=True)
class ManualInput:
    body_fat_percentage: float

    method: ClassVar[str] = "manual input"

    def estimate(self) -> float:
        return self.body_fat_percentage


BodyFatEstimator = Union[
    ThreeSiteSkinfold,
    SevenSiteSkinfold,
    DurninWomersleyNineSite,
    ParilloNineSite,
    BioImpedance,
    ManualInput,
]


def _require_sites(
    skinfolds: SkinfoldMeasurements | None,
    sites: tuple[str, ...],
    method: MeasurementMethod,
) -> tuple[float, ...]:
    skinfolds = skinfolds or SkinfoldMeasurements()
    missing = skinfolds.missing(sites)
    if missing:
        raise MissingMeasurementError(method.value, missing)
    return tuple(getattr(skinfolds, site) for site in sites)


def _skinfold_estimator(
    skinfolds: SkinfoldMeasurements | None,
    method: MeasurementMethod,
    age: int,
    gender: Gender,
    nine_site_formula: NineSiteFormula,
) -> BodyFatEstimator:
    if method == MeasurementMethod.SKINFOLD_3_SITE:
        values = _require_sites(skinfolds, THREE_SITE_SITES[gender], method)
        return ThreeSiteSkinfold(gender=gender, age=age, skinfolds=values)

    if method == MeasurementMethod.SKINFOLD_7_SITE:
        values = _require_sites(skinfolds, SEVEN_SITE_SITES, method)
        return SevenSiteSkinfold(gender=gender, age=age, skinfolds=values)

    if method == MeasurementMethod.SKINFOLD_9_SITE:
        values = _require_sites(skinfolds, NINE_SITE_SITES, method)
        if nine_site_formula == NineSiteFormula.PARILLO:
            return ParilloNineSite(skinfolds=values)
        return DurninWomersleyNineSite(gender=gender, age=age, skinfolds=values)

    raise UnsupportedMethodError(method.value)


def build_estimator(
    measurement: MeasurementInput,
    nine_site_formula: NineSiteFormula | None = None,
) -> BodyFatEstimator:
    """
    Select the single body-fat estimator for `measurement.method`.

    Raises:
        MissingMeasurementError: the method's required fields are absent.
        UnsupportedMethodError: no estimator exists for the method.
    """
    method = measurement.method
    nine_site_formula = nine_site_formula or settings.NINE_SITE_FORMULA

    match method:
        case (
            MeasurementMethod.SKINFOLD_3_SITE
            | MeasurementMethod.SKINFOLD_7_SITE
            | MeasurementMethod.SKINFOLD_9_SITE
        ):
            return _skinfold_estimator(
                measurement.skinfold_measurements,
                method,
                measurement.age,
                measurement.gender,
                nine_site_formula,
            )

        case MeasurementMethod.BIA:
            if measurement.bio_impedance_data is None:
                raise MissingMeasurementError(method.value, ["bio_impedance_data.resistance"])
            return BioImpedance(
                resistance=measurement.bio_impedance_data.resistance,
                height=measurement.height,
                weight=measurement.weight,
                age=measurement.age,
                gender=measurement.gender,
            )

        case MeasurementMethod.MANUAL_INPUT:
            if measurement.manual_body_fat_percentage is None:
                raise MissingMeasurementError(method.value, ["manual_body_fat_percentage"])
            return ManualInput(body_fat_percentage=measurement.manual_body_fat_percentage)

        case MeasurementMethod.DEXA:
            raise UnsupportedMethodError(method.value)

        case _:
            assert_never(method)


def _check_body_fat_range(body_fat_percentage: float) -> float:
    if not BODY_FAT_RANGE.min <= body_fat_percentage <= BODY_FAT_RANGE.max:
        raise OutOfRangeResultError(
            body_fat_percentage, BODY_FAT_RANGE.min, BODY_FAT_RANGE.max
        )
    return body_fat_percentage


def estimate_body_fat(estimator: BodyFatEstimator) -> float:
    """
    Run an estimator and enforce the global 1–60% bound.

    Raises:
        OutOfRangeResultError: the formula produced a value outside 1–60%.
    """
    body_fat_percentage = estimator.estimate()
    logger.debug(f"{estimator.method}: body_fat={body_fat_percentage:.2f}%")
    return _check_body_fat_range(body_fat_percentage)


def calculate_body_fat(
    measurement: MeasurementInput,
    nine_site_formula: NineSiteFormula | None = None,
) -> float:
    """Body fat percentage for a measurement, by whichever path its method selects."""
    return estimate_body_fat(build_estimator(measurement, nine_site_formula))


def calculate_skinfold_body_fat(
    measurements: SkinfoldMeasurements,
    method: MeasurementMethod,
    age: int,
    gender: Gender,
    nine_site_formula: NineSiteFormula | None = None,
) -> float:
    """
    Skinfold-only dispatcher for callers that hold caliper data but no full
    MeasurementInput. Non-skinfold methods raise UnsupportedMethodError.
    """
    estimator = _skinfold_estimator(
        measurements,
        method,
        age,
        gender,
        nine_site_formula or settings.NINE_SITE_FORMULA,
    )
    return estimate_body_fat(estimator)
