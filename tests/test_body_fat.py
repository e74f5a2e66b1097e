"""
Tests for the Body Fat Service
================================
Test matrix:
  1. Density conversions: Siri (default) and Brozek (alternative)
  2. 3-site / 7-site regressions against their literal formulas
  3. Durnin-Womersley age brackets are a step function
  4. Parillo linear approximation
  5. BIA formula and its 3–50% clamp
  6. Estimator selection by method, missing fields, unsupported methods
  7. Global 1–60% bound is enforced, not clamped
"""

import math

import pytest

from bodycomp.core.constants import DURNIN_WOMERSLEY_BRACKETS, SEVEN_SITE_SITES
from bodycomp.core.enums import Gender, MeasurementMethod, NineSiteFormula
from bodycomp.core.exceptions import (
    MissingMeasurementError,
    OutOfRangeResultError,
    UnsupportedMethodError,
)
from bodycomp.schemas import BioImpedanceData, MeasurementInput, SkinfoldMeasurements
from bodycomp.services.body_fat import (
    BioImpedance,
    DurninWomersleyNineSite,
    ManualInput,
    ParilloNineSite,
    SevenSiteSkinfold,
    ThreeSiteSkinfold,
    brozek_formula,
    build_estimator,
    calculate_3_site_female,
    calculate_3_site_male,
    calculate_7_site_female,
    calculate_7_site_male,
    calculate_bia_body_fat,
    calculate_body_fat,
    calculate_body_fat_from_skinfolds,
    calculate_durnin_9_site,
    calculate_parillo_9_site,
    calculate_skinfold_body_fat,
    get_durnin_constants,
    siri_formula,
)


NINE_SITES = {
    "chest": 10.0,
    "midaxillary": 10.0,
    "triceps": 10.0,
    "subscapular": 10.0,
    "abdomen": 10.0,
    "suprailiac": 10.0,
    "thigh": 10.0,
    "calf": 10.0,
    "biceps": 10.0,
}


def _measurement(**overrides) -> MeasurementInput:
    data = {
        "weight": 80.0,
        "height": 180.0,
        "age": 25,
        "gender": Gender.MALE,
        "method": MeasurementMethod.SKINFOLD_3_SITE,
        "skinfold_measurements": SkinfoldMeasurements(chest=10, abdomen=15, thigh=12),
    }
    data.update(overrides)
    return MeasurementInput(**data)


# ── Density conversions ─────────────────────────────────────────

class TestDensityConversion:

    def test_siri_reference_value(self):
        """Siri(1.05) = 495/1.05 - 450 ≈ 21.43."""
        assert siri_formula(1.05) == 495 / 1.05 - 450
        assert siri_formula(1.05) == pytest.approx(21.43, abs=0.01)

    def test_brozek_reference_value(self):
        assert brozek_formula(1.05) == pytest.approx(457 / 1.05 - 414.2)

    def test_conversions_disagree(self):
        """Brozek is a different curve, not an alias of Siri."""
        assert brozek_formula(1.05) != siri_formula(1.05)


# ── Skinfold regressions ────────────────────────────────────────

class TestThreeSite:

    def test_male_matches_literal_formula(self):
        """chest=10, abdomen=15, thigh=12, age=25 → S=37 through Siri."""
        density = 1.10938 - 0.0008267 * 37 + 0.0000016 * 37**2 - 0.0002574 * 25
        expected = 495 / density - 450

        result = calculate_3_site_male(10, 15, 12, 25)

        assert result == expected
        assert 5 < result < 25

    def test_female_matches_literal_formula(self):
        density = 1.0994921 - 0.0009929 * 45 + 0.0000023 * 45**2 - 0.0001392 * 30
        assert calculate_3_site_female(15, 15, 15, 30) == pytest.approx(495 / density - 450)

    def test_older_subject_has_more_fat_for_same_sum(self):
        assert calculate_3_site_male(10, 15, 12, 50) > calculate_3_site_male(10, 15, 12, 20)


class TestSevenSite:

    def test_male_matches_literal_formula(self):
        sites = [10, 12, 8, 14, 20, 11, 15]  # S = 90
        density = 1.112 - 0.00043499 * 90 + 0.00000055 * 90**2 - 0.00028826 * 30
        assert calculate_7_site_male(sites, 30) == pytest.approx(495 / density - 450)

    def test_female_matches_literal_formula(self):
        sites = [10, 12, 8, 14, 20, 11, 15]
        density = 1.097 - 0.00046971 * 90 + 0.00000056 * 90**2 - 0.00012828 * 30
        assert calculate_7_site_female(sites, 30) == pytest.approx(495 / density - 450)

    def test_breakdown_reports_sum_and_density(self):
        skinfolds = SkinfoldMeasurements(**{site: 10.0 for site in SEVEN_SITE_SITES})

        result = calculate_body_fat_from_skinfolds(skinfolds, 25, Gender.MALE)

        assert result["sum_of_skinfolds"] == 70.0
        assert result["body_fat_percent"] == pytest.approx(siri_formula(result["body_density"]))

    def test_breakdown_requires_all_seven_sites(self):
        with pytest.raises(MissingMeasurementError) as exc_info:
            calculate_body_fat_from_skinfolds(SkinfoldMeasurements(chest=10), 25, Gender.MALE)
        assert "midaxillary" in exc_info.value.missing


class TestDurninWomersley:

    @pytest.mark.parametrize(
        ("age", "expected"),
        [
            (13, (1.1631, 0.0632)),
            (19, (1.1631, 0.0632)),
            (20, (1.1422, 0.0544)),
            (29, (1.1422, 0.0544)),
            (30, (1.1620, 0.0700)),
            (39, (1.1620, 0.0700)),
            (40, (1.1715, 0.0779)),
            (49, (1.1715, 0.0779)),
            (50, (1.1765, 0.0829)),
            (90, (1.1765, 0.0829)),
        ],
    )
    def test_male_brackets_are_steps(self, age, expected):
        assert tuple(get_durnin_constants(age, Gender.MALE)) == expected

    def test_female_brackets(self):
        assert tuple(get_durnin_constants(35, Gender.FEMALE)) == (1.1423, 0.0632)
        assert tuple(get_durnin_constants(65, Gender.FEMALE)) == (1.1339, 0.0645)

    def test_every_gender_has_five_brackets(self):
        for gender in Gender:
            assert len(DURNIN_WOMERSLEY_BRACKETS[gender]) == 5

    def test_matches_literal_formula(self):
        density = 1.1422 - 0.0544 * math.log10(90)
        assert calculate_durnin_9_site([10.0] * 9, 25, Gender.MALE) == pytest.approx(
            495 / density - 450
        )


class TestParillo:

    def test_linear_approximation(self):
        """S=90 → 90×0.11 + 27 = 36.9, no density step."""
        assert calculate_parillo_9_site([10.0] * 9) == pytest.approx(36.9)


# ── Bio-impedance ───────────────────────────────────────────────

class TestBia:

    def test_male_formula_inside_range(self):
        h2 = 1.8**2
        expected = 20.94 - 0.78 * (h2 / 500) - 0.28 * 30 + 1.33 * 80 / h2
        assert calculate_bia_body_fat(500, 180, 80, 30, Gender.MALE) == pytest.approx(expected)

    def test_female_formula_inside_range(self):
        h2 = 1.65**2
        expected = 32.03 - 0.69 * (h2 / 600) - 0.14 * 40 + 0.40 * 60 / h2
        assert calculate_bia_body_fat(600, 165, 60, 40, Gender.FEMALE) == pytest.approx(expected)

    def test_clamps_high_values_to_50(self):
        assert calculate_bia_body_fat(500, 150, 300, 20, Gender.MALE) == 50

    def test_clamps_low_values_to_3(self):
        assert calculate_bia_body_fat(1, 250, 30, 100, Gender.MALE) == 3


# ── Estimator selection ─────────────────────────────────────────

class TestBuildEstimator:

    def test_three_site_male_uses_chest_abdomen_thigh(self):
        estimator = build_estimator(_measurement())
        assert estimator == ThreeSiteSkinfold(Gender.MALE, 25, (10.0, 15.0, 12.0))

    def test_three_site_female_uses_triceps_suprailiac_thigh(self):
        measurement = _measurement(
            gender=Gender.FEMALE,
            skinfold_measurements=SkinfoldMeasurements(triceps=14, suprailiac=11, thigh=20),
        )
        assert build_estimator(measurement) == ThreeSiteSkinfold(
            Gender.FEMALE, 25, (14.0, 11.0, 20.0)
        )

    def test_seven_site(self):
        measurement = _measurement(
            method=MeasurementMethod.SKINFOLD_7_SITE,
            skinfold_measurements=SkinfoldMeasurements(**NINE_SITES),
        )
        assert isinstance(build_estimator(measurement), SevenSiteSkinfold)

    def test_nine_site_defaults_to_durnin_womersley(self):
        measurement = _measurement(
            method=MeasurementMethod.SKINFOLD_9_SITE,
            skinfold_measurements=SkinfoldMeasurements(**NINE_SITES),
        )
        assert isinstance(build_estimator(measurement), DurninWomersleyNineSite)

    def test_nine_site_can_select_parillo(self):
        measurement = _measurement(
            method=MeasurementMethod.SKINFOLD_9_SITE,
            skinfold_measurements=SkinfoldMeasurements(**NINE_SITES),
        )
        estimator = build_estimator(measurement, NineSiteFormula.PARILLO)
        assert isinstance(estimator, ParilloNineSite)

    def test_bia(self):
        measurement = _measurement(
            method=MeasurementMethod.BIA,
            bio_impedance_data=BioImpedanceData(resistance=500),
        )
        assert isinstance(build_estimator(measurement), BioImpedance)

    def test_manual_input(self):
        measurement = _measurement(
            method=MeasurementMethod.MANUAL_INPUT, manual_body_fat_percentage=18.5
        )
        assert build_estimator(measurement) == ManualInput(18.5)
        assert calculate_body_fat(measurement) == 18.5

    @pytest.mark.parametrize("method", list(MeasurementMethod))
    def test_every_method_has_an_explicit_branch(self, method):
        """Each method yields an estimator or a typed error, never the fallthrough."""
        measurement = _measurement(
            method=method,
            skinfold_measurements=SkinfoldMeasurements(**NINE_SITES),
            bio_impedance_data=BioImpedanceData(resistance=500),
            manual_body_fat_percentage=18.5,
        )
        if method == MeasurementMethod.DEXA:
            with pytest.raises(UnsupportedMethodError):
                build_estimator(measurement)
        else:
            assert build_estimator(measurement).estimate() > 0


class TestMissingMeasurements:

    def test_three_site_male_with_only_thigh(self):
        """A 3-site male test without chest and abdomen names both sites."""
        measurement = _measurement(skinfold_measurements=SkinfoldMeasurements(thigh=12))

        with pytest.raises(MissingMeasurementError) as exc_info:
            calculate_body_fat(measurement)

        assert exc_info.value.missing == ("chest", "abdomen")
        assert exc_info.value.method == "SKINFOLD_3_SITE"
        assert "SKINFOLD_3_SITE" in str(exc_info.value)
        assert "chest" in str(exc_info.value)
        assert "abdomen" in str(exc_info.value)

    def test_skinfold_method_without_any_skinfolds(self):
        measurement = _measurement(
            method=MeasurementMethod.SKINFOLD_7_SITE, skinfold_measurements=None
        )
        with pytest.raises(MissingMeasurementError) as exc_info:
            calculate_body_fat(measurement)
        assert len(exc_info.value.missing) == 7

    def test_nine_site_missing_calf_and_biceps(self):
        sites = {k: v for k, v in NINE_SITES.items() if k not in ("calf", "biceps")}
        measurement = _measurement(
            method=MeasurementMethod.SKINFOLD_9_SITE,
            skinfold_measurements=SkinfoldMeasurements(**sites),
        )
        with pytest.raises(MissingMeasurementError) as exc_info:
            calculate_body_fat(measurement)
        assert exc_info.value.missing == ("calf", "biceps")

    def test_bia_without_resistance(self):
        measurement = _measurement(method=MeasurementMethod.BIA)
        with pytest.raises(MissingMeasurementError, match="BIA"):
            calculate_body_fat(measurement)

    def test_manual_without_percentage(self):
        measurement = _measurement(method=MeasurementMethod.MANUAL_INPUT)
        with pytest.raises(MissingMeasurementError, match="MANUAL_INPUT"):
            calculate_body_fat(measurement)


class TestUnsupportedAndOutOfRange:

    def test_dexa_has_no_estimator(self):
        with pytest.raises(UnsupportedMethodError):
            calculate_body_fat(_measurement(method=MeasurementMethod.DEXA))

    def test_skinfold_dispatcher_rejects_bia(self):
        with pytest.raises(UnsupportedMethodError):
            calculate_skinfold_body_fat(
                SkinfoldMeasurements(**NINE_SITES), MeasurementMethod.BIA, 25, Gender.MALE
            )

    def test_very_lean_seven_site_is_rejected_not_clamped(self):
        """Seven 2mm folds at age 18 give a negative Siri value."""
        skinfolds = SkinfoldMeasurements(**{site: 2.0 for site in SEVEN_SITE_SITES})
        with pytest.raises(OutOfRangeResultError):
            calculate_skinfold_body_fat(
                skinfolds, MeasurementMethod.SKINFOLD_7_SITE, 18, Gender.MALE
            )

    def test_parillo_above_sixty_percent_is_rejected(self):
        """Nine 50mm folds → 450×0.11 + 27 = 76.5%."""
        skinfolds = SkinfoldMeasurements(**{site: 50.0 for site in NINE_SITES})
        with pytest.raises(OutOfRangeResultError):
            calculate_skinfold_body_fat(
                skinfolds,
                MeasurementMethod.SKINFOLD_9_SITE,
                30,
                Gender.MALE,
                NineSiteFormula.PARILLO,
            )

    def test_skinfold_dispatcher_matches_direct_formula(self):
        result = calculate_skinfold_body_fat(
            SkinfoldMeasurements(chest=10, abdomen=15, thigh=12),
            MeasurementMethod.SKINFOLD_3_SITE,
            25,
            Gender.MALE,
        )
        assert result == calculate_3_site_male(10, 15, 12, 25)
