"""
Tests for the Body Test Pipeline
==================================
End-to-end runs: measurement in, result bundle out.

Test matrix:
  1. 3-site skinfold run reproduces the literal formula end to end
  2. BIA, manual and 9-site runs
  3. Identical inputs give identical bundles
  4. Every failure raises before any result is produced
"""

import pytest

from bodycomp.core.enums import (
    ActivityLevel,
    Gender,
    Lift,
    MeasurementMethod,
    NineSiteFormula,
    PerformanceLevel,
    TrainingLevel,
)
from bodycomp.core.exceptions import (
    MissingMeasurementError,
    OutOfRangeResultError,
    UnsupportedMethodError,
    ValidationError,
)
from bodycomp.schemas import BodyTestResult
from bodycomp.services.body_fat import siri_formula
from bodycomp.services.body_test import run_body_test

NINE_SITES = {
    site: 12.0
    for site in (
        "chest", "midaxillary", "triceps", "subscapular", "abdomen",
        "suprailiac", "thigh", "calf", "biceps",
    )
}


def _payload(**overrides) -> dict:
    payload = {
        "weight": 80,
        "height": 180,
        "age": 25,
        "gender": "MALE",
        "method": "SKINFOLD_3_SITE",
        "skinfold_measurements": {"chest": 10, "abdomen": 15, "thigh": 12},
        "training_level": "INTERMEDIATE",
        "activity_level": "MODERATELY_ACTIVE",
    }
    payload.update(overrides)
    return payload


class TestSkinfoldRun:

    def test_three_site_male(self):
        result = run_body_test(_payload())

        density = 1.10938 - 0.0008267 * 37 + 0.0000016 * 37**2 - 0.0002574 * 25
        expected_bf = siri_formula(density)
        composition = result.body_composition

        assert isinstance(result, BodyTestResult)
        assert composition.body_fat_percentage == expected_bf
        assert abs(composition.fat_mass + composition.lean_body_mass - 80) < 1e-9
        assert composition.tdee == pytest.approx(composition.bmr * 1.55)
        assert result.body_fat_category == "Athletes"

    def test_predictions_consume_lean_mass(self):
        result = run_body_test(_payload())
        lbm = result.body_composition.lean_body_mass
        predictions = result.powerlifting_predictions

        assert predictions.bench_press_1rm == pytest.approx(lbm * 1.6)
        assert predictions.squat_1rm == pytest.approx(lbm * 2.2)
        assert predictions.deadlift_1rm == pytest.approx(lbm * 2.5)
        assert predictions.total == (
            predictions.bench_press_1rm + predictions.squat_1rm + predictions.deadlift_1rm
        )

    def test_standards_use_total_bodyweight(self):
        result = run_body_test(_payload())
        assert result.strength_standards[TrainingLevel.BEGINNER].bench == pytest.approx(80)
        assert set(result.classifications) == set(Lift)
        for classification in result.classifications.values():
            assert 0 <= classification.progress_to_elite <= 1

    def test_elite_training_level_changes_classification(self):
        beginner = run_body_test(_payload(training_level="BEGINNER"))
        elite = run_body_test(_payload(training_level="ELITE"))
        order = list(PerformanceLevel)
        assert order.index(elite.classifications[Lift.TOTAL].level) >= order.index(
            beginner.classifications[Lift.TOTAL].level
        )
        assert elite.powerlifting_predictions.total > beginner.powerlifting_predictions.total

    def test_nine_site_default_and_parillo(self):
        payload = _payload(method="SKINFOLD_9_SITE", skinfold_measurements=NINE_SITES)

        durnin = run_body_test(payload)
        parillo = run_body_test(payload, nine_site_formula=NineSiteFormula.PARILLO)

        assert parillo.body_composition.body_fat_percentage == pytest.approx(108 * 0.11 + 27)
        assert durnin.body_composition.body_fat_percentage != pytest.approx(
            parillo.body_composition.body_fat_percentage
        )


class TestOtherMethods:

    def test_bia(self):
        result = run_body_test(
            _payload(method="BIA", skinfold_measurements=None, bio_impedance_data={"resistance": 500})
        )
        assert 3 <= result.body_composition.body_fat_percentage <= 50
        assert result.method == MeasurementMethod.BIA

    def test_manual(self):
        result = run_body_test(
            _payload(
                method="MANUAL_INPUT",
                manual_body_fat_percentage=20,
                activity_level="SEDENTARY",
                gender="FEMALE",
            )
        )
        composition = result.body_composition
        assert composition.body_fat_percentage == 20
        assert composition.lean_body_mass == pytest.approx(64.0)
        assert composition.tdee == pytest.approx(composition.bmr * 1.2)
        assert result.activity_level == ActivityLevel.SEDENTARY
        assert result.body_fat_category == "Fitness"

    @pytest.mark.parametrize(("gender", "weight"), [("MALE", 283), ("MALE", 290), ("FEMALE", 215), ("FEMALE", 230)])
    def test_heavy_bodyweight_keeps_wilks_bounded(self, gender, weight):
        result = run_body_test(
            _payload(
                method="MANUAL_INPUT",
                manual_body_fat_percentage=30,
                skinfold_measurements=None,
                gender=gender,
                weight=weight,
            )
        )
        assert 0 <= result.powerlifting_predictions.wilks_score < 2 * result.powerlifting_predictions.total

    def test_accepts_parsed_measurement(self):
        from bodycomp.services.validation import parse_measurement

        measurement = parse_measurement(_payload())
        assert run_body_test(measurement) == run_body_test(_payload())


class TestDeterminism:

    def test_identical_inputs_identical_bundles(self):
        first = run_body_test(_payload(method="SKINFOLD_9_SITE", skinfold_measurements=NINE_SITES))
        second = run_body_test(_payload(method="SKINFOLD_9_SITE", skinfold_measurements=NINE_SITES))
        assert first == second
        assert first.model_dump() == second.model_dump()


class TestFailures:

    def test_missing_sites(self):
        with pytest.raises(MissingMeasurementError) as exc_info:
            run_body_test(_payload(skinfold_measurements={"thigh": 12}))
        assert exc_info.value.missing == ("chest", "abdomen")

    def test_implausible_weight(self):
        with pytest.raises(ValidationError):
            run_body_test(_payload(weight=25))

    def test_unknown_method(self):
        with pytest.raises(UnsupportedMethodError):
            run_body_test(_payload(method="UNDERWATER"))

    def test_dexa_has_no_estimator(self):
        with pytest.raises(UnsupportedMethodError):
            run_body_test(_payload(method="DEXA"))

    def test_out_of_range_body_fat(self):
        lean = {site: 2.0 for site in NINE_SITES}
        with pytest.raises(OutOfRangeResultError):
            run_body_test(_payload(method="SKINFOLD_7_SITE", age=18, skinfold_measurements=lean))

    def test_female_three_site_requires_female_sites(self):
        with pytest.raises(MissingMeasurementError) as exc_info:
            run_body_test(_payload(gender=Gender.FEMALE.value))
        assert exc_info.value.missing == ("triceps", "suprailiac")
