"""
Measurement Validation
======================
Range checks that run before any formula does.

  - `validate_measurement` is a pure predicate: it never raises.
  - `parse_measurement` and `validate_input` turn failures into engine errors
    so the caller can reject the request before an estimator is invoked.
"""

import logging
from collections.abc import Mapping
from typing import Any

import pydantic

from bodycomp.core.constants import MEASUREMENT_RANGES
from bodycomp.core.enums import MeasurementKind, MeasurementMethod
from bodycomp.core.exceptions import UnsupportedMethodError, ValidationError
from bodycomp.schemas import MeasurementInput

logger = logging.getLogger(__name__)


def validate_measurement(value: float, kind: MeasurementKind | str) -> bool:
    """
    Return True iff `value` lies in the inclusive plausibility range for `kind`.

    Ranges: skinfold 2–50 mm, weight 30–300 kg, height 120–250 cm, age 10–100.
    Unknown kinds are never valid.
    """
    try:
        value_range = MEASUREMENT_RANGES[MeasurementKind(kind)]
    except ValueError:
        return False
    return value_range.min <= value <= value_range.max


def parse_measurement(payload: Mapping[str, Any]) -> MeasurementInput:
    """
    Build a MeasurementInput from a raw mapping (e.g. a decoded JSON body).

    Raises:
        UnsupportedMethodError: `method` is not a known measurement method.
        ValidationError: any field is missing, malformed or out of range.
    """
    method = payload.get("method")
    if method is not None:
        try:
            MeasurementMethod(method)
        except ValueError:
            raise UnsupportedMethodError(method) from None

    try:
        return MeasurementInput.model_validate(payload)
    except pydantic.ValidationError as exc:
        errors = exc.errors()
        fields = [".".join(str(part) for part in err["loc"]) for err in errors]
        first = errors[0]
        raise ValidationError(
            f"Invalid measurement values: {', '.join(fields)} ({first['msg']})",
            field=fields[0] if fields else None,
            value=first.get("input"),
        ) from exc


def validate_input(measurement: MeasurementInput) -> None:
    """
    Apply the plausibility ranges to weight, height, age and every supplied
    skinfold site.

    Raises:
        ValidationError: naming the first field that is out of range.
    """
    checks = [
        ("weight", measurement.weight, MeasurementKind.WEIGHT),
        ("height", measurement.height, MeasurementKind.HEIGHT),
        ("age", measurement.age, MeasurementKind.AGE),
    ]
    if measurement.skinfold_measurements is not None:
        checks.extend(
            (f"skinfold_measurements.{site}", value, MeasurementKind.SKINFOLD)
            for site, value in measurement.skinfold_measurements.provided().items()
        )

    for field, value, kind in checks:
        if not validate_measurement(value, kind):
            value_range = MEASUREMENT_RANGES[kind]
            raise ValidationError(
                f"Invalid measurement for {field}: {value} "
                f"(expected {value_range.min}-{value_range.max})",
                field=field,
                value=value,
            )

    logger.debug(
        f"Validated measurement: weight={measurement.weight}kg, "
        f"height={measurement.height}cm, age={measurement.age}"
    )
