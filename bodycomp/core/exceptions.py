"""
Engine Errors
=============
Every failure the engine can raise. All derive from BodyTestError, itself a
ValueError, so callers that already translate ValueError into a 400-style
response keep working.

Nothing here is transient: there is nothing to retry in pure arithmetic.
"""

from collections.abc import Iterable


class BodyTestError(ValueError):
    """Base class for all engine errors."""


class ValidationError(BodyTestError):
    """An input value is outside its declared numeric range."""

    def __init__(self, message: str, field: str | None = None, value: object = None):
        super().__init__(message)
        self.field = field
        self.value = value


class MissingMeasurementError(BodyTestError):
    """The fields required by the selected measurement method are absent."""

    def __init__(self, method: str, missing: Iterable[str]):
        self.method = method
        self.missing = tuple(missing)
        super().__init__(
            f"Missing required measurements for {method}: {', '.join(self.missing)}"
        )


class UnsupportedMethodError(BodyTestError):
    """The measurement method has no body-fat estimator."""

    def __init__(self, method: object):
        self.method = method
        super().__init__(f"Unsupported measurement method: {method}")


class OutOfRangeResultError(BodyTestError):
    """A formula produced a body-fat percentage outside the global bound."""

    def __init__(self, body_fat_percentage: float, minimum: float, maximum: float):
        self.body_fat_percentage = body_fat_percentage
        super().__init__(
            f"Calculated body fat percentage out of range: {body_fat_percentage}% "
            f"(expected {minimum}-{maximum}%)"
        )


class RepRangeError(BodyTestError):
    """A 1RM estimate was requested for a rep count the formulas don't cover."""

    def __init__(self, reps: int, maximum: int):
        self.reps = reps
        super().__init__(
            f"Rep range not supported for accurate 1RM prediction: {reps} "
            f"(expected 1-{maximum} reps)"
        )
