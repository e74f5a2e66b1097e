"""
Pydantic V2 Schemas (Inputs and Derived Results)
==================================================
These schemas define the shape of data that flows in and out of the engine.

Naming Convention:
  - *Input / *Measurements / *Data : raw values supplied by the caller
  - everything else               : derived results, frozen once computed

Ranges declared here are the schema-level bounds of a measurement record.
The stricter plausibility ranges used before any formula runs live in
`bodycomp.core.constants.MEASUREMENT_RANGES`.
"""

from pydantic import BaseModel, Field, computed_field

from bodycomp.core.config import settings
from bodycomp.core.enums import (
    ActivityLevel,
    Gender,
    Lift,
    MeasurementMethod,
    PerformanceLevel,
    TrainingLevel,
)


# ============================================================
# MEASUREMENT INPUT SCHEMAS
# ============================================================

class SkinfoldMeasurements(BaseModel):
    """
    Caliper skinfold thickness per site, in millimeters.

    Every site is optional; which ones are required depends on the method:
      - 3-site male:   chest, abdomen, thigh
      - 3-site female: triceps, suprailiac, thigh
      - 7-site:        chest, midaxillary, triceps, subscapular, abdomen, suprailiac, thigh
      - 9-site:        the 7 sites plus calf and biceps
    """
    chest: float | None = Field(default=None, ge=2, le=50, description="Chest skinfold (mm)")
    abdomen: float | None = Field(default=None, ge=2, le=50, description="Abdominal skinfold (mm)")
    thigh: float | None = Field(default=None, ge=2, le=50, description="Thigh skinfold (mm)")
    triceps: float | None = Field(default=None, ge=2, le=50, description="Triceps skinfold (mm)")
    subscapular: float | None = Field(default=None, ge=2, le=50, description="Subscapular skinfold (mm)")
    suprailiac: float | None = Field(default=None, ge=2, le=50, description="Suprailiac skinfold (mm)")
    midaxillary: float | None = Field(default=None, ge=2, le=50, description="Mid-axillary skinfold (mm)")
    calf: float | None = Field(default=None, ge=2, le=50, description="Calf skinfold (mm)")
    biceps: float | None = Field(default=None, ge=2, le=50, description="Biceps skinfold (mm)")

    def provided(self) -> dict[str, float]:
        """Sites that were actually measured."""
        return {site: value for site, value in self.model_dump().items() if value is not None}

    def missing(self, sites: tuple[str, ...]) -> list[str]:
        """Which of `sites` have no value."""
        return [site for site in sites if getattr(self, site) is None]


class BioImpedanceData(BaseModel):
    """Raw readings from a bio-impedance device."""
    resistance: float = Field(..., ge=1, le=2000, description="Resistance in ohms")
    reactance: float | None = Field(
        default=None, ge=1, le=200, description="Reactance in ohms (recorded, not used)"
    )


class MeasurementInput(BaseModel):
    """
    One body test as submitted by the caller.

    Exactly one body-fat path is taken, selected by `method`; the fields that
    path needs must be present, the others are ignored.
    """
    weight: float = Field(..., ge=20, le=500, description="Body weight in kg")
    height: float = Field(..., ge=100, le=250, description="Height in cm")
    age: int = Field(..., ge=13, le=100, description="Age in years")
    gender: Gender
    method: MeasurementMethod = Field(..., description="How body fat is determined")

    skinfold_measurements: SkinfoldMeasurements | None = None
    bio_impedance_data: BioImpedanceData | None = None
    manual_body_fat_percentage: float | None = Field(
        default=None, ge=1, le=60, description="Body fat % for MANUAL_INPUT"
    )

    training_level: TrainingLevel = Field(
        default_factory=lambda: settings.DEFAULT_TRAINING_LEVEL
    )
    activity_level: ActivityLevel = Field(
        default_factory=lambda: settings.DEFAULT_ACTIVITY_LEVEL
    )


# ============================================================
# DERIVED RESULT SCHEMAS
# ============================================================

class BodyComposition(BaseModel):
    """
    Body composition derived from a body-fat percentage.

    fat_mass + lean_body_mass == weight. Muscle mass and total body water are
    fixed fractions of lean body mass.
    """
    body_fat_percentage: float
    lean_body_mass: float   # kg
    fat_mass: float         # kg
    muscle_mass: float      # kg
    total_body_water: float  # kg
    bmr: float              # kcal/day
    tdee: float             # kcal/day

    model_config = {"frozen": True}


class PowerliftingPredictions(BaseModel):
    """Predicted 1RMs and the Wilks score of their total."""
    bench_press_1rm: float = Field(..., ge=0)
    squat_1rm: float = Field(..., ge=0)
    deadlift_1rm: float = Field(..., ge=0)
    wilks_score: float = Field(..., ge=0)

    model_config = {"frozen": True}

    @computed_field
    @property
    def total(self) -> float:
        return self.bench_press_1rm + self.squat_1rm + self.deadlift_1rm


class LiftStandards(BaseModel):
    """Thresholds (kg) for one training level."""
    bench: float
    squat: float
    deadlift: float
    total: float

    model_config = {"frozen": True}

    def threshold(self, lift: Lift | str) -> float:
        return getattr(self, Lift(lift).value)


StrengthStandards = dict[TrainingLevel, LiftStandards]


class TrainingVolumeRecommendation(BaseModel):
    """Programming guidelines for a training level."""
    frequency: str
    sets_per_lift: str
    rep_range: str
    intensity: str
    focus_areas: list[str]

    model_config = {"frozen": True}


class LiftClassification(BaseModel):
    """Where a predicted lift lands on the strength standards."""
    lift: Lift
    value: float
    level: PerformanceLevel
    relative_strength: float       # value / bodyweight
    progress_to_elite: float       # 0..1, for progress bars

    model_config = {"frozen": True}


class BodyTestResult(BaseModel):
    """
    Result bundle of a complete body test.

    The caller serializes this into its own storage schema and API response.
    """
    method: MeasurementMethod
    training_level: TrainingLevel
    activity_level: ActivityLevel
    body_composition: BodyComposition
    body_fat_category: str
    powerlifting_predictions: PowerliftingPredictions
    strength_standards: dict[TrainingLevel, LiftStandards]
    classifications: dict[Lift, LiftClassification]

    model_config = {"frozen": True}
