"""Blood pressure, heart rate and aerobic fitness calculators."""

from enum import Enum

from pydantic import Field, ValidationInfo, field_validator, model_validator

from healthcalc.calculators.base import UnitInput, calculator, r1, result
from healthcalc.classify import Rule, classify, first_match
from healthcalc.domain.errors import FormulaPreconditionError
from healthcalc.domain.models import CalculationResult, CalculatorInput, Gender
from healthcalc.formulas import cardio as f
from healthcalc.formulas import half_up
from healthcalc.formulas.fitness import fitness_age, vo2_baseline
from healthcalc.thresholds import (
    MEAN_ARTERIAL_PRESSURE,
    PULSE_PRESSURE,
    RESTING_HEART_RATE,
    VO2_FITNESS_LEVEL,
    VO2_PERCENTILE,
)
from healthcalc.units import kg_to_lb, normalize_mass
from healthcalc.validation import check_weight


class BloodPressureInput(CalculatorInput):
    systolic: float = Field(gt=0, le=300, description="Systolic pressure in mmHg")
    diastolic: float = Field(gt=0, le=200, description="Diastolic pressure in mmHg")

    @model_validator(mode="after")
    def systolic_above_diastolic(self) -> "BloodPressureInput":
        if self.systolic <= self.diastolic:
            raise ValueError("Systolic pressure must be higher than diastolic pressure")
        return self


@calculator("mean-arterial-pressure", BloodPressureInput)
def compute_mean_arterial_pressure(inp: BloodPressureInput) -> CalculationResult:
    value = f.mean_arterial_pressure(inp.systolic, inp.diastolic)
    return result(
        "mean-arterial-pressure",
        {"map": r1(value), "pulse_pressure": r1(f.pulse_pressure(inp.systolic, inp.diastolic))},
        classify(value, MEAN_ARTERIAL_PRESSURE),
    )


@calculator("pulse-pressure", BloodPressureInput)
def compute_pulse_pressure(inp: BloodPressureInput) -> CalculationResult:
    value = f.pulse_pressure(inp.systolic, inp.diastolic)
    return result(
        "pulse-pressure",
        {
            "pulse_pressure": r1(value),
            "map": r1(f.mean_arterial_pressure(inp.systolic, inp.diastolic)),
        },
        classify(value, PULSE_PRESSURE),
    )


# Subject: (systolic, diastolic). Evaluated in order, first match wins.
BLOOD_PRESSURE_RULES: tuple[Rule[tuple[float, float]], ...] = (
    Rule(
        "Hypertensive Crisis",
        lambda s: s[0] >= 180 or s[1] >= 120,
        "Seek medical attention immediately.",
    ),
    Rule(
        "Hypertension Stage 2",
        lambda s: s[0] >= 140 or s[1] >= 90,
        "Consistently high readings. Medical intervention is likely needed.",
    ),
    Rule(
        "Hypertension Stage 1",
        lambda s: s[0] >= 130 or s[1] >= 80,
        "Early-stage hypertension. Lifestyle changes are critical here.",
    ),
    Rule(
        "Elevated",
        lambda s: s[0] >= 120,
        "You are at risk of developing hypertension if changes are not made.",
    ),
    Rule(
        "Low (Hypotension)",
        lambda s: s[0] < 90 or s[1] < 60,
        "Your blood pressure is lower than the typical range.",
    ),
    Rule("Normal", lambda s: True, "Your blood pressure is in the ideal range."),
)

BLOOD_PRESSURE_ADVICE: dict[str, list[str]] = {
    "Hypertensive Crisis": [
        "Consult a doctor immediately",
        "Do not wait for symptoms",
        "Call emergency services if chest pain occurs",
    ],
    "Hypertension Stage 2": [
        "Consult your doctor for a treatment plan",
        "Reduce sodium intake significantly",
        "Monitor blood pressure twice daily",
    ],
    "Hypertension Stage 1": [
        "Increase daily physical activity",
        "Review your diet (the DASH diet is recommended)",
        "Reduce alcohol and stop smoking",
    ],
    "Elevated": [
        "Keep tracking your results",
        "Focus on healthy sleep habits",
        "Maintain a healthy weight",
    ],
    "Low (Hypotension)": [
        "Drink plenty of water",
        "Check for dizziness when standing",
        "Consult a doctor if you feel faint",
    ],
    "Normal": [
        "Maintain your healthy habits",
        "Check your blood pressure once a month",
        "Keep a balanced diet and regular exercise",
    ],
}


@calculator("blood-pressure", BloodPressureInput)
def compute_blood_pressure(inp: BloodPressureInput) -> CalculationResult:
    rule = first_match((inp.systolic, inp.diastolic), BLOOD_PRESSURE_RULES)
    return result(
        "blood-pressure",
        {
            "map": r1(f.mean_arterial_pressure(inp.systolic, inp.diastolic)),
            "pulse_pressure": r1(f.pulse_pressure(inp.systolic, inp.diastolic)),
        },
        category=rule.label,
        description=rule.description,
        details={"advice": BLOOD_PRESSURE_ADVICE[rule.label]},
    )


# Heart rate zones
KARVONEN_ZONE_NAMES = ("Recovery", "Endurance", "Aerobic", "Threshold", "Max Effort")
HEART_RATE_ZONE_NAMES = (
    "Warm Up / Recovery",
    "Fat Burn / Endurance",
    "Aerobic / Cardio",
    "Anaerobic / Hard",
    "VO2 Max / Peak",
)
RESTING_ZONE_NAMES = ("Very Light", "Light", "Moderate", "Hard", "VO2 Max (Maximum)")


RESTING_ABOVE_MAX = "Resting heart rate must be lower than maximum heart rate"


class KarvonenInput(CalculatorInput):
    age: float = Field(ge=10, le=100)
    resting_hr: float = Field(ge=30, le=120, description="Resting heart rate in bpm")
    formula: f.MaxHeartRateFormula = f.MaxHeartRateFormula.TANAKA
    manual_max_hr: float | None = Field(default=None, ge=100, le=250)

    @model_validator(mode="after")
    def resting_below_max(self) -> "KarvonenInput":
        if self.formula == f.MaxHeartRateFormula.MANUAL and self.manual_max_hr is None:
            raise ValueError("Enter your measured maximum heart rate or choose a formula")
        if self.resting_hr >= self.max_hr():
            raise ValueError(RESTING_ABOVE_MAX)
        return self

    def max_hr(self) -> int:
        return half_up(f.max_heart_rate(self.age, self.formula, self.manual_max_hr))


@calculator("karvonen", KarvonenInput)
def compute_karvonen(inp: KarvonenInput) -> CalculationResult:
    max_hr = inp.max_hr()
    return result(
        "karvonen",
        {
            "max_hr": float(max_hr),
            "heart_rate_reserve": float(f.heart_rate_reserve(max_hr, inp.resting_hr)),
        },
        description="Zones use heart rate reserve, so they adapt to your fitness level.",
        details={"zones": f.training_zones(max_hr, inp.resting_hr, KARVONEN_ZONE_NAMES)},
    )


class HeartRateMethod(str, Enum):
    STANDARD = "standard"
    TANAKA = "tanaka"


class HeartRateInput(CalculatorInput):
    age: float = Field(ge=10, le=100)
    method: HeartRateMethod = HeartRateMethod.STANDARD
    resting_hr: float | None = Field(default=None, ge=30, le=120)

    @model_validator(mode="after")
    def resting_below_max(self) -> "HeartRateInput":
        if self.resting_hr is not None and self.resting_hr >= self.max_hr():
            raise ValueError(RESTING_ABOVE_MAX)
        return self

    def max_hr(self) -> float:
        formula = (
            f.MaxHeartRateFormula.TANAKA
            if self.method == HeartRateMethod.TANAKA
            else f.MaxHeartRateFormula.FOX
        )
        return f.max_heart_rate(self.age, formula)


@calculator("heart-rate", HeartRateInput)
def compute_heart_rate(inp: HeartRateInput) -> CalculationResult:
    max_hr = inp.max_hr()
    values = {"max_hr": float(half_up(max_hr))}
    if inp.resting_hr is not None:
        values["heart_rate_reserve"] = r1(f.heart_rate_reserve(max_hr, inp.resting_hr))
    return result(
        "heart-rate",
        values,
        details={"zones": f.training_zones(max_hr, inp.resting_hr, HEART_RATE_ZONE_NAMES)},
    )


class RestingHeartRateInput(CalculatorInput):
    age: float = Field(ge=10, le=100)
    resting_hr: float = Field(ge=30, le=200)

    @model_validator(mode="after")
    def resting_below_max(self) -> "RestingHeartRateInput":
        if self.resting_hr >= f.max_heart_rate(self.age, f.MaxHeartRateFormula.FOX):
            raise ValueError(RESTING_ABOVE_MAX)
        return self


@calculator("resting-heart-rate", RestingHeartRateInput)
def compute_resting_heart_rate(inp: RestingHeartRateInput) -> CalculationResult:
    max_hr = f.max_heart_rate(inp.age, f.MaxHeartRateFormula.FOX)
    warnings: list[str] = []
    if inp.resting_hr > 100:
        warnings.append("A resting heart rate above 100 bpm (tachycardia) warrants medical advice.")
    return result(
        "resting-heart-rate",
        {"resting_hr": float(inp.resting_hr), "max_hr": float(half_up(max_hr))},
        classify(inp.resting_hr, RESTING_HEART_RATE),
        details={"zones": f.training_zones(max_hr, inp.resting_hr, RESTING_ZONE_NAMES)},
        warnings=warnings,
    )


# VO2 max
class VO2Method(str, Enum):
    REST_HR = "rest_hr"
    COOPER = "cooper"
    ROCKPORT = "rockport"


class VO2MaxInput(UnitInput):
    method: VO2Method = VO2Method.REST_HR
    age: float = Field(ge=10, le=100)
    gender: Gender
    resting_hr: float | None = Field(default=None, ge=30, le=120)
    run_time_minutes: float | None = Field(default=None, gt=0, le=60, description="1.5 mile run")
    walk_time_minutes: float | None = Field(default=None, gt=0, le=60, description="1 mile walk")
    walk_heart_rate: float | None = Field(default=None, ge=40, le=220)
    weight: float | None = Field(default=None, gt=0, description="Body weight in kg or lb")

    @field_validator("weight")
    @classmethod
    def plausible_weight(cls, v: float | None, info: ValidationInfo) -> float | None:
        if v is None:
            return v
        return check_weight(v, info.data.get("units"))

    @model_validator(mode="after")
    def method_fields_present(self) -> "VO2MaxInput":
        if self.method == VO2Method.REST_HR and self.resting_hr is None:
            raise ValueError("Resting heart rate is required for the resting heart rate method")
        if self.method == VO2Method.COOPER and self.run_time_minutes is None:
            raise ValueError("Run time is required for the Cooper test")
        if self.method == VO2Method.ROCKPORT:
            if None in (self.walk_time_minutes, self.walk_heart_rate, self.weight):
                raise ValueError(
                    "Walk time, finishing heart rate and weight are required for the Rockport test"
                )
        return self


@calculator("vo2-max", VO2MaxInput)
def compute_vo2_max(inp: VO2MaxInput) -> CalculationResult:
    if inp.method == VO2Method.REST_HR:
        vo2 = f.vo2max_from_resting_hr(inp.age, inp.resting_hr)  # type: ignore[arg-type]
    elif inp.method == VO2Method.COOPER:
        vo2 = f.vo2max_cooper_run(inp.run_time_minutes)  # type: ignore[arg-type]
    else:
        weight_lb = kg_to_lb(normalize_mass(inp.weight, inp.units))  # type: ignore[arg-type]
        vo2 = f.vo2max_rockport_walk(
            weight_lb,
            inp.age,
            inp.gender,
            inp.walk_time_minutes,  # type: ignore[arg-type]
            inp.walk_heart_rate,  # type: ignore[arg-type]
        )
    if vo2 <= 0:
        raise FormulaPreconditionError("These test results do not produce a valid VO2 max estimate")

    baseline = vo2_baseline(inp.age, inp.gender)
    level = classify(vo2 - baseline, VO2_FITNESS_LEVEL)
    return result(
        "vo2-max",
        {
            "vo2_max": r1(vo2),
            "percentile": float(VO2_PERCENTILE[level.label]),
            "fitness_age": float(fitness_age(vo2, inp.age, inp.gender)),
        },
        level,
        details={"method": inp.method.value, "baseline_for_age": r1(baseline)},
    )
