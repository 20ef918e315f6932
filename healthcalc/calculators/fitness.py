"""Strength training and running calculators."""

import math
from enum import Enum
from typing import Any

from pydantic import Field, ValidationInfo, field_validator, model_validator

from healthcalc.calculators.base import UnitInput, calculator, r1, r2, result
from healthcalc.classify import classify
from healthcalc.domain.models import CalculationResult, CalculatorInput, Gender
from healthcalc.formulas import fitness as f
from healthcalc.formulas import half_up
from healthcalc.thresholds import WILKS_LEVEL
from healthcalc.units import mass_unit, normalize_mass
from healthcalc.validation import check_weight

# (name, low fraction, high fraction, focus)
STRENGTH_ZONES = (
    ("Explosive Power", 0.9, 1.0, "1-3 reps (max effort)"),
    ("Strength", 0.8, 0.9, "4-6 reps (heavy)"),
    ("Hypertrophy", 0.6, 0.8, "8-12 reps (muscle growth)"),
    ("Endurance", 0.4, 0.6, "15+ reps (stamina)"),
)


class OneRepMaxInput(UnitInput):
    weight: float = Field(gt=0, le=1000, description="Weight lifted in kg or lb")
    reps: int = Field(ge=1, le=12)


@calculator("one-rep-max", OneRepMaxInput)
def compute_one_rep_max(inp: OneRepMaxInput) -> CalculationResult:
    one_rep_max = f.epley_one_rep_max(inp.weight, inp.reps)
    chart = [
        {"percent": row["percent"], "weight": float(half_up(row["weight"])), "reps": row["reps"]}
        for row in f.percentage_chart(one_rep_max)
    ]
    zones = [
        {
            "zone": name,
            "low_weight": half_up(one_rep_max * low),
            "high_weight": half_up(one_rep_max * high),
            "focus": focus,
        }
        for name, low, high, focus in STRENGTH_ZONES
    ]
    return result(
        "one-rep-max",
        {"one_rep_max": r1(one_rep_max)},
        description="Estimated with the Epley formula.",
        details={
            "percentages": chart,
            "training_zones": zones,
            "weight_unit": mass_unit(inp.units),
        },
    )


class WilksMode(str, Enum):
    SIMPLE = "simple"
    DETAILED = "detailed"


WILKS_DESCRIPTIONS = {
    "Beginner": "Everyone starts somewhere.",
    "Novice": "Good start, keep training.",
    "Intermediate": "Solid foundation, better than average.",
    "Advanced": "Stronger than most gym-goers.",
    "Elite": "Competitive at a national level.",
    "World Class": "Among the strongest lifters on the planet.",
}


class WilksInput(UnitInput):
    gender: Gender
    bodyweight: float = Field(gt=0)
    mode: WilksMode = WilksMode.SIMPLE
    total: float | None = Field(default=None, gt=0)
    squat: float | None = Field(default=None, ge=0)
    bench: float | None = Field(default=None, ge=0)
    deadlift: float | None = Field(default=None, ge=0)

    @field_validator("bodyweight")
    @classmethod
    def plausible_bodyweight(cls, v: float, info: ValidationInfo) -> float:
        return check_weight(v, info.data.get("units"))

    @model_validator(mode="after")
    def lifts_present(self) -> "WilksInput":
        if self.mode == WilksMode.SIMPLE and self.total is None:
            raise ValueError("Enter your total lifted weight")
        if self.mode == WilksMode.DETAILED:
            if None in (self.squat, self.bench, self.deadlift):
                raise ValueError("Enter squat, bench press and deadlift")
            if self.lifted_total() <= 0:
                raise ValueError("Total lifted weight must be greater than zero")
        return self

    def lifted_total(self) -> float:
        if self.mode == WilksMode.DETAILED:
            return (self.squat or 0) + (self.bench or 0) + (self.deadlift or 0)
        return self.total or 0


@calculator("wilks", WilksInput)
def compute_wilks(inp: WilksInput) -> CalculationResult:
    bodyweight_kg = normalize_mass(inp.bodyweight, inp.units)
    total_kg = normalize_mass(inp.lifted_total(), inp.units)
    score = f.wilks_score(total_kg, bodyweight_kg, inp.gender)
    level = classify(score, WILKS_LEVEL)
    warnings: list[str] = []
    if f.wilks_bodyweight(bodyweight_kg, inp.gender) != bodyweight_kg:
        low, high = f.WILKS_BODYWEIGHT_RANGE[inp.gender]
        warnings.append(
            f"The Wilks formula covers body weights from {low:g} to {high:g} kg; "
            "the nearest limit was used."
        )
    return result(
        "wilks",
        {
            "wilks_score": r2(score),
            "coefficient": round(f.wilks_coefficient(bodyweight_kg, inp.gender), 4),
            "total": r1(inp.lifted_total()),
        },
        level,
        description=WILKS_DESCRIPTIONS[level.label],
        details={"weight_unit": mass_unit(inp.units)},
        warnings=warnings,
    )


# Running pace
class PaceMode(str, Enum):
    PACE = "pace"
    TIME = "time"
    DISTANCE = "distance"


class DistanceUnit(str, Enum):
    KM = "km"
    MI = "mi"
    M = "m"


class PaceUnit(str, Enum):
    KM = "km"
    MI = "mi"


KM_PER_DISTANCE_UNIT = {DistanceUnit.KM: 1.0, DistanceUnit.MI: f.KM_PER_MILE, DistanceUnit.M: 0.001}
RACE_DISTANCES_KM = (
    ("5K", 5.0),
    ("10K", 10.0),
    ("Half Marathon", 21.0975),
    ("Marathon", 42.195),
)
# (zone, pace multiplier, purpose)
PACE_ZONES = (
    ("Easy Pace", 1.25, "Builds endurance and recovery"),
    ("Tempo Pace", 0.95, "Lactate threshold (comfortably hard)"),
    ("VO2 Max / Intervals", 0.88, "Short hard bursts for speed"),
)
MAX_SPLITS = 50


class RunningPaceInput(CalculatorInput):
    mode: PaceMode = PaceMode.PACE
    time_hours: float = Field(default=0, ge=0, le=100)
    time_minutes: float = Field(default=0, ge=0, lt=60)
    time_seconds: float = Field(default=0, ge=0, lt=60)
    distance: float | None = Field(default=None, gt=0, le=1000)
    distance_unit: DistanceUnit = DistanceUnit.KM
    pace_minutes: float = Field(default=0, ge=0, le=60)
    pace_seconds: float = Field(default=0, ge=0, lt=60)
    pace_unit: PaceUnit = PaceUnit.KM

    @model_validator(mode="after")
    def known_quantities_present(self) -> "RunningPaceInput":
        if self.mode != PaceMode.DISTANCE and self.distance is None:
            raise ValueError("Enter the distance")
        if self.mode != PaceMode.TIME and self.total_seconds() <= 0:
            raise ValueError("Enter a finish time greater than zero")
        if self.mode != PaceMode.PACE and self.pace_seconds_per_km() <= 0:
            raise ValueError("Enter a pace greater than zero")
        return self

    def total_seconds(self) -> float:
        return self.time_hours * 3600 + self.time_minutes * 60 + self.time_seconds

    def distance_km(self) -> float:
        return (self.distance or 0) * KM_PER_DISTANCE_UNIT[self.distance_unit]

    def pace_seconds_per_km(self) -> float:
        pace = self.pace_minutes * 60 + self.pace_seconds
        return pace if self.pace_unit == PaceUnit.KM else pace / f.KM_PER_MILE


def _splits(distance_km: float, pace_s_per_km: float, unit: DistanceUnit) -> list[dict[str, Any]]:
    """Cumulative time at each whole km (or mile), ending with any partial split."""
    per_unit = f.KM_PER_MILE if unit == DistanceUnit.MI else 1.0
    units = distance_km / per_unit
    splits: list[dict[str, Any]] = []
    for marker in range(1, min(math.ceil(units), MAX_SPLITS) + 1):
        at = min(float(marker), units)
        label = marker if at == marker else r2(units)
        splits.append({"marker": label, "time": f.format_duration(at * per_unit * pace_s_per_km)})
    return splits


@calculator("running-pace", RunningPaceInput)
def compute_running_pace(inp: RunningPaceInput) -> CalculationResult:
    if inp.mode == PaceMode.PACE:
        total_s, distance_km = inp.total_seconds(), inp.distance_km()
        pace = total_s / distance_km
    elif inp.mode == PaceMode.TIME:
        pace, distance_km = inp.pace_seconds_per_km(), inp.distance_km()
        total_s = pace * distance_km
    else:
        total_s, pace = inp.total_seconds(), inp.pace_seconds_per_km()
        distance_km = total_s / pace

    pace_mile = pace * f.KM_PER_MILE
    predictions = [
        {"event": event, "time": f.format_duration(f.riegel_time(total_s, distance_km, target))}
        for event, target in RACE_DISTANCES_KM
    ]
    zones = [
        {
            "zone": zone,
            "pace_per_km": f.format_duration(pace * factor),
            "pace_per_mile": f.format_duration(pace_mile * factor),
            "purpose": purpose,
        }
        for zone, factor, purpose in PACE_ZONES
    ]
    return result(
        "running-pace",
        {
            "total_seconds": r1(total_s),
            "distance_km": r2(distance_km),
            "distance_mi": r2(distance_km / f.KM_PER_MILE),
            "pace_seconds_per_km": r1(pace),
            "pace_seconds_per_mile": r1(pace_mile),
        },
        description="Race predictions use Riegel's formula from this effort.",
        details={
            "time": f.format_duration(total_s),
            "pace_per_km": f.format_duration(pace),
            "pace_per_mile": f.format_duration(pace_mile),
            "predictions": predictions,
            "training_zones": zones,
            "splits": _splits(distance_km, pace, inp.distance_unit),
        },
    )
