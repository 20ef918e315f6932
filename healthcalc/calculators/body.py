"""Body size, shape and composition calculators."""

from enum import Enum

from pydantic import Field, ValidationInfo, field_validator, model_validator

from healthcalc.calculators.base import (
    BodyInput,
    GenderBodyInput,
    UnitInput,
    calculator,
    r1,
    r2,
    result,
)
from healthcalc.classify import Rule, classify, first_match
from healthcalc.domain.models import CalculationResult, Gender, UnitSystem
from healthcalc.formulas import body as f
from healthcalc.formulas.energy import bmr_katch_mcardle, bmr_mifflin
from healthcalc.formulas.growth import (
    PREGNANCY_GAIN_SINGLE,
    PREGNANCY_GAIN_TWINS,
    bmi_cutoffs_for_age,
    estimate_bmi_percentile,
    gain_trajectory,
)
from healthcalc.thresholds import (
    BMI_ADULT,
    BMI_OBESITY_CLASS,
    BODY_FAT,
    PONDERAL_ADULT,
    PONDERAL_CHILD,
    WAIST_RISK_CUTOFF,
    WAIST_TO_HEIGHT,
    WAIST_TO_HEIGHT_OBESITY,
    WAIST_TO_HIP,
    child_bmi_table,
)
from healthcalc.units import (
    cm_to_in,
    display_mass,
    in_to_cm,
    lb_to_kg,
    mass_unit,
    normalize_length,
    normalize_mass,
)
from healthcalc.validation import check_circumference, check_height, check_weight


def _display(kg: float, units: UnitSystem) -> float:
    return r1(display_mass(kg, units))


# BMI
@calculator("bmi", BodyInput)
def compute_bmi(inp: BodyInput) -> CalculationResult:
    body = inp.body()
    value = f.bmi(body.weight_kg, body.height_m)
    low_kg, high_kg = f.healthy_weight_range(body.height_m)
    if body.weight_kg < low_kg:
        change_kg = low_kg - body.weight_kg
    elif body.weight_kg > high_kg:
        change_kg = high_kg - body.weight_kg
    else:
        change_kg = 0.0
    return result(
        "bmi",
        {
            "bmi": r1(value),
            "bmi_prime": r2(f.bmi_prime(value)),
            "ponderal_index": r2(f.ponderal_index_adult(body.weight_kg, body.height_m)),
            "healthy_weight_min": _display(low_kg, inp.units),
            "healthy_weight_max": _display(high_kg, inp.units),
            "weight_change_to_healthy": _display(change_kg, inp.units),
        },
        classify(value, BMI_ADULT),
        details={"weight_unit": mass_unit(inp.units)},
    )


# Ideal and adjusted body weight
class IdealBodyWeightInput(GenderBodyInput):
    age: float | None = Field(default=None, ge=1, le=120, description="Enables BMR at ideal weight")


@calculator("ideal-body-weight", IdealBodyWeightInput)
def compute_ideal_body_weight(inp: IdealBodyWeightInput) -> CalculationResult:
    body = inp.body()
    estimates = {
        formula: f.ideal_body_weight(body.height_in, inp.gender, formula)
        for formula in f.IBWFormula
    }
    devine = estimates[f.IBWFormula.DEVINE]
    low_kg, high_kg = f.healthy_weight_range(body.height_m)
    values = {formula.value: _display(kg, inp.units) for formula, kg in estimates.items()}
    values.update(
        {
            "healthy_weight_min": _display(low_kg, inp.units),
            "healthy_weight_max": _display(high_kg, inp.units),
            "adjusted_body_weight": _display(
                f.adjusted_body_weight(body.weight_kg, devine), inp.units
            ),
            "bmi": r1(f.bmi(body.weight_kg, body.height_m)),
            "difference_from_ideal": _display(body.weight_kg - devine, inp.units),
        }
    )
    if inp.age is not None:
        values["bmr_at_ideal_weight"] = float(
            round(bmr_mifflin(devine, body.height_cm, inp.age, inp.gender))
        )
    return result(
        "ideal-body-weight",
        values,
        description="Devine is the most widely used formula for clinical dosing.",
        details={"weight_unit": mass_unit(inp.units)},
    )


@calculator("adjusted-body-weight", GenderBodyInput)
def compute_adjusted_body_weight(inp: GenderBodyInput) -> CalculationResult:
    body = inp.body()
    ideal = f.ideal_body_weight(body.height_in, inp.gender)
    adjusted = f.adjusted_body_weight(body.weight_kg, ideal)
    if body.weight_kg > ideal:
        description = "Actual weight exceeds ideal weight, so the 0.4 correction factor applies."
    else:
        description = "Actual weight is at or below ideal weight, so actual weight is used."
    return result(
        "adjusted-body-weight",
        {
            "ideal_body_weight": _display(ideal, inp.units),
            "adjusted_body_weight": _display(adjusted, inp.units),
            "actual_weight": r1(inp.weight),
        },
        description=description,
        details={"weight_unit": mass_unit(inp.units)},
    )


@calculator("lean-body-mass", GenderBodyInput)
def compute_lean_body_mass(inp: GenderBodyInput) -> CalculationResult:
    body = inp.body()
    lean = f.lean_body_mass_boer(body.weight_kg, body.height_cm, inp.gender)
    return result(
        "lean-body-mass",
        {
            "lean_body_mass": _display(lean, inp.units),
            "body_fat_percent": r1((1 - lean / body.weight_kg) * 100),
        },
        description="Estimated with the Boer formula.",
        details={"weight_unit": mass_unit(inp.units)},
    )


# Waist based indices
class WaistHeightInput(UnitInput):
    """Waist and height in the same length unit (cm or in)."""

    height: float = Field(gt=0)
    waist: float = Field(gt=0)

    @field_validator("height")
    @classmethod
    def plausible_height(cls, v: float, info: ValidationInfo) -> float:
        return check_height(v, info.data.get("units"))

    @field_validator("waist")
    @classmethod
    def plausible_waist(cls, v: float, info: ValidationInfo) -> float:
        return check_circumference(v, info.data.get("units"))


class RFMInput(WaistHeightInput):
    gender: Gender


@calculator("waist-to-height-ratio", WaistHeightInput)
def compute_waist_to_height(inp: WaistHeightInput) -> CalculationResult:
    ratio = f.waist_to_height_ratio(inp.waist, inp.height)
    return result(
        "waist-to-height-ratio",
        {"ratio": r2(ratio), "target_waist": r1(inp.height * 0.45)},
        classify(ratio, WAIST_TO_HEIGHT),
    )


@calculator("rfm", RFMInput)
def compute_rfm(inp: RFMInput) -> CalculationResult:
    return result(
        "rfm",
        {"relative_fat_mass": r1(f.relative_fat_mass(inp.height, inp.waist, inp.gender))},
        description="Relative fat mass estimates whole-body fat percentage from height and waist.",
    )


class ABSIInput(BodyInput):
    waist: float = Field(gt=0, description="Waist circumference in cm or in")

    @field_validator("waist")
    @classmethod
    def plausible_waist(cls, v: float, info: ValidationInfo) -> float:
        return check_circumference(v, info.data.get("units"))


@calculator("absi", ABSIInput)
def compute_absi(inp: ABSIInput) -> CalculationResult:
    body = inp.body()
    bmi_value = f.bmi(body.weight_kg, body.height_m)
    waist_m = normalize_length(inp.waist, inp.units) / 100
    return result(
        "absi",
        {
            "absi": round(f.body_shape_index(waist_m, bmi_value, body.height_m), 4),
            "bmi": r1(bmi_value),
        },
        description="A higher ABSI indicates more central fat relative to overall body size.",
    )


# Ponderal index
class PonderalSubject(str, Enum):
    ADULT = "adult"
    CHILD = "child"


class PonderalInput(UnitInput):
    """
    Adult: weight in kg or lb, height in cm or in.
    Child (newborn): weight in grams or lb, length in cm or in.
    """

    user_type: PonderalSubject = PonderalSubject.ADULT
    weight: float = Field(gt=0)
    height: float = Field(gt=0)

    @field_validator("weight")
    @classmethod
    def plausible_weight(cls, v: float, info: ValidationInfo) -> float:
        units = info.data.get("units") or UnitSystem.METRIC
        if info.data.get("user_type") == PonderalSubject.CHILD and units == UnitSystem.METRIC:
            if not 300 <= v <= 10000:
                raise ValueError("Newborn weight must be between 300 and 10000 g")
            return v
        return check_weight(v, units)

    @field_validator("height")
    @classmethod
    def plausible_height(cls, v: float, info: ValidationInfo) -> float:
        return check_height(v, info.data.get("units"))


@calculator("ponderal-index", PonderalInput)
def compute_ponderal_index(inp: PonderalInput) -> CalculationResult:
    length_cm = normalize_length(inp.height, inp.units)
    if inp.user_type == PonderalSubject.CHILD:
        if inp.units == UnitSystem.METRIC:
            grams = inp.weight
        else:
            grams = lb_to_kg(inp.weight) * 1000
        value = f.ponderal_index_child(grams, length_cm)
        band = classify(value, PONDERAL_CHILD)
    else:
        value = f.ponderal_index_adult(normalize_mass(inp.weight, inp.units), length_cm / 100)
        band = classify(value, PONDERAL_ADULT)
    return result("ponderal-index", {"ponderal_index": r2(value)}, band)


# US Navy body fat
class BodyFatInput(GenderBodyInput):
    neck: float = Field(gt=0)
    waist: float = Field(gt=0)
    hip: float | None = Field(default=None, gt=0, description="Required for women")

    @field_validator("neck", "waist", "hip")
    @classmethod
    def plausible_circumference(cls, v: float | None, info: ValidationInfo) -> float | None:
        if v is None:
            return v
        return check_circumference(v, info.data.get("units"))

    @model_validator(mode="after")
    def check_measurements(self) -> "BodyFatInput":
        if self.gender == Gender.FEMALE:
            if self.hip is None:
                raise ValueError("Hip measurement is required for women")
            if self.waist + self.hip <= self.neck:
                raise ValueError("Waist plus hip must be larger than neck")
        elif self.waist <= self.neck:
            raise ValueError("Waist must be larger than neck")
        return self


@calculator("body-fat", BodyFatInput)
def compute_body_fat(inp: BodyFatInput) -> CalculationResult:
    body = inp.body()
    hip_cm = normalize_length(inp.hip, inp.units) if inp.hip is not None else None
    percent = f.navy_body_fat(
        inp.gender,
        body.height_cm,
        normalize_length(inp.waist, inp.units),
        normalize_length(inp.neck, inp.units),
        hip_cm,
    )
    fat_kg = body.weight_kg * percent / 100
    lean_kg = body.weight_kg - fat_kg
    target = 0.15 if inp.gender == Gender.MALE else 0.22
    return result(
        "body-fat",
        {
            "body_fat_percent": r1(percent),
            "fat_mass": _display(fat_kg, inp.units),
            "lean_mass": _display(lean_kg, inp.units),
            "bmr_katch_mcardle": float(round(bmr_katch_mcardle(lean_kg))),
            "ideal_weight_at_target_fat": _display(lean_kg / (1 - target), inp.units),
        },
        classify(percent, BODY_FAT[inp.gender]),
        details={"weight_unit": mass_unit(inp.units), "target_body_fat_percent": target * 100},
    )


# Child BMI
class ChildBMIInput(GenderBodyInput):
    age_years: int = Field(ge=2, le=20)
    age_months: int = Field(default=0, ge=0, le=11)


@calculator("child-bmi", ChildBMIInput)
def compute_child_bmi(inp: ChildBMIInput) -> CalculationResult:
    body = inp.body()
    value = f.bmi(body.weight_kg, body.height_m)
    cutoffs = bmi_cutoffs_for_age(inp.gender, inp.age_years, inp.age_months)
    percentile = estimate_bmi_percentile(value, cutoffs)
    return result(
        "child-bmi",
        {"bmi": r1(value), "percentile": r1(percentile)},
        classify(value, child_bmi_table(cutoffs)),
        details={"p5": r2(cutoffs.p5), "p85": r2(cutoffs.p85), "p95": r2(cutoffs.p95)},
    )


# Obesity risk
class ObesityRiskInput(BodyInput):
    waist: float = Field(gt=0)

    @field_validator("waist")
    @classmethod
    def plausible_waist(cls, v: float, info: ValidationInfo) -> float:
        return check_circumference(v, info.data.get("units"))


# Subject: (bmi, waist risk high)
OBESITY_RISK_RULES: tuple[Rule[tuple[float, bool]], ...] = (
    Rule("Very High Risk", lambda s: s[0] >= 30),
    Rule("High Risk", lambda s: s[0] >= 25 and s[1]),
    Rule("Moderate Risk", lambda s: s[0] >= 25 or s[1]),
    Rule("Increased Risk (Underweight)", lambda s: s[0] < 18.5),
    Rule("Low Risk", lambda s: True),
)


@calculator("obesity-risk", ObesityRiskInput)
def compute_obesity_risk(inp: ObesityRiskInput) -> CalculationResult:
    body = inp.body()
    bmi_value = f.bmi(body.weight_kg, body.height_m)
    whtr = f.waist_to_height_ratio(normalize_length(inp.waist, inp.units), body.height_cm)
    waist_band = classify(whtr, WAIST_TO_HEIGHT_OBESITY)
    waist_risk_high = whtr >= WAIST_RISK_CUTOFF
    overall = first_match((bmi_value, waist_risk_high), OBESITY_RISK_RULES)
    low_kg, high_kg = f.healthy_weight_range(body.height_m)

    insights: list[str] = []
    if bmi_value >= 25:
        insights.append("Losing 5-10% of body weight can meaningfully lower cardiometabolic risk.")
    if waist_risk_high:
        insights.append("Abdominal fat is elevated; aim to keep your waist below half your height.")
    if bmi_value >= 30:
        insights.append("Discuss a structured weight management plan with a healthcare provider.")
    return result(
        "obesity-risk",
        {
            "bmi": r1(bmi_value),
            "waist_to_height_ratio": r2(whtr),
            "healthy_weight_min": _display(low_kg, inp.units),
            "healthy_weight_max": _display(high_kg, inp.units),
        },
        category=overall.label,
        details={
            "bmi_category": classify(bmi_value, BMI_OBESITY_CLASS).label,
            "waist_category": waist_band.label,
            "insights": insights,
        },
    )


# Body shape
class BodyShapeInput(UnitInput):
    gender: Gender = Gender.FEMALE
    bust: float = Field(gt=0)
    waist: float = Field(gt=0)
    high_hip: float = Field(gt=0)
    hip: float = Field(gt=0)

    @field_validator("bust", "waist", "high_hip", "hip")
    @classmethod
    def plausible_circumference(cls, v: float, info: ValidationInfo) -> float:
        return check_circumference(v, info.data.get("units"))


# Subject: (bust, waist, high hip, hip) in cm
FEMALE_SHAPE_RULES: tuple[Rule[tuple[float, float, float, float]], ...] = (
    Rule(
        "Spoon",
        lambda s: s[3] / s[0] >= 1.2 and s[2] / s[3] < 0.9,
        "Hips are larger than the bust with a defined waist and a shelf at the high hip.",
    ),
    Rule(
        "Pear (Triangle)",
        lambda s: s[3] / s[0] >= 1.05,
        "Hips are wider than the bust, with a well-defined waist.",
    ),
    Rule(
        "Apple (Inverted Triangle)",
        lambda s: s[0] / s[3] >= 1.05,
        "Shoulders and bust are larger than the hips, with a less defined waist.",
    ),
    Rule(
        "Hourglass",
        lambda s: abs(s[0] - s[3]) / s[3] < 0.05 and s[1] / min(s[0], s[3]) < 0.75,
        "Bust and hips are nearly equal with a clearly defined waist.",
    ),
    Rule(
        "Rectangle",
        lambda s: True,
        "Bust, waist and hips are fairly uniform, giving a straighter silhouette.",
    ),
)


@calculator("body-shape", BodyShapeInput)
def compute_body_shape(inp: BodyShapeInput) -> CalculationResult:
    bust, waist, high_hip, hip = (
        normalize_length(value, inp.units) for value in (inp.bust, inp.waist, inp.high_hip, inp.hip)
    )
    whr = f.waist_to_hip_ratio(waist, hip)
    risk = classify(whr, WAIST_TO_HIP[inp.gender])
    if inp.gender == Gender.FEMALE:
        shape = first_match((bust, waist, high_hip, hip), FEMALE_SHAPE_RULES)
        return result(
            "body-shape",
            {"waist_to_hip_ratio": r2(whr)},
            category=shape.label,
            description=shape.description,
            details={"waist_to_hip_risk": risk.label},
        )
    return result(
        "body-shape",
        {"waist_to_hip_ratio": r2(whr)},
        category=None,
        details={"waist_to_hip_risk": risk.label},
        warnings=["Body shape classification is only available for female measurements."],
    )


# Archery draw length
class DrawLengthInput(UnitInput):
    wingspan: float = Field(gt=0, description="Fingertip to fingertip, in cm or in")

    @field_validator("wingspan")
    @classmethod
    def plausible_wingspan(cls, v: float, info: ValidationInfo) -> float:
        return check_height(v, info.data.get("units"))


@calculator("draw-length", DrawLengthInput)
def compute_draw_length(inp: DrawLengthInput) -> CalculationResult:
    wingspan_in = cm_to_in(inp.wingspan) if inp.units == UnitSystem.METRIC else inp.wingspan
    draw = f.draw_length(wingspan_in)
    return result(
        "draw-length",
        {
            "draw_length_in": r1(draw),
            "draw_length_cm": r1(in_to_cm(draw)),
            "range_start_in": r1(draw - 0.5),
            "range_end_in": r1(draw + 0.5),
        },
        description="Start within half an inch either side and fine-tune at the range.",
    )


# Pregnancy weight gain
class PregnancyType(str, Enum):
    SINGLE = "single"
    TWINS = "twins"


class PregnancyWeightGainInput(UnitInput):
    pregnancy_type: PregnancyType = PregnancyType.SINGLE
    current_week: int = Field(ge=0, le=40)
    height: float = Field(gt=0)
    weight_before: float = Field(gt=0, description="Pre-pregnancy weight")
    weight_current: float | None = Field(default=None, gt=0)

    @field_validator("height")
    @classmethod
    def plausible_height(cls, v: float, info: ValidationInfo) -> float:
        return check_height(v, info.data.get("units"))

    @field_validator("weight_before", "weight_current")
    @classmethod
    def plausible_weight(cls, v: float | None, info: ValidationInfo) -> float | None:
        if v is None:
            return v
        return check_weight(v, info.data.get("units"))


@calculator("pregnancy-weight-gain", PregnancyWeightGainInput)
def compute_pregnancy_weight_gain(inp: PregnancyWeightGainInput) -> CalculationResult:
    height_m = normalize_length(inp.height, inp.units) / 100
    before_kg = normalize_mass(inp.weight_before, inp.units)
    bmi_value = f.bmi(before_kg, height_m)

    if bmi_value < 18.5:
        key = "underweight"
    elif bmi_value < 25:
        key = "normal"
    elif bmi_value < 30:
        key = "overweight"
    else:
        key = "obese"
    if inp.pregnancy_type == PregnancyType.TWINS:
        guideline = PREGNANCY_GAIN_TWINS["normal" if key == "underweight" else key]
    else:
        guideline = PREGNANCY_GAIN_SINGLE[key]

    chart = [
        {"week": week, "min": _display(low, inp.units), "max": _display(high, inp.units)}
        for week, low, high in gain_trajectory(guideline)
    ]
    current = chart[inp.current_week]
    values = {
        "bmi": r1(bmi_value),
        "total_gain_min": _display(guideline.min_kg, inp.units),
        "total_gain_max": _display(guideline.max_kg, inp.units),
        "target_min_current_week": current["min"],
        "target_max_current_week": current["max"],
    }

    status = "On Track"
    if inp.weight_current is not None:
        gain = inp.weight_current - inp.weight_before
        values["current_gain"] = r1(gain)
        if gain < current["min"] - 1:
            status = "Below Recommended Range"
        elif gain > current["max"] + 1:
            status = "Above Recommended Range"
    return result(
        "pregnancy-weight-gain",
        values,
        category=status,
        description=f"Guideline: {guideline.label}",
        details={"bmi_category": key, "chart": chart, "weight_unit": mass_unit(inp.units)},
    )
