"""Laboratory and cardiometabolic risk calculators."""

from enum import Enum

from pydantic import Field, ValidationInfo, field_validator, model_validator

from healthcalc.calculators.base import BodyInput, UnitInput, calculator, r1, r2, result
from healthcalc.classify import classify
from healthcalc.domain.errors import FormulaPreconditionError
from healthcalc.domain.models import CalculationResult, CalculatorInput, CholesterolUnit, Gender
from healthcalc.formulas import clinical as f
from healthcalc.formulas.body import bmi, body_surface_area_dubois
from healthcalc.thresholds import (
    A1C_STATUS,
    ASCVD_RISK,
    DIABETES_RISK_SCORE,
    FRAMINGHAM_RISK,
    KIDNEY_FUNCTION,
    LDL_HDL_RATIO,
    TOTAL_HDL_RATIO,
    TRIGLYCERIDE_HDL_RATIO,
)
from healthcalc.units import (
    cholesterol_to_mg_dl,
    creatinine_umol_l_to_mg_dl,
    glucose_mg_dl_to_mmol_l,
    glucose_mmol_l_to_mg_dl,
    mass_unit,
    normalize_length,
    normalize_mass,
)
from healthcalc.validation import check_height, check_weight


# Creatinine clearance
class CreatinineUnit(str, Enum):
    MG_DL = "mg/dL"
    UMOL_L = "umol/L"


class CreatinineClearanceInput(UnitInput):
    gender: Gender
    age: float = Field(ge=18, le=120)
    weight: float = Field(gt=0)
    creatinine: float = Field(gt=0, description="Serum creatinine")
    creatinine_unit: CreatinineUnit = CreatinineUnit.MG_DL
    height: float | None = Field(default=None, gt=0, description="Enables BMI and BSA")

    @field_validator("weight")
    @classmethod
    def plausible_weight(cls, v: float, info: ValidationInfo) -> float:
        return check_weight(v, info.data.get("units"))

    @field_validator("height")
    @classmethod
    def plausible_height(cls, v: float | None, info: ValidationInfo) -> float | None:
        if v is None:
            return v
        return check_height(v, info.data.get("units"))


@calculator("creatinine-clearance", CreatinineClearanceInput)
def compute_creatinine_clearance(inp: CreatinineClearanceInput) -> CalculationResult:
    weight_kg = normalize_mass(inp.weight, inp.units)
    scr = inp.creatinine
    if inp.creatinine_unit == CreatinineUnit.UMOL_L:
        scr = creatinine_umol_l_to_mg_dl(scr)
    clearance = f.creatinine_clearance(inp.age, weight_kg, scr, inp.gender)
    values = {"creatinine_clearance": r1(clearance), "creatinine_mg_dl": r2(scr)}
    if inp.height is not None:
        height_cm = normalize_length(inp.height, inp.units)
        values["bmi"] = r1(bmi(weight_kg, height_cm / 100))
        values["bsa"] = r2(body_surface_area_dubois(weight_kg, height_cm))
    return result(
        "creatinine-clearance",
        values,
        classify(clearance, KIDNEY_FUNCTION),
        details={"weight_unit": mass_unit(inp.units)},
    )


# Lipids
class CholesterolRatioInput(CalculatorInput):
    unit: CholesterolUnit = CholesterolUnit.MG_DL
    total_cholesterol: float = Field(gt=0)
    hdl: float = Field(gt=0)
    triglycerides: float = Field(gt=0)
    ldl: float | None = Field(default=None, gt=0, description="Measured LDL, if available")


@calculator("cholesterol-ratio", CholesterolRatioInput)
def compute_cholesterol_ratio(inp: CholesterolRatioInput) -> CalculationResult:
    ldl = inp.ldl
    calculated = ldl is None
    if ldl is None:
        tg_mg_dl = inp.triglycerides
        if inp.unit == CholesterolUnit.MMOL_L:
            tg_mg_dl = inp.triglycerides * f.TRIGLYCERIDE_MG_DL_PER_MMOL_L
        if tg_mg_dl >= f.FRIEDEWALD_TG_LIMIT_MG_DL:
            raise FormulaPreconditionError(
                "LDL cannot be calculated accurately when triglycerides are 400 mg/dL or "
                "higher. Please enter a measured LDL value.",
                field="ldl",
            )
        ldl = f.friedewald_ldl(inp.total_cholesterol, inp.hdl, inp.triglycerides, inp.unit)
        if ldl <= 0:
            raise FormulaPreconditionError(
                "Calculated LDL is not a valid positive number. Please check your inputs or "
                "provide a measured LDL value.",
                field="ldl",
            )

    total_ratio = inp.total_cholesterol / inp.hdl
    ldl_ratio = ldl / inp.hdl
    tg_ratio = inp.triglycerides / inp.hdl
    values = {
        "total_hdl_ratio": r2(total_ratio),
        "ldl_hdl_ratio": r2(ldl_ratio),
        "triglyceride_hdl_ratio": r2(tg_ratio),
        "vldl": r2(f.vldl(inp.triglycerides, inp.unit)),
    }
    if calculated:
        values["calculated_ldl"] = r2(ldl)
    overall = classify(total_ratio, TOTAL_HDL_RATIO)
    return result(
        "cholesterol-ratio",
        values,
        overall,
        details={
            "ratios": {
                "total_hdl": overall.label,
                "ldl_hdl": classify(ldl_ratio, LDL_HDL_RATIO).label,
                "triglyceride_hdl": classify(tg_ratio, TRIGLYCERIDE_HDL_RATIO).label,
            },
            "unit": inp.unit.value,
        },
    )


# Glucose
class GlucoseMode(str, Enum):
    A1C_TO_EAG = "a1c_to_eag"
    EAG_TO_A1C = "eag_to_a1c"


class GlucoseUnit(str, Enum):
    MG_DL = "mg/dL"
    MMOL_L = "mmol/L"


GLUCOSE_LIMITS = {GlucoseUnit.MG_DL: (50.0, 600.0), GlucoseUnit.MMOL_L: (2.5, 35.0)}


class GlucoseInput(CalculatorInput):
    mode: GlucoseMode = GlucoseMode.A1C_TO_EAG
    value: float = Field(gt=0, description="HbA1c % or average glucose")
    glucose_unit: GlucoseUnit = GlucoseUnit.MG_DL

    @model_validator(mode="after")
    def value_in_range(self) -> "GlucoseInput":
        if self.mode == GlucoseMode.A1C_TO_EAG:
            if not 4 <= self.value <= 20:
                raise ValueError("A1C generally falls between 4% and 20%")
        else:
            low, high = GLUCOSE_LIMITS[self.glucose_unit]
            if not low <= self.value <= high:
                raise ValueError(
                    f"eAG ({self.glucose_unit.value}) should be between {low:g} and {high:g}"
                )
        return self


@calculator("estimated-average-glucose", GlucoseInput)
def compute_estimated_average_glucose(inp: GlucoseInput) -> CalculationResult:
    if inp.mode == GlucoseMode.A1C_TO_EAG:
        a1c = inp.value
        eag_mg_dl = f.estimated_average_glucose(a1c)
    else:
        eag_mg_dl = inp.value
        if inp.glucose_unit == GlucoseUnit.MMOL_L:
            eag_mg_dl = glucose_mmol_l_to_mg_dl(inp.value)
        a1c = f.a1c_from_average_glucose(eag_mg_dl)
    return result(
        "estimated-average-glucose",
        {
            "a1c": r1(a1c),
            "eag_mg_dl": float(round(eag_mg_dl)),
            "eag_mmol_l": r1(glucose_mg_dl_to_mmol_l(eag_mg_dl)),
        },
        classify(round(a1c, 1), A1C_STATUS),
    )


# Cardiovascular risk
class HeartRiskInput(CalculatorInput):
    gender: Gender
    age: float = Field(ge=20, le=79)
    cholesterol_unit: CholesterolUnit = CholesterolUnit.MG_DL
    total_cholesterol: float = Field(gt=0)
    hdl: float = Field(gt=0)
    systolic: float = Field(ge=90, le=220)
    smoker: bool = False

    def total_mg_dl(self) -> float:
        return cholesterol_to_mg_dl(self.total_cholesterol, self.cholesterol_unit)

    def hdl_mg_dl(self) -> float:
        return cholesterol_to_mg_dl(self.hdl, self.cholesterol_unit)


class HeartAgeInput(HeartRiskInput):
    age: float = Field(ge=20, le=100)
    systolic: float = Field(ge=60, le=250)
    diabetic: bool = False
    bmi: float = Field(ge=10, le=80)


@calculator("heart-age", HeartAgeInput)
def compute_heart_age(inp: HeartAgeInput) -> CalculationResult:
    ratio = inp.total_cholesterol / inp.hdl
    age = f.heart_age(inp.age, inp.smoker, inp.diabetic, inp.systolic, inp.bmi, ratio)
    difference = age - inp.age
    return result(
        "heart-age",
        {"heart_age": float(age), "difference": float(difference), "cholesterol_ratio": r1(ratio)},
        category="At Risk" if difference > 0 else "Healthy",
        details={
            "impacts": {
                "blood_pressure": "High" if inp.systolic > 130 else "Good",
                "cholesterol": "Warning" if ratio > 4.5 else "Good",
                "lifestyle": "Risky" if inp.smoker else "Clean",
            }
        },
    )


class FraminghamInput(HeartRiskInput):
    bp_treated: bool = False


AVERAGE_FRAMINGHAM_RISK = {Gender.MALE: 8.0, Gender.FEMALE: 2.0}


@calculator("framingham-risk", FraminghamInput)
def compute_framingham_risk(inp: FraminghamInput) -> CalculationResult:
    points = f.framingham_points(
        inp.gender,
        inp.age,
        inp.total_mg_dl(),
        inp.hdl_mg_dl(),
        inp.systolic,
        inp.bp_treated,
        inp.smoker,
    )
    risk = f.framingham_risk_percent(inp.gender, points)
    return result(
        "framingham-risk",
        {
            "risk_percent": r1(risk),
            "points": float(points),
            "average_risk_percent": AVERAGE_FRAMINGHAM_RISK[inp.gender],
        },
        classify(risk, FRAMINGHAM_RISK),
    )


class Race(str, Enum):
    WHITE = "white"
    AFRICAN_AMERICAN = "african_american"
    OTHER = "other"


class ASCVDInput(HeartRiskInput):
    race: Race = Race.OTHER
    diastolic: float | None = Field(default=None, ge=40, le=150)
    bp_treated: bool = False
    diabetic: bool = False


@calculator("ascvd-risk", ASCVDInput)
def compute_ascvd_risk(inp: ASCVDInput) -> CalculationResult:
    total, hdl = inp.total_mg_dl(), inp.hdl_mg_dl()
    risk, optimal = f.ascvd_risk_estimate(
        inp.gender,
        inp.race == Race.AFRICAN_AMERICAN,
        inp.age,
        total,
        hdl,
        inp.systolic,
        inp.bp_treated,
        inp.diabetic,
        inp.smoker,
    )
    drivers: list[str] = []
    if inp.smoker:
        drivers.append("Smoking")
    if inp.diabetic:
        drivers.append("Diabetes")
    if inp.systolic > 130:
        drivers.append("Elevated Blood Pressure")
    if total > 200:
        drivers.append("Total Cholesterol")
    if hdl < 40:
        drivers.append("Low HDL (Good Cholesterol)")
    if not drivers and risk > 2:
        drivers.append("Age (Non-modifiable factor)")
    return result(
        "ascvd-risk",
        {"risk_percent": r1(risk), "optimal_risk_percent": r1(optimal)},
        classify(risk, ASCVD_RISK),
        details={"drivers": drivers},
        warnings=["This is a simplified estimate, not the full pooled cohort equations."],
    )


# Type 2 diabetes risk
class AgeGroup(str, Enum):
    UNDER_40 = "under-40"
    FORTIES = "40-49"
    FIFTIES = "50-59"
    SIXTY_PLUS = "60+"


AGE_GROUP_POINTS = {
    AgeGroup.UNDER_40: 0,
    AgeGroup.FORTIES: 1,
    AgeGroup.FIFTIES: 2,
    AgeGroup.SIXTY_PLUS: 3,
}


class DiabetesRiskInput(BodyInput):
    age_group: AgeGroup
    gender: Gender
    gestational_diabetes: bool = False
    family_history: bool = False
    high_blood_pressure: bool = False
    physically_active: bool = True


@calculator("diabetes-risk", DiabetesRiskInput)
def compute_diabetes_risk(inp: DiabetesRiskInput) -> CalculationResult:
    breakdown: list[dict[str, str | int]] = []

    def add(factor: str, points: int, modifiable: bool) -> None:
        breakdown.append(
            {
                "factor": factor,
                "points": points,
                "type": "modifiable" if modifiable else "non-modifiable",
            }
        )

    age_points = AGE_GROUP_POINTS[inp.age_group]
    if age_points:
        add(f"Age ({inp.age_group.value})", age_points, False)
    if inp.gender == Gender.MALE:
        add("Gender (Male)", 1, False)
    elif inp.gestational_diabetes:
        add("Gestational Diabetes History", 1, False)
    if inp.family_history:
        add("Family History", 1, False)
    if inp.high_blood_pressure:
        add("High Blood Pressure", 1, True)
    if not inp.physically_active:
        add("Sedentary Lifestyle", 1, True)

    body = inp.body()
    bmi_value = bmi(body.weight_kg, body.height_m)
    values = {"bmi": r1(bmi_value)}
    if bmi_value >= 40:
        add("BMI (Morbidly Obese)", 3, True)
    elif bmi_value >= 30:
        add("BMI (Obese)", 2, True)
    elif bmi_value >= 25:
        add("BMI (Overweight)", 1, True)
    if bmi_value >= 25:
        values["weight_loss_goal_min"] = r1(inp.weight * 0.05)
        values["weight_loss_goal_max"] = r1(inp.weight * 0.07)

    score = sum(int(item["points"]) for item in breakdown)
    modifiable = sum(int(item["points"]) for item in breakdown if item["type"] == "modifiable")
    values["score"] = float(score)
    values["modifiable_points"] = float(modifiable)
    return result(
        "diabetes-risk",
        values,
        classify(score, DIABETES_RISK_SCORE),
        details={"breakdown": breakdown, "weight_unit": mass_unit(inp.units)},
    )
