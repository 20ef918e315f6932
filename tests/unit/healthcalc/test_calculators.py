"""
Tests for the registered calculators, evaluated through the default evaluator.

Covers:
- Every registered calculator evaluates a realistic sample input
- Every registered calculator has catalog metadata
- Category rules for blood pressure and body shape
- Formula preconditions (Friedewald limit, Karvonen resting rate)
- Unit handling (imperial BMI, mmol/L cholesterol, newborn ponderal index)
- Calorie deficit floor and zig-zag schedule
- Energy calculators reject measurements with no positive metabolic rate
- Wilks body weight clamping, calories burned, running pace and stress score
"""

from typing import Any

import pytest

from healthcalc.calculators import REGISTRY
from healthcalc.calculators.energy import zig_zag_week
from healthcalc.catalog import get_calculator_info
from healthcalc.domain.errors import (
    CrossFieldError,
    FormulaPreconditionError,
    InputValidationError,
)
from healthcalc.domain.models import CalculationResult
from healthcalc.services.evaluation import CalculatorEvaluator, default_evaluator

ADULT = {"weight": 70, "height": 175, "gender": "male", "age": 30}

SAMPLE_INPUTS: dict[str, dict[str, Any]] = {
    "bmi": {"weight": 70, "height": 175},
    "ideal-body-weight": {"weight": 80, "height": 178, "gender": "male", "age": 35},
    "adjusted-body-weight": {"weight": 110, "height": 170, "gender": "female"},
    "lean-body-mass": {"weight": 80, "height": 180, "gender": "male"},
    "waist-to-height-ratio": {"height": 175, "waist": 80},
    "rfm": {"height": 165, "waist": 75, "gender": "female"},
    "absi": {"weight": 80, "height": 180, "waist": 90},
    "ponderal-index": {"weight": 70, "height": 175},
    "body-fat": {"weight": 80, "height": 178, "gender": "male", "neck": 38, "waist": 85},
    "child-bmi": {"weight": 30, "height": 135, "gender": "female", "age_years": 9},
    "obesity-risk": {"weight": 90, "height": 175, "waist": 100},
    "body-shape": {"bust": 90, "waist": 70, "high_hip": 90, "hip": 100},
    "draw-length": {"wingspan": 178},
    "pregnancy-weight-gain": {"current_week": 20, "height": 165, "weight_before": 60},
    "mean-arterial-pressure": {"systolic": 120, "diastolic": 80},
    "pulse-pressure": {"systolic": 120, "diastolic": 80},
    "blood-pressure": {"systolic": 118, "diastolic": 76},
    "karvonen": {"age": 40, "resting_hr": 60},
    "heart-rate": {"age": 40},
    "resting-heart-rate": {"age": 40, "resting_hr": 65},
    "vo2-max": {"age": 30, "gender": "male", "resting_hr": 60},
    "creatinine-clearance": {"gender": "male", "age": 60, "weight": 72, "creatinine": 1.0},
    "cholesterol-ratio": {"total_cholesterol": 200, "hdl": 50, "triglycerides": 150},
    "estimated-average-glucose": {"value": 7.0},
    "heart-age": {
        "gender": "male",
        "age": 50,
        "total_cholesterol": 200,
        "hdl": 50,
        "systolic": 125,
        "bmi": 24,
    },
    "framingham-risk": {
        "gender": "male",
        "age": 55,
        "total_cholesterol": 213,
        "hdl": 50,
        "systolic": 120,
    },
    "ascvd-risk": {
        "gender": "female",
        "age": 55,
        "total_cholesterol": 213,
        "hdl": 50,
        "systolic": 120,
    },
    "diabetes-risk": {"weight": 85, "height": 175, "gender": "male", "age_group": "40-49"},
    "bmr": ADULT,
    "tdee": {**ADULT, "activity": "moderate"},
    "macro": ADULT,
    "calorie-deficit": ADULT,
    "fat-intake": ADULT,
    "daily-water-intake": {"weight": 70, "gender": "female"},
    "metabolic-age": ADULT,
    "one-rep-max": {"weight": 100, "reps": 5},
    "wilks": {"gender": "male", "bodyweight": 80, "total": 500},
    "calories-burned": {"weight": 70, "duration_minutes": 60},
    "running-pace": {"distance": 5, "time_minutes": 25},
    "stress-level": {f"q{n}": 2 for n in range(1, 11)},
}


@pytest.fixture(scope="module")
def evaluator() -> CalculatorEvaluator:
    return default_evaluator()


def evaluate(evaluator: CalculatorEvaluator, calculator_id: str, **raw: Any) -> CalculationResult:
    outcome = evaluator.evaluate(calculator_id, raw)
    assert outcome.is_ok(), outcome
    return outcome.unwrap()


class TestRegistry:
    def test_sample_inputs_cover_registry(self) -> None:
        assert set(SAMPLE_INPUTS) == set(REGISTRY)

    @pytest.mark.parametrize("calculator_id", sorted(REGISTRY))
    def test_every_calculator_evaluates_sample_input(
        self, evaluator: CalculatorEvaluator, calculator_id: str
    ) -> None:
        outcome = evaluator.evaluate(calculator_id, SAMPLE_INPUTS[calculator_id])
        assert outcome.is_ok(), outcome
        computed = outcome.unwrap()
        assert computed.calculator_id == calculator_id
        assert computed.values

    @pytest.mark.parametrize("calculator_id", sorted(REGISTRY))
    def test_every_calculator_is_in_catalog(self, calculator_id: str) -> None:
        assert get_calculator_info(calculator_id) is not None


class TestBodyCalculators:
    def test_bmi_metric(self, evaluator: CalculatorEvaluator) -> None:
        computed = evaluate(evaluator, "bmi", weight=70, height=175)
        assert computed.values["bmi"] == 22.9
        assert computed.category == "Normal Weight"

    def test_bmi_imperial_matches_metric(self, evaluator: CalculatorEvaluator) -> None:
        computed = evaluate(evaluator, "bmi", units="imperial", weight=154.3, height=68.9)
        assert computed.values["bmi"] == 22.9
        assert computed.details["weight_unit"] == "lb"

    def test_newborn_ponderal_index_uses_grams(self, evaluator: CalculatorEvaluator) -> None:
        computed = evaluate(evaluator, "ponderal-index", user_type="child", weight=3500, height=50)
        assert computed.values["ponderal_index"] == 2.8
        assert computed.category == "Average"

    def test_female_body_fat_requires_hip(self, evaluator: CalculatorEvaluator) -> None:
        outcome = evaluator.evaluate(
            "body-fat",
            {"weight": 60, "height": 165, "gender": "female", "neck": 32, "waist": 72},
        )
        assert isinstance(outcome.unwrap_err(), CrossFieldError)

    @pytest.mark.parametrize(("waist", "label"), [(90, "Low Risk"), (91, "Moderate Risk")])
    def test_waist_risk_starts_at_cutoff(
        self, evaluator: CalculatorEvaluator, waist: float, label: str
    ) -> None:
        computed = evaluate(evaluator, "obesity-risk", weight=70, height=175, waist=waist)
        assert computed.category == label

    def test_pear_shape(self, evaluator: CalculatorEvaluator) -> None:
        computed = evaluate(evaluator, "body-shape", **SAMPLE_INPUTS["body-shape"])
        assert computed.category == "Pear (Triangle)"

    def test_male_body_shape_has_no_category(self, evaluator: CalculatorEvaluator) -> None:
        computed = evaluate(
            evaluator, "body-shape", gender="male", bust=100, waist=85, high_hip=95, hip=98
        )
        assert computed.category is None
        assert computed.warnings


class TestCardioCalculators:
    @pytest.mark.parametrize(
        ("systolic", "diastolic", "label"),
        [
            (185, 100, "Hypertensive Crisis"),
            (150, 85, "Hypertension Stage 2"),
            (125, 92, "Hypertension Stage 2"),
            (132, 70, "Hypertension Stage 1"),
            (122, 75, "Elevated"),
            (85, 55, "Low (Hypotension)"),
            (115, 75, "Normal"),
        ],
    )
    def test_blood_pressure_categories(
        self, evaluator: CalculatorEvaluator, systolic: int, diastolic: int, label: str
    ) -> None:
        computed = evaluate(evaluator, "blood-pressure", systolic=systolic, diastolic=diastolic)
        assert computed.category == label
        assert len(computed.details["advice"]) == 3

    def test_mean_arterial_pressure(self, evaluator: CalculatorEvaluator) -> None:
        computed = evaluate(evaluator, "mean-arterial-pressure", systolic=120, diastolic=80)
        assert computed.values["map"] == 93.3
        assert computed.category == "Normal"

    def test_karvonen_zones(self, evaluator: CalculatorEvaluator) -> None:
        computed = evaluate(evaluator, "karvonen", age=40, resting_hr=60)
        assert computed.values["max_hr"] == 180
        assert computed.values["heart_rate_reserve"] == 120
        assert [zone["name"] for zone in computed.details["zones"]][0] == "Recovery"

    def test_karvonen_manual_without_value_is_cross_field(
        self, evaluator: CalculatorEvaluator
    ) -> None:
        outcome = evaluator.evaluate("karvonen", {"age": 40, "resting_hr": 60, "formula": "manual"})
        assert isinstance(outcome.unwrap_err(), CrossFieldError)

    def test_karvonen_defaults_to_tanaka(self, evaluator: CalculatorEvaluator) -> None:
        computed = evaluate(evaluator, "karvonen", age=60, resting_hr=60)
        assert computed.values["max_hr"] == 166

    def test_resting_rate_at_max_is_rejected(self, evaluator: CalculatorEvaluator) -> None:
        outcome = evaluator.evaluate(
            "karvonen",
            {"age": 40, "resting_hr": 110, "formula": "manual", "manual_max_hr": 105},
        )
        error = outcome.unwrap_err()
        assert isinstance(error, CrossFieldError)
        assert error.errors[0].field == ""

    @pytest.mark.parametrize(
        ("calculator_id", "raw"),
        [
            ("karvonen", {"age": 100, "resting_hr": 120, "formula": "fox"}),
            ("heart-rate", {"age": 100, "resting_hr": 120}),
            ("resting-heart-rate", {"age": 100, "resting_hr": 150}),
        ],
    )
    def test_resting_rate_above_age_maximum_is_cross_field(
        self, evaluator: CalculatorEvaluator, calculator_id: str, raw: dict[str, Any]
    ) -> None:
        error = evaluator.evaluate(calculator_id, raw).unwrap_err()
        assert isinstance(error, CrossFieldError)
        assert "lower than maximum heart rate" in error.message

    def test_tachycardia_warning(self, evaluator: CalculatorEvaluator) -> None:
        computed = evaluate(evaluator, "resting-heart-rate", age=30, resting_hr=110)
        assert computed.warnings


class TestClinicalCalculators:
    def test_creatinine_clearance_female_is_lower(self, evaluator: CalculatorEvaluator) -> None:
        raw = {"age": 60, "weight": 72, "creatinine": 1.0}
        male = evaluate(evaluator, "creatinine-clearance", gender="male", **raw)
        female = evaluate(evaluator, "creatinine-clearance", gender="female", **raw)
        assert male.values["creatinine_clearance"] == 80.0
        assert female.values["creatinine_clearance"] == 68.0

    def test_creatinine_in_micromoles(self, evaluator: CalculatorEvaluator) -> None:
        computed = evaluate(
            evaluator,
            "creatinine-clearance",
            gender="male",
            age=60,
            weight=72,
            creatinine=88.4,
            creatinine_unit="umol/L",
        )
        assert computed.values["creatinine_clearance"] == 80.0

    def test_high_triglycerides_need_measured_ldl(self, evaluator: CalculatorEvaluator) -> None:
        outcome = evaluator.evaluate(
            "cholesterol-ratio", {"total_cholesterol": 200, "hdl": 50, "triglycerides": 450}
        )
        error = outcome.unwrap_err()
        assert isinstance(error, FormulaPreconditionError)
        assert "400 mg/dL" in error.message
        assert error.errors[0].field == "ldl"

    def test_measured_ldl_bypasses_friedewald(self, evaluator: CalculatorEvaluator) -> None:
        computed = evaluate(
            evaluator,
            "cholesterol-ratio",
            total_cholesterol=200,
            hdl=50,
            triglycerides=450,
            ldl=130,
        )
        assert computed.values["ldl_hdl_ratio"] == 2.6
        assert "calculated_ldl" not in computed.values

    def test_mmol_triglyceride_limit_is_converted(self, evaluator: CalculatorEvaluator) -> None:
        outcome = evaluator.evaluate(
            "cholesterol-ratio",
            {"unit": "mmol/L", "total_cholesterol": 5.2, "hdl": 1.3, "triglycerides": 4.6},
        )
        assert isinstance(outcome.unwrap_err(), FormulaPreconditionError)

    def test_mmol_ldl_is_calculated_in_mmol(self, evaluator: CalculatorEvaluator) -> None:
        computed = evaluate(
            evaluator,
            "cholesterol-ratio",
            unit="mmol/L",
            total_cholesterol=5.2,
            hdl=1.3,
            triglycerides=2.2,
        )
        assert computed.values["calculated_ldl"] == 2.9
        assert computed.category == "Average Risk"

    def test_glucose_out_of_range_is_cross_field(self, evaluator: CalculatorEvaluator) -> None:
        outcome = evaluator.evaluate("estimated-average-glucose", {"value": 25})
        assert isinstance(outcome.unwrap_err(), CrossFieldError)

    def test_eag_from_a1c(self, evaluator: CalculatorEvaluator) -> None:
        computed = evaluate(evaluator, "estimated-average-glucose", value=7.0)
        assert computed.values["eag_mg_dl"] == 154

    def test_diabetes_risk_breakdown_sums_to_score(self, evaluator: CalculatorEvaluator) -> None:
        computed = evaluate(evaluator, "diabetes-risk", **SAMPLE_INPUTS["diabetes-risk"])
        points = sum(int(row["points"]) for row in computed.details["breakdown"])
        assert points == computed.values["score"]


class TestEnergyCalculators:
    def test_bmr_mifflin(self, evaluator: CalculatorEvaluator) -> None:
        computed = evaluate(evaluator, "bmr", **ADULT)
        assert computed.values["bmr"] == 1649

    def test_katch_requires_body_fat(self, evaluator: CalculatorEvaluator) -> None:
        outcome = evaluator.evaluate("bmr", {**ADULT, "formula": "katch"})
        assert isinstance(outcome.unwrap_err(), FormulaPreconditionError)

    def test_deficit_never_goes_below_floor(self, evaluator: CalculatorEvaluator) -> None:
        computed = evaluate(
            evaluator,
            "calorie-deficit",
            weight=50,
            height=155,
            gender="female",
            age=60,
            goal="extreme",
        )
        assert computed.values["target_calories"] == 1200
        assert computed.warnings

    def test_zig_zag_week_averages_target(self) -> None:
        for target in (1200, 1777, 2000, 2513):
            week = zig_zag_week(target)
            assert len(week) == 7
            assert abs(sum(int(day["calories"]) for day in week) - target * 7) <= 2

    def test_water_intake_adds_pregnancy(self, evaluator: CalculatorEvaluator) -> None:
        base = evaluate(evaluator, "daily-water-intake", weight=60, gender="female")
        pregnant = evaluate(
            evaluator,
            "daily-water-intake",
            weight=60,
            gender="female",
            pregnancy_status="pregnant",
        )
        assert pregnant.values["total_ml"] - base.values["total_ml"] == 300

    @pytest.mark.parametrize(
        ("calculator_id", "raw"),
        [
            ("metabolic-age", {"weight": 1, "height": 40, "age": 19.8, "gender": "female"}),
            ("tdee", {"weight": 1, "height": 30, "age": 120, "gender": "female"}),
            ("macro", {"weight": 1, "height": 30, "age": 120, "gender": "female"}),
            ("calorie-deficit", {"weight": 1, "height": 30, "age": 120, "gender": "female"}),
            (
                "bmr",
                {"weight": 1, "height": 30, "age": 120, "gender": "male", "formula": "harris"},
            ),
        ],
    )
    def test_non_positive_metabolic_rate_is_rejected(
        self, evaluator: CalculatorEvaluator, calculator_id: str, raw: dict[str, Any]
    ) -> None:
        error = evaluator.evaluate(calculator_id, raw).unwrap_err()
        assert isinstance(error, FormulaPreconditionError)
        assert "metabolic rate" in error.message

    def test_calories_burned_by_activity(self, evaluator: CalculatorEvaluator) -> None:
        computed = evaluate(evaluator, "calories-burned", weight=70, duration_minutes=60)
        assert computed.values["calories"] == 243
        assert computed.values["fat_burned_g"] == 26.7
        assert computed.details["met"] == 3.3
        assert computed.details["food_equivalent"] == {"food": "Can(s) of Soda", "amount": 1.6}

    def test_explicit_met_overrides_activity(self, evaluator: CalculatorEvaluator) -> None:
        computed = evaluate(
            evaluator, "calories-burned", weight=70, duration_minutes=60, activity="yoga", met=10
        )
        assert computed.values["calories"] == 735

    def test_calories_burned_by_heart_rate(self, evaluator: CalculatorEvaluator) -> None:
        computed = evaluate(
            evaluator,
            "calories-burned",
            method="heart_rate",
            weight=80,
            duration_minutes=30,
            age=30,
            gender="male",
            heart_rate=150,
        )
        assert computed.values["calories"] == 441

    def test_heart_rate_method_requires_heart_rate(self, evaluator: CalculatorEvaluator) -> None:
        outcome = evaluator.evaluate(
            "calories-burned",
            {"method": "heart_rate", "weight": 80, "duration_minutes": 30, "age": 30},
        )
        assert isinstance(outcome.unwrap_err(), CrossFieldError)


class TestFitnessCalculators:
    def test_one_rep_max(self, evaluator: CalculatorEvaluator) -> None:
        computed = evaluate(evaluator, "one-rep-max", weight=100, reps=5)
        assert computed.values["one_rep_max"] == 116.7
        assert computed.details["percentages"][0]["weight"] == 117

    def test_detailed_wilks_requires_every_lift(self, evaluator: CalculatorEvaluator) -> None:
        outcome = evaluator.evaluate(
            "wilks", {"gender": "male", "bodyweight": 80, "mode": "detailed", "squat": 200}
        )
        assert isinstance(outcome.unwrap_err(), CrossFieldError)

    def test_wilks_bodyweight_above_fitted_range_is_clamped(
        self, evaluator: CalculatorEvaluator
    ) -> None:
        heavy = evaluate(evaluator, "wilks", gender="male", bodyweight=250, total=600)
        limit = evaluate(evaluator, "wilks", gender="male", bodyweight=201.9, total=600)
        assert heavy.values["wilks_score"] == limit.values["wilks_score"]
        assert heavy.values["wilks_score"] > 0
        assert heavy.warnings
        assert not limit.warnings

    def test_pace_from_time_and_distance(self, evaluator: CalculatorEvaluator) -> None:
        computed = evaluate(evaluator, "running-pace", distance=5, time_minutes=25)
        assert computed.values["pace_seconds_per_km"] == 300.0
        assert computed.details["pace_per_km"] == "5:00"
        assert computed.details["pace_per_mile"] == "8:02"
        assert computed.details["predictions"][1] == {"event": "10K", "time": "52:07"}
        assert [zone["zone"] for zone in computed.details["training_zones"]] == [
            "Easy Pace",
            "Tempo Pace",
            "VO2 Max / Intervals",
        ]
        splits = computed.details["splits"]
        assert len(splits) == 5
        assert splits[-1] == {"marker": 5, "time": "25:00"}

    def test_time_from_pace_and_distance(self, evaluator: CalculatorEvaluator) -> None:
        computed = evaluate(evaluator, "running-pace", mode="time", distance=10, pace_minutes=5)
        assert computed.values["total_seconds"] == 3000.0
        assert computed.details["time"] == "50:00"

    def test_distance_from_time_and_pace(self, evaluator: CalculatorEvaluator) -> None:
        computed = evaluate(
            evaluator, "running-pace", mode="distance", time_hours=1, pace_minutes=6
        )
        assert computed.values["distance_km"] == 10.0

    def test_partial_mile_split(self, evaluator: CalculatorEvaluator) -> None:
        computed = evaluate(
            evaluator, "running-pace", distance=3.1, distance_unit="mi", time_minutes=25
        )
        splits = computed.details["splits"]
        assert [split["marker"] for split in splits] == [1, 2, 3, 3.1]

    @pytest.mark.parametrize(
        "raw",
        [
            {"time_minutes": 25},
            {"distance": 5},
            {"mode": "time", "distance": 5},
            {"mode": "distance", "pace_minutes": 5},
        ],
    )
    def test_pace_modes_require_known_quantities(
        self, evaluator: CalculatorEvaluator, raw: dict[str, Any]
    ) -> None:
        assert isinstance(evaluator.evaluate("running-pace", raw).unwrap_err(), CrossFieldError)


POSITIVE_ITEMS = ("q4", "q5", "q7", "q8")


def stress_answers(negative: int, positive: int) -> dict[str, int]:
    return {
        f"q{n}": positive if f"q{n}" in POSITIVE_ITEMS else negative for n in range(1, 11)
    }


class TestWellbeingCalculators:
    def test_positive_items_are_reverse_scored(self, evaluator: CalculatorEvaluator) -> None:
        computed = evaluate(evaluator, "stress-level", **stress_answers(0, 0))
        assert computed.values["score"] == 16
        assert computed.category == "Moderate Stress"

    def test_lowest_and_highest_scores(self, evaluator: CalculatorEvaluator) -> None:
        calm = evaluate(evaluator, "stress-level", **stress_answers(0, 4))
        strained = evaluate(evaluator, "stress-level", **stress_answers(4, 0))
        assert calm.values["score"] == 0
        assert calm.category == "Low Perceived Stress"
        assert strained.values["score"] == 40
        assert strained.category == "High Perceived Stress"
        assert strained.values["helplessness"] == 24
        assert strained.values["self_efficacy"] == 0
        assert len(strained.details["insights"]) == 3

    def test_answer_out_of_scale_is_a_field_error(self, evaluator: CalculatorEvaluator) -> None:
        raw = {**stress_answers(1, 1), "q3": 5}
        error = evaluator.evaluate("stress-level", raw).unwrap_err()
        assert isinstance(error, InputValidationError)
        assert not isinstance(error, CrossFieldError)
        assert error.errors[0].field == "q3"
