"""
Tests for the pure formulas in `healthcalc/formulas/`.

Covers:
- Half-up rounding of bpm and calorie figures
- Body composition formulas (BMI, IBW, AjBW, ponderal index, Navy body fat)
- Cardiovascular formulas (MAP, pulse pressure, Karvonen zones)
- Clinical formulas (Cockcroft-Gault sex factor as a property, Friedewald in both units, eAG)
- Energy formulas (Mifflin, MET and heart-rate calories)
- Strength and running formulas (Epley, clamped Wilks, Riegel, duration formatting)
- Growth helpers (percentile estimate, gestational gain trajectory)
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from healthcalc.domain.models import CholesterolUnit, Gender
from healthcalc.formulas import half_up
from healthcalc.formulas import body as body_f
from healthcalc.formulas import cardio as cardio_f
from healthcalc.formulas import clinical as clinical_f
from healthcalc.formulas import energy as energy_f
from healthcalc.formulas import fitness as fitness_f
from healthcalc.formulas import growth as growth_f


class TestHalfUp:
    @pytest.mark.parametrize(("value", "expected"), [(5.5, 6), (6.5, 7), (5.49, 5), (0.0, 0)])
    def test_halves_round_up(self, value: float, expected: int) -> None:
        assert half_up(value) == expected


class TestBodyFormulas:
    def test_bmi(self) -> None:
        assert body_f.bmi(70.0, 1.75) == pytest.approx(22.857, abs=1e-3)

    def test_devine_ideal_weight(self) -> None:
        assert body_f.ideal_body_weight(70.0, Gender.MALE) == pytest.approx(73.0)
        assert body_f.ideal_body_weight(70.0, Gender.FEMALE) == pytest.approx(68.5)

    def test_short_stature_gets_base_weight(self) -> None:
        assert body_f.ideal_body_weight(58.0, Gender.MALE) == pytest.approx(50.0)

    def test_adjusted_weight_equals_actual_at_or_below_ideal(self) -> None:
        assert body_f.adjusted_body_weight(60.0, 70.0) == 60.0
        assert body_f.adjusted_body_weight(70.0, 70.0) == 70.0

    def test_adjusted_weight_adds_forty_percent_of_excess(self) -> None:
        assert body_f.adjusted_body_weight(100.0, 70.0) == pytest.approx(82.0)

    @given(
        height_in=st.floats(min_value=48.0, max_value=90.0),
        gender=st.sampled_from([Gender.MALE, Gender.FEMALE]),
        fraction=st.floats(min_value=0.3, max_value=1.0),
    )
    def test_adjusted_weight_is_actual_weight_up_to_ideal(
        self, height_in: float, gender: Gender, fraction: float
    ) -> None:
        ideal = body_f.ideal_body_weight(height_in, gender)
        actual = ideal * fraction
        assert body_f.adjusted_body_weight(actual, ideal) == actual

    @given(
        ideal=st.floats(min_value=40.0, max_value=100.0),
        actual=st.floats(min_value=30.0, max_value=250.0),
        extra=st.floats(min_value=0.0, max_value=50.0),
    )
    def test_adjusted_weight_is_monotonic(self, ideal: float, actual: float, extra: float) -> None:
        lower = body_f.adjusted_body_weight(actual, ideal)
        higher = body_f.adjusted_body_weight(actual + extra, ideal)
        assert higher >= lower - 1e-9

    def test_ponderal_index_adult_and_child(self) -> None:
        assert body_f.ponderal_index_adult(70.0, 1.75) == pytest.approx(13.06, abs=0.01)
        assert body_f.ponderal_index_child(3500.0, 50.0) == pytest.approx(2.8)

    def test_navy_body_fat_female_requires_hip(self) -> None:
        with pytest.raises(ValueError, match="Hip"):
            body_f.navy_body_fat(Gender.FEMALE, 165.0, 75.0, 33.0)

    def test_navy_body_fat_male_is_plausible(self) -> None:
        percent = body_f.navy_body_fat(Gender.MALE, 178.0, 85.0, 38.0)
        assert 10.0 < percent < 25.0

    def test_draw_length(self) -> None:
        assert body_f.draw_length(70.0) == pytest.approx(28.0)


class TestCardioFormulas:
    def test_mean_arterial_pressure(self) -> None:
        assert cardio_f.mean_arterial_pressure(120, 80) == pytest.approx(93.33, abs=0.01)
        assert cardio_f.mean_arterial_pressure(180, 120) == pytest.approx(140.0)

    def test_pulse_pressure(self) -> None:
        assert cardio_f.pulse_pressure(120, 80) == 40

    def test_max_heart_rate_formulas(self) -> None:
        assert cardio_f.max_heart_rate(40, cardio_f.MaxHeartRateFormula.FOX) == 180
        tanaka = cardio_f.max_heart_rate(40, cardio_f.MaxHeartRateFormula.TANAKA)
        assert tanaka == pytest.approx(180)
        assert cardio_f.max_heart_rate(40, cardio_f.MaxHeartRateFormula.MANUAL, 190) == 190

    def test_manual_max_heart_rate_requires_value(self) -> None:
        with pytest.raises(ValueError):
            cardio_f.max_heart_rate(40, cardio_f.MaxHeartRateFormula.MANUAL)

    def test_karvonen_zones_span_reserve(self) -> None:
        zones = cardio_f.training_zones(180, 60, ("a", "b", "c", "d", "e"))
        assert len(zones) == 5
        assert zones[0]["low_bpm"] == 120
        assert zones[2]["low_bpm"] == 144
        assert zones[-1]["high_bpm"] == 180

    def test_percentage_zones_without_resting_rate(self) -> None:
        zones = cardio_f.training_zones(185, None, ("a", "b", "c", "d", "e"))
        assert zones[0]["low_bpm"] == 93
        assert zones[-1]["high_bpm"] == 185


class TestClinicalFormulas:
    def test_creatinine_clearance_female_factor(self) -> None:
        male = clinical_f.creatinine_clearance(60, 72, 1.0, Gender.MALE)
        female = clinical_f.creatinine_clearance(60, 72, 1.0, Gender.FEMALE)
        assert male == pytest.approx(80.0)
        assert female == pytest.approx(male * 0.85)

    @given(
        age=st.floats(min_value=1.0, max_value=139.0),
        weight=st.floats(min_value=0.5, max_value=500.0),
        scr=st.floats(min_value=0.05, max_value=20.0),
    )
    def test_male_clearance_is_female_over_0_85(
        self, age: float, weight: float, scr: float
    ) -> None:
        male = clinical_f.creatinine_clearance(age, weight, scr, Gender.MALE)
        female = clinical_f.creatinine_clearance(age, weight, scr, Gender.FEMALE)
        assert male == pytest.approx(female / 0.85)

    def test_friedewald_mg_dl(self) -> None:
        assert clinical_f.friedewald_ldl(200, 50, 150) == pytest.approx(120.0)

    def test_friedewald_mmol_l_uses_mmol_divisor(self) -> None:
        ldl = clinical_f.friedewald_ldl(5.2, 1.3, 2.2, CholesterolUnit.MMOL_L)
        assert ldl == pytest.approx(2.9)

    def test_eag_round_trip(self) -> None:
        eag = clinical_f.estimated_average_glucose(7.0)
        assert eag == pytest.approx(154.2)
        assert clinical_f.a1c_from_average_glucose(eag) == pytest.approx(7.0)

    def test_framingham_risk_is_bounded(self) -> None:
        assert clinical_f.framingham_risk_percent(Gender.MALE, -20) == 1.0
        assert clinical_f.framingham_risk_percent(Gender.MALE, 40) <= 30.0

    def test_ascvd_optimal_never_exceeds_actual(self) -> None:
        risk, optimal = clinical_f.ascvd_risk_estimate(
            Gender.MALE, False, 55, 213, 50, 120, False, False, False
        )
        assert 0.1 <= optimal <= risk

    def test_heart_age_adds_penalties(self) -> None:
        assert clinical_f.heart_age(50, True, False, 150, 30, 5.5) == 64


class TestEnergyFormulas:
    def test_mifflin_st_jeor(self) -> None:
        assert energy_f.bmr_mifflin(70, 175, 30, Gender.MALE) == pytest.approx(1648.75)
        assert energy_f.bmr_mifflin(70, 175, 30, Gender.FEMALE) == pytest.approx(1482.75)

    def test_body_weight_macros_fall_back_when_calories_too_low(self) -> None:
        grams = energy_f.body_weight_macros(800, 100)
        assert grams == energy_f.macro_grams(800, 40, 30, 30)

    def test_water_weight_is_capped(self) -> None:
        assert energy_f.daily_water_ml(200) == energy_f.daily_water_ml(150)

    def test_met_calories(self) -> None:
        assert energy_f.met_calories(3.3, 70, 60) == pytest.approx(242.55)

    def test_heart_rate_calories_male(self) -> None:
        calories = energy_f.heart_rate_calories(150, 80, 30, Gender.MALE, 30)
        assert calories == pytest.approx(440.9, abs=0.1)

    def test_heart_rate_calories_never_negative(self) -> None:
        assert energy_f.heart_rate_calories(40, 150, 10, Gender.FEMALE, 60) == 0.0


class TestFitnessFormulas:
    def test_epley(self) -> None:
        assert fitness_f.epley_one_rep_max(100, 5) == pytest.approx(116.67, abs=0.01)
        assert fitness_f.epley_one_rep_max(100, 1) == 100

    def test_wilks_score_is_in_expected_range(self) -> None:
        score = fitness_f.wilks_score(500, 80, Gender.MALE)
        assert score == pytest.approx(341.4, abs=1.0)

    @pytest.mark.parametrize(
        ("gender", "heavy", "limit"),
        [(Gender.MALE, 300.0, 201.9), (Gender.FEMALE, 200.0, 154.53)],
    )
    def test_wilks_bodyweight_is_clamped_above_fitted_range(
        self, gender: Gender, heavy: float, limit: float
    ) -> None:
        assert fitness_f.wilks_coefficient(heavy, gender) == fitness_f.wilks_coefficient(
            limit, gender
        )

    @given(
        bodyweight=st.floats(min_value=1.0, max_value=500.0),
        gender=st.sampled_from([Gender.MALE, Gender.FEMALE]),
    )
    def test_wilks_coefficient_stays_positive(self, bodyweight: float, gender: Gender) -> None:
        assert fitness_f.wilks_coefficient(bodyweight, gender) > 0

    def test_fitness_age_is_clamped(self) -> None:
        assert 18 <= fitness_f.fitness_age(5.0, 40, Gender.MALE) <= 80

    def test_riegel_prediction(self) -> None:
        assert fitness_f.riegel_time(1500, 5, 10) == pytest.approx(3127.4, abs=0.5)
        assert fitness_f.riegel_time(1500, 5, 5) == pytest.approx(1500)

    @pytest.mark.parametrize(
        ("seconds", "text"), [(300.9, "5:00"), (65, "1:05"), (3725, "1:02:05")]
    )
    def test_format_duration(self, seconds: float, text: str) -> None:
        assert fitness_f.format_duration(seconds) == text


class TestGrowthFormulas:
    def test_percentile_anchor_points(self) -> None:
        cutoffs = growth_f.PercentileCutoffs(14.0, 19.0, 21.0)
        assert growth_f.estimate_bmi_percentile(14.0, cutoffs) == pytest.approx(5.0)
        assert growth_f.estimate_bmi_percentile(19.0, cutoffs) == pytest.approx(85.0)
        assert growth_f.estimate_bmi_percentile(21.0, cutoffs) == pytest.approx(95.0)

    def test_gain_trajectory_reaches_guideline_at_term(self) -> None:
        guideline = growth_f.PREGNANCY_GAIN_SINGLE["normal"]
        points = growth_f.gain_trajectory(guideline)
        assert points[0] == (0, 0.0, 0.0)
        week, low, high = points[-1]
        assert week == 40
        assert low == pytest.approx(guideline.min_kg)
        assert high == pytest.approx(guideline.max_kg)
