"""Energy expenditure, intake and hydration formulas."""

from enum import Enum

from healthcalc.domain.models import Gender

KCAL_PER_G_PROTEIN = 4.0
KCAL_PER_G_CARB = 4.0
KCAL_PER_G_FAT = 9.0


class BMRFormula(str, Enum):
    MIFFLIN = "mifflin"
    HARRIS = "harris"
    KATCH = "katch"


class ActivityLevel(str, Enum):
    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}


def bmr_mifflin(weight_kg: float, height_cm: float, age: float, gender: Gender) -> float:
    base = 10.0 * weight_kg + 6.25 * height_cm - 5.0 * age
    return base + 5.0 if gender == Gender.MALE else base - 161.0


def bmr_harris_benedict(weight_kg: float, height_cm: float, age: float, gender: Gender) -> float:
    """Revised (Roza and Shizgal) Harris-Benedict equation."""
    if gender == Gender.MALE:
        return 88.362 + 13.397 * weight_kg + 4.799 * height_cm - 5.677 * age
    return 447.593 + 9.247 * weight_kg + 3.098 * height_cm - 4.330 * age


def bmr_katch_mcardle(lean_mass_kg: float) -> float:
    return 370.0 + 21.6 * lean_mass_kg


def lean_mass_from_body_fat(weight_kg: float, body_fat_percent: float) -> float:
    return weight_kg * (1.0 - body_fat_percent / 100.0)


def tdee(bmr: float, activity: ActivityLevel) -> float:
    return bmr * ACTIVITY_MULTIPLIERS[activity]


def macro_grams(
    calories: float, protein_pct: float, fat_pct: float, carb_pct: float
) -> dict[str, float]:
    """Split calories into grams given percentage shares that sum to 100."""
    return {
        "protein_g": calories * protein_pct / 100.0 / KCAL_PER_G_PROTEIN,
        "fat_g": calories * fat_pct / 100.0 / KCAL_PER_G_FAT,
        "carbs_g": calories * carb_pct / 100.0 / KCAL_PER_G_CARB,
    }


def body_weight_macros(calories: float, weight_kg: float) -> dict[str, float]:
    """
    Protein 2.2 g/kg and fat 0.8 g/kg with carbohydrate filling the remainder.

    When protein and fat alone exceed the calorie target the split falls back
    to 40/30/30 protein/fat/carbs by calories.
    """
    protein_g = weight_kg * 2.2
    fat_g = weight_kg * 0.8
    remaining = calories - protein_g * KCAL_PER_G_PROTEIN - fat_g * KCAL_PER_G_FAT
    if remaining < 0:
        return macro_grams(calories, 40.0, 30.0, 30.0)
    return {"protein_g": protein_g, "fat_g": fat_g, "carbs_g": remaining / KCAL_PER_G_CARB}


def daily_water_ml(
    weight_kg: float,
    exercise_minutes: float = 0.0,
    hot_climate: bool = False,
    pregnant: bool = False,
    lactating: bool = False,
) -> float:
    """35 ml/kg with weight capped at 150 kg, plus activity and status additions."""
    total = min(weight_kg, 150.0) * 35.0
    total += exercise_minutes / 30.0 * 350.0
    if hot_climate:
        total += 500.0
    if pregnant:
        total += 300.0
    if lactating:
        total += 700.0
    return total


def metabolic_age(age: float, bmr: float, reference_bmr: float, multiplier: float) -> int:
    """
    Age adjusted by how actual expenditure compares with a 30 year old reference.

    The adjustment is clamped to +/-15 years and never returns below 18.
    """
    expenditure = bmr * multiplier
    ratio = reference_bmr * 1.45 / expenditure
    estimate = age * ratio
    estimate = max(age - 15.0, min(age + 15.0, estimate))
    return round(max(18.0, estimate))


def met_calories(met: float, weight_kg: float, minutes: float) -> float:
    """Energy for an activity of `met` metabolic equivalents."""
    return minutes * met * 3.5 * weight_kg / 200.0


def heart_rate_calories(
    heart_rate: float, weight_kg: float, age: float, gender: Gender, minutes: float
) -> float:
    """Keytel et al. (2005) estimate from average heart rate, floored at zero."""
    if gender == Gender.MALE:
        kj_per_min = -55.0969 + 0.6309 * heart_rate + 0.1988 * weight_kg + 0.2017 * age
    else:
        kj_per_min = -20.4022 + 0.4472 * heart_rate - 0.1263 * weight_kg + 0.074 * age
    return max(0.0, kj_per_min / 4.184 * minutes)
