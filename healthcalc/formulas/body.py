"""
Body size and composition formulas.

Inputs are canonical: kilograms, centimetres (or metres where the name says
so), inches only for the ideal-body-weight family whose coefficients are
defined per inch over five feet.
"""

import math
from enum import Enum

from healthcalc.domain.models import Gender

FIVE_FEET_IN = 60.0
AJBW_CORRECTION = 0.4


class IBWFormula(str, Enum):
    DEVINE = "devine"
    ROBINSON = "robinson"
    MILLER = "miller"
    HAMWI = "hamwi"


# (male base, male per inch, female base, female per inch)
IBW_COEFFICIENTS: dict[IBWFormula, tuple[float, float, float, float]] = {
    IBWFormula.DEVINE: (50.0, 2.3, 45.5, 2.3),
    IBWFormula.ROBINSON: (52.0, 1.9, 49.0, 1.7),
    IBWFormula.MILLER: (56.2, 1.41, 53.1, 1.36),
    IBWFormula.HAMWI: (48.0, 2.7, 45.5, 2.2),
}


def bmi(weight_kg: float, height_m: float) -> float:
    return weight_kg / (height_m * height_m)


def bmi_prime(bmi_value: float) -> float:
    return bmi_value / 25.0


def healthy_weight_range(
    height_m: float, low_bmi: float = 18.5, high_bmi: float = 24.9
) -> tuple[float, float]:
    squared = height_m * height_m
    return low_bmi * squared, high_bmi * squared


def ideal_body_weight(
    height_in: float, gender: Gender, formula: IBWFormula = IBWFormula.DEVINE
) -> float:
    """Ideal body weight in kg. Heights at or below five feet get the base weight."""
    male_base, male_step, female_base, female_step = IBW_COEFFICIENTS[formula]
    inches_over = max(0.0, height_in - FIVE_FEET_IN)
    if gender == Gender.MALE:
        return male_base + male_step * inches_over
    return female_base + female_step * inches_over


def adjusted_body_weight(actual_kg: float, ideal_kg: float) -> float:
    """AjBW = IBW + 0.4 x (actual - IBW) above IBW; actual weight otherwise."""
    if actual_kg > ideal_kg:
        return ideal_kg + AJBW_CORRECTION * (actual_kg - ideal_kg)
    return actual_kg


def waist_to_height_ratio(waist: float, height: float) -> float:
    return waist / height


def ponderal_index_adult(weight_kg: float, height_m: float) -> float:
    """Rohrer's index for adults in kg/m^3."""
    return weight_kg / height_m**3


def ponderal_index_child(weight_g: float, length_cm: float) -> float:
    """Neonatal ponderal index: (g / cm^3) x 100."""
    return weight_g / length_cm**3 * 100


def lean_body_mass_boer(weight_kg: float, height_cm: float, gender: Gender) -> float:
    if gender == Gender.MALE:
        return 0.407 * weight_kg + 0.267 * height_cm - 19.2
    return 0.252 * weight_kg + 0.473 * height_cm - 48.3


def relative_fat_mass(height: float, waist: float, gender: Gender) -> float:
    """RFM percentage; height and waist in the same unit."""
    base = 64.0 if gender == Gender.MALE else 76.0
    return base - 20.0 * (height / waist)


def body_shape_index(waist_m: float, bmi_value: float, height_m: float) -> float:
    """ABSI = WC / (BMI^(2/3) x height^(1/2)), all lengths in metres."""
    return waist_m / (bmi_value ** (2.0 / 3.0) * math.sqrt(height_m))


def body_surface_area_dubois(weight_kg: float, height_cm: float) -> float:
    return 0.007184 * weight_kg**0.425 * height_cm**0.725


def navy_body_fat(
    gender: Gender,
    height_cm: float,
    waist_cm: float,
    neck_cm: float,
    hip_cm: float | None = None,
) -> float:
    """US Navy circumference method, percent body fat."""
    if gender == Gender.MALE:
        density = (
            1.0324 - 0.19077 * math.log10(waist_cm - neck_cm) + 0.15456 * math.log10(height_cm)
        )
    else:
        if hip_cm is None:
            raise ValueError("Hip circumference is required for the female formula")
        density = (
            1.29579
            - 0.35004 * math.log10(waist_cm + hip_cm - neck_cm)
            + 0.221 * math.log10(height_cm)
        )
    return 495.0 / density - 450.0


def waist_to_hip_ratio(waist: float, hip: float) -> float:
    return waist / hip


def draw_length(wingspan_in: float) -> float:
    """Archery draw length estimate: wingspan divided by 2.5."""
    return wingspan_in / 2.5
