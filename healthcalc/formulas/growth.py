"""
Growth reference data for children and pregnancy.

The child table is a simplified subset of the CDC BMI-for-age charts giving
the 5th, 85th and 95th percentile at each whole year from 2 to 20. Values in
between are linearly interpolated by month.
"""

from typing import NamedTuple

from healthcalc.domain.models import Gender


class PercentileCutoffs(NamedTuple):
    p5: float
    p85: float
    p95: float


CDC_BMI_FOR_AGE: dict[Gender, dict[int, PercentileCutoffs]] = {
    Gender.MALE: {
        2: PercentileCutoffs(14.7, 18.2, 19.3),
        3: PercentileCutoffs(14.3, 17.4, 18.3),
        4: PercentileCutoffs(14.0, 16.9, 17.8),
        5: PercentileCutoffs(13.8, 16.8, 17.9),
        6: PercentileCutoffs(13.7, 17.0, 18.4),
        7: PercentileCutoffs(13.7, 17.4, 19.1),
        8: PercentileCutoffs(13.8, 17.9, 20.0),
        9: PercentileCutoffs(14.0, 18.6, 21.0),
        10: PercentileCutoffs(14.2, 19.4, 22.2),
        11: PercentileCutoffs(14.6, 20.2, 23.2),
        12: PercentileCutoffs(15.0, 21.0, 24.2),
        13: PercentileCutoffs(15.5, 21.8, 25.1),
        14: PercentileCutoffs(16.0, 22.6, 26.0),
        15: PercentileCutoffs(16.5, 23.4, 26.8),
        16: PercentileCutoffs(17.0, 24.2, 27.5),
        17: PercentileCutoffs(17.5, 24.9, 28.2),
        18: PercentileCutoffs(18.0, 25.6, 28.9),
        19: PercentileCutoffs(18.5, 26.3, 29.7),
        20: PercentileCutoffs(19.0, 27.0, 30.5),
    },
    Gender.FEMALE: {
        2: PercentileCutoffs(14.4, 18.0, 19.1),
        3: PercentileCutoffs(14.0, 17.2, 18.2),
        4: PercentileCutoffs(13.7, 16.8, 18.0),
        5: PercentileCutoffs(13.5, 16.8, 18.2),
        6: PercentileCutoffs(13.4, 17.1, 18.8),
        7: PercentileCutoffs(13.4, 17.6, 19.6),
        8: PercentileCutoffs(13.5, 18.3, 20.6),
        9: PercentileCutoffs(13.7, 19.1, 21.7),
        10: PercentileCutoffs(14.0, 20.0, 22.9),
        11: PercentileCutoffs(14.4, 20.9, 24.1),
        12: PercentileCutoffs(14.8, 21.7, 25.2),
        13: PercentileCutoffs(15.3, 22.5, 26.2),
        14: PercentileCutoffs(15.8, 23.3, 27.2),
        15: PercentileCutoffs(16.3, 24.0, 28.1),
        16: PercentileCutoffs(16.8, 24.6, 28.9),
        17: PercentileCutoffs(17.2, 25.2, 29.6),
        18: PercentileCutoffs(17.5, 25.7, 30.3),
        19: PercentileCutoffs(17.8, 26.1, 31.0),
        20: PercentileCutoffs(18.1, 26.5, 31.8),
    },
}


def bmi_cutoffs_for_age(gender: Gender, years: int, months: int = 0) -> PercentileCutoffs:
    """Interpolated cut-offs; age 20 has no following year so it is used as is."""
    data = CDC_BMI_FOR_AGE[gender]
    base = data[years]
    following = data.get(years + 1, base)
    fraction = months / 12
    return PercentileCutoffs(
        *(low + (high - low) * fraction for low, high in zip(base, following, strict=True))
    )


def estimate_bmi_percentile(bmi_value: float, cutoffs: PercentileCutoffs) -> float:
    """Piecewise linear percentile estimate anchored on the 5th, 85th and 95th cut-offs."""
    p5, p85, p95 = cutoffs
    if bmi_value < p5:
        return max(1.0, bmi_value / p5 * 5)
    if bmi_value < p85:
        return 5 + (bmi_value - p5) / (p85 - p5) * 80
    if bmi_value < p95:
        return 85 + (bmi_value - p85) / (p95 - p85) * 10
    return min(99.0, 95 + (bmi_value - p95) / 5 * 4)


class GainGuideline(NamedTuple):
    min_kg: float
    max_kg: float
    label: str


# Institute of Medicine total gestational weight gain recommendations
PREGNANCY_GAIN_SINGLE: dict[str, GainGuideline] = {
    "underweight": GainGuideline(12.5, 18.0, "Underweight (BMI < 18.5)"),
    "normal": GainGuideline(11.5, 16.0, "Normal Weight (BMI 18.5-24.9)"),
    "overweight": GainGuideline(7.0, 11.5, "Overweight (BMI 25.0-29.9)"),
    "obese": GainGuideline(5.0, 9.0, "Obese (BMI >= 30.0)"),
}
PREGNANCY_GAIN_TWINS: dict[str, GainGuideline] = {
    "normal": GainGuideline(17.0, 25.0, "Twins (Normal BMI)"),
    "overweight": GainGuideline(14.0, 23.0, "Twins (Overweight BMI)"),
    "obese": GainGuideline(11.0, 19.0, "Twins (Obese BMI)"),
}

FIRST_TRIMESTER_WEEKS = 13
FULL_TERM_WEEKS = 40
FIRST_TRIMESTER_GAIN_KG = (0.5, 2.0)


def gain_trajectory(guideline: GainGuideline) -> list[tuple[int, float, float]]:
    """
    Recommended cumulative gain (min, max) in kg for weeks 0-40.

    Gain is slow and linear through the first trimester, then linear at the
    rate that reaches the guideline total by week 40.
    """
    first_min, first_max = FIRST_TRIMESTER_GAIN_KG
    remaining_weeks = FULL_TERM_WEEKS - FIRST_TRIMESTER_WEEKS
    rate_min = (guideline.min_kg - first_min) / remaining_weeks
    rate_max = (guideline.max_kg - first_max) / remaining_weeks
    points: list[tuple[int, float, float]] = []
    for week in range(FULL_TERM_WEEKS + 1):
        if week <= FIRST_TRIMESTER_WEEKS:
            share = week / FIRST_TRIMESTER_WEEKS
            points.append((week, share * first_min, share * first_max))
        else:
            later = week - FIRST_TRIMESTER_WEEKS
            points.append((week, first_min + later * rate_min, first_max + later * rate_max))
    return points
