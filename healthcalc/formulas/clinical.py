"""
Clinical formulas: renal function, lipids, glycaemia and point-based
cardiovascular and metabolic risk scores.

Point tables follow the NCEP ATP III "hard CHD" scoring sheets. Laboratory
values are mg/dL throughout.
"""

from collections.abc import Sequence

from healthcalc.domain.models import CholesterolUnit, Gender

FRIEDEWALD_TG_LIMIT_MG_DL = 400.0
TRIGLYCERIDE_MG_DL_PER_MMOL_L = 88.57

# Each row: (inclusive upper bound or None for "and above", points)
PointRow = tuple[float | None, int]


def creatinine_clearance(age: float, weight_kg: float, scr_mg_dl: float, gender: Gender) -> float:
    """Cockcroft-Gault creatinine clearance in mL/min."""
    clearance = ((140.0 - age) * weight_kg) / (72.0 * scr_mg_dl)
    return clearance * 0.85 if gender == Gender.FEMALE else clearance


def _vldl_divisor(unit: CholesterolUnit) -> float:
    return 2.2 if unit == CholesterolUnit.MMOL_L else 5.0


def friedewald_ldl(
    total: float, hdl: float, triglycerides: float, unit: CholesterolUnit = CholesterolUnit.MG_DL
) -> float:
    """Calculated LDL; all values in `unit`."""
    return total - hdl - vldl(triglycerides, unit)


def vldl(triglycerides: float, unit: CholesterolUnit = CholesterolUnit.MG_DL) -> float:
    return triglycerides / _vldl_divisor(unit)


def estimated_average_glucose(a1c_percent: float) -> float:
    """eAG in mg/dL from HbA1c (ADAG study regression)."""
    return 28.7 * a1c_percent - 46.7


def a1c_from_average_glucose(eag_mg_dl: float) -> float:
    return (eag_mg_dl + 46.7) / 28.7


def _points(value: float, rows: Sequence[PointRow]) -> int:
    for upper, points in rows:
        if upper is None or value <= upper:
            return points
    raise ValueError("Point table has no open-ended final row")


def _lower_bound_points(value: float, rows: Sequence[tuple[float, int]]) -> int:
    """Rows of (exclusive upper bound, points); final row uses float('inf')."""
    for upper, points in rows:
        if value < upper:
            return points
    raise ValueError("Point table has no open-ended final row")


_INF = float("inf")

# Age in whole years, upper bound inclusive
FRAMINGHAM_AGE_POINTS: dict[Gender, list[PointRow]] = {
    Gender.MALE: [
        (34, -9), (39, -4), (44, 0), (49, 3), (54, 6),
        (59, 8), (64, 10), (69, 11), (74, 12), (None, 13),
    ],
    Gender.FEMALE: [
        (34, -7), (39, -3), (44, 0), (49, 3), (54, 6),
        (59, 8), (64, 10), (69, 12), (74, 14), (None, 16),
    ],
}

# Age bands for the age-dependent cholesterol and smoking rows
FRAMINGHAM_AGE_BANDS: list[float | None] = [39, 49, 59, 69, None]

# Total cholesterol points per age band; cholesterol bands <160, <200, <240, <280, >=280
FRAMINGHAM_CHOLESTEROL_POINTS: dict[Gender, list[list[int]]] = {
    Gender.MALE: [
        [0, 4, 7, 9, 11],
        [0, 3, 5, 6, 8],
        [0, 2, 3, 4, 5],
        [0, 1, 1, 2, 3],
        [0, 0, 0, 1, 1],
    ],
    Gender.FEMALE: [
        [0, 4, 8, 11, 13],
        [0, 3, 6, 8, 10],
        [0, 2, 4, 5, 7],
        [0, 1, 2, 3, 4],
        [0, 1, 1, 2, 2],
    ],
}
FRAMINGHAM_CHOLESTEROL_CUTS = (160.0, 200.0, 240.0, 280.0, _INF)

FRAMINGHAM_SMOKER_POINTS: dict[Gender, list[int]] = {
    Gender.MALE: [8, 5, 3, 1, 1],
    Gender.FEMALE: [9, 7, 4, 2, 1],
}

# HDL (same for both sexes): >=60 -1, 50-59 0, 40-49 1, <40 2
FRAMINGHAM_HDL_POINTS: list[tuple[float, int]] = [(40.0, 2), (50.0, 1), (60.0, 0), (_INF, -1)]

# Systolic bands <120, <130, <140, <160, >=160
FRAMINGHAM_SBP_CUTS = (120.0, 130.0, 140.0, 160.0, _INF)
FRAMINGHAM_SBP_POINTS: dict[tuple[Gender, bool], list[int]] = {
    (Gender.MALE, False): [0, 0, 1, 1, 2],
    (Gender.MALE, True): [0, 1, 2, 2, 3],
    (Gender.FEMALE, False): [0, 1, 2, 3, 4],
    (Gender.FEMALE, True): [0, 3, 4, 5, 6],
}

FRAMINGHAM_RISK_BY_POINTS: dict[Gender, dict[int, float]] = {
    Gender.MALE: {
        0: 1.0, 1: 1.1, 2: 1.3, 3: 1.6, 4: 1.9, 5: 2.3, 6: 2.9, 7: 3.5,
        8: 4.2, 9: 5.3, 10: 6.5, 11: 8.0, 12: 10.0, 13: 12.5, 14: 15.6, 15: 18.5,
    },
    Gender.FEMALE: {
        9: 1.0, 10: 1.2, 11: 1.5, 12: 1.7, 13: 2.0, 14: 2.4, 15: 2.8, 16: 3.3,
        17: 3.9, 18: 4.5, 19: 5.3, 20: 6.4, 21: 7.7, 22: 9.0, 23: 11.0, 24: 13.0, 25: 15.0,
    },
}


def _band_index(value: float, cuts: Sequence[float]) -> int:
    for index, cut in enumerate(cuts):
        if value < cut:
            return index
    return len(cuts) - 1


def _age_band_index(age: float) -> int:
    for index, upper in enumerate(FRAMINGHAM_AGE_BANDS):
        if upper is None or age <= upper:
            return index
    return len(FRAMINGHAM_AGE_BANDS) - 1


def framingham_points(
    gender: Gender,
    age: float,
    total_cholesterol: float,
    hdl: float,
    systolic: float,
    bp_treated: bool,
    smoker: bool,
) -> int:
    """
    ATP III hard CHD points. Inputs are clamped to the ranges the tables were
    derived from (age 20-79, TC 130-320, HDL 20-100, SBP 90-200).
    """
    age = max(20.0, min(age, 79.0))
    total_cholesterol = max(130.0, min(total_cholesterol, 320.0))
    hdl = max(20.0, min(hdl, 100.0))
    systolic = max(90.0, min(systolic, 200.0))

    age_band = _age_band_index(age)
    points = _points(age, FRAMINGHAM_AGE_POINTS[gender])
    points += FRAMINGHAM_CHOLESTEROL_POINTS[gender][age_band][
        _band_index(total_cholesterol, FRAMINGHAM_CHOLESTEROL_CUTS)
    ]
    if smoker:
        points += FRAMINGHAM_SMOKER_POINTS[gender][age_band]
    points += _lower_bound_points(hdl, FRAMINGHAM_HDL_POINTS)
    sbp_band = _band_index(systolic, FRAMINGHAM_SBP_CUTS)
    points += FRAMINGHAM_SBP_POINTS[(gender, bp_treated)][sbp_band]
    return points


def framingham_risk_percent(gender: Gender, points: int) -> float:
    """Ten-year hard CHD risk. Scores beyond the table extrapolate 3% per point, capped at 30%."""
    table = FRAMINGHAM_RISK_BY_POINTS[gender]
    lowest, highest = min(table), max(table)
    if points < lowest:
        return 1.0
    if points > highest:
        return min(30.0, table[highest] + (points - highest) * 3.0)
    return table[points]


def ascvd_risk_estimate(
    gender: Gender,
    african_american: bool,
    age: float,
    total_cholesterol: float,
    hdl: float,
    systolic: float,
    bp_treated: bool,
    diabetic: bool,
    smoker: bool,
) -> tuple[float, float]:
    """
    Simplified linear approximation of the pooled cohort equations.

    Returns (risk percent, optimal-profile risk percent). The optimal figure
    keeps only sex, race and age contributions and never exceeds the actual risk.
    """
    base = 0.0
    if gender == Gender.MALE:
        base += 2
    if african_american:
        base += 1
    non_modifiable = base
    if smoker:
        base += 4
    if diabetic:
        base += 3
    if bp_treated:
        base += 1
    age_factor = (age - 40.0) * 0.25
    score = (
        base
        + age_factor
        + (total_cholesterol - 170.0) * 0.04
        + (50.0 - hdl) * 0.08
        + (systolic - 110.0) * 0.08
    )
    if score < 0.1:
        score = 0.5
    risk = min(99.0, max(0.1, score))
    optimal = min(risk, max(0.1, non_modifiable + age_factor))
    return risk, optimal


def heart_age(
    age: float,
    smoker: bool,
    diabetic: bool,
    systolic: float,
    bmi_value: float,
    cholesterol_ratio: float,
) -> float:
    """Chronological age plus penalty years for each major risk factor."""
    result = age
    if smoker:
        result += 6
    if diabetic:
        result += 4
    if systolic > 140:
        result += 3
    if bmi_value > 28:
        result += 2
    if cholesterol_ratio > 5:
        result += 3
    return result
