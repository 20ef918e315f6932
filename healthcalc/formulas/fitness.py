"""Strength and aerobic fitness formulas."""

from healthcalc.domain.models import Gender

# Percentage of 1RM -> typical repetitions achievable at that load
REPS_AT_PERCENT: dict[int, int] = {
    100: 1,
    95: 2,
    90: 4,
    85: 6,
    80: 8,
    75: 10,
    70: 12,
    65: 16,
    60: 20,
    55: 24,
    50: 30,
}

WILKS_COEFFICIENTS: dict[Gender, tuple[float, ...]] = {
    Gender.MALE: (
        -216.0475144,
        16.2606339,
        -0.002388645,
        -0.00113732,
        7.01863e-06,
        -1.291e-08,
    ),
    Gender.FEMALE: (
        594.31747775582,
        -27.23842536447,
        0.82112226871,
        -0.00930733913,
        4.731582e-05,
        -9.054e-08,
    ),
}

# Body weight range the Wilks polynomial was fitted over, in kg
WILKS_BODYWEIGHT_RANGE: dict[Gender, tuple[float, float]] = {
    Gender.MALE: (40.0, 201.9),
    Gender.FEMALE: (26.51, 154.53),
}


def epley_one_rep_max(weight: float, reps: int) -> float:
    """Epley estimate; a single repetition is already a maximum."""
    if reps == 1:
        return weight
    return weight * (1 + reps / 30)


def percentage_chart(one_rep_max: float) -> list[dict[str, float]]:
    return [
        {"percent": float(percent), "weight": one_rep_max * percent / 100, "reps": float(reps)}
        for percent, reps in REPS_AT_PERCENT.items()
    ]


def wilks_bodyweight(bodyweight_kg: float, gender: Gender) -> float:
    low, high = WILKS_BODYWEIGHT_RANGE[gender]
    return max(low, min(high, bodyweight_kg))


def wilks_coefficient(bodyweight_kg: float, gender: Gender) -> float:
    """Coefficient for `bodyweight_kg`, clamped to the fitted range first."""
    a, b, c, d, e, f = WILKS_COEFFICIENTS[gender]
    x = wilks_bodyweight(bodyweight_kg, gender)
    denominator = a + b * x + c * x**2 + d * x**3 + e * x**4 + f * x**5
    return 500.0 / denominator


def wilks_score(total_kg: float, bodyweight_kg: float, gender: Gender) -> float:
    return total_kg * wilks_coefficient(bodyweight_kg, gender)


def vo2_baseline(age: float, gender: Gender) -> float:
    """
    Age-adjusted reference VO2 max that fitness levels are measured against.

    Starts at 52 (male) or 44 (female) ml/kg/min and declines 0.4 per year
    after 20, by at most 40.
    """
    base = 52.0 if gender == Gender.MALE else 44.0
    return base - min(40.0, max(0.0, (age - 20.0) * 0.4))


def fitness_age(vo2max: float, age: float, gender: Gender) -> int:
    """Age whose average VO2 max matches the measured value, clamped to 18-80."""
    baseline = 45.0 if gender == Gender.MALE else 35.0
    estimate = 25.0 + (baseline - vo2max) * 2.0
    estimate = max(18.0, min(80.0, estimate))
    if vo2max > baseline and estimate > age:
        estimate = age - 5
    return round(estimate)


KM_PER_MILE = 1.60934
RIEGEL_EXPONENT = 1.06


def riegel_time(time_s: float, distance_km: float, target_km: float) -> float:
    """Predicted time over `target_km` from a race of `distance_km` run in `time_s`."""
    return time_s * (target_km / distance_km) ** RIEGEL_EXPONENT


def format_duration(seconds: float) -> str:
    """`h:mm:ss`, or `m:ss` under an hour. Fractional seconds are dropped."""
    whole = int(seconds)
    hours, rest = divmod(whole, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"
