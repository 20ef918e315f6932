"""Blood pressure and heart-rate formulas."""

from enum import Enum

from healthcalc.domain.models import Gender
from healthcalc.formulas import half_up


class MaxHeartRateFormula(str, Enum):
    FOX = "fox"
    TANAKA = "tanaka"
    GELLISH = "gellish"
    MANUAL = "manual"


def mean_arterial_pressure(systolic: float, diastolic: float) -> float:
    return diastolic + (systolic - diastolic) / 3.0


def pulse_pressure(systolic: float, diastolic: float) -> float:
    return systolic - diastolic


def max_heart_rate(
    age: float, formula: MaxHeartRateFormula, manual: float | None = None
) -> float:
    if formula == MaxHeartRateFormula.FOX:
        return 220.0 - age
    if formula == MaxHeartRateFormula.TANAKA:
        return 208.0 - 0.7 * age
    if formula == MaxHeartRateFormula.GELLISH:
        return 207.0 - 0.7 * age
    if manual is None:
        raise ValueError("Manual maximum heart rate requires a value")
    return manual


def heart_rate_reserve(max_hr: float, resting_hr: float) -> float:
    return max_hr - resting_hr


def karvonen_target(max_hr: float, resting_hr: float, intensity: float) -> float:
    """Target heart rate for an intensity given as a fraction (0.7 for 70%)."""
    return heart_rate_reserve(max_hr, resting_hr) * intensity + resting_hr


def vo2max_from_resting_hr(age: float, resting_hr: float) -> float:
    """Uth-Sorensen estimate using the Tanaka maximum heart rate."""
    return 15.3 * (208.0 - 0.7 * age) / resting_hr


def vo2max_cooper_run(time_minutes: float) -> float:
    """1.5 mile run test."""
    return 483.0 / time_minutes + 3.5


def vo2max_rockport_walk(
    weight_lb: float, age: float, gender: Gender, time_minutes: float, heart_rate: float
) -> float:
    """One mile Rockport walk test."""
    male = 1.0 if gender == Gender.MALE else 0.0
    return (
        132.853
        - 0.0769 * weight_lb
        - 0.3877 * age
        + 6.315 * male
        - 3.2649 * time_minutes
        - 0.1565 * heart_rate
    )


ZONE_INTENSITIES: tuple[tuple[float, float], ...] = (
    (0.5, 0.6),
    (0.6, 0.7),
    (0.7, 0.8),
    (0.8, 0.9),
    (0.9, 1.0),
)


def training_zones(
    max_hr: float, resting_hr: float | None, names: tuple[str, ...]
) -> list[dict[str, float | str]]:
    """
    Five intensity zones in whole beats per minute.

    With a resting rate the zones use heart rate reserve (Karvonen); without
    one they are plain percentages of the maximum. The top of the last zone
    is always the maximum heart rate itself.
    """

    def bpm(fraction: float) -> int:
        if resting_hr is None:
            return half_up(max_hr * fraction)
        return half_up(karvonen_target(max_hr, resting_hr, fraction))

    zones: list[dict[str, float | str]] = []
    for number, ((low, high), name) in enumerate(zip(ZONE_INTENSITIES, names, strict=True), 1):
        zones.append(
            {
                "zone": number,
                "name": name,
                "low_percent": round(low * 100),
                "high_percent": round(high * 100),
                "low_bpm": bpm(low),
                "high_bpm": half_up(max_hr) if number == len(ZONE_INTENSITIES) else bpm(high),
            }
        )
    return zones
