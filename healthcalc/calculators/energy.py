"""Energy expenditure, nutrition and hydration calculators."""

from enum import Enum

from pydantic import Field, ValidationInfo, field_validator, model_validator

from healthcalc.calculators.base import AgedBodyInput, UnitInput, calculator, r1, result
from healthcalc.classify import classify
from healthcalc.domain.errors import FormulaPreconditionError
from healthcalc.domain.models import CalculationResult, Gender
from healthcalc.formulas import energy as f
from healthcalc.formulas import half_up
from healthcalc.thresholds import METABOLIC_AGE_RATING
from healthcalc.units import ml_to_oz, normalize_mass
from healthcalc.validation import check_weight


def _usable_bmr(bmr: float) -> float:
    if bmr <= 0:
        raise FormulaPreconditionError(
            "These measurements do not give a usable metabolic rate. Check weight, height and age."
        )
    return bmr


def _bmr(inp: AgedBodyInput, age: float | None = None) -> float:
    body = inp.body()
    age = inp.age if age is None else age
    return _usable_bmr(f.bmr_mifflin(body.weight_kg, body.height_cm, age, inp.gender))


def _rounded_macros(calories: float, protein: float, fat: float, carbs: float) -> dict[str, float]:
    return {
        name: float(half_up(grams))
        for name, grams in f.macro_grams(calories, protein, fat, carbs).items()
    }


# BMR
class BMRInput(AgedBodyInput):
    formula: f.BMRFormula = f.BMRFormula.MIFFLIN
    body_fat_percent: float | None = Field(default=None, ge=2, le=70)
    activity: f.ActivityLevel = f.ActivityLevel.SEDENTARY


@calculator("bmr", BMRInput)
def compute_bmr(inp: BMRInput) -> CalculationResult:
    body = inp.body()
    if inp.formula == f.BMRFormula.KATCH:
        if inp.body_fat_percent is None:
            raise FormulaPreconditionError(
                "Body fat percentage is required for the Katch-McArdle formula",
                field="body_fat_percent",
            )
        bmr = f.bmr_katch_mcardle(f.lean_mass_from_body_fat(body.weight_kg, inp.body_fat_percent))
    elif inp.formula == f.BMRFormula.HARRIS:
        bmr = f.bmr_harris_benedict(body.weight_kg, body.height_cm, inp.age, inp.gender)
    else:
        bmr = f.bmr_mifflin(body.weight_kg, body.height_cm, inp.age, inp.gender)
    bmr = _usable_bmr(bmr)
    activity_table = {
        level.value: float(half_up(f.tdee(bmr, level))) for level in f.ActivityLevel
    }
    return result(
        "bmr",
        {"bmr": float(half_up(bmr)), "tdee": activity_table[inp.activity.value]},
        description="Calories your body burns at complete rest.",
        details={"formula": inp.formula.value, "tdee_by_activity": activity_table},
    )


# TDEE
class TDEEInput(AgedBodyInput):
    activity: f.ActivityLevel = f.ActivityLevel.SEDENTARY


TDEE_GOAL_ADJUSTMENTS = {"maintenance": 0.0, "cutting": -500.0, "bulking": 500.0}


@calculator("tdee", TDEEInput)
def compute_tdee(inp: TDEEInput) -> CalculationResult:
    bmr = _bmr(inp)
    tdee = f.tdee(bmr, inp.activity)
    goals = {}
    for goal, adjustment in TDEE_GOAL_ADJUSTMENTS.items():
        calories = tdee + adjustment
        goals[goal] = {
            "calories": float(half_up(calories)),
            "macros": _rounded_macros(calories, 30, 35, 35),
        }
    return result(
        "tdee",
        {
            "bmr": float(half_up(bmr)),
            "tdee": float(half_up(tdee)),
            "cutting": goals["cutting"]["calories"],
            "bulking": goals["bulking"]["calories"],
        },
        details={"goals": goals},
    )


# Macros
class MacroGoal(str, Enum):
    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


MACRO_GOAL_FACTORS = {MacroGoal.LOSE: 0.8, MacroGoal.MAINTAIN: 1.0, MacroGoal.GAIN: 1.1}


class MacroInput(AgedBodyInput):
    activity: f.ActivityLevel = f.ActivityLevel.SEDENTARY
    goal: MacroGoal = MacroGoal.MAINTAIN


@calculator("macro", MacroInput)
def compute_macro(inp: MacroInput) -> CalculationResult:
    body = inp.body()
    tdee = f.tdee(_bmr(inp), inp.activity)
    calories = tdee * MACRO_GOAL_FACTORS[inp.goal]
    grams = f.body_weight_macros(calories, body.weight_kg)
    meals = {
        str(count): {name: float(half_up(value / count)) for name, value in grams.items()}
        for count in (3, 4, 5)
    }
    return result(
        "macro",
        {
            "calories": float(half_up(calories)),
            "protein_g": float(half_up(grams["protein_g"])),
            "fat_g": float(half_up(grams["fat_g"])),
            "carbs_g": float(half_up(grams["carbs_g"])),
            "water_l": r1(body.weight_kg * 0.035),
        },
        details={"per_meal": meals},
    )


# Calorie deficit
class DeficitLevel(str, Enum):
    MAINTAIN = "maintain"
    MILD = "mild"
    NORMAL = "normal"
    AGGRESSIVE = "aggressive"
    EXTREME = "extreme"


class MacroSplit(str, Enum):
    BALANCED = "balanced"
    HIGH_PROTEIN = "high_protein"
    LOW_CARB = "low_carb"


DAILY_DEFICIT_KCAL = {
    DeficitLevel.MAINTAIN: 0,
    DeficitLevel.MILD: 250,
    DeficitLevel.NORMAL: 500,
    DeficitLevel.AGGRESSIVE: 750,
    DeficitLevel.EXTREME: 1000,
}
MACRO_SPLITS = {
    MacroSplit.BALANCED: (30, 30, 40),
    MacroSplit.HIGH_PROTEIN: (40, 30, 30),
    MacroSplit.LOW_CARB: (40, 40, 20),
}
SAFE_CALORIE_FLOOR = {Gender.MALE: 1500, Gender.FEMALE: 1200}


class CalorieDeficitInput(AgedBodyInput):
    activity: f.ActivityLevel = f.ActivityLevel.SEDENTARY
    goal: DeficitLevel = DeficitLevel.NORMAL
    macro_split: MacroSplit = MacroSplit.BALANCED


def zig_zag_week(target: int) -> list[dict[str, int | str]]:
    """Two high, two low and three normal days averaging exactly `target`."""
    high = half_up(target * 1.15)
    low = half_up(target * 0.85)
    normal = half_up((target * 7 - 2 * high - 2 * low) / 3)
    pattern = (
        ("Monday", low),
        ("Tuesday", normal),
        ("Wednesday", high),
        ("Thursday", low),
        ("Friday", normal),
        ("Saturday", high),
        ("Sunday", normal),
    )
    return [{"day": day, "calories": calories} for day, calories in pattern]


@calculator("calorie-deficit", CalorieDeficitInput)
def compute_calorie_deficit(inp: CalorieDeficitInput) -> CalculationResult:
    bmr = half_up(_bmr(inp))
    tdee = half_up(f.tdee(bmr, inp.activity))
    target = tdee - DAILY_DEFICIT_KCAL[inp.goal]

    warnings: list[str] = []
    floor = SAFE_CALORIE_FLOOR[inp.gender]
    if inp.goal != DeficitLevel.MAINTAIN:
        if target < floor:
            warnings.append(
                f"Target raised to the safe minimum of {floor} kcal/day. "
                "Consider increasing physical activity instead of eating less."
            )
            target = floor
        elif target < bmr:
            warnings.append(
                "Target is below your basal metabolic rate. Monitor your energy levels."
            )

    protein, fat, carbs = MACRO_SPLITS[inp.macro_split]
    return result(
        "calorie-deficit",
        {
            "bmr": float(bmr),
            "tdee": float(tdee),
            "target_calories": float(target),
            "weekly_deficit": float((tdee - target) * 7),
        },
        details={
            "macros": _rounded_macros(target, protein, fat, carbs),
            "macro_percent": {"protein": protein, "fat": fat, "carbs": carbs},
            "zig_zag": zig_zag_week(target),
        },
        warnings=warnings,
    )


# Fat intake
class DietType(str, Enum):
    STANDARD = "standard"
    LOW_FAT = "low_fat"
    MODERATE = "moderate"
    HIGH_FAT = "high_fat"
    KETO = "keto"


class WeightGoal(str, Enum):
    CUT = "cut"
    MAINTAIN = "maintain"
    BULK = "bulk"


FAT_SHARE = {
    DietType.STANDARD: 0.30,
    DietType.LOW_FAT: 0.20,
    DietType.MODERATE: 0.25,
    DietType.HIGH_FAT: 0.40,
    DietType.KETO: 0.75,
}
GOAL_ADJUSTMENT_KCAL = {WeightGoal.CUT: -500.0, WeightGoal.MAINTAIN: 0.0, WeightGoal.BULK: 500.0}
SATURATED_FAT_SHARE = 0.10


class FatIntakeInput(AgedBodyInput):
    activity: f.ActivityLevel = f.ActivityLevel.SEDENTARY
    diet: DietType = DietType.STANDARD
    goal: WeightGoal = WeightGoal.MAINTAIN


@calculator("fat-intake", FatIntakeInput)
def compute_fat_intake(inp: FatIntakeInput) -> CalculationResult:
    tdee = f.tdee(_bmr(inp), inp.activity)
    calories = max(0.0, tdee + GOAL_ADJUSTMENT_KCAL[inp.goal])
    fat_g = calories * FAT_SHARE[inp.diet] / f.KCAL_PER_G_FAT
    saturated_g = calories * SATURATED_FAT_SHARE / f.KCAL_PER_G_FAT
    return result(
        "fat-intake",
        {
            "target_calories": float(half_up(calories)),
            "fat_g": float(half_up(fat_g)),
            "saturated_max_g": float(half_up(saturated_g)),
            "unsaturated_g": float(half_up(max(0.0, fat_g - saturated_g))),
        },
        details={"fat_percent": FAT_SHARE[inp.diet] * 100},
    )


# Hydration
class PregnancyStatus(str, Enum):
    NONE = "none"
    PREGNANT = "pregnant"
    LACTATING = "lactating"


class WaterIntakeInput(UnitInput):
    weight: float = Field(gt=0, description="Body weight in kg or lb")
    gender: Gender
    exercise_minutes: float = Field(default=0, ge=0, le=600)
    hot_climate: bool = False
    pregnancy_status: PregnancyStatus = PregnancyStatus.NONE

    @field_validator("weight")
    @classmethod
    def plausible_weight(cls, v: float, info: ValidationInfo) -> float:
        return check_weight(v, info.data.get("units"))


GLASS_ML = 240.0
AWAKE_HOURS = 16


@calculator("daily-water-intake", WaterIntakeInput)
def compute_daily_water_intake(inp: WaterIntakeInput) -> CalculationResult:
    female = inp.gender == Gender.FEMALE
    total_ml = f.daily_water_ml(
        normalize_mass(inp.weight, inp.units),
        exercise_minutes=inp.exercise_minutes,
        hot_climate=inp.hot_climate,
        pregnant=female and inp.pregnancy_status == PregnancyStatus.PREGNANT,
        lactating=female and inp.pregnancy_status == PregnancyStatus.LACTATING,
    )
    fluid_ml = total_ml * 0.8
    return result(
        "daily-water-intake",
        {
            "total_ml": float(half_up(total_ml)),
            "total_oz": r1(ml_to_oz(total_ml)),
            "drink_ml": float(half_up(fluid_ml)),
            "drink_oz": r1(ml_to_oz(fluid_ml)),
            "food_ml": float(half_up(total_ml * 0.2)),
            "glasses": r1(fluid_ml / GLASS_ML),
            "hourly_ml": float(half_up(fluid_ml / AWAKE_HOURS)),
            "hourly_oz": r1(ml_to_oz(fluid_ml) / AWAKE_HOURS),
        },
        description="About 80% of water should come from drinks and 20% from food.",
    )


# Metabolic age
class MetabolicAgeInput(AgedBodyInput):
    activity: f.ActivityLevel = f.ActivityLevel.SEDENTARY


METABOLIC_AGE_ADVICE = {
    "Athletic": "Your metabolic rate is well above average for your age. Keep up strength "
    "training and protein intake.",
    "Healthy": "Your body is functioning younger than your calendar age.",
    "Average": "Adding two days of resistance training per week could lower your metabolic age.",
    "Below Average": "Your metabolism is slightly slower than ideal. Try increasing daily steps.",
    "Needs Improvement": "Focus on building lean muscle mass and prioritising sleep.",
}
REFERENCE_AGE = 30


@calculator("metabolic-age", MetabolicAgeInput)
def compute_metabolic_age(inp: MetabolicAgeInput) -> CalculationResult:
    bmr = _bmr(inp)
    reference = _bmr(inp, age=REFERENCE_AGE)
    multiplier = f.ACTIVITY_MULTIPLIERS[inp.activity]
    age = f.metabolic_age(inp.age, bmr, reference, multiplier)
    difference = age - round(inp.age)
    rating = classify(difference, METABOLIC_AGE_RATING)
    return result(
        "metabolic-age",
        {
            "metabolic_age": float(age),
            "difference": float(difference),
            "bmr": float(half_up(bmr)),
            "tdee": float(half_up(bmr * multiplier)),
        },
        category=rating.label,
        description=METABOLIC_AGE_ADVICE[rating.label],
    )


# Calories burned
class BurnMethod(str, Enum):
    ACTIVITY = "activity"
    HEART_RATE = "heart_rate"


class ExerciseActivity(str, Enum):
    OFFICE_WORK = "office_work"
    YOGA = "yoga"
    WALKING = "walking"
    WEIGHTLIFTING = "weightlifting"
    BRISK_WALKING = "brisk_walking"
    SWIMMING = "swimming"
    CYCLING = "cycling"
    AEROBICS = "aerobics"
    RUNNING = "running"
    JUMPING_ROPE = "jumping_rope"


# Compendium of Physical Activities values
ACTIVITY_METS: dict[ExerciseActivity, float] = {
    ExerciseActivity.OFFICE_WORK: 1.5,
    ExerciseActivity.YOGA: 2.5,
    ExerciseActivity.WALKING: 3.3,
    ExerciseActivity.WEIGHTLIFTING: 3.5,
    ExerciseActivity.BRISK_WALKING: 5.0,
    ExerciseActivity.SWIMMING: 5.8,
    ExerciseActivity.CYCLING: 6.8,
    ExerciseActivity.AEROBICS: 8.0,
    ExerciseActivity.RUNNING: 9.8,
    ExerciseActivity.JUMPING_ROPE: 12.3,
}

# (name, kcal per item), largest first
FOOD_EQUIVALENTS = (
    ("Burger(s)", 500),
    ("Slice(s) of Pizza", 285),
    ("Can(s) of Soda", 150),
    ("Apple(s)", 95),
)
KCAL_PER_KG_FAT = 7700
SESSIONS_PER_WEEK = 3


class CaloriesBurnedInput(UnitInput):
    method: BurnMethod = BurnMethod.ACTIVITY
    weight: float = Field(gt=0, description="Body weight in kg or lb")
    duration_minutes: float = Field(gt=0, le=1440)
    activity: ExerciseActivity = ExerciseActivity.WALKING
    met: float | None = Field(default=None, ge=1, le=25, description="Overrides `activity`")
    age: float | None = Field(default=None, ge=10, le=100)
    gender: Gender | None = None
    heart_rate: float | None = Field(default=None, ge=40, le=220, description="Average bpm")

    @field_validator("weight")
    @classmethod
    def plausible_weight(cls, v: float, info: ValidationInfo) -> float:
        return check_weight(v, info.data.get("units"))

    @model_validator(mode="after")
    def heart_rate_fields_present(self) -> "CaloriesBurnedInput":
        required = (self.age, self.gender, self.heart_rate)
        if self.method == BurnMethod.HEART_RATE and None in required:
            raise ValueError("Age, gender and average heart rate are required for this method")
        return self


def food_equivalent(calories: float) -> dict[str, float | str]:
    name, kcal = next(
        ((name, kcal) for name, kcal in FOOD_EQUIVALENTS if calories >= kcal),
        FOOD_EQUIVALENTS[-1],
    )
    return {"food": name, "amount": r1(calories / kcal)}


@calculator("calories-burned", CaloriesBurnedInput)
def compute_calories_burned(inp: CaloriesBurnedInput) -> CalculationResult:
    weight_kg = normalize_mass(inp.weight, inp.units)
    if inp.method == BurnMethod.HEART_RATE:
        calories = f.heart_rate_calories(
            inp.heart_rate or 0,
            weight_kg,
            inp.age or 0,
            inp.gender or Gender.FEMALE,
            inp.duration_minutes,
        )
        met = None
    else:
        met = inp.met if inp.met is not None else ACTIVITY_METS[inp.activity]
        calories = f.met_calories(met, weight_kg, inp.duration_minutes)
    weekly = calories * SESSIONS_PER_WEEK
    return result(
        "calories-burned",
        {
            "calories": float(half_up(calories)),
            "fat_burned_g": r1(calories * 0.11),
            "weekly_calories": float(half_up(weekly)),
            "monthly_fat_loss_kg": round(weekly * 4 / KCAL_PER_KG_FAT, 2),
        },
        description=f"Projections assume {SESSIONS_PER_WEEK} sessions per week.",
        details={"met": met, "food_equivalent": food_equivalent(calories)},
    )
