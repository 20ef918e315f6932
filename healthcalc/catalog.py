"""
Calculator catalog and search.

Static metadata for every built-in calculator. Search is a case-insensitive
substring match over title, description, category, tags and keywords, and
keeps catalog order.
"""

from healthcalc.domain.models import CalculatorInfo

BODY = "Body Composition"
HEART = "Heart Health"
NUTRITION = "Nutrition"
FITNESS = "Fitness"
CLINICAL = "Clinical"
RISK = "Risk Assessment"
FAMILY = "Pregnancy & Children"
WELLBEING = "Mental Wellbeing"


def _info(
    calculator_id: str,
    title: str,
    description: str,
    category: str,
    tags: list[str],
    keywords: list[str],
    slug: str | None = None,
) -> CalculatorInfo:
    return CalculatorInfo(
        id=calculator_id,
        title=title,
        description=description,
        href=f"/health/{slug or calculator_id + '-calculator'}",
        category=category,
        tags=tuple(tags),
        keywords=tuple(keywords),
    )


CALCULATORS: tuple[CalculatorInfo, ...] = (
    _info(
        "bmi",
        "BMI Calculator",
        "Calculate your Body Mass Index and healthy weight range",
        BODY,
        ["bmi", "body mass index", "weight", "height"],
        ["bmi calculator", "healthy weight", "overweight", "obesity"],
    ),
    _info(
        "ideal-body-weight",
        "Ideal Body Weight Calculator",
        "Compare ideal weight from the Devine, Robinson, Miller and Hamwi formulas",
        BODY,
        ["ibw", "ideal weight", "devine", "robinson", "miller", "hamwi"],
        ["ideal body weight", "target weight", "healthy weight"],
    ),
    _info(
        "adjusted-body-weight",
        "Adjusted Body Weight Calculator",
        "Calculate adjusted body weight for clinical dosing",
        CLINICAL,
        ["ajbw", "adjusted weight", "dosing", "ibw"],
        ["adjusted body weight", "drug dosing weight", "obese dosing"],
    ),
    _info(
        "lean-body-mass",
        "Lean Body Mass Calculator",
        "Estimate your lean body mass using weight, height, and sex",
        BODY,
        ["lean body mass", "lbm", "muscle", "weight", "composition"],
        ["lean body mass", "lbm calculator", "muscle mass", "body composition", "fitness"],
    ),
    _info(
        "rfm",
        "RFM Calculator",
        "Estimate your body fat percentage with the Relative Fat Mass formula",
        BODY,
        ["rfm", "relative fat mass", "body fat", "waist", "height"],
        ["rfm calculator", "relative fat mass", "body fat percentage", "body composition"],
    ),
    _info(
        "absi",
        "ABSI Calculator",
        "Calculate your A Body Shape Index (ABSI) score",
        BODY,
        ["absi", "body shape", "index", "health", "fitness"],
        ["a body shape index", "absi calculator", "health risk", "waist circumference"],
    ),
    _info(
        "waist-to-height-ratio",
        "Waist to Height Ratio Calculator",
        "Check central obesity risk from your waist and height",
        BODY,
        ["whtr", "waist", "height", "central obesity"],
        ["waist to height ratio", "belly fat", "abdominal obesity"],
    ),
    _info(
        "ponderal-index",
        "Ponderal Index Calculator",
        "Calculate your body proportion using the Ponderal Index",
        BODY,
        ["ponderal index", "pi", "bmi", "body proportion", "newborn"],
        ["ponderal index", "pi calculator", "body proportion", "bmi alternative"],
    ),
    _info(
        "body-fat",
        "Body Fat Calculator",
        "Estimate body fat percentage with the US Navy tape method",
        BODY,
        ["body fat", "navy method", "fat mass", "lean mass"],
        ["body fat percentage", "us navy body fat", "tape measure"],
    ),
    _info(
        "bmr",
        "BMR Calculator",
        "Calculate your Basal Metabolic Rate with three equations",
        NUTRITION,
        ["bmr", "metabolism", "mifflin", "harris benedict", "katch mcardle"],
        ["basal metabolic rate", "calories at rest", "metabolism calculator"],
    ),
    _info(
        "tdee",
        "TDEE Calculator",
        "Estimate total daily energy expenditure and goal calories",
        NUTRITION,
        ["tdee", "calories", "maintenance", "activity"],
        ["total daily energy expenditure", "maintenance calories", "cutting", "bulking"],
    ),
    _info(
        "macro",
        "Macro Calculator",
        "Split your daily calories into protein, fat and carbohydrate",
        NUTRITION,
        ["macros", "protein", "carbs", "fat"],
        ["macro calculator", "macronutrients", "meal planning"],
    ),
    _info(
        "calorie-deficit",
        "Calorie Deficit Calculator",
        "Plan a safe calorie deficit with macro splits and a zig-zag week",
        NUTRITION,
        ["calorie deficit", "weight loss", "zig zag", "diet"],
        ["calorie deficit", "lose weight", "calorie cycling"],
    ),
    _info(
        "fat-intake",
        "Fat Intake Calculator",
        "Find your daily fat target for your diet and goal",
        NUTRITION,
        ["fat intake", "saturated fat", "keto", "diet"],
        ["daily fat intake", "grams of fat", "saturated fat limit"],
    ),
    _info(
        "daily-water-intake",
        "Daily Water Intake Calculator",
        "Estimate how much water you need each day",
        NUTRITION,
        ["water", "hydration", "fluids"],
        ["water intake", "how much water", "hydration calculator"],
    ),
    _info(
        "creatinine-clearance",
        "Creatinine Clearance Calculator",
        "Estimate kidney function with the Cockcroft-Gault equation",
        CLINICAL,
        ["crcl", "kidney", "creatinine", "cockcroft gault", "renal"],
        ["creatinine clearance", "kidney function", "renal dosing", "gfr"],
    ),
    _info(
        "mean-arterial-pressure",
        "Mean Arterial Pressure Calculator",
        "Calculate mean arterial pressure from a blood pressure reading",
        HEART,
        ["map", "blood pressure", "perfusion"],
        ["mean arterial pressure", "map calculator", "organ perfusion"],
    ),
    _info(
        "pulse-pressure",
        "Pulse Pressure Calculator",
        "Calculate the difference between systolic and diastolic pressure",
        HEART,
        ["pulse pressure", "blood pressure", "arterial stiffness"],
        ["pulse pressure calculator", "wide pulse pressure"],
    ),
    _info(
        "blood-pressure",
        "Blood Pressure Calculator",
        "Classify a blood pressure reading by AHA category",
        HEART,
        ["blood pressure", "hypertension", "systolic", "diastolic"],
        ["blood pressure chart", "hypertension stage", "high blood pressure"],
    ),
    _info(
        "karvonen",
        "Karvonen Formula Calculator",
        "Find target heart rate zones with heart rate reserve",
        HEART,
        ["karvonen", "heart rate reserve", "target heart rate", "zones"],
        ["karvonen formula", "target heart rate", "training zones"],
        slug="karvonen-formula-calculator",
    ),
    _info(
        "heart-rate",
        "Heart Rate Zone Calculator",
        "Calculate your maximum heart rate and training zones",
        HEART,
        ["heart rate", "max heart rate", "zones", "cardio"],
        ["heart rate zones", "maximum heart rate", "fat burning zone"],
    ),
    _info(
        "resting-heart-rate",
        "Resting Heart Rate Calculator",
        "Rate your resting heart rate and get personal training zones",
        HEART,
        ["resting heart rate", "rhr", "pulse"],
        ["resting heart rate chart", "normal pulse", "heart health"],
    ),
    _info(
        "vo2-max",
        "VO2 Max Calculator",
        "Estimate aerobic capacity and fitness age from simple tests",
        FITNESS,
        ["vo2 max", "aerobic", "cooper test", "rockport"],
        ["vo2 max calculator", "cardio fitness", "fitness age"],
    ),
    _info(
        "cholesterol-ratio",
        "Cholesterol Ratio Calculator",
        "Calculate cholesterol ratios and estimate LDL",
        HEART,
        ["cholesterol", "hdl", "ldl", "triglycerides"],
        ["cholesterol ratio", "friedewald ldl", "lipid panel"],
    ),
    _info(
        "estimated-average-glucose",
        "Estimated Average Glucose Calculator",
        "Convert HbA1c to average blood glucose and back",
        CLINICAL,
        ["a1c", "eag", "glucose", "diabetes"],
        ["estimated average glucose", "a1c conversion", "blood sugar"],
    ),
    _info(
        "heart-age",
        "Heart Age Calculator",
        "Estimate how old your heart is compared with your real age",
        RISK,
        ["heart age", "cardiovascular", "risk factors"],
        ["heart age calculator", "cardiovascular age"],
    ),
    _info(
        "framingham-risk",
        "Framingham Risk Score Calculator",
        "Estimate ten-year risk of coronary heart disease",
        RISK,
        ["framingham", "chd", "heart attack", "cardiovascular"],
        ["framingham risk score", "10 year heart risk", "atp iii"],
        slug="framingham-risk-score-calculator",
    ),
    _info(
        "ascvd-risk",
        "ASCVD Risk Calculator",
        "Estimate ten-year atherosclerotic cardiovascular disease risk",
        RISK,
        ["ascvd", "cardiovascular", "statin", "heart disease"],
        ["ascvd risk", "pooled cohort", "10 year risk"],
    ),
    _info(
        "diabetes-risk",
        "Diabetes Risk Calculator",
        "Score your risk of developing type 2 diabetes",
        RISK,
        ["diabetes", "type 2", "prediabetes", "risk score"],
        ["diabetes risk test", "prediabetes risk", "type 2 diabetes"],
    ),
    _info(
        "obesity-risk",
        "Obesity Risk Calculator",
        "Combine BMI and waist measurements into an overall risk level",
        RISK,
        ["obesity", "bmi", "waist", "risk"],
        ["obesity risk", "central obesity", "weight related risk"],
    ),
    _info(
        "metabolic-age",
        "Metabolic Age Calculator",
        "Compare your metabolic age with your real age",
        NUTRITION,
        ["metabolic age", "bmr", "metabolism"],
        ["metabolic age calculator", "biological age", "metabolism"],
    ),
    _info(
        "child-bmi",
        "Child BMI Calculator",
        "Find a child's BMI-for-age percentile",
        FAMILY,
        ["child bmi", "percentile", "kids", "growth"],
        ["bmi for age", "child growth chart", "pediatric bmi"],
    ),
    _info(
        "one-rep-max",
        "One Rep Max Calculator",
        "Estimate your one repetition maximum and training loads",
        FITNESS,
        ["1rm", "one rep max", "strength", "epley"],
        ["one rep max calculator", "max lift", "percentage chart"],
    ),
    _info(
        "wilks",
        "Wilks Calculator",
        "Compare powerlifting strength across body weights",
        FITNESS,
        ["wilks", "powerlifting", "strength", "total"],
        ["wilks score", "powerlifting calculator", "relative strength"],
    ),
    _info(
        "pregnancy-weight-gain",
        "Pregnancy Weight Gain Calculator",
        "Track recommended weight gain week by week",
        FAMILY,
        ["pregnancy", "weight gain", "twins", "iom"],
        ["pregnancy weight gain", "gestational weight", "weight gain chart"],
    ),
    _info(
        "body-shape",
        "Body Shape Calculator",
        "Identify your body shape from bust, waist and hip measurements",
        BODY,
        ["body shape", "hourglass", "pear", "apple"],
        ["body shape calculator", "figure type", "waist to hip ratio"],
    ),
    _info(
        "draw-length",
        "Draw Length Calculator",
        "Estimate your archery draw length from your wingspan",
        FITNESS,
        ["draw length", "archery", "bow", "wingspan"],
        ["archery draw length", "bow sizing"],
    ),
    _info(
        "calories-burned",
        "Calories Burned Calculator",
        "Estimate calories burned from activity MET values or average heart rate",
        FITNESS,
        ["calories burned", "met", "exercise", "heart rate", "keytel"],
        ["calories burned calculator", "exercise calories", "workout burn"],
    ),
    _info(
        "running-pace",
        "Running Pace Calculator",
        "Work out pace, finish time or distance and predict race times",
        FITNESS,
        ["running", "pace", "race time", "riegel", "splits"],
        ["running pace calculator", "marathon pace", "5k time", "race predictor"],
    ),
    _info(
        "stress-level",
        "Stress Level Calculator",
        "Measure perceived stress with the 10 question PSS-10 questionnaire",
        WELLBEING,
        ["stress", "pss-10", "perceived stress scale", "questionnaire"],
        ["stress test", "burnout", "mental health", "anxiety"],
    ),
)

_BY_ID = {info.id: info for info in CALCULATORS}


def search_calculators(query: str) -> list[CalculatorInfo]:
    """Every calculator for a blank query, otherwise substring matches in catalog order."""
    term = query.strip().lower()
    if not term:
        return list(CALCULATORS)
    return [info for info in CALCULATORS if _matches(info, term)]


def _matches(info: CalculatorInfo, term: str) -> bool:
    fields = (info.title, info.description, info.category, *info.tags, *info.keywords)
    return any(term in field.lower() for field in fields)


def get_calculators_by_category(category: str) -> list[CalculatorInfo]:
    return [info for info in CALCULATORS if info.category == category]


def get_all_categories() -> list[str]:
    return sorted({info.category for info in CALCULATORS})


def get_calculator_info(calculator_id: str) -> CalculatorInfo | None:
    return _BY_ID.get(calculator_id)
