"""
Threshold tables for every single-valued category classification.

Every table is a total partition of the real line (validated on import) using
the lower-inclusive, upper-exclusive convention. Where a published cut-off is
written as "<= x" the band edge moves to x, so a reading of exactly x falls
in the higher band. See DESIGN.md for the list of affected tables.
"""

from healthcalc.classify import ascending
from healthcalc.domain.models import Gender, ThresholdTable
from healthcalc.formulas.growth import PercentileCutoffs

BMI_ADULT = ascending(
    "bmi_adult",
    [18.5, 25.0, 30.0],
    ["Underweight", "Normal Weight", "Overweight", "Obesity"],
    [
        "Below the healthy range. Low weight can reflect undernutrition or an underlying illness.",
        "Within the healthy range for most adults.",
        "Above the healthy range. Risk of heart disease and type 2 diabetes begins to rise.",
        "Well above the healthy range, associated with substantially higher cardiometabolic risk.",
    ],
)

BMI_OBESITY_CLASS = ascending(
    "bmi_obesity_class",
    [18.5, 25.0, 30.0, 35.0, 40.0],
    [
        "Underweight",
        "Normal Weight",
        "Overweight",
        "Obese (Class I)",
        "Obese (Class II)",
        "Severe Obesity (Class III)",
    ],
)

WAIST_TO_HEIGHT = ascending(
    "waist_to_height",
    [0.35, 0.5, 0.6],
    ["Abnormally Slim", "Healthy", "Increased Risk", "High Risk"],
    [
        "Waist is very small relative to height; check that weight is not too low.",
        "Keep your waist to less than half your height.",
        "Central fat is above the healthy range; cardiometabolic risk is raised.",
        "Central fat is high; risk of heart disease and diabetes is substantially raised.",
    ],
)

# Waist-to-height ratio at which central fat counts as an obesity risk factor
WAIST_RISK_CUTOFF = 0.52

WAIST_TO_HEIGHT_OBESITY = ascending(
    "waist_to_height_obesity",
    [0.42, WAIST_RISK_CUTOFF, 0.57],
    [
        "Underweight (Low Risk)",
        "Healthy (Low Risk)",
        "Overweight (Increased Risk)",
        "Highly Overweight (High Risk)",
    ],
)

PONDERAL_ADULT = ascending(
    "ponderal_adult",
    [11.0, 15.0],
    ["Below Average", "Average", "Above Average"],
    [
        "Lean for your height compared with the typical adult range of 11-15 kg/m3.",
        "Within the typical adult range of 11-15 kg/m3.",
        "Heavy for your height compared with the typical adult range of 11-15 kg/m3.",
    ],
)

PONDERAL_CHILD = ascending(
    "ponderal_child",
    [2.2, 3.0],
    ["Below Average", "Average", "Above Average"],
    [
        "Below the typical newborn range of 2.2-3.0; may indicate asymmetric growth restriction.",
        "Within the typical newborn range of 2.2-3.0.",
        "Above the typical newborn range of 2.2-3.0.",
    ],
)

KIDNEY_FUNCTION = ascending(
    "kidney_function",
    [15.0, 30.0, 60.0, 90.0],
    [
        "Kidney Failure",
        "Severe Impairment",
        "Moderate Impairment",
        "Mild Impairment",
        "Normal Kidney Function",
    ],
    [
        "Clearance below 15 mL/min. Dialysis or transplant evaluation is usually needed.",
        "Severely reduced clearance. Most renally cleared drugs need dose adjustment.",
        "Moderately reduced clearance. Review medication doses with a clinician.",
        "Slightly reduced clearance. Usually no dose changes are required.",
        "Clearance in the normal range.",
    ],
)

MEAN_ARTERIAL_PRESSURE = ascending(
    "mean_arterial_pressure",
    [60.0, 70.0, 100.0],
    ["Low", "Low Normal", "Normal", "High"],
    [
        "Below 60 mmHg organs may not receive enough blood flow.",
        "Adequate perfusion, but at the low end of the range.",
        "Healthy perfusion pressure.",
        "Raised pressure that can strain the heart and blood vessels over time.",
    ],
)

PULSE_PRESSURE = ascending(
    "pulse_pressure",
    [30.0, 60.0, 80.0],
    ["Narrow", "Normal", "Wide", "High Risk"],
    [
        "A narrow pulse pressure can indicate reduced stroke volume.",
        "Pulse pressure is in the healthy range.",
        "A wide pulse pressure can reflect stiffening of the large arteries.",
        "A very wide pulse pressure is linked with higher cardiovascular risk.",
    ],
)

RESTING_HEART_RATE = ascending(
    "resting_heart_rate",
    [60.0, 75.0, 85.0],
    ["Athletic / Excellent", "Good / Healthy", "Average", "Above Average / High"],
    [
        "Typical of well-trained hearts.",
        "A healthy resting rate for adults.",
        "Within the normal range but with room to improve through aerobic training.",
        "Higher than ideal. Persistent rates above 100 bpm warrant medical advice.",
    ],
)

TOTAL_HDL_RATIO = ascending(
    "total_hdl_ratio", [3.5, 5.0], ["Low Risk", "Average Risk", "High Risk"]
)
LDL_HDL_RATIO = ascending("ldl_hdl_ratio", [2.0, 3.5], ["Healthy", "Acceptable", "High Risk"])
TRIGLYCERIDE_HDL_RATIO = ascending(
    "triglyceride_hdl_ratio", [2.0, 4.0], ["Ideal", "Borderline High", "High Risk"]
)

A1C_STATUS = ascending(
    "a1c_status",
    [5.7, 6.5],
    ["Normal", "Prediabetes", "Diabetes"],
    [
        "HbA1c below 5.7% is in the normal range.",
        "HbA1c of 5.7-6.4% indicates prediabetes.",
        "HbA1c of 6.5% or higher is in the diabetes range.",
    ],
)

BODY_FAT: dict[Gender, ThresholdTable] = {
    Gender.MALE: ascending(
        "body_fat_male", [14.0, 18.0, 25.0], ["Athlete", "Fitness", "Average", "Obese"]
    ),
    Gender.FEMALE: ascending(
        "body_fat_female", [21.0, 25.0, 32.0], ["Athlete", "Fitness", "Average", "Obese"]
    ),
}

WILKS_LEVEL = ascending(
    "wilks_level",
    [200.0, 300.0, 350.0, 400.0, 500.0],
    ["Beginner", "Novice", "Intermediate", "Advanced", "Elite", "World Class"],
)

# Classified on VO2 max minus the age and sex baseline
VO2_FITNESS_LEVEL = ascending(
    "vo2_fitness_level",
    [-10.0, -4.0, 1.0, 6.0],
    ["Poor", "Fair", "Good", "Excellent", "Superior"],
)
VO2_PERCENTILE: dict[str, int] = {
    "Poor": 15,
    "Fair": 40,
    "Good": 60,
    "Excellent": 80,
    "Superior": 95,
}

FRAMINGHAM_RISK = ascending(
    "framingham_risk",
    [10.0, 20.0],
    ["Low", "Intermediate", "High"],
    [
        "Ten-year risk of heart attack or coronary death is below 10%.",
        "Ten-year risk is 10-20%. Discuss preventive measures with your doctor.",
        "Ten-year risk is 20% or more. Consult a healthcare professional about treatment.",
    ],
)

ASCVD_RISK = ascending(
    "ascvd_risk",
    [5.0, 7.5, 20.0],
    ["Low Risk", "Borderline Risk", "Intermediate Risk", "High Risk"],
    [
        "Your heart risk is low. Keep up the good work with diet and exercise.",
        "Lifestyle improvements can help prevent this from rising.",
        "Moderate-intensity statin therapy and lifestyle changes are often recommended.",
        "Consult a cardiologist to discuss statin therapy and lifestyle interventions.",
    ],
)

DIABETES_RISK_SCORE = ascending(
    "diabetes_risk_score",
    [4.0, 5.0],
    ["Low Risk", "Moderate Risk", "High Risk"],
    [
        "Your score places you in a low-risk category.",
        "You are at the borderline; a good time to optimise lifestyle habits.",
        "A score of 5 or higher indicates elevated risk of type 2 diabetes.",
    ],
)

# Metabolic age minus chronological age, in whole years
METABOLIC_AGE_RATING = ascending(
    "metabolic_age_rating",
    [-4.0, 0.0, 1.0, 6.0],
    ["Athletic", "Healthy", "Average", "Below Average", "Needs Improvement"],
)

# Perceived Stress Scale (PSS-10) total, 0-40
STRESS_LEVEL = ascending(
    "stress_level",
    [14, 27],
    ["Low Perceived Stress", "Moderate Stress", "High Perceived Stress"],
    [
        "Your stress levels are currently low. You seem to be managing life's challenges "
        "well and feeling in control.",
        "You are experiencing a moderate amount of stress. While common, make sure it does "
        "not build up over time.",
        "Your score indicates a high level of stress. You may be feeling overwhelmed or "
        "nearing burnout, so it is worth taking action.",
    ],
)

# Waist-to-hip ratio health risk
WAIST_TO_HIP: dict[Gender, ThresholdTable] = {
    Gender.MALE: ascending(
        "waist_to_hip_male", [0.95, 1.0], ["Low Risk", "Moderate Risk", "High Risk"]
    ),
    Gender.FEMALE: ascending(
        "waist_to_hip_female", [0.80, 0.85], ["Low Risk", "Moderate Risk", "High Risk"]
    ),
}

CHILD_BMI_LABELS = ("Underweight", "Healthy Weight", "At Risk of Overweight", "Overweight / Obese")
CHILD_BMI_DESCRIPTIONS = (
    "Below the 5th percentile for age and sex. Ask a paediatrician about nutrition.",
    "Between the 5th and 85th percentile. Keep up balanced meals and daily activity.",
    "Between the 85th and 95th percentile. Focus on family-wide healthy habits, not dieting.",
    "At or above the 95th percentile. A healthcare provider can help plan next steps.",
)


def child_bmi_table(cutoffs: PercentileCutoffs) -> ThresholdTable:
    """BMI-for-age bands for one child, built from interpolated percentile cut-offs."""
    return ascending(
        "child_bmi_for_age",
        [cutoffs.p5, cutoffs.p85, cutoffs.p95],
        CHILD_BMI_LABELS,
        CHILD_BMI_DESCRIPTIONS,
    )


ALL_TABLES: tuple[ThresholdTable, ...] = (
    BMI_ADULT,
    BMI_OBESITY_CLASS,
    WAIST_TO_HEIGHT,
    WAIST_TO_HEIGHT_OBESITY,
    PONDERAL_ADULT,
    PONDERAL_CHILD,
    KIDNEY_FUNCTION,
    MEAN_ARTERIAL_PRESSURE,
    PULSE_PRESSURE,
    RESTING_HEART_RATE,
    TOTAL_HDL_RATIO,
    LDL_HDL_RATIO,
    TRIGLYCERIDE_HDL_RATIO,
    A1C_STATUS,
    *BODY_FAT.values(),
    WILKS_LEVEL,
    VO2_FITNESS_LEVEL,
    FRAMINGHAM_RISK,
    ASCVD_RISK,
    DIABETES_RISK_SCORE,
    METABOLIC_AGE_RATING,
    STRESS_LEVEL,
    *WAIST_TO_HIP.values(),
)
