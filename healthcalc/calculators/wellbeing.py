"""
Questionnaire-scored wellbeing calculators.

The Perceived Stress Scale (PSS-10) asks ten questions about the last month,
each answered 0 (never) to 4 (very often). Four items are positively worded
and reverse-scored, so the total runs from 0 to 40.
"""

from typing import Any

from pydantic import Field

from healthcalc.calculators.base import calculator, result
from healthcalc.classify import classify
from healthcalc.domain.models import CalculationResult, CalculatorInput
from healthcalc.thresholds import STRESS_LEVEL

MAX_ANSWER = 4

# (field, question, reverse scored)
PSS_ITEMS: tuple[tuple[str, str, bool], ...] = (
    ("q1", "How often have you been upset because of something that happened unexpectedly?", False),
    ("q2", "How often have you felt unable to control the important things in your life?", False),
    ("q3", "How often have you felt nervous and stressed?", False),
    ("q4", "How often have you felt confident about handling your personal problems?", True),
    ("q5", "How often have you felt that things were going your way?", True),
    ("q6", "How often have you found that you could not cope with all you had to do?", False),
    ("q7", "How often have you been able to control irritations in your life?", True),
    ("q8", "How often have you felt that you were on top of things?", True),
    ("q9", "How often have you been angered by things outside of your control?", False),
    ("q10", "How often have difficulties piled up so high you could not overcome them?", False),
)

STRESS_INSIGHTS: dict[str, list[str]] = {
    "Low Perceived Stress": [
        "Keep up your current healthy routines and boundaries.",
        "Use this period of mental clarity to plan for future goals.",
        "Take this assessment again in 30 days to track your baseline.",
    ],
    "Moderate Stress": [
        "Identify what has been triggering your stress and whether any of it can be reduced.",
        "Add 10-15 minutes of mindfulness or light walking to your day.",
        "Watch for physical symptoms like tight shoulders or poor sleep.",
    ],
    "High Perceived Stress": [
        "Cut back on non-essential obligations where you can.",
        "Consider speaking to a professional about coping strategies.",
        "Sustained stress raises cortisol, which can disrupt sleep and digestion.",
    ],
}


def _answer(question: str) -> Any:
    return Field(ge=0, le=MAX_ANSWER, description=question)


class StressLevelInput(CalculatorInput):
    """Answers to the ten PSS-10 items, 0 (never) to 4 (very often)."""

    q1: int = _answer(PSS_ITEMS[0][1])
    q2: int = _answer(PSS_ITEMS[1][1])
    q3: int = _answer(PSS_ITEMS[2][1])
    q4: int = _answer(PSS_ITEMS[3][1])
    q5: int = _answer(PSS_ITEMS[4][1])
    q6: int = _answer(PSS_ITEMS[5][1])
    q7: int = _answer(PSS_ITEMS[6][1])
    q8: int = _answer(PSS_ITEMS[7][1])
    q9: int = _answer(PSS_ITEMS[8][1])
    q10: int = _answer(PSS_ITEMS[9][1])


def pss_scores(inp: StressLevelInput) -> tuple[int, int, int]:
    """Total score plus raw sums of the negatively and positively worded items."""
    total = helplessness = efficacy = 0
    for field, _, reverse in PSS_ITEMS:
        answer: int = getattr(inp, field)
        if reverse:
            efficacy += answer
            total += MAX_ANSWER - answer
        else:
            helplessness += answer
            total += answer
    return total, helplessness, efficacy


@calculator("stress-level", StressLevelInput)
def compute_stress_level(inp: StressLevelInput) -> CalculationResult:
    total, helplessness, efficacy = pss_scores(inp)
    level = classify(total, STRESS_LEVEL)
    return result(
        "stress-level",
        {
            "score": float(total),
            "helplessness": float(helplessness),
            "self_efficacy": float(efficacy),
        },
        level,
        details={
            "max_score": len(PSS_ITEMS) * MAX_ANSWER,
            "insights": STRESS_INSIGHTS[level.label],
        },
    )
