"""
Built-in calculators.

Importing this package registers every calculator module with REGISTRY.
"""

from healthcalc.calculators import (  # noqa: F401
    body,
    cardio,
    clinical,
    energy,
    fitness,
    wellbeing,
)
from healthcalc.calculators.base import REGISTRY, FormulaCalculator, calculator

__all__ = ["REGISTRY", "FormulaCalculator", "calculator", "ALL_CALCULATOR_IDS"]

ALL_CALCULATOR_IDS: tuple[str, ...] = tuple(REGISTRY)
