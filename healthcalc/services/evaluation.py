"""
Calculator evaluation: validate raw input, compute, return a Result.

Expected failures (bad input, a formula that does not apply) come back as
`Result.err(CalculationError)`. Only an unknown calculator id raises.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Protocol

import structlog

from healthcalc.calculators import REGISTRY
from healthcalc.domain.errors import (
    CalculationError,
    FormulaPreconditionError,
    UnknownCalculatorError,
)
from healthcalc.domain.models import CalculationResult, CalculatorInput
from healthcalc.domain.result import Result
from healthcalc.validation import validate_input

logger = structlog.get_logger(__name__)


class Calculator(Protocol):
    """
    A single health calculator.

    `input_model` validates and types raw field values; `compute` maps a
    validated input to a result and may raise FormulaPreconditionError.
    """

    calculator_id: str
    input_model: type[CalculatorInput]

    def compute(self, inp: Any) -> CalculationResult: ...


class CalculatorEvaluator:
    """Registry of calculators plus the validate-then-compute pipeline."""

    def __init__(self, calculators: Iterable[Calculator] = ()) -> None:
        self._calculators: dict[str, Calculator] = {}
        self.logger = logger.bind(component="calculator_evaluator")
        for calc in calculators:
            self.register(calc)

    def register(self, calc: Calculator) -> None:
        if calc.calculator_id in self._calculators:
            raise ValueError(f"Calculator '{calc.calculator_id}' is already registered")
        self._calculators[calc.calculator_id] = calc

    def get(self, calculator_id: str) -> Calculator:
        try:
            return self._calculators[calculator_id]
        except KeyError:
            raise UnknownCalculatorError(calculator_id) from None

    def __contains__(self, calculator_id: object) -> bool:
        return calculator_id in self._calculators

    @property
    def calculator_ids(self) -> list[str]:
        return list(self._calculators)

    def evaluate(
        self, calculator_id: str, raw: Mapping[str, Any]
    ) -> Result[CalculationResult, CalculationError]:
        """
        Run one calculator against raw field values.

        Raises:
            UnknownCalculatorError: no calculator is registered under `calculator_id`.
        """
        calc = self.get(calculator_id)

        validated = validate_input(calc.input_model, raw)
        if validated.is_err():
            error = validated.unwrap_err()
            self.logger.info(
                "calculation_rejected",
                calculator_id=calculator_id,
                reason=type(error).__name__,
                fields=[e.field for e in error.errors],
            )
            return Result.err(error)

        try:
            outcome = calc.compute(validated.unwrap())
        except FormulaPreconditionError as exc:
            self.logger.info(
                "calculation_rejected",
                calculator_id=calculator_id,
                reason=type(exc).__name__,
                fields=[e.field for e in exc.errors],
            )
            return Result.err(exc)

        self.logger.info(
            "calculation_completed",
            calculator_id=calculator_id,
            category=outcome.category,
        )
        return Result.ok(outcome)


def default_evaluator() -> CalculatorEvaluator:
    """Evaluator with every built-in calculator registered."""
    return CalculatorEvaluator(REGISTRY.values())
