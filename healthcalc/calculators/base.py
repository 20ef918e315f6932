"""
Calculator registration and shared input models.

A calculator is an input model plus a compute function. Registering one with
`@calculator(...)` makes it available to the evaluator and the HTTP layer.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import Field, ValidationInfo, field_validator

from healthcalc.domain.models import (
    CalculationResult,
    CalculatorInput,
    Gender,
    ThresholdBand,
    UnitSystem,
)
from healthcalc.units import NormalizedBody, normalize_body
from healthcalc.validation import check_height, check_weight

InputT = TypeVar("InputT", bound=CalculatorInput)


@dataclass(frozen=True)
class FormulaCalculator(Generic[InputT]):
    """Binds a calculator id to its input model and compute function."""

    calculator_id: str
    input_model: type[InputT]
    compute_fn: Callable[[InputT], CalculationResult]

    def compute(self, inp: InputT) -> CalculationResult:
        return self.compute_fn(inp)


REGISTRY: dict[str, FormulaCalculator[Any]] = {}


def calculator(
    calculator_id: str, input_model: type[InputT]
) -> Callable[[Callable[[InputT], CalculationResult]], Callable[[InputT], CalculationResult]]:
    """Register a compute function under `calculator_id`."""

    def register(
        fn: Callable[[InputT], CalculationResult],
    ) -> Callable[[InputT], CalculationResult]:
        if calculator_id in REGISTRY:
            raise ValueError(f"Calculator '{calculator_id}' is already registered")
        REGISTRY[calculator_id] = FormulaCalculator(calculator_id, input_model, fn)
        return fn

    return register


def result(
    calculator_id: str,
    values: dict[str, float],
    band: ThresholdBand | None = None,
    *,
    category: str | None = None,
    description: str | None = None,
    details: dict[str, Any] | None = None,
    warnings: list[str] | None = None,
) -> CalculationResult:
    """Assemble a CalculationResult, taking category and description from `band` when given."""
    return CalculationResult(
        calculator_id=calculator_id,
        values=values,
        category=band.label if band is not None else category,
        description=description if description is not None else (band.description if band else ""),
        details=details or {},
        warnings=warnings or [],
    )


def r1(value: float) -> float:
    return round(value, 1)


def r2(value: float) -> float:
    return round(value, 2)


class UnitInput(CalculatorInput):
    units: UnitSystem = Field(
        default=UnitSystem.METRIC, description="metric (kg, cm) or imperial (lb, in)"
    )


class BodyInput(UnitInput):
    """Weight and height in the caller's unit system."""

    weight: float = Field(gt=0, description="Body weight in kg or lb")
    height: float = Field(gt=0, description="Height in cm or in")

    @field_validator("weight")
    @classmethod
    def plausible_weight(cls, v: float, info: ValidationInfo) -> float:
        return check_weight(v, info.data.get("units"))

    @field_validator("height")
    @classmethod
    def plausible_height(cls, v: float, info: ValidationInfo) -> float:
        return check_height(v, info.data.get("units"))

    def body(self) -> NormalizedBody:
        return normalize_body(self.weight, self.height, self.units)


class GenderBodyInput(BodyInput):
    gender: Gender


class AgedBodyInput(GenderBodyInput):
    age: float = Field(ge=1, le=120, description="Age in years")
