"""
Input validation: raw field values in, a typed calculator input or a list of
user-facing field errors out.

Field-level constraints live on the pydantic input models (ranges via `Field`,
unit-aware plausibility via the helpers below). Cross-field constraints are
`model_validator(mode="after")` checks and surface as form-level errors.
"""

from collections.abc import Mapping
from typing import Any, TypeVar

import structlog
from pydantic import ValidationError

from healthcalc.domain.errors import CrossFieldError, InputValidationError
from healthcalc.domain.models import CalculatorInput, FieldError, UnitSystem
from healthcalc.domain.result import Result
from healthcalc.units import length_unit, mass_unit

logger = structlog.get_logger(__name__)

InputT = TypeVar("InputT", bound=CalculatorInput)

# Plausible body measurement ranges in the units the caller entered
WEIGHT_LIMITS: dict[UnitSystem, tuple[float, float]] = {
    UnitSystem.METRIC: (1.0, 500.0),
    UnitSystem.IMPERIAL: (2.2, 1100.0),
}
HEIGHT_LIMITS: dict[UnitSystem, tuple[float, float]] = {
    UnitSystem.METRIC: (30.0, 275.0),
    UnitSystem.IMPERIAL: (12.0, 108.0),
}
CIRCUMFERENCE_LIMITS: dict[UnitSystem, tuple[float, float]] = {
    UnitSystem.METRIC: (10.0, 300.0),
    UnitSystem.IMPERIAL: (4.0, 118.0),
}

_VALUE_ERROR_PREFIX = "Value error, "


def check_weight(value: float, units: UnitSystem | None) -> float:
    units = units or UnitSystem.METRIC
    low, high = WEIGHT_LIMITS[units]
    if not low <= value <= high:
        raise ValueError(f"Weight must be between {low:g} and {high:g} {mass_unit(units)}")
    return value


def check_height(value: float, units: UnitSystem | None) -> float:
    units = units or UnitSystem.METRIC
    low, high = HEIGHT_LIMITS[units]
    if not low <= value <= high:
        raise ValueError(f"Height must be between {low:g} and {high:g} {length_unit(units)}")
    return value


def check_circumference(value: float, units: UnitSystem | None) -> float:
    units = units or UnitSystem.METRIC
    low, high = CIRCUMFERENCE_LIMITS[units]
    if not low <= value <= high:
        raise ValueError(
            f"Measurement must be between {low:g} and {high:g} {length_unit(units)}"
        )
    return value


def _to_field_error(error: Mapping[str, Any]) -> FieldError:
    message = str(error.get("msg", "Invalid value"))
    if message.startswith(_VALUE_ERROR_PREFIX):
        message = message[len(_VALUE_ERROR_PREFIX):]
    field = ".".join(str(part) for part in error.get("loc", ()))
    return FieldError(field=field, message=message)


def collect_errors(exc: ValidationError) -> list[FieldError]:
    return [_to_field_error(error) for error in exc.errors()]


def validate_input(
    model: type[InputT], raw: Mapping[str, Any]
) -> Result[InputT, InputValidationError]:
    """
    Validate raw values against a calculator input model.

    Returns:
        Result containing the typed input, or an InputValidationError whose
        `errors` list every problem found. Errors that name no field are
        cross-field violations and come back as CrossFieldError.
    """
    try:
        return Result.ok(model.model_validate(dict(raw)))
    except ValidationError as exc:
        errors = collect_errors(exc)
        form_level = all(not error.field for error in errors)
        error_cls = CrossFieldError if form_level else InputValidationError
        summary = "; ".join(
            f"{error.field}: {error.message}" if error.field else error.message
            for error in errors
        )
        logger.debug("input_validation_failed", model=model.__name__, error_count=len(errors))
        return Result.err(error_cls(summary, errors))
