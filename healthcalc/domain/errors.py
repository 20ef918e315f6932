"""
Error taxonomy for calculator evaluation and message delivery.

Expected failures travel inside `Result.err(...)`; these classes give them a
type so callers can tell a bad field from a formula that cannot be applied.
"""

from healthcalc.domain.models import FieldError


class CalculationError(Exception):
    """Base class for every failure a caller can correct by changing input."""

    def __init__(self, message: str, errors: list[FieldError] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors: list[FieldError] = errors or [FieldError(message=message)]


class InputValidationError(CalculationError):
    """Malformed, missing or out-of-range field values."""


class CrossFieldError(InputValidationError):
    """Fields are individually valid but inconsistent with each other."""


class FormulaPreconditionError(CalculationError):
    """Input is valid but the formula is not applicable to it."""

    def __init__(self, message: str, field: str = "") -> None:
        super().__init__(message, [FieldError(field=field, message=message)])


class UnknownCalculatorError(KeyError):
    """No calculator is registered under the requested id."""

    def __init__(self, calculator_id: str) -> None:
        super().__init__(calculator_id)
        self.calculator_id = calculator_id

    def __str__(self) -> str:
        return f"Unknown calculator: {self.calculator_id}"


class DeliveryError(Exception):
    """The transactional email provider did not accept the message."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
