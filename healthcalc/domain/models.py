"""
Domain models for calculator evaluation.

These models represent the core concepts shared by every calculator and are
framework-agnostic. They use Pydantic for validation so that a malformed
threshold table or result fails at construction time.
"""

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class UnitSystem(str, Enum):
    """Measurement system the caller entered values in."""

    METRIC = "metric"
    IMPERIAL = "imperial"


class Gender(str, Enum):
    """Biological sex used by sex-specific formulas."""

    MALE = "male"
    FEMALE = "female"


class CholesterolUnit(str, Enum):
    MG_DL = "mg/dL"
    MMOL_L = "mmol/L"


class CalculatorInput(BaseModel):
    """
    Base class for every calculator's raw input record.

    Values arrive as strings or numbers from forms and JSON bodies; pydantic
    coerces them in lax mode. Non-finite numbers are rejected outright.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False, str_strip_whitespace=True)

    @model_validator(mode="before")
    @classmethod
    def drop_blank_fields(cls, data: Any) -> Any:
        """Treat empty form fields as absent so optional inputs take their fallback path."""
        if isinstance(data, dict):
            return {
                key: value
                for key, value in data.items()
                if not (isinstance(value, str) and not value.strip())
            }
        return data


class FieldError(BaseModel):
    """A single user-facing validation message. An empty field means form-level."""

    model_config = ConfigDict(frozen=True)

    field: str = Field(default="", description="Dotted input path, empty for form-level errors")
    message: str


class ThresholdBand(BaseModel):
    """One labelled range of a threshold table: lower <= value < upper."""

    model_config = ConfigDict(frozen=True)

    lower: float | None = Field(default=None, description="Inclusive lower bound, None for -inf")
    upper: float | None = Field(default=None, description="Exclusive upper bound, None for +inf")
    label: str = Field(min_length=1)
    description: str = ""

    def contains(self, value: float) -> bool:
        if self.lower is not None and value < self.lower:
            return False
        if self.upper is not None and value >= self.upper:
            return False
        return True


class ThresholdTable(BaseModel):
    """
    Ordered, total partition of the real line into labelled bands.

    Construction fails unless the first band is open below, the last band is
    open above, and every band ends exactly where the next one begins.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    bands: tuple[ThresholdBand, ...] = Field(min_length=1)

    @model_validator(mode="after")
    def check_total_partition(self) -> "ThresholdTable":
        first, last = self.bands[0], self.bands[-1]
        if first.lower is not None:
            raise ValueError(f"{self.name}: first band must be unbounded below")
        if last.upper is not None:
            raise ValueError(f"{self.name}: last band must be unbounded above")
        for current, following in zip(self.bands, self.bands[1:], strict=False):
            if current.upper is None or following.lower is None:
                raise ValueError(f"{self.name}: only the outer bands may be unbounded")
            if current.upper != following.lower:
                raise ValueError(
                    f"{self.name}: gap or overlap between '{current.label}' and '{following.label}'"
                )
            if not math.isfinite(current.upper):
                raise ValueError(f"{self.name}: band bounds must be finite")
        for band in self.bands[1:-1]:
            if band.lower is not None and band.upper is not None and band.lower >= band.upper:
                raise ValueError(f"{self.name}: band '{band.label}' is empty")
        return self

    @property
    def labels(self) -> list[str]:
        return [band.label for band in self.bands]


class CalculationResult(BaseModel):
    """Outcome of a single calculator evaluation."""

    model_config = ConfigDict(frozen=True)

    calculator_id: str
    values: dict[str, float] = Field(description="Named numeric outputs")
    category: str | None = Field(default=None, description="Label of the classified band")
    description: str = ""
    details: dict[str, Any] = Field(
        default_factory=dict, description="Supplementary tables such as zones or charts"
    )
    warnings: list[str] = Field(default_factory=list)


class CalculatorInfo(BaseModel):
    """Static catalog metadata used for listing and search."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    href: str
    category: str
    tags: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()
