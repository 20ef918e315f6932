"""
Unit conversions shared by every calculator.

All conversions are fixed multiplicative constants so that a value converted
to the other system and back lands within display rounding of where it began.
Formulas downstream always receive canonical units (kg, cm, mg/dL).
"""

from pydantic import BaseModel, ConfigDict

from healthcalc.domain.models import CholesterolUnit, UnitSystem

CM_PER_INCH = 2.54
LB_PER_KG = 2.20462
INCHES_PER_FOOT = 12
OZ_PER_ML = 0.033814
CHOLESTEROL_MG_DL_PER_MMOL_L = 38.67
GLUCOSE_MG_DL_PER_MMOL_L = 18.015
CREATININE_UMOL_L_PER_MG_DL = 88.4


def cm_to_in(cm: float) -> float:
    return cm / CM_PER_INCH


def in_to_cm(inches: float) -> float:
    return inches * CM_PER_INCH


def kg_to_lb(kg: float) -> float:
    return kg * LB_PER_KG


def lb_to_kg(lb: float) -> float:
    return lb / LB_PER_KG


def ft_in_to_cm(feet: float, inches: float = 0.0) -> float:
    return in_to_cm(feet * INCHES_PER_FOOT + inches)


def cm_to_ft_in(cm: float) -> tuple[int, float]:
    """Split a length into whole feet and remaining inches."""
    total_inches = cm_to_in(cm)
    feet = int(total_inches // INCHES_PER_FOOT)
    return feet, total_inches - feet * INCHES_PER_FOOT


def ml_to_oz(ml: float) -> float:
    return ml * OZ_PER_ML


def cholesterol_to_mg_dl(value: float, unit: CholesterolUnit) -> float:
    if unit == CholesterolUnit.MMOL_L:
        return value * CHOLESTEROL_MG_DL_PER_MMOL_L
    return value


def glucose_mg_dl_to_mmol_l(mg_dl: float) -> float:
    return mg_dl / GLUCOSE_MG_DL_PER_MMOL_L


def glucose_mmol_l_to_mg_dl(mmol_l: float) -> float:
    return mmol_l * GLUCOSE_MG_DL_PER_MMOL_L


def creatinine_umol_l_to_mg_dl(umol_l: float) -> float:
    return umol_l / CREATININE_UMOL_L_PER_MG_DL


# Normalization by unit system
def normalize_length(value: float, units: UnitSystem) -> float:
    """Length in centimetres, given cm (metric) or inches (imperial)."""
    return in_to_cm(value) if units == UnitSystem.IMPERIAL else value


def normalize_mass(value: float, units: UnitSystem) -> float:
    """Mass in kilograms, given kg (metric) or pounds (imperial)."""
    return lb_to_kg(value) if units == UnitSystem.IMPERIAL else value


def display_length(cm: float, units: UnitSystem) -> float:
    return cm_to_in(cm) if units == UnitSystem.IMPERIAL else cm


def display_mass(kg: float, units: UnitSystem) -> float:
    return kg_to_lb(kg) if units == UnitSystem.IMPERIAL else kg


def length_unit(units: UnitSystem) -> str:
    return "in" if units == UnitSystem.IMPERIAL else "cm"


def mass_unit(units: UnitSystem) -> str:
    return "lb" if units == UnitSystem.IMPERIAL else "kg"


def convert_length(value: float, source: UnitSystem, target: UnitSystem) -> float:
    return display_length(normalize_length(value, source), target)


def convert_mass(value: float, source: UnitSystem, target: UnitSystem) -> float:
    return display_mass(normalize_mass(value, source), target)


class NormalizedBody(BaseModel):
    """Body measurements after conversion to canonical units."""

    model_config = ConfigDict(frozen=True)

    weight_kg: float
    height_cm: float

    @property
    def height_m(self) -> float:
        return self.height_cm / 100

    @property
    def height_in(self) -> float:
        return cm_to_in(self.height_cm)

    @property
    def weight_lb(self) -> float:
        return kg_to_lb(self.weight_kg)


def normalize_body(weight: float, height: float, units: UnitSystem) -> NormalizedBody:
    return NormalizedBody(
        weight_kg=normalize_mass(weight, units),
        height_cm=normalize_length(height, units),
    )
