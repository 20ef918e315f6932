"""Pure closed-form formulas. Canonical units in, plain floats out."""

import math


def half_up(value: float) -> int:
    """Round halves away from zero for positive values (5.5 -> 6), unlike round()."""
    return math.floor(value + 0.5)
