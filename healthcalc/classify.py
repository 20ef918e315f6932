"""
Category classification over ordered threshold tables.

Bands are lower-inclusive and upper-exclusive; the topmost band includes its
lower bound and extends to infinity. Tables are validated as total partitions
when constructed, so a finite value always matches exactly one band.
"""

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from healthcalc.domain.models import ThresholdBand, ThresholdTable

SubjectT = TypeVar("SubjectT")


def band(
    lower: float | None, upper: float | None, label: str, description: str = ""
) -> ThresholdBand:
    return ThresholdBand(lower=lower, upper=upper, label=label, description=description)


def table(name: str, *bands: ThresholdBand) -> ThresholdTable:
    return ThresholdTable(name=name, bands=bands)


def ascending(
    name: str,
    cuts: Sequence[float],
    labels: Sequence[str],
    descriptions: Sequence[str] = (),
) -> ThresholdTable:
    """
    Build a table from interior cut points.

    `ascending("x", [10, 20], ["low", "mid", "high"])` yields
    (-inf, 10) low, [10, 20) mid, [20, +inf) high.
    """
    if len(labels) != len(cuts) + 1:
        raise ValueError(f"{name}: need exactly one more label than cut points")
    descriptions = list(descriptions) or [""] * len(labels)
    bounds: list[float | None] = [None, *cuts, None]
    return table(
        name,
        *(
            band(bounds[i], bounds[i + 1], labels[i], descriptions[i])
            for i in range(len(labels))
        ),
    )


def classify(value: float, threshold_table: ThresholdTable) -> ThresholdBand:
    """Return the single band of `threshold_table` containing `value`."""
    if not math.isfinite(value):
        raise ValueError(f"Cannot classify non-finite value {value!r}")
    for candidate in threshold_table.bands:
        if candidate.contains(value):
            return candidate
    # Unreachable for a validated table
    raise ValueError(f"{threshold_table.name}: no band contains {value}")


@dataclass(frozen=True)
class Rule(Generic[SubjectT]):
    """One rule of a multi-dimensional classifier."""

    label: str
    matches: Callable[[SubjectT], bool]
    description: str = ""


def first_match(subject: SubjectT, rules: Sequence[Rule[SubjectT]]) -> Rule[SubjectT]:
    """
    Evaluate rules in order and return the first that matches.

    The final rule must be a catch-all; classifiers built this way are total.
    """
    for rule in rules:
        if rule.matches(subject):
            return rule
    raise ValueError("Rule list has no catch-all rule")
