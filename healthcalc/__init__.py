"""Health and fitness calculators with a uniform validate-then-compute pipeline."""

__version__ = "0.1.0"
