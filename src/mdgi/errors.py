# src/mdgi/errors.py
from __future__ import annotations


class MDGIError(Exception):
    """Base class for every failure raised by the MDGI pipeline."""


class InvalidInput(MDGIError, ValueError):
    """Malformed tensor: wrong rank, empty mode, non-finite or negative entries."""


class InvalidParameter(MDGIError, ValueError):
    """delta / beta (or an ALS knob) outside its admissible range."""


class DecompositionFailure(MDGIError, ArithmeticError):
    """No ALS restart improved on the all-zero rank-1 solution."""


class DegenerateWeights(MDGIError, ArithmeticError):
    """Variable weights sum to zero, so they cannot be normalized."""


class DegenerateReference(MDGIError, ArithmeticError):
    """Reference mean well-being is zero, so Gini ratios are undefined."""
