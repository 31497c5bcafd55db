"""
Explanations, rating and display formatting for complexity verdicts.
"""

from __future__ import annotations

import re

from .models import ComplexityClass

TIME_EXPLANATIONS = {
    ComplexityClass.CONSTANT: "No heavy loops or recursion detected; likely O(1) in the dominant path.",
    ComplexityClass.LOGARITHMIC: (
        "Found logarithmic-like operations (e.g., division by 2, binary search) suggesting O(log n)."
    ),
    ComplexityClass.LINEAR: "Detected single-pass iteration indicating O(n) time.",
    ComplexityClass.LINEARITHMIC: (
        "Combination of iteration and logarithmic operations "
        "(e.g., sorting or binary search) suggests O(n log n)."
    ),
    ComplexityClass.QUADRATIC: "Detected nested iteration patterns suggesting O(n^2) behavior.",
    ComplexityClass.EXPONENTIAL: "Branching recursion suggests O(2^n) growth.",
}

SPACE_EXPLANATIONS = {
    ComplexityClass.CONSTANT: "No significant auxiliary structures; likely O(1) extra space.",
    ComplexityClass.LOGARITHMIC: "Auxiliary space grows with the logarithm of the input, O(log n).",
    ComplexityClass.LINEAR: "Data structures or recursion depth scale with input size, yielding O(n) space.",
    ComplexityClass.LINEARITHMIC: "Auxiliary space grows as O(n log n).",
    ComplexityClass.QUADRATIC: "Auxiliary structures grow with the square of the input, O(n^2).",
    ComplexityClass.EXPONENTIAL: "Auxiliary space grows exponentially with the input, O(2^n).",
}

_EXPONENT = re.compile(r"\^(\w+)")


def explain_time(time_class: ComplexityClass) -> str:
    return TIME_EXPLANATIONS[time_class]


def explain_space(space_class: ComplexityClass) -> str:
    return SPACE_EXPLANATIONS[space_class]


def rate(time_class: ComplexityClass, space_class: ComplexityClass) -> int:
    """
    Score a verdict from 1 (worst) to 5 (best).

    The worse of the two classes decides: ``5 - max(rank)`` clamped to
    the 1..5 range.
    """
    worst = max(time_class.rank, space_class.rank)
    return min(5, max(1, 5 - worst))


def superscript(label: str) -> str:
    """Render ``^k`` exponents as ``<sup>k</sup>``, e.g. ``O(n^2)``."""
    return _EXPONENT.sub(r"<sup>\1</sup>", label)
