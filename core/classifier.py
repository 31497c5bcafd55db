"""
Rule table mapping a feature vector to time and space classes.
"""

from __future__ import annotations

from .models import ComplexityClass, FeatureVector


def _base_time(fv: FeatureVector) -> ComplexityClass:
    # Worst structural signal wins; order matters.
    if fv.nested_loop_count > 0:
        return ComplexityClass.QUADRATIC
    if fv.sort_call_count > 0 or (fv.loop_count > 0 and fv.log_call_count > 0):
        return ComplexityClass.LINEARITHMIC
    if fv.recursion_count > 0 and fv.loop_count == 0:
        return ComplexityClass.LINEAR
    if fv.loop_count > 0:
        return ComplexityClass.LINEAR
    if fv.log_call_count > 0:
        return ComplexityClass.LOGARITHMIC
    return ComplexityClass.CONSTANT


def classify_time(fv: FeatureVector) -> ComplexityClass:
    """
    Time class for a feature vector.

    A single (non-nested) loop that halves its range is forced to
    logarithmic, whatever the base rules said.
    """
    time_class = _base_time(fv)
    if fv.nested_loop_count == 0 and fv.loop_count > 0 and fv.logarithmic_loop:
        return ComplexityClass.LOGARITHMIC
    return time_class


def classify_space(fv: FeatureVector) -> ComplexityClass:
    """Space class: containers or recursion depth make it linear."""
    if fv.container_count >= 2:
        return ComplexityClass.LINEAR
    if fv.recursion_count > 0:
        return ComplexityClass.LINEAR
    return ComplexityClass.CONSTANT
