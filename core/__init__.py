"""Core module for code complexity analysis."""

from .models import AnalysisError, AnalysisResult, ComplexityClass, FeatureVector
from .analyzer import (
    CodeComplexityAnalyzer,
    ComplexityBackend,
    HeuristicAnalyzer,
    classify,
)

__all__ = [
    "AnalysisError",
    "AnalysisResult",
    "ComplexityClass",
    "FeatureVector",
    "CodeComplexityAnalyzer",
    "ComplexityBackend",
    "HeuristicAnalyzer",
    "classify",
]
