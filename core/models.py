"""
Data models for code complexity analysis.

Pydantic models shared by the heuristic classifier and the LLM path.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ComplexityClass(str, Enum):
    """
    Growth class, ordered from cheapest to most expensive.

    The heuristic classifier only ever emits the first five members;
    ``exponential`` exists so model replies using it still validate.
    """

    CONSTANT = "constant"
    LOGARITHMIC = "logarithmic"
    LINEAR = "linear"
    LINEARITHMIC = "linearithmic"
    QUADRATIC = "quadratic"
    EXPONENTIAL = "exponential"

    @property
    def rank(self) -> int:
        """0-based position in the growth ordering."""
        return _ORDER.index(self)

    @property
    def big_o(self) -> str:
        """Canonical Big-O label, exponents written as ``^k``."""
        return _BIG_O[self]


_ORDER = list(ComplexityClass)

_BIG_O = {
    ComplexityClass.CONSTANT: "O(1)",
    ComplexityClass.LOGARITHMIC: "O(log n)",
    ComplexityClass.LINEAR: "O(n)",
    ComplexityClass.LINEARITHMIC: "O(n log n)",
    ComplexityClass.QUADRATIC: "O(n^2)",
    ComplexityClass.EXPONENTIAL: "O(2^n)",
}


class FeatureVector(BaseModel):
    """
    Structural signals found in one piece of source text.

    Every field is a plain count of regex matches, except
    ``logarithmic_loop`` which records whether a halving or
    binary-search shape was seen inside a loop.
    """

    model_config = ConfigDict(frozen=True)

    loop_count: int = Field(default=0, ge=0)
    nested_loop_count: int = Field(default=0, ge=0)
    recursion_count: int = Field(default=0, ge=0)
    sort_call_count: int = Field(default=0, ge=0)
    log_call_count: int = Field(default=0, ge=0)
    array_literal_count: int = Field(default=0, ge=0)
    map_type_count: int = Field(default=0, ge=0)
    set_type_count: int = Field(default=0, ge=0)
    allocation_count: int = Field(default=0, ge=0)
    logarithmic_loop: bool = Field(default=False)

    @property
    def container_count(self) -> int:
        return (
            self.array_literal_count
            + self.map_type_count
            + self.set_type_count
            + self.allocation_count
        )


class AnalysisResult(BaseModel):
    """
    Complexity verdict returned to the presentation layer.

    Field names are the JSON keys the frontend reads, so both the
    heuristic and the LLM backend must produce exactly this shape.
    """

    model_config = ConfigDict(frozen=True)

    timeComplexity: str = Field(..., description="Big-O label with <sup> markup for exponents")
    timeComplexityType: ComplexityClass
    timeExplanation: str
    spaceComplexity: str = Field(..., description="Big-O label with <sup> markup for exponents")
    spaceComplexityType: ComplexityClass
    spaceExplanation: str
    codeRating: int = Field(..., ge=1, le=5, description="1 (poor) to 5 (excellent)")


class AnalysisError(BaseModel):
    """Returned by the LLM path when the model reply is not usable JSON."""

    error: str
    raw: str = ""
