"""
Pydantic models for the Code Complexity Analyzer API.
"""
from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, Field, StrictStr, field_validator

from app.config import settings
from core.models import AnalysisError, AnalysisResult


class AnalyzeRequest(BaseModel):
    """Request payload for code analysis."""
    code: StrictStr = Field(
        default="",
        validate_default=True,
        max_length=settings.MAX_CODE_LENGTH,
        description="Source code to analyze",
    )
    model: Optional[str] = Field(default=None, max_length=100, description="Model override (AI path only)")

    @field_validator("code")
    @classmethod
    def validate_code(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("code is required")
        return v


class HeuristicResponse(BaseModel):
    """Heuristic verdict, serialised as a JSON string for the frontend."""
    result: str = Field(..., description="AnalysisResult encoded as JSON")


class AIResponse(BaseModel):
    """Model-path verdict, or the error shape when the reply was not JSON."""
    result: Union[AnalysisResult, AnalysisError]


class ErrorResponse(BaseModel):
    """Error response."""
    error: str = Field(..., description="Error message")
    message: Optional[str] = Field(default=None, description="Additional error details")


class ClientErrorResponse(BaseModel):
    """Rejected request."""
    message: str
