"""
Core Code Complexity Analyzer.

Two backends behind one result shape: a lexical heuristic that runs
locally and a delegated path that asks Gemini for the same verdict.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, Protocol, Union

from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from .classifier import classify_space, classify_time
from .formatting import explain_space, explain_time, rate, superscript
from .models import AnalysisError, AnalysisResult
from .patterns import extract
from .prompts import SYSTEM_PROMPT, build_analysis_prompt
from providers.base import ProviderResponseError

logger = logging.getLogger(__name__)


def classify(source_text: str) -> AnalysisResult:
    """
    Estimate time and space complexity of ``source_text``.

    Pure and synchronous; never raises for string input. Text with no
    recognisable structure classifies as constant/constant.
    """
    text = source_text if isinstance(source_text, str) else str(source_text)

    features = extract(text)
    time_class = classify_time(features)
    space_class = classify_space(features)

    return AnalysisResult(
        timeComplexity=superscript(time_class.big_o),
        timeComplexityType=time_class,
        timeExplanation=explain_time(time_class),
        spaceComplexity=superscript(space_class.big_o),
        spaceComplexityType=space_class,
        spaceExplanation=explain_space(space_class),
        codeRating=rate(time_class, space_class),
    )


class ComplexityBackend(Protocol):
    """Anything that can turn code into a complexity verdict."""

    async def analyze(
        self, code: str, model: Optional[str] = None
    ) -> Union[AnalysisResult, AnalysisError]:
        ...


class HeuristicAnalyzer:
    """
    Backend wrapping the local pattern classifier.

    ``classify`` runs in the worker thread pool, off the event loop.
    """

    async def analyze(self, code: str, model: Optional[str] = None) -> AnalysisResult:
        # model is accepted for interface parity and ignored
        return await run_in_threadpool(classify, code)


class JSONProvider(Protocol):
    async def complete_json(
        self, prompt: str, system_prompt: str, model: Optional[str] = None
    ) -> dict[str, Any]:
        ...


class CodeComplexityAnalyzer:
    """
    Code complexity analyzer using an LLM.

    Takes code as input, returns the same verdict shape as the
    heuristic backend, or an ``AnalysisError`` when the model reply is
    unusable.
    """

    def __init__(self, provider: Optional[JSONProvider] = None):
        self._provider = provider

    def _get_provider(self) -> JSONProvider:
        """Get the configured provider, defaulting to the shared Gemini one."""
        if self._provider is None:
            from providers.gemini_provider import gemini_provider

            self._provider = gemini_provider
        return self._provider

    async def analyze(
        self, code: str, model: Optional[str] = None
    ) -> Union[AnalysisResult, AnalysisError]:
        """
        Analyze code complexity.

        Args:
            code: Source code string to analyze (any language)
            model: Optional model override

        Returns:
            AnalysisResult, or AnalysisError with the raw reply when the
            model did not return a valid verdict

        Raises:
            ProviderUnavailableError: If the provider has no credentials
            ValueError: If code is empty
        """
        if not code or not code.strip():
            raise ValueError("Code cannot be empty")

        provider = self._get_provider()
        prompt = build_analysis_prompt(code.strip())

        try:
            response = await provider.complete_json(
                prompt=prompt,
                system_prompt=SYSTEM_PROMPT,
                model=model,
            )
        except ProviderResponseError as exc:
            logger.warning("Model returned non-JSON content")
            return AnalysisError(error="Gemini returned non-JSON content", raw=exc.raw)

        try:
            return AnalysisResult.model_validate(response)
        except ValidationError as exc:
            logger.warning("Model reply failed validation: %d error(s)", exc.error_count())
            return AnalysisError(
                error="Gemini returned an invalid analysis",
                raw=json.dumps(response),
            )
