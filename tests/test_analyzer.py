import json

import pytest
from pydantic import ValidationError

from core.analyzer import CodeComplexityAnalyzer, HeuristicAnalyzer, classify
from core.models import AnalysisError, AnalysisResult, ComplexityClass
from providers.base import ProviderResponseError, ProviderUnavailableError
from tests import samples


def test_empty_input_is_constant():
    result = classify(samples.EMPTY)
    assert result.timeComplexityType == ComplexityClass.CONSTANT
    assert result.spaceComplexityType == ComplexityClass.CONSTANT
    assert result.timeComplexity == "O(1)"
    assert result.codeRating == 5


def test_two_sequential_loops():
    result = classify(samples.TWO_SEQUENTIAL_LOOPS)
    assert result.timeComplexityType == ComplexityClass.LINEAR
    assert result.spaceComplexityType == ComplexityClass.CONSTANT
    assert result.codeRating == 3


@pytest.mark.parametrize("text", [samples.FACTORIAL_JS, samples.FACTORIAL_PY])
def test_recursive_factorial(text):
    result = classify(text)
    assert result.timeComplexityType == ComplexityClass.LINEAR
    assert result.spaceComplexityType == ComplexityClass.LINEAR
    assert result.spaceComplexity == "O(n)"
    assert result.codeRating == 3


def test_sort_inside_loop_is_linearithmic():
    result = classify(samples.SORT_IN_LOOP)
    assert result.timeComplexityType == ComplexityClass.LINEARITHMIC
    assert result.timeComplexity == "O(n log n)"
    assert result.codeRating == 2


def test_nested_loop_beats_sort_call():
    result = classify(samples.NESTED_LOOPS_WITH_SORT)
    assert result.timeComplexityType == ComplexityClass.QUADRATIC
    assert result.timeComplexity == "O(n<sup>2</sup>)"
    assert result.codeRating == 1


@pytest.mark.parametrize(
    "text",
    [samples.BINARY_SEARCH_JS, samples.BINARY_SEARCH_PY, samples.HALVING_WHILE, samples.SHIFT_WHILE],
)
def test_halving_loops_are_logarithmic(text):
    result = classify(text)
    assert result.timeComplexityType == ComplexityClass.LOGARITHMIC
    assert result.timeComplexity == "O(log n)"
    assert result.codeRating == 4


def test_log_call_without_loop():
    assert classify(samples.LOG_ONLY).timeComplexityType == ComplexityClass.LOGARITHMIC


def test_log_call_in_loop():
    assert classify(samples.LOOP_WITH_LOG).timeComplexityType == ComplexityClass.LINEARITHMIC


def test_console_log_does_not_add_log_factor():
    assert classify(samples.LOOP_WITH_CONSOLE_LOG).timeComplexityType == ComplexityClass.LINEAR


def test_containers_make_space_linear():
    result = classify(samples.DEDUPE)
    assert result.timeComplexityType == ComplexityClass.LINEAR
    assert result.spaceComplexityType == ComplexityClass.LINEAR
    assert result.spaceExplanation.endswith("yielding O(n) space.")


def test_classification_is_idempotent():
    first = classify(samples.BINARY_SEARCH_PY)
    second = classify(samples.BINARY_SEARCH_PY)
    assert first == second
    assert first.model_dump_json() == second.model_dump_json()


@pytest.mark.parametrize("value", [12345, None, b"for (;;) {}"])
def test_non_string_input_is_coerced(value):
    result = classify(value)
    assert 1 <= result.codeRating <= 5


def test_result_json_uses_frontend_keys():
    data = json.loads(classify(samples.NESTED_LOOPS).model_dump_json())
    assert data == {
        "timeComplexity": "O(n<sup>2</sup>)",
        "timeComplexityType": "quadratic",
        "timeExplanation": "Detected nested iteration patterns suggesting O(n^2) behavior.",
        "spaceComplexity": "O(1)",
        "spaceComplexityType": "constant",
        "spaceExplanation": "No significant auxiliary structures; likely O(1) extra space.",
        "codeRating": 1,
    }


def test_result_is_frozen():
    result = classify(samples.EMPTY)
    with pytest.raises(ValidationError):
        result.codeRating = 1


async def test_heuristic_backend_matches_classify():
    backend = HeuristicAnalyzer()
    assert await backend.analyze(samples.DEDUPE, model="ignored") == classify(samples.DEDUPE)


VALID_REPLY = {
    "timeComplexity": "O(log n)",
    "timeComplexityType": "logarithmic",
    "timeExplanation": "Binary search halves the range.",
    "spaceComplexity": "O(1)",
    "spaceComplexityType": "constant",
    "spaceExplanation": "Only a few indices.",
    "codeRating": 5,
}


class FakeProvider:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def complete_json(self, prompt, system_prompt, model=None):
        self.calls.append({"prompt": prompt, "system_prompt": system_prompt, "model": model})
        if self.error:
            raise self.error
        return self.reply


async def test_model_backend_returns_result():
    provider = FakeProvider(reply=VALID_REPLY)
    result = await CodeComplexityAnalyzer(provider).analyze(samples.BINARY_SEARCH_PY, model="gemini-x")

    assert isinstance(result, AnalysisResult)
    assert result.timeComplexityType == ComplexityClass.LOGARITHMIC
    assert provider.calls[0]["model"] == "gemini-x"
    assert "binary_search" in provider.calls[0]["prompt"]


async def test_model_backend_accepts_exponential():
    reply = {**VALID_REPLY, "timeComplexity": "O(2^n)", "timeComplexityType": "exponential", "codeRating": 1}
    result = await CodeComplexityAnalyzer(FakeProvider(reply=reply)).analyze("fib(n-1) + fib(n-2)")
    assert result.timeComplexityType == ComplexityClass.EXPONENTIAL


async def test_model_backend_non_json_reply():
    provider = FakeProvider(error=ProviderResponseError("bad", raw="I think it is O(n)"))
    result = await CodeComplexityAnalyzer(provider).analyze("x = 1")

    assert isinstance(result, AnalysisError)
    assert result.error == "Gemini returned non-JSON content"
    assert result.raw == "I think it is O(n)"


async def test_model_backend_invalid_reply():
    reply = {**VALID_REPLY, "codeRating": 9}
    result = await CodeComplexityAnalyzer(FakeProvider(reply=reply)).analyze("x = 1")

    assert isinstance(result, AnalysisError)
    assert json.loads(result.raw)["codeRating"] == 9


async def test_model_backend_rejects_empty_code():
    with pytest.raises(ValueError):
        await CodeComplexityAnalyzer(FakeProvider(reply=VALID_REPLY)).analyze("   ")


async def test_model_backend_propagates_missing_key():
    provider = FakeProvider(error=ProviderUnavailableError("Missing GEMINI_API_KEY"))
    with pytest.raises(ProviderUnavailableError):
        await CodeComplexityAnalyzer(provider).analyze("x = 1")
