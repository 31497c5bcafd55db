"""LLM providers used by the delegated analysis path and the review script."""

from .base import (
    ProviderError,
    ProviderResponseError,
    ProviderUnavailableError,
    extract_json,
)

__all__ = [
    "ProviderError",
    "ProviderResponseError",
    "ProviderUnavailableError",
    "extract_json",
]
