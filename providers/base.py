"""
Errors and JSON helpers shared by the LLM providers.
"""

from __future__ import annotations

import json
import re
from typing import Any, Optional


class ProviderError(Exception):
    """Base exception for LLM provider failures."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ProviderUnavailableError(ProviderError):
    """Provider has no credentials or client configured."""


class ProviderResponseError(ProviderError):
    """Model replied, but not with a usable JSON object."""

    def __init__(self, message: str, raw: str = ""):
        self.raw = raw
        super().__init__(message)


_JSON_PATTERNS = [
    r"```json\s*\n?(.*?)\n?```",
    r"```\s*\n?(.*?)\n?```",
    r"\{[\s\S]*\}",
]


def extract_json(text: str) -> dict[str, Any]:
    """
    Extract a JSON object from a model reply.

    Tries a direct parse first, then a fenced markdown block, then the
    outermost ``{...}`` span.

    Raises:
        ProviderResponseError: If no JSON object can be recovered
    """
    try:
        data = json.loads(text)
        if isinstance(data, dict):
            return data
    except json.JSONDecodeError:
        pass

    for pattern in _JSON_PATTERNS:
        match = re.search(pattern, text, re.DOTALL)
        if not match:
            continue
        json_str = match.group(1) if "```" in pattern else match.group(0)
        try:
            data = json.loads(json_str.strip())
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data

    raise ProviderResponseError("Model returned non-JSON content", raw=text)
