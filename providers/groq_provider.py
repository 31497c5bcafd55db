"""
Groq LLM provider used by the batch review script.

Talks to the OpenAI-compatible chat-completions endpoint with JSON mode.
Rate limits (429), server errors and network failures are retried with
tenacity; a 429 waits for the server's ``Retry-After`` when it sends one.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from app.config import logger, settings

from .base import ProviderError, ProviderUnavailableError, extract_json


# Longest server-requested pause honoured before retrying a 429.
MAX_RETRY_AFTER_SECONDS = 30.0

_backoff = wait_exponential(multiplier=1, min=1, max=10)


class GroqAPIError(ProviderError):
    """Exception for Groq API errors."""


class GroqRateLimitError(GroqAPIError):
    """Groq answered 429; ``retry_after`` is the requested pause in seconds."""

    def __init__(self, message: str, retry_after: Optional[float] = None):
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


def _retry_after(response: httpx.Response) -> Optional[float]:
    value = response.headers.get("retry-after")
    if value is None:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        # HTTP-date form; fall back to exponential backoff
        return None


def _is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, (httpx.TimeoutException, httpx.NetworkError)):
        return True
    if isinstance(exc, GroqAPIError):
        return exc.status_code == 429 or (exc.status_code or 0) >= 500
    return False


def _wait(retry_state: RetryCallState) -> float:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    if isinstance(exc, GroqRateLimitError) and exc.retry_after is not None:
        return min(exc.retry_after, MAX_RETRY_AFTER_SECONDS)
    return _backoff(retry_state)


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
    if isinstance(exc, GroqRateLimitError):
        logger.warning(
            "Groq rate limited (attempt %d); retrying in %.1fs",
            retry_state.attempt_number,
            delay,
        )
    else:
        logger.warning(
            "Groq request failed (attempt %d): %s; retrying in %.1fs",
            retry_state.attempt_number,
            exc,
            delay,
        )


class GroqProvider:
    """
    Groq LLM provider with JSON mode support.

    ``usage`` accumulates token counts over every completed request so
    the review script can report what a run cost.
    """

    BASE_URL = "https://api.groq.com/openai/v1/chat/completions"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        """
        Initialize Groq provider.

        Raises:
            ProviderUnavailableError: If GROQ_API_KEY not set
        """
        self.api_key = api_key or settings.GROQ_API_KEY
        if not self.api_key:
            raise ProviderUnavailableError(
                "GROQ_API_KEY environment variable not set. "
                "Get your key from https://console.groq.com"
            )
        self.model = model or settings.GROQ_MODEL
        self.usage = {"requests": 0, "prompt_tokens": 0, "completion_tokens": 0}
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(60.0),
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
            )
        return self._client

    async def close(self):
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.status_code == 200:
            return

        error_detail = response.text
        try:
            error_detail = response.json().get("error", {}).get("message", error_detail)
        except (ValueError, AttributeError):
            pass
        message = f"API error ({response.status_code}): {error_detail}"

        if response.status_code == 429:
            raise GroqRateLimitError(message, retry_after=_retry_after(response))
        raise GroqAPIError(message, status_code=response.status_code)

    def _record_usage(self, data: dict[str, Any]) -> None:
        usage = data.get("usage") or {}
        self.usage["requests"] += 1
        self.usage["prompt_tokens"] += int(usage.get("prompt_tokens") or 0)
        self.usage["completion_tokens"] += int(usage.get("completion_tokens") or 0)

    @retry(
        stop=stop_after_attempt(3),
        wait=_wait,
        retry=retry_if_exception(_is_retryable),
        before_sleep=_log_retry,
        reraise=True,
    )
    async def _make_request(
        self,
        messages: list[dict[str, str]],
    ) -> dict[str, Any]:
        """
        Make API request to Groq with JSON mode enabled.

        Args:
            messages: Chat messages

        Returns:
            API response dict

        Raises:
            GroqRateLimitError: If still rate limited after the last attempt
            GroqAPIError: On any other non-200 reply
        """
        client = await self._get_client()

        payload = {
            "model": self.model,
            "messages": messages,
            "max_tokens": 2048,
            "temperature": 0.1,
            "response_format": {"type": "json_object"},
        }

        response = await client.post(self.BASE_URL, json=payload)
        self._raise_for_status(response)

        data = response.json()
        self._record_usage(data)
        logger.debug(
            "Groq reply: model=%s prompt_tokens=%s completion_tokens=%s",
            self.model,
            (data.get("usage") or {}).get("prompt_tokens"),
            (data.get("usage") or {}).get("completion_tokens"),
        )
        return data

    async def complete_json(
        self,
        prompt: str,
        system_prompt: str,
    ) -> dict[str, Any]:
        """
        Get JSON completion from Groq.

        Args:
            prompt: User prompt
            system_prompt: System prompt

        Returns:
            Parsed JSON dict

        Raises:
            GroqAPIError: If the API call fails
            ProviderResponseError: If the reply holds no JSON object
        """
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": prompt},
        ]

        response = await self._make_request(messages)
        content = response["choices"][0]["message"]["content"] or ""
        return extract_json(content.strip())
