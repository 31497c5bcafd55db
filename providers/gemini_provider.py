"""
Gemini LLM provider for the delegated complexity analysis path.
"""
from __future__ import annotations

import asyncio
from typing import Any, Optional

from google import genai
from google.genai import types
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.config import logger, settings

from .base import ProviderUnavailableError, extract_json


class GeminiProvider:
    """
    Gemini provider returning parsed JSON replies.

    The client is only created when ``GEMINI_API_KEY`` is configured;
    calls made without it raise ``ProviderUnavailableError``.
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self._api_key = settings.GEMINI_API_KEY if api_key is None else api_key
        self._client: genai.Client | None = None
        self._model = model or settings.GEMINI_MODEL
        self._initialize()

    def _initialize(self) -> None:
        """Initialize Gemini client."""
        if not self._api_key:
            logger.warning("GEMINI_API_KEY not set; Gemini analysis will fail until provided")
            return

        try:
            self._client = genai.Client(api_key=self._api_key)
            logger.info("Gemini client initialized (model=%s)", self._model)
        except Exception as exc:
            logger.error("Failed to initialize Gemini client: %s", exc)

    def is_available(self) -> bool:
        """Check if provider is available."""
        return self._client is not None

    def get_model_name(self) -> str:
        return self._model

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=4),
        retry=retry_if_exception_type((TimeoutError, ConnectionError)),
        reraise=True,
    )
    async def _generate(self, prompt: str, system_prompt: str, model: str) -> str:
        try:
            response = await asyncio.wait_for(
                self._client.aio.models.generate_content(
                    model=model,
                    contents=[types.Content(role="user", parts=[types.Part(text=prompt)])],
                    config=types.GenerateContentConfig(
                        system_instruction=system_prompt,
                        temperature=settings.TEMPERATURE,
                        max_output_tokens=settings.MAX_TOKENS,
                        response_mime_type="application/json",
                    ),
                ),
                timeout=settings.GEMINI_TIMEOUT_SECONDS,
            )
        except asyncio.TimeoutError as exc:
            logger.error("Gemini API timeout after %ds", settings.GEMINI_TIMEOUT_SECONDS)
            raise TimeoutError(
                f"Analysis timed out after {settings.GEMINI_TIMEOUT_SECONDS}s"
            ) from exc

        return response.text or ""

    async def complete_json(
        self,
        prompt: str,
        system_prompt: str,
        model: Optional[str] = None,
    ) -> dict[str, Any]:
        """
        Get a JSON completion from Gemini.

        Args:
            prompt: User prompt
            system_prompt: System instruction
            model: Optional model override for this call

        Returns:
            Parsed JSON dict

        Raises:
            ProviderUnavailableError: If no API key is configured
            ProviderResponseError: If the reply holds no JSON object
        """
        if not self._client:
            raise ProviderUnavailableError("Missing GEMINI_API_KEY (or Gemini client not configured)")

        text = await self._generate(prompt, system_prompt, model or self._model)
        logger.debug("Raw Gemini response: %s...", text[:500])
        return extract_json(text)


# Global provider instance
gemini_provider = GeminiProvider()
