"""
Configuration for the Code Complexity Analyzer backend.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=3001)
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    # CORS
    ALLOWED_ORIGINS: str = Field(default="http://localhost:3000,http://localhost:5173")

    # Request limits
    MAX_REQUEST_SIZE: int = Field(default=1_048_576)  # 1 MB
    MAX_CODE_LENGTH: int = Field(default=50_000)

    # Gemini (delegated analysis path)
    GEMINI_API_KEY: str = Field(default="")
    GEMINI_MODEL: str = Field(default="gemini-2.5-flash-lite")
    MAX_TOKENS: int = Field(default=1024)
    TEMPERATURE: float = Field(default=0.1)  # Low for consistent JSON output
    GEMINI_TIMEOUT_SECONDS: int = Field(default=30)

    # Groq (batch review script)
    GROQ_API_KEY: str = Field(default="")
    GROQ_MODEL: str = Field(default="meta-llama/llama-4-scout-17b-16e-instruct")
    AI_MAX_CHARS_PER_CHUNK: int = Field(default=8000)

    @property
    def cors_origins(self) -> list[str]:
        origins = [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]
        if "*" in origins:
            return ["*"]
        return origins


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()


# Logging setup
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("google").setLevel(logging.WARNING)

logger = logging.getLogger("complexity-analyzer")
