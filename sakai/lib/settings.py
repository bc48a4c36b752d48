"""Application settings loaded from the environment."""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, cast

from litestar.data_extractors import RequestExtractorField

from sakai.utils.env import get_env

if TYPE_CHECKING:
    from collections.abc import Callable

    from litestar.data_extractors import ResponseExtractorField

DEFAULT_MODULE_NAME = "sakai"
BASE_DIR = Path(__file__).parent.parent


@dataclass
class GenAISettings:
    """Google GenAI configuration settings."""

    API_KEY: str = field(default_factory=get_env("GEMINI_API_KEY", ""))
    """Gemini Developer API key. Ignored when ``PROJECT_ID`` is set."""
    PROJECT_ID: str = field(default_factory=get_env("VERTEX_AI_PROJECT_ID", ""))
    """Google Cloud Project ID. When set, requests go through Vertex AI."""
    LOCATION: str = field(default_factory=get_env("VERTEX_AI_LOCATION", "us-central1"))
    """Vertex AI location/region."""
    CHAT_MODEL: str = field(default_factory=get_env("GENAI_CHAT_MODEL", "gemini-2.5-flash"))
    """Model used for chat streaming and the text flows."""
    IMAGE_MODEL: str = field(
        default_factory=get_env("GENAI_IMAGE_MODEL", "gemini-2.0-flash-preview-image-generation"),
    )
    """Model used for image generation."""
    DEFAULT_TEMPERATURE: float = field(default_factory=get_env("GENAI_DEFAULT_TEMPERATURE", 0.7))
    """Chat temperature when the request does not carry one."""


@dataclass
class LogSettings:
    """Logger configuration."""

    LEVEL: int = field(default_factory=get_env("LOG_LEVEL", 20))
    """Stdlib log levels.

    Only emit logs at this level, or higher.
    """
    REQUEST_FIELDS: list[RequestExtractorField] = field(
        default_factory=get_env(
            "LOG_REQUEST_FIELDS",
            [
                "path",
                "method",
                "query",
                "path_params",
            ],
            list[RequestExtractorField],
        ),
    )
    """Attributes of the Request to be logged."""
    RESPONSE_FIELDS: list[ResponseExtractorField] = field(
        default_factory=cast(
            "Callable[[],list[ResponseExtractorField]]",
            get_env(
                "LOG_RESPONSE_FIELDS",
                ["status_code"],
            ),
        ),
    )
    """Attributes of the Response to be logged."""
    GENAI_LEVEL: int = field(default_factory=get_env("GENAI_LOG_LEVEL", 30))
    """Level to log google-genai and httpx logs."""
    ASGI_ACCESS_LEVEL: int = field(default_factory=get_env("ASGI_ACCESS_LOG_LEVEL", 30))
    """Level to log granian access logs."""
    ASGI_ERROR_LEVEL: int = field(default_factory=get_env("ASGI_ERROR_LOG_LEVEL", 30))
    """Level to log granian error logs."""


@dataclass
class AppSettings:
    """Application configuration."""

    NAME: str = field(default_factory=lambda: "Sakai")
    """Application name."""
    VERSION: str = field(default="0.1.0")
    """Current application version."""
    DEBUG: bool = field(default_factory=get_env("DEBUG", False))
    """Run application with debug mode."""
    ALLOWED_CORS_ORIGINS: list[str] | str = field(default_factory=get_env("ALLOWED_CORS_ORIGINS", ["*"], list[str]))
    """Allowed CORS Origins"""

    def __post_init__(self) -> None:
        if isinstance(self.ALLOWED_CORS_ORIGINS, str):
            if self.ALLOWED_CORS_ORIGINS.startswith("[") and self.ALLOWED_CORS_ORIGINS.endswith("]"):
                try:
                    self.ALLOWED_CORS_ORIGINS = json.loads(self.ALLOWED_CORS_ORIGINS)  # pyright: ignore[reportConstantRedefinition]
                except (SyntaxError, ValueError):
                    msg = "ALLOWED_CORS_ORIGINS is not a valid list representation."
                    raise ValueError(msg) from None
            else:
                self.ALLOWED_CORS_ORIGINS = [host.strip() for host in self.ALLOWED_CORS_ORIGINS.split(",")]  # pyright: ignore[reportConstantRedefinition]


@dataclass
class Settings:
    """Main application settings."""

    app: AppSettings = field(default_factory=AppSettings)
    genai: GenAISettings = field(default_factory=GenAISettings)
    log: LogSettings = field(default_factory=LogSettings)

    @classmethod
    @lru_cache(maxsize=1, typed=True)
    def from_env(cls, dotenv_filename: str = ".env") -> Settings:
        from dotenv import load_dotenv

        env_file = Path(f"{os.curdir}/{dotenv_filename}")
        if env_file.is_file():
            load_dotenv(env_file, override=True)

        try:
            app: AppSettings = AppSettings()
            genai: GenAISettings = GenAISettings()
            log: LogSettings = LogSettings()
        except (ValueError, TypeError, KeyError) as e:
            import structlog

            logger = structlog.get_logger()
            logger.fatal("Could not load settings", error=str(e))
            sys.exit(1)

        return Settings(app=app, genai=genai, log=log)


def get_settings(dotenv_filename: str = ".env") -> Settings:
    """Get application settings."""
    return Settings.from_env(dotenv_filename)
