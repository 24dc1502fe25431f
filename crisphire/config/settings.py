"""
Application settings and configuration management.

Uses pydantic-settings for environment variable loading.
"""

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "CrispHire"
    app_version: str = "0.1.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # Gemini (Generative Language REST API)
    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    default_model: str = "gemini-pro"
    llm_timeout_seconds: float = 60.0

    # Models offered on the interviewer dashboard, comma-separated in env
    available_models_str: str = Field(
        default=(
            "gemini-pro,gemini-1.5-flash-latest,gemini-1.5-pro-latest,"
            "gemini-2.5-flash,gemini-2.5-pro"
        ),
        validation_alias="available_models",
    )

    # Langfuse tracing
    langfuse_enabled: bool = False
    langfuse_public_key: str = ""
    langfuse_secret_key: str = ""
    langfuse_base_url: str = "https://cloud.langfuse.com"

    # TTS configuration (edge-tts)
    tts_voice: str = "professional"

    # Interview settings
    opening_question: str = (
        "Thank you. To begin, could you please tell me a little bit "
        "about yourself and your experience?"
    )
    countdown_tick_seconds: float = 1.0

    # CORS - stored as comma-separated string in env
    cors_origins_str: str = Field(
        default="http://localhost:5173,http://localhost:8000",
        validation_alias="cors_origins"
    )

    @computed_field
    @property
    def available_models(self) -> list[str]:
        """Parse the model list from comma-separated string."""
        return [m.strip() for m in self.available_models_str.split(",") if m.strip()]

    @computed_field
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
