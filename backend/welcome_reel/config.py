"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """WelcomeReel application settings.

    Loaded from environment variables or .env file.
    """

    # --- Application ---
    APP_NAME: str = "WelcomeReel"
    DEBUG: bool = False
    CORS_ORIGINS: str = "http://localhost:5173,http://localhost:3000,http://127.0.0.1:3000"

    # --- Gemini / Veo ---
    GEMINI_API_KEY: str = Field(
        default="",
        validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY"),
    )
    VEO_MODEL: str = "veo-3.1-generate-preview"
    VEO_RESOLUTION: str = "720p"
    VEO_POLL_INTERVAL: float = 5.0
    VEO_POLL_TIMEOUT: float | None = None  # unset = poll until the job finishes

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings singleton."""
    return Settings()
