"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (.env file).
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "BIG3 Trainer - strength scoring and local training log."
    VERSION: str = "0.1.0"
    AUTHORS: List[str] = ["BIG3 Trainer contributors"]
    PROJECT_URL: str = "https://github.com/big3-trainer/big3-trainer"

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Durable medium for the record store
    DATABASE_URL: str = "sqlite:///./big3.db"
    STORE_KEY_PREFIX: str = "b3_"

    # Progression
    STRICT_ONE_REP_MAX: bool = True  # only completed sets feed the 1RM auto-update
    DAILY_KCAL_TARGET: int = 2800

    # Text-generation collaborators (OpenAI-compatible endpoint)
    LLM_API_KEY: str = ""
    LLM_BASE_URL: str = "https://api.groq.com/openai/v1"
    LLM_TIMEOUT_SECONDS: float = 60.0
    CHAT_MODEL: str = "llama-3.3-70b-versatile"
    CHAT_MAX_TOKENS: int = 1024
    NUTRITION_MODEL: str = "llama-3.1-8b-instant"
    NUTRITION_MAX_TOKENS: int = 200

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


# Global settings instance
settings = Settings()
