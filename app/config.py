"""Agro backend — Configuration via pydantic-settings."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Database
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "agro_market"
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = 5000

    # Security
    BCRYPT_ROUNDS: int = 10

    # AI
    GEMINI_API_KEY: str = ""
    GEMINI_STABLE_MODEL: str = "gemini-2.5-flash"
    GEMINI_PREVIEW_MODEL: str = "gemini-3-flash-preview"
    GEMINI_TEMPERATURE: float = 0.4

    # HTTP
    CORS_ORIGINS: list[str] = ["*"]
    PORT: int = 5000

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
