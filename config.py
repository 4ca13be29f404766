"""Application configuration using Pydantic settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """Settings loaded from environment variables (and an optional .env)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "SBS Report"
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 3000

    db_path: Path = Field(default=BASE_DIR / "data" / "sbs.db")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
