from __future__ import annotations

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Настройки приложения. Читаются из окружения и .env."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_TITLE: str = "Transactions API"
    APP_VERSION: str = "0.1.0"

    # Источник данных для /initialize-database
    SEED_DATA_URL: str = Field(
        default="https://s3.amazonaws.com/roxiler.com/product_transaction.json"
    )
    SEED_REQUEST_TIMEOUT: int = Field(default=30, ge=1)

    API_HOST: str = "0.0.0.0"
    API_PORT: int = 3004

    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    LOG_LEVEL: str = "INFO"


settings = AppSettings()
