from pydantic_settings import BaseSettings, SettingsConfigDict


class DBSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # файл создаётся при первом старте, если его нет
    SYNC_DATABASE_URL: str = "sqlite:///./transactionsData.db"


settings = DBSettings()
