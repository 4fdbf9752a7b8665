from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FORMRULES_", env_file=".env", extra="ignore")

    # Uniqueness lookups
    DATABASE_URL: str = "sqlite+aiosqlite:///./formrules.db"
    UNIQUE_ID_COLUMN: str = "id"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for production (structured JSON), False for dev (colored)
    LOG_SQL: bool = False   # Enable SQLAlchemy query logging


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
