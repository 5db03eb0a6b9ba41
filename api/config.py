"""API configuration from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql+asyncpg://stride:stride@db:5432/stride"
    TELEGRAM_BOT_TOKEN: str = ""
    ADMIN_TELEGRAM_ID: int | None = None
    SQL_ECHO: bool = False

    class Config:
        env_file = ".env"
        extra = "allow"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
