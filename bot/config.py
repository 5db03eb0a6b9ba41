"""Bot configuration from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    TELEGRAM_BOT_TOKEN: str = ""
    API_BASE_URL: str = "http://api:8000"
    REDIS_URL: str = "redis://redis:6379/0"
    SUBMISSION_TIMEOUT_SEC: float = 15.0
    ONBOARDING_BACKUP_TTL_SEC: int = 7 * 24 * 60 * 60

    class Config:
        env_file = ".env"
        extra = "allow"


settings = Settings()
