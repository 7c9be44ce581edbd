from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized runtime configuration loaded from environment variables.
    """

    REVIEWS_API_URL: str = "http://localhost:3000"
    REVIEWS_API_TIMEOUT: float = 10.0
    API_PREFIX: str = "/api"
    APP_NAME: str = "Review Admin API"
    ALLOWED_ORIGINS: list[str] = ["*"]
    DEFAULT_PAGE_SIZE: int = 10
    PAGE_SIZE_OPTIONS: list[int] = [10, 25, 50]
    MODAL_CLOSE_DELAY: float = 0.3
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
