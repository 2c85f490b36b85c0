import logging
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="RECIPE_API_", env_file=".env", extra="ignore"
    )

    database_url: str = "sqlite:///./recipes.db"
    external_api_base_url: str = "https://dummyjson.com"
    external_api_timeout: float = 30.0
    external_api_max_attempts: int = 3
    external_api_retry_delay: float = 1.0
    load_on_startup: bool = True
    cors_origins: List[str] = ["http://localhost:4200"]
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
