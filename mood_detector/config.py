"""
Settings for the Mood Detector service and CLI.

Values come from ``MOOD_DETECTOR_*`` environment variables or a ``.env``
file in the working directory.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .flourish import DEFAULT_FLOURISH_SECONDS, FlourishPolicy


class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False
    log_level: str = "info"

    base_url: str = "http://localhost:8000"

    flourish_seconds: float = Field(DEFAULT_FLOURISH_SECONDS, gt=0)
    flourish_policy: FlourishPolicy = "debounce"

    model_config = SettingsConfigDict(
        env_prefix="MOOD_DETECTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
