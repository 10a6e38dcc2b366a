"""
Strata - Runtime Settings
Environment variables (STRATA_*) and logging setup for hosts and the demo.
"""

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings

from strata.config import DEFAULT_SEED, DEFAULT_SIZE


class RuntimeSettings(BaseSettings):
    """Settings loaded from the environment or a .env file."""

    # World
    seed: str = DEFAULT_SEED
    width: int = DEFAULT_SIZE[0]
    height: int = DEFAULT_SIZE[1]
    preset: str = "forest"

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    class Config:
        env_prefix = "STRATA_"
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> RuntimeSettings:
    """Get cached settings instance."""
    return RuntimeSettings()


def configure_logging(settings: RuntimeSettings = None) -> None:
    """Apply the configured level and format to the root logger."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=settings.log_format,
    )
