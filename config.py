from __future__ import annotations

import logging
from pathlib import Path

from pydantic_settings import BaseSettings

DEFAULT_CATALOG_PATH = Path(__file__).parent / "storefront" / "data" / "catalog.yaml"

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class Settings(BaseSettings):
    """Runtime configuration sourced from environment variables."""

    api_base_url: str = "http://localhost:3000"
    host: str = "127.0.0.1"
    port: int = 3000
    shipping_fee: float = 7.0
    catalog_path: Path = DEFAULT_CATALOG_PATH
    request_timeout: float = 10.0
    log_level: str = "INFO"

    class Config:
        env_file = "config/.env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra fields from .env file


def load_settings() -> Settings:
    """Provide a reusable settings singleton."""

    return Settings()


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
    )


settings = load_settings()
