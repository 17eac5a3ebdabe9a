from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "http://localhost:8002"
DEFAULT_TIMEOUT = 10.0


class PanelConfig(BaseSettings):
    """Admin panel settings, read from ``ADMIN_PANEL_*`` variables or ``.env``."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    show_statistics_bar: bool = False
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="ADMIN_PANEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    @field_validator("base_url")
    @classmethod
    def _strip_base_url(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("base_url must not be empty")
        return v

    @field_validator("timeout")
    @classmethod
    def _positive_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeout must be greater than 0 seconds")
        return v

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, v: str) -> str:
        v = v.strip().upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"unknown log level {v!r}")
        return v


@lru_cache(maxsize=1)
def get_config() -> PanelConfig:
    return PanelConfig()


_logging_configured = False


def configure_logging(level: str = "INFO") -> None:
    global _logging_configured
    if _logging_configured:
        return
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _logging_configured = True
