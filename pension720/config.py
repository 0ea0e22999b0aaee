"""Environment-based configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_SOURCE_URL = "https://signalfire85.tistory.com/277"
DEFAULT_SEED = "yeongeum720"


def resolve_database_url() -> str:
    """Resolve the SQL connection string used by the ``sql`` history backend.

    Priority:
      1) DATABASE_URL (explicit)
      2) Fallback to local sqlite next to the JSON artifacts
    """

    explicit = os.getenv("DATABASE_URL")
    if explicit:
        return explicit
    return "sqlite:///./pension720.db"


def _env_int(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class BaseConfig:
    """Base configuration shared by all environments.

    Values are read from the environment when the config object is created,
    so a `.env` loaded beforehand is picked up.
    """

    APP_ENV: str = field(default_factory=lambda: os.getenv("APP_ENV", "development"))
    SECRET_KEY: str = field(default_factory=lambda: os.getenv("SECRET_KEY", "dev-secret"))
    LOG_LEVEL: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    # Artifacts
    DATA_DIR: str = field(default_factory=lambda: os.getenv("DATA_DIR", "./data"))
    DRAWS_FILE: str = field(default_factory=lambda: os.getenv("DRAWS_FILE", "yeongeum720_draws.json"))
    FREQ_FILE: str = field(default_factory=lambda: os.getenv("FREQ_FILE", "yeongeum720_freq.json"))
    HISTORY_BACKEND: str = field(
        default_factory=lambda: os.getenv("HISTORY_BACKEND", "json").lower().strip()
    )  # "json" | "sql"
    DATABASE_URL: str = field(default_factory=resolve_database_url)

    # Source page
    SOURCE_URL: str = field(default_factory=lambda: os.getenv("SOURCE_URL", DEFAULT_SOURCE_URL))
    BONUS_MAX_GAP: int = field(default_factory=lambda: _env_int("BONUS_MAX_GAP", 250))
    HTTP_TIMEOUT: float = field(default_factory=lambda: _env_float("HTTP_TIMEOUT", 20.0))
    HTTP_RETRIES: int = field(default_factory=lambda: _env_int("HTTP_RETRIES", 3))
    HTTP_BACKOFF: float = field(default_factory=lambda: _env_float("HTTP_BACKOFF", 0.5))

    # Run options
    SKIP_UPDATE: bool = field(default_factory=lambda: _env_bool("SKIP_UPDATE"))
    RECOMMEND: int = field(default_factory=lambda: _env_int("RECOMMEND", 0))
    CYCLE: int | None = field(default_factory=lambda: _env_int("CYCLE", None))
    SEED: str = field(default_factory=lambda: os.getenv("SEED", DEFAULT_SEED))
    OUTPUT_FORMAT: str = field(default_factory=lambda: os.getenv("OUTPUT_FORMAT", "md").lower().strip())

    @property
    def draws_path(self) -> Path:
        return Path(self.DATA_DIR) / self.DRAWS_FILE

    @property
    def freq_path(self) -> Path:
        return Path(self.DATA_DIR) / self.FREQ_FILE


@dataclass(frozen=True)
class DevelopmentConfig(BaseConfig):
    """Development configuration."""

    DEBUG: bool = True


@dataclass(frozen=True)
class ProductionConfig(BaseConfig):
    """Production configuration."""

    DEBUG: bool = False


def get_config() -> type[BaseConfig]:
    """Resolve configuration class based on APP_ENV."""

    env = os.getenv("APP_ENV", "development").lower().strip()
    if env == "production":
        return ProductionConfig
    return DevelopmentConfig
