from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Environment-driven application configuration."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "TimeTrack"
    APP_ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    DATA_DIR: Path = Field(default_factory=lambda: Path(__file__).resolve().parents[2] / "data")

    HOST: str = "0.0.0.0"
    PORT: int = 3001

    # An explicit URL wins; otherwise the DB_* parts build a PostgreSQL URL,
    # and with neither we fall back to SQLite under DATA_DIR.
    DB_URL: str = Field(default="", validation_alias=AliasChoices("DATABASE_URL", "DB_URL"))
    DB_HOST: str = ""
    DB_PORT: int = 5432
    DB_NAME: str = ""
    DB_USER: str = ""
    DB_PASSWORD: str = ""

    SESSION_COOKIE_NAME: str = "sessionId"
    SESSION_COOKIE_SECURE: bool = False

    BCRYPT_ROUNDS: int = Field(default=12, ge=4, le=31)

    METRICS_ENABLED: bool = True

    @property
    def database_url(self) -> str:
        if self.DB_URL:
            return self.DB_URL
        if self.DB_HOST:
            auth = self.DB_USER
            if self.DB_PASSWORD:
                auth = f"{auth}:{self.DB_PASSWORD}"
            prefix = f"{auth}@" if auth else ""
            return f"postgresql+psycopg2://{prefix}{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        return f"sqlite:///{self.DATA_DIR / 'timers.db'}"


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    settings = AppSettings()
    if settings.database_url.startswith("sqlite:///"):
        settings.DATA_DIR.mkdir(parents=True, exist_ok=True)
    return settings
