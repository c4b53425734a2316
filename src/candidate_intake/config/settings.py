from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..validators.config_validators import to_lowercase, to_uppercase


class Settings(BaseSettings):
    """
    Application settings loaded from environment (and an optional .env file).
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Database configuration (SQLAlchemy async URLs)
    DATABASE_URL: str = "sqlite+aiosqlite:///./candidates.db"
    TEST_DATABASE_URL: str | None = None
    TESTING: bool = False
    DB_CONNECT_TIMEOUT: int = 10

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    ENABLE_SQL_LOGGING: bool = False

    # --- Derived settings ---
    @property
    def effective_database_url(self) -> str:
        """
        Return the database URL for the current mode.

        With TESTING=True and TEST_DATABASE_URL set, the test database is used so
        test runs never write into the regular database.
        """
        if self.TESTING and self.TEST_DATABASE_URL:
            return self.TEST_DATABASE_URL
        return self.DATABASE_URL

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize LOG_LEVEL to upper case before Literal validation runs, so
        `LOG_LEVEL=debug` in the environment is accepted.
        """
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        return to_lowercase(v)

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Settings come from the environment only, so one cached instance is enough.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
