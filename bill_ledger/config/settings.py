"""
Configuration Management for Bill Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here, including the
fixed list of users. The user list is injected into the view-model at
start-up and never changes while the app runs.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bill_ledger.models.bill import User


DEFAULT_USERS: tuple[User, ...] = (
    User(id=1, name="Zohaib"),
    User(id=2, name="Babar"),
    User(id=3, name="Mustafa"),
)


class LedgerSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from BILL_LEDGER_* environment variables
    and the .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="BILL_LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        description="Minimum level for structured logs"
    )

    # Storage
    storage_path: Path = Field(
        default=Path(".bill_ledger") / "local_storage.json",
        description="File backing the local key-value store"
    )
    storage_key: str = Field(
        default="billRecords",
        min_length=1,
        description="Key the ledger snapshot is stored under"
    )

    # Display
    currency_symbol: str = Field(
        default="₹",
        description="Symbol shown in front of every amount"
    )

    # Users (JSON list in the environment, e.g. '[{"id": 1, "name": "A"}]')
    users: tuple[User, ...] = Field(
        default=DEFAULT_USERS,
        min_length=1,
        description="Fixed list of people bills can be recorded for"
    )

    @field_validator("users")
    @classmethod
    def validate_unique_user_ids(cls, v: tuple[User, ...]) -> tuple[User, ...]:
        """User ids are foreign keys in stored bills, so they must be unique."""
        ids = [user.id for user in v]
        if len(ids) != len(set(ids)):
            raise ValueError(f"User ids must be unique, got {ids}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> LedgerSettings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return LedgerSettings()
