from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    # Local dev: load from .env automatically.
    # In production: you typically inject real env vars instead.
    model_config = SettingsConfigDict(
        env_prefix="",
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
    )

    # Env vars:
    # - USER_DB_PATH: JSON file holding the user collection (created when missing)
    # - USER_REGISTRY_HOST / USER_REGISTRY_PORT: listen address
    # - LOG_LEVEL: root logging level
    db_path: str = Field(default="db.json", validation_alias="USER_DB_PATH")
    host: str = Field(default="0.0.0.0", validation_alias="USER_REGISTRY_HOST")
    port: int = Field(default=8080, validation_alias="USER_REGISTRY_PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @field_validator("log_level", mode="before")
    @classmethod
    def _known_log_level(cls, value: object) -> str:
        level = str(value or "INFO").strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return level


def get_settings() -> Settings:
    """Load settings from environment.

    Keep this as the single canonical constructor for Settings(); the CLI and
    tests can override/monkeypatch this function.
    """
    return Settings()
