# catalog/config.py
from __future__ import annotations
from pathlib import Path
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    app_title: str = "LocalLibrary"

    # --- Persistence ---
    data_dir: str = Field(default="./data")   # snapshot + WAL live here
    snapshot_on_shutdown: bool = True

    # --- Logging ---
    log_level: str = "INFO"

    # Tell Pydantic Settings to load .env automatically
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parent.parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",        # ignore unexpected envs
    )

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return v
