from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Global application-level configuration.

    This class is the single source of truth for:
    - environment selection
    - logging behavior
    - durable store backend + location
    - the sequence served by /message
    """

    model_config = SettingsConfigDict(
        env_prefix="FIBSEQ_",
        env_file=".env",
        extra="ignore",
    )

    # ---- Environment -------------------------------------------------

    env: Literal["local", "staging", "prod"] = "local"

    # ---- Logging -----------------------------------------------------

    log_level: str = "INFO"

    # ---- Durable state -----------------------------------------------

    store_backend: Literal["memory", "json"] = Field(
        default="json",
        description="Where sequence state lives: process memory or JSON files",
    )

    # One JSON document per sequence name is written under this directory
    state_dir: Path = Field(
        default=Path("state"),
        description="Root directory for durable sequence state",
    )

    fsync: bool = Field(
        default=True,
        description="fsync state files after every write",
    )

    # ---- Routing -----------------------------------------------------

    default_sequence: str = Field(
        default="foo",
        description="Sequence name advanced by GET /message",
    )


# Singleton settings object
settings = AppSettings()
