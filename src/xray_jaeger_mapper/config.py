"""Application configuration management using Pydantic Settings.

This module defines the `Settings` class, which loads configuration parameters
from environment variables and a `.env` file. It centralizes the tunable
parameters of the mapper: logging level, the subsegment depth guard, the
process merge policy and CLI output formatting.

The `get_settings` function provides a cached, singleton instance of the
configuration, ensuring consistent settings throughout the application.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict as _SettingsConfigDict

from .mapping.processes import MERGE_POLICIES
from .mapping.segment_walker import DEFAULT_MAX_DEPTH


class Settings(BaseSettings):
    """Defines all application configuration parameters.

    Values come from environment variables or a `.env` file. Explicit function
    and CLI arguments always take precedence over these defaults.
    """

    model_config = _SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # ---------------- Mapping Behavior -----------------
    MAX_SUBSEGMENT_DEPTH: int = Field(
        default=DEFAULT_MAX_DEPTH,
        ge=1,
        description=(
            "Maximum subsegment nesting below a top-level segment. Deeper (or "
            "cyclic) trees are rejected as malformed."
        ),
    )
    PROCESS_MERGE_POLICY: str = Field(
        default="last",
        description=(
            "How to resolve two top-level segments with the same service name: "
            "'last' (later replaces earlier), 'first' (earlier wins) or 'merge' "
            "(union of tags)."
        ),
    )

    # ---------------- CLI Output -----------------
    OUTPUT_INDENT: Optional[int] = Field(
        default=None,
        description="JSON indentation for CLI output (unset = compact)",
    )

    @field_validator("PROCESS_MERGE_POLICY", mode="before")
    @classmethod
    def normalize_merge_policy(cls, v: Any) -> str:
        """Trim and lower-case the policy name, rejecting unknown values."""
        policy = str(v).strip().lower() if v is not None else "last"
        if not policy:
            return "last"
        if policy not in MERGE_POLICIES:
            raise ValueError(
                f"PROCESS_MERGE_POLICY must be one of {', '.join(MERGE_POLICIES)}; got {v!r}"
            )
        return policy

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        if v is None or not str(v).strip():
            return "INFO"
        return str(v).strip().upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached, singleton instance of the application settings.

    Provides a clearer error when a configured value is invalid.
    """
    try:
        return Settings()
    except ValidationError as e:
        fields = ", ".join(str(err.get("loc", ("?",))[0]) for err in e.errors())
        raise RuntimeError(f"Invalid mapper configuration ({fields}): {e}") from e
