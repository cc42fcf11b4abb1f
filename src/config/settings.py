# src/config/settings.py — v2
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for all deployment-specific settings. The only
secret is ANTHROPIC_API_KEY; a known placeholder value counts as unset.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from glucolens.core.errors import ConfigurationError
from glucolens.logging.handlers import parse_size

# Values shipped in sample .env files; treated exactly like a missing key.
PLACEHOLDER_API_KEYS: frozenset[str] = frozenset({"tu_api_key_aqui", "your_api_key_here"})

DEFAULT_MODEL = "claude-sonnet-4-5-20250929"
DEFAULT_MAX_TOKENS = 2048


class Settings(BaseSettings):
    """Application settings loaded from environment and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === LLM PROVIDER ===
    anthropic_api_key: str = ""
    analysis_model: str = DEFAULT_MODEL
    analysis_max_tokens: int = DEFAULT_MAX_TOKENS
    analysis_language: Literal["en", "es"] = "en"

    # === HTTP ===
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    examples_dir: Path = Path("assets/examples")

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("analysis_max_tokens")
    @classmethod
    def validate_max_tokens(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("analysis_max_tokens must be > 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Cross-field checks that pydantic types cannot express."""
        errors: list[str] = []

        try:
            parse_size(self.log_rotation)
        except ValueError as exc:
            errors.append(f"LOG_ROTATION: {exc}")

        if self.log_retention < 0:
            errors.append("LOG_RETENTION must be >= 0")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def has_api_key(self) -> bool:
        """True when a real (non-empty, non-placeholder) key is configured."""
        return is_usable_api_key(self.anthropic_api_key)


def is_usable_api_key(value: str | None) -> bool:
    key = (value or "").strip()
    return bool(key) and key not in PLACEHOLDER_API_KEYS


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or embedding).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
