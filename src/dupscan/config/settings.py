"""Application settings."""

import hashlib
from pathlib import Path
from typing import Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..common.constants import (
    CHUNK_SIZE,
    DEFAULT_HASH_ALGORITHM,
    DEFAULT_IGNORE_DIRS,
    DEFAULT_MAX_WORKERS,
    MIN_FILE_SIZE,
)
from ..common.exceptions import ConfigError


class Settings(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DUPSCAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Hasher pool
    max_workers: int = Field(
        default=DEFAULT_MAX_WORKERS,
        ge=1,
        description="Maximum files hashed concurrently",
    )
    chunk_size: int = Field(
        default=CHUNK_SIZE,
        ge=1,
        description="Bytes read per call while hashing",
    )
    hash_algorithm: str = Field(
        default=DEFAULT_HASH_ALGORITHM,
        description="hashlib algorithm used for content digests",
    )

    # Scan settings
    ignore_dirs: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IGNORE_DIRS),
        description="Directory name patterns pruned from the walk",
    )
    min_file_size: int = Field(
        default=MIN_FILE_SIZE,
        ge=MIN_FILE_SIZE,
        description="Minimum file size in bytes to consider",
    )
    byte_compare: bool = Field(
        default=False,
        description="Confirm hash matches with a byte-by-byte comparison",
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Optional log file path",
    )

    @field_validator("hash_algorithm")
    @classmethod
    def _check_algorithm(cls, value: str) -> str:
        name = value.lower()
        if name not in hashlib.algorithms_available:
            raise ValueError(f"unsupported hash algorithm: {value}")
        if name.startswith("shake_"):
            raise ValueError(f"variable-length digest not supported: {value}")
        return name

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"invalid log level: {value}")
        return level

    def with_overrides(self, **overrides: object) -> "Settings":
        """Return a validated copy with non-None overrides applied.

        Args:
            **overrides: Field values, typically from command line options

        Returns:
            New Settings instance

        Raises:
            ConfigError: If an override fails validation
        """
        values = self.model_dump()
        values.update({key: value for key, value in overrides.items() if value is not None})
        try:
            return type(self)(**values)
        except ValidationError as e:
            errors = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise ConfigError(f"Invalid configuration: {errors}") from e


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        try:
            _settings = Settings()
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e
    return _settings


def reset_settings() -> None:
    """Reset global settings instance."""
    global _settings
    _settings = None
