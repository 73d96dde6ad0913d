"""CLI configuration using Pydantic settings.

Configuration is loaded from:
1. Environment variables (PSMODBUILD_* prefix)
2. .env file in current directory
3. Default values

The release version is also read from ``PSModuleVersion``, the variable the
release workflow exports after choosing the next version.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from psmodbuild.manifest.versioning import RELEASE_VERSION_VARIABLES


class BuildConfig(BaseSettings):
    """Configuration for the psmodbuild CLI.

    Environment variables are prefixed with PSMODBUILD_.
    """

    model_config = SettingsConfigDict(
        env_prefix="PSMODBUILD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Output location, relative to the module root unless absolute
    output_dir: str = "build/output"

    # Overrides the module root directory name
    module_name: str = ""

    # Release builds only
    release_version: str = Field(
        default="",
        validation_alias=AliasChoices(*RELEASE_VERSION_VARIABLES),
    )

    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            msg = f"Invalid log level: {v}. Must be one of {valid_levels}"
            raise ValueError(msg)
        return upper


@lru_cache
def get_config() -> BuildConfig:
    """Get the global configuration.

    Configuration is cached after first load.

    Returns:
        BuildConfig instance.
    """
    return BuildConfig()


def clear_config_cache() -> None:
    """Clear the configuration cache (for testing)."""
    get_config.cache_clear()
