"""Tests for CLI configuration."""
from __future__ import annotations

import os
from unittest.mock import patch

import pytest


class TestBuildConfig:
    """Tests for BuildConfig."""

    def test_default_values(self) -> None:
        """Config has sensible defaults."""
        from psmodbuild.cli.config import BuildConfig

        with patch.dict(os.environ, {}, clear=True):
            config = BuildConfig()

        assert config.output_dir == "build/output"
        assert config.module_name == ""
        assert config.release_version == ""
        assert config.log_level == "INFO"

    def test_from_environment(self) -> None:
        """Config reads from environment variables."""
        from psmodbuild.cli.config import BuildConfig

        env = {
            "PSMODBUILD_OUTPUT_DIR": "dist",
            "PSMODBUILD_MODULE_NAME": "Custom",
            "PSMODBUILD_LOG_LEVEL": "debug",
        }

        with patch.dict(os.environ, env, clear=True):
            config = BuildConfig()

        assert config.output_dir == "dist"
        assert config.module_name == "Custom"
        assert config.log_level == "DEBUG"

    def test_release_version_from_workflow_variable(self) -> None:
        """The release workflow's PSModuleVersion is honored."""
        from psmodbuild.cli.config import BuildConfig

        with patch.dict(os.environ, {"PSModuleVersion": "2.3.1"}, clear=True):
            config = BuildConfig()

        assert config.release_version == "2.3.1"

    def test_release_version_prefixed_variable(self) -> None:
        """PSMODBUILD_RELEASE_VERSION also works."""
        from psmodbuild.cli.config import BuildConfig

        with patch.dict(os.environ, {"PSMODBUILD_RELEASE_VERSION": "4.0.0"}, clear=True):
            config = BuildConfig()

        assert config.release_version == "4.0.0"

    def test_invalid_log_level(self) -> None:
        """Unknown log levels are rejected."""
        from pydantic import ValidationError

        from psmodbuild.cli.config import BuildConfig

        with patch.dict(os.environ, {"PSMODBUILD_LOG_LEVEL": "chatty"}, clear=True):
            with pytest.raises(ValidationError):
                BuildConfig()


class TestGetConfig:
    """Tests for get_config function."""

    def test_returns_cached_config(self) -> None:
        """get_config returns the same instance until cleared."""
        from psmodbuild.cli.config import clear_config_cache, get_config

        clear_config_cache()
        config = get_config()

        assert get_config() is config
        clear_config_cache()
        assert get_config() is not config
