"""CLI module."""

from __future__ import annotations

from psmodbuild.cli.config import BuildConfig, get_config
from psmodbuild.cli.main import app

__all__ = ["BuildConfig", "app", "get_config"]
