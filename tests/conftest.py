"""Shared fixtures."""
from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from textwrap import dedent

import pytest
import structlog

ENV_VARS = (
    "PSModuleVersion",
    "PSMODBUILD_RELEASE_VERSION",
    "PSMODBUILD_OUTPUT_DIR",
    "PSMODBUILD_MODULE_NAME",
    "PSMODBUILD_LOG_LEVEL",
)

CLASS_A = dedent("""
    class A {
        [string] $Name
    }
""").lstrip()

HELPER = dedent("""
    function DoWork {
        param([string]$Value)
        $Value.ToUpper()
    }
""").lstrip()

GREET = dedent("""
    function Greet {
        [CmdletBinding()]
        [Alias('Hi')]
        param([string]$Name)
        DoWork "Hello, $Name"
    }
""").lstrip()


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear build variables and cached config around every test."""
    from psmodbuild.cli.config import clear_config_cache

    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()
    structlog.reset_defaults()


@pytest.fixture
def sample_module(tmp_path: Path) -> Path:
    """Module root `Sample` with one class, one private and one public routine."""
    root = tmp_path / "Sample"
    (root / "classes").mkdir(parents=True)
    (root / "private").mkdir()
    (root / "public").mkdir()

    (root / "classes" / "classes.manifest").write_text('{"classes": ["A.ps1"]}\n')
    (root / "classes" / "A.ps1").write_text(CLASS_A)
    (root / "private" / "Helper.ps1").write_text(HELPER)
    (root / "public" / "Greet.ps1").write_text(GREET)
    return root
