"""New module scaffolding."""

from __future__ import annotations

from textwrap import dedent
from typing import TYPE_CHECKING

import structlog

from psmodbuild._internal import fs
from psmodbuild.errors import ProjectExistsError
from psmodbuild.manifest.model import CLASS_MANIFEST_NAME, MANIFEST_EXTENSION, ClassManifest, ModuleManifest
from psmodbuild.sources.collector import SourceRoot

if TYPE_CHECKING:
    from pathlib import Path

logger = structlog.get_logger()

_EXAMPLE_FUNCTION = dedent("""
    function Get-Greeting {
        <#
        .SYNOPSIS
        Returns a greeting. Replace with your own public functions.
        #>
        [CmdletBinding()]
        [Alias('greet')]
        param(
            [Parameter(Mandatory)]
            [string]$Name
        )

        "Hello, $Name!"
    }
""").lstrip()


def scaffold_module(parent: Path, name: str) -> Path:
    """Create a module root with the classes/private/public layout.

    Args:
        parent: Directory to create the module in.
        name: Module name; also the directory name.

    Returns:
        The new module root.

    Raises:
        ProjectExistsError: If the target directory already exists.
    """
    root = parent / name
    if root.exists():
        raise ProjectExistsError(root)

    for source_root in (SourceRoot.CLASSES, SourceRoot.PRIVATE, SourceRoot.PUBLIC):
        fs.write_text(root / source_root.value / ".gitkeep", "")

    fs.write_text(root / SourceRoot.CLASSES.value / CLASS_MANIFEST_NAME, ClassManifest().to_json())
    fs.write_text(root / f"{name}{MANIFEST_EXTENSION}", ModuleManifest.new(name).to_json())
    fs.write_text(root / SourceRoot.PUBLIC.value / "Get-Greeting.ps1", _EXAMPLE_FUNCTION)

    logger.info("module_scaffolded", root=str(root))
    return root
