"""Concatenation of collected sources into a single module file.

Assembly is purely textual. No syntax checking happens here; a broken
source file surfaces only when the consumer imports the module.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from psmodbuild._internal import fs
from psmodbuild.assembly.aliases import Alias, dedupe_aliases, extract_aliases
from psmodbuild.errors import UnsupportedClassFileError
from psmodbuild.sources.collector import SCRIPT_EXTENSION

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from psmodbuild.manifest.model import ModuleManifest
    from psmodbuild.sources.collector import SourceUnit

logger = structlog.get_logger()

# Compiled class sources ship next to the artifact and are loaded at import
_LOAD_DIRECTIVES = {
    ".cs": "Add-Type -Path (Join-Path $PSScriptRoot '{path}')",
    ".vb": "Add-Type -Path (Join-Path $PSScriptRoot '{path}') -Language VisualBasic",
    ".dll": "Add-Type -Path (Join-Path $PSScriptRoot '{path}')",
}
SUPPORTED_CLASS_EXTENSIONS = (SCRIPT_EXTENSION, *_LOAD_DIRECTIVES)


@dataclass(frozen=True)
class AssemblyResult:
    """Assembled artifact text plus the export surface it declares.

    Attributes:
        text: Concatenated module source, without export statements.
        exported_names: Public routine names in encounter order.
        exported_aliases: Deduplicated, sorted alias names.
        alias_bindings: Every alias registration emitted, in order.
    """

    text: str
    exported_names: tuple[str, ...]
    exported_aliases: tuple[str, ...]
    alias_bindings: tuple[Alias, ...]


def _block(text: str) -> str:
    """Source text followed by one blank line."""
    if text and not text.endswith("\n"):
        text += "\n"
    return text + "\n"


def alias_registration(alias: Alias) -> str:
    """Load-time statement binding `alias` to its routine."""
    return f"Set-Alias -Name '{alias.name}' -Value '{alias.target}'"


def load_directive(unit: SourceUnit) -> str:
    """Statement that loads a compiled class shipped beside the artifact.

    Raises:
        UnsupportedClassFileError: If the extension has no load directive.
    """
    template = _LOAD_DIRECTIVES.get(unit.extension)
    if template is None:
        raise UnsupportedClassFileError(unit.path, SUPPORTED_CLASS_EXTENSIONS)
    return template.format(path=unit.relative_path.as_posix())


def _class_block(unit: SourceUnit) -> str:
    if unit.extension == SCRIPT_EXTENSION:
        return _block(fs.read_text(unit.path))
    return _block(load_directive(unit))


def assemble_module(
    manifest: ModuleManifest,
    aux_units: Sequence[SourceUnit],
    private_units: Sequence[SourceUnit],
    public_units: Sequence[SourceUnit],
) -> AssemblyResult:
    """Concatenate classes, private routines and public routines, in that order.

    Args:
        manifest: The module being built.
        aux_units: Class units in declared load order.
        private_units: Internal routines.
        public_units: Exported routines; each file name is a routine name.

    Returns:
        The assembled text and its export surface.

    Raises:
        UnsupportedClassFileError: If a class unit is neither a script nor
            a compiled class source.
    """
    logger.info(
        "assembling_module",
        module=manifest.name,
        classes=len(aux_units),
        private=len(private_units),
        public=len(public_units),
    )
    parts: list[str] = []

    for unit in aux_units:
        parts.append(_class_block(unit))
        logger.debug("unit_assembled", root=unit.root.value, path=str(unit.relative_path))

    for unit in private_units:
        parts.append(_block(fs.read_text(unit.path)))
        logger.debug("unit_assembled", root=unit.root.value, path=str(unit.relative_path))

    names: list[str] = []
    seen_names: set[str] = set()
    seen_paths: set[Path] = set()
    bindings: list[Alias] = []
    for unit in public_units:
        if unit.path in seen_paths:
            logger.debug("duplicate_unit_skipped", path=str(unit.path))
            continue
        seen_paths.add(unit.path)

        text = fs.read_text(unit.path)
        parts.append(_block(text))
        logger.debug("unit_assembled", root=unit.root.value, path=str(unit.relative_path))

        if unit.logical_name.casefold() not in seen_names:
            seen_names.add(unit.logical_name.casefold())
            names.append(unit.logical_name)

        for alias in extract_aliases(text, unit.logical_name):
            parts.append(alias_registration(alias) + "\n")
            bindings.append(alias)
            logger.debug("alias_registered", alias=alias.name, target=alias.target)

    return AssemblyResult(
        text="".join(parts),
        exported_names=tuple(names),
        exported_aliases=dedupe_aliases(a.name for a in bindings),
        alias_bindings=tuple(bindings),
    )
