"""Manifest persistence.

The module manifest is created once on the first build or setup, then read
on every build. Builds never write back to the source manifest; the stamped
copy goes to the output directory.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from psmodbuild._internal import fs
from psmodbuild.errors import ManifestPathConflictError
from psmodbuild.manifest.model import (
    CLASS_MANIFEST_NAME,
    MANIFEST_EXTENSION,
    ClassManifest,
    ModuleManifest,
)

logger = structlog.get_logger()


def module_name_for(root: Path, module_name: str | None = None) -> str:
    """Module name: the override if given, otherwise the root directory name."""
    return module_name or root.resolve().name


def manifest_path(root: Path, module_name: str | None = None) -> Path:
    """Path of the module manifest, `<root>/<name>.manifest`."""
    return root / f"{module_name_for(root, module_name)}{MANIFEST_EXTENSION}"


def load_manifest(path: Path) -> ModuleManifest:
    """Load and validate a module manifest.

    Raises:
        ManifestParseError: If the document is invalid.
        FileSystemError: If the file cannot be read.
    """
    return ModuleManifest.from_json(fs.read_text(path), path=path)


def save_manifest(path: Path, manifest: ModuleManifest) -> None:
    """Persist a module manifest."""
    fs.write_text(path, manifest.to_json())


def ensure_manifest(root: Path, module_name: str | None = None) -> ModuleManifest:
    """Load the module manifest, creating it with version 1.0.0 if absent.

    Args:
        root: Module root directory.
        module_name: Optional override for the root directory name.

    Returns:
        The loaded or newly created manifest.

    Raises:
        ManifestPathConflictError: If the manifest path is a directory.
        ManifestParseError: If an existing manifest cannot be parsed.
    """
    path = manifest_path(root, module_name)

    if path.is_dir():
        raise ManifestPathConflictError(path)

    if path.exists():
        manifest = load_manifest(path)
        logger.debug("manifest_loaded", path=str(path), version=manifest.version)
        return manifest

    manifest = ModuleManifest.new(module_name_for(root, module_name))
    save_manifest(path, manifest)
    logger.info("manifest_created", path=str(path), version=manifest.version)
    return manifest


def load_class_manifest(classes_root: Path) -> ClassManifest:
    """Load `classes/classes.manifest`; a missing file means no classes.

    Raises:
        ManifestParseError: If the document is invalid.
    """
    path = classes_root / CLASS_MANIFEST_NAME
    if not path.is_file():
        return ClassManifest()
    return ClassManifest.from_json(fs.read_text(path), path=path)
