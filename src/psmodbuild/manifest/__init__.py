"""Manifest store and version stamping."""

from __future__ import annotations

from psmodbuild.manifest.model import ClassManifest, ModuleManifest
from psmodbuild.manifest.store import ensure_manifest, load_class_manifest, manifest_path
from psmodbuild.manifest.versioning import (
    BuildMode,
    resolve_version,
    stamp_version,
    stamped_manifest_text,
)

__all__ = [
    "BuildMode",
    "ClassManifest",
    "ModuleManifest",
    "ensure_manifest",
    "load_class_manifest",
    "manifest_path",
    "resolve_version",
    "stamp_version",
    "stamped_manifest_text",
]
