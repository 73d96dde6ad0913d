"""Source discovery for module builds.

A module root follows the template layout:

- ``classes/``: type definitions, loaded in the order declared by
  ``classes/classes.manifest``
- ``private/``: internal routines, assembled but not exported
- ``public/``: exported routines, one per file, named after the file
- anything else at the root is copied into the output as-is
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePosixPath

import structlog

from psmodbuild.errors import MissingClassFileError
from psmodbuild.manifest.model import CLASS_MANIFEST_NAME
from psmodbuild.manifest.store import load_class_manifest

logger = structlog.get_logger()

SCRIPT_EXTENSION = ".ps1"

# Version-control housekeeping, dropped from every listing
HOUSEKEEPING_NAMES = frozenset(
    [
        ".git",
        ".github",
        ".gitignore",
        ".gitattributes",
        ".gitkeep",
        ".gitmodules",
    ]
)


class SourceRoot(str, Enum):
    """Logical root a source file belongs to."""

    CLASSES = "classes"
    PRIVATE = "private"
    PUBLIC = "public"
    PROJECT = "project"


# Directories with their own handling, never copied as root extras
RESERVED_DIRS = frozenset(
    [SourceRoot.CLASSES.value, SourceRoot.PRIVATE.value, SourceRoot.PUBLIC.value, "build"]
)


@dataclass(frozen=True, slots=True)
class SourceUnit:
    """One discovered file."""

    path: Path
    root: SourceRoot
    relative_path: PurePosixPath

    @property
    def extension(self) -> str:
        """Lowercased extension including the dot."""
        return self.path.suffix.lower()

    @property
    def logical_name(self) -> str:
        """File base name; the routine name for public units."""
        return self.path.stem


@dataclass
class CollectedDirectory:
    """Files under one source root, split by how the build uses them."""

    assemble: list[SourceUnit] = field(default_factory=list)
    copy_verbatim: list[SourceUnit] = field(default_factory=list)


def _walk_files(root: Path, exclude_names: frozenset[str] = frozenset()) -> list[Path]:
    """Recursively list files under `root` in a stable order.

    Housekeeping directories are pruned during the walk.
    """
    skip = HOUSEKEEPING_NAMES | exclude_names
    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root, topdown=True):
        dirnames[:] = sorted(d for d in dirnames if d not in HOUSEKEEPING_NAMES)
        for filename in sorted(filenames):
            if filename in skip:
                continue
            found.append(Path(dirpath) / filename)
    return found


def _unit(path: Path, root: SourceRoot, base: Path) -> SourceUnit:
    return SourceUnit(
        path=path.resolve(),
        root=root,
        relative_path=PurePosixPath(path.relative_to(base).as_posix()),
    )


def collect_auxiliary(classes_root: Path, *, exclude_manifest_file: bool = True) -> list[SourceUnit]:
    """Resolve the classes listed in ``classes.manifest``, in declared order.

    Args:
        classes_root: The ``classes/`` directory.
        exclude_manifest_file: Skip an entry that names the classes manifest itself.

    Returns:
        Class units in load order.

    Raises:
        ManifestParseError: If the classes manifest is invalid.
        MissingClassFileError: If a listed file does not exist.
    """
    if not classes_root.is_dir():
        return []

    class_manifest = load_class_manifest(classes_root)
    units: list[SourceUnit] = []
    for entry in class_manifest.classes:
        relative = PurePosixPath(entry.replace("\\", "/"))
        if exclude_manifest_file and relative.as_posix() == CLASS_MANIFEST_NAME:
            logger.warning("class_manifest_lists_itself", entry=entry)
            continue

        path = classes_root.joinpath(*relative.parts)
        if not path.is_file():
            raise MissingClassFileError(path)
        units.append(_unit(path, SourceRoot.CLASSES, classes_root))

    listed = {u.relative_path for u in units}
    for path in _walk_files(classes_root, frozenset([CLASS_MANIFEST_NAME])):
        relative = PurePosixPath(path.relative_to(classes_root).as_posix())
        if path.suffix.lower() == SCRIPT_EXTENSION and relative not in listed:
            logger.warning("unlisted_class_file_skipped", path=str(path))

    logger.debug("classes_collected", count=len(units), root=str(classes_root))
    return units


def collect_directory(
    root: Path,
    source_root: SourceRoot,
    *,
    assemble_extensions: tuple[str, ...] = (SCRIPT_EXTENSION,),
    exclude_names: frozenset[str] = frozenset(),
) -> CollectedDirectory:
    """List a source root and split it into assembled and copied files.

    Args:
        root: Directory to walk.
        source_root: Logical root recorded on each unit.
        assemble_extensions: Extensions concatenated into the artifact.
        exclude_names: File names dropped entirely (besides housekeeping).

    Returns:
        Units to assemble and units to copy verbatim, each in walk order.
    """
    collected = CollectedDirectory()
    if not root.is_dir():
        return collected

    for path in _walk_files(root, exclude_names):
        unit = _unit(path, source_root, root)
        if unit.extension in assemble_extensions:
            collected.assemble.append(unit)
        else:
            collected.copy_verbatim.append(unit)

    logger.debug(
        "directory_collected",
        root=str(root),
        assemble=len(collected.assemble),
        copy=len(collected.copy_verbatim),
    )
    return collected


def collect_root_extras(project_root: Path, exclude_names: frozenset[str]) -> list[SourceUnit]:
    """List root-level files and non-reserved directories to copy as-is.

    Subdirectories are copied recursively as opaque trees.

    Args:
        project_root: Module root directory.
        exclude_names: Root-level names to leave out (manifest, build scripts).
    """
    skip = HOUSEKEEPING_NAMES | RESERVED_DIRS | exclude_names
    units: list[SourceUnit] = []
    for entry in sorted(project_root.iterdir()):
        if entry.name in skip:
            continue
        if entry.is_dir():
            units.extend(
                _unit(path, SourceRoot.PROJECT, project_root) for path in _walk_files(entry)
            )
        elif entry.is_file():
            units.append(_unit(entry, SourceRoot.PROJECT, project_root))
    return units
