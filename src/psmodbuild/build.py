"""Module build pipeline.

One invocation is one linear pass:

1. ensure the module manifest exists
2. resolve the target version (manifest or release override)
3. collect classes, private and public sources
4. assemble the artifact text and stamp the manifest text in memory
5. regenerate ``<output>/<ModuleName>/<version>/`` and write the artifact,
   its export statements, the stamped manifest and the verbatim copies

Everything that can fail on bad input happens before step 5, so a rejected
build leaves the output tree untouched. Concurrent builds against the same
output directory are not supported.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import structlog

from psmodbuild._internal import fs
from psmodbuild.assembly.assembler import assemble_module
from psmodbuild.assembly.exports import emit_exports
from psmodbuild.manifest.model import CLASS_MANIFEST_NAME
from psmodbuild.manifest.store import ensure_manifest, manifest_path, module_name_for
from psmodbuild.manifest.versioning import BuildMode, resolve_version, stamped_manifest_text
from psmodbuild.sources.collector import (
    SourceRoot,
    SourceUnit,
    collect_auxiliary,
    collect_directory,
    collect_root_extras,
)

logger = structlog.get_logger()

DEFAULT_OUTPUT_DIR = "build/output"

# Root-level files that drive the build rather than ship with the module
BUILD_SCRIPT_NAMES = frozenset(["build.ps1", ".env"])


@dataclass
class BuildResult:
    """Outcome of a build or release run."""

    module_name: str
    version: str
    mode: BuildMode
    output_dir: Path
    artifact_path: Path
    manifest_path: Path
    exported_names: tuple[str, ...] = ()
    exported_aliases: tuple[str, ...] = ()
    exports_emitted: bool = True
    copied_files: list[Path] = field(default_factory=list)


def _output_root(root: Path, output_dir: str | Path) -> Path:
    path = Path(output_dir)
    return path if path.is_absolute() else root / path


def _root_excludes(root: Path, output_root: Path, manifest_file: str) -> frozenset[str]:
    names = {manifest_file, *BUILD_SCRIPT_NAMES}
    try:
        relative = output_root.resolve().relative_to(root)
    except ValueError:
        pass
    else:
        if relative.parts:
            names.add(relative.parts[0])
    return frozenset(names)


def _copy_units(units: list[SourceUnit], dest_root: Path) -> list[Path]:
    copied: list[Path] = []
    targets: dict[Path, SourceUnit] = {}
    for unit in units:
        dest = dest_root.joinpath(*unit.relative_path.parts)
        previous = targets.get(dest)
        if previous is not None:
            logger.warning(
                "copy_target_collision",
                target=str(dest),
                first=str(previous.path),
                second=str(unit.path),
            )
        targets[dest] = unit
        fs.copy_file(unit.path, dest)
        copied.append(dest)
    return copied


def run_build(
    root: Path,
    mode: BuildMode,
    *,
    output_dir: str | Path = DEFAULT_OUTPUT_DIR,
    module_name: str | None = None,
    release_version: str | None = None,
) -> BuildResult | None:
    """Run one build invocation.

    Args:
        root: Module root directory.
        mode: SETUP only ensures the manifest; BUILD and RELEASE assemble.
        output_dir: Output root, relative to `root` unless absolute.
        module_name: Override for the root directory name.
        release_version: Version override, required for RELEASE.

    Returns:
        BuildResult, or None for SETUP.

    Raises:
        BuildError: Any pipeline failure; nothing is retried.
    """
    root = root.resolve()
    name = module_name_for(root, module_name)
    source_manifest = manifest_path(root, name)

    manifest = ensure_manifest(root, name)
    if mode is BuildMode.SETUP:
        logger.info("setup_complete", module=name, manifest=str(source_manifest))
        return None

    version = resolve_version(manifest, mode, release_version)
    output_root = _output_root(root, output_dir)
    target = output_root / name / version
    logger.info("build_started", module=name, version=version, mode=mode.value, output=str(target))

    classes_root = root / SourceRoot.CLASSES.value
    aux_units = collect_auxiliary(classes_root)
    classes = collect_directory(
        classes_root,
        SourceRoot.CLASSES,
        exclude_names=frozenset([CLASS_MANIFEST_NAME]),
    )
    private = collect_directory(root / SourceRoot.PRIVATE.value, SourceRoot.PRIVATE)
    public = collect_directory(root / SourceRoot.PUBLIC.value, SourceRoot.PUBLIC)
    extras = collect_root_extras(root, _root_excludes(root, output_root, source_manifest.name))

    assembly = assemble_module(manifest, aux_units, private.assemble, public.assemble)
    stamped = stamped_manifest_text(source_manifest, version)

    fs.reset_dir(target)
    artifact_path = target / manifest.root_module
    fs.write_text(artifact_path, assembly.text)
    exported = emit_exports(artifact_path, assembly.exported_names, assembly.exported_aliases)

    stamped_manifest = target / source_manifest.name
    fs.write_text(stamped_manifest, stamped)

    copied = _copy_units(
        [*classes.copy_verbatim, *private.copy_verbatim, *public.copy_verbatim, *extras],
        target,
    )

    logger.info(
        "build_complete",
        module=name,
        version=version,
        functions=len(assembly.exported_names),
        aliases=len(assembly.exported_aliases),
        copied=len(copied),
    )
    return BuildResult(
        module_name=name,
        version=version,
        mode=mode,
        output_dir=target,
        artifact_path=artifact_path,
        manifest_path=stamped_manifest,
        exported_names=assembly.exported_names,
        exported_aliases=assembly.exported_aliases,
        exports_emitted=exported,
        copied_files=copied,
    )
