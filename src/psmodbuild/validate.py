"""Module layout validation.

Checks the same structure the integration workflow expects before a
build: the template directories, exactly one module manifest, and a
loadable class list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import structlog

from psmodbuild.assembly.assembler import SUPPORTED_CLASS_EXTENSIONS
from psmodbuild.errors import BuildError, UnsupportedClassFileError
from psmodbuild.manifest.model import MANIFEST_EXTENSION
from psmodbuild.manifest.store import load_manifest, manifest_path
from psmodbuild.sources.collector import SourceRoot, collect_auxiliary

logger = structlog.get_logger()

TEMPLATE_DIRS = (SourceRoot.CLASSES.value, SourceRoot.PRIVATE.value, SourceRoot.PUBLIC.value)


@dataclass
class LayoutReport:
    """Validation findings for a module root."""

    root: Path
    manifest: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    class_count: int = 0

    @property
    def ok(self) -> bool:
        """True when no errors were found (warnings allowed)."""
        return not self.errors


def validate_layout(root: Path, module_name: str | None = None) -> LayoutReport:
    """Inspect a module root without building it.

    Args:
        root: Module root directory.
        module_name: Override for the root directory name.

    Returns:
        LayoutReport listing errors and warnings.
    """
    root = root.resolve()
    report = LayoutReport(root=root)

    for name in TEMPLATE_DIRS:
        if not (root / name).is_dir():
            report.warnings.append(f"Directory '{name}' not found")

    manifests = sorted(p.name for p in root.glob(f"*{MANIFEST_EXTENSION}") if p.is_file())
    expected = manifest_path(root, module_name)
    if not manifests:
        report.errors.append(f"No module manifest (*{MANIFEST_EXTENSION}) file found")
    elif len(manifests) > 1:
        report.warnings.append(f"Multiple manifest files found: {', '.join(manifests)}")

    if manifests and not expected.is_file():
        report.errors.append(f"Expected manifest {expected.name} not found")
    elif expected.is_file():
        report.manifest = expected
        try:
            load_manifest(expected)
        except BuildError as e:
            report.errors.append(str(e))

    try:
        units = collect_auxiliary(root / SourceRoot.CLASSES.value)
    except BuildError as e:
        report.errors.append(str(e))
    else:
        report.class_count = len(units)
        for unit in units:
            if unit.extension not in SUPPORTED_CLASS_EXTENSIONS:
                report.errors.append(str(UnsupportedClassFileError(unit.path, SUPPORTED_CLASS_EXTENSIONS)))

    logger.debug("layout_validated", root=str(root), errors=len(report.errors), warnings=len(report.warnings))
    return report
