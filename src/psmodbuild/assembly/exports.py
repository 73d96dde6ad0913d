"""Export statements appended to the end of the assembled module."""

from __future__ import annotations

from collections.abc import Sequence  # noqa: TC003
from typing import TYPE_CHECKING

import structlog

from psmodbuild._internal import fs
from psmodbuild.assembly.aliases import dedupe_aliases

if TYPE_CHECKING:
    from pathlib import Path

logger = structlog.get_logger()


def render_exports(names: Sequence[str], aliases: Sequence[str]) -> str:
    """Build the export statements.

    Function names keep encounter order; aliases are deduplicated
    case-insensitively and sorted.
    """
    lines: list[str] = []
    if names:
        lines.append(f"Export-ModuleMember -Function {', '.join(names)}")
    unique_aliases = dedupe_aliases(aliases)
    if unique_aliases:
        lines.append(f"Export-ModuleMember -Alias {', '.join(unique_aliases)}")
    return "".join(f"{line}\n" for line in lines)


def emit_exports(artifact_path: Path, names: Sequence[str], aliases: Sequence[str]) -> bool:
    """Append export statements to the artifact.

    Returns:
        False if there was nothing to export (the artifact is still valid).
    """
    unique_aliases = dedupe_aliases(aliases)
    statements = render_exports(names, unique_aliases)
    if not statements:
        logger.warning("module_exports_nothing", artifact=str(artifact_path))
        return False

    fs.append_text(artifact_path, statements)
    logger.debug("exports_emitted", functions=len(names), aliases=len(unique_aliases))
    return True
