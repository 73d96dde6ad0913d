"""Module assembly: concatenation, alias discovery and export emission."""

from __future__ import annotations

from psmodbuild.assembly.aliases import Alias, dedupe_aliases, extract_aliases
from psmodbuild.assembly.assembler import AssemblyResult, assemble_module
from psmodbuild.assembly.exports import emit_exports, render_exports

__all__ = [
    "Alias",
    "AssemblyResult",
    "assemble_module",
    "dedupe_aliases",
    "emit_exports",
    "extract_aliases",
    "render_exports",
]
