"""Source collection."""

from __future__ import annotations

from psmodbuild.sources.collector import (
    CollectedDirectory,
    SourceRoot,
    SourceUnit,
    collect_auxiliary,
    collect_directory,
    collect_root_extras,
)

__all__ = [
    "CollectedDirectory",
    "SourceRoot",
    "SourceUnit",
    "collect_auxiliary",
    "collect_directory",
    "collect_root_extras",
]
