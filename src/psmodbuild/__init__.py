"""psmodbuild - script module build tool.

Assembles a module laid out as ``classes/``, ``private/`` and ``public/``
into one distributable module file with a stamped manifest.

Example:
    >>> from pathlib import Path
    >>> from psmodbuild import BuildMode, run_build
    >>> result = run_build(Path("MyModule"), BuildMode.BUILD)
    >>> result.artifact_path
    PosixPath('.../MyModule/build/output/MyModule/1.0.0/MyModule.psm1')
"""

from __future__ import annotations

__version__ = "0.1.0"

from psmodbuild.build import BuildResult, run_build
from psmodbuild.errors import BuildError
from psmodbuild.manifest.versioning import BuildMode

__all__ = [
    "BuildError",
    "BuildMode",
    "BuildResult",
    "__version__",
    "run_build",
]
