"""Build error taxonomy.

Every error is fatal: the pipeline has no retry policy, and the CLI turns
any `BuildError` into a single message line plus a non-zero exit code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class BuildError(Exception):
    """Base class for all module build failures."""


class ManifestPathConflictError(BuildError):
    """The manifest path exists but is a directory."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Manifest path {path} is a directory, expected a file")
        self.path = path


class ManifestParseError(BuildError):
    """A manifest document could not be parsed."""

    def __init__(self, path: Path | None, reason: str) -> None:
        where = f" {path}" if path is not None else ""
        super().__init__(f"Invalid manifest{where}: {reason}")
        self.path = path
        self.reason = reason


class MissingVersionError(BuildError):
    """Release mode was requested without a version override."""

    def __init__(self, variables: tuple[str, ...]) -> None:
        names = " or ".join(variables)
        super().__init__(f"Release build requires a version. Set the {names} environment variable.")
        self.variables = variables


class InvalidVersionError(BuildError):
    """A version string is not MAJOR.MINOR.PATCH."""

    def __init__(self, version: str) -> None:
        super().__init__(f"Invalid version {version!r}: expected MAJOR.MINOR.PATCH")
        self.version = version


class VersionStampError(BuildError):
    """The manifest text has no version assignment to rewrite."""


class MissingClassFileError(BuildError):
    """The classes manifest lists a file that does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Class file listed in classes.manifest not found: {path}")
        self.path = path


class UnsupportedClassFileError(BuildError):
    """A class file has an extension outside the supported set."""

    def __init__(self, path: Path, supported: tuple[str, ...]) -> None:
        super().__init__(
            f"Unsupported class file {path.name}: extension must be one of {', '.join(supported)}"
        )
        self.path = path
        self.supported = supported


class FileSystemError(BuildError):
    """A copy, create, delete, read or write operation failed."""

    def __init__(self, operation: str, path: Path, error: OSError) -> None:
        super().__init__(f"Failed to {operation} {path}: {error.strerror or error}")
        self.operation = operation
        self.path = path


class ProjectExistsError(BuildError):
    """A new module cannot be scaffolded over an existing path."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Directory {path} already exists")
        self.path = path
