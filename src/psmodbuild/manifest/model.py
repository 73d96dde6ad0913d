"""Module manifest and class load-order manifest models.

Both documents are JSON objects. The module manifest lives at
`<root>/<ModuleName>.manifest`; the class manifest at
`<root>/classes/classes.manifest`.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any

from psmodbuild.errors import ManifestParseError

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_VERSION = "1.0.0"
ARTIFACT_EXTENSION = ".psm1"
MANIFEST_EXTENSION = ".manifest"
CLASS_MANIFEST_NAME = "classes.manifest"

SEMVER_PATTERN = re.compile(r"^\d+\.\d+\.\d+$")

# Keys owned by ModuleManifest; anything else is carried through untouched.
_KNOWN_KEYS = ("name", "version", "rootModule", "description", "author")


def is_semver(value: str) -> bool:
    """Return True if `value` is MAJOR.MINOR.PATCH."""
    return bool(SEMVER_PATTERN.match(value))


def _optional_str(data: dict[str, Any], key: str, default: str, path: Path | None) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise ManifestParseError(path, f"{key!r} must be a string")
    return value


@dataclass
class ModuleManifest:
    """Module metadata record.

    Attributes:
        name: Module name (defaults to the module root directory name).
        version: MAJOR.MINOR.PATCH version string.
        root_module: File name of the assembled artifact.
        description: Free-form description.
        author: Module author.
        extra: Additional keys preserved as-is.
    """

    name: str
    version: str = DEFAULT_VERSION
    root_module: str = ""
    description: str = ""
    author: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.root_module:
            self.root_module = f"{self.name}{ARTIFACT_EXTENSION}"

    @classmethod
    def new(cls, name: str) -> ModuleManifest:
        """Create the default manifest for a fresh module."""
        return cls(name=name, description=f"{name} module")

    @classmethod
    def from_dict(cls, data: object, *, path: Path | None = None) -> ModuleManifest:
        """Validate a decoded JSON document.

        Raises:
            ManifestParseError: If required fields are missing or malformed.
        """
        if not isinstance(data, dict):
            raise ManifestParseError(path, "top-level value must be an object")

        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ManifestParseError(path, "'name' must be a non-empty string")

        version = data.get("version")
        if not isinstance(version, str):
            raise ManifestParseError(path, "'version' must be a string")
        if not is_semver(version):
            raise ManifestParseError(path, f"'version' {version!r} is not MAJOR.MINOR.PATCH")

        root_module = _optional_str(data, "rootModule", "", path)
        if "/" in root_module or "\\" in root_module:
            raise ManifestParseError(path, "'rootModule' must be a file name, not a path")

        return cls(
            name=name,
            version=version,
            root_module=root_module,
            description=_optional_str(data, "description", "", path),
            author=_optional_str(data, "author", "", path),
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
        )

    @classmethod
    def from_json(cls, text: str, *, path: Path | None = None) -> ModuleManifest:
        """Parse manifest text.

        Raises:
            ManifestParseError: If the text is not valid JSON or fails validation.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ManifestParseError(path, str(e)) from e
        return cls.from_dict(data, path=path)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (document key names)."""
        return {
            "name": self.name,
            "version": self.version,
            "rootModule": self.root_module,
            "description": self.description,
            "author": self.author,
            **self.extra,
        }

    def to_json(self) -> str:
        """Serialize to indented JSON with a trailing newline."""
        return json.dumps(self.to_dict(), indent=2) + "\n"


@dataclass(frozen=True)
class ClassManifest:
    """Ordered list of class source files, relative to `classes/`.

    The order is the load order of type definitions that may reference
    one another.
    """

    classes: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: object, *, path: Path | None = None) -> ClassManifest:
        """Validate a decoded classes manifest.

        Raises:
            ManifestParseError: On malformed, duplicate or escaping entries.
        """
        if not isinstance(data, dict):
            raise ManifestParseError(path, "top-level value must be an object")

        entries = data.get("classes", [])
        if not isinstance(entries, list):
            raise ManifestParseError(path, "'classes' must be a list")

        seen: set[str] = set()
        for entry in entries:
            if not isinstance(entry, str) or not entry.strip():
                raise ManifestParseError(path, "class entries must be non-empty strings")
            pure = PurePosixPath(entry.replace("\\", "/"))
            if pure.is_absolute() or ".." in pure.parts:
                raise ManifestParseError(path, f"class entry {entry!r} escapes the classes directory")
            if entry in seen:
                raise ManifestParseError(path, f"duplicate class entry {entry!r}")
            seen.add(entry)

        return cls(classes=tuple(entries))

    @classmethod
    def from_json(cls, text: str, *, path: Path | None = None) -> ClassManifest:
        """Parse classes manifest text."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ManifestParseError(path, str(e)) from e
        return cls.from_dict(data, path=path)

    def to_json(self) -> str:
        """Serialize to indented JSON with a trailing newline."""
        return json.dumps({"classes": list(self.classes)}, indent=2) + "\n"
