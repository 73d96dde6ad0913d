"""Version resolution and manifest stamping.

A build runs in exactly one mode:

- ``build``: the version is the manifest's own version.
- ``release``: the version comes from an externally supplied override
  (the release workflow exports it as an environment variable). A missing
  override is fatal and is never defaulted.

Either way the source manifest is copied to the output directory with only
its version value rewritten.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

import structlog

from psmodbuild._internal import fs
from psmodbuild.errors import InvalidVersionError, MissingVersionError, VersionStampError
from psmodbuild.manifest.model import is_semver

if TYPE_CHECKING:
    from pathlib import Path

    from psmodbuild.manifest.model import ModuleManifest

logger = structlog.get_logger()

RELEASE_VERSION_VARIABLES = ("PSMODBUILD_RELEASE_VERSION", "PSModuleVersion")

_VERSION_KEY = "version"
_JSON_WHITESPACE = " \t\r\n"


class BuildMode(str, Enum):
    """How a build invocation resolves its version."""

    SETUP = "setup"
    BUILD = "build"
    RELEASE = "release"


def normalize_version(value: str) -> str:
    """Strip whitespace and a leading ``v`` (release tags are ``vX.Y.Z``).

    Raises:
        InvalidVersionError: If the result is not MAJOR.MINOR.PATCH.
    """
    version = value.strip()
    if version[:1] in ("v", "V"):
        version = version[1:]
    if not is_semver(version):
        raise InvalidVersionError(value)
    return version


def resolve_version(
    manifest: ModuleManifest,
    mode: BuildMode,
    override_version: str | None = None,
) -> str:
    """Pick the version for this build.

    Args:
        manifest: The module manifest.
        mode: BUILD or RELEASE.
        override_version: Externally supplied version (release only).

    Returns:
        MAJOR.MINOR.PATCH version string.

    Raises:
        MissingVersionError: Release mode without an override.
        InvalidVersionError: Release override is not MAJOR.MINOR.PATCH.
        ValueError: Called with SETUP, which has no version.
    """
    if mode is BuildMode.BUILD:
        return manifest.version

    if mode is BuildMode.RELEASE:
        if not override_version or not override_version.strip():
            raise MissingVersionError(RELEASE_VERSION_VARIABLES)
        version = normalize_version(override_version)
        logger.debug("release_version_resolved", version=version, manifest_version=manifest.version)
        return version

    msg = f"Build mode {mode.value!r} does not resolve a version"
    raise ValueError(msg)


def _string_end(text: str, start: int) -> int:
    """Index just past the JSON string whose opening quote is at `start`."""
    i = start + 1
    while i < len(text):
        if text[i] == "\\":
            i += 2
            continue
        if text[i] == '"':
            return i + 1
        i += 1
    msg = "Manifest has an unterminated string"
    raise VersionStampError(msg)


def _skip_whitespace(text: str, i: int) -> int:
    while i < len(text) and text[i] in _JSON_WHITESPACE:
        i += 1
    return i


def _version_value_span(text: str) -> tuple[int, int] | None:
    """Offsets of the top-level ``"version"`` string value, quotes excluded.

    Only keys directly inside the outermost object count; ``version`` keys
    of nested objects (required modules, dependencies) are skipped.
    """
    depth = 0
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == '"':
            end = _string_end(text, i)
            if depth == 1 and text[i + 1 : end - 1] == _VERSION_KEY:
                colon = _skip_whitespace(text, end)
                if colon < len(text) and text[colon] == ":":
                    value = _skip_whitespace(text, colon + 1)
                    if value < len(text) and text[value] == '"':
                        return value + 1, _string_end(text, value) - 1
            i = end
            continue
        if ch in "{[":
            depth += 1
        elif ch in "}]":
            depth -= 1
        i += 1
    return None


def stamp_version(manifest_text: str, new_version: str) -> str:
    """Rewrite the top-level version value in `manifest_text`.

    Every byte outside the version value is preserved. The key must be
    spelled literally as ``"version"``.

    Raises:
        InvalidVersionError: If `new_version` is not MAJOR.MINOR.PATCH.
        VersionStampError: If the text has no top-level version string.
    """
    if not is_semver(new_version):
        raise InvalidVersionError(new_version)

    span = _version_value_span(manifest_text)
    if span is None:
        msg = 'Manifest has no top-level "version" string to stamp'
        raise VersionStampError(msg)

    start, end = span
    return manifest_text[:start] + new_version + manifest_text[end:]


def stamped_manifest_text(source: Path, version: str) -> str:
    """Read the source manifest and return it with its version rewritten.

    The source file itself is never modified.
    """
    stamped = stamp_version(fs.read_text(source), version)
    logger.debug("manifest_stamped", path=str(source), version=version)
    return stamped
