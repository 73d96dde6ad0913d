"""Tests for the manifest store."""
from __future__ import annotations

import json
from pathlib import Path

import pytest


class TestEnsureManifest:
    """Tests for ensure_manifest."""

    def test_creates_manifest_when_absent(self, tmp_path: Path) -> None:
        """A missing manifest is created at 1.0.0 named after the directory."""
        from psmodbuild.manifest.store import ensure_manifest

        root = tmp_path / "Sample"
        root.mkdir()

        manifest = ensure_manifest(root)

        assert manifest.name == "Sample"
        assert manifest.version == "1.0.0"
        data = json.loads((root / "Sample.manifest").read_text())
        assert data["version"] == "1.0.0"

    def test_loads_existing_manifest(self, tmp_path: Path) -> None:
        """An existing manifest is loaded, not overwritten."""
        from psmodbuild.manifest.store import ensure_manifest

        root = tmp_path / "Sample"
        root.mkdir()
        original = '{\n  "name": "Sample",\n  "version": "3.1.4"\n}\n'
        (root / "Sample.manifest").write_text(original)

        manifest = ensure_manifest(root)

        assert manifest.version == "3.1.4"
        assert (root / "Sample.manifest").read_text() == original

    def test_module_name_override(self, tmp_path: Path) -> None:
        """An override replaces the directory name."""
        from psmodbuild.manifest.store import ensure_manifest

        manifest = ensure_manifest(tmp_path, "Custom")

        assert manifest.name == "Custom"
        assert (tmp_path / "Custom.manifest").is_file()

    def test_directory_conflict(self, tmp_path: Path) -> None:
        """A directory at the manifest path is a conflict."""
        from psmodbuild.errors import ManifestPathConflictError
        from psmodbuild.manifest.store import ensure_manifest

        root = tmp_path / "Sample"
        (root / "Sample.manifest").mkdir(parents=True)

        with pytest.raises(ManifestPathConflictError):
            ensure_manifest(root)

    def test_parse_failure(self, tmp_path: Path) -> None:
        """An unparseable manifest is fatal."""
        from psmodbuild.errors import ManifestParseError
        from psmodbuild.manifest.store import ensure_manifest

        root = tmp_path / "Sample"
        root.mkdir()
        (root / "Sample.manifest").write_text("ModuleVersion = '1.0.0'")

        with pytest.raises(ManifestParseError):
            ensure_manifest(root)


class TestLoadClassManifest:
    """Tests for load_class_manifest."""

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        """No classes.manifest means no classes."""
        from psmodbuild.manifest.store import load_class_manifest

        assert load_class_manifest(tmp_path).classes == ()

    def test_reads_entries(self, tmp_path: Path) -> None:
        """Entries are read in order."""
        from psmodbuild.manifest.store import load_class_manifest

        (tmp_path / "classes.manifest").write_text('{"classes": ["B.ps1", "A.ps1"]}')

        assert load_class_manifest(tmp_path).classes == ("B.ps1", "A.ps1")
