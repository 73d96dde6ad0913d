"""Tests for layout validation."""
from __future__ import annotations

from pathlib import Path


class TestValidateLayout:
    """Tests for validate_layout."""

    def test_valid_module(self, sample_module: Path) -> None:
        """A complete module validates with no errors."""
        from psmodbuild.manifest.store import ensure_manifest
        from psmodbuild.validate import validate_layout

        ensure_manifest(sample_module)

        report = validate_layout(sample_module)

        assert report.ok
        assert report.warnings == []
        assert report.class_count == 1
        assert report.manifest == sample_module.resolve() / "Sample.manifest"

    def test_missing_manifest(self, sample_module: Path) -> None:
        """No manifest is an error."""
        from psmodbuild.validate import validate_layout

        report = validate_layout(sample_module)

        assert not report.ok
        assert any("No module manifest" in e for e in report.errors)

    def test_missing_directories_warn(self, tmp_path: Path) -> None:
        """Missing template directories are warnings only."""
        from psmodbuild.manifest.store import ensure_manifest
        from psmodbuild.validate import validate_layout

        ensure_manifest(tmp_path)

        report = validate_layout(tmp_path)

        assert report.ok
        assert len(report.warnings) == 3

    def test_multiple_manifests_warn(self, sample_module: Path) -> None:
        """More than one manifest is flagged."""
        from psmodbuild.manifest.store import ensure_manifest
        from psmodbuild.validate import validate_layout

        ensure_manifest(sample_module)
        (sample_module / "Other.manifest").write_text("{}")

        report = validate_layout(sample_module)

        assert any("Multiple manifest files" in w for w in report.warnings)

    def test_class_problems_are_errors(self, sample_module: Path) -> None:
        """Missing and unsupported class files are reported."""
        from psmodbuild.manifest.store import ensure_manifest
        from psmodbuild.validate import validate_layout

        ensure_manifest(sample_module)
        (sample_module / "classes" / "notes.txt").write_text("")
        (sample_module / "classes" / "classes.manifest").write_text(
            '{"classes": ["A.ps1", "notes.txt"]}'
        )

        report = validate_layout(sample_module)

        assert not report.ok
        assert any("notes.txt" in e for e in report.errors)

    def test_parse_error_reported(self, sample_module: Path) -> None:
        """An unparseable manifest is an error, not an exception."""
        from psmodbuild.validate import validate_layout

        (sample_module / "Sample.manifest").write_text("not json")

        report = validate_layout(sample_module)

        assert not report.ok
        assert any("Invalid manifest" in e for e in report.errors)
