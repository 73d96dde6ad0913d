"""Tests for source collection."""
from __future__ import annotations

from pathlib import Path

import pytest


def _write(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


class TestCollectAuxiliary:
    """Tests for collect_auxiliary."""

    def test_declared_order_wins(self, tmp_path: Path) -> None:
        """Units follow classes.manifest, not directory order."""
        from psmodbuild.sources.collector import SourceRoot, collect_auxiliary

        classes = tmp_path / "classes"
        for name in ("A.ps1", "B.ps1", "C.ps1"):
            _write(classes / name, f"class {name[0]} {{}}\n")
        _write(classes / "classes.manifest", '{"classes": ["C.ps1", "A.ps1", "B.ps1"]}')

        units = collect_auxiliary(classes)

        assert [u.path.name for u in units] == ["C.ps1", "A.ps1", "B.ps1"]
        assert all(u.root is SourceRoot.CLASSES for u in units)

    def test_nested_entry(self, tmp_path: Path) -> None:
        """Entries may point into subdirectories."""
        from psmodbuild.sources.collector import collect_auxiliary

        classes = tmp_path / "classes"
        _write(classes / "types" / "Point.ps1")
        _write(classes / "classes.manifest", '{"classes": ["types/Point.ps1"]}')

        units = collect_auxiliary(classes)

        assert [str(u.relative_path) for u in units] == ["types/Point.ps1"]

    def test_missing_listed_file(self, tmp_path: Path) -> None:
        """A listed file that does not exist is fatal."""
        from psmodbuild.errors import MissingClassFileError
        from psmodbuild.sources.collector import collect_auxiliary

        classes = tmp_path / "classes"
        _write(classes / "classes.manifest", '{"classes": ["Gone.ps1"]}')

        with pytest.raises(MissingClassFileError):
            collect_auxiliary(classes)

    def test_no_classes_directory(self, tmp_path: Path) -> None:
        """A module without classes/ has no class units."""
        from psmodbuild.sources.collector import collect_auxiliary

        assert collect_auxiliary(tmp_path / "classes") == []

    def test_skips_self_reference(self, tmp_path: Path) -> None:
        """The classes manifest never lists itself as a class."""
        from psmodbuild.sources.collector import collect_auxiliary

        classes = tmp_path / "classes"
        _write(classes / "A.ps1")
        _write(classes / "classes.manifest", '{"classes": ["classes.manifest", "A.ps1"]}')

        assert [u.path.name for u in collect_auxiliary(classes)] == ["A.ps1"]


class TestCollectDirectory:
    """Tests for collect_directory."""

    def test_partitions_scripts_and_assets(self, tmp_path: Path) -> None:
        """Scripts are assembled, other files copied, housekeeping dropped."""
        from psmodbuild.sources.collector import SourceRoot, collect_directory

        public = tmp_path / "public"
        _write(public / "Get-B.ps1")
        _write(public / "Get-A.PS1")
        _write(public / "data" / "table.json", "{}")
        _write(public / ".gitkeep")
        _write(public / ".git" / "config")

        collected = collect_directory(public, SourceRoot.PUBLIC)

        assert [u.path.name for u in collected.assemble] == ["Get-A.PS1", "Get-B.ps1"]
        assert [str(u.relative_path) for u in collected.copy_verbatim] == ["data/table.json"]

    def test_logical_name_is_file_stem(self, tmp_path: Path) -> None:
        """Public routine names come from the file name."""
        from psmodbuild.sources.collector import SourceRoot, collect_directory

        _write(tmp_path / "Invoke-Thing.ps1")

        collected = collect_directory(tmp_path, SourceRoot.PUBLIC)

        assert collected.assemble[0].logical_name == "Invoke-Thing"
        assert collected.assemble[0].extension == ".ps1"

    def test_recursive_order_is_stable(self, tmp_path: Path) -> None:
        """Subdirectories are walked in sorted order."""
        from psmodbuild.sources.collector import SourceRoot, collect_directory

        _write(tmp_path / "b" / "Two.ps1")
        _write(tmp_path / "a" / "One.ps1")
        _write(tmp_path / "Zero.ps1")

        collected = collect_directory(tmp_path, SourceRoot.PRIVATE)

        assert [str(u.relative_path) for u in collected.assemble] == [
            "Zero.ps1",
            "a/One.ps1",
            "b/Two.ps1",
        ]

    def test_exclude_names(self, tmp_path: Path) -> None:
        """Excluded file names are dropped entirely."""
        from psmodbuild.sources.collector import SourceRoot, collect_directory

        _write(tmp_path / "classes.manifest", "{}")
        _write(tmp_path / "Native.cs")

        collected = collect_directory(
            tmp_path, SourceRoot.CLASSES, exclude_names=frozenset(["classes.manifest"])
        )

        assert [u.path.name for u in collected.copy_verbatim] == ["Native.cs"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        """A missing root yields nothing."""
        from psmodbuild.sources.collector import SourceRoot, collect_directory

        collected = collect_directory(tmp_path / "private", SourceRoot.PRIVATE)

        assert collected.assemble == []
        assert collected.copy_verbatim == []


class TestCollectRootExtras:
    """Tests for collect_root_extras."""

    def test_lists_files_and_opaque_trees(self, tmp_path: Path) -> None:
        """Root files and non-reserved directories are included."""
        from psmodbuild.sources.collector import SourceRoot, collect_root_extras

        _write(tmp_path / "README.md")
        _write(tmp_path / "Sample.manifest")
        _write(tmp_path / "build.ps1")
        _write(tmp_path / ".gitignore")
        _write(tmp_path / "en-US" / "about_Sample.help.txt")
        _write(tmp_path / "public" / "Greet.ps1")
        _write(tmp_path / "build" / "output" / "stale.txt")

        units = collect_root_extras(tmp_path, frozenset(["Sample.manifest", "build.ps1"]))

        assert [str(u.relative_path) for u in units] == ["README.md", "en-US/about_Sample.help.txt"]
        assert all(u.root is SourceRoot.PROJECT for u in units)
