"""Validate command implementation."""
from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape

from psmodbuild.cli.config import get_config
from psmodbuild.validate import validate_layout

console = Console()
err_console = Console(stderr=True)


def run_validate(*, root: Path | None, name: str | None) -> None:
    """Execute validate command."""
    module_root = root or Path.cwd()
    console.print(f"[blue]i[/blue] Validating module structure in {escape(str(module_root))}...")

    report = validate_layout(module_root, name or get_config().module_name or None)

    for warning in report.warnings:
        console.print(f"[yellow]![/yellow] {escape(warning)}")

    if report.manifest is not None:
        console.print(f"[green]✓[/green] Module manifest found: {report.manifest.name}")

    # Report results
    if report.errors:
        err_console.print(f"\n[red]✗[/red] Found {len(report.errors)} validation errors:")
        for err in report.errors:
            err_console.print(f"  • {escape(err)}")
        raise SystemExit(1)

    console.print(f"[green]✓[/green] Module layout valid ({report.class_count} classes)")
