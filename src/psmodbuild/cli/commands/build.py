"""Build command implementation."""
from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from psmodbuild._internal.log import configure_logging
from psmodbuild.build import BuildResult, run_build
from psmodbuild.cli.config import get_config
from psmodbuild.errors import BuildError
from psmodbuild.manifest.versioning import BuildMode

console = Console()
err_console = Console(stderr=True)


def run_build_command(
    *,
    mode: BuildMode,
    root: Path | None,
    output: Path | None,
    name: str | None,
    verbose: bool,
) -> None:
    """Execute build command.

    Args:
        mode: setup, build or release.
        root: Module root (defaults to current directory).
        output: Override output root.
        name: Override module name.
        verbose: Log every step.
    """
    config = get_config()
    if verbose:
        configure_logging(verbose=True)

    module_root = root or Path.cwd()
    console.print(f"[blue]i[/blue] Running {mode.value} in {escape(str(module_root))}...")

    try:
        result = run_build(
            module_root,
            mode,
            output_dir=output or config.output_dir,
            module_name=name or config.module_name or None,
            release_version=config.release_version,
        )
    except BuildError as e:
        err_console.print(f"[red]✗[/red] {escape(str(e))}")
        raise SystemExit(1) from None

    if result is None:
        console.print("[green]✓[/green] Module manifest ready")
        return

    if not result.exports_emitted:
        console.print("[yellow]![/yellow] Module exports nothing. Add functions under public/.")

    _print_summary(result)
    console.print(f"[green]✓[/green] Built {escape(str(result.artifact_path))}")


def _print_summary(result: BuildResult) -> None:
    """Print build summary.

    Args:
        result: The completed build.
    """
    table = Table(title="Build Summary")
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("Module", result.module_name)
    table.add_row("Version", result.version)
    table.add_row("Mode", result.mode.value)
    table.add_row("Output", escape(str(result.output_dir)))
    table.add_row("Functions", ", ".join(result.exported_names) or "[dim]none[/dim]")
    table.add_row("Aliases", ", ".join(result.exported_aliases) or "[dim]none[/dim]")
    table.add_row("Copied Files", str(len(result.copied_files)))

    console.print(table)
