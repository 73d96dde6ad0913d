"""Init command implementation."""
from __future__ import annotations

from pathlib import Path

from rich.console import Console

from psmodbuild.errors import ProjectExistsError
from psmodbuild.scaffold import scaffold_module

console = Console()


def run_init(*, name: str) -> None:
    """Execute init command.

    Args:
        name: Module name.
    """
    console.print(f"[blue]i[/blue] Creating module {name}...")

    try:
        scaffold_module(Path.cwd(), name)
    except ProjectExistsError:
        console.print(f"[red]✗[/red] Directory {name} already exists")
        raise SystemExit(1) from None

    console.print(f"[green]✓[/green] Created module {name}")
    console.print()
    console.print("Next steps:")
    console.print(f"  cd {name}")
    console.print("  psmodbuild validate")
    console.print("  psmodbuild build --mode build")
