"""Main CLI entry point using Typer.

This module defines the top-level CLI commands:
- psmodbuild build: Set up, build or release a module
- psmodbuild validate: Check the module layout
- psmodbuild init: Scaffold a new module
"""

from __future__ import annotations

from pathlib import Path  # noqa: TC003 - Typer requires runtime access
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from psmodbuild import __version__
from psmodbuild.manifest.versioning import BuildMode

app = typer.Typer(
    name="psmodbuild",
    help="psmodbuild - script module build tool",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"psmodbuild {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output."),
    ] = False,
) -> None:
    """psmodbuild - script module build tool.

    Use 'psmodbuild COMMAND --help' for information on specific commands.
    """
    from pydantic import ValidationError  # noqa: PLC0415

    from psmodbuild._internal.log import configure_logging  # noqa: PLC0415
    from psmodbuild.cli.config import get_config  # noqa: PLC0415

    try:
        config = get_config()
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        err_console.print(f"[red]✗[/red] Invalid configuration: {escape(problems)}")
        raise SystemExit(1) from None

    configure_logging(verbose=verbose, level=config.log_level)


@app.command()
def build(
    mode: Annotated[
        BuildMode,
        typer.Option("--mode", "-m", help="setup, build or release.", case_sensitive=False),
    ],
    root: Annotated[
        Path | None,
        typer.Option("--root", "-r", help="Module root directory."),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output root (default: build/output)."),
    ] = None,
    name: Annotated[
        str | None,
        typer.Option("--name", "-n", help="Module name (default: root directory name)."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output."),
    ] = False,
) -> None:
    """Set up, build or release a module.

    setup only creates the module manifest if it is missing. build assembles
    the module at the manifest version. release assembles it at the version
    given by the PSModuleVersion environment variable.

    Examples:
        psmodbuild build --mode setup

        psmodbuild build --mode build --verbose

        PSModuleVersion=1.4.0 psmodbuild build --mode release
    """
    from psmodbuild.cli.commands.build import run_build_command  # noqa: PLC0415

    run_build_command(mode=mode, root=root, output=output, name=name, verbose=verbose)


@app.command()
def validate(
    root: Annotated[
        Path | None,
        typer.Option("--root", "-r", help="Module root directory."),
    ] = None,
    name: Annotated[
        str | None,
        typer.Option("--name", "-n", help="Module name (default: root directory name)."),
    ] = None,
) -> None:
    """Validate the module layout.

    Checks:
    - classes, private and public directories exist
    - exactly one module manifest is present and parses
    - every class in classes.manifest exists and is supported

    Examples:
        psmodbuild validate
    """
    from psmodbuild.cli.commands.validate import run_validate  # noqa: PLC0415

    run_validate(root=root, name=name)


@app.command()
def init(
    name: Annotated[str, typer.Argument(help="Module name.")],
) -> None:
    """Initialize a new module.

    Creates the classes/private/public layout with an example function.

    Examples:
        psmodbuild init MyModule
    """
    from psmodbuild.cli.commands.init import run_init  # noqa: PLC0415

    run_init(name=name)


if __name__ == "__main__":
    app()
