"""Thin CLI wrapper for mbpatch.

This module provides the command-line interface using Typer.
All business logic is delegated to core modules.
"""

import json
import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.logging import RichHandler

from mbpatch import __version__
from mbpatch.config import get_settings, print_settings_json

app = typer.Typer(
    name="mbpatch",
    help="Multi-boot ramdisk patcher - patch boot ramdisks for multi-booting",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"mbpatch version {__version__}")
        raise typer.Exit()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _print_json(data: Any) -> None:
    console.print(
        json.dumps(data, indent=2), soft_wrap=True, markup=False, emoji=False
    )


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Multi-boot ramdisk patcher - patch boot ramdisks for multi-booting."""
    _configure_logging("DEBUG" if verbose else get_settings().log_level)


@app.command()
def config(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show effective configuration."""
    settings = get_settings()
    if json_output:
        console.print(
            print_settings_json(settings), soft_wrap=True, markup=False, emoji=False
        )
    else:
        console.print("[bold]Effective Configuration:[/bold]")
        console.print()
        console.print("[bold]Paths:[/bold]")
        console.print(f"  Scripts directory:   {settings.scripts_dir}")
        console.print(f"  Inits directory:     {settings.inits_dir}")
        console.print()
        console.print("[bold]Operational:[/bold]")
        console.print(f"  Log level:           {settings.log_level}")
        console.print(f"  Compress output:     {settings.compress_output}")


patchers_app = typer.Typer(help="Inspect available ramdisk patchers")
app.add_typer(patchers_app, name="patchers")


@patchers_app.command("list")
def patchers_list(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """List the identifiers of all ramdisk patchers."""
    from mbpatch.patchers.registry import flavor_for_id, list_patcher_ids

    ids = list_patcher_ids()
    if json_output:
        _print_json([{"id": i, "flavor": flavor_for_id(i).value} for i in ids])
    else:
        console.print(f"[bold]{len(ids)} ramdisk patcher(s):[/bold]")
        for patcher_id in ids:
            console.print(f"  - {patcher_id} ({flavor_for_id(patcher_id).value})")


@app.command()
def detect(
    ramdisk: Annotated[Path, typer.Argument(help="Ramdisk image to inspect")],
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Guess the patcher and release variant for a ramdisk."""
    from mbpatch.errors import PatchError
    from mbpatch.service import detect_ramdisk

    try:
        info = detect_ramdisk(ramdisk)
    except PatchError as e:
        console.print(f"[red]Failed to read ramdisk: {e}[/red]")
        raise typer.Exit(code=1) from None

    if json_output:
        _print_json(
            {
                "patcher_id": info.patcher_id,
                "release": info.release.value,
                "entries": info.entries,
            }
        )
    else:
        console.print(f"  Patcher:  {info.patcher_id}")
        console.print(f"  Release:  {info.release.value}")
        console.print(f"  Entries:  {info.entries}")


@app.command()
def patch(
    ramdisk: Annotated[Path, typer.Argument(help="Ramdisk image to patch")],
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Path of the patched ramdisk"),
    ],
    patcher_id: Annotated[
        str | None,
        typer.Option("--patcher", "-p", help="Patcher ID (guessed if omitted)"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Patch a ramdisk for multi-booting."""
    from mbpatch.errors import PatchError
    from mbpatch.service import patch_ramdisk_file

    settings = get_settings()

    try:
        result = patch_ramdisk_file(
            ramdisk,
            output,
            settings.patcher_paths(),
            patcher_id=patcher_id,
            compress=settings.compress_output,
        )
    except PatchError as e:
        if json_output:
            _print_json({"success": False, "error": e.to_dict()})
        else:
            console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from None

    if json_output:
        _print_json(result.to_dict())
    elif result.outcome.success:
        console.print(f"[green]✓ Patched with {result.patcher_id}[/green]")
        console.print(f"  Release: {result.release.value}")
        console.print(f"  Steps:   {len(result.outcome.completed_steps)}")
        console.print(f"  Output:  {result.output_path}")
    else:
        console.print(
            f"[red]Patching failed at {result.outcome.failed_step}: "
            f"{result.outcome.error}[/red]"
        )

    if not result.outcome.success:
        raise typer.Exit(code=1)


__all__ = ["app"]
