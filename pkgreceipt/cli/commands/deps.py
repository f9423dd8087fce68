"""``pkgreceipt deps RECEIPT`` — list the dependency versions a receipt pinned."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pkgreceipt.cli.commands._loading import load_or_exit
from pkgreceipt.models.dependencies import DependencyRecord

console = Console()


def deps_cmd(
    receipt_file: Path = typer.Argument(
        ...,
        help="Path to an INSTALL_RECEIPT.json file.",
    ),
    kind: str = typer.Option(
        None,
        "--kind",
        "-k",
        help="Only show dependencies of this kind (e.g. cask, formula).",
    ),
) -> None:
    """Show the dependency snapshot recorded at install time."""
    receipt = load_or_exit(receipt_file, console)

    dependencies = receipt.dependencies or {}
    if kind is not None:
        dependencies = {k: v for k, v in dependencies.items() if k == kind}

    if not dependencies:
        console.print("[dim]No dependencies recorded.[/dim]")
        return

    table = Table(title="Dependencies")
    table.add_column("Kind", style="cyan")
    table.add_column("Name")
    table.add_column("Version", style="green")
    table.add_column("Revision", justify="right")
    table.add_column("Direct", justify="center")

    for dep_kind, deps in dependencies.items():
        if not isinstance(deps, list):
            table.add_row(dep_kind, escape(json.dumps(deps)), "", "", "")
            continue
        for dep in deps:
            if isinstance(dep, DependencyRecord):
                direct = "[green]Yes[/green]" if dep.declared_directly else "[dim]No[/dim]"
                revision = "" if dep.revision is None else str(dep.revision)
                table.add_row(dep_kind, escape(dep.full_name), escape(dep.version), revision, direct)
            else:
                table.add_row(dep_kind, escape(json.dumps(dep)), "", "", "")

    console.print(table)
