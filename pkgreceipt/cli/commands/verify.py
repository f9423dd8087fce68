"""``pkgreceipt verify RECEIPT`` — check that a receipt file parses."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from pkgreceipt.cli.commands._loading import load_or_exit

console = Console()


def verify_cmd(
    receipt_file: Path = typer.Argument(
        ...,
        help="Path to an INSTALL_RECEIPT.json file.",
    ),
) -> None:
    """Exit 0 if the receipt parses, 1 if it is missing or corrupt."""
    receipt = load_or_exit(receipt_file, console)
    if receipt.time is None:
        console.print(f"[yellow]Receipt is empty:[/yellow] {escape(str(receipt_file))}")
        return
    console.print(f"[bold green]OK[/bold green] {escape(str(receipt_file))}: {receipt.display_text()}")
