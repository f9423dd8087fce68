"""Shared receipt loading for CLI commands."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from pkgreceipt.core.receipt_store import ReceiptParseError, ReceiptStore
from pkgreceipt.models.receipt import Receipt


def load_or_exit(receipt_file: Path, console: Console) -> Receipt:
    """Load *receipt_file*, printing an error and exiting 1 on failure."""
    try:
        return ReceiptStore().load(receipt_file)
    except FileNotFoundError:
        console.print(f"[bold red]Receipt not found:[/bold red] {escape(str(receipt_file))}")
        raise typer.Exit(code=1)
    except ReceiptParseError as exc:
        console.print(f"[bold red]Corrupt receipt:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)
