"""``pkgreceipt show RECEIPT`` — summarize an install receipt."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from pkgreceipt.cli.commands._loading import load_or_exit

console = Console()


def _field(value: object, missing: str = "unknown") -> str:
    if value is None or value == "":
        return f"[dim]{missing}[/dim]"
    return escape(str(value))


def show_cmd(
    receipt_file: Path = typer.Argument(
        ...,
        help="Path to an INSTALL_RECEIPT.json file.",
    ),
) -> None:
    """Show where a package came from and how it was installed."""
    receipt = load_or_exit(receipt_file, console)

    source = receipt.source
    reasons = []
    if receipt.installed_on_request:
        reasons.append("on request")
    if receipt.installed_as_dependency:
        reasons.append("as a dependency")

    lines = [
        f"[bold]{receipt.display_text()}[/bold]",
        "",
        f"Tool version:  {_field(receipt.tool_version)}",
        f"Version:       {_field(source.version)}",
        f"Definition:    {_field(source.path)}",
        f"Tap:           {_field(source.tap, 'none')}",
        f"Tap revision:  {_field(source.tap_git_head, 'not recorded')}",
        f"Architecture:  {_field(receipt.arch)}",
        f"Installed:     {_field(', '.join(reasons), 'reason not recorded')}",
        f"Artifacts:     {len(receipt.artifacts)}",
    ]
    if receipt.installed_on:
        lines.append("")
        lines.append("[bold]Build environment[/bold]")
        for key, value in receipt.installed_on.items():
            lines.append(f"  {escape(key)}: {escape(value)}")

    console.print(
        Panel("\n".join(lines), title=escape(str(receipt_file)), border_style="cyan")
    )
