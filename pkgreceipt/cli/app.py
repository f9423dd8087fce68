"""Main Typer application — imports and registers all CLI commands.

Entry point: ``pkgreceipt`` (configured via pyproject.toml [project.scripts]).
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from pkgreceipt.cli.commands.deps import deps_cmd
from pkgreceipt.cli.commands.show import show_cmd
from pkgreceipt.cli.commands.verify import verify_cmd
from pkgreceipt.config import config

app = typer.Typer(
    name="pkgreceipt",
    help="pkgreceipt: inspect durable install receipts.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="show", help="Summarize an install receipt.")(show_cmd)
app.command(name="deps", help="List the dependency versions a receipt pinned.")(deps_cmd)
app.command(name="verify", help="Check that a receipt file parses.")(verify_cmd)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log at DEBUG level."
    ),
) -> None:
    """Configure logging for every subcommand."""
    level = logging.DEBUG if verbose or config.debug else config.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
