"""pkgreceipt CLI — Typer-based command-line interface.

Provides the ``pkgreceipt`` command for inspecting install receipts on
disk. All output uses Rich for formatted terminal display.
"""
