"""Atomic file replacement.

Readers of a path written through :func:`atomic_write_text` observe either
the previous complete file or the new complete file, never a mix: the text
goes to a temporary file in the same directory, is flushed to disk, and is
then renamed over the target with :func:`os.replace`.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def atomic_write_text(path: Path, text: str, *, encoding: str = "utf-8") -> None:
    """Replace the contents of *path* with *text* atomically.

    The parent directory is created if needed. On any failure the
    temporary file is removed and the exception propagates; the previous
    contents of *path* are left untouched.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding=encoding) as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        _preserve_mode(path, tmp_path)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise

    logger.debug("Atomically wrote %d bytes to %s", len(text.encode(encoding)), path)


def _preserve_mode(target: Path, tmp_path: Path) -> None:
    """Give the temporary file the target's permissions, or 0o644 for new files."""
    try:
        mode = target.stat().st_mode & 0o777
    except FileNotFoundError:
        mode = 0o644
    os.chmod(tmp_path, mode)
