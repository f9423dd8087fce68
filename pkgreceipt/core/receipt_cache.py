"""Process-wide receipt cache, keyed by receipt path.

The cache is filled lazily by reads and on every successful write; nothing
evicts entries. It has no locking and assumes one writer per receipt path
per process.
"""

from __future__ import annotations

from pathlib import Path

from pkgreceipt.models.receipt import Receipt


def cache_key(path: Path | str) -> Path:
    """Normalize *path* to the absolute form used as a cache key."""
    return Path(path).expanduser().absolute()


class ReceiptCache:
    """Path -> Receipt store shared by loaders and writers."""

    def __init__(self) -> None:
        self._entries: dict[Path, Receipt] = {}

    def get(self, path: Path | str) -> Receipt | None:
        """Return the cached receipt for *path*, or ``None``."""
        return self._entries.get(cache_key(path))

    def put(self, path: Path | str, receipt: Receipt) -> None:
        """Store *receipt* for *path*, replacing any earlier entry."""
        self._entries[cache_key(path)] = receipt

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        return cache_key(path) in self._entries

    def __len__(self) -> int:
        return len(self._entries)


# Shared by every ReceiptStore not given its own cache.
process_cache = ReceiptCache()
