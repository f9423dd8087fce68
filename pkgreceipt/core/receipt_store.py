"""Receipt persistence — cache-through reads and atomic writes.

Layout: one ``INSTALL_RECEIPT.json`` (see ``ReceiptSettings.receipt_filename``)
inside each package's metadata directory.

Reads go through a :class:`ReceiptCache`; a blank file is treated as "no
receipt" and is never cached, so a later real write is picked up. Writes
replace the file atomically and update the cache only once the replace has
succeeded, so the cache never holds a receipt the disk does not.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from pkgreceipt.config import ReceiptSettings, config as default_config
from pkgreceipt.core.atomic_write import atomic_write_text
from pkgreceipt.core.codec import ReceiptDecodeError, loads_receipt
from pkgreceipt.core.host import PlatformHost
from pkgreceipt.core.ports import HostIntrospection
from pkgreceipt.core.receipt_cache import ReceiptCache, process_cache
from pkgreceipt.models.receipt import Receipt

logger = logging.getLogger(__name__)


class ReceiptParseError(ValueError):
    """Raised when a receipt file exists but cannot be parsed."""

    def __init__(self, path: Path, cause: Exception) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Cannot parse {self.path}: {cause}")


class ReceiptStore:
    """Loads and writes install receipts.

    Parameters
    ----------
    cache:
        Receipt cache to read through and populate. Defaults to the
        process-wide ``process_cache``.
    host:
        Used for the generic build environment of empty receipts.
    settings:
        Settings to take the tool version and JSON indent from.
    """

    def __init__(
        self,
        cache: ReceiptCache | None = None,
        *,
        host: HostIntrospection | None = None,
        settings: ReceiptSettings | None = None,
    ) -> None:
        self._cache = cache if cache is not None else process_cache
        self._host = host or PlatformHost()
        self._settings = settings or default_config

    @property
    def cache(self) -> ReceiptCache:
        """The cache this store reads through."""
        return self._cache

    def empty(self) -> Receipt:
        """Return a receipt with no install metadata."""
        return Receipt.empty(
            tool_version=self._settings.tool_version,
            installed_on=self._host.generic_build_environment(),
        )

    def describe(self, receipt: Receipt) -> str:
        """Return ``receipt.display_text()`` labelled from this store's settings."""
        return receipt.display_text(self._settings.remote_index_name)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def load(self, path: Path | str) -> Receipt:
        """Return the receipt stored at *path*.

        Checks the cache first; otherwise reads and parses the file and
        caches the result. A blank file yields :meth:`empty` and is not
        cached.

        Raises
        ------
        FileNotFoundError
            If *path* does not exist.
        ReceiptParseError
            If the file content is not a valid receipt.
        """
        path = Path(path)
        cached = self._cache.get(path)
        if cached is not None:
            logger.debug("Receipt cache hit for %s", path)
            return cached

        content = path.read_bytes()
        if not content.strip():
            logger.warning("Receipt file %s is blank; treating as absent", path)
            return self.empty()

        receipt = self.load_raw(content, path)
        self._cache.put(path, receipt)
        logger.debug("Loaded receipt from %s", path)
        return receipt

    def load_raw(self, content: str | bytes, path: Path | str) -> Receipt:
        """Parse *content* as the receipt stored at *path*, bypassing the cache.

        *content* may be the text or the raw UTF-8 bytes of the file.
        """
        path = Path(path)
        try:
            attributes = loads_receipt(content)
            receipt = Receipt.model_validate(attributes)
        except (ReceiptDecodeError, ValidationError, RecursionError) as exc:
            raise ReceiptParseError(path, exc) from exc

        receipt.receipt_path = path
        return receipt

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def write(self, receipt: Receipt) -> None:
        """Persist *receipt* atomically to its ``receipt_path``.

        On failure the previous file and the cache are left unchanged and
        the ``OSError`` propagates.

        Raises
        ------
        ValueError
            If the receipt has no ``receipt_path``.
        """
        if receipt.receipt_path is None:
            raise ValueError("Cannot write a receipt without a receipt_path")

        atomic_write_text(
            receipt.receipt_path,
            receipt.to_json(indent=self._settings.json_indent),
        )
        self._cache.put(receipt.receipt_path, receipt)
        logger.debug("Wrote receipt to %s", receipt.receipt_path)
