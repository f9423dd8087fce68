"""Receipt factory — builds receipts for new and existing installs.

Three entry points:
- ``create``: a full receipt for a package being installed right now.
- ``for_package``: the on-disk receipt if there is one, else a partial
  receipt synthesized from the package definition.
- ``empty``: a receipt with no install metadata at all.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pkgreceipt.config import ReceiptSettings, config as default_config
from pkgreceipt.core.dependency_resolver import resolve_dependency_snapshot
from pkgreceipt.core.host import PlatformHost
from pkgreceipt.core.ports import DependencyLocator, HostIntrospection, Package
from pkgreceipt.core.receipt_store import ReceiptStore
from pkgreceipt.models.receipt import Receipt, SourceDescriptor

logger = logging.getLogger(__name__)


class ReceiptFactory:
    """Builds :class:`Receipt` objects from package definitions.

    Parameters
    ----------
    locator:
        Resolves dependency identifiers when snapshotting dependencies.
    store:
        Used by :meth:`for_package` to load existing receipts.
    host:
        Host introspection for ``arch`` and ``installed_on``.
    settings:
        Settings to take the tool version and receipt filename from.
    """

    def __init__(
        self,
        locator: DependencyLocator,
        store: ReceiptStore | None = None,
        *,
        host: HostIntrospection | None = None,
        settings: ReceiptSettings | None = None,
    ) -> None:
        self._locator = locator
        self._host = host or PlatformHost()
        self._settings = settings or default_config
        self._store = store or ReceiptStore(host=self._host, settings=self._settings)

    def receipt_path_for(self, package: Package) -> Path:
        """Return where *package*'s receipt lives."""
        return Path(package.metadata_directory) / self._settings.receipt_filename

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    def create(
        self,
        package: Package,
        dependencies: Mapping[str, Any] | None = None,
    ) -> Receipt:
        """Build a full receipt for a new install of *package*.

        Parameters
        ----------
        package:
            The package being installed.
        dependencies:
            Dependency map to snapshot; defaults to the package's own
            declarations. May include indirect entries.

        Raises
        ------
        pkgreceipt.core.dependency_resolver.DependencyNotFoundError
            If a dependency cannot be located. No receipt is built.
        """
        declared = package.declared_dependencies if dependencies is None else dependencies
        snapshot = resolve_dependency_snapshot(package, declared, self._locator)

        receipt = Receipt(
            tool_version=self._settings.tool_version,
            receipt_path=self.receipt_path_for(package),
            loaded_from_api=package.loaded_from_remote_index,
            installed_as_dependency=False,
            installed_on_request=False,
            time=int(time.time()),
            dependencies=snapshot,
            arch=self._host.cpu_arch(),
            source=self._source_for(package),
            installed_on=self._host.current_build_environment(),
            artifacts=list(package.artifact_declarations),
        )
        logger.info(
            "Created receipt for %s %s at %s",
            package.source_file_path,
            package.version,
            receipt.receipt_path,
        )
        return receipt

    def for_package(self, package: Package) -> Receipt:
        """Return the receipt for an existing package.

        Loads the receipt file if it exists. Otherwise returns an
        :meth:`empty` receipt whose ``source`` and ``artifacts`` are filled
        in from *package*, so callers always get a receipt back.
        """
        path = self.receipt_path_for(package)
        if path.exists():
            return self._store.load(path)

        logger.debug("No receipt at %s; synthesizing one from the package", path)
        receipt = self.empty()
        receipt.source = self._source_for(package)
        receipt.artifacts = list(package.artifact_declarations)
        return receipt

    def empty(self) -> Receipt:
        """Return a receipt with no install metadata."""
        return self._store.empty()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _source_for(package: Package) -> SourceDescriptor:
        """Describe where *package* came from.

        ``tap_git_head`` is only filled if the repository is installed locally.
        """
        repository = package.repository
        git_head = None
        if repository is not None and repository.is_installed_locally():
            git_head = repository.current_revision()

        return SourceDescriptor(
            path=str(package.source_file_path),
            tap=repository.name if repository is not None else None,
            tap_git_head=git_head,
            version=str(package.version),
        )
