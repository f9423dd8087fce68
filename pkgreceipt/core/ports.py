"""Protocols for the collaborators a receipt is built from.

The package definition, the dependency locator, the repository ("tap") and
host introspection live outside this library. Anything that provides the
attributes and methods below can be handed to
:class:`pkgreceipt.core.factory.ReceiptFactory`.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class Repository(Protocol):
    """A source repository (tap) that package definitions are loaded from."""

    name: str

    def is_installed_locally(self) -> bool:
        """Return ``True`` if the repository is checked out on this host."""
        ...

    def current_revision(self) -> str:
        """Return the revision (git HEAD) of the local checkout."""
        ...


RepositoryLookup = Callable[[str], "Repository | None"]


@runtime_checkable
class Package(Protocol):
    """A package definition, consumed read-only.

    ``declared_dependencies`` maps a dependency kind to the identifiers the
    package itself declares. ``artifact_declarations`` is copied verbatim
    into the receipt, so it must be JSON-serializable.
    """

    @property
    def source_file_path(self) -> Path | str: ...

    @property
    def metadata_directory(self) -> Path: ...

    @property
    def loaded_from_remote_index(self) -> bool: ...

    @property
    def version(self) -> str: ...

    @property
    def repository(self) -> Repository | None: ...

    @property
    def declared_dependencies(self) -> Mapping[str, Sequence[Any]]: ...

    @property
    def artifact_declarations(self) -> Sequence[Any]: ...


@runtime_checkable
class ResolvedPackage(Protocol):
    """An installed or installable unit a dependency identifier resolved to."""

    full_name: str
    version: str
    revision: int | None
    pkg_version: str | None


@runtime_checkable
class DependencyLocator(Protocol):
    """Maps a dependency identifier of a given kind to a resolved package."""

    def locate(self, kind: str, identifier: str) -> ResolvedPackage:
        """Return the package *identifier* resolves to.

        Raises
        ------
        pkgreceipt.core.dependency_resolver.DependencyNotFoundError
            If *identifier* cannot be located.
        """
        ...


@runtime_checkable
class HostIntrospection(Protocol):
    """Describes the machine a package is being installed on."""

    def cpu_arch(self) -> str:
        """Return the CPU architecture label, e.g. ``arm64``."""
        ...

    def current_build_environment(self) -> dict[str, str]:
        """Return full host / toolchain descriptors for a real install."""
        ...

    def generic_build_environment(self) -> dict[str, str]:
        """Return fallback descriptors used when no install context exists."""
        ...
