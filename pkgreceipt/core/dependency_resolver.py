"""Dependency snapshot — pins declared dependencies to resolved versions.

At receipt creation every identifier of a resolvable kind is looked up and
recorded with the exact version that was present at install time. Later
operations (upgrade, dependency-graph reconstruction) read this snapshot
instead of re-resolving.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pkgreceipt.core.ports import DependencyLocator, Package
from pkgreceipt.models.dependencies import (
    DependencyKind,
    DependencyRecord,
    is_resolvable,
    kind_name,
)

logger = logging.getLogger(__name__)


class DependencyNotFoundError(LookupError):
    """Raised when a declared dependency cannot be located."""

    def __init__(self, kind: str, identifier: str) -> None:
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"No {kind} named {identifier!r} could be located")


def resolve_dependency_snapshot(
    package: Package,
    declared: Mapping[str, Any],
    locator: DependencyLocator,
) -> dict[str, Any]:
    """Return the dependency snapshot for *package*.

    The result has the same kinds, in the same order, as *declared*, and
    each kind keeps its declaration order (no deduplication).

    Parameters
    ----------
    package:
        The package being installed. Its own ``declared_dependencies``
        decide ``declared_directly``.
    declared:
        Dependency map to snapshot. May contain indirect entries that the
        package does not itself declare. A bare string for a resolvable
        kind is a single identifier.
    locator:
        Resolves identifiers of resolvable kinds.

    Raises
    ------
    DependencyNotFoundError
        If any identifier of a resolvable kind cannot be located. No
        partial snapshot is returned.
    """
    direct = package.declared_dependencies
    snapshot: dict[str, Any] = {}

    for kind, deps in declared.items():
        name = kind_name(kind)
        if not is_resolvable(name):
            snapshot[name] = deps
            continue

        if isinstance(deps, str):
            deps = [deps]
        own = _own_declarations(direct, name)
        snapshot[name] = [
            _pin(name, identifier, locator, declared_directly=identifier in own)
            for identifier in deps
        ]

    logger.debug(
        "Resolved dependency snapshot: %s",
        {k: len(v) if isinstance(v, list) else v for k, v in snapshot.items()},
    )
    return snapshot


def _own_declarations(direct: Mapping[Any, Sequence[Any]], kind: str) -> set[Any]:
    for key, values in direct.items():
        if kind_name(key) == kind:
            return {values} if isinstance(values, str) else set(values)
    return set()


def _pin(
    kind: str,
    identifier: str,
    locator: DependencyLocator,
    *,
    declared_directly: bool,
) -> DependencyRecord:
    resolved = locator.locate(kind, identifier)

    if kind == DependencyKind.FORMULA.value:
        return DependencyRecord(
            full_name=resolved.full_name,
            version=str(resolved.version),
            revision=resolved.revision,
            pkg_version=None if resolved.pkg_version is None else str(resolved.pkg_version),
            declared_directly=declared_directly,
        )

    return DependencyRecord(
        full_name=resolved.full_name,
        version=str(resolved.version),
        declared_directly=declared_directly,
    )
