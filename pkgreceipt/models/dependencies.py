"""Dependency kinds and the pinned dependency record."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, model_serializer


class DependencyKind(str, Enum):
    """Known kinds of dependency a package can declare.

    * ``cask`` — another package of the same type.
    * ``formula`` — a package of the related build-from-source type.
    * ``macos`` — an operating system version requirement.
    * ``arch`` — a CPU architecture requirement.

    Only the first two are resolved to installed units; every other kind,
    including names not listed here, is recorded exactly as declared.
    """

    CASK = "cask"
    FORMULA = "formula"
    MACOS = "macos"
    ARCH = "arch"


RESOLVABLE_KINDS: frozenset[str] = frozenset(
    {DependencyKind.CASK.value, DependencyKind.FORMULA.value}
)


def kind_name(kind: str | DependencyKind) -> str:
    """Return the plain string name of a dependency kind."""
    return kind.value if isinstance(kind, DependencyKind) else str(kind)


def is_resolvable(kind: str | DependencyKind) -> bool:
    """Return ``True`` if dependencies of *kind* are pinned to installed units."""
    return kind_name(kind) in RESOLVABLE_KINDS


class DependencyRecord(BaseModel):
    """A dependency pinned to the concrete version seen at install time.

    ``revision`` and ``pkg_version`` only exist for ``formula`` dependencies
    and are left out of the serialized form when unset.
    """

    model_config = ConfigDict(frozen=True)

    full_name: str
    version: str
    revision: int | None = None
    pkg_version: str | None = None
    declared_directly: bool = False

    @model_serializer(mode="wrap")
    def _omit_unset_formula_fields(self, handler: Any) -> dict[str, Any]:
        data = handler(self)
        for key in ("revision", "pkg_version"):
            if data.get(key) is None:
                data.pop(key, None)
        return data
