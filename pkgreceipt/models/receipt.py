"""Install receipt model — the system of record for one installed package.

A receipt is written once at install time and consulted later by upgrade,
dependency-graph reconstruction and uninstall. Every field is optional with
an explicit default so that partial or legacy receipts still parse.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from pkgreceipt.config import config
from pkgreceipt.core.codec import dumps_receipt
from pkgreceipt.models.dependencies import DependencyRecord, is_resolvable, kind_name

if TYPE_CHECKING:
    from pkgreceipt.core.ports import Repository, RepositoryLookup

logger = logging.getLogger(__name__)

# Top-level keys of the persisted body, in canonical order.
PERSISTED_KEYS: tuple[str, ...] = (
    "homebrew_version",
    "loaded_from_api",
    "installed_as_dependency",
    "installed_on_request",
    "time",
    "dependencies",
    "arch",
    "source",
    "installed_on",
    "artifacts",
)


class SourceDescriptor(BaseModel):
    """Where the package definition came from.

    The four fields are filled together from a real package, or all left
    unset for an empty receipt. ``tap_git_head`` is only known when the
    repository is installed locally.
    """

    model_config = ConfigDict(frozen=True)

    path: str | None = None
    tap: str | None = None
    tap_git_head: str | None = None
    version: str | None = None


class Receipt(BaseModel):
    """An install receipt.

    Fields are declared in persisted order; ``receipt_path`` is last and is
    never written to the body. ``tool_version`` is stored under the
    ``homebrew_version`` key.

    Mutable on purpose: the installer sets ``installed_as_dependency`` and
    ``installed_on_request`` after construction, then calls
    :meth:`pkgreceipt.core.receipt_store.ReceiptStore.write`.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=True,
        extra="ignore",
    )

    tool_version: str | None = Field(default=None, alias="homebrew_version")
    loaded_from_api: bool = False
    installed_as_dependency: bool = False
    installed_on_request: bool = False
    time: int | None = None
    dependencies: dict[str, Any] | None = None
    arch: str | None = None
    source: SourceDescriptor = Field(default_factory=SourceDescriptor)
    installed_on: dict[str, str] = Field(default_factory=dict)
    artifacts: list[Any] = Field(default_factory=list)
    receipt_path: Path | None = Field(default=None, exclude=True)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def empty(
        cls,
        *,
        tool_version: str,
        installed_on: dict[str, str] | None = None,
    ) -> Receipt:
        """Return a receipt with every optional field unset.

        Used when no install metadata exists for a package yet.
        """
        return cls(
            tool_version=tool_version,
            loaded_from_api=False,
            installed_as_dependency=False,
            installed_on_request=False,
            time=None,
            dependencies=None,
            arch=None,
            source=SourceDescriptor(),
            installed_on=dict(installed_on or {}),
            artifacts=[],
        )

    @model_validator(mode="before")
    @classmethod
    def _log_unknown_keys(cls, data: Any) -> Any:
        if isinstance(data, dict):
            known = set(PERSISTED_KEYS) | set(cls.model_fields)
            unknown = sorted(str(k) for k in data if k not in known)
            if unknown:
                logger.debug("Ignoring unknown receipt keys: %s", ", ".join(unknown))
        return data

    @field_validator("dependencies", mode="after")
    @classmethod
    def _pin_resolvable_entries(cls, value: dict[str, Any] | None) -> dict[str, Any] | None:
        """Parse mapping entries of resolvable kinds into DependencyRecords."""
        if value is None:
            return None
        pinned: dict[str, Any] = {}
        for kind, deps in value.items():
            name = kind_name(kind)
            if is_resolvable(name) and isinstance(deps, list):
                deps = [
                    DependencyRecord.model_validate(dep) if isinstance(dep, dict) else dep
                    for dep in deps
                ]
            pinned[name] = deps
        return pinned

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    @field_serializer("dependencies")
    def _serialize_dependencies(self, value: dict[str, Any] | None) -> dict[str, Any] | None:
        if value is None:
            return None
        return {
            kind: (
                [d.model_dump() if isinstance(d, DependencyRecord) else d for d in deps]
                if isinstance(deps, list)
                else deps
            )
            for kind, deps in value.items()
        }

    def to_persisted_dict(self) -> dict[str, Any]:
        """Return the persisted body as a plain dict in canonical key order."""
        data = self.model_dump(mode="json", by_alias=True)
        return {key: data[key] for key in PERSISTED_KEYS}

    def to_json(self, indent: int = 2) -> str:
        """Return the canonical, pretty-printed JSON text of this receipt."""
        return dumps_receipt(self.to_persisted_dict(), indent=indent)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def repository(self, lookup: RepositoryLookup) -> Repository | None:
        """Resolve the recorded tap name to a repository object.

        Returns ``None`` when no tap is recorded or *lookup* does not know it.
        """
        if not self.source.tap:
            return None
        return lookup(self.source.tap)

    def runtime_dependencies(self, kind: str) -> list[DependencyRecord]:
        """Return the pinned records recorded for a resolvable *kind*."""
        deps = (self.dependencies or {}).get(kind_name(kind))
        if not isinstance(deps, list):
            return []
        return [d for d in deps if isinstance(d, DependencyRecord)]

    def display_text(self, remote_index_name: str | None = None) -> str:
        """Short human-readable summary, e.g. ``Installed on 2026-01-02 at 03:04:05``.

        Without *remote_index_name* the label comes from the module-level
        ``pkgreceipt.config.config``; use :meth:`ReceiptStore.describe
        <pkgreceipt.core.receipt_store.ReceiptStore.describe>` to honour
        injected settings.
        """
        if remote_index_name is None:
            remote_index_name = config.remote_index_name

        parts = ["Installed"]
        if self.loaded_from_api:
            parts.append(f"using {remote_index_name}")
        if self.time is not None:
            parts.append(datetime.fromtimestamp(self.time).strftime("on %Y-%m-%d at %H:%M:%S"))
        return " ".join(parts)

    def __str__(self) -> str:
        return self.display_text()
