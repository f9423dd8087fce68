"""pkgreceipt data models — all Pydantic v2."""

from pkgreceipt.models.dependencies import (
    RESOLVABLE_KINDS,
    DependencyKind,
    DependencyRecord,
)
from pkgreceipt.models.receipt import PERSISTED_KEYS, Receipt, SourceDescriptor

__all__ = [
    # dependencies
    "DependencyKind",
    "DependencyRecord",
    "RESOLVABLE_KINDS",
    # receipt
    "PERSISTED_KEYS",
    "Receipt",
    "SourceDescriptor",
]
