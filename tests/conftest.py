"""Shared test fixtures for pkgreceipt."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from pkgreceipt.config import ReceiptSettings
from pkgreceipt.core.dependency_resolver import DependencyNotFoundError
from pkgreceipt.core.factory import ReceiptFactory
from pkgreceipt.core.receipt_cache import ReceiptCache
from pkgreceipt.core.receipt_store import ReceiptStore


# ---------------------------------------------------------------------------
# Fake collaborators
# ---------------------------------------------------------------------------


@dataclass
class FakeRepository:
    name: str
    installed: bool = False
    revision: str = "0f3c1e2d4b5a69788796a5b4c3d2e1f001234567"

    def is_installed_locally(self) -> bool:
        return self.installed

    def current_revision(self) -> str:
        return self.revision


@dataclass
class FakePackage:
    source_file_path: Path
    metadata_directory: Path
    version: str = "1.2.0"
    loaded_from_remote_index: bool = False
    repository: FakeRepository | None = None
    declared_dependencies: dict[str, list[Any]] = field(default_factory=dict)
    artifact_declarations: list[Any] = field(default_factory=list)


@dataclass(frozen=True)
class FakeResolved:
    full_name: str
    version: str
    revision: int | None = None
    pkg_version: str | None = None


class FakeLocator:
    """Resolves from a fixed table and records every lookup."""

    def __init__(self, table: dict[tuple[str, str], FakeResolved] | None = None) -> None:
        self.table = dict(table or {})
        self.calls: list[tuple[str, str]] = []

    def add(self, kind: str, identifier: str, **resolved: Any) -> None:
        self.table[(kind, identifier)] = FakeResolved(**resolved)

    def locate(self, kind: str, identifier: str) -> FakeResolved:
        self.calls.append((kind, identifier))
        try:
            return self.table[(kind, identifier)]
        except KeyError:
            raise DependencyNotFoundError(kind, identifier) from None


class FakeHost:
    def cpu_arch(self) -> str:
        return "arm64"

    def current_build_environment(self) -> dict[str, str]:
        return {
            "os": "Macintosh",
            "os_version": "macOS 14",
            "cpu_family": "arm_firestorm_icestorm",
        }

    def generic_build_environment(self) -> dict[str, str]:
        return {"os": "Macintosh"}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> ReceiptSettings:
    """Settings with a pinned tool version."""
    return ReceiptSettings(tool_version="4.2.0", remote_index_name="the test API")


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def cache() -> ReceiptCache:
    """A fresh cache, isolated from the process-wide one."""
    return ReceiptCache()


@pytest.fixture
def store(cache: ReceiptCache, host: FakeHost, settings: ReceiptSettings) -> ReceiptStore:
    return ReceiptStore(cache, host=host, settings=settings)


@pytest.fixture
def locator() -> FakeLocator:
    loc = FakeLocator()
    loc.add("cask", "bar", full_name="bar", version="2.0")
    loc.add(
        "formula",
        "openssl@3",
        full_name="openssl@3",
        version="3.3.1",
        revision=1,
        pkg_version="3.3.1_1",
    )
    return loc


@pytest.fixture
def factory(
    locator: FakeLocator,
    store: ReceiptStore,
    host: FakeHost,
    settings: ReceiptSettings,
) -> ReceiptFactory:
    return ReceiptFactory(locator, store, host=host, settings=settings)


@pytest.fixture
def make_package(tmp_path: Path) -> Callable[..., FakePackage]:
    """Factory fixture: build a FakePackage rooted in a temp directory."""

    def _factory(token: str = "foo", **overrides: Any) -> FakePackage:
        defaults: dict[str, Any] = {
            "source_file_path": tmp_path / "Casks" / f"{token}.rb",
            "metadata_directory": tmp_path / "Caskroom" / token / ".metadata",
        }
        defaults.update(overrides)
        return FakePackage(**defaults)

    return _factory


@pytest.fixture
def repository() -> FakeRepository:
    """A tap that is known by name but not checked out locally."""
    return FakeRepository(name="acme/tools")
