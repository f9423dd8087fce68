"""Tests for ReceiptStore — cache-through loading and atomic writes."""

from __future__ import annotations

import json

import pytest

from pkgreceipt.config import ReceiptSettings, config
from pkgreceipt.core.receipt_cache import ReceiptCache, process_cache
from pkgreceipt.core.receipt_store import ReceiptStore
from pkgreceipt.models.receipt import PERSISTED_KEYS, Receipt


@pytest.fixture
def receipt(factory, make_package, repository):
    repository.installed = True
    pkg = make_package(
        repository=repository,
        declared_dependencies={
            "cask": ["bar"],
            "formula": ["openssl@3"],
            "macos": [">= :sonoma"],
        },
        artifact_declarations=[{"app": ["Foo.app"]}, {"binary": ["foo"]}],
    )
    return factory.create(pkg)


class TestWrite:
    def test_writes_canonical_body(self, store, receipt):
        store.write(receipt)
        body = json.loads(receipt.receipt_path.read_text(encoding="utf-8"))
        assert tuple(body) == PERSISTED_KEYS
        assert body["homebrew_version"] == "4.2.0"
        assert body["dependencies"]["cask"] == [
            {"full_name": "bar", "version": "2.0", "declared_directly": True}
        ]
        assert body["dependencies"]["formula"] == [
            {
                "full_name": "openssl@3",
                "version": "3.3.1",
                "revision": 1,
                "pkg_version": "3.3.1_1",
                "declared_directly": True,
            }
        ]
        assert body["dependencies"]["macos"] == [">= :sonoma"]

    def test_serialization_is_stable(self, store, receipt):
        store.write(receipt)
        first = receipt.receipt_path.read_bytes()
        store.write(receipt)
        assert receipt.receipt_path.read_bytes() == first

    def test_indent_from_settings(self, cache, host, receipt):
        ReceiptStore(cache, host=host, settings=ReceiptSettings(json_indent=4)).write(receipt)
        assert receipt.receipt_path.read_text().startswith('{\n    "homebrew_version"')

    def test_populates_cache(self, store, cache, receipt):
        store.write(receipt)
        assert cache.get(receipt.receipt_path) is receipt

    def test_requires_receipt_path(self, store):
        with pytest.raises(ValueError):
            store.write(Receipt())

    def test_reason_flags_persisted(self, store, receipt):
        receipt.installed_as_dependency = True
        store.write(receipt)
        loaded = ReceiptStore(ReceiptCache()).load(receipt.receipt_path)
        assert loaded.installed_as_dependency is True
        assert loaded.installed_on_request is False


class TestLoad:
    def test_round_trip(self, store, receipt):
        loaded = store.load_raw(receipt.to_json(), receipt.receipt_path)
        assert loaded == receipt
        assert loaded.to_persisted_dict() == receipt.to_persisted_dict()

    def test_load_sets_receipt_path_and_caches(self, store, cache, receipt):
        receipt.receipt_path.parent.mkdir(parents=True)
        receipt.receipt_path.write_text(receipt.to_json(), encoding="utf-8")

        loaded = store.load(receipt.receipt_path)

        assert loaded.receipt_path == receipt.receipt_path
        assert cache.get(receipt.receipt_path) is loaded
        assert store.load(receipt.receipt_path) is loaded

    def test_cache_hit_skips_disk(self, store, receipt):
        store.write(receipt)
        receipt.receipt_path.unlink()
        assert store.load(receipt.receipt_path) is receipt

    def test_cache_key_is_normalized(self, store, receipt, monkeypatch):
        store.write(receipt)
        monkeypatch.chdir(receipt.receipt_path.parent)
        assert store.load("INSTALL_RECEIPT.json") is receipt

    def test_load_raw_bypasses_cache(self, store, cache, receipt):
        store.load_raw(receipt.to_json(), receipt.receipt_path)
        assert receipt.receipt_path not in cache

    def test_missing_file(self, store, tmp_path):
        with pytest.raises(FileNotFoundError):
            store.load(tmp_path / "INSTALL_RECEIPT.json")

    @pytest.mark.parametrize("content", ["", "   \n\t\n"])
    def test_blank_file_is_empty_and_uncached(self, store, cache, tmp_path, content):
        path = tmp_path / "INSTALL_RECEIPT.json"
        path.write_text(content, encoding="utf-8")

        assert store.load(path) == store.empty()
        assert path not in cache

    def test_blank_file_then_real_write(self, store, receipt):
        receipt.receipt_path.parent.mkdir(parents=True)
        receipt.receipt_path.write_text("", encoding="utf-8")
        assert store.load(receipt.receipt_path).time is None

        store.write(receipt)
        assert store.load(receipt.receipt_path) is receipt

    def test_legacy_receipt_with_missing_keys(self, store, tmp_path):
        path = tmp_path / "INSTALL_RECEIPT.json"
        path.write_text('{"homebrew_version": "3.6.0", "time": 1650000000}', encoding="utf-8")

        loaded = store.load(path)

        assert loaded.tool_version == "3.6.0"
        assert loaded.time == 1650000000
        assert loaded.dependencies is None
        assert loaded.artifacts == []
        assert loaded.source.path is None


class TestDescribe:
    def test_uses_injected_remote_index_name(self, store):
        assert store.describe(Receipt(loaded_from_api=True)) == "Installed using the test API"

    def test_default_display_uses_module_config(self, store):
        receipt = Receipt(loaded_from_api=True)
        assert receipt.display_text() == f"Installed using {config.remote_index_name}"
        assert store.describe(receipt) != receipt.display_text()

    def test_without_remote_index(self, store):
        assert store.describe(Receipt()) == "Installed"


class TestProcessCache:
    def test_default_cache_is_shared(self):
        assert ReceiptStore().cache is process_cache
        assert ReceiptStore().cache is ReceiptStore().cache
