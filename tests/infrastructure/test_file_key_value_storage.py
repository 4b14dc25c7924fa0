"""Tests for the file-backed key-value storage."""

import json

import pytest

from orderform.application.order_store import ORDERS_SLOT, OrderStore
from orderform.infrastructure.persistence.file_key_value_storage import (
    FileKeyValueStorage,
)


class TestFileKeyValueStorage:

    def test_missing_key(self, tmp_path):
        assert FileKeyValueStorage(tmp_path).get_item("nothing") is None

    def test_set_then_get(self, tmp_path):
        storage = FileKeyValueStorage(tmp_path / "data")
        storage.set_item(ORDERS_SLOT, "[]")
        assert storage.get_item(ORDERS_SLOT) == "[]"
        assert (tmp_path / "data" / f"{ORDERS_SLOT}.json").is_file()

    def test_overwrite(self, tmp_path):
        storage = FileKeyValueStorage(tmp_path)
        storage.set_item("k", "one")
        storage.set_item("k", "two")
        assert storage.get_item("k") == "two"

    @pytest.mark.parametrize("key", ["../escape", "a/b", "", ".hidden"])
    def test_unsafe_keys_rejected(self, tmp_path, key):
        with pytest.raises(ValueError, match="Invalid storage key"):
            FileKeyValueStorage(tmp_path).set_item(key, "x")

    def test_store_reads_legacy_file(self, tmp_path):
        (tmp_path / f"{ORDERS_SLOT}.json").write_text(
            json.dumps([
                {
                    "id": 1,
                    "customerName": "Ana",
                    "contactInfo": "09171234567",
                    "deliveryMethod": "Pickup",
                    "address": "",
                    "product": "Keychains",
                    "quantity": 2,
                }
            ]),
            encoding="utf-8",
        )
        store = OrderStore(FileKeyValueStorage(tmp_path))
        store.load()
        [order] = store.list()
        assert order.total_price.amount == 100
