"""Tests for the JSON file product store."""
import json
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import pytest

from inventory_api.app.core.errors import StorageError
from inventory_api.app.core.store import ProductStore, next_id, parse_timestamp


def test_missing_file_is_empty(store):
    assert store.list_all() == []
    assert store.find_by_id("1") is None


def test_ensure_exists_creates_empty_array(store, data_file):
    store.ensure_exists()
    assert data_file.read_text(encoding="utf-8") == "[]"
    assert store.list_all() == []


def test_append_assigns_sequential_ids(store):
    first = store.append({"name": "Bolt", "price": 0.5, "quantity": 100})
    second = store.append({"name": "Nut", "price": 0.25, "quantity": 3})
    assert first["id"] == "1"
    assert second["id"] == "2"
    assert [r["id"] for r in store.list_all()] == ["1", "2"]


def test_append_id_exceeds_existing_ids(store):
    store.write_all([{"id": "3", "name": "A"}, {"id": "7", "name": "B"}, {"id": "5", "name": "C"}])
    record = store.append({"name": "D", "price": 1, "quantity": 1})
    assert record["id"] == "8"


def test_non_numeric_ids_are_ignored(store):
    store.write_all([{"id": "abc", "name": "A"}, {"id": "2", "name": "B"}, {"id": "1e3", "name": "C"}])
    assert store.append({"name": "D", "price": 1, "quantity": 1})["id"] == "3"


def test_next_id_on_empty_collection():
    assert next_id([]) == "1"


def test_append_sets_both_timestamps(store):
    record = store.append({"name": "Bolt", "price": 0.5, "quantity": 100})
    assert record["createdAt"] == record["updatedAt"]
    assert record["createdAt"].endswith("Z")
    assert parse_timestamp(record["createdAt"]) == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def test_append_ignores_caller_supplied_protected_fields(store):
    record = store.append({"id": "42", "createdAt": "yesterday", "name": "Bolt", "price": 1, "quantity": 1})
    assert record["id"] == "1"
    assert record["createdAt"] != "yesterday"


def test_find_by_id_returns_appended_record(store):
    record = store.append({"name": "Bolt", "description": "", "price": 0.5, "quantity": 100, "sku": "B-1"})
    assert store.find_by_id(record["id"]) == record


def test_replace_keeps_identity_and_advances_updated_at(store):
    original = store.append({"name": "Bolt", "price": 0.5, "quantity": 100})
    updated = store.replace(original["id"], {"name": "Bolt M6", "price": 0.75, "quantity": 90})
    assert updated["id"] == original["id"]
    assert updated["createdAt"] == original["createdAt"]
    assert parse_timestamp(updated["updatedAt"]) > parse_timestamp(original["updatedAt"])
    assert updated["name"] == "Bolt M6"
    assert store.find_by_id(original["id"]) == updated


def test_replace_cannot_change_protected_fields(store):
    original = store.append({"name": "Bolt", "price": 0.5, "quantity": 100})
    updated = store.replace("1", {"id": "99", "createdAt": "1999-01-01T00:00:00Z", "name": "Bolt"})
    assert updated["id"] == "1"
    assert updated["createdAt"] == original["createdAt"]
    assert store.find_by_id("99") is None


def test_replace_advances_updated_at_with_frozen_clock(data_file):
    frozen = datetime(2024, 1, 1, tzinfo=timezone.utc)
    store = ProductStore(data_file, clock=lambda: frozen)
    original = store.append({"name": "Bolt", "price": 0.5, "quantity": 100})
    first = store.replace("1", {"quantity": 99})
    second = store.replace("1", {"quantity": 98})
    assert parse_timestamp(first["updatedAt"]) > parse_timestamp(original["updatedAt"])
    assert parse_timestamp(second["updatedAt"]) > parse_timestamp(first["updatedAt"])


def test_replace_clears_optional_fields_set_to_none(store):
    store.append({"name": "Bolt", "price": 0.5, "quantity": 100, "sku": "B-1", "category": "Hardware"})
    updated = store.replace("1", {"sku": None, "category": "Fasteners"})
    assert "sku" not in updated
    assert updated["category"] == "Fasteners"
    assert "sku" not in store.find_by_id("1")


def test_replace_unknown_id_returns_none_without_writing(store, data_file):
    store.append({"name": "Bolt", "price": 0.5, "quantity": 100})
    before = data_file.read_text(encoding="utf-8")
    assert store.replace("99", {"name": "Ghost"}) is None
    assert data_file.read_text(encoding="utf-8") == before


def test_remove(store):
    store.append({"name": "Bolt", "price": 0.5, "quantity": 100})
    store.append({"name": "Nut", "price": 0.25, "quantity": 3})
    assert store.remove("1") is True
    assert store.find_by_id("1") is None
    assert [r["id"] for r in store.list_all()] == ["2"]


def test_remove_unknown_id(store):
    store.append({"name": "Bolt", "price": 0.5, "quantity": 100})
    assert store.remove("99") is False
    assert len(store.list_all()) == 1


def test_ids_are_not_reused_after_removing_older_records(store):
    store.append({"name": "Bolt", "price": 0.5, "quantity": 100})
    store.append({"name": "Nut", "price": 0.25, "quantity": 3})
    store.remove("1")
    assert store.append({"name": "Washer", "price": 0.1, "quantity": 50})["id"] == "3"


def test_write_then_read_preserves_order(store):
    records = [
        {"id": "2", "name": "Second", "price": 2.0, "quantity": 2},
        {"id": "1", "name": "First", "price": 1.0, "quantity": 1},
        {"id": "3", "name": "Terceiro ção", "price": 3.0, "quantity": 3},
    ]
    store.write_all(records)
    assert store.list_all() == records


def test_document_is_indented_utf8_array(store, data_file):
    store.append({"name": "Café", "price": 4.0, "quantity": 1})
    text = data_file.read_text(encoding="utf-8")
    assert text.startswith('[\n  {\n    "id": "1"')
    assert "Café" in text
    assert json.loads(text)[0]["name"] == "Café"


def test_no_temporary_files_left_behind(store, data_file):
    store.append({"name": "Bolt", "price": 0.5, "quantity": 100})
    assert [p.name for p in data_file.parent.iterdir()] == ["products.json"]


def test_corrupt_file_raises_storage_error(store, data_file):
    data_file.parent.mkdir(parents=True)
    data_file.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageError):
        store.list_all()


def test_non_array_document_raises_storage_error(store, data_file):
    data_file.parent.mkdir(parents=True)
    data_file.write_text('{"products": []}', encoding="utf-8")
    with pytest.raises(StorageError):
        store.list_all()


def test_mutations_do_not_overwrite_corrupt_file(store, data_file):
    data_file.parent.mkdir(parents=True)
    data_file.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageError):
        store.append({"name": "Bolt", "price": 0.5, "quantity": 100})
    with pytest.raises(StorageError):
        store.remove("1")
    assert data_file.read_text(encoding="utf-8") == "{not json"


def test_concurrent_appends_allocate_distinct_contiguous_ids(data_file):
    store = ProductStore(data_file)
    workers, per_worker = 4, 10

    def add_batch(worker):
        return [store.append({"name": f"item-{worker}-{n}", "price": 1, "quantity": 1})["id"] for n in range(per_worker)]

    with ThreadPoolExecutor(max_workers=workers) as pool:
        ids = [product_id for batch in pool.map(add_batch, range(workers)) for product_id in batch]

    total = workers * per_worker
    assert sorted(ids, key=int) == [str(n) for n in range(1, total + 1)]
    records = ProductStore(data_file).list_all()
    assert len(records) == total
    assert len({r["id"] for r in records}) == total
