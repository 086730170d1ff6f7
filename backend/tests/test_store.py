"""
Tests for the JSON file campaign store.
"""
import json
import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from campaign_tracker import database
from campaign_tracker.database import CampaignStore, StorageError, get_store


def test_load_all_creates_missing_document(store):
    assert not store.path.exists()

    assert store.load_all() == []
    assert store.path.exists()
    assert json.loads(store.path.read_text(encoding="utf-8")) == []


def test_save_then_load_preserves_records_and_order(store):
    campaigns = [
        {"id": "a1", "campaignName": "Launch", "clientName": "Acme", "startDate": "2024-01-01", "status": "Active"},
        {"id": "b2", "campaignName": "Relaunch", "clientName": "Globex", "startDate": "2024-02-01", "status": "Paused"},
    ]

    store.save_all(campaigns)

    assert store.load_all() == campaigns


def test_load_then_save_is_idempotent(store):
    store.save_all([{"id": "a1", "campaignName": "Launch", "extra": {"nested": [1, 2]}}])
    before = store.load_all()

    store.save_all(store.load_all())

    assert store.load_all() == before


def test_save_all_pretty_prints(store):
    store.save_all([{"id": "a1"}])

    text = store.path.read_text(encoding="utf-8")
    assert text == json.dumps([{"id": "a1"}], indent=2)


def test_save_all_leaves_no_temp_files(store):
    store.save_all([{"id": "a1"}])
    store.save_all([{"id": "a2"}])

    assert [p.name for p in store.path.parent.iterdir()] == ["campaigns.json"]


def test_malformed_document_is_treated_as_empty(store, caplog):
    store.path.parent.mkdir(parents=True)
    store.path.write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="campaign_tracker.database"):
        assert store.load_all() == []

    assert "not valid JSON" in caplog.text


def test_non_list_document_is_treated_as_empty(store):
    store.path.parent.mkdir(parents=True)
    store.path.write_text('{"id": "a1"}', encoding="utf-8")

    assert store.load_all() == []


def test_document_with_non_object_entries_is_treated_as_empty(store, caplog):
    store.path.parent.mkdir(parents=True)
    store.path.write_text('[{"id": "a1"}, 1, 2]', encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="campaign_tracker.database"):
        assert store.load_all() == []

    assert "not objects" in caplog.text


def test_empty_file_is_treated_as_empty(store):
    store.path.parent.mkdir(parents=True)
    store.path.write_text("", encoding="utf-8")

    assert store.load_all() == []


def test_unreadable_path_raises_storage_error(tmp_path):
    # A directory where the document should be cannot be read as a file
    path = tmp_path / "campaigns.json"
    path.mkdir()
    store = CampaignStore(path)

    with pytest.raises(StorageError):
        store.load_all()

    with pytest.raises(StorageError):
        store.save_all([])


def test_generate_id_is_unique():
    ids = [CampaignStore.generate_id() for _ in range(1000)]

    assert all(ids)
    assert len(set(ids)) == 1000


def test_generate_id_is_lowercase_base36():
    new_id = CampaignStore.generate_id()

    assert new_id.isalnum()
    assert new_id == new_id.lower()


def test_get_store_returns_one_instance_across_threads(monkeypatch):
    monkeypatch.setattr(database, "_store", None)

    with ThreadPoolExecutor(max_workers=16) as pool:
        stores = list(pool.map(lambda _: get_store(), range(64)))

    assert all(s is stores[0] for s in stores)
