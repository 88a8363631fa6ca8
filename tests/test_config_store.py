# ==============================================
# Tests for ConfigStore
# ==============================================

import json

import pytest

from solr_metadata.persistence.config_store import ConfigStore


class TestReadWrite:
    def test_get_absent_path_returns_none(self, store):
        assert store.get("configs.missing.cmodels") is None

    def test_set_creates_parents(self, store):
        store.set("configs.images.label", "Images")
        assert store.get("configs.images") == {"label": "Images"}

    def test_get_returns_a_copy(self, store):
        store.set("configs.images.cmodels", ["a"])
        store.get("configs.images.cmodels").append("b")
        assert store.get("configs.images.cmodels") == ["a"]

    def test_set_replaces_scalar_parent(self, store):
        store.set("configs.images", "not a dict")
        store.set("configs.images.label", "Images")
        assert store.get("configs.images.label") == "Images"

    @pytest.mark.parametrize("path", ["", "configs..images", ".configs", "configs."])
    def test_invalid_paths_rejected(self, store, path):
        with pytest.raises(ValueError):
            store.get(path)


class TestClear:
    def test_clear_removes_subtree(self, store):
        store.set("configs.images.fields", {"dc.title": {"weight": 0}})
        store.set("configs.images.label", "Images")
        assert store.clear("configs.images") is True
        assert store.get("configs.images") is None
        assert store.get("configs") == {}

    def test_clear_absent_path(self, store):
        assert store.clear("configs.images.fields") is False
        assert store.has_pending() is False


class TestSave:
    def test_nothing_written_until_save(self, store):
        store.set("configs.images.label", "Images")
        assert not store.exists()
        assert store.save() is True
        assert store.exists()

    def test_save_writes_json(self, store):
        store.set("configs.images.cmodels", ["islandora:sp_basic_image"])
        store.save()
        with open(store.storage_path) as f:
            assert json.load(f) == {"configs": {"images": {"cmodels": ["islandora:sp_basic_image"]}}}

    def test_save_without_changes_is_noop(self, store):
        assert store.save() is False
        assert not store.exists()

    def test_reads_see_other_writers(self, store):
        store.set("configs.images.label", "Images")
        store.save()

        other = ConfigStore(str(store.storage_path))
        other.set("configs.images.label", "Pictures")
        other.save()

        assert store.get("configs.images.label") == "Pictures"

    def test_pending_changes_win_over_disk(self, store):
        store.set("configs.images.label", "Images")
        store.save()
        store.set("configs.images.label", "Staged")
        assert store.get("configs.images.label") == "Staged"

    def test_no_temporary_file_left(self, store):
        store.set("configs.images.label", "Images")
        store.save()
        assert [p.name for p in store.storage_path.parent.iterdir()] == ["solr_metadata.json"]


class TestMemoryStore:
    def test_memory_store_round_trip(self, memory_store):
        memory_store.set("configs.images.label", "Images")
        assert memory_store.save() is True
        assert memory_store.get("configs.images.label") == "Images"
        assert memory_store.exists() is False
