"""
EntityStore: loading, write-through and restore.
"""
import asyncio
import json

from core.persistence import PersistenceAdapter, MemoryBackend
from core.store import EntityStore


class FailingBackend:
    async def get(self, key):
        return None

    async def set(self, key, value):
        raise OSError("quota exceeded")


def _store(backend=None, defaults=None, on_change=None):
    backend = backend or MemoryBackend()
    return backend, EntityStore(PersistenceAdapter(backend), defaults=defaults, on_change=on_change)


# ═══════════════════════════════════════════════════════════════
# 1. LOADING
# ═══════════════════════════════════════════════════════════════
class TestLoadAll:

    def test_defaults_used_for_empty_storage(self):
        _, store = _store(defaults={"projects": [{"id": "p1"}]})
        asyncio.run(store.load_all())
        assert store.all("projects") == [{"id": "p1"}]
        assert store.all("workers") == []

    def test_stored_value_wins_over_default(self):
        backend = MemoryBackend()
        backend.data["sn_projects"] = json.dumps([{"id": "stored"}])
        _, store = _store(backend, defaults={"projects": [{"id": "p1"}]})
        asyncio.run(store.load_all())
        assert store.all("projects") == [{"id": "stored"}]

    def test_non_list_value_falls_back(self):
        backend = MemoryBackend()
        backend.data["sn_bills"] = json.dumps({"oops": True})
        _, store = _store(backend, defaults={"bills": [{"id": "b1"}]})
        asyncio.run(store.load_all())
        assert store.all("bills") == [{"id": "b1"}]

    def test_invalid_json_falls_back(self):
        backend = MemoryBackend()
        backend.data["sn_workers"] = "{{{"
        _, store = _store(backend, defaults={"workers": [{"id": "w1"}]})
        asyncio.run(store.load_all())
        assert store.all("workers") == [{"id": "w1"}]


# ═══════════════════════════════════════════════════════════════
# 2. MUTATIONS
# ═══════════════════════════════════════════════════════════════
class TestWriteThrough:

    def test_add_persists_and_survives_reload(self):
        backend, store = _store()
        asyncio.run(store.add("projects", {"id": "p9", "name": "New"}))
        _, reloaded = _store(backend)
        asyncio.run(reloaded.load_all())
        assert reloaded.get("projects", "p9") == {"id": "p9", "name": "New"}

    def test_change_callback_fires_per_mutation(self):
        calls = []
        _, store = _store(on_change=lambda: calls.append(1))
        asyncio.run(store.add("bills", {"id": "b1"}))
        asyncio.run(store.edit("bills", {"id": "b1", "amount": 5}))
        asyncio.run(store.delete("bills", "b1"))
        assert len(calls) == 3

    def test_filter_by_project(self):
        _, store = _store()
        asyncio.run(store.replace("workers", [{"id": "w1", "projectId": "p1"}, {"id": "w2", "projectId": "p2"}]))
        assert [w["id"] for w in store.all("workers", "p2")] == ["w2"]
        assert len(store.all("workers", "All")) == 2

    def test_bulk_upsert_uses_collection_key(self):
        _, store = _store()
        asyncio.run(store.bulk_upsert("attendance", [{"id": "a", "workerId": "w1", "date": "2024-03-04", "status": "Absent"}]))
        asyncio.run(store.bulk_upsert("attendance", [{"id": "b", "workerId": "w1", "date": "2024-03-04", "status": "Present"}]))
        assert store.all("attendance") == [{"id": "b", "workerId": "w1", "date": "2024-03-04", "status": "Present"}]

    def test_snapshot_is_detached(self):
        _, store = _store()
        asyncio.run(store.add("projects", {"id": "p1", "name": "A"}))
        snap = store.snapshot()
        snap["projects"][0]["name"] = "changed"
        assert store.get("projects", "p1")["name"] == "A"


# ═══════════════════════════════════════════════════════════════
# 3. RESTORE
# ═══════════════════════════════════════════════════════════════
class TestRestore:

    def test_replaces_present_collections_only(self):
        _, store = _store()
        asyncio.run(store.replace("workers", [{"id": "w1"}]))
        restored = asyncio.run(store.restore({"projects": [{"id": "p1"}]}))
        assert restored == ["projects"]
        assert store.all("projects") == [{"id": "p1"}]
        assert store.all("workers") == [{"id": "w1"}]


# ═══════════════════════════════════════════════════════════════
# 4. STORAGE FAILURES
# ═══════════════════════════════════════════════════════════════
class TestSaveFailure:

    def test_change_stands_when_write_fails(self):
        _, store = _store(FailingBackend())
        asyncio.run(store.add("projects", {"id": "x", "name": "Unsaved"}))
        assert store.get("projects", "x") == {"id": "x", "name": "Unsaved"}
        assert store.all("projects") == [{"id": "x", "name": "Unsaved"}]

    def test_later_mutations_build_on_unsaved_state(self):
        calls = []
        _, store = _store(FailingBackend(), on_change=lambda: calls.append(1))
        asyncio.run(store.add("bills", {"id": "b1", "amount": 10}))
        asyncio.run(store.edit("bills", {"id": "b1", "amount": 20}))
        assert store.all("bills") == [{"id": "b1", "amount": 20}]
        assert len(calls) == 2
