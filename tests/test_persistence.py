"""
Persistence adapter and key-value backends.
"""
import asyncio
import json

from core.persistence import PersistenceAdapter, MemoryBackend, FileBackend


class BrokenBackend:
    async def get(self, key):
        raise OSError("disk unavailable")

    async def set(self, key, value):
        raise OSError("quota exceeded")


# ═══════════════════════════════════════════════════════════════
# 1. LOAD
# ═══════════════════════════════════════════════════════════════
class TestLoad:

    def test_missing_key_returns_default(self):
        adapter = PersistenceAdapter(MemoryBackend())
        assert asyncio.run(adapter.load("sn_projects", [{"id": "seed"}])) == [{"id": "seed"}]

    def test_invalid_json_returns_default(self):
        backend = MemoryBackend()
        backend.data["sn_projects"] = "{not json"
        adapter = PersistenceAdapter(backend)
        assert asyncio.run(adapter.load("sn_projects", [])) == []

    def test_default_is_copied(self):
        default = [{"id": "seed"}]
        adapter = PersistenceAdapter(MemoryBackend())
        loaded = asyncio.run(adapter.load("sn_projects", default))
        loaded[0]["id"] = "changed"
        assert default == [{"id": "seed"}]

    def test_read_failure_returns_default(self):
        adapter = PersistenceAdapter(BrokenBackend())
        assert asyncio.run(adapter.load("sn_projects", ["fallback"])) == ["fallback"]


# ═══════════════════════════════════════════════════════════════
# 2. SAVE
# ═══════════════════════════════════════════════════════════════
class TestSave:

    def test_round_trip(self):
        adapter = PersistenceAdapter(MemoryBackend())
        value = [{"id": "p1", "name": "Green Valley", "budget": 100000.5, "pours": [{"label": "Pour 1"}]}]
        assert asyncio.run(adapter.save("sn_projects", value)) is True
        assert asyncio.run(adapter.load("sn_projects", [])) == value

    def test_write_failure_is_swallowed(self):
        adapter = PersistenceAdapter(BrokenBackend())
        assert asyncio.run(adapter.save("sn_projects", [1, 2])) is False

    def test_boolean_flag(self):
        adapter = PersistenceAdapter(MemoryBackend())
        asyncio.run(adapter.save("sn_auth", True))
        assert asyncio.run(adapter.load("sn_auth", False)) is True


# ═══════════════════════════════════════════════════════════════
# 3. FILE BACKEND
# ═══════════════════════════════════════════════════════════════
class TestFileBackend:

    def test_writes_one_file_per_key(self, tmp_path):
        adapter = PersistenceAdapter(FileBackend(tmp_path))
        asyncio.run(adapter.save("sn_workers", [{"id": "w1"}]))
        path = tmp_path / "sn_workers.json"
        assert path.exists()
        assert json.loads(path.read_text(encoding="utf-8")) == [{"id": "w1"}]

    def test_survives_new_adapter(self, tmp_path):
        asyncio.run(PersistenceAdapter(FileBackend(tmp_path)).save("sn_bills", [{"id": "b1"}]))
        reloaded = asyncio.run(PersistenceAdapter(FileBackend(tmp_path)).load("sn_bills", []))
        assert reloaded == [{"id": "b1"}]

    def test_corrupt_file_falls_back(self, tmp_path):
        (tmp_path / "sn_bills.json").write_text("garbage", encoding="utf-8")
        assert asyncio.run(PersistenceAdapter(FileBackend(tmp_path)).load("sn_bills", [])) == []
