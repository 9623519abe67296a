import asyncio
import copy
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorClient

logger = logging.getLogger(__name__)


# ── Key-value backends ────────────────────────────────────

class MemoryBackend:
    """Process-local key-value store. Used by tests and throwaway sessions."""

    def __init__(self):
        self.data = {}

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def clear(self):
        self.data.clear()


class FileBackend:
    """One `<key>.json` file per key inside a data directory."""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def _read(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def _write(self, key: str, value: str) -> None:
        # Write to a sibling file first so a crash never leaves half a blob behind
        path = self._path(key)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)

    async def get(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._read, key)

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write, key, value)


class MongoBackend:
    """Stores each key as a document in the `kv_store` collection."""

    def __init__(self, mongo_url: str, db_name: str):
        self.client = AsyncIOMotorClient(mongo_url)
        self.db = self.client[db_name]

    async def get(self, key: str) -> Optional[str]:
        doc = await self.db.kv_store.find_one({"key": key}, {"_id": 0})
        return doc.get("value") if doc else None

    async def set(self, key: str, value: str) -> None:
        await self.db.kv_store.update_one(
            {"key": key},
            {"$set": {"value": value, "updated_at": datetime.now(timezone.utc).isoformat()}},
            upsert=True,
        )

    def close(self):
        self.client.close()


# ── Adapter ───────────────────────────────────────────────

class PersistenceAdapter:
    """JSON read/write on top of a key-value backend. Never raises on storage problems."""

    def __init__(self, backend):
        self.backend = backend

    async def load(self, key: str, default: Any) -> Any:
        try:
            raw = await self.backend.get(key)
        except Exception as e:
            logger.error(f"Error reading storage key '{key}': {str(e)}")
            return copy.deepcopy(default)
        if raw is None:
            return copy.deepcopy(default)
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.error(f"Error decoding storage key '{key}': {str(e)}")
            return copy.deepcopy(default)

    async def save(self, key: str, value: Any) -> bool:
        try:
            await self.backend.set(key, json.dumps(value))
            return True
        except Exception as e:
            logger.error(f"Error saving storage key '{key}': {str(e)}")
            return False
