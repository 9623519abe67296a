import copy
import logging
from typing import Callable, Dict, List, Optional

from core.mutations import add_record, edit_record, delete_record, bulk_upsert
from core.registry import COLLECTION_NAMES, storage_key, upsert_key

logger = logging.getLogger(__name__)


class EntityStore:
    """In-memory source of truth for every collection, written through to storage on each mutation."""

    def __init__(self, adapter, defaults: Optional[Dict[str, List[dict]]] = None, on_change: Optional[Callable[[], None]] = None):
        self.adapter = adapter
        self.defaults = defaults or {}
        self.on_change = on_change
        self._collections: Dict[str, List[dict]] = {name: [] for name in COLLECTION_NAMES}

    async def load_all(self) -> None:
        for name in COLLECTION_NAMES:
            loaded = await self.adapter.load(storage_key(name), self.defaults.get(name, []))
            if not isinstance(loaded, list):
                logger.error(f"Storage key '{storage_key(name)}' does not hold a list, using defaults")
                loaded = copy.deepcopy(self.defaults.get(name, []))
            self._collections[name] = loaded
        logger.info("Loaded %d collections from storage", len(COLLECTION_NAMES))

    # ── Reads ─────────────────────────────────────────────

    def all(self, name: str, project_id: Optional[str] = None) -> List[dict]:
        items = self._collections[name]
        if project_id and project_id != "All":
            items = [i for i in items if i.get("projectId") == project_id]
        return list(items)

    def get(self, name: str, record_id: str) -> Optional[dict]:
        return next((r for r in self._collections[name] if r.get("id") == record_id), None)

    def snapshot(self) -> Dict[str, List[dict]]:
        return copy.deepcopy(self._collections)

    # ── Mutations ─────────────────────────────────────────

    async def _commit(self, name: str, collection: List[dict]) -> List[dict]:
        self._collections[name] = collection
        await self.adapter.save(storage_key(name), collection)
        if self.on_change:
            self.on_change()
        return collection

    async def add(self, name: str, record: dict) -> List[dict]:
        return await self._commit(name, add_record(self._collections[name], record))

    async def edit(self, name: str, record: dict) -> List[dict]:
        return await self._commit(name, edit_record(self._collections[name], record))

    async def delete(self, name: str, record_id: str) -> List[dict]:
        return await self._commit(name, delete_record(self._collections[name], record_id))

    async def replace(self, name: str, records: List[dict]) -> List[dict]:
        return await self._commit(name, list(records))

    async def bulk_upsert(self, name: str, records: List[dict]) -> List[dict]:
        return await self._commit(name, bulk_upsert(self._collections[name], records, upsert_key(name)))

    async def restore(self, collections: Dict[str, List[dict]]) -> List[str]:
        """Replace each given collection wholesale. Collections not given are left alone."""
        restored = []
        for name in COLLECTION_NAMES:
            if name in collections:
                await self.replace(name, collections[name])
                restored.append(name)
        return restored
