from config import STORAGE_BACKEND, DATA_DIR, MONGO_URL, DB_NAME, LAST_SYNC_KEY, SYNC_ONLINE, SYNC_DELAY_SECONDS
from core.persistence import PersistenceAdapter, MemoryBackend, FileBackend, MongoBackend
from core.seed_data import SEED_COLLECTIONS
from core.store import EntityStore
from core.sync import SyncMonitor


def build_backend():
    if STORAGE_BACKEND == "memory":
        return MemoryBackend()
    if STORAGE_BACKEND == "mongo":
        if not MONGO_URL:
            raise RuntimeError("STORAGE_BACKEND=mongo requires MONGO_URL")
        return MongoBackend(MONGO_URL, DB_NAME)
    return FileBackend(DATA_DIR)


backend = build_backend()
adapter = PersistenceAdapter(backend)
sync_monitor = SyncMonitor(adapter, LAST_SYNC_KEY, online=SYNC_ONLINE, delay=SYNC_DELAY_SECONDS)
store = EntityStore(adapter, defaults=SEED_COLLECTIONS, on_change=sync_monitor.trigger)
