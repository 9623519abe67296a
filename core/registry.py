from config import STORAGE_PREFIX


# name -> (backup document field, business upsert key or None)
COLLECTIONS = {
    "projects":        ("projects", None),
    "workers":         ("workers", None),
    "bills":           ("bills", None),
    "client_payments": ("clientPayments", None),
    "kharchi":         ("kharchi", ("workerId", "date")),
    "advances":        ("advances", None),
    "purchases":       ("purchases", None),
    "execution":       ("executionData", None),
    "mess":            ("messEntries", None),
    "worker_payments": ("workerPayments", ("workerId", "month")),
    "attendance":      ("attendance", ("workerId", "date")),
    "consumption":     ("consumption", None),
}

COLLECTION_NAMES = list(COLLECTIONS)


def storage_key(name: str) -> str:
    return f"{STORAGE_PREFIX}{name}"


def backup_field(name: str) -> str:
    return COLLECTIONS[name][0]


def upsert_key(name: str):
    fields = COLLECTIONS[name][1]
    if fields is None:
        raise KeyError(f"Collection '{name}' has no upsert key")
    return lambda record: tuple(record.get(f) for f in fields)
