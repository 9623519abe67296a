"""
Pure collection transforms. Each returns a new list and never mutates its input.
"""
from typing import Callable, Hashable, List


def add_record(collection: List[dict], record: dict) -> List[dict]:
    return [*collection, record]


def edit_record(collection: List[dict], record: dict) -> List[dict]:
    """Replace the record with the same id wholesale. Unknown ids leave the collection as is."""
    return [record if r.get("id") == record.get("id") else r for r in collection]


def delete_record(collection: List[dict], record_id: str) -> List[dict]:
    return [r for r in collection if r.get("id") != record_id]


def bulk_upsert(collection: List[dict], records: List[dict], key: Callable[[dict], Hashable]) -> List[dict]:
    """Drop existing records sharing a key with any incoming one, then append the incoming batch.

    Duplicate keys inside the batch collapse to the last record.
    """
    incoming = {}
    for record in records:
        incoming.pop(key(record), None)
        incoming[key(record)] = record
    kept = [r for r in collection if key(r) not in incoming]
    return kept + list(incoming.values())
