from fastapi import HTTPException
from typing import Optional, List

from database import store
from core.validation import validate_mess
from models.mess import MessEntry, MessEntryCreate


def _derive(data: MessEntryCreate) -> dict:
    total = data.worker_count * data.rate
    return {"total_amount": total, "balance": total - data.amount_paid}


async def create_mess_entry(data: MessEntryCreate) -> dict:
    entry = MessEntry(**data.model_dump(), **_derive(data)).to_record()
    validate_mess(entry, store.all("projects"))
    await store.add("mess", entry)
    return entry


async def get_mess_entries(project_id: Optional[str] = None) -> List[dict]:
    return store.all("mess", project_id)


async def get_mess_entry(entry_id: str) -> dict:
    entry = store.get("mess", entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Mess entry not found")
    return entry


async def update_mess_entry(entry_id: str, data: MessEntryCreate) -> dict:
    if not store.get("mess", entry_id):
        raise HTTPException(status_code=404, detail="Mess entry not found")
    entry = MessEntry(**data.model_dump(), **_derive(data), id=entry_id).to_record()
    validate_mess(entry, store.all("projects"))
    await store.edit("mess", entry)
    return entry


async def delete_mess_entry(entry_id: str) -> dict:
    if not store.get("mess", entry_id):
        raise HTTPException(status_code=404, detail="Mess entry not found")
    await store.delete("mess", entry_id)
    return {"message": "Mess entry deleted"}


async def get_mess_summary(project_id: Optional[str] = None) -> dict:
    entries = store.all("mess", project_id)
    return {
        "total_amount": sum(e.get("totalAmount") or 0 for e in entries),
        "amount_paid": sum(e.get("amountPaid") or 0 for e in entries),
        "balance": sum(e.get("balance") or 0 for e in entries),
    }
