from fastapi import HTTPException
from typing import Optional, List

from database import store
from core.validation import validate_purchase
from models.procurement import PurchaseEntry, PurchaseCreate


async def create_purchase(data: PurchaseCreate) -> dict:
    purchase = PurchaseEntry(
        **data.model_dump(),
        total_amount=data.quantity * data.rate,
        serial_no=len(store.all("purchases")) + 1,
    ).to_record()
    validate_purchase(purchase, store.all("projects"))
    await store.add("purchases", purchase)
    return purchase


async def get_purchases(project_id: Optional[str] = None, search: Optional[str] = None) -> List[dict]:
    purchases = store.all("purchases", project_id)
    if search:
        term = search.lower()
        purchases = [p for p in purchases if term in (p.get("description") or "").lower()]
    return sorted(purchases, key=lambda p: p.get("date") or "", reverse=True)


async def get_purchase(purchase_id: str) -> dict:
    purchase = store.get("purchases", purchase_id)
    if not purchase:
        raise HTTPException(status_code=404, detail="Purchase not found")
    return purchase


async def update_purchase(purchase_id: str, data: PurchaseCreate) -> dict:
    existing = await get_purchase(purchase_id)
    # total is re-derived on every save, never taken from the client
    purchase = PurchaseEntry(
        **data.model_dump(),
        id=purchase_id,
        total_amount=data.quantity * data.rate,
        serial_no=existing.get("serialNo", 0),
    ).to_record()
    validate_purchase(purchase, store.all("projects"))
    await store.edit("purchases", purchase)
    return purchase


async def delete_purchase(purchase_id: str) -> dict:
    await get_purchase(purchase_id)
    await store.delete("purchases", purchase_id)
    return {"message": "Purchase deleted"}


async def get_procurement_summary(project_id: Optional[str] = None) -> dict:
    purchases = store.all("purchases", project_id)
    by_material = {}
    for p in purchases:
        name = (p.get("description") or "").strip() or "Unnamed"
        row = by_material.setdefault(name.lower(), {"material": name, "quantity": 0, "amount": 0})
        row["quantity"] += p.get("quantity") or 0
        row["amount"] += p.get("totalAmount") or 0
    return {
        "total_purchases": len(purchases),
        "total_amount": sum(p.get("totalAmount") or 0 for p in purchases),
        "materials": sorted(by_material.values(), key=lambda r: r["amount"], reverse=True),
    }
