from fastapi import HTTPException
from typing import Optional, List

from database import store
from core import metrics
from core.validation import validate_consumption
from models.inventory import StockConsumption, StockConsumptionCreate


def _compute_status(balance: float) -> str:
    if balance < 0:
        return "over_consumed"
    if balance == 0:
        return "out_of_stock"
    return "in_stock"


async def create_consumption(data: StockConsumptionCreate) -> dict:
    record = StockConsumption(**data.model_dump()).to_record()
    validate_consumption(record, store.all("projects"))
    await store.add("consumption", record)
    return record


async def get_consumption(project_id: Optional[str] = None, material: Optional[str] = None) -> List[dict]:
    records = store.all("consumption", project_id)
    if material:
        key = metrics.material_key(material)
        records = [c for c in records if metrics.material_key(c.get("materialName")) == key]
    return sorted(records, key=lambda c: c.get("date") or "", reverse=True)


async def get_consumption_entry(consumption_id: str) -> dict:
    record = store.get("consumption", consumption_id)
    if not record:
        raise HTTPException(status_code=404, detail="Consumption entry not found")
    return record


async def update_consumption(consumption_id: str, data: StockConsumptionCreate) -> dict:
    if not store.get("consumption", consumption_id):
        raise HTTPException(status_code=404, detail="Consumption entry not found")
    record = StockConsumption(**data.model_dump(), id=consumption_id).to_record()
    validate_consumption(record, store.all("projects"))
    await store.edit("consumption", record)
    return record


async def delete_consumption(consumption_id: str) -> dict:
    if not store.get("consumption", consumption_id):
        raise HTTPException(status_code=404, detail="Consumption entry not found")
    await store.delete("consumption", consumption_id)
    return {"message": "Consumption entry deleted"}


async def get_stock_balances(project_id: Optional[str] = None) -> List[dict]:
    rows = metrics.inventory_balances(store.all("purchases"), store.all("consumption"), project_id)
    for row in rows:
        row["status"] = _compute_status(row["balance"])
    return sorted(rows, key=lambda r: r["key"])


async def get_material_balance(name: str, project_id: Optional[str] = None) -> dict:
    balance = metrics.material_balance(store.all("purchases"), store.all("consumption"), name, project_id)
    return {"material": name, "balance": balance, "status": _compute_status(balance)}
