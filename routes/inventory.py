from fastapi import APIRouter, Depends
from typing import Optional
from models.inventory import StockConsumptionCreate
from core.auth import get_current_user
from controllers import inventory_controller

router = APIRouter(tags=["inventory"])


@router.post("/consumption")
async def create_consumption(data: StockConsumptionCreate, current_user: dict = Depends(get_current_user)):
    return await inventory_controller.create_consumption(data)


@router.get("/consumption")
async def get_consumption(project_id: Optional[str] = None, material: Optional[str] = None, current_user: dict = Depends(get_current_user)):
    return await inventory_controller.get_consumption(project_id, material)


@router.get("/consumption/{consumption_id}")
async def get_consumption_entry(consumption_id: str, current_user: dict = Depends(get_current_user)):
    return await inventory_controller.get_consumption_entry(consumption_id)


@router.put("/consumption/{consumption_id}")
async def update_consumption(consumption_id: str, data: StockConsumptionCreate, current_user: dict = Depends(get_current_user)):
    return await inventory_controller.update_consumption(consumption_id, data)


@router.delete("/consumption/{consumption_id}")
async def delete_consumption(consumption_id: str, current_user: dict = Depends(get_current_user)):
    return await inventory_controller.delete_consumption(consumption_id)


@router.get("/inventory")
async def get_stock_balances(project_id: Optional[str] = None, current_user: dict = Depends(get_current_user)):
    return await inventory_controller.get_stock_balances(project_id)


@router.get("/inventory/balance")
async def get_material_balance(name: str, project_id: Optional[str] = None, current_user: dict = Depends(get_current_user)):
    return await inventory_controller.get_material_balance(name, project_id)
