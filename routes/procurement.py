from fastapi import APIRouter, Depends
from typing import Optional
from models.procurement import PurchaseCreate
from core.auth import get_current_user
from controllers import procurement_controller

router = APIRouter(prefix="/purchases", tags=["procurement"])


@router.post("")
async def create_purchase(data: PurchaseCreate, current_user: dict = Depends(get_current_user)):
    return await procurement_controller.create_purchase(data)


@router.get("")
async def get_purchases(project_id: Optional[str] = None, search: Optional[str] = None, current_user: dict = Depends(get_current_user)):
    return await procurement_controller.get_purchases(project_id, search)


@router.get("/summary")
async def get_procurement_summary(project_id: Optional[str] = None, current_user: dict = Depends(get_current_user)):
    return await procurement_controller.get_procurement_summary(project_id)


@router.get("/{purchase_id}")
async def get_purchase(purchase_id: str, current_user: dict = Depends(get_current_user)):
    return await procurement_controller.get_purchase(purchase_id)


@router.put("/{purchase_id}")
async def update_purchase(purchase_id: str, data: PurchaseCreate, current_user: dict = Depends(get_current_user)):
    return await procurement_controller.update_purchase(purchase_id, data)


@router.delete("/{purchase_id}")
async def delete_purchase(purchase_id: str, current_user: dict = Depends(get_current_user)):
    return await procurement_controller.delete_purchase(purchase_id)
