from fastapi import APIRouter, Depends
from typing import Optional
from models.financial import BillCreate, ClientPaymentCreate
from core.auth import get_current_user
from controllers import financial_controller

router = APIRouter(tags=["financial"])


# ── Bills ─────────────────────────────────────────────────

@router.post("/bills")
async def create_bill(bill_data: BillCreate, current_user: dict = Depends(get_current_user)):
    return await financial_controller.create_bill(bill_data)


@router.get("/bills")
async def get_bills(project_id: Optional[str] = None, month: Optional[str] = None, current_user: dict = Depends(get_current_user)):
    return await financial_controller.get_bills(project_id, month)


@router.get("/bills/{bill_id}")
async def get_bill(bill_id: str, current_user: dict = Depends(get_current_user)):
    return await financial_controller.get_bill(bill_id)


@router.put("/bills/{bill_id}")
async def update_bill(bill_id: str, bill_data: BillCreate, current_user: dict = Depends(get_current_user)):
    return await financial_controller.update_bill(bill_id, bill_data)


@router.delete("/bills/{bill_id}")
async def delete_bill(bill_id: str, current_user: dict = Depends(get_current_user)):
    return await financial_controller.delete_bill(bill_id)


# ── Client payments ───────────────────────────────────────

@router.post("/client-payments")
async def create_client_payment(data: ClientPaymentCreate, current_user: dict = Depends(get_current_user)):
    return await financial_controller.create_client_payment(data)


@router.get("/client-payments")
async def get_client_payments(project_id: Optional[str] = None, current_user: dict = Depends(get_current_user)):
    return await financial_controller.get_client_payments(project_id)


@router.get("/client-payments/{payment_id}")
async def get_client_payment(payment_id: str, current_user: dict = Depends(get_current_user)):
    return await financial_controller.get_client_payment(payment_id)


@router.put("/client-payments/{payment_id}")
async def update_client_payment(payment_id: str, data: ClientPaymentCreate, current_user: dict = Depends(get_current_user)):
    return await financial_controller.update_client_payment(payment_id, data)


@router.delete("/client-payments/{payment_id}")
async def delete_client_payment(payment_id: str, current_user: dict = Depends(get_current_user)):
    return await financial_controller.delete_client_payment(payment_id)


# ── Views ─────────────────────────────────────────────────

@router.get("/gst")
async def get_gst_summary(project_id: Optional[str] = None, current_user: dict = Depends(get_current_user)):
    return await financial_controller.get_gst_summary(project_id)


@router.get("/expenses")
async def get_profit_and_loss(project_id: Optional[str] = None, current_user: dict = Depends(get_current_user)):
    return await financial_controller.get_profit_and_loss(project_id)


@router.get("/financial/dashboard")
async def get_financial_dashboard(current_user: dict = Depends(get_current_user)):
    return await financial_controller.get_financial_dashboard()
