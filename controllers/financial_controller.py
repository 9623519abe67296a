from fastapi import HTTPException
from typing import Optional, List

from database import store
from core import metrics
from core.validation import validate_bill, validate_client_payment
from models.financial import Bill, BillCreate, ClientPayment, ClientPaymentCreate


# ── Bills ─────────────────────────────────────────────────

def _fill_bill_totals(fields: dict) -> dict:
    if fields.get("gst_amount") is None:
        fields["gst_amount"] = 0.0
    if fields.get("grand_total") is None:
        fields["grand_total"] = fields["amount"] + fields["gst_amount"]
    return fields


async def create_bill(bill_data: BillCreate) -> dict:
    fields = _fill_bill_totals(bill_data.model_dump())
    bill = Bill(**fields, serial_no=len(store.all("bills")) + 1).to_record()
    validate_bill(bill, store.all("projects"))
    await store.add("bills", bill)
    return bill


async def get_bills(project_id: Optional[str] = None, month: Optional[str] = None) -> List[dict]:
    bills = store.all("bills", project_id)
    if month:
        bills = [b for b in bills if b.get("billingMonth") == month]
    return bills


async def get_bill(bill_id: str) -> dict:
    bill = store.get("bills", bill_id)
    if not bill:
        raise HTTPException(status_code=404, detail="Bill not found")
    return bill


async def update_bill(bill_id: str, bill_data: BillCreate) -> dict:
    existing = await get_bill(bill_id)
    fields = _fill_bill_totals(bill_data.model_dump())
    bill = Bill(**fields, id=bill_id, serial_no=existing.get("serialNo", 0)).to_record()
    validate_bill(bill, store.all("projects"))
    await store.edit("bills", bill)
    return bill


async def delete_bill(bill_id: str) -> dict:
    await get_bill(bill_id)
    await store.delete("bills", bill_id)
    return {"message": "Bill deleted"}


# ── Client payments ───────────────────────────────────────

async def create_client_payment(data: ClientPaymentCreate) -> dict:
    payment = ClientPayment(**data.model_dump()).to_record()
    validate_client_payment(payment, store.all("projects"))
    await store.add("client_payments", payment)
    return payment


async def get_client_payments(project_id: Optional[str] = None) -> List[dict]:
    return sorted(store.all("client_payments", project_id), key=lambda p: p.get("date") or "", reverse=True)


async def get_client_payment(payment_id: str) -> dict:
    payment = store.get("client_payments", payment_id)
    if not payment:
        raise HTTPException(status_code=404, detail="Client payment not found")
    return payment


async def update_client_payment(payment_id: str, data: ClientPaymentCreate) -> dict:
    if not store.get("client_payments", payment_id):
        raise HTTPException(status_code=404, detail="Client payment not found")
    payment = ClientPayment(**data.model_dump(), id=payment_id).to_record()
    validate_client_payment(payment, store.all("projects"))
    await store.edit("client_payments", payment)
    return payment


async def delete_client_payment(payment_id: str) -> dict:
    if not store.get("client_payments", payment_id):
        raise HTTPException(status_code=404, detail="Client payment not found")
    await store.delete("client_payments", payment_id)
    return {"message": "Client payment deleted"}


# ── GST & expenses ────────────────────────────────────────

async def get_gst_summary(project_id: Optional[str] = None) -> dict:
    bills = metrics.for_project(store.all("bills"), project_id)
    by_month = {}
    for b in bills:
        month = b.get("billingMonth") or "Unspecified"
        row = by_month.setdefault(month, {"month": month, "taxable": 0, "gst": 0, "grand_total": 0})
        row["taxable"] += b.get("amount") or 0
        row["gst"] += b.get("gstAmount") or 0
        row["grand_total"] += b.get("grandTotal") or 0
    return {
        "project_id": project_id or "All",
        "total_taxable": sum(b.get("amount") or 0 for b in bills),
        "gst_liability": metrics.gst_liability(bills),
        "months": sorted(by_month.values(), key=lambda r: r["month"]),
        "bills": bills,
    }


async def get_profit_and_loss(project_id: Optional[str] = None) -> dict:
    result = metrics.profit_and_loss(
        store.all("purchases"), store.all("kharchi"), store.all("advances"),
        store.all("worker_payments"), store.all("client_payments"), project_id,
    )
    result["project_id"] = project_id or "All"
    return result


async def get_financial_dashboard() -> dict:
    bills = store.all("bills")
    payments = store.all("client_payments")
    total_billed = sum(b.get("grandTotal") or 0 for b in bills)
    total_received = sum(p.get("amount") or 0 for p in payments)

    project_financials = []
    for p in store.all("projects"):
        pid = p.get("id")
        billed = sum(b.get("grandTotal") or 0 for b in bills if b.get("projectId") == pid)
        received = sum(c.get("amount") or 0 for c in payments if c.get("projectId") == pid)
        project_financials.append({
            "project_id": pid,
            "project_name": p.get("name"),
            "billed": billed,
            "received": received,
            "outstanding": billed - received,
        })

    return {
        "total_billed": total_billed,
        "total_received": total_received,
        "outstanding": total_billed - total_received,
        "gst_liability": metrics.gst_liability(bills),
        "project_financials": project_financials,
    }
