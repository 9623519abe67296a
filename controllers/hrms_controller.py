from fastapi import HTTPException
from typing import Optional, List
from datetime import datetime, timezone

from database import store
from core import metrics
from core.worker_codes import generate_worker_id
from core.validation import (
    validate_worker, validate_advance, validate_kharchi, validate_attendance, validate_month,
)
from models.hrms import (
    Worker, WorkerCreate,
    AttendanceSheetSave, AttendanceRecord, AttendanceStatus,
    KharchiSheetSave, KharchiEntry,
    AdvanceCreate, AdvanceEntry,
    PayrollSave, WorkerPayment,
)


def _next_serial_no(project_workers: List[dict]) -> int:
    return max((w.get("serialNo") or 0 for w in project_workers), default=0) + 1


async def _get_project(project_id: str) -> dict:
    project = store.get("projects", project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


# ── Workers ───────────────────────────────────────────────

async def create_worker(worker_data: WorkerCreate) -> dict:
    workers = store.all("workers")
    fields = worker_data.model_dump()
    if fields.get("serial_no") is None:
        fields["serial_no"] = _next_serial_no(store.all("workers", worker_data.project_id))
    if not (fields.get("worker_id") or "").strip():
        project = store.get("projects", worker_data.project_id)
        if project:
            fields["worker_id"] = generate_worker_id(project, workers)
    worker = Worker(**fields).to_record()
    validate_worker(worker, store.all("projects"), workers)
    await store.add("workers", worker)
    return worker


async def get_workers(project_id: Optional[str] = None, search: Optional[str] = None) -> List[dict]:
    workers = store.all("workers", project_id)
    if search:
        term = search.lower()
        workers = [w for w in workers if term in (w.get("name") or "").lower() or term in (w.get("workerId") or "").lower()]
    return workers


async def get_worker(worker_id: str) -> dict:
    worker = store.get("workers", worker_id)
    if not worker:
        raise HTTPException(status_code=404, detail="Worker not found")
    return worker


async def update_worker(worker_id: str, worker_data: WorkerCreate) -> dict:
    existing = await get_worker(worker_id)
    fields = worker_data.model_dump()
    if fields.get("serial_no") is None:
        fields["serial_no"] = existing.get("serialNo", 0)
    if not (fields.get("worker_id") or "").strip():
        fields["worker_id"] = existing.get("workerId") or ""
    worker = Worker(**fields, id=worker_id).to_record()
    validate_worker(worker, store.all("projects"), store.all("workers"), editing_id=worker_id)
    await store.edit("workers", worker)
    return worker


async def delete_worker(worker_id: str) -> dict:
    await get_worker(worker_id)
    await store.delete("workers", worker_id)
    return {"message": "Worker deleted"}


async def get_worker_counts() -> dict:
    workers = store.all("workers")
    return {p.get("id"): len([w for w in workers if w.get("projectId") == p.get("id")]) for p in store.all("projects")}


async def preview_worker_id(project_id: str) -> dict:
    project = await _get_project(project_id)
    return {"worker_id": generate_worker_id(project, store.all("workers"))}


# ── Attendance ────────────────────────────────────────────

async def get_attendance_sheet(project_id: str, date: str) -> dict:
    await _get_project(project_id)
    existing = {a.get("workerId"): a for a in store.all("attendance", project_id) if a.get("date") == date}
    rows = [
        {
            "worker": w,
            "status": existing[w["id"]]["status"] if w["id"] in existing else AttendanceStatus.ABSENT,
            "saved": w["id"] in existing,
        }
        for w in store.all("workers", project_id)
    ]
    return {
        "project_id": project_id,
        "date": date,
        "rows": rows,
        "counts": metrics.attendance_counts({"status": r["status"]} for r in rows),
    }


async def save_attendance_sheet(data: AttendanceSheetSave) -> dict:
    marks = [m.to_record() for m in data.records]
    validate_attendance(data.project_id, data.date, marks, store.all("projects"), store.all("workers"))
    status_by_worker = {m["workerId"]: m["status"] for m in marks}
    records = [
        AttendanceRecord(
            id=f"{w['id']}-{data.date}",
            worker_id=w["id"],
            project_id=data.project_id,
            date=data.date,
            status=status_by_worker.get(w["id"], AttendanceStatus.ABSENT),
        ).to_record()
        for w in store.all("workers", data.project_id)
    ]
    await store.bulk_upsert("attendance", records)
    return {"message": f"Saved attendance for {len(records)} worker(s)", "records": records}


async def get_attendance(project_id: Optional[str] = None, worker_id: Optional[str] = None, date: Optional[str] = None) -> List[dict]:
    records = store.all("attendance", project_id)
    if worker_id:
        records = [r for r in records if r.get("workerId") == worker_id]
    if date:
        records = [r for r in records if r.get("date") == date]
    return sorted(records, key=lambda r: r.get("date") or "", reverse=True)


# ── Kharchi ───────────────────────────────────────────────

async def get_kharchi_sheet(project_id: str, month: str) -> dict:
    validate_month(month)
    await _get_project(project_id)
    sundays = metrics.sundays_in_month(month)
    amounts = {(k.get("workerId"), k.get("date")): k.get("amount") or 0 for k in store.all("kharchi")}
    rows = []
    for w in store.all("workers", project_id):
        cells = {day: amounts.get((w["id"], day), 0) for day in sundays}
        rows.append({"worker": w, "amounts": cells, "total": sum(cells.values())})
    return {
        "project_id": project_id,
        "month": month,
        "sundays": sundays,
        "rows": rows,
        "sunday_totals": {day: sum(r["amounts"][day] for r in rows) for day in sundays},
        "grand_total": sum(r["total"] for r in rows),
    }


async def save_kharchi_sheet(data: KharchiSheetSave) -> dict:
    cells = [c.to_record() for c in data.entries]
    validate_kharchi(data.project_id, cells, store.all("projects"), store.all("workers"))
    entries = [
        KharchiEntry(
            id=f"{c['workerId']}-{c['date']}",
            worker_id=c["workerId"],
            project_id=data.project_id,
            date=c["date"],
            amount=c["amount"],
        ).to_record()
        for c in cells
    ]
    await store.bulk_upsert("kharchi", entries)
    return {"message": "Kharchi records updated", "records": entries}


async def get_kharchi(project_id: Optional[str] = None, month: Optional[str] = None) -> List[dict]:
    entries = store.all("kharchi", project_id)
    if month:
        entries = [k for k in entries if (k.get("date") or "").startswith(month)]
    return entries


async def get_kharchi_summary(month: str) -> dict:
    validate_month(month)
    return metrics.kharchi_site_summaries(store.all("projects"), store.all("kharchi"), month)


async def get_sundays(month: str) -> List[str]:
    validate_month(month)
    return metrics.sundays_in_month(month)


# ── Advances ──────────────────────────────────────────────

async def create_advance(data: AdvanceCreate) -> dict:
    advance = AdvanceEntry(**data.model_dump(), serial_no=len(store.all("advances")) + 1).to_record()
    validate_advance(advance, store.all("projects"), store.all("workers"))
    await store.add("advances", advance)
    return advance


async def get_advances(project_id: Optional[str] = None, worker_id: Optional[str] = None) -> List[dict]:
    advances = store.all("advances", project_id)
    if worker_id:
        advances = [a for a in advances if a.get("workerId") == worker_id]
    return advances


async def get_advance(advance_id: str) -> dict:
    advance = store.get("advances", advance_id)
    if not advance:
        raise HTTPException(status_code=404, detail="Advance not found")
    return advance


async def update_advance(advance_id: str, data: AdvanceCreate) -> dict:
    existing = await get_advance(advance_id)
    advance = AdvanceEntry(**data.model_dump(), id=advance_id, serial_no=existing.get("serialNo", 0)).to_record()
    validate_advance(advance, store.all("projects"), store.all("workers"))
    await store.edit("advances", advance)
    return advance


async def delete_advance(advance_id: str) -> dict:
    if not store.get("advances", advance_id):
        raise HTTPException(status_code=404, detail="Advance not found")
    await store.delete("advances", advance_id)
    return {"message": "Advance deleted"}


# ── Payroll ───────────────────────────────────────────────

async def get_payroll_sheet(project_id: str, month: str) -> dict:
    validate_month(month)
    await _get_project(project_id)
    kharchi = store.all("kharchi")
    advances = store.all("advances")
    saved = {p.get("workerId"): p for p in store.all("worker_payments") if p.get("month") == month}
    rows = []
    for w in store.all("workers", project_id):
        deductions = metrics.month_deductions(kharchi, advances, w["id"], month)
        previous = saved.get(w["id"], {})
        work_amount = previous.get("workAmount", 0)
        mess = previous.get("messDeduction", 0)
        rows.append({
            "worker": w,
            "work_amount": work_amount,
            "mess_deduction": mess,
            "kharchi_deduction": deductions["kharchi"],
            "advance_deduction": deductions["advance"],
            "net_payable": metrics.payroll_net(work_amount, mess, deductions["kharchi"], deductions["advance"]),
            "saved": w["id"] in saved,
        })
    return {"project_id": project_id, "month": month, "rows": rows, "total_net": sum(r["net_payable"] for r in rows)}


async def save_payroll(data: PayrollSave) -> dict:
    validate_month(data.month)
    await _get_project(data.project_id)
    kharchi = store.all("kharchi")
    advances = store.all("advances")
    lines = {line.worker_id: line for line in data.lines}
    paid_at = datetime.now(timezone.utc).isoformat()
    records = []
    for w in store.all("workers", data.project_id):
        line = lines.get(w["id"])
        work_amount = line.work_amount if line else 0.0
        mess = line.mess_deduction if line else 0.0
        deductions = metrics.month_deductions(kharchi, advances, w["id"], data.month)
        records.append(WorkerPayment(
            id=f"{w['id']}-{data.month}",
            serial_no=w.get("serialNo", 0),
            worker_id=w["id"],
            project_id=data.project_id,
            month=data.month,
            work_amount=work_amount,
            mess_deduction=mess,
            kharchi_deduction=deductions["kharchi"],
            advance_deduction=deductions["advance"],
            net_payable=metrics.payroll_net(work_amount, mess, deductions["kharchi"], deductions["advance"]),
            is_paid=True,
            date=paid_at,
        ).to_record())
    await store.bulk_upsert("worker_payments", records)
    return {"message": f"Saved {len(records)} records.", "records": records}


async def get_worker_payments(project_id: Optional[str] = None, month: Optional[str] = None) -> List[dict]:
    payments = store.all("worker_payments", project_id)
    if month:
        payments = [p for p in payments if p.get("month") == month]
    return payments
