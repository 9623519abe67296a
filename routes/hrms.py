from fastapi import APIRouter, Depends
from typing import Optional
from models.hrms import WorkerCreate, AttendanceSheetSave, KharchiSheetSave, AdvanceCreate, PayrollSave
from core.auth import get_current_user
from controllers import hrms_controller

router = APIRouter(tags=["hrms"])


# ── Workers ───────────────────────────────────────────────

@router.post("/workers")
async def create_worker(worker_data: WorkerCreate, current_user: dict = Depends(get_current_user)):
    return await hrms_controller.create_worker(worker_data)


@router.get("/workers")
async def get_workers(project_id: Optional[str] = None, search: Optional[str] = None, current_user: dict = Depends(get_current_user)):
    return await hrms_controller.get_workers(project_id, search)


@router.get("/workers/counts")
async def get_worker_counts(current_user: dict = Depends(get_current_user)):
    return await hrms_controller.get_worker_counts()


@router.get("/workers/next-id")
async def preview_worker_id(project_id: str, current_user: dict = Depends(get_current_user)):
    return await hrms_controller.preview_worker_id(project_id)


@router.get("/workers/{worker_id}")
async def get_worker(worker_id: str, current_user: dict = Depends(get_current_user)):
    return await hrms_controller.get_worker(worker_id)


@router.put("/workers/{worker_id}")
async def update_worker(worker_id: str, worker_data: WorkerCreate, current_user: dict = Depends(get_current_user)):
    return await hrms_controller.update_worker(worker_id, worker_data)


@router.delete("/workers/{worker_id}")
async def delete_worker(worker_id: str, current_user: dict = Depends(get_current_user)):
    return await hrms_controller.delete_worker(worker_id)


# ── Attendance ────────────────────────────────────────────

@router.get("/attendance/sheet")
async def get_attendance_sheet(project_id: str, date: str, current_user: dict = Depends(get_current_user)):
    return await hrms_controller.get_attendance_sheet(project_id, date)


@router.post("/attendance/sheet")
async def save_attendance_sheet(data: AttendanceSheetSave, current_user: dict = Depends(get_current_user)):
    return await hrms_controller.save_attendance_sheet(data)


@router.get("/attendance")
async def get_attendance(project_id: Optional[str] = None, worker_id: Optional[str] = None, date: Optional[str] = None, current_user: dict = Depends(get_current_user)):
    return await hrms_controller.get_attendance(project_id, worker_id, date)


# ── Kharchi ───────────────────────────────────────────────

@router.get("/kharchi/sheet")
async def get_kharchi_sheet(project_id: str, month: str, current_user: dict = Depends(get_current_user)):
    return await hrms_controller.get_kharchi_sheet(project_id, month)


@router.post("/kharchi/sheet")
async def save_kharchi_sheet(data: KharchiSheetSave, current_user: dict = Depends(get_current_user)):
    return await hrms_controller.save_kharchi_sheet(data)


@router.get("/kharchi/summary")
async def get_kharchi_summary(month: str, current_user: dict = Depends(get_current_user)):
    return await hrms_controller.get_kharchi_summary(month)


@router.get("/kharchi/sundays")
async def get_sundays(month: str, current_user: dict = Depends(get_current_user)):
    return await hrms_controller.get_sundays(month)


@router.get("/kharchi")
async def get_kharchi(project_id: Optional[str] = None, month: Optional[str] = None, current_user: dict = Depends(get_current_user)):
    return await hrms_controller.get_kharchi(project_id, month)


# ── Advances ──────────────────────────────────────────────

@router.post("/advances")
async def create_advance(data: AdvanceCreate, current_user: dict = Depends(get_current_user)):
    return await hrms_controller.create_advance(data)


@router.get("/advances")
async def get_advances(project_id: Optional[str] = None, worker_id: Optional[str] = None, current_user: dict = Depends(get_current_user)):
    return await hrms_controller.get_advances(project_id, worker_id)


@router.get("/advances/{advance_id}")
async def get_advance(advance_id: str, current_user: dict = Depends(get_current_user)):
    return await hrms_controller.get_advance(advance_id)


@router.put("/advances/{advance_id}")
async def update_advance(advance_id: str, data: AdvanceCreate, current_user: dict = Depends(get_current_user)):
    return await hrms_controller.update_advance(advance_id, data)


@router.delete("/advances/{advance_id}")
async def delete_advance(advance_id: str, current_user: dict = Depends(get_current_user)):
    return await hrms_controller.delete_advance(advance_id)


# ── Payroll ───────────────────────────────────────────────

@router.get("/payroll/sheet")
async def get_payroll_sheet(project_id: str, month: str, current_user: dict = Depends(get_current_user)):
    return await hrms_controller.get_payroll_sheet(project_id, month)


@router.post("/payroll/sheet")
async def save_payroll(data: PayrollSave, current_user: dict = Depends(get_current_user)):
    return await hrms_controller.save_payroll(data)


@router.get("/payroll")
async def get_worker_payments(project_id: Optional[str] = None, month: Optional[str] = None, current_user: dict = Depends(get_current_user)):
    return await hrms_controller.get_worker_payments(project_id, month)
