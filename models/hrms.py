from pydantic import Field
from typing import Optional, List
import uuid

from models.base import CamelModel


# ── Workers ───────────────────────────────────────────────

class WorkerCreate(CamelModel):
    project_id: str
    name: str
    designation: str = ""
    worker_id: str = ""       # business code; generated when left blank
    serial_no: Optional[int] = None
    joining_date: str = ""
    exit_date: Optional[str] = None


class Worker(WorkerCreate):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    serial_no: int = 0


# ── Attendance ────────────────────────────────────────────

class AttendanceStatus:
    PRESENT = "Present"
    ABSENT = "Absent"
    HALF_DAY = "Half Day"

    ALL = [PRESENT, ABSENT, HALF_DAY]


class AttendanceMark(CamelModel):
    worker_id: str
    status: str = AttendanceStatus.ABSENT


class AttendanceSheetSave(CamelModel):
    project_id: str
    date: str
    records: List[AttendanceMark] = Field(default_factory=list)


class AttendanceRecord(CamelModel):
    id: str
    worker_id: str
    project_id: str
    date: str
    status: str


# ── Kharchi ───────────────────────────────────────────────

class KharchiCell(CamelModel):
    worker_id: str
    date: str
    amount: float = 0.0


class KharchiSheetSave(CamelModel):
    project_id: str
    entries: List[KharchiCell] = Field(default_factory=list)


class KharchiEntry(CamelModel):
    id: str
    worker_id: str
    project_id: str
    date: str
    amount: float


# ── Advances ──────────────────────────────────────────────

class AdvanceCreate(CamelModel):
    worker_id: str
    project_id: str
    amount: float
    paid_by: str = "Admin"
    remarks: str = ""
    date: str
    payment_mode: str = "Cash"


class AdvanceEntry(AdvanceCreate):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    serial_no: int = 0


# ── Payroll ───────────────────────────────────────────────

class PayrollLine(CamelModel):
    worker_id: str
    work_amount: float = 0.0
    mess_deduction: float = 0.0


class PayrollSave(CamelModel):
    project_id: str
    month: str  # YYYY-MM
    lines: List[PayrollLine] = Field(default_factory=list)


class WorkerPayment(CamelModel):
    id: str
    serial_no: int = 0
    worker_id: str
    project_id: str
    month: str
    work_amount: float = 0.0
    mess_deduction: float = 0.0
    kharchi_deduction: float = 0.0
    advance_deduction: float = 0.0
    net_payable: float = 0.0
    is_paid: bool = True
    date: str
