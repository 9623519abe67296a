"""
Form-level checks run before anything reaches the store.

Each validator collects field -> message pairs and raises a single 400 with all of them.
"""
from datetime import date
from typing import Dict, Iterable, Optional

from fastapi import HTTPException

from core.metrics import is_sunday, parse_month
from models.project import ProjectStatus
from models.hrms import AttendanceStatus


def raise_if_errors(errors: Dict[str, str]) -> None:
    if errors:
        raise HTTPException(status_code=400, detail={"message": "Validation failed", "errors": errors})


def _parse_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def _check_date(errors: Dict[str, str], field: str, value: Optional[str], required: bool = False) -> Optional[date]:
    if not value:
        if required:
            errors[field] = "Date is required."
        return None
    parsed = _parse_date(value)
    if parsed is None:
        errors[field] = "Date must be in YYYY-MM-DD format."
    return parsed


def _require_project(errors: Dict[str, str], project_id: str, projects: Iterable[dict]) -> None:
    if not project_id:
        errors["projectId"] = "Project is required."
    elif not any(p.get("id") == project_id for p in projects):
        errors["projectId"] = "Project does not exist."


# ── Projects ──────────────────────────────────────────────

def validate_project(data: dict, projects: Iterable[dict], editing_id: Optional[str] = None) -> None:
    errors = {}
    name = (data.get("name") or "").strip()
    if not name:
        errors["name"] = "Project name is required."
    elif any(p.get("id") != editing_id and (p.get("name") or "").strip().lower() == name.lower() for p in projects):
        errors["name"] = "A project with this name already exists."
    if (data.get("budget") or 0) <= 0:
        errors["budget"] = "Budget must be greater than zero."
    if data.get("status") not in ProjectStatus.ALL:
        errors["status"] = f"Status must be one of: {', '.join(ProjectStatus.ALL)}."
    if not 0 <= (data.get("completionPercentage") or 0) <= 100:
        errors["completionPercentage"] = "Completion must be between 0 and 100."
    if (data.get("spent") or 0) < 0:
        errors["spent"] = "Spent amount cannot be negative."
    start = _check_date(errors, "startDate", data.get("startDate"))
    end = _check_date(errors, "completionDate", data.get("completionDate"))
    if start and end and end < start:
        errors["completionDate"] = "Completion Date cannot be before Start Date."
    raise_if_errors(errors)


# ── Workers ───────────────────────────────────────────────

def validate_worker(data: dict, projects: Iterable[dict], workers: Iterable[dict], editing_id: Optional[str] = None) -> None:
    errors = {}
    _require_project(errors, data.get("projectId"), projects)
    if not (data.get("name") or "").strip():
        errors["name"] = "Worker Name is required."
    serial_no = data.get("serialNo")
    if not serial_no or serial_no <= 0:
        errors["serialNo"] = "Valid SR No is required."
    elif any(
        w.get("projectId") == data.get("projectId") and w.get("serialNo") == serial_no and w.get("id") != editing_id
        for w in workers
    ):
        errors["serialNo"] = "Serial No already used in this project."
    if not (data.get("designation") or "").strip():
        errors["designation"] = "Designation is required."
    joining = _check_date(errors, "joiningDate", data.get("joiningDate"), required=True)
    exit_date = _check_date(errors, "exitDate", data.get("exitDate"))
    if joining and exit_date and exit_date < joining:
        errors["exitDate"] = "Exit Date cannot be before Joining Date."
    raise_if_errors(errors)


def validate_advance(data: dict, projects: Iterable[dict], workers: Iterable[dict]) -> None:
    errors = {}
    _require_project(errors, data.get("projectId"), projects)
    if not any(w.get("id") == data.get("workerId") for w in workers):
        errors["workerId"] = "Worker does not exist."
    if (data.get("amount") or 0) <= 0:
        errors["amount"] = "Amount must be greater than zero."
    _check_date(errors, "date", data.get("date"), required=True)
    raise_if_errors(errors)


def validate_kharchi(project_id: str, cells: Iterable[dict], projects: Iterable[dict], workers: Iterable[dict]) -> None:
    errors = {}
    _require_project(errors, project_id, projects)
    project_worker_ids = {w.get("id") for w in workers if w.get("projectId") == project_id}
    for cell in cells:
        label = f"{cell.get('workerId')}@{cell.get('date')}"
        if cell.get("workerId") not in project_worker_ids:
            errors[label] = "Worker does not belong to this project."
        elif not is_sunday(cell.get("date")):
            errors[label] = "Kharchi can only be recorded on a Sunday."
        elif (cell.get("amount") or 0) < 0:
            errors[label] = "Amount cannot be negative."
    raise_if_errors(errors)


def validate_attendance(project_id: str, day: str, marks: Iterable[dict], projects: Iterable[dict], workers: Iterable[dict]) -> None:
    errors = {}
    _require_project(errors, project_id, projects)
    _check_date(errors, "date", day, required=True)
    project_worker_ids = {w.get("id") for w in workers if w.get("projectId") == project_id}
    for mark in marks:
        if mark.get("workerId") not in project_worker_ids:
            errors[mark.get("workerId") or "workerId"] = "Worker does not belong to this project."
        elif mark.get("status") not in AttendanceStatus.ALL:
            errors[mark.get("workerId") or "status"] = f"Status must be one of: {', '.join(AttendanceStatus.ALL)}."
    raise_if_errors(errors)


def validate_month(month: str, field: str = "month") -> None:
    try:
        parse_month(month)
    except ValueError as e:
        raise_if_errors({field: str(e)})


# ── Money & materials ─────────────────────────────────────

def validate_bill(data: dict, projects: Iterable[dict]) -> None:
    errors = {}
    _require_project(errors, data.get("projectId"), projects)
    if not (data.get("billNo") or "").strip():
        errors["billNo"] = "Bill No is required."
    if (data.get("amount") or 0) <= 0:
        errors["amount"] = "Amount must be greater than zero."
    if (data.get("gstAmount") or 0) < 0:
        errors["gstAmount"] = "GST amount cannot be negative."
    raise_if_errors(errors)


def validate_client_payment(data: dict, projects: Iterable[dict]) -> None:
    errors = {}
    _require_project(errors, data.get("projectId"), projects)
    if (data.get("amount") or 0) < 0:
        errors["amount"] = "Amount cannot be negative."
    _check_date(errors, "date", data.get("date"), required=True)
    raise_if_errors(errors)


def validate_purchase(data: dict, projects: Iterable[dict]) -> None:
    errors = {}
    _require_project(errors, data.get("projectId"), projects)
    if not (data.get("description") or "").strip():
        errors["description"] = "Material description is required."
    if (data.get("quantity") or 0) < 0:
        errors["quantity"] = "Quantity cannot be negative."
    if (data.get("rate") or 0) < 0:
        errors["rate"] = "Rate cannot be negative."
    raise_if_errors(errors)


def validate_consumption(data: dict, projects: Iterable[dict]) -> None:
    errors = {}
    _require_project(errors, data.get("projectId"), projects)
    if not (data.get("materialName") or "").strip():
        errors["materialName"] = "Material name is required."
    if (data.get("quantity") or 0) <= 0:
        errors["quantity"] = "Quantity must be greater than zero."
    raise_if_errors(errors)


def validate_mess(data: dict, projects: Iterable[dict]) -> None:
    errors = {}
    _require_project(errors, data.get("projectId"), projects)
    if (data.get("workerCount") or 0) < 0:
        errors["workerCount"] = "Worker count cannot be negative."
    if (data.get("rate") or 0) < 0:
        errors["rate"] = "Rate cannot be negative."
    raise_if_errors(errors)


def validate_execution(data: dict, projects: Iterable[dict]) -> None:
    errors = {}
    _require_project(errors, data.get("projectId"), projects)
    raise_if_errors(errors)
