"""
Derived figures computed from the raw collections on every read.

All functions are pure and work on the persisted record dicts (camelCase keys).
A `project_id` of None or "All" means every project.
"""
import calendar
import re
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")

HEALTH_CRITICAL = "critical"
HEALTH_WARNING = "warning"
HEALTH_STABLE = "stable"


def for_project(items: Iterable[dict], project_id: Optional[str]) -> List[dict]:
    if not project_id or project_id == "All":
        return list(items)
    return [i for i in items if i.get("projectId") == project_id]


def _total(items: Iterable[dict], field: str) -> float:
    return sum(i.get(field) or 0 for i in items)


# ── Budget health ─────────────────────────────────────────

def budget_used_ratio(project: dict) -> float:
    budget = project.get("budget") or 0
    spent = project.get("spent") or 0
    if budget <= 0:
        return 1.0 if spent > 0 else 0.0
    return spent / budget


def budget_health(project: dict) -> str:
    used = budget_used_ratio(project)
    completion = (project.get("completionPercentage") or 0) / 100
    if used > 0.9:
        return HEALTH_CRITICAL
    if used > completion + 0.1:
        return HEALTH_WARNING
    return HEALTH_STABLE


def project_health_summary(projects: Iterable[dict]) -> List[dict]:
    return [
        {
            "project_id": p.get("id"),
            "project_name": p.get("name"),
            "status": p.get("status"),
            "budget": p.get("budget", 0),
            "spent": p.get("spent") or 0,
            "completion_percentage": p.get("completionPercentage") or 0,
            "budget_used_pct": round(budget_used_ratio(p) * 100, 1),
            "health": budget_health(p),
        }
        for p in projects
    ]


# ── GST ───────────────────────────────────────────────────

def gst_liability(bills: Iterable[dict], project_id: Optional[str] = None) -> float:
    return _total(for_project(bills, project_id), "gstAmount")


# ── Inventory ─────────────────────────────────────────────

def material_key(name: str) -> str:
    return (name or "").strip().lower()


def inventory_balances(purchases: Iterable[dict], consumption: Iterable[dict], project_id: Optional[str] = None) -> List[dict]:
    """Purchased minus consumed per material, matched on trimmed case-insensitive name.

    The unit is fixed by the first purchase of a material; later purchases with a
    different unit raise `unit_mismatch` instead of silently changing it.
    """
    stock: Dict[str, dict] = {}
    for p in for_project(purchases, project_id):
        key = material_key(p.get("description"))
        entry = stock.setdefault(key, {"purchased": 0, "consumed": 0, "unit": None, "unit_mismatch": False})
        entry["purchased"] += p.get("quantity") or 0
        unit = p.get("unit") or None
        if unit:
            if entry["unit"] is None:
                entry["unit"] = unit
            elif unit.strip().lower() != entry["unit"].strip().lower():
                entry["unit_mismatch"] = True
    for c in for_project(consumption, project_id):
        key = material_key(c.get("materialName"))
        entry = stock.setdefault(key, {"purchased": 0, "consumed": 0, "unit": None, "unit_mismatch": False})
        entry["consumed"] += c.get("quantity") or 0
        if entry["unit"] is None and c.get("unit"):
            entry["unit"] = c.get("unit")
    return [
        {
            "key": key,
            "name": key[:1].upper() + key[1:],
            "unit": data["unit"] or "",
            "purchased": data["purchased"],
            "consumed": data["consumed"],
            "balance": data["purchased"] - data["consumed"],
            "unit_mismatch": data["unit_mismatch"],
        }
        for key, data in stock.items()
    ]


def material_balance(purchases: Iterable[dict], consumption: Iterable[dict], name: str, project_id: Optional[str] = None) -> float:
    key = material_key(name)
    for row in inventory_balances(purchases, consumption, project_id):
        if row["key"] == key:
            return row["balance"]
    return 0


# ── Profit & loss ─────────────────────────────────────────

def profit_and_loss(purchases, kharchi, advances, worker_payments, client_payments, project_id: Optional[str] = None) -> dict:
    purchase_total = _total(for_project(purchases, project_id), "totalAmount")
    kharchi_total = _total(for_project(kharchi, project_id), "amount")
    advance_total = _total(for_project(advances, project_id), "amount")
    payroll_total = _total(for_project(worker_payments, project_id), "netPayable")
    expense = purchase_total + kharchi_total + advance_total + payroll_total
    income = _total(for_project(client_payments, project_id), "amount")
    return {
        "income": income,
        "expense": expense,
        "net": income - expense,
        "breakdown": {
            "purchases": purchase_total,
            "kharchi": kharchi_total,
            "advances": advance_total,
            "worker_payments": payroll_total,
        },
    }


# ── Payroll ───────────────────────────────────────────────

def month_deductions(kharchi: Iterable[dict], advances: Iterable[dict], worker_id: str, month: str) -> dict:
    return {
        "kharchi": sum(k.get("amount") or 0 for k in kharchi if k.get("workerId") == worker_id and (k.get("date") or "").startswith(month)),
        "advance": sum(a.get("amount") or 0 for a in advances if a.get("workerId") == worker_id and (a.get("date") or "").startswith(month)),
    }


def payroll_net(work_amount: float, mess_deduction: float, kharchi_deduction: float, advance_deduction: float) -> float:
    # Not floored: a worker can owe more than they earned this month
    return work_amount - mess_deduction - kharchi_deduction - advance_deduction


# ── Calendar helpers ──────────────────────────────────────

def parse_month(month: str):
    match = MONTH_RE.match(month or "")
    if not match:
        raise ValueError(f"Month must be in YYYY-MM format, got '{month}'")
    year, mon = int(match.group(1)), int(match.group(2))
    if not 1 <= mon <= 12:
        raise ValueError(f"Month out of range in '{month}'")
    return year, mon


def sundays_in_month(month: str) -> List[str]:
    year, mon = parse_month(month)
    days = calendar.monthrange(year, mon)[1]
    return [
        date(year, mon, d).isoformat()
        for d in range(1, days + 1)
        if date(year, mon, d).weekday() == calendar.SUNDAY
    ]


def is_sunday(iso_date: str) -> bool:
    try:
        return date.fromisoformat(iso_date).weekday() == calendar.SUNDAY
    except (TypeError, ValueError):
        return False


# ── Attendance & kharchi views ────────────────────────────

def attendance_counts(records: Iterable[dict]) -> dict:
    counts = {"Present": 0, "Absent": 0, "Half Day": 0}
    for r in records:
        status = r.get("status")
        counts[status] = counts.get(status, 0) + 1
    return counts


def attendance_trend(attendance: Iterable[dict], end_date: date, days: int = 7) -> List[dict]:
    records = list(attendance)
    trend = []
    for offset in range(days - 1, -1, -1):
        day = end_date - timedelta(days=offset)
        counts = attendance_counts(r for r in records if r.get("date") == day.isoformat())
        trend.append({"date": day.isoformat(), "day": day.strftime("%a"), "present": counts["Present"], "absent": counts["Absent"], "half_day": counts["Half Day"]})
    return trend


def kharchi_site_summaries(projects: Iterable[dict], kharchi: Iterable[dict], month: str) -> dict:
    entries = [k for k in kharchi if (k.get("date") or "").startswith(month)]
    sites = [
        {
            "project_id": p.get("id"),
            "project_name": p.get("name"),
            "total": sum(k.get("amount") or 0 for k in entries if k.get("projectId") == p.get("id")),
        }
        for p in projects
    ]
    return {"month": month, "sites": sites, "total": sum(s["total"] for s in sites)}
