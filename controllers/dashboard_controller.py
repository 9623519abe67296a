from datetime import datetime
from typing import Optional

from database import store
from core import metrics
from core.sync import IST


async def get_dashboard_stats(project_id: Optional[str] = None) -> dict:
    # ── Projects ──────────────────────────────────────────
    projects = store.all("projects")
    scoped_projects = metrics.for_project([{**p, "projectId": p.get("id")} for p in projects], project_id)
    total_budget = sum(p.get("budget") or 0 for p in scoped_projects)
    total_spent = sum(p.get("spent") or 0 for p in scoped_projects)
    health = metrics.project_health_summary(scoped_projects)

    # ── Workforce ─────────────────────────────────────────
    workers = store.all("workers", project_id)
    today = datetime.now(IST).date()
    attendance = store.all("attendance", project_id)
    today_counts = metrics.attendance_counts(a for a in attendance if a.get("date") == today.isoformat())

    # ── Money ─────────────────────────────────────────────
    bills = store.all("bills", project_id)
    purchases = store.all("purchases", project_id)
    pnl = metrics.profit_and_loss(
        store.all("purchases"), store.all("kharchi"), store.all("advances"),
        store.all("worker_payments"), store.all("client_payments"), project_id,
    )

    return {
        "projects": {
            "total": len(scoped_projects),
            "active": len([p for p in scoped_projects if p.get("status") == "In Progress"]),
            "total_budget": total_budget,
            "total_spent": total_spent,
            "critical": len([h for h in health if h["health"] == metrics.HEALTH_CRITICAL]),
        },
        "health": health,
        "workforce": {
            "total_workers": len(workers),
            "today": today.isoformat(),
            "present_today": today_counts["Present"],
            "absent_today": today_counts["Absent"],
            "half_day_today": today_counts["Half Day"],
        },
        "attendance_trend": metrics.attendance_trend(attendance, today),
        "financial": {
            "total_billed": sum(b.get("amount") or 0 for b in bills),
            "gst_liability": metrics.gst_liability(bills),
            "total_purchases": sum(p.get("totalAmount") or 0 for p in purchases),
            "income": pnl["income"],
            "expense": pnl["expense"],
            "net": pnl["net"],
        },
    }
