from fastapi import HTTPException
from typing import Optional, List

from database import store
from core import metrics
from core.validation import validate_project, validate_execution
from models.project import Project, ProjectCreate, ExecutionLevel, ExecutionLevelCreate


# ── Projects ──────────────────────────────────────────────

async def create_project(project_data: ProjectCreate) -> dict:
    project = Project(**project_data.model_dump()).to_record()
    validate_project(project, store.all("projects"))
    await store.add("projects", project)
    return project


async def get_projects(status: Optional[str] = None, search: Optional[str] = None) -> List[dict]:
    projects = store.all("projects")
    if status and status != "All":
        projects = [p for p in projects if p.get("status") == status]
    if search:
        term = search.lower()
        projects = [
            p for p in projects
            if term in (p.get("name") or "").lower()
            or term in (p.get("projectCode") or "").lower()
            or term in (p.get("client") or "").lower()
        ]
    return projects


async def get_project(project_id: str) -> dict:
    project = store.get("projects", project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


async def update_project(project_id: str, project_data: ProjectCreate) -> dict:
    await get_project(project_id)
    project = Project(**project_data.model_dump(), id=project_id).to_record()
    validate_project(project, store.all("projects"), editing_id=project_id)
    await store.edit("projects", project)
    return project


async def delete_project(project_id: str) -> dict:
    await get_project(project_id)
    await store.delete("projects", project_id)
    return {"message": "Project deleted"}


async def get_project_summary(project_id: str) -> dict:
    project = await get_project(project_id)
    workers = store.all("workers", project_id)
    bills = store.all("bills", project_id)
    return {
        "project": project,
        "health": metrics.budget_health(project),
        "budget_used_pct": round(metrics.budget_used_ratio(project) * 100, 1),
        "workforce": {"workers": len(workers), "active": len([w for w in workers if not w.get("exitDate")])},
        "financial": {
            "total_billed": sum(b.get("amount") or 0 for b in bills),
            "gst_liability": metrics.gst_liability(bills),
            **metrics.profit_and_loss(
                store.all("purchases"), store.all("kharchi"), store.all("advances"),
                store.all("worker_payments"), store.all("client_payments"), project_id,
            ),
        },
        "execution_levels": len(store.all("execution", project_id)),
    }


# ── Execution levels ──────────────────────────────────────

async def create_execution_level(data: ExecutionLevelCreate) -> dict:
    existing = store.all("execution", data.project_id)
    fields = data.model_dump()
    if not (fields.get("level_name") or "").strip():
        fields["level_name"] = f"Level {len(existing) + 1}"
    record = ExecutionLevel(**fields).to_record()
    validate_execution(record, store.all("projects"))
    await store.add("execution", record)
    return record


async def get_execution_levels(project_id: Optional[str] = None) -> List[dict]:
    return store.all("execution", project_id)


async def get_execution_level(level_id: str) -> dict:
    level = store.get("execution", level_id)
    if not level:
        raise HTTPException(status_code=404, detail="Execution level not found")
    return level


async def update_execution_level(level_id: str, data: ExecutionLevelCreate) -> dict:
    existing = store.get("execution", level_id)
    if not existing:
        raise HTTPException(status_code=404, detail="Execution level not found")
    fields = data.model_dump()
    if not (fields.get("level_name") or "").strip():
        fields["level_name"] = existing.get("levelName", "")
    record = ExecutionLevel(**fields, id=level_id).to_record()
    validate_execution(record, store.all("projects"))
    await store.edit("execution", record)
    return record


async def delete_execution_level(level_id: str) -> dict:
    if not store.get("execution", level_id):
        raise HTTPException(status_code=404, detail="Execution level not found")
    await store.delete("execution", level_id)
    return {"message": "Execution level deleted"}
