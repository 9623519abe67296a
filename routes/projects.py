from fastapi import APIRouter, Depends
from typing import Optional
from models.project import ProjectCreate, ExecutionLevelCreate
from core.auth import get_current_user
from controllers import project_controller

router = APIRouter(tags=["projects"])


# ── Projects ──────────────────────────────────────────────

@router.post("/projects")
async def create_project(project_data: ProjectCreate, current_user: dict = Depends(get_current_user)):
    return await project_controller.create_project(project_data)


@router.get("/projects")
async def get_projects(status: Optional[str] = None, search: Optional[str] = None, current_user: dict = Depends(get_current_user)):
    return await project_controller.get_projects(status, search)


@router.get("/projects/{project_id}")
async def get_project(project_id: str, current_user: dict = Depends(get_current_user)):
    return await project_controller.get_project(project_id)


@router.put("/projects/{project_id}")
async def update_project(project_id: str, project_data: ProjectCreate, current_user: dict = Depends(get_current_user)):
    return await project_controller.update_project(project_id, project_data)


@router.delete("/projects/{project_id}")
async def delete_project(project_id: str, current_user: dict = Depends(get_current_user)):
    return await project_controller.delete_project(project_id)


@router.get("/projects/{project_id}/summary")
async def get_project_summary(project_id: str, current_user: dict = Depends(get_current_user)):
    return await project_controller.get_project_summary(project_id)


# ── Execution levels ──────────────────────────────────────

@router.post("/execution")
async def create_execution_level(data: ExecutionLevelCreate, current_user: dict = Depends(get_current_user)):
    return await project_controller.create_execution_level(data)


@router.get("/execution")
async def get_execution_levels(project_id: Optional[str] = None, current_user: dict = Depends(get_current_user)):
    return await project_controller.get_execution_levels(project_id)


@router.get("/execution/{level_id}")
async def get_execution_level(level_id: str, current_user: dict = Depends(get_current_user)):
    return await project_controller.get_execution_level(level_id)


@router.put("/execution/{level_id}")
async def update_execution_level(level_id: str, data: ExecutionLevelCreate, current_user: dict = Depends(get_current_user)):
    return await project_controller.update_execution_level(level_id, data)


@router.delete("/execution/{level_id}")
async def delete_execution_level(level_id: str, current_user: dict = Depends(get_current_user)):
    return await project_controller.delete_execution_level(level_id)
