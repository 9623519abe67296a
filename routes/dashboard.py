from fastapi import APIRouter, Depends
from typing import Optional
from core.auth import get_current_user
from controllers import dashboard_controller

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats")
async def get_dashboard_stats(project_id: Optional[str] = None, current_user: dict = Depends(get_current_user)):
    return await dashboard_controller.get_dashboard_stats(project_id)
