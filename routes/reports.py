from fastapi import APIRouter, Depends
from typing import Optional
from core.auth import get_current_user
from controllers import reports_controller

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/export/{report_type}")
async def export_report(report_type: str, format: str = "excel", project_id: Optional[str] = None, month: Optional[str] = None, current_user: dict = Depends(get_current_user)):
    return await reports_controller.export_report(report_type, format, project_id, month)
