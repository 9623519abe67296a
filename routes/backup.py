from fastapi import APIRouter, Depends, UploadFile, File
from core.auth import get_current_user
from controllers import backup_controller

router = APIRouter(prefix="/backup", tags=["backup"])


@router.get("/export")
async def export_backup(current_user: dict = Depends(get_current_user)):
    return await backup_controller.export_backup()


@router.post("/import")
async def import_backup(file: UploadFile = File(...), current_user: dict = Depends(get_current_user)):
    content = await file.read()
    return await backup_controller.import_backup(content)
