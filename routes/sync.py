from fastapi import APIRouter, Depends
from core.auth import get_current_user
from controllers import sync_controller

router = APIRouter(prefix="/sync", tags=["sync"])


@router.get("/status")
async def get_sync_status(current_user: dict = Depends(get_current_user)):
    return await sync_controller.get_sync_status()


@router.post("")
async def trigger_sync(current_user: dict = Depends(get_current_user)):
    return await sync_controller.trigger_sync()
