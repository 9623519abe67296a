from fastapi import APIRouter, Depends
from typing import Optional
from models.mess import MessEntryCreate
from core.auth import get_current_user
from controllers import mess_controller

router = APIRouter(prefix="/mess", tags=["mess"])


@router.post("")
async def create_mess_entry(data: MessEntryCreate, current_user: dict = Depends(get_current_user)):
    return await mess_controller.create_mess_entry(data)


@router.get("")
async def get_mess_entries(project_id: Optional[str] = None, current_user: dict = Depends(get_current_user)):
    return await mess_controller.get_mess_entries(project_id)


@router.get("/summary")
async def get_mess_summary(project_id: Optional[str] = None, current_user: dict = Depends(get_current_user)):
    return await mess_controller.get_mess_summary(project_id)


@router.get("/{entry_id}")
async def get_mess_entry(entry_id: str, current_user: dict = Depends(get_current_user)):
    return await mess_controller.get_mess_entry(entry_id)


@router.put("/{entry_id}")
async def update_mess_entry(entry_id: str, data: MessEntryCreate, current_user: dict = Depends(get_current_user)):
    return await mess_controller.update_mess_entry(entry_id, data)


@router.delete("/{entry_id}")
async def delete_mess_entry(entry_id: str, current_user: dict = Depends(get_current_user)):
    return await mess_controller.delete_mess_entry(entry_id)
