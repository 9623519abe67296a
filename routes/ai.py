from fastapi import APIRouter, Depends
from typing import List
from models.ai import EstimateRequest, EstimateItem, ChatRequest
from core.auth import get_current_user
from controllers import ai_controller

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/estimate", response_model=List[EstimateItem])
async def generate_estimate(request: EstimateRequest, current_user: dict = Depends(get_current_user)):
    return await ai_controller.generate_estimate(request)


@router.post("/chat")
async def chat(request: ChatRequest, current_user: dict = Depends(get_current_user)):
    return await ai_controller.chat(request)
