from fastapi import APIRouter, Depends
from models.auth import LoginRequest, TokenResponse
from core.auth import get_current_user
from controllers import auth_controller

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(credentials: LoginRequest):
    return await auth_controller.login(credentials)


@router.post("/logout")
async def logout(current_user: dict = Depends(get_current_user)):
    return await auth_controller.logout()


@router.get("/me")
async def get_me(current_user: dict = Depends(get_current_user)):
    return await auth_controller.get_me(current_user)
