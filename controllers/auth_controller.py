from fastapi import HTTPException
import logging

from config import ADMIN_USERNAME, ADMIN_PASSWORD_HASH, AUTH_FLAG_KEY
from database import adapter
from models.auth import LoginRequest, TokenResponse
from core.auth import verify_password, create_access_token

logger = logging.getLogger(__name__)


async def login(credentials: LoginRequest) -> TokenResponse:
    if credentials.username != ADMIN_USERNAME or not verify_password(credentials.password, ADMIN_PASSWORD_HASH):
        logger.warning(f"Failed login attempt for '{credentials.username}'")
        raise HTTPException(status_code=401, detail="Invalid credentials")
    await adapter.save(AUTH_FLAG_KEY, True)
    return TokenResponse(access_token=create_access_token({"sub": credentials.username}), username=credentials.username)


async def logout() -> dict:
    await adapter.save(AUTH_FLAG_KEY, False)
    return {"message": "Logged out"}


async def get_me(current_user: dict) -> dict:
    return {"username": current_user["username"], "authenticated": await adapter.load(AUTH_FLAG_KEY, False)}
