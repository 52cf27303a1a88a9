"""
User endpoints.

Registration (upsert by ``telegramId``) and profile lookup for the
Telegram bot.  Storage failures are turned into the
``{"success": false, "error": ...}`` envelope by the exception handlers
installed in ``main.py``.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Path

from farm_service_api.app.core.db import Database, get_database
from farm_service_api.app.schemas.common import ErrorResponse
from farm_service_api.app.schemas.user import RegisterResponse, UserRegister, UserResponse
from farm_service_api.app.services.user_service import UserService


router = APIRouter(responses={500: {"model": ErrorResponse}})


def get_user_service(db: Database = Depends(get_database)) -> UserService:
    return UserService(db)


@router.post("/register", response_model=RegisterResponse)
async def register_user(
    user: Optional[UserRegister] = Body(None),
    service: UserService = Depends(get_user_service),
) -> RegisterResponse:
    """Register a user or overwrite the profile stored for its ``telegramId``.

    Every profile field is replaced; fields that are not sent are
    cleared.
    """
    user = user or UserRegister()
    user_id = await service.upsert_user(user.telegram_id, user.name, user.phone, user.location)
    return RegisterResponse(user_id=user_id)


@router.get("/user/{telegram_id}", response_model=UserResponse)
async def get_user(
    telegram_id: str = Path(..., description="Telegram identifier of the user"),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Return the user's profile, or ``data: null`` if it is not registered."""
    return UserResponse(data=await service.get_user(telegram_id))
