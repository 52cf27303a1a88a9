"""
Pydantic models for user data.

Users are registered by the Telegram bot and identified by their
``telegramId``.  Registration is an upsert: a second registration with
the same ``telegramId`` overwrites ``name``, ``phone`` and ``location``.
"""

from typing import Optional

from pydantic import Field

from .common import ApiModel


class UserRegister(ApiModel):
    """Body of ``POST /api/register``.

    Fields are not validated here.  ``name`` and ``phone`` are required
    by the database; leaving them out produces a storage error.
    """

    telegram_id: Optional[str] = Field(None, alias="telegramId", examples=["123456789"])
    name: Optional[str] = Field(None, examples=["Иван Петров"])
    phone: Optional[str] = Field(None, examples=["+79001234567"])
    location: Optional[str] = Field(None, examples=["Краснодарский край"])


class UserRead(ApiModel):
    """A row of the ``users`` table."""

    id: int
    telegram_id: Optional[str] = Field(None, alias="telegramId")
    name: str
    phone: str
    location: Optional[str] = None
    registered_at: Optional[str] = Field(None, alias="registeredAt")
    updated_at: Optional[str] = Field(None, alias="updatedAt")


class RegisterResponse(ApiModel):
    success: bool = True
    user_id: int = Field(..., alias="userId")
    message: str = "Registration successful"


class UserResponse(ApiModel):
    success: bool = True
    # ``None`` when no user is registered under the requested telegramId.
    data: Optional[UserRead] = None
