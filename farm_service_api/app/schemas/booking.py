"""
Pydantic models for service bookings.

A booking records a request for machinery work on a farm.  The
``status`` column defaults to ``pending`` and is not changed by the
API.
"""

from typing import List, Optional

from pydantic import Field

from .common import ApiModel, Scalar


class BookingCreate(ApiModel):
    """Body of ``POST /api/bookings``.

    Values are stored as sent: ``userId`` is not checked against the
    ``users`` table and ``age``, ``farmSize`` and ``serviceDate`` are not
    type‑, range‑ or format‑checked.
    """

    user_id: Scalar = Field(None, alias="userId", examples=[1])
    name: Optional[str] = Field(None, examples=["Иван Петров"])
    age: Scalar = Field(None, examples=[42])
    address: Optional[str] = Field(None, examples=["ст. Полтавская, ул. Мира 5"])
    farm_size: Scalar = Field(None, alias="farmSize", examples=[12.5])
    equipment: Optional[str] = Field(None, examples=["tractor"])
    service_date: Optional[str] = Field(None, alias="serviceDate", examples=["2024-06-01"])


class BookingRead(ApiModel):
    """A row of the ``bookings`` table."""

    id: int
    user_id: Scalar = Field(None, alias="userId")
    name: Optional[str] = None
    age: Scalar = None
    address: Optional[str] = None
    farm_size: Scalar = Field(None, alias="farmSize")
    equipment: Optional[str] = None
    service_date: Optional[str] = Field(None, alias="serviceDate")
    status: Optional[str] = None
    created_at: Optional[str] = Field(None, alias="createdAt")


class BookingCreatedResponse(ApiModel):
    success: bool = True
    booking_id: int = Field(..., alias="bookingId")
    message: str = "Booking created successfully"


class BookingListResponse(ApiModel):
    success: bool = True
    data: List[BookingRead] = Field(default_factory=list)
