"""
Booking endpoints.

These routes create service bookings and list a user's bookings.  They
rely on the ``BookingService``; the request data is stored as sent.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Path

from farm_service_api.app.core.db import Database, get_database
from farm_service_api.app.schemas.booking import (
    BookingCreate,
    BookingCreatedResponse,
    BookingListResponse,
)
from farm_service_api.app.schemas.common import ErrorResponse
from farm_service_api.app.services.booking_service import BookingService


router = APIRouter(responses={500: {"model": ErrorResponse}})


def get_booking_service(db: Database = Depends(get_database)) -> BookingService:
    return BookingService(db)


@router.post("/bookings", response_model=BookingCreatedResponse)
async def create_booking(
    booking: Optional[BookingCreate] = Body(None),
    service: BookingService = Depends(get_booking_service),
) -> BookingCreatedResponse:
    """Book a service.  The booking starts in status ``pending``."""
    booking = booking or BookingCreate()
    booking_id = await service.create_booking(
        booking.user_id,
        booking.name,
        booking.age,
        booking.address,
        booking.farm_size,
        booking.equipment,
        booking.service_date,
    )
    return BookingCreatedResponse(booking_id=booking_id)


@router.get("/bookings/{user_id}", response_model=BookingListResponse)
async def list_user_bookings(
    user_id: str = Path(..., description="Internal ID of the user"),
    service: BookingService = Depends(get_booking_service),
) -> BookingListResponse:
    """List the user's bookings, most recent first."""
    return BookingListResponse(data=await service.list_bookings(user_id))
