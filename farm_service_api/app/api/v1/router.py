"""
Top‑level router for version 1 of the API.

This router aggregates the domain‑specific routers (users, bookings,
processing guides).  The bot addresses the routes directly under
``/api`` (e.g. ``POST /api/register``), so ``main.py`` mounts this
router with that prefix.
"""

from fastapi import APIRouter

from .endpoints import bookings, processing, users

router = APIRouter()

router.include_router(users.router, tags=["users"])
router.include_router(bookings.router, tags=["bookings"])
router.include_router(processing.router, tags=["processing"])
