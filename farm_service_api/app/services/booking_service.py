"""
Business logic for service bookings.

Bookings are append‑only.  The owning ``userId`` is stored as given:
SQLite declares the reference to ``users`` but does not enforce it, so
a booking for an unknown user is accepted and can be listed later.
"""

import logging
from typing import List, Optional, Union

from farm_service_api.app.core.db import Database
from farm_service_api.app.schemas.common import Scalar
from farm_service_api.app.schemas.booking import BookingRead

logger = logging.getLogger(__name__)


class BookingService:
    """Repository for the ``bookings`` table."""

    def __init__(self, database: Database) -> None:
        self.db = database

    async def create_booking(
        self,
        user_id: Scalar,
        name: Optional[str],
        age: Scalar,
        address: Optional[str],
        farm_size: Scalar,
        equipment: Optional[str],
        service_date: Optional[str],
    ) -> int:
        """Insert a booking with status ``pending`` and return its id."""
        logger.info("Creating booking for user %s on %s", user_id, service_date)
        row = await self.db.fetch_one(
            """
            INSERT INTO bookings (userId, name, age, address, farmSize, equipment, serviceDate)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            RETURNING id
            """,
            (user_id, name, age, address, farm_size, equipment, service_date),
        )
        return row["id"]

    async def list_bookings(self, user_id: Union[int, str]) -> List[BookingRead]:
        """Return the user's bookings, newest first.

        A textual ``user_id`` such as ``"7"`` still matches the integer
        column through SQLite type affinity; one that is not a number
        matches nothing.

        ``createdAt`` has one second resolution; bookings created within
        the same second are ordered by descending id.
        """
        rows = await self.db.fetch_all(
            "SELECT * FROM bookings WHERE userId = ? ORDER BY createdAt DESC, id DESC",
            (user_id,),
        )
        return [BookingRead.model_validate(row) for row in rows]
