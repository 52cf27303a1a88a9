"""
Business logic for users.

The ``UserService`` registers users coming from the Telegram bot and
looks them up by their ``telegramId``.  Registration is an upsert keyed
on ``telegramId``.
"""

import logging
from typing import Optional

from farm_service_api.app.core.db import Database
from farm_service_api.app.schemas.user import UserRead

logger = logging.getLogger(__name__)


class UserService:
    """Repository for the ``users`` table."""

    def __init__(self, database: Database) -> None:
        self.db = database

    async def upsert_user(
        self,
        telegram_id: Optional[str],
        name: Optional[str],
        phone: Optional[str],
        location: Optional[str],
    ) -> int:
        """Create a user or replace the one registered under ``telegram_id``.

        All three attributes are overwritten on conflict, so a caller
        that omits ``location`` clears it.  The surrogate ``id`` and
        ``registeredAt`` of an existing row are kept and ``updatedAt`` is
        refreshed.  Rows without a ``telegramId`` never conflict and are
        always inserted.

        Returns the ``id`` of the resulting row.  Raises ``StorageError``
        when SQLite rejects the write (e.g. missing ``name``).
        """
        logger.info("Registering user telegramId=%s", telegram_id)
        row = await self.db.fetch_one(
            """
            INSERT INTO users (telegramId, name, phone, location)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(telegramId) DO UPDATE SET
                name = excluded.name,
                phone = excluded.phone,
                location = excluded.location,
                updatedAt = CURRENT_TIMESTAMP
            RETURNING id
            """,
            (telegram_id, name, phone, location),
        )
        return row["id"]

    async def get_user(self, telegram_id: str) -> Optional[UserRead]:
        """Retrieve a user by ``telegramId``; ``None`` if not registered."""
        row = await self.db.fetch_one(
            "SELECT * FROM users WHERE telegramId = ?",
            (telegram_id,),
        )
        if row is None:
            return None
        return UserRead.model_validate(row)
