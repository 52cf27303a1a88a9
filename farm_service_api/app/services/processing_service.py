"""
Business logic for processing guides (question/response history).
"""

import logging
from typing import List, Optional, Union

from farm_service_api.app.core.db import Database
from farm_service_api.app.schemas.common import Scalar
from farm_service_api.app.schemas.processing import ProcessingGuideRead

logger = logging.getLogger(__name__)


class ProcessingService:
    """Repository for the ``processingGuides`` table."""

    def __init__(self, database: Database) -> None:
        self.db = database

    async def create_processing_entry(
        self,
        user_id: Scalar,
        question: Optional[str],
        response: Optional[str],
        type_: Optional[str],
    ) -> int:
        """Store one question/response exchange and return its id."""
        logger.info("Saving processing guide for user %s (type=%s)", user_id, type_)
        row = await self.db.fetch_one(
            "INSERT INTO processingGuides (userId, question, response, type) VALUES (?, ?, ?, ?) RETURNING id",
            (user_id, question, response, type_),
        )
        return row["id"]

    async def list_processing_entries(self, user_id: Union[int, str]) -> List[ProcessingGuideRead]:
        """Return the user's question history, newest first."""
        rows = await self.db.fetch_all(
            "SELECT * FROM processingGuides WHERE userId = ? ORDER BY createdAt DESC, id DESC",
            (user_id,),
        )
        return [ProcessingGuideRead.model_validate(row) for row in rows]
