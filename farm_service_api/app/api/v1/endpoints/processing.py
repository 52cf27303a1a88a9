"""
Processing guide endpoints.

The bot saves each crop processing question together with the answer it
gave, and can show the user's history later.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Path

from farm_service_api.app.core.db import Database, get_database
from farm_service_api.app.schemas.common import ErrorResponse
from farm_service_api.app.schemas.processing import (
    ProcessingGuideCreate,
    ProcessingGuideCreatedResponse,
    ProcessingGuideListResponse,
)
from farm_service_api.app.services.processing_service import ProcessingService


router = APIRouter(responses={500: {"model": ErrorResponse}})


def get_processing_service(db: Database = Depends(get_database)) -> ProcessingService:
    return ProcessingService(db)


@router.post("/processing", response_model=ProcessingGuideCreatedResponse)
async def save_processing_guide(
    guide: Optional[ProcessingGuideCreate] = Body(None),
    service: ProcessingService = Depends(get_processing_service),
) -> ProcessingGuideCreatedResponse:
    """Save a question and the answer the bot gave."""
    guide = guide or ProcessingGuideCreate()
    guide_id = await service.create_processing_entry(
        guide.user_id, guide.question, guide.response, guide.type
    )
    return ProcessingGuideCreatedResponse(guide_id=guide_id)


@router.get("/processing/{user_id}", response_model=ProcessingGuideListResponse)
async def list_processing_history(
    user_id: str = Path(..., description="Internal ID of the user"),
    service: ProcessingService = Depends(get_processing_service),
) -> ProcessingGuideListResponse:
    """Return the user's processing history, most recent first."""
    return ProcessingGuideListResponse(data=await service.list_processing_entries(user_id))
