"""
Pydantic models for processing guides.

A processing guide is one question asked through the bot together with
the answer that was given, tagged with a free‑form ``type`` label.
"""

from typing import List, Optional

from pydantic import Field

from .common import ApiModel, Scalar


class ProcessingGuideCreate(ApiModel):
    user_id: Scalar = Field(None, alias="userId", examples=[1])
    question: Optional[str] = Field(None, examples=["How do I dry maize after harvest?"])
    response: Optional[str] = Field(None, examples=["Spread the cobs in a thin layer..."])
    type: Optional[str] = Field(None, examples=["drying"])


class ProcessingGuideRead(ApiModel):
    """A row of the ``processingGuides`` table."""

    id: int
    user_id: Scalar = Field(None, alias="userId")
    question: Optional[str] = None
    response: Optional[str] = None
    type: Optional[str] = None
    created_at: Optional[str] = Field(None, alias="createdAt")


class ProcessingGuideCreatedResponse(ApiModel):
    success: bool = True
    guide_id: int = Field(..., alias="guideId")
    message: str = "Processing guide saved"


class ProcessingGuideListResponse(ApiModel):
    success: bool = True
    data: List[ProcessingGuideRead] = Field(default_factory=list)
