from pydantic import BaseModel
from datetime import datetime
from typing import Any, List, Optional


class FeedbackResponse(BaseModel):
    id: int
    user_id: str
    rating: int
    message: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class FeedbackListResponse(BaseModel):
    feedback: List[FeedbackResponse]


class CreateFeedbackRequest(BaseModel):
    userId: Optional[str] = None
    rating: Optional[Any] = None  # Checked in the endpoint so out-of-range values get a clear message
    message: Optional[str] = None
