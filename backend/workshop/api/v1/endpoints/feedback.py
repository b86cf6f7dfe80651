from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from workshop.database import get_db
from workshop.errors import ValidationError
from workshop.models.feedback import SessionFeedback
from workshop.schemas.feedback import FeedbackResponse, FeedbackListResponse, CreateFeedbackRequest
from workshop.services.submission_service import save_feedback

router = APIRouter()


@router.get("", response_model=FeedbackListResponse)
async def list_feedback(db: Session = Depends(get_db)) -> FeedbackListResponse:
    """All session feedback, newest first"""
    entries = db.query(SessionFeedback).order_by(
        SessionFeedback.created_at.desc(), SessionFeedback.id.desc()
    ).all()
    return FeedbackListResponse(feedback=entries)


@router.post("", response_model=FeedbackResponse)
async def create_feedback(
    request: CreateFeedbackRequest,
    db: Session = Depends(get_db)
) -> FeedbackResponse:
    """Record a 1-5 star rating of the session with an optional comment"""
    rating = request.rating
    if isinstance(rating, bool) or not isinstance(rating, int) or rating < 1 or rating > 5:
        raise ValidationError("Rating must be between 1 and 5")

    message = request.message.strip() if request.message and request.message.strip() else None
    user_id = request.userId.strip() if request.userId and request.userId.strip() else "anonymous"
    return save_feedback(db, user_id=user_id, rating=rating, message=message)
