from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from workshop.database import get_db
from workshop.errors import SessionClosedError
from workshop.models.session import WorkshopSession
from workshop.models.submission import Submission
from workshop.services.metrics import estimate_co2, estimate_cost
from workshop.services.session_service import get_active_session
from workshop.services.submission_service import build_submission, save_submission, set_user_rating
from workshop.utils import get_or_404
from workshop.schemas.submission import (
    SubmissionResponse,
    SubmissionListResponse,
    CreateSubmissionRequest,
    RateSubmissionRequest,
)

router = APIRouter()


@router.get("", response_model=SubmissionListResponse)
async def list_submissions(
    session_id: Optional[int] = Query(default=None, alias="session"),
    db: Session = Depends(get_db)
) -> SubmissionListResponse:
    """List submissions newest first, optionally for one session"""
    query = db.query(Submission)
    if session_id is not None:
        query = query.filter(Submission.session_id == session_id)
    submissions = query.order_by(Submission.created_at.desc(), Submission.id.desc()).all()
    return SubmissionListResponse(submissions=submissions)


@router.post("", response_model=SubmissionResponse)
async def create_submission(
    request: CreateSubmissionRequest,
    db: Session = Depends(get_db)
) -> SubmissionResponse:
    """Store an already-scored prompt without calling the evaluator"""
    if request.sessionId is not None:
        session = get_or_404(db, WorkshopSession, request.sessionId, "Session not found")
    else:
        session = get_active_session(db)
        if session is None:
            raise SessionClosedError()

    criteria_scores = dict(request.criteriaScores)
    for name, value in (("Clarity", request.clarity), ("Specificity", request.specificity), ("Efficiency", request.efficiency)):
        if value is not None:
            criteria_scores.setdefault(name, value)

    submission = build_submission(
        session_id=session.id,
        user_id=request.userId,
        stage=request.stage,
        prompt=request.prompt,
        goal=request.targetOutput,
        overall_score=request.effectivenessScore,
        criteria_scores=criteria_scores,
        token_count=request.tokens,
        co2_grams=request.estimatedCO2 if request.estimatedCO2 is not None else estimate_co2(request.tokens),
        cost_usd=estimate_cost(request.tokens),
        feedback=request.feedback,
        improved_prompt=request.improvedPrompt,
    )
    # An explicit insert has nothing else to return, so a failed write is always an error
    return save_submission(db, submission, mode="strict")


@router.get("/{submission_id}", response_model=SubmissionResponse)
async def get_submission(
    submission_id: int,
    db: Session = Depends(get_db)
) -> SubmissionResponse:
    return get_or_404(db, Submission, submission_id, "Submission not found")


@router.post("/{submission_id}/rating", response_model=SubmissionResponse)
async def rate_submission(
    submission_id: int,
    request: RateSubmissionRequest,
    db: Session = Depends(get_db)
) -> SubmissionResponse:
    """Attach the participant's 1-5 rating of an evaluation"""
    submission = get_or_404(db, Submission, submission_id, "Submission not found")
    return set_user_rating(db, submission, request.rating)
