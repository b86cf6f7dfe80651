"""Writing and rating submissions"""
import logging
from typing import Dict, Optional

from sqlalchemy.orm import Session

from workshop import config
from workshop.database import IS_EPHEMERAL
from workshop.errors import ConflictError, NotFoundError, PersistenceError
from workshop.models.feedback import SessionFeedback
from workshop.models.submission import Submission
from workshop.utils import prune_oldest

logger = logging.getLogger(__name__)


def _score(value) -> float:
    """Missing scores are stored as 0, never NULL"""
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def enforce_retention(db: Session, model, ephemeral: Optional[bool] = None) -> None:
    """In ephemeral mode keep only the newest MEMORY_RETENTION_LIMIT rows"""
    if ephemeral is None:
        ephemeral = IS_EPHEMERAL
    if ephemeral:
        dropped = prune_oldest(db, model, config.MEMORY_RETENTION_LIMIT)
        if dropped:
            logger.debug("Dropped %d old %s row(s)", dropped, model.__tablename__)


def build_submission(
    session_id: int,
    user_id: str,
    stage: int,
    prompt: str,
    goal: str,
    overall_score,
    criteria_scores: Optional[Dict[str, float]],
    token_count: int,
    co2_grams: float,
    cost_usd: float,
    feedback: Optional[str] = None,
    improved_prompt: Optional[str] = None,
) -> Submission:
    return Submission(
        session_id=session_id,
        user_id=user_id,
        stage=stage,
        prompt=prompt,
        goal=goal,
        overall_score=_score(overall_score),
        criteria_scores={name: _score(score) for name, score in (criteria_scores or {}).items()},
        token_count=max(int(token_count or 0), 0),
        co2_grams=co2_grams or 0.0,
        cost_usd=cost_usd or 0.0,
        feedback=feedback or "",
        improved_prompt=improved_prompt or "",
    )


def save_submission(db: Session, submission: Submission, mode: Optional[str] = None) -> Optional[Submission]:
    """
    Insert a submission.

    In "best_effort" mode a failed write is logged, rolled back and None is
    returned so the caller can still answer the request. In "strict" mode the
    failure raises PersistenceError.
    """
    mode = mode or config.PERSISTENCE_MODE
    try:
        db.add(submission)
        db.flush()
        enforce_retention(db, Submission)
        db.commit()
        db.refresh(submission)
        logger.info(
            "Saved submission %d (session=%d user=%s stage=%d)",
            submission.id, submission.session_id, submission.user_id, submission.stage,
        )
        return submission
    except Exception:
        db.rollback()
        logger.exception("Failed to save submission for user %s", submission.user_id)
        if mode == "strict":
            raise PersistenceError()
        return None


def set_user_rating(db: Session, submission: Submission, rating: int) -> Submission:
    """
    Attach the participant's 1-5 rating; a rating can only be set once.
    The NULL check and the write happen in a single UPDATE.
    """
    updated = db.query(Submission).filter(
        Submission.id == submission.id,
        Submission.user_rating.is_(None),
    ).update({Submission.user_rating: rating}, synchronize_session=False)
    if updated == 0:
        db.rollback()
        raise ConflictError("This evaluation has already been rated")
    db.commit()
    db.refresh(submission)
    return submission


def find_latest_by_prompt(db: Session, prompt: str) -> Submission:
    """Most recent submission whose prompt text matches exactly"""
    submission = db.query(Submission).filter(
        Submission.prompt == prompt
    ).order_by(Submission.created_at.desc(), Submission.id.desc()).first()
    if submission is None:
        raise NotFoundError("No submission found for this prompt")
    return submission


def save_feedback(db: Session, user_id: str, rating: int, message: Optional[str]) -> SessionFeedback:
    entry = SessionFeedback(user_id=user_id, rating=rating, message=message)
    db.add(entry)
    db.flush()
    enforce_retention(db, SessionFeedback)
    db.commit()
    db.refresh(entry)
    return entry
