"""Workshop session lookups and admin mutations"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from workshop import config
from workshop.models.session import WorkshopSession
from workshop.services.criteria import default_criteria_for_stage, normalize_criteria
from workshop.utils import get_or_404

logger = logging.getLogger(__name__)


def get_active_session(db: Session) -> Optional[WorkshopSession]:
    """The most recently created open session, or None"""
    return db.query(WorkshopSession).filter(
        WorkshopSession.is_open.is_(True)
    ).order_by(WorkshopSession.created_at.desc(), WorkshopSession.id.desc()).first()


def list_sessions(db: Session) -> List[WorkshopSession]:
    return db.query(WorkshopSession).order_by(
        WorkshopSession.created_at.desc(), WorkshopSession.id.desc()
    ).all()


def _close_others(db: Session, keep_id: Optional[int]) -> int:
    query = db.query(WorkshopSession).filter(WorkshopSession.is_open.is_(True))
    if keep_id is not None:
        query = query.filter(WorkshopSession.id != keep_id)
    closed = query.update({WorkshopSession.is_open: False}, synchronize_session=False)
    if closed:
        logger.info("Closed %d other open session(s)", closed)
    return closed


def create_session(
    db: Session,
    name: str,
    stage1_goal: str,
    stage2_goal: str,
    stage1_criteria: Optional[List[Any]] = None,
    stage2_criteria: Optional[List[Any]] = None,
) -> WorkshopSession:
    """Create an open session; omitted criteria fall back to the workshop defaults"""
    session = WorkshopSession(
        name=name,
        stage1_goal=stage1_goal,
        stage2_goal=stage2_goal,
        stage1_criteria=normalize_criteria(stage1_criteria) if stage1_criteria is not None else default_criteria_for_stage(1),
        stage2_criteria=normalize_criteria(stage2_criteria) if stage2_criteria is not None else default_criteria_for_stage(2),
        is_open=True,
    )
    db.add(session)
    db.flush()
    if config.ENFORCE_SINGLE_OPEN_SESSION:
        _close_others(db, session.id)
    db.commit()
    db.refresh(session)
    logger.info("Created session %d (%s)", session.id, session.name)
    return session


def set_open(db: Session, session: WorkshopSession, is_open: bool) -> WorkshopSession:
    session.is_open = is_open
    if is_open and config.ENFORCE_SINGLE_OPEN_SESSION:
        _close_others(db, session.id)
    db.commit()
    db.refresh(session)
    logger.info("Session %d is now %s", session.id, "open" if is_open else "closed")
    return session


def toggle_session(db: Session, session_id: int) -> WorkshopSession:
    session = get_or_404(db, WorkshopSession, session_id, "Session not found")
    return set_open(db, session, not session.is_open)


def update_session(db: Session, session_id: int, changes: Dict[str, Any]) -> WorkshopSession:
    """
    Apply the provided fields to a session. Keys: name, is_open, stage1_goal,
    stage2_goal, stage1_criteria, stage2_criteria. None values are ignored.
    """
    session = get_or_404(db, WorkshopSession, session_id, "Session not found")

    for field in ("name", "stage1_goal", "stage2_goal"):
        if changes.get(field) is not None:
            setattr(session, field, changes[field])
    for field in ("stage1_criteria", "stage2_criteria"):
        if changes.get(field) is not None:
            setattr(session, field, normalize_criteria(changes[field]))

    if changes.get("is_open") is not None:
        return set_open(db, session, bool(changes["is_open"]))

    db.commit()
    db.refresh(session)
    return session
