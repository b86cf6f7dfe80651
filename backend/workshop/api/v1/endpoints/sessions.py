from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from workshop.database import get_db
from workshop.services import session_service
from workshop.schemas.session import (
    SessionEnvelope,
    SessionListResponse,
    CreateSessionRequest,
    UpdateSessionRequest,
)

router = APIRouter()


@router.get("", response_model=SessionListResponse)
async def list_sessions(db: Session = Depends(get_db)) -> SessionListResponse:
    """List all sessions, newest first"""
    return SessionListResponse(sessions=session_service.list_sessions(db))


@router.post("", response_model=SessionEnvelope)
async def create_session(
    request: CreateSessionRequest,
    db: Session = Depends(get_db)
) -> SessionEnvelope:
    """Create a new session (open by default)"""
    session = session_service.create_session(
        db,
        name=request.name,
        stage1_goal=request.stage1_goal,
        stage2_goal=request.stage2_goal,
        stage1_criteria=[c.model_dump() for c in request.stage1_criteria] if request.stage1_criteria is not None else None,
        stage2_criteria=[c.model_dump() for c in request.stage2_criteria] if request.stage2_criteria is not None else None,
    )
    return SessionEnvelope(session=session)


@router.patch("", response_model=SessionEnvelope)
async def update_session(
    request: UpdateSessionRequest,
    db: Session = Depends(get_db)
) -> SessionEnvelope:
    """Open/close a session or edit its name, goals and criteria"""
    changes = request.model_dump(exclude={"id"}, exclude_none=True)
    session = session_service.update_session(db, request.id, changes)
    return SessionEnvelope(session=session)


@router.get("/active", response_model=SessionEnvelope)
async def get_active_session(db: Session = Depends(get_db)) -> SessionEnvelope:
    """The session currently accepting submissions (most recent open one), or null"""
    session = session_service.get_active_session(db)
    if session is None:
        return SessionEnvelope(session=None, message="No active session")
    return SessionEnvelope(session=session)


@router.post("/{session_id}/toggle", response_model=SessionEnvelope)
async def toggle_session(
    session_id: int,
    db: Session = Depends(get_db)
) -> SessionEnvelope:
    """Flip a session between open and closed"""
    return SessionEnvelope(session=session_service.toggle_session(db, session_id))
