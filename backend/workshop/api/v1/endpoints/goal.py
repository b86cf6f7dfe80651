from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from workshop.database import get_db
from workshop.schemas.goal import GoalsResponse, UpdateGoalsRequest
from workshop.services.settings_service import get_goals, set_goals

router = APIRouter()


@router.get("", response_model=GoalsResponse)
async def read_goals(db: Session = Depends(get_db)) -> GoalsResponse:
    """Legacy per-stage goals (sessions carry their own goals now)"""
    return GoalsResponse(goals=get_goals(db))


@router.post("", response_model=GoalsResponse)
async def update_goals(
    request: UpdateGoalsRequest,
    db: Session = Depends(get_db)
) -> GoalsResponse:
    goals = set_goals(db, request.model_dump(exclude_none=True))
    return GoalsResponse(goals=goals, success=True)
