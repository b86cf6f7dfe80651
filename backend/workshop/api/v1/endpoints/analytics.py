from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from workshop.database import get_db
from workshop.schemas.analytics import AnalyticsResponse
from workshop.services.analytics import get_analytics

router = APIRouter()


@router.get("", response_model=AnalyticsResponse)
async def read_analytics(
    session_id: Optional[int] = Query(default=None, alias="session"),
    db: Session = Depends(get_db)
) -> AnalyticsResponse:
    """Aggregated workshop progress, optionally for one session"""
    return get_analytics(db, session_id)
