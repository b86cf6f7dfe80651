import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from workshop import config
from workshop.database import get_db, IS_EPHEMERAL
from workshop.llm_models import has_api_key
from workshop.models import WorkshopSession, Submission, SessionFeedback
from workshop.services.schema_admin import schema_status

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def health(db: Session = Depends(get_db)):
    """Database connectivity, row counts and schema generation"""
    environment = {
        "hasLlmApiKey": has_api_key(config.EVALUATOR_MODEL),
        "evaluatorModel": config.EVALUATOR_MODEL,
        "ephemeralStore": IS_EPHEMERAL,
    }
    started = time.perf_counter()
    try:
        db.execute(text("SELECT 1"))
        sessions = db.query(WorkshopSession).count()
        open_sessions = db.query(WorkshopSession).filter(WorkshopSession.is_open.is_(True)).count()
        submissions = db.query(Submission).count()
        feedback = db.query(SessionFeedback).count()
        schema = schema_status(db.get_bind())
    except Exception as e:
        logger.exception("Health check failed")
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "database": {"connected": False, "error": type(e).__name__},
                "environment": environment,
            },
        )

    elapsed_ms = (time.perf_counter() - started) * 1000
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": {"connected": True, "responseTime": f"{elapsed_ms:.0f}ms"},
        "tables": {
            "sessions": {"count": sessions, "activeCount": open_sessions},
            "submissions": {"count": submissions},
            "session_feedback": {"count": feedback},
        },
        "schema": schema,
        "environment": environment,
    }
