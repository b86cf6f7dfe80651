from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from workshop.database import get_db
from workshop.services import schema_admin

router = APIRouter()


@router.post("/init-db")
async def init_db(db: Session = Depends(get_db)) -> dict:
    """Create tables and a default session if none exist. Safe to re-run."""
    result = schema_admin.init_db(db, db.get_bind())
    return {"success": True, "message": "Database initialized successfully", "details": result}


@router.post("/migrate")
async def migrate_db(db: Session = Depends(get_db)) -> dict:
    """Add columns introduced since the first release and backfill default criteria. Safe to re-run."""
    result = schema_admin.migrate(db, db.get_bind())
    return {"success": True, "message": "Database migration completed successfully", "details": result}
