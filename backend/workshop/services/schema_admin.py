"""Idempotent schema setup, upgrade and inspection"""
import logging
from typing import Dict, List

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from workshop.database import Base
from workshop.models.session import WorkshopSession
from workshop.services.criteria import (
    DEFAULT_SESSION_NAME,
    DEFAULT_STAGE1_GOAL,
    DEFAULT_STAGE2_GOAL,
    default_criteria_for_stage,
)

logger = logging.getLogger(__name__)

# Columns added after the first release: table -> [(column, DDL type and default)]
UPGRADE_COLUMNS: Dict[str, List[tuple]] = {
    "sessions": [
        ("stage1_criteria", "JSON NOT NULL DEFAULT '[]'"),
        ("stage2_criteria", "JSON NOT NULL DEFAULT '[]'"),
    ],
    "submissions": [
        ("criteria_scores", "JSON NOT NULL DEFAULT '{}'"),
        ("cost_usd", "FLOAT NOT NULL DEFAULT 0"),
        ("user_rating", "INTEGER"),
    ],
}


def column_names(engine: Engine, table: str) -> List[str]:
    inspector = inspect(engine)
    if not inspector.has_table(table):
        return []
    return [column["name"] for column in inspector.get_columns(table)]


def init_db(db: Session, engine: Engine) -> Dict[str, object]:
    """Create missing tables and a default open session when there is none"""
    Base.metadata.create_all(bind=engine)

    created_default = False
    if db.query(WorkshopSession).count() == 0:
        db.add(WorkshopSession(
            name=DEFAULT_SESSION_NAME,
            stage1_goal=DEFAULT_STAGE1_GOAL,
            stage2_goal=DEFAULT_STAGE2_GOAL,
            stage1_criteria=default_criteria_for_stage(1),
            stage2_criteria=default_criteria_for_stage(2),
            is_open=True,
        ))
        db.commit()
        created_default = True
        logger.info("Created default session")

    return {"tables": sorted(Base.metadata.tables.keys()), "default_session_created": created_default}


def migrate(db: Session, engine: Engine) -> Dict[str, object]:
    """
    Bring an older database up to the current schema:
    add missing columns, then backfill sessions whose criteria lists are empty.
    """
    missing: List[tuple] = []
    for table, columns in UPGRADE_COLUMNS.items():
        existing = column_names(engine, table)
        if not existing:
            continue  # create_all builds the whole table
        missing.extend((table, name, ddl) for name, ddl in columns if name not in existing)

    added: List[str] = []
    if missing:
        with engine.begin() as conn:
            for table, name, ddl in missing:
                conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {name} {ddl}"))
                added.append(f"{table}.{name}")
                logger.info("Added column %s.%s", table, name)

    Base.metadata.create_all(bind=engine)

    updated = 0
    for session in db.query(WorkshopSession).all():
        if not session.stage1_criteria or not session.stage2_criteria:
            session.stage1_criteria = default_criteria_for_stage(1)
            session.stage2_criteria = default_criteria_for_stage(2)
            updated += 1
    db.commit()
    logger.info("Backfilled default criteria on %d session(s)", updated)

    return {"columns_added": added, "sessions_updated": updated}


def schema_status(engine: Engine) -> Dict[str, object]:
    """Which generation of the submissions schema is in place"""
    columns = column_names(engine, "submissions")
    has_dynamic = "criteria_scores" in columns
    has_static = "clarity_score" in columns
    if has_dynamic and has_static:
        status = "migrated"
    elif has_dynamic:
        status = "new-only"
    else:
        status = "old-only"
    return {"hasDynamicCriteria": has_dynamic, "hasStaticCriteria": has_static, "migrationStatus": status}
