"""Key/value settings, used for the legacy single-goal endpoint"""
from typing import Dict

from sqlalchemy.orm import Session

from workshop.models.setting import Setting

DEFAULT_GOALS: Dict[str, str] = {
    "stage1": "Write a professional email to a client explaining a project delay",
    "stage2": "Write a professional email to a client explaining a project delay",
}


def _key(stage_key: str) -> str:
    return f"legacy_goal_{stage_key}"


def get_goals(db: Session) -> Dict[str, str]:
    rows = db.query(Setting).filter(Setting.key.in_([_key(k) for k in DEFAULT_GOALS])).all()
    stored = {row.key: row.value for row in rows}
    return {k: stored.get(_key(k), default) for k, default in DEFAULT_GOALS.items()}


def set_goals(db: Session, updates: Dict[str, str]) -> Dict[str, str]:
    """Overwrite the given goals; blank values are ignored"""
    for stage_key, value in updates.items():
        if stage_key not in DEFAULT_GOALS or not value or not value.strip():
            continue
        row = db.get(Setting, _key(stage_key))
        if row is None:
            db.add(Setting(key=_key(stage_key), value=value.strip()))
        else:
            row.value = value.strip()
    db.commit()
    return get_goals(db)
