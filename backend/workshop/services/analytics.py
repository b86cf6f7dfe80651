"""Read-only aggregation over submissions for the admin dashboard.

Per user, each stage is represented by the best (maximum) score over all
attempts; improvement is stage 2 best minus stage 1 best and only exists when
the user has scores in both stages. Users are shown as "User N", numbered by
the ISO timestamp of their first submission, recomputed on every call.
"""
from typing import Dict, Iterable, List, Optional, Sequence

from sqlalchemy.orm import Session

from workshop.models.feedback import SessionFeedback
from workshop.models.submission import Submission
from workshop.utils import truncate_text

PROMPT_PREVIEW_LENGTH = 80


def _mean(values: Sequence[float]) -> Optional[float]:
    if not values:
        return None
    return round(sum(values) / len(values), 2)


def user_labels(submissions: Iterable[Submission]) -> Dict[str, str]:
    """Map each user id to "User N" by order of earliest submission"""
    first_seen: Dict[str, str] = {}
    for s in submissions:
        stamp = s.created_at.isoformat() if s.created_at else ""
        if s.user_id not in first_seen or stamp < first_seen[s.user_id]:
            first_seen[s.user_id] = stamp
    ordered = sorted(first_seen.items(), key=lambda item: item[1])
    return {user_id: f"User {i}" for i, (user_id, _) in enumerate(ordered, start=1)}


def user_progress(submissions: Iterable[Submission], labels: Dict[str, str]) -> List[dict]:
    best: Dict[str, Dict[int, float]] = {}
    counts: Dict[str, int] = {}
    for s in submissions:
        stages = best.setdefault(s.user_id, {})
        score = float(s.overall_score or 0)
        if s.stage not in stages or score > stages[s.stage]:
            stages[s.stage] = score
        counts[s.user_id] = counts.get(s.user_id, 0) + 1

    rows = []
    for user_id, stages in best.items():
        stage1 = stages.get(1)
        stage2 = stages.get(2)
        rows.append({
            "user": labels[user_id],
            "submission_count": counts[user_id],
            "stage1Score": stage1,
            "stage2Score": stage2,
            "improvement": stage2 - stage1 if stage1 is not None and stage2 is not None else None,
        })
    rows.sort(key=lambda row: int(row["user"].split()[-1]))
    return rows


def summarize(submissions: Sequence[Submission], feedback: Sequence[SessionFeedback]) -> dict:
    """Build the analytics payload from already-filtered rows"""
    labels = user_labels(submissions)
    scores = [float(s.overall_score or 0) for s in submissions]
    stage1 = [float(s.overall_score or 0) for s in submissions if s.stage == 1]
    stage2 = [float(s.overall_score or 0) for s in submissions if s.stage == 2]
    ratings = [f.rating for f in feedback]

    ordered = sorted(submissions, key=lambda s: (s.created_at, s.id), reverse=True)
    rows = [
        {
            "id": s.id,
            "created_at": s.created_at,
            "user": labels[s.user_id],
            "stage": s.stage,
            "prompt": truncate_text(s.prompt, PROMPT_PREVIEW_LENGTH),
            "overall_score": float(s.overall_score or 0),
            "criteria_scores": dict(s.criteria_scores or {}),
            "token_count": s.token_count or 0,
            "user_rating": s.user_rating,
        }
        for s in ordered
    ]

    return {
        "totals": {
            "submission_count": len(submissions),
            "user_count": len(labels),
            "average_score": _mean(scores),
            "average_stage1_score": _mean(stage1),
            "average_stage2_score": _mean(stage2),
            "total_tokens": sum(s.token_count or 0 for s in submissions),
            "total_co2_grams": round(sum(s.co2_grams or 0 for s in submissions), 4),
            "average_feedback_rating": _mean(ratings),
            "feedback_count": len(ratings),
        },
        "users": user_progress(submissions, labels),
        "submissions": rows,
    }


def get_analytics(db: Session, session_id: Optional[int] = None) -> dict:
    query = db.query(Submission)
    if session_id is not None:
        query = query.filter(Submission.session_id == session_id)
    submissions = query.all()
    # Session feedback is not tied to a session id, so it is never filtered
    feedback = db.query(SessionFeedback).all()

    payload = summarize(submissions, feedback)
    payload["session_id"] = session_id
    return payload
