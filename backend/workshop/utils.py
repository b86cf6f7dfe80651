"""Common utility functions"""
from typing import TypeVar, Type
from sqlalchemy.orm import Session

from workshop.errors import NotFoundError

T = TypeVar('T')


def get_or_404(db: Session, model: Type[T], id: int, detail: str = "Resource not found") -> T:
    """
    Get a model instance by ID or raise 404.

    Args:
        db: Database session
        model: SQLAlchemy model class
        id: Primary key ID
        detail: Error message if not found

    Returns:
        Model instance

    Raises:
        NotFoundError: if resource not found
    """
    instance = db.query(model).filter(model.id == id).first()
    if not instance:
        raise NotFoundError(detail)
    return instance


def prune_oldest(db: Session, model: Type[T], limit: int) -> int:
    """
    Delete the oldest rows of a table so that at most ``limit`` remain.
    The caller commits.

    Returns:
        Number of rows deleted
    """
    total = db.query(model).count()
    excess = total - limit
    if excess <= 0:
        return 0

    oldest_ids = [
        row_id for (row_id,) in db.query(model.id).order_by(model.created_at.asc(), model.id.asc()).limit(excess)
    ]
    return db.query(model).filter(model.id.in_(oldest_ids)).delete(synchronize_session=False)


def truncate_text(text: str, length: int = 80) -> str:
    """Shorten text for display, appending an ellipsis when cut"""
    if len(text) <= length:
        return text
    return text[:length].rstrip() + "..."
