"""Session feedback model"""
from sqlalchemy import Column, Integer, String, Text, DateTime, CheckConstraint
from datetime import datetime
from workshop.database import Base


class SessionFeedback(Base):
    """Star rating (and optional comment) a participant leaves for the workshop"""
    __tablename__ = "session_feedback"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    message = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.now)

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_session_feedback_rating"),
    )
