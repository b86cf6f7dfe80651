"""Submission model"""
from sqlalchemy import Column, Integer, String, Text, Float, ForeignKey, DateTime, JSON, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from workshop.database import Base


class Submission(Base):
    """One scored prompt. Append-only apart from the one-time user rating."""
    __tablename__ = "submissions"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String, nullable=False, index=True)  # Anonymous id generated by the client
    stage = Column(Integer, nullable=False)
    prompt = Column(Text, nullable=False)
    goal = Column(Text, nullable=False)  # Goal text as shown when the prompt was submitted
    overall_score = Column(Float, nullable=False, default=0)
    criteria_scores = Column(JSON, nullable=False, default=dict)  # {"Clarity": 80, ...}
    token_count = Column(Integer, nullable=False, default=0)
    co2_grams = Column(Float, nullable=False, default=0)
    cost_usd = Column(Float, nullable=False, default=0)
    feedback = Column(Text, nullable=False, default="")
    improved_prompt = Column(Text, nullable=False, default="")
    user_rating = Column(Integer, nullable=True)  # 1-5, how useful the participant found the evaluation
    created_at = Column(DateTime, default=datetime.now, index=True)

    __table_args__ = (
        CheckConstraint("stage IN (1, 2)", name="ck_submission_stage"),
        CheckConstraint("overall_score >= 0 AND overall_score <= 100", name="ck_submission_overall_score"),
        CheckConstraint("token_count >= 0", name="ck_submission_token_count"),
        CheckConstraint("user_rating IS NULL OR (user_rating >= 1 AND user_rating <= 5)", name="ck_submission_user_rating"),
    )

    session = relationship("WorkshopSession", back_populates="submissions")
