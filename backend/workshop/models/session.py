"""Workshop session model"""
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from workshop.database import Base


class WorkshopSession(Base):
    """An admin-configured workshop run with per-stage goals and criteria"""
    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    stage1_goal = Column(Text, nullable=False)
    stage1_criteria = Column(JSON, nullable=False, default=list)  # [{"name": ..., "description": ...}, ...]
    stage2_goal = Column(Text, nullable=False)
    stage2_criteria = Column(JSON, nullable=False, default=list)
    is_open = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime, default=datetime.now, index=True)

    submissions = relationship("Submission", back_populates="session", cascade="all, delete-orphan")

    def criteria_for_stage(self, stage: int) -> list:
        criteria = self.stage1_criteria if stage == 1 else self.stage2_criteria
        return list(criteria or [])
