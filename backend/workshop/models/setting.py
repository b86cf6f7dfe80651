"""Key/value settings model"""
from sqlalchemy import Column, String, Text, DateTime
from datetime import datetime
from workshop.database import Base


class Setting(Base):
    """Plain key/value row; backs the legacy single-goal endpoint"""
    __tablename__ = "settings"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)
