from pydantic import BaseModel
from typing import Optional


class Goals(BaseModel):
    stage1: str
    stage2: str


class GoalsResponse(BaseModel):
    goals: Goals
    success: Optional[bool] = None


class UpdateGoalsRequest(BaseModel):
    stage1: Optional[str] = None
    stage2: Optional[str] = None
