from pydantic import BaseModel, field_validator
from datetime import datetime
from typing import List, Optional

from workshop.schemas.criteria import CriterionSchema, check_unique_names


class SessionResponse(BaseModel):
    id: int
    name: str
    stage1_goal: str
    stage1_criteria: List[CriterionSchema]
    stage2_goal: str
    stage2_criteria: List[CriterionSchema]
    is_open: bool
    created_at: datetime

    class Config:
        from_attributes = True


class SessionEnvelope(BaseModel):
    session: Optional[SessionResponse] = None
    message: Optional[str] = None


class SessionListResponse(BaseModel):
    sessions: List[SessionResponse]


class CreateSessionRequest(BaseModel):
    name: str
    stage1_goal: str
    stage2_goal: str
    stage1_criteria: Optional[List[CriterionSchema]] = None  # Defaults to the stage 1 workshop criteria
    stage2_criteria: Optional[List[CriterionSchema]] = None

    @field_validator('name', 'stage1_goal', 'stage2_goal')
    @classmethod
    def validate_text(cls, v, info):
        if not v or not v.strip():
            raise ValueError(f'{info.field_name} cannot be empty')
        return v.strip()

    @field_validator('stage1_criteria', 'stage2_criteria')
    @classmethod
    def validate_criteria(cls, v):
        return check_unique_names(v)


class UpdateSessionRequest(BaseModel):
    id: int
    name: Optional[str] = None
    is_open: Optional[bool] = None
    stage1_goal: Optional[str] = None
    stage2_goal: Optional[str] = None
    stage1_criteria: Optional[List[CriterionSchema]] = None
    stage2_criteria: Optional[List[CriterionSchema]] = None

    @field_validator('name', 'stage1_goal', 'stage2_goal')
    @classmethod
    def validate_text(cls, v, info):
        if v is not None and (not v or not v.strip()):
            raise ValueError(f'{info.field_name} cannot be empty')
        return v.strip() if v else None

    @field_validator('stage1_criteria', 'stage2_criteria')
    @classmethod
    def validate_criteria(cls, v):
        return check_unique_names(v)
