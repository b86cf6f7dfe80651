from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Dict, List, Optional


class SubmissionResponse(BaseModel):
    id: int
    session_id: int
    user_id: str
    stage: int
    prompt: str
    goal: str
    overall_score: float
    criteria_scores: Dict[str, float]
    token_count: int
    co2_grams: float
    cost_usd: float
    feedback: str
    improved_prompt: str
    user_rating: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True


class SubmissionListResponse(BaseModel):
    submissions: List[SubmissionResponse]


class CreateSubmissionRequest(BaseModel):
    """Direct insert of an already-scored prompt"""
    prompt: str
    targetOutput: str
    effectivenessScore: float = Field(ge=0, le=100)
    criteriaScores: Dict[str, float] = Field(default_factory=dict)
    clarity: Optional[float] = Field(default=None, ge=0, le=100)
    specificity: Optional[float] = Field(default=None, ge=0, le=100)
    efficiency: Optional[float] = Field(default=None, ge=0, le=100)
    tokens: int = Field(default=0, ge=0)
    estimatedCO2: Optional[float] = Field(default=None, ge=0)
    userId: str = "anonymous"
    stage: int = 1
    sessionId: Optional[int] = None
    feedback: str = ""
    improvedPrompt: str = ""

    @field_validator('prompt', 'targetOutput')
    @classmethod
    def validate_text(cls, v, info):
        if not v or not v.strip():
            raise ValueError(f'{info.field_name} cannot be empty')
        return v

    @field_validator('criteriaScores')
    @classmethod
    def validate_scores(cls, v):
        for name, score in v.items():
            if score < 0 or score > 100:
                raise ValueError(f"score for '{name}' must be between 0 and 100")
        return v

    @field_validator('stage')
    @classmethod
    def validate_stage(cls, v):
        if v not in (1, 2):
            raise ValueError('stage must be 1 or 2')
        return v


class RateSubmissionRequest(BaseModel):
    rating: int = Field(ge=1, le=5)


class RateEvaluationRequest(BaseModel):
    """Legacy rating by prompt text; submissionId takes precedence when given"""
    prompt: Optional[str] = None
    rating: Optional[int] = None
    submissionId: Optional[int] = None
