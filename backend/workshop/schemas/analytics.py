from pydantic import BaseModel
from datetime import datetime
from typing import Dict, List, Optional


class SubmissionRow(BaseModel):
    id: int
    created_at: datetime
    user: str  # "User N"
    stage: int
    prompt: str  # Truncated for display
    overall_score: float
    criteria_scores: Dict[str, float]
    token_count: int
    user_rating: Optional[int] = None


class UserProgress(BaseModel):
    user: str
    submission_count: int
    stage1Score: Optional[float] = None  # Best stage 1 score
    stage2Score: Optional[float] = None  # Best stage 2 score
    improvement: Optional[float] = None  # Only when both stages have a score


class AnalyticsTotals(BaseModel):
    submission_count: int
    user_count: int
    average_score: Optional[float] = None
    average_stage1_score: Optional[float] = None
    average_stage2_score: Optional[float] = None
    total_tokens: int
    total_co2_grams: float
    average_feedback_rating: Optional[float] = None
    feedback_count: int


class AnalyticsResponse(BaseModel):
    session_id: Optional[int] = None
    totals: AnalyticsTotals
    users: List[UserProgress]
    submissions: List[SubmissionRow]
