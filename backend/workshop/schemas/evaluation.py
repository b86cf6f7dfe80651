from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from workshop.schemas.criteria import CriterionSchema


class EvaluateRequest(BaseModel):
    """Body of POST /evaluate. Presence is checked by the endpoint so a missing
    field never reaches the evaluator."""
    prompt: Optional[str] = None
    targetOutput: Optional[str] = None
    userId: Optional[str] = None
    stage: Optional[Any] = None
    criteria: Optional[List[Any]] = None  # Checked only when the session stage has no criteria of its own


class EnergyConsumptionResponse(BaseModel):
    tokens: int
    estimatedCO2: float
    estimatedCost: float


class EvaluateResponse(BaseModel):
    originalPrompt: str
    targetOutput: str
    criteria: List[CriterionSchema]
    effectivenessScore: float
    criteriaScores: Dict[str, float]
    feedback: str
    improvements: List[str]
    improvedPrompt: str
    energyConsumption: EnergyConsumptionResponse
    submissionId: Optional[int] = Field(default=None, description="Id of the stored submission; null if the write failed")
