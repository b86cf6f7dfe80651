import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from workshop.database import get_db
from workshop.errors import ValidationError, SessionClosedError, EvaluationError
from workshop.schemas.evaluation import EvaluateRequest, EvaluateResponse
from workshop.services.evaluator import Evaluator, EvaluationFailure, get_evaluator, resolve_criteria
from workshop.services.metrics import energy_consumption
from workshop.services.session_service import get_active_session
from workshop.services.submission_service import build_submission, save_submission

logger = logging.getLogger(__name__)

router = APIRouter()


def parse_stage(value) -> int:
    """Accept 1/2 as a whole number (int, float or numeric string)"""
    if isinstance(value, bool):
        raise ValidationError("stage must be 1 or 2")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError("stage must be 1 or 2")
    if not number.is_integer() or int(number) not in (1, 2):
        raise ValidationError("stage must be 1 or 2")
    return int(number)


def _present(value) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


@router.post("", response_model=EvaluateResponse)
async def evaluate_prompt(
    request: EvaluateRequest,
    db: Session = Depends(get_db),
    evaluator: Evaluator = Depends(get_evaluator),
) -> EvaluateResponse:
    """
    Score a participant's prompt against the active session's criteria.
    Validates, checks that a session is open, evaluates, derives the
    sustainability metrics, stores the submission and returns the result.
    """
    if not all(_present(v) for v in (request.prompt, request.targetOutput, request.userId, request.stage)):
        raise ValidationError("Prompt, target output, userId, and stage are required")
    stage = parse_stage(request.stage)

    active_session = get_active_session(db)
    if active_session is None:
        raise SessionClosedError()

    # The session's stage criteria win; the request's are a fallback for sessions without any
    criteria = active_session.criteria_for_stage(stage) or list(request.criteria or [])
    try:
        criteria = [c.model_dump() for c in resolve_criteria(criteria)]
    except ValueError as e:
        raise ValidationError(f"Invalid criteria: {e}")

    if not evaluator.is_configured():
        logger.error("No API key configured for evaluator model %s", evaluator.model)
        raise EvaluationError("LLM API key is not configured")

    logger.info("Evaluating prompt for user %s (session=%d stage=%d)", request.userId, active_session.id, stage)
    try:
        evaluation = await evaluator.evaluate(request.prompt, request.targetOutput, criteria)
    except EvaluationFailure as e:
        logger.error("Evaluation failed for user %s: %s", request.userId, e)
        raise EvaluationError()

    energy = energy_consumption(evaluation.input_tokens, evaluation.output_tokens)
    criteria_scores = evaluation.criteria_score_map()

    submission = save_submission(db, build_submission(
        session_id=active_session.id,
        user_id=request.userId,
        stage=stage,
        prompt=request.prompt,
        goal=request.targetOutput,
        overall_score=evaluation.effectiveness_score,
        criteria_scores=criteria_scores,
        token_count=energy.tokens,
        co2_grams=energy.estimated_co2,
        cost_usd=energy.estimated_cost,
        feedback=evaluation.feedback,
        improved_prompt=evaluation.improved_prompt,
    ))

    return EvaluateResponse(
        originalPrompt=request.prompt,
        targetOutput=request.targetOutput,
        criteria=criteria,
        effectivenessScore=evaluation.effectiveness_score,
        criteriaScores=criteria_scores,
        feedback=evaluation.feedback,
        improvements=evaluation.improvements,
        improvedPrompt=evaluation.improved_prompt,
        energyConsumption={
            "tokens": energy.tokens,
            "estimatedCO2": energy.estimated_co2,
            "estimatedCost": energy.estimated_cost,
        },
        submissionId=submission.id if submission is not None else None,
    )
