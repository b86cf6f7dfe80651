"""Scores a workshop prompt against a goal and a set of criteria using an LLM.

The model is asked for one JSON object:

    {
      "effectivenessScore": 0-100,
      "criteriaScores": {"<criterion name>": 0-100, ...},
      "feedback": "...",
      "improvements": ["...", "...", "..."],
      "improvedPrompt": "..."
    }

In structured mode the schema is sent as the request's ``response_format`` so
the provider constrains the output. In text mode the schema is described in
the prompt and the first JSON object in the reply is used. Either way the
reply is validated here; anything that does not match (unknown or missing
criterion, score out of range, wrong number of improvements) is an
``EvaluationFailure``. The overall score is the model's own figure and is
never recomputed from the criteria scores.
"""
import asyncio
import logging
from typing import Annotated, Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from workshop import config
from workshop.llm_models import has_api_key
from workshop.services.criteria import DEFAULT_CRITERIA, normalize_criteria
from workshop.services.llm_service import LLMService, llm_service
from workshop.services.providers import CompletionResult

logger = logging.getLogger(__name__)

MIN_IMPROVEMENTS = 3
MAX_IMPROVEMENTS = 5

Score = Annotated[float, Field(ge=0, le=100)]

EVALUATION_PROMPT_TEMPLATE = """You are an expert prompt engineer. Evaluate the following prompt based on how well it would achieve the specified goal.

USER'S PROMPT:
"{{prompt}}"

GOAL TO ACHIEVE:
"{{goal}}"

EVALUATION CRITERIA (rate each 0-100):
{{criteria}}

For each criterion, carefully analyze how well the user's prompt would enable an AI to achieve that specific aspect of the goal.
{{guidance}}
Calculate an OVERALL EFFECTIVENESS SCORE (0-100) as a weighted average of the criteria scores.

Provide:
- A score for EACH criterion listed above
- Detailed feedback explaining strengths and weaknesses relative to each criterion
- 3-5 specific improvements that could be made to better meet the criteria
- An improved version of the prompt that would more effectively achieve the goal

Be constructive and educational in your feedback.{{output_format}}"""

SUSTAINABILITY_GUIDANCE = """
SUSTAINABILITY EVALUATION GUIDANCE:
When evaluating SUSTAINABILITY, consider:
- Token Efficiency: Does the prompt request only necessary information without redundancy?
- Clarity vs. Verbosity: Is it concise yet clear, avoiding over-specification?
- Resource Optimization: Does it structure requests to minimize API calls and token usage?
- Output Scope: Does it avoid requesting unnecessarily long or detailed responses?
- Reusability: Could this prompt pattern be reused efficiently for similar tasks?

Score higher for prompts that achieve their goals with minimal resource consumption while maintaining effectiveness.
"""

TEXT_OUTPUT_FORMAT = """

Respond with a single JSON object and nothing else, using exactly these keys:
- "effectivenessScore": number from 0 to 100
- "criteriaScores": object whose keys are exactly these criterion names: {{names}}; each value a number from 0 to 100
- "feedback": string
- "improvements": array of 3 to 5 strings
- "improvedPrompt": string"""


class EvaluationFailure(Exception):
    """The model call failed or its reply did not match the evaluation schema"""


class Criterion(BaseModel):
    name: str
    description: str = ""


class CriterionScore(BaseModel):
    name: str
    score: Score


class EvaluationResult(BaseModel):
    """Validated evaluation of one prompt. criteria_scores follows the input criteria order."""
    effectiveness_score: Score
    criteria_scores: List[CriterionScore]
    feedback: str
    improvements: List[str]
    improved_prompt: str
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def criteria_score_map(self) -> Dict[str, float]:
        return {item.name: item.score for item in self.criteria_scores}


class _ModelReply(BaseModel):
    """Shape of the JSON object the model must return"""
    effectivenessScore: Score
    criteriaScores: Dict[str, Score]
    feedback: str
    improvements: List[str] = Field(min_length=MIN_IMPROVEMENTS, max_length=MAX_IMPROVEMENTS)
    improvedPrompt: str


def resolve_criteria(criteria: Optional[Sequence[Any]]) -> List[Criterion]:
    """Normalize criteria; an empty or missing list becomes the default set"""
    normalized = normalize_criteria(list(criteria or []))
    if not normalized:
        normalized = [dict(c) for c in DEFAULT_CRITERIA]
    return [Criterion(**c) for c in normalized]


def build_response_format(criteria: Sequence[Criterion]) -> Dict[str, Any]:
    """JSON schema for the evaluation reply, with one required property per criterion"""
    score = {"type": "number", "minimum": 0, "maximum": 100}
    criteria_properties = {
        c.name: dict(score, description=f"Score for {c.name} (0-100)") for c in criteria
    }
    schema = {
        "type": "object",
        "properties": {
            "effectivenessScore": dict(
                score, description="Overall effectiveness of the prompt in achieving the goal"
            ),
            "criteriaScores": {
                "type": "object",
                "properties": criteria_properties,
                "required": [c.name for c in criteria],
                "additionalProperties": False,
            },
            "feedback": {
                "type": "string",
                "description": "Detailed feedback explaining strengths and weaknesses",
            },
            "improvements": {
                "type": "array",
                "items": {"type": "string"},
                "minItems": MIN_IMPROVEMENTS,
                "maxItems": MAX_IMPROVEMENTS,
                "description": "3-5 specific improvements that could be made",
            },
            "improvedPrompt": {"type": "string", "description": "An improved version of the prompt"},
        },
        "required": ["effectivenessScore", "criteriaScores", "feedback", "improvements", "improvedPrompt"],
        "additionalProperties": False,
    }
    return {
        "type": "json_schema",
        "json_schema": {"name": "prompt_evaluation", "schema": schema, "strict": True},
    }


class Evaluator:
    """Produces an EvaluationResult for a (prompt, goal, criteria) triple"""

    def __init__(
        self,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        structured_output: Optional[bool] = None,
        timeout: Optional[float] = None,
        service: Optional[LLMService] = None,
    ):
        self.model = model or config.EVALUATOR_MODEL
        self.temperature = temperature if temperature is not None else config.EVALUATOR_TEMPERATURE
        self.max_tokens = max_tokens if max_tokens is not None else config.EVALUATOR_MAX_TOKENS
        self.structured_output = (
            structured_output if structured_output is not None else config.EVALUATOR_STRUCTURED_OUTPUT
        )
        self.timeout = timeout if timeout is not None else config.EVALUATION_TIMEOUT_SECONDS
        self.service = service or llm_service

    def is_configured(self) -> bool:
        """Whether the API key the evaluator model needs is available"""
        return has_api_key(self.model)

    def build_prompt(self, prompt: str, goal: str, criteria: Sequence[Criterion]) -> str:
        criteria_text = "\n".join(
            f"{i}. {c.name.upper()}: {c.description}" for i, c in enumerate(criteria, start=1)
        )
        wants_sustainability = any("sustainability" in c.name.lower() for c in criteria)
        output_format = ""
        if not self.structured_output:
            names = ", ".join(f'"{c.name}"' for c in criteria)
            output_format = self.service.render_prompt(TEXT_OUTPUT_FORMAT, {"names": names})

        return self.service.render_prompt(
            EVALUATION_PROMPT_TEMPLATE,
            {
                "prompt": prompt,
                "goal": goal,
                "criteria": criteria_text,
                "guidance": SUSTAINABILITY_GUIDANCE if wants_sustainability else "",
                "output_format": output_format,
            },
        )

    async def evaluate(
        self,
        prompt: str,
        goal: str,
        criteria: Optional[Sequence[Any]] = None,
    ) -> EvaluationResult:
        """
        Score a prompt.

        Args:
            prompt: The participant's prompt (non-empty)
            goal: The goal the prompt should achieve (non-empty)
            criteria: Ordered criteria (dicts or Criterion); empty means the default set

        Returns:
            EvaluationResult with exactly one score per criterion

        Raises:
            ValueError: If prompt or goal is empty, or criteria names are blank/duplicated
            EvaluationFailure: If the model call fails or its reply is unusable
        """
        if not prompt or not prompt.strip():
            raise ValueError("prompt cannot be empty")
        if not goal or not goal.strip():
            raise ValueError("goal cannot be empty")

        resolved = resolve_criteria(criteria)
        evaluation_prompt = self.build_prompt(prompt, goal, resolved)
        response_format = build_response_format(resolved) if self.structured_output else None

        try:
            completion = await asyncio.wait_for(
                self.service.completion(
                    evaluation_prompt,
                    model=self.model,
                    temperature=self.temperature,
                    max_tokens=self.max_tokens,
                    response_format=response_format,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            raise EvaluationFailure(f"Evaluation timed out after {self.timeout:g}s")
        except Exception as e:
            raise EvaluationFailure(f"Error calling LLM: {e}") from e

        result = self.parse_completion(completion, resolved)
        logger.info(
            "Evaluated prompt with %s: score=%s tokens=%d",
            self.model, result.effectiveness_score, result.total_tokens,
        )
        return result

    def parse_completion(self, completion: CompletionResult, criteria: Sequence[Criterion]) -> EvaluationResult:
        """Validate a raw completion against the evaluation schema"""
        if not completion.text or not completion.text.strip():
            raise EvaluationFailure("LLM returned empty output")

        try:
            data = self.service.parse_json_object(completion.text)
            reply = _ModelReply.model_validate(data)
        except (ValueError, PydanticValidationError) as e:
            raise EvaluationFailure(f"LLM output did not match the evaluation schema: {e}") from e

        expected = [c.name for c in criteria]
        returned = set(reply.criteriaScores)
        missing = [name for name in expected if name not in returned]
        unexpected = sorted(returned - set(expected))
        if missing or unexpected:
            raise EvaluationFailure(
                f"Criteria scores do not match the requested criteria "
                f"(missing: {missing or 'none'}, unexpected: {unexpected or 'none'})"
            )

        return EvaluationResult(
            effectiveness_score=reply.effectivenessScore,
            criteria_scores=[CriterionScore(name=name, score=reply.criteriaScores[name]) for name in expected],
            feedback=reply.feedback,
            improvements=reply.improvements,
            improved_prompt=reply.improvedPrompt,
            input_tokens=completion.input_tokens,
            output_tokens=completion.output_tokens,
        )


def get_evaluator() -> Evaluator:
    """Dependency returning an evaluator built from configuration"""
    return Evaluator()
