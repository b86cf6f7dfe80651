import asyncio
import json

import pytest

from conftest import FakeLLMService, make_reply
from workshop.services.criteria import DEFAULT_CRITERIA
from workshop.services.evaluator import (
    Evaluator,
    EvaluationFailure,
    build_response_format,
    resolve_criteria,
)
from workshop.services.providers import CompletionResult

CRITERIA = [
    {"name": "Clarity", "description": "Is it clear?"},
    {"name": "Strategic Thinking", "description": "Market positioning"},
]


@pytest.mark.asyncio
async def test_one_score_per_criterion_in_input_order():
    llm = FakeLLMService([make_reply(["Strategic Thinking", "Clarity"], overall=81, score=64)])
    evaluator = Evaluator(model="claude-sonnet-4", service=llm)

    result = await evaluator.evaluate("Draft a refund email", "A polite refund email", CRITERIA)

    assert [s.name for s in result.criteria_scores] == ["Clarity", "Strategic Thinking"]
    assert all(0 <= s.score <= 100 for s in result.criteria_scores)
    assert result.effectiveness_score == 81
    assert result.input_tokens == 500
    assert result.output_tokens == 250
    assert result.total_tokens == 750


@pytest.mark.asyncio
async def test_empty_criteria_uses_default_set():
    names = [c["name"] for c in DEFAULT_CRITERIA]
    llm = FakeLLMService([make_reply(names)])
    evaluator = Evaluator(model="claude-sonnet-4", service=llm)

    result = await evaluator.evaluate("p", "g", [])

    assert set(result.criteria_score_map()) == {"Clarity", "Specificity", "Efficiency"}


@pytest.mark.asyncio
async def test_overall_score_is_not_recomputed():
    llm = FakeLLMService([make_reply(["Clarity", "Strategic Thinking"], overall=10, score=90)])
    evaluator = Evaluator(model="claude-sonnet-4", service=llm)

    result = await evaluator.evaluate("p", "g", CRITERIA)

    assert result.effectiveness_score == 10


@pytest.mark.asyncio
async def test_missing_criterion_is_a_failure():
    llm = FakeLLMService([make_reply(["Clarity"])])
    evaluator = Evaluator(model="claude-sonnet-4", service=llm)

    with pytest.raises(EvaluationFailure, match="missing"):
        await evaluator.evaluate("p", "g", CRITERIA)


@pytest.mark.asyncio
async def test_unexpected_criterion_is_a_failure():
    llm = FakeLLMService([make_reply(["Clarity", "Strategic Thinking", "Tone"])])
    evaluator = Evaluator(model="claude-sonnet-4", service=llm)

    with pytest.raises(EvaluationFailure, match="unexpected"):
        await evaluator.evaluate("p", "g", CRITERIA)


@pytest.mark.asyncio
async def test_out_of_range_score_is_a_failure():
    llm = FakeLLMService([make_reply(["Clarity", "Strategic Thinking"], overall=130)])
    evaluator = Evaluator(model="claude-sonnet-4", service=llm)

    with pytest.raises(EvaluationFailure):
        await evaluator.evaluate("p", "g", CRITERIA)


@pytest.mark.asyncio
async def test_too_few_improvements_is_a_failure():
    llm = FakeLLMService([make_reply(["Clarity", "Strategic Thinking"], improvements=["only one"])])
    evaluator = Evaluator(model="claude-sonnet-4", service=llm)

    with pytest.raises(EvaluationFailure):
        await evaluator.evaluate("p", "g", CRITERIA)


@pytest.mark.asyncio
async def test_non_json_reply_is_a_failure():
    llm = FakeLLMService([CompletionResult(text="I think this prompt is great!")])
    evaluator = Evaluator(model="claude-sonnet-4", service=llm)

    with pytest.raises(EvaluationFailure):
        await evaluator.evaluate("p", "g", CRITERIA)


@pytest.mark.asyncio
async def test_provider_error_is_a_failure():
    llm = FakeLLMService(error=RuntimeError("rate limited"))
    evaluator = Evaluator(model="claude-sonnet-4", service=llm)

    with pytest.raises(EvaluationFailure, match="rate limited"):
        await evaluator.evaluate("p", "g", CRITERIA)


@pytest.mark.asyncio
async def test_timeout_is_a_failure():
    class SlowLLM(FakeLLMService):
        async def completion(self, *args, **kwargs):
            await asyncio.sleep(1)

    evaluator = Evaluator(model="claude-sonnet-4", service=SlowLLM(), timeout=0.01)

    with pytest.raises(EvaluationFailure, match="timed out"):
        await evaluator.evaluate("p", "g", CRITERIA)


@pytest.mark.asyncio
async def test_empty_prompt_rejected_before_calling_model():
    llm = FakeLLMService()
    evaluator = Evaluator(model="claude-sonnet-4", service=llm)

    with pytest.raises(ValueError):
        await evaluator.evaluate("   ", "g", CRITERIA)
    assert llm.calls == []


@pytest.mark.asyncio
async def test_structured_mode_sends_schema_with_criteria_names():
    llm = FakeLLMService([make_reply(["Clarity", "Strategic Thinking"])])
    evaluator = Evaluator(model="claude-sonnet-4", service=llm, structured_output=True)

    await evaluator.evaluate("p", "g", CRITERIA)

    response_format = llm.calls[0]["response_format"]
    scores_schema = response_format["json_schema"]["schema"]["properties"]["criteriaScores"]
    assert scores_schema["required"] == ["Clarity", "Strategic Thinking"]


@pytest.mark.asyncio
async def test_text_mode_extracts_json_from_prose():
    body = json.loads(make_reply(["Clarity", "Strategic Thinking"]).text)
    wrapped = "Here is my evaluation:\n```json\n" + json.dumps(body) + "\n```"
    llm = FakeLLMService([CompletionResult(text=wrapped, input_tokens=10, output_tokens=5)])
    evaluator = Evaluator(model="claude-sonnet-4", service=llm, structured_output=False)

    result = await evaluator.evaluate("p", "g", CRITERIA)

    assert llm.calls[0]["response_format"] is None
    assert '"Strategic Thinking"' in llm.calls[0]["prompt"]
    assert result.total_tokens == 15


def test_prompt_lists_criteria_and_adds_sustainability_guidance():
    evaluator = Evaluator(model="claude-sonnet-4", service=FakeLLMService())
    criteria = resolve_criteria([
        {"name": "Clarity", "description": "Is it clear?"},
        {"name": "Sustainability", "description": "Token frugal"},
    ])

    text = evaluator.build_prompt("Draft a refund email", "A refund email", criteria)

    assert "1. CLARITY: Is it clear?" in text
    assert "2. SUSTAINABILITY: Token frugal" in text
    assert "SUSTAINABILITY EVALUATION GUIDANCE" in text
    assert '"Draft a refund email"' in text


def test_prompt_without_sustainability_criterion_has_no_guidance():
    evaluator = Evaluator(model="claude-sonnet-4", service=FakeLLMService())
    text = evaluator.build_prompt("p", "g", resolve_criteria(CRITERIA))
    assert "SUSTAINABILITY EVALUATION GUIDANCE" not in text


def test_duplicate_criterion_names_rejected():
    with pytest.raises(ValueError, match="duplicate"):
        resolve_criteria([{"name": "Clarity"}, {"name": "Clarity"}])


def test_response_format_bounds_scores():
    schema = build_response_format(resolve_criteria(CRITERIA))["json_schema"]["schema"]
    clarity = schema["properties"]["criteriaScores"]["properties"]["Clarity"]
    assert (clarity["minimum"], clarity["maximum"]) == (0, 100)
    assert schema["properties"]["improvements"]["minItems"] == 3
    assert schema["properties"]["improvements"]["maxItems"] == 5
