import os

# Point the app at a throwaway in-memory database before anything imports it
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("ANTHROPIC_API_KEY", "test-key")

import json
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from workshop.database import Base, engine, SessionLocal
from workshop.main import app
from workshop.models import WorkshopSession, Submission
from workshop.services.evaluator import Evaluator, get_evaluator
from workshop.services.llm_service import LLMService
from workshop.services.providers import CompletionResult


class FakeLLMService(LLMService):
    """Returns canned completions and records what it was asked"""

    def __init__(self, replies=None, error=None):
        super().__init__()
        self.replies = list(replies or [])
        self.error = error
        self.calls = []

    async def completion(self, prompt, model, temperature=None, max_tokens=None, response_format=None):
        self.calls.append({"prompt": prompt, "model": model, "response_format": response_format})
        if self.error is not None:
            raise self.error
        return self.replies.pop(0)


def make_reply(criteria_names, overall=72, score=70, input_tokens=500, output_tokens=250, **overrides):
    payload = {
        "effectivenessScore": overall,
        "criteriaScores": {name: score for name in criteria_names},
        "feedback": "Clear intent, but the audience is not specified.",
        "improvements": ["Name the audience", "State the tone", "Limit the length"],
        "improvedPrompt": "Write a short, apologetic refund email to a long-time customer.",
    }
    payload.update(overrides)
    return CompletionResult(text=json.dumps(payload), input_tokens=input_tokens, output_tokens=output_tokens)


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def fake_llm():
    return FakeLLMService()


@pytest.fixture
def use_fake_evaluator(fake_llm):
    """Route /evaluate through a real Evaluator backed by the fake LLM service"""
    app.dependency_overrides[get_evaluator] = lambda: Evaluator(model="claude-sonnet-4", service=fake_llm)
    return fake_llm


STAGE1_CRITERIA = [
    {"name": "Clarity", "description": "Is the request unambiguous?"},
    {"name": "Specificity", "description": "Does it say exactly what is needed?"},
    {"name": "Efficiency", "description": "Is it concise?"},
]


@pytest.fixture
def open_session(db):
    session = WorkshopSession(
        name="Morning workshop",
        stage1_goal="Get a polite refund email",
        stage1_criteria=STAGE1_CRITERIA,
        stage2_goal="Get a launch plan",
        stage2_criteria=[{"name": "Measurability", "description": "Has KPIs"}],
        is_open=True,
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    return session


def add_submission(db, session_id, user_id, stage, score, created_at=None, prompt="p", tokens=100):
    submission = Submission(
        session_id=session_id,
        user_id=user_id,
        stage=stage,
        prompt=prompt,
        goal="g",
        overall_score=score,
        criteria_scores={"Clarity": score},
        token_count=tokens,
        co2_grams=tokens * 0.0004,
        cost_usd=tokens * 0.00002,
        feedback="",
        improved_prompt="",
        created_at=created_at or datetime(2026, 10, 1, 9, 0, 0),
    )
    db.add(submission)
    db.commit()
    db.refresh(submission)
    return submission


def minutes(n):
    return datetime(2026, 10, 1, 9, 0, 0) + timedelta(minutes=n)
