import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import interview_flow.orchestrator as orchestrator_mod
from config import LlmRoute, default_round_table
from interview_flow import CandidateProfile, InterviewOrchestrator, STAGE_KEYS


def _route() -> LlmRoute:
    return LlmRoute(
        name="test",
        base_url="http://example.com",
        endpoint="/llm",
        model="test-model",
        timeout_s=1.0,
    )


@pytest.fixture
def profile() -> CandidateProfile:
    return CandidateProfile.model_validate(
        {
            "name": "Priya Nair",
            "role": "Backend Engineer",
            "field": "Technology",
            "experience": "Mid-Level",
            "skills": ["Python", "PostgreSQL", "Kafka", "Docker"],
            "topSkills": ["Python", "PostgreSQL", "Kafka"],
            "highlights": ["Cut checkout latency by 40%", "Led payments migration"],
            "interviewStyle": "technical",
            "summary": "Backend engineer focused on payment systems.",
            "round1Theme": "Python and SQL fundamentals",
            "round2Theme": "Scaling event pipelines",
        }
    )


@pytest.fixture
def orchestrator() -> InterviewOrchestrator:
    route = _route()
    return InterviewOrchestrator(default_round_table(), {key: route for key in STAGE_KEYS})


@pytest.fixture
def scripted_model(monkeypatch):
    """Replace the gateway with queued replies and record every prompt sent."""

    state = SimpleNamespace(replies=[], calls=[])

    def fake_complete(prompt: str, max_tokens: int, *, cfg, client=None) -> str:
        state.calls.append({"prompt": prompt, "max_tokens": max_tokens, "cfg": cfg})
        if not state.replies:
            raise AssertionError("model called more often than scripted")
        reply = state.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    monkeypatch.setattr(orchestrator_mod, "complete", fake_complete)
    return state
