import json
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

import resume_text.resume_text as resume_mod
from api.routes import get_orchestrator
from api_server import app


RESUME_TEXT = (
    "Ana Silva, ICU Nurse. Eight years of critical care in a 20-bed unit. "
    "Ventilator management, sepsis protocols, charge nurse rotation."
)


@pytest.fixture
def client(orchestrator, monkeypatch):
    page = SimpleNamespace(extract_text=lambda: RESUME_TEXT)
    monkeypatch.setattr(resume_mod, "PdfReader", lambda path: SimpleNamespace(is_encrypted=False, pages=[page]))
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _questions(round_number: int) -> str:
    return "\n".join(f"{i}. Round {round_number} scenario question number {i}?" for i in range(1, 6))


def _evaluation(score: int) -> str:
    return json.dumps({"score": score, "strengths": ["Specific"], "weaknesses": [], "improvement": "Add data"})


def _play_round(client, profile, round_number, scores, scripted_model):
    scripted_model.replies.append(_questions(round_number))
    resp = client.post("/generate-questions", json={"resumeData": profile, "roundNumber": round_number})
    assert resp.status_code == 200
    questions = resp.json()["questions"]
    assert len(questions) == 5

    answers = [f"Answer to question {i}" for i in range(1, 6)]
    collected = []
    for question, answer, score in zip(questions, answers, scores):
        scripted_model.replies.append(_evaluation(score))
        resp = client.post(
            "/evaluate-answer",
            json={"question": question, "answer": answer, "resumeData": profile, "roundNumber": round_number},
        )
        assert resp.status_code == 200
        collected.append(resp.json()["evaluation"]["score"])

    scripted_model.replies.append(f"Round {round_number} summary.")
    resp = client.post(
        "/submit-round",
        json={
            "resumeData": profile,
            "roundNumber": round_number,
            "questions": questions,
            "answers": answers,
            "scores": collected,
        },
    )
    assert resp.status_code == 200
    return resp.json()


def test_candidate_passes_all_rounds(client, scripted_model):
    scripted_model.replies.append(
        json.dumps(
            {
                "name": "Ana Silva",
                "role": "ICU Nurse",
                "field": "Healthcare",
                "experience": "Senior",
                "interviewStyle": "behavioral",
                "round2Theme": "Escalation scenarios",
            }
        )
    )
    resp = client.post("/analyze-resume", files={"resume": ("ana.pdf", b"%PDF-1.7 stub", "application/pdf")})
    assert resp.status_code == 200
    profile = resp.json()["analysis"]
    assert profile["role"] == "ICU Nurse"

    rounds = []
    for round_number, scores in ((1, [8, 7, 9, 8, 8]), (2, [7, 8, 7, 9, 7]), (3, [9, 8, 9, 9, 8])):
        result = _play_round(client, profile, round_number, scores, scripted_model)
        assert result["roundPassed"] is True
        rounds.append(result)
        if round_number < 3:
            assert result["nextRound"] == round_number + 1
    assert rounds[1]["averageScore"] == 7.6
    assert rounds[-1]["isLastRound"] is True
    assert rounds[-1]["canProceed"] is False

    scripted_model.replies.append('{"overallVerdict": "HIRE", "recommendation": "Strong hire."}')
    resp = client.post("/final-report", json={"resumeData": profile, "allRoundsData": rounds})
    assert resp.status_code == 200
    report = resp.json()["report"]
    assert report["overallVerdict"] == "HIRE"
    assert report["roundsPassed"] == 3
    assert report["totalRounds"] == 3
    assert report["allPassed"] is True
    assert report["roleAssessed"] == "ICU Nurse"
    assert scripted_model.replies == []


def test_candidate_stops_after_failed_round(client, scripted_model, profile):
    wire_profile = profile.model_dump(by_alias=True)
    first = _play_round(client, wire_profile, 1, [7, 6, 7, 6, 7], scripted_model)
    assert first["roundPassed"] is True
    second = _play_round(client, wire_profile, 2, [6, 7, 8, 7, 6], scripted_model)
    assert second["averageScore"] == 6.8
    assert second["roundPassed"] is False
    assert second["canProceed"] is False
    assert second["nextRound"] is None

    scripted_model.replies.append('{"overallVerdict": "unsure", "areasToImprove": "Depth on scaling"}')
    resp = client.post("/final-report", json={"resumeData": wire_profile, "allRoundsData": [first, second]})
    assert resp.status_code == 200
    report = resp.json()["report"]
    assert report["overallVerdict"] == "CONSIDER"
    assert report["roundsPassed"] == 1
    assert report["overallScore"] == 6.7
    assert report["areasToImprove"] == ["Depth on scaling"]
