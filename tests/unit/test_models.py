import pytest
from pydantic import ValidationError

from interview_flow import AnswerEvaluation, CandidateProfile, RoundResult


def test_profile_folds_round_theme_keys(profile) -> None:
    assert profile.round_themes == {1: "Python and SQL fundamentals", 2: "Scaling event pipelines"}
    assert profile.theme_for(1) == "Python and SQL fundamentals"
    assert profile.theme_for(3) is None


def test_profile_accepts_camel_case_round_trip(profile) -> None:
    wire = profile.model_dump(by_alias=True)
    assert wire["experienceLevel"] == "Mid-Level"
    assert wire["topSkills"] == ["Python", "PostgreSQL", "Kafka"]
    assert wire["interviewStyle"] == "technical"
    assert CandidateProfile.model_validate(wire) == profile


def test_profile_defaults_for_missing_fields() -> None:
    profile = CandidateProfile.model_validate({"role": "Nurse", "name": "", "experience": "Chief of Everything"})
    assert profile.name == "Candidate"
    assert profile.field == "General"
    assert profile.experience_level == "Mid-Level"
    assert profile.interview_style == "mixed"
    assert profile.skills == []
    assert profile.round_themes == {}


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("Senior Level", "Senior"),
        ("Junior-level", "Junior"),
        ("Expert level", "Expert"),
        ("Senior Software Engineer", "Senior"),
        ("Entry Level", "Fresher"),
        ("mid level", "Mid-Level"),
        ("Intermediate", "Mid-Level"),
        ("FRESHER", "Fresher"),
    ],
)
def test_profile_experience_matches_leading_keyword(raw, expected) -> None:
    profile = CandidateProfile.model_validate({"role": "Engineer", "experience": raw})
    assert profile.experience_level == expected


def test_profile_normalizes_loose_model_output() -> None:
    profile = CandidateProfile.model_validate(
        {
            "role": " Staff Accountant ",
            "experience": "senior",
            "skills": "Excel, SAP, IFRS, , Audit",
            "topSkills": ["Excel", "SAP", "IFRS", "Audit"],
            "interviewStyle": "BEHAVIORAL",
            "roundThemes": {"3": "Leading close processes"},
        }
    )
    assert profile.role == "Staff Accountant"
    assert profile.experience_level == "Senior"
    assert profile.skills == ["Excel", "SAP", "IFRS", "Audit"]
    assert profile.top_skills == ["Excel", "SAP", "IFRS"]
    assert profile.interview_style == "behavioral"
    assert profile.theme_for(3) == "Leading close processes"


def test_profile_caps_skills_at_ten() -> None:
    profile = CandidateProfile.model_validate({"role": "Designer", "skills": [f"skill{i}" for i in range(15)]})
    assert len(profile.skills) == 10


def test_profile_requires_role() -> None:
    with pytest.raises(ValidationError):
        CandidateProfile.model_validate({"name": "Ana"})
    with pytest.raises(ValidationError):
        CandidateProfile.model_validate({"name": "Ana", "role": "   "})


def test_profile_is_frozen(profile) -> None:
    with pytest.raises(ValidationError):
        profile.role = "Manager"  # type: ignore[misc]


def test_answer_evaluation_bounds_and_list_coercion() -> None:
    evaluation = AnswerEvaluation(
        score=7,
        verdict="ADEQUATE",
        strengths="Clear structure",
        weaknesses=None,
        round_threshold=7,
        passed_this_question=True,
    )
    assert evaluation.strengths == ["Clear structure"]
    assert evaluation.weaknesses == []
    with pytest.raises(ValidationError):
        AnswerEvaluation(score=11, verdict="STRONG", round_threshold=7, passed_this_question=True)


def test_round_result_serializes_camel_case() -> None:
    result = RoundResult(round_number=2, round_name="Application", average_score=7.6, round_passed=True, next_round=3)
    wire = result.model_dump(by_alias=True)
    assert wire["roundNumber"] == 2
    assert wire["averageScore"] == 7.6
    assert wire["nextRound"] == 3
    assert RoundResult.model_validate(wire) == result


def test_round_result_rejects_out_of_range_average() -> None:
    with pytest.raises(ValidationError):
        RoundResult.model_validate({"roundNumber": 1, "averageScore": 12, "roundPassed": True})
