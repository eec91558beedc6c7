from __future__ import annotations  # Interview flow state models

import re
from typing import Any, Dict, List, Literal, Mapping, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from response_parser import as_text_list


ExperienceLevel = Literal["Fresher", "Junior", "Mid-Level", "Senior", "Expert"]
InterviewStyle = Literal["technical", "behavioral", "mixed"]
AnswerVerdict = Literal["STRONG", "ADEQUATE", "WEAK"]
OverallVerdict = Literal["HIRE", "CONSIDER", "REJECT"]

DEFAULT_EXPERIENCE: ExperienceLevel = "Mid-Level"
DEFAULT_STYLE: InterviewStyle = "mixed"

_EXPERIENCE_KEYS: Dict[str, ExperienceLevel] = {
    "fresher": "Fresher",
    "entry": "Fresher",
    "junior": "Junior",
    "mid": "Mid-Level",
    "intermediate": "Mid-Level",
    "senior": "Senior",
    "expert": "Expert",
}
_EXPERIENCE_PREFIX = re.compile(r"(fresher|entry|junior|mid|intermediate|senior|expert)")  # "Senior Level" -> senior
_STYLES = {"technical", "behavioral", "mixed"}
_THEME_KEY = re.compile(r"^round(\d+)Theme$")


class _WireModel(BaseModel):  # camelCase on the wire, snake_case in Python
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CandidateProfile(_WireModel):  # Structured candidate summary derived from a resume
    model_config = ConfigDict(frozen=True)

    name: str = "Candidate"
    role: str = Field(min_length=1)
    field: str = "General"
    experience_level: ExperienceLevel = Field(
        default=DEFAULT_EXPERIENCE,
        alias="experienceLevel",
        validation_alias=AliasChoices("experienceLevel", "experience", "experience_level"),
    )
    skills: List[str] = Field(default_factory=list)
    top_skills: List[str] = Field(default_factory=list)
    highlights: List[str] = Field(default_factory=list)
    interview_style: InterviewStyle = DEFAULT_STYLE
    summary: str = ""
    round_themes: Dict[int, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _fold_round_themes(cls, data: Any) -> Any:  # roundNTheme keys -> round_themes mapping
        if not isinstance(data, Mapping):
            return data
        payload = dict(data)
        themes: Dict[int, str] = {}
        for key in ("roundThemes", "round_themes"):
            existing = payload.pop(key, None)
            if isinstance(existing, Mapping):
                for ordinal, theme in existing.items():
                    _put_theme(themes, ordinal, theme)
        for key in list(payload):
            match = _THEME_KEY.match(str(key))
            if match:
                _put_theme(themes, match.group(1), payload.pop(key))
        payload["roundThemes"] = themes
        return payload

    @field_validator("name", mode="before")
    @classmethod
    def _default_name(cls, value: Any) -> str:
        return _text(value) or "Candidate"

    @field_validator("role", "summary", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> str:
        return _text(value)

    @field_validator("field", mode="before")
    @classmethod
    def _default_field(cls, value: Any) -> str:
        return _text(value) or "General"

    @field_validator("experience_level", mode="before")
    @classmethod
    def _normalize_experience(cls, value: Any) -> str:
        match = _EXPERIENCE_PREFIX.match(re.sub(r"[^a-z]", "", _text(value).lower()))
        return _EXPERIENCE_KEYS[match.group(1)] if match else DEFAULT_EXPERIENCE

    @field_validator("interview_style", mode="before")
    @classmethod
    def _normalize_style(cls, value: Any) -> str:
        style = _text(value).lower()
        return style if style in _STYLES else DEFAULT_STYLE

    @field_validator("skills", mode="before")
    @classmethod
    def _normalize_skills(cls, value: Any) -> List[str]:
        return _split_list(value)[:10]

    @field_validator("top_skills", "highlights", mode="before")
    @classmethod
    def _normalize_short_lists(cls, value: Any) -> List[str]:
        return _split_list(value)[:3]

    def theme_for(self, ordinal: int) -> Optional[str]:
        return self.round_themes.get(ordinal)


class RoundInfo(_WireModel):  # Round summary returned with generated questions
    name: str
    difficulty: str
    pass_threshold: float
    theme: str


class QuestionSet(_WireModel):  # Questions generated for one round
    round_number: int
    round_info: RoundInfo
    questions: List[str] = Field(default_factory=list)


class AnswerEvaluation(_WireModel):  # One scored candidate answer
    score: int = Field(ge=0, le=10)
    verdict: AnswerVerdict
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    improvement: str = ""
    highlight: str = ""
    round_threshold: float
    passed_this_question: bool

    @field_validator("strengths", "weaknesses", mode="before")
    @classmethod
    def _as_list(cls, value: Any) -> List[str]:
        return as_text_list(value)


class ScoreBreakdownEntry(_WireModel):
    question: int = Field(ge=1)
    score: float
    passed: bool


class RoundResult(_WireModel):  # Aggregate of one submitted round
    round_number: int = Field(ge=1)
    round_name: str = ""
    average_score: float = Field(ge=0.0, le=10.0)
    pass_threshold: Optional[float] = None
    round_passed: bool
    is_last_round: bool = False
    can_proceed: bool = False
    next_round: Optional[int] = None
    feedback: str = ""
    score_breakdown: List[ScoreBreakdownEntry] = Field(default_factory=list)


class FinalReport(_WireModel):  # Aggregate verdict over all submitted rounds
    overall_verdict: OverallVerdict
    overall_score: float
    rounds_passed: int
    total_rounds: int
    top_strengths: List[str] = Field(default_factory=list)
    areas_to_improve: List[str] = Field(default_factory=list)
    recommendation: str = ""
    next_steps: str = ""
    all_passed: bool
    candidate_name: str
    role_assessed: str
    field_assessed: str

    @field_validator("top_strengths", "areas_to_improve", mode="before")
    @classmethod
    def _as_list(cls, value: Any) -> List[str]:
        return as_text_list(value)


__all__ = [
    "AnswerEvaluation",
    "AnswerVerdict",
    "CandidateProfile",
    "ExperienceLevel",
    "FinalReport",
    "InterviewStyle",
    "OverallVerdict",
    "QuestionSet",
    "RoundInfo",
    "RoundResult",
    "ScoreBreakdownEntry",
]


def _text(value: Any) -> str:  # Coerce loose model output into stripped text
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item).strip() for item in value if item is not None)
    return str(value).strip()


def _split_list(value: Any) -> List[str]:  # Bare comma-separated strings become lists
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return as_text_list(value)


def _put_theme(themes: Dict[int, str], ordinal: Any, theme: Any) -> None:
    try:
        key = int(ordinal)
    except (TypeError, ValueError):
        return
    text = _text(theme)
    if text:
        themes[key] = text
