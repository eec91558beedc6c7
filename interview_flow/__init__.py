"""Stateless mock interview flow: profile, questions, scoring, progression."""
from __future__ import annotations

from .errors import (
    EmptyRoundSetError,
    EmptyScoreSetError,
    InterviewError,
    InterviewInputError,
    InvalidRoundError,
    MismatchedRoundDataError,
    ProfileExtractionError,
)
from .models import (
    AnswerEvaluation,
    CandidateProfile,
    FinalReport,
    QuestionSet,
    RoundInfo,
    RoundResult,
    ScoreBreakdownEntry,
)
from .orchestrator import (
    STAGE_KEYS,
    InterviewOrchestrator,
    build_orchestrator,
    orchestrator_with_config,
)

__all__ = [
    "AnswerEvaluation",
    "CandidateProfile",
    "EmptyRoundSetError",
    "EmptyScoreSetError",
    "FinalReport",
    "InterviewError",
    "InterviewInputError",
    "InterviewOrchestrator",
    "InvalidRoundError",
    "MismatchedRoundDataError",
    "ProfileExtractionError",
    "QuestionSet",
    "RoundInfo",
    "RoundResult",
    "STAGE_KEYS",
    "ScoreBreakdownEntry",
    "build_orchestrator",
    "orchestrator_with_config",
]
