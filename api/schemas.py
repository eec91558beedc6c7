"""Pydantic schemas for the mock interview API."""
from __future__ import annotations

from typing import Annotated, List

from pydantic import BaseModel, Field

from interview_flow import AnswerEvaluation, CandidateProfile, FinalReport, QuestionSet, RoundResult


Score = Annotated[float, Field(ge=0.0, le=10.0)]


class GenerateQuestionsReq(BaseModel):
    resumeData: CandidateProfile
    roundNumber: int


class EvaluateAnswerReq(BaseModel):
    question: str = Field(min_length=1)
    answer: str = Field(min_length=1)
    resumeData: CandidateProfile
    roundNumber: int


class SubmitRoundReq(BaseModel):
    resumeData: CandidateProfile
    roundNumber: int
    questions: List[str]
    answers: List[str]
    scores: List[Score]


class FinalReportReq(BaseModel):
    resumeData: CandidateProfile
    allRoundsData: List[RoundResult]


class AnalyzeResumeResp(BaseModel):
    success: bool = True
    analysis: CandidateProfile


class GenerateQuestionsResp(QuestionSet):
    success: bool = True


class EvaluateAnswerResp(BaseModel):
    success: bool = True
    evaluation: AnswerEvaluation


class SubmitRoundResp(RoundResult):
    success: bool = True


class FinalReportResp(BaseModel):
    success: bool = True
    report: FinalReport


class HealthResp(BaseModel):
    status: str = "ok"
    message: str = "Interview API is running"
    rounds: int
