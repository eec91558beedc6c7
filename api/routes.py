"""FastAPI routes for the resume mock interview."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from functools import lru_cache
from pathlib import Path
from typing import Iterator, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from api.schemas import (
    AnalyzeResumeResp,
    EvaluateAnswerReq,
    EvaluateAnswerResp,
    FinalReportReq,
    FinalReportResp,
    GenerateQuestionsReq,
    GenerateQuestionsResp,
    HealthResp,
    SubmitRoundReq,
    SubmitRoundResp,
)
from config.settings import settings
from interview_flow import InterviewInputError, InterviewOrchestrator, ProfileExtractionError, orchestrator_with_config
from llm_gateway import LlmGatewayError
from response_parser import UnparsableResponseError
from resume_text import ResumeExtractionError, extract_resume_text


logger = logging.getLogger(__name__)

ROOT = Path(__file__).resolve().parents[1]

router = APIRouter()


def config_path() -> Path:
    path = Path(settings.CONFIG_PATH)
    return path if path.is_absolute() else ROOT / path


@lru_cache(maxsize=1)
def get_orchestrator() -> InterviewOrchestrator:
    """Orchestrator built once from app_config.json and shared by all requests."""
    return orchestrator_with_config(config_path())


@contextmanager
def _stage_errors(action: str) -> Iterator[None]:
    try:
        yield
    except HTTPException:
        raise
    except (InterviewInputError, ResumeExtractionError) as exc:
        logger.warning("Rejected request to %s: %s", action, exc)
        raise HTTPException(status_code=400, detail=f"Failed to {action}: {exc}") from exc
    except LlmGatewayError as exc:
        logger.exception("LLM request failed")
        raise HTTPException(status_code=502, detail=f"Failed to {action}: LLM request failed: {exc}") from exc
    except (ProfileExtractionError, UnparsableResponseError) as exc:
        logger.exception("Unparsable model output")
        raise HTTPException(status_code=500, detail=f"Failed to {action}: {exc}") from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error while trying to %s", action)
        raise HTTPException(status_code=500, detail=f"Failed to {action}: {exc}") from exc


@router.post("/analyze-resume", response_model=AnalyzeResumeResp)
def analyze_resume(
    resume: Optional[UploadFile] = File(default=None),
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> AnalyzeResumeResp:
    if resume is None:
        raise HTTPException(status_code=400, detail="No resume uploaded")
    with _stage_errors("analyze resume"):
        text = extract_resume_text(
            resume.file.read(),
            max_chars=settings.RESUME_CHAR_LIMIT,
            min_chars=settings.MIN_RESUME_CHARS,
            max_pages=settings.MAX_PDF_PAGES,
        )
        profile = orchestrator.analyze_resume(text)
    return AnalyzeResumeResp(analysis=profile)


@router.post("/generate-questions", response_model=GenerateQuestionsResp)
def generate_questions(
    req: GenerateQuestionsReq,
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> GenerateQuestionsResp:
    with _stage_errors("generate questions"):
        question_set = orchestrator.generate_questions(req.resumeData, req.roundNumber)
    return GenerateQuestionsResp(**question_set.model_dump())


@router.post("/evaluate-answer", response_model=EvaluateAnswerResp)
def evaluate_answer(
    req: EvaluateAnswerReq,
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> EvaluateAnswerResp:
    with _stage_errors("evaluate answer"):
        evaluation = orchestrator.evaluate_answer(req.question, req.answer, req.resumeData, req.roundNumber)
    return EvaluateAnswerResp(evaluation=evaluation)


@router.post("/submit-round", response_model=SubmitRoundResp)
def submit_round(
    req: SubmitRoundReq,
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> SubmitRoundResp:
    with _stage_errors("submit round"):
        result = orchestrator.submit_round(
            req.resumeData,
            req.roundNumber,
            req.questions,
            req.answers,
            req.scores,
        )
    return SubmitRoundResp(**result.model_dump())


@router.post("/final-report", response_model=FinalReportResp)
def final_report(
    req: FinalReportReq,
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> FinalReportResp:
    with _stage_errors("generate final report"):
        report = orchestrator.final_report(req.resumeData, req.allRoundsData)
    return FinalReportResp(report=report)


@router.get("/health", response_model=HealthResp)
def health(orchestrator: InterviewOrchestrator = Depends(get_orchestrator)) -> HealthResp:
    return HealthResp(rounds=len(orchestrator.rounds))
