from __future__ import annotations  # Stateless interview round orchestration

import logging
from pathlib import Path
from typing import Mapping, Optional, Sequence

from pydantic import ValidationError

from config import AppConfig, FlowSettings, LlmRoute, RoundDefinition, RoundTable, load_config, resolve_registry
from interview_prompts import (
    build_evaluation_prompt,
    build_final_report_prompt,
    build_profile_prompt,
    build_questions_prompt,
    build_round_summary_prompt,
)
from llm_gateway import HttpClient, complete
from observability import log_event, span
from response_parser import UnparsableResponseError, as_text, extract_list, extract_object, parse_object

from .errors import (
    EmptyScoreSetError,
    InterviewInputError,
    InvalidRoundError,
    MismatchedRoundDataError,
    ProfileExtractionError,
)
from .models import AnswerEvaluation, CandidateProfile, FinalReport, QuestionSet, RoundInfo, RoundResult
from .scoring import (
    clamp_score,
    normalize_answer_verdict,
    normalize_overall_verdict,
    question_passed,
    score_round,
    summarize_rounds,
)


logger = logging.getLogger(__name__)

PROFILE_KEY = "interview.analyze_resume"
QUESTIONS_KEY = "interview.generate_questions"
EVALUATION_KEY = "interview.evaluate_answer"
ROUND_SUMMARY_KEY = "interview.submit_round"
FINAL_REPORT_KEY = "interview.final_report"
STAGE_KEYS = (PROFILE_KEY, QUESTIONS_KEY, EVALUATION_KEY, ROUND_SUMMARY_KEY, FINAL_REPORT_KEY)


class InterviewOrchestrator:
    """Transitions of the mock interview.

    The orchestrator keeps no per-interview state: every call receives the
    profile and round data the client accumulated so far and returns the next
    state fragment. Each transition makes at most one model call.
    """

    def __init__(
        self,
        rounds: RoundTable,
        routes: Mapping[str, LlmRoute],
        *,
        flow: Optional[FlowSettings] = None,
        client: Optional[HttpClient] = None,
    ) -> None:
        missing = [key for key in STAGE_KEYS if key not in routes]
        if missing:
            raise KeyError(f"No LLM route configured for: {', '.join(missing)}")
        self._rounds = rounds
        self._routes = dict(routes)
        self._flow = flow or FlowSettings()
        self._client = client

    @property
    def rounds(self) -> RoundTable:
        return self._rounds

    def analyze_resume(self, resume_text: str) -> CandidateProfile:  # AwaitingResume -> ProfileReady
        if not resume_text or not resume_text.strip():
            raise InterviewInputError("Resume text is empty")
        prompt = build_profile_prompt(resume_text, self._rounds)
        with span(PROFILE_KEY, chars=len(resume_text)):
            raw = self._complete(PROFILE_KEY, prompt, self._flow.token_budgets.profile)
        outcome = parse_object(raw)
        if not outcome.ok:
            raise ProfileExtractionError(f"Could not parse resume analysis: {outcome.reason}")
        try:
            return CandidateProfile.model_validate(outcome.value)
        except ValidationError as exc:
            raise ProfileExtractionError(f"Resume analysis is missing required fields: {_summarize(exc)}") from exc

    def generate_questions(self, profile: CandidateProfile, round_number: int) -> QuestionSet:
        definition = self._round(round_number)
        theme = profile.theme_for(definition.ordinal) or definition.default_theme
        count = self._flow.questions_per_round
        prompt = build_questions_prompt(
            profile,
            definition,
            theme=theme,
            total_rounds=len(self._rounds),
            count=count,
        )
        with span(QUESTIONS_KEY, round=definition.ordinal):
            raw = self._complete(QUESTIONS_KEY, prompt, self._flow.token_budgets.questions)
        questions = extract_list(raw, limit=count)
        if len(questions) < count:
            # Short sets are passed through unchanged.
            logger.warning(
                "Model produced %d of %d questions for round %d",
                len(questions),
                count,
                definition.ordinal,
            )
        log_event("questions_ready", QUESTIONS_KEY, round=definition.ordinal, questions=len(questions))
        return QuestionSet(
            round_number=definition.ordinal,
            round_info=RoundInfo(
                name=definition.name,
                difficulty=definition.difficulty,
                pass_threshold=definition.pass_threshold,
                theme=theme,
            ),
            questions=questions,
        )

    def evaluate_answer(
        self,
        question: str,
        answer: str,
        profile: CandidateProfile,
        round_number: int,
    ) -> AnswerEvaluation:
        definition = self._round(round_number)
        if not question.strip() or not answer.strip():
            raise InterviewInputError("Question and answer must both be non-empty")
        prompt = build_evaluation_prompt(question, answer, profile, definition, mode=self._flow.scoring_mode)
        with span(EVALUATION_KEY, round=definition.ordinal):
            raw = self._complete(EVALUATION_KEY, prompt, self._flow.token_budgets.evaluation)
        payload = extract_object(raw)
        try:
            score = clamp_score(payload.get("score"))
        except (TypeError, ValueError) as exc:
            raise UnparsableResponseError("Evaluation is missing a numeric score") from exc
        evaluation = AnswerEvaluation(
            score=score,
            verdict=normalize_answer_verdict(payload.get("verdict"), score),
            strengths=payload.get("strengths"),
            weaknesses=payload.get("weaknesses"),
            improvement=as_text(payload.get("improvement")),
            highlight=as_text(payload.get("highlight")),
            round_threshold=definition.pass_threshold,
            passed_this_question=question_passed(score, definition.pass_threshold),
        )
        log_event(
            "answer_scored",
            EVALUATION_KEY,
            round=definition.ordinal,
            score=evaluation.score,
            verdict=evaluation.verdict,
        )
        return evaluation

    def submit_round(
        self,
        profile: CandidateProfile,
        round_number: int,
        questions: Sequence[str],
        answers: Sequence[str],
        scores: Sequence[float],
    ) -> RoundResult:  # Evaluating -> RoundComplete
        definition = self._round(round_number)
        if not scores:
            raise EmptyScoreSetError()
        if not len(questions) == len(answers) == len(scores):
            raise MismatchedRoundDataError(
                f"questions ({len(questions)}), answers ({len(answers)}) and scores ({len(scores)}) "
                "must have the same length"
            )
        result = score_round(definition, scores, is_last_round=self._rounds.is_last(definition.ordinal))
        prompt = build_round_summary_prompt(
            profile,
            definition,
            questions=questions,
            answers=answers,
            scores=scores,
            average=result.average_score,
            passed=result.round_passed,
        )
        with span(ROUND_SUMMARY_KEY, round=definition.ordinal):
            feedback = self._complete(ROUND_SUMMARY_KEY, prompt, self._flow.token_budgets.round_summary)
        log_event(
            "round_scored",
            ROUND_SUMMARY_KEY,
            round=definition.ordinal,
            average=result.average_score,
            passed=result.round_passed,
        )
        return result.model_copy(update={"feedback": feedback.strip()})

    def final_report(self, profile: CandidateProfile, rounds: Sequence[RoundResult]) -> FinalReport:
        totals = summarize_rounds(rounds)
        prompt = build_final_report_prompt(
            profile,
            rounds,
            overall_score=totals.overall_score,
            rounds_passed=totals.rounds_passed,
            total_rounds=totals.total_rounds,
        )
        with span(FINAL_REPORT_KEY, rounds=totals.total_rounds):
            raw = self._complete(FINAL_REPORT_KEY, prompt, self._flow.token_budgets.final_report)
        payload = extract_object(raw)
        report = FinalReport(
            overall_verdict=normalize_overall_verdict(payload.get("overallVerdict"), totals),
            overall_score=totals.overall_score,
            rounds_passed=totals.rounds_passed,
            total_rounds=totals.total_rounds,
            top_strengths=payload.get("topStrengths"),
            areas_to_improve=payload.get("areasToImprove"),
            recommendation=as_text(payload.get("recommendation")),
            next_steps=as_text(payload.get("nextSteps")),
            all_passed=totals.all_passed,
            candidate_name=profile.name,
            role_assessed=profile.role,
            field_assessed=profile.field,
        )
        log_event(
            "report_ready",
            FINAL_REPORT_KEY,
            average=report.overall_score,
            passed=report.all_passed,
            verdict=report.overall_verdict,
        )
        return report

    def _round(self, round_number: int) -> RoundDefinition:
        definition = self._rounds.get(round_number)
        if definition is None:
            raise InvalidRoundError(round_number, [item.ordinal for item in self._rounds])
        return definition

    def _complete(self, key: str, prompt: str, max_tokens: int) -> str:
        return complete(prompt, max_tokens, cfg=self._routes[key], client=self._client)


def build_orchestrator(cfg: AppConfig, *, client: Optional[HttpClient] = None) -> InterviewOrchestrator:
    routes = resolve_registry(cfg, STAGE_KEYS)
    return InterviewOrchestrator(cfg.round_table(), routes, flow=cfg.flow, client=client)


def orchestrator_with_config(config_path: Path) -> InterviewOrchestrator:  # Convenience helper using app config
    return build_orchestrator(load_config(config_path))


def _summarize(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "payload"
    return f"{location}: {first.get('msg', 'invalid')}"


__all__ = [
    "EVALUATION_KEY",
    "FINAL_REPORT_KEY",
    "InterviewOrchestrator",
    "PROFILE_KEY",
    "QUESTIONS_KEY",
    "ROUND_SUMMARY_KEY",
    "STAGE_KEYS",
    "build_orchestrator",
    "orchestrator_with_config",
]
