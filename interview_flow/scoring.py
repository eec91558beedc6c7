"""Pure scoring and progression rules for interview rounds."""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, NamedTuple, Sequence

from config.rounds import RoundDefinition

from .errors import EmptyRoundSetError, EmptyScoreSetError
from .models import AnswerVerdict, OverallVerdict, RoundResult, ScoreBreakdownEntry


_ANSWER_VERDICTS = ("STRONG", "ADEQUATE", "WEAK")
_OVERALL_VERDICTS = ("HIRE", "CONSIDER", "REJECT")
_ONE_DECIMAL = Decimal("0.1")


class ReportTotals(NamedTuple):
    overall_score: float
    rounds_passed: int
    total_rounds: int
    all_passed: bool


def round1(value: float) -> float:
    """Round a float to one decimal place, ties away from zero.

    The exact binary value is rounded, so ``6.25`` becomes ``6.3`` while
    ``1.15`` (stored just below the tie) becomes ``1.1``.
    """
    return float(Decimal(value).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def average_score(scores: Sequence[float]) -> float:
    """Arithmetic mean rounded to one decimal.

    Raises:
        EmptyScoreSetError: If ``scores`` is empty.
    """

    if not scores:
        raise EmptyScoreSetError()
    return round1(sum(scores) / len(scores))


def question_passed(score: float, threshold: float) -> bool:
    return score >= threshold


def score_round(definition: RoundDefinition, scores: Sequence[float], *, is_last_round: bool) -> RoundResult:
    """Derive the structural part of a round result; feedback is left empty."""

    average = average_score(scores)
    passed = average >= definition.pass_threshold
    can_proceed = passed and not is_last_round
    return RoundResult(
        round_number=definition.ordinal,
        round_name=definition.name,
        average_score=average,
        pass_threshold=definition.pass_threshold,
        round_passed=passed,
        is_last_round=is_last_round,
        can_proceed=can_proceed,
        next_round=definition.ordinal + 1 if can_proceed else None,
        score_breakdown=[
            ScoreBreakdownEntry(
                question=index,
                score=score,
                passed=question_passed(score, definition.pass_threshold),
            )
            for index, score in enumerate(scores, start=1)
        ],
    )


def summarize_rounds(rounds: Sequence[RoundResult]) -> ReportTotals:
    if not rounds:
        raise EmptyRoundSetError()
    rounds_passed = sum(1 for item in rounds if item.round_passed)
    overall = round1(sum(item.average_score for item in rounds) / len(rounds))
    return ReportTotals(
        overall_score=overall,
        rounds_passed=rounds_passed,
        total_rounds=len(rounds),
        all_passed=rounds_passed == len(rounds),
    )


def fallback_answer_verdict(score: int) -> AnswerVerdict:
    if score >= 8:
        return "STRONG"
    if score >= 6:
        return "ADEQUATE"
    return "WEAK"


def fallback_overall_verdict(totals: ReportTotals) -> OverallVerdict:
    if totals.all_passed:
        return "HIRE"
    if totals.rounds_passed > 0:
        return "CONSIDER"
    return "REJECT"


def normalize_answer_verdict(raw: Any, score: int) -> AnswerVerdict:
    verdict = str(raw or "").strip().upper()
    if verdict in _ANSWER_VERDICTS:
        return verdict  # type: ignore[return-value]
    return fallback_answer_verdict(score)


def normalize_overall_verdict(raw: Any, totals: ReportTotals) -> OverallVerdict:
    verdict = str(raw or "").strip().upper()
    if verdict in _OVERALL_VERDICTS:
        return verdict  # type: ignore[return-value]
    return fallback_overall_verdict(totals)


def clamp_score(raw: Any) -> int:
    """Coerce a model-emitted score into an int on the 0-10 scale.

    Raises:
        ValueError: If ``raw`` is not numeric.
    """

    if isinstance(raw, bool):
        raise ValueError("score must be numeric")
    if isinstance(raw, str):
        raw = raw.strip().split("/")[0]
    value = float(raw)
    if value != value:
        raise ValueError("score must be numeric")
    return int(max(0, min(10, round(value))))


__all__ = [
    "ReportTotals",
    "average_score",
    "clamp_score",
    "fallback_answer_verdict",
    "fallback_overall_verdict",
    "normalize_answer_verdict",
    "normalize_overall_verdict",
    "question_passed",
    "round1",
    "score_round",
    "summarize_rounds",
]
