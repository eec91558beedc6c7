from __future__ import annotations  # Prompt templates for each interview stage

import json
from textwrap import dedent
from typing import TYPE_CHECKING, Dict, Iterable, List, Literal, Sequence

from config.rounds import RoundDefinition

if TYPE_CHECKING:
    from interview_flow.models import CandidateProfile, RoundResult


ScoringMode = Literal["strict", "lenient"]

STYLE_GUIDANCE: Dict[str, str] = {
    "technical": (
        "Ask knowledge-based questions testing deep understanding of tools, concepts, "
        "and methods used in their field."
    ),
    "behavioral": (
        "Ask behavioral questions using STAR format about real situations, decisions, "
        "and outcomes from their experience."
    ),
    "mixed": (
        "Mix domain knowledge questions with situational/behavioral questions based on "
        "their actual background."
    ),
}

JSON_ONLY = "Return ONLY a valid JSON object. No extra text. No markdown."


def style_guidance(style: str) -> str:
    return STYLE_GUIDANCE.get(style, STYLE_GUIDANCE["mixed"])


def build_profile_prompt(resume_text: str, rounds: Iterable[RoundDefinition]) -> str:
    """Ask for one JSON object describing the candidate, with a theme per round."""

    schema: Dict[str, object] = {
        "name": "candidate full name or Candidate if not found",
        "role": "exact job title from resume",
        "field": "industry/domain (e.g. Technology, Healthcare, Finance, Marketing, Design)",
        "experience": "Fresher or Junior or Mid-Level or Senior or Expert",
        "skills": ["skill1", "skill2", "up to 10 key skills from resume"],
        "topSkills": ["top 3 most prominent skills"],
        "highlights": ["achievement or project 1", "achievement or project 2", "up to 3 highlights"],
        "interviewStyle": "technical or behavioral or mixed",
        "summary": "2 sentence professional summary",
    }
    for definition in rounds:
        schema[f"round{definition.ordinal}Theme"] = (
            f"{definition.name} round focus for this specific role"
        )
    header = dedent(
        """
        You are an expert HR analyst. Analyze the resume below and extract structured information.
        This candidate could be from ANY profession: software, medicine, law, finance, marketing,
        design, engineering, education, HR, consulting, architecture, hospitality, etc.

        Return ONLY a valid JSON object. No extra text. No markdown. No explanation.
        """
    ).strip()
    return "\n\n".join([header, json.dumps(schema, indent=2), "Resume:\n" + resume_text.strip()])


def build_questions_prompt(
    profile: CandidateProfile,
    definition: RoundDefinition,
    *,
    theme: str,
    total_rounds: int,
    count: int = 5,
) -> str:
    difficulty = definition.difficulty.upper()
    numbered = "\n".join(f"{index}. Question here" for index in range(1, count + 1))
    return "\n".join(
        [
            f"You are a senior interviewer conducting a {definition.name} round interview "
            f"for a {profile.role} position.",
            "",
            "CANDIDATE PROFILE:",
            f"- Name: {profile.name}",
            f"- Role: {profile.role}",
            f"- Field: {profile.field}",
            f"- Experience Level: {profile.experience_level}",
            f"- Key Skills: {', '.join(profile.skills)}",
            f"- Highlights: {' | '.join(profile.highlights)}",
            "",
            "ROUND DETAILS:",
            f"- Round: {definition.ordinal} of {total_rounds}: {definition.name}",
            f"- Difficulty: {difficulty}",
            f"- Focus Area: {theme}",
            f"- Interview Style: {style_guidance(profile.interview_style)}",
            "",
            "STRICT RULES:",
            f"1. Generate EXACTLY {count} questions",
            "2. Every question MUST reference something specific from their resume "
            "(a real skill, project, or experience they mentioned)",
            f"3. Questions must be appropriate for {profile.role} in {profile.field}, NOT generic",
            f"4. Match the difficulty level: {difficulty} for a {profile.experience_level} professional",
            "5. Output ONLY a numbered list: no headings, no categories, no explanations",
            "",
            "FORMAT:",
            numbered,
        ]
    )


def _strict_rubric(profile: CandidateProfile) -> str:
    return dedent(
        f"""
        SCORING GUIDE:
        1. Is the answer actual text or just random characters/numbers? If random -> score = 0
        2. Does the answer address the question at all? If no -> score <= 2
        3. Does the answer show domain knowledge in {profile.field}? If no -> score <= 4
        4. Does the answer include specific examples or depth? If no -> score <= 6

        BE STRICT. Most answers should score 3-6. Only genuinely excellent answers deserve 8+.
        """
    ).strip()


def _lenient_rubric(profile: CandidateProfile) -> str:
    return dedent(
        f"""
        SCORING GUIDE:
        0-3: off-topic or no real answer
        4-5: weak, vague, or missing {profile.field} knowledge
        6-7: decent answer with some relevant detail
        8-9: strong answer with specific examples and depth
        10: exceptional, expert-level answer
        """
    ).strip()


def build_evaluation_prompt(
    question: str,
    answer: str,
    profile: CandidateProfile,
    definition: RoundDefinition,
    *,
    mode: ScoringMode = "strict",
) -> str:
    rubric = _strict_rubric(profile) if mode == "strict" else _lenient_rubric(profile)
    schema = dedent(
        f"""
        {{
          "score": <number 0 to 10>,
          "verdict": "STRONG or ADEQUATE or WEAK",
          "strengths": ["specific strength from the answer, or 'None - answer inadequate' if score < 4"],
          "weaknesses": ["specific gap relevant to {profile.role}"],
          "improvement": "one actionable tip specific to this role and field",
          "highlight": "one sentence summary of the answer quality"
        }}
        """
    ).strip()
    return "\n\n".join(
        [
            f"You are a strict interviewer evaluating a {profile.experience_level} {profile.role} candidate.",
            "\n".join(
                [
                    f"QUESTION: {question.strip()}",
                    f"CANDIDATE'S ANSWER: {answer.strip()}",
                    f"ROUND: {definition.name} ({definition.difficulty} difficulty)",
                    f"PASS THRESHOLD: {definition.pass_threshold:g}/10",
                ]
            ),
            "Score this answer on a scale of 0-10. Be strict and fair.",
            rubric,
            JSON_ONLY,
            schema,
        ]
    )


def build_round_summary_prompt(
    profile: CandidateProfile,
    definition: RoundDefinition,
    *,
    questions: Sequence[str],
    answers: Sequence[str],
    scores: Sequence[float],
    average: float,
    passed: bool,
) -> str:
    qa_pairs = "\n\n".join(
        f"Q{index}: {question}\nA{index}: {answer}\nScore: {score:g}/10"
        for index, (question, answer, score) in enumerate(zip(questions, answers, scores), start=1)
    )
    closing = dedent(
        """
        Write a brief, honest round summary (3 to 4 sentences) covering:
        1. Overall performance in this round
        2. What they did well
        3. Key area they need to improve
        4. One specific advice for their next round or job search

        Keep it direct and professional. No bullet points. Just a paragraph.
        """
    ).strip()
    return "\n\n".join(
        [
            f"You are a senior {profile.field} interviewer summarizing a completed interview round.",
            "\n".join(
                [
                    f"Candidate: {profile.name}, {profile.role} ({profile.experience_level})",
                    f"Round: {definition.ordinal}: {definition.name} ({definition.difficulty} difficulty)",
                    f"Average Score: {average:.1f} / 10",
                    f"Pass Threshold: {definition.pass_threshold:g} / 10",
                    f"Result: {'PASSED' if passed else 'FAILED'}",
                ]
            ),
            "Q&A Summary:\n" + qa_pairs,
            closing,
        ]
    )


def build_final_report_prompt(
    profile: CandidateProfile,
    rounds: Sequence[RoundResult],
    *,
    overall_score: float,
    rounds_passed: int,
    total_rounds: int,
) -> str:
    """Numeric fields are injected pre-computed; the model fills in the rest."""

    results: List[str] = [
        f"Round {item.round_number} ({item.round_name or 'Round ' + str(item.round_number)}): "
        f"{item.average_score:g}/10, {'PASSED' if item.round_passed else 'FAILED'}"
        for item in rounds
    ]
    schema = dedent(
        f"""
        {{
          "overallVerdict": "HIRE or CONSIDER or REJECT",
          "overallScore": {overall_score:.1f},
          "roundsPassed": {rounds_passed},
          "totalRounds": {total_rounds},
          "topStrengths": ["strength 1 specific to their performance", "strength 2", "strength 3"],
          "areasToImprove": ["area 1 specific to their role", "area 2"],
          "recommendation": "3 sentence recommendation for this candidate specific to {profile.role} in {profile.field}",
          "nextSteps": "2 sentence advice on what the candidate should do next to improve or prepare"
        }}
        """
    ).strip()
    return "\n\n".join(
        [
            f"You are a senior HR director writing a final interview report for a {profile.role} candidate.",
            "\n".join(
                [
                    f"Candidate: {profile.name}",
                    f"Role Applied: {profile.role}",
                    f"Field: {profile.field}",
                    f"Experience Level: {profile.experience_level}",
                ]
            ),
            "Interview Results:\n" + "\n".join(results),
            f"Overall Average: {overall_score:.1f} / 10\nRounds Passed: {rounds_passed} out of {total_rounds}",
            JSON_ONLY,
            schema,
        ]
    )


__all__ = [
    "STYLE_GUIDANCE",
    "ScoringMode",
    "build_evaluation_prompt",
    "build_final_report_prompt",
    "build_profile_prompt",
    "build_questions_prompt",
    "build_round_summary_prompt",
    "style_guidance",
]
