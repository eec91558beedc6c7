from __future__ import annotations  # Re-export interview_prompts public API

from .interview_prompts import (  # noqa: F401
    STYLE_GUIDANCE,
    ScoringMode,
    build_evaluation_prompt,
    build_final_report_prompt,
    build_profile_prompt,
    build_questions_prompt,
    build_round_summary_prompt,
    style_guidance,
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
