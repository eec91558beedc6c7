from __future__ import annotations  # Re-export resume_text public API

from .resume_text import ResumeExtractionError, extract_resume_text, temporary_pdf

__all__ = ["ResumeExtractionError", "extract_resume_text", "temporary_pdf"]
