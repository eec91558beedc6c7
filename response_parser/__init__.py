from __future__ import annotations  # Re-export response_parser public API

from .response_parser import (
    MIN_ENTRY_CHARS,
    ParseOutcome,
    UnparsableResponseError,
    as_text,
    as_text_list,
    extract_list,
    extract_object,
    parse_object,
)

__all__ = [
    "MIN_ENTRY_CHARS",
    "ParseOutcome",
    "UnparsableResponseError",
    "as_text",
    "as_text_list",
    "extract_list",
    "extract_object",
    "parse_object",
]
