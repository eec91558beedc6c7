from __future__ import annotations  # Tolerant extraction of structured data from model text

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


_ENUMERATOR = re.compile(r"^\d+[.)]\s*")
MIN_ENTRY_CHARS = 10  # entries this short or shorter are headings or artifacts


class UnparsableResponseError(ValueError):  # Model output holds no recoverable payload
    pass


@dataclass(frozen=True)
class ParseOutcome:
    """Tagged result of an object extraction attempt."""

    ok: bool
    value: Optional[Dict[str, Any]] = None
    reason: str = ""

    def unwrap(self) -> Dict[str, Any]:
        if not self.ok or self.value is None:
            raise UnparsableResponseError(self.reason or "no structured payload")
        return self.value


def parse_object(text: str) -> ParseOutcome:
    """Parse the span between the first ``{`` and the last ``}`` as a JSON object."""

    if not text:
        return ParseOutcome(ok=False, reason="empty model response")
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return ParseOutcome(ok=False, reason="no JSON object found in model response")
    try:
        value = json.loads(text[start : end + 1])
    except json.JSONDecodeError as exc:
        return ParseOutcome(ok=False, reason=f"invalid JSON in model response: {exc.msg}")
    return ParseOutcome(ok=True, value=value)


def extract_object(text: str) -> Dict[str, Any]:  # Raising form of parse_object
    return parse_object(text).unwrap()


def extract_list(text: str, limit: int = 5) -> List[str]:
    """Collect enumerated entries from free text.

    Each line loses a leading ``N.`` or ``N)`` marker; lines of
    ``MIN_ENTRY_CHARS`` characters or fewer are dropped. At most ``limit``
    entries are kept, in order.
    """

    entries: List[str] = []
    for line in (text or "").splitlines():
        entry = _ENUMERATOR.sub("", line.strip()).strip()
        if len(entry) > MIN_ENTRY_CHARS:
            entries.append(entry)
    return entries[:limit]


def as_text(value: Any) -> str:
    """Normalize a model field that should be plain text."""

    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(str(item).strip() for item in value if item is not None).strip()
    return str(value).strip()


def as_text_list(value: Any) -> List[str]:
    """Normalize a model field that should be a list of strings."""

    if isinstance(value, str):
        text = value.strip()
        return [text] if text else []
    if not isinstance(value, (list, tuple)):
        return []
    items: List[str] = []
    for item in value:
        if item is None:
            continue
        text = str(item).strip()
        if text:
            items.append(text)
    return items
