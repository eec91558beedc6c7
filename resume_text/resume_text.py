from __future__ import annotations  # PDF resume text extraction

import logging
import os
import tempfile
import time
from contextlib import contextmanager
from typing import Iterator

from pypdf import PdfReader
from pypdf.errors import PdfReadError


logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF"


class ResumeExtractionError(ValueError):  # Upload is unreadable or carries too little text
    pass


@contextmanager
def temporary_pdf(data: bytes) -> Iterator[str]:
    """Spool ``data`` to a temp file and remove it on every exit path."""

    handle = tempfile.NamedTemporaryFile(prefix="resume-", suffix=".pdf", delete=False)
    path = handle.name
    try:
        with handle:
            handle.write(data)
        yield path
    finally:
        try:
            os.unlink(path)
        except FileNotFoundError:
            pass


def extract_resume_text(
    data: bytes,
    *,
    max_chars: int = 3000,
    min_chars: int = 50,
    max_pages: int = 50,
) -> str:
    """Return at most ``max_chars`` characters of text from a PDF upload.

    Raises:
        ResumeExtractionError: If the upload is empty, not a readable PDF,
            encrypted, longer than ``max_pages`` or yields fewer than
            ``min_chars`` characters.
    """

    if not data:
        raise ResumeExtractionError("Uploaded resume is empty")
    if not data.lstrip()[:4].startswith(PDF_MAGIC):
        raise ResumeExtractionError("Uploaded resume is not a PDF document")
    started = time.time()
    with temporary_pdf(data) as path:
        try:
            reader = PdfReader(path)
            if reader.is_encrypted:
                raise ResumeExtractionError("Encrypted PDF files are not supported")
            num_pages = len(reader.pages)
            if num_pages > max_pages:
                raise ResumeExtractionError(
                    f"PDF exceeds maximum page limit ({max_pages}). Current: {num_pages}"
                )
            chunks = [(page.extract_text() or "").strip() for page in reader.pages]
        except ResumeExtractionError:
            raise
        except (PdfReadError, ValueError, KeyError) as exc:
            logger.warning("PDF could not be read: %s", exc)
            raise ResumeExtractionError(f"Could not read PDF: {exc}") from exc
    text = "\n\n".join(chunk for chunk in chunks if chunk)
    if len(text) < min_chars:
        raise ResumeExtractionError(
            "No usable text could be extracted. The file might be a scanned image."
        )
    latency_ms = int((time.time() - started) * 1000)
    logger.info("PDF extraction success pages=%d chars=%d ms=%d", num_pages, len(text), latency_ms)
    return text[:max_chars]
