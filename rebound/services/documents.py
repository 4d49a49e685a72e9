"""Document-to-text helpers (PDF/Word/plain text)."""
from __future__ import annotations

import io
import zipfile
from pathlib import Path
from typing import Tuple

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from pypdf import PdfReader
from pypdf.errors import PdfReadError

MAX_DOCUMENT_BYTES = 10 * 1024 * 1024

PDF_TYPES = {"application/pdf"}
DOCX_TYPES = {"application/vnd.openxmlformats-officedocument.wordprocessingml.document"}
TEXT_TYPES = {"text/plain"}
_LABELS = {"pdf": "PDF", "docx": "DOCX", "text": "document"}


class UnsupportedDocumentError(ValueError):
    pass


class DocumentTooLargeError(ValueError):
    pass


def _kind(filename: str, content_type: str) -> str:
    suffix = Path(filename or "").suffix.lower()
    mt = (content_type or "").split(";")[0].strip().lower()
    if mt in PDF_TYPES or suffix == ".pdf":
        return "pdf"
    if mt in DOCX_TYPES or suffix == ".docx":
        return "docx"
    if mt in TEXT_TYPES or suffix == ".txt":
        return "text"
    # legacy binary .doc (application/msword) has no reader here
    raise UnsupportedDocumentError(
        f"Unsupported document type {mt or suffix or 'unknown'}; upload a PDF, DOCX or TXT file"
    )


def _pdf_text(data: bytes) -> str:
    try:
        reader = PdfReader(io.BytesIO(data))
        pages = [page.extract_text() or "" for page in reader.pages]
    except PdfReadError as exc:
        raise ValueError(f"Unable to read PDF: {exc}") from exc
    return "\n".join(pages)


def _docx_text(data: bytes) -> str:
    try:
        doc = Document(io.BytesIO(data))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError) as exc:
        raise ValueError(f"Unable to read DOCX: {exc}") from exc
    lines = [p.text for p in doc.paragraphs]
    for table in doc.tables:
        for row in table.rows:
            lines.append(" ".join(cell.text for cell in row.cells))
    return "\n".join(lines)


def extract_text_from_bytes(data: bytes, filename: str, content_type: str) -> Tuple[str, str]:
    """Return (text, kind) where kind is "pdf", "docx" or "text".

    Raises ``ValueError`` (or one of its subclasses above) for empty, oversized,
    unsupported or unreadable files, and when no text could be extracted.
    """
    if not data:
        raise ValueError("Empty file")
    if len(data) > MAX_DOCUMENT_BYTES:
        raise DocumentTooLargeError("File size should be less than 10MB")

    kind = _kind(filename, content_type)
    if kind == "pdf":
        text = _pdf_text(data)
    elif kind == "docx":
        text = _docx_text(data)
    else:
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ValueError("Unable to decode file as UTF-8 text") from exc

    text = text.strip()
    if not text:
        raise ValueError(f"No text extracted from {_LABELS[kind]}")
    return text, kind


__all__ = [
    "DocumentTooLargeError",
    "MAX_DOCUMENT_BYTES",
    "UnsupportedDocumentError",
    "extract_text_from_bytes",
]
