from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pypdf import PdfReader

from docsift.exceptions import ExtractionError

TEXT_SUFFIXES = (".txt", ".md")


@dataclass(frozen=True)
class ExtractedText:
    text: str
    num_pages: int
    info: dict[str, Any] = field(default_factory=dict)


def extract_pdf_text(pdf_path: Path) -> ExtractedText:
    """
    Read the text layer of every page and join pages with a blank line,
    so page breaks become paragraph breaks for the chunker.
    """
    try:
        reader = PdfReader(str(pdf_path))
        pages = [page.extract_text() or "" for page in reader.pages]
        metadata = reader.metadata or {}
    except Exception as exc:
        # pypdf raises a mix of PyPdfError, ValueError and KeyError on damaged files
        raise ExtractionError("Failed to extract text from PDF", file_path=str(pdf_path)) from exc

    info = {str(k).lstrip("/"): str(v) for k, v in metadata.items()}
    return ExtractedText(text="\n\n".join(pages), num_pages=len(pages), info=info)


def extract_plain_text(path: Path) -> ExtractedText:
    try:
        # undecodable bytes show up as U+FFFD instead of vanishing
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise ExtractionError("Failed to read text file", file_path=str(path)) from exc
    return ExtractedText(text=text, num_pages=0)


def extract_text(path: Path | str) -> ExtractedText:
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".pdf":
        return extract_pdf_text(path)
    if suffix in TEXT_SUFFIXES:
        return extract_plain_text(path)

    raise ExtractionError(f"Unsupported file type: {suffix or '(none)'}", file_path=str(path))
