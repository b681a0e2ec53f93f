from __future__ import annotations

import re

from docsift.chunking.models import Chunk

# One or more blank lines (lines holding only whitespace count as blank)
_PARAGRAPH_BREAK = re.compile(r"\n[^\S\n]*\n\s*")


def normalize_text(text: str) -> str:
    """
    Normalize extracted text into paragraphs:
    - unify line endings
    - collapse whitespace runs inside a paragraph to single spaces
    - keep paragraph breaks as a single blank line
    """
    text = (text or "").replace("\r\n", "\n").replace("\r", "\n")

    paragraphs = [" ".join(block.split()) for block in _PARAGRAPH_BREAK.split(text)]
    return "\n\n".join(p for p in paragraphs if p)


def split_paragraphs(text: str) -> list[str]:
    normalized = normalize_text(text)
    if not normalized:
        return []
    return normalized.split("\n\n")


def chunk_text(text: str, chunk_size: int = 500, overlap: int = 50) -> list[Chunk]:
    """
    Paragraph-aware word chunker:
    - pack whole paragraphs while the word count fits in chunk_size
    - seed each following chunk with the last `overlap` words
    - window paragraphs longer than chunk_size on their own
    """
    if chunk_size < 1:
        raise ValueError("chunk_size must be >= 1")
    # overlap >= chunk_size would never advance the window
    overlap = min(max(overlap, 0), chunk_size - 1)

    chunks: list[Chunk] = []

    def emit(content: str) -> None:
        content = content.strip()
        if not content:
            return
        chunks.append(Chunk(content=content, chunk_index=len(chunks), page_number=0))

    buf: list[str] = []
    buf_words = 0

    for paragraph in split_paragraphs(text):
        words = paragraph.split()

        if len(words) > chunk_size:
            # Oversized paragraph starts fresh, no overlap carried in
            if buf:
                emit("\n\n".join(buf))
                buf, buf_words = [], 0
            for window in _sliding_windows(words, chunk_size=chunk_size, overlap=overlap):
                emit(window)
            continue

        if buf and buf_words + len(words) > chunk_size:
            emit("\n\n".join(buf))

            tail = _tail_words(" ".join(buf).split(), overlap)
            if tail:
                buf = [" ".join(tail), paragraph]
            else:
                buf = [paragraph]
            buf_words = len(tail) + len(words)
        else:
            buf.append(paragraph)
            buf_words += len(words)

    if buf:
        emit("\n\n".join(buf))

    return chunks


def _tail_words(words: list[str], overlap: int) -> list[str]:
    take = min(overlap, len(words))
    if take <= 0:
        return []
    return words[len(words) - take:]


def _sliding_windows(words: list[str], chunk_size: int, overlap: int) -> list[str]:
    windows: list[str] = []
    step = chunk_size - overlap
    start = 0
    n = len(words)

    while start < n:
        windows.append(" ".join(words[start:start + chunk_size]))
        if start + chunk_size >= n:
            break
        start += step

    return windows
