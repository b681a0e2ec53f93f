"""
Exception hierarchy for docsift.

Chunking and ranking never raise over valid input; these cover ingestion
and document lookup.
"""

from typing import Any


class DocsiftError(Exception):
    """Base exception for all docsift errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ExtractionError(DocsiftError):
    """Raised when text cannot be extracted from a source file."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if file_path:
            details["file_path"] = file_path
        super().__init__(message, details)


class DocumentProcessingError(DocsiftError):
    """Base exception for document processing errors."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)


class EmptyDocumentError(DocumentProcessingError):
    """Raised when extraction succeeds but yields no text."""

    pass


class DocumentNotFoundError(DocsiftError):
    """Raised when a document id is unknown."""

    def __init__(self, document_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["document_id"] = document_id
        super().__init__(f"Document not found: {document_id}", details)
