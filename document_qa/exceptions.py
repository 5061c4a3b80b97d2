"""Custom exceptions for document-qa."""

from typing import Optional

GENERIC_RUN_ERROR_MESSAGE = "An error occurred while processing. Please try again."


class DocumentQAError(Exception):
    """Base exception for document-qa errors."""

    pass


class UnsupportedTypeError(DocumentQAError):
    """Raised when document type is not supported."""

    pass


class ExtractionError(DocumentQAError):
    """Raised when text extraction fails."""

    pass


class DecodingError(ExtractionError):
    """Raised when a plain text document cannot be decoded."""

    pass


class ServiceError(DocumentQAError):
    """Raised when a call to the completion service fails.

    ``status`` is the HTTP status code, or None when no response was received.
    """

    def __init__(self, status: Optional[int], message: str):
        super().__init__(message)
        self.status = status
        self.message = message

    def __str__(self) -> str:
        if self.status is None:
            return self.message
        return f"{self.status}: {self.message}"


class RunError(DocumentQAError):
    """Raised when a run fails. Always carries the generic user-facing message."""

    def __init__(self, message: str = GENERIC_RUN_ERROR_MESSAGE):
        super().__init__(message)
