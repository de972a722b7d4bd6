"""Shared error types for registry, import and auth operations."""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    """Machine-readable error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    DOCUMENT_NOT_FOUND = "DOCUMENT_NOT_FOUND"
    REFERENCE_NOT_FOUND = "REFERENCE_NOT_FOUND"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    IMPORT_FORMAT_UNSUPPORTED = "IMPORT_FORMAT_UNSUPPORTED"
    IMPORT_PAYLOAD_INVALID = "IMPORT_PAYLOAD_INVALID"


class PlateSnapError(Exception):
    """Base error carrying a stable code and a human-readable message."""

    def __init__(self, *, error_code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.message = message


class DocumentNotFoundError(PlateSnapError):
    """Raised when an update targets a document that does not exist."""

    def __init__(self, collection: str, document_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.DOCUMENT_NOT_FOUND,
            message=f"No document to update: {collection}/{document_id}",
        )
        self.collection = collection
        self.document_id = document_id


class ReferenceNotFoundError(PlateSnapError):
    """Raised when a natural-key reference cannot be resolved."""

    def __init__(self, message: str) -> None:
        super().__init__(error_code=ErrorCode.REFERENCE_NOT_FOUND, message=message)


class StoreUnavailableError(PlateSnapError):
    """Raised when the document store cannot serve a request."""

    def __init__(self, message: str) -> None:
        super().__init__(error_code=ErrorCode.STORE_UNAVAILABLE, message=message)


class ImportFormatError(PlateSnapError):
    """Raised when an import payload cannot be parsed."""


def to_error_payload(exc: BaseException) -> dict[str, str]:
    """Normalize any exception into the stable error payload."""
    if isinstance(exc, PlateSnapError):
        return {"error_code": str(exc.error_code), "message": exc.message}
    error_code = "VALIDATION_ERROR" if isinstance(exc, ValueError) else "INTERNAL_ERROR"
    return {"error_code": error_code, "message": str(exc) or type(exc).__name__}
