"""Custom exceptions for document text extraction."""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Failure categories surfaced to callers of the engine."""

    UNSUPPORTED_FORMAT = "unsupported_format"
    TOOL_UNAVAILABLE = "tool_unavailable"
    TOOL_EXECUTION_FAILED = "tool_execution_failed"
    CORRUPT_ARCHIVE = "corrupt_archive"
    MISSING_DOCUMENT_PART = "missing_document_part"
    MALFORMED_DOCUMENT = "malformed_document"
    DECODE_FAILURE = "decode_failure"


class DocumentParserError(Exception):
    """Base exception for document text extraction errors."""

    kind: ErrorKind = ErrorKind.MALFORMED_DOCUMENT


class UnsupportedFormatError(DocumentParserError):
    """Raised when neither the extension nor the leading bytes name a known format."""

    kind = ErrorKind.UNSUPPORTED_FORMAT

    def __init__(self, message: str, extension: str = ""):
        super().__init__(message)
        self.extension = extension


class ExtractionError(DocumentParserError):
    """Raised when text extraction fails."""

    pass


class ToolUnavailableError(ExtractionError):
    """Raised when the external PDF converter cannot be spawned.

    The message is the operating system's own error text, kept verbatim so
    operators can see what is missing.
    """

    kind = ErrorKind.TOOL_UNAVAILABLE


class ToolExecutionFailedError(ExtractionError):
    """Raised when the external PDF converter exits unsuccessfully."""

    kind = ErrorKind.TOOL_EXECUTION_FAILED

    def __init__(
        self, message: str, exit_status: Optional[int] = None, stderr: str = ""
    ):
        super().__init__(message)
        self.exit_status = exit_status
        self.stderr = stderr


class ToolTimeoutError(ToolExecutionFailedError):
    """Raised when the external converter outlives its deadline and is killed."""

    pass


class ExtractionCancelledError(ToolExecutionFailedError):
    """Raised when the caller cancels a running conversion."""

    pass


class CorruptArchiveError(ExtractionError):
    """Raised when DOCX bytes are not a readable zip archive."""

    kind = ErrorKind.CORRUPT_ARCHIVE


class MissingDocumentPartError(ExtractionError):
    """Raised when the archive has no main document part."""

    kind = ErrorKind.MISSING_DOCUMENT_PART


class MalformedDocumentError(ExtractionError):
    """Raised when the document markup cannot be parsed."""

    kind = ErrorKind.MALFORMED_DOCUMENT


class DecodeFailureError(DocumentParserError):
    """Raised when text bytes cannot be decoded with a forced encoding."""

    kind = ErrorKind.DECODE_FAILURE


ERROR_TYPES: dict[ErrorKind, type[DocumentParserError]] = {
    ErrorKind.UNSUPPORTED_FORMAT: UnsupportedFormatError,
    ErrorKind.TOOL_UNAVAILABLE: ToolUnavailableError,
    ErrorKind.TOOL_EXECUTION_FAILED: ToolExecutionFailedError,
    ErrorKind.CORRUPT_ARCHIVE: CorruptArchiveError,
    ErrorKind.MISSING_DOCUMENT_PART: MissingDocumentPartError,
    ErrorKind.MALFORMED_DOCUMENT: MalformedDocumentError,
    ErrorKind.DECODE_FAILURE: DecodeFailureError,
}
