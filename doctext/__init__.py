"""Plain-text extraction for PDF, DOCX, RTF and TXT documents."""

from doctext.charset import decode_text
from doctext.config import ExtractorConfig
from doctext.detector import DocumentDetector
from doctext.exceptions import (
    CorruptArchiveError,
    DecodeFailureError,
    DocumentParserError,
    ErrorKind,
    ExtractionCancelledError,
    ExtractionError,
    MalformedDocumentError,
    MissingDocumentPartError,
    ToolExecutionFailedError,
    ToolTimeoutError,
    ToolUnavailableError,
    UnsupportedFormatError,
)
from doctext.extractor import TextExtractor
from doctext.handler import DocumentHandler
from doctext.logger import setup_logging
from doctext.models import DocumentFormat, ExtractionOutcome
from doctext.parser import extract, extract_text, parse_document

__version__ = "0.1.0"

__all__ = [
    # High-level API
    "extract",
    "extract_text",
    "parse_document",
    "decode_text",
    # Core classes
    "DocumentHandler",
    "DocumentDetector",
    "TextExtractor",
    # Data models
    "ExtractionOutcome",
    "DocumentFormat",
    "ErrorKind",
    # Configuration
    "ExtractorConfig",
    "setup_logging",
    # Exceptions
    "DocumentParserError",
    "UnsupportedFormatError",
    "ExtractionError",
    "ToolUnavailableError",
    "ToolExecutionFailedError",
    "ToolTimeoutError",
    "ExtractionCancelledError",
    "CorruptArchiveError",
    "MissingDocumentPartError",
    "MalformedDocumentError",
    "DecodeFailureError",
]
