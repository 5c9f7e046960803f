"""High-level API for document text extraction."""

import threading
from pathlib import Path
from typing import Optional

from doctext.config import ExtractorConfig
from doctext.handler import DocumentHandler
from doctext.models import ExtractionOutcome


def extract(
    file_name: str,
    file_bytes: bytes,
    config: Optional[ExtractorConfig] = None,
    cancel_event: Optional[threading.Event] = None,
    request_id: Optional[str] = None,
) -> ExtractionOutcome:
    """Extract normalized plain text from one document.

    Never raises for extraction failures; check ``outcome.ok`` or call
    ``outcome.unwrap()``.

    Examples:
        >>> outcome = extract("notes.txt", b"Hello\\r\\nWorld")
        >>> outcome.text
        'Hello\\nWorld'
    """
    return DocumentHandler(config=config).extract(
        file_name, file_bytes, cancel_event=cancel_event, request_id=request_id
    )


def extract_text(
    file_name: str,
    file_bytes: bytes,
    config: Optional[ExtractorConfig] = None,
    cancel_event: Optional[threading.Event] = None,
) -> str:
    """Like :func:`extract`, but return the text or raise the typed error."""
    return extract(file_name, file_bytes, config, cancel_event).unwrap()


def parse_document(
    file_path: Optional[str] = None,
    file_bytes: Optional[bytes] = None,
    file_name: Optional[str] = None,
    config: Optional[ExtractorConfig] = None,
) -> ExtractionOutcome:
    """Parse a document and extract its text.

    Convenience function that accepts either a file path or raw bytes.

    Args:
        file_path: Path to document file (alternative to file_bytes)
        file_bytes: Raw document bytes (alternative to file_path)
        file_name: Original filename (required if using file_bytes)
        config: Extractor configuration (optional, uses defaults if not provided)

    Returns:
        ExtractionOutcome with extracted text or the failure

    Raises:
        ValueError: If neither file_path nor file_bytes provided, or if file_bytes
            provided without file_name

    Examples:
        >>> # Parse from file path
        >>> outcome = parse_document(file_path="report.rtf")
        >>> print(outcome.text)

        >>> # Parse from bytes with a bounded PDF conversion
        >>> with open("report.pdf", "rb") as f:
        ...     outcome = parse_document(
        ...         file_bytes=f.read(),
        ...         file_name="report.pdf",
        ...         config=ExtractorConfig(pdf_timeout=30.0),
        ...     )
    """
    if file_path and file_bytes is not None:
        raise ValueError("Provide either file_path or file_bytes, not both")

    if not file_path and file_bytes is None:
        raise ValueError("Must provide either file_path or file_bytes")

    if file_path:
        path = Path(file_path)
        if not path.is_file():
            raise ValueError(f"File not found: {file_path}")
        file_bytes = path.read_bytes()
        file_name = file_name or path.name

    if not file_name:
        raise ValueError("file_name is required when using file_bytes")

    return extract(file_name, file_bytes, config=config)
