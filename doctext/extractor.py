"""Routes a document to the extractor for its format."""

import threading
from typing import Optional

from doctext.charset import decode_text
from doctext.config import ExtractorConfig
from doctext.detector import DocumentDetector
from doctext.docx_walker import extract_docx
from doctext.exceptions import DocumentParserError, ExtractionError
from doctext.logger import get_logger
from doctext.models import DocumentFormat
from doctext.pdf import extract_pdf
from doctext.rtf import extract_rtf

logger = get_logger(__name__)


class TextExtractor:
    """Plain-text extractor for PDF, DOCX, RTF and TXT documents.

    Holds only configuration, so one instance can serve concurrent calls.
    PDF goes through an external converter, DOCX is walked as streamed XML,
    RTF runs through a byte-level tokenizer and TXT through the charset
    resolver.
    """

    def __init__(
        self,
        config: Optional[ExtractorConfig] = None,
        detector: Optional[DocumentDetector] = None,
    ):
        """Initialize extractor with configuration.

        Args:
            config: Extractor configuration. If None, uses defaults.
            detector: Format detector used when no format is given.
        """
        self.config = config or ExtractorConfig()
        self.detector = detector or DocumentDetector()

    def extract(
        self,
        file_bytes: bytes,
        file_name: str,
        fmt: Optional[DocumentFormat] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> str:
        """Extract text from a document.

        Args:
            file_bytes: Raw file bytes
            file_name: Original filename (used for format detection)
            fmt: Already-detected format. Detected from name and bytes if None.
            cancel_event: Cancellation token, honoured by the PDF converter

        Returns:
            Extracted plain text

        Raises:
            DocumentParserError: Typed failure from detection or extraction
            ExtractionError: If an extractor fails in an unexpected way
        """
        if fmt is None:
            fmt = self.detector.detect(file_name, file_bytes)

        logger.debug(
            "Starting document extraction",
            extra_data={
                "file_name": file_name,
                "format": fmt.value,
                "file_size_bytes": len(file_bytes),
            },
        )

        try:
            if fmt is DocumentFormat.PDF:
                return extract_pdf(file_bytes, self.config, cancel_event=cancel_event)
            if fmt is DocumentFormat.DOCX:
                return extract_docx(file_bytes, self.config)
            if fmt is DocumentFormat.RTF:
                return extract_rtf(file_bytes)
            return decode_text(file_bytes, encoding=self.config.txt_encoding)

        except DocumentParserError:
            raise
        except Exception as exc:
            logger.error(
                "Document extraction failed unexpectedly",
                extra_data={
                    "file_name": file_name,
                    "format": fmt.value,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
                exc_info=True,
            )
            raise ExtractionError(f"Failed to extract document: {exc}") from exc
