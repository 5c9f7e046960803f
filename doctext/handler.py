"""Document handler orchestration."""

import threading
from typing import Optional

from doctext.config import ExtractorConfig
from doctext.detector import DocumentDetector
from doctext.exceptions import DocumentParserError
from doctext.extractor import TextExtractor
from doctext.logger import Timer, get_logger, request_context
from doctext.models import DocumentFormat, ExtractionOutcome

logger = get_logger(__name__)


class DocumentHandler:
    def __init__(
        self,
        detector: Optional[DocumentDetector] = None,
        extractor: Optional[TextExtractor] = None,
        config: Optional[ExtractorConfig] = None,
    ) -> None:
        """Initialize document handler.

        Args:
            detector: Document format detector. If None, creates default.
            extractor: Text extractor. If None, creates default with config.
            config: Extractor configuration. Only used if extractor is None.
        """
        self.detector = detector or DocumentDetector()
        self.extractor = extractor or TextExtractor(config=config, detector=self.detector)

    def extract(
        self,
        file_name: str,
        file_bytes: bytes,
        cancel_event: Optional[threading.Event] = None,
        request_id: Optional[str] = None,
    ) -> ExtractionOutcome:
        """Extract text from a document, reporting failure as an outcome.

        Typed extraction failures never propagate: they come back as a
        failed ExtractionOutcome carrying the error kind and the original
        message, so one bad document cannot disturb the next call.

        Args:
            file_name: Original filename
            file_bytes: Raw file bytes
            cancel_event: Optional cancellation token for the PDF converter
            request_id: Tag for every log line of this call. Generated if omitted.

        Returns:
            ExtractionOutcome with the text or the failure
        """
        with request_context(request_id):
            return self._extract(file_name, file_bytes, cancel_event)

    def _extract(
        self,
        file_name: str,
        file_bytes: bytes,
        cancel_event: Optional[threading.Event],
    ) -> ExtractionOutcome:
        fmt: Optional[DocumentFormat] = None

        with Timer("detection") as detect_timer:
            try:
                fmt = self.detector.detect(file_name, file_bytes)
            except DocumentParserError as exc:
                return ExtractionOutcome.failure(file_name, exc.kind, str(exc))

        logger.debug(
            "Document detection completed",
            extra_data={
                "file_name": file_name,
                "format": fmt.value,
                "detection_time_ms": detect_timer.get_elapsed_ms(),
            },
        )

        with Timer("extraction") as extract_timer:
            try:
                text = self.extractor.extract(
                    file_bytes, file_name, fmt=fmt, cancel_event=cancel_event
                )
            except DocumentParserError as exc:
                logger.error(
                    "Document extraction failed",
                    extra_data={
                        "file_name": file_name,
                        "format": fmt.value,
                        "error_kind": exc.kind.value,
                        "error": str(exc),
                        "extraction_time_ms": extract_timer.get_elapsed_ms(),
                    },
                )
                return ExtractionOutcome.failure(file_name, exc.kind, str(exc), fmt)

        if not text.strip():
            logger.warning(
                "No text content extracted from document",
                extra_data={
                    "file_name": file_name,
                    "format": fmt.value,
                    "file_size_bytes": len(file_bytes),
                },
            )

        logger.info(
            "Successfully extracted text from document",
            extra_data={
                "file_name": file_name,
                "format": fmt.value,
                "character_count": len(text),
                "extraction_time_ms": extract_timer.get_elapsed_ms(),
            },
        )
        return ExtractionOutcome.success(file_name, text, fmt)
