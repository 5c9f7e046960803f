"""Data models for document text extraction."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from doctext.exceptions import ERROR_TYPES, ErrorKind


class DocumentFormat(str, Enum):
    PDF = "pdf"
    DOCX = "docx"
    RTF = "rtf"
    TXT = "txt"


@dataclass
class ExtractionOutcome:
    """Result of one extraction call.

    Exactly one of ``text`` (success) or ``error_kind``/``error_message``
    (failure) is meaningful. ``text`` is empty on failure.
    """

    file_name: str
    text: str = ""
    format: Optional[DocumentFormat] = None
    character_count: int = 0
    error_kind: Optional[ErrorKind] = None
    error_message: str = ""

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @classmethod
    def success(
        cls, file_name: str, text: str, fmt: Optional[DocumentFormat]
    ) -> "ExtractionOutcome":
        return cls(
            file_name=file_name,
            text=text,
            format=fmt,
            character_count=len(text),
        )

    @classmethod
    def failure(
        cls,
        file_name: str,
        kind: ErrorKind,
        message: str,
        fmt: Optional[DocumentFormat] = None,
    ) -> "ExtractionOutcome":
        return cls(
            file_name=file_name,
            format=fmt,
            error_kind=kind,
            error_message=message,
        )

    def unwrap(self) -> str:
        """Return the extracted text, or raise the typed error for a failure."""
        if self.error_kind is None:
            return self.text
        raise ERROR_TYPES[self.error_kind](self.error_message)
