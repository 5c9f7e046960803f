"""Configuration for document text extraction."""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class ExtractorConfig:
    """Configuration for the extraction engine.

    Every field has a working default, so ``ExtractorConfig()`` is enough for
    a host with ``pdftotext`` on its ``PATH``.

    Examples:
        >>> # Defaults: pdftotext from PATH, no deadline
        >>> config = ExtractorConfig()

        >>> # Bound PDF conversion to 30 seconds
        >>> config = ExtractorConfig(pdf_timeout=30.0)

        >>> # Force a known legacy encoding for .txt inputs
        >>> config = ExtractorConfig(txt_encoding="cp1251")
    """

    pdftotext_cmd: str = "pdftotext"
    """Converter executable. Default: "pdftotext" (assumes in PATH)."""

    pdftotext_args: tuple[str, ...] = ("-layout", "-enc", "UTF-8")
    """Flags passed before the stdin/stdout placeholders ("-" "-").

    "-layout" keeps the physical page layout; "-enc UTF-8" pins the output
    encoding so stdout can be decoded as UTF-8.
    """

    pdf_timeout: Optional[float] = None
    """Seconds the converter may run before it is killed. None = unbounded."""

    docx_main_part: str = "word/document.xml"
    """Archive member holding the DOCX main document XML."""

    txt_encoding: Optional[str] = None
    """Codec forced for TXT inputs. None = BOM / UTF-8 / scored fallback."""

    @classmethod
    def from_env(cls) -> "ExtractorConfig":
        """Build a config from ``DOCTEXT_*`` environment variables.

        Raises:
            ValueError: If DOCTEXT_PDF_TIMEOUT is not a positive number
        """
        config = cls()
        config.pdftotext_cmd = os.environ.get(
            "DOCTEXT_PDFTOTEXT_CMD", config.pdftotext_cmd
        )
        config.docx_main_part = os.environ.get(
            "DOCTEXT_DOCX_MAIN_PART", config.docx_main_part
        )
        config.txt_encoding = os.environ.get("DOCTEXT_TXT_ENCODING") or None

        timeout = os.environ.get("DOCTEXT_PDF_TIMEOUT")
        if timeout:
            try:
                config.pdf_timeout = float(timeout)
            except ValueError as exc:
                raise ValueError(
                    f"DOCTEXT_PDF_TIMEOUT must be a number, got {timeout!r}"
                ) from exc
            if config.pdf_timeout <= 0:
                raise ValueError("DOCTEXT_PDF_TIMEOUT must be positive")

        return config
