"""Document format detection."""

from doctext.exceptions import UnsupportedFormatError
from doctext.logger import get_logger
from doctext.models import DocumentFormat

logger = get_logger(__name__)


PDF_SIGNATURE = b"%PDF"
ZIP_SIGNATURE = b"PK"  # DOCX files are ZIP archives
RTF_SIGNATURE = b"{\\rtf"

EXTENSION_FORMATS = {
    ".pdf": DocumentFormat.PDF,
    ".docx": DocumentFormat.DOCX,
    ".rtf": DocumentFormat.RTF,
    ".txt": DocumentFormat.TXT,
    "": DocumentFormat.TXT,
}


def file_extension(file_name: str) -> str:
    """Return the lower-cased extension, including its dot.

    Everything from the last ``.`` of the base name on; a name without a dot
    has no extension. Unlike ``pathlib``, a leading-dot name such as
    ``".txt"`` counts as having the extension ``".txt"``.
    """
    base = file_name.replace("\\", "/").rsplit("/", 1)[-1]
    dot = base.rfind(".")
    if dot < 0:
        return ""
    return base[dot:].lower()


class DocumentDetector:
    """Chooses an extraction path from the file name, then from magic bytes."""

    def detect(self, file_name: str, file_bytes: bytes) -> DocumentFormat:
        extension = file_extension(file_name)

        fmt = EXTENSION_FORMATS.get(extension)
        if fmt is not None:
            logger.debug(
                "Detected format from file extension",
                extra_data={"file_name": file_name, "format": fmt.value},
            )
            return fmt

        fmt = self._sniff_format(file_bytes)
        if fmt is not None:
            logger.debug(
                "Detected format from file signature",
                extra_data={
                    "file_name": file_name,
                    "file_extension": extension,
                    "format": fmt.value,
                },
            )
            return fmt

        logger.warning(
            "Unsupported document format",
            extra_data={
                "file_name": file_name,
                "file_extension": extension,
                "file_size_bytes": len(file_bytes),
            },
        )
        raise UnsupportedFormatError(
            f"unsupported file type: {extension}", extension=extension
        )

    @staticmethod
    def _sniff_format(file_bytes: bytes) -> DocumentFormat | None:
        """Detect the format from file signature/magic bytes."""
        if file_bytes.startswith(PDF_SIGNATURE):
            return DocumentFormat.PDF
        if file_bytes.startswith(ZIP_SIGNATURE):
            return DocumentFormat.DOCX
        if file_bytes.startswith(RTF_SIGNATURE):
            return DocumentFormat.RTF
        return None
