"""Streaming DOCX text extraction.

Reads the main document part straight out of the zip container and walks
its XML events once, so large documents never have to be held as a full
tree.
"""

import io
import zipfile
import zlib
from typing import Optional

from lxml import etree

from doctext.config import ExtractorConfig
from doctext.exceptions import (
    CorruptArchiveError,
    MalformedDocumentError,
    MissingDocumentPartError,
)
from doctext.logger import Timer, get_logger

logger = get_logger(__name__)


def _local_name(tag) -> Optional[str]:
    if not isinstance(tag, str):
        # comments and processing instructions
        return None
    # "{ns}name", or "w:name" when the prefix was never declared
    return tag.rpartition("}")[2].rpartition(":")[2]


def _open_archive(file_bytes: bytes) -> zipfile.ZipFile:
    try:
        return zipfile.ZipFile(io.BytesIO(file_bytes))
    except (zipfile.BadZipFile, OSError, ValueError) as exc:
        raise CorruptArchiveError(f"not a valid zip archive: {exc}") from exc


def walk_document_xml(stream) -> str:
    """Collect paragraph text from a WordprocessingML document stream.

    ``t`` runs contribute their character data, ``br`` a newline, ``tab`` a
    tab and the end of every ``p`` a newline. Anything nested inside a ``t``
    adds nothing of its own.
    """
    parts: list[str] = []
    stack: list[Optional[str]] = []

    for event, elem in etree.iterparse(
        stream, events=("start", "end"), remove_comments=True, remove_pis=True
    ):
        name = _local_name(elem.tag)

        if event == "start":
            inside_run_text = "t" in stack
            stack.append(name)
            if inside_run_text:
                continue
            if name == "br":
                parts.append("\n")
            elif name == "tab":
                parts.append("\t")
            continue

        if stack:
            stack.pop()
        if name == "t" and "t" not in stack:
            parts.append("".join(elem.itertext()))
        elif name == "p":
            parts.append("\n")
            # paragraph fully consumed; drop it and its already-walked siblings
            elem.clear()
            while elem.getprevious() is not None:
                del elem.getparent()[0]

    return "".join(parts)


def extract_docx(file_bytes: bytes, config: Optional[ExtractorConfig] = None) -> str:
    """Extract paragraph text from a DOCX document.

    Args:
        file_bytes: Raw DOCX (zip) bytes
        config: Extractor configuration. If None, uses defaults.

    Returns:
        Text with one newline after every paragraph

    Raises:
        CorruptArchiveError: If the bytes are not a readable zip archive
        MissingDocumentPartError: If the main document part is absent
        MalformedDocumentError: If the document XML is not well-formed
    """
    config = config or ExtractorConfig()
    part_name = config.docx_main_part

    with _open_archive(file_bytes) as archive:
        try:
            info = archive.getinfo(part_name)
        except KeyError as exc:
            logger.warning(
                "DOCX archive has no main document part",
                extra_data={"part": part_name, "member_count": len(archive.infolist())},
            )
            raise MissingDocumentPartError(f"{part_name} not found in docx") from exc

        if info.file_size == 0:
            logger.warning(
                "DOCX main document part is empty", extra_data={"part": part_name}
            )
            return ""

        with Timer("docx_walk") as timer:
            try:
                with archive.open(info) as stream:
                    text = walk_document_xml(stream)
            except etree.XMLSyntaxError as exc:
                logger.warning(
                    "DOCX main document is not well-formed XML",
                    extra_data={"part": part_name, "error": str(exc)},
                )
                raise MalformedDocumentError(f"malformed {part_name}: {exc}") from exc
            except (
                zipfile.BadZipFile,
                zlib.error,
                EOFError,
                RuntimeError,
                NotImplementedError,
            ) as exc:
                # RuntimeError: encrypted member; NotImplementedError: unknown compression
                raise CorruptArchiveError(f"unable to read {part_name}: {exc}") from exc

    logger.debug(
        "DOCX extraction completed",
        extra_data={
            "part": part_name,
            "characters_extracted": len(text),
            "extraction_time_ms": timer.get_elapsed_ms(),
        },
    )
    return text
