"""Shared fixtures for doctext tests."""

import io
import sys
import zipfile

import pytest

from doctext.config import ExtractorConfig

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"


# ---------------------------------------------------------------------------
# DOCX archives
# ---------------------------------------------------------------------------
@pytest.fixture
def make_docx():
    """Factory building an in-memory DOCX from a <w:body> fragment."""
    def _make(body_xml: str, part_name: str = "word/document.xml") -> bytes:
        document = (
            '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
            f'<w:document xmlns:w="{W_NS}"><w:body>{body_xml}</w:body></w:document>'
        )
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
            archive.writestr("[Content_Types].xml", "<Types/>")
            archive.writestr(part_name, document)
        return buffer.getvalue()
    return _make


@pytest.fixture
def two_paragraph_docx(make_docx):
    return make_docx(
        "<w:p><w:r><w:t>A</w:t></w:r></w:p>"
        "<w:p><w:r><w:t>B</w:t></w:r></w:p>"
    )


# ---------------------------------------------------------------------------
# Stand-in PDF converter
# ---------------------------------------------------------------------------
@pytest.fixture
def stub_converter_config():
    """Config running a Python one-liner in place of pdftotext.

    The script receives the usual "- -" placeholders as argv and talks over
    stdin/stdout exactly like the real converter.
    """
    def _make(script: str, **overrides) -> ExtractorConfig:
        return ExtractorConfig(
            pdftotext_cmd=sys.executable,
            pdftotext_args=("-c", script),
            **overrides,
        )
    return _make


ECHO_SCRIPT = (
    "import sys; data = sys.stdin.buffer.read(); "
    "sys.stdout.buffer.write(data)"
)


@pytest.fixture
def echo_config(stub_converter_config):
    """Converter stub that writes its input back to stdout."""
    return stub_converter_config(ECHO_SCRIPT)


@pytest.fixture
def missing_converter_config():
    return ExtractorConfig(pdftotext_cmd="doctext-no-such-converter-binary")
