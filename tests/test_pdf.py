"""Tests for the external PDF converter adapter."""

import threading

import pytest

from doctext.config import ExtractorConfig
from doctext.exceptions import (
    ErrorKind,
    ExtractionCancelledError,
    ToolExecutionFailedError,
    ToolTimeoutError,
    ToolUnavailableError,
)
from doctext.pdf import extract_pdf


class TestConversion:
    def test_stdout_returned_unmodified(self, echo_config):
        payload = b"%PDF-1.4\r\n  layout   kept\n\n\n"
        assert extract_pdf(payload, echo_config) == payload.decode("ascii")

    def test_large_payload_does_not_deadlock(self, echo_config):
        # Several times any pipe buffer, so writing and reading must overlap
        payload = b"x" * (4 * 1024 * 1024)
        assert len(extract_pdf(payload, echo_config)) == len(payload)

    def test_placeholders_passed_to_converter(self, stub_converter_config):
        config = stub_converter_config(
            "import sys; sys.stdin.buffer.read(); print(' '.join(sys.argv[1:]))"
        )
        assert extract_pdf(b"%PDF", config).strip() == "- -"

    def test_output_decoded_as_utf8(self, stub_converter_config):
        config = stub_converter_config(
            "import sys; sys.stdin.buffer.read(); "
            "sys.stdout.buffer.write("
            "'\\u041f\\u0440\\u0438\\u0432\\u0435\\u0442\\n'.encode('utf-8'))"
        )
        assert extract_pdf(b"%PDF", config) == "Привет\n"


class TestFailures:
    def test_missing_binary_is_tool_unavailable(self, missing_converter_config):
        with pytest.raises(ToolUnavailableError) as exc_info:
            extract_pdf(b"%PDF", missing_converter_config)
        assert exc_info.value.kind is ErrorKind.TOOL_UNAVAILABLE
        # the OS error text is kept verbatim
        assert "doctext-no-such-converter-binary" in str(exc_info.value)

    def test_nonzero_exit(self, stub_converter_config):
        config = stub_converter_config(
            "import sys; sys.stdin.buffer.read(); "
            "sys.stderr.write('Syntax Error: broken xref'); sys.exit(3)"
        )
        with pytest.raises(ToolExecutionFailedError) as exc_info:
            extract_pdf(b"%PDF", config)
        assert exc_info.value.exit_status == 3
        assert "broken xref" in exc_info.value.stderr
        assert "status 3" in str(exc_info.value)

    def test_early_exit_without_reading_input(self, stub_converter_config):
        config = stub_converter_config("import sys; sys.exit(1)")
        with pytest.raises(ToolExecutionFailedError) as exc_info:
            extract_pdf(b"y" * (1024 * 1024), config)
        assert exc_info.value.exit_status == 1

    def test_timeout_kills_converter(self, stub_converter_config):
        config = stub_converter_config("import time; time.sleep(30)", pdf_timeout=0.3)
        with pytest.raises(ToolTimeoutError) as exc_info:
            extract_pdf(b"%PDF", config)
        assert exc_info.value.exit_status is None
        assert exc_info.value.kind is ErrorKind.TOOL_EXECUTION_FAILED

    def test_cancel_event_kills_converter(self, stub_converter_config):
        config = stub_converter_config("import time; time.sleep(30)")
        cancel = threading.Event()
        timer = threading.Timer(0.2, cancel.set)
        timer.start()
        try:
            with pytest.raises(ExtractionCancelledError):
                extract_pdf(b"%PDF", config, cancel_event=cancel)
        finally:
            timer.cancel()

    def test_fast_converter_unaffected_by_deadline(self, stub_converter_config):
        config = stub_converter_config(
            "import sys; sys.stdout.buffer.write(sys.stdin.buffer.read())",
            pdf_timeout=30.0,
        )
        assert extract_pdf(b"quick", config) == "quick"

    def test_default_config_targets_pdftotext(self):
        config = ExtractorConfig()
        assert config.pdftotext_cmd == "pdftotext"
        assert "-layout" in config.pdftotext_args
