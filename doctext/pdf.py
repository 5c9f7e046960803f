"""PDF text extraction through an external layout-preserving converter.

The converter (poppler's ``pdftotext`` by default) reads the document from
stdin and writes text to stdout. Input is written on a worker thread while
the calling thread reads output: a large page of text can fill the stdout
pipe before the converter has consumed all of its input.
"""

import subprocess
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import IO, Optional

from doctext.config import ExtractorConfig
from doctext.exceptions import (
    ExtractionCancelledError,
    ToolExecutionFailedError,
    ToolTimeoutError,
    ToolUnavailableError,
)
from doctext.logger import Timer, get_logger

logger = get_logger(__name__)

WATCHDOG_POLL_SECONDS = 0.05
STDERR_EXCERPT_CHARS = 500


def _feed_stdin(pipe: IO[bytes], data: bytes) -> Optional[OSError]:
    """Write ``data`` and close the pipe; return the write error, if any.

    A converter that exits early closes its end of the pipe, so a broken
    pipe here is reported back rather than raised: the exit status decides
    whether the conversion failed.
    """
    error: Optional[OSError] = None
    try:
        pipe.write(data)
    except OSError as exc:
        error = exc
    finally:
        try:
            pipe.close()
        except OSError as exc:
            error = error or exc
    return error


def _watch(
    process: subprocess.Popen,
    finished: threading.Event,
    timeout: Optional[float],
    cancel_event: Optional[threading.Event],
) -> Optional[str]:
    """Kill ``process`` on deadline or cancellation; return why, or None."""
    deadline = None if timeout is None else time.monotonic() + timeout
    while not finished.is_set():
        reason = None
        if cancel_event is not None and cancel_event.is_set():
            reason = "cancelled"
        elif deadline is not None and time.monotonic() >= deadline:
            reason = "timeout"

        if reason is not None:
            if process.poll() is None:
                process.kill()
                return reason
            return None
        finished.wait(WATCHDOG_POLL_SECONDS)
    return None


def extract_pdf(
    file_bytes: bytes,
    config: Optional[ExtractorConfig] = None,
    cancel_event: Optional[threading.Event] = None,
) -> str:
    """Convert PDF bytes to layout-preserving text.

    Args:
        file_bytes: Raw PDF bytes
        config: Extractor configuration. If None, uses defaults.
        cancel_event: Set it from another thread to abort the conversion.

    Returns:
        The converter's stdout, unmodified apart from UTF-8 decoding

    Raises:
        ToolUnavailableError: If the converter cannot be started
        ToolTimeoutError: If ``config.pdf_timeout`` elapses first
        ExtractionCancelledError: If ``cancel_event`` is set first
        ToolExecutionFailedError: If the converter exits with nonzero status
    """
    config = config or ExtractorConfig()
    command = [config.pdftotext_cmd, *config.pdftotext_args, "-", "-"]

    try:
        process = subprocess.Popen(
            command,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except OSError as exc:
        logger.error(
            "PDF converter could not be started",
            extra_data={"command": config.pdftotext_cmd, "error": str(exc)},
        )
        raise ToolUnavailableError(str(exc)) from exc

    finished = threading.Event()
    watch_needed = config.pdf_timeout is not None or cancel_event is not None

    with Timer("pdf_conversion") as timer:
        with ThreadPoolExecutor(max_workers=3) as executor:
            writer = executor.submit(_feed_stdin, process.stdin, file_bytes)
            drainer = executor.submit(process.stderr.read)
            watchdog = (
                executor.submit(
                    _watch, process, finished, config.pdf_timeout, cancel_event
                )
                if watch_needed
                else None
            )
            try:
                output = process.stdout.read()
                returncode = process.wait()
            finally:
                finished.set()
                if process.poll() is None:
                    process.kill()
                    process.wait()

            write_error = writer.result()
            stderr = drainer.result().decode("utf-8", errors="replace").strip()
            stopped_by = watchdog.result() if watchdog is not None else None

        process.stdout.close()
        process.stderr.close()

    if stopped_by == "timeout":
        logger.warning(
            "PDF converter exceeded its deadline",
            extra_data={"timeout_seconds": config.pdf_timeout},
        )
        raise ToolTimeoutError(
            f"{config.pdftotext_cmd} timed out after {config.pdf_timeout}s"
        )
    if stopped_by == "cancelled":
        logger.info("PDF conversion cancelled by caller")
        raise ExtractionCancelledError(f"{config.pdftotext_cmd} was cancelled")

    if returncode != 0:
        logger.error(
            "PDF converter failed",
            extra_data={
                "exit_status": returncode,
                "stderr": stderr[:STDERR_EXCERPT_CHARS],
                "input_fully_written": write_error is None,
            },
        )
        message = f"{config.pdftotext_cmd} exited with status {returncode}"
        if stderr:
            message += f": {stderr[:STDERR_EXCERPT_CHARS]}"
        raise ToolExecutionFailedError(message, exit_status=returncode, stderr=stderr)

    if write_error is not None:
        logger.warning(
            "PDF converter exited before reading all input",
            extra_data={"input_size_bytes": len(file_bytes), "error": str(write_error)},
        )

    text = output.decode("utf-8", errors="replace")
    logger.debug(
        "PDF conversion completed",
        extra_data={
            "input_size_bytes": len(file_bytes),
            "characters_extracted": len(text),
            "conversion_time_ms": timer.get_elapsed_ms(),
        },
    )
    return text
