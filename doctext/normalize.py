"""Line-ending and whitespace normalization shared by the extractors."""

import re
from typing import TypeVar

AnyText = TypeVar("AnyText", str, bytes)

# [\t\n\f\r ] rather than \s: only ASCII whitespace counts, in both str and bytes.
_NEWLINE_RUNS = re.compile(r"\n{2,}")
_BLANK_RUNS = re.compile(r"[ \t]{2,}")
_SPACE_BEFORE_PUNCT = re.compile(r"[\t\n\f\r ]+([,.:;!?])")

_NEWLINE_RUNS_B = re.compile(rb"\n{2,}")
_BLANK_RUNS_B = re.compile(rb"[ \t]{2,}")
_SPACE_BEFORE_PUNCT_B = re.compile(rb"[\t\n\f\r ]+([,.:;!?])")


def normalize_line_endings(text: AnyText) -> AnyText:
    """Turn ``\\r\\n`` and bare ``\\r`` into ``\\n``."""
    if isinstance(text, bytes):
        return text.replace(b"\r\n", b"\n").replace(b"\r", b"\n")
    return text.replace("\r\n", "\n").replace("\r", "\n")


def collapse_whitespace(text: AnyText) -> AnyText:
    """Normalize line endings and squeeze redundant whitespace.

    Runs of newlines become one newline, runs of spaces/tabs become one
    space, and whitespace directly before ``, . : ; ! ?`` is removed.
    Applying it twice gives the same result as applying it once.
    """
    text = normalize_line_endings(text)
    if isinstance(text, bytes):
        text = _NEWLINE_RUNS_B.sub(b"\n", text)
        text = _BLANK_RUNS_B.sub(b" ", text)
        return _SPACE_BEFORE_PUNCT_B.sub(rb"\1", text)

    text = _NEWLINE_RUNS.sub("\n", text)
    text = _BLANK_RUNS.sub(" ", text)
    return _SPACE_BEFORE_PUNCT.sub(r"\1", text)
