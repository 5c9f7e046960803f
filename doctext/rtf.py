"""Minimal RTF to plain-text converter.

A single forward pass over the raw bytes. Group nesting is tracked with an
integer depth; destination groups (font table, colour table, pictures, ...)
are skipped by remembering the depth at which skipping began and dropping
everything until the brace that closes that depth.
"""

from dataclasses import dataclass
from typing import Optional

from doctext.charset import decode_legacy, decode_utf16_bom
from doctext.logger import get_logger
from doctext.normalize import collapse_whitespace

logger = get_logger(__name__)

SKIPPED_DESTINATIONS = frozenset(
    {b"fonttbl", b"colortbl", b"stylesheet", b"info", b"pict", b"header", b"footer"}
)
LITERAL_SYMBOLS = frozenset(b"\\{}")
HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")
REPLACEMENT = "\ufffd".encode("utf-8")


def _is_letter(byte: int) -> bool:
    return 0x41 <= byte <= 0x5A or 0x61 <= byte <= 0x7A


def _is_digit(byte: int) -> bool:
    return 0x30 <= byte <= 0x39


@dataclass
class _RtfState:
    depth: int = 0
    skip_until_depth: Optional[int] = None

    @property
    def skipping(self) -> bool:
        return self.skip_until_depth is not None

    def open_group(self):
        self.depth += 1

    def close_group(self):
        if self.skip_until_depth is not None and self.depth == self.skip_until_depth:
            self.skip_until_depth = None
        if self.depth > 0:
            self.depth -= 1

    def start_skipping(self):
        if self.skip_until_depth is None:
            self.skip_until_depth = self.depth


class _Output:
    """Byte buffer that also pairs UTF-16 surrogates from ``\\uN`` escapes."""

    def __init__(self):
        self.buffer = bytearray()
        self.pending_high: Optional[int] = None

    def _flush_surrogate(self):
        if self.pending_high is not None:
            self.buffer += REPLACEMENT
            self.pending_high = None

    def write(self, data: bytes):
        self._flush_surrogate()
        self.buffer += data

    def write_byte(self, byte: int):
        self._flush_surrogate()
        self.buffer.append(byte)

    def write_code_point(self, code: int):
        # \uN carries a signed 16-bit value
        if code < 0:
            code += 0x10000

        if 0xD800 <= code <= 0xDBFF:
            self._flush_surrogate()
            self.pending_high = code
            return
        if 0xDC00 <= code <= 0xDFFF:
            if self.pending_high is None:
                self.buffer += REPLACEMENT
                return
            code = 0x10000 + ((self.pending_high - 0xD800) << 10) + (code - 0xDC00)
            self.pending_high = None

        self._flush_surrogate()
        if 0 <= code <= 0x10FFFF:
            self.buffer += chr(code).encode("utf-8")
        else:
            self.buffer += REPLACEMENT

    def getvalue(self) -> bytes:
        self._flush_surrogate()
        return bytes(self.buffer)


def _read_control_symbol(
    data: bytes, i: int, state: _RtfState, out: _Output
) -> int:
    """Handle the non-letter byte after a backslash; return the next index."""
    symbol = data[i]
    i += 1

    if symbol in LITERAL_SYMBOLS:
        if not state.skipping:
            out.write_byte(symbol)
    elif symbol == ord("~"):
        if not state.skipping:
            out.write(b" ")
    elif symbol == ord("_"):
        if not state.skipping:
            out.write(b"-")
    elif symbol == ord("*"):
        state.start_skipping()
    elif symbol == ord("'"):
        if i + 1 < len(data):
            digits = data[i : i + 2]
            i += 2
            if digits[0] in HEX_DIGITS and digits[1] in HEX_DIGITS:
                if not state.skipping:
                    out.write_byte(int(digits, 16))
    # \- (optional hyphen) and any other symbol: no text
    return i


def _read_control_word(data: bytes, i: int, state: _RtfState, out: _Output) -> int:
    """Handle ``\\word[-N]`` starting at ``i``; return the next index."""
    size = len(data)
    start = i
    while i < size and _is_letter(data[i]):
        i += 1
    word = data[start:i]

    if i < size and (data[i] == ord("-") or _is_digit(data[i])):
        negative = data[i] == ord("-")
        if negative:
            i += 1
        digits_start = i
        while i < size and _is_digit(data[i]):
            i += 1
        digits = data[digits_start:i]

        if word == b"u" and digits:
            value = int(digits)
            if not state.skipping:
                out.write_code_point(-value if negative else value)
            # the ANSI fallback character that follows \uN
            if i < size and data[i] == ord("?"):
                i += 1

    if word in (b"par", b"line"):
        if not state.skipping:
            out.write(b"\n")
    elif word == b"tab":
        if not state.skipping:
            out.write(b"\t")
    elif word in SKIPPED_DESTINATIONS:
        state.start_skipping()

    # one space delimits a control word and is not part of the text
    if i < size and data[i] == ord(" "):
        i += 1
    return i


def rtf_to_bytes(data: bytes) -> bytes:
    """Strip RTF markup, returning the text bytes before decoding.

    ``\\'hh`` escapes come out as raw bytes and ``\\uN`` escapes as UTF-8, so
    the result may mix encodings; :func:`extract_rtf` resolves that.
    """
    state = _RtfState()
    out = _Output()
    size = len(data)
    i = 0

    while i < size:
        byte = data[i]

        if byte == ord("{"):
            state.open_group()
            i += 1
        elif byte == ord("}"):
            state.close_group()
            i += 1
        elif byte == ord("\\"):
            i += 1
            if i >= size:
                break
            if _is_letter(data[i]):
                i = _read_control_word(data, i, state, out)
            else:
                i = _read_control_symbol(data, i, state, out)
        elif byte in (0x0D, 0x0A):
            # Raw line breaks are layout only; text breaks come from \par and \line
            i += 1
        else:
            if not state.skipping:
                out.write_byte(byte)
            i += 1

    return collapse_whitespace(out.getvalue())


def extract_rtf(file_bytes: bytes) -> str:
    """Convert RTF markup to plain text.

    Args:
        file_bytes: Raw RTF bytes

    Returns:
        Plain text with ``\\par``/``\\line`` as newlines and whitespace collapsed
    """
    raw = rtf_to_bytes(file_bytes)

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        pass

    text = decode_utf16_bom(raw)
    if text is not None:
        logger.debug("RTF text decoded as UTF-16", extra_data={"size_bytes": len(raw)})
        return text

    logger.debug(
        "RTF text is not UTF-8, resolving legacy charset",
        extra_data={"size_bytes": len(raw)},
    )
    return decode_legacy(raw)
