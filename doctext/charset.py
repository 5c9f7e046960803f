"""Charset resolution for plain-text inputs.

Resolution order:

1. UTF-16 byte-order mark (``FF FE`` little-endian, ``FE FF`` big-endian)
2. Valid UTF-8
3. Best-scoring legacy Cyrillic single-byte charset, if it decodes cleanly
4. Latin-1 style byte-to-code-point mapping, which cannot fail

Every path normalizes line endings to ``\\n``.
"""

import codecs
from typing import NamedTuple, Optional

from doctext.exceptions import DecodeFailureError
from doctext.logger import get_logger
from doctext.normalize import normalize_line_endings

logger = get_logger(__name__)

BOM_UTF16_LE = b"\xff\xfe"
BOM_UTF16_BE = b"\xfe\xff"
REPLACEMENT_CHAR = "\ufffd"

# (display name, Python codec). Order breaks score ties.
LEGACY_CANDIDATES: tuple[tuple[str, str], ...] = (
    ("windows-1251", "cp1251"),
    ("koi8-r", "koi8_r"),
    ("iso-8859-5", "iso8859_5"),
    ("mac-cyrillic", "mac_cyrillic"),
    ("cp866", "cp866"),
)

EMPTY_TEXT_SCORE = -1_000_000


class CharsetCandidate(NamedTuple):
    name: str
    text: str
    score: int


def decode_utf16_bom(data: bytes) -> Optional[str]:
    """Decode ``data`` as UTF-16 if it starts with a BOM, else return None.

    A dangling odd byte at the end is ignored; unpaired surrogates become
    U+FFFD.
    """
    if data.startswith(BOM_UTF16_LE):
        codec = "utf-16-le"
    elif data.startswith(BOM_UTF16_BE):
        codec = "utf-16-be"
    else:
        return None
    body = data[2:]
    body = body[: len(body) - len(body) % 2]
    return body.decode(codec, errors="replace")


def score_cyrillic(text: str) -> int:
    """Score how plausible ``text`` is as Cyrillic or Latin prose.

    3 points per Cyrillic code point (U+0400-U+052F), 1 per printable ASCII
    character, minus 50 per replacement character and 5 per control
    character other than newline, carriage return and tab.
    """
    if not text:
        return EMPTY_TEXT_SCORE

    cyrillic = ascii_printable = replacements = controls = 0
    for char in text:
        code = ord(char)
        if char == REPLACEMENT_CHAR:
            replacements += 1
        elif 0x0400 <= code <= 0x052F:
            cyrillic += 1
        elif 0x20 <= code <= 0x7E:
            ascii_printable += 1
        elif code < 0x20 and char not in "\n\t\r":
            controls += 1
    return 3 * cyrillic + ascii_printable - 50 * replacements - 5 * controls


def legacy_candidates(data: bytes) -> list[CharsetCandidate]:
    """Trial-decode ``data`` with every legacy charset, in candidate order."""
    candidates = []
    for name, codec in LEGACY_CANDIDATES:
        text = data.decode(codec, errors="replace")
        candidates.append(CharsetCandidate(name, text, score_cyrillic(text)))
    return candidates


def best_legacy_candidate(data: bytes) -> Optional[CharsetCandidate]:
    """Pick the highest-scoring legacy decoding.

    Returns None when the winner still contains replacement characters,
    meaning no candidate charset covers every byte.
    """
    best: Optional[CharsetCandidate] = None
    for candidate in legacy_candidates(data):
        if best is None or candidate.score > best.score:
            best = candidate

    if best is None or not best.text or REPLACEMENT_CHAR in best.text:
        return None
    return best


def decode_legacy(data: bytes) -> str:
    """Decode non-UTF-8 bytes with the scored fallback, then Latin-1."""
    candidate = best_legacy_candidate(data)
    if candidate is not None:
        logger.debug(
            "Resolved legacy charset",
            extra_data={"charset": candidate.name, "score": candidate.score},
        )
        return normalize_line_endings(candidate.text)

    logger.debug(
        "No legacy charset decoded cleanly, using byte-to-code-point mapping",
        extra_data={"size_bytes": len(data)},
    )
    return normalize_line_endings(data.decode("latin-1"))


def decode_text(data: bytes, encoding: Optional[str] = None) -> str:
    """Decode plain-text bytes to a string with normalized line endings.

    Args:
        data: Raw file bytes
        encoding: Codec to force instead of detection. Optional.

    Returns:
        Decoded text

    Raises:
        DecodeFailureError: If ``encoding`` is unknown or does not fit ``data``
    """
    if encoding:
        return _decode_forced(data, encoding)

    text = decode_utf16_bom(data)
    if text is not None:
        logger.debug(
            "Decoded text via UTF-16 byte-order mark",
            extra_data={"big_endian": data.startswith(BOM_UTF16_BE)},
        )
        return normalize_line_endings(text)

    try:
        return normalize_line_endings(data.decode("utf-8"))
    except UnicodeDecodeError:
        pass

    return decode_legacy(data)


def _decode_forced(data: bytes, encoding: str) -> str:
    try:
        codecs.lookup(encoding)
    except LookupError as exc:
        raise DecodeFailureError(f"unknown encoding: {encoding}") from exc

    try:
        return normalize_line_endings(data.decode(encoding))
    except UnicodeDecodeError as exc:
        logger.warning(
            "Forced encoding does not match text bytes",
            extra_data={"encoding": encoding, "position": exc.start},
        )
        raise DecodeFailureError(
            f"unable to decode text as {encoding}: {exc.reason} at byte {exc.start}"
        ) from exc
