"""Tests for plain-text charset resolution."""

import pytest

from doctext.charset import (
    LEGACY_CANDIDATES,
    best_legacy_candidate,
    decode_legacy,
    decode_text,
    decode_utf16_bom,
    legacy_candidates,
    score_cyrillic,
)
from doctext.exceptions import DecodeFailureError

CYRILLIC_SAMPLE = "Привет, мир! Это проверка кодировки."


class TestUtf16Bom:
    def test_little_endian(self):
        assert decode_text(b"\xff\xfeH\x00i\x00") == "Hi"

    def test_big_endian(self):
        assert decode_text(b"\xfe\xff\x00H\x00i") == "Hi"

    def test_matches_utf8_equivalent(self):
        text = "Строка\r\nline two"
        utf16 = b"\xff\xfe" + text.encode("utf-16-le")
        assert decode_text(utf16) == decode_text(text.encode("utf-8"))

    def test_odd_trailing_byte_dropped(self):
        assert decode_utf16_bom(b"\xff\xfeH\x00i\x00!") == "Hi"

    def test_lone_surrogate_replaced(self):
        assert decode_utf16_bom(b"\xff\xfe\x00\xd8A\x00") == "\ufffdA"

    def test_no_bom_returns_none(self):
        assert decode_utf16_bom(b"Hi") is None


class TestUtf8:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            (b"plain ascii", "plain ascii"),
            (b"line1\r\nline2\rline3\n", "line1\nline2\nline3\n"),
            ("naïve café ✓".encode("utf-8"), "naïve café ✓"),
            (b"  keeps   spacing\n\n\n", "  keeps   spacing\n\n\n"),
            (b"", ""),
        ],
    )
    def test_only_line_endings_change(self, raw, expected):
        assert decode_text(raw) == expected


class TestLegacyCharsets:
    def test_candidate_list_is_closed_and_ordered(self):
        names = [name for name, _ in LEGACY_CANDIDATES]
        assert names == ["windows-1251", "koi8-r", "iso-8859-5", "mac-cyrillic", "cp866"]

    def test_windows_1251_wins_for_windows_1251_bytes(self):
        data = CYRILLIC_SAMPLE.encode("cp1251")
        candidate = best_legacy_candidate(data)
        assert candidate is not None
        assert candidate.name == "windows-1251"
        assert candidate.text == CYRILLIC_SAMPLE
        assert "\ufffd" not in candidate.text

    def test_windows_1251_score_is_highest(self):
        data = CYRILLIC_SAMPLE.encode("cp1251")
        scores = {c.name: c.score for c in legacy_candidates(data)}
        assert scores["windows-1251"] == max(scores.values())

    def test_txt_path_decodes_windows_1251(self):
        data = (CYRILLIC_SAMPLE + "\r\n").encode("cp1251")
        assert decode_text(data) == CYRILLIC_SAMPLE + "\n"

    def test_undefined_byte_penalizes_windows_1251(self):
        # 0x98 is undefined in windows-1251 but mapped by the other charsets
        data = b"\x98"
        candidate = best_legacy_candidate(data)
        assert candidate is not None
        assert candidate.name != "windows-1251"

    def test_latin1_fallback_never_fails(self, monkeypatch):
        monkeypatch.setattr("doctext.charset.best_legacy_candidate", lambda data: None)
        data = bytes(range(256))
        assert decode_legacy(data) == bytes(range(256)).decode("latin-1").replace(
            "\r\n", "\n"
        ).replace("\r", "\n")


class TestScoreCyrillic:
    def test_empty_text_scores_very_low(self):
        assert score_cyrillic("") == -1_000_000

    def test_weights(self):
        # 2 Cyrillic (6) + 2 ASCII (2) - 1 replacement (50) - 1 control (5)
        assert score_cyrillic("Яяab\ufffd\x01") == 6 + 2 - 50 - 5

    def test_newline_tab_cr_are_not_penalized(self):
        assert score_cyrillic("\n\t\r") == 0


class TestForcedEncoding:
    def test_forced_encoding_used(self):
        data = CYRILLIC_SAMPLE.encode("koi8_r")
        assert decode_text(data, encoding="koi8_r") == CYRILLIC_SAMPLE

    def test_unknown_encoding_raises(self):
        with pytest.raises(DecodeFailureError, match="unknown encoding"):
            decode_text(b"abc", encoding="no-such-codec")

    def test_mismatched_encoding_raises(self):
        with pytest.raises(DecodeFailureError):
            decode_text(b"\xff\xfe\xfd", encoding="utf-8")
