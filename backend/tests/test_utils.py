"""Test utilities in loremaker.utils.*"""
import math

from loremaker.utils.collections import normalise_array, unique_by
from loremaker.utils.numbers import is_falsy_number, round_half_up
from loremaker.utils.text import (
    collapse_whitespace,
    normalize_newlines,
    split_sentences,
    to_slug,
    truncate_at_word,
)


# --- normalize_newlines ---

class TestNormalizeNewlines:
    def test_none_returns_empty(self):
        assert normalize_newlines(None) == ""

    def test_crlf(self):
        assert normalize_newlines("a\r\nb") == "a\nb"

    def test_mixed(self):
        assert normalize_newlines("a\r\nb\rc\nd") == "a\nb\nc\nd"


# --- collapse_whitespace ---

class TestCollapseWhitespace:
    def test_newlines_become_spaces(self):
        assert collapse_whitespace("  Born of\n\n the void ") == "Born of the void"

    def test_none(self):
        assert collapse_whitespace(None) == ""


# --- to_slug ---

class TestToSlug:
    def test_simple(self):
        assert to_slug("Court of Ash") == "court-of-ash"

    def test_punctuation_runs(self):
        assert to_slug("  The Old Gods' Court ") == "the-old-gods-court"

    def test_only_symbols(self):
        assert to_slug("!!!") == ""

    def test_none(self):
        assert to_slug(None) == ""


# --- truncate_at_word ---

class TestTruncateAtWord:
    def test_short_text_untouched(self):
        assert truncate_at_word("A short tale.", 240) == "A short tale."

    def test_long_text_cut_on_word(self):
        text = "word " * 100
        result = truncate_at_word(text, 240)
        assert len(result) <= 240
        assert result.endswith("…")
        assert result[:-1].split(" ")[-1] == "word"

    def test_single_line(self):
        result = truncate_at_word("line one\nline two", 240)
        assert "\n" not in result


# --- split_sentences ---

class TestSplitSentences:
    def test_keeps_punctuation(self):
        assert split_sentences("One. Two! Three?") == ["One.", "Two!", "Three?"]

    def test_trailing_fragment(self):
        assert split_sentences("Done. Not finished") == ["Done.", "Not finished"]

    def test_empty(self):
        assert split_sentences(None) == []


# --- numbers ---

class TestRoundHalfUp:
    def test_halves_round_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4

    def test_negative_halves_round_toward_positive(self):
        assert round_half_up(-2.5) == -2

    def test_below_half(self):
        assert round_half_up(0.49) == 0


class TestIsFalsyNumber:
    def test_zero_and_nan(self):
        assert is_falsy_number(0)
        assert is_falsy_number(math.nan)

    def test_positive(self):
        assert not is_falsy_number(0.1)


# --- collections ---

class TestNormaliseArray:
    def test_none(self):
        assert normalise_array(None) == []

    def test_string(self):
        assert normalise_array("  Voltline ") == ["Voltline"]
        assert normalise_array("   ") == []

    def test_list_drops_falsy(self):
        assert normalise_array(["a", "", None, "b"]) == ["a", "b"]


def test_unique_by_keeps_first_seen():
    items = [{"id": "a", "n": 1}, {"id": "b", "n": 2}, {"id": "a", "n": 3}]
    assert [item["n"] for item in unique_by(items, key=lambda item: item["id"])] == [1, 2]
