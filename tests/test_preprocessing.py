"""Tests for message tokenization and term normalization."""

from __future__ import annotations

import pytest

from ham_or_spam.preprocessing import (
    digit_bucket,
    normalize_message,
    normalize_term,
    split_terms,
)


# ---------------------------------------------------------------------------
# split_terms
# ---------------------------------------------------------------------------

class TestSplitTerms:
    """Tests for single-space tokenization."""

    def test_splits_on_single_space(self):
        assert split_terms("buy viagra now") == ["buy", "viagra", "now"]

    def test_empty_message_yields_one_empty_token(self):
        assert split_terms("") == [""]

    def test_double_space_yields_empty_token(self):
        assert split_terms("hello  world") == ["hello", "", "world"]

    def test_tabs_are_not_delimiters(self):
        assert split_terms("hello\tworld") == ["hello\tworld"]


# ---------------------------------------------------------------------------
# normalize_term
# ---------------------------------------------------------------------------

class TestNormalizeTerm:
    """Tests for character stripping, lowercasing and digit bucketing."""

    def test_lowercases(self):
        assert normalize_term("HeLLo") == "hello"

    def test_strips_symbols(self):
        assert normalize_term("Hello&^World!!1") == "helloworld1"

    def test_case_and_symbols_collapse_to_same_term(self):
        assert normalize_term("Hello&^World!!1") == normalize_term("helloworld1")

    def test_punctuation_only_becomes_empty(self):
        assert normalize_term("!!!") == ""
        assert normalize_term("") == ""

    def test_non_ascii_letters_are_stripped(self):
        assert normalize_term("café") == "caf"

    def test_equal_length_digits_share_bucket(self):
        assert normalize_term("12345") == normalize_term("98765")

    def test_different_length_digits_differ(self):
        assert normalize_term("123") != normalize_term("12345")

    def test_digit_bucket_token(self):
        assert normalize_term("80086") == digit_bucket(5) == "digits5"

    def test_bucket_uses_original_token_length(self):
        """Punctuation inside a number still counts toward the bucket length."""
        assert normalize_term("555-1234") == "digits8"
        assert normalize_term("555-1234") == normalize_term("12345678")

    def test_mixed_letters_and_digits_are_not_bucketed(self):
        assert normalize_term("win2day") == "win2day"

    @pytest.mark.parametrize("term", [
        "Hello&^World!!1",
        "12345",
        "555-1234",
        "!!!",
        "",
        "digits5",
        "FREE!!",
        "£1000",
    ])
    def test_idempotent(self, term):
        once = normalize_term(term)
        assert normalize_term(once) == once


def test_normalize_message():
    assert normalize_message("") == [""]
    assert normalize_message("Call 555-1234 NOW!") == ["call", "digits8", "now"]
