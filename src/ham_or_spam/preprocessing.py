"""Tokenization and term normalization for message classification.

Messages are split on the single-space character only; no other
whitespace is treated as a delimiter. Each raw token is then normalized
into a *term*:

- every character that is not an ASCII letter or digit is removed
- the remainder is lowercased
- an all-digit remainder is replaced by a length bucket token, so phone
  numbers, zip codes and IDs of the same shape share one term

Punctuation-only tokens normalize to the empty string and are counted
like any other term.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

TERM_DELIMITER = " "
DIGIT_BUCKET_PREFIX = "digits"

_NON_ALNUM_RE = re.compile(r"[^0-9a-zA-Z]")
_ALL_DIGITS_RE = re.compile(r"[0-9]+")


def split_terms(message: str) -> list[str]:
    """Split a message into raw tokens on the single-space delimiter.

    Consecutive spaces and leading/trailing spaces produce empty tokens,
    and an empty message yields one empty token.
    """
    return message.split(TERM_DELIMITER)


def digit_bucket(length: int) -> str:
    """Return the synthetic term standing for a run of ``length`` digits."""
    return f"{DIGIT_BUCKET_PREFIX}{length}"


def normalize_term(term: str) -> str:
    """Normalize a raw token into the term used for counting.

    The digit bucket is keyed on the length of the *original* token, so
    ``"555-1234"`` and ``"12345678"`` land in the same bucket.

    Examples::

        >>> normalize_term("Hello&^World!!1")
        'helloworld1'
        >>> normalize_term("12345") == normalize_term("98765")
        True
        >>> normalize_term("!!!")
        ''
    """
    normalized = _NON_ALNUM_RE.sub("", term).lower()
    if _ALL_DIGITS_RE.fullmatch(normalized):
        return digit_bucket(len(term))
    return normalized


def normalize_message(message: str) -> list[str]:
    """Split and normalize every token of a message."""
    return [normalize_term(token) for token in split_terms(message)]
