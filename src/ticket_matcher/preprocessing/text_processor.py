"""
Text preprocessing for TF-IDF conversation matching.

Turns raw conversation text (possibly HTML, with links and email addresses)
into a sequence of meaningful terms:
- normalize: lowercase, strip markup/URLs/emails/punctuation, collapse whitespace
- tokenize: split, drop 1-char and digit-only tokens
- remove_stop_words: drop function words and support filler

All functions are pure and never raise on malformed input; they degrade to
empty output instead.
"""

import re
from collections import Counter
from typing import AbstractSet, Dict, Iterable, List, Optional

from .stopwords import STOP_WORDS

# Version for audit trail
TEXT_PROCESSOR_VERSION = "text-processor-1.0.0"

_HTML_TAG_RE = re.compile(r"<[^>]*>")
_URL_RE = re.compile(r"https?://\S+")
_WWW_RE = re.compile(r"www\.\S+")
_EMAIL_RE = re.compile(r"[\w.-]+@[\w.-]+\.\w+")
_DISALLOWED_CHARS_RE = re.compile(r"[^a-z0-9\s']")
_WHITESPACE_RE = re.compile(r"\s+")
_DIGITS_ONLY_RE = re.compile(r"^\d+$")

MIN_TOKEN_LENGTH = 2


def normalize(text: Optional[str]) -> str:
    """
    Normalize raw text for analysis.

    Steps:
    1. Lowercase
    2. Replace HTML tags with a space
    3. Replace URLs (http://, https://, www.) with a space
    4. Replace email addresses with a space
    5. Replace everything except [a-z0-9], whitespace and apostrophes with a space
    6. Collapse whitespace and trim

    Args:
        text: Raw text (None or blank yields "")

    Returns:
        Normalized text

    Examples:
        >>> normalize("<p>Hello World!</p>")
        'hello world'
        >>> normalize("Visit https://example.com today")
        'visit today'
    """
    if not text or not text.strip():
        return ""

    normalized = text.lower()
    normalized = _HTML_TAG_RE.sub(" ", normalized)
    normalized = _URL_RE.sub(" ", normalized)
    normalized = _WWW_RE.sub(" ", normalized)
    normalized = _EMAIL_RE.sub(" ", normalized)
    # Apostrophes survive so contractions stay one token (can't, don't)
    normalized = _DISALLOWED_CHARS_RE.sub(" ", normalized)
    normalized = _WHITESPACE_RE.sub(" ", normalized)

    return normalized.strip()


def tokenize(normalized_text: Optional[str]) -> List[str]:
    """
    Split normalized text into word tokens.

    Drops empty tokens, tokens shorter than 2 characters and digit-only tokens.

    Args:
        normalized_text: Output of normalize()

    Returns:
        List of tokens in text order

    Examples:
        >>> tokenize("test 123 abc x")
        ['test', 'abc']
    """
    if not normalized_text or not normalized_text.strip():
        return []

    return [
        token
        for token in normalized_text.split()
        if len(token) >= MIN_TOKEN_LENGTH and not _DIGITS_ONLY_RE.match(token)
    ]


def remove_stop_words(
    tokens: Iterable[str], stop_words: Optional[AbstractSet[str]] = None
) -> List[str]:
    """
    Remove stop words from a token sequence.

    Args:
        tokens: Tokens to filter
        stop_words: Custom stop-word set (default: STOP_WORDS)

    Returns:
        Tokens not in the stop-word set, order preserved

    Examples:
        >>> remove_stop_words(["the", "customer", "had", "an", "export", "error"])
        ['export', 'error']
    """
    if stop_words is None:
        stop_words = STOP_WORDS
    return [token for token in tokens if token not in stop_words]


def extract_terms(text: Optional[str]) -> List[str]:
    """
    Extract meaningful terms from raw text.

    This is the single entry point used by similarity scoring and keyword
    extraction: remove_stop_words(tokenize(normalize(text))).

    Args:
        text: Raw text

    Returns:
        Ordered list of terms (duplicates kept)

    Examples:
        >>> extract_terms("<p>The customer had an issue with the coverage report.</p>")
        ['coverage', 'report']
    """
    return remove_stop_words(tokenize(normalize(text)))


def extract_terms_with_frequency(text: Optional[str]) -> Dict[str, int]:
    """
    Term -> occurrence count, in first-seen order.

    Examples:
        >>> extract_terms_with_frequency("report export report coverage")
        {'report': 2, 'export': 1, 'coverage': 1}
    """
    return dict(Counter(extract_terms(text)))


def extract_unique_terms(text: Optional[str]) -> List[str]:
    """
    Deduplicated terms in first-seen order.

    Examples:
        >>> extract_unique_terms("report export report coverage")
        ['report', 'export', 'coverage']
    """
    return list(dict.fromkeys(extract_terms(text)))
