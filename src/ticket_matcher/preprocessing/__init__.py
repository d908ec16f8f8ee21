"""
Text preprocessing module.

Term extraction for similarity scoring and HTML rendering for display.
"""

from .html_converter import html_to_text, strip_html_tags, truncate_text
from .stopwords import STOP_WORDS, STOPLIST_VERSION
from .text_processor import (
    TEXT_PROCESSOR_VERSION,
    extract_terms,
    extract_terms_with_frequency,
    extract_unique_terms,
    normalize,
    remove_stop_words,
    tokenize,
)

__all__ = [
    "TEXT_PROCESSOR_VERSION",
    "STOPLIST_VERSION",
    "STOP_WORDS",
    "normalize",
    "tokenize",
    "remove_stop_words",
    "extract_terms",
    "extract_terms_with_frequency",
    "extract_unique_terms",
    "html_to_text",
    "strip_html_tags",
    "truncate_text",
]
