"""
Statistical text similarity (TF-IDF + cosine).
"""

from .tfidf import (
    TFIDF_VERSION,
    build_vector,
    calculate_idf,
    calculate_text_similarity,
    calculate_tf,
    calculate_tfidf,
    cosine_similarity,
    find_most_similar,
    find_similar_above_threshold,
)

__all__ = [
    "TFIDF_VERSION",
    "calculate_tf",
    "calculate_idf",
    "calculate_tfidf",
    "build_vector",
    "cosine_similarity",
    "calculate_text_similarity",
    "find_most_similar",
    "find_similar_above_threshold",
]
