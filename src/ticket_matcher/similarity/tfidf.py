"""
TF-IDF weighting and cosine similarity over extracted terms.

Documents are term lists produced by text_processor.extract_terms(); vectors
are sparse dicts term -> weight with zero weights omitted.

Formulas:
    TF(t, d)     = count(t in d) / |d|
    IDF(t, D)    = ln(|D| / |{d in D : t in d}|)
    TF-IDF       = TF * IDF
    cosine(A, B) = A.B / (|A| * |B|)

Every division is guarded: empty documents, empty corpora, unseen terms and
zero-magnitude vectors all yield exactly 0.0, never NaN or inf.

IDF depends on the whole corpus, so every comparison within one ranking pass
must use the same corpus.
"""

from typing import Dict, List, Optional, Sequence

import numpy as np

from ..models.matching import SimilarityMatch
from ..preprocessing.text_processor import extract_terms

# Version for audit trail
TFIDF_VERSION = "tfidf-1.0.0"

Document = Sequence[str]
Corpus = Sequence[Document]
Vector = Dict[str, float]


def calculate_tf(term: str, document: Document) -> float:
    """
    Term frequency of term within document.

    Examples:
        >>> calculate_tf("coverage", ["coverage", "report", "coverage", "export"])
        0.5
        >>> calculate_tf("coverage", [])
        0.0
    """
    if len(document) == 0:
        return 0.0
    return document.count(term) / len(document)


def calculate_idf(term: str, corpus: Corpus) -> float:
    """
    Inverse document frequency of term across corpus (natural log).

    Returns 0.0 for an empty corpus and for a term found in no document.
    A term present in every document also scores 0.0 (ln 1).

    Examples:
        >>> round(calculate_idf("backfill", [["backfill"], ["export"]]), 4)
        0.6931
    """
    if len(corpus) == 0:
        return 0.0

    documents_with_term = sum(1 for doc in corpus if term in doc)
    if documents_with_term == 0:
        return 0.0

    return float(np.log(len(corpus) / documents_with_term))


def calculate_tfidf(term: str, document: Document, corpus: Corpus) -> float:
    """TF-IDF weight of term in document, relative to corpus."""
    return calculate_tf(term, document) * calculate_idf(term, corpus)


def build_vector(document: Document, corpus: Corpus) -> Vector:
    """
    Build the sparse TF-IDF vector for a document.

    Only the document's unique terms are weighted; zero weights (terms in
    every corpus document, or absent from the corpus) are omitted.

    Args:
        document: Term list of the document
        corpus: Term lists used for IDF

    Returns:
        Dict term -> positive TF-IDF weight, in first-seen term order
    """
    vector: Vector = {}
    for term in dict.fromkeys(document):
        weight = calculate_tfidf(term, document, corpus)
        if weight > 0:
            vector[term] = weight
    return vector


def _magnitude(vector: Vector) -> float:
    values = np.fromiter(vector.values(), dtype=float, count=len(vector))
    return float(np.sqrt(np.dot(values, values)))


def cosine_similarity(vector_a: Vector, vector_b: Vector) -> float:
    """
    Cosine similarity of two sparse vectors.

    Returns 0.0 if either vector is empty or has zero magnitude. For the
    nonnegative vectors built here the result lies in [0, 1].

    Examples:
        >>> cosine_similarity({"coverage": 1.0}, {"coverage": 2.0})
        1.0
        >>> cosine_similarity({"coverage": 1.0}, {"export": 1.0})
        0.0
    """
    if not vector_a or not vector_b:
        return 0.0

    dot_product = sum(
        weight * vector_b[term] for term, weight in vector_a.items() if term in vector_b
    )

    magnitude_a = _magnitude(vector_a)
    magnitude_b = _magnitude(vector_b)
    if magnitude_a == 0 or magnitude_b == 0:
        return 0.0

    return float(dot_product / (magnitude_a * magnitude_b))


def calculate_text_similarity(text1: str, text2: str, corpus_texts: Sequence[str]) -> float:
    """
    Similarity of two raw texts in [0, 1].

    Process:
    1. Extract terms from both texts (0.0 if either has none)
    2. Extract terms from every corpus text
    3. Build both TF-IDF vectors against that corpus
    4. Cosine similarity

    Args:
        text1: First text (raw, may contain HTML)
        text2: Second text
        corpus_texts: All texts of the current ranking pass, for IDF

    Returns:
        Similarity score (0.0 = unrelated, 1.0 = same weighted term profile)

    Examples:
        >>> corpus = ["backfill job stuck", "export csv broken", "login sso loop"]
        >>> calculate_text_similarity("backfill stuck again", corpus[0], corpus) > 0
        True
        >>> calculate_text_similarity("the a an", corpus[0], corpus)
        0.0
    """
    terms1 = extract_terms(text1)
    terms2 = extract_terms(text2)

    if not terms1 or not terms2:
        return 0.0

    corpus = [extract_terms(text) for text in corpus_texts]

    vector1 = build_vector(terms1, corpus)
    vector2 = build_vector(terms2, corpus)

    similarity = cosine_similarity(vector1, vector2)
    return float(np.clip(similarity, 0.0, 1.0))


def _similarities(query_text: str, candidate_texts: Sequence[str]) -> List[float]:
    # The candidate list doubles as the IDF corpus
    return [
        calculate_text_similarity(query_text, candidate, candidate_texts)
        for candidate in candidate_texts
    ]


def find_most_similar(
    query_text: str, candidate_texts: Sequence[str]
) -> Optional[SimilarityMatch]:
    """
    Best-matching candidate for a query, using the candidates as corpus.

    Ties keep the earliest candidate. When nothing scores above zero the
    first candidate is returned with similarity 0.0.

    Args:
        query_text: Text to compare against
        candidate_texts: Candidate texts

    Returns:
        SimilarityMatch of the best candidate, or None for an empty list
    """
    if not candidate_texts:
        return None

    best_index = 0
    best_similarity = 0.0

    for index, similarity in enumerate(_similarities(query_text, candidate_texts)):
        if similarity > best_similarity:
            best_index = index
            best_similarity = similarity

    return SimilarityMatch(index=best_index, similarity=best_similarity)


def find_similar_above_threshold(
    query_text: str, candidate_texts: Sequence[str], threshold: float
) -> List[SimilarityMatch]:
    """
    All candidates whose similarity to the query is at least threshold.

    Args:
        query_text: Text to compare against
        candidate_texts: Candidate texts (also the IDF corpus)
        threshold: Minimum similarity (inclusive)

    Returns:
        Matches sorted by similarity descending; equal scores keep input order
    """
    matches = [
        SimilarityMatch(index=index, similarity=similarity)
        for index, similarity in enumerate(_similarities(query_text, candidate_texts))
        if similarity >= threshold
    ]
    matches.sort(key=lambda match: match.similarity, reverse=True)
    return matches
