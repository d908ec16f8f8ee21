"""
English stop words for support-conversation text.

Common function words plus support-domain filler ("customer", "issue",
"help", ...) that appears in nearly every conversation and carries no
discriminative signal for similarity.
"""

from typing import FrozenSet

STOPLIST_VERSION = "stopwords-en-support-1.0"

STOP_WORDS: FrozenSet[str] = frozenset(
    {
        # Articles
        "a", "an", "the",
        # Prepositions
        "in", "on", "at", "to", "for", "of", "with", "from", "by", "about",
        # Pronouns
        "i", "you", "he", "she", "it", "we", "they", "me", "him", "her", "us", "them",
        "my", "your", "his", "its", "our", "their",
        # Auxiliary verbs
        "is", "are", "was", "were", "be", "been", "being",
        "have", "has", "had", "having",
        "do", "does", "did", "doing",
        "will", "would", "should", "could", "can", "may", "might",
        # Conjunctions and question words
        "and", "or", "but", "if", "when", "where", "why", "how",
        # Demonstratives and other function words
        "this", "that", "these", "those",
        "not", "no", "yes",
        "so", "than", "then",
        "there", "here",
        "what", "which", "who", "whom", "whose",
        # Support-domain filler
        "customer", "user", "issue", "problem", "help", "need", "needs",
        "please", "thanks", "thank", "hello", "hi",
    }
)
