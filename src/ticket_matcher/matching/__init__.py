"""
Similar-conversation matching (tag filtering + hybrid scoring).

Public API for ranking historical support conversations against the one
currently open.
"""

from .engine import (
    MATCHING_VERSION,
    MatchingEngine,
    find_similar_conversations,
    find_similar_conversations_from_source,
)
from .scoring import base_confidence, blend_confidence, rank_by_confidence
from .tag_filters import (
    category_prefix,
    filter_by_category_match,
    filter_by_exact_tag_match,
    filter_by_tags,
    required_tag_matches,
)

__all__ = [
    "MATCHING_VERSION",
    "MatchingEngine",
    "find_similar_conversations",
    "find_similar_conversations_from_source",
    "base_confidence",
    "blend_confidence",
    "rank_by_confidence",
    "required_tag_matches",
    "category_prefix",
    "filter_by_exact_tag_match",
    "filter_by_category_match",
    "filter_by_tags",
]
