# Data models for the ticket matching engine

from .conversation import CandidateRecord, MatchRequest
from .engine_version import EngineVersion
from .matching import MAX_MATCHED_KEYWORDS, MAX_RESULTS, MatchResult, SimilarityMatch

__all__ = [
    "CandidateRecord",
    "MatchRequest",
    "MatchResult",
    "SimilarityMatch",
    "EngineVersion",
    "MAX_MATCHED_KEYWORDS",
    "MAX_RESULTS",
]
