"""
Data models for matching output.

MatchResult is the per-conversation output contract consumed by the overlay;
SimilarityMatch is the lightweight (index, similarity) pair returned by the
TF-IDF search helpers.
"""

from dataclasses import dataclass
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Output limits shared with Settings bounds
MAX_RESULTS = 5
MAX_MATCHED_KEYWORDS = 3


class MatchResult(BaseModel):
    """
    A ranked similar conversation.

    Serialize with ``model_dump(by_alias=True)`` for the camelCase wire shape.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    conversation_id: str
    customer_name: str
    summary: str
    confidence: int = Field(ge=0, le=100, description="Hybrid confidence, 0-100")
    matched_keywords: List[str] = Field(default_factory=list, max_length=MAX_MATCHED_KEYWORDS)
    external_url: str
    message_count: int = Field(default=0, ge=0)


@dataclass(frozen=True)
class SimilarityMatch:
    """Position of a candidate text and its cosine similarity to the query."""

    index: int
    similarity: float
