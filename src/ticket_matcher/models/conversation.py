"""
Data models for historical support conversations and the current request.

Candidate records are supplied by an external collaborator (API client,
cache, or admin-page enrichment) and are treated as read-only input.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CandidateRecord(BaseModel):
    """
    A historical conversation eligible for comparison.

    Accepts both snake_case and camelCase keys (displayName, messageCount).
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(description="Conversation identifier in the support inbox")
    tags: List[str] = Field(
        default_factory=list,
        description="Hierarchical colon-delimited tags, e.g. 'CX: Billing: Refund'",
    )
    text: str = Field(default="", description="Conversation body (may contain HTML)")
    display_name: Optional[str] = Field(default=None, description="Customer display name")
    message_count: int = Field(default=0, description="Number of conversation parts", ge=0)
    subject: Optional[str] = Field(default=None, description="Conversation subject/title")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # Inbox APIs return numeric ids in some payloads
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _none_tags_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("text", mode="before")
    @classmethod
    def _none_text_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class MatchRequest(BaseModel):
    """The currently open conversation: its tags and text."""

    tags: List[str] = Field(default_factory=list)
    text: str = Field(default="")
