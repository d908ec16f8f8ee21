"""
Engine version model for reproducible rankings.

Same versions + same inputs = same ranked output.
"""

from pydantic import BaseModel, Field


class EngineVersion(BaseModel):
    """Immutable record of the component versions that produced a ranking."""

    text_processor_version: str = Field(description="Normalization/tokenization rules")
    stoplist_version: str = Field(description="Stop-word list version")
    tfidf_version: str = Field(description="TF-IDF and cosine similarity implementation")
    matching_version: str = Field(description="Tag filter and hybrid scoring rules")

    model_config = {"frozen": True}

    def to_repr(self) -> str:
        """Compact representation for logging."""
        return f"Engine-{self.matching_version}-{self.tfidf_version}-{self.stoplist_version}"
