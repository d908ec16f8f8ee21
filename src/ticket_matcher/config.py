"""
Matching engine configuration management.

This module handles configuration from environment variables using Pydantic Settings.
"""

import numpy as np
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

from .models.matching import MAX_MATCHED_KEYWORDS, MAX_RESULTS


class Settings(BaseSettings):
    """
    Matching configuration from environment variables.

    All settings can be overridden via environment variables with the same name.
    Output limits can only be lowered: results never exceed MAX_RESULTS and
    keywords never exceed MAX_MATCHED_KEYWORDS.
    """

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Hybrid scoring weights (tag rank vs. text similarity), must sum to 1.0
    enable_tfidf_scoring: bool = True
    tag_weight: float = Field(default=0.7, ge=0.0, le=1.0)
    tfidf_weight: float = Field(default=0.3, ge=0.0, le=1.0)

    # Result shaping
    max_results: int = Field(default=MAX_RESULTS, ge=1, le=MAX_RESULTS)
    confidence_step: int = Field(default=5, ge=0)  # base confidence drop per position
    max_matched_keywords: int = Field(
        default=MAX_MATCHED_KEYWORDS, ge=0, le=MAX_MATCHED_KEYWORDS
    )
    summary_max_length: int = Field(default=100, ge=1)

    # Re-rank results by final confidence instead of keeping pool order
    sort_by_confidence: bool = False

    # Tag filtering
    category_root_marker: str = "CX:"
    require_root_tag_in_pool: bool = True  # only applies to match_from_source

    # Link back to the conversation in the support inbox
    conversation_url_template: str = (
        "https://app.intercom.com/a/inbox/_/inbox/conversation/{conversation_id}"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    @model_validator(mode="after")
    def _check_weight_sum(self) -> "Settings":
        weight_sum = self.tag_weight + self.tfidf_weight
        if not np.isclose(weight_sum, 1.0):
            raise ValueError(
                f"tag_weight + tfidf_weight must sum to 1.0, got {weight_sum}"
            )
        return self


# Global settings instance
settings = Settings()
