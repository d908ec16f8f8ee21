"""
Version constants for the ticket matching engine.

Component versions live beside their implementations; bump them whenever
behavior changes so rankings stay reproducible across releases.
"""

from .matching.engine import MATCHING_VERSION
from .models.engine_version import EngineVersion
from .preprocessing.stopwords import STOPLIST_VERSION
from .preprocessing.text_processor import TEXT_PROCESSOR_VERSION
from .similarity.tfidf import TFIDF_VERSION

# Package version (keep in sync with pyproject.toml)
PACKAGE_VERSION = "1.0.0"


def get_current_engine_version() -> EngineVersion:
    """
    Get current engine version configuration.

    Returns:
        EngineVersion instance with current versions
    """
    return EngineVersion(
        text_processor_version=TEXT_PROCESSOR_VERSION,
        stoplist_version=STOPLIST_VERSION,
        tfidf_version=TFIDF_VERSION,
        matching_version=MATCHING_VERSION,
    )
