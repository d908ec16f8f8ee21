"""
Unit tests for data models, settings and engine versioning.

Tests coverage:
- CandidateRecord key aliases and coercions
- MatchResult bounds and camelCase serialization
- Settings defaults and overrides
- EngineVersion immutability
"""

import pytest
from pydantic import ValidationError

from ticket_matcher.config import Settings
from ticket_matcher.models.conversation import CandidateRecord, MatchRequest
from ticket_matcher.models.matching import (
    MAX_MATCHED_KEYWORDS,
    MAX_RESULTS,
    MatchResult,
    SimilarityMatch,
)
from ticket_matcher.version import PACKAGE_VERSION, get_current_engine_version
from tests.fixtures.conversations import HTML_ONLY_RECORD, REFUND_POOL


def _result(**overrides) -> MatchResult:
    fields = dict(
        conversation_id="1001",
        customer_name="Ada Lovelace",
        summary="Refund never arrived",
        confidence=88,
        matched_keywords=["refund", "never", "arrived"],
        external_url="https://inbox.example/1001",
        message_count=6,
    )
    fields.update(overrides)
    return MatchResult(**fields)


# ============================================================================
# Test Class: CandidateRecord
# ============================================================================


@pytest.mark.unit
class TestCandidateRecord:
    """Validation of historical conversation records."""

    def test_camel_case_keys(self):
        record = CandidateRecord.model_validate(REFUND_POOL[0])
        assert record.display_name == "Ada Lovelace"
        assert record.message_count == 6

    def test_snake_case_keys(self):
        record = CandidateRecord(id="1", display_name="Grace", message_count=2)
        assert record.display_name == "Grace"

    def test_numeric_id_coerced(self):
        record = CandidateRecord.model_validate(HTML_ONLY_RECORD)
        assert record.id == "4001"

    def test_defaults(self):
        record = CandidateRecord.model_validate(HTML_ONLY_RECORD)
        assert record.display_name is None
        assert record.subject is None
        assert record.message_count == 0

    def test_none_tags_and_text(self):
        record = CandidateRecord.model_validate({"id": "1", "tags": None, "text": None})
        assert record.tags == []
        assert record.text == ""

    def test_missing_id_rejected(self):
        with pytest.raises(ValidationError):
            CandidateRecord.model_validate({"tags": ["CX: Billing: Refund"]})

    def test_negative_message_count_rejected(self):
        with pytest.raises(ValidationError):
            CandidateRecord.model_validate({"id": "1", "messageCount": -1})

    def test_frozen(self):
        record = CandidateRecord(id="1")
        with pytest.raises(ValidationError):
            record.text = "changed"


@pytest.mark.unit
class TestMatchRequest:

    def test_defaults(self):
        request = MatchRequest.model_validate({})
        assert request.tags == []
        assert request.text == ""


# ============================================================================
# Test Class: MatchResult
# ============================================================================


@pytest.mark.unit
class TestMatchResult:
    """Output contract."""

    def test_by_alias_dump(self):
        dumped = _result().model_dump(by_alias=True)
        assert dumped["conversationId"] == "1001"
        assert dumped["customerName"] == "Ada Lovelace"
        assert dumped["matchedKeywords"] == ["refund", "never", "arrived"]
        assert dumped["externalUrl"] == "https://inbox.example/1001"
        assert dumped["messageCount"] == 6

    @pytest.mark.parametrize("confidence", [-1, 101])
    def test_confidence_bounds(self, confidence):
        with pytest.raises(ValidationError):
            _result(confidence=confidence)

    @pytest.mark.parametrize("confidence", [0, 100])
    def test_confidence_edges_accepted(self, confidence):
        assert _result(confidence=confidence).confidence == confidence

    def test_keyword_limit(self):
        with pytest.raises(ValidationError):
            _result(matched_keywords=[f"term{i}" for i in range(MAX_MATCHED_KEYWORDS + 1)])

    def test_similarity_match_is_frozen(self):
        match = SimilarityMatch(index=1, similarity=0.5)
        with pytest.raises(AttributeError):
            match.index = 2


# ============================================================================
# Test Class: Settings
# ============================================================================


@pytest.mark.unit
class TestSettings:
    """Configuration defaults and overrides."""

    def test_scoring_defaults(self):
        settings = Settings()
        assert settings.tag_weight == 0.7
        assert settings.tfidf_weight == 0.3
        assert settings.max_results == 5
        assert settings.confidence_step == 5
        assert settings.enable_tfidf_scoring is True
        assert settings.sort_by_confidence is False

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("MAX_RESULTS", "3")
        monkeypatch.setenv("ENABLE_TFIDF_SCORING", "false")
        settings = Settings()
        assert settings.max_results == 3
        assert settings.enable_tfidf_scoring is False

    def test_url_template_placeholder(self):
        assert "{conversation_id}" in Settings().conversation_url_template

    def test_output_limits_default_to_model_limits(self):
        settings = Settings()
        assert settings.max_results == MAX_RESULTS == 5
        assert settings.max_matched_keywords == MAX_MATCHED_KEYWORDS == 3

    @pytest.mark.parametrize("max_results", [0, MAX_RESULTS + 1])
    def test_max_results_out_of_range_rejected(self, max_results):
        with pytest.raises(ValidationError):
            Settings(max_results=max_results)

    def test_max_results_env_out_of_range_rejected(self, monkeypatch):
        monkeypatch.setenv("MAX_RESULTS", "8")
        with pytest.raises(ValidationError):
            Settings()

    @pytest.mark.parametrize("max_matched_keywords", [-1, MAX_MATCHED_KEYWORDS + 1])
    def test_max_matched_keywords_out_of_range_rejected(self, max_matched_keywords):
        with pytest.raises(ValidationError):
            Settings(max_matched_keywords=max_matched_keywords)

    def test_lower_limits_accepted(self):
        settings = Settings(max_results=1, max_matched_keywords=0)
        assert settings.max_results == 1
        assert settings.max_matched_keywords == 0

    @pytest.mark.parametrize(
        "tag_weight, tfidf_weight",
        [(0.7, 0.7), (0.5, 0.3), (1.2, -0.2)],
    )
    def test_weights_must_sum_to_one(self, tag_weight, tfidf_weight):
        with pytest.raises(ValidationError):
            Settings(tag_weight=tag_weight, tfidf_weight=tfidf_weight)

    def test_custom_weights_summing_to_one_accepted(self):
        settings = Settings(tag_weight=0.6, tfidf_weight=0.4)
        assert settings.tag_weight == 0.6
        assert settings.tfidf_weight == 0.4


# ============================================================================
# Test Class: EngineVersion
# ============================================================================


@pytest.mark.unit
class TestEngineVersion:

    def test_current_version_fields(self):
        version = get_current_engine_version()
        assert version.matching_version.startswith("matching-")
        assert version.tfidf_version
        assert version.stoplist_version
        assert version.text_processor_version

    def test_repr(self):
        version = get_current_engine_version()
        assert version.to_repr().startswith(f"Engine-{version.matching_version}")

    def test_frozen(self):
        version = get_current_engine_version()
        with pytest.raises(ValidationError):
            version.matching_version = "other"

    def test_package_version(self):
        assert PACKAGE_VERSION == "1.0.0"
