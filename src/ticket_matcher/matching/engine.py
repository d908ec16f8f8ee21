"""
Matching engine orchestrating the similar-conversation pipeline.

Coordinates:
1. Tag gate (no current tags -> no matches)
2. Tag filtering (exact X-1 match, then category fallback)
3. Truncation to max_results in pool order
4. Hybrid scoring (tag rank + TF-IDF text similarity)
5. Result assembly (summary, keywords, link)
6. Optional re-sort by final confidence

The engine holds configuration and collaborators only; every call builds
its corpus and results from scratch.
"""

import time
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Union

import structlog
from pydantic import ValidationError

from ..config import Settings, settings as default_settings
from ..models.conversation import CandidateRecord
from ..models.matching import MatchResult
from ..similarity.tfidf import calculate_text_similarity
from .conversation_parser import (
    build_external_url,
    extract_customer_name,
    extract_matched_keywords,
    extract_summary,
)
from .scoring import base_confidence, blend_confidence, rank_by_confidence
from .tag_filters import filter_by_tags, has_root_tag


logger = structlog.get_logger(__name__)

# Version for audit trail
MATCHING_VERSION = "matching-1.0.0"

# Record enrichment collaborator: returns the text to compare for a candidate
TextLoader = Callable[[CandidateRecord], str]
# Candidate pool source (API client, cache, file)
PoolLoader = Callable[[], Iterable[Union[CandidateRecord, Mapping[str, Any]]]]


def record_text(record: CandidateRecord) -> str:
    """Default text loader: the text already carried by the record."""
    return record.text


# ============================================================================
# MATCHING ENGINE
# ============================================================================

class MatchingEngine:
    """
    Ranks historical conversations against the current one.

    Stateless across calls: inputs are never mutated and nothing is cached.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        text_loader: Optional[TextLoader] = None,
    ):
        """
        Initialize engine.

        Args:
            settings: Scoring configuration (default: global settings)
            text_loader: Supplies each candidate's text; exceptions it raises
                are contained to that candidate (default: record.text)
        """
        self.settings = settings if settings is not None else default_settings
        self.text_loader = text_loader if text_loader is not None else record_text
        self.logger = logger.bind(engine="MatchingEngine")

    def match(
        self,
        current_tags: Optional[Sequence[str]],
        current_text: Optional[str],
        candidate_pool: Sequence[CandidateRecord],
    ) -> List[MatchResult]:
        """
        Find conversations similar to the current one.

        Args:
            current_tags: Tags of the current conversation (empty -> no matches)
            current_text: Text of the current conversation (may contain HTML)
            candidate_pool: Historical conversations, in pool order

        Returns:
            Up to max_results MatchResults, in tag-filtered pool order unless
            sort_by_confidence is enabled
        """
        start_time = time.time()
        current_tags = list(current_tags or [])
        current_text = current_text or ""

        if not current_tags:
            self.logger.info("matching_skipped_no_tags", pool_size=len(candidate_pool))
            return []

        survivors = filter_by_tags(
            candidate_pool, current_tags, root_marker=self.settings.category_root_marker
        )
        if not survivors:
            self.logger.info(
                "no_tag_matches",
                current_tags=current_tags,
                pool_size=len(candidate_pool),
            )
            return []

        use_tfidf = self.settings.enable_tfidf_scoring and bool(current_text.strip())
        limit = self.settings.max_results

        # With TF-IDF the corpus covers every tag-filter survivor, not just the
        # shown ones; without it only the shown texts are loaded
        to_load = survivors if use_tfidf else survivors[:limit]
        texts = [self._load_text(record) for record in to_load]
        corpus = [text or "" for text in texts] if use_tfidf else []

        matches = [
            self._build_match(position, record, text, current_text, corpus, use_tfidf)
            for position, (record, text) in enumerate(zip(survivors[:limit], texts[:limit]))
        ]

        if self.settings.sort_by_confidence:
            matches = rank_by_confidence(matches)

        self.logger.info(
            "matching_completed",
            pool_size=len(candidate_pool),
            survivors=len(survivors),
            results=len(matches),
            tfidf_enabled=use_tfidf,
            sorted_by_confidence=self.settings.sort_by_confidence,
            latency_ms=round((time.time() - start_time) * 1000, 2),
        )

        return matches

    def match_from_source(
        self,
        current_tags: Optional[Sequence[str]],
        current_text: Optional[str],
        pool_loader: PoolLoader,
    ) -> List[MatchResult]:
        """
        Load the candidate pool from a collaborator, then match.

        A failing pool loader yields no matches rather than an exception.
        Entries that do not validate as CandidateRecord are skipped.

        Args:
            current_tags: Tags of the current conversation
            current_text: Text of the current conversation
            pool_loader: Zero-argument callable returning records or dicts

        Returns:
            Same as match()
        """
        if not current_tags:
            self.logger.info("matching_skipped_no_tags")
            return []

        try:
            raw_pool = list(pool_loader())
        except Exception as e:
            self.logger.error("pool_retrieval_failed", error=str(e))
            return []

        pool = self._validate_pool(raw_pool)

        if self.settings.require_root_tag_in_pool:
            root_marker = self.settings.category_root_marker
            narrowed = [record for record in pool if has_root_tag(record, root_marker)]
            self.logger.debug(
                "pool_narrowed_to_root_tag",
                root_marker=root_marker,
                before=len(pool),
                after=len(narrowed),
            )
            pool = narrowed

        return self.match(current_tags, current_text, pool)

    def _validate_pool(
        self, raw_pool: Iterable[Union[CandidateRecord, Mapping[str, Any]]]
    ) -> List[CandidateRecord]:
        pool = []
        for index, entry in enumerate(raw_pool):
            if isinstance(entry, CandidateRecord):
                pool.append(entry)
                continue
            try:
                pool.append(CandidateRecord.model_validate(entry))
            except ValidationError as e:
                self.logger.warning(
                    "candidate_record_invalid",
                    index=index,
                    errors=e.error_count(),
                )
        return pool

    def _load_text(self, record: CandidateRecord) -> Optional[str]:
        try:
            return self.text_loader(record)
        except Exception as e:
            self.logger.warning(
                "candidate_text_failed",
                conversation_id=record.id,
                error=str(e),
            )
            return None

    def _build_match(
        self,
        position: int,
        record: CandidateRecord,
        text: Optional[str],
        current_text: str,
        corpus: List[str],
        use_tfidf: bool,
    ) -> MatchResult:
        base = base_confidence(position, step=self.settings.confidence_step)
        confidence = base

        if use_tfidf and text and text.strip():
            try:
                similarity = calculate_text_similarity(current_text, text, corpus)
                confidence = blend_confidence(
                    base,
                    similarity,
                    tag_weight=self.settings.tag_weight,
                    tfidf_weight=self.settings.tfidf_weight,
                )
                self.logger.debug(
                    "candidate_scored",
                    conversation_id=record.id,
                    base_confidence=base,
                    text_similarity=round(similarity, 4),
                    confidence=confidence,
                )
            except Exception as e:
                self.logger.warning(
                    "text_similarity_failed",
                    conversation_id=record.id,
                    error=str(e),
                )
                confidence = base

        display_text = text if text is not None else record.text

        return MatchResult(
            conversation_id=record.id,
            customer_name=extract_customer_name(record),
            summary=extract_summary(
                record, display_text, max_length=self.settings.summary_max_length
            ),
            confidence=confidence,
            matched_keywords=extract_matched_keywords(
                display_text, limit=self.settings.max_matched_keywords
            ),
            external_url=build_external_url(
                record.id, self.settings.conversation_url_template
            ),
            message_count=record.message_count,
        )


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

def find_similar_conversations(
    current_tags: Optional[Sequence[str]],
    current_text: Optional[str],
    candidate_pool: Sequence[CandidateRecord],
    settings: Optional[Settings] = None,
    text_loader: Optional[TextLoader] = None,
) -> List[MatchResult]:
    """
    Rank a candidate pool against the current conversation.

    This is the main library entry point.

    Example:
        >>> pool = [CandidateRecord(id="1", tags=["CX: Billing: Refund"], text="refund delayed")]
        >>> results = find_similar_conversations(["CX: Billing: Refund"], "refund not received", pool)
        >>> results[0].conversation_id
        '1'
    """
    engine = MatchingEngine(settings=settings, text_loader=text_loader)
    return engine.match(current_tags, current_text, candidate_pool)


def find_similar_conversations_from_source(
    current_tags: Optional[Sequence[str]],
    current_text: Optional[str],
    pool_loader: PoolLoader,
    settings: Optional[Settings] = None,
    text_loader: Optional[TextLoader] = None,
) -> List[MatchResult]:
    """
    Load the pool via pool_loader and rank it; loader failures yield [].
    """
    engine = MatchingEngine(settings=settings, text_loader=text_loader)
    return engine.match_from_source(current_tags, current_text, pool_loader)
