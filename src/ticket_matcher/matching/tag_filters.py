"""
Tag-based candidate filtering.

Two tiers:
1. Exact match with X-1 tolerance: a candidate must carry most, but not
   necessarily all, of the current conversation's tags. The required count
   grows with the number of current tags.
2. Category fallback (only when tier 1 finds nothing): a candidate passes if
   any of its tags sits under the same two-level category as a current tag,
   e.g. "CX: Billing: LateFee" under "CX: Billing:" for "CX: Billing: Refund".

Neither tier ever falls back to the unfiltered pool.
"""

from typing import List, Optional, Sequence

import structlog

from ..models.conversation import CandidateRecord


logger = structlog.get_logger(__name__)

DEFAULT_ROOT_MARKER = "CX:"


def required_tag_matches(total_tags: int) -> int:
    """
    Number of exact tag matches a candidate needs (X-1 rule).

    | current tags | required |
    |--------------|----------|
    | 0, 1         | 1        |
    | 2            | 1        |
    | 3            | 2        |
    | 4+           | 3        |
    """
    if total_tags <= 2:
        return 1
    if total_tags == 3:
        return 2
    return 3


def count_exact_matches(current_tags: Sequence[str], candidate_tags: Sequence[str]) -> int:
    """Number of current tags that appear verbatim among candidate_tags."""
    candidate_set = set(candidate_tags)
    return sum(1 for tag in current_tags if tag in candidate_set)


def filter_by_exact_tag_match(
    candidates: Sequence[CandidateRecord], current_tags: Sequence[str]
) -> List[CandidateRecord]:
    """
    Keep candidates sharing at least required_tag_matches(len(current_tags)) tags.

    Args:
        candidates: Candidate pool, in pool order
        current_tags: Tags of the current conversation

    Returns:
        Passing candidates, pool order preserved
    """
    required = required_tag_matches(len(current_tags))

    survivors = []
    for candidate in candidates:
        match_count = count_exact_matches(current_tags, candidate.tags)
        passed = match_count >= required
        logger.debug(
            "exact_tag_match_checked",
            conversation_id=candidate.id,
            match_count=match_count,
            total_tags=len(current_tags),
            required=required,
            passed=passed,
        )
        if passed:
            survivors.append(candidate)

    return survivors


def category_prefix(tag: str) -> str:
    """
    Two-level category prefix of a hierarchical tag.

    Examples:
        >>> category_prefix("CX: Billing: Refund")
        'CX: Billing:'
        >>> category_prefix("CX:Billing:Refund")
        'CX: Billing:'
        >>> category_prefix("Billing")
        'Billing'
    """
    parts = [part.strip() for part in tag.split(":")]
    if len(parts) >= 2:
        return f"{parts[0]}: {parts[1]}:"
    return tag


def category_prefixes(
    current_tags: Sequence[str], root_marker: str = DEFAULT_ROOT_MARKER
) -> List[str]:
    """
    Category prefixes of the current tags that start with root_marker.

    Duplicates are dropped, first occurrence order kept.
    """
    prefixes = (category_prefix(tag) for tag in current_tags)
    return list(dict.fromkeys(p for p in prefixes if p.startswith(root_marker)))


def matches_category(candidate_tags: Sequence[str], prefixes: Sequence[str]) -> bool:
    """
    True if any candidate tag lies strictly under one of the prefixes.

    A tag equal to the bare prefix ("CX: Billing:") does not count.
    """
    return any(
        tag.startswith(prefix) and len(tag) > len(prefix)
        for tag in candidate_tags
        for prefix in prefixes
    )


def filter_by_category_match(
    candidates: Sequence[CandidateRecord],
    current_tags: Sequence[str],
    root_marker: str = DEFAULT_ROOT_MARKER,
) -> List[CandidateRecord]:
    """
    Fallback filter: keep candidates tagged within a current tag's category.

    Args:
        candidates: Candidate pool, in pool order
        current_tags: Tags of the current conversation
        root_marker: Prefixes not starting with this are discarded

    Returns:
        Passing candidates, pool order preserved (empty if no prefix survives)
    """
    prefixes = category_prefixes(current_tags, root_marker)

    if not prefixes:
        logger.debug("no_category_prefixes", current_tags=list(current_tags))
        return []

    return [c for c in candidates if matches_category(c.tags, prefixes)]


def filter_by_tags(
    candidates: Sequence[CandidateRecord],
    current_tags: Sequence[str],
    root_marker: str = DEFAULT_ROOT_MARKER,
) -> List[CandidateRecord]:
    """
    Apply the exact filter, then the category fallback if it found nothing.

    Args:
        candidates: Candidate pool
        current_tags: Tags of the current conversation (must be non-empty
            for any candidate to pass)
        root_marker: Root category marker for the fallback tier

    Returns:
        Surviving candidates in pool order, possibly empty
    """
    if not current_tags:
        return []

    survivors = filter_by_exact_tag_match(candidates, current_tags)
    tier = "exact"

    if not survivors:
        survivors = filter_by_category_match(candidates, current_tags, root_marker)
        tier = "category"

    logger.info(
        "tag_filter_applied",
        tier=tier,
        pool_size=len(candidates),
        survivors=len(survivors),
        required_matches=required_tag_matches(len(current_tags)),
    )

    return survivors


def has_root_tag(candidate: CandidateRecord, root_marker: Optional[str] = None) -> bool:
    """
    True if any of the candidate's tags contains the root marker (case-insensitive).

    Used to narrow a freshly loaded pool to customer-experience conversations.
    """
    marker = (root_marker or DEFAULT_ROOT_MARKER).lower()
    return any(marker in tag.lower() for tag in candidate.tags)
