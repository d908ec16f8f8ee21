"""
Display fields for matched conversations.

Centralizes how a candidate record is presented in results: customer name,
short summary, matched keywords and a link back to the inbox.
"""

from typing import List, Optional

from ..models.conversation import CandidateRecord
from ..preprocessing.html_converter import html_to_text, truncate_text
from ..preprocessing.text_processor import extract_unique_terms

UNKNOWN_CUSTOMER = "Unknown Customer"
NO_SUMMARY = "No summary available"


def extract_customer_name(record: CandidateRecord) -> str:
    """Display name of the customer, or 'Unknown Customer'."""
    if record.display_name and record.display_name.strip():
        return record.display_name.strip()
    return UNKNOWN_CUSTOMER


def extract_summary(
    record: CandidateRecord, text: Optional[str] = None, max_length: int = 100
) -> str:
    """
    Short summary of a conversation.

    Preference order:
    1. Subject line
    2. Body rendered to plain text, truncated to max_length (+ "...")
    3. "No summary available"

    Args:
        record: Candidate record
        text: Body text to summarize (default: record.text)
        max_length: Maximum body characters before truncation

    Returns:
        Summary string
    """
    if record.subject and record.subject.strip():
        return record.subject.strip()

    body = html_to_text(record.text if text is None else text)
    if body:
        return truncate_text(body, max_length)

    return NO_SUMMARY


def extract_matched_keywords(text: Optional[str], limit: int = 3) -> List[str]:
    """
    First `limit` distinct meaningful terms of a conversation text.

    Examples:
        >>> extract_matched_keywords("Backfill job stuck, backfill never finishes")
        ['backfill', 'job', 'stuck']
    """
    return extract_unique_terms(text)[:limit]


def build_external_url(conversation_id: str, template: str) -> str:
    """
    Inbox URL for a conversation.

    Args:
        conversation_id: Conversation identifier
        template: URL template with a {conversation_id} placeholder

    Returns:
        Formatted URL
    """
    return template.format(conversation_id=conversation_id)
