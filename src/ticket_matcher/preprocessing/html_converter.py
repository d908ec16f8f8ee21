"""
HTML to display-text conversion.

Conversation bodies from the support inbox arrive as HTML fragments. This
module renders them to single-line plain text for result summaries using
html2text. Similarity scoring does not go through here; it uses the cheaper
tag stripping inside text_processor.normalize().
"""

import html as html_module
import re

import html2text

_WHITESPACE_RE = re.compile(r"\s+")


def html_to_text(html: str) -> str:
    """
    Convert an HTML conversation body to plain text on a single line.

    Links, images and emphasis markers are dropped; whitespace is collapsed.

    Args:
        html: HTML content (plain text passes through unchanged apart from
            whitespace collapsing)

    Returns:
        Plain text representation
    """
    if not html:
        return ""

    converter = html2text.HTML2Text()
    converter.ignore_links = True
    converter.ignore_images = True
    converter.ignore_emphasis = True
    converter.body_width = 0  # Don't wrap lines
    converter.unicode_snob = True

    try:
        text = converter.handle(html)
    except Exception:
        # html2text chokes on some malformed fragments
        text = strip_html_tags(html)

    return _WHITESPACE_RE.sub(" ", text).strip()


def strip_html_tags(html: str) -> str:
    """
    Regex tag stripping (fallback when html2text fails).

    Args:
        html: HTML content

    Returns:
        Text with script/style blocks and tags removed, entities decoded
    """
    if not html:
        return ""

    html = re.sub(r"<script[^>]*>.*?</script>", "", html, flags=re.DOTALL | re.IGNORECASE)
    html = re.sub(r"<style[^>]*>.*?</style>", "", html, flags=re.DOTALL | re.IGNORECASE)
    text = re.sub(r"<[^>]+>", " ", html)
    text = html_module.unescape(text)

    return _WHITESPACE_RE.sub(" ", text).strip()


def truncate_text(text: str, max_length: int, suffix: str = "...") -> str:
    """
    Cut text to max_length characters, appending suffix when shortened.

    Examples:
        >>> truncate_text("abcdef", 3)
        'abc...'
        >>> truncate_text("abc", 3)
        'abc'
    """
    if len(text) <= max_length:
        return text
    return text[:max_length] + suffix
