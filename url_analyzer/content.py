"""
Content extraction: title and visible-text excerpt from decoded markup.

This is a regex approximation of what a browser shows, not a DOM walk:
lists, tables and other structure are flattened into one line of text.

Pipeline position: after the CharsetResolver, before the Summarizer.
Input:  DecodedDocument.text + hostname
Output: ExtractedContent (title, excerpt of at most MAX_EXCERPT_CHARS)
"""

import re

from .entities import decode_entities
from .schemas import ExtractedContent, MAX_EXCERPT_CHARS
from .logger import get_module_logger

logger = get_module_logger("content")


# Patterns never scan past the next "<" inside a tag, so markup full of
# unclosed "<" stays linear. An unclosed <script>/<style> runs to the end of
# the document, as it does in a browser.
TITLE_PATTERN = re.compile(r'<title[^<>]*>([^<]*)</title\s*>', re.IGNORECASE)
SCRIPT_PATTERN = re.compile(r'<script[^<>]*>(?:.*?</script\s*>|.*\Z)', re.IGNORECASE | re.DOTALL)
STYLE_PATTERN = re.compile(r'<style[^<>]*>(?:.*?</style\s*>|.*\Z)', re.IGNORECASE | re.DOTALL)
TAG_PATTERN = re.compile(r'<[^<>]+>')
WHITESPACE_PATTERN = re.compile(r'\s+')


def _collapse(text: str) -> str:
    return WHITESPACE_PATTERN.sub(' ', text).strip()


def extract_title(html: str, hostname: str) -> str:
    """
    Text of the first <title> element, entity-decoded.

    Falls back to the hostname when there is no title or it is blank.
    """
    m = TITLE_PATTERN.search(html)
    if not m:
        return hostname

    title = decode_entities(_collapse(m.group(1)))
    return title.strip() or hostname


def extract_body(html: str) -> str:
    """
    Visible-text excerpt of the document.

    Scripts and styles are dropped with their contents, remaining tags become
    spaces, whitespace is collapsed. The result is cut to MAX_EXCERPT_CHARS
    *before* entity decoding; decoding only ever shortens the text, so the cap
    still holds afterwards.
    """
    text = SCRIPT_PATTERN.sub('', html)
    text = STYLE_PATTERN.sub('', text)
    text = TAG_PATTERN.sub(' ', text)
    text = _collapse(text)[:MAX_EXCERPT_CHARS]
    return decode_entities(text)


def extract(html: str, hostname: str) -> ExtractedContent:
    """Title and excerpt of one document."""
    content = ExtractedContent(
        title=extract_title(html, hostname),
        excerpt=extract_body(html)
    )
    logger.debug(f"Extracted title {content.title!r}, {len(content.excerpt)} chars of text")
    return content
