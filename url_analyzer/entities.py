"""
HTML entity decoding.

Only the common named entities are known; numeric character references
(decimal and hex) are resolved when well-formed. Anything else is left as is.
The decode is a single regex pass, so "&amp;lt;" becomes "&lt;" and never "<".
"""

import re

NAMED_ENTITIES = {
    '&amp;': '&',
    '&lt;': '<',
    '&gt;': '>',
    '&quot;': '"',
    '&#39;': "'",
    '&apos;': "'",
    '&nbsp;': ' ',
}

ENTITY_PATTERN = re.compile(r'&#?[a-zA-Z0-9]+;')
DECIMAL_REF = re.compile(r'&#([0-9]+);')
HEX_REF = re.compile(r'&#[xX]([0-9a-fA-F]+);')

MAX_CODE_POINT = 0x10FFFF


def _code_point(value: int):
    """Character for a code point, or None for zero, surrogates and out-of-range values."""
    if value <= 0 or value > MAX_CODE_POINT or 0xD800 <= value <= 0xDFFF:
        return None
    return chr(value)


def _replace(match: re.Match) -> str:
    entity = match.group(0)

    named = NAMED_ENTITIES.get(entity)
    if named is not None:
        return named

    m = DECIMAL_REF.fullmatch(entity)
    if m:
        char = _code_point(int(m.group(1)))
        return char if char is not None else entity

    m = HEX_REF.fullmatch(entity)
    if m:
        char = _code_point(int(m.group(1), 16))
        return char if char is not None else entity

    return entity


def decode_entities(text: str) -> str:
    """Replace entity references in text with the characters they stand for. Never raises."""
    if not text or '&' not in text:
        return text
    return ENTITY_PATTERN.sub(_replace, text)
