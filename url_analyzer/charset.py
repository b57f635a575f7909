"""
Charset resolution: raw response bytes → text.

Pipeline position: right after the Fetcher.
Input:  FetchResult.content (bytes) + Content-Type header value
Output: DecodedDocument (text + charset actually used)

Resolution order, first success wins:
  1. charset declared in the Content-Type header, strict decode
  2. fixed candidate list (UTF-8, then Japanese legacy encodings), strict
     decode, first output without U+FFFD wins
  3. lossy UTF-8 decode, which cannot fail
Then, whatever was chosen, a <meta charset> declared inside the document may
override it when it names a different, non-UTF-8 codec and decodes the
original bytes strictly without U+FFFD.

Every trial returns a DecodeAttempt instead of raising, so the chain reads as
a plain sequence of attempts.

Known limitation: a single-byte charset can map every byte of a short text
without producing U+FFFD, so a wrong guess may be accepted. No statistical
check is done on top of the placeholder test.
"""

import codecs
import re
from typing import Optional

from .schemas import DecodeAttempt, DecodedDocument
from .logger import get_module_logger

logger = get_module_logger("charset")


REPLACEMENT_CHAR = "�"

# Tried in this order when the header gives no usable charset.
CANDIDATE_CHARSETS = ("utf-8", "shift_jis", "euc-jp", "iso-2022-jp")

# WHATWG encoding spec: browsers silently remap these labels.
# https://encoding.spec.whatwg.org/#names-and-labels
# Decoding the way browsers do keeps the text identical to what the user saw.
WHATWG_CHARSET_MAP = {
    'iso-8859-1': 'windows-1252',
    'iso8859-1': 'windows-1252',
    'iso88591': 'windows-1252',
    'latin-1': 'windows-1252',
    'latin1': 'windows-1252',
    'us-ascii': 'windows-1252',
    'ascii': 'windows-1252',
    'iso-8859-9': 'windows-1254',
    'iso-8859-11': 'windows-874',
    'x-sjis': 'shift_jis',
    'sjis': 'shift_jis',
    'shift-jis': 'shift_jis',
    'ms_kanji': 'shift_jis',
    'windows-31j': 'cp932',
    'x-euc-jp': 'euc-jp',
}

HEADER_CHARSET_PATTERN = re.compile(r'charset=([^;]+)', re.IGNORECASE)
META_CHARSET_PATTERN = re.compile(r'<meta[^>]+charset=["\']?\s*([^\s"\';>]+)', re.IGNORECASE)


def normalize_label(label: str) -> str:
    """Lowercase, unquote and apply the WHATWG remapping to a charset label."""
    label = label.strip().strip('"\'').strip().lower()
    return WHATWG_CHARSET_MAP.get(label, label)


def codec_name(label: str) -> Optional[str]:
    """Canonical Python codec name for a label, or None if Python has no such codec."""
    try:
        return codecs.lookup(normalize_label(label)).name
    except LookupError:
        return None


def charset_from_content_type(content_type: Optional[str]) -> Optional[str]:
    """Extract the charset parameter from a Content-Type header value."""
    if not content_type:
        return None
    m = HEADER_CHARSET_PATTERN.search(content_type)
    if not m:
        return None
    label = m.group(1).strip().strip('"\'').strip()
    return label or None


def charset_from_meta(text: str) -> Optional[str]:
    """Find a <meta charset=...> or http-equiv charset declaration in decoded markup."""
    m = META_CHARSET_PATTERN.search(text)
    return m.group(1).strip().lower() if m else None


def try_decode(raw: bytes, label: str) -> DecodeAttempt:
    """Strictly decode raw with the given charset label."""
    name = codec_name(label)
    if name is None:
        return DecodeAttempt(charset=label, error=f"unknown charset: {label}")
    try:
        text = raw.decode(name, errors="strict")
    except UnicodeDecodeError as e:
        return DecodeAttempt(charset=name, error=str(e))
    return DecodeAttempt(charset=name, text=text)


def is_clean(attempt: DecodeAttempt) -> bool:
    """Successful attempt whose output has no placeholder characters."""
    return attempt.ok and REPLACEMENT_CHAR not in attempt.text


class CharsetResolver:
    """Picks the text decoding of a fetched document."""

    def __init__(self, candidates: tuple = CANDIDATE_CHARSETS):
        self.candidates = tuple(candidates)

    def resolve(self, raw: bytes, content_type: Optional[str] = None) -> DecodedDocument:
        """
        Decode raw bytes.

        Args:
            raw: Undecoded response body
            content_type: Content-Type header value, if any

        Returns:
            DecodedDocument; never raises
        """
        document = self._initial_decode(raw, content_type)
        document = self._apply_meta_override(raw, document)
        logger.info(f"Decoded {len(raw)} bytes as {document.charset}"
                    f"{' (lossy)' if document.lossy else ''}")
        return document

    def _initial_decode(self, raw: bytes, content_type: Optional[str]) -> DecodedDocument:
        # Step 1: header charset, accepted on any strict success
        declared = charset_from_content_type(content_type)
        if declared:
            attempt = try_decode(raw, declared)
            if attempt.ok:
                logger.debug(f"Header charset {attempt.charset} accepted")
                return DecodedDocument(text=attempt.text, charset=attempt.charset)
            logger.debug(f"Header charset {declared} rejected: {attempt.error}")

        # Step 2: ordered candidates
        for candidate in self.candidates:
            attempt = try_decode(raw, candidate)
            if is_clean(attempt):
                logger.debug(f"Candidate charset {attempt.charset} accepted")
                return DecodedDocument(text=attempt.text, charset=attempt.charset)

        # Step 3: lossy UTF-8
        logger.warning("No charset candidate decoded cleanly, using lossy UTF-8")
        return DecodedDocument(
            text=raw.decode("utf-8", errors="replace"),
            charset="utf-8",
            lossy=True
        )

    def _apply_meta_override(self, raw: bytes, document: DecodedDocument) -> DecodedDocument:
        # Step 4: the document's own declaration, when the HTTP layer omitted or misstated it
        meta_label = charset_from_meta(document.text)
        if not meta_label:
            return document

        meta_name = codec_name(meta_label)
        if meta_name is None or meta_name == "utf-8" or meta_name == document.charset:
            return document

        attempt = try_decode(raw, meta_label)
        if is_clean(attempt):
            logger.debug(f"Meta charset {attempt.charset} overrides {document.charset}")
            return DecodedDocument(text=attempt.text, charset=attempt.charset)

        logger.debug(f"Meta charset {meta_label} ignored: {attempt.error or 'placeholder characters'}")
        return document


def resolve_charset(raw: bytes, content_type: Optional[str] = None) -> DecodedDocument:
    """Convenience function to decode bytes with the default candidate list."""
    return CharsetResolver().resolve(raw, content_type)
