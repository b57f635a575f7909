"""
Tests for charset resolution and entity decoding.
"""

from url_analyzer.charset import (
    CharsetResolver,
    charset_from_content_type,
    charset_from_meta,
    resolve_charset,
    try_decode,
)
from url_analyzer.entities import decode_entities


JAPANESE = "こんにちは、世界"


class TestHeaderCharset:
    """Step 1: the Content-Type charset."""

    def test_parses_charset_parameter(self):
        assert charset_from_content_type("text/html; charset=Shift_JIS") == "Shift_JIS"
        assert charset_from_content_type('text/html; charset="utf-8"; foo=bar') == "utf-8"
        assert charset_from_content_type("text/html") is None
        assert charset_from_content_type("") is None
        assert charset_from_content_type(None) is None

    def test_header_charset_wins_over_candidates(self):
        # Pure ASCII decodes under every candidate; the header still comes first
        doc = resolve_charset(b"<p>plain</p>", "text/html; charset=EUC-JP")
        assert doc.charset == "euc_jp"
        assert not doc.lossy

    def test_declared_shift_jis(self):
        raw = f"<p>{JAPANESE}</p>".encode("shift_jis")
        doc = resolve_charset(raw, "text/html; charset=Shift_JIS")
        assert doc.charset == "shift_jis"
        assert JAPANESE in doc.text

    def test_wrong_header_falls_back_to_candidates(self):
        raw = f"<p>{JAPANESE}</p>".encode("shift_jis")
        doc = resolve_charset(raw, "text/html; charset=utf-8")
        assert doc.charset == "shift_jis"
        assert JAPANESE in doc.text

    def test_unknown_header_label_is_a_failed_attempt(self):
        doc = resolve_charset("<p>héllo</p>".encode("utf-8"), "text/html; charset=x-bogus")
        assert doc.charset == "utf-8"
        assert doc.text == "<p>héllo</p>"

    def test_whatwg_label_mapping(self):
        # Browsers read iso-8859-1 as windows-1252
        doc = resolve_charset(b"caf\xe9 \x93quoted\x94", "text/html; charset=ISO-8859-1")
        assert doc.charset == "cp1252"
        assert doc.text == "café “quoted”"


class TestCandidates:
    """Step 2 and 3: ordered candidates, then lossy UTF-8."""

    def test_utf8_first(self):
        doc = resolve_charset(f"<p>{JAPANESE}</p>".encode("utf-8"))
        assert doc.charset == "utf-8"
        assert JAPANESE in doc.text

    def test_shift_jis_when_utf8_fails(self):
        doc = resolve_charset(f"<p>{JAPANESE}</p>".encode("shift_jis"))
        assert doc.charset == "shift_jis"
        assert JAPANESE in doc.text

    def test_default_order_prefers_shift_jis_over_euc_jp(self):
        # EUC-JP kana bytes (0xA1-0xFE) are also valid Shift_JIS half-width katakana
        raw = "かな".encode("euc_jp")
        assert try_decode(raw, "shift_jis").ok
        assert try_decode(raw, "euc-jp").text == "かな"

        doc = resolve_charset(raw)

        assert doc.charset == "shift_jis"
        assert doc.text != "かな"
        assert not doc.lossy

    def test_custom_candidate_order(self):
        resolver = CharsetResolver(candidates=("euc-jp", "utf-8"))
        doc = resolver.resolve(b"ascii only")
        assert doc.charset == "euc_jp"

    def test_lossy_fallback(self):
        raw = b"<p>abc \xff\xff</p>"
        doc = resolve_charset(raw)
        assert doc.lossy
        assert doc.charset == "utf-8"
        assert "�" in doc.text
        assert doc.text.startswith("<p>abc ")

    def test_try_decode_reports_failure_without_raising(self):
        attempt = try_decode(b"\xff", "utf-8")
        assert not attempt.ok
        assert attempt.error

        attempt = try_decode(b"ok", "no-such-charset")
        assert not attempt.ok
        assert "unknown charset" in attempt.error


class TestMetaOverride:
    """Step 4: <meta charset> declared in the document."""

    def test_meta_charset_parsing(self):
        assert charset_from_meta('<meta charset="Shift_JIS">') == "shift_jis"
        assert charset_from_meta(
            '<meta http-equiv="Content-Type" content="text/html; charset=euc-jp">'
        ) == "euc-jp"
        assert charset_from_meta("<p>no meta</p>") is None

    def test_iso2022jp_meta_overrides_utf8(self):
        # ISO-2022-JP is 7-bit, so the UTF-8 candidate accepts it first
        html = f'<html><head><meta charset="iso-2022-jp"><title>{JAPANESE}</title></head></html>'
        doc = resolve_charset(html.encode("iso2022_jp"))
        assert doc.charset == "iso2022_jp"
        assert JAPANESE in doc.text

    def test_meta_applies_after_header_too(self):
        html = f'<meta charset="iso-2022-jp"><p>{JAPANESE}</p>'
        doc = resolve_charset(html.encode("iso2022_jp"), "text/html; charset=us-ascii")
        assert doc.charset == "iso2022_jp"
        assert JAPANESE in doc.text

    def test_meta_utf8_never_overrides(self):
        doc = resolve_charset(b'<meta charset="utf-8"><p>x</p>', "text/html; charset=shift_jis")
        assert doc.charset == "shift_jis"

    def test_meta_same_charset_is_noop(self):
        raw = f'<meta charset="shift_jis"><p>{JAPANESE}</p>'.encode("shift_jis")
        doc = resolve_charset(raw)
        assert doc.charset == "shift_jis"

    def test_unusable_meta_is_ignored(self):
        doc = resolve_charset(b'<meta charset="x-unknown"><p>x</p>')
        assert doc.charset == "utf-8"

    def test_meta_rejected_when_strict_decode_fails(self):
        # Valid UTF-8 that is not valid ISO-2022-JP (bytes above 0x7F)
        raw = '<meta charset="iso-2022-jp"><p>héllo</p>'.encode("utf-8")
        doc = resolve_charset(raw)
        assert doc.charset == "utf-8"
        assert "héllo" in doc.text


class TestEntities:
    """Entity decoding."""

    def test_named_entities(self):
        assert decode_entities("&amp; &lt; &gt; &quot; &#39; &apos;") == "& < > \" ' '"

    def test_nbsp_becomes_space(self):
        assert decode_entities("a&nbsp;b") == "a b"

    def test_numeric_references(self):
        assert decode_entities("&#65;&#x42;&#X43;") == "ABC"
        assert decode_entities("&#x1F600;") == "\U0001F600"
        assert decode_entities("&#12354;") == "あ"

    def test_round_trip(self):
        original = "Tom & Jerry <say> \"hi\" 'there' – 😀"
        encoded = "Tom &amp; Jerry &lt;say&gt; &quot;hi&quot; &#39;there&apos; &#8211; &#x1f600;"
        assert decode_entities(encoded) == original

    def test_no_double_decoding(self):
        assert decode_entities("&amp;lt;") == "&lt;"
        assert decode_entities("&amp;amp;") == "&amp;"

    def test_unknown_and_malformed_pass_through(self):
        for text in ["&copy;", "&#xZZ;", "&#55296;", "&#1114112;", "&#0;", "AT&T", "& ;"]:
            assert decode_entities(text) == text

    def test_empty(self):
        assert decode_entities("") == ""
