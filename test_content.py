"""
Tests for title/excerpt extraction, URL validation and Markdown rendering.
"""

import time

import pytest

from url_analyzer.content import extract, extract_body, extract_title
from url_analyzer.schemas import MAX_EXCERPT_CHARS, FallbackNote
from url_analyzer.validator import validate, is_analyzable
from url_analyzer.exceptions import InvalidURL
from url_analyzer.assembler import (
    escape_markdown,
    link_destination,
    render_excerpt,
    render_fallback,
    render_summary,
)


class TestExtractTitle:

    def test_title(self):
        assert extract_title("<html><head><title> Hello </title></head></html>", "example.com") == "Hello"

    def test_title_case_insensitive_and_multiline(self):
        html = "<TITLE lang='en'>\n  Multi\n  line\n</TITLE>"
        assert extract_title(html, "example.com") == "Multi line"

    def test_first_title_wins(self):
        assert extract_title("<title>One</title><svg><title>Two</title></svg>", "h") == "One"

    def test_title_entities_decoded_once(self):
        assert extract_title("<title>Q&amp;A &amp;lt;tag&amp;gt;</title>", "h") == "Q&A &lt;tag&gt;"

    def test_missing_or_blank_title_uses_hostname(self):
        assert extract_title("<p>no title</p>", "example.com") == "example.com"
        assert extract_title("<title>   </title>", "example.com") == "example.com"


class TestExtractBody:

    def test_strips_tags_scripts_and_styles(self):
        html = (
            "<html><head><style>p { color: red }</style>"
            "<SCRIPT type='text/javascript'>var x = '<p>hidden</p>';</SCRIPT></head>"
            "<body><h1>Head</h1>\n\n<p>Some   <b>bold</b>\ttext</p></body></html>"
        )
        assert extract_body(html) == "Head Some bold text"

    def test_entities_decoded(self):
        assert extract_body("<p>Fish &amp; Chips&nbsp;&#x2764;</p>") == "Fish & Chips ❤"

    def test_excerpt_is_capped(self):
        body = extract_body("<p>" + "a" * (MAX_EXCERPT_CHARS * 2) + "</p>")
        assert len(body) == MAX_EXCERPT_CHARS

    def test_cap_holds_after_decoding(self):
        body = extract_body("&amp;" * MAX_EXCERPT_CHARS)
        assert len(body) <= MAX_EXCERPT_CHARS
        assert set(body) == {"&"}

    @pytest.mark.parametrize("junk", ["a <b ", "<a ", "<script ", "<style x", "<title "])
    def test_unclosed_brackets_stay_fast(self, junk):
        html = "<title>T</title><p>x</p>" + junk * 100000
        start = time.perf_counter()
        body = extract_body(html)
        title = extract_title(html, "example.com")
        assert time.perf_counter() - start < 2.0
        assert len(body) <= MAX_EXCERPT_CHARS
        assert title == "T"

    def test_unclosed_script_runs_to_end(self):
        assert extract_body("<p>before</p><script>var a = 1; <p>never shown</p>") == "before"

    def test_stray_angle_bracket_kept(self):
        assert extract_body("<p>a < b</p>") == "a < b"

    def test_extract_returns_model(self):
        content = extract("<title>T</title><p>Body</p>", "example.com")
        assert content.title == "T"
        assert content.excerpt == "T Body"


class TestValidator:

    @pytest.mark.parametrize("text", [
        "", "   ", None, "example.com", "ftp://example.com/file",
        "javascript:alert(1)", "http://", "https:///path", "http://[::1",
        "mailto:someone@example.com",
    ])
    def test_rejected(self, text):
        with pytest.raises(InvalidURL):
            validate(text)
        assert not is_analyzable(text)

    def test_accepted(self):
        request = validate("  HTTPS://Example.com/a/b?q=1  ")
        assert request.url == "HTTPS://Example.com/a/b?q=1"
        assert request.scheme == "https"
        assert request.hostname == "example.com"
        assert request.path == "/a/b"
        assert is_analyzable("http://localhost:8080/")

    def test_error_response(self):
        with pytest.raises(InvalidURL) as exc_info:
            validate("")
        assert exc_info.value.to_response() == {"error": "No URL specified"}


class TestAssembler:

    URL = "https://example.com/page"

    def test_escape_markdown(self):
        assert escape_markdown("# not a heading") == "\\# not a heading"
        assert escape_markdown("- item") == "\\- item"
        assert escape_markdown("1. first") == "1\\. first"
        assert escape_markdown("a [link](x) *b*") == "a \\[link\\](x) \\*b\\*"
        assert escape_markdown("line\n\n# two") == "line \\# two"

    def test_link_destination(self):
        assert link_destination(self.URL) == self.URL
        assert link_destination("https://e.com/a b") == "https://e.com/a%20b"
        assert link_destination("https://e.com/Foo_(bar)") == "<https://e.com/Foo_(bar)>"

    def test_excerpt_template(self):
        content = render_excerpt("Title", self.URL, "World")
        assert content == (
            "# Title\n\n## Overview\n\nWorld\n\n"
            f"[Open original page]({self.URL})"
        )
        assert content.count(self.URL) == 1

    def test_long_excerpt_is_shortened(self):
        content = render_excerpt("T", self.URL, "x" * 800)
        assert "x" * 500 + "..." in content
        assert "x" * 501 not in content

    def test_empty_excerpt(self):
        assert "No readable text" in render_excerpt("T", self.URL, "")

    def test_hostile_title_cannot_break_template(self):
        content = render_excerpt("Evil\n## Injected [x](http://a)", self.URL, "text")
        lines = content.split("\n")
        assert lines[0].startswith("# Evil")
        assert sum(1 for line in lines if line.startswith("#")) == 2
        assert "\\[x\\](http://a)" in content
        assert content.endswith(f"[Open original page]({self.URL})")

    def test_summary_keeps_list_structure(self):
        content = render_summary("T", self.URL, "\n- point one\n* point two\n  - nested\n3. third\n")
        assert "## AI Summary\n\n- point one\n- point two\n  - nested\n3. third\n\n" in content
        assert content.count(self.URL) == 1

    def test_summary_fence_cannot_swallow_link(self):
        content = render_summary("T", self.URL, "- point\n```\nunclosed fence")
        assert "```" not in content
        assert "\\`\\`\\`" in content
        assert content.endswith(f"\n\n[Open original page]({self.URL})")

    def test_summary_heading_and_url_escaped(self):
        content = render_summary("T", self.URL, f"- see {self.URL}\n# Big heading\n[x](http://a)")
        assert content.count(self.URL) == 1
        assert "- see the original page" in content
        assert "\n\\# Big heading\n" in content
        assert sum(1 for line in content.split("\n") if line.startswith("#")) == 2
        assert "\\[x\\](http://a)" in content

    def test_summary_setext_underline_escaped(self):
        content = render_summary("T", self.URL, "Intro\n===\n---")
        assert "Intro\n\\===\n\\---" in content

    def test_summary_blank_lines_collapsed(self):
        content = render_summary("T", self.URL, "- a\n\n\n\n- b\n\n")
        assert "## AI Summary\n\n- a\n\n- b\n\n[" in content

    def test_fallback(self):
        note = FallbackNote(title="t", heading="GitHub link", section="Repository",
                            body="owner/repo", link_label="Open on GitHub")
        content = render_fallback(note, self.URL)
        assert content.startswith("# GitHub link\n\n## Repository\n\nowner/repo\n\n")
        assert content.endswith(f"[Open on GitHub]({self.URL})")
