"""
Result assembler: renders the Markdown note body.

Every path (AI summary, excerpt, fallback note) goes through the same
template:

    # <heading>

    ## <section>

    <body>

    [<link label>](<url>)

The original URL appears exactly once, as the link destination. Headings and
plain-text bodies are escaped and flattened to one line, so page content
cannot open new headings, lists or links. AI summaries keep their list
structure but the text of every line is escaped the same way.
"""

import re

from .schemas import FallbackNote

OVERVIEW_CHARS = 500

# Characters with inline meaning anywhere in a line
INLINE_SPECIAL = re.compile(r'([\\`*_\[\]<>#|~&])')
# Constructs that only mean something at the start of a line: list markers, setext underlines, ordered lists
LEADING_SPECIAL = re.compile(r'^([-+=]|\d+(?=[.)]))')
WHITESPACE = re.compile(r'\s+')
# "- item", "* item", "2. item" with optional indentation
LIST_ITEM = re.compile(r'^([ \t]*)([-*+]|\d{1,9}[.)])[ \t]+(.*)$')


def escape_markdown(text: str) -> str:
    """Flatten text to one line and backslash-escape Markdown syntax."""
    text = WHITESPACE.sub(' ', text or '').strip()
    text = INLINE_SPECIAL.sub(r'\\\1', text)
    m = LEADING_SPECIAL.match(text)
    if m:
        if m.group(1)[0].isdigit():
            # "1. foo" → "1\. foo"
            end = m.end()
            text = text[:end] + '\\' + text[end:]
        else:
            text = '\\' + text
    return text


def link_destination(url: str) -> str:
    """URL made safe for use as a Markdown link destination."""
    dest = url.replace('<', '%3C').replace('>', '%3E')
    dest = WHITESPACE.sub(lambda m: ''.join(f'%{ord(c):02X}' for c in m.group(0)), dest)
    if '(' in dest or ')' in dest:
        dest = f'<{dest}>'
    return dest


def render(heading: str, section: str, body: str, url: str, link_label: str) -> str:
    """Fill the note template. body is inserted as given."""
    return (
        f"# {escape_markdown(heading)}\n\n"
        f"## {escape_markdown(section)}\n\n"
        f"{body}\n\n"
        f"[{escape_markdown(link_label)}]({link_destination(url)})"
    )


def sanitize_summary(summary: str, url: str) -> str:
    """
    Model output made safe for the template, line by line.

    List markers and their nesting are kept; everything else is escaped, so
    fences, headings and links in the output stay literal text. Mentions of
    the original URL are replaced, since the template already links it.
    """
    lines = []
    for line in summary.splitlines():
        if not line.strip():
            if lines and lines[-1]:
                lines.append("")
            continue

        line = line.replace(url, "the original page")
        m = LIST_ITEM.match(line)
        if m:
            indent = "  " * min(len(m.group(1).expandtabs(4)) // 2, 3)
            marker = m.group(2) if m.group(2)[0].isdigit() else "-"
            lines.append(f"{indent}{marker} {escape_markdown(m.group(3))}")
        else:
            lines.append(escape_markdown(line))

    while lines and not lines[-1]:
        lines.pop()
    return "\n".join(lines)


def render_summary(title: str, url: str, summary: str) -> str:
    """Note body for an AI-produced summary."""
    return render(title, "AI Summary", sanitize_summary(summary, url), url, "Open original page")


def render_excerpt(title: str, url: str, excerpt: str) -> str:
    """Note body built from the page text alone."""
    if excerpt:
        overview = escape_markdown(excerpt[:OVERVIEW_CHARS])
        if len(excerpt) > OVERVIEW_CHARS:
            overview += "..."
    else:
        overview = "No readable text was found on this page."
    return render(title, "Overview", overview, url, "Open original page")


def render_fallback(note: FallbackNote, url: str) -> str:
    """Note body for a page that could not be fetched."""
    return render(note.heading, note.section, escape_markdown(note.body), url, note.link_label)
