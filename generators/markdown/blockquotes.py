"""
Blockquote line breaks

The converter emits one "> " marker per output line, so a quoted paragraph
with manual <br> breaks collapses into a single quoted line. Breaks inside
blockquotes are swapped for a text marker before conversion and expanded into
fresh quoted lines afterwards.
"""

import re


LINE_BREAK_MARKER = "__BLOCKQUOTE_LINE_BREAK__"
QUOTE_PREFIX = "> "

BLOCKQUOTE_RE = re.compile(r"(<blockquote(?:\s[^>]*)?>)([\s\S]*?)(</blockquote>)", re.IGNORECASE)
BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)


def mark_quote_line_breaks(html: str) -> str:
    """Replace every <br> inside a blockquote with the line-break marker."""
    def replacer(match):
        opening, content, closing = match.groups()
        return opening + BR_RE.sub(LINE_BREAK_MARKER, content) + closing

    return BLOCKQUOTE_RE.sub(replacer, html)


def expand_quote_line_breaks(markdown: str) -> str:
    """
    Split quoted lines on the line-break marker.

    A quoted line with N markers becomes N+1 quoted lines. Every line,
    quoted or not, is emitted with a trailing newline.
    """
    lines = []
    for line in markdown.split("\n"):
        if line.startswith(QUOTE_PREFIX):
            line = line.replace(LINE_BREAK_MARKER, "\n" + QUOTE_PREFIX)
        lines.append(line + "\n")
    return "".join(lines)
