"""
Markdown Transcoder

Converts rich-text HTML from the CMS into Markdown while keeping the markup
markdownify does not understand: entity references, embeds, ordered lists,
inline spans and line breaks inside blockquotes.
"""

import re
import logging
from typing import Any, Callable, Dict, Optional

from bs4 import Tag
from markdownify import MarkdownConverter

from .shields import EntityShield, MarkupShield
from .blockquotes import mark_quote_line_breaks, expand_quote_line_breaks


CODE_FENCE_LANGUAGE_RE = re.compile(r"```[ \t]*\n\[([^\n]*?)\]\n")
LANGUAGE_CLASS_PREFIXES = ("language-", "lang-")
NBSP = "\u00a0"

DEFAULT_CONVERTER_OPTIONS = {
    "heading_style": "ATX",
    "bullets": "-",
    "escape_underscores": False,
    "escape_misc": False,
}


def detect_code_language(el: Tag) -> str:
    """Read the fence language from a language-xxx class on <pre> or its <code>."""
    candidates = [el]
    code = el.find("code")
    if code is not None:
        candidates.append(code)

    for candidate in candidates:
        for css_class in candidate.get("class") or []:
            for prefix in LANGUAGE_CLASS_PREFIXES:
                if css_class.startswith(prefix):
                    return css_class[len(prefix):]
    return ""


class RichTextConverter(MarkdownConverter):
    """
    markdownify converter for CMS rich-text fields.

    Fenced code blocks take their language from a language-xxx or lang-xxx
    class on <pre> or its <code>.
    """

    def __init__(self, **options):
        merged = dict(DEFAULT_CONVERTER_OPTIONS)
        merged.setdefault("code_language_callback", detect_code_language)
        merged.update(options)
        super().__init__(**merged)


def normalize_code_fences(markdown: str) -> str:
    """Fold a bare fence followed by a "[lang]" line into a single "```lang" line."""
    return CODE_FENCE_LANGUAGE_RE.sub(r"```\1\n", markdown)


def fold_nbsp(markdown: str) -> str:
    return markdown.replace(NBSP, " ")


class MarkdownTranscoder:
    """
    Shields, converts and restores one rich-text field at a time.

    Ledgers live only for the duration of a transcode() call, so the same
    instance can be reused for every field of every article.
    """

    def __init__(self, converter: Optional[Callable[[str], str]] = None,
                 options: Optional[Dict[str, Any]] = None):
        self.logger = logging.getLogger(__name__)
        self.entity_shield = EntityShield()
        self.markup_shield = MarkupShield()
        if converter is None:
            converter = RichTextConverter(**(options or {})).convert
        self.converter = converter

    def transcode(self, html_content: str) -> str:
        """
        Convert an HTML fragment to Markdown.

        Args:
            html_content: Rich-text HTML

        Returns:
            str: Markdown with shielded markup restored, stripped of
            surrounding whitespace
        """
        if not html_content:
            return ""

        masked, entity_ledger = self.entity_shield.extract(html_content)
        masked, markup_ledgers = self.markup_shield.extract(masked)
        masked = mark_quote_line_breaks(masked)

        self.logger.debug(
            f"Shielded {len(entity_ledger)} entities and "
            f"{sum(len(ledger) for ledger in markup_ledgers)} elements"
        )

        markdown = self.converter(masked)

        markdown = expand_quote_line_breaks(markdown)
        markdown = self.markup_shield.restore(markdown, markup_ledgers)
        markdown = self.entity_shield.restore(markdown, entity_ledger)
        markdown = normalize_code_fences(markdown)
        markdown = fold_nbsp(markdown)

        return markdown.strip()


def transcode(html_content: str, **options) -> str:
    """Transcode with a default-configured MarkdownTranscoder."""
    return MarkdownTranscoder(options=options).transcode(html_content)
