"""
Markup Shields

Masking/restoration pairs that protect markup categories from the generic
HTML to Markdown converter.

- EntityShield: character entity references, left untouched inside <pre>
- MarkupShield: embedded frames, ordered lists and inline spans

Regex capture only handles non-nested instances of a tag. A list inside a list
or a span inside a span is cut at the first closing tag.
"""

import re
from typing import List, Tuple

from .placeholders import ShieldCategory, ShieldLedger, extract, restore


PRE_BLOCK_RE = re.compile(r"<pre(?:\s[^>]*)?>[\s\S]*?</pre>", re.IGNORECASE)
ESCAPED_ENTITY_RE = re.compile(r"&amp;([a-zA-Z0-9#]+;)")


class EntityShield:
    """
    Masks entity references everywhere except inside preformatted blocks.

    Entities in prose may be re-escaped by the converter and are normalized
    back on restore. Inside <pre> each entity is written back with its "&"
    escaped (&quot; becomes &amp;quot;), so the HTML parser decodes it to the
    entity text itself and code reaches the output as written. restore()
    reverses that escaping in any <pre> block still present in the text.
    """

    category = ShieldCategory.ENTITY

    def extract(self, html: str) -> Tuple[str, ShieldLedger]:
        masked, ledger = extract(html, self.category)

        def escape_tokens(match):
            return self.category.token_pattern.sub(
                lambda token: "&amp;" + ledger.lookup(int(token.group(1)))[1:],
                match.group(0),
            )

        masked = PRE_BLOCK_RE.sub(escape_tokens, masked)
        return masked, ledger

    def restore(self, text: str, ledger: ShieldLedger) -> str:
        text = restore(text, ledger)
        return PRE_BLOCK_RE.sub(lambda m: ESCAPED_ENTITY_RE.sub(r"&\1", m.group(0)), text)


class MarkupShield:
    """
    Masks whole elements the converter would mangle or drop.

    Embeds are captured first so list and span patterns never match across an
    iframe's markup; spans are captured last so lists are already invisible to
    them. Restoration walks the same tuple backwards.
    """

    categories = (
        ShieldCategory.EMBED,
        ShieldCategory.ORDERED_LIST,
        ShieldCategory.SPAN,
    )

    def extract(self, html: str) -> Tuple[str, List[ShieldLedger]]:
        ledgers = []
        for category in self.categories:
            html, ledger = extract(html, category)
            ledgers.append(ledger)
        return html, ledgers

    def restore(self, text: str, ledgers: List[ShieldLedger]) -> str:
        for ledger in reversed(ledgers):
            text = restore(text, ledger)
        return text
