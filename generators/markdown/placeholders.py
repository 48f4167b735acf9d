"""
Placeholder Vault

Reversible substitution of markup fragments with opaque positional tokens.
Fragments are captured into a ledger before a lossy conversion step and put
back verbatim afterwards.
"""

import re
from enum import Enum
from dataclasses import dataclass, field
from typing import List, Pattern, Tuple


class ShieldCategory(Enum):
    """Markup categories that get their own token namespace."""

    ENTITY = ("ENTITY", r"&[a-zA-Z0-9#]+;")
    EMBED = ("IFRAME", r"<iframe(?:\s[^>]*)?>[\s\S]*?</iframe>")
    ORDERED_LIST = ("OL", r"<ol(?:\s[^>]*)?>[\s\S]*?</ol>")
    SPAN = ("SPAN", r"<span(?:\s[^>]*)?>[\s\S]*?</span>")

    def __init__(self, prefix: str, pattern: str):
        self.prefix = prefix
        self.pattern: Pattern = re.compile(pattern, re.IGNORECASE)
        self.token_pattern: Pattern = re.compile(rf"__{prefix}_PLACEHOLDER_(\d+)__")

    def token(self, index: int) -> str:
        return f"__{self.prefix}_PLACEHOLDER_{index}__"


@dataclass
class ShieldLedger:
    """Captured originals for one category, addressed by position."""

    category: ShieldCategory
    entries: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    def lookup(self, index: int) -> str:
        return self.entries[index]


def extract(text: str, category: ShieldCategory) -> Tuple[str, ShieldLedger]:
    """
    Replace every match of the category pattern with a positional token.

    Args:
        text: Source text
        category: Category whose pattern is masked

    Returns:
        Tuple of (masked text, ledger of captured originals in match order)
    """
    ledger = ShieldLedger(category)

    def replacer(match):
        token = category.token(len(ledger.entries))
        ledger.entries.append(match.group(0))
        return token

    masked = category.pattern.sub(replacer, text)
    return masked, ledger


def restore(text: str, ledger: ShieldLedger) -> str:
    """
    Put ledger entries back in place of their tokens.

    Tokens without a ledger entry are left as literal text. Restored entries
    are not scanned again, so tokens of other categories they contain are left
    for that category's own restore pass.
    """
    if not ledger.entries:
        return text

    def replacer(match):
        index = int(match.group(1))
        if index < len(ledger.entries):
            return ledger.lookup(index)
        return match.group(0)

    return ledger.category.token_pattern.sub(replacer, text)
