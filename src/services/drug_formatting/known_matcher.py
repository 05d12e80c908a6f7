"""
Known-term matching.

Keys are combined into one case-insensitive alternation ordered longest first,
so at any position the longest key that sits on word boundaries wins. Each match
is then checked against its surroundings so that text already in
``BRAND (generic)`` form is left alone.
"""

from typing import List

from services.drug_formatting.models import DrugDisplay, KnownMatch, LookupIndex, Token, TokenType
from services.drug_formatting.text_utils import build_alternation


def find_known_matches(text: str, index: LookupIndex) -> List[KnownMatch]:
    """Return disjoint, left-to-right matches of indexed keys in ``text``."""
    pattern = build_alternation(index.keys)
    if pattern is None or not text:
        return []
    return [
        KnownMatch(start=m.start(), end=m.end(), matched_text=m.group(0), key=m.group(0).lower())
        for m in pattern.finditer(text)
    ]


def is_suffix_formatted(text: str, match: KnownMatch, display: DrugDisplay) -> bool:
    """The match is followed by ``(generic)``, i.e. the text is already formatted."""
    after = text[match.end:].strip().lower()
    return after.startswith(f"({display.generic.lower()})")


def is_prefix_context(text: str, match: KnownMatch, display: DrugDisplay) -> bool:
    """The match is the parenthesized generic of a mention right before it.

    Only the character immediately before the match is inspected, so nested or
    repeated parentheticals can still be misread.
    """
    if match.start == 0 or text[match.start - 1] != "(":
        return False
    before = text[: match.start - 1].rstrip().lower()
    return before.endswith(display.brand.lower()) or before.endswith(display.generic.lower())


def disposition_token(text: str, match: KnownMatch, index: LookupIndex) -> Token:
    display = index.get(match.key)
    if display is None:
        return Token(TokenType.TEXT, match.matched_text)
    if is_suffix_formatted(text, match, display) or is_prefix_context(text, match, display):
        return Token(TokenType.TEXT, match.matched_text)
    return Token(TokenType.KNOWN, display.formatted())
