"""
Token stream assembly: known matches interleaved with scanner output for the gaps.
"""

import logging
import re
from typing import Any, Iterable, List, Mapping, Optional, Set

from services.drug_formatting.index_builder import build_index
from services.drug_formatting.known_matcher import disposition_token, find_known_matches
from services.drug_formatting.models import Token, TokenType
from services.drug_formatting.unknown_scanner import detect_unknowns

logger = logging.getLogger(__name__)


def tokenize(
    text: Optional[str],
    dictionary: Optional[Mapping[str, Any]],
    ignore_set: Optional[Set[str]] = None,
    aliases: Optional[Iterable[Any]] = None,
) -> List[Token]:
    """
    Split text into TEXT, KNOWN and UNKNOWN tokens.

    Args:
        text: Input text
        dictionary: Brand key -> ``{brand, generic}`` pair (or a legacy generic string)
        ignore_set: Lowercased terms the user dismissed; only read, never modified
        aliases: Foreign-language alias records

    Returns:
        Ordered tokens; joining their content gives the formatted text
    """
    if not text:
        return []

    alias_list = list(aliases or [])
    ignored = ignore_set or set()
    index = build_index(dictionary, alias_list)

    tokens: List[Token] = []
    cursor = 0
    for match in find_known_matches(text, index):
        if match.start > cursor:
            tokens.extend(detect_unknowns(text[cursor:match.start], ignored, index, alias_list))
        tokens.append(disposition_token(text, match, index))
        cursor = match.end

    if cursor < len(text):
        tokens.extend(detect_unknowns(text[cursor:], ignored, index, alias_list))

    logger.debug(
        f"Tokenized {len(text)} chars into {len(tokens)} tokens "
        f"({count_tokens(tokens, TokenType.KNOWN)} known, {count_tokens(tokens, TokenType.UNKNOWN)} unknown)"
    )
    return tokens


def render_plain_text(tokens: Iterable[Token]) -> str:
    return "".join(token.content for token in tokens)


def format_text(
    text: Optional[str],
    dictionary: Optional[Mapping[str, Any]],
    aliases: Optional[Iterable[Any]] = None,
) -> str:
    """Format text in one step, ignoring the unknown/known distinction."""
    return render_plain_text(tokenize(text, dictionary, set(), aliases))


def ignore_term(ignore_set: Optional[Set[str]], term: str) -> Set[str]:
    """Return a copy of ``ignore_set`` with ``term`` added in lowercase."""
    updated = set(ignore_set or set())
    cleaned = (term or "").strip().lower()
    if cleaned:
        updated.add(cleaned)
    return updated


def replace_term(text: Optional[str], term: str, replacement: str) -> str:
    """Replace every whole-word, case-sensitive occurrence of ``term`` with ``replacement``."""
    if not text or not term:
        return text or ""
    pattern = re.compile(rf"\b{re.escape(term)}\b")
    return pattern.sub(lambda _: replacement, text)


def count_tokens(tokens: Iterable[Token], token_type: TokenType) -> int:
    return sum(1 for token in tokens if token.type == token_type)
