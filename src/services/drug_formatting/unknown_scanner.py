"""
Unknown drug candidate detection for text not covered by a known-term match.

Segmentation is whitespace and punctuation based. Only chunks starting with an
uppercase Latin letter are flagged; lowercase-initial and non-Latin chunks pass
through as plain text.
"""

from typing import Any, Iterable, List, Optional, Set

from services.drug_formatting.config import ENABLE_FUZZY_SUGGESTIONS, ENABLE_UNKNOWN_DETECTION
from services.drug_formatting.fuzzy import suggest_from_index
from services.drug_formatting.models import LookupIndex, Token, TokenType
from services.drug_formatting.text_utils import is_separator, split_segments, starts_with_latin_upper


def detect_unknowns(
    segment: str,
    ignore_set: Set[str],
    index: LookupIndex,
    aliases: Optional[Iterable[Any]] = None,
) -> List[Token]:
    """Tokenize a gap between known matches.

    ``aliases`` is reserved and currently unused; alias terms are only matched
    through the lookup index, and non-Latin chunks are left as text.
    """
    if not segment:
        return []
    return [_classify(chunk, ignore_set, index) for chunk in split_segments(segment)]


def _classify(chunk: str, ignore_set: Set[str], index: LookupIndex) -> Token:
    if is_separator(chunk):
        return Token(TokenType.TEXT, chunk)

    lower = chunk.lower()
    display = index.get(lower)
    if display is not None:
        return Token(TokenType.KNOWN, display.formatted())
    if lower in ignore_set:
        return Token(TokenType.TEXT, chunk)
    if not ENABLE_UNKNOWN_DETECTION or not starts_with_latin_upper(chunk):
        return Token(TokenType.TEXT, chunk)

    suggestion = suggest_from_index(lower, index) if ENABLE_FUZZY_SUGGESTIONS else None
    return Token(TokenType.UNKNOWN, chunk, suggestion=suggestion)
