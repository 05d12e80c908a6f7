"""
Drug name formatting engine.

This package finds known drug names in free text (by brand, generic or foreign
alias), rewrites them as ``BRAND (generic)``, flags capitalized words that are
not in the dictionary and suggests the closest dictionary entry for likely typos.
"""

from services.drug_formatting.models import (
    Alias,
    DrugDisplay,
    KnownMatch,
    LookupIndex,
    Token,
    TokenType,
)
from services.drug_formatting.index_builder import build_index, normalize_entry
from services.drug_formatting.known_matcher import find_known_matches
from services.drug_formatting.unknown_scanner import detect_unknowns
from services.drug_formatting.fuzzy import find_suggestion, suggest_from_index
from services.drug_formatting.tokenizer import (
    format_text,
    ignore_term,
    render_plain_text,
    replace_term,
    tokenize,
)
from services.drug_formatting.text_utils import capitalize_first_letter
from services.drug_formatting.config import (
    ENABLE_UNKNOWN_DETECTION,
    ENABLE_FUZZY_SUGGESTIONS,
    FUZZY_MAX_LENGTH_DELTA,
    FUZZY_MIN_DISTANCE,
    FUZZY_DISTANCE_RATIO,
)

__all__ = [
    # Data models
    "Alias",
    "DrugDisplay",
    "KnownMatch",
    "LookupIndex",
    "Token",
    "TokenType",

    # Main API functions
    "build_index",
    "tokenize",
    "find_suggestion",
    "render_plain_text",
    "format_text",
    "ignore_term",
    "replace_term",

    # Building blocks
    "normalize_entry",
    "find_known_matches",
    "detect_unknowns",
    "suggest_from_index",
    "capitalize_first_letter",

    # Configuration
    "ENABLE_UNKNOWN_DETECTION",
    "ENABLE_FUZZY_SUGGESTIONS",
    "FUZZY_MAX_LENGTH_DELTA",
    "FUZZY_MIN_DISTANCE",
    "FUZZY_DISTANCE_RATIO",
]
