"""
Typo suggestions via bounded Levenshtein distance against indexed keys.
"""

import logging
import math
from typing import Any, Mapping, Optional

from rapidfuzz.distance import Levenshtein

from services.drug_formatting.config import (
    FUZZY_DISTANCE_RATIO,
    FUZZY_MAX_LENGTH_DELTA,
    FUZZY_MIN_DISTANCE,
)
from services.drug_formatting.index_builder import build_dictionary_index
from services.drug_formatting.models import DrugDisplay, LookupIndex
from services.drug_formatting.text_utils import normalize_key

logger = logging.getLogger(__name__)


def max_distance_for(key: str) -> int:
    return max(FUZZY_MIN_DISTANCE, math.floor(FUZZY_DISTANCE_RATIO * len(key)))


def suggest_from_index(candidate: str, index: LookupIndex) -> Optional[DrugDisplay]:
    """Return the display pair of the closest key, or None when nothing is close enough."""
    needle = normalize_key(candidate)
    if not needle:
        return None

    best: Optional[DrugDisplay] = None
    best_distance: Optional[int] = None
    for key, display in index.entries.items():
        if not _passes_prefilter(needle, key):
            continue
        cutoff = max_distance_for(key)
        distance = Levenshtein.distance(needle, key, score_cutoff=cutoff)
        if distance > cutoff:
            continue
        if best_distance is None or distance < best_distance:
            best, best_distance = display, distance

    if best is not None:
        logger.debug(f"Suggesting {best.brand!r} for {candidate!r} (distance {best_distance})")
    return best


def find_suggestion(candidate: str, dictionary: Optional[Mapping[str, Any]]) -> Optional[DrugDisplay]:
    """Look up a single user-highlighted term against brand and generic keys (no aliases)."""
    return suggest_from_index(candidate, build_dictionary_index(dictionary))


def _passes_prefilter(needle: str, key: str) -> bool:
    if abs(len(key) - len(needle)) > FUZZY_MAX_LENGTH_DELTA:
        return False
    return key[:1] == needle[:1]
