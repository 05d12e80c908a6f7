"""
Lookup index construction.

Every dictionary brand, dictionary generic and alias term becomes a lowercased
key pointing at the canonical display pair. Dictionary entries are registered
before aliases and the first registration of a key always wins.
"""

import logging
from typing import Any, Dict, Iterable, Mapping, Optional

from services.drug_formatting.models import DrugDisplay, LookupIndex
from services.drug_formatting.text_utils import (
    capitalize_first_letter,
    clean_text,
    field_value,
    normalize_key,
)

logger = logging.getLogger(__name__)


def build_index(
    dictionary: Optional[Mapping[str, Any]],
    aliases: Optional[Iterable[Any]] = None,
) -> LookupIndex:
    """Build the lookup index for one formatting call."""
    index = LookupIndex()
    brands = _register_dictionary(index, dictionary or {})
    _register_aliases(index, aliases or [], brands)
    index.keys = sorted(index.entries, key=len, reverse=True)
    logger.debug(f"Built lookup index with {len(index.keys)} keys")
    return index


def build_dictionary_index(dictionary: Optional[Mapping[str, Any]]) -> LookupIndex:
    """Index brand and generic keys only, without aliases."""
    return build_index(dictionary, None)


def normalize_entry(key: str, value: Any) -> Optional[DrugDisplay]:
    """Turn a stored dictionary value (legacy string or brand/generic pair) into a display pair."""
    if isinstance(value, DrugDisplay):
        brand, generic = value.brand, value.generic
    elif isinstance(value, str):
        brand, generic = clean_text(key).upper(), capitalize_first_letter(clean_text(value))
    else:
        brand = clean_text(field_value(value, "brand"))
        generic = clean_text(field_value(value, "generic"))
    if not brand or not generic:
        logger.debug(f"Skipping malformed dictionary entry {key!r}")
        return None
    return DrugDisplay(brand=brand.upper(), generic=generic)


def _register_dictionary(index: LookupIndex, dictionary: Mapping[str, Any]) -> Dict[str, DrugDisplay]:
    brands: Dict[str, DrugDisplay] = {}
    for key, value in dictionary.items():
        display = normalize_entry(key, value)
        if display is None:
            continue
        brand_key = normalize_key(display.brand)
        brands.setdefault(normalize_key(key), display)
        brands.setdefault(brand_key, display)
        _register(index, brand_key, display)
        _register(index, normalize_key(display.generic), display)
    return brands


def _register_aliases(index: LookupIndex, aliases: Iterable[Any], brands: Dict[str, DrugDisplay]) -> None:
    for alias in aliases:
        term_key = normalize_key(field_value(alias, "alias_term"))
        english_brand = clean_text(field_value(alias, "english_brand"))
        if not term_key or not english_brand:
            logger.debug(f"Skipping malformed alias {alias!r}")
            continue
        target = brands.get(english_brand.lower()) or _fallback_display(alias, english_brand)
        _register(index, term_key, target)


def _fallback_display(alias: Any, english_brand: str) -> DrugDisplay:
    brand = english_brand.upper()
    generic = capitalize_first_letter(clean_text(field_value(alias, "generic_name")))
    logger.debug(f"Alias brand {brand!r} not in dictionary, indexing with its own display data")
    return DrugDisplay(brand=brand, generic=generic or brand)


def _register(index: LookupIndex, key: str, display: DrugDisplay) -> None:
    if key and key not in index.entries:
        index.entries[key] = display
