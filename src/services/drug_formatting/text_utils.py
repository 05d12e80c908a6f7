"""
Text helpers shared by the index builder, matcher and scanner.
"""

import re
from typing import Any, List, Mapping, Optional

from constants import LATIN_UPPER_PATTERN, SEPARATOR_PATTERN


def capitalize_first_letter(value: str) -> str:
    """Uppercase the first character and leave the rest untouched."""
    if not value:
        return ""
    return value[0].upper() + value[1:]


def normalize_key(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip().lower()


def clean_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def field_value(item: Any, name: str) -> Optional[Any]:
    """Read ``name`` from a mapping or an attribute-bearing object."""
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def split_segments(text: str) -> List[str]:
    """Split into word chunks and separator runs; joining the result gives ``text`` back."""
    if not text:
        return []
    return [part for part in SEPARATOR_PATTERN.split(text) if part]


def is_separator(segment: str) -> bool:
    return bool(SEPARATOR_PATTERN.fullmatch(segment))


def starts_with_latin_upper(value: str) -> bool:
    return bool(LATIN_UPPER_PATTERN.match(value))


def build_alternation(keys: List[str]) -> Optional[re.Pattern]:
    """Compile ``\\b(k1|k2|...)\\b`` with keys kept in the given (longest-first) order."""
    if not keys:
        return None
    alternation = "|".join(re.escape(k) for k in keys)
    return re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)
