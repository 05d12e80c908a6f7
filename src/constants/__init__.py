from constants.known_drugs import ALLOWED_LANGUAGES, DEFAULT_DICTIONARY, LANGUAGE_LABELS
from constants.text_patterns import (
    ALIAS_IMPORT_COLUMNS,
    ENGLISH_IMPORT_COLUMNS,
    FORMATTED_TEMPLATE,
    LATIN_UPPER_PATTERN,
    SEPARATOR_CHARS,
    SEPARATOR_PATTERN,
)

__all__ = [
    "ALLOWED_LANGUAGES",
    "DEFAULT_DICTIONARY",
    "LANGUAGE_LABELS",
    "ALIAS_IMPORT_COLUMNS",
    "ENGLISH_IMPORT_COLUMNS",
    "FORMATTED_TEMPLATE",
    "LATIN_UPPER_PATTERN",
    "SEPARATOR_CHARS",
    "SEPARATOR_PATTERN",
]
