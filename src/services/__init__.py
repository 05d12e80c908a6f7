from .drug_formatting import (
    DrugDisplay,
    Token,
    TokenType,
    build_index,
    find_suggestion,
    format_text,
    render_plain_text,
    tokenize,
)
from .errors import (
    AliasNotFoundError,
    EntryNotFoundError,
    SpreadsheetParseError,
    StorageWriteError,
)

__all__ = [
    "AliasNotFoundError",
    "DrugDisplay",
    "EntryNotFoundError",
    "SpreadsheetParseError",
    "StorageWriteError",
    "Token",
    "TokenType",
    "build_index",
    "find_suggestion",
    "format_text",
    "render_plain_text",
    "tokenize",
]
