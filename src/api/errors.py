"""Mapping of service error kinds to HTTP error bodies."""

from typing import Any, Dict, Optional

from fastapi import HTTPException

from services.errors import (
    AliasNotFoundError,
    EntryNotFoundError,
    SpreadsheetParseError,
    StorageWriteError,
)


def http_error(status_code: int, code: str, message: str, details: Optional[Dict[str, Any]] = None) -> HTTPException:
    error: Dict[str, Any] = {"code": code, "message": message}
    if details:
        error["details"] = details
    return HTTPException(status_code=status_code, detail={"error": error})


def to_http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, EntryNotFoundError):
        return http_error(404, "ENTRY_NOT_FOUND", str(exc))
    if isinstance(exc, AliasNotFoundError):
        return http_error(404, "ALIAS_NOT_FOUND", str(exc))
    if isinstance(exc, SpreadsheetParseError):
        return http_error(422, "SPREADSHEET_PARSE_ERROR", str(exc))
    if isinstance(exc, StorageWriteError):
        return http_error(503, "STORAGE_WRITE_ERROR", "Could not save changes, please retry")
    return http_error(400, "INVALID_INPUT", str(exc))


SERVICE_ERRORS = (
    EntryNotFoundError,
    AliasNotFoundError,
    SpreadsheetParseError,
    StorageWriteError,
    ValueError,
)
