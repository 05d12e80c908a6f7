"""Error kinds raised by the dictionary stores and the spreadsheet importer."""


class EntryNotFoundError(LookupError):
    """No dictionary entry exists for the given brand."""


class AliasNotFoundError(LookupError):
    """No alias exists with the given id."""


class StorageWriteError(RuntimeError):
    """The dictionary or alias tables could not be written."""


class SpreadsheetParseError(ValueError):
    """An uploaded spreadsheet could not be read."""
