"""API routers."""

from api.routers import aliases, dictionary, formatter

__all__ = ["formatter", "dictionary", "aliases"]
