"""
Data models for drug name formatting.

This module contains the structures passed between the index builder, the
known-term matcher, the unknown-candidate scanner and the token assembler.
"""

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from constants import FORMATTED_TEMPLATE


class TokenType(str, enum.Enum):
    TEXT = "text"
    KNOWN = "known"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class DrugDisplay:
    """Canonical display pair for a drug: uppercase brand, capitalized generic."""
    brand: str
    generic: str

    def formatted(self) -> str:
        return FORMATTED_TEMPLATE.format(brand=self.brand, generic=self.generic)

    def to_dict(self) -> Dict[str, str]:
        return {"brand": self.brand, "generic": self.generic}


@dataclass
class Alias:
    """A foreign-language term pointing at an English brand."""
    alias_term: str
    language: str
    english_brand: str
    generic_name: Optional[str] = None
    notes: Optional[str] = None
    id: Optional[int] = None


@dataclass
class LookupIndex:
    """Lowercased surface form -> display pair, plus keys ordered longest first."""
    entries: Dict[str, DrugDisplay] = field(default_factory=dict)
    keys: List[str] = field(default_factory=list)

    def get(self, key: str) -> Optional[DrugDisplay]:
        return self.entries.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)


@dataclass
class KnownMatch:
    """A word-boundary occurrence of an indexed key in the input text."""
    start: int
    end: int
    matched_text: str
    key: str


@dataclass
class Token:
    type: TokenType
    content: str
    suggestion: Optional[DrugDisplay] = None

    @property
    def data(self) -> Optional[Dict[str, Any]]:
        if self.suggestion is None:
            return None
        return {"suggestion": self.suggestion.to_dict()}

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": self.type.value, "content": self.content}
        if self.suggestion is not None:
            result["data"] = self.data
        return result
