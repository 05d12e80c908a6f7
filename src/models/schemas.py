from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

LANGUAGE_PATTERN = "^(ko|ja|zh-cn|zh-tw)$"


class DrugDisplayResponse(BaseModel):
    brand: str
    generic: str


class TokenData(BaseModel):
    suggestion: Optional[DrugDisplayResponse] = None


class TokenResponse(BaseModel):
    type: str = Field(..., pattern="^(text|known|unknown)$")
    content: str
    data: Optional[TokenData] = None


class FormatRequest(BaseModel):
    text: str = ""
    ignore: List[str] = Field(
        default_factory=list,
        description="Terms the user dismissed; matched case-insensitively",
    )


class FormatResponse(BaseModel):
    tokens: List[TokenResponse]
    plain_text: str
    known_count: int
    unknown_count: int


class SuggestRequest(BaseModel):
    text: str = Field(..., min_length=1)


class SuggestResponse(BaseModel):
    text: str
    suggestion: Optional[DrugDisplayResponse] = None


class ReplaceRequest(BaseModel):
    text: str = ""
    term: str = Field(..., min_length=1)
    replacement: str


class ReplaceResponse(BaseModel):
    text: str


class DictionaryEntryCreate(BaseModel):
    brand: str = Field(..., min_length=1, max_length=255)
    generic: str = Field(..., min_length=1, max_length=255)
    notes: Optional[str] = None


class DictionaryEntryUpdate(BaseModel):
    brand: str = Field(..., min_length=1, max_length=255)
    generic: str = Field(..., min_length=1, max_length=255)
    notes: Optional[str] = None


class DictionaryEntryResponse(BaseModel):
    id: int
    brand_key: str
    brand: str
    generic: str
    notes: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}


class DictionaryImportRequest(BaseModel):
    entries: Union[List[Dict[str, Any]], Dict[str, Any]] = Field(
        ...,
        description="List of {brand, generic} items or a mapping of brand key to generic or {brand, generic}",
    )


class AliasCreate(BaseModel):
    alias_term: str = Field(..., min_length=1, max_length=255)
    language: str = Field(..., pattern=LANGUAGE_PATTERN)
    english_brand: str = Field(..., min_length=1, max_length=255)
    generic_name: Optional[str] = None
    notes: Optional[str] = None


class AliasUpdate(BaseModel):
    alias_term: Optional[str] = Field(default=None, min_length=1, max_length=255)
    language: Optional[str] = Field(default=None, pattern=LANGUAGE_PATTERN)
    english_brand: Optional[str] = Field(default=None, min_length=1, max_length=255)
    generic_name: Optional[str] = None
    notes: Optional[str] = None


class AliasResponse(BaseModel):
    id: int
    alias_term: str
    language: str
    english_brand: str
    generic_name: Optional[str]
    notes: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}


class ImportIssueResponse(BaseModel):
    row: int
    message: str


class ImportResponse(BaseModel):
    imported: int
    errors: List[ImportIssueResponse] = Field(default_factory=list)
    warnings: List[ImportIssueResponse] = Field(default_factory=list)
    message: str


class ResetResponse(BaseModel):
    entries: int
    message: str


class LanguageResponse(BaseModel):
    code: str
    label: str
