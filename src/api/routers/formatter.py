"""API router for text formatting and typo suggestions."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from models import get_db
from models.schemas import (
    FormatRequest,
    FormatResponse,
    ReplaceRequest,
    ReplaceResponse,
    SuggestRequest,
    SuggestResponse,
)
from services.alias_store import get_alias_snapshot
from services.dictionary_store import get_dictionary_snapshot
from services.drug_formatting import TokenType, find_suggestion, render_plain_text, replace_term, tokenize
from services.drug_formatting.tokenizer import count_tokens

router = APIRouter()


@router.post("", response_model=FormatResponse)
async def format_text(
    request: FormatRequest,
    db: Session = Depends(get_db),
) -> FormatResponse:
    """
    Format drug names in free text against the stored dictionary and aliases.

    Args:
        request: Text plus the terms the user chose to ignore
        db: Database session

    Returns:
        Token stream and the joined plain text
    """
    ignore = {term.strip().lower() for term in request.ignore if term.strip()}
    tokens = tokenize(
        request.text,
        get_dictionary_snapshot(db),
        ignore,
        get_alias_snapshot(db),
    )
    return FormatResponse(
        tokens=[token.to_dict() for token in tokens],
        plain_text=render_plain_text(tokens),
        known_count=count_tokens(tokens, TokenType.KNOWN),
        unknown_count=count_tokens(tokens, TokenType.UNKNOWN),
    )


@router.post("/suggest", response_model=SuggestResponse)
async def suggest(
    request: SuggestRequest,
    db: Session = Depends(get_db),
) -> SuggestResponse:
    """Suggest the closest dictionary entry for a highlighted term."""
    text = request.text.strip()
    suggestion = find_suggestion(text, get_dictionary_snapshot(db))
    return SuggestResponse(
        text=text,
        suggestion=suggestion.to_dict() if suggestion else None,
    )


@router.post("/replace", response_model=ReplaceResponse)
async def replace(request: ReplaceRequest) -> ReplaceResponse:
    """Replace every whole-word occurrence of a flagged term, e.g. with its suggested brand."""
    return ReplaceResponse(text=replace_term(request.text, request.term, request.replacement))
