"""
Foreign-language alias store.

Aliases are identified by ``(alias_term, language)``. The link to a dictionary
brand is by name only, so an alias may point at a brand that does not exist yet.
"""

import logging
from typing import Any, Iterable, List, Optional

from sqlalchemy.orm import Session

from constants import ALLOWED_LANGUAGES
from models import DrugAlias
from models.db_retry import commit_with_retry
from services.drug_formatting.models import Alias
from services.drug_formatting.text_utils import clean_text, field_value
from services.errors import AliasNotFoundError

logger = logging.getLogger(__name__)


def get_alias_snapshot(db: Session) -> List[Alias]:
    rows = db.query(DrugAlias).order_by(DrugAlias.id.asc()).all()
    return [_to_alias(row) for row in rows]


def list_aliases(db: Session, language: Optional[str] = None) -> List[DrugAlias]:
    query = db.query(DrugAlias)
    if language:
        query = query.filter(DrugAlias.language == normalize_language(language))
    return query.order_by(DrugAlias.alias_term.asc()).all()


def get_alias(db: Session, alias_id: int) -> Optional[DrugAlias]:
    return db.query(DrugAlias).filter(DrugAlias.id == alias_id).first()


def add_alias(
    db: Session,
    alias_term: str,
    language: str,
    english_brand: str,
    generic_name: Optional[str] = None,
    notes: Optional[str] = None,
) -> DrugAlias:
    """Insert an alias; an existing ``(alias_term, language)`` pair is updated in place."""
    alias = _upsert(db, alias_term, language, english_brand, generic_name, notes)
    commit_with_retry(db)
    db.refresh(alias)
    logger.info(f"Saved alias {alias.alias_term!r} ({alias.language}) -> {alias.english_brand!r}")
    return alias


def update_alias(db: Session, alias_id: int, **changes: Any) -> DrugAlias:
    alias = get_alias(db, alias_id)
    if alias is None:
        raise AliasNotFoundError(f"Alias {alias_id} not found")

    term = alias.alias_term
    if changes.get("alias_term") is not None:
        term = _require(changes["alias_term"], "alias_term")
    language = alias.language
    if changes.get("language") is not None:
        language = normalize_language(changes["language"])
    if (term, language) != (alias.alias_term, alias.language):
        _ensure_pair_free(db, term, language)

    alias.alias_term = term
    alias.language = language
    if changes.get("english_brand") is not None:
        alias.english_brand = _require(changes["english_brand"], "english_brand").upper()
    if "generic_name" in changes:
        alias.generic_name = clean_text(changes["generic_name"]) or None
    if "notes" in changes:
        alias.notes = clean_text(changes["notes"]) or None
    commit_with_retry(db)
    db.refresh(alias)
    logger.info(f"Updated alias {alias_id}")
    return alias


def remove_alias(db: Session, alias_id: int) -> None:
    alias = get_alias(db, alias_id)
    if alias is None:
        raise AliasNotFoundError(f"Alias {alias_id} not found")
    db.delete(alias)
    commit_with_retry(db)
    logger.info(f"Removed alias {alias_id}")


def import_aliases(db: Session, records: Iterable[Any]) -> int:
    """Upsert alias records (mappings or objects); returns the number written."""
    count = 0
    for record in records:
        _upsert(
            db,
            field_value(record, "alias_term"),
            field_value(record, "language"),
            field_value(record, "english_brand"),
            field_value(record, "generic_name"),
            field_value(record, "notes"),
        )
        count += 1
    if count:
        commit_with_retry(db)
    logger.info(f"Imported {count} aliases")
    return count


def normalize_language(language: Any) -> str:
    code = clean_text(language).lower()
    if code not in ALLOWED_LANGUAGES:
        raise ValueError(f"Invalid language '{code}'. Allowed: {', '.join(ALLOWED_LANGUAGES)}.")
    return code


def _ensure_pair_free(db: Session, alias_term: str, language: str) -> None:
    taken = (
        db.query(DrugAlias)
        .filter(DrugAlias.alias_term == alias_term, DrugAlias.language == language)
        .first()
    )
    if taken is not None:
        raise ValueError(f"Alias \"{alias_term}\" ({language}) already exists.")


def _require(value: Any, name: str) -> str:
    cleaned = clean_text(value)
    if not cleaned:
        raise ValueError(f"Missing \"{name}\".")
    return cleaned


def _upsert(
    db: Session,
    alias_term: Any,
    language: Any,
    english_brand: Any,
    generic_name: Any,
    notes: Any,
) -> DrugAlias:
    term = _require(alias_term, "alias_term")
    lang = normalize_language(language)
    brand = _require(english_brand, "english_brand").upper()
    alias = (
        db.query(DrugAlias)
        .filter(DrugAlias.alias_term == term, DrugAlias.language == lang)
        .first()
    )
    if alias is None:
        alias = DrugAlias(alias_term=term, language=lang, english_brand=brand)
        db.add(alias)
    else:
        alias.english_brand = brand
    alias.generic_name = clean_text(generic_name) or None
    alias.notes = clean_text(notes) or None
    db.flush()
    return alias


def _to_alias(row: DrugAlias) -> Alias:
    return Alias(
        id=row.id,
        alias_term=row.alias_term,
        language=row.language,
        english_brand=row.english_brand,
        generic_name=row.generic_name,
        notes=row.notes,
    )
