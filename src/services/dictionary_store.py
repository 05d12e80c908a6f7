"""
Dictionary store: brand/generic pairs keyed by the lowercased brand.

The formatting engine never reads this table directly; callers take a snapshot
with ``get_dictionary_snapshot`` and pass it in.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session

from constants import DEFAULT_DICTIONARY
from models import DrugEntry
from models.db_retry import commit_with_retry
from services.drug_formatting.text_utils import capitalize_first_letter, clean_text, field_value, normalize_key
from services.errors import EntryNotFoundError

logger = logging.getLogger(__name__)


def get_dictionary_snapshot(db: Session) -> Dict[str, Dict[str, str]]:
    rows = db.query(DrugEntry).order_by(DrugEntry.id.asc()).all()
    return {row.brand_key: {"brand": row.brand, "generic": row.generic} for row in rows}


def list_entries(
    db: Session,
    search: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
) -> List[DrugEntry]:
    query = db.query(DrugEntry)
    if search and search.strip():
        pattern = f"%{search.strip().lower()}%"
        query = query.filter(
            or_(DrugEntry.brand_key.like(pattern), DrugEntry.generic.ilike(pattern))
        )
    return query.order_by(DrugEntry.brand_key.asc()).offset(skip).limit(limit).all()


def count_entries(db: Session) -> int:
    return db.query(DrugEntry).count()


def get_entry(db: Session, brand: str) -> Optional[DrugEntry]:
    return db.query(DrugEntry).filter(DrugEntry.brand_key == normalize_key(brand)).first()


def add_entry(db: Session, brand: str, generic: str, notes: Optional[str] = None) -> DrugEntry:
    """Insert an entry, or overwrite the display values of an existing brand."""
    entry = _upsert(db, brand, generic, notes)
    commit_with_retry(db)
    db.refresh(entry)
    logger.info(f"Saved dictionary entry {entry.brand!r} -> {entry.generic!r}")
    return entry


def update_entry(
    db: Session,
    old_brand: str,
    new_brand: str,
    new_generic: str,
    notes: Optional[str] = None,
) -> DrugEntry:
    """Change brand and generic of an entry; a brand change re-keys it."""
    brand, generic = _require_pair(new_brand, new_generic)
    entry = get_entry(db, old_brand)
    if entry is None:
        raise EntryNotFoundError(f"Dictionary entry '{old_brand}' not found")

    new_key = normalize_key(brand)
    if new_key != entry.brand_key:
        clash = get_entry(db, new_key)
        if clash is not None:
            db.delete(clash)
            db.flush()
        entry.brand_key = new_key
    entry.brand = brand
    entry.generic = generic
    if notes is not None:
        entry.notes = notes
    commit_with_retry(db)
    db.refresh(entry)
    logger.info(f"Updated dictionary entry {old_brand!r} -> {entry.brand!r}")
    return entry


def remove_entry(db: Session, brand: str) -> None:
    entry = get_entry(db, brand)
    if entry is None:
        raise EntryNotFoundError(f"Dictionary entry '{brand}' not found")
    db.delete(entry)
    commit_with_retry(db)
    logger.info(f"Removed dictionary entry {brand!r}")


def import_entries(db: Session, entries: Any) -> int:
    """
    Merge a bulk payload into the dictionary.

    Accepts a list of ``{brand, generic, notes?}`` items or a mapping of
    ``key -> generic string | {brand, generic, notes?}``. Items without both
    values are skipped; notes, when given, replace the stored ones.

    Returns:
        Number of entries merged
    """
    pairs = _collect_pairs(entries)
    for brand, generic, notes in pairs.values():
        _upsert(db, brand, generic, notes)
    if pairs:
        commit_with_retry(db)
    logger.info(f"Imported {len(pairs)} dictionary entries")
    return len(pairs)


def reset_dictionary(db: Session) -> int:
    """Replace all entries with the built-in defaults."""
    db.query(DrugEntry).delete()
    for value in DEFAULT_DICTIONARY.values():
        _upsert(db, value["brand"], value["generic"], None)
    commit_with_retry(db)
    logger.info("Dictionary reset to defaults")
    return len(DEFAULT_DICTIONARY)


def seed_default_dictionary(db: Session) -> int:
    if count_entries(db) > 0:
        return 0
    return reset_dictionary(db)


def migrate_legacy_entry(key: str, value: Any) -> Optional[Tuple[str, str]]:
    """Read an old-format value (bare generic string) or a current ``{brand, generic}`` pair."""
    if isinstance(value, str):
        brand = clean_text(key).upper()
        generic = capitalize_first_letter(clean_text(value))
    else:
        brand = clean_text(field_value(value, "brand"))
        generic = clean_text(field_value(value, "generic"))
    if not brand or not generic:
        return None
    return brand, generic


def _collect_pairs(entries: Any) -> Dict[str, Tuple[str, str, Optional[str]]]:
    items: Iterable[Tuple[str, Any]]
    if isinstance(entries, Mapping):
        items = entries.items()
    elif isinstance(entries, (list, tuple)):
        items = ((clean_text(field_value(item, "brand")), item) for item in entries)
    else:
        return {}

    pairs: Dict[str, Tuple[str, str, Optional[str]]] = {}
    for key, value in items:
        pair = migrate_legacy_entry(key, value)
        if pair:
            notes = None if isinstance(value, str) else clean_text(field_value(value, "notes")) or None
            pairs[normalize_key(pair[0])] = (*pair, notes)
    return pairs


def _require_pair(brand: str, generic: str) -> Tuple[str, str]:
    brand_clean, generic_clean = clean_text(brand), clean_text(generic)
    if not brand_clean or not generic_clean:
        raise ValueError("Both brand and generic are required")
    return brand_clean, generic_clean


def _upsert(db: Session, brand: str, generic: str, notes: Optional[str]) -> DrugEntry:
    brand_clean, generic_clean = _require_pair(brand, generic)
    key = normalize_key(brand_clean)
    entry = db.query(DrugEntry).filter(DrugEntry.brand_key == key).first()
    if entry is None:
        entry = DrugEntry(brand_key=key, brand=brand_clean, generic=generic_clean, notes=notes)
        db.add(entry)
    else:
        entry.brand = brand_clean
        entry.generic = generic_clean
        if notes is not None:
            entry.notes = notes
    db.flush()
    return entry
