"""API router for dictionary management."""

from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Response, UploadFile
from sqlalchemy.orm import Session

from api.errors import SERVICE_ERRORS, to_http_error
from models import DrugEntry, get_db
from models.schemas import (
    DictionaryEntryCreate,
    DictionaryEntryResponse,
    DictionaryEntryUpdate,
    DictionaryImportRequest,
    ImportResponse,
    ResetResponse,
)
from services import dictionary_store
from services.errors import EntryNotFoundError
from services.spreadsheet_import import (
    TEMPLATES,
    XLSX_MEDIA_TYPE,
    ImportType,
    build_template,
    read_sheet,
    validate_english_import,
)

router = APIRouter()


@router.get("", response_model=List[DictionaryEntryResponse])
async def list_entries(
    search: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
) -> List[DrugEntry]:
    """
    List dictionary entries.

    Args:
        search: Substring matched against brand and generic
        skip: Number of records to skip
        limit: Maximum number of records to return
        db: Database session
    """
    return dictionary_store.list_entries(db, search=search, skip=skip, limit=limit)


@router.post("", response_model=DictionaryEntryResponse, status_code=201)
async def create_entry(
    entry: DictionaryEntryCreate,
    db: Session = Depends(get_db),
) -> DrugEntry:
    """Add an entry; an existing brand is overwritten with the new values."""
    try:
        return dictionary_store.add_entry(db, entry.brand, entry.generic, entry.notes)
    except SERVICE_ERRORS as exc:
        raise to_http_error(exc)


@router.post("/import", response_model=ImportResponse)
async def import_entries(
    payload: DictionaryImportRequest,
    db: Session = Depends(get_db),
) -> ImportResponse:
    """Merge a JSON payload of entries into the dictionary."""
    try:
        imported = dictionary_store.import_entries(db, payload.entries)
    except SERVICE_ERRORS as exc:
        raise to_http_error(exc)
    if not imported:
        return ImportResponse(imported=0, message="No valid entries found in payload")
    return ImportResponse(imported=imported, message=f"Imported {imported} entries")


@router.post("/import/spreadsheet", response_model=ImportResponse)
async def import_spreadsheet(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
) -> ImportResponse:
    """Import brand_name/generic_name rows from the first sheet of an uploaded file."""
    try:
        rows = read_sheet(await file.read(), filename=file.filename)
        report = validate_english_import(rows, dictionary_store.get_dictionary_snapshot(db))
        imported = dictionary_store.import_entries(db, report.valid)
    except SERVICE_ERRORS as exc:
        raise to_http_error(exc)
    return ImportResponse(
        imported=imported,
        errors=[asdict(issue) for issue in report.errors],
        warnings=[asdict(issue) for issue in report.warnings],
        message=f"Imported {imported} entries ({len(report.errors)} rows rejected)",
    )


@router.get("/import/template")
async def download_template() -> Response:
    """Download an .xlsx template with the brand_name/generic_name/notes header."""
    template = TEMPLATES[ImportType.ENGLISH]
    return Response(
        content=build_template(ImportType.ENGLISH),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{template["filename"]}"'},
    )


@router.post("/reset", response_model=ResetResponse)
async def reset_dictionary(db: Session = Depends(get_db)) -> ResetResponse:
    """Replace the dictionary with the built-in defaults."""
    try:
        count = dictionary_store.reset_dictionary(db)
    except SERVICE_ERRORS as exc:
        raise to_http_error(exc)
    return ResetResponse(entries=count, message="Dictionary reset to defaults")


@router.get("/{brand}", response_model=DictionaryEntryResponse)
async def get_entry(
    brand: str,
    db: Session = Depends(get_db),
) -> DrugEntry:
    entry = dictionary_store.get_entry(db, brand)
    if not entry:
        raise to_http_error(EntryNotFoundError(f"Dictionary entry '{brand}' not found"))
    return entry


@router.put("/{brand}", response_model=DictionaryEntryResponse)
async def update_entry(
    brand: str,
    entry: DictionaryEntryUpdate,
    db: Session = Depends(get_db),
) -> DrugEntry:
    """Update an entry; changing the brand re-keys it."""
    try:
        return dictionary_store.update_entry(db, brand, entry.brand, entry.generic, entry.notes)
    except SERVICE_ERRORS as exc:
        raise to_http_error(exc)


@router.delete("/{brand}", status_code=204)
async def delete_entry(
    brand: str,
    db: Session = Depends(get_db),
) -> None:
    try:
        dictionary_store.remove_entry(db, brand)
    except SERVICE_ERRORS as exc:
        raise to_http_error(exc)
