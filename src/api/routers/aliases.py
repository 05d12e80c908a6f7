"""API router for foreign-language aliases."""

from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Response, UploadFile
from sqlalchemy.orm import Session

from api.errors import SERVICE_ERRORS, to_http_error
from models import DrugAlias, get_db
from models.schemas import AliasCreate, AliasResponse, AliasUpdate, ImportResponse, LanguageResponse
from constants import LANGUAGE_LABELS
from services import alias_store
from services.dictionary_store import get_dictionary_snapshot
from services.spreadsheet_import import (
    TEMPLATES,
    XLSX_MEDIA_TYPE,
    ImportType,
    build_template,
    read_sheet,
    validate_alias_import,
)

router = APIRouter()


@router.get("", response_model=List[AliasResponse])
async def list_aliases(
    language: Optional[str] = None,
    db: Session = Depends(get_db),
) -> List[DrugAlias]:
    try:
        return alias_store.list_aliases(db, language=language)
    except SERVICE_ERRORS as exc:
        raise to_http_error(exc)


@router.get("/languages", response_model=List[LanguageResponse])
async def list_languages() -> List[LanguageResponse]:
    return [LanguageResponse(code=code, label=label) for code, label in LANGUAGE_LABELS.items()]


@router.post("", response_model=AliasResponse, status_code=201)
async def create_alias(
    alias: AliasCreate,
    db: Session = Depends(get_db),
) -> DrugAlias:
    """
    Add an alias.

    The linked English brand does not have to exist in the dictionary yet.
    """
    try:
        return alias_store.add_alias(
            db,
            alias.alias_term,
            alias.language,
            alias.english_brand,
            alias.generic_name,
            alias.notes,
        )
    except SERVICE_ERRORS as exc:
        raise to_http_error(exc)


@router.post("/import/spreadsheet", response_model=ImportResponse)
async def import_spreadsheet(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
) -> ImportResponse:
    """Import alias rows from the first sheet of an uploaded file."""
    try:
        rows = read_sheet(await file.read(), filename=file.filename)
        report = validate_alias_import(rows, get_dictionary_snapshot(db))
        imported = alias_store.import_aliases(db, report.valid)
    except SERVICE_ERRORS as exc:
        raise to_http_error(exc)
    return ImportResponse(
        imported=imported,
        errors=[asdict(issue) for issue in report.errors],
        warnings=[asdict(issue) for issue in report.warnings],
        message=f"Imported {imported} aliases ({len(report.errors)} rows rejected)",
    )


@router.get("/import/template")
async def download_template() -> Response:
    """Download an .xlsx template with the alias column header."""
    template = TEMPLATES[ImportType.ALIASES]
    return Response(
        content=build_template(ImportType.ALIASES),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{template["filename"]}"'},
    )


@router.put("/{alias_id}", response_model=AliasResponse)
async def update_alias(
    alias_id: int,
    alias: AliasUpdate,
    db: Session = Depends(get_db),
) -> DrugAlias:
    try:
        return alias_store.update_alias(db, alias_id, **alias.model_dump(exclude_unset=True))
    except SERVICE_ERRORS as exc:
        raise to_http_error(exc)


@router.delete("/{alias_id}", status_code=204)
async def delete_alias(
    alias_id: int,
    db: Session = Depends(get_db),
) -> None:
    try:
        alias_store.remove_alias(db, alias_id)
    except SERVICE_ERRORS as exc:
        raise to_http_error(exc)
