"""
Bulk import of dictionary entries and aliases from spreadsheets.

Only the first sheet is read. Validation never writes anything; it splits rows
into ``valid`` records, blocking ``errors`` and informational ``warnings`` so the
caller can preview the result before committing it through the stores.
"""

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Mapping, Optional, Set, Union

import pandas as pd

from constants import ALIAS_IMPORT_COLUMNS, ALLOWED_LANGUAGES, ENGLISH_IMPORT_COLUMNS
from services.drug_formatting.text_utils import clean_text
from services.errors import SpreadsheetParseError

logger = logging.getLogger(__name__)

SheetSource = Union[str, Path, bytes, BinaryIO]

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class ImportType:
    ENGLISH = "english"
    ALIASES = "aliases"


TEMPLATES = {
    ImportType.ENGLISH: {
        "filename": "english_drug_dictionary.xlsx",
        "sheet": "English_Drugs",
        "columns": ENGLISH_IMPORT_COLUMNS,
        "example": ["Keytruda", "pembrolizumab", "Example"],
    },
    ImportType.ALIASES: {
        "filename": "drug_language_aliases.xlsx",
        "sheet": "Language_Aliases",
        "columns": ALIAS_IMPORT_COLUMNS,
        "example": ["키트루다", "ko", "Keytruda", "pembrolizumab", "Korean Name"],
    },
}


@dataclass
class ImportIssue:
    row: int
    message: str


@dataclass
class ImportReport:
    valid: List[Dict[str, Any]] = field(default_factory=list)
    errors: List[ImportIssue] = field(default_factory=list)
    warnings: List[ImportIssue] = field(default_factory=list)

    def error(self, row: int, message: str) -> None:
        self.errors.append(ImportIssue(row=row, message=message))

    def warn(self, row: int, message: str) -> None:
        self.warnings.append(ImportIssue(row=row, message=message))


def read_sheet(source: SheetSource, filename: Optional[str] = None) -> List[Dict[str, Any]]:
    """Read the first sheet of an .xlsx workbook (or a .csv file) into row dicts."""
    name = filename or (str(source) if isinstance(source, (str, Path)) else "")
    handle = io.BytesIO(source) if isinstance(source, bytes) else source
    try:
        if name.lower().endswith(".csv"):
            frame = pd.read_csv(handle, dtype=str)
        else:
            frame = pd.read_excel(handle, sheet_name=0, dtype=str, engine="openpyxl")
    except Exception as exc:
        logger.error(f"Failed to read spreadsheet {name or '<upload>'}: {exc}")
        raise SpreadsheetParseError(f"Could not read spreadsheet: {exc}") from exc

    frame = frame.astype(object).where(frame.notna(), None)
    return frame.to_dict(orient="records")


def build_template(import_type: str) -> bytes:
    """Return an .xlsx workbook with the expected header row and one example row."""
    template = TEMPLATES.get(import_type)
    if template is None:
        raise ValueError(f"Unknown import type '{import_type}'")
    frame = pd.DataFrame([template["example"]], columns=template["columns"])
    buffer = io.BytesIO()
    frame.to_excel(buffer, sheet_name=template["sheet"], index=False, engine="openpyxl")
    return buffer.getvalue()


def validate_english_import(rows: List[Mapping[str, Any]], current_dictionary: Mapping[str, Any]) -> ImportReport:
    """Columns: brand_name, generic_name, notes. Brands already in the dictionary are skipped."""
    report = ImportReport()
    for index, row in enumerate(rows):
        row_num = _row_number(index)
        brand = clean_text(row.get("brand_name")).upper()
        generic = clean_text(row.get("generic_name"))
        notes = clean_text(row.get("notes")) or None

        if not brand or not generic:
            report.error(row_num, 'Missing "brand_name" or "generic_name".')
            continue

        if brand.lower() in current_dictionary:
            report.warn(row_num, f'Skipping duplicate brand "{brand}".')
            continue

        report.valid.append({"brand": brand, "generic": generic, "notes": notes})

    _log_report("english", report)
    return report


def validate_alias_import(rows: List[Mapping[str, Any]], current_dictionary: Mapping[str, Any]) -> ImportReport:
    """Columns: alias_term, language, english_brand, generic_name, notes."""
    report = ImportReport()
    seen: Set[str] = set()
    for index, row in enumerate(rows):
        row_num = _row_number(index)
        alias = clean_text(row.get("alias_term"))
        language = clean_text(row.get("language")).lower()
        english_brand = clean_text(row.get("english_brand")).upper()

        if not alias:
            report.error(row_num, 'Missing "alias_term".')
            continue
        if not language:
            report.error(row_num, 'Missing "language".')
            continue
        if not english_brand:
            report.error(row_num, 'Missing "english_brand".')
            continue
        if language not in ALLOWED_LANGUAGES:
            report.error(row_num, f'Invalid language "{language}". Allowed: {", ".join(ALLOWED_LANGUAGES)}.')
            continue

        if english_brand.lower() not in current_dictionary:
            report.warn(row_num, f'Linked brand "{english_brand}" not found in dictionary.')

        unique_key = f"{alias}|{language}"
        if unique_key in seen:
            report.warn(row_num, f'Skipping duplicate alias in file "{alias}" ({language}).')
            continue
        seen.add(unique_key)

        report.valid.append({
            "alias_term": alias,
            "language": language,
            "english_brand": english_brand,
            "generic_name": clean_text(row.get("generic_name")) or None,
            "notes": clean_text(row.get("notes")) or None,
        })

    _log_report("alias", report)
    return report


def _row_number(index: int) -> int:
    # header occupies row 1
    return index + 2


def _log_report(kind: str, report: ImportReport) -> None:
    logger.info(
        f"Validated {kind} import: {len(report.valid)} valid, "
        f"{len(report.errors)} errors, {len(report.warnings)} warnings"
    )
    for issue in report.errors:
        logger.warning(f"[{kind} import] row {issue.row}: {issue.message}")
