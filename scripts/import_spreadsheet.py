"""Script to bulk-import dictionary entries or aliases from a spreadsheet."""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from models import init_db
from models.database import SessionLocal
from services.alias_store import import_aliases
from services.dictionary_store import get_dictionary_snapshot, import_entries
from services.errors import SpreadsheetParseError, StorageWriteError
from services.spreadsheet_import import (
    ImportType,
    read_sheet,
    validate_alias_import,
    validate_english_import,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def run_import(path: Path, import_type: str, dry_run: bool = False) -> int:
    init_db()
    db = SessionLocal()
    try:
        rows = read_sheet(path)
        dictionary = get_dictionary_snapshot(db)
        if import_type == ImportType.ALIASES:
            report = validate_alias_import(rows, dictionary)
        else:
            report = validate_english_import(rows, dictionary)

        for issue in report.warnings:
            logger.info(f"  row {issue.row}: {issue.message}")
        if dry_run:
            logger.info(f"Dry run: {len(report.valid)} rows would be imported")
            return 0

        if import_type == ImportType.ALIASES:
            imported = import_aliases(db, report.valid)
        else:
            imported = import_entries(db, report.valid)
        logger.info(f"✓ Imported {imported} rows from {path}")
        return 0 if not report.errors else 2
    finally:
        db.close()


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("path", type=Path, help="Path to an .xlsx or .csv file")
    parser.add_argument(
        "--type",
        choices=[ImportType.ENGLISH, ImportType.ALIASES],
        default=ImportType.ENGLISH,
        help="Dictionary entries (english) or foreign aliases",
    )
    parser.add_argument("--dry-run", action="store_true", help="Validate only, write nothing")
    args = parser.parse_args()

    try:
        return run_import(args.path, args.type, dry_run=args.dry_run)
    except SpreadsheetParseError as exc:
        logger.error(f"Could not read {args.path}: {exc}")
        return 1
    except StorageWriteError as exc:
        logger.error(f"Could not save imported rows: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
