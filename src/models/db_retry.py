import logging
import time

from sqlalchemy.exc import OperationalError, SQLAlchemyError

from services.errors import StorageWriteError

logger = logging.getLogger(__name__)


def _is_locked_message(message: str) -> bool:
    lowered = message.lower()
    return "database is locked" in lowered or "database is busy" in lowered


def _is_sqlite_locked_error(exc: SQLAlchemyError) -> bool:
    if not isinstance(exc, OperationalError):
        return False
    return _is_locked_message(str(getattr(exc, "orig", exc)))


def _should_retry(exc: SQLAlchemyError, attempt: int, retries: int) -> bool:
    return _is_sqlite_locked_error(exc) and attempt < retries - 1


def _sleep_for_retry(delay: float, attempt: int) -> None:
    time.sleep(delay * (attempt + 1))


def commit_with_retry(session, retries: int = 3, delay: float = 0.1, attempt: int = 0) -> None:
    """Commit, retrying while SQLite reports a lock; other failures become StorageWriteError."""
    try:
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        if not _should_retry(exc, attempt, retries):
            logger.error(f"Dictionary write failed after {attempt + 1} attempt(s): {exc}")
            raise StorageWriteError(str(exc)) from exc
        _sleep_for_retry(delay, attempt)
        commit_with_retry(session, retries=retries, delay=delay, attempt=attempt + 1)
