from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from config import settings
from models.sqlite_config import apply_sqlite_pragmas, is_sqlite_url, sqlite_connect_args


class Base(DeclarativeBase):
    pass


engine = create_engine(
    settings.database_url,
    connect_args=sqlite_connect_args(settings.database_url),
    echo=settings.debug,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def _apply_sqlite_pragmas(dbapi_connection, _):
    apply_sqlite_pragmas(dbapi_connection)


if is_sqlite_url(settings.database_url):
    event.listen(engine, "connect", _apply_sqlite_pragmas)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    Base.metadata.create_all(bind=engine)
