"""Test fixtures for engine, store and API tests."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool
import sys
from pathlib import Path


def ensure_src_on_path() -> None:
    root = Path(__file__).resolve().parent.parent
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.append(str(src_path))


ensure_src_on_path()

from api.routers import aliases, dictionary, formatter
from models import Base, get_db
from services.drug_formatting import Alias


@pytest.fixture
def drug_dictionary():
    return {
        "darzalex faspro": {"brand": "DARZALEX FASPRO", "generic": "Daratumumab and hyaluronidase-fihj"},
        "keytruda": {"brand": "KEYTRUDA", "generic": "Pembrolizumab"},
        "tecentriq": {"brand": "TECENTRIQ", "generic": "Atezolizumab"},
        "opdivo": {"brand": "OPDIVO", "generic": "Nivolumab"},
    }


@pytest.fixture
def korean_aliases():
    return [
        Alias(id=1, alias_term="키트루다", language="ko", english_brand="KEYTRUDA"),
        Alias(id=2, alias_term="옵디보", language="ko", english_brand="opdivo"),
    ]


@pytest.fixture(scope="function")
def db_engine():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine):
    connection = db_engine.connect()
    transaction = connection.begin()
    session = Session(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def test_app():
    @asynccontextmanager
    async def test_lifespan(app: FastAPI) -> AsyncGenerator:
        yield

    app = FastAPI(
        title="RxFormat Test",
        description="Highlight and normalize drug names as BRAND (generic)",
        version="0.1.0",
        lifespan=test_lifespan,
    )

    app.include_router(formatter.router, prefix="/api/v1/format", tags=["format"])
    app.include_router(dictionary.router, prefix="/api/v1/dictionary", tags=["dictionary"])
    app.include_router(aliases.router, prefix="/api/v1/aliases", tags=["aliases"])

    @app.get("/")
    async def root():
        return {
            "name": "RxFormat",
            "version": "0.1.0",
            "status": "running",
        }

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    return app


@pytest.fixture(scope="function")
def client(db_session: Session, test_app: FastAPI):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    test_app.dependency_overrides[get_db] = override_get_db
    with TestClient(test_app) as test_client:
        yield test_client
    test_app.dependency_overrides.clear()
