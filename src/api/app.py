import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routers import aliases, dictionary, formatter
from config import settings
from models import init_db
from models.database import SessionLocal
from services.dictionary_store import seed_default_dictionary

logger = logging.getLogger(__name__)


def _seed_defaults() -> None:
    db = SessionLocal()
    try:
        seeded = seed_default_dictionary(db)
        if seeded:
            logger.info(f"Seeded dictionary with {seeded} default entries")
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    init_db()
    if settings.seed_default_dictionary:
        _seed_defaults()
    yield

app = FastAPI(
    title=settings.app_name,
    description="Highlight and normalize drug names as BRAND (generic)",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(formatter.router, prefix="/api/v1/format", tags=["format"])
app.include_router(dictionary.router, prefix="/api/v1/dictionary", tags=["dictionary"])
app.include_router(aliases.router, prefix="/api/v1/aliases", tags=["aliases"])


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "version": "0.1.0",
        "status": "running",
    }


@app.get("/health")
async def health():
    return {"status": "healthy"}
