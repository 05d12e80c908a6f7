import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from models import init_db
from models.database import SessionLocal
from services.dictionary_store import seed_default_dictionary

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

if __name__ == "__main__":
    logger.info("Creating database tables...")
    init_db()
    db = SessionLocal()
    try:
        seeded = seed_default_dictionary(db)
    finally:
        db.close()
    logger.info(f"✅ Database ready ({seeded} default entries seeded)")
