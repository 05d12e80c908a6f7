from models.database import Base, get_db, init_db
from models.domain import DrugAlias, DrugEntry

__all__ = [
    "Base",
    "get_db",
    "init_db",
    "DrugEntry",
    "DrugAlias",
]
