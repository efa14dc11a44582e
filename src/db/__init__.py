"""
src/db: engine construction, SQLModel models and the user/idea stores.

Usage:
    from src.db import create_db_engine, init_db, IdeaStore, UserStore
    engine = create_db_engine("sqlite:///data/database.sqlite")
    init_db(engine)
    ideas = IdeaStore(engine)
"""

from src.db.engine import create_db_engine, get_engine, init_db
from src.db.errors import StorageError, UserExistsError
from src.db.idea_store import IdeaStore
from src.db.user_store import UserStore

__all__ = [
    "create_db_engine",
    "get_engine",
    "init_db",
    "IdeaStore",
    "UserStore",
    "StorageError",
    "UserExistsError",
]
