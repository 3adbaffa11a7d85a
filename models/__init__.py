"""
Persistence package: SQLAlchemy models and the DBStorage wrapper.
The Flask app factory builds one DBStorage per app (see api/__init__.py).
"""
from models.db_storage import DBStorage


def create_storage(database_url: str, echo: bool = False) -> DBStorage:
    """Build a storage for `database_url` with tables created and a session ready"""
    storage = DBStorage(database_url, echo=echo)
    storage.reload()
    return storage
