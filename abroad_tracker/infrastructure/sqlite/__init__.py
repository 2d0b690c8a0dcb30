from .database import SQLiteDatabase
from .store import SQLiteKeyValueStore

__all__ = [
    "SQLiteDatabase",
    "SQLiteKeyValueStore",
]
