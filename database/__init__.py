"""
Database Module
Storage interface with PostgreSQL and in-memory implementations
"""

from .models import User, Category, StandardCategory, PersonalCategory, CategoryType, Operation, Budget, YearMonth
from .interface import Storage, StorageProvider, StorageError, DuplicateRecordError
from .memory import MemoryStorageProvider

__version__ = "1.0.0"

__all__ = [
    "User",
    "Category",
    "StandardCategory",
    "PersonalCategory",
    "CategoryType",
    "Operation",
    "Budget",
    "YearMonth",
    "Storage",
    "StorageProvider",
    "StorageError",
    "DuplicateRecordError",
    "MemoryStorageProvider"
]
