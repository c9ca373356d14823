"""
Repository pattern for database operations
"""

from .user_repo import UserRepository
from .category_repo import CategoryRepository
from .budget_repo import BudgetRepository
from .operation_repo import OperationRepository

__all__ = [
    "UserRepository",
    "CategoryRepository",
    "BudgetRepository",
    "OperationRepository"
]
