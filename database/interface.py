"""
Abstract storage interface

The rule engine talks to storage only through these two classes, so the
same commands run against PostgreSQL in production and against the
in-memory store in tests.
"""

from abc import ABC, abstractmethod
from collections import OrderedDict
from datetime import datetime
from decimal import Decimal
from typing import AsyncContextManager, List, Optional

from database.models import (
    Budget,
    Category,
    CategoryType,
    Operation,
    User,
    YearMonth,
)


class StorageError(Exception):
    """Storage failure not anticipated by the rule checks"""


class DuplicateRecordError(StorageError):
    """A uniqueness constraint was violated"""


class Storage(ABC):
    """
    Storage operations available inside one unit of work.
    """

    # ==================== USERS ====================

    @abstractmethod
    async def get_user_by_telegram_id(self, telegram_user_id: int) -> Optional[User]:
        """
        Get user by chat identifier

        Returns:
            User or None
        """

    @abstractmethod
    async def save_user(self, user: User) -> User:
        """
        Insert a new user (id is None) or update an existing one

        Returns:
            Saved user with id assigned
        """

    # ==================== CATEGORIES ====================

    @abstractmethod
    async def find_category(
        self,
        owner_id: Optional[int],
        category_type: CategoryType,
        name: str
    ) -> Optional[Category]:
        """
        Find a category in exactly one scope, ignoring name case

        Args:
            owner_id: Owner of a personal category, None for standard categories
            category_type: Category type
            name: Category name

        Returns:
            Category or None
        """

    @abstractmethod
    async def find_categories_named(self, category_type: CategoryType, name: str) -> List[Category]:
        """
        Find categories of any scope with the given name, ignoring case
        """

    @abstractmethod
    async def list_categories(self, owner_id: Optional[int], category_type: CategoryType) -> List[Category]:
        """
        List categories of one scope in insertion order

        Args:
            owner_id: Owner of personal categories, None for standard categories
            category_type: Category type
        """

    @abstractmethod
    async def save_category(self, category: Category) -> Category:
        """
        Insert a category

        Returns:
            Saved category with id assigned

        Raises:
            DuplicateRecordError: If the name is already taken in that scope
        """

    @abstractmethod
    async def delete_category(self, category: Category) -> None:
        """
        Delete a category together with its operations
        """

    # ==================== BUDGETS ====================

    @abstractmethod
    async def find_budget(self, user_id: int, year_month: YearMonth) -> Optional[Budget]:
        """
        Get the budget of a user for a month

        Returns:
            Budget or None
        """

    @abstractmethod
    async def list_budgets(self, user_id: int, start: YearMonth, end: YearMonth) -> List[Budget]:
        """
        Get the budgets of a user from start to end inclusive, oldest first
        """

    @abstractmethod
    async def save_budget(self, budget: Budget) -> Budget:
        """
        Insert a new budget (id is None) or update an existing one

        Raises:
            DuplicateRecordError: If a budget for that user and month already exists
        """

    # ==================== OPERATIONS ====================

    @abstractmethod
    async def sum_operations(
        self,
        user_id: int,
        category_type: CategoryType,
        year_month: YearMonth
    ) -> "OrderedDict[str, Decimal]":
        """
        Sum operation amounts per category for one month

        Returns:
            Category name -> total, ordered by the first operation of each category
        """

    @abstractmethod
    async def insert_operation(
        self,
        user_id: int,
        category: Category,
        amount: Decimal,
        created_at: Optional[datetime] = None
    ) -> Operation:
        """
        Record an operation

        Args:
            created_at: Operation time, defaults to now
        """


class StorageProvider(ABC):
    """
    Hands out units of work
    """

    @abstractmethod
    def unit_of_work(self) -> AsyncContextManager[Storage]:
        """
        Open a unit of work

        Usage:
            async with provider.unit_of_work() as storage:
                user = await storage.get_user_by_telegram_id(42)

        Everything done through the yielded storage is committed when the
        block exits normally and discarded when it raises.
        """
