"""
PostgreSQL storage built from the repositories
"""

import logging
from collections import OrderedDict
from contextlib import asynccontextmanager
from datetime import datetime
from decimal import Decimal
from typing import AsyncIterator, List, Optional
import asyncpg

from database.connection import get_db_connection
from database.interface import Storage, StorageError, StorageProvider
from database.models import Budget, Category, CategoryType, Operation, PersonalCategory, User, YearMonth
from database.repositories.budget_repo import BudgetRepository
from database.repositories.category_repo import CategoryRepository
from database.repositories.operation_repo import OperationRepository
from database.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)


class PostgresStorage(Storage):
    """Storage bound to one connection inside an open transaction"""

    def __init__(self, connection: asyncpg.Connection):
        self.users = UserRepository(connection)
        self.categories = CategoryRepository(connection)
        self.budgets = BudgetRepository(connection)
        self.operations = OperationRepository(connection)

    async def get_user_by_telegram_id(self, telegram_user_id: int) -> Optional[User]:
        return await self.users.get_by_telegram_id(telegram_user_id)

    async def save_user(self, user: User) -> User:
        if user.id is None:
            return await self.users.create(user.telegram_user_id, user.balance)

        updated = await self.users.update_balance(user.id, user.balance)
        if updated is None:
            raise StorageError(f"User id={user.id} does not exist")
        return updated

    async def find_category(
        self,
        owner_id: Optional[int],
        category_type: CategoryType,
        name: str
    ) -> Optional[Category]:
        return await self.categories.get_by_name(owner_id, category_type, name)

    async def find_categories_named(self, category_type: CategoryType, name: str) -> List[Category]:
        return await self.categories.get_all_named(category_type, name)

    async def list_categories(self, owner_id: Optional[int], category_type: CategoryType) -> List[Category]:
        return await self.categories.get_all(owner_id, category_type)

    async def save_category(self, category: Category) -> Category:
        owner_id = category.owner_id if isinstance(category, PersonalCategory) else None
        return await self.categories.create(owner_id, category.type, category.name)

    async def delete_category(self, category: Category) -> None:
        await self.categories.delete(category.id)

    async def find_budget(self, user_id: int, year_month: YearMonth) -> Optional[Budget]:
        return await self.budgets.get_by_month(user_id, year_month)

    async def list_budgets(self, user_id: int, start: YearMonth, end: YearMonth) -> List[Budget]:
        return await self.budgets.get_between(user_id, start, end)

    async def save_budget(self, budget: Budget) -> Budget:
        if budget.id is None:
            return await self.budgets.create(budget)

        updated = await self.budgets.update(budget)
        if updated is None:
            raise StorageError(f"Budget id={budget.id} does not exist")
        return updated

    async def sum_operations(
        self,
        user_id: int,
        category_type: CategoryType,
        year_month: YearMonth
    ) -> "OrderedDict[str, Decimal]":
        return await self.operations.get_month_sums(user_id, category_type, year_month)

    async def insert_operation(
        self,
        user_id: int,
        category: Category,
        amount: Decimal,
        created_at: Optional[datetime] = None
    ) -> Operation:
        return await self.operations.create(user_id, category.id, amount, created_at)


class PostgresStorageProvider(StorageProvider):
    """One transaction on one pooled connection per unit of work"""

    @asynccontextmanager
    async def unit_of_work(self) -> AsyncIterator[PostgresStorage]:
        async with get_db_connection() as conn:
            async with conn.transaction():
                yield PostgresStorage(conn)
