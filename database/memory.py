"""
In-memory storage

Used by the test-suite and by STORAGE_BACKEND=memory for local runs.
Units of work are serialised by a lock; a failing unit restores the
snapshot taken when it started.
"""

import asyncio
import copy
import logging
from collections import OrderedDict
from contextlib import asynccontextmanager
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from typing import AsyncIterator, Dict, List, Optional, Tuple

from database.interface import DuplicateRecordError, Storage, StorageError, StorageProvider
from database.models import (
    Budget,
    Category,
    CategoryType,
    Operation,
    PersonalCategory,
    User,
    YearMonth,
)

logger = logging.getLogger(__name__)


@dataclass
class _State:
    """All stored records; dicts keep insertion order"""
    users: Dict[int, User] = field(default_factory=dict)
    categories: Dict[int, Category] = field(default_factory=dict)
    budgets: Dict[int, Budget] = field(default_factory=dict)
    operations: Dict[int, Operation] = field(default_factory=dict)
    last_id: int = 0

    def next_id(self) -> int:
        self.last_id += 1
        return self.last_id


def _owner_of(category: Category) -> Optional[int]:
    return category.owner_id if isinstance(category, PersonalCategory) else None


class MemoryStorage(Storage):
    """Storage view over the in-memory state"""

    def __init__(self, state: _State):
        self.state = state

    # ==================== USERS ====================

    async def get_user_by_telegram_id(self, telegram_user_id: int) -> Optional[User]:
        for user in self.state.users.values():
            if user.telegram_user_id == telegram_user_id:
                return replace(user)
        return None

    async def save_user(self, user: User) -> User:
        if user.id is None:
            if await self.get_user_by_telegram_id(user.telegram_user_id) is not None:
                raise DuplicateRecordError(f"User {user.telegram_user_id} already exists")
            user = replace(user, id=self.state.next_id(), created_at=user.created_at or datetime.now())
        elif user.id not in self.state.users:
            raise StorageError(f"User id={user.id} does not exist")

        self.state.users[user.id] = replace(user)
        return user

    # ==================== CATEGORIES ====================

    async def find_category(
        self,
        owner_id: Optional[int],
        category_type: CategoryType,
        name: str
    ) -> Optional[Category]:
        for category in self.state.categories.values():
            if (
                _owner_of(category) == owner_id
                and category.type == category_type
                and category.name.lower() == name.lower()
            ):
                return category
        return None

    async def find_categories_named(self, category_type: CategoryType, name: str) -> List[Category]:
        return [
            category for category in self.state.categories.values()
            if category.type == category_type and category.name.lower() == name.lower()
        ]

    async def list_categories(self, owner_id: Optional[int], category_type: CategoryType) -> List[Category]:
        return [
            category for category in self.state.categories.values()
            if _owner_of(category) == owner_id and category.type == category_type
        ]

    async def save_category(self, category: Category) -> Category:
        if await self.find_category(_owner_of(category), category.type, category.name) is not None:
            raise DuplicateRecordError(f"Category '{category.name}' already exists")

        category = replace(category, id=self.state.next_id())
        self.state.categories[category.id] = category
        return category

    async def delete_category(self, category: Category) -> None:
        self.state.categories.pop(category.id, None)
        self.state.operations = {
            op_id: operation for op_id, operation in self.state.operations.items()
            if operation.category_id != category.id
        }

    # ==================== BUDGETS ====================

    async def find_budget(self, user_id: int, year_month: YearMonth) -> Optional[Budget]:
        for budget in self.state.budgets.values():
            if budget.user_id == user_id and budget.year_month == year_month:
                return replace(budget)
        return None

    async def list_budgets(self, user_id: int, start: YearMonth, end: YearMonth) -> List[Budget]:
        budgets = [
            replace(budget) for budget in self.state.budgets.values()
            if budget.user_id == user_id and start <= budget.year_month <= end
        ]
        return sorted(budgets, key=lambda budget: budget.year_month)

    async def save_budget(self, budget: Budget) -> Budget:
        if budget.id is None:
            if await self.find_budget(budget.user_id, budget.year_month) is not None:
                raise DuplicateRecordError(f"Budget for {budget.year_month} already exists")
            budget = replace(budget, id=self.state.next_id())
        elif budget.id not in self.state.budgets:
            raise StorageError(f"Budget id={budget.id} does not exist")

        self.state.budgets[budget.id] = replace(budget)
        return budget

    # ==================== OPERATIONS ====================

    async def sum_operations(
        self,
        user_id: int,
        category_type: CategoryType,
        year_month: YearMonth
    ) -> "OrderedDict[str, Decimal]":
        totals: "OrderedDict[str, Decimal]" = OrderedDict()

        for operation in self.state.operations.values():
            category = self.state.categories.get(operation.category_id)
            if (
                category is None
                or operation.user_id != user_id
                or category.type != category_type
                or not year_month.contains(operation.created_at)
            ):
                continue
            totals[category.name] = totals.get(category.name, Decimal("0")) + operation.amount

        return totals

    async def insert_operation(
        self,
        user_id: int,
        category: Category,
        amount: Decimal,
        created_at: Optional[datetime] = None
    ) -> Operation:
        if category.id not in self.state.categories:
            raise StorageError(f"Category id={category.id} does not exist")

        operation = Operation(
            id=self.state.next_id(),
            user_id=user_id,
            category_id=category.id,
            amount=Decimal(amount),
            created_at=created_at or datetime.now()
        )
        self.state.operations[operation.id] = operation
        return operation


class MemoryStorageProvider(StorageProvider):
    """Provider of in-memory units of work"""

    def __init__(self):
        self._state = _State()
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def unit_of_work(self) -> AsyncIterator[MemoryStorage]:
        async with self._lock:
            snapshot = copy.deepcopy(self._state)
            try:
                yield MemoryStorage(self._state)
            except BaseException:
                self._state = snapshot
                logger.debug("Unit of work rolled back")
                raise

    def counts(self) -> Tuple[int, int, int, int]:
        """Number of stored users, categories, budgets and operations"""
        return (
            len(self._state.users),
            len(self._state.categories),
            len(self._state.budgets),
            len(self._state.operations),
        )
