"""
Shared fixtures: in-memory storage, a test user and the command dispatcher
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

import pytest
import pytest_asyncio

from database.memory import MemoryStorageProvider
from database.models import Budget, Category, CategoryType, PersonalCategory, StandardCategory, User, YearMonth
from finance.commands import build_command_handlers
from finance.dispatcher import CommandDispatcher

CHAT_ID = 1


@pytest_asyncio.fixture
async def storage_provider():
    return MemoryStorageProvider()


@pytest_asyncio.fixture
async def user(storage_provider) -> User:
    """User with chatId = 1 and balance = 100"""
    async with storage_provider.unit_of_work() as storage:
        return await storage.save_user(User(id=None, telegram_user_id=CHAT_ID, balance=Decimal("100")))


@pytest.fixture
def dispatcher(storage_provider) -> CommandDispatcher:
    return CommandDispatcher(build_command_handlers(), storage_provider)


@pytest.fixture
def current_month() -> YearMonth:
    return YearMonth.current()


class Records:
    """Direct storage access for arranging test data"""

    def __init__(self, provider: MemoryStorageProvider):
        self.provider = provider

    async def category(
        self,
        category_type: CategoryType,
        name: str,
        owner: Optional[User] = None
    ) -> Category:
        async with self.provider.unit_of_work() as storage:
            if owner is None:
                category = StandardCategory(id=None, type=category_type, name=name)
            else:
                category = PersonalCategory(id=None, type=category_type, name=name, owner_id=owner.id)
            return await storage.save_category(category)

    async def operation(self, user: User, category: Category, amount, month: Optional[YearMonth] = None):
        created_at = datetime.combine(month.first_day, datetime.min.time()) if month else None
        async with self.provider.unit_of_work() as storage:
            return await storage.insert_operation(user.id, category, Decimal(amount), created_at)

    async def budget(self, user: User, month: YearMonth, expected_income, expected_expenses) -> Budget:
        async with self.provider.unit_of_work() as storage:
            return await storage.save_budget(Budget(
                id=None,
                user_id=user.id,
                year_month=month,
                expected_income=Decimal(expected_income),
                expected_expenses=Decimal(expected_expenses)
            ))

    async def find_budget(self, user: User, month: YearMonth) -> Optional[Budget]:
        async with self.provider.unit_of_work() as storage:
            return await storage.find_budget(user.id, month)

    async def find_category(self, owner: Optional[User], category_type: CategoryType, name: str):
        async with self.provider.unit_of_work() as storage:
            return await storage.find_category(owner.id if owner else None, category_type, name)

    async def reload(self, user: User) -> User:
        async with self.provider.unit_of_work() as storage:
            return await storage.get_user_by_telegram_id(user.telegram_user_id)


@pytest.fixture
def records(storage_provider) -> Records:
    return Records(storage_provider)
