"""
Balance and operation recording
"""

import logging
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple

from database.interface import Storage
from database.models import Category, CategoryType, Operation, User
from finance.categories import CategoryService
from finance.errors import InvalidAmountError

logger = logging.getLogger(__name__)


class OperationService:
    """Keeps the user's balance in step with recorded operations"""

    def __init__(self, storage: Storage):
        self.storage = storage
        self.categories = CategoryService(storage)

    async def set_balance(self, user: User, amount: Decimal) -> User:
        user = await self.storage.save_user(replace(user, balance=amount))
        logger.info(f"Balance of user {user.id} set to {amount}")
        return user

    async def record(
        self,
        user: User,
        category_type: CategoryType,
        amount: Decimal,
        category_name: str,
        created_at: Optional[datetime] = None
    ) -> Tuple[Operation, Category, User]:
        """
        Record income or expense under a category and update the balance

        Raises:
            InvalidAmountError: If the amount is not positive
            CategoryNotFound: If the category is neither personal nor standard
        """
        if amount <= 0:
            raise InvalidAmountError("Operation amount must be positive")

        category = await self.categories.resolve(user, category_type, category_name)
        operation = await self.storage.insert_operation(user.id, category, amount, created_at)

        delta = amount if category_type is CategoryType.INCOME else -amount
        user = await self.storage.save_user(replace(user, balance=user.balance + delta))

        logger.info(f"Operation {category_type.value} {amount} in '{category.name}' recorded for user {user.id}")
        return operation, category, user
